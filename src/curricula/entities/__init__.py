"""
Curriculum Data Model

Documents and collection elements for units and activities.
"""

from .activity import Activity, Location, Resource
from .types import ActivityType, CritType, ResourceType
from .unit import Criterion, Unit, UnitSummary

__all__ = [
    "Unit",
    "UnitSummary",
    "Criterion",
    "Activity",
    "Resource",
    "Location",
    "CritType",
    "ResourceType",
    "ActivityType",
]
