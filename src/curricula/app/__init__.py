"""
Curricula Application Services

Database access, resolver, fixtures, view-model stores and configuration.
"""

from .config import (
    ApplicationConfig, Environment, LoggingConfig, PersistenceConfig, WebConfig, configure_logging,
)
from .configurator import configure_app, create_store
from .db import DB
from .fixtures import seed_fixtures
from .resolver import UnitResolver
from .stores import Feedback, FeedbackStore, Mode, UnitListStore, UnitStore

__all__ = [
    "ApplicationConfig", "Environment", "PersistenceConfig", "WebConfig", "LoggingConfig",
    "configure_logging", "configure_app", "create_store",
    "DB", "UnitResolver", "seed_fixtures",
    "Feedback", "FeedbackStore", "Mode", "UnitListStore", "UnitStore",
]
