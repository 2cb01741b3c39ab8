"""
Curricula Web Adapters

HTTP front ends for the unit resolver.
"""

from .starlette import UnitRoutes, create_app

__all__ = ["UnitRoutes", "create_app"]
