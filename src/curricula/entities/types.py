from enum import Enum


class CritType(str, Enum):
    """Kinds of audience criteria a unit can carry"""
    AGE = "age"
    INTEREST = "interest"
    CUSTOM = "custom"


class ResourceType(str, Enum):
    """Kinds of resources attached to an activity"""
    PAGE = "page"
    VIDEO = "video"
    MOVIE = "movie"
    BOOK = "book"


class ActivityType(str, Enum):
    """Kinds of activities in a unit"""
    WATCH = "watch"
    READ = "read"
    CONSIDER = "consider"
    DRAW = "draw"
    WRITE = "write"
    CUSTOM = "custom"
