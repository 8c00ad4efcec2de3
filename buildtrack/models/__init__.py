"""Database models package"""

from buildtrack.models.base import BaseModel
from buildtrack.models.account import AccountRecord
from buildtrack.models.project import ProjectRecord, WeeklyUpdateRecord, MediaItemRecord

# Export all models
__all__ = [
    "BaseModel",
    "AccountRecord",
    "ProjectRecord",
    "WeeklyUpdateRecord",
    "MediaItemRecord",
]
