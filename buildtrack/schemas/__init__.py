"""Domain schemas"""

from buildtrack.schemas.account import Account, RegistrationRequest, Role
from buildtrack.schemas.project import (
    MediaItem,
    MediaType,
    Project,
    ProjectStatus,
    WeeklyUpdate,
)

__all__ = [
    "Account",
    "RegistrationRequest",
    "Role",
    "MediaItem",
    "MediaType",
    "Project",
    "ProjectStatus",
    "WeeklyUpdate",
]
