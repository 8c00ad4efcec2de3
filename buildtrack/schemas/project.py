"""Project schemas"""

import enum
from datetime import date as date_type
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ProjectStatus(str, enum.Enum):
    """Construction phase of a project"""
    PLANNING = "Planning"
    FOUNDATION = "Foundation"
    STRUCTURE = "Structure"
    FINISHING = "Finishing"
    COMPLETED = "Completed"


class MediaType(str, enum.Enum):
    """Kind of media attached to a weekly update"""
    IMAGE = "image"
    VIDEO = "video"
    MODEL_3D_EMBED = "3d-model-embed"
    PANORAMA_EMBED = "panorama-embed"


# Provider-specific names used by earlier exports
LEGACY_MEDIA_TYPES = {
    "3d-polycam": MediaType.MODEL_3D_EMBED,
    "360-floorfy": MediaType.PANORAMA_EMBED,
}


class DomainModel(BaseModel):
    """Base for domain records: snake_case fields, camelCase aliases"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
        validate_assignment=True,
    )


class MediaItem(DomainModel):
    """Media item owned by a weekly update"""
    id: str = Field(..., min_length=1, description="Media item id")
    type: MediaType = Field(..., description="Media type")
    url: str = Field(..., min_length=1, description="External link, embed source or data URL")
    title: str = Field(default="", description="Display title")

    @field_validator("type", mode="before")
    @classmethod
    def normalize_legacy_type(cls, v):
        """Map legacy provider names onto the generic embed types"""
        if isinstance(v, str) and v in LEGACY_MEDIA_TYPES:
            return LEGACY_MEDIA_TYPES[v]
        return v


class WeeklyUpdate(DomainModel):
    """Weekly progress entry owned by a project"""
    id: str = Field(..., min_length=1, description="Update id")
    week_number: int = Field(..., description="Week number as entered")
    date: date_type = Field(..., description="Calendar date of the update")
    description: str = Field(default="", description="Progress notes")
    media: List[MediaItem] = Field(default_factory=list, description="Attached media, in order")


class Project(DomainModel):
    """
    Construction project with its weekly updates.
    A blank id marks a draft that has not been saved yet.
    """
    id: str = Field(default="", description="Project id")
    name: str = Field(default="", max_length=255, description="Project name")
    location: str = Field(default="", max_length=255, description="Site location")
    description: str = Field(default="", description="Project description")
    thumbnail_url: str = Field(default="", description="Thumbnail URL or data URL")
    client_access_code: str = Field(default="", max_length=255, description="Code clients present to view details")
    status: ProjectStatus = Field(default=ProjectStatus.PLANNING, description="Construction phase")
    is_archived: bool = Field(default=False, description="Hidden from clients when true")
    updates: List[WeeklyUpdate] = Field(default_factory=list, description="Weekly updates, newest first")

    def matches_search(self, term: str) -> bool:
        """Case-insensitive match on name or location"""
        needle = term.strip().lower()
        if not needle:
            return True
        return needle in self.name.lower() or needle in self.location.lower()
