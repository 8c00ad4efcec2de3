"""Project, weekly update and media item models"""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text, false
from sqlalchemy.orm import relationship
from buildtrack.models.base import BaseModel


class ProjectRecord(BaseModel):
    """
    Construction project.
    Owns its weekly updates; deleting the project deletes them.
    """

    __tablename__ = "projects"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    thumbnail_url = Column(Text, nullable=False, default="")
    client_access_code = Column(String(255), nullable=False)
    status = Column(String(32), nullable=False, default="Planning")
    is_archived = Column(
        Boolean, nullable=False, default=False, server_default=false(), index=True
    )

    # Relationships
    updates = relationship(
        "WeeklyUpdateRecord",
        back_populates="project",
        order_by="WeeklyUpdateRecord.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<ProjectRecord(id={self.id}, name={self.name}, archived={self.is_archived})>"


class WeeklyUpdateRecord(BaseModel):
    """
    Weekly progress entry of a project.
    `position` keeps the caller's list order; `id` is the caller's id and is
    only meaningful inside its project.
    """

    __tablename__ = "weekly_updates"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        String(64), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False)
    id = Column(String(64), nullable=False)
    week_number = Column(Integer, nullable=False)
    date = Column(String(10), nullable=False)
    description = Column(Text, nullable=False, default="")

    # Relationships
    project = relationship("ProjectRecord", back_populates="updates")
    media = relationship(
        "MediaItemRecord",
        back_populates="update",
        order_by="MediaItemRecord.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<WeeklyUpdateRecord(id={self.id}, week={self.week_number})>"


class MediaItemRecord(BaseModel):
    """Media attached to a weekly update"""

    __tablename__ = "media_items"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    update_pk = Column(
        Integer, ForeignKey("weekly_updates.pk", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False)
    id = Column(String(64), nullable=False)
    type = Column(String(32), nullable=False)  # image, video, 3d-model-embed, panorama-embed
    url = Column(Text, nullable=False)
    title = Column(String(255), nullable=False, default="")

    # Relationships
    update = relationship("WeeklyUpdateRecord", back_populates="media")

    def __repr__(self):
        return f"<MediaItemRecord(id={self.id}, type={self.type})>"
