"""Project repository: persistent project records and their archive lifecycle"""

import logging
from typing import List, Optional, Union

from pydantic import ValidationError
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from buildtrack.database import ProjectStore
from buildtrack.exceptions import NotFoundError, ProjectValidationError
from buildtrack.models.project import MediaItemRecord, ProjectRecord, WeeklyUpdateRecord
from buildtrack.schemas.project import MediaItem, Project, WeeklyUpdate
from buildtrack.utils import utcnow

logger = logging.getLogger(__name__)


class ProjectRepository:
    """
    Stores projects with their nested weekly updates and media.

    The repository does not check permissions and does not allocate ids;
    callers assign ids to new projects and enforce who may do what.

    Lifecycle of a stored project:

        put(new) -> Active <-> Archived (archive / restore)
        delete() from either state removes the record
    """

    def __init__(self, store: ProjectStore):
        self.store = store

    async def list_all(self) -> List[Project]:
        """
        Get every stored project, active and archived.

        Returns:
            Projects in store order
        """
        async with self.store.session() as session:
            result = await session.execute(
                self._select_projects().order_by(ProjectRecord.created_at, ProjectRecord.id)
            )
            records = result.scalars().all()
            projects = [Project.model_validate(r) for r in records]

        logger.debug(f"Loaded {len(projects)} projects")
        return projects

    async def get_by_id(self, project_id: str) -> Project:
        """
        Get a project by id.

        Args:
            project_id: Project id

        Returns:
            The stored Project

        Raises:
            NotFoundError: If no project has this id
        """
        async with self.store.session() as session:
            record = await self._load(session, project_id)
            if record is None:
                raise NotFoundError(f"Project with id {project_id} not found", project_id)
            return Project.model_validate(record)

    async def put(self, project: Union[Project, dict]) -> None:
        """
        Insert a project or fully replace the stored one with the same id.

        Nested updates and media are replaced as a whole.

        Args:
            project: Complete project record with a caller-assigned id

        Raises:
            ProjectValidationError: If the record is invalid or has no id
        """
        project = self._validate(project)

        async with self.store.session() as session:
            record = await self._load(session, project.id)
            created = record is None
            if created:
                record = ProjectRecord(id=project.id)
                session.add(record)
            else:
                record.updated_at = utcnow()

            record.name = project.name
            record.location = project.location
            record.description = project.description
            record.thumbnail_url = project.thumbnail_url
            record.client_access_code = project.client_access_code
            record.status = project.status.value
            record.is_archived = project.is_archived
            record.updates = [
                self._build_update_record(u, position) for position, u in enumerate(project.updates)
            ]

        logger.info(f"{'Created' if created else 'Replaced'} project {project.id}")

    async def archive(self, project_id: str) -> None:
        """Archive a project. No-op when the id does not exist."""
        await self._set_archived(project_id, True)

    async def restore(self, project_id: str) -> None:
        """Return an archived project to active. No-op when the id does not exist."""
        await self._set_archived(project_id, False)

    async def delete(self, project_id: str) -> None:
        """
        Permanently delete a project with its updates and media.

        Works on active and archived projects alike. No-op when the id does
        not exist.
        """
        async with self.store.session() as session:
            record = await self._load(session, project_id)
            if record is None:
                logger.info(f"Delete skipped, project {project_id} not found")
                return
            await session.delete(record)

        logger.info(f"Deleted project {project_id}")

    async def _set_archived(self, project_id: str, archived: bool) -> None:
        # Single conditional UPDATE, no read-then-write window
        async with self.store.session() as session:
            result = await session.execute(
                update(ProjectRecord)
                .where(ProjectRecord.id == project_id)
                .values(is_archived=archived, updated_at=utcnow())
            )
            matched = result.rowcount

        action = "Archived" if archived else "Restored"
        if matched:
            logger.info(f"{action} project {project_id}")
        else:
            logger.info(f"{action[:-1]} skipped, project {project_id} not found")

    @staticmethod
    def _select_projects():
        return select(ProjectRecord).options(
            selectinload(ProjectRecord.updates).selectinload(WeeklyUpdateRecord.media)
        )

    async def _load(self, session: AsyncSession, project_id: str) -> Optional[ProjectRecord]:
        result = await session.execute(
            self._select_projects().where(ProjectRecord.id == project_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _validate(project: Union[Project, dict]) -> Project:
        # Re-validate so values set with model_construct or model_copy are checked too
        try:
            if isinstance(project, Project):
                project = Project.model_validate(project.model_dump())
            else:
                project = Project.model_validate(project)
        except ValidationError as e:
            raise ProjectValidationError(f"Invalid project record: {e}") from e

        if not project.id.strip():
            raise ProjectValidationError("Project id is required")
        return project

    @staticmethod
    def _build_update_record(weekly_update: WeeklyUpdate, position: int) -> WeeklyUpdateRecord:
        return WeeklyUpdateRecord(
            id=weekly_update.id,
            position=position,
            week_number=weekly_update.week_number,
            date=weekly_update.date.isoformat(),
            description=weekly_update.description,
            media=[
                ProjectRepository._build_media_record(m, index)
                for index, m in enumerate(weekly_update.media)
            ],
        )

    @staticmethod
    def _build_media_record(item: MediaItem, position: int) -> MediaItemRecord:
        return MediaItemRecord(
            id=item.id,
            position=position,
            type=item.type.value,
            url=item.url,
            title=item.title,
        )
