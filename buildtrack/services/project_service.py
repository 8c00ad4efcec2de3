"""Project workflows for admin and client identities"""

import logging
from datetime import date
from typing import Iterable, List, Optional

from buildtrack.config import Settings
from buildtrack.exceptions import NotFoundError, ProjectValidationError
from buildtrack.schemas.account import Account
from buildtrack.schemas.project import MediaItem, Project, WeeklyUpdate
from buildtrack.services.access_policy import (
    require_admin,
    require_detail_access,
    visible_projects,
)
from buildtrack.services.project_repository import ProjectRepository
from buildtrack.services.summary_service import SummaryService
from buildtrack.utils import generate_id

logger = logging.getLogger(__name__)


class ProjectService:
    """
    Applies permissions and form rules on top of the project repository.

    Write methods never mutate the project objects passed in; they return
    the record that was stored. When the store fails, the caller's copy is
    left exactly as it was.
    """

    def __init__(
        self,
        repository: ProjectRepository,
        config: Optional[Settings] = None,
        summary_service: Optional[SummaryService] = None,
    ):
        self.repository = repository
        self.settings = config or repository.store.settings
        self.summary_service = summary_service or SummaryService(self.settings)

    async def list_projects(
        self, identity: Account, show_archived: bool = False, search: str = ""
    ) -> List[Project]:
        """List the projects an identity may see, filtered by search text"""
        projects = await self.repository.list_all()
        return visible_projects(identity, projects, show_archived=show_archived, search=search)

    async def open_project(
        self, identity: Account, project_id: str, code: Optional[str] = None
    ) -> Project:
        """
        Open a project's details.

        Args:
            identity: Authenticated account
            project_id: Project id
            code: Access code presented by a client; ignored for admins

        Returns:
            The project

        Raises:
            NotFoundError: If the project does not exist, or is archived and the identity is a client
            AccessDeniedError: If a client presents the wrong code
        """
        project = await self.repository.get_by_id(project_id)
        if project.is_archived and not identity.is_admin:
            raise NotFoundError(f"Project with id {project_id} not found", project_id)
        require_detail_access(identity, project, code)
        return project

    async def save_project(self, identity: Account, draft: Project) -> Project:
        """
        Create or update a project from an edit form.

        New drafts (blank id) get a generated id and start active. Existing
        projects keep the archive flag they carry. A blank thumbnail falls
        back to the default image.

        Raises:
            AccessDeniedError: If the identity is not an administrator
            ProjectValidationError: If the name or access code is blank
        """
        require_admin(identity)

        if not draft.name.strip():
            raise ProjectValidationError("Please enter a Project Name.")
        if not draft.client_access_code.strip():
            raise ProjectValidationError("Please enter a Client Access Code.")

        is_new = not draft.id
        project = draft.model_copy(
            deep=True,
            update={
                "id": draft.id or generate_id(),
                "thumbnail_url": draft.thumbnail_url or self.settings.default_thumbnail_url,
                "is_archived": False if is_new else draft.is_archived,
            },
        )
        await self.repository.put(project)
        logger.info(f"Saved project {project.id} ({'new' if is_new else 'edit'})")
        return project

    async def archive_project(self, identity: Account, project_id: str) -> None:
        """Archive a project, hiding it from all clients"""
        require_admin(identity)
        await self.repository.archive(project_id)

    async def restore_project(self, identity: Account, project_id: str) -> None:
        """Restore an archived project to active"""
        require_admin(identity)
        await self.repository.restore(project_id)

    async def delete_project(self, identity: Account, project_id: str) -> None:
        """Permanently delete a project and all its data"""
        require_admin(identity)
        await self.repository.delete(project_id)

    async def add_weekly_update(
        self,
        identity: Account,
        project_id: str,
        description: str,
        week_number: Optional[int] = None,
        media: Iterable[MediaItem] = (),
        update_date: Optional[date] = None,
    ) -> Project:
        """
        Add a weekly update to the top of a project's update list.

        Args:
            identity: Authenticated account (must be admin)
            project_id: Project id
            description: Progress notes
            week_number: Week number; defaults to one past the current update count
            media: Media items to attach
            update_date: Date of the update; defaults to today

        Returns:
            The stored project with the new update first
        """
        require_admin(identity)
        project = await self.repository.get_by_id(project_id)

        weekly_update = WeeklyUpdate(
            id=generate_id(),
            week_number=week_number if week_number is not None else len(project.updates) + 1,
            date=update_date or date.today(),
            description=description,
            media=list(media),
        )
        updated = project.model_copy(update={"updates": [weekly_update, *project.updates]})
        await self.repository.put(updated)
        logger.info(f"Added week {weekly_update.week_number} update to project {project_id}")
        return updated

    async def summarize_project(
        self,
        identity: Account,
        project_id: str,
        question: Optional[str] = None,
        code: Optional[str] = None,
    ) -> str:
        """Run the AI progress analysis on a project the identity may open"""
        project = await self.open_project(identity, project_id, code)
        return await self.summary_service.summarize(project, question)
