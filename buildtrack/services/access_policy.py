"""Visibility and access-code rules applied by callers of the project repository"""

import logging
from typing import Iterable, List, Optional

from buildtrack.exceptions import AccessDeniedError
from buildtrack.schemas.account import Account
from buildtrack.schemas.project import Project

logger = logging.getLogger(__name__)


def visible_projects(
    identity: Account,
    projects: Iterable[Project],
    show_archived: bool = False,
    search: str = "",
) -> List[Project]:
    """
    Filter projects down to what an identity may list.

    Admins see active projects, or only archived ones when `show_archived`
    is set. Clients see active projects only; the toggle is ignored for them.

    Args:
        identity: Authenticated account
        projects: Projects as returned by the repository
        show_archived: Admin toggle for the archive view
        search: Optional text matched against name and location

    Returns:
        Visible projects in their original order
    """
    want_archived = show_archived if identity.is_admin else False
    return [
        p for p in projects
        if p.is_archived == want_archived and p.matches_search(search)
    ]


def can_view_details(identity: Account, project: Project, code: Optional[str] = None) -> bool:
    """Admins always; clients only for active projects with the matching access code"""
    if identity.is_admin:
        return True
    if project.is_archived:
        return False
    return code is not None and code == project.client_access_code


def require_detail_access(identity: Account, project: Project, code: Optional[str] = None) -> None:
    """
    Raises:
        AccessDeniedError: If the identity may not open the project's details
    """
    if not can_view_details(identity, project, code):
        logger.info(f"Detail access denied to {identity.id} for project {project.id}")
        raise AccessDeniedError("Invalid Access Code")


def require_admin(identity: Account) -> None:
    """
    Raises:
        AccessDeniedError: If the identity is not an administrator
    """
    if not identity.is_admin:
        raise AccessDeniedError(f"Role '{identity.role.value}' may not modify projects")
