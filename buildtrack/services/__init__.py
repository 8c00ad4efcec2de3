"""Services package"""

from buildtrack.services.auth_service import AuthService
from buildtrack.services.credential_store import CredentialStore
from buildtrack.services.legacy_import import ImportReport, LegacyImporter
from buildtrack.services.media_service import MediaService
from buildtrack.services.project_repository import ProjectRepository
from buildtrack.services.project_service import ProjectService
from buildtrack.services.summary_service import SummaryService

__all__ = [
    "AuthService",
    "CredentialStore",
    "ImportReport",
    "LegacyImporter",
    "MediaService",
    "ProjectRepository",
    "ProjectService",
    "SummaryService",
]
