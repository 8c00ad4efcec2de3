"""Import of browser-era exports into the project store"""

import logging
from typing import Any, Dict, List

from pydantic import BaseModel, Field, ValidationError

from buildtrack.exceptions import (
    ConflictError,
    ProjectValidationError,
    RegistrationValidationError,
)
from buildtrack.schemas.project import Project
from buildtrack.services.credential_store import CredentialStore
from buildtrack.services.project_repository import ProjectRepository

logger = logging.getLogger(__name__)


class ImportReport(BaseModel):
    """Outcome of a legacy import"""
    projects_imported: int = Field(default=0)
    projects_skipped: int = Field(default=0)
    accounts_imported: int = Field(default=0)
    accounts_skipped: int = Field(default=0)
    errors: List[str] = Field(default_factory=list)


class LegacyImporter:
    """
    Loads an export of the old browser storage.

    Expected payload:

        {
            "projects": [{"id": "...", "name": "...", "thumbnailUrl": "...",
                          "clientAccessCode": "...", "updates": [...], ...}],
            "users": [{"id": "...", "emailOrPhone": "...", "password": "...",
                       "role": "client"}]
        }

    Plaintext passwords are hashed on the way in. Invalid or duplicate
    records are skipped and reported; they never abort the import.
    """

    def __init__(self, repository: ProjectRepository, credentials: CredentialStore):
        self.repository = repository
        self.credentials = credentials

    async def import_export(self, payload: Dict[str, Any]) -> ImportReport:
        """
        Import projects and client accounts from a legacy export.

        Args:
            payload: Parsed export document

        Returns:
            ImportReport with counts and per-record errors
        """
        report = ImportReport()

        for raw in payload.get("projects") or []:
            await self._import_project(raw, report)

        for raw in payload.get("users") or []:
            await self._import_account(raw, report)

        logger.info(
            f"Legacy import finished: {report.projects_imported} projects, "
            f"{report.accounts_imported} accounts, "
            f"{report.projects_skipped + report.accounts_skipped} skipped"
        )
        return report

    async def _import_project(self, raw: Dict[str, Any], report: ImportReport) -> None:
        try:
            project = Project.model_validate(raw)
            await self.repository.put(project)
        except (ValidationError, ProjectValidationError) as e:
            report.projects_skipped += 1
            report.errors.append(f"project {raw.get('id', '?')}: {e}")
            logger.warning(f"Skipped legacy project {raw.get('id', '?')}: {e}")
            return
        report.projects_imported += 1

    async def _import_account(self, raw: Dict[str, Any], report: ImportReport) -> None:
        identifier = raw.get("emailOrPhone") or ""
        if raw.get("role", "client") != "client":
            report.accounts_skipped += 1
            report.errors.append(f"account {identifier}: only client accounts are imported")
            return

        try:
            await self.credentials.register(
                identifier, raw.get("password") or "", account_id=raw.get("id")
            )
        except (ConflictError, RegistrationValidationError) as e:
            report.accounts_skipped += 1
            report.errors.append(f"account {identifier}: {e}")
            logger.warning(f"Skipped legacy account {identifier}: {e}")
            return
        report.accounts_imported += 1
