"""End-to-end scenarios across the credential store, repository and policy"""

import pytest

from buildtrack.exceptions import AccessDeniedError
from buildtrack.schemas import Project, Role


@pytest.mark.asyncio
class TestEndToEnd:
    """Admin and client flows"""

    async def test_create_and_gate_by_access_code(self, project_service, credentials, master_password):
        """Create Tower A, admin lists it, client opens with ABC1 and is denied with XYZ9"""
        admin = await credentials.authenticate("", master_password)
        saved = await project_service.save_project(admin, Project(name="Tower A", client_access_code="ABC1"))

        assert [p.name for p in await project_service.list_projects(admin)] == ["Tower A"]

        await credentials.register("client@example.com", "s3cret")
        client = await credentials.authenticate("client@example.com", "s3cret")

        opened = await project_service.open_project(client, saved.id, "ABC1")
        assert opened.name == "Tower A"

        with pytest.raises(AccessDeniedError):
            await project_service.open_project(client, saved.id, "XYZ9")

    async def test_archive_and_restore_visibility(self, project_service, credentials, master_password):
        """Archived Tower A leaves active and client lists, shows in archive, then comes back"""
        admin = await credentials.authenticate_admin(master_password)
        await credentials.register("client@example.com", "s3cret")
        client = await credentials.authenticate("client@example.com", "s3cret")
        saved = await project_service.save_project(admin, Project(name="Tower A", client_access_code="ABC1"))

        await project_service.archive_project(admin, saved.id)

        assert await project_service.list_projects(admin) == []
        assert await project_service.list_projects(client) == []
        assert await project_service.list_projects(client, show_archived=True) == []
        assert [p.name for p in await project_service.list_projects(admin, show_archived=True)] == ["Tower A"]

        await project_service.restore_project(admin, saved.id)

        assert [p.name for p in await project_service.list_projects(admin)] == ["Tower A"]
        assert await project_service.list_projects(admin, show_archived=True) == []
        assert [p.name for p in await project_service.list_projects(client)] == ["Tower A"]

    async def test_register_and_authenticate(self, credentials, master_password):
        """Registered client logs in as client; master password logs in as admin"""
        await credentials.register("a@b.com", "s3cret")

        client = await credentials.authenticate("a@b.com", "s3cret")
        assert client.role == Role.CLIENT

        admin = await credentials.authenticate("anyone@anywhere", master_password)
        assert admin.role == Role.ADMIN
