"""Pytest configuration and shared fixtures"""

from datetime import date

import pytest
import pytest_asyncio

from buildtrack.config import Settings
from buildtrack.database import ProjectStore
from buildtrack.schemas import Account, MediaItem, MediaType, Project, ProjectStatus, WeeklyUpdate
from buildtrack.services.auth_service import AuthService
from buildtrack.services.credential_store import CredentialStore
from buildtrack.services.project_repository import ProjectRepository
from buildtrack.services.project_service import ProjectService
from buildtrack.services.summary_service import SummaryService

MASTER_PASSWORD = "Ndertimi2024"
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture(scope="session")
def master_password_hash() -> str:
    """Master password hash shared across tests"""
    return AuthService.hash_secret(MASTER_PASSWORD, rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def test_settings(tmp_path, master_password_hash) -> Settings:
    """Settings pointing at a throwaway SQLite file"""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'buildtrack_test.db'}",
        admin_password_hash=master_password_hash,
        bcrypt_rounds=TEST_BCRYPT_ROUNDS,
        gemini_api_key=None,
        media_max_bytes=1024 * 1024,
    )


@pytest_asyncio.fixture
async def store(test_settings):
    """Opened project store, closed after the test"""
    project_store = ProjectStore(test_settings)
    await project_store.open()
    yield project_store
    await project_store.close()


@pytest.fixture
def repository(store) -> ProjectRepository:
    return ProjectRepository(store)


@pytest.fixture
def credentials(store) -> CredentialStore:
    return CredentialStore(store)


@pytest.fixture
def project_service(repository, test_settings) -> ProjectService:
    return ProjectService(repository, test_settings, SummaryService(test_settings))


@pytest.fixture
def admin() -> Account:
    return Account.admin()


@pytest.fixture
def client_identity() -> Account:
    return Account(id="1700000000000", identifier="client@example.com", role="client")


@pytest.fixture
def sample_project() -> Project:
    """Project with nested updates and media"""
    return Project(
        id="1700000000001",
        name="Seaside Tower",
        location="Vlorë, Albania",
        description="Twelve-storey residential tower",
        thumbnail_url="https://picsum.photos/800/600",
        client_access_code="SEA42",
        status=ProjectStatus.STRUCTURE,
        updates=[
            WeeklyUpdate(
                id="u2",
                week_number=2,
                date=date(2024, 3, 11),
                description="Third floor slab poured",
                media=[
                    MediaItem(id="m3", type=MediaType.VIDEO, url="https://example.com/slab.mp4", title="Pour"),
                    MediaItem(
                        id="m4",
                        type=MediaType.PANORAMA_EMBED,
                        url="https://floorfy.com/tour/123",
                        title="360 tour",
                    ),
                ],
            ),
            WeeklyUpdate(
                id="u1",
                week_number=1,
                date=date(2024, 3, 4),
                description="Columns for second floor",
                media=[
                    MediaItem(id="m1", type=MediaType.IMAGE, url="https://example.com/a.jpg", title="North side"),
                    MediaItem(
                        id="m2",
                        type=MediaType.MODEL_3D_EMBED,
                        url="https://poly.cam/capture/abc",
                        title="Scan",
                    ),
                ],
            ),
        ],
    )


@pytest.fixture
def master_password() -> str:
    return MASTER_PASSWORD
