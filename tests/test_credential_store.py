"""Tests for the credential store"""

import pytest
from sqlalchemy import select

from buildtrack.models import AccountRecord
from buildtrack.exceptions import ConflictError, RegistrationValidationError, UnauthorizedError
from buildtrack.schemas import Role
from buildtrack.services.credential_store import CredentialStore


@pytest.mark.asyncio
class TestRegister:
    """Test client registration"""

    async def test_register_creates_client_account(self, credentials):
        """Test registering a new identifier"""
        account = await credentials.register("a@b.com", "s3cret")

        assert account.identifier == "a@b.com"
        assert account.role == Role.CLIENT
        assert account.id

        accounts = await credentials.list_accounts()
        assert [a.id for a in accounts] == [account.id]

    async def test_register_duplicate_conflicts(self, credentials):
        """Test second registration of the same identifier is rejected"""
        first = await credentials.register("a@b.com", "s3cret")

        with pytest.raises(ConflictError):
            await credentials.register("a@b.com", "another-secret")

        accounts = await credentials.list_accounts()
        assert accounts == [first]

    async def test_register_identifier_is_case_sensitive(self, credentials):
        """Test identifiers differing only in case are distinct"""
        await credentials.register("a@b.com", "s3cret")
        other = await credentials.register("A@B.com", "s3cret")

        assert other.identifier == "A@B.com"
        assert len(await credentials.list_accounts()) == 2

    async def test_register_short_secret_rejected(self, credentials):
        """Test secrets below the minimum length are rejected"""
        with pytest.raises(RegistrationValidationError, match="at least 6"):
            await credentials.register("a@b.com", "12345")

        assert await credentials.list_accounts() == []

    async def test_register_blank_identifier_rejected(self, credentials):
        """Test blank identifiers are rejected"""
        with pytest.raises(RegistrationValidationError):
            await credentials.register("   ", "s3cret")

    async def test_register_overlong_secret_rejected(self, credentials):
        """Test secrets beyond the bcrypt input limit are rejected, not truncated"""
        with pytest.raises(RegistrationValidationError, match="at most 72 bytes"):
            await credentials.register("long@example.com", "x" * 80)

        # Multi-byte characters count by their encoded size
        with pytest.raises(RegistrationValidationError, match="at most 72 bytes"):
            await credentials.register("long@example.com", "é" * 40)

        assert await credentials.list_accounts() == []

    async def test_register_secret_at_byte_limit_accepted(self, credentials):
        """Test a 72-byte secret registers and authenticates"""
        account = await credentials.register("edge@example.com", "y" * 72)

        assert await credentials.authenticate("edge@example.com", "y" * 72) == account

    async def test_register_overlong_identifier_reports_limit(self, credentials):
        """Test identifiers above 255 characters report the length limit"""
        with pytest.raises(RegistrationValidationError, match="at most 255 characters"):
            await credentials.register("a" * 256 + "@example.com", "s3cret")

        assert await credentials.list_accounts() == []

    async def test_register_generates_distinct_ids(self, credentials):
        """Test each account gets its own id"""
        first = await credentials.register("one@example.com", "s3cret")
        second = await credentials.register("two@example.com", "s3cret")

        assert first.id != second.id

    async def test_secret_not_stored_in_plaintext(self, credentials, store):
        """Test only a bcrypt hash of the secret is persisted"""

        await credentials.register("a@b.com", "s3cret")

        async with store.session() as session:
            record = (await session.execute(select(AccountRecord))).scalar_one()

        assert record.secret_hash != "s3cret"
        assert record.secret_hash.startswith("$2b$")


@pytest.mark.asyncio
class TestAuthenticate:
    """Test authentication"""

    async def test_authenticate_client(self, credentials):
        """Test matching identifier and secret returns the client account"""
        registered = await credentials.register("a@b.com", "s3cret")

        account = await credentials.authenticate("a@b.com", "s3cret")

        assert account == registered
        assert account.role == Role.CLIENT

    async def test_authenticate_wrong_secret(self, credentials):
        """Test wrong secret is unauthorized"""
        await credentials.register("a@b.com", "s3cret")

        with pytest.raises(UnauthorizedError):
            await credentials.authenticate("a@b.com", "wrong-secret")

    async def test_authenticate_unknown_identifier(self, credentials):
        """Test unknown identifier is unauthorized"""
        with pytest.raises(UnauthorizedError):
            await credentials.authenticate("nobody@example.com", "s3cret")

    async def test_master_password_grants_admin_from_any_identifier(self, credentials, master_password):
        """Test master password returns the admin identity whatever identifier is used"""
        await credentials.register("a@b.com", "s3cret")

        for identifier in ("", "a@b.com", "someone-else"):
            account = await credentials.authenticate(identifier, master_password)
            assert account.role == Role.ADMIN
            assert account.id == "admin"

    async def test_admin_mode_accepts_only_master_password(self, credentials, master_password):
        """Test admin-mode login"""
        await credentials.register("a@b.com", "s3cret")

        account = await credentials.authenticate_admin(master_password)
        assert account.is_admin

        with pytest.raises(UnauthorizedError):
            await credentials.authenticate_admin("s3cret")

    async def test_admin_not_persisted(self, credentials, master_password):
        """Test admin login does not create an account record"""
        await credentials.authenticate("x", master_password)

        assert await credentials.list_accounts() == []

    async def test_master_password_disabled_without_hash(self, store, test_settings, master_password):
        """Test master-password login is off when no hash is configured"""
        config = test_settings.model_copy(update={"admin_password_hash": None})
        credentials = CredentialStore(store, config)

        with pytest.raises(UnauthorizedError):
            await credentials.authenticate("admin", master_password)
        with pytest.raises(UnauthorizedError):
            await credentials.authenticate_admin(master_password)

    async def test_min_secret_length_configurable(self, store, test_settings):
        """Test the minimum secret length comes from settings"""
        config = test_settings.model_copy(update={"min_secret_length": 10})
        credentials = CredentialStore(store, config)

        with pytest.raises(RegistrationValidationError, match="at least 10"):
            await credentials.register("a@b.com", "s3cret")
