"""Credential store: client registration and authentication"""

import logging
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from buildtrack.config import Settings
from buildtrack.database import ProjectStore
from buildtrack.exceptions import (
    ConflictError,
    RegistrationValidationError,
    UnauthorizedError,
)
from buildtrack.models.account import AccountRecord
from buildtrack.schemas.account import (
    MAX_IDENTIFIER_LENGTH,
    Account,
    RegistrationRequest,
    Role,
)
from buildtrack.services.auth_service import AuthService
from buildtrack.utils import generate_id

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Holds client accounts and authenticates identities.

    Secrets are stored as bcrypt hashes. The master password is configured as
    a bcrypt hash (`admin_password_hash`); a match returns the synthesized
    admin identity from any login path, whatever identifier was entered.
    Without a configured hash, master-password login is disabled.
    """

    def __init__(self, store: ProjectStore, config: Optional[Settings] = None):
        self.store = store
        self.settings = config or store.settings

    async def register(
        self, identifier: str, secret: str, account_id: Optional[str] = None
    ) -> Account:
        """
        Register a new client account.

        Args:
            identifier: Email or phone, unique across accounts (case-sensitive)
            secret: Plain text secret
            account_id: Optional id to keep (legacy imports); generated otherwise

        Returns:
            The created client Account

        Raises:
            RegistrationValidationError: If the input does not meet requirements
            ConflictError: If the identifier is already registered
        """
        if identifier and len(identifier) > MAX_IDENTIFIER_LENGTH:
            raise RegistrationValidationError(
                f"Email or phone number must be at most {MAX_IDENTIFIER_LENGTH} characters long."
            )
        try:
            request = RegistrationRequest(identifier=identifier, secret=secret)
        except ValidationError as e:
            raise RegistrationValidationError("Please enter an email or phone number.") from e

        if not request.identifier.strip():
            raise RegistrationValidationError("Please enter an email or phone number.")
        if len(request.secret) < self.settings.min_secret_length:
            raise RegistrationValidationError(
                f"Password must be at least {self.settings.min_secret_length} characters long."
            )
        if len(request.secret.encode("utf-8")) > AuthService.MAX_SECRET_BYTES:
            raise RegistrationValidationError(
                f"Password must be at most {AuthService.MAX_SECRET_BYTES} bytes long."
            )

        async with self.store.session() as session:
            result = await session.execute(
                select(AccountRecord.id).where(AccountRecord.identifier == request.identifier)
            )
            if result.scalar_one_or_none() is not None:
                logger.info(f"Registration rejected, identifier already exists: {request.identifier}")
                raise ConflictError("User already exists. Please login.")

            record = AccountRecord(
                id=account_id or generate_id(),
                identifier=request.identifier,
                secret_hash=AuthService.hash_secret(
                    request.secret, rounds=self.settings.bcrypt_rounds
                ),
                role=Role.CLIENT.value,
            )
            session.add(record)
            try:
                await session.flush()
            except IntegrityError as e:
                raise ConflictError("User already exists. Please login.") from e

            account = Account(id=record.id, identifier=record.identifier, role=Role.CLIENT)

        logger.info(f"Registered client account {account.id}")
        return account

    async def authenticate(self, identifier: str, secret: str) -> Account:
        """
        Authenticate an identity.

        Args:
            identifier: Email or phone as entered
            secret: Plain text secret

        Returns:
            The admin identity on a master-password match, else the matching client Account

        Raises:
            UnauthorizedError: If no account matches
        """
        if self.is_master_password(secret):
            logger.info("Admin identity granted by master password")
            return Account.admin()

        async with self.store.session() as session:
            result = await session.execute(
                select(AccountRecord).where(AccountRecord.identifier == identifier)
            )
            record = result.scalar_one_or_none()

        if record is None or not AuthService.verify_secret(secret, record.secret_hash):
            logger.info("Authentication failed")
            raise UnauthorizedError("Invalid credentials.")

        return Account.model_validate(record)

    async def authenticate_admin(self, secret: str) -> Account:
        """
        Admin-mode login: only the master password is accepted.

        Raises:
            UnauthorizedError: If the secret is not the master password
        """
        if not self.is_master_password(secret):
            logger.info("Admin authentication failed")
            raise UnauthorizedError("Invalid Admin Password.")
        return Account.admin()

    async def list_accounts(self) -> List[Account]:
        """Return all registered accounts in registration order"""
        async with self.store.session() as session:
            result = await session.execute(
                select(AccountRecord).order_by(AccountRecord.created_at, AccountRecord.id)
            )
            records = result.scalars().all()
            return [Account.model_validate(r) for r in records]

    def is_master_password(self, secret: str) -> bool:
        """Check a secret against the configured master password hash"""
        master_hash = self.settings.admin_password_hash
        if not master_hash:
            return False
        return AuthService.verify_secret(secret, master_hash)
