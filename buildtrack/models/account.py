"""Account model"""

from sqlalchemy import Column, String
from buildtrack.models.base import BaseModel


class AccountRecord(BaseModel):
    """
    Registered client account.
    The admin identity is never stored here; it is synthesized on a
    master-password match.
    """

    __tablename__ = "accounts"

    id = Column(String(64), primary_key=True)
    identifier = Column(String(255), unique=True, nullable=False, index=True)
    secret_hash = Column(String(255), nullable=False)
    role = Column(String(16), default="client", nullable=False)

    def __repr__(self):
        return f"<AccountRecord(id={self.id}, identifier={self.identifier}, role={self.role})>"
