"""Account and authentication schemas"""

import enum
from pydantic import BaseModel, ConfigDict, Field


class Role(str, enum.Enum):
    """Authorization tier"""
    ADMIN = "admin"
    CLIENT = "client"


class Account(BaseModel):
    """Authenticated identity. Never carries the secret."""
    id: str = Field(..., description="Account id")
    identifier: str = Field(..., description="Email or phone")
    role: Role = Field(default=Role.CLIENT, description="Account role")

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def admin(cls) -> "Account":
        """Synthesized administrator identity"""
        return cls(id="admin", identifier="admin", role=Role.ADMIN)


MAX_IDENTIFIER_LENGTH = 255


class RegistrationRequest(BaseModel):
    """Registration input"""
    identifier: str = Field(..., min_length=1, max_length=MAX_IDENTIFIER_LENGTH, description="Email or phone")
    secret: str = Field(..., description="Account password")
