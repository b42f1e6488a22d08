"""Authentication-related Pydantic schemas."""

from uuid import UUID

from pydantic import BaseModel, Field

from cadetex.db.enums import Role
from cadetex.schemas.user import UserRead


class TokenPayload(BaseModel):
    """Decoded JWT payload structure."""
    sub: UUID  # user_id
    org_id: UUID
    role: str
    email: str


class UserSession(BaseModel):
    """
    Identity context for authenticated requests.

    Built once per request by get_current_session and never mutated.
    """
    user_id: UUID
    org_id: UUID
    role: Role  # Validated enum
    email: str

    model_config = {"frozen": True}


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    """Self-service account creation."""
    organization_id: str
    name: str
    email: str
    password: str = Field(..., max_length=72)
    role: Role = Role.COURIER


class AuthResponse(BaseModel):
    token: str
    user: UserRead
