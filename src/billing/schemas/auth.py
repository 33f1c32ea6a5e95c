from uuid import UUID

from pydantic import EmailStr, Field

from src.billing.models.enums import UserRole
from src.billing.schemas.base import CamelModel
from src.billing.schemas.user import TenantSummary, UserRead

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_LENGTH = 72


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=MAX_PASSWORD_LENGTH)


class RegisterRequest(CamelModel):
    """Register a user inside an existing tenant."""

    tenant_id: UUID
    email: EmailStr
    password: str = Field(min_length=6, max_length=MAX_PASSWORD_LENGTH)
    name: str = Field(min_length=1, max_length=255)
    role: UserRole = UserRole.USER


class RefreshRequest(CamelModel):
    refresh_token: str = Field(min_length=1)


class LogoutRequest(CamelModel):
    refresh_token: str | None = None


class AuthResponse(CamelModel):
    """Tokens plus the authenticated user, returned by login, register and refresh."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserRead
    tenant: TenantSummary | None = None


class MessageResponse(CamelModel):
    success: bool = True
    message: str
