"""Identity repositories - tenants, users and refresh tokens."""

from src.billing.repositories.public.tenant import TenantRepository
from src.billing.repositories.public.token import RefreshTokenRepository
from src.billing.repositories.public.user import UserRepository

__all__ = [
    "RefreshTokenRepository",
    "TenantRepository",
    "UserRepository",
]
