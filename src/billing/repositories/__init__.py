"""Repository layer - data access abstraction."""

from src.billing.repositories.base import BaseRepository
from src.billing.repositories.public import (
    RefreshTokenRepository,
    TenantRepository,
    UserRepository,
)
from src.billing.repositories.tenant import (
    ChargeRepository,
    CustomerRepository,
    MessageRepository,
)

__all__ = [
    # Base
    "BaseRepository",
    # Identity
    "RefreshTokenRepository",
    "TenantRepository",
    "UserRepository",
    # Tenant-scoped
    "ChargeRepository",
    "CustomerRepository",
    "MessageRepository",
]
