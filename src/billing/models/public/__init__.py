"""Identity models - tenants, users and their credentials."""

from src.billing.models.public.auth import RefreshToken
from src.billing.models.public.tenant import Tenant
from src.billing.models.public.user import User

__all__ = [
    "RefreshToken",
    "Tenant",
    "User",
]
