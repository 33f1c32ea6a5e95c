"""Model exports.

Import from here: `from src.billing.models import User, Tenant`
"""

# Enums
from src.billing.models.enums import ChargeStatus, MessageStatus, UserRole

# Identity models
from src.billing.models.public import RefreshToken, Tenant, User

# Tenant-scoped models
from src.billing.models.tenant import Charge, Customer, Message

__all__ = [
    # Enums
    "ChargeStatus",
    "MessageStatus",
    "UserRole",
    # Identity models
    "RefreshToken",
    "Tenant",
    "User",
    # Tenant-scoped models
    "Charge",
    "Customer",
    "Message",
]
