"""Tenant-scoped models. Every row carries the owning tenant_id."""

from src.billing.models.tenant.charge import Charge
from src.billing.models.tenant.customer import Customer
from src.billing.models.tenant.message import Message

__all__ = [
    "Charge",
    "Customer",
    "Message",
]
