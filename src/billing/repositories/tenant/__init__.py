"""Tenant-scoped repositories. Methods take the tenant id explicitly."""

from src.billing.repositories.tenant.charge import ChargeRepository
from src.billing.repositories.tenant.customer import CustomerRepository
from src.billing.repositories.tenant.message import MessageRepository

__all__ = [
    "ChargeRepository",
    "CustomerRepository",
    "MessageRepository",
]
