"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """User role within a tenant."""

    ADMIN = "ADMIN"
    USER = "USER"


class ChargeStatus(str, Enum):
    """Payment state of a charge."""

    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


class MessageStatus(str, Enum):
    """Delivery state of a payment-reminder message."""

    SCHEDULED = "SCHEDULED"
    SENT = "SENT"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
