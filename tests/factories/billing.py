"""Customer, charge and message factories for test data generation."""

from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

from polyfactory import Use

from src.billing.models import ChargeStatus, MessageStatus
from src.billing.models.tenant import Charge, Customer, Message
from tests.factories.base import BaseFactory, short_id, utc_now


def random_phone() -> str:
    return f"+55 11 9{uuid4().int % 10**8:08d}"


class CustomerFactory(BaseFactory):
    """Factory for generating Customer test data.

    ``tenant_id`` must be set explicitly.
    """

    __model__ = Customer

    id = Use(uuid4)
    tenant_id = None
    name = Use(lambda: f"Customer {short_id()}")
    phone = Use(random_phone)
    amount = Decimal("150.00")
    due_day = 10
    notes = None
    is_active = True
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def inactive(cls, **kwargs):
        """Create a deactivated customer."""
        return cls.build(is_active=False, **kwargs)


class ChargeFactory(BaseFactory):
    """Factory for generating Charge test data.

    ``tenant_id`` and ``customer_id`` must be set explicitly.
    """

    __model__ = Charge

    id = Use(uuid4)
    tenant_id = None
    customer_id = None
    amount = Decimal("100.00")
    due_date = Use(lambda: date.today() + timedelta(days=10))
    status = ChargeStatus.PENDING.value
    paid_at = None
    pix_qr_code = None
    pix_copy_paste = None
    notes = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def overdue(cls, days: int = 5, **kwargs):
        """Create an OVERDUE charge due some days ago."""
        return cls.build(
            status=ChargeStatus.OVERDUE.value,
            due_date=date.today() - timedelta(days=days),
            **kwargs,
        )

    @classmethod
    def paid(cls, **kwargs):
        """Create a charge paid now."""
        return cls.build(status=ChargeStatus.PAID.value, paid_at=utc_now(), **kwargs)


class MessageFactory(BaseFactory):
    """Factory for generating Message test data.

    ``tenant_id`` and ``customer_id`` must be set explicitly.
    """

    __model__ = Message

    id = Use(uuid4)
    tenant_id = None
    customer_id = None
    charge_id = None
    phone = Use(random_phone)
    body = "Your payment is due soon."
    status = MessageStatus.SENT.value
    scheduled_at = None
    sent_at = Use(utc_now)
    attempts = 1
    error = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)
