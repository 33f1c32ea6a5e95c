"""Tenant factory for test data generation."""

from uuid import uuid4

from polyfactory import Use

from src.billing.models.public import Tenant
from tests.factories.base import BaseFactory, short_id, utc_now


class TenantFactory(BaseFactory):
    """Factory for generating Tenant test data."""

    __model__ = Tenant

    id = Use(uuid4)
    name = Use(lambda: f"Test Tenant {short_id()}")
    slug = Use(lambda: f"test-{short_id()}")
    is_active = True
    config = None
    integration_token_id = None
    integration_token_hash = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def inactive(cls, **kwargs):
        """Create a deactivated tenant."""
        return cls.build(is_active=False, **kwargs)
