"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

# Auth
from src.billing.api.dependencies.auth import (
    CurrentAuth,
    IntegrationOrAuth,
    OptionalAuth,
    SuperAdmin,
    get_auth_context,
    get_integration_or_auth_context,
    get_optional_auth_context,
    require_super_admin,
)

# Database
from src.billing.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.billing.api.dependencies.repositories import (
    ChargeRepo,
    CustomerRepo,
    MessageRepo,
    TenantRepo,
    TokenRepo,
    UserRepo,
)

# Services
from src.billing.api.dependencies.services import (
    AuthServiceDep,
    ChargeServiceDep,
    CustomerServiceDep,
    DashboardServiceDep,
    IntegrationChargeServiceDep,
    IntegrationMessageServiceDep,
    IntegrationTokenServiceDep,
    MessageServiceDep,
    TenantServiceDep,
)

# Tenant scope
from src.billing.api.dependencies.tenant import IntegrationTenantId, TenantId

__all__ = [
    # Auth
    "CurrentAuth",
    "IntegrationOrAuth",
    "OptionalAuth",
    "SuperAdmin",
    "get_auth_context",
    "get_integration_or_auth_context",
    "get_optional_auth_context",
    "require_super_admin",
    # Database
    "DBSession",
    "get_db_session",
    # Repositories
    "ChargeRepo",
    "CustomerRepo",
    "MessageRepo",
    "TenantRepo",
    "TokenRepo",
    "UserRepo",
    # Services
    "AuthServiceDep",
    "ChargeServiceDep",
    "CustomerServiceDep",
    "DashboardServiceDep",
    "IntegrationChargeServiceDep",
    "IntegrationMessageServiceDep",
    "IntegrationTokenServiceDep",
    "MessageServiceDep",
    "TenantServiceDep",
    # Tenant scope
    "IntegrationTenantId",
    "TenantId",
]
