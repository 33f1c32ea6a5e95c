"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.billing.api.dependencies.db import DBSession
from src.billing.api.dependencies.repositories import (
    ChargeRepo,
    CustomerRepo,
    MessageRepo,
    TenantRepo,
    TokenRepo,
    UserRepo,
)
from src.billing.api.dependencies.tenant import IntegrationTenantId, TenantId
from src.billing.services.auth_service import AuthService
from src.billing.services.charge_service import ChargeService
from src.billing.services.customer_service import CustomerService
from src.billing.services.dashboard_service import DashboardService
from src.billing.services.integration_token_service import IntegrationTokenService
from src.billing.services.message_service import MessageService
from src.billing.services.tenant_service import TenantService


def get_auth_service(
    user_repo: UserRepo,
    token_repo: TokenRepo,
    tenant_repo: TenantRepo,
    session: DBSession,
) -> AuthService:
    """Get auth service (no tenant context required)."""
    return AuthService(user_repo, token_repo, tenant_repo, session)


def get_integration_token_service(
    tenant_repo: TenantRepo, session: DBSession
) -> IntegrationTokenService:
    """Get integration token service."""
    return IntegrationTokenService(tenant_repo, session)


def get_tenant_service(
    tenant_repo: TenantRepo,
    user_repo: UserRepo,
    session: DBSession,
) -> TenantService:
    """Get tenant service (super-admin operations, no tenant context)."""
    return TenantService(tenant_repo, user_repo, session)


def get_customer_service(
    customer_repo: CustomerRepo,
    charge_repo: ChargeRepo,
    session: DBSession,
    tenant_id: TenantId,
) -> CustomerService:
    """Get customer service scoped to the caller's tenant."""
    return CustomerService(customer_repo, charge_repo, session, tenant_id)


def get_charge_service(
    charge_repo: ChargeRepo,
    customer_repo: CustomerRepo,
    message_repo: MessageRepo,
    session: DBSession,
    tenant_id: TenantId,
) -> ChargeService:
    """Get charge service scoped to the caller's tenant."""
    return ChargeService(charge_repo, customer_repo, message_repo, session, tenant_id)


def get_integration_charge_service(
    charge_repo: ChargeRepo,
    customer_repo: CustomerRepo,
    message_repo: MessageRepo,
    session: DBSession,
    tenant_id: IntegrationTenantId,
) -> ChargeService:
    """Get charge service for endpoints that also accept an integration token."""
    return ChargeService(charge_repo, customer_repo, message_repo, session, tenant_id)


def get_message_service(
    message_repo: MessageRepo,
    customer_repo: CustomerRepo,
    charge_repo: ChargeRepo,
    session: DBSession,
    tenant_id: TenantId,
) -> MessageService:
    """Get message service scoped to the caller's tenant."""
    return MessageService(message_repo, customer_repo, charge_repo, session, tenant_id)


def get_integration_message_service(
    message_repo: MessageRepo,
    customer_repo: CustomerRepo,
    charge_repo: ChargeRepo,
    session: DBSession,
    tenant_id: IntegrationTenantId,
) -> MessageService:
    """Get message service for endpoints that also accept an integration token."""
    return MessageService(message_repo, customer_repo, charge_repo, session, tenant_id)


def get_dashboard_service(charge_repo: ChargeRepo, tenant_id: TenantId) -> DashboardService:
    """Get dashboard service scoped to the caller's tenant."""
    return DashboardService(charge_repo, tenant_id)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
IntegrationTokenServiceDep = Annotated[
    IntegrationTokenService, Depends(get_integration_token_service)
]
TenantServiceDep = Annotated[TenantService, Depends(get_tenant_service)]
CustomerServiceDep = Annotated[CustomerService, Depends(get_customer_service)]
ChargeServiceDep = Annotated[ChargeService, Depends(get_charge_service)]
IntegrationChargeServiceDep = Annotated[ChargeService, Depends(get_integration_charge_service)]
MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
IntegrationMessageServiceDep = Annotated[MessageService, Depends(get_integration_message_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
