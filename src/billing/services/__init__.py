from src.billing.services.auth_service import AuthenticatedUser, AuthService, AuthSession
from src.billing.services.charge_service import ChargeService
from src.billing.services.customer_service import CustomerService
from src.billing.services.dashboard_service import DashboardService
from src.billing.services.integration_token_service import (
    IntegrationPrincipal,
    IntegrationTokenService,
)
from src.billing.services.message_service import MessageService
from src.billing.services.tenant_service import AdminUserInput, TenantService

__all__ = [
    "AdminUserInput",
    "AuthenticatedUser",
    "AuthService",
    "AuthSession",
    "ChargeService",
    "CustomerService",
    "DashboardService",
    "IntegrationPrincipal",
    "IntegrationTokenService",
    "MessageService",
    "TenantService",
]
