from src.billing.schemas.auth import (
    AuthResponse,
    LoginRequest,
    LogoutRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
)
from src.billing.schemas.charge import (
    ChargeCreate,
    ChargeListQuery,
    ChargeRead,
    ChargeUpdate,
    SituationSummary,
)
from src.billing.schemas.customer import (
    CustomerCreate,
    CustomerListQuery,
    CustomerRead,
    CustomerUpdate,
)
from src.billing.schemas.dashboard import DashboardStats
from src.billing.schemas.integration import IntegrationTokenRequest, IntegrationTokenResponse
from src.billing.schemas.message import MessageCreate, MessageListQuery, MessageRead, MessageUpdate
from src.billing.schemas.pagination import PaginatedResponse
from src.billing.schemas.tenant import (
    TenantCreate,
    TenantCreated,
    TenantDetail,
    TenantPublic,
    TenantRead,
    TenantUpdate,
)
from src.billing.schemas.user import TenantSummary, UserProfile, UserRead

__all__ = [
    # Auth
    "AuthResponse",
    "LoginRequest",
    "LogoutRequest",
    "MessageResponse",
    "RefreshRequest",
    "RegisterRequest",
    # Charges
    "ChargeCreate",
    "ChargeListQuery",
    "ChargeRead",
    "ChargeUpdate",
    "SituationSummary",
    # Customers
    "CustomerCreate",
    "CustomerListQuery",
    "CustomerRead",
    "CustomerUpdate",
    # Dashboard
    "DashboardStats",
    # Integrations
    "IntegrationTokenRequest",
    "IntegrationTokenResponse",
    # Messages
    "MessageCreate",
    "MessageListQuery",
    "MessageRead",
    "MessageUpdate",
    # Pagination
    "PaginatedResponse",
    # Tenants
    "TenantCreate",
    "TenantCreated",
    "TenantDetail",
    "TenantPublic",
    "TenantRead",
    "TenantUpdate",
    # Users
    "TenantSummary",
    "UserProfile",
    "UserRead",
]
