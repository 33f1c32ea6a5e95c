"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.billing.api.dependencies.db import DBSession
from src.billing.repositories import (
    ChargeRepository,
    CustomerRepository,
    MessageRepository,
    RefreshTokenRepository,
    TenantRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    """Get user repository."""
    return UserRepository(session)


def get_token_repository(session: DBSession) -> RefreshTokenRepository:
    """Get refresh token repository."""
    return RefreshTokenRepository(session)


def get_tenant_repository(session: DBSession) -> TenantRepository:
    """Get tenant repository."""
    return TenantRepository(session)


def get_customer_repository(session: DBSession) -> CustomerRepository:
    return CustomerRepository(session)


def get_charge_repository(session: DBSession) -> ChargeRepository:
    return ChargeRepository(session)


def get_message_repository(session: DBSession) -> MessageRepository:
    return MessageRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
TokenRepo = Annotated[RefreshTokenRepository, Depends(get_token_repository)]
TenantRepo = Annotated[TenantRepository, Depends(get_tenant_repository)]
CustomerRepo = Annotated[CustomerRepository, Depends(get_customer_repository)]
ChargeRepo = Annotated[ChargeRepository, Depends(get_charge_repository)]
MessageRepo = Annotated[MessageRepository, Depends(get_message_repository)]
