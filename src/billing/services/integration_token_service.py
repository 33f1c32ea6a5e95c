"""Integration token service - per-tenant machine credentials."""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.billing.core.exceptions import NotFoundError, ValidationError
from src.billing.core.logging import get_logger
from src.billing.core.security import (
    generate_integration_token,
    hash_integration_token,
    split_integration_token,
    verify_integration_token,
)
from src.billing.models import Tenant
from src.billing.models.base import utc_now
from src.billing.repositories import TenantRepository

logger = get_logger(__name__)

INVALID_TOKEN = "Invalid integration token"


@dataclass(frozen=True)
class IntegrationPrincipal:
    """Identity established by a valid integration token."""

    tenant_id: UUID
    tenant_name: str
    tenant_slug: str


class IntegrationTokenService:
    """Generate, revoke and validate integration tokens.

    A tenant holds at most one live token. Only the public id and a hash of the
    full token are stored; the plaintext is returned exactly once, on generation.
    """

    def __init__(self, tenant_repo: TenantRepository, session: AsyncSession):
        self.tenant_repo = tenant_repo
        self.session = session

    async def _get_tenant(self, tenant_id: UUID) -> Tenant:
        tenant = await self.tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise NotFoundError("Tenant not found")
        return tenant

    async def generate(self, tenant_id: UUID) -> tuple[str, str]:
        """Issue a new token for the tenant, replacing any existing one.

        Returns:
            Tuple of (full_token, public_id)

        Raises:
            NotFoundError: If the tenant does not exist or is inactive.
        """
        tenant = await self._get_tenant(tenant_id)
        if not tenant.is_active:
            raise NotFoundError("Tenant not found or inactive")

        public_id, token = generate_integration_token()
        try:
            tenant.integration_token_id = public_id
            tenant.integration_token_hash = hash_integration_token(token)
            tenant.updated_at = utc_now()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Integration token generated", tenant_id=str(tenant_id), token_id=public_id)
        return token, public_id

    async def revoke(self, tenant_id: UUID) -> None:
        """Clear the tenant's token.

        Raises:
            NotFoundError: If the tenant does not exist.
            ValidationError: If the tenant has no token.
        """
        tenant = await self._get_tenant(tenant_id)
        if not tenant.has_integration_token:
            raise ValidationError("Tenant has no integration token")

        try:
            tenant.integration_token_id = None
            tenant.integration_token_hash = None
            tenant.updated_at = utc_now()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Integration token revoked", tenant_id=str(tenant_id))

    async def validate(self, token: str) -> IntegrationPrincipal:
        """Resolve a full token to its tenant.

        Every failure (bad format, unknown id, inactive tenant, hash mismatch) raises
        the same error; the reason is only logged. Callers authenticating a request
        turn it into a 401.

        Raises:
            ValidationError: If the token is not valid.
        """
        try:
            public_id, _ = split_integration_token(token)
        except ValueError as e:
            logger.info("Integration token rejected", reason="malformed")
            raise ValidationError(INVALID_TOKEN) from e

        tenant = await self.tenant_repo.get_active_by_integration_token_id(public_id)
        if tenant is None or tenant.integration_token_hash is None:
            logger.info("Integration token rejected", reason="unknown_id", token_id=public_id)
            raise ValidationError(INVALID_TOKEN)

        if not verify_integration_token(token, tenant.integration_token_hash):
            logger.info("Integration token rejected", reason="hash_mismatch", token_id=public_id)
            raise ValidationError(INVALID_TOKEN)

        return IntegrationPrincipal(
            tenant_id=tenant.id, tenant_name=tenant.name, tenant_slug=tenant.slug
        )
