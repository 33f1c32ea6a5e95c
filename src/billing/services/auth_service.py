"""Authentication service - login, registration and refresh-token lifecycle."""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.billing.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from src.billing.core.logging import get_logger
from src.billing.core.security import (
    create_access_token,
    dummy_password_hash,
    generate_refresh_token,
    hash_password,
    hash_token,
    refresh_token_expiry,
    verify_password,
)
from src.billing.models import RefreshToken, Tenant, User, UserRole
from src.billing.models.base import utc_now
from src.billing.repositories import RefreshTokenRepository, TenantRepository, UserRepository

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True)
class AuthenticatedUser:
    """A verified user together with their tenant (None for super-admins)."""

    user: User
    tenant: Tenant | None


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    refresh_token: str
    user: User
    tenant: Tenant | None


class AuthService:
    """Authentication service.

    Access tokens are stateless JWTs. Refresh tokens are opaque random values whose
    SHA256 hash is stored; they are rotated on every refresh and expired ones are
    purged whenever a new one is issued.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        token_repo: RefreshTokenRepository,
        tenant_repo: TenantRepository,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.token_repo = token_repo
        self.tenant_repo = tenant_repo
        self.session = session

    async def _get_tenant(self, user: User) -> Tenant | None:
        if user.tenant_id is None:
            return None
        return await self.tenant_repo.get_by_id(user.tenant_id)

    async def login(self, email: str, password: str) -> AuthenticatedUser:
        """Verify credentials.

        The same email may exist in several tenants; the oldest active account whose
        password matches and whose tenant is active wins. Unknown email and wrong
        password fail identically.

        Raises:
            UnauthorizedError: If no account matches, or every match is in an inactive
                tenant.
        """
        candidates = await self.user_repo.list_active_by_email(email)

        # Always verify at least once so unknown emails take as long as known ones
        if not candidates:
            verify_password(password, dummy_password_hash())
            logger.info("Login failed", reason="unknown_email")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        inactive_tenant_id = None
        for user in candidates:
            if not verify_password(password, user.hashed_password):
                continue
            tenant = await self._get_tenant(user)
            if tenant is not None and not tenant.is_active:
                inactive_tenant_id = tenant.id
                continue
            logger.info("Login succeeded", user_id=str(user.id))
            return AuthenticatedUser(user=user, tenant=tenant)

        if inactive_tenant_id is not None:
            logger.info("Login failed", reason="tenant_inactive", tenant_id=str(inactive_tenant_id))
            raise UnauthorizedError("Tenant is inactive")

        logger.info("Login failed", reason="wrong_password")
        raise UnauthorizedError(INVALID_CREDENTIALS)

    async def register(
        self,
        tenant_id: UUID,
        email: str,
        password: str,
        name: str,
        role: UserRole = UserRole.USER,
    ) -> AuthenticatedUser:
        """Create a user inside an existing, active tenant.

        Raises:
            NotFoundError: If the tenant is missing or inactive.
            ConflictError: If the email is already used in the tenant.
        """
        tenant = await self.tenant_repo.get_by_id(tenant_id)
        if tenant is None or not tenant.is_active:
            raise NotFoundError("Tenant not found or inactive")

        if await self.user_repo.exists_in_tenant(tenant_id, email):
            raise ConflictError("A user with this email already exists in this tenant")

        user = User(
            tenant_id=tenant_id,
            email=email,
            hashed_password=hash_password(password),
            name=name,
            role=role.value,
            is_admin=False,
        )
        try:
            self.user_repo.add(user)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("A user with this email already exists in this tenant") from e

        logger.info("User registered", user_id=str(user.id), tenant_id=str(tenant_id))
        return AuthenticatedUser(user=user, tenant=tenant)

    async def create_super_admin(self, email: str, password: str, name: str) -> User:
        """Create a platform administrator (no tenant, is_admin set).

        Raises:
            ConflictError: If a super-admin with this email already exists.
        """
        if await self.user_repo.get_super_admin_by_email(email) is not None:
            raise ConflictError("A platform administrator with this email already exists")

        user = User(
            tenant_id=None,
            email=email,
            hashed_password=hash_password(password),
            name=name,
            role=UserRole.ADMIN.value,
            is_admin=True,
        )
        try:
            self.user_repo.add(user)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("A platform administrator with this email already exists") from e

        logger.info("Super-admin created", user_id=str(user.id))
        return user

    def issue_access_token(self, user: User) -> str:
        """Sign an access token carrying the user's id, email, role and tenant."""
        return create_access_token(user.id, user.email, user.role, user.tenant_id)

    async def issue_refresh_token(self, user_id: UUID) -> str:
        """Purge the user's expired refresh tokens, then store and return a new one."""
        try:
            purged = await self.token_repo.delete_expired_for_user(user_id)
            token = generate_refresh_token()
            self.token_repo.add(
                RefreshToken(
                    user_id=user_id,
                    token_hash=hash_token(token),
                    expires_at=refresh_token_expiry(),
                )
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        if purged:
            logger.debug("Purged expired refresh tokens", user_id=str(user_id), count=purged)
        return token

    async def create_session(self, authenticated: AuthenticatedUser) -> AuthSession:
        """Issue an access token and a refresh token for a verified user."""
        refresh_token = await self.issue_refresh_token(authenticated.user.id)
        return AuthSession(
            access_token=self.issue_access_token(authenticated.user),
            refresh_token=refresh_token,
            user=authenticated.user,
            tenant=authenticated.tenant,
        )

    async def refresh(self, refresh_token: str) -> AuthenticatedUser:
        """Validate a refresh token and return its owner.

        Raises:
            UnauthorizedError: If the token is unknown or expired (expired tokens are
                deleted), if the owner is inactive (all their tokens are deleted), or
                if the owner's tenant is inactive.
        """
        token_hash = hash_token(refresh_token)
        db_token = await self.token_repo.get_by_hash(token_hash)
        if db_token is None:
            raise UnauthorizedError("Refresh token invalid")

        try:
            if db_token.is_expired(utc_now()):
                await self.token_repo.delete_by_hash(token_hash)
                await self.session.commit()
                raise UnauthorizedError("Refresh token expired")

            user = await self.user_repo.get_by_id(db_token.user_id)
            if user is None or not user.is_active:
                await self.token_repo.delete_all_for_user(db_token.user_id)
                await self.session.commit()
                raise UnauthorizedError("User inactive")
        except UnauthorizedError:
            raise
        except Exception:
            await self.session.rollback()
            raise

        tenant = await self._get_tenant(user)
        if tenant is not None and not tenant.is_active:
            raise UnauthorizedError("Tenant is inactive")

        return AuthenticatedUser(user=user, tenant=tenant)

    async def rotate(self, refresh_token: str) -> AuthSession:
        """Exchange a refresh token for a new session.

        The consumed token is revoked and a replacement is issued as two separate
        commits. If the second write fails the user has to log in again.
        """
        authenticated = await self.refresh(refresh_token)
        await self.revoke(refresh_token)
        return await self.create_session(authenticated)

    async def revoke(self, refresh_token: str) -> bool:
        """Delete a refresh token if present. Returns True if a token was deleted."""
        try:
            deleted = await self.token_repo.delete_by_hash(hash_token(refresh_token))
            await self.session.commit()
            return deleted > 0
        except Exception:
            await self.session.rollback()
            raise

    async def cleanup_all_expired(self) -> int:
        """Delete expired refresh tokens for every user. Returns the number deleted."""
        try:
            count = await self.token_repo.delete_all_expired()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Expired refresh tokens cleaned up", count=count)
        return count

    async def get_profile(self, user_id: UUID) -> AuthenticatedUser:
        """Load a user and their tenant.

        Raises:
            NotFoundError: If the user does not exist.
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return AuthenticatedUser(user=user, tenant=await self._get_tenant(user))
