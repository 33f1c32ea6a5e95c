"""Cryptographic utilities - password hashing, JWT tokens, and opaque tokens."""

import base64
import secrets
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from hashlib import sha256
from typing import Literal
from uuid import UUID, uuid4

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from src.billing.core.config import get_settings
from src.billing.models.enums import UserRole

INTEGRATION_TOKEN_PREFIX = "api_"
REFRESH_TOKEN_BYTES = 64
INTEGRATION_SECRET_BYTES = 32


def hash_token(token: str) -> str:
    """Hash a token using SHA256 for secure storage."""
    return sha256(token.encode()).hexdigest()


def hash_password(password: str) -> str:
    """Hash password using bcrypt with the configured cost factor."""
    settings = get_settings()
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hash. Returns False on any error."""
    try:
        return bcrypt.checkpw(password.encode(), hashed.encode())
    except ValueError:
        # Malformed hash or password over bcrypt's 72-byte limit
        return False


@lru_cache
def dummy_password_hash() -> str:
    """Hash compared against when no user matches, so lookups take similar time."""
    return hash_password(secrets.token_hex(16))


class AccessTokenClaims(BaseModel):
    """Claims carried by an access token.

    ``tenant_id`` must be present in the payload; it is null for super-admins.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    sub: UUID
    email: str
    role: UserRole
    tenant_id: UUID | None
    type: Literal["access"]
    exp: int

    @property
    def user_id(self) -> UUID:
        return self.sub


class TokenDecodeError(Exception):
    """Raised when an access token cannot be trusted.

    ``reason`` is one of ``expired``, ``malformed`` or ``invalid_claims`` and is
    meant for logs only; clients always see the same 401.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def create_access_token(
    user_id: str | UUID,
    email: str,
    role: str,
    tenant_id: str | UUID | None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create JWT access token."""
    settings = get_settings()

    now = datetime.now(UTC)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(days=settings.access_token_expire_days)

    to_encode = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "tenant_id": str(tenant_id) if tenant_id is not None else None,
        "iat": now,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(  # type: ignore[no-any-return]
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> AccessTokenClaims:
    """Verify signature and expiry, then validate the claims into a typed structure.

    Raises:
        TokenDecodeError: If the token is expired, malformed or has invalid claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except ExpiredSignatureError as e:
        raise TokenDecodeError("expired") from e
    except JWTError as e:
        raise TokenDecodeError("malformed") from e

    try:
        return AccessTokenClaims.model_validate(payload)
    except PydanticValidationError as e:
        raise TokenDecodeError("invalid_claims") from e


def generate_refresh_token() -> str:
    """Generate an opaque refresh token (64 random bytes, hex encoded)."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)


def refresh_token_expiry() -> datetime:
    """Expiry for a refresh token issued now, as naive UTC datetime."""
    settings = get_settings()
    expire = datetime.now(UTC) + timedelta(days=settings.refresh_token_expire_days)
    return expire.replace(tzinfo=None)


def generate_integration_token() -> tuple[str, str]:
    """Generate an integration token.

    Returns:
        Tuple of (public_id, full_token) where full_token is
        ``api_<uuid hex>.<base64url secret>`` and public_id is the part before the dot.
    """
    public_id = f"{INTEGRATION_TOKEN_PREFIX}{uuid4().hex}"
    secret = base64.urlsafe_b64encode(secrets.token_bytes(INTEGRATION_SECRET_BYTES))
    return public_id, f"{public_id}.{secret.rstrip(b'=').decode()}"


def split_integration_token(token: str) -> tuple[str, str]:
    """Split a full integration token into (public_id, secret).

    Raises:
        ValueError: If the prefix is wrong or the token is not exactly two dot-separated parts.
    """
    if not token.startswith(INTEGRATION_TOKEN_PREFIX):
        raise ValueError("Invalid integration token format")
    parts = token.split(".")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Invalid integration token format")
    return parts[0], parts[1]


def hash_integration_token(token: str) -> str:
    """Hash the full integration token with bcrypt.

    The token is longer than bcrypt's 72-byte input limit, so its SHA256 digest
    is hashed instead. The digest covers every byte of the public id and secret.
    """
    return hash_password(hash_token(token))


def verify_integration_token(token: str, hashed: str) -> bool:
    """Verify a full integration token against its stored hash."""
    return verify_password(hash_token(token), hashed)
