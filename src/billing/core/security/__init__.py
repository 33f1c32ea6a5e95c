"""Security utilities - password hashing and tokens.

Re-exports all security-related functions for convenience.
"""

from src.billing.core.security.crypto import (
    INTEGRATION_TOKEN_PREFIX,
    AccessTokenClaims,
    TokenDecodeError,
    create_access_token,
    decode_access_token,
    dummy_password_hash,
    generate_integration_token,
    generate_refresh_token,
    hash_integration_token,
    hash_password,
    hash_token,
    refresh_token_expiry,
    split_integration_token,
    verify_integration_token,
    verify_password,
)

__all__ = [
    "INTEGRATION_TOKEN_PREFIX",
    "AccessTokenClaims",
    "TokenDecodeError",
    "create_access_token",
    "decode_access_token",
    "dummy_password_hash",
    "generate_integration_token",
    "generate_refresh_token",
    "hash_integration_token",
    "hash_password",
    "hash_token",
    "refresh_token_expiry",
    "split_integration_token",
    "verify_integration_token",
    "verify_password",
]
