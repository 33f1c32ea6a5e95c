"""Tests for password hashing, access tokens and opaque tokens."""

import base64
from datetime import timedelta
from uuid import uuid4

import pytest
from jose import jwt

from src.billing.core.config import get_settings
from src.billing.core.security import (
    INTEGRATION_TOKEN_PREFIX,
    TokenDecodeError,
    create_access_token,
    decode_access_token,
    generate_integration_token,
    generate_refresh_token,
    hash_integration_token,
    hash_password,
    hash_token,
    split_integration_token,
    verify_integration_token,
    verify_password,
)

pytestmark = pytest.mark.unit


class TestPasswordHashing:
    def test_hash_and_verify(self):
        hashed = hash_password("s3cret-pass")
        assert hashed.startswith("$2b$")
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("wrong-pass", hashed)

    def test_hash_uses_configured_cost(self):
        hashed = hash_password("s3cret-pass")
        # bcrypt hashes look like $2b$<cost>$...
        assert hashed.split("$")[2] == f"{get_settings().bcrypt_rounds:02d}"

    def test_hashes_are_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_malformed_hash_does_not_verify(self):
        assert not verify_password("anything", "not-a-bcrypt-hash")


class TestAccessTokens:
    def test_roundtrip_claims(self):
        user_id, tenant_id = uuid4(), uuid4()
        token = create_access_token(user_id, "a@example.com", "ADMIN", tenant_id)

        claims = decode_access_token(token)

        assert claims.user_id == user_id
        assert claims.email == "a@example.com"
        assert claims.role.value == "ADMIN"
        assert claims.tenant_id == tenant_id
        assert claims.type == "access"

    def test_super_admin_token_has_null_tenant(self):
        token = create_access_token(uuid4(), "root@example.com", "ADMIN", None)
        payload = jwt.get_unverified_claims(token)

        assert "tenant_id" in payload
        assert payload["tenant_id"] is None
        assert decode_access_token(token).tenant_id is None

    def test_default_lifetime_is_seven_days(self):
        token = create_access_token(uuid4(), "a@example.com", "USER", uuid4())
        payload = jwt.get_unverified_claims(token)

        assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())

    def test_expired_token_rejected(self):
        token = create_access_token(
            uuid4(), "a@example.com", "USER", uuid4(), expires_delta=timedelta(seconds=-1)
        )
        with pytest.raises(TokenDecodeError) as exc_info:
            decode_access_token(token)
        assert exc_info.value.reason == "expired"

    def test_wrong_signature_rejected(self):
        token = jwt.encode(
            {"sub": str(uuid4()), "type": "access"},
            "another-secret-key-that-is-long-enough!!",
            algorithm="HS256",
        )
        with pytest.raises(TokenDecodeError) as exc_info:
            decode_access_token(token)
        assert exc_info.value.reason == "malformed"

    def test_garbage_rejected(self):
        with pytest.raises(TokenDecodeError):
            decode_access_token("not.a.jwt")

    def test_missing_tenant_claim_rejected(self):
        settings = get_settings()
        token = jwt.encode(
            {
                "sub": str(uuid4()),
                "email": "a@example.com",
                "role": "USER",
                "type": "access",
                "exp": 9999999999,
            },
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(TokenDecodeError) as exc_info:
            decode_access_token(token)
        assert exc_info.value.reason == "invalid_claims"

    def test_unknown_role_rejected(self):
        token = create_access_token(uuid4(), "a@example.com", "OWNER", uuid4())
        with pytest.raises(TokenDecodeError) as exc_info:
            decode_access_token(token)
        assert exc_info.value.reason == "invalid_claims"


class TestRefreshTokens:
    def test_refresh_token_is_64_bytes_hex(self):
        token = generate_refresh_token()
        assert len(token) == 128
        bytes.fromhex(token)

    def test_refresh_tokens_are_unique(self):
        assert generate_refresh_token() != generate_refresh_token()

    def test_hash_token_is_sha256_hex(self):
        assert len(hash_token("value")) == 64
        assert hash_token("value") == hash_token("value")


class TestIntegrationTokens:
    def test_format(self):
        public_id, token = generate_integration_token()

        assert public_id.startswith(INTEGRATION_TOKEN_PREFIX)
        assert len(public_id) == len(INTEGRATION_TOKEN_PREFIX) + 32
        assert token.startswith(f"{public_id}.")

        secret = token.split(".", 1)[1]
        padded = secret + "=" * (-len(secret) % 4)
        assert len(base64.urlsafe_b64decode(padded)) == 32

    def test_split(self):
        public_id, token = generate_integration_token()
        assert split_integration_token(token) == (public_id, token.split(".")[1])

    @pytest.mark.parametrize(
        "token",
        [
            "",
            "api_abc",
            "api_abc.",
            ".secret",
            "key_abc.secret",
            "api_abc.secret.extra",
        ],
    )
    def test_split_rejects_malformed(self, token: str):
        with pytest.raises(ValueError):
            split_integration_token(token)

    def test_hash_binds_whole_token(self):
        public_id, token = generate_integration_token()
        hashed = hash_integration_token(token)

        assert verify_integration_token(token, hashed)
        # Same secret under a different public id must not verify
        other_id = f"{INTEGRATION_TOKEN_PREFIX}{uuid4().hex}"
        assert not verify_integration_token(token.replace(public_id, other_id), hashed)
        assert not verify_integration_token(f"{public_id}.tampered", hashed)
