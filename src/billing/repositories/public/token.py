"""Repository for RefreshToken entity."""

from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.billing.models.base import utc_now
from src.billing.models.public import RefreshToken
from src.billing.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Repository for RefreshToken entity."""

    model = RefreshToken

    async def get_by_hash(self, token_hash: str) -> RefreshToken | None:
        """Get refresh token by its hash, expired or not."""
        result = await self.session.execute(
            select(RefreshToken).where(RefreshToken.token_hash == token_hash)
        )
        return result.scalar_one_or_none()

    async def delete_by_hash(self, token_hash: str) -> int:
        """Delete a token by hash. Returns the number of rows deleted (0 or 1)."""
        stmt = delete(RefreshToken).where(
            RefreshToken.token_hash == token_hash  # type: ignore[arg-type]
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every refresh token of a user."""
        stmt = delete(RefreshToken).where(
            RefreshToken.user_id == user_id  # type: ignore[arg-type]
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def delete_expired_for_user(self, user_id: UUID) -> int:
        """Delete the user's tokens whose expiry has passed."""
        stmt = delete(RefreshToken).where(
            RefreshToken.user_id == user_id,  # type: ignore[arg-type]
            RefreshToken.expires_at <= utc_now(),  # type: ignore[arg-type]
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def delete_all_expired(self) -> int:
        """Delete every expired token, across all users."""
        stmt = delete(RefreshToken).where(
            RefreshToken.expires_at <= utc_now()  # type: ignore[arg-type]
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]
