"""Base repository with common CRUD operations."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def count(self, query: Any) -> int:
        """Count the rows a query would return."""
        result = await self.session.execute(
            select(func.count()).select_from(query.order_by(None).subquery())
        )
        return int(result.scalar_one())

    async def paginate(
        self,
        query: Any,  # SelectOfScalar or Select - SQLModel/SQLAlchemy query
        page: int,
        limit: int,
    ) -> tuple[list[ModelType], int]:
        """Execute page/limit pagination on an already ordered query.

        Args:
            query: The base SQLAlchemy query to paginate
            page: 1-based page number
            limit: Maximum number of items per page

        Returns:
            Tuple of (items, total) where total counts all matching rows.
        """
        total = await self.count(query)
        result = await self.session.execute(query.offset((page - 1) * limit).limit(limit))
        return list(result.scalars().all()), total
