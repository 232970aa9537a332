"""SQLAlchemy implementation of Category repository."""

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.category import Category
from infrastructure.database.models import CategoryModel

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SQLAlchemyCategoryRepository:
    """SQLAlchemy implementation of ICategoryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_all(self) -> list[Category]:
        """Get all categories in insertion order."""
        stmt = select(CategoryModel).order_by(CategoryModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_by_name(self, name: str) -> Category | None:
        """Get a category by exact name."""
        stmt = select(CategoryModel).where(CategoryModel.name == name)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def count(self) -> int:
        """Count registered categories."""
        stmt = select(func.count()).select_from(CategoryModel)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def insert_missing(self, names: Iterable[str]) -> int:
        """Insert names with ON CONFLICT (name) DO NOTHING.

        Safe to run concurrently; returns the number of rows actually added.
        """
        now = datetime.utcnow()
        rows = [{"name": name, "created_at": now} for name in dict.fromkeys(names)]
        if not rows:
            return 0

        dialect = self._session.bind.dialect.name
        upsert_insert = _UPSERT_INSERTS.get(dialect)
        if upsert_insert is None:
            raise NotImplementedError(f"Category upsert not supported on {dialect}")

        stmt = (
            upsert_insert(CategoryModel.__table__)
            .values(rows)
            .on_conflict_do_nothing(index_elements=["name"])
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    def _to_entity(self, model: CategoryModel) -> Category:
        """Convert ORM model to domain entity."""
        return Category(
            id=model.id,
            name=model.name,
            created_at=model.created_at,
        )
