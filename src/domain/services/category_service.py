"""Category registry service."""

from typing import Callable, List

import structlog

from core.exceptions import DuplicateCategoryError, UnknownCategoryError
from domain.entities.category import DEFAULT_CATEGORIES, Category
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class CategoryService:
    """Service layer for the category registry.

    The registry is seeded with ``DEFAULT_CATEGORIES`` the first time it is
    read while empty. Seeding inserts each name only if absent, so two
    concurrent first reads cannot produce duplicates.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_names(self) -> List[str]:
        """Get all category names, seeding the registry if it is empty."""
        async with self._uow_factory() as uow:
            await self.ensure_seeded(uow)
            categories = await uow.categories.get_all()
            await uow.commit()
            return [category.name for category in categories]

    async def add(self, name: str) -> Category:
        """Register a new category name."""
        name = name.strip()
        async with self._uow_factory() as uow:
            await self.ensure_seeded(uow)
            inserted = await uow.categories.insert_missing([name])
            if not inserted:
                raise DuplicateCategoryError(name)

            category = await uow.categories.get_by_name(name)
            await uow.commit()

        logger.info("category_added", name=name)
        return category  # type: ignore[return-value]

    async def ensure_seeded(self, uow: IUnitOfWork) -> None:
        """Insert the default categories when the registry is empty."""
        if await uow.categories.count() > 0:
            return

        inserted = await uow.categories.insert_missing(DEFAULT_CATEGORIES)
        if inserted:
            logger.info("categories_seeded", inserted=inserted)

    async def require(self, uow: IUnitOfWork, name: str) -> None:
        """Raise UnknownCategoryError unless ``name`` is registered."""
        await self.ensure_seeded(uow)
        if not await uow.categories.get_by_name(name):
            raise UnknownCategoryError(name)
