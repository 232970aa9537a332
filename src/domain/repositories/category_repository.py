"""Category repository protocol."""

from collections.abc import Iterable
from typing import Protocol

from domain.entities.category import Category


class ICategoryRepository(Protocol):
    """Repository interface for Category entities."""

    async def get_all(self) -> list[Category]:
        """Get all categories in insertion order."""
        ...

    async def get_by_name(self, name: str) -> Category | None:
        """Get a category by exact name."""
        ...

    async def count(self) -> int:
        """Count registered categories."""
        ...

    async def insert_missing(self, names: Iterable[str]) -> int:
        """Insert each name unless already present. Returns rows inserted."""
        ...
