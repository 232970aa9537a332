"""Category domain entity."""

from dataclasses import dataclass, field
from datetime import datetime

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Drawing & Painting",
    "Photography",
    "Video Gaming",
    "Fishing",
    "Running",
    "Cooking",
    "Reading",
    "Writing",
    "Hiking",
    "Board Games",
    "Gardening",
    "Music",
)


@dataclass
class Category:
    """A registered group category."""

    name: str
    id: int | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
