"""Shared fixtures for unit tests."""

from datetime import datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.entities.category import Category
from domain.entities.group import Group, GroupMember, Identity

NOW = datetime(2026, 5, 1, 12, 0, 0)


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.groups = AsyncMock()
        self.categories = AsyncMock()
        self.committed = False
        self.rolled_back = False

        # Registry already seeded, every name known, unless a test says otherwise
        self.categories.count.return_value = 12
        self.categories.get_by_name.side_effect = lambda name: Category(name=name, id=1)

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def owner() -> Identity:
    return Identity(name="Olive Owner", email="owner@example.com")


@pytest.fixture
def joiner() -> Identity:
    return Identity(name="Jo Joiner", email="jo@example.com")


def make_group(
    owner: Identity,
    max_members: int = 5,
    start_date: datetime | None = None,
    member_emails: tuple[str, ...] = (),
) -> Group:
    """Build a group starting a week after ``NOW`` with the given members."""
    group = Group(
        name="Sunday Trail Walkers",
        category="Hiking",
        description="Relaxed day hikes around the valley.",
        location="North Ridge trailhead",
        max_members=max_members,
        start_date=start_date or NOW + timedelta(days=7),
        image_url="https://example.com/hike.jpg",
        created_by=owner,
        created_at=NOW - timedelta(days=1),
        updated_at=NOW - timedelta(days=1),
    )
    group.members = [
        GroupMember(group_id=group.id, name=email.split("@")[0], email=email, joined_at=NOW)
        for email in member_emails
    ]
    return group
