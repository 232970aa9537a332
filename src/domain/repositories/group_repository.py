"""Group repository protocol."""

from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from domain.entities.group import Group, GroupMember


class IGroupRepository(Protocol):
    """Repository interface for Group entities."""

    async def get(self, id: UUID) -> Group | None:
        """Get a group (with members) by ID."""
        ...

    async def get_for_update(self, id: UUID) -> Group | None:
        """Get a group and lock its row until the transaction ends."""
        ...

    async def get_all(
        self,
        search: str | None = None,
        category: str | None = None,
        sort: str | None = None,
    ) -> list[Group]:
        """List groups, optionally filtered and sorted."""
        ...

    async def list_recent(self, limit: int) -> list[Group]:
        """Get the most recently created groups."""
        ...

    async def list_by_creator(self, email: str) -> list[Group]:
        """Get groups created by the given email."""
        ...

    async def list_by_member(self, email: str) -> list[Group]:
        """Get groups the given email has joined."""
        ...

    async def create(self, group: Group) -> Group:
        """Create a new group together with its initial members."""
        ...

    async def update(self, id: UUID, changes: dict[str, Any]) -> Group:
        """Apply a partial update and return the new state."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a group and its members."""
        ...

    async def add_member_if_joinable(self, member: GroupMember, now: datetime) -> bool:
        """Insert a member only if the group is active, has room and lacks the email.

        Returns False when the guard rejected the insert.
        """
        ...
