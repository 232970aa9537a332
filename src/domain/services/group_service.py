"""Group service layer with business logic."""

from datetime import datetime
from typing import Any, Callable, List, Optional
from uuid import UUID

import structlog

from core.exceptions import (
    AlreadyAGroupMemberError,
    GroupCapacityBelowMembersError,
    GroupFullError,
    GroupInactiveError,
    GroupNotFoundError,
    GroupOwnershipError,
)
from domain.entities.group import IMMUTABLE_GROUP_FIELDS, Group, GroupMember, Identity
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.category_service import CategoryService

logger = structlog.get_logger()

FEATURED_GROUP_LIMIT = 6


class GroupService:
    """Service layer for hobby group lifecycle and membership.

    All ownership, capacity and timing rules are enforced here. Ownership is
    checked against the acting identity resolved from the caller's verified
    token, never against a value supplied in the request body.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        category_service: Optional[CategoryService] = None,
        featured_limit: int = FEATURED_GROUP_LIMIT,
        clock: Callable[[], datetime] = datetime.utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._categories = category_service or CategoryService(uow_factory)
        self._featured_limit = featured_limit
        self._clock = clock

    async def get_all(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> List[Group]:
        """Get all groups, optionally filtered by text and category."""
        async with self._uow_factory() as uow:
            return await uow.groups.get_all(search=search, category=category, sort=sort)

    async def get_featured(self) -> List[Group]:
        """Get the newest groups, up to the featured limit."""
        async with self._uow_factory() as uow:
            return await uow.groups.list_recent(self._featured_limit)

    async def get_by_id(self, group_id: UUID) -> Group:
        """Get a group by ID."""
        async with self._uow_factory() as uow:
            group = await uow.groups.get(group_id)
            if not group:
                raise GroupNotFoundError(str(group_id))
            return group

    async def list_by_creator(self, email: str) -> List[Group]:
        """Get groups created by ``email``."""
        async with self._uow_factory() as uow:
            return await uow.groups.list_by_creator(email)

    async def list_joined(self, email: str) -> List[Group]:
        """Get groups ``email`` is a member of."""
        async with self._uow_factory() as uow:
            return await uow.groups.list_by_member(email)

    async def create(
        self,
        creator: Identity,
        name: str,
        category: str,
        description: str,
        location: str,
        max_members: int,
        start_date: datetime,
        image_url: str,
        join_as_member: bool = True,
    ) -> Group:
        """Create a group owned by ``creator``.

        The creator becomes the first member unless ``join_as_member`` is
        False.
        """
        async with self._uow_factory() as uow:
            await self._categories.require(uow, category)

            now = self._clock()
            group = Group(
                name=name,
                category=category,
                description=description,
                location=location,
                max_members=max_members,
                start_date=start_date,
                image_url=image_url,
                created_by=creator,
                created_at=now,
                updated_at=now,
            )
            if join_as_member:
                group.members.append(
                    GroupMember(
                        group_id=group.id,
                        name=creator.name,
                        email=creator.email,
                        joined_at=now,
                    )
                )

            created = await uow.groups.create(group)
            await uow.commit()

        logger.info("group_created", group_id=str(created.id), owner=creator.email)
        return created

    async def update(
        self,
        group_id: UUID,
        actor_email: str,
        changes: dict[str, Any],
    ) -> Group:
        """Apply a partial update. Only the group's creator may update it.

        Identity, ownership, membership and timestamp fields are dropped from
        ``changes`` before anything is written.
        """
        patch = {
            key: value
            for key, value in changes.items()
            if key not in IMMUTABLE_GROUP_FIELDS and value is not None
        }

        async with self._uow_factory() as uow:
            group = await uow.groups.get_for_update(group_id)
            if not group:
                raise GroupNotFoundError(str(group_id))
            if not group.is_owned_by(actor_email):
                raise GroupOwnershipError(str(group_id), action="update")

            if "category" in patch and patch["category"] != group.category:
                await self._categories.require(uow, patch["category"])

            if "max_members" in patch and patch["max_members"] < group.member_count:
                raise GroupCapacityBelowMembersError(
                    patch["max_members"], group.member_count
                )

            if not patch:
                return group

            patch["updated_at"] = self._clock()
            updated = await uow.groups.update(group_id, patch)
            await uow.commit()

        logger.info("group_updated", group_id=str(group_id), fields=sorted(patch))
        return updated

    async def delete(self, group_id: UUID, actor_email: str) -> bool:
        """Delete a group. Only the group's creator may delete it."""
        async with self._uow_factory() as uow:
            group = await uow.groups.get(group_id)
            if not group:
                raise GroupNotFoundError(str(group_id))
            if not group.is_owned_by(actor_email):
                raise GroupOwnershipError(str(group_id), action="delete")

            deleted = await uow.groups.delete(group_id)
            await uow.commit()

        logger.info("group_deleted", group_id=str(group_id))
        return deleted

    async def join(self, group_id: UUID, joiner: Identity) -> Group:
        """Add ``joiner`` to the group's members.

        Checks run in order: exists, still active, has room, not already a
        member. The group row is locked for the duration and the insert is
        itself guarded on the same conditions, so concurrent joins cannot
        overshoot ``max_members`` or add an email twice.
        """
        async with self._uow_factory() as uow:
            group = await uow.groups.get_for_update(group_id)
            if not group:
                raise GroupNotFoundError(str(group_id))

            now = self._clock()
            self._ensure_joinable(group, joiner.email, now)

            member = GroupMember(
                group_id=group.id,
                name=joiner.name,
                email=joiner.email,
                joined_at=now,
            )
            if not await uow.groups.add_member_if_joinable(member, now):
                # State moved under us; report the rule that now fails.
                current = await uow.groups.get(group_id)
                if not current:
                    raise GroupNotFoundError(str(group_id))
                self._ensure_joinable(current, joiner.email, now)
                raise GroupFullError(str(group_id), current.max_members)

            updated = await uow.groups.get(group_id)
            await uow.commit()

        logger.info(
            "group_joined",
            group_id=str(group_id),
            email=joiner.email,
            member_count=updated.member_count if updated else None,
        )
        return updated  # type: ignore[return-value]

    # --- Internal helpers ---

    @staticmethod
    def _ensure_joinable(group: Group, email: str, now: datetime) -> None:
        """Raise the first join rule ``group`` violates for ``email``."""
        if not group.is_active(now):
            raise GroupInactiveError(str(group.id))
        if group.is_full:
            raise GroupFullError(str(group.id), group.max_members)
        if group.has_member(email):
            raise AlreadyAGroupMemberError(email)
