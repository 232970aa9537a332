"""SQLAlchemy implementation of Group repository."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import DateTime, Select, String, exists, func, insert, literal, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from domain.entities.group import Group, GroupMember, Identity
from infrastructure.database.models import GroupMemberModel, GroupModel

_SORT_ORDERS = {
    "newest": (GroupModel.start_date.desc(),),
    "oldest": (GroupModel.start_date.asc(),),
    "name-asc": (GroupModel.name.asc(),),
    "name-desc": (GroupModel.name.desc(),),
}

_UPDATABLE_COLUMNS = frozenset(
    {
        "name",
        "category",
        "description",
        "location",
        "max_members",
        "start_date",
        "image_url",
        "updated_at",
    }
)


class SQLAlchemyGroupRepository:
    """SQLAlchemy implementation of IGroupRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Group | None:
        """Get a group by ID."""
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def get_for_update(self, id: UUID) -> Group | None:
        """Get a group by ID, holding a row lock until commit/rollback."""
        stmt = self._select().where(GroupModel.id == id).with_for_update(of=GroupModel)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(
        self,
        search: str | None = None,
        category: str | None = None,
        sort: str | None = None,
    ) -> list[Group]:
        """Get all groups, optionally filtered by text and category."""
        stmt = self._select()

        if search:
            term = search.strip().lower()
            stmt = stmt.where(
                or_(
                    func.lower(GroupModel.name).contains(term, autoescape=True),
                    func.lower(GroupModel.description).contains(term, autoescape=True),
                    func.lower(GroupModel.location).contains(term, autoescape=True),
                )
            )
        if category:
            stmt = stmt.where(GroupModel.category == category)

        order = _SORT_ORDERS.get(sort or "", (GroupModel.created_at.asc(),))
        stmt = stmt.order_by(*order, GroupModel.id)

        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_recent(self, limit: int) -> list[Group]:
        """Get the newest groups (ties broken by ID)."""
        stmt = (
            self._select()
            .order_by(GroupModel.created_at.desc(), GroupModel.id)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_by_creator(self, email: str) -> list[Group]:
        """Get groups created by an email."""
        stmt = (
            self._select()
            .where(GroupModel.created_by_email == email)
            .order_by(GroupModel.created_at.desc(), GroupModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_by_member(self, email: str) -> list[Group]:
        """Get groups an email has joined."""
        joined = select(GroupMemberModel.group_id).where(GroupMemberModel.email == email)
        stmt = (
            self._select()
            .where(GroupModel.id.in_(joined))
            .order_by(GroupModel.start_date.asc(), GroupModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, group: Group) -> Group:
        """Create a new group with its initial members."""
        model = self._to_model(group)
        self._session.add(model)
        await self._session.flush()
        created = await self.get(model.id)
        if not created:
            raise ValueError(f"Group {group.id} not found after insert")
        return created

    async def update(self, id: UUID, changes: dict[str, Any]) -> Group:
        """Apply a partial update to a group."""
        unknown = set(changes) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update group fields: {sorted(unknown)}")

        model = await self._get_model(id)
        if not model:
            raise ValueError(f"Group {id} not found")

        for key, value in changes.items():
            setattr(model, key, value)

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a group (cascade deletes members)."""
        model = await self._get_model(id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def add_member_if_joinable(self, member: GroupMember, now: datetime) -> bool:
        """Append a member with a single guarded INSERT ... SELECT.

        The row is only written if, at execution time, the group has not
        started, has fewer members than ``max_members`` and does not already
        contain the email.
        """
        member_count = (
            select(func.count(GroupMemberModel.id))
            .where(GroupMemberModel.group_id == member.group_id)
            .scalar_subquery()
        )
        already_member = exists().where(
            GroupMemberModel.group_id == member.group_id,
            GroupMemberModel.email == member.email,
        )
        guarded = select(
            GroupModel.id,
            literal(member.name, String),
            literal(member.email, String),
            literal(member.joined_at, DateTime),
        ).where(
            GroupModel.id == member.group_id,
            GroupModel.start_date > now,
            GroupModel.max_members > member_count,
            ~already_member,
        )
        stmt = insert(GroupMemberModel.__table__).from_select(
            ["group_id", "name", "email", "joined_at"], guarded
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    def _select(self) -> Select[tuple[GroupModel]]:
        """Base query loading members and refreshing already-loaded rows."""
        return (
            select(GroupModel)
            .options(selectinload(GroupModel.members))
            .execution_options(populate_existing=True)
        )

    async def _get_model(self, id: UUID) -> GroupModel | None:
        result = await self._session.execute(self._select().where(GroupModel.id == id))
        return result.scalar_one_or_none()

    def _to_entity(self, model: GroupModel) -> Group:
        """Convert ORM model to domain entity."""
        return Group(
            id=model.id,
            name=model.name,
            category=model.category,
            description=model.description,
            location=model.location,
            max_members=model.max_members,
            start_date=model.start_date,
            image_url=model.image_url,
            created_by=Identity(name=model.created_by_name, email=model.created_by_email),
            members=[self._member_to_entity(m) for m in model.members],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Group) -> GroupModel:
        """Convert domain entity to ORM model."""
        return GroupModel(
            id=entity.id,
            name=entity.name,
            category=entity.category,
            description=entity.description,
            location=entity.location,
            max_members=entity.max_members,
            start_date=entity.start_date,
            image_url=entity.image_url,
            created_by_name=entity.created_by.name,
            created_by_email=entity.created_by.email,
            members=[self._member_to_model(m) for m in entity.members],
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _member_to_entity(self, model: GroupMemberModel) -> GroupMember:
        """Convert member ORM model to domain entity."""
        return GroupMember(
            group_id=model.group_id,
            name=model.name,
            email=model.email,
            joined_at=model.joined_at,
        )

    def _member_to_model(self, entity: GroupMember) -> GroupMemberModel:
        """Convert member domain entity to ORM model."""
        return GroupMemberModel(
            group_id=entity.group_id,
            name=entity.name,
            email=entity.email,
            joined_at=entity.joined_at,
        )
