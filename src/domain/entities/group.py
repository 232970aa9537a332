"""Group domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4


class GroupStatus(str, Enum):
    """Time-derived state of a persisted group."""

    ACTIVE = "active"
    PAST = "past"


@dataclass(frozen=True)
class Identity:
    """A ``{name, email}`` pair identifying a person."""

    name: str
    email: str


@dataclass
class GroupMember:
    """Domain entity for a group membership."""

    group_id: UUID
    name: str
    email: str
    joined_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Group:
    """Domain entity for a hobby group.

    ``members`` keeps insertion order. ``created_by`` is fixed at creation.
    """

    name: str
    category: str
    description: str
    location: str
    max_members: int
    start_date: datetime
    image_url: str
    created_by: Identity
    id: UUID = field(default_factory=uuid4)
    members: list[GroupMember] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def member_count(self) -> int:
        return len(self.members)

    @property
    def is_full(self) -> bool:
        return self.member_count >= self.max_members

    def status(self, now: datetime | None = None) -> GroupStatus:
        """Active until the start date is reached, Past afterwards."""
        now = now or datetime.utcnow()
        return GroupStatus.ACTIVE if now < self.start_date else GroupStatus.PAST

    def is_active(self, now: datetime | None = None) -> bool:
        return self.status(now) is GroupStatus.ACTIVE

    def is_owned_by(self, email: str) -> bool:
        return self.created_by.email == email

    def has_member(self, email: str) -> bool:
        return any(member.email == email for member in self.members)


# Fields the update operation never writes, whatever the patch contains.
IMMUTABLE_GROUP_FIELDS = frozenset(
    {"id", "created_by", "members", "created_at", "updated_at", "acting_email", "user_email"}
)
