"""Pydantic schemas for Group API."""

from datetime import datetime, timezone
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.entities.group import Group

URL_PATTERN = r"(?i)^https?://"

GroupSort = Literal["newest", "oldest", "name-asc", "name-desc"]


def _to_naive_utc(value: datetime | None) -> datetime | None:
    """Store and compare start dates as naive UTC."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class GroupCreate(BaseModel):
    """Schema for creating a group. Owner is taken from the auth token."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=5, max_length=100)
    category: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=20, max_length=2000)
    location: str = Field(..., min_length=1, max_length=200)
    max_members: int = Field(..., ge=2, le=100)
    start_date: datetime
    image_url: str = Field(..., max_length=500, pattern=URL_PATTERN)
    join_as_member: bool = True

    @field_validator("start_date")
    @classmethod
    def _normalize_start_date(cls, value: datetime) -> datetime:
        return _to_naive_utc(value)  # type: ignore[return-value]


class GroupUpdate(BaseModel):
    """Schema for updating a group.

    Unknown keys (``id``, ``created_by``, ``members``...) are ignored.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(None, min_length=5, max_length=100)
    category: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = Field(None, min_length=20, max_length=2000)
    location: str | None = Field(None, min_length=1, max_length=200)
    max_members: int | None = Field(None, ge=2, le=100)
    start_date: datetime | None = None
    image_url: str | None = Field(None, max_length=500, pattern=URL_PATTERN)

    @field_validator("start_date")
    @classmethod
    def _normalize_start_date(cls, value: datetime | None) -> datetime | None:
        return _to_naive_utc(value)


class JoinGroupRequest(BaseModel):
    """Schema for joining a group.

    The member email always comes from the auth token. ``name`` overrides
    the token's display name; ``email``, if sent, must match the token.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, max_length=255)


class PersonResponse(BaseModel):
    """Schema for a ``{name, email}`` pair."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    email: str


class GroupMemberResponse(PersonResponse):
    """Schema for Group Member response."""

    joined_at: datetime


class GroupResponse(BaseModel):
    """Schema for Group response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    category: str
    description: str
    location: str
    max_members: int
    start_date: datetime
    image_url: str
    created_by: PersonResponse
    members: list[GroupMemberResponse]
    member_count: int
    is_active: bool
    is_full: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, group: Group, now: datetime | None = None) -> "GroupResponse":
        """Build a response, deriving the Active/Past state at read time."""
        return cls(
            id=group.id,
            name=group.name,
            category=group.category,
            description=group.description,
            location=group.location,
            max_members=group.max_members,
            start_date=group.start_date,
            image_url=group.image_url,
            created_by=PersonResponse.model_validate(group.created_by),
            members=[GroupMemberResponse.model_validate(m) for m in group.members],
            member_count=group.member_count,
            is_active=group.is_active(now),
            is_full=group.is_full,
            created_at=group.created_at,
            updated_at=group.updated_at,
        )


class GroupListResponse(BaseModel):
    """Schema for list of Groups response."""

    data: list[GroupResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class GroupDetailResponse(BaseModel):
    """Schema for single Group response."""

    data: GroupResponse
