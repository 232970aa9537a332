"""Group API routes."""

from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_group_service
from api.v1.schemas.common import MessageResponse, error_responses
from api.v1.schemas.group import (
    GroupCreate,
    GroupDetailResponse,
    GroupListResponse,
    GroupResponse,
    GroupSort,
    GroupUpdate,
    JoinGroupRequest,
)
from core.exceptions import AuthorizationError
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.group import Group, Identity
from domain.services.group_service import GroupService

router = APIRouter(prefix="/groups", tags=["groups"])


@router.get(
    "",
    response_model=GroupListResponse,
    summary="List groups",
    responses=error_responses(400),
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_groups(
    request: Request,
    search: str | None = Query(None, max_length=100, description="Match name, description or location"),
    category: str | None = Query(None, max_length=50),
    sort: GroupSort | None = Query(None),
    service: GroupService = Depends(get_group_service),
) -> GroupListResponse:
    """Get all groups. Filters are optional; without them every group is returned."""
    groups = await service.get_all(search=search, category=category, sort=sort)
    return _build_list_response(groups)


@router.get(
    "/featured",
    response_model=GroupListResponse,
    summary="List featured groups",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_featured_groups(
    request: Request,
    service: GroupService = Depends(get_group_service),
) -> GroupListResponse:
    """Get the most recently created groups, newest first."""
    groups = await service.get_featured()
    return _build_list_response(groups)


@router.get(
    "/user/{email}",
    response_model=GroupListResponse,
    summary="List groups created by a user",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_groups_by_creator(
    request: Request,
    email: str,
    service: GroupService = Depends(get_group_service),
) -> GroupListResponse:
    """Get all groups whose creator has the given email."""
    groups = await service.list_by_creator(email)
    return _build_list_response(groups)


@router.get(
    "/member/{email}",
    response_model=GroupListResponse,
    summary="List groups a user has joined",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_groups_by_member(
    request: Request,
    email: str,
    service: GroupService = Depends(get_group_service),
) -> GroupListResponse:
    """Get all groups that list the given email as a member."""
    groups = await service.list_joined(email)
    return _build_list_response(groups)


@router.get(
    "/{group_id}",
    response_model=GroupDetailResponse,
    summary="Get a group",
    responses=error_responses(404),
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_group(
    request: Request,
    group_id: UUID,
    service: GroupService = Depends(get_group_service),
) -> GroupDetailResponse:
    """Get a single group with its members."""
    group = await service.get_by_id(group_id)
    return GroupDetailResponse(data=GroupResponse.from_entity(group))


@router.post(
    "",
    response_model=GroupDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a group",
    responses=error_responses(400, 401),
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_group(
    request: Request,
    body: GroupCreate,
    user: CurrentUser,
    service: GroupService = Depends(get_group_service),
) -> GroupDetailResponse:
    """Create a group owned by the authenticated user."""
    group = await service.create(
        creator=user.identity,
        name=body.name,
        category=body.category,
        description=body.description,
        location=body.location,
        max_members=body.max_members,
        start_date=body.start_date,
        image_url=body.image_url,
        join_as_member=body.join_as_member,
    )
    return GroupDetailResponse(data=GroupResponse.from_entity(group))


@router.patch(
    "/{group_id}",
    response_model=GroupDetailResponse,
    summary="Update a group",
    responses=error_responses(400, 401, 403, 404),
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_group(
    request: Request,
    group_id: UUID,
    body: GroupUpdate,
    user: CurrentUser,
    service: GroupService = Depends(get_group_service),
) -> GroupDetailResponse:
    """Update a group. Only its creator may do this."""
    group = await service.update(
        group_id=group_id,
        actor_email=user.email,
        changes=body.model_dump(exclude_unset=True),
    )
    return GroupDetailResponse(data=GroupResponse.from_entity(group))


@router.delete(
    "/{group_id}",
    response_model=MessageResponse,
    summary="Delete a group",
    responses=error_responses(401, 403, 404),
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_group(
    request: Request,
    group_id: UUID,
    user: CurrentUser,
    service: GroupService = Depends(get_group_service),
) -> MessageResponse:
    """Delete a group. Only its creator may do this."""
    await service.delete(group_id, actor_email=user.email)
    return MessageResponse(message="Group deleted successfully")


@router.post(
    "/{group_id}/join",
    response_model=GroupDetailResponse,
    summary="Join a group",
    responses=error_responses(400, 401, 403, 404),
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def join_group(
    request: Request,
    group_id: UUID,
    user: CurrentUser,
    body: JoinGroupRequest | None = Body(None),
    service: GroupService = Depends(get_group_service),
) -> GroupDetailResponse:
    """Join a group as the authenticated user."""
    joiner = user.identity
    if body is not None:
        if body.email is not None and body.email != user.email:
            raise AuthorizationError("You can only join a group as yourself")
        if body.name:
            joiner = Identity(name=body.name, email=user.email)

    group = await service.join(group_id, joiner)
    return GroupDetailResponse(data=GroupResponse.from_entity(group))


def _build_list_response(groups: list[Group]) -> GroupListResponse:
    """Convert domain entities to a list response."""
    data = [GroupResponse.from_entity(g) for g in groups]
    return GroupListResponse(data=data, meta={"total": len(data)})
