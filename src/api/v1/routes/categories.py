"""Category API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_category_service
from api.v1.schemas.category import (
    CategoryCreate,
    CategoryDetailResponse,
    CategoryNameListResponse,
    CategoryResponse,
)
from api.v1.schemas.common import error_responses
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get(
    "",
    response_model=CategoryNameListResponse,
    summary="List categories",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_categories(
    request: Request,
    service: CategoryService = Depends(get_category_service),
) -> CategoryNameListResponse:
    """Get all category names. Seeds the default list on first use."""
    names = await service.list_names()
    return CategoryNameListResponse(data=names, meta={"total": len(names)})


@router.post(
    "",
    response_model=CategoryDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a category",
    responses=error_responses(400, 401),
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_category(
    request: Request,
    body: CategoryCreate,
    user: CurrentUser,
    service: CategoryService = Depends(get_category_service),
) -> CategoryDetailResponse:
    """Register a new category name."""
    category = await service.add(body.name)
    return CategoryDetailResponse(data=CategoryResponse.model_validate(category))
