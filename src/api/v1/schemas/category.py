"""Pydantic schemas for Category API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    """Schema for registering a category."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=50)


class CategoryResponse(BaseModel):
    """Schema for Category response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime


class CategoryDetailResponse(BaseModel):
    """Schema for single Category response."""

    data: CategoryResponse


class CategoryNameListResponse(BaseModel):
    """Schema for the list of category names."""

    data: list[str]
    meta: dict[str, Any] = Field(default_factory=dict)
