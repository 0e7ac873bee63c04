from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    is_main_category: bool = True
    parent_category_id: Optional[int] = None
    color_hex: str = Field(default="#6200EE", pattern=r"^#[0-9A-Fa-f]{6}$")
    icon_name: str = "custom"


class CategoryUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    color_hex: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    icon_name: Optional[str] = None


class CategoryResponse(BaseModel):
    id: int
    name: str
    is_main_category: bool
    parent_category_id: Optional[int]
    is_preset: bool
    color_hex: str
    icon_name: str
    active_reminders: int = 0
