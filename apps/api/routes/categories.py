from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException

from apps.api.runtime import Runtime, get_runtime
from apps.api.schemas.categories import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdateRequest,
)
from apps.api.schemas.reminders import AcceptedResponse
from packages.core.storage.base import Category


router = APIRouter(prefix="/categories", tags=["categories"])


def _runtime() -> Runtime:
    return get_runtime()


def _to_response(runtime: Runtime, category: Category) -> CategoryResponse:
    count = runtime.categories.reminder_count(category.name) if category.is_main_category else 0
    return CategoryResponse(**category.__dict__, active_reminders=count)


def _require(runtime: Runtime, category_id: int) -> Category:
    category = runtime.store.get_category(category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.get("", response_model=List[CategoryResponse])
def list_all(main_only: bool = False) -> List[CategoryResponse]:
    runtime = _runtime()
    if main_only:
        categories = runtime.store.list_main_categories()
    else:
        categories = runtime.store.list_categories()
    return [_to_response(runtime, category) for category in categories]


@router.get("/{category_id}/subcategories", response_model=List[CategoryResponse])
def subcategories(category_id: int) -> List[CategoryResponse]:
    runtime = _runtime()
    _require(runtime, category_id)
    return [
        _to_response(runtime, category)
        for category in runtime.store.list_subcategories(category_id)
    ]


@router.post("", response_model=CategoryResponse, status_code=201)
def create(payload: CategoryCreateRequest) -> CategoryResponse:
    runtime = _runtime()
    try:
        category = runtime.categories.add_category(
            name=payload.name,
            is_main_category=payload.is_main_category,
            parent_category_id=payload.parent_category_id,
            color_hex=payload.color_hex,
            icon_name=payload.icon_name,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _to_response(runtime, category)


@router.patch("/{category_id}", response_model=CategoryResponse)
def update(category_id: int, payload: CategoryUpdateRequest) -> CategoryResponse:
    runtime = _runtime()
    existing = _require(runtime, category_id)
    if existing.is_preset:
        raise HTTPException(status_code=409, detail="Preset categories cannot be changed")
    changes = payload.model_dump(exclude_none=True)
    updated = runtime.categories.update_category(Category(**{**existing.__dict__, **changes}))
    if updated is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return _to_response(runtime, updated)


@router.delete("/{category_id}", response_model=AcceptedResponse, status_code=202)
def delete(category_id: int, move_to_uncategorized: bool = True) -> AcceptedResponse:
    runtime = _runtime()
    category = _require(runtime, category_id)
    if category.is_preset:
        raise HTTPException(status_code=409, detail="Preset categories cannot be deleted")
    runtime.queue.submit(runtime.categories.delete_category, category, move_to_uncategorized)
    return AcceptedResponse(id=category_id)
