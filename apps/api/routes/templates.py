from __future__ import annotations

from typing import List, Literal, Optional

from fastapi import APIRouter, HTTPException

from apps.api.runtime import Runtime, get_runtime
from apps.api.schemas.reminders import ReminderResponse
from apps.api.schemas.templates import (
    DeletedResponse,
    TemplateCreateRequest,
    TemplateResponse,
    TemplateUpdateRequest,
    TemplateUseRequest,
)
from packages.core.storage.base import Template


router = APIRouter(prefix="/templates", tags=["templates"])


def _runtime() -> Runtime:
    return get_runtime()


def _to_response(template: Template) -> TemplateResponse:
    return TemplateResponse(**template.__dict__)


def _require(runtime: Runtime, template_id: int) -> Template:
    template = runtime.store.get_template(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


@router.get("", response_model=List[TemplateResponse])
def list_all(
    order: Literal["usage", "name"] = "usage",
    q: Optional[str] = None,
    category: Optional[str] = None,
) -> List[TemplateResponse]:
    runtime = _runtime()
    if q:
        templates = runtime.templates.search(q)
    elif category:
        templates = runtime.store.list_templates_in_category(category)
    else:
        templates = runtime.store.list_templates(order_by=order)
    return [_to_response(template) for template in templates]


@router.get("/most-used", response_model=List[TemplateResponse])
def most_used(limit: int = 5) -> List[TemplateResponse]:
    return [_to_response(t) for t in _runtime().store.list_most_used_templates(limit)]


@router.get("/recent", response_model=List[TemplateResponse])
def recently_used(limit: int = 5) -> List[TemplateResponse]:
    return [_to_response(t) for t in _runtime().store.list_recently_used_templates(limit)]


@router.delete("", response_model=DeletedResponse)
def delete_all() -> DeletedResponse:
    return DeletedResponse(deleted=_runtime().templates.delete_all_templates())


@router.get("/{template_id}", response_model=TemplateResponse)
def get(template_id: int) -> TemplateResponse:
    return _to_response(_require(_runtime(), template_id))


@router.post("", response_model=TemplateResponse, status_code=201)
def create(payload: TemplateCreateRequest) -> TemplateResponse:
    try:
        template = _runtime().templates.save_as_template(**payload.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _to_response(template)


@router.patch("/{template_id}", response_model=TemplateResponse)
def update(template_id: int, payload: TemplateUpdateRequest) -> TemplateResponse:
    runtime = _runtime()
    existing = _require(runtime, template_id)
    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or field == "sub_category"
    }
    try:
        updated = runtime.templates.update_template(Template(**{**existing.__dict__, **changes}))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if updated is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return _to_response(updated)


@router.delete("/{template_id}", response_model=DeletedResponse)
def delete(template_id: int) -> DeletedResponse:
    runtime = _runtime()
    _require(runtime, template_id)
    return DeletedResponse(deleted=1 if runtime.templates.delete_template(template_id) else 0)


@router.post("/{template_id}/reminders", response_model=ReminderResponse, status_code=201)
def create_reminder(template_id: int, payload: TemplateUseRequest) -> ReminderResponse:
    runtime = _runtime()
    _require(runtime, template_id)
    reminder = runtime.templates.create_reminder(template_id, payload.date_time)
    if reminder is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return ReminderResponse(**reminder.__dict__)
