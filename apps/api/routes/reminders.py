from __future__ import annotations

from typing import List, Literal, Optional

from fastapi import APIRouter, HTTPException

from apps.api.runtime import Runtime, get_runtime
from apps.api.schemas.reminders import (
    AcceptedResponse,
    ReminderCreateRequest,
    ReminderResponse,
    ReminderUpdateRequest,
)
from packages.core.storage.base import Reminder


router = APIRouter(prefix="/reminders", tags=["reminders"])

_EDITABLE_FIELDS = ("title", "notes", "date_time", "main_category", "sub_category")


def _runtime() -> Runtime:
    return get_runtime()


def _to_response(reminder: Reminder) -> ReminderResponse:
    return ReminderResponse(**reminder.__dict__)


def _require(runtime: Runtime, reminder_id: int) -> Reminder:
    reminder = runtime.store.get_reminder(reminder_id)
    if reminder is None:
        raise HTTPException(status_code=404, detail="Reminder not found")
    return reminder


@router.post("", response_model=ReminderResponse, status_code=201)
def create(payload: ReminderCreateRequest) -> ReminderResponse:
    try:
        reminder = _runtime().engine.add(
            title=payload.title,
            date_time=payload.date_time,
            notes=payload.notes,
            recurrence_type=payload.recurrence_type,
            recurrence_interval=payload.recurrence_interval,
            recurrence_day_of_week=payload.recurrence_day_of_week,
            recurrence_day_of_month=payload.recurrence_day_of_month,
            main_category=payload.main_category,
            sub_category=payload.sub_category,
            is_voice_enabled=payload.is_voice_enabled,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _to_response(reminder)


@router.get("", response_model=List[ReminderResponse])
def list_all(
    status: Literal["active", "completed"] = "active",
    category: Optional[str] = None,
    recurrence_type: Optional[str] = None,
) -> List[ReminderResponse]:
    reminders = _runtime().store.list_reminders(
        completed=status == "completed",
        main_category=category,
        recurrence_type=recurrence_type,
    )
    return [_to_response(reminder) for reminder in reminders]


@router.delete("/completed", response_model=AcceptedResponse, status_code=202)
def clear_completed() -> AcceptedResponse:
    runtime = _runtime()
    runtime.queue.submit(runtime.engine.clear_all_completed)
    return AcceptedResponse()


@router.get("/{reminder_id}", response_model=ReminderResponse)
def get(reminder_id: int) -> ReminderResponse:
    return _to_response(_require(_runtime(), reminder_id))


@router.patch("/{reminder_id}", response_model=AcceptedResponse, status_code=202)
def update(reminder_id: int, payload: ReminderUpdateRequest) -> AcceptedResponse:
    runtime = _runtime()
    existing = _require(runtime, reminder_id)
    # Omitted fields keep their stored value; only sub_category may be cleared with null.
    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or field == "sub_category"
    }
    fields = {field: getattr(existing, field) for field in _EDITABLE_FIELDS}
    fields.update(changes)
    runtime.queue.submit(runtime.engine.update, reminder_id, **fields)
    return AcceptedResponse(id=reminder_id)


@router.post("/{reminder_id}/complete", response_model=AcceptedResponse, status_code=202)
def complete(reminder_id: int, reason: str = "DISMISSED") -> AcceptedResponse:
    runtime = _runtime()
    _require(runtime, reminder_id)
    runtime.queue.submit(runtime.engine.mark_completed, reminder_id, True, reason)
    return AcceptedResponse(id=reminder_id)


@router.post("/{reminder_id}/snooze", response_model=AcceptedResponse, status_code=202)
def snooze(reminder_id: int) -> AcceptedResponse:
    runtime = _runtime()
    _require(runtime, reminder_id)
    runtime.queue.submit(runtime.engine.snooze, reminder_id)
    return AcceptedResponse(id=reminder_id)


@router.delete("/{reminder_id}", response_model=AcceptedResponse, status_code=202)
def delete(reminder_id: int, all_future: bool = False) -> AcceptedResponse:
    runtime = _runtime()
    reminder = _require(runtime, reminder_id)
    runtime.queue.submit(runtime.engine.delete_with_recurrence_check, reminder, all_future)
    return AcceptedResponse(id=reminder_id)
