from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

RecurrenceTypeName = Literal["ONE_TIME", "HOURLY", "DAILY", "WEEKLY", "MONTHLY", "ANNUAL"]


class ReminderCreateRequest(BaseModel):
    title: str = Field(..., min_length=1)
    notes: str = ""
    date_time: int = Field(..., ge=0, description="Due time in epoch milliseconds")
    recurrence_type: RecurrenceTypeName = "ONE_TIME"
    recurrence_interval: int = Field(default=1, ge=1)
    recurrence_day_of_week: Optional[int] = Field(default=None, ge=1, le=7)
    recurrence_day_of_month: Optional[int] = Field(default=None, ge=1, le=31)
    main_category: Optional[str] = None
    sub_category: Optional[str] = None
    is_voice_enabled: bool = True


class ReminderUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    notes: Optional[str] = None
    date_time: Optional[int] = Field(default=None, ge=0)
    main_category: Optional[str] = Field(default=None, min_length=1)
    sub_category: Optional[str] = None


class ReminderResponse(BaseModel):
    id: int
    title: str
    notes: str
    date_time: int
    is_completed: bool
    completed_at: Optional[int]
    dismissal_reason: Optional[str]
    snooze_count: int
    is_voice_enabled: bool
    recurrence_type: str
    recurrence_interval: int
    recurrence_day_of_week: Optional[int]
    recurrence_day_of_month: Optional[int]
    recurring_group_id: Optional[str]
    main_category: str
    sub_category: Optional[str]
    created_at: int
    updated_at: int


class AcceptedResponse(BaseModel):
    status: str = "accepted"
    id: Optional[int] = None
