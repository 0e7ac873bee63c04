from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .reminders import RecurrenceTypeName


class TemplateCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    notes: str = ""
    main_category: str = Field(default="PERSONAL", min_length=1)
    sub_category: Optional[str] = None
    recurrence_type: RecurrenceTypeName = "ONE_TIME"
    recurrence_interval: int = Field(default=1, ge=1)
    is_voice_enabled: bool = True


class TemplateUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    title: Optional[str] = Field(default=None, min_length=1)
    notes: Optional[str] = None
    main_category: Optional[str] = Field(default=None, min_length=1)
    sub_category: Optional[str] = None
    recurrence_type: Optional[RecurrenceTypeName] = None
    recurrence_interval: Optional[int] = Field(default=None, ge=1)
    is_voice_enabled: Optional[bool] = None


class TemplateUseRequest(BaseModel):
    date_time: int = Field(..., ge=0, description="Due time in epoch milliseconds")


class TemplateResponse(BaseModel):
    id: int
    name: str
    title: str
    notes: str
    main_category: str
    sub_category: Optional[str]
    recurrence_type: str
    recurrence_interval: int
    is_voice_enabled: bool
    usage_count: int
    last_used_at: Optional[int]
    created_at: int


class DeletedResponse(BaseModel):
    deleted: int
