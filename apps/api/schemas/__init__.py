from .categories import CategoryCreateRequest, CategoryResponse, CategoryUpdateRequest
from .reminders import (
    AcceptedResponse,
    ReminderCreateRequest,
    ReminderResponse,
    ReminderUpdateRequest,
)
from .templates import (
    DeletedResponse,
    TemplateCreateRequest,
    TemplateResponse,
    TemplateUpdateRequest,
    TemplateUseRequest,
)

__all__ = [
    "AcceptedResponse",
    "CategoryCreateRequest",
    "CategoryResponse",
    "CategoryUpdateRequest",
    "DeletedResponse",
    "ReminderCreateRequest",
    "ReminderResponse",
    "ReminderUpdateRequest",
    "TemplateCreateRequest",
    "TemplateResponse",
    "TemplateUpdateRequest",
    "TemplateUseRequest",
]
