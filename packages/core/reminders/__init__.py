from .alarms import AlarmFiringHandler, AlarmPort, SchedulerAlarmPort
from .categories import CategoryCascadeService
from .config import EngineSettings, load_settings
from .dispatch import ReminderWorkQueue
from .engine import ReminderLifecycleEngine
from .events import EventPublisher, LoggingObserver, ReminderEvent, ReminderEventType, ReminderObserver
from .models import CategoryDefaults, DismissalReason, RecurrenceType
from .recurrence import next_occurrence
from .templates import ReminderTemplateService

__all__ = [
    "AlarmFiringHandler",
    "AlarmPort",
    "CategoryCascadeService",
    "CategoryDefaults",
    "DismissalReason",
    "EngineSettings",
    "EventPublisher",
    "LoggingObserver",
    "RecurrenceType",
    "ReminderEvent",
    "ReminderEventType",
    "ReminderLifecycleEngine",
    "ReminderObserver",
    "ReminderTemplateService",
    "ReminderWorkQueue",
    "SchedulerAlarmPort",
    "load_settings",
    "next_occurrence",
]
