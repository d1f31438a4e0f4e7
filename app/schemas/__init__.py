"""Schemas module - Import all schemas."""
from app.schemas.user import User, UserPreferences, UserStats, PreferencesUpdate
from app.schemas.progress import (
    SessionStartRequest,
    SessionHandle,
    SessionCompleteRequest,
    CompletedSession,
    StudySessionRecord,
    QuizSubmitRequest,
    QuizSubmitResponse,
    QuizResultRecord,
    WeakTopicStat,
)
from app.schemas.schedule import (
    SchedulePlan,
    ScheduleState,
    ScheduleStatus,
    ScheduleSummary,
    ScheduleDetail,
)
from app.schemas.analytics import DashboardView, TopicAnalysis
from app.schemas.common import ErrorResponse

__all__ = [
    "User",
    "UserPreferences",
    "UserStats",
    "PreferencesUpdate",
    "SessionStartRequest",
    "SessionHandle",
    "SessionCompleteRequest",
    "CompletedSession",
    "StudySessionRecord",
    "QuizSubmitRequest",
    "QuizSubmitResponse",
    "QuizResultRecord",
    "WeakTopicStat",
    "SchedulePlan",
    "ScheduleState",
    "ScheduleStatus",
    "ScheduleSummary",
    "ScheduleDetail",
    "DashboardView",
    "TopicAnalysis",
    "ErrorResponse",
]
