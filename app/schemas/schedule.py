"""
Pydantic schemas for study schedules and their progress state.
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ScheduleStatusName = Literal["active", "completed", "inactive"]


class PlanSession(BaseModel):
    """A slot within a schedule day."""

    title: str = ""
    duration: int = Field(default=0, ge=0, description="Minutes")
    type: str = "reading"
    topics: List[str] = Field(default_factory=list)
    description: str = ""
    priority: str = "medium"


class ScheduleDay(BaseModel):
    """One day of a study plan."""

    day: int = Field(..., ge=1)
    date: Optional[str] = None
    sessions: List[PlanSession]
    daily_goal: str = ""
    total_minutes: int = 0


class Milestone(BaseModel):
    """Checkpoint within a plan."""

    day: int
    milestone: str
    assessment: str = ""


class ScheduleSettings(BaseModel):
    """Generation settings a plan was built with."""

    available_hours_per_day: Optional[float] = None
    target_date: Optional[datetime] = None
    difficulty: Optional[str] = None
    learning_style: Optional[str] = None


class CompletedSessionMark(BaseModel):
    """Record of a (day, session_index) pair being completed."""

    day: int
    session_index: int
    completed_at: datetime


class StartedSessionMark(BaseModel):
    """Record of a (day, session_index) pair being started."""

    day: int
    session_index: int
    started_at: datetime


class ScheduleProgress(BaseModel):
    """Progress embedded in a schedule."""

    current_day: int = 1
    completed_days: List[int] = Field(default_factory=list)
    completed_sessions: List[CompletedSessionMark] = Field(default_factory=list)
    started_sessions: List[StartedSessionMark] = Field(default_factory=list)
    percent_complete: int = 0


class ScheduleState(BaseModel):
    """The part of a schedule the state machine reads and writes."""

    model_config = ConfigDict(from_attributes=True)

    days: List[ScheduleDay]
    progress: ScheduleProgress = Field(default_factory=ScheduleProgress)
    active: bool = True
    status: ScheduleStatusName = "active"
    completed_at: Optional[datetime] = None


class ScheduleStatus(BaseModel):
    """Derived, read-only view of a schedule's progress."""

    current_day: int
    total_days: int
    completed_days: int
    percent_complete: int
    is_complete: bool
    next_session: Optional[PlanSession] = None
    days_remaining: int
    total_sessions: int
    completed_sessions: int


class SchedulePlan(BaseModel):
    """Plan content as produced by the content generator or supplied by a client."""

    total_estimated_hours: float = 0
    recommended_days_needed: int = 0
    schedule: List[ScheduleDay]
    study_tips: List[str] = Field(default_factory=list)
    milestones: List[Milestone] = Field(default_factory=list)


class ScheduleSaveRequest(BaseModel):
    """Schema for saving a schedule."""

    user_id: str
    material_id: str
    material_title: str
    schedule_data: SchedulePlan
    settings: ScheduleSettings = Field(default_factory=ScheduleSettings)


class ScheduleSessionRequest(BaseModel):
    """Schema for starting or completing a plan session."""

    day: int = Field(..., ge=1)
    session_index: int = Field(..., ge=0)


class ScheduleSummary(BaseModel):
    """Schedule listing entry."""

    id: int
    material_title: str
    status: ScheduleStatus
    started_at: Optional[datetime] = None
    settings: ScheduleSettings = Field(default_factory=ScheduleSettings)


class ScheduleDetail(BaseModel):
    """Full schedule detail."""

    id: int
    user_id: str
    material_id: str
    material_title: str
    total_estimated_hours: float = 0
    recommended_days_needed: int = 0
    schedule: List[ScheduleDay]
    study_tips: List[str] = Field(default_factory=list)
    milestones: List[Milestone] = Field(default_factory=list)
    settings: ScheduleSettings = Field(default_factory=ScheduleSettings)
    status: ScheduleStatus
    progress: ScheduleProgress
    state: ScheduleStatusName
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
