"""
Pydantic schemas for the progress ledger: study sessions and quiz results.
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

SessionKind = Literal["reading", "practice", "quiz", "review"]
SESSION_KINDS = ("reading", "practice", "quiz", "review")
QUIZ_DIFFICULTIES = ("easy", "medium", "hard")
DEFAULT_TOPIC = "General"


# ============= Study sessions =============

class SessionPerformance(BaseModel):
    """Self-rating recorded when a session completes."""

    understood: Optional[int] = Field(default=None, ge=0, le=5)
    difficulty: Optional[int] = Field(default=None, ge=0, le=5)


class SessionStartRequest(BaseModel):
    """Schema for starting a study session."""

    user_id: str
    material_id: str
    material_title: str
    session_type: SessionKind
    planned_duration: int = Field(..., gt=0, description="Planned duration in minutes")
    scheduled_day: Optional[int] = Field(default=None, ge=1)
    schedule_session_index: Optional[int] = Field(
        default=None,
        ge=0,
        description="Position of the plan session within its day, if known",
    )
    topics: List[str] = Field(default_factory=list)


class SessionHandle(BaseModel):
    """Schema returned after a session starts."""

    id: int
    start_time: datetime
    planned_duration: int


class SessionCompleteRequest(BaseModel):
    """Schema for completing a study session."""

    session_id: int
    end_time: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    performance: Optional[SessionPerformance] = None


class CompletedSession(BaseModel):
    """Schema returned after a session completes."""

    id: int
    duration: int
    completed: bool
    schedule_updated: bool = False


class StudySessionRecord(BaseModel):
    """Full study session as stored."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    material_id: str
    material_title: str
    session_type: str
    scheduled_day: Optional[int] = None
    schedule_session_index: Optional[int] = None
    planned_duration: int
    actual_duration: Optional[int] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    completed: bool = False
    topics: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    understood: Optional[int] = None
    difficulty_rating: Optional[int] = None
    created_at: datetime

    @property
    def minutes(self) -> int:
        """Actual duration, falling back to planned when none was recorded."""
        if self.actual_duration is not None:
            return self.actual_duration
        return self.planned_duration or 0


# ============= Quiz results =============

class QuizSummary(BaseModel):
    """Headline numbers of a quiz attempt."""

    model_config = ConfigDict(from_attributes=True)

    total_questions: int = Field(..., ge=0)
    correct_answers: int = Field(..., ge=0)
    score: int = Field(..., ge=0, le=100)
    difficulty: Literal["easy", "medium", "hard"]


class AnsweredQuestion(BaseModel):
    """One answer within a quiz attempt."""

    question_number: int
    question: str = ""
    selected_answer: Optional[str] = None
    correct_answer: Optional[str] = None
    is_correct: bool
    topic: Optional[str] = None
    time_taken: Optional[int] = Field(default=None, ge=0, description="Seconds")


class WeakTopicStat(BaseModel):
    """Per-topic accuracy within one quiz or across several."""

    topic: str
    questions_asked: int
    questions_correct: int
    accuracy: int


class QuizSubmitRequest(BaseModel):
    """Schema for submitting a quiz result."""

    user_id: str
    material_id: str
    material_title: str
    quiz_data: QuizSummary
    answers: List[AnsweredQuestion]
    time_spent: int = Field(..., ge=0, description="Seconds")


class QuizResultRecord(BaseModel):
    """Full quiz result as stored."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    material_id: str
    material_title: str
    total_questions: int
    correct_answers: int
    score: int
    difficulty: str
    answers: List[AnsweredQuestion] = Field(default_factory=list)
    weak_topics: List[WeakTopicStat] = Field(default_factory=list)
    time_spent: int
    completed_at: datetime


class QuizSubmitResponse(BaseModel):
    """Schema returned after a quiz is submitted."""

    id: int
    score: int
    weak_topics: List[WeakTopicStat]
