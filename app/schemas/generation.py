"""
Pydantic schemas for upload and AI content generation.

The generated quiz and schedule models double as the structural contract the
content generator's output is validated against.
"""
from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from app.schemas.schedule import SchedulePlan

AnswerLabel = Literal["A", "B", "C", "D"]


class QuestionOptions(BaseModel):
    """Four labelled answer options."""

    A: str
    B: str
    C: str
    D: str


class GeneratedQuestion(BaseModel):
    """A multiple-choice question produced by the content generator."""

    question: str = Field(..., min_length=1)
    options: QuestionOptions
    correct_answer: AnswerLabel
    explanation: str = ""
    topic: Optional[str] = None


class GeneratedSchedule(SchedulePlan):
    """A schedule produced by the content generator."""

    @model_validator(mode="after")
    def require_days(self) -> "GeneratedSchedule":
        if not self.schedule:
            raise ValueError("Schedule array is empty")
        return self


class UploadResponse(BaseModel):
    """Schema for upload response."""

    success: bool = True
    file_name: str
    file_path: str
    num_pages: int
    text_length: int
    preview: str


class SummarizeRequest(BaseModel):
    """Schema for summary generation request."""

    file_path: str
    custom_prompt: Optional[str] = None


class SummarizeResponse(BaseModel):
    """Schema for summary generation response."""

    success: bool = True
    summary: str
    num_pages: int
    text_length: int


class QuizGenerateRequest(BaseModel):
    """Schema for quiz generation request."""

    file_path: str
    num_questions: int = Field(default=5, ge=1, le=50)
    difficulty: Literal["easy", "medium", "hard"] = "medium"


class QuizGenerateResponse(BaseModel):
    """Schema for quiz generation response."""

    success: bool = True
    quiz: List[GeneratedQuestion]
    num_questions: int
    difficulty: str


class ScheduleGenerateRequest(BaseModel):
    """Schema for schedule generation request."""

    file_path: str
    user_id: str = "default_user"
    material_id: Optional[str] = None
    material_title: Optional[str] = None
    available_hours_per_day: float = Field(default=2, ge=0.5, le=12)
    target_date: Optional[date] = None
    difficulty: Literal["easy", "medium", "hard"] = "medium"
    learning_style: Literal["visual", "reading", "practice", "balanced"] = "balanced"
    save_to_database: bool = True


class ScheduleGenerateMetadata(BaseModel):
    """Context about a generated schedule."""

    material_pages: int
    text_length: int
    requested_hours_per_day: float
    days_available: int
    difficulty: str
    saved_to_database: bool


class ScheduleGenerateResponse(BaseModel):
    """Schema for schedule generation response."""

    success: bool = True
    schedule: GeneratedSchedule
    schedule_id: Optional[int] = None
    metadata: ScheduleGenerateMetadata
