"""
Pydantic schemas for User preferences and stats.
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

LearningStyle = Literal["visual", "reading", "practice", "balanced"]
Difficulty = Literal["easy", "medium", "hard"]


class UserPreferences(BaseModel):
    """Learning preferences."""

    model_config = ConfigDict(from_attributes=True)

    learning_style: LearningStyle = "balanced"
    default_study_hours: float = Field(default=2.0, ge=0.5, le=12)
    default_difficulty: Difficulty = "medium"


class PreferencesUpdate(BaseModel):
    """Schema for preference update."""

    learning_style: Optional[LearningStyle] = None
    default_study_hours: Optional[float] = Field(default=None, ge=0.5, le=12)
    default_difficulty: Optional[Difficulty] = None


class UserStats(BaseModel):
    """Aggregate stats snapshot kept on the user record."""

    model_config = ConfigDict(from_attributes=True)

    total_study_hours: float = 0.0
    total_quizzes_taken: int = 0
    average_quiz_score: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_study_date: Optional[datetime] = None
    total_materials_studied: int = 0


class User(BaseModel):
    """Schema for user response."""

    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    preferences: UserPreferences
    stats: UserStats
    created_at: Optional[datetime] = None
