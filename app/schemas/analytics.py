"""
Pydantic schemas for the analytics dashboard and topic analysis.
"""
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from app.schemas.progress import QuizResultRecord, StudySessionRecord, WeakTopicStat
from app.schemas.schedule import ScheduleStatus
from app.schemas.user import UserPreferences, UserStats


class TopicTrendPoint(BaseModel):
    """One answer in a topic's recent history."""

    date: datetime
    correct: bool


class TopicAnalysis(BaseModel):
    """Cross-quiz statistics for one topic."""

    topic: str
    accuracy: int
    total_questions: int
    correct_answers: int
    average_time_taken: int
    needs_review: bool
    last_seen: datetime
    trend: List[TopicTrendPoint] = Field(default_factory=list)


class DashboardUser(BaseModel):
    """User snapshot shown on the dashboard."""

    user_id: str
    stats: UserStats
    preferences: UserPreferences


class DashboardAnalytics(BaseModel):
    """Headline numbers for the selected window."""

    time_range: int
    total_study_time: int  # minutes
    total_study_hours: float
    completed_sessions: int
    total_quizzes: int
    average_quiz_score: int
    current_streak: int
    longest_streak: int


class StudyTimePoint(BaseModel):
    """Minutes studied on one calendar date."""

    date: str
    minutes: int
    hours: float


class QuizScorePoint(BaseModel):
    """One quiz score for charting."""

    date: datetime
    score: int
    material: str


class DashboardCharts(BaseModel):
    """Chart series."""

    study_time_by_day: List[StudyTimePoint] = Field(default_factory=list)
    quiz_scores_over_time: List[QuizScorePoint] = Field(default_factory=list)


class RecentActivity(BaseModel):
    """Latest sessions and quizzes."""

    sessions: List[StudySessionRecord] = Field(default_factory=list)
    quizzes: List[QuizResultRecord] = Field(default_factory=list)


class DashboardView(BaseModel):
    """Read-only summary for one user and time window."""

    user: DashboardUser
    analytics: DashboardAnalytics
    weak_topics: List[WeakTopicStat] = Field(default_factory=list)
    active_schedules: List[ScheduleStatus] = Field(default_factory=list)
    charts: DashboardCharts
    recent_activity: RecentActivity
