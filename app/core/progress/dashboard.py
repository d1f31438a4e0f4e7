"""
Dashboard composition: a read-only fold over the ledger and schedule state.
"""
import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.progress.schedule_state import ScheduleService, get_status
from app.core.progress.weak_topics import aggregate_weak_topics
from app.db.repositories import QuizResultRepository, StudySessionRepository
from app.models.user import User
from app.schemas.analytics import (
    DashboardAnalytics,
    DashboardCharts,
    DashboardUser,
    DashboardView,
    QuizScorePoint,
    RecentActivity,
    StudyTimePoint,
)
from app.schemas.progress import QuizResultRecord, StudySessionRecord
from app.schemas.schedule import ScheduleState
from app.schemas.user import UserPreferences, UserStats
from app.utils.datetime_utils import calendar_date, window_start
from app.utils.stats import round_half_up

logger = logging.getLogger(__name__)

RECENT_SESSIONS = 10
RECENT_QUIZZES = 5


def _hours(minutes: int) -> float:
    return round_half_up(minutes / 6) / 10


def study_time_by_day(sessions: Sequence[StudySessionRecord]) -> List[StudyTimePoint]:
    """Minutes per calendar date of session creation, in first-seen order."""
    buckets: Dict[str, int] = {}
    for session in sessions:
        key = calendar_date(session.created_at).isoformat()
        buckets[key] = buckets.get(key, 0) + session.minutes
    return [
        StudyTimePoint(date=day, minutes=minutes, hours=_hours(minutes))
        for day, minutes in buckets.items()
    ]


def compose_dashboard(
    user_id: str,
    stats: UserStats,
    preferences: UserPreferences,
    sessions: Sequence[StudySessionRecord],
    quiz_results: Sequence[QuizResultRecord],
    schedules: Sequence[ScheduleState],
    window_days: int,
    weak_topic_limit: Optional[int] = 5,
) -> DashboardView:
    """
    Combine in-window sessions, quiz results and active schedules into one view.

    Args:
        user_id: Owner of the data
        stats: User stats snapshot
        preferences: User preferences
        sessions: In-window sessions, newest first
        quiz_results: In-window quiz results, newest first
        schedules: Active schedules
        window_days: Size of the window the inputs were selected with
        weak_topic_limit: Number of weakest topics to keep

    Returns:
        Dashboard view
    """
    total_minutes = sum(s.minutes for s in sessions)
    average_score = (
        sum(q.score for q in quiz_results) / len(quiz_results) if quiz_results else 0
    )

    analytics = DashboardAnalytics(
        time_range=window_days,
        total_study_time=total_minutes,
        total_study_hours=_hours(total_minutes),
        completed_sessions=sum(1 for s in sessions if s.completed),
        total_quizzes=len(quiz_results),
        average_quiz_score=round_half_up(average_score),
        current_streak=stats.current_streak,
        longest_streak=stats.longest_streak,
    )

    # Kept in the order received (newest first)
    quiz_scores = [
        QuizScorePoint(date=q.completed_at, score=q.score, material=q.material_title)
        for q in quiz_results
    ]

    return DashboardView(
        user=DashboardUser(user_id=user_id, stats=stats, preferences=preferences),
        analytics=analytics,
        weak_topics=aggregate_weak_topics(quiz_results, limit=weak_topic_limit),
        active_schedules=[get_status(s) for s in schedules],
        charts=DashboardCharts(
            study_time_by_day=study_time_by_day(sessions),
            quiz_scores_over_time=quiz_scores,
        ),
        recent_activity=RecentActivity(
            sessions=list(sessions[:RECENT_SESSIONS]),
            quizzes=list(quiz_results[:RECENT_QUIZZES]),
        ),
    )


class DashboardComposer:
    """Loads the dashboard inputs for one user and composes them."""

    def __init__(self, db: Session):
        self.db = db
        self.sessions = StudySessionRepository(db)
        self.quiz_results = QuizResultRepository(db)
        self.schedules = ScheduleService(db)

    def compose(self, user: User, window_days: Optional[int] = None) -> DashboardView:
        window_days = window_days or settings.DEFAULT_DASHBOARD_WINDOW_DAYS
        since = window_start(window_days)

        sessions = [
            StudySessionRecord.model_validate(s)
            for s in self.sessions.find_for_user(user.id, since=since)
        ]
        quiz_results = [
            QuizResultRecord.model_validate(q)
            for q in self.quiz_results.find_for_user(user.id, since=since)
        ]
        schedules = [
            ScheduleService.state_of(s) for s in self.schedules.list_active(user.id)
        ]
        logger.info(
            f"Composing dashboard for {user.id}: {len(sessions)} sessions, "
            f"{len(quiz_results)} quizzes, {len(schedules)} active schedules"
        )

        return compose_dashboard(
            user_id=user.id,
            stats=UserStats.model_validate(user),
            preferences=UserPreferences.model_validate(user),
            sessions=sessions,
            quiz_results=quiz_results,
            schedules=schedules,
            window_days=window_days,
            weak_topic_limit=settings.WEAK_TOPIC_LIMIT,
        )
