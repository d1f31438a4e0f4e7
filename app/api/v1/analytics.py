"""
API endpoints for the analytics dashboard and topic analysis.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.dependencies import get_dashboard_composer, get_db, get_schedule_service
from app.core.progress import DashboardComposer, ScheduleService
from app.core.progress.weak_topics import analyze_topics
from app.db.repositories import QuizResultRepository, StudySessionRepository, UserRepository
from app.schemas.analytics import DashboardView, TopicAnalysis
from app.schemas.progress import QuizResultRecord, StudySessionRecord
from app.schemas.schedule import ScheduleDetail

logger = logging.getLogger(__name__)

router = APIRouter()


class DashboardResponse(BaseModel):
    success: bool = True
    dashboard: DashboardView


class WeakTopicsResponse(BaseModel):
    success: bool = True
    topics: List[TopicAnalysis]


class ScheduleProgressResponse(BaseModel):
    success: bool = True
    schedule: ScheduleDetail
    sessions: List[StudySessionRecord]


@router.get("/dashboard/{user_id}", response_model=DashboardResponse)
def get_dashboard(
    user_id: str,
    time_range: int = Query(default=settings.DEFAULT_DASHBOARD_WINDOW_DAYS, ge=1, le=365),
    db: Session = Depends(get_db),
    composer: DashboardComposer = Depends(get_dashboard_composer),
):
    """Dashboard for the last ``time_range`` days. Unknown users get an empty record."""
    user = UserRepository(db).get_or_create(user_id)
    return DashboardResponse(dashboard=composer.compose(user, window_days=time_range))


@router.get("/weak-topics/{user_id}", response_model=WeakTopicsResponse)
def get_weak_topics(user_id: str, db: Session = Depends(get_db)):
    """Per-topic accuracy over the user's most recent quizzes, weakest first."""
    results = QuizResultRepository(db).find_for_user(
        user_id, limit=settings.WEAK_TOPIC_QUIZ_HISTORY
    )
    topics = analyze_topics(
        [QuizResultRecord.model_validate(r) for r in results],
        trend_length=settings.TOPIC_TREND_LENGTH,
        review_threshold=settings.WEAK_TOPIC_REVIEW_THRESHOLD,
    )
    return WeakTopicsResponse(topics=topics)


@router.get("/schedule-progress/{schedule_id}", response_model=ScheduleProgressResponse)
def get_schedule_progress(
    schedule_id: int,
    db: Session = Depends(get_db),
    schedules: ScheduleService = Depends(get_schedule_service),
):
    """Schedule progress together with the study sessions logged against its material."""
    detail = schedules.detail(schedule_id)
    sessions = StudySessionRepository(db).find_for_user(
        detail.user_id, material_id=detail.material_id
    )
    return ScheduleProgressResponse(
        schedule=detail,
        sessions=[StudySessionRecord.model_validate(s) for s in sessions],
    )
