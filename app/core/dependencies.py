"""
Dependency injection for FastAPI endpoints.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.agents.content_generator import ContentGenerator
from app.core.config import settings
from app.core.llm_config import LLMFactory
from app.core.progress import DashboardComposer, ProgressLedger, ScheduleService
from app.db.base import get_db


def get_content_generator() -> ContentGenerator:
    """Build the content generator with one model per task."""
    return ContentGenerator(
        summary_llm=LLMFactory.create_llm(
            model=settings.SUMMARY_MODEL, temperature=0.5, max_tokens=2048
        ),
        quiz_llm=LLMFactory.create_llm(
            model=settings.QUIZ_MODEL, temperature=0.3, max_tokens=4096
        ),
        schedule_llm=LLMFactory.create_llm(
            model=settings.SCHEDULE_MODEL, temperature=0.7, max_tokens=8000
        ),
    )


def get_ledger(db: Session = Depends(get_db)) -> ProgressLedger:
    return ProgressLedger(db)


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    return ScheduleService(db)


def get_dashboard_composer(db: Session = Depends(get_db)) -> DashboardComposer:
    return DashboardComposer(db)
