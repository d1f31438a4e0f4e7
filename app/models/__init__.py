"""Models module - Import all models here for Alembic."""
from app.db.base import Base
from app.models.user import User
from app.models.study_session import StudySession
from app.models.quiz_result import QuizResult
from app.models.schedule import Schedule

__all__ = ["Base", "User", "StudySession", "QuizResult", "Schedule"]
