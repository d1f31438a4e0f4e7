"""
Quiz result model - one completed quiz attempt, immutable after creation.
"""
from sqlalchemy import Column, DateTime, Integer, JSON, String

from app.db.base import Base
from app.utils.datetime_utils import utcnow


class QuizResult(Base):
    """Quiz result model."""

    __tablename__ = "quiz_results"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    material_id = Column(String, nullable=False)
    material_title = Column(String, nullable=False)

    total_questions = Column(Integer, nullable=False)
    correct_answers = Column(Integer, nullable=False)
    score = Column(Integer, nullable=False)  # 0-100
    difficulty = Column(String, nullable=False)  # easy, medium, hard

    answers = Column(JSON, default=list)
    # Derived from answers at creation time, never edited independently
    weak_topics = Column(JSON, default=list)
    time_spent = Column(Integer, nullable=False)  # seconds

    completed_at = Column(DateTime, default=utcnow, index=True)
    created_at = Column(DateTime, default=utcnow)
