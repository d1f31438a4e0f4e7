"""
User model holding learning preferences and the aggregate stats snapshot.
"""
from sqlalchemy import Column, DateTime, Float, Integer, String

from app.db.base import Base
from app.utils.datetime_utils import utcnow


class User(Base):
    """User model."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, default="Anonymous User")
    email = Column(String, nullable=True)

    # Preferences
    learning_style = Column(String, default="balanced")  # visual, reading, practice, balanced
    default_study_hours = Column(Float, default=2.0)
    default_difficulty = Column(String, default="medium")  # easy, medium, hard

    # Stats snapshot
    total_study_hours = Column(Float, default=0.0)
    total_quizzes_taken = Column(Integer, default=0)
    average_quiz_score = Column(Integer, default=0)
    current_streak = Column(Integer, default=0)
    longest_streak = Column(Integer, default=0)
    last_study_date = Column(DateTime, nullable=True)
    total_materials_studied = Column(Integer, default=0)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
