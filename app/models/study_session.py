"""
Study session model - one bounded study activity.
"""
from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, String, Text

from app.db.base import Base
from app.utils.datetime_utils import utcnow


class StudySession(Base):
    """Study session model - tracks a single study activity and its duration."""

    __tablename__ = "study_sessions"

    id = Column(Integer, primary_key=True, index=True)
    # No foreign key: references to users are advisory
    user_id = Column(String, nullable=False, index=True)
    material_id = Column(String, nullable=False, index=True)
    material_title = Column(String, nullable=False)

    session_type = Column(String, nullable=False)  # reading, practice, quiz, review
    scheduled_day = Column(Integer, nullable=True)
    schedule_session_index = Column(Integer, nullable=True)

    planned_duration = Column(Integer, nullable=False)  # minutes
    actual_duration = Column(Integer, nullable=True)  # minutes, set on completion

    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=True)
    completed = Column(Boolean, default=False)

    topics = Column(JSON, default=list)
    notes = Column(Text, nullable=True)
    understood = Column(Integer, nullable=True)  # self-rating 0-5
    difficulty_rating = Column(Integer, nullable=True)  # self-rating 0-5

    created_at = Column(DateTime, default=utcnow, index=True)
