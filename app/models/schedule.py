"""
Schedule model - a multi-day study plan for one (user, material) pair.
"""
from sqlalchemy import Boolean, Column, DateTime, Float, Index, Integer, JSON, String

from app.db.base import Base
from app.utils.datetime_utils import utcnow


class Schedule(Base):
    """Schedule model. Day/session structure and progress are stored as JSON documents."""

    __tablename__ = "schedules"
    __table_args__ = (
        Index("ix_schedules_user_material_active", "user_id", "material_id", "active"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    material_id = Column(String, nullable=False)
    material_title = Column(String, nullable=False)

    total_estimated_hours = Column(Float, default=0)
    recommended_days_needed = Column(Integer, default=0)

    days = Column(JSON, nullable=False, default=list)
    study_tips = Column(JSON, default=list)
    milestones = Column(JSON, default=list)
    settings = Column(JSON, default=dict)
    progress = Column(JSON, nullable=False, default=dict)

    active = Column(Boolean, default=True)
    status = Column(String, default="active")  # active, completed, inactive

    started_at = Column(DateTime, default=utcnow)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
