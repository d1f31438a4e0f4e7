"""
Repository-style access to the document store.

Each repository wraps one table and exposes create/find/update-many/save
operations. Write failures are rolled back and raised as PersistenceError so
callers can decide whether the failed write was critical.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import PersistenceError
from app.models.quiz_result import QuizResult
from app.models.schedule import Schedule
from app.models.study_session import StudySession
from app.models.user import User

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    """Common operations for one model."""

    model: Type[ModelT]

    def __init__(self, db: Session):
        """
        Initialize repository.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def get(self, record_id: Any) -> Optional[ModelT]:
        return self.db.get(self.model, record_id)

    def create(self, **fields: Any) -> ModelT:
        """Insert a new record and commit."""
        return self.save(self.model(**fields))

    def save(self, record: ModelT) -> ModelT:
        """
        Persist pending changes on ``record`` together with anything else
        staged on the session.

        Raises:
            PersistenceError: If the commit fails
        """
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
            return record
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save {self.model.__name__}: {e}")
            raise PersistenceError(
                f"Failed to save {self.model.__name__}", details=str(e)
            ) from e

    def update_many(self, filters: Dict[str, Any], values: Dict[str, Any]) -> int:
        """
        Stage a bulk update of every record matching ``filters``.

        The update is flushed but not committed; the next ``save`` commits it
        in the same transaction.

        Returns:
            Number of matched records
        """
        try:
            query = self.db.query(self.model).filter_by(**filters)
            count = query.update(values, synchronize_session="fetch")
            self.db.flush()
            return count
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Bulk update of {self.model.__name__} failed: {e}")
            raise PersistenceError(
                f"Failed to update {self.model.__name__} records", details=str(e)
            ) from e


class UserRepository(BaseRepository[User]):
    model = User

    def get_or_create(self, user_id: str) -> User:
        user = self.get(user_id)
        if user is None:
            logger.info(f"Creating user record for {user_id}")
            user = self.create(id=user_id)
        return user


class StudySessionRepository(BaseRepository[StudySession]):
    model = StudySession

    def find_for_user(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        material_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[StudySession]:
        """Sessions of a user, newest first, optionally since a creation time."""
        query = self.db.query(StudySession).filter(StudySession.user_id == user_id)
        if since is not None:
            query = query.filter(StudySession.created_at >= since)
        if material_id is not None:
            query = query.filter(StudySession.material_id == material_id)
        query = query.order_by(StudySession.created_at.desc(), StudySession.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return query.all()


class QuizResultRepository(BaseRepository[QuizResult]):
    model = QuizResult

    def find_for_user(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[QuizResult]:
        """Quiz results of a user, newest first, optionally since a completion time."""
        query = self.db.query(QuizResult).filter(QuizResult.user_id == user_id)
        if since is not None:
            query = query.filter(QuizResult.completed_at >= since)
        query = query.order_by(QuizResult.completed_at.desc(), QuizResult.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return query.all()


class ScheduleRepository(BaseRepository[Schedule]):
    model = Schedule

    def find_active(self, user_id: str, material_id: Optional[str] = None) -> List[Schedule]:
        """Active schedules of a user, newest first."""
        query = self.db.query(Schedule).filter(
            Schedule.user_id == user_id,
            Schedule.active.is_(True),
        )
        if material_id is not None:
            query = query.filter(Schedule.material_id == material_id)
        return query.order_by(Schedule.created_at.desc(), Schedule.id.desc()).all()
