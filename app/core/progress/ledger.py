"""
Progress ledger: records study sessions and quiz results and keeps the user's
stats snapshot in step with them.
"""
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from app.core.exceptions import (
    NotFoundError,
    PersistenceError,
    ValidationError,
    require_fields,
)
from app.core.progress.schedule_state import ScheduleService
from app.core.progress.streak import update_streak
from app.core.progress.weak_topics import derive_weak_topics
from app.db.repositories import QuizResultRepository, StudySessionRepository, UserRepository
from app.models.study_session import StudySession
from app.schemas.progress import (
    QUIZ_DIFFICULTIES,
    SESSION_KINDS,
    AnsweredQuestion,
    CompletedSession,
    QuizResultRecord,
    QuizSummary,
    SessionHandle,
    SessionPerformance,
)
from app.schemas.user import UserStats
from app.utils.datetime_utils import to_naive_utc, utcnow
from app.utils.stats import round_half_up

logger = logging.getLogger(__name__)


def compute_actual_duration(
    start_time: datetime,
    end_time: Optional[datetime],
    planned_minutes: int,
) -> int:
    """
    Minutes actually spent in a session.

    Without an end time the planned duration is used. An end time before the
    start time yields 0 rather than a negative duration.
    """
    if end_time is None:
        return planned_minutes
    elapsed = (to_naive_utc(end_time) - to_naive_utc(start_time)).total_seconds()  # type: ignore
    return max(0, round_half_up(elapsed / 60))


def running_average(old_average: float, old_count: int, new_value: float) -> int:
    """Fold one more value into an average over ``old_count`` values."""
    return round_half_up((old_average * old_count + new_value) / (old_count + 1))


class ProgressLedger:
    """Append-only record of study sessions and quiz attempts."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.sessions = StudySessionRepository(db)
        self.quiz_results = QuizResultRepository(db)
        self.schedules = ScheduleService(db)

    # ============= Study sessions =============

    def record_session_start(
        self,
        user_id: str,
        material_id: str,
        material_title: str,
        kind: str,
        planned_minutes: int,
        topics: Optional[Sequence[str]] = None,
        scheduled_day: Optional[int] = None,
        schedule_session_index: Optional[int] = None,
    ) -> SessionHandle:
        """
        Open a study session.

        Raises:
            ValidationError: If required fields are missing or invalid
            PersistenceError: If the session could not be saved
        """
        require_fields(
            {
                "user_id": user_id,
                "material_id": material_id,
                "material_title": material_title,
                "session_type": kind,
                "planned_duration": planned_minutes,
            },
            ["user_id", "material_id", "material_title", "session_type", "planned_duration"],
        )
        if kind not in SESSION_KINDS:
            raise ValidationError(
                f"Invalid session type '{kind}'. Expected one of: {', '.join(SESSION_KINDS)}"
            )
        if planned_minutes <= 0:
            raise ValidationError("Planned duration must be a positive number of minutes")

        session = self.sessions.create(
            user_id=user_id,
            material_id=material_id,
            material_title=material_title,
            session_type=kind,
            scheduled_day=scheduled_day,
            schedule_session_index=schedule_session_index,
            planned_duration=planned_minutes,
            start_time=utcnow(),
            topics=list(topics or []),
        )
        logger.info(f"Started {kind} session {session.id} for user {user_id}")

        return SessionHandle(
            id=session.id,
            start_time=session.start_time,
            planned_duration=session.planned_duration,
        )

    def record_session_completion(
        self,
        session_id: int,
        end_time: Optional[datetime] = None,
        notes: Optional[str] = None,
        performance: Optional[SessionPerformance] = None,
    ) -> CompletedSession:
        """
        Close a study session and apply its side effects.

        Raises:
            NotFoundError: If the session does not exist
            ValidationError: If the session was already completed
            PersistenceError: If the session could not be saved
        """
        session = self.sessions.get(session_id)
        if session is None:
            raise NotFoundError(f"Session {session_id} not found")
        if session.completed:
            raise ValidationError(f"Session {session_id} is already completed")

        completed_at = utcnow()
        session.end_time = to_naive_utc(end_time) or completed_at
        session.actual_duration = compute_actual_duration(
            session.start_time, session.end_time, session.planned_duration
        )
        session.completed = True
        if notes:
            session.notes = notes
        if performance is not None:
            session.understood = performance.understood
            session.difficulty_rating = performance.difficulty
        self.sessions.save(session)
        logger.info(f"Completed session {session.id} ({session.actual_duration} min)")

        # Streaks follow when the completion was recorded, not the reported end time
        self._apply_study_event(
            session.user_id,
            completed_at,
            study_minutes=session.actual_duration,
        )
        schedule_updated = self._sync_schedule(session)

        return CompletedSession(
            id=session.id,
            duration=session.actual_duration,
            completed=session.completed,
            schedule_updated=schedule_updated,
        )

    # ============= Quiz results =============

    def record_quiz_result(
        self,
        user_id: str,
        material_id: str,
        material_title: str,
        summary: Optional[QuizSummary],
        answers: Optional[List[AnsweredQuestion]],
        time_spent_seconds: Optional[int],
    ) -> QuizResultRecord:
        """
        Store a completed quiz attempt with its weak topics.

        Raises:
            ValidationError: If required fields are missing or invalid
            PersistenceError: If the result could not be saved
        """
        require_fields(
            {
                "user_id": user_id,
                "material_id": material_id,
                "material_title": material_title,
                "quiz_data": summary,
                "answers": answers,
                "time_spent": time_spent_seconds,
            },
            ["user_id", "material_id", "material_title", "quiz_data", "answers", "time_spent"],
        )
        if summary.difficulty not in QUIZ_DIFFICULTIES:
            raise ValidationError(f"Invalid difficulty '{summary.difficulty}'")
        if not 0 <= summary.score <= 100:
            raise ValidationError("Score must be between 0 and 100")
        if summary.correct_answers > summary.total_questions:
            raise ValidationError("Correct answers cannot exceed total questions")

        weak_topics = derive_weak_topics(answers)
        completed_at = utcnow()
        result = self.quiz_results.create(
            user_id=user_id,
            material_id=material_id,
            material_title=material_title,
            total_questions=summary.total_questions,
            correct_answers=summary.correct_answers,
            score=summary.score,
            difficulty=summary.difficulty,
            answers=[a.model_dump(mode="json") for a in answers],
            weak_topics=[w.model_dump(mode="json") for w in weak_topics],
            time_spent=time_spent_seconds,
            completed_at=completed_at,
        )
        logger.info(f"Recorded quiz result {result.id} for user {user_id}: score {summary.score}")

        self._apply_study_event(user_id, completed_at, quiz_score=summary.score)
        return QuizResultRecord.model_validate(result)

    # ============= Side effects =============

    def _apply_study_event(
        self,
        user_id: str,
        event_at: datetime,
        study_minutes: int = 0,
        quiz_score: Optional[int] = None,
    ) -> Optional[UserStats]:
        """Fold one study event into the user's stats; failures are logged, not raised."""
        try:
            user = self.users.get_or_create(user_id)
            stats = UserStats.model_validate(user)
            stats = update_streak(stats, event_at)
            if study_minutes:
                stats = stats.model_copy(
                    update={"total_study_hours": stats.total_study_hours + study_minutes / 60}
                )
            if quiz_score is not None:
                stats = stats.model_copy(
                    update={
                        "average_quiz_score": running_average(
                            stats.average_quiz_score, stats.total_quizzes_taken, quiz_score
                        ),
                        "total_quizzes_taken": stats.total_quizzes_taken + 1,
                    }
                )
            for field, value in stats.model_dump().items():
                setattr(user, field, value)
            self.users.save(user)
            return stats
        except PersistenceError as e:
            logger.warning(f"Could not update stats for user {user_id}: {e.message}")
            return None

    def _sync_schedule(self, session: StudySession) -> bool:
        """Complete the matching plan session when the study session was scheduled."""
        if not session.scheduled_day:
            return False
        try:
            return self.schedules.complete_matching_session(
                session.user_id,
                session.material_id,
                session.scheduled_day,
                session.session_type,
                session.schedule_session_index,
            )
        except PersistenceError as e:
            logger.warning(f"Session {session.id} completed but schedule update failed: {e.message}")
            return False
