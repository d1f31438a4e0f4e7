"""
Schedule state machine.

The transition functions are pure: they take a ScheduleState and return a new
one. ScheduleService loads and stores schedules around them.

States: ``active`` -> ``completed`` (every day done) or ``active`` ->
``inactive`` (superseded by a newer schedule for the same material). Both end
states are terminal.
"""
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, PersistenceError, ValidationError
from app.db.repositories import ScheduleRepository, UserRepository
from app.models.schedule import Schedule
from app.schemas.schedule import (
    CompletedSessionMark,
    ScheduleDay,
    ScheduleDetail,
    SchedulePlan,
    ScheduleProgress,
    ScheduleSettings,
    ScheduleState,
    ScheduleStatus,
    ScheduleSummary,
    StartedSessionMark,
)
from app.utils.datetime_utils import utcnow
from app.utils.stats import percentage

logger = logging.getLogger(__name__)

SUPERSEDED_FIELDS = {"active": False, "status": "inactive"}


# ============= Pure transitions =============

def validate_schedule_days(days: Sequence[ScheduleDay]) -> None:
    """
    Check the plan structure the state machine relies on.

    Raises:
        ValidationError: If there are no days, a day has no sessions or a day number repeats
    """
    if not days:
        raise ValidationError("Schedule must contain at least one day", missing_fields=["schedule"])
    seen = set()
    for day in days:
        if day.day in seen:
            raise ValidationError(f"Day {day.day} appears more than once")
        seen.add(day.day)
        if not day.sessions:
            raise ValidationError(f"Day {day.day} has no sessions")


def new_schedule_state(days: List[ScheduleDay]) -> ScheduleState:
    """Initial state for a freshly generated plan."""
    validate_schedule_days(days)
    return ScheduleState(days=days, progress=ScheduleProgress())


def total_sessions(state: ScheduleState) -> int:
    return sum(len(day.sessions) for day in state.days)


def find_day(state: ScheduleState, day: int) -> Optional[ScheduleDay]:
    return next((d for d in state.days if d.day == day), None)


def _require_session(state: ScheduleState, day: int, session_index: int) -> ScheduleDay:
    day_entry = find_day(state, day)
    if day_entry is None:
        raise NotFoundError(f"Day {day} not found in schedule")
    if not 0 <= session_index < len(day_entry.sessions):
        raise NotFoundError(f"Session {session_index} not found on day {day}")
    return day_entry


def _require_not_superseded(state: ScheduleState) -> None:
    if state.status == "inactive":
        raise ValidationError("Schedule has been replaced by a newer schedule and is no longer active")


def start_session(
    state: ScheduleState,
    day: int,
    session_index: int,
    now: Optional[datetime] = None,
) -> ScheduleState:
    """
    Record that a plan session was started.

    Starting an already started (day, session_index) pair is a no-op.
    """
    _require_not_superseded(state)
    _require_session(state, day, session_index)

    progress = state.progress
    if any(s.day == day and s.session_index == session_index for s in progress.started_sessions):
        return state

    started = progress.started_sessions + [
        StartedSessionMark(day=day, session_index=session_index, started_at=now or utcnow())
    ]
    return state.model_copy(
        update={"progress": progress.model_copy(update={"started_sessions": started})}
    )


def is_session_completed(state: ScheduleState, day: int, session_index: int) -> bool:
    return any(
        s.day == day and s.session_index == session_index
        for s in state.progress.completed_sessions
    )


def complete_session(
    state: ScheduleState,
    day: int,
    session_index: int,
    now: Optional[datetime] = None,
) -> ScheduleState:
    """
    Record that a plan session was completed and derive day and plan completion.

    Completion is idempotent per (day, session_index): completing a pair a
    second time returns the state unchanged.

    Args:
        state: Current schedule state
        day: Day number (1-based)
        session_index: Position of the session within the day
        now: Completion time, defaults to the current time

    Returns:
        New schedule state

    Raises:
        NotFoundError: If the day or session does not exist
        ValidationError: If the schedule was superseded
    """
    _require_not_superseded(state)
    day_entry = _require_session(state, day, session_index)

    if is_session_completed(state, day, session_index):
        logger.info(f"Session {session_index} of day {day} already completed; ignoring")
        return state

    now = now or utcnow()
    progress = state.progress
    completed_sessions = progress.completed_sessions + [
        CompletedSessionMark(day=day, session_index=session_index, completed_at=now)
    ]
    completed_days = list(progress.completed_days)
    current_day = progress.current_day

    completed_for_day = sum(1 for s in completed_sessions if s.day == day)
    if completed_for_day >= len(day_entry.sessions) and day not in completed_days:
        completed_days.append(day)
        if state.active:
            current_day = day + 1

    all_sessions = total_sessions(state)
    percent = min(percentage(len(completed_sessions), all_sessions), 100)

    updates = {
        "progress": progress.model_copy(
            update={
                "completed_sessions": completed_sessions,
                "completed_days": completed_days,
                "current_day": current_day,
                "percent_complete": percent,
            }
        )
    }
    if state.active and len(completed_days) >= len(state.days):
        updates.update({"active": False, "status": "completed", "completed_at": now})
        logger.info("All schedule days completed; schedule is now complete")

    return state.model_copy(update=updates)


def get_status(state: ScheduleState) -> ScheduleStatus:
    """Derived, read-only status of a schedule."""
    progress = state.progress
    total_days = len(state.days)
    completed_days = len(progress.completed_days)
    current = find_day(state, progress.current_day)

    return ScheduleStatus(
        current_day=progress.current_day,
        total_days=total_days,
        completed_days=completed_days,
        percent_complete=progress.percent_complete,
        is_complete=not state.active and state.completed_at is not None,
        next_session=current.sessions[0] if current and current.sessions else None,
        days_remaining=total_days - completed_days,
        total_sessions=total_sessions(state),
        completed_sessions=len(progress.completed_sessions),
    )


def match_session_index(
    days: Sequence[ScheduleDay],
    day: int,
    kind: str,
    session_index: Optional[int] = None,
) -> Optional[int]:
    """
    Locate the plan session a logged study session belongs to.

    A caller-supplied ``session_index`` wins when it is in range. Otherwise the
    first session on that day whose type equals ``kind`` is used.

    Returns:
        Session index, or None when nothing matches
    """
    day_entry = next((d for d in days if d.day == day), None)
    if day_entry is None:
        return None
    if session_index is not None and 0 <= session_index < len(day_entry.sessions):
        return session_index
    return next(
        (i for i, session in enumerate(day_entry.sessions) if session.type == kind),
        None,
    )


# ============= Persistence =============

class ScheduleService:
    """Loads schedules, runs transitions on them and writes the result back."""

    def __init__(self, db: Session):
        self.db = db
        self.schedules = ScheduleRepository(db)
        self.users = UserRepository(db)

    @staticmethod
    def state_of(schedule: Schedule) -> ScheduleState:
        return ScheduleState.model_validate(schedule)

    def _apply(self, schedule: Schedule, state: ScheduleState) -> Schedule:
        schedule.progress = state.progress.model_dump(mode="json")
        schedule.active = state.active
        schedule.status = state.status
        schedule.completed_at = state.completed_at
        return self.schedules.save(schedule)

    def get(self, schedule_id: int) -> Schedule:
        schedule = self.schedules.get(schedule_id)
        if schedule is None:
            raise NotFoundError(f"Schedule {schedule_id} not found")
        return schedule

    def list_active(self, user_id: str, material_id: Optional[str] = None) -> List[Schedule]:
        return self.schedules.find_active(user_id, material_id)

    def summaries(self, user_id: str, material_id: Optional[str] = None) -> List[ScheduleSummary]:
        """Listing entries for the active schedules of a user."""
        return [
            ScheduleSummary(
                id=s.id,
                material_title=s.material_title,
                status=get_status(self.state_of(s)),
                started_at=s.started_at,
                settings=s.settings or {},
            )
            for s in self.list_active(user_id, material_id)
        ]

    def detail(self, schedule_id: int) -> ScheduleDetail:
        schedule = self.get(schedule_id)
        state = self.state_of(schedule)
        return ScheduleDetail(
            id=schedule.id,
            user_id=schedule.user_id,
            material_id=schedule.material_id,
            material_title=schedule.material_title,
            total_estimated_hours=schedule.total_estimated_hours or 0,
            recommended_days_needed=schedule.recommended_days_needed or 0,
            schedule=state.days,
            study_tips=schedule.study_tips or [],
            milestones=schedule.milestones or [],
            settings=schedule.settings or {},
            status=get_status(state),
            progress=state.progress,
            state=state.status,
            started_at=schedule.started_at,
            completed_at=schedule.completed_at,
        )

    def create(
        self,
        user_id: str,
        material_id: str,
        material_title: str,
        plan: SchedulePlan,
        settings: Optional[ScheduleSettings] = None,
    ) -> Schedule:
        """
        Save a new active schedule, superseding any active one for the same material.

        Raises:
            ValidationError: If the plan structure is invalid
            PersistenceError: If the schedule could not be saved
        """
        state = new_schedule_state(plan.schedule)

        superseded = self.schedules.update_many(
            {"user_id": user_id, "material_id": material_id, "active": True},
            SUPERSEDED_FIELDS,
        )
        if superseded:
            logger.info(
                f"Superseded {superseded} active schedule(s) for user {user_id}, material {material_id}"
            )

        schedule = self.schedules.save(
            Schedule(
                user_id=user_id,
                material_id=material_id,
                material_title=material_title,
                total_estimated_hours=plan.total_estimated_hours,
                recommended_days_needed=plan.recommended_days_needed,
                days=[d.model_dump(mode="json") for d in state.days],
                study_tips=list(plan.study_tips),
                milestones=[m.model_dump(mode="json") for m in plan.milestones],
                settings=(settings or ScheduleSettings()).model_dump(mode="json"),
                progress=state.progress.model_dump(mode="json"),
                active=True,
                status="active",
                started_at=utcnow(),
            )
        )
        logger.info(f"Schedule {schedule.id} saved with {len(state.days)} days")

        try:
            user = self.users.get_or_create(user_id)
            user.total_materials_studied = (user.total_materials_studied or 0) + 1
            self.users.save(user)
        except PersistenceError as e:
            logger.warning(f"Schedule {schedule.id} saved but user stats update failed: {e.message}")

        return schedule

    def start_session(self, schedule_id: int, day: int, session_index: int) -> Schedule:
        schedule = self.get(schedule_id)
        state = self.state_of(schedule)
        new_state = start_session(state, day, session_index)
        if new_state is state:
            return schedule
        return self._apply(schedule, new_state)

    def complete_session(self, schedule_id: int, day: int, session_index: int) -> Schedule:
        schedule = self.get(schedule_id)
        state = self.state_of(schedule)
        new_state = complete_session(state, day, session_index)
        if new_state is state:
            return schedule
        logger.info(f"Schedule {schedule_id}: completed day {day} session {session_index}")
        return self._apply(schedule, new_state)

    def complete_matching_session(
        self,
        user_id: str,
        material_id: str,
        day: int,
        kind: str,
        session_index: Optional[int] = None,
    ) -> bool:
        """
        Complete the plan session a logged study session corresponds to.

        Returns:
            True if a matching plan session was newly completed
        """
        active = self.schedules.find_active(user_id, material_id)
        if not active:
            return False
        schedule = active[0]
        state = self.state_of(schedule)
        index = match_session_index(state.days, day, kind, session_index)
        if index is None:
            logger.info(f"No {kind} session on day {day} of schedule {schedule.id}")
            return False
        new_state = complete_session(state, day, index)
        if new_state is state:
            return False
        self._apply(schedule, new_state)
        return True
