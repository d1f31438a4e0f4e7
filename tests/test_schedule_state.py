from datetime import datetime

import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.core.progress.schedule_state import (
    SUPERSEDED_FIELDS,
    ScheduleService,
    complete_session,
    get_status,
    match_session_index,
    new_schedule_state,
    start_session,
)
from app.models.schedule import Schedule
from app.models.user import User
from app.schemas.schedule import PlanSession, ScheduleDay, SchedulePlan

T = datetime(2026, 3, 1, 12, 0)


def day(number, *types):
    return ScheduleDay(
        day=number,
        sessions=[PlanSession(title=f"{t} {number}", duration=30, type=t) for t in types],
    )


def two_day_state():
    return new_schedule_state([day(1, "reading", "practice"), day(2, "quiz")])


def test_two_day_scenario():
    state = two_day_state()
    state = complete_session(state, 1, 0, now=T)
    state = complete_session(state, 1, 1, now=T)
    assert state.progress.completed_days == [1]
    assert state.progress.current_day == 2
    assert state.progress.percent_complete == 67
    assert state.active is True

    state = complete_session(state, 2, 0, now=T)
    assert state.progress.completed_days == [1, 2]
    assert state.progress.percent_complete == 100
    assert state.active is False
    assert state.status == "completed"
    assert state.completed_at == T


def test_percent_is_monotonic_and_reaches_100():
    state = new_schedule_state([day(1, "reading", "quiz", "review"), day(2, "practice", "quiz"), day(3, "review")])
    pairs = [(2, 1), (1, 0), (3, 0), (1, 2), (2, 0), (1, 1)]
    seen = []
    for d, i in pairs:
        state = complete_session(state, d, i, now=T)
        seen.append(state.progress.percent_complete)
    assert seen == sorted(seen)
    assert seen[-1] == 100


def test_terminal_state_stops_day_advancement():
    state = new_schedule_state([day(1, "reading")])
    state = complete_session(state, 1, 0, now=T)
    status = get_status(state)
    assert status.is_complete is True
    assert state.active is False
    assert state.completed_at is not None
    assert state.progress.current_day == 2


def test_duplicate_completion_is_ignored():
    state = two_day_state()
    once = complete_session(state, 1, 0, now=T)
    twice = complete_session(once, 1, 0, now=T)
    assert twice is once
    assert len(twice.progress.completed_sessions) == 1
    assert twice.progress.percent_complete == 33


def test_duplicate_completion_does_not_complete_the_day():
    # Appending a second mark for the same pair would satisfy the day's count
    state = two_day_state()
    state = complete_session(state, 1, 0, now=T)
    state = complete_session(state, 1, 0, now=T)
    assert state.progress.completed_days == []
    assert state.progress.current_day == 1


def test_complete_unknown_session():
    state = two_day_state()
    with pytest.raises(NotFoundError):
        complete_session(state, 5, 0)
    with pytest.raises(NotFoundError):
        complete_session(state, 2, 3)


def test_start_session_is_idempotent():
    state = two_day_state()
    started = start_session(state, 1, 1, now=T)
    assert len(started.progress.started_sessions) == 1
    assert start_session(started, 1, 1) is started
    # Starting leaves completion untouched
    assert started.progress.percent_complete == 0


def test_superseded_state_rejects_transitions():
    state = two_day_state().model_copy(update=SUPERSEDED_FIELDS)
    with pytest.raises(ValidationError):
        complete_session(state, 1, 0)
    with pytest.raises(ValidationError):
        start_session(state, 1, 0)


def test_status_of_fresh_schedule():
    status = get_status(two_day_state())
    assert status.current_day == 1
    assert status.total_days == 2
    assert status.total_sessions == 3
    assert status.days_remaining == 2
    assert status.next_session.type == "reading"
    assert status.is_complete is False


def test_invalid_day_lists():
    with pytest.raises(ValidationError):
        new_schedule_state([])
    with pytest.raises(ValidationError):
        new_schedule_state([day(1, "reading"), day(1, "quiz")])
    with pytest.raises(ValidationError):
        new_schedule_state([day(1, "reading"), day(2)])


def test_save_rejects_day_without_sessions(db):
    with pytest.raises(ValidationError):
        ScheduleService(db).create("u1", "m1", "Biology", plan(day(1, "reading"), day(2)))
    assert ScheduleService(db).list_active("u1") == []


def test_match_session_index():
    days = [day(1, "reading", "practice", "practice")]
    assert match_session_index(days, 1, "practice") == 1
    assert match_session_index(days, 1, "practice", session_index=2) == 2
    assert match_session_index(days, 1, "practice", session_index=9) == 1
    assert match_session_index(days, 1, "quiz") is None
    assert match_session_index(days, 4, "reading") is None


# ============= Persistence =============

def plan(*days):
    return SchedulePlan(schedule=list(days), total_estimated_hours=2, recommended_days_needed=len(days))


def test_create_supersedes_previous_schedule(db):
    service = ScheduleService(db)
    first = service.create("u1", "m1", "Biology", plan(day(1, "reading")))
    other = service.create("u1", "m2", "Chemistry", plan(day(1, "reading")))
    second = service.create("u1", "m1", "Biology v2", plan(day(1, "quiz")))

    db.refresh(first)
    assert first.active is False
    assert first.status == "inactive"
    assert first.completed_at is None
    assert second.active is True
    assert {s.id for s in service.list_active("u1")} == {second.id, other.id}

    with pytest.raises(ValidationError):
        service.complete_session(first.id, 1, 0)


def test_create_counts_materials_studied(db):
    ScheduleService(db).create("u1", "m1", "Biology", plan(day(1, "reading")))
    assert db.get(User, "u1").total_materials_studied == 1


def test_service_completion_persists(db):
    service = ScheduleService(db)
    schedule = service.create("u1", "m1", "Biology", plan(day(1, "reading"), day(2, "quiz")))
    service.complete_session(schedule.id, 1, 0)

    reloaded = db.get(Schedule, schedule.id)
    assert reloaded.progress["completed_days"] == [1]
    assert reloaded.progress["current_day"] == 2
    detail = service.detail(schedule.id)
    assert detail.status.percent_complete == 50
    assert detail.state == "active"


def test_service_get_unknown(db):
    with pytest.raises(NotFoundError):
        ScheduleService(db).get(404)


def test_complete_matching_session(db):
    service = ScheduleService(db)
    schedule = service.create("u1", "m1", "Biology", plan(day(1, "reading", "practice")))
    assert service.complete_matching_session("u1", "m1", 1, "practice") is True
    assert service.complete_matching_session("u1", "m1", 1, "quiz") is False
    assert service.complete_matching_session("u1", "other", 1, "reading") is False

    state = service.state_of(service.get(schedule.id))
    assert [(m.day, m.session_index) for m in state.progress.completed_sessions] == [(1, 1)]
