from datetime import datetime, timedelta

import pytest

from app.core.exceptions import NotFoundError, PersistenceError, ValidationError
from app.core.progress import ProgressLedger, ScheduleService
from app.core.progress.ledger import compute_actual_duration, running_average
from app.models.study_session import StudySession
from app.models.user import User
from app.schemas.progress import AnsweredQuestion, QuizSummary, SessionPerformance
from app.schemas.schedule import PlanSession, ScheduleDay, SchedulePlan
from app.utils.datetime_utils import utcnow

T = datetime(2026, 3, 1, 10, 0)


def start(ledger, **overrides):
    fields = dict(
        user_id="u1",
        material_id="m1",
        material_title="Biology",
        kind="reading",
        planned_minutes=30,
    )
    fields.update(overrides)
    return ledger.record_session_start(**fields)


def summary(score=80, correct=4, total=5):
    return QuizSummary(total_questions=total, correct_answers=correct, score=score, difficulty="medium")


def answers():
    return [
        AnsweredQuestion(question_number=1, topic="Cells", is_correct=True),
        AnsweredQuestion(question_number=2, topic="Cells", is_correct=False),
        AnsweredQuestion(question_number=3, topic="Energy", is_correct=True),
    ]


def test_compute_actual_duration():
    assert compute_actual_duration(T, T + timedelta(seconds=125), 30) == 2
    assert compute_actual_duration(T, T + timedelta(seconds=90), 30) == 2
    assert compute_actual_duration(T, None, 30) == 30
    assert compute_actual_duration(T, T - timedelta(minutes=5), 30) == 0


def test_running_average_rounds_half_up():
    assert running_average(0, 0, 85) == 85
    assert running_average(80, 1, 85) == 83  # 82.5
    assert running_average(70, 3, 90) == 75


def test_start_session(db):
    handle = start(ProgressLedger(db), topics=["Cells"])
    session = db.get(StudySession, handle.id)
    assert session.completed is False
    assert session.planned_duration == 30
    assert session.topics == ["Cells"]


def test_start_session_validation(db):
    ledger = ProgressLedger(db)
    with pytest.raises(ValidationError) as exc:
        start(ledger, material_id="", material_title=None)
    assert exc.value.missing_fields == ["material_id", "material_title"]
    with pytest.raises(ValidationError):
        start(ledger, kind="napping")
    with pytest.raises(ValidationError):
        start(ledger, planned_minutes=-5)


def test_complete_session_without_end_time(db):
    ledger = ProgressLedger(db)
    handle = start(ledger)
    session = db.get(StudySession, handle.id)
    session.start_time = utcnow() - timedelta(seconds=125)
    db.commit()

    completed = ledger.record_session_completion(handle.id)
    assert completed.duration == 2
    assert completed.completed is True
    assert completed.schedule_updated is False


def test_complete_session_updates_user_stats(db):
    ledger = ProgressLedger(db)
    handle = start(ledger)
    session = db.get(StudySession, handle.id)
    end = session.start_time + timedelta(minutes=45)

    ledger.record_session_completion(
        handle.id,
        end_time=end,
        notes="Went well",
        performance=SessionPerformance(understood=4, difficulty=2),
    )
    user = db.get(User, "u1")
    assert user.total_study_hours == pytest.approx(0.75)
    assert user.current_streak == 1
    assert session.end_time == end
    assert user.last_study_date >= session.start_time
    assert session.understood == 4
    assert session.notes == "Went well"


def test_end_before_start_yields_zero(db):
    ledger = ProgressLedger(db)
    handle = start(ledger)
    session = db.get(StudySession, handle.id)
    completed = ledger.record_session_completion(
        handle.id, end_time=session.start_time - timedelta(minutes=10)
    )
    assert completed.duration == 0


def test_backdated_end_time_keeps_streak(db):
    db.add(User(id="u1", current_streak=3, longest_streak=3, last_study_date=utcnow() - timedelta(days=1)))
    db.commit()
    ledger = ProgressLedger(db)
    handle = start(ledger)
    ledger.record_session_completion(handle.id, end_time=utcnow() - timedelta(days=5))

    user = db.get(User, "u1")
    assert user.current_streak == 4
    assert user.longest_streak == 4
    assert user.last_study_date.date() == utcnow().date()


def test_complete_session_twice_is_rejected(db):
    ledger = ProgressLedger(db)
    handle = start(ledger)
    ledger.record_session_completion(handle.id)
    with pytest.raises(ValidationError):
        ledger.record_session_completion(handle.id)


def test_complete_unknown_session(db):
    with pytest.raises(NotFoundError):
        ProgressLedger(db).record_session_completion(999)


def test_scheduled_session_completes_plan_session(db):
    ScheduleService(db).create(
        "u1",
        "m1",
        "Biology",
        SchedulePlan(schedule=[
            ScheduleDay(day=1, sessions=[
                PlanSession(title="Read", duration=30, type="reading"),
                PlanSession(title="Drill", duration=30, type="practice"),
            ]),
        ]),
    )
    ledger = ProgressLedger(db)
    handle = start(ledger, kind="practice", scheduled_day=1)
    completed = ledger.record_session_completion(handle.id)
    assert completed.schedule_updated is True

    schedule = ScheduleService(db).list_active("u1")[0]
    assert schedule.progress["completed_sessions"][0]["session_index"] == 1


def test_record_quiz_result(db):
    ledger = ProgressLedger(db)
    result = ledger.record_quiz_result("u1", "m1", "Biology", summary(), answers(), 120)
    assert result.score == 80
    assert [(w.topic, w.accuracy) for w in result.weak_topics] == [("Cells", 50), ("Energy", 100)]

    ledger.record_quiz_result("u1", "m1", "Biology", summary(score=85), answers(), 90)
    user = db.get(User, "u1")
    assert user.total_quizzes_taken == 2
    assert user.average_quiz_score == 83
    assert user.current_streak == 1


def test_record_quiz_result_validation(db):
    ledger = ProgressLedger(db)
    with pytest.raises(ValidationError) as exc:
        ledger.record_quiz_result("u1", "m1", "Biology", None, None, 60)
    assert exc.value.missing_fields == ["quiz_data", "answers"]
    with pytest.raises(ValidationError):
        ledger.record_quiz_result("u1", "m1", "Biology", summary(correct=6, total=5), answers(), 60)


def test_stats_failure_does_not_fail_quiz(db, monkeypatch):
    ledger = ProgressLedger(db)

    def broken(user_id):
        raise PersistenceError("store unavailable")

    monkeypatch.setattr(ledger.users, "get_or_create", broken)
    result = ledger.record_quiz_result("u1", "m1", "Biology", summary(), answers(), 120)
    assert result.id is not None
    assert db.get(User, "u1") is None


def test_repeated_scheduled_session_is_not_an_update(db):
    ScheduleService(db).create(
        "u1",
        "m1",
        "Biology",
        SchedulePlan(schedule=[
            ScheduleDay(day=1, sessions=[PlanSession(title="Read", duration=30, type="reading")]),
            ScheduleDay(day=2, sessions=[PlanSession(title="Quiz", duration=30, type="quiz")]),
        ]),
    )
    ledger = ProgressLedger(db)
    first = ledger.record_session_completion(start(ledger, scheduled_day=1).id)
    second = ledger.record_session_completion(start(ledger, scheduled_day=1).id)
    assert first.schedule_updated is True
    assert second.schedule_updated is False

    schedule = ScheduleService(db).list_active("u1")[0]
    assert len(schedule.progress["completed_sessions"]) == 1
