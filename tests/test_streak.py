from datetime import datetime, timedelta, timezone

from app.core.progress.streak import update_streak
from app.schemas.user import UserStats

D = datetime(2026, 3, 2, 9, 30)


def test_first_event_starts_streak():
    stats = update_streak(UserStats(), D)
    assert stats.current_streak == 1
    assert stats.longest_streak == 1
    assert stats.last_study_date == D


def test_consecutive_days_count_up():
    stats = UserStats()
    for n in range(1, 8):
        stats = update_streak(stats, D + timedelta(days=n - 1))
        assert stats.current_streak == n
        assert stats.longest_streak == n


def test_gap_resets_streak():
    stats = UserStats(current_streak=9, longest_streak=9, last_study_date=D)
    stats = update_streak(stats, D + timedelta(days=2))
    assert stats.current_streak == 1
    assert stats.longest_streak == 9


def test_same_day_keeps_streak():
    stats = UserStats(current_streak=3, longest_streak=5, last_study_date=D)
    stats = update_streak(stats, D.replace(hour=23))
    assert stats.current_streak == 3
    assert stats.longest_streak == 5


def test_calendar_days_not_elapsed_hours():
    # 23:50 to 00:10 the next day is one calendar day apart
    late = datetime(2026, 3, 2, 23, 50)
    stats = update_streak(UserStats(), late)
    stats = update_streak(stats, late + timedelta(minutes=20))
    assert stats.current_streak == 2


def test_event_before_last_study_date_resets():
    stats = UserStats(current_streak=4, longest_streak=4, last_study_date=D)
    stats = update_streak(stats, D - timedelta(days=3))
    assert stats.current_streak == 1
    assert stats.longest_streak == 4


def test_aware_event_time_is_stored_naive_utc():
    aware = datetime(2026, 3, 2, 9, 30, tzinfo=timezone(timedelta(hours=2)))
    stats = update_streak(UserStats(), aware)
    assert stats.last_study_date == datetime(2026, 3, 2, 7, 30)


def test_first_session_then_next_day_then_gap():
    stats = update_streak(UserStats(), D)
    assert (stats.current_streak, stats.longest_streak) == (1, 1)
    stats = update_streak(stats, D + timedelta(days=1))
    assert (stats.current_streak, stats.longest_streak) == (2, 2)
    stats = update_streak(stats, D + timedelta(days=4))
    assert (stats.current_streak, stats.longest_streak) == (1, 2)


def test_update_does_not_mutate_input():
    before = UserStats(current_streak=2, longest_streak=2, last_study_date=D)
    update_streak(before, D + timedelta(days=1))
    assert before.current_streak == 2
