"""
Study streak calculation on calendar-day granularity.
"""
import logging
from datetime import datetime

from app.schemas.user import UserStats
from app.utils.datetime_utils import days_between, to_naive_utc

logger = logging.getLogger(__name__)


def update_streak(stats: UserStats, event_at: datetime) -> UserStats:
    """
    Apply one study event to the streak counters.

    Args:
        stats: Current stats snapshot
        event_at: When the study activity happened

    Returns:
        New stats snapshot with current/longest streak and last study date updated
    """
    event_at = to_naive_utc(event_at)  # type: ignore
    current = stats.current_streak

    if stats.last_study_date is None:
        current = 1
    else:
        days_since_last = days_between(stats.last_study_date, event_at)
        if days_since_last == 1:
            current += 1
        elif days_since_last == 0:
            # Same-day repeat study keeps the streak as is
            pass
        else:
            # Gap of more than a day, or an event dated before the last one
            if days_since_last < 0:
                logger.warning(
                    f"Study event {event_at.isoformat()} predates last study date "
                    f"{stats.last_study_date.isoformat()}; resetting streak"
                )
            current = 1

    return stats.model_copy(
        update={
            "current_streak": current,
            "longest_streak": max(stats.longest_streak, current),
            "last_study_date": event_at,
        }
    )
