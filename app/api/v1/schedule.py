"""
API endpoints for following a study schedule.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.core.dependencies import get_schedule_service
from app.core.progress import ScheduleService
from app.core.progress.schedule_state import get_status
from app.schemas.schedule import (
    ScheduleDetail,
    ScheduleProgress,
    ScheduleSessionRequest,
    ScheduleStatus,
    ScheduleStatusName,
    ScheduleSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class ScheduleTransitionResponse(BaseModel):
    success: bool = True
    state: ScheduleStatusName
    status: ScheduleStatus
    progress: ScheduleProgress


class ScheduleDetailResponse(BaseModel):
    success: bool = True
    schedule: ScheduleDetail


class UserSchedulesResponse(BaseModel):
    success: bool = True
    schedules: List[ScheduleSummary]


def _transition_response(schedule) -> ScheduleTransitionResponse:
    state = ScheduleService.state_of(schedule)
    return ScheduleTransitionResponse(
        state=state.status,
        status=get_status(state),
        progress=state.progress,
    )


@router.post("/{schedule_id}/sessions/start", response_model=ScheduleTransitionResponse)
def start_schedule_session(
    schedule_id: int,
    payload: ScheduleSessionRequest,
    schedules: ScheduleService = Depends(get_schedule_service),
):
    """Mark a plan session as started."""
    schedule = schedules.start_session(schedule_id, payload.day, payload.session_index)
    return _transition_response(schedule)


@router.post("/{schedule_id}/sessions/complete", response_model=ScheduleTransitionResponse)
def complete_schedule_session(
    schedule_id: int,
    payload: ScheduleSessionRequest,
    schedules: ScheduleService = Depends(get_schedule_service),
):
    """Mark a plan session as completed. Repeating the call changes nothing."""
    schedule = schedules.complete_session(schedule_id, payload.day, payload.session_index)
    return _transition_response(schedule)


@router.get("/detail/{schedule_id}", response_model=ScheduleDetailResponse)
def get_schedule_detail(
    schedule_id: int,
    schedules: ScheduleService = Depends(get_schedule_service),
):
    return ScheduleDetailResponse(schedule=schedules.detail(schedule_id))


@router.get("/user/{user_id}", response_model=UserSchedulesResponse)
def get_user_schedules(
    user_id: str,
    schedules: ScheduleService = Depends(get_schedule_service),
):
    return UserSchedulesResponse(schedules=schedules.summaries(user_id))
