"""
API endpoints for recording study sessions, quiz results and schedules.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.core.dependencies import get_ledger, get_schedule_service
from app.core.progress import ProgressLedger, ScheduleService
from app.core.progress.schedule_state import get_status
from app.schemas.progress import (
    CompletedSession,
    QuizSubmitRequest,
    QuizSubmitResponse,
    SessionCompleteRequest,
    SessionHandle,
    SessionStartRequest,
)
from app.schemas.schedule import ScheduleSaveRequest, ScheduleStatus, ScheduleSummary

logger = logging.getLogger(__name__)

router = APIRouter()


# ============= Schemas =============

class SessionStartResponse(BaseModel):
    success: bool = True
    session: SessionHandle


class SessionCompleteResponse(BaseModel):
    success: bool = True
    session: CompletedSession


class QuizSubmitEnvelope(BaseModel):
    success: bool = True
    result: QuizSubmitResponse


class SavedSchedule(BaseModel):
    id: int
    status: ScheduleStatus


class ScheduleSaveResponse(BaseModel):
    success: bool = True
    schedule: SavedSchedule


class ScheduleListResponse(BaseModel):
    success: bool = True
    schedules: List[ScheduleSummary]


# ============= Endpoints =============

@router.post("/session/start", response_model=SessionStartResponse)
def start_session(
    payload: SessionStartRequest,
    ledger: ProgressLedger = Depends(get_ledger),
):
    """Open a study session."""
    handle = ledger.record_session_start(
        user_id=payload.user_id,
        material_id=payload.material_id,
        material_title=payload.material_title,
        kind=payload.session_type,
        planned_minutes=payload.planned_duration,
        topics=payload.topics,
        scheduled_day=payload.scheduled_day,
        schedule_session_index=payload.schedule_session_index,
    )
    return SessionStartResponse(session=handle)


@router.post("/session/complete", response_model=SessionCompleteResponse)
def complete_session(
    payload: SessionCompleteRequest,
    ledger: ProgressLedger = Depends(get_ledger),
):
    """Close a study session; updates streak, study hours and the matching schedule."""
    completed = ledger.record_session_completion(
        payload.session_id,
        end_time=payload.end_time,
        notes=payload.notes,
        performance=payload.performance,
    )
    return SessionCompleteResponse(session=completed)


@router.post("/quiz/submit", response_model=QuizSubmitEnvelope)
def submit_quiz(
    payload: QuizSubmitRequest,
    ledger: ProgressLedger = Depends(get_ledger),
):
    """Store a quiz attempt and its weak topics."""
    result = ledger.record_quiz_result(
        user_id=payload.user_id,
        material_id=payload.material_id,
        material_title=payload.material_title,
        summary=payload.quiz_data,
        answers=payload.answers,
        time_spent_seconds=payload.time_spent,
    )
    return QuizSubmitEnvelope(
        result=QuizSubmitResponse(id=result.id, score=result.score, weak_topics=result.weak_topics)
    )


@router.post("/schedule/save", response_model=ScheduleSaveResponse)
def save_schedule(
    payload: ScheduleSaveRequest,
    schedules: ScheduleService = Depends(get_schedule_service),
):
    """Save a schedule as the active one for its material."""
    schedule = schedules.create(
        user_id=payload.user_id,
        material_id=payload.material_id,
        material_title=payload.material_title,
        plan=payload.schedule_data,
        settings=payload.settings,
    )
    status = get_status(ScheduleService.state_of(schedule))
    return ScheduleSaveResponse(schedule=SavedSchedule(id=schedule.id, status=status))


@router.get("/schedule/{user_id}", response_model=ScheduleListResponse)
def list_active_schedules(
    user_id: str,
    material_id: Optional[str] = None,
    schedules: ScheduleService = Depends(get_schedule_service),
):
    """Active schedules of a user, newest first."""
    return ScheduleListResponse(schedules=schedules.summaries(user_id, material_id))
