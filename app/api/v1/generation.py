"""
API endpoints for AI-generated summaries, quizzes and study schedules.
"""
import logging
import os
from datetime import datetime, time

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.agents.content_generator import ContentGenerator, days_until
from app.core.dependencies import get_content_generator, get_db
from app.core.exceptions import PersistenceError
from app.core.progress import ScheduleService
from app.schemas.generation import (
    QuizGenerateRequest,
    QuizGenerateResponse,
    ScheduleGenerateMetadata,
    ScheduleGenerateRequest,
    ScheduleGenerateResponse,
    SummarizeRequest,
    SummarizeResponse,
)
from app.schemas.schedule import ScheduleSettings
from app.utils.document_parser import extract_text_from_pdf
from app.utils.file_upload import resolve_upload_path

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/summarize", response_model=SummarizeResponse)
def summarize(
    payload: SummarizeRequest,
    generator: ContentGenerator = Depends(get_content_generator),
):
    """Summarize an uploaded document."""
    document = extract_text_from_pdf(resolve_upload_path(payload.file_path))
    summary = generator.generate_summary(document.text, payload.custom_prompt)
    return SummarizeResponse(
        summary=summary,
        num_pages=document.num_pages,
        text_length=len(document.text),
    )


@router.post("/quiz", response_model=QuizGenerateResponse)
def generate_quiz(
    payload: QuizGenerateRequest,
    generator: ContentGenerator = Depends(get_content_generator),
):
    """Generate a multiple-choice quiz from an uploaded document."""
    document = extract_text_from_pdf(resolve_upload_path(payload.file_path))
    questions = generator.generate_quiz(document.text, payload.num_questions, payload.difficulty)
    return QuizGenerateResponse(
        quiz=questions,
        num_questions=len(questions),
        difficulty=payload.difficulty,
    )


@router.post("/schedule", response_model=ScheduleGenerateResponse)
def generate_schedule(
    payload: ScheduleGenerateRequest,
    db: Session = Depends(get_db),
    generator: ContentGenerator = Depends(get_content_generator),
):
    """
    Generate a study schedule from an uploaded document.

    The schedule is saved as the active one for its material unless
    ``save_to_database`` is false. A failed save is logged and reported in the
    metadata; the generated schedule is still returned.
    """
    file_path = resolve_upload_path(payload.file_path)
    document = extract_text_from_pdf(file_path)
    days_available = days_until(payload.target_date)

    plan = generator.generate_schedule(
        document.text,
        hours_per_day=payload.available_hours_per_day,
        days_available=days_available,
        difficulty=payload.difficulty,
        learning_style=payload.learning_style,
        num_pages=document.num_pages,
    )

    schedule_id = None
    if payload.save_to_database:
        material_id = payload.material_id or os.path.splitext(os.path.basename(file_path))[0]
        target = (
            datetime.combine(payload.target_date, time.min) if payload.target_date else None
        )
        try:
            schedule = ScheduleService(db).create(
                user_id=payload.user_id,
                material_id=material_id,
                material_title=payload.material_title or "Study Material",
                plan=plan,
                settings=ScheduleSettings(
                    available_hours_per_day=payload.available_hours_per_day,
                    target_date=target,
                    difficulty=payload.difficulty,
                    learning_style=payload.learning_style,
                ),
            )
            schedule_id = schedule.id
        except PersistenceError as e:
            logger.warning(f"Generated schedule could not be saved: {e.message}")

    return ScheduleGenerateResponse(
        schedule=plan,
        schedule_id=schedule_id,
        metadata=ScheduleGenerateMetadata(
            material_pages=document.num_pages,
            text_length=len(document.text),
            requested_hours_per_day=payload.available_hours_per_day,
            days_available=days_available,
            difficulty=payload.difficulty,
            saved_to_database=schedule_id is not None,
        ),
    )
