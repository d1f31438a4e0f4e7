"""
Content generator: summaries, quizzes and study schedules from extracted text.

The model output is treated as untrusted: it is stripped of markdown fences,
sliced to the outermost JSON value and validated against the generated
quiz/schedule schemas before anything downstream sees it.
"""
import json
import logging
import math
import re
from datetime import date, timedelta
from typing import Any, List, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from app.core.agents.prompts import (
    JSON_ONLY_SYSTEM_PROMPT,
    QUIZ_USER_PROMPT_TEMPLATE,
    SCHEDULE_USER_PROMPT_TEMPLATE,
    SUMMARY_SYSTEM_PROMPT,
    SUMMARY_USER_PROMPT_TEMPLATE,
)
from app.core.config import settings
from app.core.exceptions import GenerationError, ValidationError
from app.core.progress.schedule_state import validate_schedule_days
from app.schemas.generation import GeneratedQuestion, GeneratedSchedule
from app.utils.datetime_utils import utcnow

logger = logging.getLogger(__name__)

DEFAULT_DAYS_AVAILABLE = 14

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")

_question_list = TypeAdapter(List[GeneratedQuestion])


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def extract_json_block(text: str, opening: str) -> str:
    """
    Slice ``text`` to the outermost JSON value starting with ``opening``.

    Raises:
        GenerationError: If no matching brackets are found
    """
    closing = "}" if opening == "{" else "]"
    cleaned = strip_code_fences(text)
    start = cleaned.find(opening)
    end = cleaned.rfind(closing)
    if start == -1 or end <= start:
        raise GenerationError("No JSON found in model response", raw_output=text)
    return cleaned[start:end + 1]


def _snake_key(key: str) -> str:
    # Single letter option labels (A-D) are kept as they are
    if len(key) == 1:
        return key
    return _CAMEL_RE.sub("_", key).lower()


def normalize_keys(value: Any) -> Any:
    """Recursively convert camelCase object keys to snake_case."""
    if isinstance(value, dict):
        return {_snake_key(k): normalize_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [normalize_keys(v) for v in value]
    return value


def parse_json_output(raw: str, opening: str) -> Any:
    """
    Parse a JSON value out of raw model output.

    Raises:
        GenerationError: If the output does not contain valid JSON
    """
    block = extract_json_block(raw, opening)
    try:
        return normalize_keys(json.loads(block))
    except json.JSONDecodeError as e:
        raise GenerationError(f"Failed to parse model response as JSON: {e.msg}", raw_output=raw)


def days_until(target: Optional[date], today: Optional[date] = None) -> int:
    """Whole days from today until ``target``, or the default horizon when absent."""
    if target is None:
        return DEFAULT_DAYS_AVAILABLE
    today = today or utcnow().date()
    return max(1, math.ceil((target - today).days))


def fill_schedule_dates(plan: GeneratedSchedule, start: date) -> GeneratedSchedule:
    """Fill in dates and minute totals the model left out."""
    days = []
    for index, day in enumerate(plan.schedule):
        update = {}
        if not day.date:
            update["date"] = (start + timedelta(days=index)).isoformat()
        if not day.total_minutes:
            update["total_minutes"] = sum(s.duration for s in day.sessions)
        days.append(day.model_copy(update=update) if update else day)
    return plan.model_copy(update={"schedule": days})


class ContentGenerator:
    """Wraps the chat models used for summaries, quizzes and schedules."""

    def __init__(
        self,
        summary_llm: BaseChatModel,
        quiz_llm: Optional[BaseChatModel] = None,
        schedule_llm: Optional[BaseChatModel] = None,
    ):
        self.summary_llm = summary_llm
        self.quiz_llm = quiz_llm or summary_llm
        self.schedule_llm = schedule_llm or summary_llm

    @staticmethod
    def _invoke(llm: BaseChatModel, system_prompt: str, user_prompt: str) -> str:
        try:
            response = llm.invoke([
                SystemMessage(content=system_prompt),
                HumanMessage(content=user_prompt),
            ])
        except Exception as e:
            logger.error(f"Model call failed: {e}")
            raise GenerationError(f"Content generation failed: {e}") from e
        content = response.content if isinstance(response.content, str) else str(response.content)
        if not content.strip():
            raise GenerationError("Model returned an empty response", raw_output=content)
        return content

    def generate_summary(self, text: str, custom_prompt: Optional[str] = None) -> str:
        """Summarize extracted document text."""
        if len(text) > settings.MAX_QUIZ_TEXT_CHARS:
            text = text[:settings.MAX_QUIZ_TEXT_CHARS] + "\n\n[Content truncated due to length...]"
        special = f"Special Instructions: {custom_prompt}\n\n" if custom_prompt else ""
        prompt = SUMMARY_USER_PROMPT_TEMPLATE.format(special_instructions=special, content=text)
        summary = self._invoke(self.summary_llm, SUMMARY_SYSTEM_PROMPT, prompt)
        logger.info(f"Generated summary ({len(summary)} chars)")
        return summary.strip()

    def generate_quiz(
        self, text: str, num_questions: int = 5, difficulty: str = "medium"
    ) -> List[GeneratedQuestion]:
        """
        Generate multiple-choice questions from extracted text.

        Raises:
            GenerationError: If the model output is not a valid question list
        """
        prompt = QUIZ_USER_PROMPT_TEMPLATE.format(
            content=text[:settings.MAX_QUIZ_TEXT_CHARS],
            num_questions=num_questions,
            difficulty=difficulty,
        )
        raw = self._invoke(self.quiz_llm, JSON_ONLY_SYSTEM_PROMPT, prompt)
        data = parse_json_output(raw, "[")
        try:
            questions = _question_list.validate_python(data)
        except SchemaError as e:
            raise GenerationError(
                f"Invalid quiz structure: {e.error_count()} validation errors", raw_output=raw
            )
        if not questions:
            raise GenerationError("Quiz contains no questions", raw_output=raw)

        logger.info(f"Generated {len(questions)} {difficulty} questions")
        return questions

    def generate_schedule(
        self,
        text: str,
        hours_per_day: float,
        days_available: int,
        difficulty: str,
        learning_style: str,
        num_pages: int,
        start_date: Optional[date] = None,
    ) -> GeneratedSchedule:
        """
        Generate a day-by-day study plan from extracted text.

        Raises:
            GenerationError: If the model output is not a valid schedule
        """
        start_date = start_date or utcnow().date()
        prompt = SCHEDULE_USER_PROMPT_TEMPLATE.format(
            content=text[:settings.MAX_SCHEDULE_TEXT_CHARS],
            hours_per_day=hours_per_day,
            days_available=days_available,
            difficulty=difficulty,
            learning_style=learning_style,
            num_pages=num_pages,
            start_date=start_date.isoformat(),
        )
        raw = self._invoke(self.schedule_llm, JSON_ONLY_SYSTEM_PROMPT, prompt)
        data = parse_json_output(raw, "{")

        # Days without a number get their position in the list
        if isinstance(data, dict) and isinstance(data.get("schedule"), list):
            for index, day in enumerate(data["schedule"], start=1):
                if isinstance(day, dict) and not day.get("day"):
                    day["day"] = index

        try:
            plan = GeneratedSchedule.model_validate(data)
        except SchemaError as e:
            raise GenerationError(
                f"Invalid schedule structure: {e.error_count()} validation errors", raw_output=raw
            )
        try:
            validate_schedule_days(plan.schedule)
        except ValidationError as e:
            raise GenerationError(f"Invalid schedule structure: {e.message}", raw_output=raw)

        plan = fill_schedule_dates(plan, start_date)
        logger.info(
            f"Generated schedule with {len(plan.schedule)} days "
            f"({plan.total_estimated_hours}h estimated)"
        )
        return plan
