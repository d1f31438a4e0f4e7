import json
from datetime import date

import pytest

from app.core.agents.content_generator import (
    ContentGenerator,
    days_until,
    extract_json_block,
    normalize_keys,
)
from app.core.exceptions import GenerationError

QUESTION = {
    "question": "What do chloroplasts capture?",
    "options": {"A": "Light", "B": "Sound", "C": "Heat", "D": "Water"},
    "correct_answer": "A",
    "explanation": "Chlorophyll absorbs light.",
    "topic": "Photosynthesis",
}

SCHEDULE = {
    "totalEstimatedHours": 3,
    "recommendedDaysNeeded": 2,
    "schedule": [
        {
            "sessions": [
                {"title": "Read chapter 1", "duration": 60, "type": "reading", "topics": ["Cells"], "priority": "high"},
                {"title": "Practice", "duration": 30, "type": "practice"},
            ],
            "dailyGoal": "Basics",
        },
        {"day": 2, "date": "2026-05-09", "sessions": [{"title": "Quiz", "duration": 30, "type": "quiz"}]},
    ],
    "studyTips": ["Sleep well"],
}


def test_extract_json_block_strips_fences_and_prose():
    raw = 'Sure! Here it is:\n```json\n[{"a": 1}]\n```\nGood luck.'
    assert json.loads(extract_json_block(raw, "[")) == [{"a": 1}]


def test_normalize_keys_keeps_option_labels():
    assert normalize_keys({"correctAnswer": "B", "options": {"A": "x"}}) == {
        "correct_answer": "B",
        "options": {"A": "x"},
    }


def test_days_until():
    assert days_until(None) == 14
    assert days_until(date(2026, 5, 20), today=date(2026, 5, 10)) == 10
    assert days_until(date(2026, 5, 1), today=date(2026, 5, 10)) == 1


def test_generate_quiz(make_llm):
    llm = make_llm("```json\n" + json.dumps([QUESTION, dict(QUESTION, correct_answer="C")]) + "\n```")
    questions = ContentGenerator(llm).generate_quiz("Plants make food from light.", 2, "easy")
    assert [q.correct_answer for q in questions] == ["A", "C"]
    assert questions[0].options.A == "Light"
    prompt = llm.calls[0][1].content
    assert "easy difficulty" in prompt
    assert "exactly 2" in prompt


def test_generate_quiz_rejects_bad_answer_label(make_llm):
    raw = json.dumps([dict(QUESTION, correct_answer="E")])
    with pytest.raises(GenerationError) as exc:
        ContentGenerator(make_llm(raw)).generate_quiz("text", 1)
    assert exc.value.status_code == 502
    assert exc.value.details["raw_response"] == raw


def test_generate_quiz_rejects_missing_option(make_llm):
    broken = dict(QUESTION, options={"A": "Light", "B": "Sound", "C": "Heat"})
    with pytest.raises(GenerationError):
        ContentGenerator(make_llm(json.dumps([broken]))).generate_quiz("text", 1)


def test_unparsable_output_is_truncated(make_llm):
    raw = "[" + "not json " * 200
    with pytest.raises(GenerationError) as exc:
        ContentGenerator(make_llm(raw)).generate_quiz("text", 1)
    assert len(exc.value.raw_output) == 500


def test_no_json_at_all(make_llm):
    with pytest.raises(GenerationError):
        ContentGenerator(make_llm("I cannot help with that.")).generate_schedule(
            "text", 2, 14, "medium", "balanced", 3
        )


def test_model_failure_becomes_generation_error(make_llm):
    with pytest.raises(GenerationError):
        ContentGenerator(make_llm()).generate_summary("text")


def test_generate_schedule_fills_days_and_dates(make_llm):
    llm = make_llm("Here you go " + json.dumps(SCHEDULE))
    plan = ContentGenerator(llm).generate_schedule(
        "text", hours_per_day=2, days_available=5, difficulty="medium",
        learning_style="balanced", num_pages=3, start_date=date(2026, 5, 8),
    )
    first, second = plan.schedule
    assert first.day == 1
    assert first.date == "2026-05-08"
    assert first.total_minutes == 90
    assert first.daily_goal == "Basics"
    assert second.date == "2026-05-09"
    assert plan.total_estimated_hours == 3
    assert plan.study_tips == ["Sleep well"]


def test_generate_schedule_rejects_empty_day_list(make_llm):
    raw = json.dumps({"schedule": []})
    with pytest.raises(GenerationError):
        ContentGenerator(make_llm(raw)).generate_schedule("text", 2, 14, "medium", "balanced", 3)


def test_generate_schedule_rejects_day_without_sessions(make_llm):
    raw = json.dumps({"schedule": [{"day": 1}]})
    with pytest.raises(GenerationError):
        ContentGenerator(make_llm(raw)).generate_schedule("text", 2, 14, "medium", "balanced", 3)


def test_generate_schedule_rejects_empty_session_list(make_llm):
    raw = json.dumps({"schedule": [
        {"day": 1, "sessions": [{"title": "Read", "duration": 30, "type": "reading"}]},
        {"day": 2, "sessions": []},
    ]})
    with pytest.raises(GenerationError):
        ContentGenerator(make_llm(raw)).generate_schedule("text", 2, 14, "medium", "balanced", 3)


def test_generate_schedule_rejects_duplicate_days(make_llm):
    raw = json.dumps({"schedule": [
        {"day": 1, "sessions": [{"title": "Read", "duration": 30, "type": "reading"}]},
        {"day": 1, "sessions": [{"title": "Quiz", "duration": 30, "type": "quiz"}]},
    ]})
    with pytest.raises(GenerationError):
        ContentGenerator(make_llm(raw)).generate_schedule("text", 2, 14, "medium", "balanced", 3)


def test_summary_truncates_long_text(make_llm):
    llm = make_llm("  A short summary.  ")
    summary = ContentGenerator(llm).generate_summary("x" * 20000, custom_prompt="Focus on dates")
    assert summary == "A short summary."
    prompt = llm.calls[0][1].content
    assert "[Content truncated due to length...]" in prompt
    assert "Special Instructions: Focus on dates" in prompt
