from datetime import datetime, timedelta

from app.core.progress.weak_topics import aggregate_weak_topics, analyze_topics, derive_weak_topics
from app.schemas.progress import AnsweredQuestion, QuizResultRecord, WeakTopicStat


def answer(n, topic, correct, time_taken=None):
    return AnsweredQuestion(question_number=n, topic=topic, is_correct=correct, time_taken=time_taken)


def quiz(id, completed_at, answers=(), weak_topics=()):
    return QuizResultRecord(
        id=id,
        user_id="u1",
        material_id="m1",
        material_title="Biology",
        total_questions=len(answers),
        correct_answers=sum(1 for a in answers if a.is_correct),
        score=0,
        difficulty="medium",
        answers=list(answers),
        weak_topics=list(weak_topics),
        time_spent=60,
        completed_at=completed_at,
    )


def test_derive_two_topics():
    stats = derive_weak_topics([
        answer(1, "A", True),
        answer(2, "A", False),
        answer(3, "B", True),
        answer(4, "B", True),
    ])
    assert [s.model_dump() for s in stats] == [
        {"topic": "A", "questions_asked": 2, "questions_correct": 1, "accuracy": 50},
        {"topic": "B", "questions_asked": 2, "questions_correct": 2, "accuracy": 100},
    ]


def test_derive_sorted_and_bounded():
    answers = [answer(i, f"T{i % 4}", i % 3 == 0) for i in range(1, 25)]
    stats = derive_weak_topics(answers)
    accuracies = [s.accuracy for s in stats]
    assert accuracies == sorted(accuracies)
    for s in stats:
        assert 0 <= s.accuracy <= 100
        assert (s.accuracy == 100) == (s.questions_correct == s.questions_asked)


def test_missing_topic_falls_back_to_general():
    stats = derive_weak_topics([answer(1, None, False)])
    assert stats[0].topic == "General"
    assert stats[0].accuracy == 0


def test_derive_empty():
    assert derive_weak_topics([]) == []


def test_aggregate_across_quizzes():
    now = datetime(2026, 3, 1)
    results = [
        quiz(1, now, weak_topics=[WeakTopicStat(topic="A", questions_asked=2, questions_correct=1, accuracy=50)]),
        quiz(2, now, weak_topics=[
            WeakTopicStat(topic="A", questions_asked=2, questions_correct=0, accuracy=0),
            WeakTopicStat(topic="B", questions_asked=4, questions_correct=4, accuracy=100),
        ]),
    ]
    stats = aggregate_weak_topics(results)
    assert [(s.topic, s.questions_asked, s.questions_correct, s.accuracy) for s in stats] == [
        ("A", 4, 1, 25),
        ("B", 4, 4, 100),
    ]


def test_aggregate_skips_empty_buckets_and_limits():
    now = datetime(2026, 3, 1)
    topics = [
        WeakTopicStat(topic=f"T{i}", questions_asked=10, questions_correct=i, accuracy=i * 10)
        for i in range(8)
    ]
    topics.append(WeakTopicStat(topic="Empty", questions_asked=0, questions_correct=0, accuracy=0))
    stats = aggregate_weak_topics([quiz(1, now, weak_topics=topics)], limit=5)
    assert [s.topic for s in stats] == ["T0", "T1", "T2", "T3", "T4"]
    assert all(s.topic != "Empty" for s in aggregate_weak_topics([quiz(1, now, weak_topics=topics)], limit=None))


def test_analyze_topics_trend_and_review_flag():
    base = datetime(2026, 3, 1)
    # Newest first, as loaded from the store
    results = [
        quiz(3, base + timedelta(days=2), answers=[answer(1, "A", True, 10), answer(2, "B", True, 20)]),
        quiz(2, base + timedelta(days=1), answers=[answer(1, "A", False, 30)]),
        quiz(1, base, answers=[answer(1, "A", False, 20), answer(2, "B", True, 40)]),
    ]
    topics = analyze_topics(results, trend_length=2, review_threshold=70)
    by_topic = {t.topic: t for t in topics}

    a = by_topic["A"]
    assert a.total_questions == 3
    assert a.correct_answers == 1
    assert a.accuracy == 33
    assert a.average_time_taken == 20
    assert a.needs_review is True
    assert a.last_seen == base + timedelta(days=2)
    assert [p.date for p in a.trend] == [base + timedelta(days=1), base + timedelta(days=2)]

    b = by_topic["B"]
    assert b.accuracy == 100
    assert b.needs_review is False
    assert b.average_time_taken == 30
    assert [t.topic for t in topics] == ["A", "B"]


def test_review_threshold_is_strict():
    now = datetime(2026, 3, 1)
    answers = [answer(i, "A", i <= 7) for i in range(1, 11)]
    topic = analyze_topics([quiz(1, now, answers=answers)], review_threshold=70)[0]
    assert topic.accuracy == 70
    assert topic.needs_review is False
