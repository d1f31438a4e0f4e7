"""
Weak-topic aggregation.

Folds per-question answer records into per-topic accuracy, either for a single
quiz or across a user's quiz history.
"""
from typing import Dict, Iterable, List, Optional, Sequence

from app.schemas.analytics import TopicAnalysis, TopicTrendPoint
from app.schemas.progress import (
    DEFAULT_TOPIC,
    AnsweredQuestion,
    QuizResultRecord,
    WeakTopicStat,
)
from app.utils.stats import percentage, round_half_up


def _topic_of(answer: AnsweredQuestion) -> str:
    return answer.topic or DEFAULT_TOPIC


def derive_weak_topics(answers: Sequence[AnsweredQuestion]) -> List[WeakTopicStat]:
    """
    Derive per-topic accuracy for one quiz attempt.

    Args:
        answers: Ordered answers of the attempt

    Returns:
        Topic statistics sorted weakest first
    """
    buckets: Dict[str, Dict[str, int]] = {}
    for answer in answers:
        bucket = buckets.setdefault(_topic_of(answer), {"asked": 0, "correct": 0})
        bucket["asked"] += 1
        if answer.is_correct:
            bucket["correct"] += 1

    stats = [
        WeakTopicStat(
            topic=topic,
            questions_asked=bucket["asked"],
            questions_correct=bucket["correct"],
            accuracy=percentage(bucket["correct"], bucket["asked"]),
        )
        for topic, bucket in buckets.items()
    ]
    return sorted(stats, key=lambda s: s.accuracy)


def aggregate_weak_topics(
    quiz_results: Iterable[QuizResultRecord],
    limit: Optional[int] = 5,
) -> List[WeakTopicStat]:
    """
    Fold the stored weak-topic lists of several quizzes by topic.

    Buckets are created on the first occurrence of a topic, and a topic whose
    aggregate question count is zero is never emitted.

    Args:
        quiz_results: Quiz results to fold
        limit: Keep only the K weakest topics (None keeps all)

    Returns:
        Aggregated topic statistics sorted weakest first
    """
    buckets: Dict[str, Dict[str, int]] = {}
    for result in quiz_results:
        for stat in result.weak_topics:
            if stat.questions_asked <= 0:
                continue
            bucket = buckets.setdefault(stat.topic, {"asked": 0, "correct": 0})
            bucket["asked"] += stat.questions_asked
            bucket["correct"] += stat.questions_correct

    stats = sorted(
        (
            WeakTopicStat(
                topic=topic,
                questions_asked=bucket["asked"],
                questions_correct=bucket["correct"],
                accuracy=percentage(bucket["correct"], bucket["asked"]),
            )
            for topic, bucket in buckets.items()
        ),
        key=lambda s: s.accuracy,
    )
    return stats if limit is None else stats[:limit]


def analyze_topics(
    quiz_results: Iterable[QuizResultRecord],
    trend_length: int = 5,
    review_threshold: int = 70,
) -> List[TopicAnalysis]:
    """
    Detailed per-topic analysis from raw answers across quizzes.

    Args:
        quiz_results: Quiz results, usually newest first
        trend_length: Number of most recent attempts kept per topic
        review_threshold: Accuracy (percent) below which a topic needs review

    Returns:
        Topic analyses sorted weakest first
    """
    buckets: Dict[str, dict] = {}
    for result in quiz_results:
        for answer in result.answers:
            topic = _topic_of(answer)
            bucket = buckets.get(topic)
            if bucket is None:
                bucket = buckets[topic] = {
                    "total": 0,
                    "correct": 0,
                    "time": 0,
                    "trend": [],
                    "last_seen": result.completed_at,
                }
            bucket["total"] += 1
            bucket["last_seen"] = max(bucket["last_seen"], result.completed_at)
            if answer.is_correct:
                bucket["correct"] += 1
            bucket["time"] += answer.time_taken or 0
            bucket["trend"].append(
                TopicTrendPoint(date=result.completed_at, correct=answer.is_correct)
            )

    analyses = []
    for topic, bucket in buckets.items():
        total = bucket["total"]
        trend = sorted(bucket["trend"], key=lambda point: point.date)
        analyses.append(
            TopicAnalysis(
                topic=topic,
                accuracy=percentage(bucket["correct"], total),
                total_questions=total,
                correct_answers=bucket["correct"],
                average_time_taken=round_half_up(bucket["time"] / total),
                needs_review=bucket["correct"] * 100 < review_threshold * total,
                last_seen=bucket["last_seen"],
                trend=trend[-trend_length:] if trend_length > 0 else [],
            )
        )
    return sorted(analyses, key=lambda a: a.accuracy)
