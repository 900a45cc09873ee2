"""Mood trend arithmetic over small in-memory collections of data points."""

from __future__ import annotations

import calendar
import random
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from .models import MoodDataPoint, MoodPeriod, MoodTrend, Sentiment

VERY_POSITIVE_THRESHOLD = 4.5
POSITIVE_THRESHOLD = 3.5
NEUTRAL_THRESHOLD = 2.5
TREND_DELTA = 0.3
MAX_MOOD_SCORE = 5.0

SAMPLE_SENTIMENTS = (Sentiment.VERY_POSITIVE, Sentiment.POSITIVE, Sentiment.NEUTRAL, Sentiment.NEGATIVE)


@dataclass(frozen=True, slots=True)
class ChartPoint:
    x: float
    y: float
    score: float
    color: str


def generate_sample_mood_data(
    period: MoodPeriod,
    *,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> List[MoodDataPoint]:
    """Fabricate one to four sessions per day for the last ``period.days`` days."""

    moment = now or datetime.now()
    source = rng or random.Random()
    points: List[MoodDataPoint] = []
    for offset in range(period.days):
        day = moment - timedelta(days=offset)
        for _ in range(source.randint(1, 4)):
            points.append(
                MoodDataPoint(
                    date=day,
                    mood_score=source.uniform(2.5, 5.0),
                    sentiment=source.choice(SAMPLE_SENTIMENTS),
                )
            )
    return sorted(points, key=lambda point: point.date)


def _mean(scores: Sequence[float]) -> float:
    return sum(scores) / max(len(scores), 1)


def classify_score(score: float) -> Sentiment:
    if score >= VERY_POSITIVE_THRESHOLD:
        return Sentiment.VERY_POSITIVE
    if score >= POSITIVE_THRESHOLD:
        return Sentiment.POSITIVE
    if score >= NEUTRAL_THRESHOLD:
        return Sentiment.NEUTRAL
    return Sentiment.NEGATIVE


def average_score(points: Sequence[MoodDataPoint]) -> float:
    return _mean([point.mood_score for point in points])


def average_mood(points: Sequence[MoodDataPoint]) -> Sentiment:
    """Classify the mean score; an empty collection averages to zero (negative)."""

    return classify_score(average_score(points))


def mood_trend(points: Sequence[MoodDataPoint]) -> MoodTrend:
    """Compare the mean of the newest half against the oldest half.

    ``points`` must be ordered oldest first. With an odd count the middle
    point belongs to neither half.
    """

    if len(points) < 2:
        return MoodTrend.INSUFFICIENT
    half = len(points) // 2
    recent = _mean([point.mood_score for point in points[-half:]])
    older = _mean([point.mood_score for point in points[:half]])
    diff = recent - older
    if diff > TREND_DELTA:
        return MoodTrend.IMPROVING
    if diff < -TREND_DELTA:
        return MoodTrend.DECLINING
    return MoodTrend.STABLE


def weekday_averages(points: Sequence[MoodDataPoint]) -> Dict[int, float]:
    """Mean score per weekday (Monday is 0), in order of first appearance."""

    buckets: Dict[int, List[float]] = {}
    for point in points:
        buckets.setdefault(point.date.weekday(), []).append(point.mood_score)
    return {weekday: _mean(scores) for weekday, scores in buckets.items()}


def best_day(points: Sequence[MoodDataPoint]) -> str:
    averages = weekday_averages(points)
    if not averages:
        return "N/A"
    weekday = max(averages, key=averages.__getitem__)
    return calendar.day_name[weekday]


def mood_distribution(points: Sequence[MoodDataPoint]) -> Dict[Sentiment, float]:
    """Fraction of points in each sentiment bucket; buckets with no points are absent."""

    if not points:
        return {}
    counts = Counter(point.sentiment for point in points)
    total = len(points)
    return {sentiment: counts[sentiment] / total for sentiment in Sentiment if counts[sentiment]}


def point_color(score: float) -> str:
    return classify_score(score).color


def chart_points(
    points: Sequence[MoodDataPoint],
    period: MoodPeriod,
    *,
    width: float = 600.0,
    height: float = 200.0,
) -> List[ChartPoint]:
    """Project the newest ``period.days`` points onto a chart of ``width`` x ``height``.

    A line needs two points, so shorter series produce nothing.
    """

    visible = list(points)[-period.days:]
    if len(visible) < 2:
        return []
    span = len(visible) - 1
    result: List[ChartPoint] = []
    for index, point in enumerate(visible):
        x = index / span * (width - 40) + 35
        y = height - (point.mood_score / MAX_MOOD_SCORE * height) + 10
        result.append(
            ChartPoint(x=round(x, 2), y=round(y, 2), score=point.mood_score, color=point_color(point.mood_score))
        )
    return result


@dataclass(frozen=True, slots=True)
class MoodSummary:
    """Everything the mood screen's summary cards show."""

    average: Sentiment
    trend: MoodTrend
    best_day: str
    conversations: int
    distribution: Dict[Sentiment, float]


def summarize(points: Sequence[MoodDataPoint]) -> MoodSummary:
    return MoodSummary(
        average=average_mood(points),
        trend=mood_trend(points),
        best_day=best_day(points),
        conversations=len(points),
        distribution=mood_distribution(points),
    )


__all__ = [
    "ChartPoint",
    "MoodSummary",
    "average_mood",
    "average_score",
    "best_day",
    "chart_points",
    "classify_score",
    "generate_sample_mood_data",
    "mood_distribution",
    "mood_trend",
    "point_color",
    "summarize",
    "weekday_averages",
]
