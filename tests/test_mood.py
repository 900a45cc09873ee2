import random
from datetime import datetime, timedelta

import pytest

from moxiedash.models import MoodDataPoint, MoodPeriod, MoodTrend, Sentiment
from moxiedash.mood import (
    average_mood,
    best_day,
    chart_points,
    classify_score,
    generate_sample_mood_data,
    mood_distribution,
    mood_trend,
    point_color,
    summarize,
    weekday_averages,
)

MONDAY = datetime(2024, 1, 1, 9, 0)


def make_points(scores, *, start=MONDAY, sentiment=Sentiment.NEUTRAL):
    return [
        MoodDataPoint(date=start + timedelta(days=index), mood_score=score, sentiment=sentiment)
        for index, score in enumerate(scores)
    ]


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (5.0, Sentiment.VERY_POSITIVE),
        (4.5, Sentiment.VERY_POSITIVE),
        (4.49, Sentiment.POSITIVE),
        (3.5, Sentiment.POSITIVE),
        (3.49, Sentiment.NEUTRAL),
        (2.5, Sentiment.NEUTRAL),
        (2.49, Sentiment.NEGATIVE),
        (1.0, Sentiment.NEGATIVE),
    ],
)
def test_classify_score_thresholds(score: float, expected: Sentiment) -> None:
    assert classify_score(score) is expected


def test_average_mood_uses_mean_score() -> None:
    assert average_mood(make_points([5.0, 4.0])) is Sentiment.VERY_POSITIVE
    assert average_mood(make_points([4.0, 3.0])) is Sentiment.POSITIVE
    assert average_mood([]) is Sentiment.NEGATIVE


def test_trend_needs_two_points() -> None:
    assert mood_trend([]) is MoodTrend.INSUFFICIENT
    assert mood_trend(make_points([4.0])) is MoodTrend.INSUFFICIENT
    assert MoodTrend.INSUFFICIENT.description == "Not enough data"


def test_trend_compares_recent_half_to_older_half() -> None:
    assert mood_trend(make_points([3.0, 3.0, 4.0, 4.0])) is MoodTrend.IMPROVING
    assert mood_trend(make_points([4.0, 4.0, 3.0, 3.0])) is MoodTrend.DECLINING
    assert mood_trend(make_points([3.0, 3.25])) is MoodTrend.STABLE
    assert mood_trend(make_points([4.0, 4.0, 4.0, 4.5])) is MoodTrend.STABLE
    assert mood_trend(make_points([3.0, 3.5])) is MoodTrend.IMPROVING
    assert mood_trend(make_points([3.5, 3.0])) is MoodTrend.DECLINING


def test_trend_ignores_middle_point_of_odd_series() -> None:
    assert mood_trend(make_points([3.0, 1.0, 3.1])) is MoodTrend.STABLE
    assert mood_trend(make_points([3.0, 5.0, 3.5])) is MoodTrend.IMPROVING


def test_best_day_picks_highest_weekday_average() -> None:
    points = make_points([3.0, 4.0, 2.0, 3.0, 3.0, 4.8, 3.0])

    assert best_day(points) == "Saturday"
    assert weekday_averages(points)[5] == pytest.approx(4.8)
    assert best_day([]) == "N/A"


def test_best_day_groups_sessions_by_weekday() -> None:
    points = make_points([5.0, 2.0]) + make_points([1.0, 4.5], start=MONDAY + timedelta(days=7))

    averages = weekday_averages(points)

    assert averages == {0: pytest.approx(3.0), 1: pytest.approx(3.25)}
    assert best_day(points) == "Tuesday"


def test_distribution_fractions() -> None:
    points = (
        make_points([4.0, 4.0], sentiment=Sentiment.POSITIVE)
        + make_points([3.0], sentiment=Sentiment.NEUTRAL)
        + make_points([2.0], sentiment=Sentiment.NEGATIVE)
    )

    distribution = mood_distribution(points)

    assert distribution == {
        Sentiment.POSITIVE: 0.5,
        Sentiment.NEUTRAL: 0.25,
        Sentiment.NEGATIVE: 0.25,
    }
    assert sum(distribution.values()) == pytest.approx(1.0)
    assert mood_distribution([]) == {}


def test_sample_data_shape() -> None:
    now = datetime(2024, 3, 10, 12, 0)

    points = generate_sample_mood_data(MoodPeriod.TWO_WEEKS, now=now, rng=random.Random(7))

    days = {point.date.date() for point in points}
    assert len(days) == 14
    assert 14 <= len(points) <= 56
    assert all(2.5 <= point.mood_score <= 5.0 for point in points)
    assert all(point.sentiment is not Sentiment.CONCERNING for point in points)
    assert [point.date for point in points] == sorted(point.date for point in points)


def test_sample_data_is_reproducible_with_seed() -> None:
    now = datetime(2024, 3, 10, 12, 0)

    first = generate_sample_mood_data(MoodPeriod.WEEK, now=now, rng=random.Random(3))
    second = generate_sample_mood_data(MoodPeriod.WEEK, now=now, rng=random.Random(3))

    assert first == second


def test_chart_points_cover_last_period_entries() -> None:
    points = make_points([1.0, 2.0, 3.0, 4.0, 5.0, 5.0, 5.0, 5.0, 2.5])

    plotted = chart_points(points, MoodPeriod.WEEK, width=600, height=200)

    assert len(plotted) == 7
    assert plotted[0].x == 35.0
    assert plotted[-1].x == 595.0
    assert plotted[0].score == 3.0
    assert plotted[2].y == 10.0
    assert plotted[-1].color == "gray"
    assert chart_points(make_points([4.0]), MoodPeriod.WEEK) == []


def test_point_color_bands() -> None:
    assert point_color(4.6) == "green"
    assert point_color(3.6) == "blue"
    assert point_color(2.6) == "gray"
    assert point_color(2.0) == "orange"


def test_summarize_counts_conversations() -> None:
    summary = summarize(make_points([4.0, 4.0, 4.8, 4.8]))

    assert summary.conversations == 4
    assert summary.average is Sentiment.POSITIVE
    assert summary.trend is MoodTrend.IMPROVING
    assert summary.distribution == {Sentiment.NEUTRAL: 1.0}


def test_mood_period_days() -> None:
    assert [period.days for period in MoodPeriod] == [7, 14, 30]
    assert MoodPeriod.from_days(30) is MoodPeriod.MONTH
    with pytest.raises(ValueError):
        MoodPeriod.from_days(10)
