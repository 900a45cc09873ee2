"""Learning progress data for the education screen."""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import List, Optional

from .models import EducationProgress, LearningActivity, SubjectProgress

SUBJECT_COLORS = {
    "Math": "blue",
    "Reading": "green",
    "Science": "purple",
    "Language": "orange",
}


def sample_progress(now: Optional[datetime] = None) -> EducationProgress:
    """Return the fixed sample progress, with activity times relative to ``now``."""

    moment = now or datetime.now()

    def hours(count: int) -> datetime:
        return moment - timedelta(hours=count)

    return EducationProgress(
        subjects=[
            SubjectProgress("Math", "number", "blue", 12, 20, 85, hours(24)),
            SubjectProgress("Reading", "book.fill", "green", 8, 15, 92, hours(1)),
            SubjectProgress("Science", "atom", "purple", 5, 12, 88, hours(48)),
            SubjectProgress("Language", "globe", "orange", 15, 25, 78, hours(72)),
        ],
        recent_activities=[
            LearningActivity("Math", "Addition Practice", 90, hours(1), 600),
            LearningActivity("Reading", "The Little Prince", None, hours(2), 1200),
            LearningActivity("Science", "Solar System Quiz", 85, hours(24), 900),
            LearningActivity("Language", "Spanish Colors", 100, hours(48), 480),
        ],
        streak_days=5,
        total_lessons=40,
        average_score=86,
    )


def is_same_week(moment: datetime, reference: datetime) -> bool:
    return moment.isocalendar()[:2] == reference.isocalendar()[:2]


def activities_this_week(progress: EducationProgress, now: Optional[datetime] = None) -> List[LearningActivity]:
    reference = now or datetime.now()
    return [activity for activity in progress.recent_activities if is_same_week(activity.date, reference)]


def score_color(score: int) -> str:
    if score >= 90:
        return "green"
    if score >= 70:
        return "blue"
    if score >= 50:
        return "orange"
    return "red"


def subject_color(subject: str) -> str:
    return SUBJECT_COLORS.get(subject, "gray")


def format_duration(seconds: float) -> str:
    return f"{int(seconds) // 60} min"


def weekly_activity(rng: Optional[random.Random] = None) -> List[bool]:
    """Seven placeholder flags for the "This Week" strip."""

    source = rng or random.Random()
    return [source.random() < 0.5 for _ in range(7)]


__all__ = [
    "SUBJECT_COLORS",
    "activities_this_week",
    "format_duration",
    "is_same_week",
    "sample_progress",
    "score_color",
    "subject_color",
    "weekly_activity",
]
