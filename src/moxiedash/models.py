"""Domain models used by the MoxieDash package."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from .exceptions import SettingsDecodeError

PALETTE: Dict[str, str] = {
    "pink": "#ec4899",
    "orange": "#f97316",
    "yellow": "#eab308",
    "green": "#16a34a",
    "blue": "#2563eb",
    "purple": "#9d4edd",
    "gray": "#6b7280",
    "red": "#dc2626",
}

RETENTION_PRESETS: Tuple[int, ...] = (30, 90, 180, 365)

_E = TypeVar("_E", bound=Enum)


def _enum_value(enum_cls: Type[_E], raw: Any, field_name: str) -> _E:
    try:
        return enum_cls(raw)
    except ValueError as exc:
        raise SettingsDecodeError(f"Unknown {field_name} value: {raw!r}") from exc


def _require(data: Mapping[str, Any], key: str, expected: type | Tuple[type, ...]) -> Any:
    if key not in data:
        raise SettingsDecodeError(f"Missing field '{key}'.")
    value = data[key]
    # bool is an int subclass; keep the two apart
    if expected is int and isinstance(value, bool):
        raise SettingsDecodeError(f"Field '{key}' must be an integer.")
    if not isinstance(value, expected):
        raise SettingsDecodeError(f"Field '{key}' has the wrong type ({type(value).__name__}).")
    return value


class AgeContentLevel(str, Enum):
    """Content maturity levels Moxie can speak at."""

    TODDLER = "toddler"
    PRESCHOOL = "preschool"
    EARLY_ELEMENTARY = "early_elementary"
    LATE_ELEMENTARY = "late_elementary"
    PRETEEN = "preteen"

    @property
    def display_name(self) -> str:
        return _LEVEL_DISPLAY[self]

    @property
    def description(self) -> str:
        return _LEVEL_DESCRIPTIONS[self]

    @property
    def color(self) -> str:
        return _LEVEL_COLORS[self]

    @property
    def features(self) -> Tuple[str, ...]:
        return _LEVEL_FEATURES[self]

    @property
    def preview_response(self) -> str:
        """How Moxie would answer "Why is the sky blue?" at this level."""

        return _LEVEL_PREVIEWS[self]


_LEVEL_DISPLAY = {
    AgeContentLevel.TODDLER: "Toddler (2-4)",
    AgeContentLevel.PRESCHOOL: "Preschool (4-6)",
    AgeContentLevel.EARLY_ELEMENTARY: "Early Elementary (6-8)",
    AgeContentLevel.LATE_ELEMENTARY: "Late Elementary (8-10)",
    AgeContentLevel.PRETEEN: "Pre-Teen (10-12)",
}

_LEVEL_DESCRIPTIONS = {
    AgeContentLevel.TODDLER: "Simple language, basic concepts, nursery rhymes, colors, shapes, animals",
    AgeContentLevel.PRESCHOOL: "Expanded vocabulary, simple stories, basic counting, letters, simple science",
    AgeContentLevel.EARLY_ELEMENTARY: "Chapter books level, basic math, beginning science, geography basics",
    AgeContentLevel.LATE_ELEMENTARY: "Complex topics, history, deeper science, more nuanced conversations",
    AgeContentLevel.PRETEEN: "Advanced topics, current events (filtered), complex problem-solving",
}

_LEVEL_COLORS = {
    AgeContentLevel.TODDLER: "pink",
    AgeContentLevel.PRESCHOOL: "orange",
    AgeContentLevel.EARLY_ELEMENTARY: "yellow",
    AgeContentLevel.LATE_ELEMENTARY: "green",
    AgeContentLevel.PRETEEN: "blue",
}

_LEVEL_FEATURES = {
    AgeContentLevel.TODDLER: ("Simple words", "Lots of repetition", "Animated responses", "No complex topics"),
    AgeContentLevel.PRESCHOOL: ("Simple sentences", "Basic stories", "ABC & counting", "Gentle corrections"),
    AgeContentLevel.EARLY_ELEMENTARY: ("Full sentences", "Chapter-book level", "Basic facts", "Educational games"),
    AgeContentLevel.LATE_ELEMENTARY: ("Complex explanations", "Research questions", "Math help", "Science topics"),
    AgeContentLevel.PRETEEN: ("Nuanced discussions", "Critical thinking", "Current events", "Advanced learning"),
}

_LEVEL_PREVIEWS = {
    AgeContentLevel.TODDLER: "The sky is blue like your blue crayon! It's so pretty! Blue blue sky!",
    AgeContentLevel.PRESCHOOL: (
        "The sky looks blue because of the sun's light! The sun sends light and it bounces around "
        "making the sky look blue. Isn't that cool?"
    ),
    AgeContentLevel.EARLY_ELEMENTARY: (
        "The sky is blue because sunlight has all the colors in it, like a rainbow! When sunlight hits "
        "the air, the blue color bounces around more than other colors, so that's what we see!"
    ),
    AgeContentLevel.LATE_ELEMENTARY: (
        "The sky appears blue because of how light interacts with our atmosphere. Sunlight contains all "
        "colors, but blue light has a shorter wavelength and scatters more when it hits gas molecules in "
        "the air. This is called Rayleigh scattering!"
    ),
    AgeContentLevel.PRETEEN: (
        "The blue color of the sky is due to Rayleigh scattering. When sunlight enters Earth's atmosphere, "
        "shorter wavelengths (blue/violet) scatter more than longer wavelengths (red/orange). Our eyes are "
        "more sensitive to blue, so that's the color we perceive. Fun fact: sunsets are red because light "
        "travels through more atmosphere at that angle!"
    ),
}


class VocabularyLevel(str, Enum):
    SIMPLE = "simple"
    AGE_APPROPRIATE = "age_appropriate"
    ADVANCED = "advanced"

    @property
    def display_name(self) -> str:
        return {
            VocabularyLevel.SIMPLE: "Simple",
            VocabularyLevel.AGE_APPROPRIATE: "Age-Appropriate",
            VocabularyLevel.ADVANCED: "Advanced",
        }[self]


class TopicCategory(str, Enum):
    """Topics Moxie may discuss; order matches the settings screen grid."""

    ANIMALS = "animals"
    SCIENCE = "science"
    SPACE = "space"
    HISTORY = "history"
    ART = "art"
    MUSIC = "music"
    SPORTS = "sports"
    NATURE = "nature"
    TECHNOLOGY = "technology"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class ConversationSpeed(str, Enum):
    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


@dataclass(slots=True)
class AgeContentSettings:
    """Age-appropriate content configuration persisted as a single record."""

    content_level: AgeContentLevel = AgeContentLevel.EARLY_ELEMENTARY
    auto_detect_age: bool = True
    vocabulary_level: VocabularyLevel = VocabularyLevel.AGE_APPROPRIATE
    topics_allowed: List[TopicCategory] = field(default_factory=lambda: list(TopicCategory))
    conversation_speed: ConversationSpeed = ConversationSpeed.NORMAL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contentLevel": self.content_level.value,
            "autoDetectAge": self.auto_detect_age,
            "vocabularyLevel": self.vocabulary_level.value,
            "topicsAllowed": [topic.value for topic in self.topics_allowed],
            "conversationSpeed": self.conversation_speed.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AgeContentSettings":
        if not isinstance(data, Mapping):
            raise SettingsDecodeError("Age content settings must be a JSON object.")
        topics = _require(data, "topicsAllowed", list)
        return cls(
            content_level=_enum_value(AgeContentLevel, _require(data, "contentLevel", str), "contentLevel"),
            auto_detect_age=_require(data, "autoDetectAge", bool),
            vocabulary_level=_enum_value(
                VocabularyLevel, _require(data, "vocabularyLevel", str), "vocabularyLevel"
            ),
            topics_allowed=[_enum_value(TopicCategory, raw, "topicsAllowed") for raw in topics],
            conversation_speed=_enum_value(
                ConversationSpeed, _require(data, "conversationSpeed", str), "conversationSpeed"
            ),
        )


class LoggingLevel(str, Enum):
    """How much of the child's activity is recorded."""

    HIGH_PRIVACY = "high_privacy"
    BALANCED = "balanced"
    FULL_TRANSPARENCY = "full_transparency"
    INSTITUTIONAL = "institutional"

    @property
    def display_name(self) -> str:
        return {
            LoggingLevel.HIGH_PRIVACY: "High Privacy",
            LoggingLevel.BALANCED: "Balanced",
            LoggingLevel.FULL_TRANSPARENCY: "Full Transparency",
            LoggingLevel.INSTITUTIONAL: "Institutional",
        }[self]

    @property
    def description(self) -> str:
        return {
            LoggingLevel.HIGH_PRIVACY: (
                "Logs only timestamps and session duration. Best for older children with earned trust."
            ),
            LoggingLevel.BALANCED: "Logs timestamps, topics, and flagged content. Recommended for most families.",
            LoggingLevel.FULL_TRANSPARENCY: (
                "Logs complete conversation transcripts. Best for young children or special needs."
            ),
            LoggingLevel.INSTITUTIONAL: (
                "Full logs plus AI safety scoring. Required for schools and therapeutic settings."
            ),
        }[self]

    @property
    def color(self) -> str:
        return {
            LoggingLevel.HIGH_PRIVACY: "green",
            LoggingLevel.BALANCED: "blue",
            LoggingLevel.FULL_TRANSPARENCY: "orange",
            LoggingLevel.INSTITUTIONAL: "purple",
        }[self]

    @property
    def logs_full_transcripts(self) -> bool:
        return self in (LoggingLevel.FULL_TRANSPARENCY, LoggingLevel.INSTITUTIONAL)

    @property
    def logs_topic_summaries(self) -> bool:
        return self is not LoggingLevel.HIGH_PRIVACY

    @property
    def logs_flags(self) -> bool:
        return True

    @property
    def performs_sentiment_analysis(self) -> bool:
        return self is not LoggingLevel.HIGH_PRIVACY

    @property
    def performs_ai_safety_scoring(self) -> bool:
        return self is LoggingLevel.INSTITUTIONAL


@dataclass(slots=True)
class PrivacySettings:
    """Data-collection preferences persisted as a single record."""

    logging_level: LoggingLevel = LoggingLevel.BALANCED
    save_conversation_transcripts: bool = True
    enable_sentiment_analysis: bool = True
    enable_topic_extraction: bool = True
    enable_safety_flags: bool = True
    data_retention_days: int = 90
    allow_anonymous_analytics: bool = False
    custom_blocked_keywords: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "loggingLevel": self.logging_level.value,
            "saveConversationTranscripts": self.save_conversation_transcripts,
            "enableSentimentAnalysis": self.enable_sentiment_analysis,
            "enableTopicExtraction": self.enable_topic_extraction,
            "enableSafetyFlags": self.enable_safety_flags,
            "dataRetentionDays": self.data_retention_days,
            "allowAnonymousAnalytics": self.allow_anonymous_analytics,
            "customBlockedKeywords": list(self.custom_blocked_keywords),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PrivacySettings":
        if not isinstance(data, Mapping):
            raise SettingsDecodeError("Privacy settings must be a JSON object.")
        keywords = _require(data, "customBlockedKeywords", list)
        if not all(isinstance(keyword, str) for keyword in keywords):
            raise SettingsDecodeError("Field 'customBlockedKeywords' must only contain strings.")
        return cls(
            logging_level=_enum_value(LoggingLevel, _require(data, "loggingLevel", str), "loggingLevel"),
            save_conversation_transcripts=_require(data, "saveConversationTranscripts", bool),
            enable_sentiment_analysis=_require(data, "enableSentimentAnalysis", bool),
            enable_topic_extraction=_require(data, "enableTopicExtraction", bool),
            enable_safety_flags=_require(data, "enableSafetyFlags", bool),
            data_retention_days=_require(data, "dataRetentionDays", int),
            allow_anonymous_analytics=_require(data, "allowAnonymousAnalytics", bool),
            custom_blocked_keywords=list(keywords),
        )


class Sentiment(str, Enum):
    """Mood buckets, ordered from most to least positive."""

    VERY_POSITIVE = "very_positive"
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    CONCERNING = "concerning"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def emoji(self) -> str:
        return {
            Sentiment.VERY_POSITIVE: "\U0001F604",
            Sentiment.POSITIVE: "\U0001F642",
            Sentiment.NEUTRAL: "\U0001F610",
            Sentiment.NEGATIVE: "\U0001F615",
            Sentiment.CONCERNING: "\U0001F61F",
        }[self]

    @property
    def color(self) -> str:
        return {
            Sentiment.VERY_POSITIVE: "green",
            Sentiment.POSITIVE: "blue",
            Sentiment.NEUTRAL: "gray",
            Sentiment.NEGATIVE: "orange",
            Sentiment.CONCERNING: "red",
        }[self]


class MoodPeriod(str, Enum):
    WEEK = "7 Days"
    TWO_WEEKS = "14 Days"
    MONTH = "30 Days"

    @property
    def days(self) -> int:
        return int(self.value.split()[0])

    @classmethod
    def from_days(cls, days: int) -> "MoodPeriod":
        for period in cls:
            if period.days == days:
                return period
        raise ValueError(f"Unsupported mood period: {days} days.")


class MoodTrend(str, Enum):
    """Direction of mood change between the older and recent halves of the data."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"
    INSUFFICIENT = "insufficient"

    @property
    def description(self) -> str:
        if self is MoodTrend.INSUFFICIENT:
            return "Not enough data"
        return self.value.capitalize()

    @property
    def emoji(self) -> str:
        return {
            MoodTrend.IMPROVING: "\U0001F4C8",
            MoodTrend.DECLINING: "\U0001F4C9",
        }.get(self, "➡️")

    @property
    def color(self) -> str:
        return {
            MoodTrend.IMPROVING: "green",
            MoodTrend.DECLINING: "orange",
            MoodTrend.STABLE: "blue",
            MoodTrend.INSUFFICIENT: "gray",
        }[self]


@dataclass(frozen=True, slots=True)
class MoodDataPoint:
    date: datetime
    mood_score: float
    sentiment: Sentiment


@dataclass(frozen=True, slots=True)
class SubjectProgress:
    """Per-subject lesson progress shown on the education screen."""

    subject: str
    icon: str
    color: str
    lessons_completed: int
    total_lessons: int
    average_score: float
    last_activity: datetime

    @property
    def completion(self) -> float:
        if self.total_lessons <= 0:
            return 0.0
        return min(self.lessons_completed / self.total_lessons, 1.0)


@dataclass(frozen=True, slots=True)
class LearningActivity:
    subject: str
    title: str
    score: Optional[int]
    date: datetime
    duration_seconds: float


@dataclass(slots=True)
class EducationProgress:
    subjects: List[SubjectProgress]
    recent_activities: List[LearningActivity]
    streak_days: int
    total_lessons: int
    average_score: float


__all__ = [
    "PALETTE",
    "RETENTION_PRESETS",
    "AgeContentLevel",
    "AgeContentSettings",
    "ConversationSpeed",
    "EducationProgress",
    "LearningActivity",
    "LoggingLevel",
    "MoodDataPoint",
    "MoodPeriod",
    "MoodTrend",
    "PrivacySettings",
    "Sentiment",
    "SubjectProgress",
    "TopicCategory",
    "VocabularyLevel",
]
