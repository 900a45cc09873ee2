"""MoxieDash package: parent dashboard settings and insights for a companion robot."""

from .exceptions import InvalidSettingError, MoxieDashError, ParentLockedError, SettingsDecodeError
from .models import (
    RETENTION_PRESETS,
    AgeContentLevel,
    AgeContentSettings,
    ConversationSpeed,
    EducationProgress,
    LearningActivity,
    LoggingLevel,
    MoodDataPoint,
    MoodPeriod,
    MoodTrend,
    PrivacySettings,
    Sentiment,
    SubjectProgress,
    TopicCategory,
    VocabularyLevel,
)
from .ops import SaveConfirmation, StructuredLogger
from .security import ParentGate
from .storage import (
    AGE_CONTENT_SETTINGS_KEY,
    PRIVACY_SETTINGS_KEY,
    KeyValueStore,
    MemoryStore,
    SettingsRepository,
)

__all__ = [
    "AGE_CONTENT_SETTINGS_KEY",
    "PRIVACY_SETTINGS_KEY",
    "RETENTION_PRESETS",
    "AgeContentLevel",
    "AgeContentSettings",
    "ConversationSpeed",
    "EducationProgress",
    "InvalidSettingError",
    "KeyValueStore",
    "LearningActivity",
    "LoggingLevel",
    "MemoryStore",
    "MoodDataPoint",
    "MoodPeriod",
    "MoodTrend",
    "MoxieDashError",
    "ParentGate",
    "ParentLockedError",
    "PrivacySettings",
    "SaveConfirmation",
    "SettingsDecodeError",
    "SettingsRepository",
    "Sentiment",
    "StructuredLogger",
    "SubjectProgress",
    "TopicCategory",
    "VocabularyLevel",
]
