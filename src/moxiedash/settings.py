"""Operations on the persisted settings records."""

from __future__ import annotations

import json
from typing import Type, TypeVar, Union

from .exceptions import InvalidSettingError, SettingsDecodeError
from .models import RETENTION_PRESETS, AgeContentSettings, PrivacySettings, TopicCategory

SettingsRecord = Union[AgeContentSettings, PrivacySettings]
_R = TypeVar("_R", AgeContentSettings, PrivacySettings)


def normalize_keyword(raw: str) -> str:
    """Return ``raw`` trimmed and lower-cased, the stored form of a keyword."""

    return raw.strip().lower()


def add_keyword(settings: PrivacySettings, raw: str) -> bool:
    """Add a blocked keyword, returning ``True`` when the list changed.

    Blank input and keywords already on the list (after normalisation) are
    ignored, so ``"  Scary "`` and ``"scary"`` are the same entry.
    """

    keyword = normalize_keyword(raw)
    if not keyword or keyword in settings.custom_blocked_keywords:
        return False
    settings.custom_blocked_keywords.append(keyword)
    return True


def remove_keyword(settings: PrivacySettings, keyword: str) -> bool:
    before = len(settings.custom_blocked_keywords)
    settings.custom_blocked_keywords[:] = [
        entry for entry in settings.custom_blocked_keywords if entry != keyword
    ]
    return len(settings.custom_blocked_keywords) != before


def toggle_topic(settings: AgeContentSettings, topic: TopicCategory) -> bool:
    """Flip ``topic`` on or off and return whether it is now allowed."""

    if topic in settings.topics_allowed:
        settings.topics_allowed[:] = [entry for entry in settings.topics_allowed if entry != topic]
        return False
    settings.topics_allowed.append(topic)
    return True


def set_retention_days(settings: PrivacySettings, days: int) -> int:
    if days not in RETENTION_PRESETS:
        presets = ", ".join(str(value) for value in RETENTION_PRESETS)
        raise InvalidSettingError(f"Retention must be one of {presets} days, not {days}.")
    settings.data_retention_days = days
    return days


def validate_privacy(settings: PrivacySettings) -> PrivacySettings:
    """Raise :class:`InvalidSettingError` unless every field is within its allowed set."""

    if settings.data_retention_days not in RETENTION_PRESETS:
        raise InvalidSettingError(f"Unsupported retention period: {settings.data_retention_days} days.")
    for keyword in settings.custom_blocked_keywords:
        if keyword != normalize_keyword(keyword) or not keyword:
            raise InvalidSettingError(f"Keyword {keyword!r} is not normalised.")
    if len(set(settings.custom_blocked_keywords)) != len(settings.custom_blocked_keywords):
        raise InvalidSettingError("Blocked keywords must be unique.")
    return settings


def encode_settings(record: SettingsRecord) -> str:
    return json.dumps(record.to_dict(), sort_keys=True)


def decode_settings(cls: Type[_R], payload: Union[str, bytes]) -> _R:
    """Decode a JSON payload into ``cls``.

    Raises :class:`SettingsDecodeError` for malformed JSON, missing fields,
    wrong types, unknown enum values or privacy values outside their presets.
    """

    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as exc:
        raise SettingsDecodeError(f"Stored {cls.__name__} is not valid JSON.") from exc
    record = cls.from_dict(data)
    if isinstance(record, PrivacySettings):
        try:
            validate_privacy(record)
        except InvalidSettingError as exc:
            raise SettingsDecodeError(str(exc)) from exc
    return record


__all__ = [
    "SettingsRecord",
    "add_keyword",
    "decode_settings",
    "encode_settings",
    "normalize_keyword",
    "remove_keyword",
    "set_retention_days",
    "toggle_topic",
    "validate_privacy",
]
