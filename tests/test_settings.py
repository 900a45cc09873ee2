import json

import pytest

from moxiedash.exceptions import InvalidSettingError, SettingsDecodeError
from moxiedash.models import (
    AgeContentLevel,
    AgeContentSettings,
    ConversationSpeed,
    LoggingLevel,
    PrivacySettings,
    TopicCategory,
    VocabularyLevel,
)
from moxiedash.settings import (
    add_keyword,
    decode_settings,
    encode_settings,
    remove_keyword,
    set_retention_days,
    toggle_topic,
)


def test_age_content_defaults() -> None:
    settings = AgeContentSettings()

    assert settings.content_level is AgeContentLevel.EARLY_ELEMENTARY
    assert settings.auto_detect_age is True
    assert settings.vocabulary_level is VocabularyLevel.AGE_APPROPRIATE
    assert settings.topics_allowed == list(TopicCategory)
    assert len(settings.topics_allowed) == 9
    assert settings.conversation_speed is ConversationSpeed.NORMAL


def test_default_records_do_not_share_lists() -> None:
    first = AgeContentSettings()
    second = AgeContentSettings()
    toggle_topic(first, TopicCategory.ART)

    assert TopicCategory.ART in second.topics_allowed
    assert PrivacySettings().custom_blocked_keywords is not PrivacySettings().custom_blocked_keywords


def test_age_content_round_trip_uses_original_keys() -> None:
    settings = AgeContentSettings(
        content_level=AgeContentLevel.PRETEEN,
        auto_detect_age=False,
        vocabulary_level=VocabularyLevel.ADVANCED,
        topics_allowed=[TopicCategory.SPACE, TopicCategory.MUSIC],
        conversation_speed=ConversationSpeed.FAST,
    )

    payload = encode_settings(settings)

    assert json.loads(payload) == {
        "contentLevel": "preteen",
        "autoDetectAge": False,
        "vocabularyLevel": "advanced",
        "topicsAllowed": ["space", "music"],
        "conversationSpeed": "fast",
    }
    assert decode_settings(AgeContentSettings, payload) == settings


def test_privacy_round_trip() -> None:
    settings = PrivacySettings(
        logging_level=LoggingLevel.INSTITUTIONAL,
        save_conversation_transcripts=False,
        data_retention_days=365,
        allow_anonymous_analytics=True,
        custom_blocked_keywords=["monster", "fight"],
    )

    restored = decode_settings(PrivacySettings, encode_settings(settings))

    assert restored == settings
    assert json.loads(encode_settings(settings))["dataRetentionDays"] == 365


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        "[]",
        json.dumps({"contentLevel": "toddler"}),
        json.dumps(
            {
                "contentLevel": "teenager",
                "autoDetectAge": True,
                "vocabularyLevel": "simple",
                "topicsAllowed": [],
                "conversationSpeed": "slow",
            }
        ),
        json.dumps(
            {
                "contentLevel": "toddler",
                "autoDetectAge": "yes",
                "vocabularyLevel": "simple",
                "topicsAllowed": [],
                "conversationSpeed": "slow",
            }
        ),
    ],
)
def test_decode_age_content_rejects_malformed_payloads(payload: str) -> None:
    with pytest.raises(SettingsDecodeError):
        decode_settings(AgeContentSettings, payload)


def test_decode_privacy_rejects_retention_outside_presets() -> None:
    data = PrivacySettings().to_dict()
    data["dataRetentionDays"] = 45

    with pytest.raises(SettingsDecodeError):
        decode_settings(PrivacySettings, json.dumps(data))


def test_decode_privacy_rejects_boolean_retention() -> None:
    data = PrivacySettings().to_dict()
    data["dataRetentionDays"] = True

    with pytest.raises(SettingsDecodeError):
        decode_settings(PrivacySettings, json.dumps(data))


def test_add_keyword_normalises_and_ignores_duplicates() -> None:
    settings = PrivacySettings()

    assert add_keyword(settings, "  Scary Movie \n") is True
    assert settings.custom_blocked_keywords == ["scary movie"]

    assert add_keyword(settings, "SCARY MOVIE") is False
    assert add_keyword(settings, "scary movie   ") is False
    assert add_keyword(settings, "   ") is False
    assert settings.custom_blocked_keywords == ["scary movie"]

    assert add_keyword(settings, "Zombies") is True
    assert settings.custom_blocked_keywords == ["scary movie", "zombies"]


def test_remove_keyword() -> None:
    settings = PrivacySettings(custom_blocked_keywords=["monster", "fight"])

    assert remove_keyword(settings, "monster") is True
    assert remove_keyword(settings, "monster") is False
    assert settings.custom_blocked_keywords == ["fight"]


def test_remove_keyword_drops_every_copy() -> None:
    settings = PrivacySettings(custom_blocked_keywords=["lava", "storm", "lava"])

    assert remove_keyword(settings, "lava") is True
    assert settings.custom_blocked_keywords == ["storm"]


def test_toggle_topic_removes_then_appends_at_end() -> None:
    settings = AgeContentSettings()

    assert toggle_topic(settings, TopicCategory.ANIMALS) is False
    assert TopicCategory.ANIMALS not in settings.topics_allowed

    assert toggle_topic(settings, TopicCategory.ANIMALS) is True
    assert settings.topics_allowed[-1] is TopicCategory.ANIMALS


def test_set_retention_days_accepts_presets_only() -> None:
    settings = PrivacySettings()

    for days in (30, 90, 180, 365):
        assert set_retention_days(settings, days) == days
        assert settings.data_retention_days == days

    with pytest.raises(InvalidSettingError):
        set_retention_days(settings, 60)
    assert settings.data_retention_days == 365


def test_logging_level_capabilities() -> None:
    assert not LoggingLevel.HIGH_PRIVACY.logs_topic_summaries
    assert not LoggingLevel.HIGH_PRIVACY.performs_sentiment_analysis
    assert LoggingLevel.BALANCED.performs_sentiment_analysis
    assert not LoggingLevel.BALANCED.logs_full_transcripts
    assert LoggingLevel.FULL_TRANSPARENCY.logs_full_transcripts
    assert LoggingLevel.INSTITUTIONAL.performs_ai_safety_scoring
    assert not LoggingLevel.FULL_TRANSPARENCY.performs_ai_safety_scoring
    assert all(level.logs_flags for level in LoggingLevel)


def test_display_names() -> None:
    assert AgeContentLevel.PRETEEN.display_name == "Pre-Teen (10-12)"
    assert VocabularyLevel.AGE_APPROPRIATE.display_name == "Age-Appropriate"
    assert TopicCategory.TECHNOLOGY.display_name == "Technology"
    assert ConversationSpeed.SLOW.display_name == "Slow"
    assert "Rayleigh" in AgeContentLevel.LATE_ELEMENTARY.preview_response
    assert len(AgeContentLevel.TODDLER.features) == 4
