import json

from moxiedash.models import AgeContentLevel, AgeContentSettings, LoggingLevel, PrivacySettings
from moxiedash.ops import StructuredLogger
from moxiedash.settings import add_keyword
from moxiedash.storage import (
    AGE_CONTENT_SETTINGS_KEY,
    PRIVACY_SETTINGS_KEY,
    MemoryStore,
    SettingsRepository,
)


def test_missing_records_load_as_defaults() -> None:
    repo = SettingsRepository(MemoryStore())

    assert repo.load_age_content() == AgeContentSettings()
    assert repo.load_privacy() == PrivacySettings()
    assert repo.logger.events("settings_decode_failed") == ()


def test_save_overwrites_whole_record() -> None:
    store = MemoryStore()
    repo = SettingsRepository(store)
    settings = repo.load_privacy()
    settings.logging_level = LoggingLevel.HIGH_PRIVACY
    add_keyword(settings, "Lava")

    repo.save_privacy(settings)

    stored = json.loads(store.get(PRIVACY_SETTINGS_KEY))
    assert stored["loggingLevel"] == "high_privacy"
    assert stored["customBlockedKeywords"] == ["lava"]
    assert repo.load_privacy() == settings

    repo.save_privacy(PrivacySettings())
    assert repo.load_privacy() == PrivacySettings()
    assert len(repo.logger.events("settings_saved")) == 2


def test_malformed_record_falls_back_to_defaults_and_is_logged() -> None:
    store = MemoryStore({AGE_CONTENT_SETTINGS_KEY: "{\"contentLevel\": \"toddler\""})
    logger = StructuredLogger()
    repo = SettingsRepository(store, logger=logger)

    settings = repo.load_age_content()

    assert settings == AgeContentSettings()
    failures = logger.events("settings_decode_failed")
    assert len(failures) == 1
    assert failures[0]["key"] == AGE_CONTENT_SETTINGS_KEY


def test_export_all_and_delete_all() -> None:
    store = MemoryStore()
    repo = SettingsRepository(store)
    repo.save_age_content(AgeContentSettings(content_level=AgeContentLevel.TODDLER))

    exported = repo.export_all()

    assert exported[AGE_CONTENT_SETTINGS_KEY]["contentLevel"] == "toddler"
    assert exported[PRIVACY_SETTINGS_KEY] == PrivacySettings().to_dict()

    removed = repo.delete_all()

    assert removed == (AGE_CONTENT_SETTINGS_KEY,)
    assert store.keys() == ()
    assert repo.load_age_content() == AgeContentSettings()


def test_structured_logger_appends_json_lines(tmp_path) -> None:
    log_path = tmp_path / "logs" / "events.jsonl"
    repo = SettingsRepository(MemoryStore(), logger=StructuredLogger(path=log_path))

    repo.save_age_content(AgeContentSettings())
    repo.save_privacy(PrivacySettings())

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["event"] for line in lines] == ["settings_saved", "settings_saved"]
    assert repo.logger.tail(1)[0]["key"] == PRIVACY_SETTINGS_KEY
