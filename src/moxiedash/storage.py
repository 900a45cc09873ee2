"""Key-value persistence for the dashboard settings records."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Protocol, Type

from .exceptions import SettingsDecodeError
from .models import AgeContentSettings, PrivacySettings
from .ops import StructuredLogger
from .settings import SettingsRecord, decode_settings, encode_settings

AGE_CONTENT_SETTINGS_KEY = "moxie_age_content_settings"
PRIVACY_SETTINGS_KEY = "moxie_privacy_settings"

SETTINGS_KEYS: Dict[str, Type[SettingsRecord]] = {
    AGE_CONTENT_SETTINGS_KEY: AgeContentSettings,
    PRIVACY_SETTINGS_KEY: PrivacySettings,
}


class KeyValueStore(Protocol):
    """Minimal string-to-string store the repository writes records into."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self) -> Iterable[str]: ...


class MemoryStore:
    """Dictionary backed :class:`KeyValueStore` used by scripts and tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> tuple[str, ...]:
        return tuple(sorted(self._data))


class SettingsRepository:
    """Load and save whole settings records under their fixed keys.

    Loading never fails: an absent or unreadable record yields a
    default-constructed one, and the decode failure is logged.
    """

    def __init__(self, store: KeyValueStore, *, logger: StructuredLogger | None = None) -> None:
        self._store = store
        self._logger = logger or StructuredLogger()

    @property
    def logger(self) -> StructuredLogger:
        return self._logger

    def _load(self, key: str) -> SettingsRecord:
        cls = SETTINGS_KEYS[key]
        payload = self._store.get(key)
        if payload is None:
            return cls()
        try:
            return decode_settings(cls, payload)
        except SettingsDecodeError as exc:
            self._logger.log("settings_decode_failed", key=key, error=str(exc))
            return cls()

    def _save(self, key: str, record: SettingsRecord) -> None:
        self._store.set(key, encode_settings(record))
        self._logger.log("settings_saved", key=key)

    def load_age_content(self) -> AgeContentSettings:
        return self._load(AGE_CONTENT_SETTINGS_KEY)  # type: ignore[return-value]

    def save_age_content(self, settings: AgeContentSettings) -> None:
        self._save(AGE_CONTENT_SETTINGS_KEY, settings)

    def load_privacy(self) -> PrivacySettings:
        return self._load(PRIVACY_SETTINGS_KEY)  # type: ignore[return-value]

    def save_privacy(self, settings: PrivacySettings) -> None:
        self._save(PRIVACY_SETTINGS_KEY, settings)

    def export_all(self) -> Dict[str, dict]:
        """Return every settings record as plain JSON-ready dictionaries."""

        exported = {key: self._load(key).to_dict() for key in SETTINGS_KEYS}
        self._logger.log("settings_exported", keys=sorted(exported))
        return exported

    def delete_all(self) -> tuple[str, ...]:
        removed = tuple(key for key in SETTINGS_KEYS if self._store.get(key) is not None)
        for key in SETTINGS_KEYS:
            self._store.delete(key)
        self._logger.log("settings_deleted", keys=list(removed))
        return removed


__all__ = [
    "AGE_CONTENT_SETTINGS_KEY",
    "PRIVACY_SETTINGS_KEY",
    "SETTINGS_KEYS",
    "KeyValueStore",
    "MemoryStore",
    "SettingsRepository",
]
