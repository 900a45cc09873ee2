"""Operational utilities for MoxieDash."""

from __future__ import annotations

import json
from collections import deque
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Deque, Optional

SAVE_BANNER_SECONDS = 2
LOG_BUFFER_SIZE = 500


class StructuredLogger:
    """Write JSON lines log entries for parent-side inspection."""

    def __init__(
        self,
        *,
        path: Path | None = None,
        clock: Callable[[], datetime] = datetime.utcnow,
        buffer_size: int = LOG_BUFFER_SIZE,
    ) -> None:
        self.path = path
        self._clock = clock
        self._entries: Deque[dict] = deque(maxlen=buffer_size)

    def log(self, event_type: str, **fields: object) -> dict:
        entry = {"timestamp": self._clock().isoformat(), "event": event_type, **fields}
        self._entries.append(entry)
        if self.path:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(json.dumps(entry, default=str) + "\n")
        return entry

    def tail(self, limit: int = 50) -> tuple[dict, ...]:
        return tuple(self._entries)[-limit:]

    def events(self, event_type: str) -> tuple[dict, ...]:
        return tuple(entry for entry in self._entries if entry["event"] == event_type)


class SaveConfirmation:
    """The "settings saved" banner: visible for a fixed interval after each save."""

    def __init__(self, *, seconds: float = SAVE_BANNER_SECONDS) -> None:
        self._duration = timedelta(seconds=seconds)
        self._shown_at: Optional[datetime] = None

    @property
    def shown_at(self) -> Optional[datetime]:
        return self._shown_at

    def show(self, *, at: Optional[datetime] = None) -> datetime:
        self._shown_at = at or datetime.utcnow()
        return self._shown_at + self._duration

    def hide(self) -> None:
        self._shown_at = None

    def is_visible(self, *, at: Optional[datetime] = None) -> bool:
        if self._shown_at is None:
            return False
        moment = at or datetime.utcnow()
        return self._shown_at <= moment < self._shown_at + self._duration

    @classmethod
    def restore(cls, shown_at_iso: Optional[str], *, seconds: float = SAVE_BANNER_SECONDS) -> "SaveConfirmation":
        """Rebuild a banner from the ISO timestamp kept in a web session."""

        banner = cls(seconds=seconds)
        if shown_at_iso:
            try:
                banner._shown_at = datetime.fromisoformat(shown_at_iso)
            except ValueError:
                banner._shown_at = None
        return banner


__all__ = ["LOG_BUFFER_SIZE", "SAVE_BANNER_SECONDS", "SaveConfirmation", "StructuredLogger"]
