"""Parent PIN gate protecting the dashboard screens."""

from __future__ import annotations

import hmac
from collections import deque
from datetime import datetime, timedelta
from typing import Deque, Optional

from .exceptions import ParentLockedError

PIN_LENGTH = 6


def is_valid_pin_format(pin: str) -> bool:
    return len(pin) == PIN_LENGTH and pin.isdigit()


class ParentGate:
    """Verify the parent PIN and lock out after repeated failures within a window."""

    def __init__(self, pin: str, *, max_attempts: int = 5, lockout_minutes: int = 15) -> None:
        if not is_valid_pin_format(pin):
            raise ValueError(f"Parent PIN must be exactly {PIN_LENGTH} digits.")
        self._pin = pin
        self._max_attempts = max_attempts
        self._lockout_window = timedelta(minutes=lockout_minutes)
        self._failures: Deque[datetime] = deque()

    def is_locked(self, *, at: Optional[datetime] = None) -> bool:
        self._prune(at or datetime.utcnow())
        return len(self._failures) >= self._max_attempts

    def remaining_attempts(self, *, at: Optional[datetime] = None) -> int:
        self._prune(at or datetime.utcnow())
        return max(self._max_attempts - len(self._failures), 0)

    def verify(self, pin: str, *, at: Optional[datetime] = None) -> bool:
        """Check ``pin``; a success clears the failure history.

        Raises :class:`ParentLockedError` while locked, without recording
        the attempt.
        """

        now = at or datetime.utcnow()
        if self.is_locked(at=now):
            raise ParentLockedError("Too many incorrect PIN attempts. Try again later.")
        if hmac.compare_digest(pin.encode("utf-8"), self._pin.encode("utf-8")):
            self._failures.clear()
            return True
        self._failures.append(now)
        return False

    def _prune(self, now: datetime) -> None:
        while self._failures and now - self._failures[0] > self._lockout_window:
            self._failures.popleft()


__all__ = ["PIN_LENGTH", "ParentGate", "is_valid_pin_format"]
