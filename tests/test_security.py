from datetime import datetime, timedelta

import pytest

from moxiedash.exceptions import ParentLockedError
from moxiedash.ops import SaveConfirmation, StructuredLogger
from moxiedash.security import ParentGate, is_valid_pin_format


def test_pin_format() -> None:
    assert is_valid_pin_format("123456")
    assert not is_valid_pin_format("1234")
    assert not is_valid_pin_format("12a456")

    with pytest.raises(ValueError):
        ParentGate("1234")


def test_gate_locks_after_repeated_failures_and_recovers() -> None:
    gate = ParentGate("246810", max_attempts=3, lockout_minutes=15)
    start = datetime(2024, 1, 1, 12, 0)

    for minute in range(3):
        assert gate.verify("000000", at=start + timedelta(minutes=minute)) is False

    assert gate.is_locked(at=start + timedelta(minutes=3))
    with pytest.raises(ParentLockedError):
        gate.verify("246810", at=start + timedelta(minutes=3))

    later = start + timedelta(minutes=17)
    assert not gate.is_locked(at=later)
    assert gate.verify("246810", at=later) is True
    assert gate.remaining_attempts(at=later) == 3


def test_success_clears_failures() -> None:
    gate = ParentGate("246810", max_attempts=3)
    now = datetime(2024, 1, 1, 12, 0)

    gate.verify("111111", at=now)
    gate.verify("222222", at=now)
    assert gate.remaining_attempts(at=now) == 1
    assert gate.verify("246810", at=now)
    assert gate.remaining_attempts(at=now) == 3


def test_save_confirmation_hides_after_two_seconds() -> None:
    banner = SaveConfirmation()
    saved_at = datetime(2024, 1, 1, 12, 0, 0)

    assert not banner.is_visible(at=saved_at)
    hide_at = banner.show(at=saved_at)

    assert hide_at == saved_at + timedelta(seconds=2)
    assert banner.is_visible(at=saved_at + timedelta(seconds=1, milliseconds=999))
    assert not banner.is_visible(at=hide_at)


def test_save_confirmation_restore() -> None:
    saved_at = datetime(2024, 1, 1, 12, 0, 0)

    banner = SaveConfirmation.restore(saved_at.isoformat())

    assert banner.shown_at == saved_at
    assert banner.is_visible(at=saved_at + timedelta(seconds=1))
    assert SaveConfirmation.restore("garbage").shown_at is None
    assert SaveConfirmation.restore(None).shown_at is None


def test_event_log_keeps_only_newest_entries() -> None:
    logger = StructuredLogger(buffer_size=3)

    for attempt in range(10):
        logger.log("parent_login_failed", attempt=attempt)

    assert [entry["attempt"] for entry in logger.tail()] == [7, 8, 9]
    assert len(logger.events("parent_login_failed")) == 3
    assert [entry["attempt"] for entry in logger.tail(2)] == [8, 9]
