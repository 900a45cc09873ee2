"""Custom exception hierarchy for the MoxieDash package."""

from __future__ import annotations


class MoxieDashError(Exception):
    """Base class for all MoxieDash specific errors."""


class SettingsDecodeError(MoxieDashError):
    """Raised when a stored settings payload cannot be turned back into a record."""


class InvalidSettingError(MoxieDashError, ValueError):
    """Raised when a settings field is given a value outside its allowed set."""


class ParentLockedError(MoxieDashError):
    """Raised when the parent PIN gate is locked after repeated failures."""
