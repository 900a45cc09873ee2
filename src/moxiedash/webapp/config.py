"""Configuration constants for the MoxieDash web frontend."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

PARENT_PIN = os.environ.get("MOXIE_PARENT_PIN", "246810")
SESSION_SECRET = os.environ.get("MOXIE_SESSION_SECRET", "change-this-session-secret")
SQLITE_FILE_NAME = os.environ.get("MOXIE_SQLITE", "moxiedash.db")
_EVENT_LOG = os.environ.get("MOXIE_EVENT_LOG", "")
EVENT_LOG_PATH: Optional[Path] = Path(_EVENT_LOG) if _EVENT_LOG else None
PIN_MAX_ATTEMPTS = int(os.environ.get("MOXIE_PIN_MAX_ATTEMPTS", "5"))
PIN_LOCKOUT_MINUTES = int(os.environ.get("MOXIE_PIN_LOCKOUT_MINUTES", "15"))
MOOD_PERIOD_CHOICES: Tuple[int, ...] = (7, 14, 30)

SESSION_PARENT_KEY = "parent_authed"
SESSION_BANNER_KEY = "saved_banner"

__all__ = [
    "PARENT_PIN",
    "SESSION_SECRET",
    "SQLITE_FILE_NAME",
    "EVENT_LOG_PATH",
    "PIN_MAX_ATTEMPTS",
    "PIN_LOCKOUT_MINUTES",
    "MOOD_PERIOD_CHOICES",
    "SESSION_PARENT_KEY",
    "SESSION_BANNER_KEY",
]
