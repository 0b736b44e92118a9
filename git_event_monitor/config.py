from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_GITHUB_API_BASE = "https://api.github.com"
DEFAULT_GITEE_API_BASE = "https://gitee.com/api/v5"
DEFAULT_CALL_TIMEOUT_SECONDS = 10.0
SUPPORTED_LOCALES = ("en", "zh")


def env_flag(name: str) -> bool:
    return (os.getenv(name) or "").strip().lower() in {"1", "true", "yes", "on"}


def verbose_enabled() -> bool:
    return env_flag("GIT_EVENT_MONITOR_VERBOSE") or env_flag("GIT_EVENT_MONITOR_DEBUG")


def _timeout_seconds() -> float:
    value = (os.getenv("GIT_EVENT_MONITOR_TIMEOUT_SECONDS") or "").strip()
    if not value:
        return DEFAULT_CALL_TIMEOUT_SECONDS
    try:
        seconds = float(value)
    except ValueError:
        return DEFAULT_CALL_TIMEOUT_SECONDS
    if seconds <= 0:
        return DEFAULT_CALL_TIMEOUT_SECONDS
    return seconds


def _locale() -> str:
    value = (os.getenv("GIT_EVENT_MONITOR_LOCALE") or "").strip().lower()
    return value if value in SUPPORTED_LOCALES else "en"


def _optional(name: str) -> Optional[str]:
    value = (os.getenv(name) or "").strip()
    return value or None


def mask_token(token: Optional[str]) -> str:
    """Hide all but the first and last four characters of a token."""
    if not token:
        return ""
    if len(token) <= 8:
        return "****"
    return token[:4] + "****" + token[-4:]


@dataclass
class Settings:
    github_token: Optional[str] = None
    gitee_token: Optional[str] = None
    github_api_base: str = DEFAULT_GITHUB_API_BASE
    gitee_api_base: str = DEFAULT_GITEE_API_BASE
    timeout_seconds: float = DEFAULT_CALL_TIMEOUT_SECONDS
    locale: str = "en"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment.

        Entry points call `load_dotenv()` first, so values from a local `.env`
        file are visible here too.
        """
        return cls(
            github_token=_optional("GITHUB_TOKEN"),
            gitee_token=_optional("GITEE_TOKEN"),
            github_api_base=(_optional("GITHUB_API_BASE") or DEFAULT_GITHUB_API_BASE).rstrip("/"),
            gitee_api_base=(_optional("GITEE_API_BASE") or DEFAULT_GITEE_API_BASE).rstrip("/"),
            timeout_seconds=_timeout_seconds(),
            locale=_locale(),
        )
