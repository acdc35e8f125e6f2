"""Environment-driven settings.

Values are read on every call so tests and long-lived servers pick up
changes without a restart.
"""

from __future__ import annotations

import os

MAX_LIST_ENTRIES = 100
MAX_TEXT_CHARS = 200_000
LOG_TAIL_LINES = 10
ERROR_TAIL_LINES = 20

CFR_FILENAME = "cfr-0.152.jar"


def _env_str(key: str, default: str) -> str:
    value = os.environ.get(key, "").strip()
    return value or default


def log_level() -> str:
    return _env_str("JAR_VIEWER_LOG_LEVEL", "INFO").upper()


def log_format() -> str:
    return _env_str("JAR_VIEWER_LOG_FORMAT", "console").lower()


def cfr_jar_override() -> str | None:
    """Explicit decompiler jar path, if configured."""
    return os.environ.get("JAR_VIEWER_CFR_JAR") or None


def java_executable() -> str:
    return _env_str("JAR_VIEWER_JAVA", "java")


def javap_executable() -> str:
    return _env_str("JAR_VIEWER_JAVAP", "javap")
