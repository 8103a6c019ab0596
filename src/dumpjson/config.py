"""Logging configuration, env-var driven.

All settings have safe defaults. Zero config required.

    DUMPJSON_LOG_LEVEL=INFO     (default)
    DUMPJSON_LOG_FORMAT=json    (default) | console
    DUMPJSON_LOG_PATH=<file>    append JSON lines there instead of stderr
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class LoggingConfig:
    """Logging configuration, env-var driven."""

    log_level: str = field(
        default_factory=lambda: os.environ.get("DUMPJSON_LOG_LEVEL", "INFO")
    )

    log_format: str = field(
        default_factory=lambda: os.environ.get("DUMPJSON_LOG_FORMAT", "json")
    )  # "json" | "console" (dev-friendly renderer)

    log_path: str | None = field(
        default_factory=lambda: os.environ.get("DUMPJSON_LOG_PATH")
    )
