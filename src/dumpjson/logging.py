"""Structured logging for the package, through structlog's stdlib bridge.

Two kinds of records reach the root logger:
    - plain records from DebugSink (one per dumped line, on "dumpjson.debug")
    - key=value events from get_logger(), e.g. "dump.sinks.resolved"

setup_logging() installs one handler whose structlog ProcessorFormatter
renders both as JSON (or the dev console renderer). Without it, records
go wherever the host's own handlers send them.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from dumpjson.config import LoggingConfig

_handler: logging.Handler | None = None


def _formatter(config: LoggingConfig) -> logging.Formatter:
    if config.log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            # kwargs from get_logger() ride on the record as extras
            structlog.stdlib.ExtraAdder(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def setup_logging(
    config: LoggingConfig | None = None, stream: IO[str] | None = None
) -> None:
    """Attach the package's handler to the root logger.

    Args:
        config: Level, renderer and optional file path. Defaults to the
            DUMPJSON_LOG_* environment.
        stream: Where to write when no file path is configured
            (default: stderr).

    Repeat calls replace the handler installed here; handlers owned by
    the host (pytest caplog, IDE log panes) are left alone.
    """
    global _handler

    if config is None:
        from dumpjson.config import LoggingConfig

        config = LoggingConfig()

    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(
            f"Unknown log level: {config.log_level!r}. "
            f"Available: DEBUG, INFO, WARNING, ERROR, CRITICAL."
        )

    if config.log_path:
        path = Path(config.log_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(_formatter(config))

    shutdown_logging()
    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    _handler = handler


def get_logger(name: str = "", **kwargs: Any) -> Any:
    """structlog BoundLogger over the stdlib logger `name`.

    Events become ordinary logging records (key=value pairs as extras),
    so they obey stdlib levels and handlers whether or not setup_logging()
    ran.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.render_to_log_kwargs,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        **kwargs,
    )


def shutdown_logging() -> None:
    """Remove and close the handler installed by setup_logging()."""
    global _handler
    if _handler is None:
        return
    logging.getLogger().removeHandler(_handler)
    _handler.close()
    _handler = None
