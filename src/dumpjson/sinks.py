"""Text sinks: line-oriented destinations for dump output."""

from __future__ import annotations

import logging
import sys
from typing import Protocol, TextIO, runtime_checkable

DEBUG_LOGGER_NAME = "dumpjson.debug"


@runtime_checkable
class TextSink(Protocol):
    """Where label and JSON text lines get written."""

    def write_line(self, text: str) -> None: ...


class ConsoleSink:
    """Write lines to a console stream (sys.stdout unless given one).

    sys.stdout is looked up on every write so redirection done after
    construction (contextlib.redirect_stdout, pytest capture) is honoured.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def write_line(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        if stream is None:
            return
        try:
            stream.write(text + "\n")
            stream.flush()
        except BrokenPipeError:
            # Reader went away (e.g. `| head`); nothing left to print to.
            pass


class DebugSink:
    """Debugger log channel: one logging record per line.

    Debugger consoles and IDE log panes pick these up through whatever
    handlers the host configured; nothing is written when no handler
    accepts the record.
    """

    def __init__(
        self,
        logger_name: str = DEBUG_LOGGER_NAME,
        level: int = logging.DEBUG,
    ) -> None:
        self._logger = logging.getLogger(logger_name)
        self._level = level

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def write_line(self, text: str) -> None:
        self._logger.log(self._level, text)
