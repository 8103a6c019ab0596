"""The writer: serialize once, write label + JSON to every enabled sink.

Sink resolution, per sink:
    override ON   -> enabled
    override OFF  -> disabled
    override AUTO -> whatever the probe detected

Overrides are read from the settings on every call. Probe answers are
cached by the probe itself, so the default RuntimeProbe detects once per
process.
The resolved sink set is logged when it changes, not on every write.

Write order is debug sink first, then console. Every enabled sink gets
the label before the JSON body.
"""

from __future__ import annotations

from typing import TypeVar

from dumpjson.logging import get_logger
from dumpjson.probes import SinkProbe, default_probe
from dumpjson.serialize import serialize
from dumpjson.settings import DumpSettings, get_settings
from dumpjson.sinks import ConsoleSink, DebugSink, TextSink

T = TypeVar("T")


class Writer:
    """Dump values to the console and debugger sinks.

    Args:
        settings: Shared settings. None means the process-wide settings
            from get_settings(), looked up on every call.
        probe: Sink availability probe. None means the process default.
        console: Console sink (default: stdout).
        debug: Debugger log sink (default: the "dumpjson.debug" logger).
    """

    def __init__(
        self,
        settings: DumpSettings | None = None,
        probe: SinkProbe | None = None,
        console: TextSink | None = None,
        debug: TextSink | None = None,
    ) -> None:
        self._settings = settings
        self._probe = probe
        self._console = console if console is not None else ConsoleSink()
        self._debug = debug if debug is not None else DebugSink()
        self._resolved: tuple[bool, bool] | None = None

    @property
    def settings(self) -> DumpSettings:
        return self._settings if self._settings is not None else get_settings()

    @property
    def probe(self) -> SinkProbe:
        return self._probe if self._probe is not None else default_probe()

    def enabled_sinks(self) -> list[TextSink]:
        """Sinks that should receive output right now, in write order."""
        settings = self.settings
        probe = self.probe
        to_debug = settings.debug_override.resolve(probe.debugger_attached())
        to_console = settings.console_override.resolve(probe.console_available())

        if self._resolved != (to_debug, to_console):
            self._resolved = (to_debug, to_console)
            get_logger(__name__).debug(
                "dump.sinks.resolved", debug=to_debug, console=to_console
            )

        sinks: list[TextSink] = []
        if to_debug:
            sinks.append(self._debug)
        if to_console:
            sinks.append(self._console)
        return sinks

    def write(self, obj: T, label: str | None = None) -> T:
        """Dump obj (after label, if any) and return obj itself.

        Nothing is serialized when no sink is enabled.

        Raises:
            SerializationError: obj cannot be encoded. No sink has been
                written to when this is raised.
        """
        sinks = self.enabled_sinks()
        if not sinks:
            return obj

        text = serialize(obj, self.settings.serializer_options)

        if label:
            for sink in sinks:
                sink.write_line(label)
        if text:
            for sink in sinks:
                sink.write_line(text)
        return obj


# Default writer bound to the process-wide settings and probe
_default_writer: Writer | None = None


def default_writer() -> Writer:
    global _default_writer
    if _default_writer is None:
        _default_writer = Writer()
    return _default_writer


def reset_default_writer() -> None:
    """Reset for testing."""
    global _default_writer
    _default_writer = None
