"""dumpjson: dump any value as JSON to the console and debugger, inline.

Public API:
    dump(value, label)   - Write value as JSON, return value (chainable)
    dumps(value)         - JSON text only, no output
    dumped(label)        - Decorator dumping a function's return value
    get_settings()       - Process-wide DumpSettings (env/YAML loaded once)
    reset_settings()     - Reset for testing

Sinks are enabled per DumpSettings override (on/off/auto); "auto" asks
the probe whether a console or debugger is present.
"""

from dumpjson.api import dump, dumped, dumps
from dumpjson.errors import DumpJsonError, InvalidArgumentError, SerializationError
from dumpjson.output import Writer
from dumpjson.probes import FixedProbe, RuntimeProbe, SinkProbe
from dumpjson.settings import (
    DumpSettings,
    Override,
    SerializerOptions,
    get_settings,
    reset_settings,
)
from dumpjson.sinks import ConsoleSink, DebugSink, TextSink

__all__ = [
    # Core API
    "dump",
    "dumps",
    "dumped",
    "Writer",
    # Settings
    "DumpSettings",
    "SerializerOptions",
    "Override",
    "get_settings",
    "reset_settings",
    # Probes
    "SinkProbe",
    "RuntimeProbe",
    "FixedProbe",
    # Sinks
    "TextSink",
    "ConsoleSink",
    "DebugSink",
    # Errors
    "DumpJsonError",
    "InvalidArgumentError",
    "SerializationError",
]
