"""Error taxonomy for dumpjson.

Sink unavailability is never an error: a missing console or debugger is
skipped silently. Only bad configuration and unencodable objects raise.
"""

from __future__ import annotations


class DumpJsonError(Exception):
    """Base class for all dumpjson errors."""


class InvalidArgumentError(DumpJsonError, ValueError):
    """A configuration value was rejected. The previous value is kept."""


class SerializationError(DumpJsonError):
    """The object graph could not be converted to JSON text.

    The encoder's original TypeError/ValueError is available as __cause__.
    """
