"""Public entry points: dump(), dumps() and the @dumped decorator.

Usage:
    total = dump(compute_total(order), "total").amount

    @dumped("fetch_user result")
    def fetch_user(user_id: str) -> User: ...
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, TypeVar

from dumpjson.output import Writer, default_writer
from dumpjson.serialize import serialize
from dumpjson.settings import SerializerOptions, get_settings

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])


def dump(value: T, label: str | None = None, *, writer: Writer | None = None) -> T:
    """Write value as JSON (after label, if given) and return value unchanged."""
    return (writer or default_writer()).write(value, label)


def dumps(value: Any, options: SerializerOptions | None = None) -> str:
    """Return the JSON text dump() would write, without writing it.

    options defaults to the process-wide settings' serializer options.
    """
    if options is None:
        options = get_settings().serializer_options
    return serialize(value, options)


def dumped(label: str | None = None, *, writer: Writer | None = None) -> Callable[[F], F]:
    """Decorator: dump the function's return value, then return it.

    Args:
        label: Line written before the JSON. Defaults to the function's
               qualified name.
        writer: Writer to use. Defaults to the process-wide writer.
    """

    def decorator(fn: F) -> F:
        heading = label if label is not None else fn.__qualname__

        @functools.wraps(fn)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            return dump(fn(*args, **kwargs), heading, writer=writer)

        @functools.wraps(fn)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            return dump(await fn(*args, **kwargs), heading, writer=writer)

        if inspect.iscoroutinefunction(fn):
            return async_wrapper  # type: ignore[return-value]
        return sync_wrapper  # type: ignore[return-value]

    return decorator
