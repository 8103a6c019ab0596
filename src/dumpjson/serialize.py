"""Object -> JSON text.

Encoding is the standard json encoder's job. This module supplies the
conversion hook that turns everything the encoder does not know natively
(dataclasses, models, plain objects, dates, enums, sets, bytes) into
dicts, lists and scalars, one level at a time, so the encoder's own cycle
detection still sees every object in the graph.
"""

from __future__ import annotations

import base64
import dataclasses
import inspect
import json
import math
from collections.abc import Collection, Iterable, Mapping
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any, Callable
from uuid import UUID

from dumpjson.errors import SerializationError
from dumpjson.naming import NamingPolicy
from dumpjson.settings import SerializerOptions


def serialize(obj: Any, options: SerializerOptions | None = None) -> str:
    """Serialize obj to JSON text.

    Raises:
        SerializationError: unsupported value, non-string mapping key or
            reference cycle. The encoder's exception is chained.
    """
    options = options or SerializerOptions()
    try:
        return json.dumps(
            obj,
            indent=options.indent,
            sort_keys=options.sort_keys,
            ensure_ascii=options.ensure_ascii,
            allow_nan=False,
            default=make_converter(options),
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(
            f"Cannot serialize {type(obj).__name__}: {exc}"
        ) from exc


def make_converter(options: SerializerOptions) -> Callable[[Any], Any]:
    """Build the json `default` hook for the given options."""
    namer = options.member_namer()
    omit_none = options.omit_none
    fallback = options.default

    def convert(obj: Any) -> Any:
        if fallback is not None:
            try:
                return fallback(obj)
            except TypeError:
                pass  # not the caller's type; try the built-in conversions

        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            members = (
                (f.name, getattr(obj, f.name)) for f in dataclasses.fields(obj)
            )
            return _members(members, namer, omit_none)

        model_fields = getattr(type(obj), "model_fields", None)
        if isinstance(model_fields, dict) and hasattr(obj, "model_dump"):
            members = ((name, getattr(obj, name)) for name in model_fields)
            return _members(members, namer, omit_none)

        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, (date, time)):
            return obj.isoformat()
        if isinstance(obj, timedelta):
            return str(obj)
        if isinstance(obj, Decimal):
            value = float(obj)
            if not math.isfinite(value):
                raise ValueError(f"Decimal {obj} has no finite JSON number form")
            return value
        if isinstance(obj, (UUID, PurePath)):
            return str(obj)
        if isinstance(obj, (bytes, bytearray, memoryview)):
            return base64.b64encode(bytes(obj)).decode("ascii")
        if isinstance(obj, Mapping):
            return dict(obj)
        # Iterators are one-shot; listing them would drain the caller's object.
        if isinstance(obj, Collection) and not isinstance(obj, type):
            return list(obj)

        attributes = _public_attributes(obj)
        if attributes is not None:
            return _members(attributes, namer, omit_none)

        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

    return convert


def _members(
    items: Iterable[tuple[str, Any]],
    namer: NamingPolicy | None,
    omit_none: bool,
) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for name, value in items:
        if name.startswith("_"):
            continue
        if omit_none and value is None:
            continue
        out[namer(name) if namer else name] = value
    return out


def _public_attributes(obj: Any) -> list[tuple[str, Any]] | None:
    """Instance attributes of a plain object, or None if it has none to offer.

    Classes, modules and functions are not data and are rejected.
    """
    if isinstance(obj, type) or inspect.ismodule(obj) or inspect.isroutine(obj):
        return None

    names: list[str] = []
    for klass in reversed(type(obj).__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot not in ("__dict__", "__weakref__") and hasattr(obj, slot):
                names.append(slot)

    instance_dict = getattr(obj, "__dict__", None)
    if instance_dict is None and not names:
        return None
    if instance_dict:
        names.extend(n for n in instance_dict if n not in names)
    return [(n, getattr(obj, n)) for n in names]
