"""Dump settings: serializer options + per-sink tri-state overrides.

Priority: env var > YAML file > default.
Env vars use DUMPJSON_{KEY} convention (e.g. DUMPJSON_CONSOLE=off).
YAML file default: ~/.dumpjson/settings.yaml

The process-wide instance from get_settings() is shared mutable state.
Nothing here locks: configure it once at startup, before other threads
start dumping. Concurrent writers race and the last one wins.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Callable

import yaml

from dumpjson.errors import InvalidArgumentError
from dumpjson.naming import NAMING_POLICIES, NamingPolicy

_TRUTHY = {"1", "true", "on", "yes"}
_FALSY = {"0", "false", "off", "no"}
_DEFAULT_PATH = Path("~/.dumpjson/settings.yaml").expanduser()
_KEYS = (
    "console",
    "debug",
    "indent",
    "naming_policy",
    "omit_none",
    "sort_keys",
    "ensure_ascii",
)


class Override(str, Enum):
    """Tri-state sink switch: force on, force off, or detect at runtime."""

    ON = "on"
    OFF = "off"
    AUTO = "auto"

    @classmethod
    def coerce(cls, value: Any) -> Override:
        """Accept an Override, a bool, 0/1, None (auto) or an on/off/auto string."""
        if isinstance(value, Override):
            return value
        if value is None:
            return cls.AUTO
        if isinstance(value, bool):
            return cls.ON if value else cls.OFF
        if isinstance(value, int) and value in (0, 1):
            return cls.ON if value else cls.OFF
        if isinstance(value, str):
            text = value.strip().lower()
            if text in ("", "auto"):
                return cls.AUTO
            if text in _TRUTHY:
                return cls.ON
            if text in _FALSY:
                return cls.OFF
        raise InvalidArgumentError(
            f"Invalid sink override: {value!r}. Expected on, off or auto."
        )

    def resolve(self, detected: bool) -> bool:
        """Apply the override to a runtime detection result."""
        if self is Override.ON:
            return True
        if self is Override.OFF:
            return False
        return detected


@dataclass(frozen=True)
class SerializerOptions:
    """Options handed to the JSON encoder.

    Defaults give human readable, two-space indented output with member
    names exactly as declared.
    """

    indent: int | None = 2
    # None | "camel" | "pascal" | "snake" | "kebab" | callable(name) -> name
    naming_policy: str | NamingPolicy | None = None
    omit_none: bool = False
    sort_keys: bool = False
    ensure_ascii: bool = False
    # Fallback converter for values the built-in conversion rejects
    default: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        if self.indent is not None and (
            isinstance(self.indent, bool)
            or not isinstance(self.indent, int)
            or self.indent < 0
        ):
            raise InvalidArgumentError(
                f"indent must be a non-negative int or None, got {self.indent!r}"
            )
        if isinstance(self.naming_policy, str):
            if self.naming_policy not in NAMING_POLICIES:
                raise InvalidArgumentError(
                    f"Unknown naming policy: {self.naming_policy!r}. "
                    f"Available: {list(NAMING_POLICIES)}."
                )
        elif self.naming_policy is not None and not callable(self.naming_policy):
            raise InvalidArgumentError(
                f"naming_policy must be a name or a callable, got {self.naming_policy!r}"
            )

    def member_namer(self) -> NamingPolicy | None:
        """The naming callable to apply to object members, if any."""
        if isinstance(self.naming_policy, str):
            return NAMING_POLICIES[self.naming_policy]
        return self.naming_policy

    def with_changes(self, **changes: Any) -> SerializerOptions:
        return replace(self, **changes)


class DumpSettings:
    """Mutable settings shared by reference with every Writer that uses it."""

    def __init__(
        self,
        serializer_options: SerializerOptions | None = None,
        console_override: Override | bool | str | None = Override.AUTO,
        debug_override: Override | bool | str | None = Override.AUTO,
    ) -> None:
        self._serializer_options = SerializerOptions()
        if serializer_options is not None:
            self.serializer_options = serializer_options
        self._console_override = Override.coerce(console_override)
        self._debug_override = Override.coerce(debug_override)

    @property
    def serializer_options(self) -> SerializerOptions:
        return self._serializer_options

    @serializer_options.setter
    def serializer_options(self, value: SerializerOptions) -> None:
        if value is None:
            raise InvalidArgumentError("serializer_options cannot be None")
        if not isinstance(value, SerializerOptions):
            raise InvalidArgumentError(
                f"serializer_options must be SerializerOptions, got {type(value).__name__}"
            )
        self._serializer_options = value

    @property
    def console_override(self) -> Override:
        return self._console_override

    @console_override.setter
    def console_override(self, value: Override | bool | str | None) -> None:
        self._console_override = Override.coerce(value)

    @property
    def debug_override(self) -> Override:
        return self._debug_override

    @debug_override.setter
    def debug_override(self, value: Override | bool | str | None) -> None:
        self._debug_override = Override.coerce(value)

    @classmethod
    def load(cls, path: Path | None = None) -> DumpSettings:
        """Load settings from YAML file, then override with env vars."""
        file_path = path or _DEFAULT_PATH
        values: dict[str, Any] = {}

        if file_path.exists():
            raw = yaml.safe_load(file_path.read_text()) or {}
            if isinstance(raw, dict):
                for k, v in raw.items():
                    if k in _KEYS:
                        values[k] = v

        for key in _KEYS:
            env_key = f"DUMPJSON_{key.upper()}"
            if env_key in os.environ:
                values[key] = os.environ[env_key]

        return cls.from_dict(values)

    @classmethod
    def from_dict(cls, values: dict[str, Any]) -> DumpSettings:
        """Build settings from flat config values (YAML/env shaped)."""
        options: dict[str, Any] = {}
        if "indent" in values:
            options["indent"] = _parse_indent(values["indent"])
        if values.get("naming_policy") not in (None, ""):
            options["naming_policy"] = str(values["naming_policy"]).lower()
        for key in ("omit_none", "sort_keys", "ensure_ascii"):
            if key in values:
                options[key] = _parse_bool(key, values[key])

        return cls(
            serializer_options=SerializerOptions(**options),
            console_override=values.get("console"),
            debug_override=values.get("debug"),
        )

    def to_dict(self) -> dict[str, Any]:
        opts = self._serializer_options
        policy = opts.naming_policy
        if policy is not None and not isinstance(policy, str):
            policy = getattr(policy, "__name__", repr(policy))
        return {
            "console": self._console_override.value,
            "debug": self._debug_override.value,
            "indent": opts.indent,
            "naming_policy": policy,
            "omit_none": opts.omit_none,
            "sort_keys": opts.sort_keys,
            "ensure_ascii": opts.ensure_ascii,
        }

    def __repr__(self) -> str:
        return f"DumpSettings({self.to_dict()!r})"


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False
    raise InvalidArgumentError(f"Invalid boolean for {key}: {value!r}")


def _parse_indent(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Invalid indent: {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip().lower()
    if text in ("", "none", "null", "compact"):
        return None
    try:
        return int(text)
    except ValueError:
        raise InvalidArgumentError(f"Invalid indent: {value!r}") from None


# Singleton
_settings: DumpSettings | None = None


def get_settings(path: Path | None = None) -> DumpSettings:
    """Get the process-wide DumpSettings, loading it on first use."""
    global _settings
    if _settings is None:
        _settings = DumpSettings.load(path)
    return _settings


def reset_settings() -> None:
    """Reset for testing."""
    global _settings
    _settings = None
