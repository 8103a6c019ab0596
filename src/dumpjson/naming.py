"""Member naming policies: rename object members on the way to JSON.

Policies apply to dataclass fields and object attributes only. Mapping
keys are data, not members, and pass through untouched.
"""

from __future__ import annotations

import re
from typing import Callable

NamingPolicy = Callable[[str], str]

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CASE_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_SEPARATORS = re.compile(r"[_\-\s]+")


def split_words(name: str) -> list[str]:
    """Split an identifier on underscores, dashes and case changes.

    >>> split_words("userId")
    ['user', 'Id']
    >>> split_words("HTTPResponse_code")
    ['HTTP', 'Response', 'code']
    """
    spaced = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    spaced = _CASE_BOUNDARY.sub(r"\1_\2", spaced)
    return [w for w in _SEPARATORS.split(spaced) if w]


def camel_case(name: str) -> str:
    words = split_words(name)
    if not words:
        return name
    return words[0].lower() + "".join(w.capitalize() for w in words[1:])


def pascal_case(name: str) -> str:
    words = split_words(name)
    if not words:
        return name
    return "".join(w.capitalize() for w in words)


def snake_case(name: str) -> str:
    words = split_words(name)
    if not words:
        return name
    return "_".join(w.lower() for w in words)


def kebab_case(name: str) -> str:
    words = split_words(name)
    if not words:
        return name
    return "-".join(w.lower() for w in words)


NAMING_POLICIES: dict[str, NamingPolicy] = {
    "camel": camel_case,
    "pascal": pascal_case,
    "snake": snake_case,
    "kebab": kebab_case,
}
