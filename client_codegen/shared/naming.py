"""Naming utilities for code generation."""

from __future__ import annotations

import json
import re
from functools import lru_cache
from typing import Any

# Types that are built into TypeScript and never need an import.
TS_GENERAL_TYPES: frozenset[str] = frozenset({
    "any",
    "blobpart",
    "boolean",
    "never",
    "null",
    "number",
    "object",
    "string",
    "undefined",
    "unknown",
    "void",
})

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _split_words(value: str) -> list[str]:
    # Insert boundaries before caps so "petStore" and "HTTPError" split cleanly
    value = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", value)
    value = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", value)
    return [part for part in re.split(r"[^A-Za-z0-9]+", value) if part]


@lru_cache(maxsize=1024)
def to_pascal_case(value: str) -> str:
    """Convert a string to PascalCase.

    Uses caching for repeated calls with the same input.

    Examples:
        >>> to_pascal_case("hello_world")
        'HelloWorld'
        >>> to_pascal_case("hello-world")
        'HelloWorld'
        >>> to_pascal_case("helloWorld")
        'HelloWorld'
    """
    return "".join(part[0].upper() + part[1:].lower() for part in _split_words(value))


@lru_cache(maxsize=1024)
def to_camel_case(value: str) -> str:
    """Convert a string to camelCase.

    Examples:
        >>> to_camel_case("PetStore")
        'petStore'
        >>> to_camel_case("Pet | Error")
        'petError'
    """
    pascal = to_pascal_case(value)
    if not pascal:
        return pascal
    return pascal[0].lower() + pascal[1:]


def is_identifier(value: str) -> bool:
    """Return True when ``value`` can be used as a bare TypeScript property key."""
    return bool(_IDENTIFIER_RE.match(value))


def quote_literal(value: Any) -> str:
    """Render a default value as a TypeScript literal."""
    return json.dumps(value)


def is_general_type(name: str) -> bool:
    """Return True for built-in TypeScript types (case-insensitive)."""
    return name.lower() in TS_GENERAL_TYPES
