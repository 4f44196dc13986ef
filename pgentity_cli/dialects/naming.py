"""Identifier conversions for generated entities."""

import json
import keyword
import re
from typing import Iterable, List

SEPARATORS = ("_", " ", "-")

_TS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Attributes of the declarative base that a mapped column must not replace
DECLARATIVE_RESERVED = frozenset({"metadata", "registry"})


def to_camel_case(name: str) -> str:
    """Convert a table name to an entity class name.

    Separators are dropped and the character after each one is upper-cased.
    The start of the string counts as a separator, other characters are
    left untouched.

    Examples:
        >>> to_camel_case("user_account")
        'UserAccount'
        >>> to_camel_case("_leading")
        'Leading'
        >>> to_camel_case("Orders")
        'Orders'
    """
    camel_cased = []
    prev = SEPARATORS[0]
    for char in name:
        if char in SEPARATORS:
            prev = char
            continue
        if prev in SEPARATORS:
            camel_cased.append(char.upper())
        else:
            camel_cased.append(char)
        prev = char
    return "".join(camel_cased)


def to_python_identifier(name: str) -> str:
    """Turn a column name into a usable Python attribute name."""
    identifier = re.sub(r"\W", "_", name)
    if not identifier or identifier[0].isdigit():
        identifier = f"_{identifier}"
    if keyword.iskeyword(identifier) or identifier in DECLARATIVE_RESERVED:
        identifier = f"{identifier}_"
    return identifier


def to_python_identifiers(names: Iterable[str]) -> List[str]:
    """Convert column names to attribute names that are unique within a class.

    A name that collides with an earlier one gets "_" appended until it
    is free, e.g. columns ``class`` and ``class_`` become ``class_`` and
    ``class__``.
    """
    used = set()
    identifiers = []
    for name in names:
        identifier = to_python_identifier(name)
        while identifier in used:
            identifier = f"{identifier}_"
        used.add(identifier)
        identifiers.append(identifier)
    return identifiers


def to_ts_property(name: str) -> str:
    """Quote a column name when it is not a bare TypeScript identifier."""
    if _TS_IDENTIFIER.match(name):
        return name
    return json.dumps(name)
