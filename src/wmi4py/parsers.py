"""Parsers for the line-oriented text returned by the WMI engines.

Every parser is pure and total: empty input yields an empty container,
trailing blank lines are ignored and both CRLF and LF line endings are
accepted. Malformed lines are skipped, never reported.
"""

from __future__ import annotations

import re

NEWLINE_REGEX = re.compile(r"\r?\n")
SPACE_REGEX = re.compile(r"\s+")
# A blank line (optionally holding only spaces/tabs) separates two objects
OBJECT_SEPARATOR_REGEX = re.compile(r"\r?\n[ \t]*\r?\n")

INTERNAL_PREFIX = "_"

# Members every .NET object exposes; never WMI properties
UNIVERSAL_METHODS = frozenset({"Equals", "GetHashCode", "GetType", "ToString"})


def _lines(raw: str) -> list[str]:
    return NEWLINE_REGEX.split(raw) if raw else []


def parse_class_list(raw: str) -> list[str]:
    """Return the sorted, de-duplicated class names found in ``raw``.

    Lines starting with ``_`` are system classes and are dropped, as is any
    whitespace-separated token that starts with ``_``.
    """
    classes: set[str] = set()
    for line in _lines(raw):
        if not line or line.startswith(INTERNAL_PREFIX):
            continue
        for token in SPACE_REGEX.split(line):
            if token and not token.startswith(INTERNAL_PREFIX):
                classes.add(token)
    return sorted(classes)


def parse_property_list(raw: str) -> list[str]:
    """Return one property name per non-empty line, in output order."""
    properties = []
    for line in _lines(raw):
        name = line.strip()
        if name and name not in UNIVERSAL_METHODS:
            properties.append(name)
    return properties


def parse_flat_object(raw: str) -> dict[str, str]:
    """Parse ``Name : value`` lines into a single mapping.

    The line is split at its first colon, so values may contain colons.
    Lines without a colon or with an empty name are skipped.

    Warning: output holding several objects is flattened and a repeated
    property name overwrites the earlier value. Use
    :func:`parse_object_list` for multi-instance classes.
    """
    found: dict[str, str] = {}
    for line in _lines(raw):
        if not line:
            continue
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        if key:
            found[key] = value.strip()
    return found


def parse_object_list(raw: str) -> list[dict[str, str]]:
    """Parse blank-line separated blocks into one mapping per object.

    Whitespace-only blocks, such as the blank tail of the output, produce no
    entry. Any other block yields exactly one mapping, empty when it holds no
    ``Name : value`` line, so indexes line up with the instances printed.
    """
    objects = []
    for block in OBJECT_SEPARATOR_REGEX.split(raw):
        if not block.strip():
            continue
        objects.append(parse_flat_object(block))
    return objects
