"""
Registration identity grammar.

A registration argument is either a bus name (well-known or unique), an
object path on the caller's own connection, or garbage. The two grammars
never overlap: bus names cannot contain '/', object paths must start with it.
"""

import re
from enum import Enum

MAX_NAME_LENGTH = 255

_WELL_KNOWN_ELEMENT = re.compile(r"[A-Za-z_-][A-Za-z0-9_-]*")
_UNIQUE_ELEMENT = re.compile(r"[A-Za-z0-9_-]+")
_PATH_ELEMENT = re.compile(r"[A-Za-z0-9_]+")


class IdentityKind(str, Enum):
    """What a registration argument names."""
    BUS_NAME = "bus_name"
    OBJECT_PATH = "object_path"
    INVALID = "invalid"


def is_bus_name(name: str) -> bool:
    """Check a string against the bus name grammar (well-known or unique)."""
    if not isinstance(name, str) or not 0 < len(name) <= MAX_NAME_LENGTH:
        return False

    if name.startswith(":"):
        elements = name[1:].split(".")
        element_re = _UNIQUE_ELEMENT
    else:
        elements = name.split(".")
        element_re = _WELL_KNOWN_ELEMENT

    if len(elements) < 2:
        return False
    return all(element_re.fullmatch(element) for element in elements)


def is_object_path(path: str) -> bool:
    """Check a string against the object path grammar."""
    if not isinstance(path, str) or not path.startswith("/"):
        return False
    if path == "/":
        return True
    # Leading '/' gives an empty first element; anything else empty is a
    # doubled or trailing slash.
    elements = path.split("/")[1:]
    return all(_PATH_ELEMENT.fullmatch(element) for element in elements)


def classify(argument: str) -> IdentityKind:
    """Decide once which registration path an argument takes."""
    if is_bus_name(argument):
        return IdentityKind.BUS_NAME
    if is_object_path(argument):
        return IdentityKind.OBJECT_PATH
    return IdentityKind.INVALID


__all__ = [
    "IdentityKind",
    "is_bus_name",
    "is_object_path",
    "classify",
]
