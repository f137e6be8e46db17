"""Case-insensitive lookup of dotted field paths in objects, mappings and sequences."""

from __future__ import annotations

import dataclasses
import math
import numbers
from collections.abc import Mapping, Sequence
from contextlib import suppress
from typing import Any

_TEXT = (str, bytes, bytearray)


def _is_namedtuple(value: Any) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def _is_sequence(value: Any) -> bool:
    """True for list-like values that a field path walks through."""
    return (
        isinstance(value, Sequence)
        and not isinstance(value, _TEXT)
        and not _is_namedtuple(value)
    )


def _is_record(value: Any) -> bool:
    """True for objects whose attributes can be addressed as fields."""
    if value is None or isinstance(value, (*_TEXT, numbers.Number, Mapping)):
        return False
    if _is_sequence(value):
        return False
    return (
        (dataclasses.is_dataclass(value) and not isinstance(value, type))
        or _is_namedtuple(value)
        or hasattr(value, "__dict__")
        or hasattr(type(value), "__slots__")
    )


def _field_names(value: Any) -> list[str]:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        names = [f.name for f in dataclasses.fields(value)]
    elif _is_namedtuple(value):
        names = list(value._fields)
    else:
        names = []
        for cls in type(value).__mro__:
            slots = cls.__dict__.get("__slots__", ())
            names.extend((slots,) if isinstance(slots, str) else slots)
        names.extend(getattr(value, "__dict__", {}))
    return [name for name in dict.fromkeys(names) if not name.startswith("_")]


def get_field(value: Any, name: str) -> Any:
    """Return the field or string-keyed entry of ``value`` matching ``name`` case-insensitively.

    Raises KeyError when there is no such field.
    """
    wanted = name.casefold()
    if isinstance(value, Mapping):
        for key, item in value.items():
            if isinstance(key, str) and key.casefold() == wanted:
                return item
        raise KeyError(name)
    for field_name in _field_names(value):
        if field_name.casefold() == wanted:
            return getattr(value, field_name)
    raise KeyError(name)


def get_field_values(item: Any, field_path: str) -> list[Any]:
    """Return every value reached by the dotted ``field_path`` from ``item``.

    Sequences met along the way are fanned out, ``None`` values are skipped
    and sequences at the leaf are flattened one level. Raises KeyError when a
    path segment matches nothing.
    """
    current = [item]
    for part in field_path.split("."):
        found: list[Any] = []
        for value in current:
            if value is None:
                continue
            if _is_sequence(value):
                for element in value:
                    if element is None:
                        continue
                    if _is_record(element) or isinstance(element, Mapping):
                        with suppress(KeyError):
                            found.append(get_field(element, part))
                    else:
                        found.append(element)
            elif _is_record(value) or isinstance(value, Mapping):
                with suppress(KeyError):
                    found.append(get_field(value, part))
            else:
                found.append(value)
        if not found:
            raise KeyError(f"field {part!r} not found in path {field_path!r}")
        current = found

    flat: list[Any] = []
    for value in current:
        if _is_sequence(value):
            flat.extend(value)
        else:
            flat.append(value)
    return flat


def is_zero(value: Any) -> bool:
    """True when ``value`` counts as null: None, empty text or sequence, zero, False.

    Objects and mappings that are present are never null.
    """
    if value is None:
        return True
    if isinstance(value, _TEXT):
        return len(value) == 0
    if isinstance(value, bool):
        return not value
    if isinstance(value, float):
        return value == 0 and math.copysign(1.0, value) > 0
    if isinstance(value, numbers.Number):
        return value == 0
    if _is_sequence(value):
        return len(value) == 0
    return False