"""Conversion of human-friendly sizes and numbers in query text to plain numbers."""

from __future__ import annotations

import math
import re
from decimal import Decimal

_UINT64_LIMIT = 2**64
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_BYTE_SIZES = {
    "": 1,
    "b": 1,
    "k": 10**3,
    "kb": 10**3,
    "ki": 2**10,
    "kib": 2**10,
    "m": 10**6,
    "mb": 10**6,
    "mi": 2**20,
    "mib": 2**20,
    "g": 10**9,
    "gb": 10**9,
    "gi": 2**30,
    "gib": 2**30,
    "t": 10**12,
    "tb": 10**12,
    "ti": 2**40,
    "tib": 2**40,
    "p": 10**15,
    "pb": 10**15,
    "pi": 2**50,
    "pib": 2**50,
    "e": 10**18,
    "eb": 10**18,
    "ei": 2**60,
    "eib": 2**60,
}

_SI_SUFFIXES = {
    "K": 1e3, "k": 1e3,
    "M": 1e6, "m": 1e6,
    "G": 1e9, "g": 1e9,
    "T": 1e12, "t": 1e12,
    "P": 1e15, "p": 1e15,
    "E": 1e18, "e": 1e18,
}

_DECIMAL_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?\d+", re.ASCII
)
_INFINITY = re.compile(r"[+-]?(?:inf|infinity)", re.IGNORECASE)
_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)
_LETTERS = re.compile(r"[A-Za-z]")

_QUERY_PIECE = re.compile(
    r"(?P<quoted>'(?:\\'|[^'])*'?)"
    r"|(?P<word>[A-Za-z0-9_.][A-Za-z0-9_.,]*)"
    r"|(?P<other>.)",
    re.DOTALL,
)


def _parse_float(text: str) -> float:
    """Parse a float with the strict syntax of a decimal/hex literal, inf or nan."""
    if _DECIMAL_FLOAT.fullmatch(text):
        value = float(text)
        if math.isinf(value):
            raise ValueError(f"value out of range: {text!r}")
        return value
    if _HEX_FLOAT.fullmatch(text):
        sign = -1.0 if text.startswith("-") else 1.0
        value = sign * float.fromhex(text.lstrip("+-"))
        if math.isinf(value):
            raise ValueError(f"value out of range: {text!r}")
        return value
    if _INFINITY.fullmatch(text):
        return -math.inf if text.startswith("-") else math.inf
    if text.lower() == "nan":
        return math.nan
    raise ValueError(f"invalid syntax: {text!r}")


def _parse_int64(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return value


def parse_bytes(text: str) -> int:
    """Parse a byte size such as ``10GB``, ``1.5 MiB`` or ``1,024`` into bytes.

    Decimal units (KB, MB, ...) are powers of 1000, binary units (KiB, MiB, ...)
    powers of 1024; unit names are case-insensitive. Raises ValueError.
    """
    prefix_length = 0
    has_comma = False
    for ch in text:
        if not (ch.isdecimal() or ch in ".,"):
            break
        has_comma = has_comma or ch == ","
        prefix_length += 1

    number = text[:prefix_length]
    if has_comma:
        number = number.replace(",", "")
    value = _parse_float(number)

    unit = text[prefix_length:].strip().lower()
    multiplier = _BYTE_SIZES.get(unit)
    if multiplier is None:
        raise ValueError(f"unhandled size name: {unit}")
    value *= multiplier
    if value >= _UINT64_LIMIT:
        raise ValueError(f"too large: {text}")
    return int(value)


def parse_humanized_number(text: str) -> float:
    """Parse a number with an optional SI suffix (K, M, G, T, P, E). Raises ValueError."""
    stripped = text.strip()
    if not stripped:
        raise ValueError("empty string")

    multiplier = _SI_SUFFIXES.get(stripped[-1])
    if multiplier is not None:
        try:
            return _parse_float(stripped[:-1]) * multiplier
        except ValueError:
            pass

    try:
        return _parse_float(stripped)
    except ValueError:
        raise ValueError(f"not a valid humanized number: {stripped}") from None


def parse_comma_separated_number(text: str) -> int:
    """Parse an integer written with comma separators such as ``1,234,567``.

    Only text that holds a comma and no decimal point is accepted. Raises ValueError.
    """
    stripped = text.strip()
    if not stripped:
        raise ValueError("empty string")
    if "," in stripped and "." not in stripped:
        try:
            return _parse_int64(stripped.replace(",", ""))
        except ValueError:
            pass
    raise ValueError(f"not a valid comma-separated number: {stripped}")


def _is_whole(value: float) -> bool:
    return math.isfinite(value) and _INT64_MIN <= value <= _INT64_MAX and value.is_integer()


def _format_general(value: float) -> str:
    """Shortest representation, exponent form below 1e-4 or from 1e6 upwards."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    point = len(digit_tuple) + exponent
    digits = "".join(map(str, digit_tuple)).rstrip("0") or "0"
    power = point - 1
    prefix = "-" if sign else ""

    if power < -4 or power >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{prefix}{mantissa}e{'+' if power >= 0 else '-'}{abs(power):02d}"
    if point <= 0:
        return f"{prefix}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return prefix + digits + "0" * (point - len(digits))
    return f"{prefix}{digits[:point]}.{digits[point:]}"


def _normalize_word(word: str) -> str:
    if _LETTERS.search(word):
        try:
            return str(parse_bytes(word))
        except ValueError:
            pass

    try:
        number = parse_humanized_number(word)
    except ValueError:
        pass
    else:
        return str(int(number)) if _is_whole(number) else _format_general(number)

    try:
        return str(parse_comma_separated_number(word))
    except ValueError:
        return word


def normalize_humanized_values(query: str) -> str:
    """Rewrite sizes such as ``10GB``, ``2.5K`` and ``1,000`` in ``query`` as plain numbers.

    Quoted strings are left untouched.
    """
    pieces = []
    for match in _QUERY_PIECE.finditer(query):
        word = match.group("word")
        pieces.append(match.group() if word is None else _normalize_word(word))
    return "".join(pieces)