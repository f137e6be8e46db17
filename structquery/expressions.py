"""Comparison expressions that match a single field against literal values."""

from __future__ import annotations

import numbers
import operator
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from .errors import EvaluationError
from .fields import _is_sequence, get_field_values
from .humanize import _parse_float, _parse_int64
from .tokens import TokenType

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)

_TRUE = frozenset({"1", "t", "T", "true", "TRUE", "True"})

_ORDERING: dict[TokenType, Callable[[Any, Any], bool]] = {
    TokenType.EQ: operator.eq,
    TokenType.NE: operator.ne,
    TokenType.LT: operator.lt,
    TokenType.GT: operator.gt,
    TokenType.LE: operator.le,
    TokenType.GE: operator.ge,
}


def _compare_ordered(op: TokenType, left: Any, right: Any) -> bool:
    compare = _ORDERING.get(op)
    return compare is not None and bool(compare(left, right))


def _compare_text(op: TokenType, text: str, literal: str) -> bool:
    if op is TokenType.CONTAINS:
        return literal in text
    return _compare_ordered(op, text, literal)


def _compare_bool(op: TokenType, flag: bool, literal: str) -> bool:
    if op not in (TokenType.EQ, TokenType.NE):
        return False
    return _compare_ordered(op, flag, literal in _TRUE)


def _lenient_int(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        return 0
    return max(_INT64_MIN, min(_INT64_MAX, int(text)))


def _lenient_float(text: str) -> float:
    try:
        return _parse_float(text)
    except ValueError:
        return 0.0


class Expression(ABC):
    """A node of a parsed query."""

    @abstractmethod
    def evaluate(self, item: Any) -> bool:
        """Return whether ``item`` matches; raise EvaluationError if it cannot be decided."""


@dataclass
class ComparisonExpression(Expression):
    """``field <operator> value``, matching when any value at the field path does."""

    field: str
    operator: TokenType
    value: str

    def evaluate(self, item: Any) -> bool:
        try:
            values = get_field_values(item, self.field)
        except KeyError:
            return False

        last_error: EvaluationError | None = None
        for value in values:
            try:
                if self.compare_value(value):
                    return True
            except EvaluationError as exc:
                last_error = exc
        if last_error is not None:
            raise last_error
        return False

    def compare_value(self, value: Any) -> bool:
        """Compare one field value with the literal; raise EvaluationError on a bad number."""
        op = self.operator
        if value is None:
            return False
        if isinstance(value, str):
            return _compare_text(op, value, self.value)
        if isinstance(value, bool):
            return _compare_bool(op, value, self.value)
        if isinstance(value, numbers.Integral):
            try:
                literal = _parse_int64(self.value.replace(",", ""))
            except ValueError as exc:
                raise EvaluationError(
                    f"invalid integer value '{self.value}' for comparison "
                    f"with field '{self.field}': {exc}"
                ) from exc
            return _compare_ordered(op, int(value), literal)
        if isinstance(value, numbers.Real):
            try:
                number = _parse_float(self.value.replace(",", ""))
            except ValueError as exc:
                raise EvaluationError(
                    f"invalid floating point value '{self.value}' for comparison "
                    f"with field '{self.field}': {exc}"
                ) from exc
            return _compare_ordered(op, float(value), number)
        if _is_sequence(value):
            texts = [element for element in value if isinstance(element, str)]
            if op is TokenType.CONTAINS:
                return any(self.value in text for text in texts)
            if op is TokenType.EQ:
                return self.value in texts
            if op is TokenType.NE:
                return self.value not in texts
        return False


@dataclass
class AnyExpression(Expression):
    """``ANY(field) <operator> ANY(values...)``: matches when any pair compares true."""

    field: str
    operator: TokenType
    values: Sequence[str]

    def __post_init__(self) -> None:
        self.values = tuple(self.values)

    def evaluate(self, item: Any) -> bool:
        try:
            field_values = get_field_values(item, self.field)
        except KeyError:
            return False
        return any(
            self.compare_value(value, literal)
            for value in field_values
            for literal in self.values
        )

    def compare_value(self, value: Any, literal: str) -> bool:
        """Compare one field value with one literal; unparseable numbers never raise."""
        op = self.operator
        if value is None:
            return False
        if isinstance(value, str):
            return _compare_text(op, value, literal)
        if isinstance(value, bool):
            return _compare_bool(op, value, literal)
        if isinstance(value, numbers.Integral):
            return _compare_ordered(op, int(value), _lenient_int(literal))
        if isinstance(value, numbers.Real):
            return _compare_ordered(op, float(value), _lenient_float(literal))
        if _is_sequence(value):
            return self._compare_elements(value, literal)
        return False

    def _compare_elements(self, elements: Sequence[Any], literal: str) -> bool:
        op = self.operator
        for element in elements:
            if isinstance(element, str):
                if op in (TokenType.EQ, TokenType.NE, TokenType.CONTAINS) and _compare_text(
                    op, element, literal
                ):
                    return True
            elif isinstance(element, bool):
                continue
            elif isinstance(element, numbers.Integral):
                try:
                    number = _parse_int64(literal)
                except ValueError:
                    return False
                if _compare_ordered(op, int(element), number):
                    return True
            elif isinstance(element, numbers.Real):
                try:
                    number = _parse_float(literal)
                except ValueError:
                    return False
                if _compare_ordered(op, float(element), number):
                    return True
        return False