"""Logical combinations of query expressions and null checks."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .errors import EvaluationError
from .expressions import ComparisonExpression, Expression
from .fields import _is_sequence, get_field_values, is_zero


def _matches(expression: Expression, item: Any) -> bool:
    """Evaluate ``expression``, treating an evaluation error as no match."""
    try:
        return expression.evaluate(item)
    except EvaluationError:
        return False


def _all_compare(comparisons: Iterable[ComparisonExpression], value: Any) -> bool:
    for comparison in comparisons:
        try:
            if not comparison.compare_value(value):
                return False
        except EvaluationError:
            return False
    return True


@dataclass
class NotExpression(Expression):
    """Negation of another expression; evaluation errors pass through."""

    expression: Expression

    def evaluate(self, item: Any) -> bool:
        return not self.expression.evaluate(item)


@dataclass
class ConjunctionExpression(Expression):
    """Logical AND of its expressions; an empty conjunction never matches."""

    expressions: list[Expression] = field(default_factory=list)

    def evaluate(self, item: Any) -> bool:
        if not self.expressions:
            return False
        if len(self.expressions) == 1:
            return self.expressions[0].evaluate(item)

        comparisons = self._same_field_comparisons()
        if comparisons is not None:
            return self._evaluate_same_field(item, comparisons)

        return all(_matches(expression, item) for expression in self.expressions)

    def _same_field_comparisons(self) -> list[ComparisonExpression] | None:
        """The expressions, if all are comparisons on one field path."""
        comparisons = [e for e in self.expressions if isinstance(e, ComparisonExpression)]
        if len(comparisons) != len(self.expressions):
            return None
        if len({comparison.field for comparison in comparisons}) != 1:
            return None
        return comparisons

    @staticmethod
    def _evaluate_same_field(item: Any, comparisons: list[ComparisonExpression]) -> bool:
        try:
            values = get_field_values(item, comparisons[0].field)
        except KeyError:
            return False
        if not values:
            return False

        first = values[0]
        if _is_sequence(first):
            # One element has to satisfy every condition.
            return any(_all_compare(comparisons, element) for element in first)
        return all(_all_compare(comparisons, value) for value in values)


@dataclass
class OrExpression(Expression):
    """Logical OR of its expressions; a branch that fails to evaluate counts as false."""

    expressions: list[Expression] = field(default_factory=list)

    def evaluate(self, item: Any) -> bool:
        return any(_matches(expression, item) for expression in self.expressions)


@dataclass
class IsNullExpression(Expression):
    """``field IS NULL`` or, with ``negated``, ``field IS NOT NULL``.

    A missing field, ``None`` and zero values all count as null.
    """

    field: str
    negated: bool = False

    def evaluate(self, item: Any) -> bool:
        try:
            values = get_field_values(item, self.field)
        except KeyError:
            return not self.negated
        if not values or any(is_zero(value) for value in values):
            return not self.negated
        return self.negated