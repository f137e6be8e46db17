"""Recursive-descent parser for the query language and the filtering entry point."""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping
from typing import Any, Protocol, TypeVar

from .errors import EvaluationError, QuerySyntaxError
from .expressions import AnyExpression, ComparisonExpression, Expression
from .fields import _is_record
from .humanize import normalize_humanized_values
from .lexer import EnhancedLexer
from .logic import ConjunctionExpression, IsNullExpression, NotExpression, OrExpression
from .tokens import Token, TokenType

T = TypeVar("T")

_COMPARISON_OPERATORS = frozenset(
    {
        TokenType.EQ,
        TokenType.NE,
        TokenType.LT,
        TokenType.GT,
        TokenType.LE,
        TokenType.GE,
        TokenType.CONTAINS,
    }
)
_VALUE_TOKENS = frozenset({TokenType.STRING, TokenType.NUMBER})
_LETTERS = re.compile(r"[A-Za-z]")


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class TokenSource(Protocol):
    """Anything that hands out tokens one at a time."""

    def next_token(self) -> Token: ...


class Parser:
    """Builds an expression tree from the tokens of a lexer."""

    def __init__(self, lexer: TokenSource) -> None:
        self._lexer = lexer
        self._errors: list[str] = []
        self._current = Token(TokenType.EOF, "")
        self._peek = Token(TokenType.EOF, "")
        self._advance()
        self._advance()

    @property
    def errors(self) -> list[str]:
        """Error messages collected so far."""
        return list(self._errors)

    def parse_query(self) -> Expression | None:
        """Parse the whole input; return None for empty input, raise QuerySyntaxError on errors."""
        if self._at(TokenType.EOF):
            return None

        if self._at(TokenType.ILLEGAL):
            self._errors.append(self._current.literal)
            raise QuerySyntaxError(self._current.literal)

        while self._current.type in (TokenType.AND, TokenType.OR):
            self._advance()
        expression = self._parse_or()

        if self._at(TokenType.ILLEGAL):
            self._errors.append(self._current.literal)
            raise QuerySyntaxError(self._current.literal)

        if self._at(TokenType.RPAREN):
            self._errors.append("unbalanced parenthesis: unexpected closing )")
            while self._at(TokenType.RPAREN):
                self._advance()

        if not self._at(TokenType.EOF) and not self._errors:
            self._errors.append("unexpected token after end of query")

        if self._errors:
            raise QuerySyntaxError("; ".join(self._errors))
        return expression

    def _advance(self) -> None:
        self._current = self._peek
        self._peek = self._lexer.next_token()
        if self._peek.type is TokenType.ILLEGAL:
            self._errors.append(self._peek.literal)

    def _at(self, token_type: TokenType) -> bool:
        return self._current.type is token_type

    def _fail(self, message: str) -> None:
        self._errors.append(message)

    def _parse_or(self) -> Expression | None:
        expression = self._parse_and()
        while self._at(TokenType.OR):
            self._advance()
            right = self._parse_and()
            if right is None:
                self._fail("invalid expression after OR")
                return expression
            if isinstance(expression, OrExpression):
                expression.expressions.append(right)
            elif expression is None:
                expression = OrExpression([right])
            else:
                expression = OrExpression([expression, right])
        return expression

    def _parse_and(self) -> Expression | None:
        expression = self._parse_primary()
        if expression is None:
            return None
        while self._at(TokenType.AND):
            self._advance()
            right = self._parse_primary()
            if right is None:
                self._fail("invalid expression after AND")
                return expression
            if isinstance(expression, ConjunctionExpression):
                expression.expressions.append(right)
            else:
                expression = ConjunctionExpression([expression, right])
        return expression

    def _parse_primary(self) -> Expression | None:
        if self._at(TokenType.NOT):
            self._advance()
            inner = self._parse_primary()
            if inner is None:
                self._fail("invalid expression after NOT")
                return None
            return NotExpression(inner)

        if self._at(TokenType.LPAREN):
            return self._parse_group()

        if self._at(TokenType.ANY):
            return self._parse_any()

        if self._at(TokenType.IDENTIFIER):
            return self._parse_field_expression()

        if not self._at(TokenType.EOF):
            self._fail(f"unexpected token: {self._current.literal}")
            self._advance()
        return None

    def _parse_group(self) -> Expression | None:
        self._advance()

        if self._at(TokenType.RPAREN):
            self._advance()
            return ConjunctionExpression([])

        expression = self._parse_or()
        if expression is None:
            self._fail("invalid expression inside parentheses")
            while not self._at(TokenType.EOF) and not self._at(TokenType.RPAREN):
                self._advance()
            if self._at(TokenType.RPAREN):
                self._advance()
            return None

        if self._at(TokenType.RPAREN):
            self._advance()
            return expression

        if self._at(TokenType.EOF):
            self._fail("unbalanced parenthesis: missing closing parenthesis at end of input")
        self._fail("unbalanced parenthesis: missing closing )")
        return None

    def _parse_any(self) -> Expression | None:
        self._advance()
        if not self._at(TokenType.LPAREN):
            self._fail("expected '(' after ANY")
            return None
        self._advance()

        if not self._at(TokenType.IDENTIFIER):
            self._fail("expected field name inside ANY()")
            return None
        field_path = self._current.literal
        self._advance()

        if not self._at(TokenType.RPAREN):
            self._fail("expected ')' after field name in ANY()")
            return None
        self._advance()

        op = self._current.type
        if op not in _COMPARISON_OPERATORS:
            self._fail(
                "expected comparison operator (=, !=, <, >, <=, >=, CONTAINS) after ANY()"
            )
            return None
        self._advance()

        if not self._at(TokenType.ANY):
            if self._current.type in _VALUE_TOKENS:
                expression = AnyExpression(field_path, op, [self._current.literal])
                self._advance()
                return expression
            self._fail("expected ANY() for values or a direct value")
            return None
        self._advance()

        if not self._at(TokenType.LPAREN):
            self._fail("expected '(' after ANY")
            return None
        self._advance()

        if self._current.type not in _VALUE_TOKENS:
            self._fail("expected string or number value in ANY()")
            return None
        values = [self._current.literal]
        self._advance()

        while self._at(TokenType.COMMA):
            self._advance()
            if self._current.type not in _VALUE_TOKENS:
                self._fail("expected string or number value after comma in ANY()")
                return None
            values.append(self._current.literal)
            self._advance()

        if not self._at(TokenType.RPAREN):
            self._fail("expected ')' after values in ANY()")
            return None
        self._advance()

        return AnyExpression(field_path, op, values)

    def _parse_field_expression(self) -> Expression | None:
        field_path = self._current.literal
        self._advance()

        if self._at(TokenType.IS):
            self._advance()
            negated = False
            if self._at(TokenType.NOT):
                negated = True
                self._advance()
            if self._at(TokenType.NULL):
                self._advance()
                return IsNullExpression(field_path, negated)
            self._fail("expected NULL after IS")
            return None

        return self._parse_comparison(field_path)

    def _parse_comparison(self, field_path: str) -> ComparisonExpression | None:
        op = self._current.type
        if op not in _COMPARISON_OPERATORS:
            self._fail(
                "expected operator (=, !=, <, >, <=, >=, CONTAINS), "
                f"got {str(op)} ({_quote(self._current.literal)})"
            )
            return None
        self._advance()

        value = self._current
        if value.type is TokenType.NUMBER:
            if self._peek.type is TokenType.IDENTIFIER:
                self._fail(f"invalid numeric value: {value.literal}{self._peek.literal}")
                return None
            if _LETTERS.search(value.literal) and not any(c in "eE" for c in value.literal):
                self._fail(f"invalid numeric value: {value.literal}")
                return None

        self._advance()
        return ComparisonExpression(field_path, op, value.literal)


def parse(query: str, data: Iterable[T]) -> list[T]:
    """Return the items of ``data`` that match ``query``.

    An empty query matches everything; ``None`` items are skipped. Raises
    QuerySyntaxError for a bad query, EvaluationError when a value cannot be
    compared and TypeError for items that are neither records nor mappings.
    """
    if query == "":
        return list(data)

    parser = Parser(EnhancedLexer(normalize_humanized_values(query)))
    try:
        expression = parser.parse_query()
    except QuerySyntaxError as exc:
        raise QuerySyntaxError(f"failed to parse query: {exc}") from exc
    if parser.errors:
        raise QuerySyntaxError("parsing errors: " + "; ".join(parser.errors))
    if expression is None:
        raise QuerySyntaxError("failed to parse query: empty expression")

    results: list[T] = []
    for item in data:
        if item is None:
            continue
        if not (_is_record(item) or isinstance(item, Mapping)):
            raise TypeError(f"expected a sequence of records, got {type(item).__name__} in data")
        try:
            matched = expression.evaluate(item)
        except EvaluationError as exc:
            raise EvaluationError(f"evaluation error: {exc}") from exc
        if matched:
            results.append(item)
    return results