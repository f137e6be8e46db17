"""Token kinds and character classes shared by the lexers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(str, Enum):
    """Kinds of token produced by the lexers."""

    EOF = "EOF"
    ILLEGAL = "ILLEGAL"

    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    EQ = "EQ"
    NE = "NE"
    LT = "LT"
    GT = "GT"
    GE = "GE"
    LE = "LE"
    AND = "AND"
    OR = "OR"
    CONTAINS = "CONTAINS"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    IS = "IS"
    NULL = "NULL"
    NOT = "NOT"
    ANY = "ANY"
    COMMA = "COMMA"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """A single lexical token."""

    type: TokenType
    literal: str = ""


_KEYWORDS = {
    "AND": TokenType.AND,
    "OR": TokenType.OR,
    "CONTAINS": TokenType.CONTAINS,
    "IS": TokenType.IS,
    "NULL": TokenType.NULL,
    "NOT": TokenType.NOT,
    "ANY": TokenType.ANY,
}


def lookup_identifier(identifier: str) -> TokenType:
    """Return the keyword type for ``identifier`` (case-insensitive), else IDENTIFIER."""
    return _KEYWORDS.get(identifier.upper(), TokenType.IDENTIFIER)


def is_letter(ch: str) -> bool:
    """True for an ASCII letter or underscore."""
    return len(ch) == 1 and ("a" <= ch <= "z" or "A" <= ch <= "Z" or ch == "_")


def is_digit(ch: str) -> bool:
    """True for an ASCII decimal digit."""
    return len(ch) == 1 and "0" <= ch <= "9"