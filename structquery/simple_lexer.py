"""Basic lexer for the query language: plain integers and decimals only."""

from __future__ import annotations

from collections.abc import Iterator

from .tokens import Token, TokenType, is_digit, is_letter, lookup_identifier

_WHITESPACE = frozenset(" \t\n\r")

_SINGLE_CHAR = {
    "=": TokenType.EQ,
    "<": TokenType.LT,
    ">": TokenType.GT,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

_WITH_EQUALS = {
    "!": TokenType.NE,
    "<": TokenType.LE,
    ">": TokenType.GE,
}


class Lexer:
    """Splits query text into tokens without comma-grouped or scientific numbers.

    Unlike :class:`~structquery.lexer.EnhancedLexer`, an unterminated string
    is returned as an ordinary STRING token and a comma is an ILLEGAL token.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def _char(self, offset: int = 0) -> str:
        index = self._pos + offset
        return self._text[index] if 0 <= index < len(self._text) else ""

    def next_token(self) -> Token:
        """Return the next token; EOF is returned once the text is used up."""
        self._skip_whitespace()
        ch = self._char()

        if not ch:
            return Token(TokenType.EOF, "")

        if ch in _WITH_EQUALS and self._char(1) == "=":
            self._pos += 2
            return Token(_WITH_EQUALS[ch], ch + "=")

        if ch in _SINGLE_CHAR:
            self._pos += 1
            return Token(_SINGLE_CHAR[ch], ch)

        if ch == "'":
            return Token(TokenType.STRING, self._read_string())

        if is_digit(ch) or (ch == "-" and is_digit(self._char(1))):
            return Token(TokenType.NUMBER, self._read_number())

        if is_letter(ch):
            literal = self._read_identifier()
            return Token(lookup_identifier(literal), literal)

        self._pos += 1
        return Token(TokenType.ILLEGAL, ch)

    def __iter__(self) -> Iterator[Token]:
        """Yield the remaining tokens, stopping before EOF."""
        while (token := self.next_token()).type is not TokenType.EOF:
            yield token

    def _skip_whitespace(self) -> None:
        while self._char() in _WHITESPACE and self._char():
            self._pos += 1

    def _read_identifier(self) -> str:
        start = self._pos
        while self._char() and (
            is_letter(self._char()) or is_digit(self._char()) or self._char() in "._"
        ):
            self._pos += 1
        return self._text[start:self._pos]

    def _read_number(self) -> str:
        start = self._pos
        if self._char() == "-":
            self._pos += 1
        while is_digit(self._char()):
            self._pos += 1
        if self._char() == "." and is_digit(self._char(1)):
            self._pos += 1
            while is_digit(self._char()):
                self._pos += 1
        return self._text[start:self._pos]

    def _read_string(self) -> str:
        start = self._pos + 1
        while True:
            self._pos += 1
            ch = self._char()
            if ch in ("'", ""):
                break
            if ch == "\\" and self._char(1) == "'":
                self._pos += 1
        literal = self._text[start:min(self._pos, len(self._text))]
        if self._char():
            self._pos += 1
        return literal