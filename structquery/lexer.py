"""Lexer for the query language with negative, comma-grouped and scientific numbers."""

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


class EnhancedLexer:
    """Splits query text into tokens, one call to :meth:`next_token` at a time."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def _char_at(self, index: int) -> str:
        return self._text[index] if 0 <= index < len(self._text) else ""

    @property
    def _ch(self) -> str:
        return self._char_at(self._pos)

    def _peek(self, offset: int = 1) -> str:
        return self._char_at(self._pos + offset)

    def _advance(self) -> None:
        if self._pos < len(self._text):
            self._pos += 1
        else:
            self._pos = len(self._text) + 1

    def next_token(self) -> Token:
        """Return the next token; EOF is returned once the text is used up."""
        self._skip_whitespace()
        ch = self._ch

        if ch == "":
            return Token(TokenType.EOF, "")

        if ch in _WITH_EQUALS and self._peek() == "=":
            self._advance()
            self._advance()
            return Token(_WITH_EQUALS[ch], ch + "=")

        if ch in _SINGLE_CHAR:
            self._advance()
            return Token(_SINGLE_CHAR[ch], ch)

        if ch == ",":
            if is_digit(self._peek()) and self._pos > 0 and is_digit(self._char_at(self._pos - 1)):
                return Token(TokenType.NUMBER, "," + self._read_number())
            self._advance()
            return Token(TokenType.COMMA, ch)

        if ch == "'":
            literal, closed = self._read_string()
            if not closed:
                return Token(TokenType.ILLEGAL, "unclosed string: " + literal)
            return Token(TokenType.STRING, literal)

        if ch == "-" and is_digit(self._peek()):
            return Token(TokenType.NUMBER, self._read_number())

        if is_letter(ch):
            literal = self._read_identifier()
            return Token(lookup_identifier(literal), literal)

        if is_digit(ch):
            return Token(TokenType.NUMBER, self._read_number())

        self._advance()
        return Token(TokenType.ILLEGAL, ch)

    def __iter__(self) -> Iterator[Token]:
        """Yield the remaining tokens, stopping before EOF."""
        while (token := self.next_token()).type is not TokenType.EOF:
            yield token

    def _skip_whitespace(self) -> None:
        while self._ch in _WHITESPACE and self._ch != "":
            self._advance()

    def _read_identifier(self) -> str:
        start = self._pos
        while is_letter(self._ch) or is_digit(self._ch) or self._ch in (".", "_") and self._ch != "":
            self._advance()
        return self._text[start:self._pos]

    def _read_number(self) -> str:
        start = self._pos
        if self._ch == "-":
            self._advance()

        has_digits = False
        while is_digit(self._ch) or self._ch == ",":
            if is_digit(self._ch):
                has_digits = True
            self._advance()

        if not has_digits:
            return self._text[start:self._pos]

        if self._ch == "." and is_digit(self._peek()):
            self._advance()
            while is_digit(self._ch):
                self._advance()

        if self._ch in ("e", "E") and (
            is_digit(self._peek())
            or (self._peek() in ("+", "-") and is_digit(self._peek(2)))
        ):
            self._advance()
            if self._ch in ("+", "-"):
                self._advance()
            while is_digit(self._ch):
                self._advance()

        return self._text[start:self._pos]

    def _read_string(self) -> tuple[str, bool]:
        """Read a quoted string; return its raw body and whether it was closed."""
        start = self._pos + 1
        while True:
            self._advance()
            if self._ch in ("'", ""):
                break
            if self._ch == "\\" and self._peek() == "'":
                self._advance()
        end = min(self._pos, len(self._text))
        literal = self._text[start:end]
        closed = self._ch != ""
        if closed:
            self._advance()
        return literal, closed