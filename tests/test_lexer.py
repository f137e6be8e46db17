import pytest

from structquery.lexer import EnhancedLexer
from structquery.tokens import Token, TokenType


def tokens_of(text):
    return list(EnhancedLexer(text))


@pytest.mark.parametrize(
    "text, expected_type, expected_literal",
    [
        ("42", TokenType.NUMBER, "42"),
        ("-42", TokenType.NUMBER, "-42"),
        ("3.14", TokenType.NUMBER, "3.14"),
        ("-3.14", TokenType.NUMBER, "-3.14"),
        ("1e6", TokenType.NUMBER, "1e6"),
        ("1.5e3", TokenType.NUMBER, "1.5e3"),
        ("1.5e-3", TokenType.NUMBER, "1.5e-3"),
        ("1.5e+3", TokenType.NUMBER, "1.5e+3"),
        ("1,000", TokenType.NUMBER, "1,000"),
        ("1,000,000.5", TokenType.NUMBER, "1,000,000.5"),
    ],
)
def test_numeric_formats(text, expected_type, expected_literal):
    first = EnhancedLexer(text).next_token()
    assert first.type is expected_type
    assert first.literal == expected_literal


def test_invalid_numeric_token_splits_into_number_and_identifier():
    lexer = EnhancedLexer("Age > 25abc")
    collected = []
    for _ in range(10):
        current = lexer.next_token()
        collected.append(current)
        if current.type is TokenType.EOF:
            break
    assert collected == [
        Token(TokenType.IDENTIFIER, "Age"),
        Token(TokenType.GT, ">"),
        Token(TokenType.NUMBER, "25"),
        Token(TokenType.IDENTIFIER, "abc"),
        Token(TokenType.EOF, ""),
    ]


@pytest.mark.parametrize(
    "text, expected_type",
    [
        ("=", TokenType.EQ),
        ("!=", TokenType.NE),
        ("<", TokenType.LT),
        ("<=", TokenType.LE),
        (">", TokenType.GT),
        (">=", TokenType.GE),
        ("(", TokenType.LPAREN),
        (")", TokenType.RPAREN),
        (",", TokenType.COMMA),
    ],
)
def test_operators(text, expected_type):
    assert EnhancedLexer(text).next_token() == Token(expected_type, text)


@pytest.mark.parametrize("text", ["!", "-", "@"])
def test_illegal_characters(text):
    assert EnhancedLexer(text).next_token() == Token(TokenType.ILLEGAL, text)


def test_unclosed_string_is_illegal():
    result = EnhancedLexer("'Alice").next_token()
    assert result.type is TokenType.ILLEGAL
    assert result.literal == "unclosed string: Alice"


def test_escaped_quote_stays_in_string():
    result = EnhancedLexer("'Alice\\'s'").next_token()
    assert result == Token(TokenType.STRING, "Alice\\'s")


def test_unclosed_string_ending_in_escape():
    result = EnhancedLexer("'Alice\\'").next_token()
    assert result.type is TokenType.ILLEGAL
    assert result.literal.startswith("unclosed string")


def test_full_query_tokens():
    assert tokens_of("Department.Name = 'Engineering' and NOT Age >= -5") == [
        Token(TokenType.IDENTIFIER, "Department.Name"),
        Token(TokenType.EQ, "="),
        Token(TokenType.STRING, "Engineering"),
        Token(TokenType.AND, "and"),
        Token(TokenType.NOT, "NOT"),
        Token(TokenType.IDENTIFIER, "Age"),
        Token(TokenType.GE, ">="),
        Token(TokenType.NUMBER, "-5"),
    ]


def test_any_value_list_with_commas():
    assert tokens_of("ANY('Go', 'Rust')") == [
        Token(TokenType.ANY, "ANY"),
        Token(TokenType.LPAREN, "("),
        Token(TokenType.STRING, "Go"),
        Token(TokenType.COMMA, ","),
        Token(TokenType.STRING, "Rust"),
        Token(TokenType.RPAREN, ")"),
    ]


def test_eof_is_repeated_after_end():
    lexer = EnhancedLexer("  x  ")
    assert lexer.next_token() == Token(TokenType.IDENTIFIER, "x")
    assert lexer.next_token() == Token(TokenType.EOF, "")
    assert lexer.next_token() == Token(TokenType.EOF, "")


def test_empty_input_iterates_nothing():
    assert tokens_of(" \t\r\n") == []


def test_exponent_without_digits_is_not_consumed():
    assert tokens_of("1e") == [
        Token(TokenType.NUMBER, "1"),
        Token(TokenType.IDENTIFIER, "e"),
    ]