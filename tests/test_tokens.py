import pytest

from structquery.tokens import Token, TokenType, is_digit, is_letter, lookup_identifier


@pytest.mark.parametrize(
    "word, expected",
    [
        ("AND", TokenType.AND),
        ("and", TokenType.AND),
        ("Or", TokenType.OR),
        ("contains", TokenType.CONTAINS),
        ("IS", TokenType.IS),
        ("null", TokenType.NULL),
        ("Not", TokenType.NOT),
        ("any", TokenType.ANY),
    ],
)
def test_keywords_are_case_insensitive(word, expected):
    assert lookup_identifier(word) is expected


@pytest.mark.parametrize("word", ["Name", "Department.Name", "ANDY", "is_null"])
def test_other_words_are_identifiers(word):
    assert lookup_identifier(word) is TokenType.IDENTIFIER


@pytest.mark.parametrize("ch", ["a", "z", "A", "Z", "_"])
def test_is_letter_accepts_letters_and_underscore(ch):
    assert is_letter(ch) is True


@pytest.mark.parametrize("ch", ["0", "9", ".", "-", " ", "", "é"])
def test_is_letter_rejects_others(ch):
    assert is_letter(ch) is False


@pytest.mark.parametrize("ch", list("0123456789"))
def test_is_digit_accepts_digits(ch):
    assert is_digit(ch) is True


@pytest.mark.parametrize("ch", ["a", "-", ".", ",", ""])
def test_is_digit_rejects_others(ch):
    assert is_digit(ch) is False


def test_token_equality_and_type_string():
    assert Token(TokenType.NUMBER, "42") == Token(TokenType.NUMBER, "42")
    assert Token(TokenType.NUMBER, "42") != Token(TokenType.STRING, "42")
    assert str(TokenType.CONTAINS) == "CONTAINS"