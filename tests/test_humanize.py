import pytest

from structquery.humanize import (
    normalize_humanized_values,
    parse_bytes,
    parse_comma_separated_number,
    parse_humanized_number,
)


@pytest.mark.parametrize(
    "query, expected",
    [
        ("Drive.Size > 10GB", "Drive.Size > 10000000000"),
        ("Drive.Size > 10GiB", "Drive.Size > 10737418240"),
        ("Memory > 512MiB", "Memory > 536870912"),
        ("Cache < 100KiB", "Cache < 102400"),
        ("Storage > 500MB", "Storage > 500000000"),
        ("Buffer < 100KB", "Buffer < 100000"),
        ("Backup > 2TB", "Backup > 2000000000000"),
        ("Archive > 1TiB", "Archive > 1099511627776"),
        ("Drive.Size > 1.5GB", "Drive.Size > 1500000000"),
        ("Count > 2.5K", "Count > 2500"),
        ("Population > 1,000,000", "Population > 1000000"),
        (
            "Person.Name = 'alice' AND Drive.Size > 10GB",
            "Person.Name = 'alice' AND Drive.Size > 10000000000",
        ),
        (
            "Description CONTAINS 'has 10GB of storage'",
            "Description CONTAINS 'has 10GB of storage'",
        ),
        (
            "Drive.Size > 1.5TB AND Count < 5K AND Name = 'test'",
            "Drive.Size > 1500000000000 AND Count < 5000 AND Name = 'test'",
        ),
        ("Age > 25 AND Name = 'john'", "Age > 25 AND Name = 'john'"),
    ],
)
def test_normalize_humanized_values(query, expected):
    assert normalize_humanized_values(query) == expected


@pytest.mark.parametrize(
    "query, expected",
    [
        ("Size > 1TB", "Size > 1000000000000"),
        ("Size > 1TiB", "Size > 1099511627776"),
        ("Memory > 1GB", "Memory > 1000000000"),
        ("Memory > 1GiB", "Memory > 1073741824"),
    ],
)
def test_decimal_vs_binary_units(query, expected):
    assert normalize_humanized_values(query) == expected


def test_normalize_empty_query():
    assert normalize_humanized_values("") == ""


def test_normalize_keeps_decimal_with_commas():
    assert normalize_humanized_values("Salary > 65,000.25") == "Salary > 65,000.25"


def test_normalize_keeps_non_integer_decimal():
    assert normalize_humanized_values("Price = -5.5") == "Price = -5.5"


def test_normalize_whole_float_becomes_integer():
    assert normalize_humanized_values("Salary > 70000.00") == "Salary > 70000"


def test_normalize_scientific_notation():
    assert normalize_humanized_values("salary > 7.5e4") == "salary > 75000"


def test_normalize_leaves_unclosed_quote_untouched():
    query = "Name = 'has 10GB\\'"
    assert normalize_humanized_values(query) == query


def test_normalize_is_idempotent():
    query = "Drive.Size > 1.5TB AND Count < 5K AND Name = 'test'"
    once = normalize_humanized_values(query)
    assert normalize_humanized_values(once) == once


@pytest.mark.parametrize(
    "text, expected",
    [
        ("10GB", 10000000000),
        ("10GiB", 10737418240),
        ("512MiB", 536870912),
        ("100KiB", 102400),
        ("1.5GB", 1500000000),
        ("1TiB", 1099511627776),
    ],
)
def test_parse_bytes_units(text, expected):
    assert parse_bytes(text) == expected


def test_parse_bytes_is_case_insensitive_and_allows_space():
    assert parse_bytes("10 gb") == parse_bytes("10GB")


def test_parse_bytes_without_unit():
    assert parse_bytes("1,024") == 1024


@pytest.mark.parametrize("text", ["Drive.Size", "10XB", "", "GB"])
def test_parse_bytes_rejects(text):
    with pytest.raises(ValueError):
        parse_bytes(text)


def test_parse_bytes_too_large():
    with pytest.raises(ValueError, match="too large"):
        parse_bytes("100EB")


def test_parse_humanized_number_with_suffix():
    assert parse_humanized_number("2.5K") == 2500
    assert parse_humanized_number("5K") == parse_humanized_number("5k")


def test_parse_humanized_number_plain():
    assert parse_humanized_number("7.5e4") == 75000


@pytest.mark.parametrize("text", ["", "   ", "Name", "1_000", "1,000"])
def test_parse_humanized_number_rejects(text):
    with pytest.raises(ValueError):
        parse_humanized_number(text)


def test_parse_comma_separated_number():
    assert parse_comma_separated_number("1,000,000") == 1000000


@pytest.mark.parametrize("text", ["", "1000", "65,000.25", "1,a00"])
def test_parse_comma_separated_number_rejects(text):
    with pytest.raises(ValueError):
        parse_comma_separated_number(text)