"""Price figure normalization: thousands separators and decimal truncation."""

import pytest

from barber_prices.errors import ParseError
from barber_prices.sources.numbers import parse_price, truncated_mean


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("600", 600),
        ("1.200", 1200),
        ("15.000", 15000),
        ("15 000", 15000),
        ("1 200", 1200),
        ("760,71", 760),
        ("2.919,57", 2919),
        (" 900 ", 900),
        ("300,", 300),
    ],
)
def test_parse_price(raw, expected):
    assert parse_price(raw) == expected


def test_fraction_is_truncated_not_rounded():
    assert parse_price("999,99") == 999


@pytest.mark.parametrize("raw", ["", "RSD", ".", "1,2,3", "7,60,71", "12,5x"])
def test_malformed_figures_raise_parse_error(raw):
    with pytest.raises(ParseError):
        parse_price(raw)


def test_truncated_mean():
    assert truncated_mean([100, 100, 101]) == 100
    assert truncated_mean([600, 1200, 760, 900]) == 865
    assert truncated_mean([5]) == 5
