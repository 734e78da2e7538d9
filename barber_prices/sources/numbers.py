from __future__ import annotations

import re

from ..errors import ParseError

_GROUP_SEPARATORS = re.compile(r"[.\s]")
_DIGITS = re.compile(r"[0-9]+")


def parse_price(raw: str) -> int:
    """
    Parse a Serbian-formatted price figure into whole dinars.

    - "." and whitespace are thousands separators: "1.200" -> 1200, "15 000" -> 15000.
    - "," starts a decimal fraction, which is truncated: "2.919,57" -> 2919.
    Raises ParseError when the figure is not a well-formed number.
    """
    whole, sep, fraction = raw.strip().partition(",")
    digits = _GROUP_SEPARATORS.sub("", whole)
    if not _DIGITS.fullmatch(digits):
        raise ParseError(raw, "Malformed price figure")
    fraction = fraction.strip()
    if sep and fraction and not _DIGITS.fullmatch(fraction):
        raise ParseError(raw, "Malformed decimal fraction")
    return int(digits)


def truncated_mean(values: list[int]) -> int:
    # Prices are non-negative, so floor division truncates.
    return sum(values) // len(values)
