"""Exact cent arithmetic.

Amounts are ``fractions.Fraction`` values in cents. ``Fraction`` keeps every
value in lowest terms with a positive denominator, so two equal amounts always
compare and hash identically regardless of how they were accumulated.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Iterable

ZERO = Fraction(0)


def from_cents(amount_cents: int) -> Fraction:
    return Fraction(amount_cents)


def share_of(amount_cents: int, count: int) -> Fraction:
    """Exact ``amount_cents / count``; ``count`` of zero raises ZeroDivisionError."""
    return Fraction(amount_cents, count)


def scale(value: Fraction, numerator: int, denominator: int) -> Fraction:
    return value * numerator / denominator


def total(values: Iterable[Fraction]) -> Fraction:
    return sum(values, ZERO)


def expand_decimal(value: Fraction, digits: int) -> tuple[int, str, bool]:
    """Long division of ``|value|`` to ``digits`` fractional digits.

    Returns the integer part, the digit string, and whether a non-zero
    remainder is left over (the expansion continues past ``digits``).
    Digits are truncated, never rounded.
    """
    numerator = abs(value.numerator)
    denominator = value.denominator
    integer_part, remainder = divmod(numerator, denominator)

    fractional: list[str] = []
    for _ in range(digits):
        digit, remainder = divmod(remainder * 10, denominator)
        fractional.append(str(digit))

    return integer_part, "".join(fractional), remainder != 0
