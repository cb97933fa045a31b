from __future__ import annotations

from fractions import Fraction

from babel.numbers import get_currency_symbol, get_decimal_symbol, get_group_symbol

from billsplit.services.rational import expand_decimal

RAW_DECIMALS = 6
DEFAULT_LOCALE = "pt_BR"
DEFAULT_CURRENCY = "BRL"
CONTINUATION_MARK = "…"
CENTS_PER_UNIT = 100


def format_exact_amount(
    value_cents: Fraction,
    *,
    decimals: int = RAW_DECIMALS,
    locale: str = DEFAULT_LOCALE,
    currency: str = DEFAULT_CURRENCY,
) -> str:
    """Render an exact amount of cents in major units without rounding.

    ``Fraction(1000, 3)`` in pt_BR becomes ``"R$ 3,333333…"``: the digits are
    truncated after ``decimals`` places and the mark shows the expansion goes on.
    """
    units = value_cents / CENTS_PER_UNIT
    integer_part, digits, continues = expand_decimal(units, decimals)

    sign = "-" if units < 0 else ""
    # integer_part is an exact int of any size; never pass it through Decimal
    text = f"{integer_part:,}".replace(",", get_group_symbol(locale))
    if digits:
        text += get_decimal_symbol(locale) + digits
    if continues:
        text += CONTINUATION_MARK
    return f"{get_currency_symbol(currency, locale=locale)} {sign}{text}"
