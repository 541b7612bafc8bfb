"""Money arithmetic on integer minor units (cents).

Every percentage computation in the library goes through percentage_of(),
which rounds with round_minor_units(). No floats are involved.
"""

from fractions import Fraction
from typing import Union

from .errors import ContractViolationError

Exact = Union[int, Fraction]

CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "CHF": "CHF",
    "CAD": "$CA",
}
DEFAULT_CURRENCY = "EUR"
# fr-FR groups thousands with a narrow no-break space (U+202F).
THOUSANDS_SEPARATOR = "\u202f"


def _exact(value: Exact, field: str) -> Fraction:
    if isinstance(value, bool) or not isinstance(value, (int, Fraction)):
        raise ContractViolationError(f"{field} must be an int or Fraction, got {value!r}")
    return Fraction(value)


def round_minor_units(value: Exact) -> int:
    """Round an exact amount to whole minor units, half away from zero.

    This matches JavaScript's Math.round for the non-negative amounts that
    pricing produces: 0.5 -> 1, 2.5 -> 3, 2.4 -> 2.
    """
    exact = _exact(value, "value")
    magnitude = abs(exact)
    whole, remainder = divmod(magnitude.numerator, magnitude.denominator)
    if 2 * remainder >= magnitude.denominator:
        whole += 1
    return whole if exact >= 0 else -whole


def percentage_of(amount: int, percent: Exact) -> int:
    """Return `percent`% of `amount`, rounded with round_minor_units()."""
    return round_minor_units(_exact(amount, "amount") * _exact(percent, "percent") / 100)


def clamp_non_negative(amount: int) -> int:
    return max(0, amount)


def format_price(amount: int, currency: str = DEFAULT_CURRENCY) -> str:
    """Format minor units the French way: 123456 -> "1 234,56 €", groups joined by THOUSANDS_SEPARATOR."""
    symbol = CURRENCY_SYMBOLS.get(currency, CURRENCY_SYMBOLS[DEFAULT_CURRENCY])
    sign = "-" if amount < 0 else ""
    units, cents = divmod(abs(amount), 100)
    grouped = f"{units:,}".replace(",", THOUSANDS_SEPARATOR)
    return f"{sign}{grouped},{cents:02d} {symbol}"
