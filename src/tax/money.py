"""Decimal context and rounding rules for currency amounts.

Intermediate amounts are never rounded. Rounding happens only where a rule
calls for it: the EITC is rounded to whole dollars, and presentation copies
of results are rounded to cents.
"""

from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Context, Decimal
from enum import Enum

# Every computation runs inside localcontext(MONEY_CONTEXT) so results do not
# depend on the caller's thread-local decimal settings.
MONEY_CONTEXT = Context(prec=28, rounding=ROUND_HALF_EVEN)

ZERO = Decimal("0")
ONE_DOLLAR = Decimal("1")
ONE_CENT = Decimal("0.01")


def round_dollars(amount: Decimal) -> Decimal:
    """Round to whole dollars, halves away from zero."""
    return amount.quantize(ONE_DOLLAR, rounding=ROUND_HALF_UP)


def round_cents(amount: Decimal) -> Decimal:
    """Round to cents, halves away from zero."""
    return amount.quantize(ONE_CENT, rounding=ROUND_HALF_UP)


RATE_QUANTUM = Decimal("0.000001")


def render(value: object, key: str = "") -> object:
    """Presentation copy of a result tree (dicts, lists, tuples, Decimals).

    Money becomes a float rounded to cents; keys ending in "rate" keep six
    decimal places. Enum members render as their values.
    """
    if isinstance(value, dict):
        return {k: render(v, k) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [render(item, key) for item in value]
    if isinstance(value, Decimal):
        if key.endswith("rate"):
            return float(value.quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP))
        return float(round_cents(value))
    if isinstance(value, Enum):
        return value.value
    return value
