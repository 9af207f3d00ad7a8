"""Input types and boundary coercion for the federal tax engine.

Callers (onboarding forms, dashboards, HTTP payloads) hand the engine loosely
typed values. Everything is normalized here, once, so the calculators can rely
on non-negative Decimal amounts and non-negative integer counts:

- Money: None, booleans, non-numeric strings, NaN, Infinity, magnitudes of
  10**15 and up, and negatives become Decimal("0").
- Counts: fractional values are truncated toward zero; invalid values become 0.
- Filing status: unknown values clamp to single.

Nothing in this module raises on bad input.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from src.core.logging import get_logger
from src.tax.money import ZERO

logger = get_logger(__name__)

# Amounts and counts of 10**15 or more are treated as invalid input.
MAX_INPUT_DIGITS = 15


class FilingStatus(str, Enum):
    """Filing status for a single return."""

    SINGLE = "single"
    MARRIED_FILING_JOINTLY = "mfj"
    MARRIED_FILING_SEPARATELY = "mfs"
    HEAD_OF_HOUSEHOLD = "hoh"
    # Offered by the intake forms but carries no constants in TaxYearConfig.
    QUALIFYING_SURVIVING_SPOUSE = "qw"


_FILING_STATUS_ALIASES: dict[str, FilingStatus] = {
    "single": FilingStatus.SINGLE,
    "mfj": FilingStatus.MARRIED_FILING_JOINTLY,
    "marriedfilingjointly": FilingStatus.MARRIED_FILING_JOINTLY,
    "married_filing_jointly": FilingStatus.MARRIED_FILING_JOINTLY,
    "mfs": FilingStatus.MARRIED_FILING_SEPARATELY,
    "marriedfilingseparately": FilingStatus.MARRIED_FILING_SEPARATELY,
    "married_filing_separately": FilingStatus.MARRIED_FILING_SEPARATELY,
    "hoh": FilingStatus.HEAD_OF_HOUSEHOLD,
    "headofhousehold": FilingStatus.HEAD_OF_HOUSEHOLD,
    "head_of_household": FilingStatus.HEAD_OF_HOUSEHOLD,
    "qw": FilingStatus.QUALIFYING_SURVIVING_SPOUSE,
    "qss": FilingStatus.QUALIFYING_SURVIVING_SPOUSE,
    "qualifyingwidow": FilingStatus.QUALIFYING_SURVIVING_SPOUSE,
    "qualifying_widow": FilingStatus.QUALIFYING_SURVIVING_SPOUSE,
    "qualifying_surviving_spouse": FilingStatus.QUALIFYING_SURVIVING_SPOUSE,
}


def parse_filing_status(value: object) -> FilingStatus:
    """Resolve a caller-supplied filing status.

    Accepts FilingStatus members, short codes ("mfj"), camelCase
    ("marriedFilingJointly") and snake_case names, case-insensitively.

    Args:
        value: Raw filing status from the caller.

    Returns:
        The matching FilingStatus, or FilingStatus.SINGLE when unrecognised.

    Example:
        >>> parse_filing_status("marriedFilingJointly")
        <FilingStatus.MARRIED_FILING_JOINTLY: 'mfj'>
    """
    if isinstance(value, FilingStatus):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        if key in _FILING_STATUS_ALIASES:
            return _FILING_STATUS_ALIASES[key]
    logger.warning("filing_status_clamped", default=FilingStatus.SINGLE.value)
    return FilingStatus.SINGLE


def _to_decimal(value: object) -> Decimal | None:
    """Convert a raw value to a finite Decimal, or None if impossible."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
        # str() keeps the shortest repr, avoiding binary expansion noise
        number = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "").replace("$", "")
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not number.is_finite():
        return None
    if number and number.adjusted() >= MAX_INPUT_DIGITS:
        return None
    return number


def to_money(value: object, field_name: str = "amount") -> Decimal:
    """Coerce a caller-supplied amount to a non-negative Decimal.

    Args:
        value: Raw amount (int, float, Decimal, numeric string, or junk).
        field_name: Name used in the warning logged when the value is clamped.

    Returns:
        The amount as Decimal, or Decimal("0") if invalid or negative.

    Example:
        >>> to_money("-5")
        Decimal('0')
        >>> to_money(1234.5)
        Decimal('1234.5')
    """
    number = _to_decimal(value)
    if number is None:
        if value is not None:
            logger.warning("input_clamped", field=field_name, reason="invalid")
        return ZERO
    if number < ZERO:
        logger.warning("input_clamped", field=field_name, reason="negative")
        return ZERO
    return number


def to_count(value: object, field_name: str = "count") -> int:
    """Coerce a caller-supplied count to a non-negative integer.

    Fractional values are truncated (2.9 -> 2), never rounded.
    """
    number = _to_decimal(value)
    if number is None:
        if value is not None:
            logger.warning("input_clamped", field=field_name, reason="invalid")
        return 0
    count = int(number)
    if count < 0:
        logger.warning("input_clamped", field=field_name, reason="negative")
        return 0
    return count


# =============================================================================
# Data Structures
# =============================================================================


@dataclass(frozen=True)
class IncomeInputs:
    """Reported income figures for the year.

    Attributes:
        wages: W-2 wages, tips, and compensation.
        net_self_employment_profit: Schedule C net profit.
        withholding: Federal income tax withheld.
        investment_income: Interest, dividends, and gains (EITC gating only).
    """

    wages: Decimal = ZERO
    net_self_employment_profit: Decimal = ZERO
    withholding: Decimal = ZERO
    investment_income: Decimal = ZERO

    @classmethod
    def from_raw(
        cls,
        wages: object = None,
        net_self_employment_profit: object = None,
        withholding: object = None,
        investment_income: object = None,
    ) -> IncomeInputs:
        """Build IncomeInputs from unvalidated caller values."""
        return cls(
            wages=to_money(wages, "wages"),
            net_self_employment_profit=to_money(
                net_self_employment_profit, "net_self_employment_profit"
            ),
            withholding=to_money(withholding, "withholding"),
            investment_income=to_money(investment_income, "investment_income"),
        )


@dataclass(frozen=True)
class DependentCounts:
    """Dependent counts supplied by the caller.

    Attributes:
        qualifying_children_under_17: Children for CTC/ACTC and EITC.
        other_dependents: Dependents for the Credit for Other Dependents.
    """

    qualifying_children_under_17: int = 0
    other_dependents: int = 0

    @classmethod
    def from_raw(
        cls, qualifying_children_under_17: object = None, other_dependents: object = None
    ) -> DependentCounts:
        """Build DependentCounts from unvalidated caller values."""
        return cls(
            qualifying_children_under_17=to_count(
                qualifying_children_under_17, "qualifying_children_under_17"
            ),
            other_dependents=to_count(other_dependents, "other_dependents"),
        )


@dataclass(frozen=True)
class EligibilityFlags:
    """EITC eligibility flags.

    The SSN flags default to True because final eligibility is re-verified at
    filing time. The separated-spouse flag is an exception that allows a
    married-filing-separately filer to claim EITC, so it defaults to False.
    """

    taxpayer_has_valid_ssn: bool = True
    children_have_valid_ssn: bool = True
    is_separated_spouse_for_eitc: bool = False


@dataclass(frozen=True)
class W2Entry:
    """One W-2 row from a multi-employer intake form."""

    wages: Decimal = ZERO
    federal_withholding: Decimal = ZERO
    employer_name: str = ""


@dataclass(frozen=True)
class W2Totals:
    """Summed wages and withholding across W-2 rows."""

    wages: Decimal
    withholding: Decimal
    count: int = 0


def aggregate_w2s(
    entries: Iterable[W2Entry], additional_withholding: object = None
) -> W2Totals:
    """Sum wages and withholding across W-2 rows.

    Each row is clamped independently, so a negative row never offsets a
    positive one.

    Args:
        entries: W-2 rows as entered by the taxpayer.
        additional_withholding: Extra federal withholding not reported on a W-2
            (e.g. estimated payments entered as withholding).

    Returns:
        W2Totals with summed wages and withholding.

    Example:
        >>> totals = aggregate_w2s(
        ...     [W2Entry(wages=Decimal("30000"), federal_withholding=Decimal("2000")),
        ...      W2Entry(wages=Decimal("12000"), federal_withholding=Decimal("800"))],
        ...     additional_withholding=Decimal("500"),
        ... )
        >>> totals.withholding
        Decimal('3300')
    """
    wages = ZERO
    withholding = ZERO
    count = 0
    for entry in entries:
        wages += to_money(entry.wages, "w2.wages")
        withholding += to_money(entry.federal_withholding, "w2.federal_withholding")
        count += 1

    withholding += to_money(additional_withholding, "additional_withholding")
    return W2Totals(wages=wages, withholding=withholding, count=count)

