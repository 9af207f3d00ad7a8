"""Progressive marginal-rate income tax."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from src.tax.inputs import FilingStatus
from src.tax.money import ZERO
from src.tax.year_config import TaxYearConfig


@dataclass(frozen=True)
class BracketSlice:
    """Tax owed inside one bracket."""

    lower: Decimal
    upper: Decimal | None
    rate: Decimal
    income_in_bracket: Decimal
    tax_in_bracket: Decimal


@dataclass(frozen=True)
class BracketTaxResult:
    """Result of the bracket calculation.

    Attributes:
        gross_tax: Income tax before any credit.
        breakdown: Per-bracket slices with non-zero income, lowest first.
        marginal_rate: Rate of the highest bracket reached (0 with no income).
    """

    gross_tax: Decimal
    breakdown: tuple[BracketSlice, ...] = ()
    marginal_rate: Decimal = ZERO


def calculate_bracket_tax(
    taxable_income: Decimal,
    filing_status: FilingStatus,
    config: TaxYearConfig,
) -> BracketTaxResult:
    """Calculate federal income tax using marginal brackets.

    Args:
        taxable_income: Income after the standard deduction.
        filing_status: Selects the bracket schedule.
        config: Tax year constants.

    Returns:
        BracketTaxResult with gross tax and bracket breakdown.

    Raises:
        ConfigurationError: If the filing status has no bracket schedule.

    Example:
        >>> calculate_bracket_tax(
        ...     Decimal("24250"), FilingStatus.SINGLE, TAX_YEAR_2025
        ... ).gross_tax
        Decimal('2671.50')
    """
    brackets = config.brackets_for(filing_status)
    income = max(taxable_income, ZERO)

    gross_tax = ZERO
    marginal_rate = ZERO
    breakdown: list[BracketSlice] = []

    for bracket in brackets:
        if income <= bracket.lower:
            break

        top = income if bracket.upper is None else min(income, bracket.upper)
        income_in_bracket = top - bracket.lower
        tax_in_bracket = income_in_bracket * bracket.rate

        gross_tax += tax_in_bracket
        marginal_rate = bracket.rate
        breakdown.append(
            BracketSlice(
                lower=bracket.lower,
                upper=bracket.upper,
                rate=bracket.rate,
                income_in_bracket=income_in_bracket,
                tax_in_bracket=tax_in_bracket,
            )
        )

    return BracketTaxResult(
        gross_tax=gross_tax,
        breakdown=tuple(breakdown),
        marginal_rate=marginal_rate,
    )
