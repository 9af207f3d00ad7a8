"""Federal tax computation for a single tax year.

Composes the calculators in the order the return itself is built:

1. Self-employment tax and its deductible half.
2. AGI = wages + SE profit - deductible half.
3. Taxable income = AGI - standard deduction.
4. Gross income tax from the brackets.
5. Credit for Other Dependents against gross income tax.
6. Earned income = wages + net SE earnings.
7. Child Tax Credit against the income tax left after ODC; refundable ACTC.
8. Income tax after all nonrefundable credits.
9. Total tax = income tax after credits + SE tax. Credits never reduce SE tax.
10. EITC, independent of income tax.
11. Payments = withholding + ACTC + EITC; refund or owed = payments - total tax.

This is the authoritative result. The quick estimate in
src.tax.quick_estimate is a ballpark figure only.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal, localcontext
from typing import Any

from src.core.config import settings
from src.core.logging import get_logger
from src.tax.brackets import BracketSlice, calculate_bracket_tax
from src.tax.child_credit import ChildTaxCreditResult, calculate_child_tax_credit
from src.tax.eitc import EitcResult, calculate_eitc
from src.tax.inputs import (
    DependentCounts,
    EligibilityFlags,
    FilingStatus,
    IncomeInputs,
    parse_filing_status,
)
from src.tax.money import MONEY_CONTEXT, ZERO, render
from src.tax.other_dependents import (
    OtherDependentCreditResult,
    apply_against,
    calculate_other_dependent_credit,
)
from src.tax.self_employment import (
    SelfEmploymentTaxResult,
    calculate_self_employment_tax,
)
from src.tax.year_config import TaxYearConfig, get_tax_year_config

logger = get_logger(__name__)


@dataclass(frozen=True)
class ComputationResult:
    """Complete federal tax outcome.

    Amounts are unrounded Decimals (except the EITC, which is whole dollars).
    Use to_dict() for a presentation copy rounded to cents.

    Attributes:
        tax_year: Tax year whose constants were used.
        filing_status: Filing status after normalization.
        total_income: Wages plus SE profit.
        agi: Adjusted gross income.
        standard_deduction: Standard deduction applied.
        taxable_income: AGI minus the standard deduction, floored at zero.
        income_tax: Gross income tax before credits.
        bracket_breakdown: Per-bracket slices of income_tax.
        marginal_rate: Rate of the highest bracket reached.
        self_employment: Schedule SE breakdown.
        other_dependent_credit: ODC computed and used.
        income_tax_after_odc: Income tax left for the child credit.
        child_tax_credit: CTC/ACTC breakdown.
        income_tax_after_credits: Income tax after all nonrefundable credits.
        total_tax: Income tax after credits plus SE tax.
        eitc: Earned Income Tax Credit result.
        refundable_credits: ACTC plus EITC.
        withholding: Federal income tax withheld.
        payments: Withholding plus refundable credits.
        refund_or_owed: Payments minus total tax (positive means refund).
        earned_income: Wages plus net SE earnings.
        qualifying_children_under_17: Child count used.
        other_dependents: Other-dependent count used.
        effective_rate: Total tax divided by total income.
    """

    tax_year: int
    filing_status: FilingStatus
    total_income: Decimal
    agi: Decimal
    standard_deduction: Decimal
    taxable_income: Decimal
    income_tax: Decimal
    bracket_breakdown: tuple[BracketSlice, ...]
    marginal_rate: Decimal
    self_employment: SelfEmploymentTaxResult
    other_dependent_credit: OtherDependentCreditResult
    income_tax_after_odc: Decimal
    child_tax_credit: ChildTaxCreditResult
    income_tax_after_credits: Decimal
    total_tax: Decimal
    eitc: EitcResult
    refundable_credits: Decimal
    withholding: Decimal
    payments: Decimal
    refund_or_owed: Decimal
    earned_income: Decimal
    qualifying_children_under_17: int
    other_dependents: int
    effective_rate: Decimal

    @property
    def is_refund(self) -> bool:
        """True when payments cover total tax."""
        return self.refund_or_owed >= ZERO

    def to_dict(self) -> dict[str, Any]:
        """Presentation copy with money rounded to cents."""
        rendered = render(asdict(self))
        rendered["is_refund"] = self.is_refund
        return rendered


def resolve_config(config: TaxYearConfig | None = None) -> TaxYearConfig:
    """Use an injected config, or load the configured tax year.

    Raises:
        ConfigurationError: If no constants exist for settings.tax_year.
    """
    if config is not None:
        return config
    return get_tax_year_config(settings.tax_year)


def compute_federal_tax(
    filing_status: object,
    wages: object,
    self_employment_profit: object,
    withholding: object,
    qualifying_children_under_17: object = 0,
    other_dependents: object = 0,
    investment_income: object = 0,
    eligibility_flags: EligibilityFlags | None = None,
    *,
    config: TaxYearConfig | None = None,
) -> ComputationResult:
    """Compute the federal tax outcome for one return.

    Inputs are coerced, never rejected: negative, non-numeric and non-finite
    amounts count as zero, fractional counts are truncated, and an unknown
    filing status is treated as single.

    Args:
        filing_status: Filing status (FilingStatus or a recognised string).
        wages: W-2 wages.
        self_employment_profit: Net self-employment profit.
        withholding: Federal income tax withheld.
        qualifying_children_under_17: Children for CTC/ACTC and EITC.
        other_dependents: Dependents for the Credit for Other Dependents.
        investment_income: Investment income (EITC limit only).
        eligibility_flags: EITC flags; permissive defaults when omitted.
        config: Tax year constants; defaults to settings.tax_year.

    Returns:
        ComputationResult.

    Raises:
        ConfigurationError: If constants are missing for the tax year or the
            filing status (e.g. qualifying surviving spouse).

    Example:
        >>> result = compute_federal_tax("single", 40000, 0, 3000)
        >>> result.refund_or_owed
        Decimal('328.50')
    """
    year_config = resolve_config(config)
    status = parse_filing_status(filing_status)
    income = IncomeInputs.from_raw(
        wages=wages,
        net_self_employment_profit=self_employment_profit,
        withholding=withholding,
        investment_income=investment_income,
    )
    dependents = DependentCounts.from_raw(
        qualifying_children_under_17=qualifying_children_under_17,
        other_dependents=other_dependents,
    )
    flags = eligibility_flags or EligibilityFlags()

    with localcontext(MONEY_CONTEXT):
        result = _compute(status, income, dependents, flags, year_config)

    logger.info(
        "federal_tax_computed",
        tax_year=result.tax_year,
        filing_status=result.filing_status.value,
        total_tax=result.total_tax,
        refundable_credits=result.refundable_credits,
        refund_or_owed=result.refund_or_owed,
    )
    return result


def _compute(
    status: FilingStatus,
    income: IncomeInputs,
    dependents: DependentCounts,
    flags: EligibilityFlags,
    config: TaxYearConfig,
) -> ComputationResult:
    wages = income.wages
    se_profit = income.net_self_employment_profit

    # 1. Self-employment tax
    se = calculate_self_employment_tax(se_profit, wages, status, config)

    # 2-3. AGI and taxable income
    total_income = wages + se_profit
    agi = max(total_income - se.deductible_half, ZERO)
    standard_deduction = config.standard_deduction_for(status)
    taxable_income = max(agi - standard_deduction, ZERO)

    # 4. Regular income tax
    bracket_tax = calculate_bracket_tax(taxable_income, status, config)
    income_tax = bracket_tax.gross_tax

    # 5. ODC reduces income tax only
    odc = apply_against(
        calculate_other_dependent_credit(
            dependents.other_dependents, agi, status, config
        ),
        income_tax,
    )
    income_tax_after_odc = max(income_tax - odc.used, ZERO)

    # 6. Earned income
    earned_income = wages + max(se.net_earnings, ZERO)

    # 7-8. CTC gets whatever income tax ODC left behind
    ctc = calculate_child_tax_credit(
        status,
        dependents.qualifying_children_under_17,
        agi,
        earned_income,
        income_tax_after_odc,
        config,
    )
    income_tax_after_credits = max(income_tax_after_odc - ctc.nonrefundable_used, ZERO)

    # 9. Nonrefundable credits never touch SE tax
    total_tax = income_tax_after_credits + se.se_tax

    # 10. EITC
    eitc = calculate_eitc(
        status,
        earned_income,
        agi,
        income.investment_income,
        dependents.qualifying_children_under_17,
        config,
        taxpayer_has_valid_ssn=flags.taxpayer_has_valid_ssn,
        children_have_valid_ssn=flags.children_have_valid_ssn,
        is_separated_spouse=flags.is_separated_spouse_for_eitc,
    )

    # 11. Payments and bottom line
    refundable_credits = ctc.actc_refundable + eitc.amount
    payments = income.withholding + refundable_credits
    refund_or_owed = payments - total_tax

    effective_rate = total_tax / total_income if total_income > ZERO else ZERO

    return ComputationResult(
        tax_year=config.tax_year,
        filing_status=status,
        total_income=total_income,
        agi=agi,
        standard_deduction=standard_deduction,
        taxable_income=taxable_income,
        income_tax=income_tax,
        bracket_breakdown=bracket_tax.breakdown,
        marginal_rate=bracket_tax.marginal_rate,
        self_employment=se,
        other_dependent_credit=odc,
        income_tax_after_odc=income_tax_after_odc,
        child_tax_credit=ctc,
        income_tax_after_credits=income_tax_after_credits,
        total_tax=total_tax,
        eitc=eitc,
        refundable_credits=refundable_credits,
        withholding=income.withholding,
        payments=payments,
        refund_or_owed=refund_or_owed,
        earned_income=earned_income,
        qualifying_children_under_17=dependents.qualifying_children_under_17,
        other_dependents=dependents.other_dependents,
        effective_rate=effective_rate,
    )
