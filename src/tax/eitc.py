"""Earned Income Tax Credit (Schedule EIC).

Table-driven credit using the inflation-adjusted parameters for the tax year.
This is math-correct for the credit schedule but does not validate every
eligibility rule (age, residency, relationship, prior disallowance). The
caller supplies SSN and separated-spouse flags; final eligibility is confirmed
at filing time.

Gating runs in a fixed order and stops at the first failure:

1. Married filing separately without the separated-spouse exception.
2. Taxpayer lacks a valid SSN.
3. Qualifying children lack valid SSNs.
4. Investment income over the annual limit.
5. No earned income.

The credit phases in with earned income and phases out on the GREATER of
earned income and AGI.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from src.core.logging import get_logger
from src.tax.inputs import FilingStatus
from src.tax.money import ZERO, round_dollars
from src.tax.year_config import TaxYearConfig

logger = get_logger(__name__)


class EitcIneligibility(str, Enum):
    """Reason an EITC claim produced no credit."""

    MARRIED_FILING_SEPARATELY = "married_filing_separately"
    TAXPAYER_SSN = "taxpayer_ssn"
    CHILDREN_SSN = "children_ssn"
    INVESTMENT_INCOME = "investment_income"
    NO_EARNED_INCOME = "no_earned_income"
    PHASED_OUT = "phased_out"


_REASON_MESSAGES: dict[EitcIneligibility, str] = {
    EitcIneligibility.MARRIED_FILING_SEPARATELY: (
        "EITC is generally not allowed for Married Filing Separately "
        "(unless separated-spouse rules apply)."
    ),
    EitcIneligibility.TAXPAYER_SSN: "Taxpayer must have a valid SSN for EITC.",
    EitcIneligibility.CHILDREN_SSN: "Qualifying children must have valid SSNs for EITC.",
    EitcIneligibility.INVESTMENT_INCOME: "Investment income exceeds the IRS limit for EITC.",
    EitcIneligibility.NO_EARNED_INCOME: "No earned income reported.",
    EitcIneligibility.PHASED_OUT: "Income is above the EITC phase-out range.",
}

_IRS_REFERENCES: dict[EitcIneligibility | None, str] = {
    EitcIneligibility.MARRIED_FILING_SEPARATELY: "IRC §32(d); Form 1040 Instructions – EIC",
    EitcIneligibility.TAXPAYER_SSN: "IRC §32(m); Form 1040 Instructions – EIC",
    EitcIneligibility.CHILDREN_SSN: "IRC §32(c)(3)(D); Schedule EIC (Form 1040) Instructions",
    EitcIneligibility.INVESTMENT_INCOME: "IRC §32(i); Rev. Proc. 2024-40",
    EitcIneligibility.NO_EARNED_INCOME: "Schedule EIC (Form 1040)",
    EitcIneligibility.PHASED_OUT: "IRC §32(a)(2); Rev. Proc. 2024-40",
    None: "Rev. Proc. 2024-40; Schedule EIC (Form 1040)",
}


@dataclass(frozen=True)
class EitcDetails:
    """Intermediate values of an eligible EITC calculation."""

    qualifying_children_used: int
    earned_income_used: Decimal
    agi_used: Decimal
    phaseout_base: Decimal
    max_credit: Decimal
    earned_income_amount: Decimal
    phaseout_start: Decimal
    phaseout_end: Decimal
    phase_in_rate: Decimal
    phase_out_rate: Decimal
    phase_in_credit: Decimal
    phaseout_reduction: Decimal
    investment_income_limit: Decimal


@dataclass(frozen=True)
class EitcResult:
    """Result of the EITC calculation.

    Attributes:
        eligible: True when a positive credit results.
        amount: Credit rounded to whole dollars.
        reason: Why no credit resulted, or None.
        message: Human-readable reason, or None.
        irs_reference: Citation for the rule applied.
        details: Schedule values, present whenever gating passed.
    """

    eligible: bool
    amount: Decimal = ZERO
    reason: EitcIneligibility | None = None
    message: str | None = None
    irs_reference: str = _IRS_REFERENCES[None]
    details: EitcDetails | None = None


def _ineligible(
    reason: EitcIneligibility, details: EitcDetails | None = None
) -> EitcResult:
    logger.debug("eitc_ineligible", reason=reason.value)
    return EitcResult(
        eligible=False,
        amount=ZERO,
        reason=reason,
        message=_REASON_MESSAGES[reason],
        irs_reference=_IRS_REFERENCES[reason],
        details=details,
    )


def calculate_eitc(
    filing_status: FilingStatus,
    earned_income: Decimal,
    agi: Decimal | None,
    investment_income: Decimal,
    qualifying_children: int,
    config: TaxYearConfig,
    taxpayer_has_valid_ssn: bool = True,
    children_have_valid_ssn: bool = True,
    is_separated_spouse: bool = False,
    allow_mfs: bool = False,
) -> EitcResult:
    """Calculate the Earned Income Tax Credit.

    Args:
        filing_status: Filing status; MFJ uses the higher phase-out pair.
        earned_income: Wages plus net SE earnings.
        agi: Adjusted gross income. Defaults to earned income when None.
        investment_income: Investment income checked against the annual limit.
        qualifying_children: Child count, clamped to {0, 1, 2, 3+}.
        config: Tax year constants.
        taxpayer_has_valid_ssn: Taxpayer SSN flag.
        children_have_valid_ssn: Children SSN flag (ignored with no children).
        is_separated_spouse: Separated-spouse exception for MFS filers.
        allow_mfs: Explicit override permitting MFS filers.

    Returns:
        EitcResult with the rounded credit or the first failing reason.

    Raises:
        ConfigurationError: If the clamped child count has no table row.

    Example:
        >>> result = calculate_eitc(
        ...     FilingStatus.SINGLE, Decimal("12000"), Decimal("12000"),
        ...     Decimal("0"), 1, TAX_YEAR_2025,
        ... )
        >>> result.amount
        Decimal('4080')
    """
    earned = max(earned_income, ZERO)
    agi_used = max(agi if agi is not None else earned, ZERO)
    children = min(max(qualifying_children, 0), 3)

    if filing_status == FilingStatus.MARRIED_FILING_SEPARATELY and not (
        is_separated_spouse or allow_mfs
    ):
        return _ineligible(EitcIneligibility.MARRIED_FILING_SEPARATELY)
    if not taxpayer_has_valid_ssn:
        return _ineligible(EitcIneligibility.TAXPAYER_SSN)
    if children > 0 and not children_have_valid_ssn:
        return _ineligible(EitcIneligibility.CHILDREN_SSN)
    if investment_income > config.eitc_investment_income_limit:
        return _ineligible(EitcIneligibility.INVESTMENT_INCOME)
    if earned <= ZERO:
        return _ineligible(EitcIneligibility.NO_EARNED_INCOME)

    params = config.eitc_parameters_for(children)

    # Only MFJ gets the higher pair; allowed MFS filers use the other pair.
    if filing_status == FilingStatus.MARRIED_FILING_JOINTLY:
        phaseout_start = params.phaseout_start_mfj
        phaseout_end = params.phaseout_end_mfj
    else:
        phaseout_start = params.phaseout_start_other
        phaseout_end = params.phaseout_end_other

    phase_in_rate = (
        params.max_credit / params.earned_income_amount
        if params.earned_income_amount > ZERO
        else ZERO
    )
    phase_out_rate = params.max_credit / max(phaseout_end - phaseout_start, Decimal("1"))

    phase_in_credit = min(params.max_credit, earned * phase_in_rate)

    phaseout_base = max(earned, agi_used)
    reduction = ZERO
    if phaseout_base > phaseout_start:
        reduction = (phaseout_base - phaseout_start) * phase_out_rate

    amount = round_dollars(max(phase_in_credit - reduction, ZERO))

    details = EitcDetails(
        qualifying_children_used=children,
        earned_income_used=earned,
        agi_used=agi_used,
        phaseout_base=phaseout_base,
        max_credit=params.max_credit,
        earned_income_amount=params.earned_income_amount,
        phaseout_start=phaseout_start,
        phaseout_end=phaseout_end,
        phase_in_rate=phase_in_rate,
        phase_out_rate=phase_out_rate,
        phase_in_credit=phase_in_credit,
        phaseout_reduction=reduction,
        investment_income_limit=config.eitc_investment_income_limit,
    )

    if amount <= ZERO:
        return _ineligible(EitcIneligibility.PHASED_OUT, details)

    logger.debug("eitc_calculated", children=children, amount=amount)
    return EitcResult(eligible=True, amount=amount, details=details)
