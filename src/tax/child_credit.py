"""Child Tax Credit and Additional Child Tax Credit (Schedule 8812).

The nonrefundable CTC can only absorb the income tax left after the Credit
for Other Dependents. Whatever remains may come back as the refundable ACTC,
which is the smallest of:

- 15% of earned income above $2,500,
- the per-child refundable cap,
- the CTC left unused after the nonrefundable portion.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from src.core.logging import get_logger
from src.tax.inputs import FilingStatus
from src.tax.money import ZERO
from src.tax.phaseout import credit_phaseout_reduction
from src.tax.year_config import TaxYearConfig

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChildTaxCreditResult:
    """Result of the CTC/ACTC calculation.

    Attributes:
        qualifying_children: Children under 17 used in the calculation.
        credit_before_phaseout: Children times the per-child cap.
        phaseout_reduction: $50 per $1,000 (or part) of MAGI over the threshold.
        credit_after_phaseout: Credit after phase-out, floored at zero.
        nonrefundable_used: Portion applied against income tax.
        remaining_after_nonrefundable: Phased-out credit not used against tax.
        actc_income_based: 15% of earned income over the floor.
        actc_child_cap: Children times the refundable per-child limit.
        actc_refundable: Additional Child Tax Credit.
        phaseout_threshold: Threshold used for the filing status.
    """

    qualifying_children: int = 0
    credit_before_phaseout: Decimal = ZERO
    phaseout_reduction: Decimal = ZERO
    credit_after_phaseout: Decimal = ZERO
    nonrefundable_used: Decimal = ZERO
    remaining_after_nonrefundable: Decimal = ZERO
    actc_income_based: Decimal = ZERO
    actc_child_cap: Decimal = ZERO
    actc_refundable: Decimal = ZERO
    phaseout_threshold: Decimal = ZERO


def calculate_child_tax_credit(
    filing_status: FilingStatus,
    qualifying_children_under_17: int,
    magi: Decimal,
    earned_income: Decimal,
    income_tax_available: Decimal,
    config: TaxYearConfig,
) -> ChildTaxCreditResult:
    """Calculate CTC with phase-out and the refundable ACTC.

    Args:
        filing_status: Selects the phase-out threshold.
        qualifying_children_under_17: Qualifying children count.
        magi: Modified AGI (AGI in this engine).
        earned_income: Wages plus net SE earnings.
        income_tax_available: Income tax left after other nonrefundable
            credits (ODC). Self-employment tax is never included.
        config: Tax year constants.

    Returns:
        ChildTaxCreditResult with every intermediate amount.

    Example:
        >>> result = calculate_child_tax_credit(
        ...     FilingStatus.SINGLE, 2, Decimal("50000"), Decimal("50000"),
        ...     Decimal("1000"), TAX_YEAR_2025,
        ... )
        >>> result.nonrefundable_used, result.actc_refundable
        (Decimal('1000'), Decimal('3400'))
    """
    threshold = config.credit_phaseout_threshold_for(filing_status)
    children = max(qualifying_children_under_17, 0)

    before = config.ctc_per_child * children
    reduction = credit_phaseout_reduction(
        magi,
        threshold,
        step=config.credit_phaseout_step,
        amount_per_step=config.credit_phaseout_amount,
    )
    after = max(before - reduction, ZERO)

    nonrefundable_used = min(max(income_tax_available, ZERO), after)
    remaining = max(after - nonrefundable_used, ZERO)

    income_based = (
        max(earned_income - config.actc_earned_income_floor, ZERO) * config.actc_rate
    )
    child_cap = config.actc_per_child * children
    actc = min(income_based, child_cap, remaining)

    if children:
        logger.debug(
            "ctc_calculated",
            children=children,
            phaseout_reduction=reduction,
            nonrefundable_used=nonrefundable_used,
            actc=actc,
        )

    return ChildTaxCreditResult(
        qualifying_children=children,
        credit_before_phaseout=before,
        phaseout_reduction=reduction,
        credit_after_phaseout=after,
        nonrefundable_used=nonrefundable_used,
        remaining_after_nonrefundable=remaining,
        actc_income_based=income_based,
        actc_child_cap=child_cap,
        actc_refundable=actc,
        phaseout_threshold=threshold,
    )
