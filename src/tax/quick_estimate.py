"""Quick refund estimate for the first intake screen.

Used before full eligibility data exists. It runs the full computation once
for AGI, earned income and the taxes themselves, then swaps the credit rules
for flat heuristics:

- Child credit: a flat per-child amount when AGI is at or below the
  phase-out threshold, nothing above it.
- EITC: half of the table's maximum credit for the child count when income
  is inside the credit range, nothing outside it.

The figure is NOT authoritative. Never persist it or show it as final;
use compute_federal_tax for that.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Any

from src.core.logging import get_logger
from src.tax.federal import compute_federal_tax, resolve_config
from src.tax.inputs import FilingStatus
from src.tax.money import MONEY_CONTEXT, ZERO, render
from src.tax.year_config import TaxYearConfig

logger = get_logger(__name__)

QUICK_ESTIMATE_DISCLAIMER = (
    "Estimate based on simplified assumptions. Final amount verified during filing."
)
EITC_FLAT_SHARE = Decimal("0.5")


@dataclass(frozen=True)
class QuickEstimate:
    """Ballpark refund (positive) or amount owed (negative).

    Attributes:
        estimated_refund_or_owed: Withholding plus refundable estimates minus tax.
        estimated_credits: Flat child credit plus flat EITC.
        estimated_child_credit: Flat child credit before splitting.
        estimated_eitc: Flat EITC.
        estimated_total_tax: Income tax after the flat child credit plus SE tax.
        agi: AGI from the full computation.
        is_final: Always False.
        disclaimer: Text to show next to the figure.
    """

    estimated_refund_or_owed: Decimal
    estimated_credits: Decimal
    estimated_child_credit: Decimal
    estimated_eitc: Decimal
    estimated_total_tax: Decimal
    agi: Decimal
    is_final: bool = False
    disclaimer: str = QUICK_ESTIMATE_DISCLAIMER

    def to_dict(self) -> dict[str, Any]:
        """Presentation copy with money rounded to cents."""
        return {
            "estimated_refund_or_owed": render(self.estimated_refund_or_owed),
            "estimated_credits": render(self.estimated_credits),
            "estimated_child_credit": render(self.estimated_child_credit),
            "estimated_eitc": render(self.estimated_eitc),
            "estimated_total_tax": render(self.estimated_total_tax),
            "agi": render(self.agi),
            "is_final": self.is_final,
            "disclaimer": self.disclaimer,
        }


def compute_quick_estimate(
    filing_status: object,
    wages: object,
    self_employment_profit: object,
    withholding: object,
    qualifying_children_under_17: object = 0,
    *,
    config: TaxYearConfig | None = None,
) -> QuickEstimate:
    """Compute a fast, approximate refund or amount owed.

    Args:
        filing_status: Filing status (FilingStatus or a recognised string).
        wages: W-2 wages.
        self_employment_profit: Net self-employment profit.
        withholding: Federal income tax withheld.
        qualifying_children_under_17: Children under 17.
        config: Tax year constants; defaults to settings.tax_year.

    Returns:
        QuickEstimate with is_final=False.

    Raises:
        ConfigurationError: Same conditions as compute_federal_tax.
    """
    year_config = resolve_config(config)
    full = compute_federal_tax(
        filing_status,
        wages,
        self_employment_profit,
        withholding,
        qualifying_children_under_17=qualifying_children_under_17,
        config=year_config,
    )

    with localcontext(MONEY_CONTEXT):
        status = full.filing_status
        children = full.qualifying_children_under_17

        # Child credit: flat per child under a coarse income cutoff
        child_credit = ZERO
        if children and full.agi <= year_config.credit_phaseout_threshold_for(status):
            child_credit = year_config.ctc_per_child * children
        child_nonrefundable = min(child_credit, full.income_tax)
        child_refundable = min(
            child_credit - child_nonrefundable, year_config.actc_per_child * children
        )

        # EITC: flat share of the maximum while income is inside the range
        eitc = ZERO
        if status != FilingStatus.MARRIED_FILING_SEPARATELY and full.earned_income > ZERO:
            params = year_config.eitc_parameters_for(children)
            cutoff = (
                params.phaseout_end_mfj
                if status == FilingStatus.MARRIED_FILING_JOINTLY
                else params.phaseout_end_other
            )
            if max(full.earned_income, full.agi) < cutoff:
                eitc = params.max_credit * EITC_FLAT_SHARE

        total_tax = full.income_tax - child_nonrefundable + full.self_employment.se_tax
        refund_or_owed = full.withholding + child_refundable + eitc - total_tax

    logger.info("quick_estimate_computed", is_final=False, tax_year=year_config.tax_year)
    return QuickEstimate(
        estimated_refund_or_owed=refund_or_owed,
        estimated_credits=child_credit + eitc,
        estimated_child_credit=child_credit,
        estimated_eitc=eitc,
        estimated_total_tax=total_tax,
        agi=full.agi,
    )
