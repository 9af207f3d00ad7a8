"""Credit for Other Dependents (ODC)."""

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
class OtherDependentCreditResult:
    """Computed ODC and the part actually used against income tax.

    Unused ODC is forfeited; it never flows to another credit.
    """

    dependents: int = 0
    credit_before_phaseout: Decimal = ZERO
    phaseout_reduction: Decimal = ZERO
    amount: Decimal = ZERO
    used: Decimal = ZERO


def calculate_other_dependent_credit(
    count: int,
    magi: Decimal,
    filing_status: FilingStatus,
    config: TaxYearConfig,
) -> OtherDependentCreditResult:
    """Calculate the nonrefundable $500-per-dependent credit.

    Args:
        count: Number of dependents who are not CTC-qualifying children.
        magi: Modified AGI (AGI in this engine).
        filing_status: Selects the phase-out threshold.
        config: Tax year constants.

    Returns:
        OtherDependentCreditResult with `used` left at zero; the caller sets it
        once income tax headroom is known (see apply_against).
    """
    threshold = config.credit_phaseout_threshold_for(filing_status)
    if count <= 0:
        return OtherDependentCreditResult()

    before = config.odc_per_dependent * count
    reduction = credit_phaseout_reduction(
        magi,
        threshold,
        step=config.credit_phaseout_step,
        amount_per_step=config.credit_phaseout_amount,
    )
    amount = max(before - reduction, ZERO)
    if reduction > ZERO:
        logger.debug("odc_phaseout_applied", reduction=reduction, amount=amount)

    return OtherDependentCreditResult(
        dependents=count,
        credit_before_phaseout=before,
        phaseout_reduction=reduction,
        amount=amount,
    )


def apply_against(
    credit: OtherDependentCreditResult, income_tax: Decimal
) -> OtherDependentCreditResult:
    """Return a copy of the credit with `used` limited to available income tax."""
    used = min(max(income_tax, ZERO), credit.amount)
    return OtherDependentCreditResult(
        dependents=credit.dependents,
        credit_before_phaseout=credit.credit_before_phaseout,
        phaseout_reduction=credit.phaseout_reduction,
        amount=credit.amount,
        used=used,
    )
