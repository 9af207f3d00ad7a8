"""Income-based phase-out shared by the child and other-dependent credits."""

from decimal import ROUND_CEILING, Decimal

from src.tax.money import ZERO


def credit_phaseout_reduction(
    magi: Decimal,
    threshold: Decimal,
    step: Decimal = Decimal("1000"),
    amount_per_step: Decimal = Decimal("50"),
) -> Decimal:
    """Reduction for income over a phase-out threshold.

    The credit drops by amount_per_step for each step of income over the
    threshold, and any partial step counts as a full one.

    Args:
        magi: Modified AGI.
        threshold: Income at which the phase-out begins.
        step: Size of one income step (default $1,000).
        amount_per_step: Reduction per step (default $50).

    Returns:
        Total reduction, zero when magi does not exceed the threshold.

    Example:
        >>> credit_phaseout_reduction(Decimal("400001"), Decimal("400000"))
        Decimal('50')
    """
    if magi <= threshold:
        return ZERO
    steps = ((magi - threshold) / step).to_integral_value(rounding=ROUND_CEILING)
    return steps * amount_per_step
