"""Self-employment tax (Schedule SE).

Computes Social Security and Medicare tax on net self-employment earnings,
the Additional Medicare Tax on combined wages and SE earnings, and the
deductible half of SE tax that reduces AGI.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from src.tax.inputs import FilingStatus
from src.tax.money import ZERO
from src.tax.year_config import TaxYearConfig


@dataclass(frozen=True)
class SelfEmploymentTaxResult:
    """Result of the Schedule SE calculation.

    Attributes:
        net_earnings: Net profit times the 92.35% factor.
        social_security_tax: 12.4% on earnings up to the remaining wage base.
        medicare_tax: 2.9% on all net earnings.
        additional_medicare_tax: 0.9% on wages + earnings over the threshold.
        se_tax: Sum of the three taxes above.
        deductible_half: Half of se_tax, an above-the-line deduction.
    """

    net_earnings: Decimal = ZERO
    social_security_tax: Decimal = ZERO
    medicare_tax: Decimal = ZERO
    additional_medicare_tax: Decimal = ZERO
    se_tax: Decimal = ZERO
    deductible_half: Decimal = ZERO


def calculate_self_employment_tax(
    net_profit: Decimal,
    w2_wages: Decimal,
    filing_status: FilingStatus,
    config: TaxYearConfig,
) -> SelfEmploymentTaxResult:
    """Calculate self-employment tax and its deductible half.

    The Social Security wage base is shared with W-2 wages: wages already
    subject to Social Security shrink the base left for SE earnings.

    Args:
        net_profit: Net self-employment profit (non-negative).
        w2_wages: W-2 wages (non-negative).
        filing_status: Selects the Additional Medicare threshold.
        config: Tax year constants.

    Returns:
        SelfEmploymentTaxResult, all zeros when net profit is under $400.

    Raises:
        ConfigurationError: If the filing status has no Medicare threshold.

    Example:
        >>> result = calculate_self_employment_tax(
        ...     Decimal("10000"), Decimal("0"), FilingStatus.SINGLE, TAX_YEAR_2025
        ... )
        >>> result.se_tax == Decimal("1412.955")
        True
    """
    threshold = config.additional_medicare_threshold_for(filing_status)

    if net_profit < config.se_filing_floor:
        return SelfEmploymentTaxResult()

    net_earnings = net_profit * config.se_net_earnings_factor

    remaining_wage_base = max(config.ss_wage_base - w2_wages, ZERO)
    social_security_tax = min(net_earnings, remaining_wage_base) * config.se_ss_rate
    medicare_tax = net_earnings * config.se_medicare_rate

    excess_over_threshold = max(w2_wages + net_earnings - threshold, ZERO)
    additional_medicare_tax = excess_over_threshold * config.additional_medicare_rate

    se_tax = social_security_tax + medicare_tax + additional_medicare_tax

    return SelfEmploymentTaxResult(
        net_earnings=net_earnings,
        social_security_tax=social_security_tax,
        medicare_tax=medicare_tax,
        additional_medicare_tax=additional_medicare_tax,
        se_tax=se_tax,
        deductible_half=se_tax * config.se_tax_deduction_rate,
    )
