"""Tests for Schedule SE self-employment tax."""

from decimal import Decimal

import pytest

from src.tax.inputs import FilingStatus
from src.tax.self_employment import (
    SelfEmploymentTaxResult,
    calculate_self_employment_tax,
)
from src.tax.year_config import ConfigurationError, TaxYearConfig


class TestSelfEmploymentFloor:
    """Net profit under $400 owes no SE tax."""

    def test_399_is_all_zero(self, config: TaxYearConfig) -> None:
        result = calculate_self_employment_tax(
            Decimal("399"), Decimal("0"), FilingStatus.SINGLE, config
        )

        assert result == SelfEmploymentTaxResult()
        assert result.se_tax == Decimal("0")
        assert result.deductible_half == Decimal("0")
        assert result.net_earnings == Decimal("0")

    def test_400_is_taxed(self, config: TaxYearConfig) -> None:
        result = calculate_self_employment_tax(
            Decimal("400"), Decimal("0"), FilingStatus.SINGLE, config
        )

        assert result.net_earnings == Decimal("369.4")
        assert result.social_security_tax == Decimal("45.8056")
        assert result.medicare_tax == Decimal("10.7126")
        assert result.se_tax == Decimal("56.5182")
        assert result.se_tax > Decimal("0")


class TestSelfEmploymentTax:
    """Rates, the shared wage base, and Additional Medicare Tax."""

    def test_basic_calculation(self, config: TaxYearConfig) -> None:
        result = calculate_self_employment_tax(
            Decimal("30000"), Decimal("0"), FilingStatus.SINGLE, config
        )

        assert result.net_earnings == Decimal("27705")
        assert result.social_security_tax == Decimal("3435.42")
        assert result.medicare_tax == Decimal("803.445")
        assert result.additional_medicare_tax == Decimal("0")
        assert result.se_tax == Decimal("4238.865")
        assert result.deductible_half == Decimal("2119.4325")

    def test_deductible_half_is_exactly_half(self, config: TaxYearConfig) -> None:
        result = calculate_self_employment_tax(
            Decimal("123456.78"), Decimal("50000"), FilingStatus.HEAD_OF_HOUSEHOLD, config
        )

        assert result.deductible_half * 2 == result.se_tax

    def test_wage_base_is_shared_with_w2_wages(self, config: TaxYearConfig) -> None:
        """Only the wage base left after W-2 wages is subject to Social Security."""
        result = calculate_self_employment_tax(
            Decimal("20000"), Decimal("170000"), FilingStatus.SINGLE, config
        )

        # 176,100 - 170,000 = 6,100 of the 18,470 net earnings
        assert result.social_security_tax == Decimal("756.4")
        assert result.medicare_tax == Decimal("535.63")

    def test_wages_over_wage_base_leave_no_social_security(
        self, config: TaxYearConfig
    ) -> None:
        result = calculate_self_employment_tax(
            Decimal("20000"), Decimal("180000"), FilingStatus.MARRIED_FILING_JOINTLY, config
        )

        assert result.social_security_tax == Decimal("0")
        assert result.medicare_tax > Decimal("0")

    def test_medicare_is_uncapped(self, config: TaxYearConfig) -> None:
        result = calculate_self_employment_tax(
            Decimal("1000000"), Decimal("0"), FilingStatus.MARRIED_FILING_JOINTLY, config
        )

        assert result.social_security_tax == Decimal("176100") * Decimal("0.124")
        assert result.medicare_tax == Decimal("923500") * Decimal("0.029")

    def test_additional_medicare_uses_combined_income(
        self, config: TaxYearConfig
    ) -> None:
        single = calculate_self_employment_tax(
            Decimal("20000"), Decimal("190000"), FilingStatus.SINGLE, config
        )
        joint = calculate_self_employment_tax(
            Decimal("20000"), Decimal("190000"), FilingStatus.MARRIED_FILING_JOINTLY, config
        )

        # 190,000 + 18,470 - 200,000 = 8,470 over the single threshold
        assert single.additional_medicare_tax == Decimal("76.23")
        assert joint.additional_medicare_tax == Decimal("0")

    def test_mfs_threshold(self, config: TaxYearConfig) -> None:
        result = calculate_self_employment_tax(
            Decimal("100000"), Decimal("50000"), FilingStatus.MARRIED_FILING_SEPARATELY, config
        )

        # 50,000 + 92,350 - 125,000 = 17,350
        assert result.additional_medicare_tax == Decimal("156.15")

    def test_surviving_spouse_raises(self, config: TaxYearConfig) -> None:
        with pytest.raises(ConfigurationError):
            calculate_self_employment_tax(
                Decimal("1000"),
                Decimal("0"),
                FilingStatus.QUALIFYING_SURVIVING_SPOUSE,
                config,
            )
