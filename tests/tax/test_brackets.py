"""Tests for progressive bracket tax."""

from decimal import Decimal

import pytest

from src.tax.brackets import calculate_bracket_tax
from src.tax.inputs import FilingStatus
from src.tax.year_config import ConfigurationError, TaxYearConfig

STATUSES = [
    FilingStatus.SINGLE,
    FilingStatus.MARRIED_FILING_JOINTLY,
    FilingStatus.MARRIED_FILING_SEPARATELY,
    FilingStatus.HEAD_OF_HOUSEHOLD,
]


def _tax(amount: str | int, status: FilingStatus, config: TaxYearConfig) -> Decimal:
    return calculate_bracket_tax(Decimal(amount), status, config).gross_tax


class TestCalculateBracketTax:
    """Known values from the 2025 schedules."""

    def test_zero_income(self, config: TaxYearConfig) -> None:
        result = calculate_bracket_tax(Decimal("0"), FilingStatus.SINGLE, config)

        assert result.gross_tax == Decimal("0")
        assert result.breakdown == ()
        assert result.marginal_rate == Decimal("0")

    def test_negative_income_is_floored(self, config: TaxYearConfig) -> None:
        assert _tax("-5000", FilingStatus.SINGLE, config) == Decimal("0")

    def test_two_brackets_single(self, config: TaxYearConfig) -> None:
        result = calculate_bracket_tax(Decimal("24250"), FilingStatus.SINGLE, config)

        assert result.gross_tax == Decimal("2671.50")
        assert len(result.breakdown) == 2
        assert result.breakdown[0].tax_in_bracket == Decimal("1192.50")
        assert result.breakdown[1].income_in_bracket == Decimal("12325")
        assert result.marginal_rate == Decimal("0.12")

    def test_exact_boundary(self, config: TaxYearConfig) -> None:
        result = calculate_bracket_tax(Decimal("11925"), FilingStatus.SINGLE, config)

        assert result.gross_tax == Decimal("1192.50")
        assert len(result.breakdown) == 1

    def test_mfj(self, config: TaxYearConfig) -> None:
        assert _tax("100000", FilingStatus.MARRIED_FILING_JOINTLY, config) == Decimal("11828")

    def test_top_bracket_is_unbounded(self, config: TaxYearConfig) -> None:
        result = calculate_bracket_tax(Decimal("1000000"), FilingStatus.SINGLE, config)

        assert result.gross_tax == Decimal("327020.25")
        assert result.breakdown[-1].upper is None
        assert result.marginal_rate == Decimal("0.37")

    def test_surviving_spouse_raises(self, config: TaxYearConfig) -> None:
        with pytest.raises(ConfigurationError):
            calculate_bracket_tax(
                Decimal("50000"), FilingStatus.QUALIFYING_SURVIVING_SPOUSE, config
            )


class TestBracketProperties:
    """Monotonicity and continuity across the whole schedule."""

    @pytest.mark.parametrize("status", STATUSES)
    def test_monotonic(self, config: TaxYearConfig, status: FilingStatus) -> None:
        previous = Decimal("-1")
        for income in range(0, 900_000, 997):
            tax = _tax(income, status, config)
            assert tax >= previous
            previous = tax

    @pytest.mark.parametrize("status", STATUSES)
    def test_continuous_at_boundaries(
        self, config: TaxYearConfig, status: FilingStatus
    ) -> None:
        """Crossing a boundary by $1 adds exactly the marginal rate."""
        brackets = config.brackets_for(status)
        for below, above in zip(brackets, brackets[1:]):
            boundary = above.lower
            at = calculate_bracket_tax(boundary, status, config).gross_tax
            just_below = calculate_bracket_tax(boundary - 1, status, config).gross_tax
            just_above = calculate_bracket_tax(boundary + 1, status, config).gross_tax

            assert at - just_below == below.rate
            assert just_above - at == above.rate
