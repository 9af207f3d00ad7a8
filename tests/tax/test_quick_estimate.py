"""Tests for the quick refund estimate."""

from decimal import Decimal

import pytest

from src.tax.federal import compute_federal_tax
from src.tax.quick_estimate import QUICK_ESTIMATE_DISCLAIMER, compute_quick_estimate
from src.tax.year_config import ConfigurationError, TaxYearConfig


class TestComputeQuickEstimate:
    """Flat heuristics on top of the full tax computation."""

    def test_never_final(self, config: TaxYearConfig) -> None:
        estimate = compute_quick_estimate("single", 40000, 0, 3000, config=config)

        assert estimate.is_final is False
        assert estimate.disclaimer == QUICK_ESTIMATE_DISCLAIMER

    def test_no_children_matches_full_tax(self, config: TaxYearConfig) -> None:
        estimate = compute_quick_estimate("single", 40000, 0, 3000, config=config)

        assert estimate.agi == Decimal("40000")
        assert estimate.estimated_eitc == Decimal("0")
        assert estimate.estimated_child_credit == Decimal("0")
        assert estimate.estimated_total_tax == Decimal("2671.50")
        assert estimate.estimated_refund_or_owed == Decimal("328.50")

    def test_flat_child_credit_and_half_eitc(self, config: TaxYearConfig) -> None:
        estimate = compute_quick_estimate(
            "single", 30000, 0, 0, qualifying_children_under_17=2, config=config
        )

        assert estimate.estimated_child_credit == Decimal("4400")
        assert estimate.estimated_eitc == Decimal("3576")
        assert estimate.estimated_credits == Decimal("7976")
        assert estimate.estimated_total_tax == Decimal("0")
        # 2,928.50 refundable child credit + 3,576 EITC
        assert estimate.estimated_refund_or_owed == Decimal("6504.5")

    def test_differs_from_full_computation(self, config: TaxYearConfig) -> None:
        estimate = compute_quick_estimate(
            "single", 30000, 0, 0, qualifying_children_under_17=2, config=config
        )
        full = compute_federal_tax(
            "single", 30000, 0, 0, qualifying_children_under_17=2, config=config
        )

        assert full.refund_or_owed == Decimal("8680.5")
        assert estimate.estimated_refund_or_owed != full.refund_or_owed

    def test_child_credit_cut_off_above_threshold(self, config: TaxYearConfig) -> None:
        estimate = compute_quick_estimate(
            "single", 250000, 0, 0, qualifying_children_under_17=2, config=config
        )

        assert estimate.estimated_child_credit == Decimal("0")
        assert estimate.estimated_eitc == Decimal("0")

    def test_no_eitc_for_mfs(self, config: TaxYearConfig) -> None:
        estimate = compute_quick_estimate(
            "mfs", 15000, 0, 0, qualifying_children_under_17=1, config=config
        )

        assert estimate.estimated_eitc == Decimal("0")

    def test_no_eitc_without_earned_income(self, config: TaxYearConfig) -> None:
        estimate = compute_quick_estimate("single", 0, 0, 500, config=config)

        assert estimate.estimated_eitc == Decimal("0")
        assert estimate.estimated_refund_or_owed == Decimal("500")

    def test_self_employment_tax_included(self, config: TaxYearConfig) -> None:
        estimate = compute_quick_estimate("single", 0, 60000, 0, config=config)
        full = compute_federal_tax("single", 0, 60000, 0, config=config)

        assert estimate.estimated_total_tax == full.total_tax
        assert estimate.estimated_refund_or_owed == -full.total_tax

    def test_surviving_spouse_raises(self, config: TaxYearConfig) -> None:
        with pytest.raises(ConfigurationError):
            compute_quick_estimate("qw", 30000, 0, 0, config=config)

    def test_to_dict(self, config: TaxYearConfig) -> None:
        rendered = compute_quick_estimate(
            "single", 30000, 0, 0, qualifying_children_under_17=2, config=config
        ).to_dict()

        assert rendered["estimated_refund_or_owed"] == 6504.5
        assert rendered["estimated_credits"] == 7976.0
        assert rendered["is_final"] is False
        assert rendered["disclaimer"] == QUICK_ESTIMATE_DISCLAIMER
