"""HTTP adapter for the federal tax engine.

The client-facing application posts intake values here and renders the
returned breakdown. Request bodies are deliberately loose: the engine clamps
bad values instead of rejecting them, so negative numbers, numeric strings and
fractional counts are all accepted.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from src.core.logging import get_logger
from src.tax.federal import compute_federal_tax
from src.tax.inputs import EligibilityFlags, W2Entry, aggregate_w2s, to_money
from src.tax.quick_estimate import compute_quick_estimate
from src.tax.year_config import ConfigurationError

logger = get_logger(__name__)

router = APIRouter(prefix="/api/tax", tags=["tax"])

LooseNumber = float | str | None


class W2Row(BaseModel):
    """One W-2 as entered on the multi-employer form."""

    employer_name: str = ""
    wages: LooseNumber = 0
    federal_withholding: LooseNumber = 0


class IncomeRequest(BaseModel):
    """Income fields shared by both endpoints.

    When `w2s` is non-empty, wages and withholding are summed from the rows
    (plus `additional_withholding`) and the flat `wages`/`withholding` fields
    are ignored.
    """

    filing_status: str | None = "single"
    wages: LooseNumber = 0
    self_employment_profit: LooseNumber = 0
    withholding: LooseNumber = 0
    qualifying_children_under_17: LooseNumber = 0
    w2s: list[W2Row] = Field(default_factory=list)
    additional_withholding: LooseNumber = 0

    def wages_and_withholding(self) -> tuple[Any, Any]:
        """Resolve wages and withholding from W-2 rows or flat fields."""
        if not self.w2s:
            return self.wages, self.withholding
        totals = aggregate_w2s(
            (
                W2Entry(
                    wages=to_money(row.wages, "w2.wages"),
                    federal_withholding=to_money(
                        row.federal_withholding, "w2.federal_withholding"
                    ),
                    employer_name=row.employer_name,
                )
                for row in self.w2s
            ),
            additional_withholding=self.additional_withholding,
        )
        return totals.wages, totals.withholding


class FederalTaxRequest(IncomeRequest):
    """Full intake for the authoritative computation."""

    other_dependents: LooseNumber = 0
    investment_income: LooseNumber = 0
    taxpayer_has_valid_ssn: bool = True
    children_have_valid_ssn: bool = True
    is_separated_spouse_for_eitc: bool = False


class QuickEstimateRequest(IncomeRequest):
    """Minimal intake for the quick estimate."""


def _unprocessable(exc: ConfigurationError) -> HTTPException:
    logger.warning("tax_configuration_error", error=str(exc))
    return HTTPException(status_code=422, detail=str(exc))


@router.post("/federal")
async def federal_tax(payload: FederalTaxRequest) -> dict[str, Any]:
    """Compute the authoritative federal tax result.

    Returns:
        ComputationResult rendered with amounts rounded to cents.
    """
    wages, withholding = payload.wages_and_withholding()
    try:
        result = compute_federal_tax(
            payload.filing_status,
            wages,
            payload.self_employment_profit,
            withholding,
            qualifying_children_under_17=payload.qualifying_children_under_17,
            other_dependents=payload.other_dependents,
            investment_income=payload.investment_income,
            eligibility_flags=EligibilityFlags(
                taxpayer_has_valid_ssn=payload.taxpayer_has_valid_ssn,
                children_have_valid_ssn=payload.children_have_valid_ssn,
                is_separated_spouse_for_eitc=payload.is_separated_spouse_for_eitc,
            ),
        )
    except ConfigurationError as exc:
        raise _unprocessable(exc) from exc
    return result.to_dict()


@router.post("/quick-estimate")
async def quick_estimate(payload: QuickEstimateRequest) -> dict[str, Any]:
    """Compute a non-final ballpark refund or amount owed."""
    wages, withholding = payload.wages_and_withholding()
    try:
        estimate = compute_quick_estimate(
            payload.filing_status,
            wages,
            payload.self_employment_profit,
            withholding,
            qualifying_children_under_17=payload.qualifying_children_under_17,
        )
    except ConfigurationError as exc:
        raise _unprocessable(exc) from exc
    return estimate.to_dict()
