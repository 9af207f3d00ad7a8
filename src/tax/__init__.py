"""Federal tax engine: year constants, calculators, and entry points."""

from src.tax.federal import ComputationResult, compute_federal_tax
from src.tax.inputs import (
    DependentCounts,
    EligibilityFlags,
    FilingStatus,
    IncomeInputs,
    W2Entry,
    aggregate_w2s,
)
from src.tax.quick_estimate import QuickEstimate, compute_quick_estimate
from src.tax.year_config import (
    TAX_YEAR_2025,
    TAX_YEAR_CONFIGS,
    ConfigurationError,
    TaxYearConfig,
    get_tax_year_config,
)

__all__ = [
    "ComputationResult",
    "ConfigurationError",
    "DependentCounts",
    "EligibilityFlags",
    "FilingStatus",
    "IncomeInputs",
    "QuickEstimate",
    "TAX_YEAR_2025",
    "TAX_YEAR_CONFIGS",
    "TaxYearConfig",
    "W2Entry",
    "aggregate_w2s",
    "compute_federal_tax",
    "compute_quick_estimate",
    "get_tax_year_config",
]
