"""Tax year-specific constants and thresholds.

This module centralizes tax year-specific values like bracket schedules,
standard deductions, wage bases and credit parameters so that no calculator
hardcodes them. A TaxYearConfig is resolved once per computation and passed
down explicitly; tests can inject a synthetic config for edge cases.

Example:
    >>> from src.tax.year_config import get_tax_year_config
    >>> config = get_tax_year_config(2025)
    >>> print(f"SS wage base: {config.ss_wage_base}")
    SS wage base: 176100
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType

from src.tax.inputs import FilingStatus


class ConfigurationError(Exception):
    """Raised when constants are missing for a tax year or filing status.

    There is no safe numeric default for an entire bracket or credit schedule,
    so this always propagates to the caller.
    """


@dataclass(frozen=True)
class TaxBracket:
    """One marginal-rate bracket.

    Attributes:
        lower: Taxable income where the bracket starts.
        upper: Taxable income where the bracket ends (None for the top bracket).
        rate: Marginal rate applied inside the bracket.
    """

    lower: Decimal
    upper: Decimal | None
    rate: Decimal


@dataclass(frozen=True)
class EitcParameters:
    """EITC schedule row for one qualifying-child count.

    Attributes:
        earned_income_amount: Earned income at which the credit reaches its maximum.
        max_credit: Maximum credit.
        phaseout_start_mfj: Phase-out threshold for married filing jointly.
        phaseout_end_mfj: Income at which the credit is fully phased out (MFJ).
        phaseout_start_other: Phase-out threshold for all other statuses.
        phaseout_end_other: Income at which the credit is fully phased out (other).
    """

    earned_income_amount: Decimal
    max_credit: Decimal
    phaseout_start_mfj: Decimal
    phaseout_end_mfj: Decimal
    phaseout_start_other: Decimal
    phaseout_end_other: Decimal


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(mapping)


@dataclass(frozen=True)
class TaxYearConfig:
    """Tax year-specific constants and thresholds.

    All monetary values are Decimal for precision in tax calculations.
    This dataclass is frozen and its tables are read-only mappings, so a
    single instance can be shared by any number of concurrent computations.
    """

    tax_year: int

    # Income tax
    brackets: Mapping[FilingStatus, tuple[TaxBracket, ...]]
    standard_deductions: Mapping[FilingStatus, Decimal]

    # Self-employment tax (combined employer + employee rates)
    ss_wage_base: Decimal
    se_ss_rate: Decimal = Decimal("0.124")  # 12.4% (6.2% x 2)
    se_medicare_rate: Decimal = Decimal("0.029")  # 2.9% (1.45% x 2)
    se_net_earnings_factor: Decimal = Decimal("0.9235")  # 92.35% of net SE income
    se_filing_floor: Decimal = Decimal("400")
    additional_medicare_rate: Decimal = Decimal("0.009")
    additional_medicare_thresholds: Mapping[FilingStatus, Decimal] = field(
        default_factory=lambda: _frozen({})
    )

    # Child Tax Credit / Additional Child Tax Credit (Schedule 8812)
    ctc_per_child: Decimal = Decimal("2000")
    actc_per_child: Decimal = Decimal("1700")
    actc_earned_income_floor: Decimal = Decimal("2500")
    actc_rate: Decimal = Decimal("0.15")

    # Credit for Other Dependents
    odc_per_dependent: Decimal = Decimal("500")

    # CTC/ODC phase-out: $50 for each $1,000 (or part) over the threshold
    credit_phaseout_thresholds: Mapping[FilingStatus, Decimal] = field(
        default_factory=lambda: _frozen({})
    )
    credit_phaseout_step: Decimal = Decimal("1000")
    credit_phaseout_amount: Decimal = Decimal("50")

    # Earned Income Tax Credit
    eitc_investment_income_limit: Decimal = Decimal("0")
    eitc_parameters: Mapping[int, EitcParameters] = field(
        default_factory=lambda: _frozen({})
    )

    @property
    def se_tax_deduction_rate(self) -> Decimal:
        """Deductible portion of SE tax (50%)."""
        return Decimal("0.5")

    def _lookup(self, table: Mapping, filing_status: FilingStatus, label: str):
        if filing_status not in table:
            raise ConfigurationError(
                f"No {label} for filing status '{filing_status.value}' "
                f"in tax year {self.tax_year}"
            )
        return table[filing_status]

    def brackets_for(self, filing_status: FilingStatus) -> tuple[TaxBracket, ...]:
        """Bracket schedule for a filing status."""
        return self._lookup(self.brackets, filing_status, "tax brackets")

    def standard_deduction_for(self, filing_status: FilingStatus) -> Decimal:
        """Standard deduction for a filing status."""
        return self._lookup(self.standard_deductions, filing_status, "standard deduction")

    def additional_medicare_threshold_for(self, filing_status: FilingStatus) -> Decimal:
        """Additional Medicare Tax threshold for a filing status."""
        return self._lookup(
            self.additional_medicare_thresholds,
            filing_status,
            "Additional Medicare threshold",
        )

    def credit_phaseout_threshold_for(self, filing_status: FilingStatus) -> Decimal:
        """CTC/ODC modified-AGI phase-out threshold for a filing status."""
        return self._lookup(
            self.credit_phaseout_thresholds,
            filing_status,
            "credit phase-out threshold",
        )

    def eitc_parameters_for(self, qualifying_children: int) -> EitcParameters:
        """EITC row for a child count, clamped to {0, 1, 2, 3+}."""
        key = min(max(qualifying_children, 0), 3)
        if key not in self.eitc_parameters:
            raise ConfigurationError(
                f"No EITC parameters for {key} qualifying children "
                f"in tax year {self.tax_year}"
            )
        return self.eitc_parameters[key]


def _schedule(*rows: tuple[str, str | None, str]) -> tuple[TaxBracket, ...]:
    """Build a bracket tuple from (lower, upper, rate) strings."""
    return tuple(
        TaxBracket(
            lower=Decimal(lower),
            upper=Decimal(upper) if upper is not None else None,
            rate=Decimal(rate),
        )
        for lower, upper, rate in rows
    )


# 2025 Configuration - IRS published values (Rev. Proc. 2024-40, as amended
# by P.L. 119-21 for the standard deduction and child tax credit)
TAX_YEAR_2025 = TaxYearConfig(
    tax_year=2025,
    brackets=_frozen(
        {
            FilingStatus.SINGLE: _schedule(
                ("0", "11925", "0.10"),
                ("11925", "48475", "0.12"),
                ("48475", "103350", "0.22"),
                ("103350", "197300", "0.24"),
                ("197300", "250525", "0.32"),
                ("250525", "626350", "0.35"),
                ("626350", None, "0.37"),
            ),
            FilingStatus.MARRIED_FILING_JOINTLY: _schedule(
                ("0", "23850", "0.10"),
                ("23850", "96950", "0.12"),
                ("96950", "206700", "0.22"),
                ("206700", "394600", "0.24"),
                ("394600", "501050", "0.32"),
                ("501050", "751600", "0.35"),
                ("751600", None, "0.37"),
            ),
            FilingStatus.MARRIED_FILING_SEPARATELY: _schedule(
                ("0", "11925", "0.10"),
                ("11925", "48475", "0.12"),
                ("48475", "103350", "0.22"),
                ("103350", "197300", "0.24"),
                ("197300", "250525", "0.32"),
                ("250525", "375800", "0.35"),
                ("375800", None, "0.37"),
            ),
            FilingStatus.HEAD_OF_HOUSEHOLD: _schedule(
                ("0", "17000", "0.10"),
                ("17000", "64850", "0.12"),
                ("64850", "103350", "0.22"),
                ("103350", "197300", "0.24"),
                ("197300", "250500", "0.32"),
                ("250500", "626350", "0.35"),
                ("626350", None, "0.37"),
            ),
        }
    ),
    standard_deductions=_frozen(
        {
            FilingStatus.SINGLE: Decimal("15750"),
            FilingStatus.MARRIED_FILING_JOINTLY: Decimal("31500"),
            FilingStatus.MARRIED_FILING_SEPARATELY: Decimal("15750"),
            FilingStatus.HEAD_OF_HOUSEHOLD: Decimal("23625"),
        }
    ),
    ss_wage_base=Decimal("176100"),
    additional_medicare_thresholds=_frozen(
        {
            FilingStatus.SINGLE: Decimal("200000"),
            FilingStatus.MARRIED_FILING_JOINTLY: Decimal("250000"),
            FilingStatus.MARRIED_FILING_SEPARATELY: Decimal("125000"),
            FilingStatus.HEAD_OF_HOUSEHOLD: Decimal("200000"),
        }
    ),
    ctc_per_child=Decimal("2200"),
    actc_per_child=Decimal("1700"),
    credit_phaseout_thresholds=_frozen(
        {
            FilingStatus.SINGLE: Decimal("200000"),
            FilingStatus.MARRIED_FILING_JOINTLY: Decimal("400000"),
            FilingStatus.MARRIED_FILING_SEPARATELY: Decimal("200000"),
            FilingStatus.HEAD_OF_HOUSEHOLD: Decimal("200000"),
        }
    ),
    eitc_investment_income_limit=Decimal("11950"),
    eitc_parameters=_frozen(
        {
            0: EitcParameters(
                earned_income_amount=Decimal("8490"),
                max_credit=Decimal("649"),
                phaseout_start_mfj=Decimal("17730"),
                phaseout_end_mfj=Decimal("26214"),
                phaseout_start_other=Decimal("10620"),
                phaseout_end_other=Decimal("19104"),
            ),
            1: EitcParameters(
                earned_income_amount=Decimal("12730"),
                max_credit=Decimal("4328"),
                phaseout_start_mfj=Decimal("30470"),
                phaseout_end_mfj=Decimal("57554"),
                phaseout_start_other=Decimal("23350"),
                phaseout_end_other=Decimal("50434"),
            ),
            2: EitcParameters(
                earned_income_amount=Decimal("17880"),
                max_credit=Decimal("7152"),
                phaseout_start_mfj=Decimal("30470"),
                phaseout_end_mfj=Decimal("64430"),
                phaseout_start_other=Decimal("23350"),
                phaseout_end_other=Decimal("57310"),
            ),
            3: EitcParameters(
                earned_income_amount=Decimal("17880"),
                max_credit=Decimal("8046"),
                phaseout_start_mfj=Decimal("30470"),
                phaseout_end_mfj=Decimal("68675"),
                phaseout_start_other=Decimal("23350"),
                phaseout_end_other=Decimal("61555"),
            ),
        }
    ),
)

# Registry of available tax year configurations
TAX_YEAR_CONFIGS: Mapping[int, TaxYearConfig] = _frozen(
    {
        2025: TAX_YEAR_2025,
    }
)


def get_tax_year_config(year: int) -> TaxYearConfig:
    """Get configuration for a specific tax year.

    Args:
        year: The tax year (e.g., 2025).

    Returns:
        TaxYearConfig for the specified year.

    Raises:
        ConfigurationError: If no configuration exists for the requested year.

    Example:
        >>> config = get_tax_year_config(2025)
        >>> print(config.ss_wage_base)
        176100
    """
    if year not in TAX_YEAR_CONFIGS:
        available = sorted(TAX_YEAR_CONFIGS.keys())
        raise ConfigurationError(
            f"No tax configuration for year {year}. Available years: {available}"
        )
    return TAX_YEAR_CONFIGS[year]
