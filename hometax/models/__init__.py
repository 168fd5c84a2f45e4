"""Data models for HomeTax."""

from hometax.models.enums import DeductionMethod, HousingChoice
from hometax.models.inputs import HouseholdInputs, HousingInputs, RetirementSettings
from hometax.models.jurisdiction import (
    Bracket,
    JurisdictionProfile,
    TaxTableConfig,
    load_tax_tables,
)
from hometax.models.outcomes import (
    AmortizationYear,
    CapitalGainsAllocation,
    ComparisonRow,
    ComparisonTable,
    DeductionResult,
    FederalTaxResult,
    ItemizedBreakdown,
    PayrollTax,
    PhaseoutYear,
    RetirementProjection,
    SaltResult,
    ScenarioOutcome,
    TrajectoryPoint,
    YearsToTarget,
)
from hometax.models.scenario import ScenarioBlob

__all__ = [
    "AmortizationYear",
    "Bracket",
    "CapitalGainsAllocation",
    "ComparisonRow",
    "ComparisonTable",
    "DeductionMethod",
    "DeductionResult",
    "FederalTaxResult",
    "HouseholdInputs",
    "HousingChoice",
    "HousingInputs",
    "ItemizedBreakdown",
    "JurisdictionProfile",
    "PayrollTax",
    "PhaseoutYear",
    "RetirementProjection",
    "RetirementSettings",
    "SaltResult",
    "ScenarioBlob",
    "ScenarioOutcome",
    "TaxTableConfig",
    "TrajectoryPoint",
    "YearsToTarget",
    "load_tax_tables",
]
