"""Computed result models.

Every outcome is frozen: results are derived fresh from inputs on each
evaluation and are never updated in place.
"""

import math
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from hometax.models.amounts import ZERO
from hometax.models.enums import DeductionMethod, HousingChoice


class PayrollTax(BaseModel):
    model_config = ConfigDict(frozen=True)

    social_security: Decimal
    medicare: Decimal
    additional_medicare: Decimal

    @property
    def total(self) -> Decimal:
        return self.social_security + self.medicare + self.additional_medicare


class CapitalGainsAllocation(BaseModel):
    """Long-term gains split across the 0% / 15% / 20% tiers."""

    model_config = ConfigDict(frozen=True)

    at_zero: Decimal
    at_fifteen: Decimal
    at_twenty: Decimal
    tax: Decimal


class FederalTaxResult(BaseModel):
    """Federal income tax for one (AGI, deduction) pair."""

    model_config = ConfigDict(frozen=True)

    taxable_income: Decimal
    ordinary_taxable_income: Decimal
    ordinary_tax: Decimal
    capital_gains: CapitalGainsAllocation
    niit: Decimal

    @property
    def capital_gains_tax(self) -> Decimal:
        return self.capital_gains.tax

    @property
    def total(self) -> Decimal:
        return self.ordinary_tax + self.capital_gains.tax + self.niit


class DeductionResult(BaseModel):
    """Standard-vs-itemized selection for one level of government."""

    model_config = ConfigDict(frozen=True)

    itemized_total: Decimal
    standard_deduction: Decimal
    deduction_used: Decimal
    method: DeductionMethod

    @property
    def used_itemized(self) -> bool:
        return self.method == DeductionMethod.ITEMIZED


class SaltResult(BaseModel):
    """State and local tax components before and after the federal cap."""

    model_config = ConfigDict(frozen=True)

    state_income_tax: Decimal
    property_tax: Decimal
    payroll_levy: Decimal
    local_tax: Decimal
    uncapped: Decimal
    capped: Decimal

    @property
    def cap_lost(self) -> Decimal:
        return self.uncapped - self.capped


class ItemizedBreakdown(BaseModel):
    """Itemized deduction detail for display."""

    model_config = ConfigDict(frozen=True)

    mortgage_interest: Decimal
    state_mortgage_interest: Decimal
    salt: SaltResult
    other: Decimal
    federal: DeductionResult
    state: DeductionResult


class ScenarioOutcome(BaseModel):
    """Fully resolved financial outcome for one jurisdiction and housing choice.

    A buy outcome carries its mirrored rent outcome in ``rent``; a rent
    outcome has ``rent=None``.
    """

    model_config = ConfigDict(frozen=True)

    jurisdiction: str
    housing_choice: HousingChoice

    # Income
    total_income: Decimal
    agi: Decimal
    state_agi: Decimal

    # Federal
    federal_deduction: Decimal
    federal_taxable_income: Decimal
    ordinary_taxable_income: Decimal
    ordinary_tax: Decimal
    capital_gains_tax: Decimal
    niit: Decimal
    federal_tax: Decimal

    # State and local
    state_deduction: Decimal
    state_standard_deduction: Decimal
    state_taxable_income: Decimal
    state_tax: Decimal
    payroll_levy: Decimal
    local_tax: Decimal

    # Payroll
    payroll: PayrollTax

    # Totals
    total_tax_burden: Decimal
    effective_tax_rate: Decimal
    annual_take_home: Decimal
    monthly_take_home: Decimal
    monthly_housing_cost: Decimal
    monthly_net_cash: Decimal

    itemized: ItemizedBreakdown
    notes: list[str] = Field(default_factory=list)
    rent: "ScenarioOutcome | None" = None

    @property
    def payroll_tax(self) -> Decimal:
        return self.payroll.total

    @property
    def total_salt_paid(self) -> Decimal:
        return self.itemized.salt.uncapped


class AmortizationYear(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int = Field(ge=1)
    interest_paid: Decimal
    principal_paid: Decimal = ZERO
    ending_balance: Decimal = ZERO


class PhaseoutYear(BaseModel):
    """Take-home impact of one later mortgage year's smaller interest deduction."""

    model_config = ConfigDict(frozen=True)

    year: int
    interest: Decimal = Field(description="Interest on the full loan, for display")
    deductible_interest: Decimal = Field(description="Interest on the federally capped principal")
    federal_deduction: Decimal
    state_deduction: Decimal
    federal_monthly_delta: Decimal
    state_monthly_delta: Decimal

    @property
    def monthly_take_home_delta(self) -> Decimal:
        return self.federal_monthly_delta + self.state_monthly_delta


class ComparisonRow(BaseModel):
    """One jurisdiction's outcome plus its deltas against the baseline."""

    model_config = ConfigDict(frozen=True)

    jurisdiction: str
    abbreviation: str
    outcome: ScenarioOutcome
    monthly_take_home_delta: Decimal
    annual_take_home_delta: Decimal
    monthly_net_cash_delta: Decimal
    annual_net_cash_delta: Decimal
    tax_savings: Decimal = Field(description="Monthly take-home gained by buying instead of renting")
    net_mortgage_cost: Decimal = Field(description="Monthly PITI minus buy-vs-rent tax savings")
    rent_vs_buy_delta: Decimal = Field(description="Net mortgage cost minus rent; positive means buying costs more")

    @property
    def buy_vs_rent_net_cash_delta(self) -> Decimal:
        rent = self.outcome.rent
        if rent is None:
            return ZERO
        return self.outcome.monthly_net_cash - rent.monthly_net_cash


class ComparisonTable(BaseModel):
    model_config = ConfigDict(frozen=True)

    baseline: str | None
    rows: list[ComparisonRow]

    @property
    def jurisdictions(self) -> list[str]:
        return [row.jurisdiction for row in self.rows]

    @property
    def outcomes(self) -> dict[str, ScenarioOutcome]:
        return {row.jurisdiction: row.outcome for row in self.rows}

    def row(self, jurisdiction: str) -> ComparisonRow | None:
        for row in self.rows:
            if row.jurisdiction == jurisdiction:
                return row
        return None


class TrajectoryPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    age: int | None = None
    value: Decimal


class YearsToTarget(BaseModel):
    """Backsolved time to a wealth target; ``years`` is infinite when unreachable."""

    model_config = ConfigDict(frozen=True)

    years: Decimal = Field(allow_inf_nan=True)
    reachable: bool

    @property
    def whole_years(self) -> int | None:
        if not self.reachable:
            return None
        return max(math.ceil(self.years), 0)

    @property
    def display(self) -> str:
        if not self.reachable:
            return "Never"
        return f"{self.years:.1f} years"


class RetirementProjection(BaseModel):
    model_config = ConfigDict(frozen=True)

    jurisdiction: str
    monthly_net_savings: Decimal
    annual_savings_differential: Decimal
    differential_trajectory: list[TrajectoryPoint]
    annual_contribution: Decimal
    years_to_target: YearsToTarget
    fi_age: Decimal | None
    asset_trajectory: list[TrajectoryPoint]

    @property
    def differential_at_retirement(self) -> Decimal:
        if not self.differential_trajectory:
            return ZERO
        return self.differential_trajectory[-1].value
