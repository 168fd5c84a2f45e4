"""Household, housing and retirement input models.

All currency fields are coerced through ``to_amount``: a missing, blank or
non-numeric value becomes zero and never raises.
"""

from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from hometax.models.amounts import ZERO, to_amount, to_optional_amount
from hometax.models.enums import HousingChoice


class HouseholdInputs(BaseModel):
    """Annual household income and pre-tax deductions."""

    model_config = ConfigDict(frozen=True)

    wages: Decimal = Field(
        default=ZERO,
        validation_alias=AliasChoices("wages", "income"),
        description="Gross wage income",
    )
    short_term_gains: Decimal = Field(
        default=ZERO,
        validation_alias=AliasChoices("short_term_gains", "stGains"),
        description="Short-term capital gains (taxed as ordinary income)",
    )
    long_term_gains: Decimal = Field(
        default=ZERO,
        validation_alias=AliasChoices("long_term_gains", "ltGains"),
        description="Long-term capital gains (stacked on ordinary income)",
    )
    retirement_contribution: Decimal = Field(
        default=ZERO,
        validation_alias=AliasChoices("retirement_contribution", "k401"),
        description="Pre-tax 401(k) contribution",
    )
    hsa_contribution: Decimal = Field(
        default=ZERO,
        validation_alias=AliasChoices("hsa_contribution", "hsa"),
        description="Pre-tax health savings account contribution",
    )
    medical_premiums: Decimal = Field(
        default=ZERO,
        validation_alias=AliasChoices("medical_premiums", "medicalPremiums"),
        description="Pre-tax medical premiums",
    )
    other_itemized: Decimal = Field(
        default=ZERO,
        validation_alias=AliasChoices("other_itemized", "otherItemized"),
        description="Other itemizable deductions (charitable etc.)",
    )

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> Decimal:
        return to_amount(value)

    @property
    def total_income(self) -> Decimal:
        return self.wages + self.short_term_gains + self.long_term_gains

    @property
    def pre_tax_deductions(self) -> Decimal:
        return self.retirement_contribution + self.hsa_contribution + self.medical_premiums

    @property
    def investment_income(self) -> Decimal:
        return self.short_term_gains + self.long_term_gains

    @property
    def agi(self) -> Decimal:
        return self.total_income - self.pre_tax_deductions


class HousingInputs(BaseModel):
    """Buy and rent assumptions for one jurisdiction."""

    model_config = ConfigDict(frozen=True)

    mortgage_amount: Decimal = Field(
        default=ZERO,
        validation_alias=AliasChoices("mortgage_amount", "mortgageAmount"),
        description="Loan principal",
    )
    mortgage_rate: Decimal = Field(
        default=ZERO,
        validation_alias=AliasChoices("mortgage_rate", "mortgageRate"),
        description="Nominal annual interest rate in percent (e.g. 6.0)",
    )
    property_tax: Decimal = Field(
        default=ZERO,
        validation_alias=AliasChoices("property_tax", "propertyTax"),
        description="Annual property tax",
    )
    home_insurance: Decimal = Field(
        default=ZERO,
        validation_alias=AliasChoices("home_insurance", "homeInsurance"),
        description="Annual homeowner's insurance",
    )
    monthly_rent: Decimal = Field(
        default=ZERO,
        validation_alias=AliasChoices("monthly_rent", "monthlyRent"),
        description="Comparable monthly rent",
    )
    local_tax_rate: Decimal | None = Field(
        default=None,
        validation_alias=AliasChoices("local_tax_rate", "localTaxRate"),
        description="Local income tax rate in percent; None uses the jurisdiction default",
    )

    @field_validator(
        "mortgage_amount",
        "mortgage_rate",
        "property_tax",
        "home_insurance",
        "monthly_rent",
        mode="before",
    )
    @classmethod
    def _coerce_amount(cls, value: Any) -> Decimal:
        return to_amount(value)

    @field_validator("local_tax_rate", mode="before")
    @classmethod
    def _coerce_rate(cls, value: Any) -> Decimal | None:
        return to_optional_amount(value)


class RetirementSettings(BaseModel):
    """Parameters for the retirement projector."""

    model_config = ConfigDict(frozen=True)

    current_age: int = Field(default=35, ge=0)
    retirement_age: int = Field(default=65, ge=0)
    growth_rate: Decimal = Field(
        default=Decimal("7"),
        description="Annual investment growth rate in percent",
    )
    baseline_jurisdiction: str | None = Field(
        default=None,
        description="Jurisdiction savings are compared against; None uses the first selected",
    )
    fi_target: Decimal = Field(
        default=Decimal("2500000"),
        description="Financial-independence asset target",
    )
    current_assets: Decimal = Field(default=ZERO, description="Invested assets today")
    baseline_annual_contribution: Decimal = Field(
        default=ZERO,
        description="Annual contribution made in the baseline jurisdiction",
    )
    housing_choice: HousingChoice = HousingChoice.BUY

    @field_validator(
        "growth_rate",
        "fi_target",
        "current_assets",
        "baseline_annual_contribution",
        mode="before",
    )
    @classmethod
    def _coerce_amount(cls, value: Any) -> Decimal:
        return to_amount(value)

    @property
    def years_to_retirement(self) -> int:
        return max(self.retirement_age - self.current_age, 0)
