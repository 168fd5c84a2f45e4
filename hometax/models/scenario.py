"""Saved-scenario blob.

The blob is what the persistence layer stores by name: household inputs,
the selected jurisdictions, per-jurisdiction housing and discretionary
spending, and optional retirement settings. Absent keys fall back to the
defaults below so an old or partial blob always loads. Legacy camelCase
keys (``stGains``, ``selectedStates``, ``stateInputs`` ...) are accepted.
"""

from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

from hometax.models.amounts import to_amount
from hometax.models.inputs import HouseholdInputs, HousingInputs, RetirementSettings

DEFAULT_SELECTED_JURISDICTIONS = ["California", "Texas"]


class ScenarioBlob(BaseModel):
    """Every engine input for one named scenario."""

    wages: Decimal = Field(
        default=Decimal("250000"),
        validation_alias=AliasChoices("wages", "income"),
    )
    short_term_gains: Decimal = Field(
        default=Decimal("5000"),
        validation_alias=AliasChoices("short_term_gains", "stGains"),
    )
    long_term_gains: Decimal = Field(
        default=Decimal("10000"),
        validation_alias=AliasChoices("long_term_gains", "ltGains"),
    )
    hsa_contribution: Decimal = Field(
        default=Decimal("8300"),
        validation_alias=AliasChoices("hsa_contribution", "hsa"),
    )
    retirement_contribution: Decimal = Field(
        default=Decimal("46000"),
        validation_alias=AliasChoices("retirement_contribution", "k401"),
    )
    medical_premiums: Decimal = Field(
        default=Decimal("6000"),
        validation_alias=AliasChoices("medical_premiums", "medicalPremiums"),
    )
    other_itemized: Decimal = Field(
        default=Decimal("5000"),
        validation_alias=AliasChoices("other_itemized", "otherItemized"),
    )
    selected_jurisdictions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SELECTED_JURISDICTIONS),
        validation_alias=AliasChoices("selected_jurisdictions", "selectedStates"),
    )
    housing: dict[str, HousingInputs] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("housing", "stateInputs"),
    )
    discretionary_expenses: dict[str, Decimal] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("discretionary_expenses", "discretionaryExpenses"),
        description="Monthly discretionary spending per jurisdiction",
    )
    retirement: RetirementSettings | None = None

    @field_validator(
        "wages",
        "short_term_gains",
        "long_term_gains",
        "hsa_contribution",
        "retirement_contribution",
        "medical_premiums",
        "other_itemized",
        mode="before",
    )
    @classmethod
    def _coerce_amount(cls, value: Any) -> Decimal:
        return to_amount(value)

    @field_validator("discretionary_expenses", mode="before")
    @classmethod
    def _coerce_expenses(cls, value: Any) -> dict[str, Decimal]:
        if not isinstance(value, dict):
            return {}
        return {str(k): to_amount(v) for k, v in value.items()}

    @field_validator("selected_jurisdictions", mode="before")
    @classmethod
    def _coerce_selection(cls, value: Any) -> list[str]:
        if value is None:
            return list(DEFAULT_SELECTED_JURISDICTIONS)
        if isinstance(value, str):
            return [value]
        return [str(v) for v in value]

    @field_validator("housing", mode="before")
    @classmethod
    def _coerce_housing(cls, value: Any) -> dict:
        if not isinstance(value, dict):
            return {}
        return {str(k): v if isinstance(v, (dict, HousingInputs)) else {} for k, v in value.items()}

    def household(self) -> HouseholdInputs:
        return HouseholdInputs(
            wages=self.wages,
            short_term_gains=self.short_term_gains,
            long_term_gains=self.long_term_gains,
            retirement_contribution=self.retirement_contribution,
            hsa_contribution=self.hsa_contribution,
            medical_premiums=self.medical_premiums,
            other_itemized=self.other_itemized,
        )

    def retirement_settings(self) -> RetirementSettings:
        return self.retirement or RetirementSettings()
