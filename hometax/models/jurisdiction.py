"""Jurisdiction tax configuration models.

A ``TaxTableConfig`` bundles the federal constants (brackets, LTCG tiers,
SALT cap, payroll rates) with one ``JurisdictionProfile`` per comparable
state. Engines receive the config explicitly and never consult globals.
"""

from decimal import Decimal
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hometax.exceptions import ConfigurationError, JurisdictionNotFoundError


class Bracket(BaseModel):
    """One marginal-rate bracket with inclusive bounds (tax-table convention)."""

    model_config = ConfigDict(frozen=True)

    rate: Decimal
    min_income: Decimal = Decimal("0")
    max_income: Decimal | None = Field(
        default=None,
        description="Inclusive upper bound; None for the unbounded top bracket",
    )


class JurisdictionProfile(BaseModel):
    """State-level rules for one comparable jurisdiction."""

    model_config = ConfigDict(frozen=True)

    name: str
    abbreviation: str = ""
    brackets: list[Bracket] = Field(
        default_factory=list,
        description="State income tax brackets; empty means no income tax",
    )
    standard_deduction: Decimal = Field(
        default=Decimal("0"),
        description="State standard deduction (zero where none is offered)",
    )
    mortgage_debt_limit: Decimal | None = Field(
        default=None,
        description="Deductible mortgage principal cap; None uses the federal cap",
    )
    has_local_tax: bool = Field(
        default=False,
        description="Whether a local (city/school district) income tax applies",
    )
    default_local_tax_rate: Decimal = Field(
        default=Decimal("0"),
        description="Local income tax rate in percent, applied to AGI",
    )
    payroll_levy_rate: Decimal = Field(
        default=Decimal("0"),
        description="Special state payroll levy on wages (e.g. disability insurance)",
    )
    adds_back_hsa: bool = Field(
        default=False,
        description="State does not recognise the HSA exclusion and adds it back to AGI",
    )

    @property
    def has_income_tax(self) -> bool:
        return bool(self.brackets)

    @property
    def label(self) -> str:
        return self.abbreviation or self.name


class TaxTableConfig(BaseModel):
    """Federal constants plus the catalog of jurisdiction profiles."""

    model_config = ConfigDict(frozen=True)

    tax_year: int
    federal_brackets: list[Bracket]
    federal_standard_deduction: Decimal

    # Long-term capital gains tiers (0% / 15% / 20%)
    ltcg_zero_ceiling: Decimal
    ltcg_fifteen_ceiling: Decimal
    ltcg_mid_rate: Decimal = Decimal("0.15")
    ltcg_top_rate: Decimal = Decimal("0.20")

    # Itemized deduction limits
    salt_cap: Decimal
    federal_mortgage_debt_limit: Decimal

    # Net investment income tax
    niit_rate: Decimal
    niit_threshold: Decimal

    # Payroll
    social_security_rate: Decimal
    social_security_wage_base: Decimal
    medicare_rate: Decimal
    additional_medicare_rate: Decimal
    additional_medicare_threshold: Decimal

    mortgage_term_years: int = 30

    jurisdictions: dict[str, JurisdictionProfile] = Field(default_factory=dict)

    def jurisdiction(self, name: str) -> JurisdictionProfile:
        """Look up a jurisdiction profile by name."""
        try:
            return self.jurisdictions[name]
        except KeyError:
            raise JurisdictionNotFoundError(name) from None

    def state_mortgage_debt_limit(self, profile: JurisdictionProfile) -> Decimal:
        if profile.mortgage_debt_limit is None:
            return self.federal_mortgage_debt_limit
        return profile.mortgage_debt_limit


def load_tax_tables(path: Path) -> TaxTableConfig:
    """Load a ``TaxTableConfig`` from a JSON file."""
    try:
        return TaxTableConfig.model_validate_json(path.read_text())
    except OSError as exc:
        raise ConfigurationError(str(path), str(exc)) from exc
    except ValidationError as exc:
        raise ConfigurationError(str(path), f"{exc.error_count()} validation error(s)") from exc
