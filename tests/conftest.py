"""Shared test fixtures for HomeTax."""

from decimal import Decimal

import pytest

from hometax.engines.brackets import default_tax_tables
from hometax.models.inputs import HouseholdInputs, HousingInputs
from hometax.models.jurisdiction import TaxTableConfig


@pytest.fixture
def tables() -> TaxTableConfig:
    return default_tax_tables()


@pytest.fixture
def wages_only_household() -> HouseholdInputs:
    """$250K wages, no gains, no pre-tax deductions, nothing to itemize."""
    return HouseholdInputs(wages=Decimal("250000"))


@pytest.fixture
def default_household() -> HouseholdInputs:
    """Matches the default scenario blob."""
    return HouseholdInputs(
        wages=Decimal("250000"),
        short_term_gains=Decimal("5000"),
        long_term_gains=Decimal("10000"),
        retirement_contribution=Decimal("46000"),
        hsa_contribution=Decimal("8300"),
        medical_premiums=Decimal("6000"),
        other_itemized=Decimal("5000"),
    )


@pytest.fixture
def high_income_household() -> HouseholdInputs:
    return HouseholdInputs(
        wages=Decimal("800000"),
        long_term_gains=Decimal("50000"),
        retirement_contribution=Decimal("23500"),
        other_itemized=Decimal("10000"),
    )


@pytest.fixture
def no_housing() -> HousingInputs:
    return HousingInputs()


@pytest.fixture
def big_mortgage() -> HousingInputs:
    """A loan above both the federal and California debt limits."""
    return HousingInputs(
        mortgage_amount=Decimal("1200000"),
        mortgage_rate=Decimal("6.0"),
        property_tax=Decimal("15000"),
        home_insurance=Decimal("2400"),
        monthly_rent=Decimal("5000"),
    )
