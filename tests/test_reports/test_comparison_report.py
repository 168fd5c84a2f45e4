"""Tests for the plain-text comparison report."""

from decimal import Decimal

import pytest

from hometax.engines.brackets import default_housing_for
from hometax.engines.comparator import MultiJurisdictionComparator
from hometax.engines.phaseout import DeductionPhaseoutProjector
from hometax.engines.retirement import RetirementProjector
from hometax.models.inputs import RetirementSettings
from hometax.reports.comparison import ComparisonReportGenerator, money, percent, signed_money


@pytest.fixture
def generator():
    return ComparisonReportGenerator()


@pytest.fixture
def table(tables, default_household):
    return MultiJurisdictionComparator(tables).compare(default_household, ["California", "Texas"])


class TestFilters:
    def test_money(self):
        assert money(Decimal("1234.5")) == "$1,234.50"
        assert money(Decimal("-1234.5")) == "-$1,234.50"
        assert money(None) == "-"

    def test_signed_money(self):
        assert signed_money(Decimal("10")) == "+$10.00"
        assert signed_money(Decimal("-10")) == "-$10.00"
        assert signed_money(Decimal("0")) == "$0.00"

    def test_percent(self):
        assert percent(Decimal("21.234")) == "21.23%"


class TestComparisonReport:
    def test_core_sections(self, generator, table):
        text = generator.render(table, tax_year=2026)
        assert "COMPARISON (2026)" in text
        assert "Baseline: California" in text
        assert "California (CA)" in text
        assert "Texas (TX)" in text
        assert "RENT VS BUY" in text
        assert "PHASE-OUT" not in text
        assert "RETIREMENT" not in text

    def test_salt_note_listed(self, generator, tables, high_income_household):
        table = MultiJurisdictionComparator(tables).compare(high_income_household, ["California"])
        text = generator.render(table)
        assert "NOTES" in text
        assert "SALT cap" in text

    def test_phaseout_section(self, generator, tables, default_household, table):
        projector = DeductionPhaseoutProjector(tables)
        phaseouts = {
            row.jurisdiction: projector.project(
                default_household,
                tables.jurisdiction(row.jurisdiction),
                default_housing_for(row.jurisdiction),
                outcome=row.outcome,
            )
            for row in table.rows
        }
        text = generator.render(table, phaseouts=phaseouts)
        assert text.count("MORTGAGE INTEREST PHASE-OUT") == 2

    def test_retirement_section(self, generator, table):
        projections = RetirementProjector(RetirementSettings()).project(table)
        text = generator.render(table, projections=projections)
        assert "RETIREMENT" in text
        assert "Never" in text

    def test_empty_table(self, generator, tables, default_household):
        empty = MultiJurisdictionComparator(tables).compare(default_household, [])
        assert "No jurisdictions selected." in generator.render(empty)
