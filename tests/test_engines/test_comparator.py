"""Tests for the multi-jurisdiction comparator."""

import logging
from decimal import Decimal

import pytest

from hometax.engines.amortization import monthly_housing_cost
from hometax.engines.brackets import DEFAULT_HOUSING
from hometax.engines.comparator import MultiJurisdictionComparator
from hometax.exceptions import JurisdictionNotFoundError


@pytest.fixture
def comparator(tables):
    return MultiJurisdictionComparator(tables)


class TestCompare:
    def test_default_baseline_is_first(self, comparator, default_household):
        table = comparator.compare(default_household, ["California", "Texas"])
        assert table.baseline == "California"
        assert table.jurisdictions == ["California", "Texas"]
        ca = table.row("California")
        assert ca.monthly_take_home_delta == Decimal("0")
        assert ca.monthly_net_cash_delta == Decimal("0")

    def test_deltas_against_baseline(self, comparator, default_household):
        table = comparator.compare(default_household, ["California", "Texas"])
        ca, tx = table.outcomes["California"], table.outcomes["Texas"]
        row = table.row("Texas")
        assert row.monthly_take_home_delta == tx.monthly_take_home - ca.monthly_take_home
        assert row.annual_take_home_delta == tx.annual_take_home - ca.annual_take_home
        assert row.monthly_net_cash_delta == tx.monthly_net_cash - ca.monthly_net_cash
        assert row.annual_net_cash_delta == row.monthly_net_cash_delta * 12

    def test_no_income_tax_state_takes_home_more(self, comparator, default_household):
        table = comparator.compare(default_household, ["California", "Texas"])
        assert table.row("Texas").monthly_take_home_delta > 0

    def test_explicit_baseline(self, comparator, default_household):
        table = comparator.compare(default_household, ["California", "Texas"], baseline="Texas")
        assert table.baseline == "Texas"
        assert table.row("California").monthly_take_home_delta < 0

    def test_unknown_baseline_falls_back(self, comparator, default_household, caplog):
        with caplog.at_level(logging.WARNING):
            table = comparator.compare(default_household, ["Ohio", "Texas"], baseline="Florida")
        assert table.baseline == "Ohio"
        assert "Florida" in caplog.text

    def test_rent_vs_buy(self, comparator, default_household):
        table = comparator.compare(default_household, ["California"])
        row = table.row("California")
        buy, rent = row.outcome, row.outcome.rent
        assert row.tax_savings == buy.monthly_take_home - rent.monthly_take_home
        assert row.net_mortgage_cost == buy.monthly_housing_cost - row.tax_savings
        assert row.rent_vs_buy_delta == row.net_mortgage_cost - rent.monthly_housing_cost
        assert row.buy_vs_rent_net_cash_delta == buy.monthly_net_cash - rent.monthly_net_cash

    def test_duplicates_evaluated_once(self, comparator, default_household):
        table = comparator.compare(default_household, ["Texas", "Ohio", "Texas"])
        assert table.jurisdictions == ["Texas", "Ohio"]

    def test_empty_selection(self, comparator, default_household):
        table = comparator.compare(default_household, [])
        assert table.rows == []
        assert table.baseline is None

    def test_unknown_jurisdiction(self, comparator, default_household):
        with pytest.raises(JurisdictionNotFoundError):
            comparator.compare(default_household, ["Texas", "Atlantis"])


class TestHousingInputs:
    def test_default_housing_when_missing(self, comparator, default_household):
        outcomes = comparator.evaluate_all(default_household, ["Texas"])
        assert outcomes["Texas"].monthly_housing_cost == monthly_housing_cost(DEFAULT_HOUSING["Texas"])

    def test_supplied_housing_used(self, comparator, default_household, big_mortgage):
        outcomes = comparator.evaluate_all(default_household, ["Texas"], {"Texas": big_mortgage})
        assert outcomes["Texas"].rent.monthly_housing_cost == Decimal("5000")

    def test_jurisdictions_are_independent(self, comparator, default_household, big_mortgage):
        """Adding a jurisdiction never changes another's outcome."""
        alone = comparator.evaluate_all(default_household, ["Ohio"], {"Ohio": big_mortgage})
        together = comparator.evaluate_all(
            default_household, ["California", "Ohio"], {"Ohio": big_mortgage}
        )
        assert alone["Ohio"] == together["Ohio"]
