"""Tests for the retirement projector: forward projection and FI backsolve."""

import math
from decimal import Decimal

import pytest

from hometax.engines.comparator import MultiJurisdictionComparator
from hometax.engines.retirement import (
    MAX_CHART_YEARS,
    NEVER,
    RetirementProjector,
    grow_assets,
    project_differential,
    years_to_target,
)
from hometax.models.enums import HousingChoice
from hometax.models.inputs import RetirementSettings
from hometax.models.outcomes import YearsToTarget


@pytest.fixture
def comparison(tables, default_household):
    return MultiJurisdictionComparator(tables).compare(default_household, ["California", "Texas"])


class TestForwardProjection:
    def test_compounds_with_start_of_year_deposit(self):
        points = project_differential(Decimal("1000"), Decimal("10"), 2, start_age=35)
        assert [p.value for p in points] == [Decimal("1100"), Decimal("2310")]
        assert [p.age for p in points] == [36, 37]
        assert [p.year for p in points] == [1, 2]

    def test_zero_years(self):
        assert project_differential(Decimal("1000"), Decimal("7"), 0) == []

    def test_negative_differential(self):
        points = project_differential(Decimal("-1200"), Decimal("0"), 3)
        assert points[-1].value == Decimal("-3600")
        assert points[-1].age is None


class TestYearsToTarget:
    def test_already_there(self):
        result = years_to_target(Decimal("1000000"), Decimal("1200000"), Decimal("0"), Decimal("7"))
        assert result.reachable
        assert result.years == Decimal("0")
        assert result.whole_years == 0

    def test_zero_growth_linear(self):
        result = years_to_target(Decimal("1000000"), Decimal("0"), Decimal("50000"), Decimal("0"))
        assert result.years == Decimal("20")
        assert result.display == "20.0 years"

    def test_zero_growth_no_contribution(self):
        result = years_to_target(Decimal("1000000"), Decimal("0"), Decimal("0"), Decimal("0"))
        assert not result.reachable
        assert result.years == Decimal("Infinity")
        assert result.whole_years is None
        assert result.display == "Never"

    def test_never_is_infinite(self):
        assert NEVER.years.is_infinite()
        assert not NEVER.reachable
        assert YearsToTarget.model_validate_json(NEVER.model_dump_json()) == NEVER

    def test_unreachable_accepts_infinite_years(self):
        result = YearsToTarget(years=Decimal("Infinity"), reachable=False)
        assert result.display == "Never"

    def test_negative_log_argument_is_never(self):
        """target*r + contribution <= 0 has no solution."""
        result = years_to_target(Decimal("1000000"), Decimal("0"), Decimal("-100000"), Decimal("7"))
        assert not result.reachable

    def test_zero_assets_and_contribution_is_never(self):
        result = years_to_target(Decimal("2500000"), Decimal("0"), Decimal("0"), Decimal("7"))
        assert not result.reachable

    def test_growth_alone_reaches_target(self):
        """No contribution: doubling at 7% takes about 10.24 years."""
        result = years_to_target(Decimal("200000"), Decimal("100000"), Decimal("0"), Decimal("7"))
        assert result.reachable
        assert abs(result.years - Decimal("10.2448")) < Decimal("0.001")

    @pytest.mark.parametrize(
        "target, current, contribution, rate",
        [
            ("2500000", "100000", "60000", "7"),
            ("1000000", "0", "30000", "5"),
            ("3000000", "250000", "45000", "6.5"),
            ("500000", "10000", "12000", "4"),
            ("800000", "0", "40000", "0"),
            ("1500000", "400000", "0", "8"),
        ],
    )
    def test_forward_projection_boundary(self, target, current, contribution, rate):
        """Growing for ceil(years) reaches the target; one year less falls short."""
        target, current = Decimal(target), Decimal(current)
        contribution, rate = Decimal(contribution), Decimal(rate)
        result = years_to_target(target, current, contribution, rate)
        assert result.reachable
        years = math.ceil(result.years)
        assert years == result.whole_years
        reached = grow_assets(current, contribution, rate, years)[-1].value
        short = grow_assets(current, contribution, rate, years - 1)[-1].value
        assert reached >= target
        assert short < target


class TestGrowAssets:
    def test_starts_at_current(self):
        points = grow_assets(Decimal("5000"), Decimal("1000"), Decimal("10"), 2, start_age=40)
        assert points[0].value == Decimal("5000")
        assert points[0].age == 40
        assert points[1].value == Decimal("6500")
        assert points[2].value == Decimal("8150")


class TestRetirementProjector:
    def test_baseline_has_zero_differential(self, comparison):
        projections = RetirementProjector(RetirementSettings()).project(comparison)
        ca = next(p for p in projections if p.jurisdiction == "California")
        assert ca.annual_savings_differential == Decimal("0")
        assert ca.differential_at_retirement == Decimal("0")

    def test_differential_from_net_cash(self, comparison):
        projections = RetirementProjector(RetirementSettings()).project(comparison)
        tx = next(p for p in projections if p.jurisdiction == "Texas")
        ca_out, tx_out = comparison.outcomes["California"], comparison.outcomes["Texas"]
        assert tx.monthly_net_savings == tx_out.monthly_net_cash
        assert tx.annual_savings_differential == (tx_out.monthly_net_cash - ca_out.monthly_net_cash) * 12
        assert len(tx.differential_trajectory) == 30
        assert tx.differential_trajectory[-1].age == 65

    def test_discretionary_expenses_reduce_savings(self, comparison):
        projector = RetirementProjector(RetirementSettings())
        plain = projector.project(comparison)
        spent = projector.project(comparison, {"Texas": Decimal("500")})
        tx_plain = next(p for p in plain if p.jurisdiction == "Texas")
        tx_spent = next(p for p in spent if p.jurisdiction == "Texas")
        assert tx_spent.monthly_net_savings == tx_plain.monthly_net_savings - Decimal("500")
        expected = tx_plain.annual_savings_differential - Decimal("6000")
        assert abs(tx_spent.annual_savings_differential - expected) < Decimal("0.000001")

    def test_settings_baseline(self, comparison):
        settings = RetirementSettings(baseline_jurisdiction="Texas")
        projections = RetirementProjector(settings).project(comparison)
        tx = next(p for p in projections if p.jurisdiction == "Texas")
        assert tx.annual_savings_differential == Decimal("0")

    def test_rent_choice_uses_rent_outcome(self, comparison):
        settings = RetirementSettings(housing_choice=HousingChoice.RENT)
        projections = RetirementProjector(settings).project(comparison)
        ca = next(p for p in projections if p.jurisdiction == "California")
        assert ca.monthly_net_savings == comparison.outcomes["California"].rent.monthly_net_cash

    def test_contribution_and_fi_age(self, comparison):
        settings = RetirementSettings(
            current_assets=Decimal("200000"),
            baseline_annual_contribution=Decimal("50000"),
        )
        projections = RetirementProjector(settings).project(comparison)
        for p in projections:
            assert p.annual_contribution == Decimal("50000") + p.annual_savings_differential
            if p.years_to_target.reachable:
                assert p.fi_age == 35 + p.years_to_target.years
                assert len(p.asset_trajectory) == min(p.years_to_target.whole_years, MAX_CHART_YEARS) + 1

    def test_unreachable_target(self, comparison):
        """Baseline with no assets and no contribution never reaches FI."""
        projections = RetirementProjector(RetirementSettings()).project(comparison)
        ca = next(p for p in projections if p.jurisdiction == "California")
        assert not ca.years_to_target.reachable
        assert ca.fi_age is None
        assert len(ca.asset_trajectory) == MAX_CHART_YEARS + 1

    def test_empty_table(self, tables, default_household):
        table = MultiJurisdictionComparator(tables).compare(default_household, [])
        assert RetirementProjector(RetirementSettings()).project(table) == []
