"""Tests for bracket math: progressive tax, LTCG stacking, NIIT, payroll."""

from decimal import Decimal

import pytest

from hometax.engines.tax import (
    compute_federal_tax,
    compute_niit,
    compute_payroll_tax,
    compute_progressive_tax,
    stack_capital_gains,
)
from hometax.models.jurisdiction import Bracket


class TestProgressiveTax:
    def test_zero_income(self, tables):
        assert compute_progressive_tax(Decimal("0"), tables.federal_brackets) == Decimal("0")

    def test_negative_income_is_zero(self, tables):
        assert compute_progressive_tax(Decimal("-5000"), tables.federal_brackets) == Decimal("0")

    @pytest.mark.parametrize("income", ["0", "1", "50000", "1000000"])
    def test_empty_brackets_is_no_tax(self, income):
        assert compute_progressive_tax(Decimal(income), []) == Decimal("0")

    def test_first_bracket(self, tables):
        assert compute_progressive_tax(Decimal("10000"), tables.federal_brackets) == Decimal("1000")

    def test_three_brackets(self, tables):
        """$100K: 23,850 @ 10% + 73,100 @ 12% + 3,050 @ 22%."""
        tax = compute_progressive_tax(Decimal("100000"), tables.federal_brackets)
        assert tax == Decimal("2385") + Decimal("8772") + Decimal("671")

    def test_flat_rate(self, tables):
        colorado = tables.jurisdiction("Colorado")
        assert compute_progressive_tax(Decimal("100000"), colorado.brackets) == Decimal("4400")

    def test_zero_rate_first_bracket(self, tables):
        ohio = tables.jurisdiction("Ohio")
        assert compute_progressive_tax(Decimal("26050"), ohio.brackets) == Decimal("0")
        assert compute_progressive_tax(Decimal("26051"), ohio.brackets) == Decimal("0.0275")

    @pytest.mark.parametrize("boundary", ["23850", "96950", "206700", "394600", "501050", "751600"])
    def test_continuous_at_boundaries(self, tables, boundary):
        """One dollar past a boundary adds exactly the next marginal rate."""
        at = compute_progressive_tax(Decimal(boundary), tables.federal_brackets)
        after = compute_progressive_tax(Decimal(boundary) + 1, tables.federal_brackets)
        next_rate = next(
            b.rate for b in tables.federal_brackets if b.min_income == Decimal(boundary) + 1
        )
        assert after - at == next_rate

    def test_non_decreasing(self, tables):
        previous = Decimal("0")
        for income in range(0, 1_000_001, 7919):
            tax = compute_progressive_tax(Decimal(income), tables.federal_brackets)
            assert tax >= previous
            previous = tax

    def test_unbounded_top_bracket(self):
        brackets = [
            Bracket(min_income=Decimal("0"), max_income=Decimal("100"), rate=Decimal("0.10")),
            Bracket(min_income=Decimal("101"), rate=Decimal("0.50")),
        ]
        assert compute_progressive_tax(Decimal("1100"), brackets) == Decimal("510")


class TestCapitalGainsStacking:
    def test_all_at_top_rate_above_ceiling(self, tables):
        result = stack_capital_gains(Decimal("600000"), Decimal("10000"), tables)
        assert result.at_zero == Decimal("0")
        assert result.at_fifteen == Decimal("0")
        assert result.at_twenty == Decimal("10000")
        assert result.tax == Decimal("2000")

    def test_at_exact_top_ceiling(self, tables):
        result = stack_capital_gains(tables.ltcg_fifteen_ceiling, Decimal("5000"), tables)
        assert result.at_twenty == Decimal("5000")

    def test_spans_zero_and_fifteen(self, tables):
        """$50K ordinary leaves $46,950 of 0% room; the rest is taxed at 15%."""
        result = stack_capital_gains(Decimal("50000"), Decimal("100000"), tables)
        assert result.at_zero == Decimal("46950")
        assert result.at_fifteen == Decimal("53050")
        assert result.at_twenty == Decimal("0")
        assert result.tax == Decimal("7957.50")

    def test_spans_fifteen_and_twenty(self, tables):
        result = stack_capital_gains(Decimal("580000"), Decimal("10000"), tables)
        assert result.at_fifteen == Decimal("3750")
        assert result.at_twenty == Decimal("6250")
        assert result.tax == Decimal("3750") * Decimal("0.15") + Decimal("6250") * Decimal("0.20")

    def test_no_gains(self, tables):
        result = stack_capital_gains(Decimal("200000"), Decimal("0"), tables)
        assert result.tax == Decimal("0")


class TestNIIT:
    def test_below_threshold(self, tables):
        assert compute_niit(Decimal("20000"), Decimal("240000"), tables) == Decimal("0")

    def test_limited_by_excess_agi(self, tables):
        """Lesser of NII ($15K) and AGI over $250K ($10K)."""
        assert compute_niit(Decimal("15000"), Decimal("260000"), tables) == Decimal("380.000")

    def test_limited_by_investment_income(self, tables):
        assert compute_niit(Decimal("10000"), Decimal("500000"), tables) == Decimal("380")


class TestPayrollTax:
    def test_social_security_wage_base(self, tables):
        payroll = compute_payroll_tax(Decimal("250000"), Decimal("250000"), tables)
        assert payroll.social_security == Decimal("182400") * Decimal("0.062")
        assert payroll.medicare == Decimal("3625")
        assert payroll.additional_medicare == Decimal("0")

    def test_additional_medicare_on_agi(self, tables):
        payroll = compute_payroll_tax(Decimal("400000"), Decimal("350000"), tables)
        assert payroll.additional_medicare == Decimal("900")

    def test_total(self, tables):
        payroll = compute_payroll_tax(Decimal("100000"), Decimal("100000"), tables)
        assert payroll.total == Decimal("6200") + Decimal("1450")


class TestFederalTax:
    def test_ordinary_only(self, tables):
        result = compute_federal_tax(
            Decimal("250000"), Decimal("31500"), Decimal("0"), Decimal("0"), tables
        )
        assert result.taxable_income == Decimal("218500")
        assert result.ordinary_tax == compute_progressive_tax(Decimal("218500"), tables.federal_brackets)
        assert result.capital_gains_tax == Decimal("0")
        assert result.niit == Decimal("0")
        assert result.total == result.ordinary_tax

    def test_deduction_exceeds_agi(self, tables):
        result = compute_federal_tax(
            Decimal("20000"), Decimal("31500"), Decimal("0"), Decimal("5000"), tables
        )
        assert result.taxable_income == Decimal("0")
        assert result.total == Decimal("0")

    def test_gains_limited_to_taxable_income(self, tables):
        """$40K AGI with $30K LTCG and a $31,500 deduction: only $8,500 of
        gains is taxable, all inside the 0% tier."""
        result = compute_federal_tax(
            Decimal("40000"), Decimal("31500"), Decimal("0"), Decimal("30000"), tables
        )
        assert result.ordinary_taxable_income == Decimal("0")
        assert result.capital_gains.at_zero == Decimal("8500")
        assert result.capital_gains_tax == Decimal("0")

    def test_niit_on_all_investment_income(self, tables):
        result = compute_federal_tax(
            Decimal("400000"), Decimal("31500"), Decimal("5000"), Decimal("10000"), tables
        )
        assert result.niit == Decimal("15000") * Decimal("0.038")
