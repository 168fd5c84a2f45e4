"""Bracket math shared by every scenario path.

Implements:
  - Progressive ordinary income tax over inclusive tax-table brackets
  - LTCG stacking on top of ordinary income across the 0%/15%/20% tiers
  - Net Investment Income Tax (NIIT) per IRC Section 1411
  - Payroll tax (Social Security, Medicare, Additional Medicare)
  - ``compute_federal_tax``: the single federal routine used by the buy,
    rent and deduction phase-out paths
"""

from collections.abc import Sequence
from decimal import Decimal

from hometax.models.amounts import ZERO
from hometax.models.jurisdiction import Bracket, TaxTableConfig
from hometax.models.outcomes import CapitalGainsAllocation, FederalTaxResult, PayrollTax


def compute_progressive_tax(income: Decimal, brackets: Sequence[Bracket]) -> Decimal:
    """Apply marginal-rate brackets to *income*.

    Each bracket spans ``max_income - (min_income - 1)`` dollars, matching
    the inclusive bounds of published tax tables. An empty bracket list is
    a jurisdiction without income tax.
    """
    if income <= ZERO:
        return ZERO

    tax = ZERO
    remaining = income
    for bracket in brackets:
        if remaining <= ZERO:
            break
        floor = max(bracket.min_income - 1, ZERO)
        if bracket.max_income is None:
            taxable_in_bracket = remaining
        else:
            taxable_in_bracket = min(remaining, bracket.max_income - floor)
        if taxable_in_bracket > ZERO:
            tax += taxable_in_bracket * bracket.rate
            remaining -= taxable_in_bracket
    return tax


def stack_capital_gains(
    ordinary_income: Decimal,
    long_term_gains: Decimal,
    tables: TaxTableConfig,
) -> CapitalGainsAllocation:
    """Allocate long-term gains across the 0%/15%/20% tiers.

    Ordinary income fills the bottom of the tiers first, so the gains
    start where ordinary income stops. A tier whose ceiling is already
    exceeded by ordinary income has no room.
    """
    ordinary = max(ordinary_income, ZERO)
    remaining = max(long_term_gains, ZERO)

    zero_room = max(ZERO, tables.ltcg_zero_ceiling - ordinary)
    at_zero = min(remaining, zero_room)
    remaining -= at_zero

    fifteen_room = max(
        ZERO, tables.ltcg_fifteen_ceiling - max(tables.ltcg_zero_ceiling, ordinary)
    )
    at_fifteen = min(remaining, fifteen_room)
    remaining -= at_fifteen

    at_twenty = remaining
    tax = at_fifteen * tables.ltcg_mid_rate + at_twenty * tables.ltcg_top_rate
    return CapitalGainsAllocation(
        at_zero=at_zero,
        at_fifteen=at_fifteen,
        at_twenty=at_twenty,
        tax=tax,
    )


def compute_niit(investment_income: Decimal, agi: Decimal, tables: TaxTableConfig) -> Decimal:
    """Compute Net Investment Income Tax (3.8%) per IRC Section 1411."""
    excess_agi = max(agi - tables.niit_threshold, ZERO)
    niit_base = min(max(investment_income, ZERO), excess_agi)
    return niit_base * tables.niit_rate


def compute_payroll_tax(wages: Decimal, agi: Decimal, tables: TaxTableConfig) -> PayrollTax:
    """Social Security up to the wage base, uncapped Medicare, and the
    additional Medicare surtax on AGI above the threshold."""
    wages = max(wages, ZERO)
    social_security = min(wages, tables.social_security_wage_base) * tables.social_security_rate
    medicare = wages * tables.medicare_rate
    additional = max(agi - tables.additional_medicare_threshold, ZERO) * tables.additional_medicare_rate
    return PayrollTax(
        social_security=social_security,
        medicare=medicare,
        additional_medicare=additional,
    )


def compute_federal_tax(
    agi: Decimal,
    deduction: Decimal,
    short_term_gains: Decimal,
    long_term_gains: Decimal,
    tables: TaxTableConfig,
) -> FederalTaxResult:
    """Ordinary + capital-gains + NIIT federal tax for one deduction level.

    Only the part of long-term gains that is actually taxable can reach the
    LTCG tiers; the ordinary portion is floored at zero before stacking.
    """
    long_term_gains = max(long_term_gains, ZERO)
    taxable_income = max(agi - deduction, ZERO)
    ordinary_taxable = max(taxable_income - long_term_gains, ZERO)
    taxable_gains = min(long_term_gains, taxable_income)

    ordinary_tax = compute_progressive_tax(ordinary_taxable, tables.federal_brackets)
    capital_gains = stack_capital_gains(ordinary_taxable, taxable_gains, tables)
    niit = compute_niit(max(short_term_gains, ZERO) + long_term_gains, agi, tables)

    return FederalTaxResult(
        taxable_income=taxable_income,
        ordinary_taxable_income=ordinary_taxable,
        ordinary_tax=ordinary_tax,
        capital_gains=capital_gains,
        niit=niit,
    )
