"""Multi-jurisdiction comparison.

Evaluates every selected jurisdiction independently and lines the outcomes
up against a baseline jurisdiction: take-home and net-cash deltas, and the
rent-vs-buy net mortgage cost after tax savings.
"""

import logging
from collections.abc import Mapping, Sequence

from hometax.engines.brackets import default_housing_for
from hometax.engines.evaluator import ScenarioEvaluator
from hometax.models.amounts import TWELVE, ZERO
from hometax.models.inputs import HouseholdInputs, HousingInputs
from hometax.models.jurisdiction import TaxTableConfig
from hometax.models.outcomes import ComparisonRow, ComparisonTable, ScenarioOutcome

logger = logging.getLogger(__name__)


class MultiJurisdictionComparator:
    """Fans one household out across several jurisdictions."""

    def __init__(self, tables: TaxTableConfig) -> None:
        self.tables = tables
        self.evaluator = ScenarioEvaluator(tables)

    def evaluate_all(
        self,
        household: HouseholdInputs,
        jurisdictions: Sequence[str],
        housing: Mapping[str, HousingInputs] | None = None,
    ) -> dict[str, ScenarioOutcome]:
        """Evaluate each jurisdiction once, in selection order.

        Raises:
            JurisdictionNotFoundError: a name has no profile in the tables.
        """
        housing = housing or {}
        outcomes: dict[str, ScenarioOutcome] = {}
        for name in jurisdictions:
            if name in outcomes:
                continue
            profile = self.tables.jurisdiction(name)
            inputs = housing.get(name)
            if inputs is None:
                logger.debug("No housing inputs for %s; using defaults", name)
                inputs = default_housing_for(name)
            outcomes[name] = self.evaluator.evaluate(household, profile, inputs)
        return outcomes

    def compare(
        self,
        household: HouseholdInputs,
        jurisdictions: Sequence[str],
        housing: Mapping[str, HousingInputs] | None = None,
        baseline: str | None = None,
    ) -> ComparisonTable:
        outcomes = self.evaluate_all(household, jurisdictions, housing)
        if not outcomes:
            return ComparisonTable(baseline=None, rows=[])

        if baseline not in outcomes:
            if baseline is not None:
                logger.warning("Baseline %s is not selected; using %s", baseline, next(iter(outcomes)))
            baseline = next(iter(outcomes))
        base = outcomes[baseline]

        rows = []
        for name, outcome in outcomes.items():
            rent = outcome.rent
            rent_take_home = rent.monthly_take_home if rent else ZERO
            rent_cost = rent.monthly_housing_cost if rent else ZERO
            tax_savings = outcome.monthly_take_home - rent_take_home
            net_mortgage_cost = outcome.monthly_housing_cost - tax_savings
            take_home_delta = outcome.monthly_take_home - base.monthly_take_home
            net_cash_delta = outcome.monthly_net_cash - base.monthly_net_cash
            rows.append(
                ComparisonRow(
                    jurisdiction=name,
                    abbreviation=self.tables.jurisdiction(name).label,
                    outcome=outcome,
                    monthly_take_home_delta=take_home_delta,
                    annual_take_home_delta=outcome.annual_take_home - base.annual_take_home,
                    monthly_net_cash_delta=net_cash_delta,
                    annual_net_cash_delta=net_cash_delta * TWELVE,
                    tax_savings=tax_savings,
                    net_mortgage_cost=net_mortgage_cost,
                    rent_vs_buy_delta=net_mortgage_cost - rent_cost,
                )
            )
        return ComparisonTable(baseline=baseline, rows=rows)
