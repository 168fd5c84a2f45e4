"""Retirement and financial-independence projection.

Each jurisdiction's monthly net savings (take-home minus housing minus
discretionary spending) is compared with a baseline jurisdiction. Two views:

  - Forward projection: the annual savings *differential* versus the
    baseline is invested every year until retirement,
    ``value = (value + differential) * (1 + rate)``.
  - Backsolve: years until invested assets reach the FI target given a
    constant annual contribution (baseline contribution adjusted by the
    differential) and constant growth, using the inverse of the compound
    annuity formula. Contribution growth and sequence-of-returns risk are
    not modelled.

An unreachable target is reported as infinite years, never as an error.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal

from hometax.models.amounts import HUNDRED, ONE, TWELVE, ZERO
from hometax.models.enums import HousingChoice
from hometax.models.inputs import RetirementSettings
from hometax.models.outcomes import (
    ComparisonTable,
    RetirementProjection,
    ScenarioOutcome,
    TrajectoryPoint,
    YearsToTarget,
)

logger = logging.getLogger(__name__)

# Chart horizons are clamped for display; solved years are not.
MAX_CHART_YEARS = 50

NEVER = YearsToTarget(years=Decimal("Infinity"), reachable=False)


def project_differential(
    annual_differential: Decimal,
    growth_rate_percent: Decimal,
    years: int,
    start_age: int | None = None,
) -> list[TrajectoryPoint]:
    """Compound an annual savings differential, invested at the start of each year."""
    rate = growth_rate_percent / HUNDRED
    value = ZERO
    points = []
    for year in range(1, years + 1):
        value = (value + annual_differential) * (ONE + rate)
        age = start_age + year if start_age is not None else None
        points.append(TrajectoryPoint(year=year, age=age, value=value))
    return points


def grow_assets(
    current_assets: Decimal,
    annual_contribution: Decimal,
    growth_rate_percent: Decimal,
    years: int,
    start_age: int | None = None,
) -> list[TrajectoryPoint]:
    """Asset balance with the contribution added at the end of each year.

    This is the accumulation the closed-form backsolve inverts, so running
    it for ``ceil(years_to_target)`` years reaches the target.
    """
    rate = growth_rate_percent / HUNDRED
    value = current_assets
    points = [TrajectoryPoint(year=0, age=start_age, value=value)]
    for year in range(1, years + 1):
        value = value * (ONE + rate) + annual_contribution
        age = start_age + year if start_age is not None else None
        points.append(TrajectoryPoint(year=year, age=age, value=value))
    return points


def years_to_target(
    target: Decimal,
    current_assets: Decimal,
    annual_contribution: Decimal,
    growth_rate_percent: Decimal,
) -> YearsToTarget:
    """Solve ``current * (1+r)^n + c * ((1+r)^n - 1) / r = target`` for ``n``.

    For ``r > 0``: ``n = ln((target*r + c) / (current*r + c)) / ln(1 + r)``,
    valid only when both arguments are positive. For ``r == 0`` the growth
    is linear: ``n = (target - current) / c``.
    """
    if current_assets >= target:
        return YearsToTarget(years=ZERO, reachable=True)

    rate = growth_rate_percent / HUNDRED
    if rate == ZERO:
        if annual_contribution <= ZERO:
            logger.debug("Zero growth and no contribution; target unreachable")
            return NEVER
        return YearsToTarget(
            years=(target - current_assets) / annual_contribution, reachable=True
        )

    numerator = target * rate + annual_contribution
    denominator = current_assets * rate + annual_contribution
    if numerator <= ZERO or denominator <= ZERO:
        logger.debug("Backsolve arguments not positive (%s / %s); target unreachable",
                     numerator, denominator)
        return NEVER
    years = (numerator / denominator).ln() / (ONE + rate).ln()
    if years < ZERO:
        return NEVER
    return YearsToTarget(years=years, reachable=True)


class RetirementProjector:
    """Projects savings differentials and FI timing for each compared jurisdiction."""

    def __init__(self, settings: RetirementSettings) -> None:
        self.settings = settings

    def monthly_net_savings(
        self, outcome: ScenarioOutcome, discretionary: Decimal = ZERO
    ) -> Decimal:
        chosen = outcome
        if self.settings.housing_choice == HousingChoice.RENT and outcome.rent is not None:
            chosen = outcome.rent
        return chosen.monthly_net_cash - discretionary

    def baseline_for(self, table: ComparisonTable) -> str | None:
        wanted = self.settings.baseline_jurisdiction
        if wanted is not None and wanted in table.jurisdictions:
            return wanted
        return table.baseline

    def project(
        self,
        table: ComparisonTable,
        discretionary: Mapping[str, Decimal] | None = None,
    ) -> list[RetirementProjection]:
        settings = self.settings
        discretionary = discretionary or {}
        baseline = self.baseline_for(table)
        if baseline is None:
            return []

        savings = {
            row.jurisdiction: self.monthly_net_savings(
                row.outcome, discretionary.get(row.jurisdiction, ZERO)
            )
            for row in table.rows
        }
        base_savings = savings[baseline]

        projections = []
        for name, monthly in savings.items():
            differential = (monthly - base_savings) * TWELVE
            contribution = settings.baseline_annual_contribution + differential
            solved = years_to_target(
                settings.fi_target, settings.current_assets, contribution, settings.growth_rate
            )
            if solved.reachable:
                fi_age = settings.current_age + solved.years
                horizon = min(solved.whole_years or 0, MAX_CHART_YEARS)
            else:
                fi_age = None
                horizon = MAX_CHART_YEARS
            projections.append(
                RetirementProjection(
                    jurisdiction=name,
                    monthly_net_savings=monthly,
                    annual_savings_differential=differential,
                    differential_trajectory=project_differential(
                        differential,
                        settings.growth_rate,
                        settings.years_to_retirement,
                        settings.current_age,
                    ),
                    annual_contribution=contribution,
                    years_to_target=solved,
                    fi_age=fi_age,
                    asset_trajectory=grow_assets(
                        settings.current_assets,
                        contribution,
                        settings.growth_rate,
                        horizon,
                        settings.current_age,
                    ),
                )
            )
        return projections
