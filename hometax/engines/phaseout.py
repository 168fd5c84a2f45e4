"""Mortgage-interest deduction phase-out projection.

Year 1 carries the largest interest deduction. For years 2..N the deductible
interest shrinks as the loan amortizes; this re-derives the federal and
state tax at each year's deduction, holding everything else fixed, and
reports the change in average monthly take-home versus year 1.
"""

from decimal import Decimal

from hometax.engines.amortization import AmortizationSchedule
from hometax.engines.deductions import choose_deduction
from hometax.engines.evaluator import ScenarioEvaluator
from hometax.engines.tax import compute_federal_tax, compute_progressive_tax
from hometax.models.amounts import TWELVE, ZERO
from hometax.models.inputs import HouseholdInputs, HousingInputs
from hometax.models.jurisdiction import JurisdictionProfile, TaxTableConfig
from hometax.models.outcomes import AmortizationYear, PhaseoutYear, ScenarioOutcome

PHASEOUT_HORIZON_YEARS = 10


def _interest_for(schedule: list[AmortizationYear], year: int) -> Decimal:
    if year - 1 < len(schedule):
        return schedule[year - 1].interest_paid
    return ZERO


class DeductionPhaseoutProjector:
    def __init__(self, tables: TaxTableConfig) -> None:
        self.tables = tables
        self.evaluator = ScenarioEvaluator(tables)

    def project(
        self,
        household: HouseholdInputs,
        profile: JurisdictionProfile,
        housing: HousingInputs,
        outcome: ScenarioOutcome | None = None,
        horizon: int = PHASEOUT_HORIZON_YEARS,
    ) -> list[PhaseoutYear]:
        """Rows for years 2..horizon.

        ``interest`` comes from a schedule on the full loan for display;
        the deduction math uses schedules on the federally and state-capped
        principals.
        """
        tables = self.tables
        if outcome is None:
            outcome = self.evaluator.evaluate(household, profile, housing)

        rate = housing.mortgage_rate
        term = tables.mortgage_term_years
        display = list(AmortizationSchedule(housing.mortgage_amount, rate, horizon, term))
        federal_schedule = list(
            AmortizationSchedule(
                min(housing.mortgage_amount, tables.federal_mortgage_debt_limit), rate, horizon, term
            )
        )
        state_schedule = list(
            AmortizationSchedule(
                min(housing.mortgage_amount, tables.state_mortgage_debt_limit(profile)), rate, horizon, term
            )
        )

        capped_salt = outcome.itemized.salt.capped
        other = household.other_itemized
        property_tax = housing.property_tax
        base_federal_tax = outcome.federal_tax
        base_state_tax = outcome.state_tax

        rows = []
        for year in range(2, horizon + 1):
            deductible_interest = _interest_for(federal_schedule, year)
            federal_deduction = choose_deduction(
                deductible_interest + capped_salt + other,
                tables.federal_standard_deduction,
            ).deduction_used
            federal = compute_federal_tax(
                outcome.agi,
                federal_deduction,
                household.short_term_gains,
                household.long_term_gains,
                tables,
            )
            federal_delta = (base_federal_tax - federal.total) / TWELVE

            state_deduction = choose_deduction(
                _interest_for(state_schedule, year) + property_tax + other,
                profile.standard_deduction,
            ).deduction_used
            if profile.has_income_tax:
                state_tax = compute_progressive_tax(
                    max(outcome.state_agi - state_deduction, ZERO), profile.brackets
                )
                state_delta = (base_state_tax - state_tax) / TWELVE
            else:
                state_delta = ZERO

            rows.append(
                PhaseoutYear(
                    year=year,
                    interest=_interest_for(display, year),
                    deductible_interest=deductible_interest,
                    federal_deduction=federal_deduction,
                    state_deduction=state_deduction,
                    federal_monthly_delta=federal_delta,
                    state_monthly_delta=state_delta,
                )
            )
        return rows
