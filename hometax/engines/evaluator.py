"""Scenario evaluation engine.

Maps household inputs, one jurisdiction profile and that jurisdiction's
housing assumptions to a fully resolved ``ScenarioOutcome``:
  - Gross income, AGI, and the state AGI (with any HSA addback)
  - Payroll tax, special state payroll levy, local income tax
  - State deduction and state income tax, then federal deduction with the
    capped SALT that state tax feeds into
  - Federal ordinary, LTCG and NIIT tax via ``compute_federal_tax``
  - Take-home pay, PITI housing cost and monthly net cash

The buy path itemizes first-year mortgage interest and property tax. The
rent path runs the same pipeline with standard deductions forced and rent
as the housing cost. The two outcomes share no intermediate state.
"""

import logging
from decimal import Decimal

from hometax.engines.amortization import first_year_interest, monthly_housing_cost
from hometax.engines.deductions import DeductionResolver
from hometax.engines.tax import compute_federal_tax, compute_payroll_tax, compute_progressive_tax
from hometax.models.amounts import HUNDRED, TWELVE, ZERO
from hometax.models.enums import HousingChoice
from hometax.models.inputs import HouseholdInputs, HousingInputs
from hometax.models.jurisdiction import JurisdictionProfile, TaxTableConfig
from hometax.models.outcomes import ItemizedBreakdown, ScenarioOutcome

logger = logging.getLogger(__name__)


class ScenarioEvaluator:
    """Evaluates buy and rent outcomes for one jurisdiction."""

    def __init__(self, tables: TaxTableConfig) -> None:
        self.tables = tables
        self.deductions = DeductionResolver(tables)

    def evaluate(
        self,
        household: HouseholdInputs,
        profile: JurisdictionProfile,
        housing: HousingInputs,
    ) -> ScenarioOutcome:
        """Compute the buy outcome with its mirrored rent outcome attached."""
        rent = self._evaluate(household, profile, housing, HousingChoice.RENT)
        buy = self._evaluate(household, profile, housing, HousingChoice.BUY, rent=rent)
        logger.debug(
            "%s: buy take-home=%.2f/mo net=%.2f/mo, rent take-home=%.2f/mo net=%.2f/mo",
            profile.name,
            buy.monthly_take_home,
            buy.monthly_net_cash,
            rent.monthly_take_home,
            rent.monthly_net_cash,
        )
        return buy

    def evaluate_named(
        self,
        household: HouseholdInputs,
        jurisdiction: str,
        housing: HousingInputs,
    ) -> ScenarioOutcome:
        return self.evaluate(household, self.tables.jurisdiction(jurisdiction), housing)

    # ------------------------------------------------------------------
    # Component computations
    # ------------------------------------------------------------------

    def state_agi(self, household: HouseholdInputs, profile: JurisdictionProfile) -> Decimal:
        """State AGI base; differs from federal AGI where the state adds back
        the HSA contribution."""
        if profile.adds_back_hsa:
            return household.agi + household.hsa_contribution
        return household.agi

    def payroll_levy(self, household: HouseholdInputs, profile: JurisdictionProfile) -> Decimal:
        return household.wages * profile.payroll_levy_rate

    def local_tax(
        self,
        household: HouseholdInputs,
        profile: JurisdictionProfile,
        housing: HousingInputs,
    ) -> Decimal:
        if not profile.has_local_tax:
            return ZERO
        rate = housing.local_tax_rate
        if rate is None:
            rate = profile.default_local_tax_rate
        if rate <= ZERO:
            return ZERO
        return max(household.agi, ZERO) * rate / HUNDRED

    def deductible_interest(
        self, housing: HousingInputs, debt_limit: Decimal
    ) -> Decimal:
        """First-year interest on the principal allowed by *debt_limit*."""
        principal = min(housing.mortgage_amount, debt_limit)
        return first_year_interest(principal, housing.mortgage_rate, self.tables.mortgage_term_years)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _evaluate(
        self,
        household: HouseholdInputs,
        profile: JurisdictionProfile,
        housing: HousingInputs,
        choice: HousingChoice,
        rent: ScenarioOutcome | None = None,
    ) -> ScenarioOutcome:
        tables = self.tables
        buying = choice == HousingChoice.BUY

        total_income = household.total_income
        agi = household.agi
        state_agi = self.state_agi(household, profile)

        payroll = compute_payroll_tax(household.wages, agi, tables)
        levy = self.payroll_levy(household, profile)
        local = self.local_tax(household, profile, housing)

        if buying:
            federal_interest = self.deductible_interest(
                housing, tables.federal_mortgage_debt_limit
            )
            state_interest = self.deductible_interest(
                housing, tables.state_mortgage_debt_limit(profile)
            )
            property_tax = housing.property_tax
        else:
            federal_interest = ZERO
            state_interest = ZERO
            property_tax = ZERO

        # --- State ---
        state_deduction = self.deductions.resolve_state(
            profile,
            mortgage_interest=state_interest,
            property_tax=property_tax,
            other_itemized=household.other_itemized,
            itemize=buying,
        )
        state_taxable = max(state_agi - state_deduction.deduction_used, ZERO)
        state_tax = compute_progressive_tax(state_taxable, profile.brackets)

        # --- Federal ---
        salt = self.deductions.cap_salt(state_tax, property_tax, levy, local)
        federal_deduction = self.deductions.resolve_federal(
            mortgage_interest=federal_interest,
            salt=salt,
            other_itemized=household.other_itemized,
            itemize=buying,
        )
        federal = compute_federal_tax(
            agi,
            federal_deduction.deduction_used,
            household.short_term_gains,
            household.long_term_gains,
            tables,
        )

        # --- Totals ---
        total_burden = federal.total + payroll.total + state_tax + levy + local
        effective_rate = total_burden / total_income * HUNDRED if total_income > ZERO else ZERO
        annual_take_home = total_income - total_burden - household.pre_tax_deductions
        monthly_take_home = annual_take_home / TWELVE
        if buying:
            housing_cost = monthly_housing_cost(housing, tables.mortgage_term_years)
        else:
            housing_cost = housing.monthly_rent

        notes: list[str] = []
        if buying:
            salt_note = self.deductions.salt_cap_note(salt)
            if salt_note:
                notes.append(salt_note)
            if housing.mortgage_amount > tables.federal_mortgage_debt_limit:
                notes.append(
                    f"Only interest on the first ${tables.federal_mortgage_debt_limit:,.0f} "
                    f"of mortgage principal is federally deductible."
                )

        return ScenarioOutcome(
            jurisdiction=profile.name,
            housing_choice=choice,
            total_income=total_income,
            agi=agi,
            state_agi=state_agi,
            federal_deduction=federal_deduction.deduction_used,
            federal_taxable_income=federal.taxable_income,
            ordinary_taxable_income=federal.ordinary_taxable_income,
            ordinary_tax=federal.ordinary_tax,
            capital_gains_tax=federal.capital_gains_tax,
            niit=federal.niit,
            federal_tax=federal.total,
            state_deduction=state_deduction.deduction_used,
            state_standard_deduction=profile.standard_deduction,
            state_taxable_income=state_taxable,
            state_tax=state_tax,
            payroll_levy=levy,
            local_tax=local,
            payroll=payroll,
            total_tax_burden=total_burden,
            effective_tax_rate=effective_rate,
            annual_take_home=annual_take_home,
            monthly_take_home=monthly_take_home,
            monthly_housing_cost=housing_cost,
            monthly_net_cash=monthly_take_home - housing_cost,
            itemized=ItemizedBreakdown(
                mortgage_interest=federal_interest,
                state_mortgage_interest=state_interest,
                salt=salt,
                other=household.other_itemized,
                federal=federal_deduction,
                state=state_deduction,
            ),
            notes=notes,
            rent=rent,
        )
