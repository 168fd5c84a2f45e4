"""Fixed-rate mortgage amortization.

Two call sites use this module with different principals and they must stay
separate: the deduction path amortizes the *capped* principal (only interest
on debt up to the federal/state limit is deductible), while the phase-out
display amortizes the *full* loan.
"""

from collections.abc import Iterator
from decimal import Decimal

from hometax.models.amounts import HUNDRED, ONE, TWELVE, ZERO
from hometax.models.inputs import HousingInputs
from hometax.models.outcomes import AmortizationYear

DEFAULT_TERM_YEARS = 30
# Rounding residue below a cent counts as paid off.
CENT = Decimal("0.01")


def monthly_payment(
    principal: Decimal, annual_rate_percent: Decimal, term_years: int = DEFAULT_TERM_YEARS
) -> Decimal:
    """Level monthly principal-and-interest payment.

    ``P * r(1+r)^n / ((1+r)^n - 1)`` with the monthly rate ``r`` and
    ``n = term_years * 12``. A zero rate repays principal in equal parts.
    """
    if principal <= ZERO or term_years <= 0:
        return ZERO
    n = term_years * 12
    if annual_rate_percent <= ZERO:
        return principal / n
    r = annual_rate_percent / HUNDRED / TWELVE
    growth = (ONE + r) ** n
    return principal * (r * growth) / (growth - ONE)


class AmortizationSchedule:
    """Lazy, restartable year-by-year interest schedule.

    Iterating yields one ``AmortizationYear`` per requested year; iterating
    again starts over from the original balance. A zero principal or rate
    means there is no amortizable loan and the schedule is empty.
    """

    def __init__(
        self,
        principal: Decimal,
        annual_rate_percent: Decimal,
        years: int,
        term_years: int = DEFAULT_TERM_YEARS,
    ) -> None:
        self.principal = principal
        self.annual_rate_percent = annual_rate_percent
        self.years = years
        self.term_years = term_years

    @property
    def is_empty(self) -> bool:
        return self.principal <= ZERO or self.annual_rate_percent <= ZERO or self.years <= 0

    def __len__(self) -> int:
        return 0 if self.is_empty else self.years

    def __iter__(self) -> Iterator[AmortizationYear]:
        if self.is_empty:
            return
        r = self.annual_rate_percent / HUNDRED / TWELVE
        payment = monthly_payment(self.principal, self.annual_rate_percent, self.term_years)
        balance = self.principal
        for year in range(1, self.years + 1):
            interest_paid = ZERO
            principal_paid = ZERO
            for _ in range(12):
                if balance < CENT:
                    break
                interest = balance * r
                principal_part = min(payment - interest, balance)
                balance -= principal_part
                interest_paid += interest
                principal_paid += principal_part
            yield AmortizationYear(
                year=year,
                interest_paid=interest_paid,
                principal_paid=principal_paid,
                ending_balance=balance if balance >= CENT else ZERO,
            )


def first_year_interest(
    principal: Decimal, annual_rate_percent: Decimal, term_years: int = DEFAULT_TERM_YEARS
) -> Decimal:
    """Interest paid in the first twelve months; the annual deduction amount."""
    for year in AmortizationSchedule(principal, annual_rate_percent, 1, term_years):
        return year.interest_paid
    return ZERO


def monthly_housing_cost(housing: HousingInputs, term_years: int = DEFAULT_TERM_YEARS) -> Decimal:
    """PITI: principal and interest on the full loan plus monthly property tax
    and insurance."""
    principal_and_interest = monthly_payment(
        housing.mortgage_amount, housing.mortgage_rate, term_years
    )
    return principal_and_interest + housing.property_tax / TWELVE + housing.home_insurance / TWELVE
