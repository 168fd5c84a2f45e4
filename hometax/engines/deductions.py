"""Standard vs. itemized deduction selection.

Federal and state deductions are resolved independently:

Federal itemized = mortgage interest (principal capped at the federal debt
limit) + SALT capped at the federal SALT cap + other itemizable amounts.
The cap applies only to the SALT subtotal, before interest and other
amounts are added.

State itemized = mortgage interest (principal capped at the state's own
debt limit) + property tax + other itemizable amounts. The federal SALT
cap does not apply and a state never deducts its own income tax.
"""

import logging
from decimal import Decimal

from hometax.models.amounts import ZERO
from hometax.models.enums import DeductionMethod
from hometax.models.jurisdiction import JurisdictionProfile, TaxTableConfig
from hometax.models.outcomes import DeductionResult, SaltResult

logger = logging.getLogger(__name__)


def choose_deduction(itemized_total: Decimal, standard_deduction: Decimal) -> DeductionResult:
    """Take the larger of itemized and standard; never a blend of the two."""
    if itemized_total > standard_deduction:
        return DeductionResult(
            itemized_total=itemized_total,
            standard_deduction=standard_deduction,
            deduction_used=itemized_total,
            method=DeductionMethod.ITEMIZED,
        )
    return DeductionResult(
        itemized_total=itemized_total,
        standard_deduction=standard_deduction,
        deduction_used=standard_deduction,
        method=DeductionMethod.STANDARD,
    )


class DeductionResolver:
    """Resolves federal and state deductions against one set of tax tables."""

    def __init__(self, tables: TaxTableConfig) -> None:
        self.tables = tables

    def cap_salt(
        self,
        state_income_tax: Decimal,
        property_tax: Decimal,
        payroll_levy: Decimal,
        local_tax: Decimal,
    ) -> SaltResult:
        uncapped = state_income_tax + property_tax + payroll_levy + local_tax
        return SaltResult(
            state_income_tax=state_income_tax,
            property_tax=property_tax,
            payroll_levy=payroll_levy,
            local_tax=local_tax,
            uncapped=uncapped,
            capped=min(uncapped, self.tables.salt_cap),
        )

    def resolve_federal(
        self,
        mortgage_interest: Decimal,
        salt: SaltResult,
        other_itemized: Decimal,
        itemize: bool = True,
    ) -> DeductionResult:
        """Federal deduction. With ``itemize=False`` the standard deduction is
        forced (renters have nothing beyond it worth itemizing)."""
        standard = self.tables.federal_standard_deduction
        if not itemize:
            return choose_deduction(ZERO, standard)
        itemized = mortgage_interest + salt.capped + other_itemized
        result = choose_deduction(itemized, standard)
        logger.debug(
            "Federal deduction: itemized=%s standard=%s -> %s",
            itemized, standard, result.method,
        )
        return result

    def resolve_state(
        self,
        profile: JurisdictionProfile,
        mortgage_interest: Decimal,
        property_tax: Decimal,
        other_itemized: Decimal,
        itemize: bool = True,
    ) -> DeductionResult:
        """State deduction compared against the state's own standard deduction
        (zero where none is offered)."""
        standard = profile.standard_deduction
        if not itemize:
            return choose_deduction(ZERO, standard)
        itemized = mortgage_interest + property_tax + other_itemized
        return choose_deduction(itemized, standard)

    def salt_cap_note(self, salt: SaltResult) -> str | None:
        if salt.cap_lost <= ZERO:
            return None
        return (
            f"SALT cap: ${salt.uncapped:,.2f} in state/local taxes exceeds "
            f"the ${self.tables.salt_cap:,.2f} federal limit. "
            f"${salt.cap_lost:,.2f} is not deductible."
        )
