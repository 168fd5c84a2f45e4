"""Currency coercion helpers.

Household and housing inputs arrive from forms and saved scenarios where a
field may be missing, blank or garbage. Every such value becomes zero
instead of an error.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
ONE = Decimal("1")
TWELVE = Decimal("12")
HUNDRED = Decimal("100")


def to_amount(value: Any) -> Decimal:
    """Coerce *value* to a non-negative Decimal, falling back to zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    else:
        text = str(value).strip().replace(",", "").replace("$", "")
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return ZERO
    if not amount.is_finite() or amount < ZERO:
        return ZERO
    return amount


def to_optional_amount(value: Any) -> Decimal | None:
    """Like :func:`to_amount` but keeps ``None`` (meaning "not supplied")."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return to_amount(value)
