"""Money — conversion between decimal amounts and integer cents.

Invariants:
    - to_cents is exact: Decimal arithmetic, never float
    - Half-cent amounts round half up (0.005 -> 1 cent)
    - Stored amounts fit the invoices.amount INTEGER column (MAX_AMOUNT_CENTS)
"""

from decimal import ROUND_HALF_UP, Decimal

from dashboard.core.domain_types import Cents

CENTS_PER_UNIT = Decimal(100)
MAX_AMOUNT_CENTS = 2_147_483_647
MAX_AMOUNT = Decimal(MAX_AMOUNT_CENTS) / CENTS_PER_UNIT


def to_cents(amount: Decimal) -> Cents:
    """Convert a decimal currency amount to whole cents."""
    return Cents(int(
        (amount * CENTS_PER_UNIT).quantize(Decimal(1), rounding=ROUND_HALF_UP),
    ))


def format_currency(cents: int) -> str:
    """Render cents as a dollar string, e.g. 123456 -> '$1,234.56'."""
    return f"${Decimal(cents) / CENTS_PER_UNIT:,.2f}"
