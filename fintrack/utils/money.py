"""Currency amounts as fixed-point decimals.

All balances, transaction amounts and goal amounts are ``Decimal`` values
quantized to cents. JSON output renders them as numbers so API clients keep
receiving plain numeric fields.
"""
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Annotated, Union

from pydantic import AfterValidator, PlainSerializer

CENT = Decimal("0.01")


def to_money(value: Union[Decimal, int, float, str]) -> Decimal:
    """
    Convert a value to a cent-quantized Decimal.

    Floats go through their shortest string form so ``0.1`` becomes
    ``Decimal("0.10")`` rather than the binary expansion.

    Raises:
        ValueError: If the value is not numeric or has too many digits to
            hold in cents
    """
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(value)
        if not amount.is_finite():
            raise ValueError(f"Not a currency amount: {value!r}")
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Not a currency amount: {value!r}") from e


Money = Annotated[
    Decimal,
    AfterValidator(to_money),
    PlainSerializer(float, return_type=float, when_used="json"),
]


def signed_amount(entry_type: str, amount: Decimal) -> Decimal:
    """Effect of an entry on its account: income adds, anything else subtracts."""
    return amount if entry_type == "income" else -amount
