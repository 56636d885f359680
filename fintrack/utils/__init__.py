from .money import Money, signed_amount, to_money
from .timestamp import utc_now

__all__ = ["Money", "signed_amount", "to_money", "utc_now"]
