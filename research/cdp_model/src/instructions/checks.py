"""Shared guards for the position instructions"""
from ..errors import InvalidAmountError
from ..fixed_point import require_unsigned

def require_positive_amount(amount: int, name: str = "amount") -> int:
    if require_unsigned_amount(amount, name) == 0:
        raise InvalidAmountError(f"{name} must be greater than zero")
    return amount

def require_unsigned_amount(amount: int, name: str = "amount") -> int:
    if isinstance(amount, int) and not isinstance(amount, bool) and amount < 0:
        raise InvalidAmountError(f"{name} must not be negative, got {amount}")
    return require_unsigned(amount, name)
