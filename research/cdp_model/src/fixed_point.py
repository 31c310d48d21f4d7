"""Checked integer math for uint256-style amounts"""
from .constants import UINT256_MAX
from .errors import ArithmeticError


def checked_add(a: int, b: int) -> int:
    """Add with overflow checking"""
    result = a + b
    if result > UINT256_MAX:
        raise ArithmeticError("Arithmetic overflow in addition")
    return result

def checked_sub(a: int, b: int) -> int:
    """Subtract with underflow checking"""
    if b > a:
        raise ArithmeticError(f"Arithmetic underflow in subtraction ({a} - {b})")
    return a - b

def checked_mul(a: int, b: int) -> int:
    """Multiply with overflow checking"""
    result = a * b
    if result > UINT256_MAX:
        raise ArithmeticError("Arithmetic overflow in multiplication")
    return result

def checked_div(a: int, b: int) -> int:
    """Divide with overflow checking"""
    if b == 0:
        raise ArithmeticError("Division by zero")
    return a // b

def mul_div(a: int, b: int, denominator: int) -> int:
    """a * b / denominator, rounding down, with the product kept at full precision"""
    return checked_div(checked_mul(a, b), denominator)

def require_unsigned(value: int, name: str = "value") -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ArithmeticError(f"{name} must not be negative ({value})")
    return value

def format_units(amount: int, decimals: int, places: int = 4) -> str:
    """Human readable token amount, truncated to places decimals"""
    whole, frac = divmod(amount, 10**decimals)
    if places == 0 or decimals == 0:
        return str(whole)
    frac_digits = f"{frac:0{decimals}d}"[:places]
    return f"{whole}.{frac_digits}"

def format_ratio(ratio) -> str:
    """RATIO_SCALE ratio as a percentage string"""
    if ratio is None:
        return "n/a"
    return f"{ratio / 100:.2f}%"
