"""Position state management"""
from dataclasses import dataclass
from typing import Optional, Tuple

from ..constants import RATIO_SCALE
from ..errors import ArithmeticError, InsufficientCollateralError
from ..fixed_point import checked_add, checked_sub, mul_div

@dataclass
class Position:
    """Represents a CDP position: collateral held for an account and the stablecoin it owes"""
    collateral: int = 0  # collateral smallest units
    debt: int = 0  # stablecoin smallest units

    @property
    def is_empty(self) -> bool:
        return self.collateral == 0 and self.debt == 0

    def as_tuple(self) -> Tuple[int, int]:
        return self.collateral, self.debt

    def ratio(self, collateral_value: int, debt: Optional[int] = None) -> Optional[int]:
        """Collateral ratio scaled by RATIO_SCALE, None when there is no debt

        collateral_value is the stablecoin-equivalent value of the collateral;
        debt defaults to the position's own debt.
        """
        debt = self.debt if debt is None else debt
        if debt == 0:
            return None
        return mul_div(collateral_value, RATIO_SCALE, debt)

    def update_collateral(self, amount_change: int) -> None:
        """Update position collateral"""
        if amount_change > 0:
            self.collateral = checked_add(self.collateral, amount_change)
        else:
            if self.collateral < abs(amount_change):
                raise InsufficientCollateralError(
                    f"Insufficient collateral: {self.collateral} < {abs(amount_change)}"
                )
            self.collateral = checked_sub(self.collateral, abs(amount_change))

    def update_debt(self, amount_change: int) -> None:
        """Update position debt"""
        if amount_change > 0:
            self.debt = checked_add(self.debt, amount_change)
        else:
            if self.debt < abs(amount_change):
                raise ArithmeticError(f"Debt underflow: {self.debt} < {abs(amount_change)}")
            self.debt = checked_sub(self.debt, abs(amount_change))
