"""Keeper-driven partial liquidation of a position"""
from typing import Sequence

from ..access import Credential, Role
from ..errors import InsufficientCollateralError, NoDebtError
from ..events import PositionRebalanced
from .checks import require_positive_amount, require_unsigned_amount

def rebalance_position(engine, credential: Credential, account: str, max_collateral_in: int,
                       min_pegged_out: int, route: Sequence[str]) -> PositionRebalanced:
    """Swap at most max_collateral_in of the position's collateral for
    stablecoin and burn the proceeds against its debt.

    One bounded step: the keeper calls again while the ratio is still below
    its threshold. Proceeds beyond the outstanding debt go to the account,
    so the engine never keeps stablecoin of its own.
    """
    engine.access.require(credential, Role.KEEPER)
    require_positive_amount(max_collateral_in, "max_collateral_in")
    require_unsigned_amount(min_pegged_out, "min_pegged_out")

    position = engine.ledger.get(account)
    if position.debt == 0:
        raise NoDebtError(f"NoDebt: {account} has no debt to rebalance")

    spent = min(max_collateral_in, position.collateral)
    if spent == 0:
        # fully swapped out earlier; the remaining debt is bad debt
        raise InsufficientCollateralError(f"InsufficientCollateral: {account} has no collateral left to swap")
    amount_out = engine.swapper.swap(spent, min_pegged_out, route)

    repaid = min(amount_out, position.debt)
    engine.stablecoin.burn_from(engine.minter, engine.address, repaid)
    excess = amount_out - repaid
    if excess:
        engine.stablecoin.transfer(engine.address, account, excess)

    position.update_collateral(-spent)
    position.update_debt(-repaid)
    engine.ledger.put(account, position)
    return PositionRebalanced(account, spent, repaid)
