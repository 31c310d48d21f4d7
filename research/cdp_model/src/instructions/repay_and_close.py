"""Repay all debt and close a position"""
from ..constants import BPS_SCALE
from ..errors import NoDebtError
from ..events import PositionClosed
from ..fixed_point import checked_sub, mul_div
from ..state.position import Position

def repay_and_close(engine, account: str) -> PositionClosed:
    """Burn the account's full debt, burn the close fee out of the collateral
    and refund the rest.

    A position without debt is rejected with NoDebtError; its collateral
    comes back fee-free through withdraw_collateral instead.
    """
    position = engine.ledger.get(account)
    if position.debt == 0:
        raise NoDebtError(f"NoDebt: {account} has no debt to repay")

    engine.stablecoin.burn_from(engine.minter, account, position.debt)

    fee = mul_div(position.collateral, engine.config.close_fee_bps, BPS_SCALE)
    refund = checked_sub(position.collateral, fee)
    engine.collateral.burn(fee)
    engine.collateral.transfer_out(account, refund)

    engine.ledger.put(account, Position())
    return PositionClosed(account, refund, fee)
