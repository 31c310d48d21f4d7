"""Withdraw collateral from a position"""
from ..errors import InsufficientCollateralError, UnderwaterError
from ..events import CollateralWithdrawn
from ..fixed_point import checked_sub
from .checks import require_positive_amount

def withdraw_collateral(engine, account: str, amount: int) -> CollateralWithdrawn:
    """Release amount of collateral back to account.

    With outstanding debt the remaining collateral must keep the position at
    or above the mint floor; without debt any amount up to the balance goes.
    """
    require_positive_amount(amount)
    position = engine.ledger.get(account)
    if amount > position.collateral:
        raise InsufficientCollateralError(
            f"InsufficientCollateral: cannot withdraw {amount}, position holds {position.collateral}"
        )
    remaining = checked_sub(position.collateral, amount)

    if position.debt > 0:
        price_round = engine.converter.snapshot()
        ratio = position.ratio(engine.converter.value_of(remaining, price_round))
        if ratio < engine.config.min_mint_ratio:
            raise UnderwaterError(
                f"Underwater: ratio {ratio} after withdrawing {amount} is below "
                f"{engine.config.min_mint_ratio} (round {price_round.round_id})"
            )

    position.update_collateral(-amount)
    engine.ledger.put(account, position)
    engine.collateral.transfer_out(account, amount)
    return CollateralWithdrawn(account, amount)
