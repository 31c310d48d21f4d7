"""Deposit collateral into an account's position"""
from ..events import CollateralDeposited
from .checks import require_positive_amount

def deposit_collateral(engine, account: str, amount: int) -> CollateralDeposited:
    """Pull amount of collateral from account into custody and credit the position.

    No ratio check: a deposit can only improve the position's health.
    """
    require_positive_amount(amount)
    engine.collateral.transfer_in(account, amount)

    position = engine.ledger.get(account)
    position.update_collateral(amount)
    engine.ledger.put(account, position)
    return CollateralDeposited(account, amount)
