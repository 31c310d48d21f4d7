"""Mint stablecoin against a position's collateral"""
from ..errors import InsufficientCollateralError
from ..events import StablecoinMinted
from ..fixed_point import checked_add
from .checks import require_positive_amount

def mint_stablecoin(engine, account: str, amount: int) -> StablecoinMinted:
    """Increase the position's debt by amount and mint it to account.

    The ratio after minting must stay at or above the mint floor.
    """
    require_positive_amount(amount)
    position = engine.ledger.get(account)
    new_debt = checked_add(position.debt, amount)

    price_round = engine.converter.snapshot()
    collateral_value = engine.converter.value_of(position.collateral, price_round)
    ratio = position.ratio(collateral_value, new_debt)
    if ratio < engine.config.min_mint_ratio:
        raise InsufficientCollateralError(
            f"InsufficientCollateral: ratio {ratio} after minting {amount} is below "
            f"{engine.config.min_mint_ratio} (round {price_round.round_id})"
        )

    position.update_debt(amount)
    engine.ledger.put(account, position)
    engine.stablecoin.mint(engine.minter, account, amount)
    return StablecoinMinted(account, amount)
