"""Collateral -> stablecoin value conversion from the latest oracle round"""
from typing import Optional

from .adapters.price_feed import PriceRound
from .fixed_point import checked_mul, checked_div, require_unsigned

class ValueConverter:
    """Converts between collateral amounts and their stablecoin-equivalent value

    value = amount * price * 10**stable_decimals / 10**(collateral_decimals + price_decimals)

    The product is formed in full before the single division, so small
    amounts keep their precision. Staleness is not checked here; a round
    only has to exist.
    """

    def __init__(self, oracle, collateral_decimals: int, stable_decimals: int):
        self.oracle = oracle
        self.collateral_decimals = collateral_decimals
        self.stable_decimals = stable_decimals

    def snapshot(self) -> PriceRound:
        """Latest round, to price a whole operation from one observation"""
        return self.oracle.latest_price()

    def _scales(self):
        numerator = 10**self.stable_decimals
        denominator = 10**(self.collateral_decimals + self.oracle.decimals())
        return numerator, denominator

    def value_of(self, amount: int, price_round: Optional[PriceRound] = None) -> int:
        require_unsigned(amount, "amount")
        price_round = price_round or self.snapshot()
        numerator, denominator = self._scales()
        return checked_div(checked_mul(checked_mul(amount, price_round.price), numerator), denominator)

    def collateral_for(self, value: int, price_round: Optional[PriceRound] = None) -> int:
        """Inverse of value_of: collateral amount worth value, rounded down"""
        require_unsigned(value, "value")
        price_round = price_round or self.snapshot()
        numerator, denominator = self._scales()
        return checked_div(checked_mul(value, denominator), checked_mul(price_round.price, numerator))
