"""Swap venue models and the adapter the rebalance path swaps through"""
import logging
from typing import Sequence

from ..constants import BPS_SCALE
from ..errors import (
    InsufficientBalanceError,
    InvalidRouteError,
    SlippageExceededError,
    TransferFailedError,
)
from ..fixed_point import mul_div
from .collateral_token import CollateralToken
from .token_ledger import TokenLedger

logger = logging.getLogger(__name__)

class SwapRouter:
    """Exchange of collateral for stablecoin along [collateral, stablecoin].

    The router trades from its own account and pays out of stablecoin
    liquidity it has been funded with. Subclasses decide the rate via quote().
    """

    def __init__(self, address: str, collateral: CollateralToken, stablecoin: TokenLedger):
        self.address = address
        self.collateral = collateral
        self.stablecoin = stablecoin

    def quote(self, amount_in: int) -> int:
        raise NotImplementedError

    def check_route(self, route: Sequence[str]) -> None:
        if list(route) != [self.collateral.symbol, self.stablecoin.symbol]:
            raise InvalidRouteError(
                f"Unsupported route {list(route)}, expected "
                f"[{self.collateral.symbol}, {self.stablecoin.symbol}]"
            )

    def swap_exact_tokens_for_tokens(self, amount_in: int, amount_out_min: int,
                                     route: Sequence[str], sender: str, recipient: str) -> int:
        """Take amount_in collateral from sender (needs allowance), pay recipient"""
        self.check_route(route)
        amount_out = self.quote(amount_in)
        if amount_out < amount_out_min:
            raise SlippageExceededError(
                f"Swap of {amount_in} would return {amount_out}, minimum is {amount_out_min}"
            )
        if not self.collateral.transfer_from(self.address, sender, self.address, amount_in):
            raise TransferFailedError(f"Router could not pull {amount_in} collateral from {sender}")
        if not self.stablecoin.transfer(self.address, recipient, amount_out):
            raise InsufficientBalanceError(
                f"Router liquidity {self.stablecoin.balance_of(self.address)} "
                f"cannot cover {amount_out}"
            )
        logger.debug("swapped %d %s for %d %s", amount_in, self.collateral.symbol,
                     amount_out, self.stablecoin.symbol)
        return amount_out

class FixedOutputRouter(SwapRouter):
    """Pays the same stablecoin amount for every swap, whatever goes in"""

    def __init__(self, address, collateral, stablecoin, amount_out: int):
        super().__init__(address, collateral, stablecoin)
        self.amount_out = amount_out

    def quote(self, amount_in: int) -> int:
        return self.amount_out

class OracleRateRouter(SwapRouter):
    """Pays the oracle value of the input less a fee in basis points"""

    def __init__(self, address, collateral, stablecoin, converter, fee_bps: int = 30):
        super().__init__(address, collateral, stablecoin)
        self.converter = converter
        self.fee_bps = fee_bps

    def quote(self, amount_in: int) -> int:
        value = self.converter.value_of(amount_in)
        return mul_div(value, BPS_SCALE - self.fee_bps, BPS_SCALE)

class SwapAdapter:
    """Swaps collateral held in custody, proceeds land back in custody"""

    def __init__(self, router: SwapRouter, collateral: CollateralToken, custody: str):
        self.router = router
        self.collateral = collateral
        self.custody = custody

    def swap(self, amount_in: int, amount_out_min: int, route: Sequence[str]) -> int:
        self.collateral.approve(self.custody, self.router.address, amount_in)
        return self.router.swap_exact_tokens_for_tokens(
            amount_in, amount_out_min, route, self.custody, self.custody
        )
