"""In-process deployment of the engine and its collaborators, plus the demo workflow"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .access import Credential, Role
from .adapters.collateral_token import CollateralToken
from .adapters.price_feed import ManagedPriceFeed, OracleAdapter, StalePriceGuard, wall_clock
from .adapters.stablecoin import Stablecoin
from .adapters.swap_router import FixedOutputRouter, OracleRateRouter, SwapRouter
from .constants import COLLATERAL_DECIMALS, PRICE_FEED_DECIMALS, STABLECOIN_DECIMALS
from .engine import ENGINE_ADDRESS, CDPStablecoin
from .fixed_point import format_ratio, format_units
from .state.engine_config import EngineConfig
from .value_converter import ValueConverter

logger = logging.getLogger(__name__)

ROUTER_ADDRESS = "swap-router"

RouterFactory = Callable[[CollateralToken, Stablecoin, object], SwapRouter]

def oracle_rate_router(fee_bps: int = 30) -> RouterFactory:
    def build(collateral, stablecoin, oracle):
        converter = ValueConverter(oracle, collateral.decimals(), stablecoin.decimals())
        return OracleRateRouter(ROUTER_ADDRESS, collateral, stablecoin, converter, fee_bps)
    return build

def fixed_output_router(amount_out: int) -> RouterFactory:
    def build(collateral, stablecoin, oracle):
        return FixedOutputRouter(ROUTER_ADDRESS, collateral, stablecoin, amount_out)
    return build

@dataclass
class Deployment:
    owner: str
    collateral: CollateralToken
    treasury: Credential  # TREASURY on the collateral token
    feed: ManagedPriceFeed
    updater: Credential  # PRICE_UPDATER on the feed
    stablecoin: Stablecoin
    router: SwapRouter
    engine: CDPStablecoin

    def push_price(self, price: int):
        return self.feed.publish(self.updater, price)

    def fund(self, account: str, amount: int) -> None:
        """Mint collateral to account and approve the engine to pull it"""
        self.collateral.mint(self.treasury, account, amount)
        self.collateral.approve(account, self.engine.address, self.collateral.balance_of(account))

    def drain_events(self) -> list:
        """Clear the engine, token and feed logs, returning everything they held"""
        return (self.engine.drain_events() + self.collateral.drain_events()
                + self.stablecoin.drain_events() + self.feed.drain_events())

def deploy_local(owner: str = "deployer",
                 price: Optional[int] = 10**PRICE_FEED_DECIMALS,
                 initial_supply: int = 100_000_000 * 10**COLLATERAL_DECIMALS,
                 router_factory: Optional[RouterFactory] = None,
                 config: Optional[EngineConfig] = None,
                 clock=wall_clock) -> Deployment:
    """Deploy collateral, feed, stablecoin, router and engine.

    The owner gets the treasury and price updater roles. price is pushed as
    the first round unless it is None.
    """
    config = config or EngineConfig()
    collateral = CollateralToken(owner, initial_supply)
    treasury = collateral.access.grant(collateral.access.admin_credential, Role.TREASURY, owner)

    feed = ManagedPriceFeed(owner, PRICE_FEED_DECIMALS, "MEME / USD", clock)
    updater = feed.access.grant(feed.access.admin_credential, Role.PRICE_UPDATER, owner)
    if price is not None:
        feed.publish(updater, price)
    oracle = OracleAdapter(feed)
    if config.max_price_age:
        oracle = StalePriceGuard(oracle, config.max_price_age, clock)

    stablecoin = Stablecoin(owner)
    minter = stablecoin.access.grant(stablecoin.access.admin_credential, Role.MINTER, ENGINE_ADDRESS)
    router = (router_factory or oracle_rate_router())(collateral, stablecoin, oracle)

    engine = CDPStablecoin(owner, collateral, stablecoin, minter, oracle, router, config)
    logger.info("deployed %s/%s engine for %s, router %s", collateral.symbol,
                stablecoin.symbol, owner, type(router).__name__)
    return Deployment(owner, collateral, treasury, feed, updater, stablecoin, router, engine)

def demo_workflow(deployment: Deployment,
                  deposit: int = 10_000 * 10**COLLATERAL_DECIMALS,
                  mint: int = 500 * 10**STABLECOIN_DECIMALS):
    """Deposit and mint for the owner at a 2000% ratio and report the position"""
    engine = deployment.engine
    owner = deployment.owner
    deployment.collateral.approve(owner, engine.address, deposit)
    engine.deposit_collateral(owner, deposit)
    engine.mint_stablecoin(owner, mint)

    collateral, debt = engine.get_position(owner)
    ratio = engine.collateral_ratio(owner)
    logger.info("Position collateral: %s %s", format_units(collateral, COLLATERAL_DECIMALS),
                deployment.collateral.symbol)
    logger.info("Position debt: %s %s", format_units(debt, STABLECOIN_DECIMALS),
                deployment.stablecoin.symbol)
    logger.info("Collateral ratio: %s", format_ratio(ratio))
    return collateral, debt, ratio

def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    demo_workflow(deploy_local())

if __name__ == "__main__":
    main()
