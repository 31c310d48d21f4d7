"""Shared fixtures: a deployed engine at $1 with a funded user"""
import pytest

from cdp_model.src.constants import COLLATERAL_DECIMALS, PRICE_FEED_DECIMALS, STABLECOIN_DECIMALS
from cdp_model.src.deployment import deploy_local, fixed_output_router

MEME = 10**COLLATERAL_DECIMALS
USD = 10**STABLECOIN_DECIMALS
ONE_DOLLAR = 10**PRICE_FEED_DECIMALS

class FakeClock:
    def __init__(self, now: int = 1_700_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds

@pytest.fixture
def clock():
    return FakeClock()

@pytest.fixture
def deployment(clock):
    """Router pays 2 cUSD per swap, like the liquidation scenario expects"""
    d = deploy_local(owner="owner", router_factory=fixed_output_router(2 * USD), clock=clock)
    d.fund("user", 50_000 * MEME)
    return d

@pytest.fixture
def engine(deployment):
    return deployment.engine
