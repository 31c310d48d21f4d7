"""Price feed: an administrator-pushed feed and the read-only adapter the engine uses"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..access import AccessControl, Credential, Role
from ..constants import PRICE_FEED_DECIMALS, PRICE_FEED_VERSION
from ..errors import InvalidPriceError, NoDataError
from ..events import PriceUpdated

logger = logging.getLogger(__name__)

Clock = Callable[[], int]

def wall_clock() -> int:
    return int(time.time())

@dataclass(frozen=True)
class PriceRound:
    """One published price observation"""
    round_id: int
    price: int  # scaled by the feed's decimals
    updated_at: int  # unix seconds

class ManagedPriceFeed:
    """Push feed: accounts holding PRICE_UPDATER publish rounds, anyone reads the latest one"""

    def __init__(self, admin: str, decimals: int = PRICE_FEED_DECIMALS,
                 description: str = "", clock: Clock = wall_clock):
        self.access = AccessControl(admin)
        self._decimals = decimals
        self.description = description
        self.version = PRICE_FEED_VERSION
        self._clock = clock
        self._latest: Optional[PriceRound] = None
        self.events: List[PriceUpdated] = []

    def decimals(self) -> int:
        return self._decimals

    def publish(self, credential: Credential, price: int) -> PriceUpdated:
        """Push a new round; the round id increments from 1"""
        self.access.require(credential, Role.PRICE_UPDATER)
        if price <= 0:
            raise InvalidPriceError(f"Price must be positive, got {price}")
        round_id = 1 if self._latest is None else self._latest.round_id + 1
        self._latest = PriceRound(round_id, price, self._clock())
        event = PriceUpdated(round_id, price, self._latest.updated_at)
        self.events.append(event)
        logger.info("%s round %d: %s", self.description or "feed", round_id,
                    format_price(price, self._decimals))
        return event

    def drain_events(self) -> List[PriceUpdated]:
        events, self.events = self.events, []
        return events

    def latest_round(self) -> PriceRound:
        if self._latest is None:
            raise NoDataError("NoData: no price round has been published")
        return self._latest

class OracleAdapter:
    """Read contract the engine depends on: decimals and the latest round"""

    def __init__(self, feed):
        self.feed = feed

    def decimals(self) -> int:
        return self.feed.decimals()

    def latest_price(self) -> PriceRound:
        price_round = self.feed.latest_round()
        if price_round.price <= 0:
            raise InvalidPriceError(f"Round {price_round.round_id} has non-positive price {price_round.price}")
        return price_round

class StalePriceGuard:
    """Operator policy layer: same port as OracleAdapter, rejects rounds older than max_age"""

    def __init__(self, oracle: OracleAdapter, max_age: int, clock: Clock = wall_clock):
        self.oracle = oracle
        self.max_age = max_age
        self._clock = clock

    def decimals(self) -> int:
        return self.oracle.decimals()

    def latest_price(self) -> PriceRound:
        price_round = self.oracle.latest_price()
        age = self._clock() - price_round.updated_at
        if self.max_age and age > self.max_age:
            raise InvalidPriceError(
                f"Round {price_round.round_id} is {age}s old, max age is {self.max_age}s"
            )
        return price_round

def format_price(price: int, decimals: int) -> str:
    whole, frac = divmod(price, 10**decimals)
    return f"${whole}.{frac:0{decimals}d}" if decimals else f"${whole}"
