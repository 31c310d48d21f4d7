"""Managed price feed: metadata, role-gated pushes, round ids, staleness guard"""
import pytest

from cdp_model.src.access import Role
from cdp_model.src.adapters.price_feed import (
    ManagedPriceFeed,
    OracleAdapter,
    StalePriceGuard,
    format_price,
)
from cdp_model.src.errors import InvalidPriceError, NoDataError, UnauthorizedError
from cdp_model.src.events import PriceUpdated


@pytest.fixture
def feed(clock):
    return ManagedPriceFeed("admin", 8, "MEME / USD", clock=clock)

@pytest.fixture
def updater(feed):
    return feed.access.grant(feed.access.admin_credential, Role.PRICE_UPDATER, "updater")

def test_stores_metadata(feed):
    assert feed.decimals() == 8
    assert feed.description == "MEME / USD"
    assert feed.version == 1

def test_latest_round_before_any_update(feed):
    with pytest.raises(NoDataError):
        feed.latest_round()

def test_updater_pushes_price(feed, updater, clock):
    event = feed.publish(updater, 10**8)

    assert event == PriceUpdated(1, 10**8, clock.now)
    assert feed.latest_round().price == 10**8

def test_round_ids_increment(feed, updater, clock):
    feed.publish(updater, 10**8)
    clock.advance(60)
    feed.publish(updater, 110_000_000)

    latest = feed.latest_round()
    assert latest.round_id == 2
    assert latest.price == 110_000_000
    assert latest.updated_at == clock.now

def test_outsider_cannot_push(feed):
    outsider = feed.access.grant(feed.access.admin_credential, Role.KEEPER, "outsider")
    with pytest.raises(UnauthorizedError) as excinfo:
        feed.publish(outsider, 10**8)
    assert excinfo.value.holder == "outsider"
    assert excinfo.value.role is Role.PRICE_UPDATER

def test_revoked_updater_cannot_push(feed, updater):
    feed.access.revoke(feed.access.admin_credential, Role.PRICE_UPDATER, "updater")
    with pytest.raises(UnauthorizedError):
        feed.publish(updater, 10**8)

def test_only_admin_grants(feed, updater):
    with pytest.raises(UnauthorizedError):
        feed.access.grant(updater, Role.PRICE_UPDATER, "someone")

@pytest.mark.parametrize("price", [0, -5])
def test_non_positive_price_rejected(feed, updater, price):
    with pytest.raises(InvalidPriceError):
        feed.publish(updater, price)
    with pytest.raises(NoDataError):
        feed.latest_round()

def test_stale_guard(feed, updater, clock):
    feed.publish(updater, 10**8)
    guard = StalePriceGuard(OracleAdapter(feed), max_age=3600, clock=clock)

    clock.advance(3600)
    assert guard.latest_price().round_id == 1
    clock.advance(1)
    with pytest.raises(InvalidPriceError):
        guard.latest_price()

    feed.publish(updater, 10**8)
    assert guard.latest_price().round_id == 2
    assert guard.decimals() == 8

def test_format_price():
    assert format_price(20_000_000, 8) == "$0.20000000"
    assert format_price(10**8, 8) == "$1.00000000"
