"""Collateral valuation from the oracle round"""
import pytest

from cdp_model.src.adapters.price_feed import ManagedPriceFeed, OracleAdapter, PriceRound
from cdp_model.src.access import Role
from cdp_model.src.errors import InvalidPriceError, NoDataError, OracleUnavailableError
from cdp_model.src.value_converter import ValueConverter

MEME = 10**18


def make_converter(price=None, feed_decimals=8, collateral_decimals=18, stable_decimals=18):
    feed = ManagedPriceFeed("admin", feed_decimals, "MEME / USD", clock=lambda: 1_000)
    updater = feed.access.grant(feed.access.admin_credential, Role.PRICE_UPDATER, "admin")
    if price is not None:
        feed.publish(updater, price)
    return ValueConverter(OracleAdapter(feed), collateral_decimals, stable_decimals)

def test_value_at_one_dollar():
    converter = make_converter(10**8)
    assert converter.value_of(10_000 * MEME) == 10_000 * 10**18

def test_value_at_twenty_cents():
    converter = make_converter(20_000_000)
    assert converter.value_of(1_000 * MEME) == 200 * 10**18
    assert converter.value_of(10 * MEME) == 2 * 10**18

def test_small_amounts_keep_precision():
    """The product is formed before dividing, so 1 wei at $3 is worth 3 wei"""
    converter = make_converter(3 * 10**8)
    assert converter.value_of(1) == 3
    assert converter.value_of(0) == 0

def test_mixed_decimals():
    """6-decimal stablecoin against 18-decimal collateral"""
    converter = make_converter(150_000_000, stable_decimals=6)
    assert converter.value_of(2 * MEME) == 3 * 10**6

def test_explicit_round_is_used_instead_of_latest():
    converter = make_converter(10**8)
    snapshot = PriceRound(round_id=7, price=2 * 10**8, updated_at=0)
    assert converter.value_of(MEME, snapshot) == 2 * 10**18

def test_no_round_published():
    converter = make_converter()
    with pytest.raises(NoDataError):
        converter.value_of(MEME)
    with pytest.raises(OracleUnavailableError):
        converter.snapshot()

def test_non_positive_round_is_rejected():
    class BrokenFeed:
        def decimals(self):
            return 8
        def latest_round(self):
            return PriceRound(3, -1, 0)

    converter = ValueConverter(OracleAdapter(BrokenFeed()), 18, 18)
    with pytest.raises(InvalidPriceError):
        converter.value_of(MEME)

@pytest.mark.parametrize("price", [10**8, 250_000_000, 333_333_333, 1_234_567_891])
@pytest.mark.parametrize("amount", [1, 7, 10**18 + 1, 123_456_789_012_345_678_901])
def test_inverse_recovers_amount_within_one_unit(price, amount):
    converter = make_converter(price)
    recovered = converter.collateral_for(converter.value_of(amount))
    assert amount - 1 <= recovered <= amount
