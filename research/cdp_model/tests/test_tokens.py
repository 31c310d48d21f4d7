"""Collateral token and stablecoin ledgers"""
import pytest

from cdp_model.src.access import Role
from cdp_model.src.adapters.collateral_token import CollateralAdapter, CollateralToken
from cdp_model.src.adapters.stablecoin import Stablecoin
from cdp_model.src.errors import (
    InsufficientBalanceError,
    InvalidAmountError,
    TransferFailedError,
    UnauthorizedError,
)
from cdp_model.src.events import Transfer

UNIT = 10**18
INITIAL_SUPPLY = 1_000_000 * UNIT


@pytest.fixture
def token():
    return CollateralToken("admin", INITIAL_SUPPLY)

@pytest.fixture
def treasury(token):
    return token.access.grant(token.access.admin_credential, Role.TREASURY, "treasury")

def test_initial_supply_goes_to_admin(token):
    assert token.balance_of("admin") == INITIAL_SUPPLY
    assert token.total_supply == INITIAL_SUPPLY
    assert token.decimals() == 18
    assert token.symbol == "MEME"

def test_treasury_mints(token, treasury):
    token.mint(treasury, "user", 500 * UNIT)

    assert token.balance_of("user") == 500 * UNIT
    assert token.events[-1] == Transfer(None, "user", 500 * UNIT)

def test_non_treasury_cannot_mint(token):
    forged = type(token.access.admin_credential)("user", Role.TREASURY)
    with pytest.raises(UnauthorizedError):
        token.mint(forged, "user", UNIT)
    with pytest.raises(UnauthorizedError):
        token.mint(token.access.admin_credential, "user", UNIT)

def test_holder_burns_own_balance(token):
    token.burn("admin", 100 * UNIT)

    assert token.balance_of("admin") == 999_900 * UNIT
    assert token.total_supply == 999_900 * UNIT
    assert token.events[-1] == Transfer("admin", None, 100 * UNIT)

def test_burn_more_than_balance(token):
    with pytest.raises(InsufficientBalanceError):
        token.burn("user", 1)

def test_transfer_returns_false_when_short(token):
    assert token.transfer("admin", "user", 10 * UNIT) is True
    assert token.transfer("user", "other", 11 * UNIT) is False
    assert token.balance_of("user") == 10 * UNIT

def test_transfer_from_spends_allowance(token):
    token.approve("admin", "spender", 5 * UNIT)

    assert token.transfer_from("spender", "admin", "user", 3 * UNIT) is True
    assert token.allowance("admin", "spender") == 2 * UNIT
    assert token.transfer_from("spender", "admin", "user", 3 * UNIT) is False
    assert token.balance_of("user") == 3 * UNIT

def test_snapshot_restore(token):
    saved = token.snapshot()
    token.transfer("admin", "user", UNIT)
    token.approve("user", "spender", UNIT)
    token.restore(saved)

    assert token.balance_of("user") == 0
    assert token.allowance("user", "spender") == 0
    assert len(token.events) == 1

def test_collateral_adapter_surfaces_rejections(token):
    adapter = CollateralAdapter(token, "custody")
    with pytest.raises(TransferFailedError):
        adapter.transfer_in("admin", UNIT)

    token.approve("admin", "custody", UNIT)
    assert adapter.transfer_in("admin", UNIT) is True
    assert adapter.balance_of("custody") == UNIT
    with pytest.raises(TransferFailedError):
        adapter.transfer_out("admin", 2 * UNIT)

def test_stablecoin_mint_and_burn_need_minter():
    coin = Stablecoin("admin")
    minter = coin.access.grant(coin.access.admin_credential, Role.MINTER, "engine")

    coin.mint(minter, "user", 5 * UNIT)
    coin.burn_from(minter, "user", 2 * UNIT)
    assert coin.balance_of("user") == 3 * UNIT
    assert coin.total_supply == 3 * UNIT
    assert coin.symbol == "cUSD"

    with pytest.raises(InsufficientBalanceError):
        coin.burn_from(minter, "user", 4 * UNIT)
    with pytest.raises(UnauthorizedError):
        coin.mint(coin.access.admin_credential, "user", UNIT)
    with pytest.raises(InvalidAmountError):
        coin.mint(minter, "user", 0)
