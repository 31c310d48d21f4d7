"""Event records emitted by the engine and its collaborators"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CollateralDeposited:
    account: str
    amount: int

@dataclass(frozen=True)
class StablecoinMinted:
    account: str
    amount: int

@dataclass(frozen=True)
class CollateralWithdrawn:
    account: str
    amount: int

@dataclass(frozen=True)
class PositionClosed:
    account: str
    refund: int
    fee: int

@dataclass(frozen=True)
class PositionRebalanced:
    account: str
    collateral_spent: int
    debt_repaid: int

@dataclass(frozen=True)
class PriceUpdated:
    round_id: int
    price: int
    updated_at: int

@dataclass(frozen=True)
class Transfer:
    """Token movement; sender or recipient is None for mint and burn"""
    sender: Optional[str]
    recipient: Optional[str]
    amount: int
