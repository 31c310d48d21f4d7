"""Keyed store of positions; business rules live in the engine"""
import logging
from typing import Dict, Iterator, Tuple

from .position import Position

logger = logging.getLogger(__name__)

class PositionLedger:
    """Maps account -> Position. Absent and all-zero positions are equivalent."""

    def __init__(self):
        self._positions: Dict[str, Position] = {}

    def get(self, account: str) -> Position:
        """Return a copy of the account's position (zero if it has none)"""
        position = self._positions.get(account)
        if position is None:
            return Position()
        return Position(position.collateral, position.debt)

    def put(self, account: str, position: Position) -> None:
        if position.is_empty:
            if self._positions.pop(account, None) is not None:
                logger.debug("position for %s returned to zero", account)
            return
        self._positions[account] = Position(position.collateral, position.debt)
        logger.debug("position for %s set to %s", account, position.as_tuple())

    def accounts(self) -> Iterator[str]:
        return iter(list(self._positions))

    def total_collateral(self) -> int:
        return sum(p.collateral for p in self._positions.values())

    def total_debt(self) -> int:
        return sum(p.debt for p in self._positions.values())

    def snapshot(self) -> Dict[str, Tuple[int, int]]:
        return {account: p.as_tuple() for account, p in self._positions.items()}

    def restore(self, snapshot: Dict[str, Tuple[int, int]]) -> None:
        self._positions = {account: Position(c, d) for account, (c, d) in snapshot.items()}

    def __contains__(self, account: str) -> bool:
        return account in self._positions

    def __len__(self) -> int:
        return len(self._positions)
