"""Fungible balance ledger shared by the collateral asset and the stablecoin"""
import logging
import threading
from typing import Dict, List, Tuple

from ..errors import InsufficientBalanceError, InvalidAmountError
from ..events import Transfer
from ..fixed_point import checked_add, checked_sub, require_unsigned

logger = logging.getLogger(__name__)

class TokenLedger:
    """Balances, allowances and total supply.

    transfer and transfer_from follow the token convention of returning False
    instead of raising when the sender's balance or allowance is short; the
    callers decide how to surface that.

    Every read and write takes ``lock``. A caller holding it (the engine for
    the length of one operation) sees no writes from other threads until it
    releases, so a snapshot taken under the lock covers only that caller's
    own changes.
    """

    def __init__(self, name: str, symbol: str, decimals: int):
        self.name = name
        self.symbol = symbol
        self._decimals = decimals
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}
        self.total_supply = 0
        self.events: List[Transfer] = []
        self.lock = threading.RLock()

    def decimals(self) -> int:
        return self._decimals

    def balance_of(self, account: str) -> int:
        with self.lock:
            return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        with self.lock:
            return self._allowances.get((owner, spender), 0)

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        require_unsigned(amount, "amount")
        with self.lock:
            self._allowances[(owner, spender)] = amount
        return True

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        require_unsigned(amount, "amount")
        with self.lock:
            if self.balance_of(sender) < amount:
                logger.debug("%s transfer of %d from %s rejected: balance %d",
                             self.symbol, amount, sender, self.balance_of(sender))
                return False
            self._move(sender, recipient, amount)
        return True

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> bool:
        require_unsigned(amount, "amount")
        with self.lock:
            allowed = self.allowance(owner, spender)
            if allowed < amount or self.balance_of(owner) < amount:
                logger.debug("%s transfer_from of %d by %s from %s rejected: allowance %d balance %d",
                             self.symbol, amount, spender, owner, allowed, self.balance_of(owner))
                return False
            self._allowances[(owner, spender)] = allowed - amount
            self._move(owner, recipient, amount)
        return True

    def _move(self, sender: str, recipient: str, amount: int) -> None:
        self._balances[sender] = checked_sub(self.balance_of(sender), amount)
        self._balances[recipient] = checked_add(self.balance_of(recipient), amount)
        self.events.append(Transfer(sender, recipient, amount))

    def _mint(self, to: str, amount: int) -> None:
        if require_unsigned(amount, "amount") == 0:
            raise InvalidAmountError("Mint amount must be positive")
        with self.lock:
            self.total_supply = checked_add(self.total_supply, amount)
            self._balances[to] = checked_add(self.balance_of(to), amount)
            self.events.append(Transfer(None, to, amount))

    def _burn(self, holder: str, amount: int) -> None:
        require_unsigned(amount, "amount")
        with self.lock:
            balance = self.balance_of(holder)
            if balance < amount:
                raise InsufficientBalanceError(
                    f"{holder} holds {balance} {self.symbol}, cannot burn {amount}"
                )
            self._balances[holder] = balance - amount
            self.total_supply = checked_sub(self.total_supply, amount)
            self.events.append(Transfer(holder, None, amount))

    def drain_events(self) -> List[Transfer]:
        """Hand over the transfer log and start a new one"""
        with self.lock:
            events, self.events = self.events, []
            return events

    def snapshot(self):
        with self.lock:
            return dict(self._balances), dict(self._allowances), self.total_supply, len(self.events)

    def restore(self, snapshot) -> None:
        balances, allowances, total_supply, event_count = snapshot
        with self.lock:
            self._balances = dict(balances)
            self._allowances = dict(allowances)
            self.total_supply = total_supply
            del self.events[event_count:]
