"""Collateral asset and the custody adapter the engine moves it through"""
import logging

from ..access import AccessControl, Credential, Role
from ..constants import COLLATERAL_DECIMALS, COLLATERAL_NAME, COLLATERAL_SYMBOL
from ..errors import TransferFailedError
from .token_ledger import TokenLedger

logger = logging.getLogger(__name__)

class CollateralToken(TokenLedger):
    """Collateral asset: initial supply to the admin, treasury-gated mint, holder burn"""

    def __init__(self, admin: str, initial_supply: int = 0,
                 name: str = COLLATERAL_NAME, symbol: str = COLLATERAL_SYMBOL,
                 decimals: int = COLLATERAL_DECIMALS):
        super().__init__(name, symbol, decimals)
        self.access = AccessControl(admin)
        if initial_supply:
            self._mint(admin, initial_supply)

    def mint(self, credential: Credential, to: str, amount: int) -> None:
        self.access.require(credential, Role.TREASURY)
        self._mint(to, amount)

    def burn(self, holder: str, amount: int) -> None:
        """Remove amount of the holder's own balance from circulation"""
        self._burn(holder, amount)

class CollateralAdapter:
    """Moves collateral in and out of the engine's custody account"""

    def __init__(self, token: CollateralToken, custody: str):
        self.token = token
        self.custody = custody

    @property
    def lock(self):
        return self.token.lock

    def decimals(self) -> int:
        return self.token.decimals()

    def balance_of(self, account: str) -> int:
        return self.token.balance_of(account)

    def transfer_in(self, sender: str, amount: int) -> bool:
        """Pull amount from sender; sender must have approved the custody account"""
        if not self.token.transfer_from(self.custody, sender, self.custody, amount):
            raise TransferFailedError(f"Collateral transfer of {amount} from {sender} failed")
        return True

    def transfer_out(self, recipient: str, amount: int) -> bool:
        if not self.token.transfer(self.custody, recipient, amount):
            raise TransferFailedError(f"Collateral transfer of {amount} to {recipient} failed")
        return True

    def burn(self, amount: int) -> None:
        self.token.burn(self.custody, amount)

    def snapshot(self):
        return self.token.snapshot()

    def restore(self, snapshot) -> None:
        self.token.restore(snapshot)
