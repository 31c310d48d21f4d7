"""Synthetic asset ledger; supply changes only through the minter's mint and burn"""
from ..access import AccessControl, Credential, Role
from ..constants import STABLECOIN_DECIMALS, STABLECOIN_NAME, STABLECOIN_SYMBOL
from .token_ledger import TokenLedger

class Stablecoin(TokenLedger):
    def __init__(self, admin: str, name: str = STABLECOIN_NAME,
                 symbol: str = STABLECOIN_SYMBOL, decimals: int = STABLECOIN_DECIMALS):
        super().__init__(name, symbol, decimals)
        self.access = AccessControl(admin)

    def mint(self, credential: Credential, to: str, amount: int) -> None:
        self.access.require(credential, Role.MINTER)
        self._mint(to, amount)

    def burn_from(self, credential: Credential, holder: str, amount: int) -> None:
        """Burn amount of holder's balance; raises InsufficientBalanceError when short"""
        self.access.require(credential, Role.MINTER)
        self._burn(holder, amount)
