"""CDP engine: position operations, locking and all-or-nothing execution

Every state-changing call runs under the engine's re-entrant write lock and
holds the lock of both token ledgers until it finishes, so no outside transfer
can interleave with it. Before the call the engine snapshots the position
ledger and both token ledgers; if any step raises, all three are restored and
the error propagates unchanged, so a failed call leaves no trace.
"""
import logging
import threading
from contextlib import contextmanager
from typing import List, Optional, Sequence, Tuple

from .access import AccessControl, Credential, Role
from .adapters.collateral_token import CollateralAdapter, CollateralToken
from .adapters.stablecoin import Stablecoin
from .adapters.swap_router import SwapAdapter, SwapRouter
from .instructions.deposit_collateral import deposit_collateral as _deposit_collateral
from .instructions.mint_stablecoin import mint_stablecoin as _mint_stablecoin
from .instructions.rebalance_position import rebalance_position as _rebalance_position
from .instructions.repay_and_close import repay_and_close as _repay_and_close
from .instructions.withdraw_collateral import withdraw_collateral as _withdraw_collateral
from .state.engine_config import EngineConfig
from .state.position_ledger import PositionLedger
from .value_converter import ValueConverter

logger = logging.getLogger(__name__)

ENGINE_ADDRESS = "cdp-engine"

class CDPStablecoin:
    """Single-collateral CDP engine minting one stablecoin.

    The owner holds the KEEPER role and may grant it to other keepers.
    stablecoin must have granted MINTER to ``address``; minter is that
    credential.
    """

    def __init__(self, owner: str, collateral: CollateralToken, stablecoin: Stablecoin,
                 minter: Credential, oracle, router: SwapRouter,
                 config: Optional[EngineConfig] = None, address: str = ENGINE_ADDRESS):
        self.address = address
        self.owner = owner
        self.config = config or EngineConfig()
        self.access = AccessControl(owner)
        self.owner_credential = self.access.grant(self.access.admin_credential, Role.KEEPER, owner)

        self.stablecoin = stablecoin
        self.minter = minter
        self.collateral = CollateralAdapter(collateral, address)
        self.converter = ValueConverter(oracle, collateral.decimals(), stablecoin.decimals())
        self.swapper = SwapAdapter(router, collateral, address)
        self.ledger = PositionLedger()
        self.events: List[object] = []

        self._lock = threading.RLock()
        self._journal = (self.ledger, self.stablecoin, self.collateral)

    def grant_keeper(self, admin: Credential, keeper: str) -> Credential:
        return self.access.grant(admin, Role.KEEPER, keeper)

    @contextmanager
    def _atomic(self, operation: str, account: str):
        with self._lock, self.collateral.lock, self.stablecoin.lock:
            saved = [(participant, participant.snapshot()) for participant in self._journal]
            try:
                yield
            except Exception as e:
                for participant, state in saved:
                    participant.restore(state)
                logger.warning("%s for %s aborted: %s: %s", operation, account, type(e).__name__, e)
                raise

    def _execute(self, instruction, account: str, *args):
        with self._atomic(instruction.__name__, account):
            event = instruction(self, *args)
            self.events.append(event)
        logger.info("%s", event)
        return event

    # Operations

    def deposit_collateral(self, account: str, amount: int):
        return self._execute(_deposit_collateral, account, account, amount)

    def mint_stablecoin(self, account: str, amount: int):
        return self._execute(_mint_stablecoin, account, account, amount)

    def withdraw_collateral(self, account: str, amount: int):
        return self._execute(_withdraw_collateral, account, account, amount)

    def repay_and_close(self, account: str):
        return self._execute(_repay_and_close, account, account)

    def rebalance_position(self, credential: Credential, account: str, max_collateral_in: int,
                           min_pegged_out: int, route: Sequence[str]):
        return self._execute(_rebalance_position, account, credential, account,
                             max_collateral_in, min_pegged_out, route)

    def drain_events(self) -> List[object]:
        """Hand over the event log and start a new one"""
        with self._lock:
            events, self.events = self.events, []
            return events

    # Queries

    def get_position(self, account: str) -> Tuple[int, int]:
        with self._lock:
            return self.ledger.get(account).as_tuple()

    def collateral_value(self, account: str) -> int:
        with self._lock:
            return self.converter.value_of(self.ledger.get(account).collateral)

    def collateral_ratio(self, account: str) -> Optional[int]:
        """Ratio scaled by RATIO_SCALE, None for a position without debt"""
        with self._lock:
            position = self.ledger.get(account)
            if position.debt == 0:
                return None
            return position.ratio(self.converter.value_of(position.collateral))

    def positions(self) -> List[str]:
        with self._lock:
            return list(self.ledger.accounts())

    def balance_of(self, account: str) -> int:
        return self.stablecoin.balance_of(account)

    def decimals(self) -> int:
        return self.stablecoin.decimals()

    def collateral_decimals(self) -> int:
        return self.collateral.decimals()

    def default_route(self) -> List[str]:
        return [self.collateral.token.symbol, self.stablecoin.symbol]
