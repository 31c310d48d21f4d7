"""Keeper: scans monitored positions and rebalances those below the threshold"""
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from ..access import Credential
from ..errors import ConfigurationError, ProtocolError
from ..events import PositionRebalanced
from ..fixed_point import format_ratio, format_units
from ..state.engine_config import EngineConfig

logger = logging.getLogger(__name__)

SKIPPED = "skipped"
HEALTHY = "healthy"
REBALANCED = "rebalanced"
FAILED = "failed"

@dataclass
class KeeperConfig:
    monitored_accounts: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls, network: str, dotenv_path: Optional[str] = None) -> "KeeperConfig":
        load_dotenv(dotenv_path)
        key = f"{network.upper()}_MONITORED_ACCOUNTS"
        raw = os.environ.get(key, "").strip()
        if not raw:
            raise ConfigurationError(f"Missing required environment variable {key}")
        accounts = [account.strip() for account in raw.split(",") if account.strip()]
        if not accounts:
            raise ConfigurationError(f"No accounts specified in {key}")
        return cls(accounts)

@dataclass(frozen=True)
class KeeperAction:
    account: str
    status: str
    ratio: Optional[int] = None
    event: Optional[PositionRebalanced] = None
    error: Optional[str] = None

class KeeperMonitor:
    """One rebalance step per account per run, only while the ratio is below
    the configured liquidation threshold. Positions between the threshold and
    the mint floor are left alone.
    """

    def __init__(self, engine, credential: Credential, accounts: Optional[List[str]] = None,
                 config: Optional[EngineConfig] = None, min_pegged_out: int = 0):
        self.engine = engine
        self.credential = credential
        self.accounts = accounts
        self.config = config or engine.config
        self.min_pegged_out = min_pegged_out

    def needs_rebalance(self, ratio: Optional[int]) -> bool:
        return ratio is not None and ratio < self.config.liquidation_threshold

    def check(self, account: str) -> KeeperAction:
        engine = self.engine
        collateral, debt = engine.get_position(account)
        if debt == 0:
            logger.info("- %s has no debt, skipping", account)
            return KeeperAction(account, SKIPPED)

        try:
            ratio = engine.collateral_ratio(account)
        except ProtocolError as e:
            logger.error("- %s collateral ratio unavailable: %s", account, e)
            return KeeperAction(account, FAILED, error=str(e))
        logger.info("- %s collateral ratio %s (collateral: %s, debt: %s)", account,
                    format_ratio(ratio), format_units(collateral, engine.collateral_decimals()),
                    format_units(debt, engine.decimals()))
        if not self.needs_rebalance(ratio):
            return KeeperAction(account, HEALTHY, ratio)

        logger.info("  -> Ratio below threshold, calling rebalance_position")
        try:
            event = engine.rebalance_position(self.credential, account,
                                              self.config.rebalance_collateral_max,
                                              self.min_pegged_out, engine.default_route())
        except ProtocolError as e:
            logger.error("  -> Rebalance of %s failed: %s", account, e)
            return KeeperAction(account, FAILED, ratio, error=str(e))
        return KeeperAction(account, REBALANCED, ratio, event)

    def run_once(self) -> List[KeeperAction]:
        accounts = self.accounts if self.accounts is not None else self.engine.positions()
        logger.info("Keeper watching %d account(s), threshold %s", len(accounts),
                    format_ratio(self.config.liquidation_threshold))
        logger.info("Max collateral per swap: %s",
                    format_units(self.config.rebalance_collateral_max, self.engine.collateral_decimals()))
        actions = [self.check(account) for account in accounts]
        logger.info("Keeper run complete.")
        return actions

    def run_until_healthy(self, account: str, max_steps: int = 100) -> List[KeeperAction]:
        """Repeat bounded steps on one account until it recovers, fails or runs out of steps"""
        actions = []
        for _ in range(max_steps):
            action = self.check(account)
            actions.append(action)
            if action.status != REBALANCED:
                break
        return actions
