"""Engine configuration, loadable from per-network environment variables"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from ..constants import (
    MIN_MINT_RATIO,
    CLOSE_FEE_BPS,
    DEFAULT_LIQ_THRESHOLD,
    DEFAULT_REBALANCE_COLLATERAL_MAX,
    DEFAULT_MAX_PRICE_AGE,
    BPS_SCALE,
    COLLATERAL_DECIMALS,
)
from ..errors import ConfigurationError

@dataclass
class EngineConfig:
    """Risk parameters of the engine and the keeper policy layered on top of it"""
    min_mint_ratio: int = MIN_MINT_RATIO  # scaled by RATIO_SCALE
    close_fee_bps: int = CLOSE_FEE_BPS
    liquidation_threshold: int = DEFAULT_LIQ_THRESHOLD  # keeper trigger, scaled by RATIO_SCALE
    rebalance_collateral_max: int = DEFAULT_REBALANCE_COLLATERAL_MAX
    max_price_age: int = DEFAULT_MAX_PRICE_AGE  # seconds, 0 disables

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if self.min_mint_ratio <= 0:
            raise ConfigurationError("min_mint_ratio must be positive")
        if not 0 <= self.close_fee_bps <= BPS_SCALE:
            raise ConfigurationError(f"close_fee_bps must be within 0..{BPS_SCALE}")
        if not 0 < self.liquidation_threshold < self.min_mint_ratio:
            # positions between the two ratios can neither mint nor be rebalanced
            raise ConfigurationError(
                f"liquidation_threshold ({self.liquidation_threshold}) must be below "
                f"min_mint_ratio ({self.min_mint_ratio})"
            )
        if self.rebalance_collateral_max <= 0:
            raise ConfigurationError("rebalance_collateral_max must be positive")
        if self.max_price_age < 0:
            raise ConfigurationError("max_price_age must not be negative")

    @classmethod
    def from_env(cls, network: str, dotenv_path: Optional[str] = None) -> "EngineConfig":
        """Build a config from <NETWORK>_* environment variables.

        Unset variables fall back to the defaults. The collateral cap is given
        in whole tokens, like the keeper script takes it.
        """
        load_dotenv(dotenv_path)
        upper = network.upper()
        defaults = cls()
        whole_tokens = _env_int(f"{upper}_REBALANCE_COLLATERAL_MAX", None)
        return cls(
            min_mint_ratio=_env_int(f"{upper}_MIN_MINT_RATIO", defaults.min_mint_ratio),
            close_fee_bps=_env_int(f"{upper}_CLOSE_FEE_BPS", defaults.close_fee_bps),
            liquidation_threshold=_env_int(f"{upper}_LIQ_THRESHOLD_BPS", defaults.liquidation_threshold),
            rebalance_collateral_max=(
                defaults.rebalance_collateral_max if whole_tokens is None
                else whole_tokens * 10**COLLATERAL_DECIMALS
            ),
            max_price_age=_env_int(f"{upper}_MAX_PRICE_AGE", defaults.max_price_age),
        )

def _env_int(key: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigurationError(f"Environment variable {key} must be an integer, got {raw!r}") from None
