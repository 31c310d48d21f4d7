import logging
import numpy as np
import matplotlib.pyplot as plt
import pandas as pd
from dataclasses import dataclass
from typing import List, Optional
from pathlib import Path
from datetime import datetime

from cdp_model.src.constants import COLLATERAL_DECIMALS, PRICE_FEED_DECIMALS, RATIO_SCALE, STABLECOIN_DECIMALS
from cdp_model.src.deployment import Deployment, deploy_local, oracle_rate_router
from cdp_model.src.keeper.monitor import KeeperMonitor, REBALANCED, FAILED
from cdp_model.src.state.engine_config import EngineConfig

logger = logging.getLogger(__name__)

TOKEN = 10**COLLATERAL_DECIMALS
MIN_PRICE = 1e-6  # keep the feed strictly positive

@dataclass
class SimulationParams:
    initial_price: float = 1.0
    price_volatility: float = 0.01   # per step
    price_drift: float = -0.0005      # per step, negative to stress the keeper
    simulation_days: int = 30
    steps_per_day: int = 24  # hourly steps
    random_seed: Optional[int] = None
    experiment_name: str = "default"
    num_borrowers: int = 20
    min_target_ratio: float = 10.0    # 1000%, the mint floor
    max_target_ratio: float = 20.0
    router_fee_bps: int = 30
    liquidation_threshold: int = 30_000  # 300%
    rebalance_collateral_max: int = 100  # whole tokens per keeper step
    market_maker_collateral: int = 10_000_000  # whole tokens

class LiquidationSimulation:
    def __init__(self, params: SimulationParams):
        self.params = params
        self.borrowers: List[str] = [f"borrower-{i}" for i in range(params.num_borrowers)]
        self.history: List[dict] = []

        if params.random_seed is not None:
            np.random.seed(params.random_seed)

        config = EngineConfig(
            liquidation_threshold=params.liquidation_threshold,
            rebalance_collateral_max=params.rebalance_collateral_max * TOKEN,
        )
        self.deployment: Deployment = deploy_local(
            price=self.to_feed_price(params.initial_price),
            router_factory=oracle_rate_router(params.router_fee_bps),
            config=config,
        )
        self.engine = self.deployment.engine
        self.keeper = KeeperMonitor(self.engine, self.engine.owner_credential, accounts=self.borrowers)

    @staticmethod
    def to_feed_price(price: float) -> int:
        return int(max(price, MIN_PRICE) * 10**PRICE_FEED_DECIMALS)

    def open_positions(self) -> None:
        """Market maker seeds router liquidity, borrowers open positions at random ratios"""
        d = self.deployment
        maker = "market-maker"
        maker_collateral = self.params.market_maker_collateral * TOKEN
        d.fund(maker, maker_collateral)
        self.engine.deposit_collateral(maker, maker_collateral)
        liquidity = self.engine.converter.value_of(maker_collateral) * RATIO_SCALE // (self.engine.config.min_mint_ratio * 2)
        self.engine.mint_stablecoin(maker, liquidity)
        d.stablecoin.transfer(maker, d.router.address, liquidity)

        deposits = np.random.uniform(1_000, 10_000, size=len(self.borrowers))
        ratios = np.random.uniform(self.params.min_target_ratio, self.params.max_target_ratio, size=len(self.borrowers))
        for borrower, deposit, ratio in zip(self.borrowers, deposits, ratios):
            amount = int(deposit) * TOKEN
            d.fund(borrower, amount)
            self.engine.deposit_collateral(borrower, amount)
            debt = self.engine.converter.value_of(amount) * 100 // int(np.ceil(ratio * 100))
            self.engine.mint_stablecoin(borrower, debt)

    def record(self, step: int, price: float, actions) -> None:
        ratios = [r for r in (self.engine.collateral_ratio(b) for b in self.borrowers) if r is not None]
        positions = [self.engine.get_position(b) for b in self.borrowers]
        self.history.append({
            "time": step / self.params.steps_per_day,
            "price": price,
            "collateral": sum(c for c, _ in positions) / TOKEN,
            "debt": sum(d for _, d in positions) / 10**STABLECOIN_DECIMALS,
            "min_ratio": min(ratios) / 100 if ratios else np.nan,
            "median_ratio": float(np.median(ratios)) / 100 if ratios else np.nan,
            "below_threshold": sum(r < self.params.liquidation_threshold for r in ratios),
            "rebalances": sum(a.status == REBALANCED for a in actions),
            "failures": sum(a.status == FAILED for a in actions),
        })

    def simulate(self) -> pd.DataFrame:
        self.open_positions()
        current_price = self.params.initial_price
        total_steps = self.params.simulation_days * self.params.steps_per_day

        for step in range(total_steps):
            # Simulate price movement with Brownian motion
            price_change = np.random.normal(self.params.price_drift, self.params.price_volatility)
            current_price = max(current_price * (1 + price_change), MIN_PRICE)
            self.deployment.push_price(self.to_feed_price(current_price))

            actions = self.keeper.run_once()
            self.record(step, current_price, actions)
            self.deployment.drain_events()

        return pd.DataFrame(self.history)

    def plot_results(self, results: pd.DataFrame) -> Path:
        output_dir = Path('research/results') / self.params.experiment_name
        output_dir.mkdir(parents=True, exist_ok=True)

        fig, (ax1, ax2, ax3) = plt.subplots(3, 1, figsize=(12, 11), sharex=True)

        ax1.plot(results["time"], results["price"], label='Collateral Price')
        ax1.axhline(y=self.params.initial_price, color='r', linestyle='--', alpha=0.3)
        ax1.set_ylabel('Price (USD)')
        ax1.set_title('Collateral Price Over Time')
        ax1.legend()
        ax1.grid(True)

        ax2.plot(results["time"], results["min_ratio"], label='Min Ratio', color='orange')
        ax2.plot(results["time"], results["median_ratio"], label='Median Ratio', color='green')
        ax2.axhline(y=self.engine.config.min_mint_ratio / 100, color='b', linestyle='--', alpha=0.3, label='Mint Floor')
        ax2.axhline(y=self.params.liquidation_threshold / 100, color='r', linestyle='--', alpha=0.3, label='Keeper Threshold')
        ax2.set_ylabel('Collateral Ratio (%)')
        ax2.set_yscale('log')
        ax2.set_title('Collateral Ratios Over Time')
        ax2.legend()
        ax2.grid(True)

        ax3.plot(results["time"], results["debt"], label='Total Debt', color='purple')
        ax3.bar(results["time"], results["rebalances"].cumsum(), width=1 / self.params.steps_per_day,
                alpha=0.2, label='Cumulative Rebalances')
        ax3.set_ylabel('cUSD / count')
        ax3.set_xlabel('Time (days)')
        ax3.set_title('Debt And Keeper Activity')
        ax3.legend()
        ax3.grid(True)

        plt.tight_layout()

        plot_name = f"vol_{self.params.price_volatility}_threshold_{self.params.liquidation_threshold}"
        if self.params.random_seed is not None:
            plot_name += f"_seed_{self.params.random_seed}"
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        plot_path = output_dir / f"{plot_name}_{timestamp}.png"
        plt.savefig(plot_path)
        plt.close()
        results.to_csv(output_dir / f"{plot_name}_{timestamp}.csv", index=False)
        return plot_path

def main():
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    params = SimulationParams(
        experiment_name="keeper_drawdown",
        random_seed=57,
        simulation_days=30,
    )
    sim = LiquidationSimulation(params)
    results = sim.simulate()
    plot_path = sim.plot_results(results)

    print(f"Final price: ${results['price'].iloc[-1]:.4f}")
    print(f"Total rebalances: {int(results['rebalances'].sum())}, failures: {int(results['failures'].sum())}")
    print(f"Debt: {results['debt'].iloc[0]:.2f} -> {results['debt'].iloc[-1]:.2f} cUSD")
    print(f"Saved plot to {plot_path}")

if __name__ == "__main__":
    main()
