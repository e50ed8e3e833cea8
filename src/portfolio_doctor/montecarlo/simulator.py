# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Monte Carlo simulation orchestrator.

Synthetic market years keep the historical calendar years, inflation index
and fixed-income rate; only the equities return is sampled. The synthetic
price path starts at the first historical price and compounds by each
sampled return. Synthetic dividends are zero because the sampled change is
a total return.

Two run modes are supported (see RunMode):

- CYCLE: run r synthesizes one cycle-length window, anchored at the
  historical window starting at position r modulo the number of admissible
  windows, and yields one cycle.
- SERIES: every run synthesizes the whole series from len(series) - 1
  draws and yields every admissible cycle over it, in start order.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import numpy as np

from ..cycles import crunch_single_cycle, get_max_simulation_cycles
from ..engine import check_allocation
from ..errors import InsufficientData
from ..market import MarketSeries, MarketYear
from ..options import SimulationOptions
from ..records import Cycle
from .config import MonteCarloConfig, RunMode
from .market_statistics import MarketStatistics, compute_market_statistics
from .return_generator import NormalReturnGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonteCarloRuns:
    """Cycles produced by a Monte Carlo simulation.

    Attributes:
        cycles: Synthetic cycles in run order, cycles_per_run per run
        market_statistics: Statistics the returns were sampled from
        random_seed: Seed of the default random source, if one was used
        cycles_per_run: Cycles each run contributes
    """
    cycles: Tuple[Cycle, ...]
    market_statistics: MarketStatistics
    random_seed: Optional[int] = None
    cycles_per_run: int = 1

    @property
    def run_count(self) -> int:
        return len(self.cycles) // self.cycles_per_run

    def run_cycles(self, run_idx: int) -> Tuple[Cycle, ...]:
        """Cycles produced by one run."""
        if not 0 <= run_idx < self.run_count:
            raise IndexError(f"Run {run_idx} out of range for {self.run_count} runs")
        first = run_idx * self.cycles_per_run
        return self.cycles[first:first + self.cycles_per_run]


def synthesize_market_years(window: Sequence[MarketYear], returns: Sequence[float]) -> List[MarketYear]:
    """Build synthetic observations over a historical window.

    Args:
        window: len(returns) + 1 consecutive historical observations
        returns: Sampled annual equities returns, one per cycle year

    Returns:
        Synthetic observations; price[i + 1] = price[i] * (1 + returns[i])
    """
    if len(window) != len(returns) + 1:
        raise InsufficientData(
            f"{len(returns)} returns need a window of {len(returns) + 1} observations, "
            f"got {len(window)}"
        )
    price = window[0].equities_price
    synthetic = []
    for idx, observation in enumerate(window):
        if idx > 0:
            price = price * (1 + returns[idx - 1])
        synthetic.append(MarketYear(
            year=observation.year,
            equities_price=price,
            equities_dividend=0.0,
            inflation_index=observation.inflation_index,
            fixed_income_interest=observation.fixed_income_interest,
        ))
    return synthetic


class MonteCarloSimulator:
    """Generates synthetic cycles from sampled annual returns.

    Example:
        >>> simulator = MonteCarloSimulator(
        ...     series, options, config=MonteCarloConfig(run_count=500, random_seed=7)
        ... )
        >>> runs = simulator.run()
        >>> print(len(runs.cycles))  # 500
        >>> series_runs = MonteCarloSimulator(
        ...     series, options, config=MonteCarloConfig(run_count=3, run_mode=RunMode.SERIES)
        ... ).run()
        >>> series_runs.run_cycles(0)  # every admissible cycle of run 0
    """

    def __init__(self,
                 series: MarketSeries,
                 options: SimulationOptions,
                 config: Optional[MonteCarloConfig] = None,
                 market_statistics: Optional[MarketStatistics] = None,
                 random_source=None):
        """Initialize the simulator.

        Args:
            series: Historical market series
            options: Simulation options
            config: Run count, seed and run mode. If None, uses defaults.
            market_statistics: Fixed sampling statistics. If None, computed
                               from the series.
            random_source: Object with a random() method. If None, a numpy
                           Generator seeded with config.random_seed.

        Raises:
            InvalidAllocation: If equities_ratio is outside [0, 1]
            InsufficientData: If the series has no window of the cycle length
        """
        check_allocation(options.equities_ratio)
        self.series = series
        self.options = options
        self.config = config or MonteCarloConfig()
        self.window_count = get_max_simulation_cycles(series, options.simulation_years_length)
        if self.window_count == 0:
            raise InsufficientData(
                f"A {options.simulation_years_length}-year Monte Carlo run needs "
                f"{options.simulation_years_length + 1} observations; series has {len(series)}"
            )
        self.market_statistics = market_statistics or compute_market_statistics(series)
        self.random_seed = None
        if random_source is None:
            self.random_seed = self.config.random_seed
            random_source = np.random.default_rng(self.random_seed)
        self.return_generator = NormalReturnGenerator(self.market_statistics, random_source)

    @property
    def cycles_per_run(self) -> int:
        if self.config.run_mode is RunMode.SERIES:
            return self.window_count
        return 1

    @property
    def draws_per_run(self) -> int:
        """Uniform draws each run consumes, one per synthetic year."""
        if self.config.run_mode is RunMode.SERIES:
            return len(self.series) - 1
        return self.options.simulation_years_length

    def anchor_index(self, run_idx: int) -> int:
        """Series position of the historical window anchoring a CYCLE run."""
        return run_idx % self.window_count

    def build_run(self, run_idx: int, uniforms: Sequence[float]) -> List[Cycle]:
        """Build the cycles for one run from its own uniform draws."""
        returns = self.return_generator.returns_from_uniforms(uniforms)
        if self.config.run_mode is RunMode.SERIES:
            synthetic = synthesize_market_years(self.series, returns)
            return [
                crunch_single_cycle(synthetic, start_idx, self.options)
                for start_idx in range(self.window_count)
            ]

        length = self.options.simulation_years_length
        start = self.anchor_index(run_idx)
        window = self.series[start:start + length + 1]
        return [crunch_single_cycle(synthesize_market_years(window, returns), 0, self.options)]

    def run(self) -> MonteCarloRuns:
        """Run every Monte Carlo iteration.

        All draws are taken from the random source before any cycle is
        built, run by run and year by year.

        Returns:
            MonteCarloRuns holding config.run_count * cycles_per_run cycles
        """
        draws = [
            self.return_generator.draw_uniforms(self.draws_per_run)
            for _ in range(self.config.run_count)
        ]
        cycles = []
        for run_idx, uniforms in enumerate(draws):
            run_cycles = self.build_run(run_idx, uniforms)
            logger.debug(
                f"Run {run_idx}: {len(run_cycles)} cycles from {run_cycles[0][0].cycle_start_year}, "
                f"mean ending balance {np.mean([c[-1].balance_end for c in run_cycles]):.2f}"
            )
            cycles.extend(run_cycles)

        logger.info(
            f"Generated {len(cycles)} Monte Carlo cycles of {self.options.simulation_years_length} years "
            f"from {self.config.run_count} {self.config.run_mode.value} runs "
            f"(mean {self.market_statistics.mean_annual_market_change:.4f}, "
            f"std {self.market_statistics.std_dev_annual_market_change:.4f})"
        )
        return MonteCarloRuns(
            cycles=tuple(cycles),
            market_statistics=self.market_statistics,
            random_seed=self.random_seed,
            cycles_per_run=self.cycles_per_run,
        )


def generate_monte_carlo_runs(series: MarketSeries,
                              options: SimulationOptions,
                              run_count: int,
                              random_source=None,
                              market_statistics: Optional[MarketStatistics] = None,
                              run_mode: RunMode = RunMode.CYCLE) -> List[Cycle]:
    """Generate synthetic cycles for run_count runs.

    Args:
        series: Historical market series
        options: Simulation options
        run_count: Number of runs
        random_source: Object with a random() method; defaults to an unseeded
                       numpy Generator
        market_statistics: Fixed sampling statistics; computed from the
                           series when None
        run_mode: CYCLE yields one cycle per run; SERIES yields every
                  admissible cycle of each run's synthetic series

    Returns:
        List of cycles in run order
    """
    simulator = MonteCarloSimulator(
        series,
        options,
        config=MonteCarloConfig(run_count=run_count, run_mode=run_mode),
        market_statistics=market_statistics,
        random_source=random_source,
    )
    return list(simulator.run().cycles)
