# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Simulation entry point.

Dispatches on SimulationOptions.simulation_method to the historical cycle
enumerator or the Monte Carlo simulator and summarizes the resulting cycles.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .aggregation.summary import PortfolioStats, summarize_portfolio
from .cycles import CycleEnumerator
from .market import MarketSeries
from .montecarlo.config import MonteCarloConfig
from .montecarlo.market_statistics import MarketStatistics
from .montecarlo.simulator import MonteCarloSimulator
from .options import SimulationMethod, SimulationOptions
from .records import Cycle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationResults:
    """Cycles and statistics of one simulation request.

    Attributes:
        method: How the cycles were produced
        cycles: Completed cycles, in start-year or run order
        stats: Portfolio statistics over the cycles
        market_statistics: Sampling statistics (Monte Carlo only)
        random_seed: Seed of the default random source (Monte Carlo only)
    """
    method: SimulationMethod
    cycles: List[Cycle]
    stats: PortfolioStats
    market_statistics: Optional[MarketStatistics] = None
    random_seed: Optional[int] = None


def run_simulation(series: MarketSeries,
                   options: SimulationOptions,
                   config: Optional[MonteCarloConfig] = None,
                   random_source=None,
                   market_statistics: Optional[MarketStatistics] = None) -> SimulationResults:
    """Run a simulation and summarize its cycles.

    Args:
        series: Historical market series
        options: Simulation options; simulation_method selects the generator
        config: Monte Carlo run count, seed and run mode, ignored for historical runs
        random_source: Monte Carlo random source, ignored for historical runs
        market_statistics: Fixed Monte Carlo statistics, ignored for historical runs

    Returns:
        SimulationResults with cycles and PortfolioStats

    Raises:
        InvalidAllocation: If equities_ratio is outside [0, 1]
        InsufficientData: If the series is too short for the cycle length

    Example:
        >>> results = run_simulation(series, SimulationOptions(simulation_years_length=30))
        >>> print(f"Success rate: {results.stats.success_rate:.1%}")
    """
    if options.simulation_method == SimulationMethod.MONTE_CARLO:
        simulator = MonteCarloSimulator(
            series,
            options,
            config=config,
            market_statistics=market_statistics,
            random_source=random_source,
        )
        runs = simulator.run()
        cycles = list(runs.cycles)
        results = SimulationResults(
            method=options.simulation_method,
            cycles=cycles,
            stats=summarize_portfolio(cycles),
            market_statistics=runs.market_statistics,
            random_seed=runs.random_seed,
        )
    else:
        enumerator = CycleEnumerator(series, options)
        cycles = enumerator.crunch_all_cycles_data()
        results = SimulationResults(
            method=options.simulation_method,
            cycles=cycles,
            stats=enumerator.crunch_all_portfolio_stats(cycles),
        )

    logger.info(
        f"{options.simulation_method.value} simulation: {len(cycles)} cycles, "
        f"success rate {results.stats.success_rate:.1%}"
    )
    return results
