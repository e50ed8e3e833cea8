# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Portfolio Doctor

A retirement portfolio simulation engine: evolves a two-bucket portfolio
(equities and fixed income) year by year across every historical cycle of a
market series, or across Monte Carlo cycles sampled from its distribution,
and summarizes the outcomes.

Example usage:
    from portfolio_doctor import (
        SimulationOptions, ClampedPercentWithdrawal, DepositSpec,
        run_simulation, compute_quantiles,
    )

    options = SimulationOptions(
        start_balance=800_000,
        equities_ratio=0.75,
        simulation_years_length=30,
        withdrawal=ClampedPercentWithdrawal(0.04, floor=30_000, ceiling=60_000),
        deposits=[DepositSpec(1, 5, 10_000)],
    )
    results = run_simulation(series, options)
    print(results.stats.success_rate)
    bands = compute_quantiles(results.cycles, [0.25, 0.5, 0.75])
"""

from .__meta__ import __version__

# Errors
from .errors import (
    EmptyCycleSet,
    InsufficientData,
    InvalidAllocation,
    SimulationError,
    YearNotFound,
)

# Inputs
from .market import (
    MarketYear,
    get_year_index,
    market_series_from_frame,
    market_series_to_frame,
    slice_market_years,
)
from .options import (
    ClampedPercentWithdrawal,
    DepositSpec,
    InflationAdjustedWithdrawal,
    NominalWithdrawal,
    PercentPortfolioWithdrawal,
    SimulationMethod,
    SimulationOptions,
    WithdrawalMethod,
)

# Engine
from .records import YEAR_RECORD_COLUMNS, YearRecord
from .engine import advance_year
from .cycles import (
    CycleEnumerator,
    crunch_single_cycle,
    enumerate_cycles,
    get_max_simulation_cycles,
    get_max_simulation_length,
)

# Monte Carlo
from .montecarlo import (
    MarketStatistics,
    MonteCarloConfig,
    MonteCarloSimulator,
    RunMode,
    compute_market_statistics,
    generate_monte_carlo_runs,
)

# Statistics
from .aggregation import (
    CycleStats,
    PortfolioStats,
    compute_quantile_level_stats,
    compute_quantile_stats,
    compute_quantiles,
    pivot_cycles,
    pivot_cycles_aggregate,
    quantile_frame,
    summarize_cycle,
    summarize_portfolio,
    unpivot_cycle,
)

from .simulation import SimulationResults, run_simulation

__all__ = [
    '__version__',
    'EmptyCycleSet',
    'InsufficientData',
    'InvalidAllocation',
    'SimulationError',
    'YearNotFound',
    'MarketYear',
    'get_year_index',
    'market_series_from_frame',
    'market_series_to_frame',
    'slice_market_years',
    'ClampedPercentWithdrawal',
    'DepositSpec',
    'InflationAdjustedWithdrawal',
    'NominalWithdrawal',
    'PercentPortfolioWithdrawal',
    'SimulationMethod',
    'SimulationOptions',
    'WithdrawalMethod',
    'YEAR_RECORD_COLUMNS',
    'YearRecord',
    'advance_year',
    'CycleEnumerator',
    'crunch_single_cycle',
    'enumerate_cycles',
    'get_max_simulation_cycles',
    'get_max_simulation_length',
    'MarketStatistics',
    'MonteCarloConfig',
    'MonteCarloSimulator',
    'RunMode',
    'compute_market_statistics',
    'generate_monte_carlo_runs',
    'CycleStats',
    'PortfolioStats',
    'compute_quantile_level_stats',
    'compute_quantile_stats',
    'compute_quantiles',
    'pivot_cycles',
    'pivot_cycles_aggregate',
    'quantile_frame',
    'summarize_cycle',
    'summarize_portfolio',
    'unpivot_cycle',
    'SimulationResults',
    'run_simulation',
]
