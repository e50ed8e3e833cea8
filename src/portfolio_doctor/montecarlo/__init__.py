# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Monte Carlo simulation module for synthetic retirement cycles.

This module samples annual equities returns from a normal distribution fitted
to the historical series and runs them through the year engine.
"""

from .config import MonteCarloConfig, RunMode
from .market_statistics import MarketStatistics, annual_market_changes, compute_market_statistics
from .return_generator import NormalReturnGenerator
from .simulator import (
    MonteCarloRuns,
    MonteCarloSimulator,
    generate_monte_carlo_runs,
    synthesize_market_years,
)

__all__ = [
    'MonteCarloConfig',
    'RunMode',
    'MarketStatistics',
    'annual_market_changes',
    'compute_market_statistics',
    'NormalReturnGenerator',
    'MonteCarloRuns',
    'MonteCarloSimulator',
    'generate_monte_carlo_runs',
    'synthesize_market_years',
]
