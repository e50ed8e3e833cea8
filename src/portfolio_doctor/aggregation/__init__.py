# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Statistics over completed cycles.

This module turns year-by-year trajectories into cycle-level and
portfolio-level summaries and quantile bands across cycles.
"""

from .columns import pivot_cycle, pivot_cycles, pivot_cycles_aggregate, unpivot_cycle
from .summary import (
    BalanceEvent,
    CycleOutcome,
    CycleStats,
    PortfolioStats,
    WithdrawalEvent,
    summarize_cycle,
    summarize_portfolio,
)
from .quantiles import (
    DEFAULT_QUANTILE_LEVELS,
    QuantileLevelStats,
    QuantileYear,
    QuantileYearStats,
    compute_quantile_level_stats,
    compute_quantile_stats,
    compute_quantiles,
    quantile_frame,
)

__all__ = [
    'pivot_cycle',
    'pivot_cycles',
    'pivot_cycles_aggregate',
    'unpivot_cycle',
    'BalanceEvent',
    'CycleOutcome',
    'CycleStats',
    'PortfolioStats',
    'WithdrawalEvent',
    'summarize_cycle',
    'summarize_portfolio',
    'DEFAULT_QUANTILE_LEVELS',
    'QuantileLevelStats',
    'QuantileYear',
    'QuantileYearStats',
    'compute_quantile_level_stats',
    'compute_quantile_stats',
    'compute_quantiles',
    'quantile_frame',
]
