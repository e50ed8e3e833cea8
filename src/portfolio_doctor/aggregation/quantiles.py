# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Quantile bands across cycles.

For every cycle-year index, the requested quantiles are taken across all
cycles with linear interpolation between order statistics (position
(n - 1) * q), which is numpy's default quantile method.
"""

from dataclasses import dataclass
from typing import List, Sequence
import numpy as np
import pandas as pd

from ..errors import EmptyCycleSet
from ..records import Cycle

DEFAULT_QUANTILE_LEVELS = (0.25, 0.5, 0.75)


@dataclass(frozen=True)
class QuantileYear:
    """Band value of one quantile level at one cycle-year index."""
    quantile: float
    cycle_year_index: int
    balance_inf_adj: float
    withdrawal_inf_adj: float


@dataclass(frozen=True)
class QuantileYearStats:
    """Band summary at one cycle-year index, across quantile levels."""
    cycle_year_index: int
    ending_balance_inf_adj: float
    average_balance_inf_adj: float
    average_withdrawal_inf_adj: float


@dataclass(frozen=True)
class QuantileLevelStats:
    """Band summary of one quantile level, across cycle-year indices."""
    quantile: float
    ending_balance_inf_adj: float
    average_balance_inf_adj: float
    average_withdrawal_inf_adj: float


QuantileBands = List[List[QuantileYear]]


def _column_matrix(cycles: Sequence[Cycle], field: str) -> np.ndarray:
    return np.array([[getattr(record, field) for record in cycle] for cycle in cycles], dtype=float)


def compute_quantiles(cycles: Sequence[Cycle],
                      quantile_levels: Sequence[float] = DEFAULT_QUANTILE_LEVELS) -> QuantileBands:
    """Compute quantile bands of inflation-adjusted balance and withdrawal.

    Args:
        cycles: Completed cycles sharing one length
        quantile_levels: Levels in [0, 1], e.g. (0.25, 0.5, 0.75)

    Returns:
        One list per level (in the given order), each holding one
        QuantileYear per cycle-year index

    Raises:
        EmptyCycleSet: If no cycles are given
        ValueError: If a level is outside [0, 1] or cycle lengths differ

    Example:
        >>> bands = compute_quantiles(cycles, [0.1, 0.5, 0.9])
        >>> median_band = [entry.balance_inf_adj for entry in bands[1]]
    """
    cycles = list(cycles)
    if not cycles:
        raise EmptyCycleSet("Cannot compute quantiles over an empty set of cycles")
    levels = [float(q) for q in quantile_levels]
    for q in levels:
        if not 0 <= q <= 1:
            raise ValueError(f"Quantile level must be within [0, 1]: {q}")
    lengths = {len(cycle) for cycle in cycles}
    if len(lengths) != 1:
        raise ValueError(f"Cycles must share one length, got lengths {sorted(lengths)}")
    if not levels:
        return []

    balances = np.quantile(_column_matrix(cycles, 'balance_inf_adj_end'), levels, axis=0)
    withdrawals = np.quantile(_column_matrix(cycles, 'withdrawal_inf_adjust'), levels, axis=0)

    return [
        [
            QuantileYear(
                quantile=q,
                cycle_year_index=idx,
                balance_inf_adj=float(balances[level_idx, idx]),
                withdrawal_inf_adj=float(withdrawals[level_idx, idx]),
            )
            for idx in range(balances.shape[1])
        ]
        for level_idx, q in enumerate(levels)
    ]


def compute_quantile_stats(quantile_bands: QuantileBands) -> List[QuantileYearStats]:
    """Summarize bands per cycle-year index.

    The ending balance is the last level's balance at the index; averages
    are taken across levels at the index.
    """
    if not quantile_bands:
        return []
    stats = []
    for idx in range(len(quantile_bands[0])):
        entries = [band[idx] for band in quantile_bands]
        stats.append(QuantileYearStats(
            cycle_year_index=idx,
            ending_balance_inf_adj=entries[-1].balance_inf_adj,
            average_balance_inf_adj=float(np.mean([e.balance_inf_adj for e in entries])),
            average_withdrawal_inf_adj=float(np.mean([e.withdrawal_inf_adj for e in entries])),
        ))
    return stats


def compute_quantile_level_stats(quantile_bands: QuantileBands) -> List[QuantileLevelStats]:
    """Summarize bands per quantile level, as a reporting table reads them.

    The ending balance is the level's balance at the last cycle-year index;
    averages are taken across cycle-year indices.
    """
    return [
        QuantileLevelStats(
            quantile=band[0].quantile,
            ending_balance_inf_adj=band[-1].balance_inf_adj,
            average_balance_inf_adj=float(np.mean([e.balance_inf_adj for e in band])),
            average_withdrawal_inf_adj=float(np.mean([e.withdrawal_inf_adj for e in band])),
        )
        for band in quantile_bands
        if band
    ]


def quantile_frame(quantile_bands: QuantileBands, value: str = 'balance_inf_adj') -> pd.DataFrame:
    """Band values as a DataFrame indexed by cycle-year index, one column per level.

    Args:
        quantile_bands: Output of compute_quantiles
        value: 'balance_inf_adj' or 'withdrawal_inf_adj'
    """
    if value not in ('balance_inf_adj', 'withdrawal_inf_adj'):
        raise ValueError(f"Unknown band value: {value}")
    data = {
        band[0].quantile: [getattr(entry, value) for entry in band]
        for band in quantile_bands
        if band
    }
    df = pd.DataFrame(data)
    df.index.name = 'cycle_year_index'
    return df
