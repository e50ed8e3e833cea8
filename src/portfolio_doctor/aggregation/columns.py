# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Column-oriented views of cycles.

Each cycle pivots into a DataFrame with one column per YearRecord field, in
YEAR_RECORD_COLUMNS order, one row per cycle year. The aggregate frame is
the concatenation of every cycle's frame: cycle 0's years, then cycle 1's.
"""

from typing import List, Sequence
import pandas as pd

from ..records import YEAR_RECORD_COLUMNS, Cycle, YearRecord


def pivot_cycle(cycle: Cycle) -> pd.DataFrame:
    """Reshape one cycle into a DataFrame with one column per field."""
    return pd.DataFrame([record.as_row() for record in cycle], columns=list(YEAR_RECORD_COLUMNS))


def pivot_cycles(cycles: Sequence[Cycle]) -> List[pd.DataFrame]:
    """Reshape every cycle, preserving cycle order."""
    return [pivot_cycle(cycle) for cycle in cycles]


def pivot_cycles_aggregate(cycles: Sequence[Cycle]) -> pd.DataFrame:
    """Concatenate every cycle's columns into a single frame.

    Returns:
        DataFrame with a fresh RangeIndex; rows ordered by cycle, then cycle year
    """
    frames = pivot_cycles(cycles)
    if not frames:
        return pd.DataFrame(columns=list(YEAR_RECORD_COLUMNS))
    return pd.concat(frames, ignore_index=True)


def unpivot_cycle(frame: pd.DataFrame) -> Cycle:
    """Rebuild the YearRecords of a pivoted cycle, field for field.

    Raises:
        ValueError: If a field column is missing
    """
    missing = [col for col in YEAR_RECORD_COLUMNS if col not in frame.columns]
    if missing:
        raise ValueError(f"Missing cycle columns: {missing}")
    return tuple(YearRecord.from_row(row) for _, row in frame.iterrows())
