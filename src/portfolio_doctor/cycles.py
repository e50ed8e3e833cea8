# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Historical cycle enumeration.

A cycle starting at series position s covers cycle years 1..L and reads
observations s..s+L, so a series of n observations admits n - L cycles.
"""

import logging
from typing import Iterator, List, Optional, Sequence

from .aggregation.summary import PortfolioStats, summarize_portfolio
from .engine import advance_year, check_allocation
from .errors import InsufficientData
from .market import MarketSeries, get_year_index
from .options import SimulationOptions
from .records import Cycle, YearRecord

logger = logging.getLogger(__name__)


def get_max_simulation_length(series: MarketSeries) -> int:
    """Longest cycle length for which at least one cycle is admissible."""
    return max(0, len(series) - 1)


def get_max_simulation_cycles(series: MarketSeries, simulation_years_length: int) -> int:
    """Number of admissible cycle start positions for the given length."""
    return max(0, len(series) - simulation_years_length)


def crunch_single_cycle(series: MarketSeries, start_idx: int, options: SimulationOptions) -> Cycle:
    """Run the year engine across the window starting at start_idx.

    Args:
        series: Market series
        start_idx: Position of the cycle's first calendar year
        options: Simulation options

    Returns:
        Tuple of options.simulation_years_length YearRecords

    Raises:
        InsufficientData: If the window runs past the end of the series
    """
    length = options.simulation_years_length
    if start_idx < 0 or start_idx + length >= len(series):
        raise InsufficientData(
            f"A {length}-year cycle at position {start_idx} needs {length + 1} observations; "
            f"series has {len(series)}"
        )

    cycle_start = series[start_idx]
    records: List[YearRecord] = []
    prior: Optional[YearRecord] = None
    for offset in range(length):
        idx = start_idx + offset
        prior = advance_year(prior, series[idx], series[idx + 1], offset + 1, options, cycle_start)
        records.append(prior)
    return tuple(records)


class CycleEnumerator:
    """Lazy, restartable sequence of every admissible historical cycle.

    Validation happens at construction, so iteration never fails part way.
    Each iteration recomputes the cycles from the immutable inputs.

    Example:
        >>> enumerator = CycleEnumerator(series, SimulationOptions(simulation_years_length=30))
        >>> len(enumerator)
        118
        >>> stats = enumerator.crunch_all_portfolio_stats()
        >>> print(f"Success rate: {stats.success_rate:.1%}")
    """

    def __init__(self, series: MarketSeries, options: SimulationOptions):
        """Initialize the enumerator.

        Args:
            series: Market series, year-ascending and gap-free
            options: Simulation options

        Raises:
            InvalidAllocation: If equities_ratio is outside [0, 1]
            InsufficientData: If no cycle of the configured length fits
        """
        check_allocation(options.equities_ratio)
        max_length = get_max_simulation_length(series)
        if options.simulation_years_length > max_length:
            raise InsufficientData(
                f"simulation_years_length {options.simulation_years_length} exceeds "
                f"the maximum of {max_length} for a {len(series)}-year series"
            )
        self.series = series
        self.options = options

    def __len__(self) -> int:
        return self.get_max_simulation_cycles()

    def __iter__(self) -> Iterator[Cycle]:
        for start_idx in range(self.get_max_simulation_cycles()):
            yield crunch_single_cycle(self.series, start_idx, self.options)

    @property
    def start_years(self) -> List[int]:
        return [self.series[i].year for i in range(self.get_max_simulation_cycles())]

    def get_max_simulation_cycles(self) -> int:
        return get_max_simulation_cycles(self.series, self.options.simulation_years_length)

    def get_year_index(self, year: int) -> int:
        return get_year_index(self.series, year)

    def crunch_all_cycles_data(self) -> List[Cycle]:
        """Compute every admissible cycle eagerly."""
        cycles = list(self)
        logger.info(
            f"Computed {len(cycles)} historical cycles of "
            f"{self.options.simulation_years_length} years"
        )
        return cycles

    def crunch_all_portfolio_stats(self, cycles: Optional[Sequence[Cycle]] = None) -> PortfolioStats:
        """Summarize the given cycles, computing every cycle when none are given.

        Returns:
            PortfolioStats over the cycles
        """
        if cycles is None:
            cycles = self.crunch_all_cycles_data()
        return summarize_portfolio(cycles)


def enumerate_cycles(series: MarketSeries, options: SimulationOptions) -> CycleEnumerator:
    """Return the lazy sequence of every admissible cycle in the series."""
    return CycleEnumerator(series, options)
