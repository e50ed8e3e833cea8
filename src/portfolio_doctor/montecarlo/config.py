# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Configuration for Monte Carlo simulations."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RunMode(str, Enum):
    """What one Monte Carlo run synthesizes.

    CYCLE: one cycle-length window, anchored cyclically on the historical
           windows; each run yields a single cycle.
    SERIES: the whole market series; each run yields every admissible cycle
            over its synthetic series, so cycles of one run share years.
    """
    CYCLE = 'cycle'
    SERIES = 'series'


@dataclass
class MonteCarloConfig:
    """Configuration for Monte Carlo simulation parameters.

    Attributes:
        run_count: Number of runs. Default 500.
        random_seed: Optional seed for the default random source. Default None.
        run_mode: Whether a run synthesizes one cycle or the whole series.
                  Default RunMode.CYCLE.

    Example:
        >>> config = MonteCarloConfig(run_count=3, run_mode='series')
        >>> config.run_mode
        <RunMode.SERIES: 'series'>
    """
    run_count: int = 500
    random_seed: Optional[int] = None
    run_mode: RunMode = RunMode.CYCLE

    def __post_init__(self):
        if self.run_count < 1:
            raise ValueError(f"run_count must be at least 1: {self.run_count}")
        if self.random_seed is not None and self.random_seed < 0:
            raise ValueError(f"random_seed must be non-negative: {self.random_seed}")
        # Accept the plain string value
        self.run_mode = RunMode(self.run_mode)
