# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Statistical basis for Monte Carlo sampling.

The annual total market change between consecutive observations is the
price change plus the dividend paid, relative to the starting price:
(P[i+1] - P[i] + D[i]) / P[i].
"""

from dataclasses import dataclass
import pandas as pd

from ..errors import InsufficientData
from ..market import MarketSeries


@dataclass(frozen=True)
class MarketStatistics:
    """Mean and standard deviation of the annual total market change.

    Attributes:
        mean_annual_market_change: Mean annual change as decimal (e.g., 0.06)
        std_dev_annual_market_change: Sample standard deviation as decimal
    """
    mean_annual_market_change: float
    std_dev_annual_market_change: float

    def __post_init__(self):
        if self.std_dev_annual_market_change < 0:
            raise ValueError(
                f"Standard deviation cannot be negative: {self.std_dev_annual_market_change}"
            )


def annual_market_changes(series: MarketSeries) -> pd.Series:
    """Total market change for every consecutive pair, indexed by the earlier year.

    Every pair contributes one entry, so a repeated year keeps both changes.
    """
    pairs = list(zip(series[:-1], series[1:]))
    changes = [
        (following.equities_price - current.equities_price
         + current.equities_dividend) / current.equities_price
        for current, following in pairs
    ]
    return pd.Series(
        changes,
        index=[current.year for current, _ in pairs],
        dtype=float,
        name='annual_market_change',
    )


def compute_market_statistics(series: MarketSeries) -> MarketStatistics:
    """Compute the mean and sample standard deviation of annual market change.

    Args:
        series: Market series, year-ascending

    Returns:
        MarketStatistics over the whole series

    Raises:
        InsufficientData: If the series has fewer than three observations
    """
    if len(series) < 3:
        raise InsufficientData(
            f"Market statistics need at least 3 observations, series has {len(series)}"
        )
    changes = annual_market_changes(series)
    return MarketStatistics(
        mean_annual_market_change=float(changes.mean()),
        std_dev_annual_market_change=float(changes.std(ddof=1)),
    )
