# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Historical market observations consumed by the simulation engine.

A market series is an ordered, gap-free sequence of MarketYear records,
one per calendar year, ascending by year. The engine indexes it by
position, so position order must equal chronological order.
"""

from dataclasses import dataclass, asdict
from typing import List, Sequence
import pandas as pd

from .errors import YearNotFound


@dataclass(frozen=True)
class MarketYear:
    """One annual market observation.

    Attributes:
        year: Calendar year of the observation
        equities_price: Equities price level (e.g., S&P composite)
        equities_dividend: Annual dividend per unit of price level
        inflation_index: Consumer price index level
        fixed_income_interest: Fixed-income rate in percentage points
                               (e.g., 2.58 for 2.58%)
    """
    year: int
    equities_price: float
    equities_dividend: float
    inflation_index: float
    fixed_income_interest: float


MarketSeries = Sequence[MarketYear]

MARKET_COLUMNS = (
    'year',
    'equities_price',
    'equities_dividend',
    'inflation_index',
    'fixed_income_interest',
)


def get_year_index(series: MarketSeries, year: int) -> int:
    """Return the position of a calendar year in the series.

    Args:
        series: Market series to search
        year: Calendar year to find

    Returns:
        Zero-based position of the year

    Raises:
        YearNotFound: If the year is not in the series
    """
    for idx, market_year in enumerate(series):
        if market_year.year == year:
            return idx
    raise YearNotFound(f"Year {year} not found in market series")


def slice_market_years(series: MarketSeries, first_year: int, last_year: int) -> List[MarketYear]:
    """Return the observations from first_year through last_year inclusive.

    Raises:
        YearNotFound: If either bound is not in the series
    """
    start = get_year_index(series, first_year)
    end = get_year_index(series, last_year)
    return list(series[start:end + 1])


def market_series_from_frame(df: pd.DataFrame) -> List[MarketYear]:
    """Build a market series from a DataFrame with one row per year.

    The frame must carry the MARKET_COLUMNS; rows are sorted by year.

    Raises:
        ValueError: If a required column is missing
    """
    missing = [col for col in MARKET_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Missing market columns: {missing}")

    ordered = df.sort_values('year')
    return [
        MarketYear(
            year=int(row.year),
            equities_price=float(row.equities_price),
            equities_dividend=float(row.equities_dividend),
            inflation_index=float(row.inflation_index),
            fixed_income_interest=float(row.fixed_income_interest),
        )
        for row in ordered.itertuples(index=False)
    ]


def market_series_to_frame(series: MarketSeries) -> pd.DataFrame:
    """Convert a market series into a DataFrame with one row per year."""
    return pd.DataFrame([asdict(m) for m in series], columns=list(MARKET_COLUMNS))
