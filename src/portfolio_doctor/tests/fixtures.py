# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Shared market data and cycle builders for tests.
"""

from ..market import MarketYear
from ..options import InflationAdjustedWithdrawal, NominalWithdrawal, SimulationOptions
from ..records import YearRecord

# January observations (price, dividend, CPI, long rate)
MARKET_2013_2018 = [
    MarketYear(2013, 1480.4, 31.53666667, 230.28, 1.91),
    MarketYear(2014, 1822.36, 35.40333333, 233.916, 2.86),
    MarketYear(2015, 2028.18, 39.89666667, 233.707, 1.88),
    MarketYear(2016, 1918.6, 43.55333333, 236.916, 2.09),
    MarketYear(2017, 2275.12, 45.92666667, 242.839, 2.43),
    MarketYear(2018, 2789.8, 49.28666667, 247.867, 2.58),
]

MARKET_2015_2018 = MARKET_2013_2018[2:]

STARTER_OPTIONS = SimulationOptions(
    start_balance=1_000_000,
    equities_ratio=0.9,
    investment_expense_ratio=0.0025,
    simulation_years_length=60,
    withdrawal=NominalWithdrawal(40_000),
)

# Three-year inflation-adjusted cycles of the starter portfolio
INF_ADJ_OPTIONS = SimulationOptions(
    start_balance=1_000_000,
    equities_ratio=0.9,
    investment_expense_ratio=0.0025,
    simulation_years_length=3,
    withdrawal=InflationAdjustedWithdrawal(40_000),
)

# Inflation-adjusted year-end balances of the 2013, 2014 and 2015 cycles
REFERENCE_BALANCES_INF_ADJ = {
    2013: [1176866.4431, 1251892.3469, 1174839.3694],
    2014: [1074419.3335, 1002797.5745, 1126515.6058],
    2015: [929789.5611, 1041044.2539, 1191404.6718],
}


def flat_series(first_year, num_years, price=100.0, dividend=0.0,
                inflation_index=100.0, fixed_income_interest=0.0):
    """Series with constant observations."""
    return [
        MarketYear(year, price, dividend, inflation_index, fixed_income_interest)
        for year in range(first_year, first_year + num_years)
    ]


def growth_series(first_year, prices, dividend=0.0, inflation=None, rate=0.0):
    """Series with the given prices and optional inflation indices."""
    inflation = inflation or [100.0] * len(prices)
    return [
        MarketYear(first_year + i, price, dividend, inflation[i], rate)
        for i, price in enumerate(prices)
    ]


def make_record(cycle_start_year, cycle_year, balance_inf_adj_end,
                withdrawal=40_000.0, withdrawal_inf_adjust=40_000.0,
                balance_end=None, fees=0.0, equities_growth=0.0,
                cumulative_inflation=1.0):
    """YearRecord with only the fields statistics read set meaningfully."""
    if balance_end is None:
        balance_end = balance_inf_adj_end * cumulative_inflation
    return YearRecord(
        cycle_year=cycle_year,
        cycle_start_year=cycle_start_year,
        cumulative_inflation=cumulative_inflation,
        balance_start=0.0,
        balance_inf_adj_start=0.0,
        withdrawal=withdrawal,
        withdrawal_inf_adjust=withdrawal_inf_adjust,
        deposit=0.0,
        deposit_inf_adjust=0.0,
        start_subtotal=0.0,
        equities=0.0,
        equities_growth=equities_growth,
        dividends_growth=0.0,
        bonds=0.0,
        bonds_growth=0.0,
        end_subtotal=0.0,
        fees=fees,
        balance_end=balance_end,
        balance_inf_adj_end=balance_inf_adj_end,
    )


def reference_cycles():
    """Cycles carrying the reference inflation-adjusted balances."""
    return [
        tuple(
            make_record(start_year, idx + 1, balance)
            for idx, balance in enumerate(balances)
        )
        for start_year, balances in REFERENCE_BALANCES_INF_ADJ.items()
    ]
