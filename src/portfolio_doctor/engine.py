# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Year engine: evolves a portfolio through one simulated year.

Year k of a cycle (1-based) reads the observation for its own calendar year
and the one that follows it. Equities growth is the price change between
the two; dividend yield and the fixed-income rate come from the current
year's observation. A cycle of length L therefore spans L + 1 observations.
"""

from typing import Optional, Tuple

from .errors import InsufficientData, InvalidAllocation
from .market import MarketYear
from .options import (
    ClampedPercentWithdrawal,
    InflationAdjustedWithdrawal,
    NominalWithdrawal,
    PercentPortfolioWithdrawal,
    SimulationOptions,
)
from .records import YearRecord


def check_allocation(equities_ratio: float):
    """Raise InvalidAllocation unless 0 <= equities_ratio <= 1."""
    if not 0 <= equities_ratio <= 1:
        raise InvalidAllocation(f"equities_ratio must be within [0, 1]: {equities_ratio}")


def compute_withdrawal(options: SimulationOptions,
                       cycle_year: int,
                       balance_start: float,
                       cumulative_inflation: float) -> Tuple[float, float]:
    """Determine the year's withdrawal.

    Args:
        options: Simulation options holding the withdrawal variant
        cycle_year: 1-based position within the cycle
        balance_start: Nominal balance at the start of the year
        cumulative_inflation: Inflation since the start of the cycle

    Returns:
        Tuple of (nominal withdrawal, inflation-adjusted withdrawal)
    """
    spec = options.withdrawal
    if cycle_year < spec.start_year_idx:
        return 0.0, 0.0

    if isinstance(spec, NominalWithdrawal):
        amount = spec.static_amount
    elif isinstance(spec, InflationAdjustedWithdrawal):
        return spec.static_amount * cumulative_inflation, spec.static_amount
    elif isinstance(spec, PercentPortfolioWithdrawal):
        amount = spec.percentage * balance_start
    elif isinstance(spec, ClampedPercentWithdrawal):
        amount = min(max(spec.percentage * balance_start, spec.floor), spec.ceiling)
    else:
        raise TypeError(f"Unsupported withdrawal spec: {type(spec).__name__}")

    return amount, amount / cumulative_inflation


def compute_deposit(options: SimulationOptions,
                    cycle_year: int,
                    cumulative_inflation: float) -> Tuple[float, float]:
    """Sum the deposit windows that contain this cycle year.

    Deposit amounts are in start-of-cycle dollars and grow with inflation.

    Returns:
        Tuple of (nominal deposit, inflation-adjusted deposit)
    """
    amount = sum(d.amount for d in options.deposits if d.applies_to(cycle_year))
    return amount * cumulative_inflation, amount


def advance_year(prior: Optional[YearRecord],
                 market: Optional[MarketYear],
                 next_market: Optional[MarketYear],
                 cycle_year: int,
                 options: SimulationOptions,
                 cycle_start: MarketYear) -> YearRecord:
    """Produce the record for one cycle year.

    Args:
        prior: Record of the previous cycle year, or None for the first year
        market: Observation for this calendar year
        next_market: Observation for the following calendar year
        cycle_year: 1-based position within the cycle
        options: Simulation options
        cycle_start: First observation of the cycle window; its year and
                     inflation index anchor the cycle

    Returns:
        The year's YearRecord

    Raises:
        InvalidAllocation: If equities_ratio is outside [0, 1]
        InsufficientData: If either observation is missing
    """
    check_allocation(options.equities_ratio)
    if market is None or next_market is None:
        raise InsufficientData(
            f"Cycle year {cycle_year} from {cycle_start.year} needs two consecutive observations"
        )

    balance_start = options.start_balance if prior is None else prior.balance_end
    cumulative_inflation = market.inflation_index / cycle_start.inflation_index

    withdrawal, withdrawal_inf_adjust = compute_withdrawal(
        options, cycle_year, balance_start, cumulative_inflation
    )
    deposit, deposit_inf_adjust = compute_deposit(options, cycle_year, cumulative_inflation)
    start_subtotal = balance_start - withdrawal + deposit

    equities = start_subtotal * options.equities_ratio
    bonds = start_subtotal * (1 - options.equities_ratio)
    equities_growth = equities * (next_market.equities_price / market.equities_price - 1)
    dividends_growth = equities * market.equities_dividend / market.equities_price
    # Rate is quoted in percentage points
    bonds_growth = bonds * market.fixed_income_interest / 100

    end_subtotal = equities + equities_growth + dividends_growth + bonds + bonds_growth
    fees = end_subtotal * options.investment_expense_ratio
    balance_end = end_subtotal - fees

    return YearRecord(
        cycle_year=cycle_year,
        cycle_start_year=cycle_start.year,
        cumulative_inflation=cumulative_inflation,
        balance_start=balance_start,
        balance_inf_adj_start=balance_start / cumulative_inflation,
        withdrawal=withdrawal,
        withdrawal_inf_adjust=withdrawal_inf_adjust,
        deposit=deposit,
        deposit_inf_adjust=deposit_inf_adjust,
        start_subtotal=start_subtotal,
        equities=equities,
        equities_growth=equities_growth,
        dividends_growth=dividends_growth,
        bonds=bonds,
        bonds_growth=bonds_growth,
        end_subtotal=end_subtotal,
        fees=fees,
        balance_end=balance_end,
        balance_inf_adj_end=balance_end / cumulative_inflation,
    )
