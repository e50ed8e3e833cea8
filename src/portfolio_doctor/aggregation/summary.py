# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Cycle-level and portfolio-level statistics.

Statistics are plain frozen value objects computed from pivoted cycle
frames. They hold no references back into the cycles that produced them.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple
import numpy as np
import pandas as pd

from ..errors import EmptyCycleSet
from ..records import Cycle
from .columns import pivot_cycles


@dataclass(frozen=True)
class BalanceEvent:
    """A year-end balance within a cycle, located by calendar year."""
    year: int
    balance: float
    balance_inf_adj: float


@dataclass(frozen=True)
class WithdrawalEvent:
    """A single year's withdrawal.

    Attributes:
        cycle_start_year: Calendar year the cycle began
        year_in_cycle: Calendar year of the withdrawal
        cycle_year: 1-based position of the withdrawal within its cycle
        amount: Nominal withdrawal
        amount_inf_adj: Withdrawal in start-of-cycle purchasing power
    """
    cycle_start_year: int
    year_in_cycle: int
    cycle_year: int
    amount: float
    amount_inf_adj: float


@dataclass(frozen=True)
class CycleOutcome:
    """Ending balance of one cycle, identified by its start year."""
    year: int
    ending: float
    ending_inf_adj: float


@dataclass(frozen=True)
class CycleBalanceStats:
    ending: float
    ending_inf_adj: float
    average_inf_adj: float
    max: BalanceEvent
    min: BalanceEvent


@dataclass(frozen=True)
class CycleWithdrawalStats:
    median: float
    average: float
    max: WithdrawalEvent
    min: WithdrawalEvent


@dataclass(frozen=True)
class CycleStats:
    """Summary of one cycle.

    Attributes:
        cycle_start_year: Calendar year the cycle began
        fees: Total investment expenses over the cycle
        balance: Ending, average and extreme balances
        withdrawals: Median, average and extreme withdrawals
        failure_year: First cycle year whose ending balance is <= 0, or 0
    """
    cycle_start_year: int
    fees: float
    balance: CycleBalanceStats
    withdrawals: CycleWithdrawalStats
    failure_year: int

    @property
    def succeeded(self) -> bool:
        return self.failure_year == 0


@dataclass(frozen=True)
class ExpenseStats:
    average_annual: float
    median_total: float


@dataclass(frozen=True)
class PriceChangeStats:
    average_annual: float


@dataclass(frozen=True)
class PortfolioBalanceStats:
    average_inf_adj: float
    max: CycleOutcome
    min: CycleOutcome


@dataclass(frozen=True)
class PortfolioWithdrawalStats:
    average: float
    max: WithdrawalEvent
    min: WithdrawalEvent


@dataclass(frozen=True)
class PortfolioStats:
    """Summary across all cycles of a simulation.

    Attributes:
        success_rate: Fraction of cycles that never failed (0.0 to 1.0)
        investment_expenses: Mean annual fee and median per-cycle fee total
        equities_price_change: Mean annual equities price growth
        balance: Mean and extreme inflation-adjusted ending balances of the cycles
        withdrawals: Mean withdrawal and extreme single withdrawals
        cycle_stats: Per-cycle statistics, in cycle order
    """
    success_rate: float
    investment_expenses: ExpenseStats
    equities_price_change: PriceChangeStats
    balance: PortfolioBalanceStats
    withdrawals: PortfolioWithdrawalStats
    cycle_stats: Tuple[CycleStats, ...]


def _withdrawal_event(frame: pd.DataFrame, idx: int) -> WithdrawalEvent:
    row = frame.iloc[idx]
    cycle_start_year = int(row['cycle_start_year'])
    cycle_year = int(row['cycle_year'])
    return WithdrawalEvent(
        cycle_start_year=cycle_start_year,
        year_in_cycle=cycle_start_year + cycle_year - 1,
        cycle_year=cycle_year,
        amount=float(row['withdrawal']),
        amount_inf_adj=float(row['withdrawal_inf_adjust']),
    )


def _balance_event(frame: pd.DataFrame, idx: int) -> BalanceEvent:
    row = frame.iloc[idx]
    return BalanceEvent(
        year=int(row['cycle_start_year']) + int(row['cycle_year']) - 1,
        balance=float(row['balance_end']),
        balance_inf_adj=float(row['balance_inf_adj_end']),
    )


def _summarize_frame(frame: pd.DataFrame) -> CycleStats:
    if frame.empty:
        raise EmptyCycleSet("Cannot summarize a cycle with no years")

    balances_inf_adj = frame['balance_inf_adj_end'].to_numpy()
    withdrawals = frame['withdrawal'].to_numpy()
    failed = np.flatnonzero(frame['balance_end'].to_numpy() <= 0)
    last = frame.iloc[-1]

    return CycleStats(
        cycle_start_year=int(frame['cycle_start_year'].iloc[0]),
        fees=float(frame['fees'].sum()),
        balance=CycleBalanceStats(
            ending=float(last['balance_end']),
            ending_inf_adj=float(last['balance_inf_adj_end']),
            average_inf_adj=float(balances_inf_adj.mean()),
            max=_balance_event(frame, int(np.argmax(balances_inf_adj))),
            min=_balance_event(frame, int(np.argmin(balances_inf_adj))),
        ),
        withdrawals=CycleWithdrawalStats(
            median=float(np.median(withdrawals)),
            average=float(withdrawals.mean()),
            max=_withdrawal_event(frame, int(np.argmax(withdrawals))),
            min=_withdrawal_event(frame, int(np.argmin(withdrawals))),
        ),
        failure_year=int(frame['cycle_year'].iloc[failed[0]]) if failed.size else 0,
    )


def summarize_cycle(cycle: Cycle) -> CycleStats:
    """Compute statistics for one cycle.

    Raises:
        EmptyCycleSet: If the cycle has no years
    """
    return _summarize_frame(pivot_cycles([cycle])[0])


def summarize_portfolio(cycles: Sequence[Cycle]) -> PortfolioStats:
    """Compute statistics across cycles.

    Mean and extreme values of per-year fields are taken over the
    concatenation of every cycle's years, so a single withdrawal anywhere
    can be reported as the extreme.

    Args:
        cycles: Completed cycles, historical or Monte Carlo

    Returns:
        PortfolioStats with per-cycle CycleStats in input order

    Raises:
        EmptyCycleSet: If no cycles are given
    """
    frames = pivot_cycles(list(cycles))
    if not frames:
        raise EmptyCycleSet("Cannot summarize an empty set of cycles")

    cycle_stats = tuple(_summarize_frame(frame) for frame in frames)
    aggregate = pd.concat(frames, ignore_index=True)

    outcomes = [
        CycleOutcome(s.cycle_start_year, s.balance.ending, s.balance.ending_inf_adj)
        for s in cycle_stats
    ]
    endings_inf_adj = np.array([o.ending_inf_adj for o in outcomes])
    withdrawals = aggregate['withdrawal'].to_numpy()

    return PortfolioStats(
        success_rate=sum(s.succeeded for s in cycle_stats) / len(cycle_stats),
        investment_expenses=ExpenseStats(
            average_annual=float(aggregate['fees'].mean()),
            median_total=float(np.median([s.fees for s in cycle_stats])),
        ),
        equities_price_change=PriceChangeStats(
            average_annual=float(aggregate['equities_growth'].mean()),
        ),
        balance=PortfolioBalanceStats(
            average_inf_adj=float(endings_inf_adj.mean()),
            max=outcomes[int(np.argmax(endings_inf_adj))],
            min=outcomes[int(np.argmin(endings_inf_adj))],
        ),
        withdrawals=PortfolioWithdrawalStats(
            average=float(withdrawals.mean()),
            max=_withdrawal_event(aggregate, int(np.argmax(withdrawals))),
            min=_withdrawal_event(aggregate, int(np.argmin(withdrawals))),
        ),
        cycle_stats=cycle_stats,
    )
