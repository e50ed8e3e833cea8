# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Simulation options.

The withdrawal policy is a tagged union: each withdrawal method has its own
dataclass carrying exactly the fields that method needs. SimulationOptions
derives its withdrawal_method from whichever variant it holds.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import ClassVar, Sequence, Union


class WithdrawalMethod(IntEnum):
    NOMINAL = 0
    INFLATION_ADJUSTED = 1
    PERCENT_PORTFOLIO = 2
    PERCENT_PORTFOLIO_CLAMPED = 3


class SimulationMethod(str, Enum):
    HISTORICAL = 'Historical Data'
    MONTE_CARLO = 'Monte Carlo'


def _check_start_year_idx(start_year_idx: int):
    if start_year_idx < 1:
        raise ValueError(f"start_year_idx must be at least 1: {start_year_idx}")


@dataclass(frozen=True)
class NominalWithdrawal:
    """Fixed dollar withdrawal each year.

    Attributes:
        static_amount: Nominal amount withdrawn every year
        start_year_idx: 1-based cycle year of the first withdrawal
    """
    static_amount: float
    start_year_idx: int = 1

    method: ClassVar[WithdrawalMethod] = WithdrawalMethod.NOMINAL

    def __post_init__(self):
        if self.static_amount < 0:
            raise ValueError(f"static_amount cannot be negative: {self.static_amount}")
        _check_start_year_idx(self.start_year_idx)


@dataclass(frozen=True)
class InflationAdjustedWithdrawal:
    """Withdrawal fixed in start-of-cycle purchasing power.

    Attributes:
        static_amount: Real amount withdrawn every year
        start_year_idx: 1-based cycle year of the first withdrawal
    """
    static_amount: float
    start_year_idx: int = 1

    method: ClassVar[WithdrawalMethod] = WithdrawalMethod.INFLATION_ADJUSTED

    def __post_init__(self):
        if self.static_amount < 0:
            raise ValueError(f"static_amount cannot be negative: {self.static_amount}")
        _check_start_year_idx(self.start_year_idx)


@dataclass(frozen=True)
class PercentPortfolioWithdrawal:
    """Withdrawal of a fixed fraction of the start-of-year balance.

    Attributes:
        percentage: Fraction of balance withdrawn (e.g., 0.04 for 4%)
        start_year_idx: 1-based cycle year of the first withdrawal
    """
    percentage: float
    start_year_idx: int = 1

    method: ClassVar[WithdrawalMethod] = WithdrawalMethod.PERCENT_PORTFOLIO

    def __post_init__(self):
        if self.percentage < 0:
            raise ValueError(f"percentage cannot be negative: {self.percentage}")
        _check_start_year_idx(self.start_year_idx)


@dataclass(frozen=True)
class ClampedPercentWithdrawal:
    """Fraction of the start-of-year balance, bounded by nominal floor and ceiling.

    Attributes:
        percentage: Fraction of balance withdrawn (e.g., 0.04 for 4%)
        floor: Minimum nominal withdrawal
        ceiling: Maximum nominal withdrawal
        start_year_idx: 1-based cycle year of the first withdrawal
    """
    percentage: float
    floor: float
    ceiling: float
    start_year_idx: int = 1

    method: ClassVar[WithdrawalMethod] = WithdrawalMethod.PERCENT_PORTFOLIO_CLAMPED

    def __post_init__(self):
        if self.percentage < 0:
            raise ValueError(f"percentage cannot be negative: {self.percentage}")
        if self.floor > self.ceiling:
            raise ValueError(f"floor {self.floor} exceeds ceiling {self.ceiling}")
        _check_start_year_idx(self.start_year_idx)


WithdrawalSpec = Union[
    NominalWithdrawal,
    InflationAdjustedWithdrawal,
    PercentPortfolioWithdrawal,
    ClampedPercentWithdrawal,
]


@dataclass(frozen=True)
class DepositSpec:
    """Recurring contribution over an inclusive, 1-based window of cycle years.

    The amount is in start-of-cycle dollars; each year's nominal deposit is
    the amount times cumulative inflation.
    """
    start_year_idx: int
    end_year_idx: int
    amount: float

    def __post_init__(self):
        _check_start_year_idx(self.start_year_idx)
        if self.end_year_idx < self.start_year_idx:
            raise ValueError(
                f"end_year_idx {self.end_year_idx} precedes start_year_idx {self.start_year_idx}"
            )

    def applies_to(self, cycle_year: int) -> bool:
        return self.start_year_idx <= cycle_year <= self.end_year_idx


@dataclass(frozen=True)
class SimulationOptions:
    """Options for one simulation request.

    Attributes:
        start_balance: Portfolio balance at the start of every cycle
        equities_ratio: Fraction held in equities, the rest in fixed income.
                        Range-checked by the year engine.
        investment_expense_ratio: Annual fee charged on the end-of-year subtotal
        simulation_years_length: Number of years in each cycle
        withdrawal: Withdrawal policy variant
        deposits: Deposit windows, applied in order
        simulation_method: Historical cycles or Monte Carlo runs

    Example:
        >>> options = SimulationOptions(
        ...     equities_ratio=0.75,
        ...     simulation_years_length=30,
        ...     withdrawal=ClampedPercentWithdrawal(0.04, floor=30000, ceiling=60000),
        ... )
        >>> options.withdrawal_method
        <WithdrawalMethod.PERCENT_PORTFOLIO_CLAMPED: 3>
    """
    start_balance: float = 1_000_000
    equities_ratio: float = 0.9
    investment_expense_ratio: float = 0.0025
    simulation_years_length: int = 60
    withdrawal: WithdrawalSpec = field(default_factory=lambda: InflationAdjustedWithdrawal(40_000))
    deposits: Sequence[DepositSpec] = ()
    simulation_method: SimulationMethod = SimulationMethod.HISTORICAL

    def __post_init__(self):
        if self.start_balance <= 0:
            raise ValueError(f"start_balance must be positive: {self.start_balance}")
        if self.simulation_years_length < 1:
            raise ValueError(
                f"simulation_years_length must be at least 1: {self.simulation_years_length}"
            )
        if self.investment_expense_ratio < 0:
            raise ValueError(
                f"investment_expense_ratio cannot be negative: {self.investment_expense_ratio}"
            )
        object.__setattr__(self, 'deposits', tuple(self.deposits))
        object.__setattr__(self, 'simulation_method', SimulationMethod(self.simulation_method))

    @property
    def withdrawal_method(self) -> WithdrawalMethod:
        return self.withdrawal.method

