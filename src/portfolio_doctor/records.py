# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Per-year simulation output.

A YearRecord holds the complete state of one simulated year. A Cycle is the
ordered tuple of records for one simulated retirement period.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class YearRecord:
    """State of one simulated year within a cycle.

    Fields suffixed inf_adj/inf_adjust are nominal values divided by
    cumulative_inflation, i.e. expressed in start-of-cycle purchasing power.
    """
    cycle_year: int
    cycle_start_year: int
    cumulative_inflation: float
    balance_start: float
    balance_inf_adj_start: float
    withdrawal: float
    withdrawal_inf_adjust: float
    deposit: float
    deposit_inf_adjust: float
    start_subtotal: float
    equities: float
    equities_growth: float
    dividends_growth: float
    bonds: float
    bonds_growth: float
    end_subtotal: float
    fees: float
    balance_end: float
    balance_inf_adj_end: float

    @property
    def year(self) -> int:
        """Calendar year this record covers."""
        return self.cycle_start_year + self.cycle_year - 1

    def as_row(self) -> Dict[str, float]:
        return {
            'cycle_year': self.cycle_year,
            'cycle_start_year': self.cycle_start_year,
            'cumulative_inflation': self.cumulative_inflation,
            'balance_start': self.balance_start,
            'balance_inf_adj_start': self.balance_inf_adj_start,
            'withdrawal': self.withdrawal,
            'withdrawal_inf_adjust': self.withdrawal_inf_adjust,
            'deposit': self.deposit,
            'deposit_inf_adjust': self.deposit_inf_adjust,
            'start_subtotal': self.start_subtotal,
            'equities': self.equities,
            'equities_growth': self.equities_growth,
            'dividends_growth': self.dividends_growth,
            'bonds': self.bonds,
            'bonds_growth': self.bonds_growth,
            'end_subtotal': self.end_subtotal,
            'fees': self.fees,
            'balance_end': self.balance_end,
            'balance_inf_adj_end': self.balance_inf_adj_end,
        }

    @classmethod
    def from_row(cls, row) -> 'YearRecord':
        """Build a record from any mapping keyed by YEAR_RECORD_COLUMNS."""
        return cls(
            cycle_year=int(row['cycle_year']),
            cycle_start_year=int(row['cycle_start_year']),
            cumulative_inflation=float(row['cumulative_inflation']),
            balance_start=float(row['balance_start']),
            balance_inf_adj_start=float(row['balance_inf_adj_start']),
            withdrawal=float(row['withdrawal']),
            withdrawal_inf_adjust=float(row['withdrawal_inf_adjust']),
            deposit=float(row['deposit']),
            deposit_inf_adjust=float(row['deposit_inf_adjust']),
            start_subtotal=float(row['start_subtotal']),
            equities=float(row['equities']),
            equities_growth=float(row['equities_growth']),
            dividends_growth=float(row['dividends_growth']),
            bonds=float(row['bonds']),
            bonds_growth=float(row['bonds_growth']),
            end_subtotal=float(row['end_subtotal']),
            fees=float(row['fees']),
            balance_end=float(row['balance_end']),
            balance_inf_adj_end=float(row['balance_inf_adj_end']),
        )


YEAR_RECORD_COLUMNS = (
    'cycle_year',
    'cycle_start_year',
    'cumulative_inflation',
    'balance_start',
    'balance_inf_adj_start',
    'withdrawal',
    'withdrawal_inf_adjust',
    'deposit',
    'deposit_inf_adjust',
    'start_subtotal',
    'equities',
    'equities_growth',
    'dividends_growth',
    'bonds',
    'bonds_growth',
    'end_subtotal',
    'fees',
    'balance_end',
    'balance_inf_adj_end',
)

Cycle = Tuple[YearRecord, ...]
