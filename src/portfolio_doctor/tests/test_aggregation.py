# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Tests for cycle and portfolio statistics.
"""

import unittest
from dataclasses import replace

from ..aggregation.columns import pivot_cycle, pivot_cycles, pivot_cycles_aggregate, unpivot_cycle
from ..aggregation.quantiles import (
    compute_quantile_level_stats,
    compute_quantile_stats,
    compute_quantiles,
    quantile_frame,
)
from ..aggregation.summary import summarize_cycle, summarize_portfolio
from ..cycles import CycleEnumerator, crunch_single_cycle
from ..errors import EmptyCycleSet
from ..options import NominalWithdrawal
from ..records import YEAR_RECORD_COLUMNS
from .fixtures import (
    INF_ADJ_OPTIONS,
    MARKET_2013_2018,
    MARKET_2015_2018,
    REFERENCE_BALANCES_INF_ADJ,
    flat_series,
    growth_series,
    make_record,
    reference_cycles,
)


def reference_2015_cycle():
    return CycleEnumerator(MARKET_2015_2018, INF_ADJ_OPTIONS).crunch_all_cycles_data()[0]


class TestColumns(unittest.TestCase):
    """Tests for pivoting cycles into columns."""

    def test_pivot_columns(self):
        """Test one column per field, one row per year."""
        frame = pivot_cycle(reference_2015_cycle())
        self.assertEqual(list(frame.columns), list(YEAR_RECORD_COLUMNS))
        self.assertEqual(len(frame), 3)
        self.assertEqual(frame['cycle_year'].tolist(), [1, 2, 3])

    def test_unpivot_is_lossless(self):
        """Test pivoting then unpivoting reproduces every record exactly."""
        cycle = reference_2015_cycle()
        self.assertEqual(unpivot_cycle(pivot_cycle(cycle)), cycle)

    def test_unpivot_missing_column(self):
        """Test a frame missing a field raises ValueError."""
        frame = pivot_cycle(reference_2015_cycle()).drop(columns=['fees'])
        with self.assertRaises(ValueError):
            unpivot_cycle(frame)

    def test_aggregate_order(self):
        """Test the aggregate frame lists cycle 0's years, then cycle 1's."""
        cycles = reference_cycles()
        aggregate = pivot_cycles_aggregate(cycles)

        self.assertEqual(len(aggregate), 9)
        self.assertEqual(aggregate['cycle_start_year'].tolist(), [2013] * 3 + [2014] * 3 + [2015] * 3)
        self.assertEqual(aggregate['cycle_year'].tolist(), [1, 2, 3] * 3)
        self.assertEqual(len(pivot_cycles(cycles)), 3)

    def test_empty_aggregate(self):
        """Test aggregating no cycles yields an empty frame with every column."""
        aggregate = pivot_cycles_aggregate([])
        self.assertTrue(aggregate.empty)
        self.assertEqual(list(aggregate.columns), list(YEAR_RECORD_COLUMNS))


class TestCycleStats(unittest.TestCase):
    """Tests for summarize_cycle."""

    def test_reference_cycle(self):
        """Test statistics of the 2015 inflation-adjusted cycle."""
        stats = summarize_cycle(reference_2015_cycle())

        self.assertEqual(stats.cycle_start_year, 2015)
        self.assertAlmostEqual(stats.fees, 8077.9112, delta=1e-4)
        self.assertAlmostEqual(stats.balance.ending, 1237958.2943, delta=1e-4)
        self.assertAlmostEqual(stats.balance.ending_inf_adj, 1191404.6718, delta=1e-4)
        self.assertAlmostEqual(stats.balance.average_inf_adj, 1054079.4956, delta=1e-3)
        self.assertEqual(stats.balance.max.year, 2017)
        self.assertEqual(stats.balance.min.year, 2015)
        self.assertAlmostEqual(stats.balance.min.balance_inf_adj, 929789.5611, delta=1e-4)
        self.assertAlmostEqual(stats.withdrawals.median, 40549.2347, delta=1e-4)
        self.assertAlmostEqual(stats.withdrawals.min.amount_inf_adj, 40000, places=6)
        self.assertEqual(stats.withdrawals.min.year_in_cycle, 2015)
        self.assertEqual(stats.withdrawals.max.year_in_cycle, 2017)
        self.assertEqual(stats.withdrawals.max.cycle_year, 3)
        self.assertAlmostEqual(stats.withdrawals.max.amount, 41562.9827, delta=1e-4)
        self.assertEqual(stats.failure_year, 0)
        self.assertTrue(stats.succeeded)

    def test_failure_year(self):
        """Test the first non-positive ending balance marks failure."""
        options = replace(
            INF_ADJ_OPTIONS,
            start_balance=100000,
            investment_expense_ratio=0.0,
            simulation_years_length=5,
            withdrawal=NominalWithdrawal(40000),
        )
        stats = summarize_cycle(crunch_single_cycle(flat_series(2000, 6), 0, options))

        self.assertEqual(stats.failure_year, 3)
        self.assertFalse(stats.succeeded)
        self.assertAlmostEqual(stats.balance.ending, -100000, places=6)

    def test_failure_on_exactly_zero(self):
        """Test a balance of exactly zero counts as failure."""
        cycle = (
            make_record(2000, 1, 40000.0),
            make_record(2000, 2, 0.0),
            make_record(2000, 3, -40000.0),
        )
        self.assertEqual(summarize_cycle(cycle).failure_year, 2)

    def test_ties_report_first_year(self):
        """Test extremes report the earliest of equal values."""
        cycle = tuple(make_record(1990, idx, 100.0) for idx in (1, 2, 3))
        stats = summarize_cycle(cycle)
        self.assertEqual(stats.balance.max.year, 1990)
        self.assertEqual(stats.balance.min.year, 1990)
        self.assertEqual(stats.withdrawals.max.year_in_cycle, 1990)

    def test_empty_cycle(self):
        """Test a cycle with no years raises EmptyCycleSet."""
        with self.assertRaises(EmptyCycleSet):
            summarize_cycle(())


class TestPortfolioStats(unittest.TestCase):
    """Tests for summarize_portfolio."""

    def test_reference_balances(self):
        """Test balance statistics over the reference three-cycle portfolio."""
        stats = summarize_portfolio(reference_cycles())

        self.assertEqual(stats.success_rate, 1)
        self.assertAlmostEqual(stats.balance.average_inf_adj, 1164253.2156, delta=1e-3)
        self.assertEqual(stats.balance.min.year, 2014)
        self.assertAlmostEqual(stats.balance.min.ending_inf_adj, 1126515.6058, delta=1e-4)
        self.assertEqual(stats.balance.max.year, 2015)
        self.assertAlmostEqual(stats.balance.max.ending_inf_adj, 1191404.6718, delta=1e-4)
        self.assertEqual([s.cycle_start_year for s in stats.cycle_stats], [2013, 2014, 2015])

    def test_first_reference_cycle(self):
        """Test the 2013 cycle reports its peak in 2014."""
        stats = summarize_portfolio(reference_cycles())
        first = stats.cycle_stats[0]
        self.assertEqual(first.balance.max.year, 2014)
        self.assertAlmostEqual(first.balance.average_inf_adj, 1201199.3865, delta=1e-3)

    def test_expenses_and_growth(self):
        """Test annual means use every year and medians use cycle totals."""
        fees = [[1.0, 2.0, 3.0], [10.0, 10.0, 10.0], [0.0, 0.0, 3.0]]
        growth = [[100.0, -50.0, 10.0], [0.0, 0.0, 0.0], [40.0, 40.0, 10.0]]
        cycles = [
            tuple(
                make_record(2000 + c, y + 1, 1000.0, fees=fees[c][y], equities_growth=growth[c][y])
                for y in range(3)
            )
            for c in range(3)
        ]
        stats = summarize_portfolio(cycles)

        self.assertAlmostEqual(stats.investment_expenses.average_annual, 39 / 9, places=9)
        self.assertAlmostEqual(stats.investment_expenses.median_total, 6.0, places=9)
        self.assertAlmostEqual(stats.equities_price_change.average_annual, 150 / 9, places=9)

    def test_withdrawal_extremes_anywhere(self):
        """Test a single withdrawal in any cycle can be the extreme."""
        cycles = reference_cycles()
        cycles[1] = cycles[1][:2] + (make_record(2014, 3, 1126515.6058, withdrawal=55000.0),)
        cycles[2] = (make_record(2015, 1, 929789.5611, withdrawal=1000.0),) + cycles[2][1:]
        stats = summarize_portfolio(cycles)

        self.assertEqual(stats.withdrawals.max.cycle_start_year, 2014)
        self.assertEqual(stats.withdrawals.max.year_in_cycle, 2016)
        self.assertEqual(stats.withdrawals.max.amount, 55000.0)
        self.assertEqual(stats.withdrawals.min.cycle_start_year, 2015)
        self.assertEqual(stats.withdrawals.min.year_in_cycle, 2015)
        self.assertAlmostEqual(stats.withdrawals.average, (40000 * 7 + 55000 + 1000) / 9, places=6)

    def test_success_rate(self):
        """Test the success rate counts cycles that never failed."""
        cycles = reference_cycles()
        cycles[0] = cycles[0][:2] + (make_record(2013, 3, -1.0),)
        stats = summarize_portfolio(cycles)
        self.assertAlmostEqual(stats.success_rate, 2 / 3, places=9)
        self.assertEqual(stats.cycle_stats[0].failure_year, 3)

    def test_empty_cycle_set(self):
        """Test summarizing no cycles raises EmptyCycleSet."""
        with self.assertRaises(EmptyCycleSet):
            summarize_portfolio([])


class TestQuantiles(unittest.TestCase):
    """Tests for quantile bands."""

    def setUp(self):
        self.bands = compute_quantiles(reference_cycles(), [0.25, 0.5, 0.75])

    def test_reference_bands(self):
        """Test bands over the reference portfolio."""
        expected = [
            [1002104.4473, 1021920.9142, 1150677.4876],
            [1074419.3335, 1041044.2539, 1174839.3694],
            [1125642.8883, 1146468.3004, 1183122.0206],
        ]
        self.assertEqual(len(self.bands), 3)
        for band, level, values in zip(self.bands, [0.25, 0.5, 0.75], expected):
            self.assertEqual([e.cycle_year_index for e in band], [0, 1, 2])
            for entry, value in zip(band, values):
                self.assertEqual(entry.quantile, level)
                self.assertAlmostEqual(entry.balance_inf_adj, value, delta=1e-3)
                self.assertEqual(entry.withdrawal_inf_adj, 40000)

    def test_linear_interpolation(self):
        """Test quantiles interpolate between order statistics."""
        cycles = [(make_record(2000 + i, 1, float(value)),) for i, value in enumerate([10, 40, 20, 30])]
        bands = compute_quantiles(cycles, [0.0, 0.1, 0.5, 1.0])
        values = [band[0].balance_inf_adj for band in bands]
        self.assertAlmostEqual(values[0], 10.0, places=9)
        self.assertAlmostEqual(values[1], 13.0, places=9)
        self.assertAlmostEqual(values[2], 25.0, places=9)
        self.assertAlmostEqual(values[3], 40.0, places=9)

    def test_monotonic_in_level(self):
        """Test higher levels never give lower values at the same index."""
        prices = [100.0 * (1.1 + 0.05 * (-1) ** i) * (1.02 ** i) for i in range(23)]
        cycles = CycleEnumerator(
            growth_series(1950, prices),
            replace(INF_ADJ_OPTIONS, simulation_years_length=6),
        ).crunch_all_cycles_data()
        bands = compute_quantiles(cycles, [0.25, 0.5, 0.75])
        for idx in range(6):
            values = [band[idx].balance_inf_adj for band in bands]
            self.assertEqual(values, sorted(values))

    def test_quantile_stats_per_index(self):
        """Test per-index summaries across levels."""
        stats = compute_quantile_stats(self.bands)

        self.assertEqual([s.cycle_year_index for s in stats], [0, 1, 2])
        self.assertAlmostEqual(stats[0].ending_balance_inf_adj, 1125642.8883, delta=1e-3)
        self.assertAlmostEqual(stats[0].average_balance_inf_adj, 1067388.8897, delta=1e-3)
        self.assertAlmostEqual(stats[2].ending_balance_inf_adj, 1183122.0206, delta=1e-3)
        self.assertEqual(stats[1].average_withdrawal_inf_adj, 40000)

    def test_quantile_stats_per_level(self):
        """Test per-level summaries across indices."""
        stats = compute_quantile_level_stats(self.bands)

        expected = [
            (0.25, 1150677.4876, 1058234.283),
            (0.5, 1174839.3694, 1096767.6523),
            (0.75, 1183122.0206, 1151744.4031),
        ]
        for entry, (level, ending, average) in zip(stats, expected):
            self.assertEqual(entry.quantile, level)
            self.assertAlmostEqual(entry.ending_balance_inf_adj, ending, delta=1e-3)
            self.assertAlmostEqual(entry.average_balance_inf_adj, average, delta=1e-3)
            self.assertEqual(entry.average_withdrawal_inf_adj, 40000)

    def test_quantile_frame(self):
        """Test bands as a DataFrame."""
        df = quantile_frame(self.bands)
        self.assertEqual(list(df.columns), [0.25, 0.5, 0.75])
        self.assertEqual(df.index.name, 'cycle_year_index')
        self.assertAlmostEqual(df.loc[2, 0.5], 1174839.3694, delta=1e-3)
        self.assertEqual(quantile_frame(self.bands, 'withdrawal_inf_adj').loc[0, 0.25], 40000)
        with self.assertRaises(ValueError):
            quantile_frame(self.bands, 'fees')

    def test_invalid_inputs(self):
        """Test invalid levels, mismatched lengths and empty input."""
        with self.assertRaises(ValueError):
            compute_quantiles(reference_cycles(), [1.5])
        with self.assertRaises(ValueError):
            compute_quantiles(reference_cycles() + [(make_record(2016, 1, 1.0),)], [0.5])
        with self.assertRaises(EmptyCycleSet):
            compute_quantiles([], [0.5])


class TestReferencePortfolio(unittest.TestCase):
    """Statistics of the engine's 2013-2018 three-year cycles."""

    def setUp(self):
        enumerator = CycleEnumerator(MARKET_2013_2018, INF_ADJ_OPTIONS)
        self.cycles = enumerator.crunch_all_cycles_data()
        self.stats = enumerator.crunch_all_portfolio_stats(self.cycles)

    def test_cycle_balances(self):
        """Test every year-end balance of the three cycles."""
        self.assertEqual([c[0].cycle_start_year for c in self.cycles], [2013, 2014, 2015])
        for cycle in self.cycles:
            expected = REFERENCE_BALANCES_INF_ADJ[cycle[0].cycle_start_year]
            for record, balance in zip(cycle, expected):
                self.assertAlmostEqual(record.balance_inf_adj_end, balance, delta=1e-4)

    def test_first_cycle(self):
        """Test the 2013 cycle summary."""
        first = self.stats.cycle_stats[0]

        self.assertEqual(first.cycle_start_year, 2013)
        self.assertAlmostEqual(first.fees, 9124.9341, delta=1e-4)
        self.assertAlmostEqual(first.balance.average_inf_adj, 1201199.3865, delta=1e-4)
        self.assertAlmostEqual(first.withdrawals.median, 40595.2753, delta=1e-4)
        self.assertAlmostEqual(first.balance.ending, 1192323.1914, delta=1e-4)
        self.assertAlmostEqual(first.balance.ending_inf_adj, 1174839.3694, delta=1e-4)
        self.assertEqual(first.balance.max.year, 2014)
        self.assertEqual(first.failure_year, 0)
        self.assertTrue(first.succeeded)

    def test_portfolio(self):
        """Test the portfolio summary over the three cycles."""
        stats = self.stats

        self.assertEqual(stats.success_rate, 1)
        self.assertAlmostEqual(stats.investment_expenses.average_annual, 2807.3571, delta=1e-4)
        self.assertAlmostEqual(stats.investment_expenses.median_total, 8077.9112, delta=1e-4)
        self.assertAlmostEqual(stats.equities_price_change.average_annual, 85745.9881, delta=1e-4)
        self.assertEqual(stats.balance.min.year, 2014)
        self.assertEqual(stats.balance.max.year, 2015)
        self.assertAlmostEqual(stats.balance.average_inf_adj, 1164253.2156, delta=1e-4)

        largest = stats.withdrawals.max
        self.assertEqual(largest.cycle_start_year, 2015)
        self.assertEqual(largest.year_in_cycle, 2017)
        self.assertEqual(largest.cycle_year, 3)
        self.assertAlmostEqual(largest.amount, 41562.9827, delta=1e-4)

    def test_quantile_table(self):
        """Test quantile bands and level summaries of the engine's cycles."""
        bands = compute_quantiles(self.cycles, [0.25, 0.5, 0.75])
        expected = [
            [1002104.4473, 1021920.9142, 1150677.4876],
            [1074419.3335, 1041044.2539, 1174839.3694],
            [1125642.8883, 1146468.3004, 1183122.0206],
        ]
        for band, values in zip(bands, expected):
            for entry, value in zip(band, values):
                self.assertAlmostEqual(entry.balance_inf_adj, value, delta=1e-3)
                self.assertAlmostEqual(entry.withdrawal_inf_adj, 40000, places=6)

        levels = compute_quantile_level_stats(bands)
        self.assertAlmostEqual(levels[0].average_balance_inf_adj, 1058234.283, delta=1e-3)
        self.assertAlmostEqual(levels[1].ending_balance_inf_adj, 1174839.3694, delta=1e-3)
        self.assertAlmostEqual(levels[2].average_balance_inf_adj, 1151744.4031, delta=1e-3)


if __name__ == '__main__':
    unittest.main()
