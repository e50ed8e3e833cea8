# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Normal return generator for synthetic market years.

Each simulated year consumes exactly one uniform draw from the injected
random source, mapped to a return through the inverse normal CDF. Draws
for a cycle are taken up front, in year order, so the cycle can be built
from its own local sequence.
"""

from typing import List
import numpy as np
from scipy.stats import norm

from .market_statistics import MarketStatistics

# Keeps ppf finite when a source returns exactly 0 or 1
_UNIFORM_EPSILON = 1e-12


class NormalReturnGenerator:
    """Maps uniform draws to normally distributed annual returns.

    The random source is any object with a random() method returning a
    float in [0, 1), such as numpy.random.Generator or random.Random.

    Example:
        >>> stats = MarketStatistics(0.06, 0.176)
        >>> gen = NormalReturnGenerator(stats, np.random.default_rng(42))
        >>> returns = gen.generate_cycle_returns(30)
        >>> print(returns.shape)  # (30,)
    """

    def __init__(self, statistics: MarketStatistics, random_source):
        """Initialize the return generator.

        Args:
            statistics: Mean and standard deviation of annual market change
            random_source: Source of uniform draws
        """
        self.statistics = statistics
        self.random_source = random_source

    def draw_uniforms(self, num_years: int) -> List[float]:
        """Take num_years draws from the random source, in order."""
        return [float(self.random_source.random()) for _ in range(num_years)]

    def returns_from_uniforms(self, uniforms) -> np.ndarray:
        """Transform uniform draws to annual returns, preserving order."""
        u = np.asarray(uniforms, dtype=float)
        mean = self.statistics.mean_annual_market_change
        std = self.statistics.std_dev_annual_market_change
        if std == 0:
            return np.full(u.shape, mean)
        return norm.ppf(np.clip(u, _UNIFORM_EPSILON, 1 - _UNIFORM_EPSILON), loc=mean, scale=std)

    def generate_cycle_returns(self, num_years: int) -> np.ndarray:
        """Generate one cycle of annual returns.

        Args:
            num_years: Number of years in the cycle

        Returns:
            Array of num_years returns in decimal form (e.g., 0.08 for 8%)
        """
        return self.returns_from_uniforms(self.draw_uniforms(num_years))
