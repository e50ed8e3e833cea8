# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Exceptions raised by the simulation engine.

All of them derive from ValueError: each one reports a caller contract
violation detected before any result is produced, never a transient fault.
"""


class SimulationError(ValueError):
    """Base class for simulation engine errors."""


class InvalidAllocation(SimulationError):
    """The equities allocation ratio lies outside [0, 1]."""


class InsufficientData(SimulationError):
    """The market series is too short for the requested computation."""


class YearNotFound(SimulationError):
    """A calendar year is not present in the market series."""


class EmptyCycleSet(SimulationError):
    """Statistics were requested over zero cycles."""
