"""
TOST Equivalence Testing for VOT Data
=====================================

This package tests whether two groups of speakers produce practically
equivalent voice-onset times, using two one-sided tests (TOST) next to
the conventional two-sided t-test.

Modules:
    data: VOT simulation, loading and group summaries
    analysis: Equivalence test engine, power planning and reporting
    visualization: Plotting utilities for groups and TOST intervals
"""

__version__ = "1.0.0"
__author__ = "Research Team"

from . import data
from . import analysis
from . import visualization
from .errors import EquivalenceError, InvalidInputError, NumericalError
