"""Shared fixtures for the test suite."""

import matplotlib

matplotlib.use("Agg")

import pytest

from tost_equivalence.analysis import equivalence_test


@pytest.fixture
def vot_result():
    """Equivalence test on the reference VOT summary statistics."""
    return equivalence_test(
        mean1=17.56, sd1=6.57, n1=40,
        mean2=15.77, sd2=5.75, n2=40,
        low_bound=-5, high_bound=5,
        alpha=0.05, equal_variance=True,
    )
