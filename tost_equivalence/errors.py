"""Exceptions raised by the equivalence testing routines."""


class EquivalenceError(Exception):
    """Base class for equivalence analysis failures."""


class InvalidInputError(EquivalenceError, ValueError):
    """Raised when summary statistics, bounds or alpha are out of range."""


class NumericalError(EquivalenceError, ArithmeticError):
    """Raised when a standard error or t-distribution value is not finite."""
