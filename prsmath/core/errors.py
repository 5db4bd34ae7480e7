# prsmath/core/errors.py
"""
Exceptions raised by the matrix core.
"""


class MathError(Exception):
    """Base class for errors raised by prsmath."""
    pass


class InvalidArgumentError(MathError, ValueError):
    """Raised when an argument does not satisfy an operation's contract."""
    pass


class SingularMatrixError(MathError, ArithmeticError):
    """Raised when inverting a matrix whose determinant is exactly zero."""
    pass
