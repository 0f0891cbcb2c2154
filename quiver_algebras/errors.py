"""Exceptions raised by quiver_algebras.

Each exception also derives from the closest built-in, so code that catches
``ValueError`` or ``NotImplementedError`` keeps working.
"""


class QuiverAlgebraError(Exception):
    """Base class for all errors raised by this package."""


class PresentationError(QuiverAlgebraError, ValueError):
    """A quiver, relation, word or module reference is structurally invalid."""


class InfiniteEnumerationError(QuiverAlgebraError, ValueError):
    """A full enumeration was requested over an infinite set."""


class UnsupportedOperationError(QuiverAlgebraError, NotImplementedError):
    """The operation is not defined for this kind of algebra."""


class BrokenInvariantError(QuiverAlgebraError, RuntimeError):
    """An internal consistency check failed.

    This never signals bad input: it means two computations that must agree
    did not, which points at a defect in the algorithms.
    """


class DeadlineExceeded(QuiverAlgebraError, TimeoutError):
    """The deadline installed by ``time_limit`` has passed."""
