"""Cooperative deadlines for long-running searches.

Searches that may blow up (automaton construction, word and path search,
clique enumeration, syzygy exploration) call ``check_deadline()`` once per
worklist step.  A caller bounds the total time with::

    with time_limit(2.5):
        rf.tau_tiltings()
"""

import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from .errors import DeadlineExceeded

_deadline: ContextVar[Optional[float]] = ContextVar("quiver_algebras_deadline", default=None)


@contextmanager
def time_limit(seconds: Optional[float]) -> Iterator[None]:
    """
    Bound the running time of the enclosed block.

    Nested limits keep the earliest deadline.  ``None`` means no limit.

    Args:
        seconds: Number of seconds from now, or None

    Raises:
        ValueError: If seconds is negative
    """
    if seconds is None:
        yield
        return
    if seconds < 0:
        raise ValueError(f"Time limit must be non-negative, got {seconds}")
    new_deadline = time.monotonic() + seconds
    current = _deadline.get()
    if current is not None:
        new_deadline = min(current, new_deadline)
    token = _deadline.set(new_deadline)
    try:
        yield
    finally:
        _deadline.reset(token)


def remaining() -> Optional[float]:
    """Seconds left before the active deadline, or None if there is none."""
    current = _deadline.get()
    if current is None:
        return None
    return max(0.0, current - time.monotonic())


def check_deadline() -> None:
    """Raise DeadlineExceeded if the active deadline has passed."""
    current = _deadline.get()
    if current is not None and time.monotonic() > current:
        raise DeadlineExceeded("Computation exceeded its time limit")
