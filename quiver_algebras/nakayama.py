"""Nakayama algebras from Kupisch series."""

import logging
from collections import deque
from typing import Iterator, List, Optional, Sequence

from .deadline import check_deadline
from .errors import PresentationError
from .monomial import QuiverAlgebra, classify
from .quiver import Quiver
from .word import Arrow, Monomial

logger = logging.getLogger(__name__)


def kupisch_to_nakayama(series: Sequence[int]) -> QuiverAlgebra:
    """
    Build the Nakayama algebra with the given Kupisch series.

    The quiver has vertices v1, ..., vn and arrows i: v_i -> v_{i+1}, the
    last one closing the cycle.  Entry c_i is the length of the projective
    at v_i: c_i = 1 removes arrow i, and otherwise the path of c_i arrows
    starting at v_i is a zero relation whenever it exists.

    Args:
        series: Kupisch series (c_1, ..., c_n)

    Returns:
        The classified algebra, gentle or string

    Raises:
        PresentationError: If the series is empty or has an entry below 1
    """
    series = list(series)
    if not series:
        raise PresentationError("A Kupisch series needs at least one entry")
    if any(c < 1 for c in series):
        raise PresentationError(f"Entries of a Kupisch series must be positive: {series}")
    rank = len(series)
    vertices = [f"v{i}" for i in range(1, rank + 1)]
    arrows = {i: Arrow(i, f"v{i}", f"v{i % rank + 1}") for i in range(1, rank + 1) if series[i - 1] > 1}
    relations = []
    for index, length in enumerate(series):
        labels = [(index + k) % rank + 1 for k in range(length)]
        if length > 1 and all(label in arrows for label in labels):
            relations.append(Monomial(arrows[label] for label in labels))
    logger.debug("Kupisch series %s: %d arrows, %d relations", series, len(arrows), len(relations))
    return classify(Quiver(vertices, arrows.values(), name=f"Nakayama {series}"), relations)


def kupisch_generator(n: int, bound: Optional[int] = None, min_bound: Optional[int] = None,
                      first_minimal: bool = True) -> Iterator[List[int]]:
    """
    Breadth-first enumeration of cyclic Kupisch series of length n.

    Starts from (2, ..., 2) and raises one entry at a time while keeping
    c_{i+1} >= c_i - 1 cyclically.

    Args:
        n: Number of vertices
        bound: Largest allowed entry
        min_bound: Skip series whose smallest entry exceeds this
        first_minimal: Keep the first entry minimal, to cut down on rotations

    Yields:
        Kupisch series, each once

    Raises:
        ValueError: If n < 1
    """
    if n < 1:
        raise ValueError(f"A Kupisch series needs at least one entry, got {n}")
    queue = deque([[2] * n])
    yielded = set()
    while queue:
        check_deadline()
        current = queue.popleft()
        if tuple(current) in yielded:
            continue
        yielded.add(tuple(current))
        yield current
        for i in range(n):
            rest = current[1:]
            if i == 0 and first_minimal and rest and current[0] == min(rest):
                continue
            left = current[i - 1]
            right = current[(i + 1) % n]
            raised = current[i] + 1
            if bound is not None and raised > bound:
                continue
            if left > raised + 1 or raised > right + 1:
                continue
            following = list(current)
            following[i] = raised
            if min_bound is not None and min(following) > min_bound:
                continue
            queue.append(following)
