"""Finite lists with a partial order, their Hasse quivers and power sets."""

from typing import Collection, FrozenSet, Hashable, Iterable, List, Sequence, Tuple

from .deadline import check_deadline
from .errors import PresentationError
from .quiver import Quiver
from .word import Arrow


class PartialOrder:
    """
    A list of elements with a binary relation ``<=``.

    The relation is given by the set of pairs (x, y) with x <= y.  It is
    trusted to be a partial order unless ``always_poset`` is False, in
    which case ``hasse_quiver`` checks the axioms first.

    Attributes:
        elements: Elements, in display order
        leqs: Pairs (x, y) with x <= y
        always_poset: Skip the poset check when building the Hasse quiver
    """

    def __init__(self, elements: Iterable[Hashable], leqs: Iterable[Tuple[Hashable, Hashable]],
                 always_poset: bool = True):
        self.elements = list(elements)
        self.leqs: FrozenSet[Tuple[Hashable, Hashable]] = frozenset(leqs)
        self.always_poset = always_poset

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self):
        return iter(self.elements)

    def __getitem__(self, index: int):
        return self.elements[index]

    def __contains__(self, x) -> bool:
        return x in self.elements

    def leq(self, x, y) -> bool:
        return (x, y) in self.leqs

    def geq(self, x, y) -> bool:
        return (y, x) in self.leqs

    def _require_element(self, x) -> None:
        if x not in self.elements:
            raise ValueError(f"{x} is not an element of the order")

    def down(self, x) -> List:
        """Elements y with y <= x."""
        self._require_element(x)
        return [y for y in self.elements if self.leq(y, x)]

    def up(self, x) -> List:
        """Elements y with y >= x."""
        self._require_element(x)
        return [y for y in self.elements if self.geq(y, x)]

    def is_poset(self) -> bool:
        """True if the relation is reflexive, antisymmetric and transitive."""
        for x in self.elements:
            check_deadline()
            if not self.leq(x, x):
                return False
            for y in self.down(x):
                if self.leq(x, y) and x != y:
                    return False
                for z in self.down(y):
                    if not self.leq(z, x):
                        return False
        return True

    def hasse_quiver(self) -> Quiver:
        """
        The Hasse quiver: an arrow x -> y whenever y < x with nothing in between.

        Raises:
            PresentationError: If the relation is not a partial order (only
                checked when always_poset is False)
        """
        if not self.always_poset and not self.is_poset():
            raise PresentationError("The relation is not a partial order")
        arrows = []
        for x in self.elements:
            check_deadline()
            for y in self.down(x):
                if y == x:
                    continue
                interval = [z for z in self.elements if self.leq(y, z) and self.leq(z, x)]
                if len(interval) == 2:
                    arrows.append(Arrow(None, x, y))
        return Quiver(self.elements, arrows)

    def __repr__(self) -> str:
        return f"PartialOrder({len(self.elements)} elements, {len(self.leqs)} relations)"


def inclusion_order(subcats: Sequence[Collection]) -> PartialOrder:
    """Order subcategories (or any collections) by inclusion."""
    subcats = list(subcats)
    as_sets = [set(c) for c in subcats]
    leqs = [(c1, c2)
            for c1, s1 in zip(subcats, as_sets)
            for c2, s2 in zip(subcats, as_sets)
            if s1 <= s2]
    return PartialOrder(subcats, leqs)


def power_set(items: Iterable, include: Iterable = ()) -> List[List]:
    """
    All subsets of ``items`` that contain every element of ``include``.

    ``include`` is not checked to be a subset of ``items``.
    """
    include = list(include)
    result = [list(include)]
    for item in items:
        if item in include:
            continue
        result = result + [subset + [item] for subset in result]
    return result
