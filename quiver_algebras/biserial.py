"""Biserial projective-injective modules of a special biserial algebra."""

from typing import FrozenSet, Hashable, List, Tuple

from .errors import PresentationError
from .indec import Indec
from .string_module import StringIndec
from .word import Monomial

Pair = Tuple[Monomial, Monomial]


def check_biserial_pair(over_algebra, pair: Pair) -> None:
    """
    Validate a binomial relation ``p = q`` against a monomial presentation.

    Raises:
        PresentationError: If the paths don't share source and target, vanish,
            are arrows, or coincide
    """
    first, second = pair
    if first.source != second.source:
        raise PresentationError(f"Sources of {first} and {second} don't coincide")
    if first.target != second.target:
        raise PresentationError(f"Targets of {first} and {second} don't coincide")
    for path in pair:
        if not over_algebra.is_legal(path.to_word()):
            raise PresentationError(f"{path} vanishes")
        if len(path) < 2:
            raise PresentationError(f"{path} is an arrow")
    if first == second:
        raise PresentationError(f"Trivial relation {first}={second}")


class BiserialIndec(Indec):
    """
    The projective-injective module P with rad P / soc P decomposable.

    It is given by a binomial relation ``p = q``: the top sits at the common
    source, the socle at the common target, and the two paths are its arms.
    """

    def __init__(self, algebra, pair: Pair):
        """
        Raises:
            PresentationError: If the pair is not a valid binomial relation
        """
        check_biserial_pair(algebra.over_algebra, pair)
        self.algebra = algebra
        self.pair = tuple(pair)
        self.top_vertex = pair[0].source
        self.socle = pair[0].target

    def __eq__(self, other) -> bool:
        if not isinstance(other, BiserialIndec):
            return NotImplemented
        return self.algebra is other.algebra and self.pair == other.pair

    def __hash__(self) -> int:
        return hash(self.pair)

    def __repr__(self) -> str:
        return f"BiserialIndec({self})"

    def __str__(self) -> str:
        return f"{self.pair[0]}={self.pair[1]}"

    def key(self) -> Hashable:
        return ("biserial", self.pair)

    def iso_keys(self) -> FrozenSet[Hashable]:
        return frozenset([("biserial", self.pair), ("biserial", (self.pair[1], self.pair[0]))])

    def flip(self) -> 'BiserialIndec':
        return BiserialIndec(self.algebra, (self.pair[1], self.pair[0]))

    def dim(self) -> int:
        return len(self.pair[0]) + len(self.pair[1])

    def vertex_list(self) -> List[Hashable]:
        first, second = (path.to_word() for path in self.pair)
        return first.drop_last(1).vertex_list() + second.drop(1).vertex_list()

    def top_vertices(self) -> List[Hashable]:
        return [self.top_vertex]

    def socle_vertices(self) -> List[Hashable]:
        return [self.socle]

    def is_projective(self) -> bool:
        return True

    def is_injective(self) -> bool:
        return True

    def hom(self, other: Indec) -> int:
        return other.vertex_list().count(self.top_vertex)

    def ext1(self, other: Indec) -> int:
        return 0

    def stable_hom(self, other: Indec) -> int:
        return 0

    def inj_stable_hom(self, other: Indec) -> int:
        return 0

    def radical(self) -> List[StringIndec]:
        first, second = (path.to_word() for path in self.pair)
        return [StringIndec(self.algebra, first.drop(1) * ~second.drop(1))]

    def coradical(self) -> List[StringIndec]:
        first, second = (path.to_word() for path in self.pair)
        return [StringIndec(self.algebra, ~first.drop_last(1) * second.drop_last(1))]

    def _syzygy(self) -> List[Indec]:
        return []

    def _cosyzygy(self) -> List[Indec]:
        return []

    def sink_sequence(self):
        return [self.radical()[0]], None

    def source_sequence(self):
        return [self.coradical()[0]], None
