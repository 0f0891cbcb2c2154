"""Special biserial algebras: string algebras with binomial relations p = q."""

import logging
from functools import cached_property
from typing import Hashable, Iterable, List, Optional, Sequence, Union

from .algebra import INFINITE
from .biserial import BiserialIndec, check_biserial_pair
from .errors import PresentationError, UnsupportedOperationError
from .indec import Indec
from .monomial import AlgebraKind, QuiverAlgebra, StringAlgebra
from .string_module import StringIndec
from .word import Monomial, Word

logger = logging.getLogger(__name__)


class SpecialBiserialAlgebra(QuiverAlgebra):
    """
    A string algebra together with binomial relations ``p = q``.

    Each relation gives a biserial projective-injective module whose top is
    the common source and whose socle is the common target.  Every other
    indecomposable is a string module of the reduction, the string algebra
    in which both sides of every binomial relation are zero.

    Attributes:
        over_algebra: String algebra of the monomial relations
        bi_relations: Pairs (p, q) of paths
    """

    kind = AlgebraKind.SPECIAL_BISERIAL
    supports_string_combinatorics = True

    def __init__(self, over_algebra: StringAlgebra, bi_relations: Iterable[Sequence[Monomial]] = ()):
        """
        Args:
            over_algebra: String algebra of the monomial relations
            bi_relations: Pairs (p, q) with p = q

        Raises:
            PresentationError: If a pair is not a valid binomial relation, or
                two pairs share a top or a socle vertex
        """
        super().__init__(over_algebra.quiver)
        self.over_algebra = over_algebra
        self.relations = over_algebra.relations
        self.bi_relations = tuple(tuple(pair) for pair in bi_relations)
        for pair in self.bi_relations:
            if len(pair) != 2:
                raise PresentationError(f"A binomial relation needs two paths, got {len(pair)}")
            check_biserial_pair(over_algebra, pair)
        self.biserial_top_vertices = frozenset(pair[0].source for pair in self.bi_relations)
        self.biserial_socle_vertices = frozenset(pair[0].target for pair in self.bi_relations)
        if len(self.biserial_top_vertices) != len(self.bi_relations):
            raise PresentationError("Two binomial relations start at the same vertex")
        if len(self.biserial_socle_vertices) != len(self.bi_relations):
            raise PresentationError("Two binomial relations end at the same vertex")

    @cached_property
    def reduction(self) -> StringAlgebra:
        """The string algebra in which both sides of each binomial relation vanish."""
        relations = list(self.over_algebra.relations)
        for first, second in self.bi_relations:
            relations += [first, second]
        logger.debug("Reducing %d binomial relations to zero relations", len(self.bi_relations))
        return StringAlgebra(self.quiver, relations)

    def is_legal(self, word: Word, check_only_last: bool = False) -> bool:
        return self.reduction.is_legal(word, check_only_last)

    def is_string_algebra(self) -> bool:
        return not self.bi_relations

    def is_gentle_algebra(self) -> bool:
        return not self.bi_relations and self.over_algebra.is_gentle_algebra()

    def is_word_finite(self, vertex: Optional[Hashable] = None) -> bool:
        return self.reduction.is_word_finite(vertex)

    def is_band_finite(self) -> bool:
        return self.reduction.is_band_finite()

    def primitive_bands(self) -> List[Word]:
        return self.reduction.primitive_bands()

    def is_rep_finite(self) -> bool:
        return self.reduction.is_rep_finite()

    def number_of_indecs(self) -> Union[int, float]:
        count = self.reduction.number_of_indecs()
        if count == INFINITE:
            return INFINITE
        return count + len(self.bi_relations)

    def dim(self) -> Union[int, float]:
        if self.reduction.dim() == INFINITE:
            return INFINITE
        return sum(self.proj_at(v).dim() for v in self.vertices)

    def simple_at(self, vertex: Hashable) -> StringIndec:
        self._check_vertex(vertex)
        return StringIndec(self, Word.trivial(vertex), check=False)

    def proj_at(self, vertex: Hashable) -> Indec:
        if vertex in self.biserial_top_vertices:
            return BiserialIndec(self, next(p for p in self.bi_relations if p[0].source == vertex))
        return StringIndec(self, self.reduction.proj_at(vertex).word)

    def inj_at(self, vertex: Hashable) -> Indec:
        if vertex in self.biserial_socle_vertices:
            return BiserialIndec(self, next(p for p in self.bi_relations if p[0].target == vertex))
        return StringIndec(self, self.reduction.inj_at(vertex).word)

    def string_indecs(self, length_bound: Optional[int] = None,
                      non_isomorphic: bool = True) -> List[StringIndec]:
        return [StringIndec(self, m.word, check=False)
                for m in self.reduction.string_indecs(length_bound, non_isomorphic)]

    def biserial_modules(self) -> List[BiserialIndec]:
        return [BiserialIndec(self, pair) for pair in self.bi_relations]

    def to_rf_algebra(self, verify_ar_quiver: Optional[bool] = None):
        """
        Wrap the algebra with the list of all its indecomposables.

        Raises:
            UnsupportedOperationError: If the algebra is representation-infinite
        """
        from .rf_algebra import RfAlgebra
        if not self.is_rep_finite():
            raise UnsupportedOperationError(f"{self!r} is not representation-finite")
        return RfAlgebra(self, self.string_indecs() + self.biserial_modules(),
                         verify_ar_quiver=verify_ar_quiver)

    def info_string(self) -> str:
        s = f"A special biserial algebra with quiver:\n{self.quiver}\n"
        s += "Relations: " + (", ".join(str(r) for r in self.relations) or "none") + "\n"
        s += "Binomial relations: " + (", ".join(f"{p}={q}" for p, q in self.bi_relations) or "none")
        return s

    def __repr__(self) -> str:
        return (f"SpecialBiserialAlgebra(vertices={list(self.vertices)}, "
                f"bi_relations=[{', '.join(f'{p}={q}' for p, q in self.bi_relations)}])")
