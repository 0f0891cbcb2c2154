"""Bound quiver algebras with monomial relations.

The grades form a chain of subclasses::

    MonomialAlgebra > StringAlgebra > GentleAlgebra

and each constructor validates the extra conditions of its grade.  String
combinatorics (projectives, almost split sequences, syzygies) is only
available from the string grade on; the monomial grade can still decide
finite-dimensionality, enumerate paths and words, and find bands.
"""

import enum
import logging
from functools import cached_property
from typing import Hashable, Iterable, Iterator, List, Optional, Sequence, Union

from .algebra import INFINITE, Algebra
from .automaton import LegalityAutomaton, forbidden_words, primitive_bands
from .deadline import check_deadline
from .errors import BrokenInvariantError, InfiniteEnumerationError, PresentationError, UnsupportedOperationError
from .quiver import Quiver
from .string_module import StringIndec
from .word import Monomial, Word

logger = logging.getLogger(__name__)


class AlgebraKind(enum.Enum):
    """Tag of the most specific grade a presentation was classified into."""
    MONOMIAL = "monomial"
    STRING = "string"
    GENTLE = "gentle"
    SPECIAL_BISERIAL = "special biserial"


class QuiverAlgebra(Algebra):
    """
    An algebra given by a quiver with relations.

    Subclasses decide legality of words; the word search here only relies
    on ``is_legal``.
    """

    kind: AlgebraKind
    supports_string_combinatorics = False
    biserial_top_vertices: frozenset = frozenset()
    biserial_socle_vertices: frozenset = frozenset()
    bi_relations: tuple = ()

    def __init__(self, quiver: Quiver):
        super().__init__()
        self.quiver = quiver
        self.vertices = quiver.vertices
        self.arrows = quiver.arrows

    def is_legal(self, word: Word, check_only_last: bool = False) -> bool:
        """
        Whether a word gives a nonzero string.

        Args:
            word: Word to check
            check_only_last: Assume every proper prefix is already legal
        """
        raise UnsupportedOperationError(f"{type(self).__name__} cannot decide legality of words")

    def _check_vertex(self, vertex: Hashable) -> None:
        if not self.quiver.has_vertex(vertex):
            raise PresentationError(f"Vertex {vertex} does not exist")

    def words_starting_with(self, word: Word, length_bound: Optional[int] = None,
                            add_only_arrow: bool = False, add_only_inverse: bool = False,
                            only_maximal: bool = False) -> Iterator[Word]:
        """
        Breadth-first search of the legal words ``word * w``.

        Args:
            word: Legal word to extend on the right
            length_bound: Longest word to visit, None for no bound
            add_only_arrow: Extend by arrows only
            add_only_inverse: Extend by inverse arrows only
            only_maximal: Yield only words that cannot be extended further

        Returns:
            A generator of words, shortest first

        Raises:
            PresentationError: If word is illegal
            ValueError: If length_bound is shorter than word
        """
        if not self.is_legal(word):
            raise PresentationError(f"Word {word} is not legal")
        if length_bound is not None and length_bound < len(word):
            raise ValueError(f"Length bound {length_bound} is shorter than {word}")
        return self._search(word, length_bound, add_only_arrow, add_only_inverse, only_maximal)

    def _search(self, word, length_bound, add_only_arrow, add_only_inverse, only_maximal):
        queue = [word]
        while queue:
            check_deadline()
            current = queue.pop(0)
            if length_bound is not None and len(current) > length_bound:
                break
            if not only_maximal:
                yield current
            is_maximal = True
            if not add_only_inverse:
                for arrow in self.quiver.arrows_from(current.target):
                    candidate = current * arrow
                    if self.is_legal(candidate, check_only_last=True):
                        queue.append(candidate)
                        is_maximal = False
            if not add_only_arrow:
                for arrow in self.quiver.arrows_to(current.target):
                    candidate = current * ~arrow
                    if self.is_legal(candidate, check_only_last=True):
                        queue.append(candidate)
                        is_maximal = False
            if only_maximal and is_maximal:
                yield current

    def words_ending_with(self, word: Word, length_bound: Optional[int] = None,
                          add_only_arrow: bool = False, add_only_inverse: bool = False,
                          only_maximal: bool = False) -> Iterator[Word]:
        """Breadth-first search of the legal words ``w * word``; see words_starting_with."""
        found = self.words_starting_with(~word, length_bound, add_only_arrow=add_only_inverse,
                                         add_only_inverse=add_only_arrow, only_maximal=only_maximal)
        return (~w for w in found)


class MonomialAlgebra(QuiverAlgebra):
    """
    A bound quiver algebra whose relations are zero relations.

    Legality of words is decided by a finite automaton over the doubled
    alphabet; a second automaton over arrows alone decides
    finite-dimensionality.  Both are built on first use.
    """

    kind = AlgebraKind.MONOMIAL

    def __init__(self, quiver: Quiver, relations: Iterable[Monomial] = ()):
        """
        Args:
            quiver: Underlying quiver
            relations: Zero relations

        Raises:
            PresentationError: If a relation uses an arrow outside the quiver
                or has length smaller than 2
        """
        super().__init__(quiver)
        self.relations = normalize_relations(quiver, relations)
        self.letters = tuple(a.to_letter() for a in self.arrows) + tuple(~a for a in self.arrows)
        self._letter_set = frozenset(self.letters)
        self.forbidden = tuple(forbidden_words(self.arrows, self.relations))

    @cached_property
    def path_automaton(self) -> LegalityAutomaton:
        """Automaton over arrows only."""
        return LegalityAutomaton(self.vertices, [a.to_letter() for a in self.arrows], self.forbidden)

    @cached_property
    def word_automaton(self) -> LegalityAutomaton:
        """Automaton over arrows and their inverses."""
        return LegalityAutomaton(self.vertices, self.letters, self.forbidden)

    def is_legal(self, word: Word, check_only_last: bool = False) -> bool:
        """
        Decide whether a word avoids every forbidden word.

        Args:
            word: Word over the quiver
            check_only_last: Only look at pieces ending in the last letter,
                for a word whose proper prefixes are known to be legal

        Raises:
            PresentationError: If a letter does not belong to the quiver
        """
        letters = word.letters
        for letter in letters:
            if letter not in self._letter_set:
                raise PresentationError(f"Letter {letter} is not in the quiver")
        if check_only_last:
            return not any(len(f) <= len(letters) and letters[len(letters) - len(f):] == f
                           for f in self.forbidden)
        return self.word_automaton.accepts(word)

    def is_finite_dimensional(self, vertex: Optional[Hashable] = None) -> bool:
        """
        True if there are only finitely many nonzero paths.

        Args:
            vertex: If given, only paths starting at this vertex count
        """
        if vertex is not None:
            self._check_vertex(vertex)
        return self.path_automaton.is_acyclic(vertex)

    def is_word_finite(self, vertex: Optional[Hashable] = None) -> bool:
        """True if there are only finitely many legal words (from the vertex, if given)."""
        if vertex is not None:
            self._check_vertex(vertex)
        return self.word_automaton.is_acyclic(vertex)

    def is_band_finite(self) -> bool:
        """True if there are only finitely many primitive bands."""
        return self.word_automaton.primitive_cycle_finite()

    def primitive_bands(self) -> List[Word]:
        """Primitive bands, one per class under rotation and inversion."""
        return primitive_bands(self.word_automaton)

    def paths_from(self, vertex: Hashable, length_bound: Optional[int] = None,
                   only_maximal: bool = False) -> List[Word]:
        """
        Nonzero paths starting at a vertex, the trivial one included.

        Raises:
            InfiniteEnumerationError: If no bound is given and there are
                infinitely many such paths
        """
        self._check_vertex(vertex)
        if length_bound is None and not self.is_finite_dimensional(vertex):
            raise InfiniteEnumerationError(f"There are infinitely many paths from {vertex}")
        return list(self.words_starting_with(Word.trivial(vertex), length_bound,
                                             add_only_arrow=True, only_maximal=only_maximal))

    def paths_to(self, vertex: Hashable, length_bound: Optional[int] = None,
                 only_maximal: bool = False) -> List[Word]:
        """
        Nonzero paths ending at a vertex, the trivial one included.

        Raises:
            InfiniteEnumerationError: If no bound is given and the algebra is
                infinite-dimensional
        """
        self._check_vertex(vertex)
        if length_bound is None and not self.is_finite_dimensional():
            raise InfiniteEnumerationError(f"There are infinitely many paths to {vertex}")
        return list(self.words_ending_with(Word.trivial(vertex), length_bound,
                                           add_only_arrow=True, only_maximal=only_maximal))

    def dim(self) -> Union[int, float]:
        if not self.is_finite_dimensional():
            return INFINITE
        return sum(len(self.paths_from(v)) for v in self.vertices)

    def words_from(self, vertex: Hashable, length_bound: Optional[int] = None) -> List[Word]:
        """
        Legal words starting at a vertex.

        Raises:
            InfiniteEnumerationError: If no bound is given and there are
                infinitely many such words
        """
        self._check_vertex(vertex)
        if length_bound is None and not self.is_word_finite(vertex):
            raise InfiniteEnumerationError(f"There are infinitely many words from {vertex}")
        return list(self.words_starting_with(Word.trivial(vertex), length_bound))

    def words(self, length_bound: Optional[int] = None) -> List[Word]:
        return [w for v in self.vertices for w in self.words_from(v, length_bound)]

    def string_indecs(self, length_bound: Optional[int] = None,
                      non_isomorphic: bool = True) -> List[StringIndec]:
        """
        String modules of all legal words.

        Args:
            length_bound: Longest word to use, None for all
            non_isomorphic: Keep only one of ``w`` and ``~w``
        """
        seen = set()
        result = []
        for word in self.words(length_bound):
            if non_isomorphic and ~word in seen:
                continue
            seen.add(word)
            result.append(StringIndec(self, word, check=False))
        return result

    def simple_at(self, vertex: Hashable) -> StringIndec:
        self._check_vertex(vertex)
        return StringIndec(self, Word.trivial(vertex), check=False)

    def is_string_algebra(self) -> bool:
        try:
            StringAlgebra(self.quiver, self.relations)
        except PresentationError:
            return False
        return True

    def is_gentle_algebra(self) -> bool:
        try:
            GentleAlgebra(self.quiver, self.relations)
        except PresentationError:
            return False
        return True

    def info_string(self) -> str:
        s = f"A {self.kind.value} algebra with quiver:\n{self.quiver}\n"
        s += "Relations: " + (", ".join(str(r) for r in self.relations) or "none")
        return s

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(vertices={list(self.vertices)}, "
                f"relations=[{', '.join(str(r) for r in self.relations)}])")


def normalize_relations(quiver: Quiver, relations: Iterable[Monomial]) -> List[Monomial]:
    """
    Drop duplicate relations and relations containing another one.

    Raises:
        PresentationError: If a relation uses an arrow outside the quiver or
            has length smaller than 2
    """
    relations = list(relations)
    arrow_set = set(quiver.arrows)
    result = []
    for relation in relations:
        if relation in result:
            continue
        if not all(arrow in arrow_set for arrow in relation):
            raise PresentationError(f"Each arrow of relation {relation} should be in the quiver")
        if len(relation) < 2:
            raise PresentationError(f"Relation {relation} should have length at least 2")
        redundant = any(
            other != relation and any(
                relation.arrows[i:i + len(other)] == other.arrows
                for i in range(len(relation) - len(other) + 1))
            for other in relations)
        if redundant:
            logger.debug("Dropping relation %s containing another relation", relation)
            continue
        result.append(relation)
    return result


class StringAlgebra(MonomialAlgebra):
    """
    A monomial algebra with at most two arrows in and out of each vertex and,
    for each arrow, at most one nonzero composite on either side.
    """

    kind = AlgebraKind.STRING
    supports_string_combinatorics = True

    def __init__(self, quiver: Quiver, relations: Iterable[Monomial] = ()):
        super().__init__(quiver, relations)
        for vertex in self.vertices:
            if len(quiver.arrows_from(vertex)) > 2:
                raise PresentationError(f"Too many arrows starting at {vertex}")
            if len(quiver.arrows_to(vertex)) > 2:
                raise PresentationError(f"Too many arrows ending at {vertex}")
        for arrow in self.arrows:
            after = [arrow * b for b in quiver.arrows_from(arrow.target)]
            if sum(1 for path in after if self.is_legal(path)) > 1:
                raise PresentationError(f"Two paths of length 2 starting with {arrow} don't vanish")
            before = [b * arrow for b in quiver.arrows_to(arrow.source)]
            if sum(1 for path in before if self.is_legal(path)) > 1:
                raise PresentationError(f"Two paths of length 2 ending with {arrow} don't vanish")

    def is_rep_finite(self) -> bool:
        return self.is_word_finite()

    def proj_at(self, vertex: Hashable) -> StringIndec:
        paths = self.paths_from(vertex, only_maximal=True)
        if len(paths) == 1:
            return StringIndec(self, paths[0], check=False)
        if len(paths) == 2:
            return StringIndec(self, ~paths[0] * paths[1], check=False)
        raise BrokenInvariantError(f"{len(paths)} maximal paths start at {vertex}")

    def inj_at(self, vertex: Hashable) -> StringIndec:
        paths = self.paths_to(vertex, only_maximal=True)
        if len(paths) == 1:
            return StringIndec(self, paths[0], check=False)
        if len(paths) == 2:
            return StringIndec(self, paths[0] * ~paths[1], check=False)
        raise BrokenInvariantError(f"{len(paths)} maximal paths end at {vertex}")

    def number_of_indecs(self) -> Union[int, float]:
        if not self.is_rep_finite():
            return INFINITE
        return len(self.string_indecs())

    def to_rf_algebra(self, verify_ar_quiver: Optional[bool] = None):
        """
        Wrap the algebra with the list of all its indecomposables.

        Raises:
            UnsupportedOperationError: If the algebra is representation-infinite
        """
        from .rf_algebra import RfAlgebra
        if not self.is_rep_finite():
            raise UnsupportedOperationError(f"{self!r} is not representation-finite")
        return RfAlgebra(self, self.string_indecs(), verify_ar_quiver=verify_ar_quiver)


class GentleAlgebra(StringAlgebra):
    """A string algebra whose relations have length 2, at most one vanishing composite per side."""

    kind = AlgebraKind.GENTLE

    def __init__(self, quiver: Quiver, relations: Iterable[Monomial] = ()):
        super().__init__(quiver, relations)
        for relation in self.relations:
            if len(relation) != 2:
                raise PresentationError(f"Relation {relation} of a gentle algebra should have length 2")
        for arrow in self.arrows:
            after = [arrow * b for b in quiver.arrows_from(arrow.target)]
            if sum(1 for path in after if not self.is_legal(path)) > 1:
                raise PresentationError(f"Two paths of length 2 starting with {arrow} vanish")
            before = [b * arrow for b in quiver.arrows_to(arrow.source)]
            if sum(1 for path in before if not self.is_legal(path)) > 1:
                raise PresentationError(f"Two paths of length 2 ending with {arrow} vanish")


def classify(quiver: Quiver, mono_relations: Iterable[Monomial] = (),
             bi_relations: Iterable[Sequence[Monomial]] = ()) -> QuiverAlgebra:
    """
    Build the most specific algebra class for a presentation.

    Args:
        quiver: Underlying quiver
        mono_relations: Zero relations
        bi_relations: Pairs of paths (p, q) with the relation p = q

    Returns:
        A GentleAlgebra, StringAlgebra or MonomialAlgebra without binomial
        relations, a SpecialBiserialAlgebra otherwise; ``.kind`` tells which

    Raises:
        PresentationError: If the presentation is invalid, or has binomial
            relations but is not special biserial
    """
    mono_relations = list(mono_relations)
    bi_relations = [tuple(pair) for pair in bi_relations]
    if not bi_relations:
        for grade in (GentleAlgebra, StringAlgebra):
            try:
                algebra = grade(quiver, mono_relations)
            except PresentationError as e:
                logger.debug("Not a %s algebra: %s", grade.kind.value, e)
                continue
            logger.debug("Classified as %s", algebra.kind.value)
            return algebra
        return MonomialAlgebra(quiver, mono_relations)

    from .special_biserial import SpecialBiserialAlgebra
    try:
        over = StringAlgebra(quiver, mono_relations)
    except PresentationError as e:
        raise PresentationError(f"Binomial relations need a special biserial algebra: {e}") from e
    algebra = SpecialBiserialAlgebra(over, bi_relations)
    logger.debug("Classified as %s", algebra.kind.value)
    return algebra
