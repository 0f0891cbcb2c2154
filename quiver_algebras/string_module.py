"""String modules and graph maps between them.

A legal word ``w`` gives a string module with one basis vector per vertex of
``w``; arrows of the word act as the identity between neighbouring basis
vectors.  ``w`` and ``~w`` give isomorphic modules.

Everything here is combinatorics on words: hooks and cohooks for the
almost split sequences, mountains and valleys for syzygies, graph maps for Hom.
"""

from typing import FrozenSet, Hashable, List, Optional, Tuple

from .errors import BrokenInvariantError, PresentationError, UnsupportedOperationError
from .indec import Indec
from .word import Word

Range = Tuple[int, int]


class StringIndec(Indec):
    """
    The string module of a legal word.

    Two instances are equal when they live over the same algebra and have the
    same word; a word and its inverse are different instances of isomorphic
    modules.
    """

    def __init__(self, algebra, word: Word, check: bool = True):
        """
        Args:
            algebra: Algebra with string combinatorics (string or special biserial)
            word: Word of the module
            check: Verify that the word is legal

        Raises:
            PresentationError: If check is set and the word is illegal
        """
        if check and not algebra.is_legal(word):
            raise PresentationError(f"Word {word} is not legal")
        self.algebra = algebra
        self.word = word

    def __invert__(self) -> 'StringIndec':
        return StringIndec(self.algebra, ~self.word, check=False)

    def __eq__(self, other) -> bool:
        if not isinstance(other, StringIndec):
            return NotImplemented
        return self.algebra is other.algebra and self.word == other.word

    def __hash__(self) -> int:
        return hash(self.word)

    def __repr__(self) -> str:
        return f"StringIndec({self.word})"

    def __str__(self) -> str:
        return str(self.word)

    def key(self) -> Hashable:
        return ("string", self.word)

    def iso_keys(self) -> FrozenSet[Hashable]:
        return frozenset([("string", self.word), ("string", ~self.word)])

    def _wrap(self, word: Word) -> 'StringIndec':
        return StringIndec(self.algebra, word, check=False)

    def sub_word(self, i: int, j: int) -> 'StringIndec':
        return self._wrap(self.word.sub_word(i, j))

    def dim(self) -> int:
        return len(self.word) + 1

    def vertex_list(self) -> List[Hashable]:
        return self.word.vertex_list()

    def _require_string_combinatorics(self) -> None:
        if not self.algebra.supports_string_combinatorics:
            raise UnsupportedOperationError(
                f"{type(self.algebra).__name__} has no string combinatorics for {self}")

    # Tops, socles and graph submodules

    def top_indices(self) -> List[int]:
        """Positions i such that the vertex at i is a summand of the top."""
        directions = [False] + [letter.is_arrow for letter in self.word] + [True]
        return [i for i, pair in enumerate(zip(directions, directions[1:])) if pair == (False, True)]

    def socle_indices(self) -> List[int]:
        """Positions i such that the vertex at i is a summand of the socle."""
        directions = [True] + [letter.is_arrow for letter in self.word] + [False]
        return [i for i, pair in enumerate(zip(directions, directions[1:])) if pair == (True, False)]

    def top_vertices(self) -> List[Hashable]:
        return [self.word.vertex_at(i) for i in self.top_indices()]

    def socle_vertices(self) -> List[Hashable]:
        return [self.word.vertex_at(i) for i in self.socle_indices()]

    def sub_ranges(self) -> List[Range]:
        """Position ranges (i, j) whose sub-word is a graph submodule."""
        length = len(self.word)
        results = []
        for i in range(length + 1):
            if i != 0 and not self.word[i - 1].is_arrow:
                continue
            for j in range(i, length + 1):
                if j != length and self.word[j].is_arrow:
                    continue
                results.append((i, j))
        return results

    def quotient_ranges(self) -> List[Range]:
        """Position ranges (i, j) whose sub-word is a graph quotient."""
        length = len(self.word)
        results = []
        for i in range(length + 1):
            if i != 0 and self.word[i - 1].is_arrow:
                continue
            for j in range(i, length + 1):
                if j != length and not self.word[j].is_arrow:
                    continue
                results.append((i, j))
        return results

    def _matching_ranges(self, other: 'StringIndec'):
        other_subs = [(r, other.word.sub_word(*r)) for r in other.sub_ranges()]
        for quot_range in self.quotient_ranges():
            quotient = self.word.sub_word(*quot_range)
            for sub_range, sub in other_subs:
                if len(quotient) != len(sub):
                    continue
                if quotient == sub or quotient == ~sub:
                    yield quot_range, sub_range

    def hom_basis(self, other: 'StringIndec') -> List['GraphHom']:
        """The graph maps to another string module; they form a basis of Hom."""
        return [GraphHom(self, other, (q, s)) for q, s in self._matching_ranges(other)]

    def hom(self, other: Indec) -> int:
        if isinstance(other, StringIndec):
            return sum(1 for _ in self._matching_ranges(other))
        from .biserial import BiserialIndec
        if isinstance(other, BiserialIndec):
            # maps into a biserial projective-injective land in its socle
            return self.vertex_list().count(other.socle)
        raise UnsupportedOperationError(f"Hom from a string module to {type(other).__name__}")

    def ext1(self, other: Indec) -> int:
        # 0 -> (X, Y) -> (P, Y) -> (ΩX, Y) -> Ext^1(X, Y) -> 0
        other_vertices = other.vertex_list()
        first = self.algebra.hom(self, other)
        second = sum(other_vertices.count(v) for v in self.top_vertices())
        third = self.algebra.hom(self.syzygy(), other)
        return first - second + third

    def stable_hom(self, other: Indec) -> int:
        # 0 -> (X, ΩY) -> (X, P) -> (X, Y) -> stable(X, Y) -> 0
        algebra = self.algebra
        return (algebra.hom(self, other.syzygy()) - algebra.hom(self, other.proj_cover())
                + algebra.hom(self, other))

    def inj_stable_hom(self, other: Indec) -> int:
        # 0 -> (Ω^-X, Y) -> (I, Y) -> (X, Y) -> costable(X, Y) -> 0
        algebra = self.algebra
        return (algebra.hom(self.cosyzygy(), other) - algebra.hom(self.inj_hull(), other)
                + algebra.hom(self, other))

    # Peaks, deeps, hooks and cohooks

    def ends_peak(self) -> bool:
        """True if no word ``w * !a`` is legal."""
        word = self.word
        return not any(self.algebra.is_legal(word * ~arrow)
                       for arrow in self.algebra.quiver.arrows_to(word.target))

    def ends_deep(self) -> bool:
        """True if no word ``w * a`` is legal."""
        word = self.word
        return not any(self.algebra.is_legal(word * arrow)
                       for arrow in self.algebra.quiver.arrows_from(word.target))

    def starts_peak(self) -> bool:
        return (~self).ends_peak()

    def starts_deep(self) -> bool:
        return (~self).ends_deep()

    def make_end_deep(self) -> List['StringIndec']:
        """Maximal extensions of the form ``w * a1 * a2 * ...``."""
        return [self._wrap(w) for w in self.algebra.words_starting_with(
            self.word, add_only_arrow=True, only_maximal=True)]

    def make_end_peak(self) -> List['StringIndec']:
        """Maximal extensions of the form ``w * !a1 * !a2 * ...``."""
        return [self._wrap(w) for w in self.algebra.words_starting_with(
            self.word, add_only_inverse=True, only_maximal=True)]

    def make_start_deep(self) -> List['StringIndec']:
        return [~m for m in (~self).make_end_deep()]

    def make_start_peak(self) -> List['StringIndec']:
        return [~m for m in (~self).make_end_peak()]

    def remove_left_hook(self) -> Optional['StringIndec']:
        """Drop everything up to and including the first arrow; None if there is none."""
        if not self.starts_deep():
            raise BrokenInvariantError(f"{self} should start in a deep")
        index = next((i for i, letter in enumerate(self.word) if letter.is_arrow), None)
        if index is None:
            return None
        return self.sub_word(index + 1, len(self.word))

    def remove_left_cohook(self) -> Optional['StringIndec']:
        """Drop everything up to and including the first inverse letter."""
        if not self.starts_peak():
            raise BrokenInvariantError(f"{self} should start on a peak")
        index = next((i for i, letter in enumerate(self.word) if not letter.is_arrow), None)
        if index is None:
            return None
        return self.sub_word(index + 1, len(self.word))

    def remove_right_hook(self) -> Optional['StringIndec']:
        result = (~self).remove_left_hook()
        return None if result is None else ~result

    def remove_right_cohook(self) -> Optional['StringIndec']:
        result = (~self).remove_left_cohook()
        return None if result is None else ~result

    def add_right_hook(self) -> List['StringIndec']:
        self._require_string_combinatorics()
        word = self.word
        return [self._wrap(word * ~arrow).make_end_deep()[0]
                for arrow in self.algebra.quiver.arrows_to(word.target)
                if self.algebra.is_legal(word * ~arrow)]

    def add_left_hook(self) -> List['StringIndec']:
        return [~m for m in (~self).add_right_hook()]

    def add_right_cohook(self) -> List['StringIndec']:
        self._require_string_combinatorics()
        word = self.word
        return [self._wrap(word * arrow).make_end_peak()[0]
                for arrow in self.algebra.quiver.arrows_from(word.target)
                if self.algebra.is_legal(word * arrow)]

    def add_left_cohook(self) -> List['StringIndec']:
        return [~m for m in (~self).add_right_cohook()]

    # Projectivity and almost split sequences

    def is_projective(self) -> bool:
        self._require_string_combinatorics()
        tops = self.top_vertices()
        if tops[0] in self.algebra.biserial_top_vertices:
            return False
        return len(tops) == 1 and self.starts_deep() and self.ends_deep()

    def is_injective(self) -> bool:
        self._require_string_combinatorics()
        socles = self.socle_vertices()
        if socles[0] in self.algebra.biserial_socle_vertices:
            return False
        return len(socles) == 1 and self.starts_peak() and self.ends_peak()

    def _is_biserial_radical(self) -> bool:
        socles = self.socle_vertices()
        return (len(socles) == 1 and socles[0] in self.algebra.biserial_socle_vertices
                and self.dim() + 1 == self.algebra.inj_at(socles[0]).dim())

    def _is_biserial_coradical(self) -> bool:
        tops = self.top_vertices()
        return (len(tops) == 1 and tops[0] in self.algebra.biserial_top_vertices
                and self.dim() + 1 == self.algebra.proj_at(tops[0]).dim())

    def source_sequence(self) -> Tuple[List[Indec], Optional[Indec]]:
        self._require_string_combinatorics()
        if self._is_biserial_radical():
            # 0 -> rad P -> rad P / soc P + P -> P / soc P -> 0
            proj = self.algebra.inj_at(self.socle_vertices()[0])
            corad = proj.coradical()[0]
            return corad.radical() + [proj], corad

        left = self.starts_peak()
        right = self.ends_peak()
        if not left and not right:
            if self.is_simple():
                middle = self.add_left_hook()
            else:
                middle = self.add_left_hook() + self.add_right_hook()
            if len(middle) == 2:
                tau_minus = self.add_left_hook()[0].add_right_hook()[0]
            elif len(middle) == 1:
                extended = self.add_right_hook()[0]
                tau_minus = extended.sub_word(1, len(extended.word))
            else:
                raise BrokenInvariantError(f"Middle term of {self} has {len(middle)} summands")
        elif left and not right:
            middle = [m for m in self.add_right_hook() + [self.remove_left_cohook()] if m is not None]
            tau_minus = _required(self.add_right_hook()[0].remove_left_cohook(), self)
        elif not left:
            middle = [m for m in self.add_left_hook() + [self.remove_right_cohook()] if m is not None]
            tau_minus = _required(self.add_left_hook()[0].remove_right_cohook(), self)
        else:
            middle = [m for m in (self.remove_left_cohook(), self.remove_right_cohook()) if m is not None]
            if len(self.socle_vertices()) == 1:
                tau_minus = None
            else:
                tau_minus = _required(_required(self.remove_left_cohook(), self).remove_right_cohook(), self)
        return middle, tau_minus

    def sink_sequence(self) -> Tuple[List[Indec], Optional[Indec]]:
        self._require_string_combinatorics()
        if self._is_biserial_coradical():
            proj = self.algebra.proj_at(self.top_vertices()[0])
            rad = proj.radical()[0]
            return rad.coradical() + [proj], rad

        left = self.starts_deep()
        right = self.ends_deep()
        if not left and not right:
            if self.is_simple():
                middle = self.add_left_cohook()
            else:
                middle = self.add_left_cohook() + self.add_right_cohook()
            if len(middle) == 2:
                tau = self.add_left_cohook()[0].add_right_cohook()[0]
            elif len(middle) == 1:
                extended = self.add_left_cohook()[0]
                tau = extended.sub_word(0, len(extended.word) - 1)
            else:
                raise BrokenInvariantError(f"Middle term of {self} has {len(middle)} summands")
        elif left and not right:
            middle = [m for m in self.add_right_cohook() + [self.remove_left_hook()] if m is not None]
            tau = _required(self.add_right_cohook()[0].remove_left_hook(), self)
        elif not left:
            middle = [m for m in self.add_left_cohook() + [self.remove_right_hook()] if m is not None]
            tau = _required(self.add_left_cohook()[0].remove_right_hook(), self)
        else:
            middle = [m for m in (self.remove_left_hook(), self.remove_right_hook()) if m is not None]
            if len(self.top_vertices()) == 1:
                tau = None
            else:
                tau = _required(_required(self.remove_left_hook(), self).remove_right_hook(), self)
        return middle, tau

    def radical(self) -> List['StringIndec']:
        return self._cut_at(self.top_indices())

    def coradical(self) -> List['StringIndec']:
        return self._cut_at(self.socle_indices())

    def _cut_at(self, indices: List[int]) -> List['StringIndec']:
        # pieces left after deleting the basis vectors at the given positions
        length = len(self.word)
        result = []
        if indices[0] != 0:
            result.append(self.sub_word(0, indices[0] - 1))
        if indices[-1] != length:
            result.append(self.sub_word(indices[-1] + 1, length))
        for i, j in zip(indices, indices[1:]):
            result.append(self.sub_word(i + 1, j - 1))
        return result

    # Syzygies and cosyzygies

    def _biserial_pair_words(self, match) -> List[Word]:
        pair = next(p for p in self.algebra.bi_relations if match(p))
        return [monomial.to_word() for monomial in pair]

    def _mountain_to_valley(self, mountain: 'StringIndec') -> List[Word]:
        # Remove a mountain from its projective cover.  A non-biserial cover
        # leaves a left leg (a path) and a right leg (an inverse path); a
        # biserial one leaves a single valley.
        top = mountain.top_vertices()[0]
        word = mountain.word
        if top not in self.algebra.biserial_top_vertices:
            left_leg = ~next(iter(self.algebra.words_ending_with(
                word, add_only_inverse=True, only_maximal=True)))
            right_leg = ~next(iter(self.algebra.words_starting_with(
                word, add_only_arrow=True, only_maximal=True)))
            return [left_leg.drop(len(word)), right_leg.drop_last(len(word))]

        paths = self._biserial_pair_words(lambda p: p[0].source == top)
        top_index = mountain.top_indices()[0]
        left_arm = word.take(top_index)
        right_arm = word.drop(top_index)
        if len(right_arm) != 0:
            right_proj = next(p for p in paths if p.take(len(right_arm)) == right_arm)
            left_proj = next(p for p in paths if p != right_proj)
        else:
            left_proj = next(p for p in paths if p.take(len(left_arm)) == ~left_arm)
            right_proj = next(p for p in paths if p != left_proj)
        return [left_proj.drop(len(left_arm)) * ~right_proj.drop(len(right_arm))]

    def _valley_to_mountain(self, valley: 'StringIndec') -> List[Word]:
        socle = valley.socle_vertices()[0]
        word = valley.word
        if socle not in self.algebra.biserial_socle_vertices:
            left_arm = ~next(iter(self.algebra.words_ending_with(
                word, add_only_arrow=True, only_maximal=True))).drop_last(len(word))
            right_arm = ~next(iter(self.algebra.words_starting_with(
                word, add_only_inverse=True, only_maximal=True))).drop(len(word))
            return [left_arm, right_arm]

        paths = self._biserial_pair_words(lambda p: p[0].target == socle)
        socle_index = valley.socle_indices()[0]
        left_leg = word.take(socle_index)
        right_leg = word.drop(socle_index)
        if len(right_leg) != 0:
            right_inj = next(p for p in paths if p.take_last(len(right_leg)) == ~right_leg)
            left_inj = next(p for p in paths if p != right_inj)
        else:
            left_inj = next(p for p in paths if p.take_last(len(left_leg)) == left_leg)
            right_inj = next(p for p in paths if p != left_inj)
        return [~left_inj.drop_last(len(left_leg)) * right_inj.drop_last(len(right_leg))]

    def _glue(self, cut_indices: List[int], replace) -> List[Word]:
        indices = []
        for i in [0] + cut_indices + [len(self.word)]:
            if i not in indices:
                indices.append(i)
        pieces = [replace(self.sub_word(i, j)) for i, j in zip(indices, indices[1:])]
        words: List[Word] = []
        first = pieces[0]
        if len(first) == 1:
            intermediate = first[0]
        elif len(first) == 2:
            words.append(first[0])
            intermediate = first[1]
        else:
            raise BrokenInvariantError(f"Piece of {self} splits into {len(first)} words")
        for piece in pieces[1:]:
            intermediate = intermediate * piece[0]
            if len(piece) == 2:
                words.append(intermediate)
                intermediate = piece[1]
        words.append(intermediate)
        # the two outermost words overlap the removed module in one letter
        if len(words[0]) != 0:
            words[0] = words[0].drop(1)
        else:
            words.pop(0)
        if words:
            if len(words[-1]) != 0:
                words[-1] = words[-1].drop_last(1)
            else:
                words.pop()
        return words

    def _syzygy(self) -> List[Indec]:
        if self.is_projective():
            return []
        if self.word.is_trivial():
            return self.algebra.proj_at(self.word.source).radical()
        return [self._wrap(w) for w in self._glue(self.socle_indices(), self._mountain_to_valley)]

    def _cosyzygy(self) -> List[Indec]:
        if self.is_injective():
            return []
        if self.word.is_trivial():
            return self.algebra.inj_at(self.word.source).coradical()
        return [self._wrap(w) for w in self._glue(self.top_indices(), self._valley_to_mountain)]

    # Graph maps from covers

    def _split_for_cover(self, indices: List[int]) -> List[Range]:
        if self.algebra.bi_relations:
            raise UnsupportedOperationError("Graph maps of covers need a string algebra")
        indices = list(indices)
        if indices[0] != 0:
            indices.insert(0, 0)
        if indices[-1] != len(self.word):
            indices.append(len(self.word))
        if indices == [0]:
            indices.append(0)
        return list(zip(indices, indices[1:]))

    def proj_cover_hom(self) -> List['GraphHom']:
        """Graph maps P_i -> X from the summands of the projective cover."""
        result = []
        for i, j in self._split_for_cover(self.socle_indices()):
            extend_left = self.sub_word(i, j).make_start_deep()[0]
            left_num = len(extend_left.word) - (j - i)
            proj = extend_left.make_end_deep()[0]
            if not proj.is_projective():
                raise BrokenInvariantError(f"{proj} should be projective")
            result.append(GraphHom(proj, self, ((left_num, left_num + j - i), (i, j))))
        return result

    def inj_hull_hom(self) -> List['GraphHom']:
        """Graph maps X -> I_i into the summands of the injective hull."""
        result = []
        for i, j in self._split_for_cover(self.top_indices()):
            extend_left = self.sub_word(i, j).make_start_peak()[0]
            left_num = len(extend_left.word) - (j - i)
            inj = extend_left.make_end_peak()[0]
            if not inj.is_injective():
                raise BrokenInvariantError(f"{inj} should be injective")
            result.append(GraphHom(self, inj, ((i, j), (left_num, left_num + j - i))))
        return result


def _required(module: Optional[StringIndec], origin: StringIndec) -> StringIndec:
    if module is None:
        raise BrokenInvariantError(f"Almost split sequence of {origin} needs a nonzero translate")
    return module


class GraphHom:
    """
    A graph map between string modules.

    It identifies the quotient of ``source`` on ``ranges[0]`` with the
    submodule of ``target`` on ``ranges[1]``, either letter by letter
    (straight) or reversed.
    """

    def __init__(self, source: StringIndec, target: StringIndec, ranges: Tuple[Range, Range]):
        """
        Raises:
            PresentationError: If the two pieces don't match
        """
        self.source = source
        self.target = target
        self.ranges = ranges
        quotient = source.word.sub_word(*ranges[0])
        sub = target.word.sub_word(*ranges[1])
        if quotient != sub and quotient != ~sub:
            raise PresentationError(f"Invalid graph map: {quotient}, {sub}")
        self.is_straight = quotient == sub

    def __eq__(self, other) -> bool:
        if not isinstance(other, GraphHom):
            return NotImplemented
        return (self.source == other.source and self.target == other.target
                and self.ranges == other.ranges)

    def __hash__(self) -> int:
        return hash((self.source, self.target, self.ranges))

    def __repr__(self) -> str:
        return f"GraphHom({self.source} -> {self.target}, {self.ranges})"

    def compose(self, other: 'GraphHom') -> Optional['GraphHom']:
        """
        The composition ``other ∘ self``, or None if it is zero.

        Raises:
            ValueError: If the target of self is not the source of other
        """
        if self.target != other.source:
            raise ValueError(f"Cannot compose since {self.target} != {other.source}")
        x_quot, y_sub = self.ranges
        y_quot, z_sub = other.ranges
        inter = [k for k in range(y_sub[0], y_sub[1] + 1) if y_quot[0] <= k <= y_quot[1]]
        if not inter:
            return None
        low, high = inter[0], inter[-1]
        if self.is_straight:
            x_range = (x_quot[0] + low - y_sub[0], x_quot[0] + high - y_sub[0])
        else:
            x_range = (x_quot[0] + y_sub[1] - high, x_quot[0] + y_sub[1] - low)
        if other.is_straight:
            z_range = (z_sub[0] + low - y_quot[0], z_sub[0] + high - y_quot[0])
        else:
            z_range = (z_sub[0] + y_quot[1] - high, z_sub[0] + y_quot[1] - low)
        return GraphHom(self.source, other.target, (x_range, z_range))
