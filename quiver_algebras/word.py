"""Arrows, letters, monomials and words over a quiver."""

from dataclasses import dataclass
from typing import Any, Hashable, Iterable, List, Sequence, Set, Tuple, Union

from .errors import PresentationError


def vertex_sort_key(vertex: Any) -> Tuple[int, int, str]:
    """Sort key placing integer-like vertices first, in numeric order."""
    text = str(vertex)
    try:
        return (0, int(text), "")
    except ValueError:
        return (1, 0, text)


@dataclass(frozen=True)
class Arrow:
    """
    An arrow of a quiver.

    Attributes:
        label: Label of the arrow, unique within its quiver
        source: Source vertex
        target: Target vertex
        is_tau: Whether the arrow stands for an AR translation (drawn dashed)
    """
    label: Hashable
    source: Hashable
    target: Hashable
    is_tau: bool = False

    def to_letter(self) -> 'Letter':
        return Letter(self, True)

    def to_word(self) -> 'Word':
        return self.to_letter().to_word()

    def __invert__(self) -> 'Letter':
        return Letter(self, False)

    def __mul__(self, other) -> 'Word':
        return self.to_word() * other

    def info_string(self) -> str:
        return f"{self.label}: {self.source} ----> {self.target}"

    def __str__(self) -> str:
        return str(self.label)


@dataclass(frozen=True)
class Letter:
    """
    An arrow or the formal inverse of an arrow.

    Attributes:
        arrow: Underlying arrow
        is_arrow: False for the formal inverse
    """
    arrow: Arrow
    is_arrow: bool = True

    @property
    def source(self) -> Hashable:
        return self.arrow.source if self.is_arrow else self.arrow.target

    @property
    def target(self) -> Hashable:
        return self.arrow.target if self.is_arrow else self.arrow.source

    @property
    def label(self) -> Hashable:
        return self.arrow.label

    def __invert__(self) -> 'Letter':
        return Letter(self.arrow, not self.is_arrow)

    def to_word(self) -> 'Word':
        return Word((self,), self.source, self.target)

    def __mul__(self, other) -> 'Word':
        return self.to_word() * other

    def sort_key(self) -> Tuple:
        return (str(self.label), not self.is_arrow)

    def info_string(self) -> str:
        return f"{self}: {self.source} ----> {self.target}"

    def __str__(self) -> str:
        return str(self.label) if self.is_arrow else "!" + str(self.label)


class Monomial:
    """
    A nonempty path of labelled arrows.

    Monomials are the zero relations of a bound quiver and the two sides of a
    binomial relation.
    """

    __slots__ = ("arrows",)

    def __init__(self, arrows: Iterable[Arrow]):
        """
        Args:
            arrows: Arrows along the path, in order

        Raises:
            PresentationError: If the path is empty, an arrow has no label, or
                two consecutive arrows don't compose
        """
        arrows = tuple(arrows)
        if not arrows:
            raise PresentationError("A monomial must contain at least one arrow")
        for arrow in arrows:
            if arrow.label is None:
                raise PresentationError(f"Arrow {arrow.source}->{arrow.target} of a monomial needs a label")
        for first, second in zip(arrows, arrows[1:]):
            if first.target != second.source:
                raise PresentationError(
                    f"Arrows {first.label} and {second.label} don't compose in a monomial")
        self.arrows = arrows

    @property
    def source(self) -> Hashable:
        return self.arrows[0].source

    @property
    def target(self) -> Hashable:
        return self.arrows[-1].target

    def __len__(self) -> int:
        return len(self.arrows)

    def __iter__(self):
        return iter(self.arrows)

    def __eq__(self, other) -> bool:
        return isinstance(other, Monomial) and self.arrows == other.arrows

    def __hash__(self) -> int:
        return hash(self.arrows)

    def labels(self) -> List[Hashable]:
        return [arrow.label for arrow in self.arrows]

    def to_word(self) -> 'Word':
        return Word.from_letters([arrow.to_letter() for arrow in self.arrows])

    def __repr__(self) -> str:
        return f"Monomial({self})"

    def __str__(self) -> str:
        return "*".join(str(arrow) for arrow in self.arrows)


WordLike = Union['Word', Letter, Arrow]


class Word:
    """
    A sequence of letters in which consecutive letters compose.

    An empty word is the trivial path at a vertex.  A word and its formal
    inverse are different values; whether they give isomorphic modules is
    decided elsewhere.  Words of the form ``a*!a`` are allowed here and
    rejected by an algebra's legality check.
    """

    __slots__ = ("letters", "source", "target")

    def __init__(self, letters: Sequence[Letter], source: Hashable, target: Hashable,
                 check: bool = True):
        """
        Args:
            letters: Letters of the word, possibly empty
            source: Source vertex
            target: Target vertex
            check: Validate composability of the letters

        Raises:
            PresentationError: If check is set and the letters don't compose
                or don't match source and target
        """
        letters = tuple(letters)
        if check:
            if not letters:
                if source != target:
                    raise PresentationError(
                        f"Source {source} and target {target} of a trivial word must coincide")
            else:
                if letters[0].source != source or letters[-1].target != target:
                    raise PresentationError("Source or target of a word doesn't match its letters")
                for first, second in zip(letters, letters[1:]):
                    if first.target != second.source:
                        raise PresentationError(
                            f"Target of {first} and source of {second} don't coincide")
        object.__setattr__(self, "letters", letters)
        object.__setattr__(self, "source", source)
        object.__setattr__(self, "target", target)

    def __setattr__(self, name, value):
        raise AttributeError("Word is immutable")

    @classmethod
    def from_letters(cls, letters: Sequence[Letter]) -> 'Word':
        """Build a word from a nonempty letter sequence."""
        if not letters:
            raise PresentationError("Cannot infer the vertex of an empty letter sequence")
        return cls(letters, letters[0].source, letters[-1].target)

    @classmethod
    def trivial(cls, vertex: Hashable) -> 'Word':
        """The trivial word at a vertex."""
        return cls((), vertex, vertex, check=False)

    def __len__(self) -> int:
        return len(self.letters)

    def __getitem__(self, index: int) -> Letter:
        return self.letters[index]

    def __iter__(self):
        return iter(self.letters)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Word):
            return NotImplemented
        return (self.letters == other.letters and self.source == other.source
                and self.target == other.target)

    def __hash__(self) -> int:
        return hash((self.letters, self.source, self.target))

    def is_trivial(self) -> bool:
        return not self.letters

    def __mul__(self, other: WordLike) -> 'Word':
        """Concatenate with a word, letter or arrow."""
        if isinstance(other, Arrow):
            other = other.to_word()
        elif isinstance(other, Letter):
            other = other.to_word()
        elif not isinstance(other, Word):
            return NotImplemented
        if self.target != other.source:
            raise PresentationError(f"Cannot concatenate {self} and {other}")
        return Word(self.letters + other.letters, self.source, other.target, check=False)

    def __invert__(self) -> 'Word':
        """The formal inverse: letters reversed and flipped."""
        return Word(tuple(~letter for letter in reversed(self.letters)), self.target, self.source,
                    check=False)

    def vertex_at(self, index: int) -> Hashable:
        """The vertex visited after ``index`` letters."""
        return self.source if index == 0 else self.letters[index - 1].target

    def vertex_list(self) -> List[Hashable]:
        """All visited vertices in order, with repetitions; length + 1 entries."""
        return [letter.source for letter in self.letters] + [self.target]

    def support(self) -> Set[Hashable]:
        return set(self.vertex_list())

    def sub_word(self, i: int, j: int) -> 'Word':
        """
        The part of the word between vertex positions ``i`` and ``j``.

        For ``i < j`` this is letters ``i`` to ``j - 1``; for ``i == j`` it is
        the trivial word at the vertex in position ``i``.

        Raises:
            ValueError: If not 0 <= i <= j <= len(self)
        """
        if not 0 <= i <= j <= len(self.letters):
            raise ValueError(f"Invalid indices {i}, {j} for a word of length {len(self.letters)}")
        if i == j:
            return Word.trivial(self.vertex_at(i))
        return Word.from_letters(self.letters[i:j])

    def drop(self, n: int) -> 'Word':
        return self.sub_word(n, len(self))

    def drop_last(self, n: int) -> 'Word':
        return self.sub_word(0, len(self) - n)

    def take(self, n: int) -> 'Word':
        return self.sub_word(0, n)

    def take_last(self, n: int) -> 'Word':
        return self.sub_word(len(self) - n, len(self))

    def is_direct(self) -> bool:
        """True if every letter is an arrow (the word is a path)."""
        return all(letter.is_arrow for letter in self.letters)

    def is_inverse(self) -> bool:
        """True if every letter is an inverse arrow."""
        return all(not letter.is_arrow for letter in self.letters)

    def sort_key(self) -> Tuple:
        if not self.letters:
            return (0, vertex_sort_key(self.source), ())
        return (len(self.letters), (0, 0, ""), tuple(letter.sort_key() for letter in self.letters))

    def __lt__(self, other: 'Word') -> bool:
        return self.sort_key() < other.sort_key()

    def info_string(self) -> str:
        if not self.letters:
            return f"{self.source} (trivial word)"
        trace = str(self.source)
        for letter in self.letters:
            trace += f" --{letter}--> {letter.target}"
        return " ".join(str(letter) for letter in self.letters) + ": " + trace

    def __repr__(self) -> str:
        return f"Word({self})"

    def __str__(self) -> str:
        if not self.letters:
            return str(self.target)
        return "*".join(str(letter) for letter in self.letters)
