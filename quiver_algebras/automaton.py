"""Finite automaton deciding legality of words in a monomial algebra.

A word is legal when no forbidden word occurs in it as a contiguous piece.
The forbidden words are the zero relations, their inverses, and ``a*!a`` and
``!a*a`` for every arrow.  A state is a vertex together with the longest
suffix of the word read so far that could still grow into a forbidden word,
so states are bounded by the longest forbidden word and the automaton is
finite even when the set of legal words is not.
"""

import logging
from typing import Dict, Hashable, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .deadline import check_deadline
from .quiver import Quiver
from .word import Arrow, Letter, Word

logger = logging.getLogger(__name__)

State = Tuple[Hashable, Tuple[Letter, ...]]


def forbidden_words(arrows: Iterable[Arrow], relations: Iterable[Sequence[Arrow]]) -> List[Tuple[Letter, ...]]:
    """Letter sequences that may not occur inside a legal word."""
    forbidden = []
    for relation in relations:
        letters = tuple(arrow.to_letter() for arrow in relation)
        forbidden.append(letters)
        forbidden.append(tuple(~letter for letter in reversed(letters)))
    for arrow in arrows:
        forbidden.append((arrow.to_letter(), ~arrow))
        forbidden.append((~arrow, arrow.to_letter()))
    return forbidden


class LegalityAutomaton:
    """
    Deterministic automaton over (vertex, dangerous suffix) states.

    The transitions form a Quiver whose vertices are states; its arrows are
    labelled ``(state, letter)`` so that labels stay unique.  Reading a word
    from an initial state never fails exactly when the word is legal, and the
    set of legal words over the alphabet is finite exactly when the
    transition quiver has no oriented cycle.
    """

    def __init__(self, vertices: Sequence[Hashable], alphabet: Sequence[Letter],
                 forbidden: Sequence[Tuple[Letter, ...]]):
        """
        Build the automaton by breadth-first search from the initial states.

        Args:
            vertices: Vertices of the underlying quiver
            alphabet: Letters that may be read (arrows only, or arrows and inverses)
            forbidden: Forbidden letter sequences
        """
        self.alphabet = tuple(alphabet)
        self.forbidden = tuple(forbidden)
        self._forbidden_set = set(self.forbidden)
        self._max_forbidden = max((len(word) for word in self.forbidden), default=0)
        self._prefixes: Set[Tuple[Letter, ...]] = {
            word[:i] for word in self.forbidden for i in range(1, len(word) + 1)
        }
        self._letters_from: Dict[Hashable, List[Letter]] = {v: [] for v in vertices}
        for letter in self.alphabet:
            self._letters_from[letter.source].append(letter)

        self.initial_states = [(v, ()) for v in vertices]
        self.transitions: Dict[State, Dict[Letter, State]] = {}
        states: List[State] = list(self.initial_states)
        seen = set(states)
        queue = list(states)
        transition_arrows = []
        while queue:
            check_deadline()
            current = queue.pop(0)
            table = self.transitions.setdefault(current, {})
            for letter in self._letters_from[current[0]]:
                next_state = self.transition(current, letter)
                if next_state is None:
                    continue
                table[letter] = next_state
                transition_arrows.append(Arrow((current, letter), current, next_state))
                if next_state not in seen:
                    seen.add(next_state)
                    states.append(next_state)
                    queue.append(next_state)
        self.states = states
        self.quiver = Quiver(states, transition_arrows)
        logger.debug("Built automaton with %d states and %d transitions",
                     len(states), len(transition_arrows))

    def transition(self, state: State, letter: Letter) -> Optional[State]:
        """
        The state reached by reading a letter, or None if the letter is illegal here.

        Args:
            state: Current (vertex, suffix) state
            letter: Letter to read

        Returns:
            The next state, whose suffix is the longest suffix of the extended
            word that is a prefix of some forbidden word
        """
        vertex, suffix = state
        if letter.source != vertex:
            return None
        candidate = suffix + (letter,)
        for length in range(2, min(len(candidate), self._max_forbidden) + 1):
            if candidate[-length:] in self._forbidden_set:
                return None
        for start in range(len(candidate)):
            tail = candidate[start:]
            if tail in self._prefixes:
                return (letter.target, tail)
        # a letter followed by its inverse is forbidden, so this is unreachable
        # unless the forbidden list was built without those words
        return (letter.target, ())

    def initial_state(self, vertex: Hashable) -> State:
        return (vertex, ())

    def accepts(self, word: Word) -> bool:
        """Decide legality of a word by running it through the automaton."""
        state = self.initial_state(word.source)
        for letter in word.letters:
            state = self.transitions.get(state, {}).get(letter)
            if state is None:
                return False
        return True

    def is_acyclic(self, vertex: Optional[Hashable] = None) -> bool:
        """
        True if only finitely many legal words exist.

        Args:
            vertex: If given, only words starting at this vertex count
        """
        if vertex is None:
            return self.quiver.is_acyclic()
        return self.quiver.is_acyclic(self.initial_state(vertex))

    def letter_cycles(self) -> Iterator[Tuple[Letter, ...]]:
        """Yield the letter sequences of the simple cycles of the transition quiver."""
        for cycle in self.quiver.simple_cycles():
            yield tuple(letter.label[1] for letter in cycle.letters)

    def primitive_cycle_finite(self) -> bool:
        return self.quiver.primitive_cycle_finite()

    def __len__(self) -> int:
        return len(self.states)


def is_rotation(first: Sequence, second: Sequence) -> bool:
    """True if ``first`` is a cyclic rotation of ``second``."""
    if len(first) != len(second):
        return False
    if not first:
        return True
    doubled = tuple(second) + tuple(second)
    first = tuple(first)
    return any(doubled[i:i + len(first)] == first for i in range(len(second)))


def primitive_bands(automaton: LegalityAutomaton) -> List[Word]:
    """
    Primitive bands from the simple cycles of a word automaton.

    Each band shows up twice, once as a cycle and once (up to rotation) as the
    cycle of its inverse; only the first of the two is kept.
    """
    result: List[Word] = []
    for letters in automaton.letter_cycles():
        word = Word.from_letters(letters)
        if any(is_rotation(word.letters, (~band).letters) for band in result):
            continue
        result.append(word)
    return result
