"""Tests for legality automata and the monomial, string and gentle grades."""
import pytest

from quiver_algebras import (INFINITE, AlgebraKind, Arrow, GentleAlgebra, InfiniteEnumerationError,
                             LegalityAutomaton, MonomialAlgebra, Monomial, PresentationError, Quiver,
                             QuiverAlgebra, StringAlgebra, UnsupportedOperationError, Word, classify,
                             kupisch_to_nakayama)
from quiver_algebras.automaton import forbidden_words


def loop_algebra(with_relation=True):
    x = Arrow("x", 1, 1)
    relations = [Monomial([x, x])] if with_relation else []
    return classify(Quiver([1], [x]), relations)


# --- automaton ---

def test_forbidden_words_include_inverse_pairs():
    a = Arrow("a", 1, 2)
    b = Arrow("b", 2, 3)
    forbidden = forbidden_words([a, b], [Monomial([a, b])])
    assert (a.to_letter(), b.to_letter()) in forbidden
    assert (~b, ~a) in forbidden
    assert (a.to_letter(), ~a) in forbidden
    assert (~a, a.to_letter()) in forbidden


def test_automaton_accepts_legal_words():
    a = Arrow("a", 1, 2)
    b = Arrow("b", 2, 3)
    letters = [a.to_letter(), b.to_letter(), ~a, ~b]
    automaton = LegalityAutomaton([1, 2, 3], letters, forbidden_words([a, b], [Monomial([a, b])]))
    assert automaton.accepts(a.to_word())
    assert automaton.accepts(Word.trivial(2))
    assert not automaton.accepts(a * b)
    assert not automaton.accepts(a * ~a)
    assert automaton.is_acyclic()


def test_automaton_cycle_means_infinitely_many_words(kronecker):
    assert not kronecker.word_automaton.is_acyclic()
    assert kronecker.path_automaton.is_acyclic()


# --- classification ---

def test_classify_linear(a3):
    assert isinstance(a3, GentleAlgebra)
    assert a3.kind == AlgebraKind.GENTLE
    assert a3.is_string_algebra()
    assert a3.is_gentle_algebra()


def test_classify_long_relation():
    algebra = kupisch_to_nakayama([3, 3, 2])
    assert type(algebra) is StringAlgebra
    assert algebra.kind == AlgebraKind.STRING
    assert not algebra.is_gentle_algebra()


def test_classify_monomial():
    arrows = [Arrow(label, 1, 2) for label in "abc"]
    algebra = classify(Quiver([1, 2], arrows))
    assert type(algebra) is MonomialAlgebra
    assert algebra.kind == AlgebraKind.MONOMIAL
    assert not algebra.is_string_algebra()
    assert algebra.dim() == 5
    with pytest.raises(UnsupportedOperationError):
        algebra.proj_at(1)


def test_string_algebra_rejects_three_arrows():
    arrows = [Arrow(label, 1, 2) for label in "abc"]
    with pytest.raises(PresentationError):
        StringAlgebra(Quiver([1, 2], arrows))


def test_gentle_rejects_long_relation():
    a = Arrow("a", 1, 2)
    b = Arrow("b", 2, 3)
    c = Arrow("c", 3, 4)
    with pytest.raises(PresentationError):
        GentleAlgebra(Quiver([1, 2, 3, 4], [a, b, c]), [Monomial([a, b, c])])


def test_relation_validation():
    a = Arrow("a", 1, 2)
    b = Arrow("b", 2, 3)
    quiver = Quiver([1, 2, 3], [a, b])
    with pytest.raises(PresentationError):
        classify(quiver, [Monomial([a])])
    with pytest.raises(PresentationError):
        classify(quiver, [Monomial([Arrow("z", 1, 2), b])])


def test_redundant_relations_are_dropped():
    algebra = kupisch_to_nakayama([3, 3, 2])
    assert sorted(str(r) for r in algebra.relations) == ["1*2*3", "3*1"]


# --- dimensions, paths and words ---

def test_loop_with_relation():
    algebra = loop_algebra()
    assert algebra.is_finite_dimensional()
    assert algebra.dim() == 2
    assert algebra.is_rep_finite()
    assert algebra.number_of_indecs() == 2


def test_loop_without_relation():
    algebra = loop_algebra(with_relation=False)
    assert not algebra.is_finite_dimensional()
    assert algebra.dim() == INFINITE
    with pytest.raises(InfiniteEnumerationError):
        algebra.paths_from(1)
    assert len(algebra.paths_from(1, length_bound=3)) == 4


def test_paths(a3):
    assert [str(p) for p in a3.paths_from(1)] == ["1", "a", "a*b"]
    assert [str(p) for p in a3.paths_to(3)] == ["3", "b", "a*b"]
    assert [str(p) for p in a3.paths_from(1, only_maximal=True)] == ["a*b"]
    assert a3.dim() == 6


def test_words_starting_with_illegal_word(kronecker_with_tail):
    a = kronecker_with_tail.quiver.arrow_of_label("a")
    c = kronecker_with_tail.quiver.arrow_of_label("c")
    with pytest.raises(PresentationError):
        list(kronecker_with_tail.words_starting_with(a * c))


def test_words_are_bounded(kronecker):
    assert not kronecker.is_word_finite()
    with pytest.raises(InfiniteEnumerationError):
        kronecker.words_from(1)
    words = kronecker.words_from(1, length_bound=2)
    assert all(len(w) <= 2 for w in words)
    assert Word.trivial(1) in words


# --- representation type ---

def test_kronecker_is_rep_infinite(kronecker):
    assert not kronecker.is_rep_finite()
    assert kronecker.number_of_indecs() == INFINITE
    with pytest.raises(UnsupportedOperationError):
        kronecker.to_rf_algebra()


def test_single_band(kronecker_with_tail):
    assert kronecker_with_tail.is_gentle_algebra()
    assert not kronecker_with_tail.is_rep_finite()
    assert kronecker_with_tail.is_band_finite()
    bands = kronecker_with_tail.primitive_bands()
    assert len(bands) == 1
    assert len(bands[0]) == 2
    assert bands[0].support() == {1, 2}


def test_string_indecs(a3):
    modules = a3.string_indecs()
    assert len(modules) == 6
    assert sorted(str(m) for m in modules) == ["1", "2", "3", "a", "a*b", "b"]
    assert len(a3.string_indecs(non_isomorphic=False)) == 9


def test_base_presentation_cannot_decide_legality():
    a = Arrow("a", 1, 2)
    algebra = QuiverAlgebra(Quiver([1, 2], [a]))
    with pytest.raises(UnsupportedOperationError):
        algebra.is_legal(a.to_word())
