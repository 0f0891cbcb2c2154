"""Tests for arrows, letters, monomials and words."""
import pytest

from quiver_algebras import Arrow, Monomial, PresentationError, Word

a = Arrow("a", 1, 2)
b = Arrow("b", 2, 3)
c = Arrow("c", 4, 3)


# --- letters ---

def test_inverse_letter_swaps_ends():
    letter = ~a
    assert letter.source == 2
    assert letter.target == 1
    assert str(letter) == "!a"
    assert ~letter == a.to_letter()


# --- words ---

def test_trivial_word():
    word = Word.trivial(5)
    assert word.is_trivial()
    assert len(word) == 0
    assert word.source == word.target == 5
    assert str(word) == "5"
    assert word.vertex_list() == [5]


def test_concatenation():
    word = a * b * ~c
    assert len(word) == 3
    assert word.source == 1
    assert word.target == 4
    assert str(word) == "a*b*!c"
    assert word.vertex_list() == [1, 2, 3, 4]


def test_concatenation_mismatch():
    with pytest.raises(PresentationError):
        a * c


def test_inverse_word():
    word = a * b
    inverse = ~word
    assert str(inverse) == "!b*!a"
    assert inverse.source == 3
    assert ~inverse == word


def test_word_validation():
    with pytest.raises(PresentationError):
        Word([a.to_letter()], 2, 2)
    with pytest.raises(PresentationError):
        Word([], 1, 2)
    with pytest.raises(PresentationError):
        Word.from_letters([])


def test_word_is_immutable():
    word = a * b
    with pytest.raises(AttributeError):
        word.source = 7


def test_sub_word():
    word = a * b * ~c
    assert word.sub_word(1, 3) == b * ~c
    assert word.sub_word(2, 2) == Word.trivial(3)
    assert word.drop(1) == b * ~c
    assert word.take_last(1) == (~c).to_word()
    with pytest.raises(ValueError):
        word.sub_word(2, 1)


def test_direct_and_inverse():
    assert (a * b).is_direct()
    assert not (a * b * ~c).is_direct()
    assert (~(a * b)).is_inverse()


def test_words_hash_by_value():
    assert len({a * b, a * b, ~(~(a * b))}) == 1


# --- monomials ---

def test_monomial():
    path = Monomial([a, b])
    assert len(path) == 2
    assert path.source == 1
    assert path.target == 3
    assert path.labels() == ["a", "b"]
    assert path == Monomial([a, b])
    assert path.to_word() == a * b


def test_monomial_validation():
    with pytest.raises(PresentationError):
        Monomial([])
    with pytest.raises(PresentationError):
        Monomial([b, a])
    with pytest.raises(PresentationError):
        Monomial([Arrow(None, 1, 2)])
