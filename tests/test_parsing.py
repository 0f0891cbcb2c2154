"""Tests for module references, presentations and display strings."""
import json

import pytest

from quiver_algebras import (AlgebraKind, Arrow, PresentationError, Quiver, TranslationQuiver, Word,
                             algebra_from_dict, algebra_to_dict, load_algebra, module_strings,
                             pair_strings, parse_indec, parse_monomial, parse_word,
                             quiver_to_string_quiver, save_algebra)


# --- words and modules ---

def test_parse_word(a3):
    word = parse_word(a3.quiver, "a*b")
    assert str(word) == "a*b"
    assert parse_word(a3.quiver, "a b") == word
    assert str(parse_word(a3.quiver, "!b*!a")) == "!b*!a"


def test_parse_vertex(a3):
    assert parse_word(a3.quiver, "2") == Word.trivial(2)
    assert parse_indec(a3, "2") == a3.simple_at(2)


def test_parse_unknown_label(a3):
    with pytest.raises(PresentationError):
        parse_word(a3.quiver, "a*z")
    with pytest.raises(PresentationError):
        parse_word(a3.quiver, "  ")


def test_parse_non_composable(a3):
    with pytest.raises(PresentationError):
        parse_word(a3.quiver, "b*a")


def test_parse_illegal_module(kronecker_with_tail):
    with pytest.raises(PresentationError):
        parse_indec(kronecker_with_tail, "a*c")
    assert str(parse_indec(kronecker_with_tail, "b*c")) == "b*c"


def test_parse_monomial(a3):
    path = parse_monomial(a3.quiver, "a*b")
    assert path.labels() == ["a", "b"]


def test_integer_labels():
    quiver = Quiver(["x", "y"], [Arrow(1, "x", "y")])
    assert parse_word(quiver, "1").letters[0].label == 1


# --- presentations ---

def test_algebra_dict(commutative_square):
    data = algebra_to_dict(commutative_square)
    assert data["monoRelations"] == []
    assert data["biRelations"] == [[["a", "b"], ["c", "d"]]]
    assert "isTau" not in data["quiver"]["arrows"][0]
    rebuilt = algebra_from_dict(json.loads(json.dumps(data)))
    assert rebuilt.kind == AlgebraKind.SPECIAL_BISERIAL
    assert rebuilt.number_of_indecs() == 11


def test_algebra_from_dict_classifies():
    data = {
        "quiver": {"vertices": [1, 2, 3],
                   "arrows": [{"label": "a", "from": 1, "to": 2}, {"label": "b", "from": 2, "to": 3}]},
        "monoRelations": [["a", "b"]],
    }
    algebra = algebra_from_dict(data)
    assert algebra.kind == AlgebraKind.GENTLE
    assert algebra.number_of_indecs() == 5


def test_algebra_from_dict_errors():
    with pytest.raises(PresentationError):
        algebra_from_dict({})
    data = {"quiver": {"vertices": [1, 2], "arrows": [{"label": "a", "from": 1, "to": 2}]},
            "monoRelations": [["z"]]}
    with pytest.raises(PresentationError):
        algebra_from_dict(data)


def test_save_and_load(tmp_path, kronecker_with_tail):
    filename = str(tmp_path / "algebra.json")
    save_algebra(kronecker_with_tail, filename)
    loaded = load_algebra(filename)
    assert loaded.kind == AlgebraKind.GENTLE
    assert [str(r) for r in loaded.relations] == ["a*c"]
    assert loaded.quiver == kronecker_with_tail.quiver


# --- display strings ---

def test_module_strings(a3):
    modules = [a3.proj_at(1), a3.simple_at(3), a3.inj_at(2), a3.simple_at(1)]
    assert module_strings(modules) == ["1", "3", "a", "a*b"]
    assert module_strings(modules, sort=False) == ["a*b", "3", "a", "1"]


def test_inverse_letters_sort_last(kronecker):
    modules = kronecker.string_indecs(length_bound=2, non_isomorphic=False)
    strings = module_strings(modules)
    assert strings[:2] == ["1", "2"]
    assert strings.index("b") < strings.index("!a")
    assert strings.index("b*!a") < strings.index("!a*b")


def test_pair_strings(a3):
    s1, s2, s3 = a3.simples()
    pairs = [([a3.proj_at(1), s1], [s2]), ([s3], [])]
    assert pair_strings(pairs) == [(["3"], []), (["1", "a*b"], ["2"])]


def test_quiver_to_string_quiver(a3):
    rf = a3.to_rf_algebra()
    ar_quiver = rf.ar_quiver()
    assert isinstance(ar_quiver, TranslationQuiver)
    strings = quiver_to_string_quiver(ar_quiver)
    assert sorted(strings.vertices) == ["1", "2", "3", "a", "a*b", "b"]
    assert sum(1 for a in strings.arrows if a.is_tau) == 3
    assert len(strings.arrows) == 9
