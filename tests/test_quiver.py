"""Tests for quivers and translation quivers."""
import pytest

from quiver_algebras import (Arrow, InfiniteEnumerationError, PresentationError, Quiver,
                             TranslationQuiver)


def cycle_quiver(n):
    return Quiver(range(n), [Arrow(i, i, (i + 1) % n) for i in range(n)])


# --- construction ---

def test_repeated_vertex():
    with pytest.raises(PresentationError):
        Quiver([1, 1], [])


def test_arrow_outside_vertices():
    with pytest.raises(PresentationError):
        Quiver([1], [Arrow("a", 1, 2)])


def test_repeated_label():
    arrows = [Arrow("a", 1, 2), Arrow("a", 2, 1)]
    with pytest.raises(PresentationError):
        Quiver([1, 2], arrows)
    quiver = Quiver([1, 2], arrows, unique_labels=False)
    assert quiver.arrow_of_label("a") == arrows[0]


def test_label_lookup():
    quiver = Quiver([1, 2], [Arrow("a", 1, 2)])
    assert quiver.has_label("a")
    assert quiver.arrow_of_label("a").target == 2
    with pytest.raises(PresentationError):
        quiver.arrow_of_label("z")


def test_sources_and_sinks():
    quiver = Quiver([1, 2, 3], [Arrow("a", 1, 2), Arrow("b", 3, 2)])
    assert quiver.get_sources() == [1, 3]
    assert quiver.get_sinks() == [2]


# --- cycles and paths ---

def test_acyclic():
    line = Quiver([1, 2, 3], [Arrow("a", 1, 2), Arrow("b", 2, 3)])
    assert line.is_acyclic()
    assert line.topological_sort() == [1, 2, 3]
    assert not cycle_quiver(3).is_acyclic()


def test_acyclic_from_vertex():
    quiver = Quiver([1, 2, 3], [Arrow("a", 1, 2), Arrow("b", 3, 3)])
    assert quiver.is_acyclic(1)
    assert not quiver.is_acyclic(3)


def test_paths_from():
    quiver = Quiver([1, 2, 3], [Arrow("a", 1, 2), Arrow("b", 2, 3), Arrow("c", 1, 3)])
    paths = [str(p) for p in quiver.paths_from(1)]
    assert sorted(paths) == ["1", "a", "a*b", "c"]


def test_paths_from_cycle():
    with pytest.raises(InfiniteEnumerationError):
        list(cycle_quiver(2).paths_from(0))


def test_simple_cycles():
    assert len(list(cycle_quiver(4).simple_cycles())) == 1
    loops = Quiver([1], [Arrow("x", 1, 1), Arrow("y", 1, 1)])
    assert len(list(loops.simple_cycles())) == 2


def test_primitive_cycle_finite():
    assert cycle_quiver(3).primitive_cycle_finite()
    loops = Quiver([1], [Arrow("x", 1, 1), Arrow("y", 1, 1)])
    assert not loops.primitive_cycle_finite()


# --- serialization ---

def test_save_and_load(tmp_path):
    quiver = Quiver([1, 2], [Arrow("a", 1, 2)], name="A2")
    filename = tmp_path / "quiver.json"
    quiver.save(str(filename))
    loaded = Quiver.load(str(filename))
    assert loaded == quiver
    assert loaded.name == "A2"


def test_from_dict_missing_key():
    with pytest.raises(PresentationError):
        Quiver.from_dict({"vertices": [1]})


def test_to_networkx():
    quiver = Quiver([1, 2], [Arrow("a", 1, 2), Arrow("b", 1, 2)])
    graph = quiver.to_networkx()
    assert graph.number_of_nodes() == 2
    assert graph.number_of_edges() == 2


# --- translation quivers ---

def test_translation_quiver():
    # AR quiver of 1 -> 2: P2 -> P1 -> S1 with τS1 = P2
    quiver = Quiver(["P2", "P1", "S1"], [Arrow(None, "P2", "P1"), Arrow(None, "P1", "S1")])
    translation = TranslationQuiver(quiver, {"S1": "P2"})
    assert translation.projectives == ["P2", "P1"]
    assert translation.injectives == ["P1", "S1"]
    assert translation.tau_minus == {"P2": "S1"}
    assert sum(1 for a in translation.to_quiver().arrows if a.is_tau) == 1


def test_translation_quiver_mesh_violation():
    quiver = Quiver(["P2", "P1", "S1"], [Arrow(None, "P2", "P1")])
    with pytest.raises(PresentationError):
        TranslationQuiver(quiver, {"S1": "P2"})


def test_translation_not_injective():
    quiver = Quiver([1, 2, 3], [])
    with pytest.raises(PresentationError):
        TranslationQuiver(quiver, {1: 3, 2: 3})
