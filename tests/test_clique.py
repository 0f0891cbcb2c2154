"""Tests for clique search, partial orders and power sets."""
import itertools
import random

import pytest

from quiver_algebras import (PartialOrder, PresentationError, almost_maximal_cliques, cliques,
                             inclusion_order, maximal_cliques, power_set)


def complete_graph(n):
    return {i: [j for j in range(n) if j != i] for i in range(n)}


PATH = {1: [2], 2: [1, 3], 3: [2]}


# --- cliques ---

def test_cliques_of_complete_graph():
    found = list(cliques(complete_graph(4)))
    assert len(found) == 16
    assert found[0] == []
    assert len({frozenset(c) for c in found}) == 16


def test_cliques_of_path():
    found = {frozenset(c) for c in cliques(PATH)}
    assert found == {frozenset(), frozenset({1}), frozenset({2}), frozenset({3}),
                     frozenset({1, 2}), frozenset({2, 3})}


def test_maximal_cliques():
    assert {frozenset(c) for c in maximal_cliques(PATH)} == {frozenset({1, 2}), frozenset({2, 3})}
    assert [sorted(c) for c in maximal_cliques(complete_graph(3))] == [[0, 1, 2]]


def test_maximal_cliques_of_empty_graph():
    assert list(maximal_cliques({})) == [[]]
    assert list(cliques({})) == [[]]


def test_isolated_nodes():
    graph = {1: [], 2: [], 3: []}
    assert sorted(c for c in maximal_cliques(graph)) == [[1], [2], [3]]


def test_almost_maximal_cliques():
    faces = list(almost_maximal_cliques(complete_graph(3), 3))
    assert len(faces) == 3
    for face, completions in faces:
        assert len(face) == 2
        assert completions == [v for v in range(3) if v not in face]


def test_almost_maximal_cliques_of_square():
    # a 4-cycle: every vertex lies on two maximal cliques (its edges)
    square = {0: [1, 3], 1: [0, 2], 2: [1, 3], 3: [0, 2]}
    faces = dict((face[0], sorted(completions)) for face, completions in almost_maximal_cliques(square, 2))
    assert faces == {0: [1, 3], 1: [0, 2], 2: [1, 3], 3: [0, 2]}


# --- partial orders ---

def test_inclusion_order():
    order = inclusion_order([(), (1,), (2,), (1, 2)])
    assert len(order) == 4
    assert order.leq((), (1, 2))
    assert not order.leq((1,), (2,))
    assert order.geq((1, 2), (2,))
    assert order.down((1,)) == [(), (1,)]
    assert order.up((1,)) == [(1,), (1, 2)]
    assert order.is_poset()


def test_hasse_quiver():
    order = inclusion_order([(), (1,), (2,), (1, 2)])
    arrows = {(a.source, a.target) for a in order.hasse_quiver().arrows}
    assert arrows == {((1,), ()), ((2,), ()), ((1, 2), (1,)), ((1, 2), (2,))}


def test_not_a_poset():
    order = PartialOrder(["x", "y"], [("x", "x"), ("y", "y"), ("x", "y"), ("y", "x")],
                         always_poset=False)
    assert not order.is_poset()
    with pytest.raises(PresentationError):
        order.hasse_quiver()


def test_missing_reflexivity():
    order = PartialOrder(["x"], [], always_poset=False)
    assert not order.is_poset()


def test_down_of_unknown_element():
    order = inclusion_order([()])
    with pytest.raises(ValueError):
        order.down((5,))
    with pytest.raises(ValueError):
        order.up((5,))


# --- power sets ---

def test_power_set():
    subsets = power_set([1, 2, 3])
    assert len(subsets) == 8
    assert [] in subsets
    assert sorted(max(subsets, key=len)) == [1, 2, 3]


def test_power_set_with_fixed_part():
    subsets = power_set([1, 2, 3], include=[2])
    assert len(subsets) == 4
    assert all(2 in s for s in subsets)


# --- clique properties ---

def random_graph(seed, size=9, density=0.5):
    rng = random.Random(seed)
    neighbor = {v: set() for v in range(size)}
    for u, v in itertools.combinations(range(size), 2):
        if rng.random() < density:
            neighbor[u].add(v)
            neighbor[v].add(u)
    return neighbor


def is_clique(neighbor, nodes):
    return all(v in neighbor[u] for u, v in itertools.combinations(nodes, 2))


GRAPHS = [complete_graph(4), PATH, {0: [1, 3], 1: [0, 2], 2: [1, 3], 3: [0, 2]}] + [
    random_graph(seed) for seed in range(5)]


@pytest.mark.parametrize("neighbor", GRAPHS)
def test_cliques_match_brute_force(neighbor):
    nodes = list(neighbor)
    expected = {frozenset(c) for k in range(len(nodes) + 1)
                for c in itertools.combinations(nodes, k) if is_clique(neighbor, c)}
    found = [frozenset(c) for c in cliques(neighbor)]
    assert len(found) == len(set(found))
    assert set(found) == expected


@pytest.mark.parametrize("neighbor", GRAPHS)
def test_maximal_cliques_are_maximal(neighbor):
    all_cliques = {frozenset(c) for c in cliques(neighbor)}
    maximal = [frozenset(c) for c in maximal_cliques(neighbor)]
    assert len(maximal) == len(set(maximal))
    for clique in maximal:
        assert clique in all_cliques
        for v in neighbor:
            if v not in clique:
                assert not is_clique(neighbor, clique | {v})
    # every clique lies in some maximal one
    for clique in all_cliques:
        assert any(clique <= m for m in maximal)


def test_almost_maximal_cliques_of_tau_rigid_pairs(a3):
    rf = a3.to_rf_algebra()
    pairs = rf.indec_tau_rigid_pairs()
    neighbor = {p: [q for q in pairs if q != p and rf.indec_tau_rigid_pairs_ortho(p, q)] for p in pairs}
    maximal = {frozenset(c) for c in maximal_cliques(neighbor)}
    assert len(maximal) == 14
    assert all(len(m) == 3 for m in maximal)
    faces = list(almost_maximal_cliques(neighbor, 3))
    assert len(faces) == 21
    for face, completions in faces:
        assert len(face) == 2
        assert len(completions) == 2
        for v in completions:
            assert frozenset(face) | {v} in maximal
    # each face of each facet is reported exactly once
    reported = {frozenset(face) for face, _ in faces}
    assert len(reported) == len(faces)
    assert reported == {m - {v} for m in maximal for v in m}
