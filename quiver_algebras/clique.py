"""Bron-Kerbosch clique search over an explicit compatibility graph.

Every function takes ``neighbor``, a mapping from each node to the
collection of its neighbors, and assumes a simple graph: no loops and no
multiple edges.  Results are produced lazily, so a caller can stop early
or stay within a deadline set by ``time_limit``.
"""

from typing import Dict, Hashable, Iterable, Iterator, List, Mapping, Tuple

from .deadline import check_deadline

Neighbors = Mapping[Hashable, Iterable[Hashable]]


def _as_sets(neighbor: Neighbors) -> Dict[Hashable, set]:
    return {node: set(adjacent) for node, adjacent in neighbor.items()}


def maximal_cliques(neighbor: Neighbors) -> Iterator[List[Hashable]]:
    """
    Yield every maximal clique, using the first candidate as the pivot.

    Args:
        neighbor: Neighbors of each node

    Yields:
        Lists of nodes, in the order they entered the clique
    """
    adjacency = _as_sets(neighbor)

    def search(clique: List[Hashable], candidates: List[Hashable],
               excluded: List[Hashable]) -> Iterator[List[Hashable]]:
        check_deadline()
        if not candidates and not excluded:
            yield clique
        if not candidates:
            return
        pivot = candidates[0]
        for v in [c for c in candidates if c not in adjacency[pivot]]:
            yield from search(clique + [v],
                              [c for c in candidates if c in adjacency[v]],
                              [e for e in excluded if e in adjacency[v]])
            candidates.remove(v)
            excluded.append(v)

    return search([], list(adjacency), [])


def cliques(neighbor: Neighbors) -> Iterator[List[Hashable]]:
    """
    Yield every clique, maximal or not, the empty clique first.

    A complete graph on n nodes has 2^n cliques.
    """
    adjacency = _as_sets(neighbor)

    def search(clique: List[Hashable], candidates: List[Hashable]) -> Iterator[List[Hashable]]:
        check_deadline()
        yield clique
        for v in list(candidates):
            yield from search(clique + [v], [c for c in candidates if c in adjacency[v]])
            candidates.remove(v)

    return search([], list(adjacency))


def almost_maximal_cliques(neighbor: Neighbors, rank: int) -> Iterator[Tuple[List[Hashable], List[Hashable]]]:
    """
    Yield every clique of size rank - 1 with the nodes completing it.

    Assumes every maximal clique has exactly ``rank`` nodes, as in a
    simplicial complex of support τ-tilting pairs.  Each codimension-one
    face is reported once, together with the nodes that extend it to a
    maximal clique.

    Args:
        neighbor: Neighbors of each node
        rank: Size of every maximal clique

    Yields:
        Pairs (face, completions)
    """
    adjacency = _as_sets(neighbor)

    def search(clique: List[Hashable], candidates: List[Hashable],
               excluded: List[Hashable]) -> Iterator[Tuple[List[Hashable], List[Hashable]]]:
        check_deadline()
        if len(clique) == rank - 1:
            yield clique, candidates + excluded
            return
        for v in list(candidates):
            yield from search(clique + [v],
                              [c for c in candidates if c in adjacency[v]],
                              [e for e in excluded if e in adjacency[v]])
            candidates.remove(v)
            excluded.append(v)

    return search([], list(adjacency), [])
