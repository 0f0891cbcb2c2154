import networkx as nx
import matplotlib.pyplot as plt
from typing import Dict, Hashable, Iterable, Iterator, List, Optional, Set
import json

from .deadline import check_deadline
from .errors import InfiniteEnumerationError, PresentationError
from .word import Arrow, Word


class Quiver:
    """
    A finite quiver (directed multigraph) with labelled arrows.

    Unlike a plain DAG, a quiver may contain oriented cycles and loops; the
    algebras built on it decide whether the resulting path spaces are finite.
    Uses adjacency list representation internally.  Instances are immutable.
    """

    def __init__(self, vertices: Iterable[Hashable], arrows: Iterable[Arrow], name: str = "",
                 unique_labels: bool = True):
        """
        Initialize a quiver.

        Args:
            vertices: Vertex tokens
            arrows: Arrows between the vertices
            name: Optional name for the quiver
            unique_labels: Reject two arrows sharing a label; label lookup then
                finds the first arrow with the label

        Raises:
            PresentationError: If a vertex is repeated, an arrow has an endpoint
                outside the vertex set, or two arrows share a label
        """
        self.name = name
        self.vertices = tuple(vertices)
        self.arrows = tuple(arrows)
        if len(set(self.vertices)) != len(self.vertices):
            raise PresentationError(f"Repeated vertex in {list(self.vertices)}")

        vertex_set = set(self.vertices)
        self._arrow_of_label: Dict[Hashable, Arrow] = {}
        # Adjacency lists: vertex -> [arrow]
        self.successors: Dict[Hashable, List[Arrow]] = {v: [] for v in self.vertices}
        self.predecessors: Dict[Hashable, List[Arrow]] = {v: [] for v in self.vertices}

        for arrow in self.arrows:
            if arrow.source not in vertex_set:
                raise PresentationError(f"Source of {arrow}: {arrow.source} is not a vertex")
            if arrow.target not in vertex_set:
                raise PresentationError(f"Target of {arrow}: {arrow.target} is not a vertex")
            if arrow.label is not None:
                if unique_labels and arrow.label in self._arrow_of_label:
                    raise PresentationError(f"Arrow label {arrow.label} is used twice")
                self._arrow_of_label.setdefault(arrow.label, arrow)
            self.successors[arrow.source].append(arrow)
            self.predecessors[arrow.target].append(arrow)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Quiver):
            return NotImplemented
        return (set(self.vertices) == set(other.vertices)
                and sorted(map(repr, self.arrows)) == sorted(map(repr, other.arrows)))

    def __hash__(self) -> int:
        return hash((frozenset(self.vertices), len(self.arrows)))

    def has_vertex(self, vertex: Hashable) -> bool:
        return vertex in self.successors

    def arrow_of_label(self, label: Hashable) -> Arrow:
        """
        Look up an arrow by its label.

        Raises:
            PresentationError: If no arrow has this label
        """
        try:
            return self._arrow_of_label[label]
        except KeyError:
            raise PresentationError(f"Arrow of label {label} doesn't exist") from None

    def has_label(self, label: Hashable) -> bool:
        return label in self._arrow_of_label

    def arrows_from(self, vertex: Hashable) -> List[Arrow]:
        """Return the arrows starting at the given vertex."""
        if vertex not in self.successors:
            raise PresentationError(f"Vertex {vertex} does not exist")
        return list(self.successors[vertex])

    def arrows_to(self, vertex: Hashable) -> List[Arrow]:
        """Return the arrows ending at the given vertex."""
        if vertex not in self.predecessors:
            raise PresentationError(f"Vertex {vertex} does not exist")
        return list(self.predecessors[vertex])

    def get_sources(self) -> List[Hashable]:
        """Return a list of all source vertices (vertices with no incoming arrows)."""
        return [v for v in self.vertices if not self.predecessors[v]]

    def get_sinks(self) -> List[Hashable]:
        """Return a list of all sink vertices (vertices with no outgoing arrows)."""
        return [v for v in self.vertices if not self.successors[v]]

    def reachable_from(self, vertex: Hashable) -> Set[Hashable]:
        """Vertices reachable from the given vertex by a path, itself included."""
        visited = {vertex}
        queue = [vertex]
        while queue:
            current = queue.pop(0)
            for arrow in self.successors[current]:
                if arrow.target not in visited:
                    visited.add(arrow.target)
                    queue.append(arrow.target)
        return visited

    def is_acyclic(self, vertex: Optional[Hashable] = None) -> bool:
        """
        Check for oriented cycles.

        Args:
            vertex: If given, only cycles reachable from this vertex count

        Returns:
            True if no (reachable) oriented cycle exists
        """
        if vertex is None:
            part = set(self.vertices)
        else:
            part = self.reachable_from(vertex)
        try:
            _kahn_order(self, part)
        except ValueError:
            return False
        return True

    def paths_from(self, vertex: Hashable) -> Iterator[Word]:
        """
        Yield every path starting at a vertex, the trivial one first.

        Raises:
            InfiniteEnumerationError: If an oriented cycle is reachable
        """
        if not self.is_acyclic(vertex):
            raise InfiniteEnumerationError(f"There are infinitely many paths from {vertex}")
        stack = [Word.trivial(vertex)]
        while stack:
            check_deadline()
            path = stack.pop()
            yield path
            for arrow in reversed(self.successors[path.target]):
                stack.append(path * arrow)

    def simple_cycles(self) -> Iterator[Word]:
        """
        Yield every simple oriented cycle exactly once.

        Cycles through the vertices in order are searched from each vertex in
        turn; once a vertex has been processed, later searches stop as soon as
        they hit it, since every cycle through it was already found.
        """
        checked: Set[Hashable] = set()
        for start in self.vertices:
            stack = [Word.trivial(start)]
            while stack:
                check_deadline()
                path = stack.pop()
                if path.target in checked:
                    continue
                vertex_list = path.vertex_list()
                index = vertex_list.index(path.target)
                if index != len(vertex_list) - 1:
                    if index == 0:
                        yield path
                    continue
                for arrow in reversed(self.successors[path.target]):
                    stack.append(path * arrow)
            checked.add(start)

    def primitive_cycle_finite(self) -> bool:
        """True if the simple cycles are pairwise vertex-disjoint."""
        seen: Set[Hashable] = set()
        for cycle in self.simple_cycles():
            support = cycle.support()
            if seen & support:
                return False
            seen |= support
        return True

    def topological_sort(self) -> List[Hashable]:
        return topological_sort(self)

    def to_networkx(self) -> nx.MultiDiGraph:
        """Convert the quiver to a networkx multigraph; edge keys are arrow labels."""
        G = nx.MultiDiGraph(name=self.name)
        for vertex in self.vertices:
            G.add_node(vertex, label=str(vertex))
        for index, arrow in enumerate(self.arrows):
            key = arrow.label if arrow.label is not None else f"_{index}"
            G.add_edge(arrow.source, arrow.target, key=key,
                       label="" if arrow.label is None else str(arrow.label), is_tau=arrow.is_tau)
        return G

    def visualize(self, figsize=(10, 8)) -> None:
        """
        Visualize the quiver using networkx and matplotlib.

        Translation arrows are drawn dashed.

        Args:
            figsize: Figure size as a tuple (width, height)
        """
        G = nx.DiGraph()
        G.add_nodes_from(self.vertices)

        edge_labels = {}
        tau_edges = []
        plain_edges = []
        for arrow in self.arrows:
            G.add_edge(arrow.source, arrow.target)
            if arrow.is_tau:
                tau_edges.append((arrow.source, arrow.target))
            else:
                plain_edges.append((arrow.source, arrow.target))
                if arrow.label is not None:
                    previous = edge_labels.get((arrow.source, arrow.target))
                    edge_labels[(arrow.source, arrow.target)] = (
                        str(arrow.label) if previous is None else f"{previous},{arrow.label}")

        plt.figure(figsize=figsize)
        pos = nx.spring_layout(G)

        nx.draw_networkx_nodes(G, pos, node_size=700, node_color="skyblue")
        nx.draw_networkx_edges(G, pos, edgelist=plain_edges, edge_color="gray", arrows=True, arrowsize=20)
        nx.draw_networkx_edges(G, pos, edgelist=tau_edges, edge_color="gray", style="dashed",
                               arrows=True, arrowsize=20)

        nx.draw_networkx_labels(G, pos, labels={v: str(v) for v in self.vertices}, font_size=12)
        nx.draw_networkx_edge_labels(G, pos, edge_labels=edge_labels, font_size=10)

        plt.axis("off")
        plt.title(f"Quiver: {self.name}" if self.name else "Quiver")
        plt.tight_layout()
        plt.show()

    def to_dict(self) -> Dict:
        """Convert the quiver to a dictionary for serialization."""
        return {
            "name": self.name,
            "vertices": list(self.vertices),
            "arrows": [
                {"label": arrow.label, "from": arrow.source, "to": arrow.target, "isTau": arrow.is_tau}
                for arrow in self.arrows
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Quiver':
        """
        Create a quiver from a dictionary.

        Raises:
            PresentationError: If a required key is missing
        """
        try:
            arrows = [
                Arrow(item.get("label"), item["from"], item["to"], bool(item.get("isTau", False)))
                for item in data["arrows"]
            ]
            return cls(data["vertices"], arrows, name=data.get("name", ""))
        except KeyError as e:
            raise PresentationError(f"Missing key {e} in quiver data") from e

    def save(self, filename: str) -> None:
        """Save the quiver to a JSON file."""
        with open(filename, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filename: str) -> 'Quiver':
        """Load a quiver from a JSON file."""
        with open(filename, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)

    def __repr__(self) -> str:
        return f"Quiver(vertices={list(self.vertices)}, arrows={len(self.arrows)})"

    def __str__(self) -> str:
        """String representation of the quiver."""
        s = f"Quiver '{self.name}' with {len(self.vertices)} vertices and {len(self.arrows)} arrows\n"
        s += "Vertices: " + ", ".join(str(v) for v in self.vertices) + "\n"
        s += "Arrows: " + ", ".join(
            f"{a.source}→{a.target}" + ("" if a.label is None else f" ({a.label})")
            for a in self.arrows
        )
        return s


def _kahn_order(quiver: Quiver, part: Set[Hashable]) -> List[Hashable]:
    in_degree = {v: 0 for v in quiver.vertices if v in part}
    for v in in_degree:
        for arrow in quiver.predecessors[v]:
            if arrow.source in part:
                in_degree[v] += 1

    queue = [v for v in in_degree if in_degree[v] == 0]
    result = []
    while queue:
        v = queue.pop(0)
        result.append(v)
        for arrow in quiver.successors[v]:
            in_degree[arrow.target] -= 1
            if in_degree[arrow.target] == 0:
                queue.append(arrow.target)

    if len(result) != len(in_degree):
        raise ValueError("Quiver contains a cycle")
    return result


def topological_sort(quiver: Quiver) -> List[Hashable]:
    """
    Perform a topological sort of the quiver vertices.

    Returns:
        A list of vertices in topological order (sources first)

    Raises:
        ValueError: If the quiver has an oriented cycle
    """
    return _kahn_order(quiver, set(quiver.vertices))
