"""Translation quivers: quivers with an AR translation satisfying the mesh condition."""

from collections import Counter
from typing import Dict, Hashable, List

from .errors import PresentationError
from .quiver import Quiver
from .word import Arrow


class TranslationQuiver:
    """
    A quiver together with a translation τ, such as an Auslander-Reiten quiver.

    τ is an injective partial map on vertices.  For every x in its domain,
    the arrows ending at x correspond, with multiplicity, to the arrows
    starting at τx.  Vertices outside the domain of τ are the projectives,
    those outside its image are the injectives.
    """

    def __init__(self, quiver: Quiver, tau: Dict[Hashable, Hashable]):
        """
        Args:
            quiver: Underlying quiver, without translation arrows
            tau: Translation, x -> τx

        Raises:
            PresentationError: If τ leaves the vertex set, is not injective, or
                violates the mesh condition
        """
        self.quiver = quiver
        self.tau = dict(tau)
        vertices = set(quiver.vertices)
        if not (set(self.tau) <= vertices and set(self.tau.values()) <= vertices):
            raise PresentationError("tau should be defined on the vertex set of the quiver")
        self.tau_minus = {value: key for key, value in self.tau.items()}
        if len(self.tau_minus) != len(self.tau):
            raise PresentationError("tau should be one-to-one")

        for vertex, translate in self.tau.items():
            into_vertex = Counter(arrow.source for arrow in quiver.predecessors[vertex])
            out_of_translate = Counter(arrow.target for arrow in quiver.successors[translate])
            if into_vertex != out_of_translate:
                raise PresentationError(
                    f"Arrows to {vertex} and arrows from {translate} do not correspond")

    @property
    def vertices(self):
        return self.quiver.vertices

    @property
    def projectives(self) -> List[Hashable]:
        return [v for v in self.vertices if v not in self.tau]

    @property
    def injectives(self) -> List[Hashable]:
        return [v for v in self.vertices if v not in self.tau_minus]

    def to_quiver(self) -> Quiver:
        """The underlying quiver with one translation arrow x -> τx per mesh."""
        tau_arrows = [Arrow(None, key, value, is_tau=True) for key, value in self.tau.items()]
        return Quiver(self.quiver.vertices, list(self.quiver.arrows) + tau_arrows,
                      name=self.quiver.name)

    def visualize(self, figsize=(10, 8)) -> None:
        self.to_quiver().visualize(figsize=figsize)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TranslationQuiver):
            return NotImplemented
        return self.quiver == other.quiver and self.tau == other.tau

    def __str__(self) -> str:
        s = str(self.quiver) + "\nTranslations: "
        s += ", ".join(f"{key} --tau--> {value}" for key, value in self.tau.items())
        return s
