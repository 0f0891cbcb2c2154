"""Value types of support τ-tilting theory."""

import sys
from dataclasses import dataclass
from typing import Hashable, Iterable, NamedTuple, Optional, Tuple


class IndecTauRigidPair(NamedTuple):
    """
    An indecomposable τ-rigid pair.

    Either (M, None) for an indecomposable τ-rigid module M, or (None, v)
    for a vertex v standing in for the shifted projective P_v[1].
    """
    module: Optional[object]
    vertex: Optional[Hashable]

    def __str__(self) -> str:
        if self.module is not None:
            return str(self.module)
        return f"P{self.vertex}[1]"


def _support_sort_key(vertex: Hashable) -> Tuple[int, str]:
    text = str(vertex)
    try:
        return (int(text), text)
    except ValueError:
        return (sys.maxsize, text)


@dataclass(frozen=True)
class ModuleWithSupport:
    """
    A basic module together with a set of vertices.

    Used for support τ-tilting pairs (M, P_e) and their duals.  Both parts
    are kept sorted so that equal pairs compare and hash equal.

    Attributes:
        modules: Indecomposable summands, sorted by name
        support: Vertices, numeric names first
    """
    modules: Tuple
    support: Tuple[Hashable, ...]

    @classmethod
    def create(cls, modules: Iterable, support: Iterable[Hashable]) -> 'ModuleWithSupport':
        return cls(tuple(sorted(set(modules), key=str)),
                   tuple(sorted(set(support), key=_support_sort_key)))

    @classmethod
    def from_pairs(cls, pairs: Iterable[IndecTauRigidPair]) -> 'ModuleWithSupport':
        """Collect a clique of indecomposable τ-rigid pairs into one pair."""
        pairs = list(pairs)
        return cls.create([p.module for p in pairs if p.module is not None],
                          [p.vertex for p in pairs if p.vertex is not None])

    def __str__(self) -> str:
        modules = ", ".join(str(m) for m in self.modules)
        support = ", ".join(str(v) for v in self.support)
        return f"[[{modules}], [{support}]]"


@dataclass(frozen=True)
class TauTiltingData:
    """
    Everything attached to one torsion pair of a representation-finite algebra.

    Attributes:
        semibrick_tors: Semibrick S with T = T(S)
        torsion_class: Torsion class T
        wide_tors: Wide subcategory Filt S
        support_tau_tilting: Support τ-tilting module M with T = Fac M
        support: Vertices e of the support τ-tilting pair (M, P_e)
        silting: Vertices of the two-term silting complex, (degree 0, degree -1)
        semibrick_torf: Semibrick S' with F = F(S')
        torsion_free_class: Torsion-free class F = S^⊥
        wide_torf: Wide subcategory Filt S'
        support_tau_minus_tilting: Support τ^{-1}-tilting module N with F = Sub N
        cosupport: Vertices e of the support τ^{-1}-tilting pair (N, I_e)
        cosilting: Vertices of the two-term cosilting complex, (degree 0, degree 1)
    """
    semibrick_tors: Tuple
    torsion_class: Tuple
    wide_tors: Tuple
    support_tau_tilting: Tuple
    support: Tuple[Hashable, ...]
    silting: Tuple[Tuple[Hashable, ...], Tuple[Hashable, ...]]
    semibrick_torf: Tuple
    torsion_free_class: Tuple
    wide_torf: Tuple
    support_tau_minus_tilting: Tuple
    cosupport: Tuple[Hashable, ...]
    cosilting: Tuple[Tuple[Hashable, ...], Tuple[Hashable, ...]]

    @property
    def tau_tilting_pair(self) -> ModuleWithSupport:
        return ModuleWithSupport.create(self.support_tau_tilting, self.support)

    @property
    def tau_minus_tilting_pair(self) -> ModuleWithSupport:
        return ModuleWithSupport.create(self.support_tau_minus_tilting, self.cosupport)
