"""Indecomposable modules over a finite-dimensional algebra."""

from typing import FrozenSet, Hashable, List, Optional, Tuple, Union

import numpy as np

from .algebra import INFINITE
from .deadline import check_deadline


def distinct_modules(modules) -> List:
    """Drop isomorphic repetitions, keeping the first occurrence."""
    result = []
    for module in modules:
        if not any(module.is_isomorphic(kept) for kept in result):
            result.append(module)
    return result


class Indec:
    """
    An indecomposable module.

    Subclasses describe the module combinatorially and implement the
    primitive operations (vertex multiset, top and socle, Hom into another
    indecomposable, syzygy, cosyzygy and the almost split sequences); every
    homological invariant is derived from those here.
    """

    algebra = None

    # Identity

    def key(self) -> Hashable:
        """A hashable value identifying this presentation of the module."""
        raise NotImplementedError

    def iso_keys(self) -> FrozenSet[Hashable]:
        """Keys of every presentation of a module isomorphic to this one."""
        return frozenset([self.key()])

    def canonical_key(self) -> Hashable:
        """Key shared by all isomorphic presentations."""
        return min(self.iso_keys(), key=repr)

    def is_isomorphic(self, other: Optional['Indec']) -> bool:
        if other is None or other.algebra is not self.algebra:
            return False
        return other.key() in self.iso_keys()

    # Primitive operations

    def vertex_list(self) -> List[Hashable]:
        """Vertices of a basis, with repetitions."""
        raise NotImplementedError

    def top_vertices(self) -> List[Hashable]:
        raise NotImplementedError

    def socle_vertices(self) -> List[Hashable]:
        raise NotImplementedError

    def is_projective(self) -> bool:
        raise NotImplementedError

    def is_injective(self) -> bool:
        raise NotImplementedError

    def hom(self, other: 'Indec') -> int:
        raise NotImplementedError

    def ext1(self, other: 'Indec') -> int:
        """dim Ext^1(X, Y) from the projective cover sequence of X."""
        raise NotImplementedError

    def stable_hom(self, other: 'Indec') -> int:
        raise NotImplementedError

    def inj_stable_hom(self, other: 'Indec') -> int:
        raise NotImplementedError

    def radical(self) -> List['Indec']:
        raise NotImplementedError

    def coradical(self) -> List['Indec']:
        raise NotImplementedError

    def sink_sequence(self) -> Tuple[List['Indec'], Optional['Indec']]:
        """(middle term, τX) of the almost split sequence ending at X."""
        raise NotImplementedError

    def source_sequence(self) -> Tuple[List['Indec'], Optional['Indec']]:
        """(middle term, τ^{-1}X) of the almost split sequence starting at X."""
        raise NotImplementedError

    def _syzygy(self) -> List['Indec']:
        raise NotImplementedError

    def _cosyzygy(self) -> List['Indec']:
        raise NotImplementedError

    # Derived invariants

    def dim(self) -> int:
        return len(self.vertex_list())

    def is_simple(self) -> bool:
        return self.dim() == 1

    def is_brick(self) -> bool:
        """True if the endomorphism ring is a division ring."""
        return self.algebra.hom(self, self) == 1

    def support(self) -> set:
        return set(self.vertex_list())

    def dimension_vector(self) -> np.ndarray:
        """Composition multiplicities, ordered like ``algebra.vertices``."""
        vertex_list = self.vertex_list()
        return np.array([vertex_list.count(v) for v in self.algebra.vertices], dtype=int)

    def ext(self, other, n: int = 1) -> int:
        return self.algebra.ext(self, other, n)

    def top(self) -> List['Indec']:
        return [self.algebra.simple_at(v) for v in self.top_vertices()]

    def socle(self) -> List['Indec']:
        return [self.algebra.simple_at(v) for v in self.socle_vertices()]

    def syzygy(self, n: int = 1) -> List['Indec']:
        """
        Indecomposable summands of the n-th syzygy.

        Raises:
            ValueError: If n is negative
        """
        if n < 0:
            raise ValueError(f"Syzygy degree must be non-negative, got {n}")
        if n == 0:
            return [self]
        if n == 1:
            return self.algebra._syzygy_table.get_or_compute(self.canonical_key(), self._syzygy)
        result = [self]
        for _ in range(n):
            check_deadline()
            result = [s for m in result for s in m.syzygy()]
        return result

    def cosyzygy(self, n: int = 1) -> List['Indec']:
        """
        Indecomposable summands of the n-th cosyzygy.

        Raises:
            ValueError: If n is negative
        """
        if n < 0:
            raise ValueError(f"Cosyzygy degree must be non-negative, got {n}")
        if n == 0:
            return [self]
        if n == 1:
            return self.algebra._cosyzygy_table.get_or_compute(self.canonical_key(), self._cosyzygy)
        result = [self]
        for _ in range(n):
            check_deadline()
            result = [s for m in result for s in m.cosyzygy()]
        return result

    def proj_cover(self) -> List['Indec']:
        return self.algebra.proj_cover(self)

    def inj_hull(self) -> List['Indec']:
        return self.algebra.inj_hull(self)

    def proj_presentation_as_vertices(self) -> Tuple[List[Hashable], List[Hashable]]:
        """Vertices of P1 and P0 in a minimal projective presentation P1 -> P0 -> X."""
        return self.top_vertices(), self.algebra.top_vertices(self.syzygy())

    def theta_plus(self) -> List['Indec']:
        """Middle term of the almost split sequence ending at this module."""
        return self.sink_sequence()[0]

    def theta_minus(self) -> List['Indec']:
        """Middle term of the almost split sequence starting at this module."""
        return self.source_sequence()[0]

    def tau_plus(self) -> Optional['Indec']:
        return self.algebra.tau_plus(self)

    def tau_minus(self) -> Optional['Indec']:
        return self.algebra.tau_minus(self)

    def _resolution_depth(self, step) -> Union[int, float]:
        # Longest chain of (co)syzygy summands; a repeat along a chain means
        # the resolution never stops.
        paths = [[self]]
        longest = 1
        while paths:
            check_deadline()
            path = paths.pop(0)
            longest = max(longest, len(path))
            for module in distinct_modules(step(path[-1])):
                if any(module.is_isomorphic(m) for m in path):
                    return INFINITE
                paths.append(path + [module])
        return longest - 1

    def proj_dim(self) -> Union[int, float]:
        return self._resolution_depth(lambda m: m.syzygy())

    def inj_dim(self) -> Union[int, float]:
        return self._resolution_depth(lambda m: m.cosyzygy())

    def _dominance(self, is_good, step) -> Union[int, float]:
        queue = [(self, 1)]
        visited = {self.canonical_key()}
        while queue:
            check_deadline()
            module, length = queue.pop(0)
            if not is_good(module):
                return length - 1
            for following in step(module):
                if following.canonical_key() in visited:
                    continue
                visited.add(following.canonical_key())
                queue.append((following, length + 1))
        return INFINITE

    def dominant_dim(self) -> Union[int, float]:
        """Number of leading projective terms of a minimal injective resolution."""
        return self._dominance(lambda m: all(i.is_projective() for i in m.inj_hull()),
                               lambda m: m.cosyzygy())

    def co_dominant_dim(self) -> Union[int, float]:
        """Number of leading injective terms of a minimal projective resolution."""
        return self._dominance(lambda m: all(p.is_injective() for p in m.proj_cover()),
                               lambda m: m.syzygy())

    def all_syzygies(self) -> List['Indec']:
        """This module and every indecomposable iterated syzygy, up to isomorphism."""
        found = [self]
        queue = [self]
        while queue:
            check_deadline()
            current = queue.pop(0)
            for module in current.syzygy():
                if any(module.is_isomorphic(m) for m in found):
                    continue
                found.append(module)
                queue.append(module)
        return found

    def is_n_torsionless(self, n: int) -> bool:
        """True if Ext^i(DA, τX) = 0 for 1 <= i <= n."""
        injs = self.algebra.injs()
        tau = self.tau_plus()
        return all(self.algebra.ext(injs, tau, i) == 0 for i in range(1, n + 1))

    def is_infinite_torsionless(self) -> bool:
        return self.algebra.higher_ext_zero(self.algebra.injs(), self.tau_plus())

    def is_torsionless(self) -> bool:
        """True if the module embeds into a projective."""
        if self.is_projective():
            return True
        cosyzygy = self.cosyzygy()
        if len(cosyzygy) != 1:
            return False
        quotient = cosyzygy[0]
        return self.dim() + quotient.dim() == sum(p.dim() for p in quotient.proj_cover())

    def is_reflexive(self) -> bool:
        return self.is_n_torsionless(2)

    def is_semi_gorenstein_proj(self) -> bool:
        return self.algebra.higher_ext_zero(self, self.algebra.projs())

    def is_gorenstein_proj(self) -> bool:
        return self.is_semi_gorenstein_proj() and self.is_infinite_torsionless()

    def is_self_orthogonal(self) -> bool:
        return self.algebra.higher_ext_zero(self, self)

    def syzygy_inverse(self, n: int = 1) -> List['Indec']:
        """τ^{-1} Ω^{-n} τ X, summand by summand."""
        tau = self.tau_plus()
        if tau is None:
            return []
        result = []
        for module in tau.cosyzygy(n):
            translate = module.tau_minus()
            if translate is not None:
                result.append(translate)
        return result

    def sort_key(self) -> Tuple:
        return (self.dim(), str(self).replace("!", "~"))

    def __lt__(self, other: 'Indec') -> bool:
        return self.sort_key() < other.sort_key()
