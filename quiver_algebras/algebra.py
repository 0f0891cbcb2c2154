"""Operations shared by every finite-dimensional algebra.

Hom, stable Hom and Ext dimensions are computed from the module combinatorics
of the concrete ``Indec`` classes and combined here.  Every binary operation
accepts a single module, ``None`` (the zero module) or any iterable of them
on either side, and adds up over summands.
"""

import logging
import math
import threading
from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np

from .deadline import check_deadline
from .errors import BrokenInvariantError, UnsupportedOperationError
from .quiver import Quiver
from .word import Arrow

logger = logging.getLogger(__name__)

# Value reported for unbounded dimensions and counts.
INFINITE = math.inf


class MemoTable:
    """
    A thread-safe memo table keyed by canonical module keys.

    The lock only guards the dictionary, so a memoized computation may call
    back into the same table.  If two threads race on a key, both compute and
    the first result stored wins.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._data: Dict[Hashable, Any] = {}
        self._lock = threading.RLock()

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        with self._lock:
            if key in self._data:
                return self._data[key]
        value = compute()
        with self._lock:
            return self._data.setdefault(key, value)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._data


def summands(modules) -> List:
    """Flatten an Indec, None or an iterable of them into a list of nonzero summands."""
    if modules is None:
        return []
    if hasattr(modules, "key") and hasattr(modules, "algebra"):
        return [modules]
    return [m for m in modules if m is not None]


def _finite_max(values: Iterable[float]) -> float:
    result = 0
    for value in values:
        if value == INFINITE:
            return INFINITE
        result = max(result, value)
    return result


class Algebra:
    """
    Base class for finite-dimensional algebras given by their indecomposables.

    Subclasses provide the vertices and the simple, projective and
    injective modules.  Memo tables live on the instance, so an algebra must
    be rebuilt, never patched, when its presentation changes.
    """

    vertices: Tuple[Hashable, ...] = ()

    def __init__(self):
        self._hom_table = MemoTable("hom")
        self._ext1_table = MemoTable("ext1")
        self._tau_plus_table = MemoTable("tau_plus")
        self._tau_minus_table = MemoTable("tau_minus")
        self._syzygy_table = MemoTable("syzygy")
        self._cosyzygy_table = MemoTable("cosyzygy")

    def clear_caches(self) -> None:
        """Drop every memoized Hom/Ext/τ/syzygy result."""
        for table in (self._hom_table, self._ext1_table, self._tau_plus_table,
                      self._tau_minus_table, self._syzygy_table, self._cosyzygy_table):
            table.clear()

    # Capability queries, refined by subclasses

    def is_string_algebra(self) -> bool:
        return False

    def is_gentle_algebra(self) -> bool:
        return False

    def number_of_indecs(self) -> Union[int, float]:
        raise UnsupportedOperationError(f"{type(self).__name__} cannot count its indecomposables")

    def dim(self) -> Union[int, float]:
        raise UnsupportedOperationError(f"{type(self).__name__} cannot compute its dimension")

    def is_rep_finite(self) -> bool:
        raise UnsupportedOperationError(
            f"{type(self).__name__} cannot decide representation-finiteness")

    def to_rf_algebra(self, verify_ar_quiver: Optional[bool] = None):
        raise UnsupportedOperationError(
            f"{type(self).__name__} cannot be converted to a representation-finite algebra")

    def simple_at(self, vertex: Hashable):
        raise UnsupportedOperationError(f"{type(self).__name__} has no simple modules")

    def proj_at(self, vertex: Hashable):
        raise UnsupportedOperationError(f"{type(self).__name__} has no projective modules")

    def inj_at(self, vertex: Hashable):
        raise UnsupportedOperationError(f"{type(self).__name__} has no injective modules")

    def rank(self) -> int:
        """Number of vertices, that is, of simple modules."""
        return len(self.vertices)

    def is_finite_dimensional(self) -> bool:
        return self.dim() != INFINITE

    def simples(self) -> List:
        return [self.simple_at(v) for v in self.vertices]

    def projs(self) -> List:
        return [self.proj_at(v) for v in self.vertices]

    def injs(self) -> List:
        return [self.inj_at(v) for v in self.vertices]

    # Hom and Ext

    def _single_hom(self, x, y) -> int:
        return self._hom_table.get_or_compute((x.canonical_key(), y.canonical_key()), lambda: x.hom(y))

    def hom(self, x, y) -> int:
        """Dimension of Hom(X, Y), added up over the summands of X and Y."""
        return sum(self._single_hom(a, b) for a in summands(x) for b in summands(y))

    def hom_zero(self, x, y) -> bool:
        return self.hom(x, y) == 0

    def stable_hom(self, x, y) -> int:
        """Dimension of Hom modulo maps factoring through projectives."""
        return sum(a.stable_hom(b) for a in summands(x) for b in summands(y))

    def inj_stable_hom(self, x, y) -> int:
        """Dimension of Hom modulo maps factoring through injectives."""
        return sum(a.inj_stable_hom(b) for a in summands(x) for b in summands(y))

    def _single_ext1(self, x, y) -> int:
        # Auslander-Reiten formula: Ext^1(X, Y) = D stable-Hom(τ^{-1}Y, X)
        return self._ext1_table.get_or_compute(
            (x.canonical_key(), y.canonical_key()), lambda: self.stable_hom(self.tau_minus(y), x))

    def ext1(self, x, y) -> int:
        return sum(self._single_ext1(a, b) for a in summands(x) for b in summands(y))

    def ext(self, x, y, n: int = 1) -> int:
        """
        Dimension of Ext^n(X, Y).

        Args:
            x: Module(s) in the first argument
            y: Module(s) in the second argument
            n: Degree; 0 gives Hom

        Raises:
            ValueError: If n is negative
        """
        if n < 0:
            raise ValueError(f"Degree must be non-negative, got {n}")
        if n == 0:
            return self.hom(x, y)
        if n == 1:
            return self.ext1(x, y)
        # dimension shift: Ext^n(X, Y) = Ext^1(Ω^{n-1}X, Y)
        return sum(self.ext1(a.syzygy(n - 1), y) for a in summands(x))

    def higher_ext_zero(self, x, y) -> bool:
        """True if Ext^i(X, Y) = 0 for every i > 0."""
        xs = summands(x)
        ys = summands(y)
        for a in xs:
            syzygies = a.all_syzygies()
            for b in ys:
                if self.ext1(syzygies, b) != 0:
                    return False
        return True

    def ext_proj(self, modules: Iterable) -> List:
        """Modules X of the collection C with Ext^1(X, C) = 0."""
        modules = list(modules)
        return [m for m in modules if self.ext1(m, modules) == 0]

    def ext_inj(self, modules: Iterable) -> List:
        """Modules X of the collection C with Ext^1(C, X) = 0."""
        modules = list(modules)
        return [m for m in modules if self.ext1(modules, m) == 0]

    def tau_plus(self, x):
        """AR translate τX, or None if X is projective."""
        return self._tau_plus_table.get_or_compute(x.canonical_key(), lambda: x.sink_sequence()[1])

    def tau_minus(self, x):
        """Inverse AR translate τ^{-1}X, or None if X is injective."""
        if x is None:
            return None
        return self._tau_minus_table.get_or_compute(x.canonical_key(), lambda: x.source_sequence()[1])

    # Syzygies and homological dimensions

    def syzygy(self, modules) -> List:
        return [s for m in summands(modules) for s in m.syzygy()]

    def cosyzygy(self, modules) -> List:
        return [s for m in summands(modules) for s in m.cosyzygy()]

    def top_vertices(self, modules) -> List[Hashable]:
        return [v for m in summands(modules) for v in m.top_vertices()]

    def socle_vertices(self, modules) -> List[Hashable]:
        return [v for m in summands(modules) for v in m.socle_vertices()]

    def proj_cover(self, modules) -> List:
        return [self.proj_at(v) for v in self.top_vertices(modules)]

    def inj_hull(self, modules) -> List:
        return [self.inj_at(v) for v in self.socle_vertices(modules)]

    def syzygy_quiver_from(self, modules: Iterable, cosyzygy: bool = False) -> Quiver:
        """
        The quiver of (co)syzygies reachable from the given modules.

        Each module has an arrow to every indecomposable summand of its
        syzygy (or cosyzygy), with isomorphic modules identified.
        """
        found = list(modules)
        arrows = []
        queue = list(found)
        while queue:
            check_deadline()
            current = queue.pop(0)
            next_modules = current.cosyzygy() if cosyzygy else current.syzygy()
            for module in next_modules:
                already = next((m for m in found if m.is_isomorphic(module)), None)
                if already is not None:
                    arrows.append(Arrow(None, current, already))
                    continue
                arrows.append(Arrow(None, current, module))
                found.append(module)
                queue.append(module)
        return Quiver(found, arrows)

    def proj_dim(self, modules) -> Union[int, float]:
        """Projective dimension of a direct sum; 0 for the zero module."""
        return _finite_max(m.proj_dim() for m in summands(modules))

    def inj_dim(self, modules) -> Union[int, float]:
        return _finite_max(m.inj_dim() for m in summands(modules))

    def dominant_dim(self, modules=None) -> Union[int, float]:
        """Dominant dimension of the given modules, or of the algebra when omitted."""
        if modules is None:
            modules = self.projs()
        return min((m.dominant_dim() for m in summands(modules)), default=INFINITE)

    def co_dominant_dim(self, modules=None) -> Union[int, float]:
        if modules is None:
            modules = self.injs()
        return min((m.co_dominant_dim() for m in summands(modules)), default=INFINITE)

    def proj_resolution_with_syzygy_sequence(self, modules) -> Iterator[Tuple[List[Hashable], List]]:
        """
        Yield (tops of P_i, Ω^{i+1}) along a minimal projective resolution.

        The i-th item lists the vertices of the indecomposable summands of
        P_i together with the syzygy that is resolved next.  Stops after the
        first zero syzygy, so it is infinite for modules of infinite
        projective dimension.
        """
        current = summands(modules)
        while True:
            check_deadline()
            syzygy = self.syzygy(current)
            yield self.top_vertices(current), syzygy
            if not syzygy:
                break
            current = syzygy

    def proj_resolution_with_syzygy(self, modules, n: int) -> List[Tuple[List[Hashable], List]]:
        result = []
        for item in self.proj_resolution_with_syzygy_sequence(modules):
            if len(result) > n:
                break
            result.append(item)
        return result[:n + 1]

    def proj_resolution(self, modules, n: int) -> List[List[Hashable]]:
        """Vertices of P_0, ..., P_n, padded with empty terms."""
        terms = [tops for tops, _ in self.proj_resolution_with_syzygy(modules, n)]
        return terms + [[] for _ in range(n + 1 - len(terms))]

    def inj_resolution_with_cosyzygy_sequence(self, modules) -> Iterator[Tuple[List[Hashable], List]]:
        """Yield (socles of I^i, Ω^{-(i+1)}) along a minimal injective resolution."""
        current = summands(modules)
        while True:
            check_deadline()
            cosyzygy = self.cosyzygy(current)
            yield self.socle_vertices(current), cosyzygy
            if not cosyzygy:
                break
            current = cosyzygy

    def inj_resolution_with_cosyzygy(self, modules, n: int) -> List[Tuple[List[Hashable], List]]:
        result = []
        for item in self.inj_resolution_with_cosyzygy_sequence(modules):
            if len(result) > n:
                break
            result.append(item)
        return result[:n + 1]

    def inj_resolution(self, modules, n: int) -> List[List[Hashable]]:
        terms = [socles for socles, _ in self.inj_resolution_with_cosyzygy(modules, n)]
        return terms + [[] for _ in range(n + 1 - len(terms))]

    def global_dim(self) -> Union[int, float]:
        """
        Global dimension, computed as the projective dimension of the simples.

        Raises:
            BrokenInvariantError: If it differs from the injective dimension
                of the simples
        """
        simples = self.simples()
        by_proj = self.proj_dim(simples)
        by_inj = self.inj_dim(simples)
        if by_proj != by_inj:
            raise BrokenInvariantError(
                f"Projective ({by_proj}) and injective ({by_inj}) dimensions of the simples differ")
        return by_proj

    def right_self_inj_dim(self) -> Union[int, float]:
        """Injective dimension of the regular module."""
        return self.inj_dim(self.projs())

    def left_self_inj_dim(self) -> Union[int, float]:
        """Projective dimension of the dual of the regular module."""
        return self.proj_dim(self.injs())

    def is_iwanaga_gorenstein(self) -> bool:
        return self.right_self_inj_dim() != INFINITE and self.left_self_inj_dim() != INFINITE

    def is_self_injective(self) -> bool:
        return all(p.is_injective() for p in self.projs())

    def cartan_matrix(self) -> np.ndarray:
        """
        Cartan matrix; column j is the dimension vector of the projective at vertex j.

        Raises:
            UnsupportedOperationError: If the algebra is infinite-dimensional
        """
        if not self.is_finite_dimensional():
            raise UnsupportedOperationError("Cartan matrix of an infinite-dimensional algebra")
        columns = [p.dimension_vector() for p in self.projs()]
        if not columns:
            return np.zeros((0, 0), dtype=int)
        return np.column_stack(columns)
