"""Representation-finite algebras and their torsion and tilting theory.

An ``RfAlgebra`` wraps an algebra together with the complete list of its
indecomposable modules.  Every module-theoretic family (bricks, torsion
classes, τ-tilting modules, cotorsion pairs, ...) is obtained by filtering
that list, or by searching cliques in a compatibility graph on it.

Throughout, modules are basic, and a subcategory is the tuple of the
indecomposables it contains, ordered as in ``RfAlgebra.indecs``.
"""

import logging
from typing import Callable, Dict, Hashable, Iterable, Iterator, List, Optional, Tuple, Union

from .algebra import INFINITE, Algebra, MemoTable, summands
from .clique import almost_maximal_cliques, cliques, maximal_cliques
from .config import settings
from .deadline import check_deadline
from .errors import BrokenInvariantError, PresentationError, UnsupportedOperationError
from .indec import Indec
from .poset import PartialOrder, inclusion_order, power_set
from .quiver import Quiver
from .tau_tilting import IndecTauRigidPair, ModuleWithSupport, TauTiltingData
from .translation_quiver import TranslationQuiver
from .word import Arrow

logger = logging.getLogger(__name__)

Subcat = Tuple[Indec, ...]


def _compatibility(nodes: List, compatible: Callable) -> Dict:
    """Neighbor map of the graph joining distinct compatible nodes."""
    return {x: [y for y in nodes if y != x and compatible(x, y)] for x in nodes}


class RfAlgebra(Algebra):
    """
    A representation-finite algebra with the list of all its indecomposables.

    Modules built by the wrapped algebra are mapped back to members of
    ``indecs`` by ``normalize``, so results of τ, projective covers and the
    like can be compared with list members.  Families are computed lazily
    and kept for the lifetime of the instance.

    Attributes:
        algebra: The wrapped algebra
        indecs: Indecomposables, one per isomorphism class
        verify_ar_quiver: Build the AR quiver from source maps as well and
            compare it with the one built from sink maps
    """

    def __init__(self, algebra: Algebra, indecs: Iterable[Indec],
                 verify_ar_quiver: Optional[bool] = None):
        """
        Args:
            algebra: A representation-finite algebra
            indecs: One indecomposable from each isomorphism class
            verify_ar_quiver: Defaults to settings.verify_ar_quiver

        Raises:
            UnsupportedOperationError: If the algebra is representation-infinite
            PresentationError: If two of the given modules are isomorphic
        """
        super().__init__()
        if not algebra.is_rep_finite():
            raise UnsupportedOperationError(f"{algebra!r} is not representation-finite")
        self.algebra = algebra
        self.vertices = tuple(algebra.vertices)
        self.indecs: Subcat = tuple(indecs)
        if verify_ar_quiver is None:
            verify_ar_quiver = settings.verify_ar_quiver
        self.verify_ar_quiver = verify_ar_quiver

        self._member_of_key: Dict[Hashable, Indec] = {}
        for module in self.indecs:
            for key in module.iso_keys():
                if key in self._member_of_key:
                    raise PresentationError(
                        f"{module} and {self._member_of_key[key]} are isomorphic")
                self._member_of_key[key] = module
        self._families = MemoTable("families")
        logger.debug("Representation-finite algebra with %d indecomposables", len(self.indecs))

    def clear_caches(self) -> None:
        super().clear_caches()
        self._families.clear()

    def _family(self, name: Hashable, compute: Callable):
        return self._families.get_or_compute(name, compute)

    def normalize(self, module: Optional[Indec]) -> Optional[Indec]:
        """
        The member of ``indecs`` isomorphic to the given module.

        Raises:
            BrokenInvariantError: If no member is isomorphic to it
        """
        if module is None:
            return None
        try:
            return self._member_of_key[module.key()]
        except KeyError:
            raise BrokenInvariantError(f"{module} is not isomorphic to any listed indecomposable") from None

    def _as_subcat(self, modules) -> Subcat:
        members = {self.normalize(m) for m in summands(modules)}
        return tuple(m for m in self.indecs if m in members)

    def _subcat(self, predicate: Callable[[Indec], bool]) -> Subcat:
        return tuple(m for m in self.indecs if predicate(m))

    # Algebra interface

    def is_string_algebra(self) -> bool:
        return self.algebra.is_string_algebra()

    def is_gentle_algebra(self) -> bool:
        return self.algebra.is_gentle_algebra()

    def number_of_indecs(self) -> int:
        return len(self.indecs)

    def dim(self) -> Union[int, float]:
        return self.algebra.dim()

    def is_rep_finite(self) -> bool:
        return True

    def to_rf_algebra(self, verify_ar_quiver: Optional[bool] = None) -> 'RfAlgebra':
        return self

    def simple_at(self, vertex: Hashable) -> Indec:
        return self.normalize(self.algebra.simple_at(vertex))

    def proj_at(self, vertex: Hashable) -> Indec:
        return self.normalize(self.algebra.proj_at(vertex))

    def inj_at(self, vertex: Hashable) -> Indec:
        return self.normalize(self.algebra.inj_at(vertex))

    def tau_plus(self, x) -> Optional[Indec]:
        if x is None:
            return None
        return self.ar_quiver().tau.get(self.normalize(x))

    def tau_minus(self, x) -> Optional[Indec]:
        if x is None:
            return None
        return self.ar_quiver().tau_minus.get(self.normalize(x))

    def finitistic_dim(self) -> int:
        """Largest finite projective dimension of an indecomposable."""
        return max((d for d in (m.proj_dim() for m in self.indecs) if d != INFINITE), default=0)

    # Auslander-Reiten quiver

    def ar_quiver(self) -> TranslationQuiver:
        """The Auslander-Reiten quiver, with the indecomposables as vertices."""
        return self._family("ar_quiver", self._make_ar_quiver)

    def _make_ar_quiver(self) -> TranslationQuiver:
        arrows = []
        tau = {}
        for module in self.indecs:
            check_deadline()
            middle, translate = module.sink_sequence()
            if translate is not None:
                tau[module] = self.normalize(translate)
            for summand in middle:
                arrows.append(Arrow(None, self.normalize(summand), module))

        if self.verify_ar_quiver:
            from_source_maps = []
            for module in self.indecs:
                check_deadline()
                for summand in module.source_sequence()[0]:
                    from_source_maps.append(Arrow(None, module, self.normalize(summand)))
            if set(arrows) != set(from_source_maps):
                raise BrokenInvariantError("Sink maps and source maps give different AR quivers")
            logger.debug("AR quiver verified from source maps")

        try:
            ar_quiver = TranslationQuiver(Quiver(self.indecs, arrows), tau)
        except PresentationError as e:
            raise BrokenInvariantError(f"AR quiver is not a translation quiver: {e}") from e
        logger.debug("AR quiver: %d vertices, %d arrows", len(self.indecs), len(arrows))
        return ar_quiver

    def syzygy_quiver(self) -> Quiver:
        return self.syzygy_quiver_from(self.indecs)

    def cosyzygy_quiver(self) -> Quiver:
        return self.syzygy_quiver_from(self.indecs, cosyzygy=True)

    # Bricks and semibricks

    def bricks(self) -> Subcat:
        return self._family("bricks", lambda: self._subcat(lambda m: m.is_brick()))

    def semibricks(self) -> List[Subcat]:
        """Sets of pairwise Hom-orthogonal bricks, the empty one included."""
        return self._family("semibricks", self._make_semibricks)

    def _make_semibricks(self) -> List[Subcat]:
        bricks = list(self.bricks())
        neighbor = _compatibility(bricks, lambda x, y: self.hom_zero(x, y) and self.hom_zero(y, x))
        result = [self._as_subcat(c) for c in cliques(neighbor)]
        logger.debug("%d semibricks from %d bricks", len(result), len(bricks))
        return result

    # Hom-perpendicular categories and closures

    def hom_right_perp(self, modules) -> Subcat:
        """Indecomposables X with Hom(C, X) = 0."""
        return self._subcat(lambda x: self.hom(modules, x) == 0)

    def hom_left_perp(self, modules) -> Subcat:
        """Indecomposables X with Hom(X, C) = 0."""
        return self._subcat(lambda x: self.hom(x, modules) == 0)

    def hom_right_perp_bricks(self, modules) -> Subcat:
        return tuple(b for b in self.bricks() if self.hom(modules, b) == 0)

    def hom_left_perp_bricks(self, modules) -> Subcat:
        return tuple(b for b in self.bricks() if self.hom(b, modules) == 0)

    def torsion_closure(self, modules) -> Subcat:
        """The smallest torsion class containing the modules."""
        return self.hom_left_perp(self.hom_right_perp(modules))

    def torsion_free_closure(self, modules) -> Subcat:
        """The smallest torsion-free class containing the modules."""
        return self.hom_right_perp(self.hom_left_perp(modules))

    def torsion_closure_bricks(self, modules) -> Subcat:
        return self.hom_left_perp_bricks(self.hom_right_perp_bricks(modules))

    def torsion_free_closure_bricks(self, modules) -> Subcat:
        return self.hom_right_perp_bricks(self.hom_left_perp_bricks(modules))

    def ie_closure(self, modules) -> Subcat:
        """The smallest subcategory containing the modules closed under images and extensions."""
        closure = set(self.torsion_free_closure(modules))
        return tuple(m for m in self.torsion_closure(modules) if m in closure)

    def support(self, modules) -> set:
        """Vertices in the support of some module of the collection."""
        return {v for m in summands(modules) for v in m.support()}

    # Torsion classes and their relatives

    def torsion_classes(self) -> List[Subcat]:
        return [self.hom_left_perp(s) for s in self.semibricks()]

    def torsion_free_classes(self) -> List[Subcat]:
        return [self.hom_right_perp(s) for s in self.semibricks()]

    def torsion_pairs(self) -> List[Tuple[Subcat, Subcat]]:
        return [(self.torsion_closure(s), self.hom_right_perp(s)) for s in self.semibricks()]

    def _tors_to_semibrick(self) -> Dict[Subcat, Subcat]:
        return self._family("tors_to_semibrick",
                            lambda: {self.torsion_closure(s): s for s in self.semibricks()})

    def _torf_to_semibrick(self) -> Dict[Subcat, Subcat]:
        return self._family("torf_to_semibrick",
                            lambda: {self.torsion_free_closure(s): s for s in self.semibricks()})

    def semibrick_to_torsion_class(self, semibrick) -> Subcat:
        return self.torsion_closure(semibrick)

    def torsion_class_to_semibrick(self, torsion_class) -> Subcat:
        """
        The semibrick S with T(S) equal to the given torsion class.

        Raises:
            ValueError: If the subcategory is not a torsion class
        """
        subcat = self._as_subcat(torsion_class)
        try:
            return self._tors_to_semibrick()[subcat]
        except KeyError:
            raise ValueError(f"{[str(m) for m in subcat]} is not a torsion class") from None

    def semibrick_to_torsion_free_class(self, semibrick) -> Subcat:
        return self.torsion_free_closure(semibrick)

    def torsion_free_class_to_semibrick(self, torsion_free_class) -> Subcat:
        """
        The semibrick S with F(S) equal to the given torsion-free class.

        Raises:
            ValueError: If the subcategory is not a torsion-free class
        """
        subcat = self._as_subcat(torsion_free_class)
        try:
            return self._torf_to_semibrick()[subcat]
        except KeyError:
            raise ValueError(f"{[str(m) for m in subcat]} is not a torsion-free class") from None

    def torsion_class_order(self) -> PartialOrder:
        """Torsion classes ordered by inclusion."""
        return inclusion_order(self.torsion_classes())

    def wide_subcats(self) -> List[Subcat]:
        return [self.ie_closure(s) for s in self.semibricks()]

    def ie_closed_subcat_sequence(self) -> Iterator[Subcat]:
        """Yield each subcategory closed under images and extensions once."""
        torsion_classes = self.torsion_classes()
        torsion_free_classes = [set(f) for f in self.torsion_free_classes()]
        found = set()
        for torsion in torsion_classes:
            for torsion_free in torsion_free_classes:
                check_deadline()
                candidate = tuple(m for m in torsion if m in torsion_free)
                if candidate not in found:
                    found.add(candidate)
                    yield candidate

    def ie_closed_subcats(self) -> List[Subcat]:
        return list(self.ie_closed_subcat_sequence())

    def _torsion_classes_in_wide(self, dual: bool) -> List[Subcat]:
        result = {}
        semibricks = self.semibricks()
        for semibrick in semibricks:
            wide = self.ie_closure(semibrick)
            wide_set = set(wide)
            for inner in semibricks:
                check_deadline()
                if not wide_set.issuperset(inner):
                    continue
                if dual:
                    candidate = tuple(m for m in wide if self.hom(inner, m) == 0)
                else:
                    candidate = tuple(m for m in wide if self.hom(m, inner) == 0)
                result.setdefault(candidate, None)
        return list(result)

    def ice_closed_subcats(self) -> List[Subcat]:
        """Subcategories closed under images, cokernels and extensions."""
        # torsion classes inside each wide subcategory
        return self._torsion_classes_in_wide(dual=False)

    def ike_closed_subcats(self) -> List[Subcat]:
        """Subcategories closed under images, kernels and extensions."""
        return self._torsion_classes_in_wide(dual=True)

    def two_smcs(self) -> List[Tuple[Subcat, Subcat]]:
        """
        Two-term simple-minded collections, as pairs (S, S') of semibricks.

        Raises:
            BrokenInvariantError: If a semibrick has no partner
        """
        by_torf_bricks = {self.torsion_free_closure_bricks(s): s for s in self.semibricks()}
        result = []
        for semibrick in self.semibricks():
            partner = by_torf_bricks.get(self.hom_right_perp_bricks(semibrick))
            if partner is None:
                raise BrokenInvariantError(f"No semibrick generates the bricks of {semibrick}^⊥")
            result.append((semibrick, partner))
        return result

    def semibrick_pairs_full_rank(self) -> List[Tuple[Subcat, Subcat]]:
        """Pairs (S, S') with Hom(S, S') = Ext^1(S, S') = 0 and |S| + |S'| = rank."""
        result = []
        semibricks = self.semibricks()
        for first in semibricks:
            for second in semibricks:
                check_deadline()
                if (len(first) + len(second) == self.rank() and self.hom(first, second) == 0
                        and self.ext1(first, second) == 0):
                    result.append((first, second))
        return result

    def semibrick_pairs_maximal(self) -> List[Tuple[Subcat, Subcat]]:
        """Maximal pairs (S, S') of semibricks with Hom(S, S') = Ext^1(S, S') = 0."""
        nodes = [(b, degree) for b in self.bricks() for degree in (0, 1)]

        def compatible(x, y):
            (a, degree_a), (b, degree_b) = x, y
            if degree_a == degree_b:
                return self.hom_zero(a, b) and self.hom_zero(b, a)
            if degree_a == 0:
                return self.hom_zero(a, b) and self.ext1(a, b) == 0
            return self.hom_zero(b, a) and self.ext1(b, a) == 0

        result = []
        for clique in maximal_cliques(_compatibility(nodes, compatible)):
            result.append((self._as_subcat([b for b, d in clique if d == 0]),
                           self._as_subcat([b for b, d in clique if d == 1])))
        return result

    # τ-rigid modules and support τ-tilting theory

    def hom_tau_ortho(self, x: Indec, y: Indec) -> bool:
        """True if Hom(X, τY) = Hom(Y, τX) = 0."""
        return self.hom_zero(x, self.tau_plus(y)) and self.hom_zero(y, self.tau_plus(x))

    def hom_tau_minus_ortho(self, x: Indec, y: Indec) -> bool:
        """True if Hom(τ^{-1}X, Y) = Hom(τ^{-1}Y, X) = 0."""
        return self.hom_zero(self.tau_minus(x), y) and self.hom_zero(self.tau_minus(y), x)

    def is_tau_rigid(self, x: Indec) -> bool:
        return self.hom_zero(x, self.tau_plus(x))

    def is_tau_minus_rigid(self, x: Indec) -> bool:
        return self.hom_zero(self.tau_minus(x), x)

    def indec_tau_rigids(self) -> Subcat:
        return self._family("indec_tau_rigids", lambda: self._subcat(self.is_tau_rigid))

    def indec_tau_minus_rigids(self) -> Subcat:
        return self._family("indec_tau_minus_rigids", lambda: self._subcat(self.is_tau_minus_rigid))

    def tau_rigids(self) -> List[Subcat]:
        neighbor = _compatibility(list(self.indec_tau_rigids()), self.hom_tau_ortho)
        return [tuple(c) for c in cliques(neighbor)]

    def tau_minus_rigids(self) -> List[Subcat]:
        neighbor = _compatibility(list(self.indec_tau_minus_rigids()), self.hom_tau_minus_ortho)
        return [tuple(c) for c in cliques(neighbor)]

    def _sincere_on_support(self, modules: Subcat) -> bool:
        return len(modules) == len(self.support(modules))

    def support_tau_tiltings(self) -> List[Subcat]:
        return [m for m in self.tau_rigids() if self._sincere_on_support(m)]

    def support_tau_minus_tiltings(self) -> List[Subcat]:
        return [m for m in self.tau_minus_rigids() if self._sincere_on_support(m)]

    def tau_tiltings(self) -> List[Subcat]:
        neighbor = _compatibility(list(self.indec_tau_rigids()), self.hom_tau_ortho)
        return [tuple(c) for c in maximal_cliques(neighbor)]

    def tau_minus_tiltings(self) -> List[Subcat]:
        neighbor = _compatibility(list(self.indec_tau_minus_rigids()), self.hom_tau_minus_ortho)
        return [tuple(c) for c in maximal_cliques(neighbor)]

    def semibrick_to_support_tau_tilting(self, semibrick) -> Subcat:
        """The support τ-tilting module M with Fac M = T(S)."""
        semibrick = self._as_subcat(semibrick)
        torsion = set(self.torsion_closure(semibrick))
        # For τ-rigid M: Ext^1(M, T(S)) = 0 iff Hom(S, τM) = 0
        return tuple(m for m in self.indec_tau_rigids()
                     if m in torsion and self.hom_zero(semibrick, self.tau_plus(m)))

    def semibrick_to_tau_tilting_data(self, semibrick) -> TauTiltingData:
        """
        Collect the torsion pair of T(S) with its τ-tilting side and its dual side.

        Raises:
            BrokenInvariantError: If the torsion-free class has no semibrick
        """
        semibrick = self._as_subcat(semibrick)
        torsion_class = self.torsion_closure(semibrick)
        tau_tilting = self.semibrick_to_support_tau_tilting(semibrick)
        support = tuple(v for v in self.vertices if v not in self.support(tau_tilting))
        presentation = self.proj_resolution(tau_tilting, 1)

        torsion_free_class = self.hom_right_perp(semibrick)
        tau_minus_tilting = self._as_subcat(
            [self.tau_plus(m) for m in tau_tilting] + [self.inj_at(v) for v in support])
        try:
            cosemibrick = self._torf_to_semibrick()[torsion_free_class]
        except KeyError:
            raise BrokenInvariantError(f"{semibrick}^⊥ does not come from a semibrick") from None
        cosupport = tuple(v for v in self.vertices if v not in self.support(tau_minus_tilting))
        copresentation = self.inj_resolution(tau_minus_tilting, 1)

        filt_semibrick = set(self.torsion_free_closure(semibrick))
        filt_cosemibrick = set(self.torsion_closure(cosemibrick))
        return TauTiltingData(
            semibrick_tors=semibrick,
            torsion_class=torsion_class,
            wide_tors=tuple(m for m in torsion_class if m in filt_semibrick),
            support_tau_tilting=tau_tilting,
            support=support,
            silting=(tuple(presentation[0]), tuple(presentation[1]) + support),
            semibrick_torf=cosemibrick,
            torsion_free_class=torsion_free_class,
            wide_torf=tuple(m for m in torsion_free_class if m in filt_cosemibrick),
            support_tau_minus_tilting=tau_minus_tilting,
            cosupport=cosupport,
            cosilting=(tuple(copresentation[0]), tuple(copresentation[1]) + cosupport),
        )

    def tau_tilting_data_list(self) -> List[TauTiltingData]:
        return [self.semibrick_to_tau_tilting_data(s) for s in self.semibricks()]

    def indec_tau_rigid_pairs(self) -> List[IndecTauRigidPair]:
        """Pairs (M, None) for indecomposable τ-rigid M, and (None, v) for each vertex."""
        return ([IndecTauRigidPair(m, None) for m in self.indec_tau_rigids()]
                + [IndecTauRigidPair(None, v) for v in self.vertices])

    def indec_tau_rigid_pairs_ortho(self, first: IndecTauRigidPair, second: IndecTauRigidPair) -> bool:
        """
        True if the direct sum of the two pairs is a τ-rigid pair.

        Raises:
            ValueError: If a pair has both or neither component
        """
        for pair in (first, second):
            if (pair.module is None) == (pair.vertex is None):
                raise ValueError(f"Invalid indecomposable τ-rigid pair {pair!r}")
        if first.module is not None and second.module is not None:
            return self.hom_tau_ortho(first.module, second.module)
        if first.module is not None:
            return second.vertex not in first.module.support()
        if second.module is not None:
            return first.vertex not in second.module.support()
        return True

    def _tau_rigid_pair_graph(self) -> Dict:
        return self._family("tau_rigid_pair_graph", lambda: _compatibility(
            self.indec_tau_rigid_pairs(), self.indec_tau_rigid_pairs_ortho))

    def tau_tilting_facets(self) -> List[List[IndecTauRigidPair]]:
        """Facets of the support τ-tilting simplicial complex."""
        return list(maximal_cliques(self._tau_rigid_pair_graph()))

    def tau_tilting_pairs(self) -> List[Tuple[Subcat, List[Indec]]]:
        """Support τ-tilting pairs (M, P) with P the sum of the projectives at the support part."""
        result = []
        for facet in self.tau_tilting_facets():
            modules = self._as_subcat([p.module for p in facet if p.module is not None])
            result.append((modules, [self.proj_at(p.vertex) for p in facet if p.vertex is not None]))
        return result

    def _mutation_direction(self, first: IndecTauRigidPair,
                            second: IndecTauRigidPair) -> bool:
        # True if completing the face by `first` gives the larger torsion class
        if first.module is not None and second.module is None:
            return True
        if first.module is None and second.module is not None:
            return False
        if first.module is None and second.module is None:
            raise BrokenInvariantError("Two shifted projectives complete the same face")
        first_to_second = self.hom_zero(first.module, self.tau_plus(second.module))
        second_to_first = self.hom_zero(second.module, self.tau_plus(first.module))
        if first_to_second == second_to_first:
            raise BrokenInvariantError(
                f"Cannot decide the mutation between {first.module} and {second.module}")
        return second_to_first

    def tau_tilting_quiver(self, with_brick_labels: bool = False) -> Quiver:
        """
        The Hasse quiver of support τ-tilting pairs ordered by Fac.

        Each arrow is a mutation from the larger to the smaller pair.  With
        brick labels, the arrow is labelled by the unique brick lying in
        Fac(larger) ∩ smaller^⊥.

        Raises:
            BrokenInvariantError: If a face does not have exactly two
                completions, a mutation has no direction, or an interval does
                not contain exactly one brick
        """
        pairs: Dict[ModuleWithSupport, None] = {}
        arrows = []
        for face, completions in almost_maximal_cliques(self._tau_rigid_pair_graph(), self.rank()):
            if len(completions) != 2:
                raise BrokenInvariantError(
                    f"Face {[str(p) for p in face]} has {len(completions)} completions")
            one = ModuleWithSupport.from_pairs(face + [completions[0]])
            two = ModuleWithSupport.from_pairs(face + [completions[1]])
            pairs.setdefault(one, None)
            pairs.setdefault(two, None)
            larger, smaller = (one, two) if self._mutation_direction(*completions) else (two, one)
            label = None
            if with_brick_labels:
                candidates = self.bricks_in_interval(larger, smaller)
                if len(candidates) != 1:
                    raise BrokenInvariantError(
                        f"{len(candidates)} brick labels between {larger} and {smaller}")
                label = candidates[0]
            arrows.append(Arrow(label, larger, smaller))
        logger.debug("τ-tilting quiver: %d pairs, %d mutations", len(pairs), len(arrows))
        return Quiver(list(pairs), arrows, unique_labels=False)

    def in_tors_of_tau_tilting_pair(self, x: Indec, pair: ModuleWithSupport) -> bool:
        """True if X lies in Fac M for the support τ-tilting pair (M, P_e)."""
        return (not any(v in pair.support for v in x.support())
                and all(self.hom_zero(x, self.tau_plus(m)) for m in pair.modules))

    def bricks_in_interval(self, larger: ModuleWithSupport, smaller: ModuleWithSupport) -> Subcat:
        """Bricks in Fac(larger) ∩ smaller^⊥; the interval itself is not checked."""
        return tuple(b for b in self.bricks()
                     if self.in_tors_of_tau_tilting_pair(b, larger) and self.hom(smaller.modules, b) == 0)

    # Rigid and tilting modules

    def indec_rigids(self) -> Subcat:
        return self._family("indec_rigids", lambda: self._subcat(lambda m: self.ext1(m, m) == 0))

    def _ext1_ortho(self, x: Indec, y: Indec) -> bool:
        return self.ext1(x, y) == 0 and self.ext1(y, x) == 0

    def rigids(self) -> List[Subcat]:
        neighbor = _compatibility(list(self.indec_rigids()), self._ext1_ortho)
        return [tuple(c) for c in cliques(neighbor)]

    def indec_partial_tiltings(self) -> Subcat:
        return tuple(m for m in self.indec_rigids() if m.is_projective() or m.proj_dim() == 1)

    def partial_tiltings(self) -> List[Subcat]:
        neighbor = _compatibility(list(self.indec_partial_tiltings()), self._ext1_ortho)
        return [tuple(c) for c in cliques(neighbor)]

    def tiltings(self) -> List[Subcat]:
        """Classical tilting modules: maximal partial tilting modules."""
        neighbor = _compatibility(list(self.indec_partial_tiltings()), self._ext1_ortho)
        return [tuple(c) for c in maximal_cliques(neighbor)]

    def indec_partial_cotiltings(self) -> Subcat:
        return tuple(m for m in self.indec_rigids() if m.is_injective() or m.inj_dim() == 1)

    def partial_cotiltings(self) -> List[Subcat]:
        neighbor = _compatibility(list(self.indec_partial_cotiltings()), self._ext1_ortho)
        return [tuple(c) for c in cliques(neighbor)]

    def cotiltings(self) -> List[Subcat]:
        neighbor = _compatibility(list(self.indec_partial_cotiltings()), self._ext1_ortho)
        return [tuple(c) for c in maximal_cliques(neighbor)]

    def _higher_ext_ortho(self, x: Indec, y: Indec) -> bool:
        return self.higher_ext_zero(x, y) and self.higher_ext_zero(y, x)

    def _self_orthogonal_graph(self, nodes: Iterable[Indec]) -> Dict:
        return _compatibility(list(nodes), self._higher_ext_ortho)

    def generalized_tiltings(self, n: Optional[int] = None) -> List[Subcat]:
        """
        Miyashita tilting modules, with projective dimension at most n if given.

        These are the maximal self-orthogonal modules of finite (or <= n)
        projective dimension.

        Raises:
            ValueError: If n is negative
        """
        if n is None:
            nodes = [m for m in self.indecs if m.proj_dim() != INFINITE and m.is_self_orthogonal()]
            neighbor = self._self_orthogonal_graph(nodes)
        else:
            if n < 0:
                raise ValueError(f"n must be non-negative, got {n}")
            nodes = [m for m in self.indecs
                     if m.proj_dim() <= n and all(self.ext(m, m, i) == 0 for i in range(1, n + 1))]
            neighbor = _compatibility(nodes, lambda x, y: all(
                self.ext(x, y, i) == 0 and self.ext(y, x, i) == 0 for i in range(1, n + 1)))
        return [tuple(c) for c in maximal_cliques(neighbor)]

    def generalized_cotiltings(self, n: Optional[int] = None) -> List[Subcat]:
        """
        Miyashita cotilting modules, with injective dimension at most n if given.

        Raises:
            ValueError: If n is negative
        """
        if n is None:
            nodes = [m for m in self.indecs if m.inj_dim() != INFINITE and m.is_self_orthogonal()]
            neighbor = self._self_orthogonal_graph(nodes)
        else:
            if n < 0:
                raise ValueError(f"n must be non-negative, got {n}")
            nodes = [m for m in self.indecs
                     if m.inj_dim() <= n and all(self.ext(m, m, i) == 0 for i in range(1, n + 1))]
            neighbor = _compatibility(nodes, lambda x, y: all(
                self.ext(x, y, i) == 0 and self.ext(y, x, i) == 0 for i in range(1, n + 1)))
        return [tuple(c) for c in maximal_cliques(neighbor)]

    def exceptionals(self) -> List[Subcat]:
        """Self-orthogonal modules of finite projective dimension."""
        nodes = [m for m in self.indecs if m.proj_dim() != INFINITE and m.is_self_orthogonal()]
        return [tuple(c) for c in cliques(self._self_orthogonal_graph(nodes))]

    def cluster_tiltings(self, n: int) -> List[Subcat]:
        """
        n-cluster tilting modules.

        M is n-cluster tilting if Ext^i(M, M) = 0 for 0 < i < n, and a module
        Y with Ext^i(M, Y) = 0 for 0 < i < n, or with Ext^i(Y, M) = 0 for
        0 < i < n, lies in add M.

        Raises:
            ValueError: If n < 1
        """
        if n < 1:
            raise ValueError(f"n must be positive, got {n}")

        def vanish(x, y) -> bool:
            return all(self.ext(x, y, i) == 0 for i in range(1, n))

        projs = self.projs()
        injs = self.injs()
        # an n-cluster tilting module contains every projective and injective
        nodes = [m for m in self.indecs
                 if vanish(m, m) and all(vanish(m, p) for p in projs) and all(vanish(i, m) for i in injs)]
        neighbor = _compatibility(nodes, lambda x, y: vanish(x, y) and vanish(y, x))
        result = []
        for candidate in maximal_cliques(neighbor):
            outside = [y for y in self.indecs if y not in candidate]
            if all(not all(vanish(x, y) for x in candidate) and not all(vanish(y, x) for x in candidate)
                   for y in outside):
                result.append(tuple(candidate))
        return result

    def wakamatsu_tiltings(self) -> List[Subcat]:
        """Maximal self-orthogonal modules."""
        nodes = [m for m in self.indecs if m.is_self_orthogonal()]
        return [tuple(c) for c in maximal_cliques(self._self_orthogonal_graph(nodes))]

    def self_orthogonals(self) -> List[Subcat]:
        nodes = [m for m in self.indecs if m.is_self_orthogonal()]
        return [tuple(c) for c in cliques(self._self_orthogonal_graph(nodes))]

    def _ext_order(self, modules: List[Subcat], always_poset: bool) -> PartialOrder:
        # T' <= T when Ext^{>0}(T, T') = 0
        leqs = [(second, first) for first in modules for second in modules
                if self.higher_ext_zero(first, second)]
        return PartialOrder(modules, leqs, always_poset=always_poset)

    def wakamatsu_tiltings_order(self) -> PartialOrder:
        """Wakamatsu tilting modules with T' <= T when Ext^{>0}(T, T') = 0; not always a poset."""
        return self._ext_order(self.wakamatsu_tiltings(), always_poset=False)

    def generalized_tilting_order(self) -> PartialOrder:
        return self._ext_order(self.generalized_tiltings(), always_poset=True)

    # Modules singled out by homological conditions

    def indecs_with_finite_proj_dim(self) -> Subcat:
        return self._subcat(lambda m: m.proj_dim() != INFINITE)

    def indecs_with_finite_inj_dim(self) -> Subcat:
        return self._subcat(lambda m: m.inj_dim() != INFINITE)

    def gorenstein_projs(self) -> Subcat:
        return self._subcat(lambda m: m.is_gorenstein_proj())

    def semi_gorenstein_projs(self) -> Subcat:
        return self._subcat(lambda m: m.is_semi_gorenstein_proj())

    def infinite_torsionless(self) -> Subcat:
        return self._subcat(lambda m: m.is_infinite_torsionless())

    def n_torsionless(self, n: int = 1) -> Subcat:
        return self._subcat(lambda m: m.is_n_torsionless(n))

    def reflexives(self) -> Subcat:
        return self._subcat(lambda m: m.is_reflexive())

    # Ext-perpendicular categories and cotorsion pairs

    def ext_right_perp(self, modules) -> Subcat:
        """Indecomposables X with Ext^{>0}(C, X) = 0."""
        return self._subcat(lambda x: self.higher_ext_zero(modules, x))

    def ext_left_perp(self, modules) -> Subcat:
        """Indecomposables X with Ext^{>0}(X, C) = 0."""
        return self._subcat(lambda x: self.higher_ext_zero(x, modules))

    def ext1_right_perp(self, modules) -> Subcat:
        return self._subcat(lambda x: self.ext1(modules, x) == 0)

    def ext1_left_perp(self, modules) -> Subcat:
        return self._subcat(lambda x: self.ext1(x, modules) == 0)

    def cotorsion_pairs(self) -> List[Tuple[Subcat, Subcat]]:
        """
        Complete cotorsion pairs (X, Y) with Y = X^⊥ and X = ⊥Y.

        Every such X contains the projectives, so only subsets containing them
        are searched.
        """
        cotorsion_free = {}
        for subset in power_set(self.indecs, include=self.projs()):
            check_deadline()
            cotorsion_free.setdefault(self.ext1_right_perp(subset), None)
        return [(self.ext1_left_perp(right), right) for right in cotorsion_free]

    def hereditary_cotorsion_pairs(self) -> List[Tuple[Subcat, Subcat]]:
        return [(left, right) for left, right in self.cotorsion_pairs()
                if self.higher_ext_zero(left, right)]

    def resolving_subcats(self) -> List[Subcat]:
        return [left for left, _ in self.hereditary_cotorsion_pairs()]

    def coresolving_subcats(self) -> List[Subcat]:
        return [right for _, right in self.hereditary_cotorsion_pairs()]

    def info_string(self) -> str:
        return (f"Representation-finite algebra with {len(self.indecs)} indecomposables over\n"
                f"{self.algebra.info_string()}")

    def __repr__(self) -> str:
        return f"RfAlgebra({self.algebra!r}, {len(self.indecs)} indecomposables)"
