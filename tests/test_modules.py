"""Tests for string modules, graph maps and biserial modules."""
import pytest

from quiver_algebras import (INFINITE, AlgebraKind, BiserialIndec, GraphHom, PresentationError,
                             SpecialBiserialAlgebra, StringIndec, Word, kupisch_to_nakayama, parse_indec)


# --- string modules ---

def test_dimension_and_vertices(a3):
    proj = a3.proj_at(1)
    assert str(proj) == "a*b"
    assert proj.dim() == 3
    assert proj.dimension_vector().tolist() == [1, 1, 1]
    assert proj.top_vertices() == [1]
    assert proj.socle_vertices() == [3]


def test_illegal_word_rejected(kronecker_with_tail):
    a = kronecker_with_tail.quiver.arrow_of_label("a")
    c = kronecker_with_tail.quiver.arrow_of_label("c")
    with pytest.raises(PresentationError):
        StringIndec(kronecker_with_tail, a * c)


def test_inverse_word_is_isomorphic(a3):
    module = parse_indec(a3, "a*b")
    assert (~module).is_isomorphic(module)
    assert ~module != module
    assert (~module).canonical_key() == module.canonical_key()


def test_projectives_and_injectives(a3):
    assert [str(p) for p in a3.projs()] == ["a*b", "b", "3"]
    assert [str(i) for i in a3.injs()] == ["1", "a", "a*b"]
    assert a3.proj_at(1).is_injective()
    assert not a3.simple_at(2).is_projective()
    assert not a3.simple_at(2).is_injective()


def test_hom(a3):
    s1, s3 = a3.simple_at(1), a3.simple_at(3)
    p1, p2 = a3.proj_at(1), a3.proj_at(2)
    assert a3.hom(p1, s1) == 1
    assert a3.hom(s1, p1) == 0
    assert a3.hom(s3, p1) == 1
    assert a3.hom(p2, p1) == 1
    assert a3.hom(p1, p2) == 0
    assert a3.hom([p1, p2], [p1, p2]) == 3
    assert a3.hom(None, p1) == 0


def test_ext(a3):
    s1, s2 = a3.simple_at(1), a3.simple_at(2)
    assert a3.ext1(s1, s2) == 1
    assert a3.ext1(s2, s1) == 0
    assert s1.ext1(s2) == 1
    assert a3.ext(s1, s2, 2) == 0
    assert a3.ext(s1, s1, 0) == 1
    with pytest.raises(ValueError):
        a3.ext(s1, s2, -1)


def test_almost_split_sequences(a3):
    s1, s2, s3 = a3.simples()
    middle, tau = s2.sink_sequence()
    assert str(tau) == "3"
    assert [str(m) for m in middle] == ["!b"]
    assert str(a3.tau_plus(s1)) == "2"
    assert str(a3.tau_minus(s3)) == "2"
    assert a3.tau_plus(a3.proj_at(1)) is None
    assert a3.tau_minus(a3.inj_at(1)) is None


def test_radical_and_coradical(a3):
    assert [str(m) for m in a3.proj_at(1).radical()] == ["b"]
    assert [str(m) for m in a3.inj_at(3).coradical()] == ["a"]


def test_syzygy(a3):
    s1 = a3.simple_at(1)
    assert [str(m) for m in s1.syzygy()] == ["b"]
    assert s1.syzygy(2) == []
    assert s1.syzygy(0) == [s1]
    assert s1.proj_dim() == 1
    assert a3.proj_dim(a3.projs()) == 0
    with pytest.raises(ValueError):
        s1.syzygy(-1)


def test_proj_resolution(a3):
    s1 = a3.simple_at(1)
    assert a3.proj_resolution(s1, 2) == [[1], [2], []]
    assert a3.inj_resolution(a3.simple_at(3), 1) == [[3], [2]]


def test_bricks(a3):
    assert all(m.is_brick() for m in a3.string_indecs())


def test_graph_map_composition(a3):
    s3 = a3.simple_at(3)
    p2 = a3.proj_at(2)
    p1 = a3.proj_at(1)
    (first,) = s3.hom_basis(p2)
    second = [h for h in p2.hom_basis(p1) if h.ranges[0] == (0, 1)][0]
    composite = first.compose(second)
    assert composite is not None
    assert composite.source == s3
    assert composite.target == p1
    assert composite.ranges == ((0, 0), (2, 2))


def test_graph_map_composition_vanishes(a3):
    s2, s3 = a3.simple_at(2), a3.simple_at(3)
    p2 = a3.proj_at(2)
    (first,) = s3.hom_basis(p2)
    (second,) = p2.hom_basis(s2)
    assert first.compose(second) is None
    with pytest.raises(ValueError):
        second.compose(first)


def test_invalid_graph_map(a3):
    with pytest.raises(PresentationError):
        GraphHom(a3.simple_at(1), a3.simple_at(2), ((0, 0), (0, 0)))


# --- homological dimensions ---

def test_global_dimension(a3):
    assert a3.global_dim() == 1
    assert a3.is_iwanaga_gorenstein()
    assert not a3.is_self_injective()


def test_self_injective_nakayama():
    algebra = kupisch_to_nakayama([2, 2, 2])
    assert algebra.is_self_injective()
    assert algebra.global_dim() == INFINITE
    assert algebra.dominant_dim() == INFINITE


def test_cartan_matrix(a3):
    assert a3.cartan_matrix().tolist() == [[1, 0, 0], [1, 1, 0], [1, 1, 1]]


# --- special biserial algebras ---

def test_special_biserial(commutative_square):
    algebra = commutative_square
    assert isinstance(algebra, SpecialBiserialAlgebra)
    assert algebra.kind == AlgebraKind.SPECIAL_BISERIAL
    assert not algebra.is_string_algebra()
    assert algebra.dim() == 9
    assert algebra.number_of_indecs() == 11


def test_biserial_projective(commutative_square):
    proj = commutative_square.proj_at(1)
    assert isinstance(proj, BiserialIndec)
    assert proj.dim() == 4
    assert proj.is_projective() and proj.is_injective()
    assert proj == commutative_square.inj_at(4)
    assert proj.is_isomorphic(proj.flip())
    assert [str(m) for m in proj.radical()] == ["b*!d"]
    assert [str(m) for m in proj.coradical()] == ["!a*c"]


def test_biserial_hom(commutative_square):
    proj = commutative_square.proj_at(1)
    s1 = commutative_square.simple_at(1)
    s4 = commutative_square.simple_at(4)
    assert commutative_square.hom(proj, s1) == 1
    assert commutative_square.hom(s4, proj) == 1
    assert commutative_square.hom(s1, proj) == 0


def test_reduction_sees_both_paths_as_zero(commutative_square):
    reduction = commutative_square.reduction
    a, b = (reduction.quiver.arrow_of_label(x) for x in "ab")
    assert not reduction.is_legal(a * b)
    assert not commutative_square.is_legal(Word.from_letters([a.to_letter(), b.to_letter()]))


def test_parse_biserial(commutative_square, a3):
    module = parse_indec(commutative_square, "c*d=a*b")
    assert isinstance(module, BiserialIndec)
    assert module.is_isomorphic(commutative_square.proj_at(1))
    with pytest.raises(PresentationError):
        parse_indec(a3, "a=b")


# --- homological invariants over every indecomposable ---

@pytest.fixture(params=["nakayama_332", "nakayama_32", "commutative_square"])
def finite_algebra(request):
    if request.param == "nakayama_332":
        return kupisch_to_nakayama([3, 3, 2])
    if request.param == "nakayama_32":
        return kupisch_to_nakayama([3, 2])
    return request.getfixturevalue("commutative_square")


def test_auslander_reiten_formulas(finite_algebra):
    modules = finite_algebra.to_rf_algebra().indecs
    for x in modules:
        for y in modules:
            ext = finite_algebra.ext1(x, y)
            assert ext == finite_algebra.stable_hom(finite_algebra.tau_minus(y), x)
            assert ext == finite_algebra.inj_stable_hom(y, finite_algebra.tau_plus(x))


def test_syzygy_vanishes_exactly_on_projectives(finite_algebra):
    for module in finite_algebra.to_rf_algebra().indecs:
        assert module.is_projective() == (module.syzygy() == [])
        assert module.is_injective() == (module.cosyzygy() == [])


def test_stable_hom_kills_projectives_and_injectives(finite_algebra):
    modules = finite_algebra.to_rf_algebra().indecs
    for x in modules:
        for y in modules:
            if x.is_projective() or y.is_projective():
                assert finite_algebra.stable_hom(x, y) == 0
            if x.is_injective() or y.is_injective():
                assert finite_algebra.inj_stable_hom(x, y) == 0
            assert finite_algebra.stable_hom(x, y) <= finite_algebra.hom(x, y)


def test_bricks_have_one_dimensional_endomorphisms(finite_algebra):
    for module in finite_algebra.to_rf_algebra().indecs:
        assert module.is_brick() == (finite_algebra.hom(module, module) == 1)


def test_non_brick():
    # Kupisch series [3, 2]: the projective at v1 has top and socle at v1
    algebra = kupisch_to_nakayama([3, 2])
    assert algebra.number_of_indecs() == 5
    proj = algebra.proj_at("v1")
    assert str(proj) == "1*2"
    assert algebra.hom(proj, proj) == 2
    assert not proj.is_brick()
    assert algebra.stable_hom(proj, proj) == 0


def test_stable_hom_of_simples(a3):
    s1, s2, s3 = a3.simples()
    assert a3.stable_hom(s1, s1) == 1
    assert a3.inj_stable_hom(s3, s3) == 1
    assert a3.stable_hom(s3, s3) == 0
    assert a3.inj_stable_hom(s1, s1) == 0


def test_legal_words_are_closed(finite_algebra):
    string_algebra = getattr(finite_algebra, "reduction", finite_algebra)
    for word in string_algebra.words():
        assert ~~word == word
        assert finite_algebra.is_legal(~word)
        for i in range(len(word) + 1):
            for j in range(i, len(word) + 1):
                assert finite_algebra.is_legal(word.sub_word(i, j))


# --- syzygies over a special biserial algebra ---

def test_syzygies_of_simple_top(commutative_square):
    algebra = commutative_square
    s1 = algebra.simple_at(1)
    (first,) = s1.syzygy()
    assert first.is_isomorphic(algebra.proj_at(1).radical()[0])
    assert first.is_isomorphic(parse_indec(algebra, "b*!d"))
    assert [str(m) for m in s1.syzygy(2)] == ["4"]
    assert s1.syzygy(3) == []
    assert s1.proj_dim() == 2


def test_syzygy_of_string_module_under_biserial_projective(commutative_square):
    algebra = commutative_square
    (kernel,) = parse_indec(algebra, "a").syzygy()
    assert kernel.is_isomorphic(algebra.proj_at(3))
    (kernel,) = parse_indec(algebra, "!a*c").syzygy()
    assert kernel.is_isomorphic(algebra.simple_at(4))
    assert parse_indec(algebra, "a").proj_dim() == 1


def test_cosyzygies_of_simple_socle(commutative_square):
    algebra = commutative_square
    s4 = algebra.simple_at(4)
    (first,) = s4.cosyzygy()
    assert first.is_isomorphic(algebra.inj_at(4).coradical()[0])
    assert first.is_isomorphic(parse_indec(algebra, "!a*c"))
    assert [str(m) for m in s4.cosyzygy(2)] == ["1"]
    assert s4.inj_dim() == 2
    (cokernel,) = parse_indec(algebra, "d").cosyzygy()
    assert cokernel.is_isomorphic(parse_indec(algebra, "a"))


def test_resolutions_over_special_biserial(commutative_square):
    algebra = commutative_square
    s1, s4 = algebra.simple_at(1), algebra.simple_at(4)
    assert [sorted(t) for t in algebra.proj_resolution(s1, 3)] == [[1], [2, 3], [4], []]
    assert [sorted(t) for t in algebra.inj_resolution(s4, 3)] == [[4], [2, 3], [1], []]
    assert algebra.global_dim() == 2
