import pytest

from quiver_algebras import Arrow, Monomial, Quiver, classify


def linear_quiver(n):
    """1 -> 2 -> ... -> n with arrows labelled a, b, c, ..."""
    arrows = [Arrow(chr(ord("a") + i), i + 1, i + 2) for i in range(n - 1)]
    return Quiver(range(1, n + 1), arrows, name=f"A{n}")


@pytest.fixture
def a2():
    return classify(linear_quiver(2))


@pytest.fixture
def a3():
    return classify(linear_quiver(3))


@pytest.fixture
def kronecker():
    a = Arrow("a", 1, 2)
    b = Arrow("b", 1, 2)
    return classify(Quiver([1, 2], [a, b], name="Kronecker"))


@pytest.fixture
def kronecker_with_tail():
    a = Arrow("a", 1, 2)
    b = Arrow("b", 1, 2)
    c = Arrow("c", 2, 3)
    return classify(Quiver([1, 2, 3], [a, b, c]), [Monomial([a, c])])


@pytest.fixture
def commutative_square():
    a = Arrow("a", 1, 2)
    b = Arrow("b", 2, 4)
    c = Arrow("c", 1, 3)
    d = Arrow("d", 3, 4)
    quiver = Quiver([1, 2, 3, 4], [a, b, c, d], name="square")
    return classify(quiver, bi_relations=[(Monomial([a, b]), Monomial([c, d]))])
