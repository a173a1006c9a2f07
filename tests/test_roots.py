import numpy as np
import pytest
from numpy.testing import assert_allclose

from rational_nurbs import DegreeClass, Polynomial, Root, RootConvergenceWarning, Tolerances, solve
from rational_nurbs.roots import solve_laguerre


def values(roots):
    """Root values sorted by real then imaginary part."""
    return sorted((r.value for r in roots), key=lambda z: (round(z.real, 6), round(z.imag, 6)))


def total_multiplicity(roots):
    return sum(r.multiplicity for r in roots)


def test_degree_class():
    assert DegreeClass.of(0) is DegreeClass.CONSTANT
    assert DegreeClass.of(2) is DegreeClass.QUADRATIC
    assert DegreeClass.of(4) is DegreeClass.HIGHER
    assert DegreeClass.of(9) is DegreeClass.HIGHER


def test_constant_has_no_roots():
    assert solve(Polynomial(3.0)) == []


def test_linear():
    assert solve(Polynomial([2.0, -4.0])) == [Root(1, 2 + 0j)]


def test_leading_zeros_are_ignored():
    roots = solve(Polynomial([0.0, 0.0, 1.0, -2.0]))
    assert roots == [Root(1, 2 + 0j)]


class TestQuadratic:
    def test_two_real(self):
        roots = solve(Polynomial([1.0, -3.0, 2.0]))
        assert [r.multiplicity for r in roots] == [1, 1]
        assert_allclose(values(roots), [1.0, 2.0])

    def test_double(self):
        assert solve(Polynomial([1.0, -2.0, 1.0])) == [Root(2, 1 + 0j)]

    def test_conjugate_pair(self):
        roots = solve(Polynomial([1.0, 0.0, 1.0]))
        assert values(roots) == [-1j, 1j]


class TestCubic:
    def test_triple(self):
        roots = solve(Polynomial([1.0, -6.0, 12.0, -8.0]))
        assert len(roots) == 1
        assert roots[0].multiplicity == 3
        assert roots[0].value == pytest.approx(2.0)

    def test_double_and_simple(self):
        # (x - 1)^2 (x - 2)
        roots = solve(Polynomial([1.0, -4.0, 5.0, -2.0]))
        by_multiplicity = {r.multiplicity: r.value for r in roots}
        assert by_multiplicity[2] == pytest.approx(1.0)
        assert by_multiplicity[1] == pytest.approx(2.0)

    def test_simple_and_double(self):
        # (x - 2)^2 (x - 1), R > 0 puts the simple root first
        roots = solve(Polynomial([1.0, -5.0, 8.0, -4.0]))
        assert [r.multiplicity for r in roots] == [1, 2]
        by_multiplicity = {r.multiplicity: r.value for r in roots}
        assert by_multiplicity[2] == pytest.approx(2.0)
        assert by_multiplicity[1] == pytest.approx(1.0)

    def test_three_real(self):
        roots = solve(Polynomial([1.0, -6.0, 11.0, -6.0]))
        assert total_multiplicity(roots) == 3
        assert_allclose(values(roots), [1.0, 2.0, 3.0], atol=1e-12)

    def test_one_real_and_a_pair(self):
        # (x - 1)(x^2 + 1)
        roots = solve(Polynomial([1.0, -1.0, 1.0, -1.0]))
        assert total_multiplicity(roots) == 3
        assert_allclose(values(roots), [-1j, 1j, 1.0], atol=1e-12)

    def test_roots_satisfy_polynomial(self):
        p = Polynomial([2.0, -1.0, 3.0, 5.0])
        for r in solve(p):
            assert abs(p.evaluate(r.value)) < 1e-12


QUARTIC = Polynomial([1.0, -10.0, 35.0, -50.0, 24.0])


@pytest.mark.parametrize("method", ["eigenvalues", "laguerre"])
class TestHigherDegree:
    def test_real_quartic(self, method):
        roots = solve(QUARTIC, method)
        assert total_multiplicity(roots) == 4
        assert_allclose(values(roots), [1.0, 2.0, 3.0, 4.0], atol=1e-8)

    def test_roots_of_unity(self, method):
        roots = solve(Polynomial([1.0, 0.0, 0.0, 0.0, -1.0]), method)
        assert_allclose(values(roots), [-1.0, -1j, 1j, 1.0], atol=1e-8)

    def test_quintic_residuals(self, method):
        p = Polynomial([1.0, 0.5, -2.0, 3.0, 1.0, -4.0])
        roots = solve(p, method)
        assert total_multiplicity(roots) == 5
        for r in roots:
            assert abs(p.evaluate(r.value)) < 1e-8


def test_laguerre_splits_zero_roots():
    # x^2 (x - 1)(x - 2)(x - 3)
    roots = solve(Polynomial([1.0, -6.0, 11.0, -6.0, 0.0, 0.0]), "laguerre")
    assert roots[0] == Root(2, 0j)
    assert total_multiplicity(roots) == 5
    assert_allclose(values(roots[1:]), [1.0, 2.0, 3.0], atol=1e-8)


def test_laguerre_warns_at_iteration_cap():
    p = Polynomial.from_roots([(1, 1.0), (1, 2.0), (1, 3.0), (1, 4.0), (1, 5.0)])
    p = Polynomial(p.coefficients.real)
    with pytest.warns(RootConvergenceWarning):
        roots = solve_laguerre(p, Tolerances(laguerre_max_iter=1))
    assert len(roots) == 5


def test_eigenvalues_snap_small_parts():
    # x (x - 1)(x - 2)(x - 3)
    roots = solve(Polynomial([1.0, -6.0, 11.0, -6.0, 0.0]), "eigenvalues", Tolerances(snap=1e-10))
    zeros = [r for r in roots if r.value == 0]
    assert len(zeros) == 1
    assert all(r.value.imag == 0 for r in roots)


def test_unknown_method():
    with pytest.raises(ValueError):
        solve(QUARTIC, "bisection")


@pytest.mark.parametrize("coefficients, expected", [
    ([1.0, -5.0, 6.0], [Root(1, 3 + 0j), Root(1, 2 + 0j)]),
    ([1.0, -3.0, 3.0, -1.0], [Root(3, 1 + 0j)]),
    ([1.0, 0.0, 1.0], [Root(1, 1j), Root(1, -1j)]),
    ([1.0, 6.0, 12.0, 8.0], [Root(3, -2 + 0j)]),
])
def test_known_fixtures(coefficients, expected):
    assert solve(Polynomial(coefficients)) == expected
