import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from rational_nurbs import (
    Polynomial,
    Root,
    STRATEGIES,
    integrate_power_term,
    integrate_rational,
    partial_fractions,
    partial_fractions_matrix,
    split_proper,
)

DECOMPOSITIONS = [partial_fractions, partial_fractions_matrix]


class TestPowerTerms:
    def test_log_of_real_root(self):
        assert integrate_power_term(1.0, -1.0, 1, 0.0, 1.0) == pytest.approx(math.log(2.0))

    def test_log_of_real_root_below_the_interval(self):
        # |t - r| with r to the right of the interval
        value = integrate_power_term(1.0, 3.0, 1, 0.0, 1.0)
        assert value == pytest.approx(math.log(2.0 / 3.0))

    def test_power_law(self):
        assert integrate_power_term(1.0, -1.0, 2, 0.0, 1.0) == pytest.approx(0.5)
        assert integrate_power_term(2.0, -1.0, 3, 0.0, 1.0) == pytest.approx(0.75)


@pytest.mark.parametrize("decompose", DECOMPOSITIONS)
class TestPartialFractions:
    def test_repeated_pole(self, decompose):
        # t / (t + 1)^2 = 1/(t + 1) - 1/(t + 1)^2
        coefficients = decompose(Polynomial([1.0, 0.0]), [Root(2, -1.0)])
        assert_allclose(coefficients, [1.0, -1.0], atol=1e-12)

    def test_distinct_poles(self, decompose):
        # 1 / ((t - 1)(t - 2)) = -1/(t - 1) + 1/(t - 2)
        coefficients = decompose(Polynomial([1.0]), [Root(1, 1.0), Root(1, 2.0)])
        assert_allclose(coefficients, [-1.0, 1.0], atol=1e-12)

    def test_mixed_multiplicities_reconstruct(self, decompose):
        poles = [Root(2, 0.5 + 1j), Root(1, -2.0), Root(3, 1.5)]
        numerator = Polynomial([1.0, -2.0, 0.5, 3.0, -1.0, 2.0])
        coefficients = decompose(numerator, poles)
        t = 0.3
        expected = numerator.evaluate(t) / Polynomial.from_roots(poles).evaluate(t)
        total, j = 0j, 0
        for m, r in poles:
            for k in range(1, m + 1):
                total += coefficients[j] / (t - r) ** k
                j += 1
        assert abs(total - expected) < 1e-10

    def test_improper_numerator(self, decompose):
        with pytest.raises(ValueError):
            decompose(Polynomial([1.0, 0.0, 0.0]), [Root(2, -1.0)])


def test_split_proper():
    q, r = split_proper(Polynomial([1.0, 2.0]), Polynomial([1.0, 0.0, 1.0]))
    assert q.is_zero()
    assert r == Polynomial([1.0, 2.0])
    q, r = split_proper(Polynomial([1.0, 0.0, 0.0]), Polynomial([1.0, 1.0]))
    assert q == Polynomial([1.0, -1.0])
    assert r == Polynomial([1.0])


@pytest.mark.parametrize("decompose", DECOMPOSITIONS)
class TestIntegrateRational:
    def test_arctan(self, decompose):
        value = integrate_rational(Polynomial([1.0]), [Root(1, 1j), Root(1, -1j)], 0.0, 1.0, decompose)
        assert value.real == pytest.approx(math.pi / 4)
        assert abs(value.imag) < 1e-14

    def test_triple_pole(self, decompose):
        value = integrate_rational(Polynomial([1.0]), [Root(3, -1.0)], 0.0, 1.0, decompose)
        assert value.real == pytest.approx(3.0 / 8.0)

    def test_improper_fraction(self, decompose):
        # t^2 / (t + 1) = t - 1 + 1/(t + 1)
        value = integrate_rational(Polynomial([1.0, 0.0, 0.0]), [Root(1, -1.0)], 0.0, 1.0, decompose)
        assert value.real == pytest.approx(-0.5 + math.log(2.0))

    def test_zero_numerator(self, decompose):
        assert integrate_rational(Polynomial([0.0, 0.0]), [Root(1, 1j)], 0.0, 1.0, decompose) == 0


def arctan_segment():
    # x = t, y = 1 / (1 + t^2) over the shared denominator 1 + t^2
    denominator = Polynomial([1.0, 0.0, 1.0])
    numerators = [Polynomial([1.0, 0.0, 1.0, 0.0]), Polynomial([1.0])]
    return numerators, denominator


def graph_segment(denominator):
    # x = t, y = 1 / D over the shared denominator D
    return [Polynomial([1.0, 0.0]) * denominator, Polynomial([1.0])], denominator


@pytest.mark.parametrize("strategy", sorted(STRATEGIES))
class TestSegmentStrategies:
    def test_arctan_segment(self, strategy):
        numerators, denominator = arctan_segment()
        value = STRATEGIES[strategy](numerators, denominator, 0.0, 1.0)
        assert value.real == pytest.approx(math.pi / 4, abs=1e-12)
        assert abs(value.imag) < 1e-12

    def test_scaled_denominator(self, strategy):
        # Same curve with numerators and denominator multiplied by 3
        numerators, denominator = arctan_segment()
        numerators = [3 * p for p in numerators]
        value = STRATEGIES[strategy](numerators, 3 * denominator, 0.0, 1.0)
        assert value.real == pytest.approx(math.pi / 4, abs=1e-12)

    def test_constant_denominator(self, strategy):
        # Line y = 2x over x in [0, 1]
        numerators = [Polynomial([2.0, 0.0]), Polynomial([4.0, 0.0])]
        value = STRATEGIES[strategy](numerators, Polynomial([2.0]), 0.0, 1.0)
        assert value.real == pytest.approx(1.0)

    def test_inputs_untouched(self, strategy):
        numerators, denominator = arctan_segment()
        STRATEGIES[strategy](numerators, denominator, 0.0, 1.0)
        assert denominator == Polynomial([1.0, 0.0, 1.0])
        assert numerators[0] == Polynomial([1.0, 0.0, 1.0, 0.0])

    def test_sub_interval(self, strategy):
        numerators, denominator = arctan_segment()
        value = STRATEGIES[strategy](numerators, denominator, 0.25, 0.75)
        assert value.real == pytest.approx(np.arctan(0.75) - np.arctan(0.25), abs=1e-12)

    def test_double_root_denominator(self, strategy):
        # D = (t + 2)^2
        numerators, denominator = graph_segment(Polynomial([1.0, 4.0, 4.0]))
        value = STRATEGIES[strategy](numerators, denominator, 0.0, 1.0)
        assert value.real == pytest.approx(1.0 / 6.0, abs=1e-12)
        assert abs(value.imag) < 1e-12

    def test_cubic_with_double_root(self, strategy):
        # 1 / ((t + 2)^2 (t + 3)) = -1/(t + 2) + 1/(t + 2)^2 + 1/(t + 3)
        numerators, denominator = graph_segment(Polynomial([1.0, 7.0, 16.0, 12.0]))
        value = STRATEGIES[strategy](numerators, denominator, 0.0, 1.0)
        expected = 1.0 / 6.0 - math.log(1.5) + math.log(4.0 / 3.0)
        assert value.real == pytest.approx(expected, abs=1e-12)
