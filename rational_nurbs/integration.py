"""
Closed-form definite integrals of rational functions.

A proper fraction N(t) / prod (t - r)^m is split into terms A / (t - r)^k,
each with an elementary antiderivative. Everything is evaluated in the complex
field: conjugate poles only cancel to a real total after summation.

Two independent strategies integrate y(t) x'(t) over one curve segment, with
x = X/D and y = Y/D:

    residues: Y X'/D^2 through quotient/remainder splits against D, and
              Y X D'/D^3 through D'/D = sum m_j / (t - r_j), one contribution
              per root
    direct:   (Y X' D - Y D' X) / D^3 with the quotient integrated as a
              polynomial and the remainder decomposed by a linear solve

They share the root solver and the closed-form terms but nothing else, so
their agreement is a check on both.
"""

import cmath
import math

import numpy as np
from scipy.linalg import solve as linear_solve

from .constants import DEFAULT_TOLERANCES
from .polynomial import Polynomial, divide
from .roots import Root, solve


def integrate_power_term(coefficient, root, order, t0, t1):
    """
    coefficient * integral of (t - root)^(-order) over [t0, t1].

    Order 1 gives a logarithm difference (log|t - r| for a real root, the
    principal complex log otherwise); higher orders the power law
    -(t - r)^(1 - k) / (k - 1). The pole must lie off [t0, t1].
    """
    root = complex(root)
    if order == 1:
        if root.imag == 0.0:
            r = root.real
            return complex(coefficient * (math.log(abs(t1 - r)) - math.log(abs(t0 - r))))
        return complex(coefficient * (cmath.log(t1 - root) - cmath.log(t0 - root)))
    k = order - 1
    return complex(coefficient * ((t1 - root) ** -k - (t0 - root) ** -k) / -k)


def _check_proper(numerator, poles):
    total = sum(m for m, _ in poles)
    if not numerator.is_zero() and numerator.degree >= total:
        raise ValueError(
            f"numerator of degree {numerator.degree} is not proper over {total} poles"
        )
    return total


def _series_divide(num, den, count):
    """First count coefficients of the power series num / den (ascending)."""
    series = []
    for j in range(count):
        acc = num[j]
        for i in range(1, j + 1):
            acc -= den[i] * series[j - i]
        series.append(acc / den[0])
    return series


def partial_fractions(numerator, poles):
    """
    Partial-fraction coefficients by the residue formula.

    For a pole r of multiplicity m and G the product of the other factors,
    the coefficient of 1 / (t - r)^k is the (m - k)-th Taylor coefficient of
    numerator / G at r.

    Args:
        numerator: Proper numerator, deg < total multiplicity
        poles: Sequence of Root(multiplicity, value) of the monic denominator

    Returns:
        Coefficients ordered pole by pole, k = 1..m within a pole
    """
    poles = [Root(*p) for p in poles]
    _check_proper(numerator, poles)
    coefficients = []
    for i, (m, r) in enumerate(poles):
        others = Polynomial.from_roots(poles[:i] + poles[i + 1:])
        series = _series_divide(numerator.taylor_coefficients(r, m),
                                others.taylor_coefficients(r, m), m)
        coefficients.extend(complex(series[m - k]) for k in range(1, m + 1))
    return coefficients


def partial_fractions_matrix(numerator, poles):
    """
    Partial-fraction coefficients from the coefficient-matching linear system.

    Column (r, k) holds prod / (t - r)^k padded to the total degree; the
    right-hand side is the numerator. Same ordering as partial_fractions.
    """
    poles = [Root(*p) for p in poles]
    n = _check_proper(numerator, poles)
    if n == 0:
        return []

    columns = []
    for i, (m, r) in enumerate(poles):
        for k in range(1, m + 1):
            basis = Polynomial.from_roots(poles[:i] + [Root(m - k, r)] + poles[i + 1:])
            columns.append(basis.padded(n))
    matrix = np.column_stack(columns)
    rhs = numerator.to_complex().padded(n)
    return [complex(c) for c in linear_solve(matrix, rhs)]


def split_proper(numerator, denominator):
    """
    Quotient/remainder split that leaves proper fractions untouched.

    Returns:
        (quotient, remainder); (0, numerator) when deg numerator < deg denominator
    """
    if numerator.degree < denominator.degree:
        return Polynomial(np.zeros(1, dtype=numerator.dtype)), numerator
    return divide(numerator, denominator)


def integrate_rational(numerator, poles, t0, t1, decompose=partial_fractions):
    """
    Integral of numerator / prod (t - r)^m over [t0, t1].

    The part of the numerator at or above the denominator degree is divided
    out and integrated as a polynomial; the proper remainder goes through
    decompose and integrate_power_term.
    """
    poles = [Root(*p) for p in poles]
    denominator = Polynomial.from_roots(poles)
    total = 0j
    remainder = numerator
    if not numerator.is_zero() and numerator.degree >= denominator.degree:
        quotient, remainder = divide(numerator, denominator)
        total += quotient.integral(t0, t1)
    if remainder.is_zero():
        return complex(total)

    coefficients = decompose(remainder, poles)
    j = 0
    for m, r in poles:
        for k in range(1, m + 1):
            total += integrate_power_term(coefficients[j], r, k, t0, t1)
            j += 1
    return complex(total)


def _raise_multiplicity(poles, factor):
    return [Root(m * factor, r) for m, r in poles]


def _with_simple_pole(poles, value):
    """Poles of the denominator multiplied by (t - value)."""
    out = []
    added = False
    for m, r in poles:
        if not added and r == value:
            out.append(Root(m + 1, r))
            added = True
        else:
            out.append(Root(m, r))
    if not added:
        out.append(Root(1, value))
    return out


def integrate_segment_residues(numerators, denominator, t0, t1, method='eigenvalues',
                               tolerances=DEFAULT_TOLERANCES):
    """
    integral of y x' over [t0, t1] for one segment, residue strategy.

    Args:
        numerators: Numerator polynomials; the first two are X and Y
        denominator: Denominator polynomial D
        t0, t1: Integration bounds inside the segment span
        method: Root method for denominators of degree >= 4
        tolerances: Tolerances passed to the root solver

    Returns:
        complex value of the integral
    """
    p_x, p_y = numerators[0], numerators[1]
    den = denominator.copy().trim_zeros()
    poles = solve(den, method, tolerances)
    norm_den = den.normalize()
    norm_den *= norm_den

    # Y X' / D^2
    q1, r1 = split_proper(p_y, den)
    q2, r2 = split_proper(p_x.derivative(), den)
    left = (q1 * q2).integral(t0, t1)
    q3, r3 = split_proper(q1 * r2 + q2 * r1, den)
    left += q3.integral(t0, t1)
    left += integrate_rational(r3, poles, t0, t1)
    left += integrate_rational(r1 * r2, _raise_multiplicity(poles, 2), t0, t1)

    # Y X D' / D^3 = (Y/D)(X/D) sum m_j / (t - r_j)
    q4, r4 = split_proper(p_x, den)
    base = q1 * q4
    q5, r5 = split_proper(q1 * r4 + q4 * r1, den)
    tail = r1 * r4
    squared = _raise_multiplicity(poles, 2)
    right = 0j
    for pole in poles:
        single = [Root(1, pole.value)]
        contribution = integrate_rational(base, single, t0, t1)
        contribution += integrate_rational(q5, single, t0, t1)
        contribution += integrate_rational(r5, _with_simple_pole(poles, pole.value), t0, t1)
        contribution += integrate_rational(tail, _with_simple_pole(squared, pole.value), t0, t1)
        right += pole.multiplicity * contribution

    return complex((left - right) / norm_den)


def _integrate_over_power(numerator, denominator, poles, t0, t1):
    numerator = numerator.copy().trim_zeros()
    scale = numerator.normalize()
    if scale == 0:
        return 0j
    total = 0j
    if numerator.degree >= denominator.degree:
        quotient, numerator = divide(numerator, denominator)
        total += quotient.integral(t0, t1)
    coefficients = partial_fractions_matrix(numerator, poles)
    j = 0
    for m, r in poles:
        for k in range(1, m + 1):
            total += integrate_power_term(coefficients[j], r, k, t0, t1)
            j += 1
    return scale * total


def integrate_segment_direct(numerators, denominator, t0, t1, method='eigenvalues',
                             tolerances=DEFAULT_TOLERANCES):
    """
    integral of y x' over [t0, t1] for one segment, direct strategy.

    Same arguments and result as integrate_segment_residues.

    Partial fractions are taken over D^3 by a linear solve of size 3 * deg D.
    That system is ill-conditioned when complex poles sit close to the span,
    as for quartic denominators, and the result can lose several digits
    against integrate_segment_residues. The loss is not detected.
    """
    p_x, p_y = numerators[0], numerators[1]
    den = denominator.copy().trim_zeros()
    num1 = p_y * (p_x.derivative() * den)
    num2 = -(p_y * den.derivative() * p_x)

    a0 = den.normalize()
    poles = solve(den, method, tolerances)
    cube = den * den * den
    a0 = a0 * a0 * a0
    poles = _raise_multiplicity(poles, 3)

    left = _integrate_over_power(num1, cube, poles, t0, t1)
    right = _integrate_over_power(num2, cube, poles, t0, t1)
    return complex((left + right) / a0)


STRATEGIES = {
    'direct': integrate_segment_direct,
    'residues': integrate_segment_residues,
}
