"""
Degree-dispatching polynomial root solver.

Degrees 1-3 use closed forms, higher degrees either the eigenvalues of the
companion matrix or Laguerre's method with deflation. Every solver returns a
list of Root(multiplicity, value) in discovery order.
"""

import cmath
import math
import warnings
from enum import Enum
from typing import List, NamedTuple

import numpy as np
from scipy.linalg import companion, eigvals

from .constants import DEFAULT_TOLERANCES
from .exceptions import RootConvergenceWarning
from .polynomial import Polynomial, divide


class Root(NamedTuple):
    multiplicity: int
    value: complex


class DegreeClass(Enum):
    CONSTANT = 0
    LINEAR = 1
    QUADRATIC = 2
    CUBIC = 3
    HIGHER = 4

    @classmethod
    def of(cls, degree):
        return cls(min(degree, cls.HIGHER.value))


def _snap(value, eps):
    value = complex(value)
    real = 0.0 if abs(value.real) < eps else value.real
    imag = 0.0 if abs(value.imag) < eps else value.imag
    return complex(real, imag)


def solve_constant(poly, tolerances=DEFAULT_TOLERANCES):
    return []


def solve_linear(poly, tolerances=DEFAULT_TOLERANCES):
    return [Root(1, complex(-poly[1] / poly[0]))]


def solve_quadratic(poly, tolerances=DEFAULT_TOLERANCES):
    """
    Discriminant formula for a x^2 + b x + c.

    A discriminant within tolerances.discriminant of zero is reported as one
    root of multiplicity 2.
    """
    a, b, c = float(poly[0]), float(poly[1]), float(poly[2])
    D = b * b - 4 * a * c
    if abs(D) < tolerances.discriminant:
        return [Root(2, complex(-b / 2 / a))]

    if D > 0:
        return [Root(1, complex((-b + math.sqrt(D)) / 2.0 / a)),
                Root(1, complex((-b - math.sqrt(D)) / 2.0 / a))]

    return [Root(1, complex(-b / 2 / a, math.sqrt(-D) / 2 / a)),
            Root(1, complex(-b / 2 / a, -math.sqrt(-D) / 2 / a))]


def solve_cubic(poly, tolerances=DEFAULT_TOLERANCES):
    """
    Closed-form cubic roots through the depressed cubic.

    With x^3 + a x^2 + b x + c, q = a^2 - 3b, r = 2a^3 - 9ab + 27c,
    Q = q/9 and R = r/54:
      - Q and R near zero: triple root -a/3
      - 729 r^2 near 2916 q^3: a double and a simple root
      - R^2 < Q^3: three real roots (trigonometric form)
      - otherwise one real root (Cardano), the quotient is solved as a quadratic
    Precision degrades close to the boundaries between these regimes.
    """
    eps = tolerances.cubic
    a = float(poly[1] / poly[0])
    b = float(poly[2] / poly[0])
    c = float(poly[3] / poly[0])
    q = a * a - 3.0 * b
    r = 2.0 * a * a * a - 9.0 * a * b + 27.0 * c
    Q = q / 9.0
    R = r / 54.0
    Q3 = Q * Q * Q
    R2 = R * R

    CR2 = 729 * r * r
    CQ3 = 2916 * q * q * q

    if abs(R) < eps and abs(Q) < eps:
        return [Root(3, complex(-a / 3.0))]

    if abs(CR2 - CQ3) < eps:
        sqrtQ = math.sqrt(max(Q, 0.0))
        if R > 0:
            return [Root(1, complex(-2 * sqrtQ - a / 3)),
                    Root(2, complex(sqrtQ - a / 3))]
        return [Root(2, complex(-sqrtQ - a / 3)),
                Root(1, complex(2 * sqrtQ - a / 3))]

    if R2 < Q3:
        sgnR = 1.0 if R >= 0 else -1.0
        ratio = min(1.0, max(-1.0, sgnR * math.sqrt(R2 / Q3)))
        theta = math.acos(ratio)
        norm = -2 * math.sqrt(Q)
        return [Root(1, complex(norm * math.cos(theta / 3) - a / 3)),
                Root(1, complex(norm * math.cos((theta + 2.0 * math.pi) / 3) - a / 3)),
                Root(1, complex(norm * math.cos((theta - 2.0 * math.pi) / 3) - a / 3))]

    sgnR = 1.0 if R >= 0 else -1.0
    A = -sgnR * (abs(R) + math.sqrt(R2 - Q3)) ** (1.0 / 3.0)
    B = Q / A
    root = A + B - a / 3.0
    quadratic, _ = divide(poly, Polynomial([1.0, -root]))
    res = solve_quadratic(quadratic, tolerances)
    res.append(Root(1, complex(root)))
    return res


def solve_eigenvalues(poly, tolerances=DEFAULT_TOLERANCES):
    """Roots as eigenvalues of the companion matrix of the monic polynomial."""
    poly = poly.copy()
    poly.normalize()
    roots = eigvals(companion(poly.coefficients))
    return [Root(1, 0j if abs(z) < tolerances.snap else complex(z)) for z in roots]


def _cauchy_lower_bound(poly):
    """Lower bound on the modulus of the nonzero roots."""
    ratios = np.abs(poly.coefficients[1:] / poly[0])
    return 1.0 / (1.0 + ratios.max())


def solve_laguerre(poly, tolerances=DEFAULT_TOLERANCES):
    """
    Laguerre's method with deflation.

    Trailing near-zero coefficients are split off first as a zero root of the
    matching multiplicity. Each remaining root is refined from the Cauchy
    lower bound and divided out of the complex polynomial. An iteration that
    hits tolerances.laguerre_max_iter keeps its last estimate and emits a
    RootConvergenceWarning.
    """
    eps = tolerances.laguerre
    res = []
    coef = poly.coefficients
    deg = poly.degree
    k = 0
    while k < deg and abs(coef[deg - k]) < tolerances.zero_coefficient:
        k += 1
    if k != 0:
        res.append(Root(k, 0j))

    p = Polynomial(coef[:deg - k + 1]).to_complex()
    while p.degree > 0:
        n = p.degree
        p1 = p.derivative()
        p11 = p1.derivative()
        x = complex(_cauchy_lower_bound(p))
        for it in range(tolerances.laguerre_max_iter):
            value = p.evaluate(x)
            if abs(value) < eps:
                break
            G = p1.evaluate(x) / value
            H = G * G - p11.evaluate(x) / value
            sq = cmath.sqrt((n - 1) * (n * H - G * G))
            d1 = G + sq
            d2 = G - sq
            d = d1 if abs(d1) > abs(d2) else d2
            if abs(d) == 0:
                # stationary point, kick the estimate off it
                a = (1 + abs(x)) * cmath.exp(1j * it)
            else:
                a = n / d
            if abs(a) < eps:
                break
            x -= a
        else:
            warnings.warn(
                f"Laguerre iteration did not converge in {tolerances.laguerre_max_iter} steps "
                f"(residual {abs(p.evaluate(x)):.3e}); keeping the last estimate",
                RootConvergenceWarning,
            )
        p, _ = divide(p, Polynomial([1.0 + 0j, -x]))
        res.append(Root(1, complex(x)))
    return res


_NUMERICAL_METHODS = {
    'eigenvalues': solve_eigenvalues,
    'laguerre': solve_laguerre,
}

_SOLVERS = {
    DegreeClass.CONSTANT: solve_constant,
    DegreeClass.LINEAR: solve_linear,
    DegreeClass.QUADRATIC: solve_quadratic,
    DegreeClass.CUBIC: solve_cubic,
}


def solve(poly: Polynomial, method: str = 'eigenvalues', tolerances=DEFAULT_TOLERANCES) -> List[Root]:
    """
    Roots of a real polynomial with multiplicities.

    Args:
        poly: Polynomial to solve; exact leading zeros are ignored
        method: 'eigenvalues' or 'laguerre', used from degree 4 on
        tolerances: Tolerances instance

    Returns:
        List of Root(multiplicity, value); the multiplicities add up to the
        degree of the trimmed polynomial
    """
    if method not in _NUMERICAL_METHODS:
        raise ValueError(f"unknown root method {method!r}, expected one of {sorted(_NUMERICAL_METHODS)}")
    poly = poly.copy().trim_zeros()
    solver = _SOLVERS.get(DegreeClass.of(poly.degree), _NUMERICAL_METHODS[method])
    return [Root(m, _snap(z, tolerances.snap)) for m, z in solver(poly, tolerances)]
