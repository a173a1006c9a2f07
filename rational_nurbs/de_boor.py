"""
De Boor recursion producing the exact rational form of a NURBS segment.
"""

import numpy as np

from .polynomial import Polynomial
from .utils import format_coefficients

# The global parameter t
_T = Polynomial([1.0, 0.0])


class RationalSegment:
    """
    One curve segment as numerator polynomials over a shared denominator.

    Point d of the segment at parameter t is numerators[d](t) / denominator(t).
    Unpacks as the pair (numerators, denominator).
    """

    def __init__(self, numerators, denominator, span=None, t0=None, t1=None):
        self.numerators = list(numerators)
        self.denominator = denominator
        self.span = span
        self.t0 = t0
        self.t1 = t1

    @property
    def dimension(self):
        return len(self.numerators)

    def __iter__(self):
        return iter((self.numerators, self.denominator))

    def __repr__(self):
        return (f"RationalSegment(span={self.span}, t=[{self.t0}, {self.t1}], "
                f"numerator degrees={[p.degree for p in self.numerators]}, "
                f"denominator degree={self.denominator.degree})")

    def evaluate(self, t):
        """Point(s) on the segment; returns shape (dim,) or (len(t), dim)."""
        t = np.asarray(t, dtype=float)
        den = self.denominator.evaluate(t)
        return np.stack([p.evaluate(t) / den for p in self.numerators], axis=-1)

    def slope(self, t):
        """dy/dx by the quotient rule on the first two coordinates."""
        t = np.asarray(t, dtype=float)
        p_x, p_y = self.numerators[0], self.numerators[1]
        den = self.denominator
        den_t = den.evaluate(t)
        den_der = den.derivative().evaluate(t)
        dy = p_y.derivative().evaluate(t) * den_t - p_y.evaluate(t) * den_der
        dx = p_x.derivative().evaluate(t) * den_t - p_x.evaluate(t) * den_der
        return dy / dx

    def area_integrand(self, t):
        """y(t) x'(t) = Y X'/D^2 - Y D' X/D^3."""
        t = np.asarray(t, dtype=float)
        p_x, p_y = self.numerators[0], self.numerators[1]
        den_t = self.denominator.evaluate(t)
        den_quadratic = den_t ** 2
        y = p_y.evaluate(t)
        value = y * p_x.derivative().evaluate(t) / den_quadratic
        value -= y * self.denominator.derivative().evaluate(t) * p_x.evaluate(t) / den_quadratic / den_t
        return value

    def trim(self, epsilon):
        """Tolerance-trim the denominator and every numerator."""
        self.denominator.trim(epsilon)
        for p in self.numerators:
            p.trim(epsilon)
        return self

    def normalize(self):
        """Make the denominator monic, dividing the numerators by the same factor."""
        lead = self.denominator.normalize()
        if lead != 0:
            self.numerators = [p / lead for p in self.numerators]
        return lead

    def format(self, format_spec='.17g'):
        """One export line: numerator coefficient lists, then the denominator's."""
        polys = self.numerators + [self.denominator]
        return " ".join(format_coefficients(p, format_spec) for p in polys)


def _blend(current, previous, left, right):
    """((t - left) * current + (right - t) * previous) / (right - left)."""
    temp1 = current * _T + current * (-left)
    temp2 = previous * (-_T) + previous * right
    return (temp1 + temp2) / (right - left)


def de_boor_segment(k, knots, weights, control_points, degree):
    """
    Rational form of the curve on the knot span [knots[k], knots[k+1]).

    Runs the triangular de Boor scheme on polynomials in the global parameter
    t, blending the homogeneous control points (w_i * P_i, w_i).

    Args:
        k: Span index, knots[k] < knots[k+1]
        knots: Knot vector
        weights: Control point weights
        control_points: (n, dim) control points
        degree: Curve degree p

    Returns:
        RationalSegment with numerators and denominator of degree p
    """
    p = degree
    dim = control_points.shape[1]
    d = []
    d_den = []
    for i in range(p + 1):
        w = weights[i + k - p]
        d_den.append(Polynomial(w))
        d.append([Polynomial(control_points[i + k - p][j] * w) for j in range(dim)])

    for r in range(1, p + 1):
        for j in range(p, r - 1, -1):
            left = knots[j + k - p]
            right = knots[j + 1 + k - r]
            d_den[j] = _blend(d_den[j], d_den[j - 1], left, right)
            d[j] = [_blend(d[j][i], d[j - 1][i], left, right) for i in range(dim)]

    return RationalSegment(d[p], d_den[p], span=k, t0=knots[k], t1=knots[k + 1])
