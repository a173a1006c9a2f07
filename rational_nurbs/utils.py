"""
Knot-vector helpers and coefficient formatting.
"""

import numpy as np


def uniform_knots(n_points, degree):
    """
    Clamped uniform knot vector on [0, 1].

    Args:
        n_points: Number of control points
        degree: Curve degree p

    Returns:
        np.ndarray of n_points + p + 1 knots: p + 1 zeros, the uniform
        interior knots, p + 1 ones
    """
    if degree < 1 or n_points <= degree:
        raise ValueError("uniform knots need 1 <= degree < n_points")
    n_spans = n_points - degree
    interior = np.arange(1, n_spans) / n_spans
    return np.concatenate([np.zeros(degree + 1), interior, np.ones(degree + 1)])


def span_indices(domain, knots):
    """
    Knot indices bounding the curve segments.

    Every index i in [domain[0], domain[1]) with knots[i] < knots[i+1] starts a
    segment; domain[1] closes the last one.
    """
    first, last = domain
    ks = [i for i in range(first, last) if knots[i] < knots[i + 1]]
    ks.append(last)
    return ks


def format_number(value, format_spec='.17g'):
    """
    Format a coefficient for export.

    Args:
        value: Real or complex number
        format_spec: Format specification applied to each real part

    Returns:
        str: Formatted number; complex values with a zero imaginary part are
             written as reals
    """
    if isinstance(value, (complex, np.complexfloating)):
        if value.imag == 0:
            return format(value.real, format_spec)
        return f"({format(value.real, format_spec)}{format(value.imag, '+' + format_spec)}j)"
    return format(value, format_spec)


def format_coefficients(poly, format_spec='.17g'):
    """Bracketed, comma-separated coefficients, highest degree first."""
    return "[" + ", ".join(format_number(c, format_spec) for c in poly.coefficients) + "]"
