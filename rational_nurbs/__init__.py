"""
Rational NURBS curves in exact polynomial form

This package reduces every segment of a NURBS curve to a ratio of polynomials
by running the de Boor recursion on polynomial coefficients. The segments can
then be sampled, differentiated and integrated in closed form: the integral
of y dx is computed through polynomial root finding and partial fractions, and
cross-checked against Gauss-Legendre quadrature.
"""

from .polynomial import Polynomial, divide, product
from .roots import Root, DegreeClass, solve
from .integration import (
    integrate_power_term,
    partial_fractions,
    partial_fractions_matrix,
    split_proper,
    integrate_rational,
    integrate_segment_direct,
    integrate_segment_residues,
    STRATEGIES
)
from .de_boor import RationalSegment, de_boor_segment
from .nurbs import NurbsCurve
from .visualization import plot_curve, plot_slopes
from .utils import uniform_knots, span_indices, format_number, format_coefficients
from .exceptions import DegreeError, RootConvergenceWarning
from .constants import Tolerances, DEFAULT_TOLERANCES
from . import constants

__all__ = [
    # Core classes
    'Polynomial',
    'NurbsCurve',
    'RationalSegment',
    'Root',
    'DegreeClass',

    # Polynomial functions
    'divide',
    'product',
    'solve',

    # Integration functions
    'integrate_power_term',
    'partial_fractions',
    'partial_fractions_matrix',
    'split_proper',
    'integrate_rational',
    'integrate_segment_direct',
    'integrate_segment_residues',
    'STRATEGIES',

    # Segment construction
    'de_boor_segment',

    # Visualization functions
    'plot_curve',
    'plot_slopes',

    # Utility functions
    'uniform_knots',
    'span_indices',
    'format_number',
    'format_coefficients',

    # Errors and configuration
    'DegreeError',
    'RootConvergenceWarning',
    'Tolerances',
    'DEFAULT_TOLERANCES',

    # Constants module
    'constants',
]

__version__ = "1.0.0"
