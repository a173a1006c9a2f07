"""
Numerical tolerances and the quadrature table for the rational curve engine.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Tolerances:
    """
    Every epsilon used by root classification, trimming and iteration.

    Attributes:
        discriminant: |D| below this makes a quadratic report a double root
        cubic: threshold for the triple-root and double-root cubic regimes
        snap: real/imaginary parts of roots below this become exact zero
        zero_coefficient: trailing coefficients treated as zero roots (Laguerre)
        laguerre: residual / step size that stops the Laguerre iteration
        laguerre_max_iter: iteration cap per root
        trim: default epsilon of Polynomial.trim
        polish: leading coefficients below this are dropped after segment construction
    """
    discriminant: float = 1e-14
    cubic: float = 1e-12
    snap: float = 1e-14
    zero_coefficient: float = 1e-16
    laguerre: float = 1e-12
    laguerre_max_iter: int = 1000
    trim: float = 1e-8
    polish: float = 1e-13


DEFAULT_TOLERANCES = Tolerances()

# Gauss-Legendre nodes on [-1, 1]
QUADRATURE_ORDER = 32
GAUSS_POINTS, GAUSS_WEIGHTS = np.polynomial.legendre.leggauss(QUADRATURE_ORDER)
GAUSS_POINTS.setflags(write=False)
GAUSS_WEIGHTS.setflags(write=False)
