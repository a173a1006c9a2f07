"""
NURBS curve reduced to exact rational segments.

The curve is built once: the knot spans are located, every span is turned
into a RationalSegment by the de Boor recursion on polynomials, and the
resulting coefficients are polished. Sampling, slopes, Gauss-Legendre
quadrature and the closed-form integrals all work on those segments.
"""

from pathlib import Path

import numpy as np

from .constants import DEFAULT_TOLERANCES, GAUSS_POINTS, GAUSS_WEIGHTS
from .de_boor import de_boor_segment
from .integration import STRATEGIES
from .utils import format_coefficients, span_indices, uniform_knots

_DIMENSION_NAMES = ('x', 'y', 'z')
_POLISH_MODES = ('general', 'uniform')


class NurbsCurve:
    """
    Rational B-spline curve of degree p over n control points.

    Attributes:
        degree: Curve degree p
        dimension: Number of coordinates per control point
        knots: Knot vector, n + p + 1 non-decreasing values
        weights: Positive control point weights
        control_points: (n, dim) array
        domain: Knot indices (p, n) bounding the parameter range
        spans: Knot indices of the segment boundaries
        segments: List of RationalSegment, one per non-empty knot span
    """

    def __init__(self, degree, control_points, weights, knots=None, polish='general',
                 tolerances=DEFAULT_TOLERANCES, verbose=False):
        """
        Args:
            degree: Curve degree p >= 1
            control_points: (n, dim) control points, n > p
            weights: n positive weights
            knots: n + p + 1 non-decreasing knots; None for clamped uniform
                   knots on [0, 1]
            polish: 'general' trims every coefficient, 'uniform' also collapses
                    interior denominators to degree 1 (linear weight ramps)
            tolerances: Tolerances for polishing and the root solver
            verbose: Print a summary of the built segments
        """
        P = np.array(control_points, dtype=float)
        if P.ndim != 2 or P.shape[1] < 1:
            raise ValueError("control_points must be (n, dim)")
        n = P.shape[0]
        if int(degree) != degree or degree < 1:
            raise ValueError(f"degree must be a positive integer, got {degree}")
        degree = int(degree)
        if n <= degree:
            raise ValueError(f"a degree {degree} curve needs more than {degree} control points, got {n}")

        w = np.array(weights, dtype=float)
        if w.shape != (n,):
            raise ValueError(f"expected {n} weights, got shape {w.shape}")
        if np.any(w <= 0):
            raise ValueError("weights must be strictly positive")

        if knots is None:
            U = uniform_knots(n, degree)
        else:
            U = np.array(knots, dtype=float)
            if U.shape != (n + degree + 1,):
                raise ValueError(f"expected {n + degree + 1} knots, got shape {U.shape}")
            if np.any(np.diff(U) < 0):
                raise ValueError("knots must be non-decreasing")

        if polish not in _POLISH_MODES:
            raise ValueError(f"unknown polish mode {polish!r}, expected one of {_POLISH_MODES}")

        self.degree = degree
        self.dimension = P.shape[1]
        self.control_points = P
        self.weights = w
        self.knots = U
        self.tolerances = tolerances
        self.domain = (degree, len(U) - degree - 1)
        if not U[self.domain[0]] < U[self.domain[1]]:
            raise ValueError("the parameter domain has zero length")

        self.spans = span_indices(self.domain, U)
        self.segments = [de_boor_segment(k, U, w, P, degree) for k in self.spans[:-1]]

        if polish == 'uniform':
            self.polish_uniform()
        else:
            self.polish()

        if verbose:
            degrees = sorted({s.denominator.degree for s in self.segments})
            print(f"[NURBS] built {len(self.segments)} segments (p={degree}, dim={self.dimension}, "
                  f"{polish} polishing, denominator degrees {degrees})")

    @classmethod
    def with_weight_ramp(cls, degree, w_start, w_end, control_points, **kwargs):
        """
        Curve on uniform knots with weights linearly spaced from w_start to w_end.

        Uses uniform polishing: the interior segments of such a curve have
        linear denominators.
        """
        n = len(control_points)
        weights = np.linspace(w_start, w_end, n)
        return cls(degree, control_points, weights, knots=None, polish='uniform', **kwargs)

    def __len__(self):
        return len(self.segments)

    def __repr__(self):
        return (f"NurbsCurve(degree={self.degree}, dimension={self.dimension}, "
                f"control_points={len(self.control_points)}, segments={len(self.segments)})")

    @property
    def breakpoints(self):
        """Parameter values of the segment boundaries."""
        return self.knots[self.spans]

    @property
    def parameter_range(self):
        return float(self.knots[self.domain[0]]), float(self.knots[self.domain[1]])

    # Polishing

    def polish(self, epsilon=None):
        """Tolerance-trim every numerator and denominator."""
        if epsilon is None:
            epsilon = self.tolerances.polish
        for segment in self.segments:
            segment.trim(epsilon)

    def polish_uniform(self, epsilon=None):
        """
        Polishing for linear weight ramps on uniform knots.

        The first and last p - 1 segments are trimmed as usual. Interior
        segments see weights that are linear in the Greville abscissae, so
        their denominators reduce to degree 1.
        """
        if epsilon is None:
            epsilon = self.tolerances.polish
        p = self.degree
        count = len(self.segments)
        if count <= 2 * (p - 1):
            self.polish(epsilon)
            return
        for i in range(p - 1):
            self.segments[i].trim(epsilon)
            self.segments[count - i - 1].trim(epsilon)
        for segment in self.segments[p - 1:count - p + 1]:
            segment.denominator.resize(1).trim(epsilon)
            for numerator in segment.numerators:
                numerator.trim(epsilon)

    def normalize_segments(self):
        """Make every denominator monic, scaling the numerators to match."""
        for segment in self.segments:
            segment.normalize()

    # Evaluation

    def segment_index(self, t):
        """
        Index of the segment containing t.

        A breakpoint belongs to the segment on its left, the start of the
        domain to the first segment.
        """
        lo, hi = self.parameter_range
        t_arr = np.asarray(t, dtype=float)
        if np.any(t_arr < lo) or np.any(t_arr > hi):
            raise ValueError(f"parameter outside the curve domain [{lo}, {hi}]")
        idx = np.searchsorted(self.breakpoints, t_arr, side='left') - 1
        idx = np.clip(idx, 0, len(self.segments) - 1)
        if idx.ndim == 0:
            return int(idx)
        return idx

    def _per_segment(self, ts, fn):
        idx = self.segment_index(ts)
        out = None
        for j in np.unique(idx):
            mask = idx == j
            values = fn(self.segments[j], ts[mask])
            if out is None:
                out = np.empty((len(ts),) + values.shape[1:], dtype=values.dtype)
            out[mask] = values
        return out

    def evaluate(self, t):
        """
        Point(s) on the curve.

        Args:
            t: Scalar parameter or array of parameters inside the domain

        Returns:
            (dim,) array for a scalar, (len(t), dim) for an array
        """
        if np.ndim(t) == 0:
            return self.segments[self.segment_index(t)].evaluate(float(t))
        ts = np.asarray(t, dtype=float)
        return self._per_segment(ts, lambda seg, s: seg.evaluate(s))

    def _sample_parameters(self, n):
        if int(n) != n or n < 1:
            raise ValueError(f"sample count must be a positive integer, got {n}")
        return np.linspace(*self.parameter_range, int(n))

    def _require_plane(self, what):
        if self.dimension < 2:
            raise ValueError(f"{what} needs at least two coordinates, curve has {self.dimension}")

    def sample_points(self, n):
        """n points at equally spaced parameters over the domain, shape (n, dim)."""
        return self.evaluate(self._sample_parameters(n))

    def sample_slopes(self, n):
        """dy/dx at n equally spaced parameters."""
        self._require_plane("slope sampling")
        ts = self._sample_parameters(n)
        return self._per_segment(ts, lambda seg, s: seg.slope(s))

    # Integrals of y dx

    def _clipped_ranges(self, t0, t1):
        """(segment, from, to) for every segment overlapping [t0, t1]."""
        lo, hi = self.parameter_range
        t0 = lo if t0 is None else t0
        t1 = hi if t1 is None else t1
        for segment in self.segments:
            if segment.t0 > t1:
                break
            if segment.t1 < t0:
                continue
            a = max(segment.t0, t0)
            b = min(segment.t1, t1)
            if a < b:
                yield segment, a, b

    def numerical_integral(self, t0=None, t1=None):
        """
        Integral of y dx by Gauss-Legendre quadrature on every segment.

        Args:
            t0, t1: Parameter range; None means the ends of the domain

        Returns:
            float
        """
        self._require_plane("the area integral")
        total = 0.0
        for segment, a, b in self._clipped_ranges(t0, t1):
            x = (b - a) * GAUSS_POINTS / 2 + (a + b) / 2
            total += (b - a) / 2.0 * np.dot(GAUSS_WEIGHTS, segment.area_integrand(x))
        return float(total)

    def analytic_integral(self, strategy='direct', t0=None, t1=None, method='eigenvalues'):
        """
        Integral of y dx in closed form, summed over the segments.

        Args:
            strategy: 'direct' or 'residues'
            t0, t1: Parameter range; None means the ends of the domain
            method: Root method for denominators of degree >= 4,
                    'eigenvalues' or 'laguerre'

        Returns:
            complex; the imaginary part is round-off
        """
        if strategy not in STRATEGIES:
            raise ValueError(f"unknown integration strategy {strategy!r}, expected one of {sorted(STRATEGIES)}")
        self._require_plane("the area integral")
        integrate = STRATEGIES[strategy]
        total = 0j
        for segment, a, b in self._clipped_ranges(t0, t1):
            total += integrate(segment.numerators, segment.denominator, a, b,
                               method=method, tolerances=self.tolerances)
        return complex(total)

    def analytic_integral_direct(self, t0=None, t1=None, method='eigenvalues'):
        return self.analytic_integral('direct', t0, t1, method)

    def analytic_integral_residues(self, t0=None, t1=None, method='eigenvalues'):
        return self.analytic_integral('residues', t0, t1, method)

    # Coefficient export

    def format_coefficients(self, format_spec='.17g'):
        """One line per segment: numerator coefficient lists, then the denominator's."""
        return "\n".join(segment.format(format_spec) for segment in self.segments)

    def save_coefficients(self, path, format_spec='.17g'):
        Path(path).write_text(self.format_coefficients(format_spec) + "\n")

    def save_denominators(self, path, format_spec='.17g'):
        lines = [format_coefficients(s.denominator, format_spec) for s in self.segments]
        Path(path).write_text("\n".join(lines) + "\n")

    def save_coefficients_by_dimension(self, directory='.', format_spec='.17g'):
        """
        Write one file per coordinate plus one for the denominators.

        Files are coefs_num_x.out, coefs_num_y.out, coefs_num_z.out (then
        coefs_num_<d>.out) and coefs_den.out, one segment per line.

        Returns:
            List of the written paths
        """
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        written = []
        for d in range(self.dimension):
            name = _DIMENSION_NAMES[d] if d < len(_DIMENSION_NAMES) else str(d)
            path = directory / f"coefs_num_{name}.out"
            lines = [format_coefficients(s.numerators[d], format_spec) for s in self.segments]
            path.write_text("\n".join(lines) + "\n")
            written.append(path)
        path = directory / "coefs_den.out"
        self.save_denominators(path, format_spec)
        written.append(path)
        return written
