"""
Dense univariate polynomials with coefficient-vector arithmetic.

Coefficients are stored highest degree first, so x^3 + 2x^2 + x + 5 is
Polynomial([1, 2, 1, 5]). Arithmetic always returns a new polynomial; only
normalize, trim, trim_zeros, resize and item assignment work in place.
"""

import numbers
from math import factorial
from typing import Iterable, List, Tuple, Union

import numpy as np

from .constants import DEFAULT_TOLERANCES
from .exceptions import DegreeError

Scalar = Union[int, float, complex, np.number]

# 2**27 + 1, Dekker splitting constant for float64
_SPLITTER = 134217729.0


def _two_sum(a, b):
    s = a + b
    bs = s - a
    as_ = s - bs
    return s, (b - bs) + (a - as_)


def _split(a):
    c = _SPLITTER * a
    hi = c - (c - a)
    return hi, a - hi


def _two_prod(a, b):
    p = a * b
    ah, al = _split(a)
    bh, bl = _split(b)
    return p, al * bl - (((p - ah * bh) - al * bh) - ah * bl)


def _is_scalar(value) -> bool:
    return isinstance(value, (numbers.Number, np.number))


class Polynomial:
    """
    Univariate polynomial over the reals or the complex numbers.

    The degree is always len(coefficients) - 1. Leading zeros are kept until
    trim or trim_zeros is called, so arithmetic results are sized by the
    degrees of the operands, not by their values.
    """

    # numpy scalars on the left must defer to __radd__/__rmul__
    __array_ufunc__ = None

    def __init__(self, coefficients: Union[Scalar, Iterable[Scalar]] = 0.0):
        """
        Args:
            coefficients: Coefficient sequence, highest degree first, or a
                          single scalar for a constant polynomial
        """
        coef = np.atleast_1d(np.asarray(coefficients))
        if coef.ndim != 1:
            raise ValueError("coefficients must be a 1-D sequence")
        if coef.size == 0:
            raise ValueError("a polynomial needs at least one coefficient")
        dtype = complex if np.iscomplexobj(coef) else float
        self._coef = np.array(coef, dtype=dtype)

    @classmethod
    def filled(cls, degree: int, value: Scalar = 0.0) -> 'Polynomial':
        """Polynomial of the given degree with every coefficient set to value."""
        if degree < 0:
            raise ValueError("degree must be non-negative")
        return cls(np.full(degree + 1, value))

    @classmethod
    def from_roots(cls, roots) -> 'Polynomial':
        """
        Monic polynomial prod (t - r)^m over (multiplicity, value) pairs.

        The result always has complex coefficients.
        """
        result = cls(np.ones(1, dtype=complex))
        for multiplicity, value in roots:
            factor = cls([1.0 + 0j, -complex(value)])
            for _ in range(multiplicity):
                result = result * factor
        return result

    @property
    def degree(self) -> int:
        return len(self._coef) - 1

    @property
    def coefficients(self) -> np.ndarray:
        return self._coef.copy()

    @property
    def dtype(self):
        return self._coef.dtype

    def copy(self) -> 'Polynomial':
        return Polynomial(self._coef)

    def to_complex(self) -> 'Polynomial':
        return Polynomial(self._coef.astype(complex))

    def is_zero(self) -> bool:
        return not np.any(self._coef)

    def __len__(self):
        return len(self._coef)

    def __getitem__(self, index):
        return self._coef[index]

    def __setitem__(self, index, value):
        if np.iscomplexobj(value) and not np.iscomplexobj(self._coef):
            self._coef = self._coef.astype(complex)
        self._coef[index] = value

    # Calculus

    def derivative(self, order: int = 1) -> 'Polynomial':
        """
        Coefficients of the order-th derivative.

        The derivative of a constant is the zero polynomial of degree 0.
        """
        result = self.copy()
        for _ in range(order):
            n = result.degree
            if n == 0:
                return Polynomial(np.zeros(1, dtype=self.dtype))
            result = Polynomial(result._coef[:-1] * np.arange(n, 0, -1))
        return result

    def antiderivative(self) -> 'Polynomial':
        """Antiderivative with zero constant term; the degree grows by one."""
        n = self.degree
        coef = np.zeros(n + 2, dtype=self.dtype)
        coef[:-1] = self._coef / np.arange(n + 1, 0, -1)
        return Polynomial(coef)

    def integral(self, a, b):
        """Definite integral over [a, b]."""
        antider = self.antiderivative()
        return antider.evaluate(b) - antider.evaluate(a)

    def taylor_coefficients(self, x0, count: int) -> List:
        """First count Taylor coefficients P^(j)(x0) / j! around x0."""
        return [self.derivative(j).evaluate(x0) / factorial(j) for j in range(count)]

    # Evaluation

    def evaluate(self, x):
        """Horner evaluation; x may be a scalar, a complex number or an array."""
        result = self._coef[0]
        for c in self._coef[1:]:
            result = result * x + c
        if isinstance(x, np.ndarray) and self.degree == 0:
            return np.full(x.shape, result)
        return result

    __call__ = evaluate

    def evaluate_compensated(self, x: float) -> float:
        """
        Compensated Horner evaluation (error-free transformations).

        Same value as evaluate, with roughly twice the working precision.
        Requires real coefficients and a real argument.
        """
        if np.iscomplexobj(self._coef) or isinstance(x, complex):
            raise TypeError("compensated evaluation needs real coefficients and a real argument")
        x = float(x)
        s = 0.0
        c = 0.0
        for a in self._coef:
            p, pi = _two_prod(s, x)
            s, t = _two_sum(p, float(a))
            c = c * x + (pi + t)
        return s + c

    # In-place maintenance

    def normalize(self):
        """
        Make the polynomial monic.

        Returns:
            The leading coefficient before scaling (nothing changes when it is exactly zero)
        """
        lead = self._coef[0]
        if lead != 0:
            self._coef = self._coef / lead
        return lead

    def trim(self, epsilon: float = None) -> 'Polynomial':
        """Drop leading coefficients with magnitude below epsilon."""
        if epsilon is None:
            epsilon = DEFAULT_TOLERANCES.trim
        return self._strip_leading(np.abs(self._coef) < epsilon)

    def trim_zeros(self) -> 'Polynomial':
        """Drop leading coefficients that are exactly zero."""
        return self._strip_leading(self._coef == 0)

    def _strip_leading(self, negligible) -> 'Polynomial':
        keep = np.flatnonzero(~negligible)
        if keep.size == 0:
            self._coef = np.zeros(1, dtype=self.dtype)
        else:
            self._coef = self._coef[keep[0]:].copy()
        return self

    def resize(self, new_degree: int) -> 'Polynomial':
        """Truncate leading coefficients so the degree becomes new_degree."""
        if new_degree < 0 or new_degree > self.degree:
            raise ValueError(f"cannot resize a degree {self.degree} polynomial to degree {new_degree}")
        self._coef = self._coef[self.degree - new_degree:].copy()
        return self

    # Arithmetic

    def padded(self, length: int) -> np.ndarray:
        pad = np.zeros(length - len(self._coef), dtype=self.dtype)
        return np.concatenate([pad, self._coef])

    def __add__(self, other):
        if _is_scalar(other):
            coef = self._coef.astype(np.result_type(self._coef, other))
            coef[-1] += other
            return Polynomial(coef)
        if not isinstance(other, Polynomial):
            return NotImplemented
        n = max(len(self), len(other))
        return Polynomial(self.padded(n) + other.padded(n))

    __radd__ = __add__

    def __neg__(self):
        return Polynomial(-self._coef)

    def __sub__(self, other):
        if not (_is_scalar(other) or isinstance(other, Polynomial)):
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other):
        return (-self) + other

    def __mul__(self, other):
        if _is_scalar(other):
            return Polynomial(self._coef * other)
        if not isinstance(other, Polynomial):
            return NotImplemented
        a, b = self._coef, other._coef
        res = np.zeros(len(a) + len(b) - 1, dtype=np.result_type(a, b))
        for i in range(len(a)):
            for j in range(len(b)):
                res[i + j] += a[i] * b[j]
        return Polynomial(res)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return Polynomial(self._coef / other)

    def __divmod__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return divide(self, other)

    def __floordiv__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return divide(self, other)[0]

    def __mod__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return divide(self, other)[1]

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.degree == other.degree and np.array_equal(self._coef, other._coef)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Polynomial({self._coef.tolist()})"

    def __str__(self) -> str:
        return "[" + ", ".join(str(c) for c in self._coef.tolist()) + "]"


def divide(lhs: Polynomial, rhs: Polynomial) -> Tuple[Polynomial, Polynomial]:
    """
    Euclidean division lhs = rhs * quotient + remainder.

    Args:
        lhs: Dividend
        rhs: Divisor, deg(rhs) <= deg(lhs)

    Returns:
        (quotient, remainder) with deg(remainder) < deg(rhs); the remainder is
        exact-zero trimmed and is the zero polynomial for a constant divisor

    Raises:
        DegreeError: deg(lhs) < deg(rhs)
        ZeroDivisionError: the leading coefficient of rhs is exactly zero
    """
    n, m = lhs.degree, rhs.degree
    if n < m:
        raise DegreeError(n, m)
    lead = rhs[0]
    if lead == 0:
        raise ZeroDivisionError("divisor has a zero leading coefficient")

    divisor = rhs.coefficients
    rem = lhs.coefficients.astype(np.result_type(lhs.dtype, rhs.dtype))
    quotient = np.zeros(n - m + 1, dtype=rem.dtype)
    for i in range(n - m + 1):
        a_i = rem[i]
        rem[i] = 0
        quotient[i] = a_i / lead
        for j in range(1, m + 1):
            rem[i + j] -= divisor[j] * a_i / lead

    if m == 0:
        remainder = Polynomial(np.zeros(1, dtype=rem.dtype))
    else:
        remainder = Polynomial(rem[n - m + 1:]).trim_zeros()
    return Polynomial(quotient), remainder


def product(polys: Iterable[Polynomial]) -> Polynomial:
    """Product of a sequence of polynomials; the empty product is 1."""
    result = Polynomial(1.0)
    for p in polys:
        result = result * p
    return result
