"""
Errors and warnings raised by the polynomial engine and the root solver.
"""


class DegreeError(ValueError):
    """Polynomial division with a dividend of lower degree than the divisor."""

    def __init__(self, lhs_degree, rhs_degree):
        self.lhs_degree = lhs_degree
        self.rhs_degree = rhs_degree
        super().__init__(
            f"cannot divide a degree {lhs_degree} polynomial by a degree {rhs_degree} polynomial"
        )


class RootConvergenceWarning(RuntimeWarning):
    """Laguerre iteration hit its cap; the last iterate is used as the root."""
