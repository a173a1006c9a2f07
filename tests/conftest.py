import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from rational_nurbs import NurbsCurve

S = np.sqrt(2.0) / 2.0


@pytest.fixture
def quarter_circle():
    """Unit quarter circle from (1, 0) to (0, 1), one quadratic segment."""
    P = np.array([[1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
    return NurbsCurve(2, P, [1.0, S, 1.0], knots=[0, 0, 0, 1, 1, 1])


@pytest.fixture
def full_circle():
    """Unit circle, counterclockwise, four quadratic segments."""
    P = np.array([
        [1, 0], [1, 1], [0, 1], [-1, 1], [-1, 0],
        [-1, -1], [0, -1], [1, -1], [1, 0],
    ], dtype=float)
    w = [1, S, 1, S, 1, S, 1, S, 1]
    knots = [0, 0, 0, .25, .25, .5, .5, .75, .75, 1, 1, 1]
    return NurbsCurve(2, P, w, knots=knots)


@pytest.fixture
def wave_points():
    return np.array([
        [0.0, 0.0], [1.0, 2.0], [2.0, -1.0], [3.0, 1.5],
        [4.0, 0.5], [5.0, 2.5], [6.0, 1.0], [7.0, 0.0],
    ])
