#!/usr/bin/env python3
"""
Basic usage of rational NURBS curves
"""

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots
import sys
import os

# Add the package root to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from rational_nurbs import NurbsCurve


def circle_example():
    """Exact unit circle from nine weighted control points"""
    print("=== Unit circle ===")

    s = np.sqrt(2.0) / 2.0
    control_points = np.array([
        [1, 0], [1, 1], [0, 1], [-1, 1], [-1, 0],
        [-1, -1], [0, -1], [1, -1], [1, 0]
    ], dtype=float)
    weights = [1, s, 1, s, 1, s, 1, s, 1]
    knots = [0, 0, 0, .25, .25, .5, .5, .75, .75, 1, 1, 1]

    curve = NurbsCurve(2, control_points, weights, knots, verbose=True)
    for i, segment in enumerate(curve.segments):
        print(f"Segment {i}: t in [{segment.t0}, {segment.t1}]")
        print(f"  x numerator: {segment.numerators[0]}")
        print(f"  y numerator: {segment.numerators[1]}")
        print(f"  denominator: {segment.denominator}")

    points = curve.sample_points(200)
    radius = np.hypot(points[:, 0], points[:, 1])
    print(f"Max radius error: {np.abs(radius - 1).max():.3e}")

    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=points[:, 0],
        y=points[:, 1],
        mode='lines',
        name='NURBS curve',
        line=dict(color='blue', width=3)
    ))

    fig.add_trace(go.Scatter(
        x=control_points[:, 0],
        y=control_points[:, 1],
        mode='markers+lines',
        name='Control points',
        line=dict(color='red', dash='dash'),
        marker=dict(color='red', size=10)
    ))

    fig.update_layout(
        title="Unit circle as a quadratic NURBS",
        xaxis_title="X",
        yaxis_title="Y",
        showlegend=True,
        width=600,
        height=600
    )
    fig.update_yaxes(scaleanchor="x", scaleratio=1)

    fig.show()


def weight_ramp_example():
    """Uniform knots with linearly increasing weights, and the slopes"""
    print("\n=== Weight ramp ===")

    control_points = np.array([
        [0, 0], [1, 2], [2, -1], [3, 1.5],
        [4, 0.5], [5, 2.5], [6, 1], [7, 0]
    ], dtype=float)

    ramp = NurbsCurve.with_weight_ramp(3, 1.0, 3.0, control_points, verbose=True)
    plain = NurbsCurve(3, control_points, np.ones(len(control_points)))

    degrees = [s.denominator.degree for s in ramp.segments]
    print(f"Denominator degrees per segment: {degrees}")

    t = np.linspace(0, 1, 300)
    ramp_points = ramp.sample_points(300)
    plain_points = plain.sample_points(300)
    slopes = ramp.sample_slopes(300)

    fig = make_subplots(
        rows=1, cols=2,
        subplot_titles=('Curves (x-y)', 'dy/dx of the weighted curve')
    )

    fig.add_trace(go.Scatter(
        x=plain_points[:, 0], y=plain_points[:, 1],
        mode='lines', name='unit weights',
        line=dict(color='gray', width=2, dash='dash')
    ), row=1, col=1)

    fig.add_trace(go.Scatter(
        x=ramp_points[:, 0], y=ramp_points[:, 1],
        mode='lines', name='weights 1 to 3',
        line=dict(color='blue', width=3)
    ), row=1, col=1)

    fig.add_trace(go.Scatter(
        x=control_points[:, 0], y=control_points[:, 1],
        mode='markers', name='Control points',
        marker=dict(color='red', size=8)
    ), row=1, col=1)

    fig.add_trace(go.Scatter(
        x=t, y=slopes,
        mode='lines', name='dy/dx',
        line=dict(color='green', width=2),
        showlegend=False
    ), row=1, col=2)

    fig.update_xaxes(title_text="X", row=1, col=1)
    fig.update_yaxes(title_text="Y", row=1, col=1)
    fig.update_xaxes(title_text="t", row=1, col=2)
    fig.update_yaxes(title_text="dy/dx", row=1, col=2)

    fig.update_layout(
        title="Weighted cubic NURBS",
        showlegend=True,
        height=500
    )

    fig.show()


if __name__ == "__main__":
    circle_example()
    weight_ramp_example()
