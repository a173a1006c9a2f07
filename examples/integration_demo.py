#!/usr/bin/env python3
"""
Closed-form integrals of y dx against Gauss-Legendre quadrature
"""

import numpy as np
import plotly.graph_objects as go
import sys
import os

# Add the package root to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from rational_nurbs import NurbsCurve


def integration_demo():
    """Running integral of y dx along a quarter circle"""
    print("=== Quarter circle integral ===")

    control_points = np.array([[1, 0], [1, 1], [0, 1]], dtype=float)
    weights = [1, np.sqrt(2.0) / 2.0, 1]
    curve = NurbsCurve(2, control_points, weights, knots=[0, 0, 0, 1, 1, 1])

    print(f"Exact:      {-np.pi / 4:.15f}")
    print(f"Quadrature: {curve.numerical_integral():.15f}")
    for strategy in ('direct', 'residues'):
        value = curve.analytic_integral(strategy)
        print(f"{strategy:<10}  {value.real:.15f} (imag {value.imag:.1e})")

    # Running integral from t = 0
    t = np.linspace(0, 1, 41)
    running = [curve.analytic_integral(t1=ti).real for ti in t]
    points = curve.evaluate(t)
    # Integral of sqrt(1 - s^2) from 1 down to x(t)
    exact = [-(np.arcsin(1.0) - np.arcsin(min(x, 1.0))) / 2 + x * np.sqrt(max(1 - x * x, 0)) / 2
             for x in points[:, 0]]

    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=t, y=running,
        mode='lines+markers', name='closed form',
        line=dict(color='blue', width=3)
    ))

    fig.add_trace(go.Scatter(
        x=t, y=exact,
        mode='lines', name='arc area',
        line=dict(color='red', width=2, dash='dash')
    ))

    fig.update_layout(
        title="Running integral of y dx on the quarter circle",
        xaxis_title="t",
        yaxis_title="integral",
        showlegend=True,
        width=700,
        height=500
    )

    fig.show()


if __name__ == "__main__":
    integration_demo()
