"""
Visualization functions for rational curves.
"""

import numpy as np
import matplotlib.pyplot as plt

# Segment colors cycle (red, blue, orange)
SEGMENT_COLORS = ['#E74C3C', '#3498DB', '#F39C12']


def plot_curve(curve, ax=None, n_samples=200, show_control_polygon=True, show_breakpoints=True):
    """
    Plot the first two coordinates of a curve, one color per segment.

    Args:
        curve: NurbsCurve with dimension >= 2
        ax: Matplotlib axes; a new figure is created when None
        n_samples: Parameter samples per segment
        show_control_polygon: Draw the control polygon in black
        show_breakpoints: Mark the points between segments

    Returns:
        The matplotlib axes
    """
    if curve.dimension < 2:
        raise ValueError("plot_curve needs a curve with at least two coordinates")
    if ax is None:
        fig = plt.figure(figsize=(8, 8), constrained_layout=True)
        ax = fig.add_subplot(111)

    if show_control_polygon:
        P = curve.control_points
        ax.plot(P[:, 0], P[:, 1], 'k.-', lw=1.2, ms=6, alpha=0.6, label='Control polygon')

    for i, segment in enumerate(curve.segments):
        ts = np.linspace(segment.t0, segment.t1, n_samples)
        pts = segment.evaluate(ts)
        ax.plot(pts[:, 0], pts[:, 1], '-', color=SEGMENT_COLORS[i % 3], lw=2.0)

    if show_breakpoints:
        pts = curve.evaluate(curve.breakpoints)
        ax.plot(pts[:, 0], pts[:, 1], 'o', color='k', ms=4, label='Breakpoints')

    ax.set_aspect('equal', adjustable='datalim')
    ax.set_xlabel('x', fontsize=12)
    ax.set_ylabel('y', fontsize=12)
    ax.set_title(f'NURBS curve (p={curve.degree}, {len(curve.segments)} segments)', fontsize=14)
    ax.grid(True, alpha=0.3)
    if show_control_polygon or show_breakpoints:
        ax.legend(fontsize=8)
    return ax


def plot_slopes(curve, ax=None, n_samples=200):
    """
    Plot dy/dx against the curve parameter.

    Returns:
        The matplotlib axes
    """
    if ax is None:
        fig = plt.figure(figsize=(10, 6), constrained_layout=True)
        ax = fig.add_subplot(111)

    ts = np.linspace(*curve.parameter_range, n_samples)
    slopes = curve.sample_slopes(n_samples)
    ax.plot(ts, slopes, 'b-', linewidth=2)
    for t in curve.breakpoints[1:-1]:
        ax.axvline(t, color='gray', ls='--', lw=0.8, alpha=0.6)
    ax.set_xlabel('Parameter t', fontsize=12)
    ax.set_ylabel('dy/dx', fontsize=12)
    ax.set_title('Slope along the curve', fontsize=14)
    ax.grid(True, alpha=0.3)
    return ax
