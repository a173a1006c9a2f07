"""
NURBS Integral Check

This script builds a set of rational NURBS curves with the rational_nurbs package
and compares the two closed-form integrals of y dx with Gauss-Legendre quadrature.

Key Features:
    - Exact circle and quarter circle with known integrals (-pi, -pi/4)
    - Weighted cubic and quartic curves on uniform knots
    - Weight-ramp curves with uniform polishing
    - Both root methods (companion eigenvalues, Laguerre) for quartic denominators
    - Optional coefficient export and matplotlib figures

Usage:
    Run the comparison:
        python NURBS_Integral_Check.py

    Export segment coefficients to a directory:
        python NURBS_Integral_Check.py --export out/

    Save curve and slope figures:
        python NURBS_Integral_Check.py --plot

    Show help:
        python NURBS_Integral_Check.py --help
"""

import numpy as np
import matplotlib.pyplot as plt
import time
import argparse
from pathlib import Path

from rational_nurbs import NurbsCurve, plot_curve, plot_slopes

# Parse command-line arguments
parser = argparse.ArgumentParser(
    description='Closed-form vs quadrature integrals of rational NURBS curves',
    formatter_class=argparse.RawDescriptionHelpFormatter
)
parser.add_argument(
    '--export',
    metavar='DIR',
    default=None,
    help='Write coefs_num_*.out and coefs_den.out for every curve into DIR/<curve name>/'
)
parser.add_argument(
    '--plot',
    action='store_true',
    help='Save curve and slope figures to figure/figures/'
)
parser.add_argument(
    '--method',
    choices=['eigenvalues', 'laguerre'],
    default='eigenvalues',
    help='Root method for denominators of degree >= 4 (default: eigenvalues)'
)
args = parser.parse_args()

# Figure directory
FIGURE_DIR = Path(__file__).parent / "figure" / "figures"
if args.plot:
    FIGURE_DIR.mkdir(parents=True, exist_ok=True)

print("=" * 60)
print(f"Root method: {args.method}")
print(f"Export: {args.export if args.export else 'DISABLED'}")
print("=" * 60)
print()

S = np.sqrt(2.0) / 2.0

# Test curves: name -> (curve, exact value or None)
curves = {}

curves['quarter_circle'] = (
    NurbsCurve(2, [[1, 0], [1, 1], [0, 1]], [1, S, 1], knots=[0, 0, 0, 1, 1, 1]),
    -np.pi / 4
)

circle_points = np.array([
    [1, 0], [1, 1], [0, 1], [-1, 1], [-1, 0],
    [-1, -1], [0, -1], [1, -1], [1, 0]
], dtype=float)
curves['circle'] = (
    NurbsCurve(2, circle_points, [1, S, 1, S, 1, S, 1, S, 1],
               knots=[0, 0, 0, .25, .25, .5, .5, .75, .75, 1, 1, 1]),
    -np.pi
)

wave_points = np.array([
    [0, 0], [1, 2], [2, -1], [3, 1.5],
    [4, 0.5], [5, 2.5], [6, 1], [7, 0]
], dtype=float)
wave_weights = [1.0, 1.5, 0.8, 1.2, 1.0, 1.4, 0.9, 1.0]
curves['wave_p3'] = (NurbsCurve(3, wave_points, wave_weights, verbose=True), None)
curves['wave_p4'] = (NurbsCurve(4, wave_points, wave_weights, verbose=True), None)
curves['ramp_p3'] = (NurbsCurve.with_weight_ramp(3, 1.0, 2.0, wave_points, verbose=True), None)

print("\n" + "=" * 60)
print("Integral of y dx")
print("=" * 60)

rows = []
for name, (curve, exact) in curves.items():
    start_time = time.time()
    quadrature = curve.numerical_integral()
    direct = curve.analytic_integral('direct', method=args.method)
    residues = curve.analytic_integral('residues', method=args.method)
    elapsed = time.time() - start_time

    reference = quadrature if exact is None else exact
    rows.append((name, abs(direct.real - reference), abs(residues.real - reference)))

    print(f"\n{name} (p={curve.degree}, {len(curve.segments)} segments):")
    if exact is not None:
        print(f"  Exact:      {exact: .15f}")
    print(f"  Quadrature: {quadrature: .15f}")
    print(f"  Direct:     {direct.real: .15f}  (imag {direct.imag:.1e})")
    print(f"  Residues:   {residues.real: .15f}  (imag {residues.imag:.1e})")
    print(f"  Time: {elapsed * 1000:.1f} ms")

    if args.export:
        out_dir = Path(args.export) / name
        written = curve.save_coefficients_by_dimension(out_dir)
        print(f"  Exported {len(written)} files to {out_dir}")

    if args.plot:
        fig, (ax_curve, ax_slope) = plt.subplots(1, 2, figsize=(14, 6), constrained_layout=True)
        plot_curve(curve, ax=ax_curve)
        plot_slopes(curve, ax=ax_slope)
        fig.savefig(FIGURE_DIR / f"{name}.png", dpi=300)
        plt.close(fig)

print("\n" + "=" * 60)
print("Summary (absolute error against the reference):")
print("=" * 60)
for name, err_direct, err_residues in rows:
    print(f"  {name:<16} direct {err_direct:.2e}   residues {err_residues:.2e}")
