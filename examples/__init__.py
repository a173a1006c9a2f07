"""
Rational NURBS examples

Example scripts for the rational_nurbs package.

Included examples:
- basic_usage.py: circle construction, sampling and slopes
- integration_demo.py: quadrature against the closed-form integrals

Run:
    python examples/basic_usage.py
    python examples/integration_demo.py
"""

__all__ = []
