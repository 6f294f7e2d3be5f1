"""
Expenzo - Source Package

A small personal expense tracker: record expenses, keep them on disk,
and derive dashboard, monthly and category views from them.

DESIGN PRINCIPLES:
1. One owned store, no module-level state
2. Aggregations are pure and recomputed on demand
3. No silent corrections
4. Memory is authoritative, persistence is best-effort
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expenzo Team"
