"""
Budget Tracker - Source Package

A single-user personal budget tracker: monthly income, per-day
itemized expenses, running totals and local persistence.

DESIGN PRINCIPLES:
1. State changes produce new snapshots, never in-place edits
2. Fail early, fail visibly
3. No silent corrections
4. Every state transition is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Budget Tracker Team"
