"""
Base exception for Budget Tracker.

Each package defines its own errors on top of this one, so the
presentation layer can catch everything the core raises in one place.
None of these errors are fatal to the running application.
"""


class BudgetTrackerError(Exception):
    """Base exception for all Budget Tracker errors."""
    pass
