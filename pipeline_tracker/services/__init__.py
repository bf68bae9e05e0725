"""
Domain services.

- transitions: stage transition rules (status derivation, reason text)
- analytics: aggregation folds for the board, dashboard and analytics views
"""

from pipeline_tracker.services import analytics, transitions

__all__ = ["analytics", "transitions"]
