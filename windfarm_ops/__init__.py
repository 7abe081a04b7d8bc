"""
Wind-farm maintenance operations analytics.

Loads the cases, actions and site-location CSV exports, normalizes them into
typed entities and computes the KPI aggregates behind the operations
dashboard.
"""

__version__ = '0.1.0'
