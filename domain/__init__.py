"""
Domain layer for the hierarchy engine.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""
