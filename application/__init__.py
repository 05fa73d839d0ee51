"""
Application Layer for the hierarchy engine.

This package contains:
- ports/: Abstract document store interface (what the engine needs)
- engine/: Batch writer, subtree walker and duplication transformer
- use_cases/: Duplicate, cascade count and cascade delete workflows
"""
