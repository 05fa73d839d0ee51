"""
Shared pytest configuration for the hierarchy engine tests.

Settings are read from the environment, so the test environment is pinned
before any app module is imported.
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")

from tests.fakes.conftest import fake_store, override_deps, w1_store  # noqa: E402,F401
