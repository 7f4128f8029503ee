"""Integration tests need PostgreSQL; they run only when RUN_INTEGRATION is set."""

import os

import pytest


def pytest_collection_modifyitems(config, items):
    if os.getenv("RUN_INTEGRATION"):
        return
    skip = pytest.mark.skip(reason="set RUN_INTEGRATION=1 with a migrated database")
    for item in items:
        if "tests/integration" in str(item.fspath).replace(os.sep, "/"):
            item.add_marker(skip)
