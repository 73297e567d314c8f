# tests/conftest.py

import os
import sys

import pytest

# Shared fakes live next to this file; make them importable as ``fakes``.
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))


def pytest_configure(config):
    """Register custom markers to avoid warnings."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated, no network).")
    config.addinivalue_line(
        "markers",
        "integration: Integration tests (HTTP app and CLI wired with fake providers).",
    )


def pytest_collection_modifyitems(config, items):
    # auto-tag tests by folder so `-m unit|integration` works consistently
    for item in items:
        path = str(item.fspath)
        if f"{os.sep}integration{os.sep}" in path:
            item.add_marker(pytest.mark.integration)
        elif f"{os.sep}unit{os.sep}" in path:
            item.add_marker(pytest.mark.unit)
