"""Pytest configuration for repository-relative imports and shared fixtures."""

import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from modeling_notes.data_loader import read_crickets  # noqa: E402


@pytest.fixture
def crickets():
    return read_crickets()
