"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest
from targets import Account, Counter, Recorder, Vector

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def account():
    """A fresh account holding 100."""
    return Account("ada", 100)


@pytest.fixture
def vector():
    return Vector(1, 2)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def call_log():
    """A list handlers append to, to assert ordering."""
    return []


@pytest.fixture
def counter():
    """A counter starting at 4."""
    return Counter(4)
