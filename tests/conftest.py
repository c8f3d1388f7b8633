"""Shared fixtures for tonnetz tests."""

import pytest

import tonnetz


@pytest.fixture(scope="session")
def engine():
    """Build the default window once for all tests."""
    return tonnetz.build()


@pytest.fixture(scope="session")
def indices(engine):
    return engine.indices


@pytest.fixture
def origin():
    return tonnetz.Centroid(0.0, 0.0)
