"""Shared fixtures for integration tests.

Test modules skip themselves unless RUN_LAAKHAY_NETWORK_TESTS=1.
"""

import os

import pytest


@pytest.fixture
def remote() -> str:
    """Remote under test (a disposable server, every test writes to it)."""
    return os.environ.get("LAAKHAY_STORE_REMOTE", "http://localhost:8888/v1")


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": os.environ.get("LAAKHAY_STORE_AUTH", "Basic dXNlcjpwYXNz")}
