"""Pytest configuration and shared fixtures for all tests."""

import sys
from pathlib import Path
from typing import Any

import pytest
from starlette.requests import Request

# Add src to path for all test modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from corsgate.policy import CORSPolicy  # noqa: E402


def make_request(method: str = "GET", headers: dict[str, str] | None = None, path: str = "/") -> Request:
    """Build a Starlette request with the given method and headers."""
    raw_headers = [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in (headers or {}).items()]
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "raw_path": path.encode(),
        "query_string": b"",
        "headers": raw_headers,
    }
    return Request(scope)


class RecordingPolicy(CORSPolicy):
    """
    A policy built from keyword arguments that records every callback call.

    Only the callbacks passed in are defined on the instance; the others are
    absent so the engine must use its defaults.
    """

    def __init__(self, **callbacks: Any):
        self.calls: list[str] = []
        self.states: list[Any] = []
        for name, value in callbacks.items():
            setattr(self, name, self._recorder(name, value))

    def _recorder(self, name: str, value: Any):
        def callback(_request, state):
            self.calls.append(name)
            self.states.append(state)
            result = value() if callable(value) else value
            return result, state + 1

        return callback

    def policy_init(self, request):
        self.calls.append("policy_init")
        return 0


@pytest.fixture
def request_factory():
    """Factory fixture for Starlette requests."""
    return make_request


@pytest.fixture
def policy_factory():
    """Factory fixture for `RecordingPolicy` instances."""
    return RecordingPolicy


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep corsgate environment variables from leaking into tests."""
    import os

    for key in list(os.environ):
        if key.startswith("CORSGATE_"):
            monkeypatch.delenv(key)


# Add pytest markers for different test types
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "server: mark test as server test")


def pytest_collection_modifyitems(config, items):  # noqa: ARG001
    """Modify test items during collection."""
    # Mark tests based on their location
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "server" in str(item.fspath):
            item.add_marker(pytest.mark.server)
