"""Shared test fixtures and utilities."""

from unittest.mock import Mock

import pytest
import requests

from registry_redirect.blob_cache import BlobCache
from registry_redirect.checker import CachedBlobChecker


@pytest.fixture
def make_response():
    """Factory for fake HEAD responses with a given status."""
    def _make(status_code: int) -> Mock:
        response = Mock(spec=requests.Response)
        response.status_code = status_code
        return response
    return _make


@pytest.fixture
def session():
    """Mock HTTP session; configure session.head per test."""
    return Mock(spec=requests.Session)


@pytest.fixture
def cache():
    return BlobCache()


@pytest.fixture
def checker(session, cache):
    """Checker wired to the mock session and a fresh cache."""
    return CachedBlobChecker(session, cache)


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Isolate HOME so no real config file or env override is picked up."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))  # Windows
    monkeypatch.setattr("pathlib.Path.home", lambda: home)
    for name in ("PROBE_TIMEOUT", "DEFAULT_REGION", "LOG_LEVEL"):
        monkeypatch.delenv(f"REGISTRY_REDIRECT_{name}", raising=False)
    return home
