"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path

import pytest  # type: ignore[import-not-found]

from ojt_tracker.core.config import CONFIG_ENV_VAR


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest."""
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")


@pytest.fixture(autouse=True)
def isolated_home(monkeypatch: pytest.MonkeyPatch):
    """Keep default config and data paths out of the real home directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.setenv("HOME", tmpdir)
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        yield Path(tmpdir)
