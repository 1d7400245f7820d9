"""Pytest configuration and fixtures for relbisect tests."""

import tempfile
from pathlib import Path

import pytest

from relbisect.core.log import ConsoleSink, setup_logger
from relbisect.release.version import parse_version


@pytest.fixture(autouse=True, scope="session")
def configure_logging():
    """Console-only debug logging for the whole test session."""
    setup_logger(
        log_root=Path(tempfile.gettempdir()) / "relbisect-tests",
        run_name="test",
        level="debug",
        console=ConsoleSink(level="debug"),
    )


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests away from the user's config files and tokens."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))


class CountingOracle:
    """Oracle that is bad from a given version on, recording calls."""

    def __init__(self, first_bad: str | None):
        self.first_bad = parse_version(first_bad) if first_bad else None
        self.calls: list = []

    def __call__(self, version) -> bool:
        self.calls.append(version)
        return self.first_bad is not None and version >= self.first_bad


@pytest.fixture
def counting_oracle():
    """Factory for CountingOracle instances."""
    return CountingOracle
