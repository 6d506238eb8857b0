from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog for test environment.

    Logs go to stderr at WARNING level so vouch's debug events stay quiet.
    """
    from vouch.logging import configure_logging

    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files.

    Also saves and restores the current working directory to prevent
    tests that use os.chdir() from affecting other tests.
    """
    original_cwd = os.getcwd()
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
    os.chdir(original_cwd)


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove all VOUCH_ environment variables for clean testing."""
    original_env = os.environ.copy()
    for key in list(os.environ.keys()):
        if key.startswith("VOUCH_"):
            del os.environ[key]
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def isolated_config(
    clean_env: None, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Run in an empty directory with no user config file."""
    monkeypatch.chdir(temp_dir)
    monkeypatch.setattr(
        "vouch.config.get_user_config_path",
        lambda: temp_dir / "no-user-config.yaml",
    )
    return temp_dir


@pytest.fixture
def sample_config_yaml() -> str:
    """Return sample vouch.yaml content for testing."""
    return """
default_var_name: "input"

messages:
  value: "Bad %varName%: wanted %expected%"
"""
