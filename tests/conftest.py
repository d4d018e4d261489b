"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config_home(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user settings never leak in."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def scripts_dir(tmp_path: Path) -> Path:
    """Scripts directory from the usage example, plus a skipped script."""
    directory = tmp_path / "scripts"
    directory.mkdir()
    (directory / "ordered.01.first").write_text("echo first")
    (directory / "fn.a").write_text("echo a")
    (directory / "fn.b").write_text("echo b")
    (directory / "ordered.52.last").write_text("echo last")
    (directory / "skip.disabled").write_text("echo skipped")
    return directory


@pytest.fixture
def empty_dir(tmp_path: Path) -> Path:
    """Directory without any scripts."""
    directory = tmp_path / "empty"
    directory.mkdir()
    return directory
