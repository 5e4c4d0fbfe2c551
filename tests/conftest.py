"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a per-test directory.

    Keeps tests away from the real ~/.config/clir.
    """
    config_home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Empty directory for files the rules operate on."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def sample_dir(data_dir: Path) -> Path:
    """Directory holding two 1024-byte .tmp files."""
    path = data_dir / "dir"
    path.mkdir()
    (path / "a.tmp").write_bytes(b"a" * 1024)
    (path / "b.tmp").write_bytes(b"b" * 1024)
    return path


@pytest.fixture
def rules_path(tmp_path: Path) -> Path:
    """Location of a rules file that does not exist yet."""
    return tmp_path / "rules" / "rules"


@pytest.fixture(autouse=True)
def restore_clir_logger() -> Iterator[None]:
    """Undo handler and level changes made by setup_logging."""
    logger = logging.getLogger("clir")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)
