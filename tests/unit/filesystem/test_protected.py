"""Unit tests for protected path checks."""

from pathlib import Path

import pytest
from clir.core.paths import get_config_dir
from clir.filesystem.protected import is_protected_path


class TestIsProtectedPath:
    """Tests for is_protected_path function."""

    @pytest.mark.parametrize("path", ["/", "/usr", "/usr/", "/etc", "/home"])
    def test_system_paths(self, path: str) -> None:
        """The root and top-level system directories are protected."""
        assert is_protected_path(path) is True

    def test_home_directory(self) -> None:
        """The home directory itself is protected."""
        assert is_protected_path(str(Path.home())) is True

    def test_xdg_roots(self) -> None:
        """Top-level XDG directories are protected."""
        home = Path.home()

        assert is_protected_path(str(home / ".config")) is True
        assert is_protected_path(str(home / ".cache")) is True

    def test_ssh_keys(self) -> None:
        """SSH keys are protected."""
        assert is_protected_path(str(Path.home() / ".ssh" / "id_ed25519")) is True

    def test_own_config_dir(self) -> None:
        """clir's config directory and its content are protected."""
        config_dir = get_config_dir()

        assert is_protected_path(str(config_dir)) is True
        assert is_protected_path(str(config_dir / "rules")) is True

    def test_regular_path(self, data_dir: Path) -> None:
        """Ordinary paths are not protected."""
        assert is_protected_path(str(data_dir / "target")) is False

    def test_subdirectory_of_system_dir(self) -> None:
        """Only the listed directories are protected, not their content."""
        assert is_protected_path("/var/tmp/build-cache") is False

    def test_extra_patterns(self, data_dir: Path) -> None:
        """User-configured patterns are honored."""
        target = str(data_dir / "keep" / "me")

        assert is_protected_path(target, [f"{data_dir}/keep/*"]) is True
