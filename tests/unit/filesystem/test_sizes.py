"""Unit tests for SizeCalculator.

Tests recursive sizes, symlink handling and unreadable entries.
"""

import os
from pathlib import Path

import pytest
from clir.filesystem.base import DirEntryInfo
from clir.filesystem.local import LocalFilesystem
from clir.filesystem.sizes import SizeCalculator


class UnreadableDirFilesystem(LocalFilesystem):
    """Local filesystem that cannot read one directory."""

    def __init__(self, unreadable: Path) -> None:
        self._unreadable = str(unreadable)

    def read_dir(self, path: str) -> list[DirEntryInfo]:
        if path == self._unreadable:
            raise PermissionError(13, "Permission denied", path)
        return super().read_dir(path)


@pytest.fixture
def sizes():
    with SizeCalculator(LocalFilesystem(), workers=4) as calculator:
        yield calculator


class TestSizeOf:
    """Tests for SizeCalculator.size_of."""

    def test_file(self, sizes: SizeCalculator, sample_dir: Path) -> None:
        """A file counts its own length."""
        assert sizes.size_of(str(sample_dir / "a.tmp")) == 1024

    def test_directory(self, sizes: SizeCalculator, sample_dir: Path) -> None:
        """A directory sums the files below it."""
        assert sizes.size_of(str(sample_dir)) == 2048

    def test_deep_directory(self, sizes: SizeCalculator, data_dir: Path) -> None:
        """Nesting depth does not matter."""
        deep = data_dir.joinpath(*[f"d{i}" for i in range(50)])
        deep.mkdir(parents=True)
        (deep / "leaf").write_bytes(b"x" * 10)
        (data_dir / "d0" / "top").write_bytes(b"x" * 5)

        assert sizes.size_of(str(data_dir)) == 15

    def test_empty_directory(self, sizes: SizeCalculator, data_dir: Path) -> None:
        """Directory entries themselves add nothing."""
        (data_dir / "a" / "b").mkdir(parents=True)

        assert sizes.size_of(str(data_dir)) == 0

    def test_nested_symlink_not_followed(self, sizes: SizeCalculator, sample_dir: Path) -> None:
        """Symlinks below a directory count with their own length."""
        holder = sample_dir.parent / "holder"
        holder.mkdir()
        (holder / "link").symlink_to(sample_dir)

        assert sizes.size_of(str(holder)) == len(os.fsencode(str(sample_dir)))

    def test_top_level_symlink_followed(self, sizes: SizeCalculator, sample_dir: Path) -> None:
        """A symlink passed in directly is measured through."""
        link = sample_dir.parent / "link"
        link.symlink_to(sample_dir)

        assert sizes.size_of(str(link)) == 2048

    def test_missing_path(self, sizes: SizeCalculator, data_dir: Path) -> None:
        """Missing paths count as 0."""
        assert sizes.size_of(str(data_dir / "missing")) == 0

    def test_unreadable_directory_counts_zero(self, sample_dir: Path) -> None:
        """An unreadable subdirectory contributes 0, the rest still counts."""
        locked = sample_dir / "locked"
        locked.mkdir()
        (locked / "secret").write_bytes(b"x" * 100)

        with SizeCalculator(UnreadableDirFilesystem(locked), workers=2) as sizes:
            assert sizes.size_of(str(sample_dir)) == 2048
