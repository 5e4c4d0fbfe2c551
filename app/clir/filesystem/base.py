"""Abstract filesystem capability used by the cleaning engine.

The engine never touches ``os`` directly; it goes through a Filesystem
so tests can substitute fakes that fail on demand.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PathInfo:
    """Metadata of a single path.

    Attributes:
        path: The path that was inspected.
        size: Length in bytes as reported by stat.
        is_dir: Whether the path is a directory.
        is_file: Whether the path is a regular file.
    """

    path: str
    size: int
    is_dir: bool
    is_file: bool


@dataclass(frozen=True, slots=True)
class DirEntryInfo:
    """An entry returned by :meth:`Filesystem.read_dir`.

    Attributes:
        path: Full path of the entry.
        is_dir: Whether the entry is a directory (symlinks are not followed).
        size: Length in bytes of non-directory entries, 0 for directories.
    """

    path: str
    is_dir: bool
    size: int = 0


class Filesystem(ABC):
    """Abstract base class for filesystem access.

    Every method that touches a concrete path raises OSError (or a
    subclass such as FileNotFoundError) when the operation fails.
    """

    @abstractmethod
    def glob(self, pattern: str) -> Iterator[str]:
        """Yield paths matching a glob pattern.

        ``**`` matches any number of directories and hidden entries are
        matched by wildcards.

        Raises:
            ValueError: If the pattern cannot be compiled.
        """

    @abstractmethod
    def canonicalize(self, path: str) -> str:
        """Return the absolute path with all symlinks resolved.

        Raises:
            OSError: If the path does not exist.
        """

    @abstractmethod
    def stat(self, path: str) -> PathInfo:
        """Return metadata for a path, following symlinks."""

    @abstractmethod
    def lstat(self, path: str) -> PathInfo:
        """Return metadata for a path without following symlinks."""

    @abstractmethod
    def read_dir(self, path: str) -> list[DirEntryInfo]:
        """List the entries of a directory."""

    @abstractmethod
    def remove_file(self, path: str) -> None:
        """Remove a file or symlink."""

    @abstractmethod
    def remove_dir_all(self, path: str) -> None:
        """Remove a directory and everything below it."""

