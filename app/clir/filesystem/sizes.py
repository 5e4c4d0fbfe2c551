"""Recursive size computation on a worker pool.

Directories are walked level by level: every directory of the current
level is read on the pool, file sizes are summed, and the subdirectories
found form the next level. Stack depth stays constant no matter how deep
the tree is, and workers never submit work themselves.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from types import TracebackType

from clir.core.config import DEFAULT_WORKERS
from clir.filesystem.base import DirEntryInfo, Filesystem

logger = logging.getLogger(__name__)


class SizeCalculator:
    """Computes the number of bytes below a path.

    Use as a context manager so the worker pool is shut down.

    Example:
        >>> with SizeCalculator(LocalFilesystem(), workers=4) as sizes:
        ...     sizes.size_of("/tmp")
    """

    def __init__(self, fs: Filesystem, workers: int = DEFAULT_WORKERS) -> None:
        self._fs = fs
        self._pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="clir-size")

    def __enter__(self) -> "SizeCalculator":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Shut down the worker pool."""
        self._pool.shutdown(wait=True)

    def size_of(self, path: str) -> int:
        """Return the size of a file, or the sum of all files below a directory.

        Symlinks below a directory count with their own length and are not
        followed. Entries that cannot be read count as 0.

        Args:
            path: Path to measure. Symlinks at this level are followed.

        Returns:
            Size in bytes.
        """
        try:
            info = self._fs.stat(path)
        except OSError as e:
            logger.debug("Cannot stat %s: %s", path, e)
            return 0

        if not info.is_dir:
            return info.size

        total = 0
        frontier = [path]
        while frontier:
            next_frontier: list[str] = []
            for entries in self._pool.map(self._read_dir, frontier):
                for entry in entries:
                    if entry.is_dir:
                        next_frontier.append(entry.path)
                    else:
                        total += entry.size
            frontier = next_frontier

        return total

    def _read_dir(self, path: str) -> list[DirEntryInfo]:
        try:
            return self._fs.read_dir(path)
        except OSError as e:
            logger.debug("Cannot read directory %s: %s", path, e)
            return []
