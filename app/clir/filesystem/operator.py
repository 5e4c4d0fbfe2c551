"""Filesystem deletion operator.

Handles best-effort deletion of resolved rule paths with dry-run support
and protected path checking. A failure on one path never stops the
others.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from clir.filesystem.base import Filesystem
from clir.filesystem.local import LocalFilesystem
from clir.filesystem.protected import is_protected_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FilesystemActionResult:
    """Result of a single filesystem deletion operation.

    Attributes:
        path: Absolute path that was operated on.
        success: Whether the operation completed successfully.
        error: Error message if the operation failed, None otherwise.
        dry_run: Whether this was a dry-run (no actual deletion).
    """

    path: str
    success: bool
    error: str | None = None
    dry_run: bool = False


class FilesystemOperator:
    """Deletes filesystem paths one by one.

    Directories are removed recursively, files and symlinks individually.
    The operator keeps no state between calls and may be shared across
    threads.

    Attributes:
        _fs: Filesystem used for inspection and removal.
        _dry_run: If True, simulate deletions without modifying the filesystem.
        _protected: Extra protected glob patterns on top of the built-in list.
    """

    def __init__(
        self,
        fs: Filesystem | None = None,
        *,
        dry_run: bool = False,
        protected: Sequence[str] = (),
    ) -> None:
        """Initialize the FilesystemOperator.

        Args:
            fs: Filesystem to operate on. Defaults to the local filesystem.
            dry_run: If True, report what would be deleted without deleting.
            protected: Additional glob patterns that must never be deleted.
        """
        self._fs = fs if fs is not None else LocalFilesystem()
        self._dry_run = dry_run
        self._protected = tuple(protected)

    @property
    def dry_run(self) -> bool:
        """Whether deletions are only simulated."""
        return self._dry_run

    def delete(self, paths: Iterable[str]) -> list[FilesystemActionResult]:
        """Delete multiple filesystem paths and return results.

        Each path is checked against protected patterns before deletion.
        Protected paths are skipped with an error result. Non-protected
        paths are deleted individually, with failures isolated per path.

        Args:
            paths: Absolute filesystem paths to delete.

        Returns:
            List of FilesystemActionResult, one per input path.
        """
        results: list[FilesystemActionResult] = []

        for path in paths:
            if is_protected_path(path, self._protected):
                logger.warning("Refusing to delete protected path %s", path)
                results.append(
                    FilesystemActionResult(
                        path=path,
                        success=False,
                        error=f"Protected path cannot be deleted: {path}",
                    )
                )
                continue

            results.append(self._delete_single(path))

        return results

    def _delete_single(self, path: str) -> FilesystemActionResult:
        """Delete a single filesystem path.

        Args:
            path: Absolute filesystem path to delete.

        Returns:
            FilesystemActionResult indicating success or failure.
        """
        try:
            info = self._fs.lstat(path)
        except FileNotFoundError:
            logger.warning("Cannot delete %s: path does not exist", path)
            return FilesystemActionResult(
                path=path,
                success=False,
                error=f"Path does not exist: {path}",
            )
        except OSError as e:
            logger.warning("Cannot delete %s: %s", path, e)
            return FilesystemActionResult(path=path, success=False, error=str(e))

        if self._dry_run:
            logger.info("Dry-run: would delete %s", path)
            return FilesystemActionResult(path=path, success=True, dry_run=True)

        try:
            # Directories (but not symlinks to directories)
            if info.is_dir:
                self._fs.remove_dir_all(path)
                logger.info("Removed directory %s", path)
            else:
                self._fs.remove_file(path)
                logger.info("Removed file %s", path)
        except OSError as e:
            logger.warning("Failed to remove %s: %s", path, e)
            return FilesystemActionResult(path=path, success=False, error=str(e))

        return FilesystemActionResult(path=path, success=True)
