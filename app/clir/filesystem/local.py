"""Filesystem implementation backed by the local operating system."""

import errno
import glob
import logging
import os
import shutil
import stat
from collections.abc import Iterator
from pathlib import Path

from clir.filesystem.base import DirEntryInfo, Filesystem, PathInfo

logger = logging.getLogger(__name__)


class LocalFilesystem(Filesystem):
    """Filesystem access through ``os``, ``glob`` and ``shutil``."""

    def glob(self, pattern: str) -> Iterator[str]:
        return glob.iglob(pattern, recursive=True, include_hidden=True)

    def canonicalize(self, path: str) -> str:
        try:
            return str(Path(path).resolve(strict=True))
        except RuntimeError as e:
            # symlink loops raise RuntimeError before Python 3.13
            raise OSError(errno.ELOOP, str(e), path) from e

    def stat(self, path: str) -> PathInfo:
        st = os.stat(path)
        return PathInfo(
            path=path,
            size=st.st_size,
            is_dir=stat.S_ISDIR(st.st_mode),
            is_file=stat.S_ISREG(st.st_mode),
        )

    def lstat(self, path: str) -> PathInfo:
        st = os.lstat(path)
        return PathInfo(
            path=path,
            size=st.st_size,
            is_dir=stat.S_ISDIR(st.st_mode),
            is_file=stat.S_ISREG(st.st_mode),
        )

    def read_dir(self, path: str) -> list[DirEntryInfo]:
        entries: list[DirEntryInfo] = []
        with os.scandir(path) as it:
            for entry in it:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        entries.append(DirEntryInfo(path=entry.path, is_dir=True))
                    else:
                        size = entry.stat(follow_symlinks=False).st_size
                        entries.append(DirEntryInfo(path=entry.path, is_dir=False, size=size))
                except OSError as e:
                    logger.debug("Cannot stat %s: %s", entry.path, e)
        return entries

    def remove_file(self, path: str) -> None:
        os.unlink(path)

    def remove_dir_all(self, path: str) -> None:
        shutil.rmtree(path)
