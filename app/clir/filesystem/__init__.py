"""Filesystem access, size computation and deletion.

This module provides the filesystem capability used by the engine,
the recursive size calculator, protected path management, and the
deletion operator.
"""

from clir.filesystem.base import DirEntryInfo, Filesystem, PathInfo
from clir.filesystem.local import LocalFilesystem
from clir.filesystem.operator import FilesystemActionResult, FilesystemOperator
from clir.filesystem.protected import PROTECTED_PATH_PATTERNS, is_protected_path
from clir.filesystem.sizes import SizeCalculator

__all__ = [
    "PROTECTED_PATH_PATTERNS",
    "DirEntryInfo",
    "Filesystem",
    "FilesystemActionResult",
    "FilesystemOperator",
    "LocalFilesystem",
    "PathInfo",
    "SizeCalculator",
    "is_protected_path",
]
