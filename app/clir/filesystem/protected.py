"""Protected filesystem paths that should never be deleted.

A rule like ``~/*`` or ``/tmp/..`` would happily resolve to the home
directory or the filesystem root. These patterns are refused by the
deletion operator no matter which rule produced them.
"""

import fnmatch
from collections.abc import Iterable
from pathlib import Path

from clir.core.paths import get_config_dir

# Protected filesystem path patterns (glob-style).
# Patterns starting with ~ are expanded to the user's home directory
# before matching. Patterns starting with / are matched as-is.
PROTECTED_PATH_PATTERNS: list[str] = [
    # Filesystem root and top-level system directories
    "/",
    "/bin",
    "/boot",
    "/dev",
    "/etc",
    "/home",
    "/lib",
    "/lib64",
    "/opt",
    "/proc",
    "/root",
    "/sbin",
    "/sys",
    "/usr",
    "/var",
    # Home directory and its XDG roots
    "~",
    "~/.config",
    "~/.local",
    "~/.local/share",
    "~/.local/state",
    "~/.cache",
    # SSH and security
    "~/.ssh",
    "~/.ssh/*",
    "~/.gnupg",
    "~/.gnupg/*",
]


def _expand(pattern: str, home: str) -> str:
    return home + pattern[1:] if pattern.startswith("~") else pattern


def is_protected_path(path: str, extra_patterns: Iterable[str] = ()) -> bool:
    """Check if a filesystem path is protected and should not be deleted.

    The path argument should be an absolute path. Patterns using ~ notation
    are expanded to the actual home directory before comparison using
    fnmatch for glob-style matching. clir's own configuration directory
    and everything below it is always protected.

    Args:
        path: Absolute filesystem path to check.
        extra_patterns: Additional user-configured patterns.

    Returns:
        True if the path matches any protected pattern, False otherwise.
    """
    home = str(Path.home())
    candidate = path.rstrip("/") or "/"

    config_dir = str(get_config_dir())
    if candidate == config_dir or candidate.startswith(config_dir + "/"):
        return True

    for pattern in (*PROTECTED_PATH_PATTERNS, *extra_patterns):
        if fnmatch.fnmatch(candidate, _expand(pattern, home)):
            return True

    return False
