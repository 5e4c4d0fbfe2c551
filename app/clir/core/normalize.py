"""Lexical normalization of rule patterns.

Rule patterns may contain glob wildcards or point at paths that do not
exist yet, so they cannot be canonicalized through the filesystem.
Normalization here is purely textual: relative patterns are anchored at
a base directory and ``.``/``..`` segments are folded away, while glob
metacharacters pass through untouched.
"""

import os
from pathlib import PurePath


def normalize_pattern(raw: str, base_dir: PurePath | str) -> str | None:
    """Normalize a raw rule string into an absolute path or glob.

    Args:
        raw: Path or glob pattern as entered by the user. A leading ``~``
            is expanded to the home directory.
        base_dir: Directory that relative patterns are joined onto.

    Returns:
        The normalized absolute pattern, or None if the pattern is blank,
        contains a line break, is not rooted after joining, or climbs above
        the filesystem root.

    Example:
        >>> normalize_pattern("/tmp//a/./../*.rs", "/")
        '/tmp/*.rs'
    """
    if not raw or raw.isspace():
        return None

    # the rules file stores one pattern per line, unescaped
    if "\n" in raw or "\r" in raw:
        return None

    if raw.startswith("~"):
        raw = os.path.expanduser(raw)

    joined = raw if raw.startswith("/") else f"{base_dir}/{raw}"
    if not joined.startswith("/"):
        return None

    segments: list[str] = []
    for segment in joined.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not segments:
                return None
            segments.pop()
            continue
        segments.append(segment)

    return "/" + "/".join(segments)


def split_segments(path: PurePath | str) -> list[str] | None:
    """Split an absolute path into its segments below the root.

    Args:
        path: Absolute path. ``.`` and empty segments are ignored.

    Returns:
        Segments without the root (``"/"`` yields an empty list), or None
        if the path is relative.
    """
    text = str(path)
    if not text.startswith("/"):
        return None
    return [segment for segment in text.split("/") if segment not in ("", ".")]
