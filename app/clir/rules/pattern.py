"""Glob rules and their per-run expansion.

A PatternRule is the persisted, normalized pattern string. Expanding it
against the filesystem produces an ExpandedPattern: the concrete,
canonical paths it matches right now. ExpandedPatterns feed the shared
PathTree and read their de-duplicated share back out of it.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from functools import partial
from pathlib import PurePath

from clir.core.normalize import normalize_pattern
from clir.core.tree import PathTree
from clir.filesystem.base import Filesystem
from clir.filesystem.operator import FilesystemActionResult, FilesystemOperator
from clir.filesystem.sizes import SizeCalculator

logger = logging.getLogger(__name__)


class PathKind(str, Enum):
    """Kind of a matched filesystem path."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True, slots=True)
class MatchedPath:
    """A canonical, existing path matched by a rule.

    Attributes:
        path: Absolute path with symlinks resolved.
        kind: Whether the path is a file or a directory.
    """

    path: str
    kind: PathKind

    @property
    def is_dir(self) -> bool:
        return self.kind == PathKind.DIRECTORY


@dataclass(frozen=True, slots=True)
class PatternRule:
    """A single persisted path or glob rule.

    Equality and hashing use the normalized pattern string only.

    Attributes:
        pattern: Normalized absolute path or glob.
    """

    pattern: str

    @classmethod
    def from_raw(cls, raw: str, base_dir: PurePath | str) -> "PatternRule | None":
        """Create a rule from user input.

        Args:
            raw: Path or glob, absolute or relative to ``base_dir``.
            base_dir: Directory relative input is anchored at.

        Returns:
            The rule, or None if the input cannot be normalized.
        """
        normalized = normalize_pattern(raw, base_dir)
        if normalized is None:
            return None
        return cls(pattern=normalized)

    def expand(self, fs: Filesystem) -> "ExpandedPattern":
        """Resolve the rule to the concrete paths it currently matches.

        Every match is canonicalized and classified. Matches that vanish or
        cannot be resolved are dropped; a pattern that fails to compile
        matches nothing.

        Args:
            fs: Filesystem to glob against.

        Returns:
            ExpandedPattern with unique matched paths, sorted by path.
        """
        try:
            matches = list(fs.glob(self.pattern))
        except (OSError, ValueError) as e:
            logger.warning("Invalid pattern %s: %s", self.pattern, e)
            matches = []

        found: dict[str, MatchedPath] = {}
        for match in matches:
            try:
                canonical = fs.canonicalize(match)
                info = fs.stat(canonical)
            except OSError as e:
                logger.debug("Dropping match %s of %s: %s", match, self.pattern, e)
                continue
            if not (info.is_dir or info.is_file):
                logger.debug("%s is a special file, counted as a file", canonical)
            kind = PathKind.DIRECTORY if info.is_dir else PathKind.FILE
            found.setdefault(canonical, MatchedPath(path=canonical, kind=kind))

        logger.debug("Pattern %s matched %d path(s)", self.pattern, len(found))
        return ExpandedPattern(
            pattern=self.pattern,
            paths=tuple(found[path] for path in sorted(found)),
        )

    def __str__(self) -> str:
        return self.pattern


@dataclass(frozen=True, slots=True)
class ExpandedPattern:
    """Runtime view of a rule for one list or clean run.

    Attributes:
        pattern: The rule's normalized pattern.
        paths: Every path the rule matched.
        size: De-duplicated size in bytes, None until resolved.
        owned: Matched paths still attributed to this rule after
            de-duplication, None until resolved.
    """

    pattern: str
    paths: tuple[MatchedPath, ...] = ()
    size: int | None = None
    owned: tuple[MatchedPath, ...] | None = None

    @property
    def is_resolved(self) -> bool:
        return self.owned is not None

    @property
    def effective_paths(self) -> tuple[MatchedPath, ...]:
        """Owned paths once resolved, all matched paths before."""
        return self.paths if self.owned is None else self.owned

    @property
    def file_count(self) -> int:
        return sum(1 for p in self.effective_paths if not p.is_dir)

    @property
    def dir_count(self) -> int:
        return sum(1 for p in self.effective_paths if p.is_dir)

    @property
    def is_empty(self) -> bool:
        return not self.effective_paths

    def insert_into(self, tree: PathTree, sizes: SizeCalculator) -> int:
        """Insert every matched path into the shared tree.

        Must only be called while no other rule writes to or reads from
        the tree.

        Args:
            tree: Tree under construction.
            sizes: Calculator used for paths that are not yet covered.

        Returns:
            Net number of bytes this call added to the tree's total.
        """
        added = 0
        for matched in self.paths:
            if tree.contains_ancestor(matched.path):
                logger.debug("%s takes over previously inserted paths", matched.path)

            delta = tree.insert(
                matched.path,
                partial(sizes.size_of, matched.path),
                owner=self.pattern,
            )
            if delta is None:
                logger.debug("%s is already covered, skipping", matched.path)
                continue
            added += delta
        return added

    def resolve_size(self, tree: PathTree) -> "ExpandedPattern":
        """Read this rule's de-duplicated share back from a finished tree.

        Paths that were subsumed by another rule's ancestor path, or taken
        over by a later rule matching the same path, no longer count.

        Args:
            tree: Fully built tree; only read.

        Returns:
            A resolved copy with size and owned paths set.
        """
        owned: list[MatchedPath] = []
        total = 0
        for matched in self.paths:
            size = tree.get_size_at(matched.path, owner=self.pattern)
            if size is None:
                continue
            owned.append(matched)
            total += size
        return replace(self, size=total, owned=tuple(owned))

    def clean(self, operator: FilesystemOperator) -> list[FilesystemActionResult]:
        """Delete this rule's paths, best effort.

        Failures are logged and reported; they never stop the remaining
        deletions.

        Args:
            operator: Operator performing the deletions.

        Returns:
            One result per attempted path.
        """
        results = operator.delete(p.path for p in self.effective_paths)

        failed = sum(1 for r in results if not r.success)
        if failed:
            logger.warning(
                "Pattern %s: %d of %d path(s) could not be removed",
                self.pattern,
                failed,
                len(results),
            )
        else:
            logger.info("Cleaned pattern %s", self.pattern)
        return results
