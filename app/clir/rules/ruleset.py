"""The persisted set of rules and the list/clean orchestration.

Rules are stored one normalized pattern per line in a UTF-8 text file.
A RuleSet is a value: ``add`` and ``remove`` return a new RuleSet and
rewrite the file in full.

Listing runs in three phases on a thread pool:

1. expansion, parallel across rules;
2. tree construction, sequential in sorted pattern order;
3. size resolution, parallel, with the tree only read.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from pathlib import Path, PurePath
from tempfile import NamedTemporaryFile

from clir.core.config import DEFAULT_WORKERS
from clir.core.paths import get_rules_path
from clir.core.tree import PathTree
from clir.filesystem.base import Filesystem
from clir.filesystem.local import LocalFilesystem
from clir.filesystem.operator import FilesystemActionResult, FilesystemOperator
from clir.filesystem.sizes import SizeCalculator
from clir.rules.pattern import ExpandedPattern, PatternRule

logger = logging.getLogger(__name__)


class RulesError(Exception):
    """Base exception for rules file errors."""


class RulesParseError(RulesError):
    """Raised when the rules file content cannot be decoded."""


class RulesWriteError(RulesError):
    """Raised when the rules file cannot be written."""


@dataclass(frozen=True)
class RuleSet:
    """All registered rules and the file they are stored in.

    Attributes:
        path: Location of the rules file.
        rules: Rules, unique by normalized pattern.
    """

    path: Path
    rules: frozenset[PatternRule] = field(default_factory=frozenset)

    @classmethod
    def load(cls, path: Path | None = None) -> RuleSet:
        """Load rules from a file, creating an empty file if it is missing.

        Blank lines are ignored and lines that fail normalization are
        skipped with a warning. Relative lines are anchored at the rules
        file's directory.

        Args:
            path: Rules file. If None, uses the default rules path.

        Returns:
            The loaded RuleSet.

        Raises:
            RulesParseError: If the file is not valid UTF-8.
            RulesError: If the file cannot be read or created.
        """
        rules_path = path or get_rules_path()

        if not rules_path.exists():
            try:
                rules_path.parent.mkdir(parents=True, exist_ok=True)
                rules_path.write_bytes(b"")
            except OSError as e:
                raise RulesError(f"Failed to create rules file: {e}") from e
            logger.info("Created empty rules file %s", rules_path)
            return cls(path=rules_path)

        try:
            content = rules_path.read_bytes()
        except OSError as e:
            raise RulesError(f"Failed to read rules file: {e}") from e

        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RulesParseError(f"Rules file is not valid UTF-8: {e}") from e

        base_dir = rules_path.parent.resolve()
        rules: set[PatternRule] = set()
        for line_num, line in enumerate(text.split("\n"), start=1):
            line = line.rstrip("\r")
            if not line.strip():
                continue
            rule = PatternRule.from_raw(line, base_dir)
            if rule is None:
                logger.warning("Skipping invalid rule on line %d: %r", line_num, line)
                continue
            rules.add(rule)

        return cls(path=rules_path, rules=frozenset(rules))

    @property
    def patterns(self) -> list[str]:
        """Normalized patterns in sorted order."""
        return sorted(rule.pattern for rule in self.rules)

    def ordered(self) -> list[PatternRule]:
        """Rules in the fixed order used to build the path tree."""
        return sorted(self.rules, key=lambda rule: rule.pattern)

    def add(self, raw_patterns: Iterable[str], base_dir: PurePath | str) -> RuleSet:
        """Add patterns and rewrite the rules file.

        Adding a pattern that is already present is a no-op.

        Args:
            raw_patterns: Paths or globs, absolute or relative to ``base_dir``.
            base_dir: Directory relative patterns are anchored at.

        Returns:
            The updated RuleSet.

        Raises:
            RulesWriteError: If the rules file cannot be written.
        """
        rules = set(self.rules)
        for raw in raw_patterns:
            rule = PatternRule.from_raw(raw, base_dir)
            if rule is None:
                logger.warning("Ignoring invalid pattern %r", raw)
                continue
            rules.add(rule)

        updated = replace(self, rules=frozenset(rules))
        updated.save()
        logger.info("rules: %s", updated.patterns)
        return updated

    def remove(self, raw_patterns: Iterable[str], base_dir: PurePath | str) -> RuleSet:
        """Remove patterns and rewrite the rules file.

        Patterns are normalized the same way as in :meth:`add`; unknown
        patterns are ignored.

        Args:
            raw_patterns: Paths or globs, absolute or relative to ``base_dir``.
            base_dir: Directory relative patterns are anchored at.

        Returns:
            The updated RuleSet.

        Raises:
            RulesWriteError: If the rules file cannot be written.
        """
        rules = set(self.rules)
        for raw in raw_patterns:
            rule = PatternRule.from_raw(raw, base_dir)
            if rule is None or rule not in rules:
                logger.info("Pattern %r is not registered", raw)
                continue
            rules.discard(rule)

        updated = replace(self, rules=frozenset(rules))
        updated.save()
        return updated

    def save(self) -> Path:
        """Rewrite the rules file in full.

        The file is written atomically by first writing to a temporary file
        in the same directory and then using os.replace() for atomic rename.

        Returns:
            Path where the rules were saved.

        Raises:
            RulesWriteError: If the file cannot be written.
        """
        content = "".join(f"{pattern}\n" for pattern in self.patterns)

        tmp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self.path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                f.write(content)
            os.replace(str(tmp_path), str(self.path))
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise RulesWriteError(f"Failed to write rules file: {e}") from e

        return self.path

    def expand_all(self, fs: Filesystem, pool: Executor) -> list[ExpandedPattern]:
        """Expand every rule in parallel, keeping the fixed rule order."""
        return list(pool.map(lambda rule: rule.expand(fs), self.ordered()))

    @staticmethod
    def build_tree(expanded: Sequence[ExpandedPattern], sizes: SizeCalculator) -> PathTree:
        """Insert every expanded pattern into a fresh tree, one rule at a time.

        When two rules match the exact same path, the later one in
        ``expanded`` owns it. An ancestor path always owns its subtree,
        whichever order it arrives in.
        """
        tree = PathTree()
        for pattern in expanded:
            added = pattern.insert_into(tree, sizes)
            logger.debug("Pattern %s added %d byte(s)", pattern.pattern, added)
        return tree

    @staticmethod
    def clean(
        expanded: Sequence[ExpandedPattern],
        operator: FilesystemOperator,
        workers: int = DEFAULT_WORKERS,
    ) -> list[FilesystemActionResult]:
        """Delete the paths of already listed patterns.

        Patterns are cleaned in parallel; after de-duplication their path
        sets are disjoint.

        Args:
            expanded: Resolved patterns, as returned by :meth:`list`.
            operator: Operator performing the deletions.
            workers: Number of worker threads.

        Returns:
            All deletion results, grouped by pattern in input order.
        """
        targets = [pattern for pattern in expanded if not pattern.is_empty]
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="clir-clean") as pool:
            per_pattern = list(pool.map(lambda pattern: pattern.clean(operator), targets))
        return [result for results in per_pattern for result in results]

    def clean_all(
        self,
        fs: Filesystem | None = None,
        operator: FilesystemOperator | None = None,
        workers: int = DEFAULT_WORKERS,
    ) -> list[FilesystemActionResult]:
        """List every rule, then delete what the listing resolved.

        Args:
            fs: Filesystem to operate on. Defaults to the local filesystem.
            operator: Deletion operator. Defaults to one on ``fs``.
            workers: Number of worker threads.

        Returns:
            All deletion results.
        """
        fs = fs if fs is not None else LocalFilesystem()
        operator = operator if operator is not None else FilesystemOperator(fs)
        return self.clean(self.list(fs, workers), operator, workers)

    def list(
        self,
        fs: Filesystem | None = None,
        workers: int = DEFAULT_WORKERS,
    ) -> list[ExpandedPattern]:
        """Resolve every rule to its de-duplicated share of disk usage.

        Args:
            fs: Filesystem to operate on. Defaults to the local filesystem.
            workers: Number of worker threads.

        Returns:
            Non-empty patterns sorted ascending by size, ties by pattern.
        """
        fs = fs if fs is not None else LocalFilesystem()

        with (
            ThreadPoolExecutor(max_workers=workers, thread_name_prefix="clir-list") as pool,
            SizeCalculator(fs, workers) as sizes,
        ):
            expanded = self.expand_all(fs, pool)
            tree = self.build_tree(expanded, sizes)
            resolved = list(pool.map(lambda pattern: pattern.resolve_size(tree), expanded))

        logger.info(
            "%d byte(s) to be freed across %d rule(s)",
            tree.total_size(),
            len(resolved),
        )
        listed = [pattern for pattern in resolved if not pattern.is_empty]
        listed.sort(key=lambda pattern: (pattern.size or 0, pattern.pattern))
        return listed


def require_rules(path: Path | None = None) -> RuleSet:
    """Load the rules or exit with a helpful error message.

    Args:
        path: Optional custom rules file.

    Returns:
        Loaded RuleSet.

    Raises:
        typer.Exit: If the rules cannot be loaded.
    """
    import typer

    from clir.utils.formatting import print_error

    try:
        return RuleSet.load(path)
    except RulesError as e:
        print_error(f"Failed to load rules: {e}")
        raise typer.Exit(code=1) from e
