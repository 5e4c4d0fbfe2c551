"""Prefix tree over filesystem paths that prevents double counting.

Every inserted path becomes a leaf that owns the size of its whole
subtree. Inserting an ancestor of existing leaves subsumes them; inserting
a path below an existing leaf is a no-op. Inner nodes carry the sum of
their children's sizes, updated incrementally on every insertion.

The tree is built by a single writer and only read afterwards; it holds
no locks.
"""

from collections.abc import Callable, Iterator
from pathlib import PurePath

from clir.core.normalize import normalize_pattern, split_segments


class _Node:
    """A single path segment in the tree."""

    __slots__ = ("children", "owner", "size")

    def __init__(self) -> None:
        self.children: dict[str, _Node] = {}
        self.size: int | None = None
        self.owner: str | None = None

    @property
    def is_leaf(self) -> bool:
        return self.size is not None and not self.children


class PathTree:
    """Trie keyed by path segments with aggregated sizes.

    Invariants:
        - No leaf has a descendant with a size set.
        - The size of an inner node equals the sum of its children's sizes.

    Example:
        >>> tree = PathTree()
        >>> tree.insert("/tmp/a", lambda: 2)
        2
        >>> tree.insert("/tmp/a/b", lambda: 1) is None
        True
        >>> tree.total_size()
        2
    """

    def __init__(self) -> None:
        self._root = _Node()

    def insert(
        self,
        path: PurePath | str,
        size_fn: Callable[[], int],
        owner: str | None = None,
    ) -> int | None:
        """Insert a path and return the resulting change in total size.

        Args:
            path: Absolute path to insert.
            size_fn: Computes the authoritative size of ``path``. Only called
                when the path is not already covered by a leaf.
            owner: Tag recorded on the leaf (the rule that inserted it).

        Returns:
            Size delta between the new and the previous size at ``path``,
            or None if an ancestor leaf already covers the path.

        Raises:
            ValueError: If ``path`` is relative.
        """
        segments = split_segments(path)
        if segments is None:
            msg = f"Cannot insert relative path: {path}"
            raise ValueError(msg)

        # never add children to leaves
        node: _Node | None = self._root
        for segment in segments:
            if node is None:
                break
            if node.is_leaf:
                return None
            node = node.children.get(segment)

        # a failing size_fn leaves the tree unchanged
        size = size_fn()

        node = self._root
        trail: list[_Node] = []
        for segment in segments:
            trail.append(node)
            node = node.children.setdefault(segment, _Node())

        delta = size - (node.size or 0)
        node.size = size
        node.owner = owner
        node.children.clear()

        for ancestor in trail:
            ancestor.size = (ancestor.size or 0) + delta

        return delta

    def get_size_at(self, path: PurePath | str, owner: str | None = None) -> int | None:
        """Return the size stored at exactly ``path``.

        Args:
            path: Absolute path to look up.
            owner: If given, only a leaf owned by this tag is reported.

        Returns:
            The aggregated size, or None if the path was never inserted,
            was subsumed by an ancestor, or belongs to another owner.
        """
        node = self._find(path)
        if node is None:
            return None
        if owner is not None and not (node.is_leaf and node.owner == owner):
            return None
        return node.size

    def contains_ancestor(self, path: PurePath | str) -> bool:
        """Check whether ``path`` is stored or is an ancestor of a stored path.

        The root is an ancestor of everything, even in an empty tree.
        """
        return self._find(path) is not None

    def contains_descendant(self, path: PurePath | str) -> bool:
        """Check whether ``path`` lies at or below a stored leaf.

        ``path`` may be a glob pattern; it is normalized lexically first.
        """
        text = str(path)
        if not text.startswith("/"):
            return False
        normalized = normalize_pattern(text, "/")
        segments = split_segments(normalized) if normalized else None
        if segments is None:
            return False

        node = self._root
        for segment in segments:
            if node.is_leaf:
                return True
            child = node.children.get(segment)
            if child is None:
                return False
            node = child
        return node.is_leaf

    def total_size(self) -> int:
        """Return the aggregated size of everything in the tree."""
        return self._root.size or 0

    def leaves(self) -> Iterator[tuple[str, int]]:
        """Yield ``(path, size)`` for every leaf, depth first."""
        stack: list[tuple[list[str], _Node]] = [([], self._root)]
        while stack:
            segments, node = stack.pop()
            if node.is_leaf:
                yield "/" + "/".join(segments), node.size or 0
                continue
            for name, child in sorted(node.children.items(), reverse=True):
                stack.append(([*segments, name], child))

    def _find(self, path: PurePath | str) -> _Node | None:
        segments = split_segments(path)
        if segments is None:
            return None
        node = self._root
        for segment in segments:
            child = node.children.get(segment)
            if child is None:
                return None
            node = child
        return node
