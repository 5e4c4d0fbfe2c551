"""Unit tests for the de-duplicating path tree.

Covers insertion semantics, ancestor subsumption, ownership of exact
duplicates, and the leaf invariant under arbitrary insertion orders.
"""

from itertools import permutations

import pytest
from clir.core.tree import PathTree


def _fixed(size: int):
    return lambda: size


def _never() -> int:
    raise AssertionError("size function must not be called")


def _is_ancestor(a: str, b: str) -> bool:
    prefix = a.rstrip("/") + "/"
    return b.startswith(prefix)


class TestInsert:
    """Tests for PathTree.insert."""

    def test_insert_returns_size(self) -> None:
        """First insertion returns the full size as delta."""
        tree = PathTree()

        assert tree.insert("/a/b", _fixed(5)) == 5
        assert tree.get_size_at("/a/b") == 5
        assert tree.total_size() == 5

    def test_descendant_of_leaf_ignored(self) -> None:
        """A path below an existing leaf is covered and not measured."""
        tree = PathTree()
        tree.insert("/a/b", _fixed(3))

        assert tree.insert("/a/b/c", _never) is None
        assert tree.total_size() == 3

    def test_ancestor_subsumes_children(self) -> None:
        """Inserting an ancestor replaces its descendants."""
        tree = PathTree()
        tree.insert("/a/b/c", _fixed(5))
        tree.insert("/a/b/d", _fixed(7))

        delta = tree.insert("/a/b", _fixed(16))

        assert delta == 4
        assert tree.total_size() == 16
        assert tree.get_size_at("/a/b/c") is None
        assert list(tree.leaves()) == [("/a/b", 16)]

    def test_siblings_sum_in_parent(self) -> None:
        """Inner nodes carry the sum of their children."""
        tree = PathTree()
        tree.insert("/a/x", _fixed(6))
        tree.insert("/a/y", _fixed(10))

        assert tree.get_size_at("/a") == 16
        assert tree.total_size() == 16

    def test_reinsert_same_path_overwrites(self) -> None:
        """Re-inserting a leaf returns the difference to the old size."""
        tree = PathTree()
        tree.insert("/a", _fixed(5))

        assert tree.insert("/a", _fixed(8)) == 3
        assert tree.total_size() == 8

    def test_failing_size_fn_leaves_tree_unchanged(self) -> None:
        """Nothing is stored when the size cannot be computed."""
        tree = PathTree()

        def broken() -> int:
            raise OSError("gone")

        with pytest.raises(OSError):
            tree.insert("/a/b", broken)

        assert tree.contains_ancestor("/a") is False
        assert tree.total_size() == 0
        assert tree.insert("/a/b/c", _fixed(2)) == 2

    def test_reinsert_exact_leaf_measures_again(self) -> None:
        """Re-inserting an existing leaf is not treated as covered."""
        tree = PathTree()
        tree.insert("/a", _fixed(5), owner="first")

        assert tree.insert("/a", _fixed(5), owner="second") == 0
        assert list(tree.leaves()) == [("/a", 5)]

    def test_relative_path_rejected(self) -> None:
        """Relative paths cannot be inserted."""
        with pytest.raises(ValueError, match="relative"):
            PathTree().insert("a/b", _fixed(1))


class TestOwnership:
    """Tests for owner tags on leaves."""

    def test_last_owner_wins_for_exact_duplicate(self) -> None:
        """A later insertion of the same path takes ownership."""
        tree = PathTree()
        tree.insert("/a", _fixed(5), owner="first")
        tree.insert("/a", _fixed(5), owner="second")

        assert tree.get_size_at("/a", owner="first") is None
        assert tree.get_size_at("/a", owner="second") == 5
        assert tree.total_size() == 5

    def test_inner_node_has_no_owner(self) -> None:
        """Owner queries only match leaves."""
        tree = PathTree()
        tree.insert("/a/b", _fixed(5), owner="rule")

        assert tree.get_size_at("/a", owner="rule") is None
        assert tree.get_size_at("/a") == 5


class TestContains:
    """Tests for contains_ancestor and contains_descendant."""

    def test_empty_tree(self) -> None:
        """An empty tree only has the root."""
        tree = PathTree()

        assert tree.contains_ancestor("/") is True
        assert tree.contains_ancestor("/a") is False
        assert tree.contains_descendant("/a") is False

    def test_contains_ancestor(self) -> None:
        """Stored paths and their ancestors are reported."""
        tree = PathTree()
        tree.insert("/a/b/c", _fixed(1))

        assert tree.contains_ancestor("/a") is True
        assert tree.contains_ancestor("/a/b/c") is True
        assert tree.contains_ancestor("/a/x") is False

    def test_contains_descendant(self) -> None:
        """Paths at or below a leaf are covered."""
        tree = PathTree()
        tree.insert("/a/b/c", _fixed(1))

        assert tree.contains_descendant("/a/b/c") is True
        assert tree.contains_descendant("/a/b/c/d") is True
        assert tree.contains_descendant("/a/b/c/*.rs") is True
        assert tree.contains_descendant("/a/b") is False
        assert tree.contains_descendant("a/b/c") is False


class TestLeafInvariant:
    """No two leaves are ever ancestor and descendant of each other."""

    SIZES = {"/a": 10, "/a/b": 4, "/a/b/c": 1, "/d": 7, "/d/e/f": 2}

    @pytest.mark.parametrize("order", list(permutations(SIZES)))
    def test_any_order_yields_outermost_leaves(self, order: tuple[str, ...]) -> None:
        """Whatever the order, only the outermost paths remain."""
        tree = PathTree()
        for path in order:
            tree.insert(path, _fixed(self.SIZES[path]))

        leaves = dict(tree.leaves())
        assert leaves == {"/a": 10, "/d": 7}
        assert tree.total_size() == 17
        for first in leaves:
            for second in leaves:
                assert not _is_ancestor(first, second)
