"""Tests for growing trees from a growth function."""

import itertools
import logging

import pytest

from growtree import GrowthError, Tree

SUPERSET = [0, 1, 2, 3]


def grow_permutation(prefix):
    if len(prefix) >= len(SUPERSET):
        return []
    return [prefix + [element] for element in SUPERSET if element not in prefix]


def grow_binary(depth):
    def grow(s):
        return [s + "0", s + "1"] if len(s) < depth else []

    return grow


def shape(node):
    """Nested (data, children) tuples describing a subtree."""
    return (node.data, tuple(shape(child) for child in node.children))


class TestPermutations:
    """Growing all permutations of a small set."""

    def test_leaves_are_all_permutations(self):
        tree = Tree([], grow_permutation)
        leaves = [tuple(leaf.data) for leaf in tree.leaves()]
        assert len(leaves) == 24
        assert len(set(leaves)) == 24
        assert sorted(leaves) == sorted(itertools.permutations(SUPERSET))
        assert all(len(leaf) == 4 for leaf in leaves)

    def test_leaves_in_growth_order(self):
        tree = Tree([], grow_permutation)
        leaves = [tuple(leaf.data) for leaf in tree.leaves()]
        assert leaves == list(itertools.permutations(SUPERSET))

    def test_tree_shape(self):
        tree = Tree([], grow_permutation)
        # 1 + 4 + 12 + 24 + 24
        assert tree.size() == 65
        assert tree.num_children == 4
        assert all(node.depth == 4 for node in tree.leaves())
        assert tree.children[2].data == [2]
        assert [child.data for child in tree.children[2].children] == [[2, 0], [2, 1], [2, 3]]


class TestGrowth:
    """Growth semantics for roots and added children."""

    def test_no_growth_function_makes_single_node(self):
        tree = Tree("seed")
        assert tree.is_root()
        assert tree.is_leaf()
        assert tree.size() == 1

    def test_empty_growth_makes_leaf(self):
        tree = Tree("seed", lambda data: [])
        assert tree.is_leaf()

    def test_children_in_returned_order(self):
        tree = Tree(3, lambda n: [n - 1, n - 2] if n > 1 else [])
        assert [child.data for child in tree.children] == [2, 1]
        assert tree.as_string() == "(3 (2 1 0) 1)"

    def test_growth_accepts_any_iterable(self):
        tree = Tree(2, lambda n: (m for m in range(n)))
        assert tree.as_string() == "(2 0 (1 0))"

    def test_grow_called_once_per_node_in_pre_order(self):
        calls = []

        def grow(s):
            calls.append(s)
            return grow_binary(2)(s)

        tree = Tree("", grow)
        assert calls == [node.data for node in tree]
        assert calls == ["", "0", "00", "01", "1", "10", "11"]

    def test_add_child_with_growth(self):
        root = Tree("root")
        child = root.add_child("", grow_binary(2))
        assert child.parent is root
        assert root.children == (child,)
        assert [leaf.data for leaf in child.leaves()] == ["00", "01", "10", "11"]
        assert all(leaf.root is root for leaf in child.leaves())

    def test_grown_equals_stepwise(self):
        grow = grow_binary(3)
        grown = Tree("", grow)

        stepwise = Tree("")
        for value in grow(""):
            stepwise.add_child(value, grow)

        assert shape(grown) == shape(stepwise)

    def test_grown_equals_manual(self):
        grow = grow_binary(2)
        grown = Tree("", grow)

        manual = Tree("")
        for first in ("0", "1"):
            child = manual.add_child(first)
            for second in ("0", "1"):
                child.add_child(first + second)

        assert shape(grown) == shape(manual)

    def test_deep_growth_does_not_recurse(self):
        depth = 5000
        tree = Tree(0, lambda n: [n + 1] if n < depth else [])
        leaves = tree.leaves()
        assert len(leaves) == 1
        assert leaves[0].data == depth
        assert leaves[0].depth == depth

    def test_non_iterable_growth_result(self):
        with pytest.raises(GrowthError) as exc_info:
            Tree(1, lambda n: None if n == 2 else [n + 1])
        assert exc_info.value.context == {"data": 2, "result_type": "NoneType"}
        assert isinstance(exc_info.value, TypeError)

    def test_growth_errors_propagate(self):
        def grow(n):
            if n == 2:
                raise KeyError("boom")
            return [n + 1]

        with pytest.raises(KeyError):
            Tree(0, grow)

    def test_growth_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="growtree.tree"):
            Tree("", grow_binary(2))
        assert "Grew 6 descendant nodes" in caplog.text
