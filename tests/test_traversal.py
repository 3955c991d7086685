"""Tests for pre-order/post-order traversal and lazy iteration."""

import pytest

from growtree import PreOrderIterator, Tree
from tests.test_tree import make_simple_tree


def collect_pre_order(node):
    visited = []
    node.pre_order(visited.append)
    return visited


def collect_post_order(node):
    visited = []
    node.post_order(visited.append)
    return visited


class TestPreOrder:

    def test_order(self):
        tree = make_simple_tree()
        assert [n.data for n in collect_pre_order(tree)] == [
            "a", "b", "d", "e", "h", "c", "f", "g", "i"
        ]

    def test_each_node_once_before_descendants(self):
        tree = make_simple_tree()
        visited = collect_pre_order(tree)
        assert len(visited) == len({id(n) for n in visited}) == 9
        position = {id(n): idx for idx, n in enumerate(visited)}
        for node in visited:
            for ancestor in node.get_path()[:-1]:
                assert position[id(ancestor)] < position[id(node)]

    def test_subtree_only(self):
        tree = make_simple_tree()
        assert [n.data for n in collect_pre_order(tree.children[1])] == ["c", "f", "g", "i"]

    def test_single_node(self):
        node = Tree("x")
        assert collect_pre_order(node) == [node]


class TestPostOrder:

    def test_order(self):
        tree = make_simple_tree()
        assert [n.data for n in collect_post_order(tree)] == [
            "d", "h", "e", "b", "f", "i", "g", "c", "a"
        ]

    def test_each_node_once_after_descendants(self):
        tree = make_simple_tree()
        visited = collect_post_order(tree)
        assert len(visited) == len({id(n) for n in visited}) == 9
        position = {id(n): idx for idx, n in enumerate(visited)}
        for node in visited:
            for ancestor in node.get_path()[:-1]:
                assert position[id(ancestor)] > position[id(node)]

    def test_subtree_only(self):
        tree = make_simple_tree()
        b = tree.children[0]
        assert [n.data for n in collect_post_order(b)] == ["d", "h", "e", "b"]

    def test_iter_post_order_matches(self):
        tree = make_simple_tree()
        assert list(tree.iter_post_order()) == collect_post_order(tree)


class TestPreOrderIterator:

    def test_matches_eager_pre_order(self):
        tree = make_simple_tree()
        assert list(tree) == collect_pre_order(tree)
        assert list(tree.iter_pre_order()) == collect_pre_order(tree)

    def test_matches_on_grown_tree(self):
        tree = Tree("", lambda s: [s + c for c in "abc"] if len(s) < 3 else [])
        assert list(tree) == collect_pre_order(tree)
        assert len(list(tree)) == 1 + 3 + 9 + 27

    def test_state_machine(self):
        tree = make_simple_tree()
        it = iter(tree)
        assert isinstance(it, PreOrderIterator)
        assert iter(it) is it
        assert not it.started
        assert not it.exhausted

        assert next(it) is tree
        assert it.started
        assert not it.exhausted

        rest = [n.data for n in it]
        assert rest == ["b", "d", "e", "h", "c", "f", "g", "i"]
        assert it.exhausted

    def test_exhausted_iterator_stays_exhausted(self):
        it = iter(Tree("only"))
        assert next(it).data == "only"
        with pytest.raises(StopIteration):
            next(it)
        with pytest.raises(StopIteration):
            next(it)
        assert list(it) == []

    def test_single_pass_but_fresh_per_iter(self):
        tree = make_simple_tree()
        it = iter(tree)
        assert len(list(it)) == 9
        assert list(it) == []
        assert len(list(tree)) == 9

    def test_deep_tree(self):
        depth = 5000
        tree = Tree(0, lambda n: [n + 1] if n < depth else [])
        assert [n.data for n in tree] == list(range(depth + 1))
        assert [n.data for n in tree.iter_post_order()] == list(range(depth, -1, -1))
        visited = []
        tree.pre_order(lambda n: visited.append(n.data))
        assert visited == list(range(depth + 1))
        assert tree.as_string().count("(") == depth
