"""Tree nodes that can be grown from a function.

This module provides a Tree implementation where each node holds arbitrary
data, an ordered list of children and a back-reference to its parent. A tree
can be built node by node with ``add_child`` or grown in one step from a
growth function that maps a node's data to the data of its children.

The Tree class supports:
- Eager subtree construction from a growth function
- Adding and detaching children
- Pre-order and post-order traversal with a callback
- Lazy pre-order iteration
- Parenthesized text form, parsed back with pyparsing

Typical usage example:

    ```python
    from growtree import Tree

    # Grow every binary string of length 3
    root = Tree("", lambda s: [s + "0", s + "1"] if len(s) < 3 else [])
    print([leaf.data for leaf in root.leaves()])
    # ['000', '001', '010', '011', '100', '101', '110', '111']

    # Build by hand
    root = Tree("root")
    child = root.add_child("child")
    child.add_child("grandchild")
    print(root.as_string())  # (root (child grandchild))
    ```

Nodes are only ever created as roots or as children of an existing node, so
the structure is always a tree. Construction, traversal and iteration use
explicit stacks rather than recursion and are not limited by the interpreter's
recursion depth.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Deque, List, Tuple, Union

import pyparsing as pp

from growtree.config import RenderConfig
from growtree.exceptions import ChildIndexError, GrowthError, TreeError, TreeParseError

logger = logging.getLogger(__name__)

GrowFn = Callable[[Any], Iterable[Any]]

# Labels that are empty or hold whitespace, parentheses, quotes or backslashes
# are written double-quoted with backslash escapes.
_LABEL_SPECIALS = set("()\"\\")
_LABEL = pp.QuotedString(
    "\"", esc_char="\\", multiline=True, convert_whitespace_escapes=False
) | pp.CharsNotIn("()\" \t\n\r")
_GROUP = pp.Forward()
_GROUP <<= pp.Group(pp.Suppress("(") + pp.ZeroOrMore(_GROUP | _LABEL) + pp.Suppress(")"))
_TREE_TEXT = _GROUP | _LABEL


class Tree:
    """A tree node with arbitrary data and parent-child relationships.

    Each Tree instance represents a node that maintains:
    - Arbitrary data of any type, fixed at construction
    - An ordered list of child nodes, in insertion order
    - A reference to its parent node (None for a root)

    Attributes:
        data: The data contained in this node (read-only).
        children: Tuple of child Tree nodes, empty for a leaf.
        parent: Parent Tree node, or None if this is a root node.
        root: The root node of this tree (traverses up to find it).
        depth: Number of hops from the root to this node (root has depth 0).

    Example:
        ```python
        # Grow all permutations of [0, 1, 2]
        def grow(perm):
            return [perm + [e] for e in range(3) if e not in perm]

        tree = Tree([], grow)
        print(len(tree.leaves()))  # 6

        # Add to an existing node
        extra = tree.add_child([9])
        print(extra.parent is tree)  # True
        ```

    Note:
        Iterating over a Tree yields its nodes lazily in pre-order. Mutating a
        tree while it is being traversed or iterated is not supported.
    """

    def __init__(self, data: Any, grow: GrowFn | None = None):
        """Initialize a root node, optionally growing its subtree.

        Args:
            data: The data to be contained within this node. Can be any type.
            grow: Optional growth function. It is called with each node's data
                and returns the data of that node's children, in order. The
                whole subtree is built before the constructor returns. The
                function must eventually return an empty iterable for every
                branch.

        Raises:
            GrowthError: If ``grow`` returns something that is not iterable.
        """
        self._data = data
        self._children: List[Tree] = []
        self._parent: Tree | None = None
        if grow is not None:
            self._grow(grow)

    def __repr__(self) -> str:
        """Return the multiline parenthesized form of this tree."""
        return self.as_string(RenderConfig(delim="  ", multiline=True))

    def __str__(self) -> str:
        return str(self._data)

    def __iter__(self) -> PreOrderIterator:
        """Iterate lazily over this node's subtree in pre-order."""
        return PreOrderIterator(self)

    @property
    def data(self) -> Any:
        """The data contained in this node."""
        return self._data

    @property
    def children(self) -> Tuple[Tree, ...]:
        """This node's children as an ordered, read-only tuple."""
        return tuple(self._children)

    @property
    def parent(self) -> Tree | None:
        """This node's parent, or None if this is a root node."""
        return self._parent

    @property
    def num_children(self) -> int:
        """Number of direct children under this node."""
        return len(self._children)

    def is_root(self) -> bool:
        """Check if this node has no parent."""
        return self._parent is None

    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        return not self._children

    @property
    def root(self) -> Tree:
        """The root node of this tree.

        Traverses up the parent chain to find the node with no parent.
        """
        root = self
        while root._parent is not None:
            root = root._parent
        return root

    @property
    def depth(self) -> int:
        """Depth of this node in the tree.

        The depth is the number of edges from the root to this node. The root
        node has depth 0, its children have depth 1, and so on.

        Example:
            ```python
            root = Tree("root")
            child = root.add_child("child")
            grandchild = child.add_child("grandchild")

            print(root.depth)        # 0
            print(grandchild.depth)  # 2
            ```
        """
        result = 0
        curp = self._parent
        while curp is not None:
            curp = curp._parent
            result += 1
        return result

    @property
    def sibnum(self) -> int:
        """This node's 0-based position among its siblings (0 for a root).

        Raises:
            TreeError: If the parent does not list this node among its children.
        """
        if self._parent is None:
            return 0
        for idx, sib in enumerate(self._parent._children):
            if sib is self:
                return idx
        raise TreeError(
            f"Node {self._data!r} is not among its parent's children",
            context={"data": self._data, "parent": self._parent._data},
        )

    def size(self) -> int:
        """Number of nodes in this node's subtree, including this node."""
        return sum(1 for _ in self)

    def _new_child(self, data: Any) -> Tree:
        child = type(self)(data)
        child._parent = self
        self._children.append(child)
        return child

    def _grow(self, grow: GrowFn) -> None:
        # Nodes are grown in pre-order: a node before its descendants and
        # siblings left to right.
        grown = 0
        stack: List[Tree] = [self]
        while stack:
            node = stack.pop()
            result = grow(node._data)
            try:
                values = iter(result)
            except TypeError as e:
                raise GrowthError(
                    f"Growth function returned non-iterable {type(result).__name__} "
                    f"for data {node._data!r}",
                    context={"data": node._data, "result_type": type(result).__name__},
                ) from e
            new_children = [node._new_child(value) for value in values]
            grown += len(new_children)
            stack.extend(reversed(new_children))
        logger.debug("Grew %d descendant nodes under %r", grown, self._data)

    def add_child(self, data: Any, grow: GrowFn | None = None) -> Tree:
        """Add a new child node holding ``data`` after the existing children.

        Args:
            data: The data for the new child node.
            grow: Optional growth function used to grow the new child's own
                subtree before returning (see ``Tree.__init__``).

        Returns:
            The newly created child node, whose parent is this node.

        Raises:
            GrowthError: If ``grow`` returns something that is not iterable.

        Example:
            ```python
            parent = Tree("parent")
            child1 = parent.add_child("child1")
            child2 = parent.add_child("child2")
            print([c.data for c in parent.children])  # ['child1', 'child2']

            # Method chaining builds a path
            leaf = Tree("root").add_child("a").add_child("b")
            print(leaf.depth)  # 2
            ```
        """
        child = self._new_child(data)
        if grow is not None:
            child._grow(grow)
        return child

    def pop_child(self, index: int) -> Tree:
        """Detach and return the child at ``index``.

        The detached node keeps its own subtree and becomes a root: its parent
        reference is cleared.

        Args:
            index: Position among this node's children. Negative values count
                from the end, as for lists.

        Returns:
            The detached child node.

        Raises:
            ChildIndexError: If ``index`` is out of range.
        """
        try:
            child = self._children.pop(index)
        except IndexError as e:
            raise ChildIndexError(
                f"Child index {index} out of range for node {self._data!r} "
                f"with {len(self._children)} children",
                context={"index": index, "num_children": len(self._children)},
            ) from e
        child._parent = None
        logger.debug("Detached child %r from %r", child._data, self._data)
        return child

    def remove_child(self, data: Any) -> Tree | None:
        """Detach and return the first child whose data equals ``data``.

        Args:
            data: The data to look for among the direct children.

        Returns:
            The detached child node, or None if no child holds ``data`` (in
            which case the children are left unchanged).
        """
        for idx, child in enumerate(self._children):
            if child._data == data:
                return self.pop_child(idx)
        return None

    def prune(self) -> Tree | None:
        """Detach this node from its parent.

        Returns:
            This node's former parent, or None if this was already a root node.

        Example:
            ```python
            root = Tree("root")
            child = root.add_child("child")
            child.add_child("grandchild")

            former_parent = child.prune()
            print(former_parent.data)  # "root"
            print(child.is_root())     # True
            print(child.num_children)  # 1 - subtree intact
            ```
        """
        parent = self._parent
        if parent is not None:
            parent.pop_child(self.sibnum)
        return parent

    def pre_order(self, action: Callable[[Tree], Any]) -> None:
        """Call ``action`` on each node of this subtree in pre-order.

        A node is visited before any of its descendants, and children are
        visited in the order they were added.

        Args:
            action: Called once per node with the node as its only argument.
        """
        stack: List[Tree] = [self]
        while stack:
            node = stack.pop()
            action(node)
            stack.extend(reversed(node._children))

    def post_order(self, action: Callable[[Tree], Any]) -> None:
        """Call ``action`` on each node of this subtree in post-order.

        A node is visited after all of its descendants, and children are
        visited in the order they were added.

        Args:
            action: Called once per node with the node as its only argument.
        """
        for node in self.iter_post_order():
            action(node)

    def iter_pre_order(self) -> PreOrderIterator:
        """Get a fresh lazy pre-order iterator over this subtree."""
        return PreOrderIterator(self)

    def iter_post_order(self) -> Iterator[Tree]:
        """Lazily yield the nodes of this subtree in post-order."""
        stack: List[Tuple[Tree, Iterator[Tree]]] = [(self, iter(self._children))]
        while stack:
            node, remaining = stack[-1]
            child = next(remaining, None)
            if child is None:
                stack.pop()
                yield node
            else:
                stack.append((child, iter(child._children)))

    def find_nodes(
        self,
        accept_node_fn: Callable[[Tree], bool],
        traversal: str = "dfs",
        include_self: bool = True,
        only_first: bool = False,
    ) -> List[Tree]:
        """Find nodes matching a condition using depth-first or breadth-first search.

        Args:
            accept_node_fn: Function that takes a Tree node and returns True to
                include it in results.
            traversal: Search strategy - either 'dfs' (depth-first, pre-order)
                or 'bfs' (breadth-first). Defaults to 'dfs'.
            include_self: If True, considers this node in the search. If False,
                starts with this node's children. Defaults to True.
            only_first: If True, stops after finding the first match.

        Returns:
            List of Tree nodes that matched the accept function.

        Raises:
            ValueError: If ``traversal`` is not 'dfs' or 'bfs'.
        """
        if traversal not in ("dfs", "bfs"):
            raise ValueError(f"Unknown traversal {traversal!r}, expected 'dfs' or 'bfs'")
        queue: Deque[Tree] = deque()
        found: List[Tree] = []
        if include_self:
            queue.append(self)
        else:
            queue.extend(self._children)
        while queue:
            item = queue.popleft()
            if accept_node_fn(item):
                found.append(item)
                if only_first:
                    break
            if traversal == "dfs":
                queue.extendleft(reversed(item._children))
            else:
                queue.extend(item._children)
        return found

    def leaves(self, accept_node_fn: Callable[[Tree], bool] | None = None) -> List[Tree]:
        """Collect the leaf nodes of this subtree in pre-order.

        Args:
            accept_node_fn: Optional filter applied to each leaf.

        Returns:
            List of leaf Tree nodes.
        """
        return [
            node
            for node in self
            if node.is_leaf() and (accept_node_fn is None or accept_node_fn(node))
        ]

    def get_path(self) -> List[Tree]:
        """Get the path from the root to this node, inclusive.

        Example:
            ```python
            root = Tree("root")
            grandchild = root.add_child("child").add_child("grandchild")

            path = grandchild.get_path()
            print([n.data for n in path])  # ["root", "child", "grandchild"]
            ```
        """
        path: Deque[Tree] = deque()
        node: Tree | None = self
        while node is not None:
            path.appendleft(node)
            node = node._parent
        return list(path)

    def as_string(self, config: RenderConfig | None = None) -> str:
        """Get the parenthesized string form of this subtree.

        A node with children renders as ``(label child child ...)``; a leaf
        renders as its bare label. A label that is empty or contains
        whitespace, parentheses, double quotes or backslashes is written in
        double quotes with backslash escapes, so ``build_tree_from_string``
        reads back the same labels.

        Args:
            config: Rendering settings. Uses ``delim``, ``multiline`` and
                ``label_fn``; defaults to ``RenderConfig()``.

        Returns:
            String representation of this node and its descendants.

        Example:
            ```python
            root = Tree("root")
            child1 = root.add_child("child1")
            child1.add_child("leaf1")
            root.add_child("child2")

            print(root.as_string())
            # (root (child1 leaf1) child2)

            print(root.as_string(RenderConfig(delim="  ", multiline=True)))
            # (root
            #   (child1
            #     leaf1)
            #   child2)
            ```
        """
        cfg = config if config is not None else RenderConfig()
        btwn = "\n" if cfg.multiline else ""
        parts: List[str] = []
        # (node, level below self, is-closing-marker)
        stack: List[Tuple[Tree, int, bool]] = [(self, 0, False)]
        while stack:
            node, level, closing = stack.pop()
            if closing:
                parts.append(")")
                continue
            if level > 0:
                parts.append(btwn + (level if cfg.multiline else 1) * cfg.delim)
            if node._children:
                parts.append("(" + _quote_label(cfg.label(node._data)))
                stack.append((node, level, True))
                stack.extend((child, level + 1, False) for child in reversed(node._children))
            else:
                parts.append(_quote_label(cfg.label(node._data)))
        return "".join(parts)


class PreOrderIterator:
    """Lazy, single-pass pre-order iterator over a subtree.

    The iterator moves through three states:

    - not started: the first ``next()`` yields the root and pushes a cursor
      over the root's children.
    - traversing: a stack holds one cursor of remaining siblings per level
      below the root. Each ``next()`` takes the next sibling from the top
      cursor (discarding exhausted cursors), yields it and pushes a cursor
      over that node's children.
    - exhausted: the stack is empty and every further ``next()`` raises
      ``StopIteration``.

    Only one cursor per level of the current position is held, so the whole
    node sequence is never materialized.

    Example:
        ```python
        root = Tree("a")
        b = root.add_child("b")
        b.add_child("c")
        root.add_child("d")

        it = iter(root)
        print([node.data for node in it])  # ['a', 'b', 'c', 'd']
        print(next(it, None))              # None - exhausted
        ```
    """

    def __init__(self, root: Tree):
        self._root = root
        self._cursors: List[Iterator[Tree]] | None = None

    def __iter__(self) -> PreOrderIterator:
        return self

    def __next__(self) -> Tree:
        if self._cursors is None:
            self._cursors = [iter(self._root._children)]
            return self._root
        while self._cursors:
            node = next(self._cursors[-1], None)
            if node is None:
                self._cursors.pop()
                continue
            self._cursors.append(iter(node._children))
            return node
        raise StopIteration

    @property
    def started(self) -> bool:
        """Whether the root has been yielded yet."""
        return self._cursors is not None

    @property
    def exhausted(self) -> bool:
        """Whether every node has been yielded."""
        return self._cursors is not None and not self._cursors


def build_tree_from_string(from_string: str) -> Tree:
    """Build a Tree from its parenthesized string form.

    Parses text such as produced by ``Tree.as_string()``. Every node's data is
    the string that labelled it, with double-quoted labels unescaped.

    Args:
        from_string: The tree string, e.g. ``"(root (child1 leaf1) child2)"``.
            A single label without parentheses becomes a single root node.

    Returns:
        The reconstructed Tree.

    Raises:
        TreeParseError: If the text is not a single well-formed label or
            parenthesized expression, or a group is empty or starts with a
            nested group.

    Example:
        ```python
        tree = build_tree_from_string("(root (child1 leaf1 leaf2) child2)")
        print(tree.data)              # "root"
        print(tree.num_children)      # 2
        print(tree.children[0].data)  # "child1"
        ```
    """
    try:
        parsed = _TREE_TEXT.parse_string(from_string, parse_all=True)
    except pp.ParseBaseException as e:
        raise TreeParseError(
            f"Cannot parse tree string: {e}",
            context={"text": from_string, "column": e.column},
        ) from e
    return build_tree_from_list(parsed.as_list()[0])


def build_tree_from_list(data: Union[Any, List]) -> Tree:
    """Build a Tree from a nested list.

    The first element of a list is the node's data and the remaining elements
    are its children, each either a plain value (a leaf) or a nested list (a
    subtree). A value that is not a list becomes a single root node.

    Args:
        data: The tree as nested lists, e.g. ``["root", ["a", "b"], "c"]``.

    Returns:
        The root Tree node with all descendants constructed.

    Raises:
        TreeParseError: If a list is empty or its first element is a list.

    Example:
        ```python
        tree = build_tree_from_list(["root", ["child1", "leaf1", "leaf2"], "child2"])
        print(tree.children[0].children[0].data)  # "leaf1"
        ```
    """
    if not isinstance(data, list):
        return Tree(data)
    root = Tree(_head(data))
    stack: List[Tuple[Tree, List]] = [(root, data[1:])]
    while stack:
        parent, items = stack.pop()
        for item in items:
            if isinstance(item, list):
                stack.append((parent.add_child(_head(item)), item[1:]))
            else:
                parent.add_child(item)
    return root


def _head(group: List) -> Any:
    if not group:
        raise TreeParseError("Empty group has no node data")
    if isinstance(group[0], list):
        raise TreeParseError(
            "Group must start with node data, not a nested group",
            context={"group": group},
        )
    return group[0]


def _quote_label(label: str) -> str:
    if label and not any(ch.isspace() or ch in _LABEL_SPECIALS for ch in label):
        return label
    escaped = label.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
