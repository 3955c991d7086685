"""Read-only presentation bridge between trees and viewers.

A viewer (a widget toolkit's tree view, a Graphviz renderer, ...) only needs a
narrow slice of a node's interface: how many children it has, the child at a
position, its parent, whether it is a leaf, and a label. ``TreeView`` captures
that capability and ``TreeViewAdapter`` implements it over a ``Tree`` without
ever mutating it.

Example:
    ```python
    from growtree import Tree
    from growtree.view import TreeViewAdapter, build_dot

    root = Tree("root")
    root.add_child("a").add_child("b")

    view = TreeViewAdapter(root)
    print(view.child_count())          # 1
    print(view.child_at(0).render())   # "a"

    dot = build_dot(view)
    print(dot.source)
    dot.render("/tmp/tree", format="png")  # needs the Graphviz binaries
    ```
"""

from __future__ import annotations

import logging
from typing import List, Protocol, Tuple, Union, runtime_checkable

import graphviz

from growtree.config import RenderConfig
from growtree.exceptions import ChildIndexError
from growtree.tree import Tree

logger = logging.getLogger(__name__)


@runtime_checkable
class TreeView(Protocol):
    """The read surface a tree viewer consumes."""

    def child_count(self) -> int:
        ...

    def child_at(self, index: int) -> TreeView:
        ...

    def get_parent(self) -> TreeView | None:
        ...

    def index_of(self, child: TreeView) -> int:
        ...

    def is_leaf(self) -> bool:
        ...

    def render(self) -> str:
        ...


class TreeViewAdapter:
    """``TreeView`` over a ``Tree`` node.

    Adapters are lightweight and created on demand: ``child_at`` and
    ``get_parent`` return new adapters. Two adapters are equal when they wrap
    the same node.

    Args:
        node: The node to expose.
        config: Rendering settings; only ``label_fn`` is used here.
    """

    def __init__(self, node: Tree, config: RenderConfig | None = None):
        self._node = node
        self._config = config if config is not None else RenderConfig()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeViewAdapter):
            return NotImplemented
        return self._node is other._node

    def __hash__(self) -> int:
        return id(self._node)

    def __repr__(self) -> str:
        return f"TreeViewAdapter({self.render()!r})"

    def __str__(self) -> str:
        return self.render()

    @property
    def node(self) -> Tree:
        """The wrapped node."""
        return self._node

    def child_count(self) -> int:
        return self._node.num_children

    def child_at(self, index: int) -> TreeViewAdapter:
        """Adapter for the child at ``index``.

        Raises:
            ChildIndexError: If ``index`` is negative or not below
                ``child_count()``.
        """
        children = self._node.children
        if not 0 <= index < len(children):
            raise ChildIndexError(
                f"Child index {index} out of range for {len(children)} children",
                context={"index": index, "num_children": len(children)},
            )
        return TreeViewAdapter(children[index], self._config)

    def get_parent(self) -> TreeViewAdapter | None:
        parent = self._node.parent
        return TreeViewAdapter(parent, self._config) if parent is not None else None

    def index_of(self, child: TreeView) -> int:
        """Position of ``child`` among this node's children, or -1."""
        for idx in range(self.child_count()):
            if self.child_at(idx) == child:
                return idx
        return -1

    def is_leaf(self) -> bool:
        return self._node.is_leaf()

    def render(self) -> str:
        return self._config.label(self._node.data)


def build_dot(
    tree: Union[TreeView, Tree], config: RenderConfig | None = None
) -> graphviz.Digraph:
    """Build a Graphviz Digraph for visualizing a tree.

    Only the ``TreeView`` surface is used, so any implementation of it can be
    drawn. A ``Tree`` is wrapped in a ``TreeViewAdapter`` first. Nodes are
    named ``N_000``, ``N_001``, ... in pre-order and labelled with
    ``render()``.

    Args:
        tree: The view (or node) to draw, as the root of the drawing.
        config: Graph name and Graphviz attributes; for a ``Tree`` argument
            also the ``label_fn``.

    Returns:
        A graphviz.Digraph object representing the tree.

    Example:
        ```python
        root = Tree("root")
        root.add_child("child1")
        root.add_child("child2")

        dot = build_dot(root, RenderConfig(node_attr={"shape": "box"}))
        print(dot.source)
        ```

    Note:
        Rendering to an image requires the Graphviz system installation;
        building the source does not.
    """
    cfg = config if config is not None else RenderConfig()
    view = TreeViewAdapter(tree, cfg) if isinstance(tree, Tree) else tree
    dot = graphviz.Digraph(
        name=cfg.graph_name,
        graph_attr=cfg.graph_attr,
        node_attr=cfg.node_attr,
        edge_attr=cfg.edge_attr,
    )
    count = 0
    # (view, id of the parent's dot node)
    stack: List[Tuple[TreeView, str | None]] = [(view, None)]
    while stack:
        item, parent_id = stack.pop()
        node_id = f"N_{count:03}"
        count += 1
        dot.node(node_id, item.render())
        if parent_id is not None:
            dot.edge(parent_id, node_id)
        stack.extend(
            (item.child_at(idx), node_id) for idx in reversed(range(item.child_count()))
        )
    logger.debug("Built dot graph %r with %d nodes", cfg.graph_name, count)
    return dot
