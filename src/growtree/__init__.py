"""Generic trees grown from a function.

The growtree package provides a node-based tree where each node holds
arbitrary data, an ordered list of children and a back-reference to its
parent. Trees are built by hand or grown eagerly from a growth function.

## Modules

### tree - The node abstraction
- Eager subtree construction from a growth function
- Adding and detaching children
- Pre-order and post-order traversal
- Lazy pre-order iteration
- Parenthesized text form (parsed with pyparsing)

### view - Presentation bridge
- ``TreeView``: the narrow read interface a viewer consumes
- ``TreeViewAdapter``: ``TreeView`` over a ``Tree``
- ``build_dot``: Graphviz rendering of any ``TreeView``

### config - Rendering settings
- ``RenderConfig``: delimiters, labels and Graphviz attributes

## Quick Example

```python
from growtree import Tree

def grow(perm):
    if len(perm) == 3:
        return []
    return [perm + [e] for e in range(3) if e not in perm]

tree = Tree([], grow)
for node in tree:
    if node.is_leaf():
        print(node.data)
```
"""

from growtree.config import RenderConfig
from growtree.exceptions import (
    ChildIndexError,
    GrowthError,
    TreeConfigError,
    TreeError,
    TreeParseError,
)
from growtree.tree import (
    PreOrderIterator,
    Tree,
    build_tree_from_list,
    build_tree_from_string,
)
from growtree.view import TreeView, TreeViewAdapter, build_dot

__version__ = "0.1.0"

__all__ = [
    "ChildIndexError",
    "GrowthError",
    "PreOrderIterator",
    "RenderConfig",
    "Tree",
    "TreeConfigError",
    "TreeError",
    "TreeParseError",
    "TreeView",
    "TreeViewAdapter",
    "build_dot",
    "build_tree_from_list",
    "build_tree_from_string",
]
