"""Permutation generation example.

This example demonstrates:
- Growing a whole tree from a growth function
- Terminating growth by returning no children
- Iterating lazily and picking out the leaves
- Rendering the tree with Graphviz
"""

from growtree import RenderConfig, Tree, build_dot

SUPERSET = [0, 1, 2, 3]


def grow_permutation(prefix):
    """Extend a permutation prefix by every element it does not contain yet."""
    if len(prefix) >= len(SUPERSET):
        return []
    return [prefix + [element] for element in SUPERSET if element not in prefix]


def main():
    """Grow all permutations of SUPERSET and print them."""
    print("=" * 60)
    print("Permutation Tree Example")
    print("=" * 60)
    print()

    tree = Tree([], grow_permutation)

    for node in tree:
        if node.is_leaf():
            print(node.data)

    print()
    print(f"{len(tree.leaves())} permutations in a tree of {tree.size()} nodes")

    # Label each node by its digits
    dot = build_dot(tree, RenderConfig(label_fn=lambda data: "".join(map(str, data)) or "[]"))
    print(f"Graphviz source has {len(dot.body)} statements")


if __name__ == "__main__":
    main()
