"""Rendering configuration shared by the text and Graphviz renderers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Dict

from growtree.exceptions import TreeConfigError


@dataclass
class RenderConfig:
    """Settings for rendering a tree as text or as a Graphviz digraph.

    Attributes:
        delim: Separator (or, when multiline, per-depth indentation) between
            a parent's label and each child's rendering.
        multiline: If True, each child starts on its own line, indented by
            ``delim`` once per level of depth.
        label_fn: Converts a node's data to its display label.
        graph_name: Name given to the generated Digraph.
        graph_attr: Graph-level Graphviz attributes.
        node_attr: Default Graphviz node attributes.
        edge_attr: Default Graphviz edge attributes.
    """

    delim: str = " "
    multiline: bool = False
    label_fn: Callable[[Any], str] = str
    graph_name: str = "tree"
    graph_attr: Dict[str, str] = field(default_factory=dict)
    node_attr: Dict[str, str] = field(default_factory=dict)
    edge_attr: Dict[str, str] = field(default_factory=dict)

    def label(self, data: Any) -> str:
        """Render node data as a label string."""
        return self.label_fn(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> RenderConfig:
        """Build a ``RenderConfig`` from a plain settings dict.

        Unknown keys are ignored and missing keys fall back to defaults.

        Args:
            data: Settings dict, e.g. ``{"delim": "  ", "multiline": True}``.

        Returns:
            A new ``RenderConfig`` instance.

        Raises:
            TreeConfigError: If ``label_fn`` is given but is not callable, or a
                Graphviz attribute setting is not a mapping.
        """
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs = {
            key: value for key, value in data.items() if key in known and value is not None
        }
        label_fn = kwargs.get("label_fn")
        if label_fn is not None and not callable(label_fn):
            raise TreeConfigError(
                "label_fn must be callable",
                context={"label_fn": repr(label_fn)},
            )
        for attr_key in ("graph_attr", "node_attr", "edge_attr"):
            if attr_key not in kwargs:
                continue
            attrs = kwargs[attr_key]
            if not isinstance(attrs, Mapping):
                raise TreeConfigError(
                    f"{attr_key} must be a mapping",
                    context={"key": attr_key, "type": type(attrs).__name__},
                )
            kwargs[attr_key] = {str(k): str(v) for k, v in attrs.items()}
        return cls(**kwargs)
