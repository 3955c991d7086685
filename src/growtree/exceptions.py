"""Exception hierarchy for growtree.

Every error raised by this package derives from ``TreeError``, which carries an
optional context dictionary describing the failure. The concrete subclasses
also derive from the matching builtin exception so that callers can catch them
the usual way (``IndexError``, ``TypeError``, ``ValueError``).

Example:
    ```python
    from growtree import Tree
    from growtree.exceptions import ChildIndexError

    root = Tree("root")
    try:
        root.pop_child(3)
    except ChildIndexError as e:
        print(e.context)  # {'index': 3, 'num_children': 0}
    ```
"""

from typing import Any, Dict


class TreeError(Exception):
    """Base exception for all growtree errors.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (takes precedence when both are given)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class ChildIndexError(TreeError, IndexError):
    """Raised when a child position is outside a node's children.

    Example:
        ```python
        raise ChildIndexError(
            "Child index 5 out of range",
            context={"index": 5, "num_children": 2}
        )
        ```
    """

    pass


class GrowthError(TreeError, TypeError):
    """Raised when a growth function returns something that is not iterable."""

    pass


class TreeParseError(TreeError, ValueError):
    """Raised when a parenthesized tree string cannot be parsed."""

    pass


class TreeConfigError(TreeError, ValueError):
    """Raised when render configuration values are invalid."""

    pass
