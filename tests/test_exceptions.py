"""Tests for the exception hierarchy."""

import pytest

from growtree.exceptions import (
    ChildIndexError,
    GrowthError,
    TreeConfigError,
    TreeError,
    TreeParseError,
)


class TestTreeError:
    """Test the base TreeError class."""

    def test_basic_exception(self):
        error = TreeError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.context == {}
        assert error.details == {}

    def test_exception_with_context(self):
        error = TreeError("Operation failed", context={"index": 3})
        assert error.context == {"index": 3}
        assert error.details is error.context

    def test_details_takes_precedence(self):
        error = TreeError("Error", context={"key": "context"}, details={"key": "details"})
        assert error.context == {"key": "details"}


@pytest.mark.parametrize(
    "exc_class, builtin",
    [
        (ChildIndexError, IndexError),
        (GrowthError, TypeError),
        (TreeParseError, ValueError),
        (TreeConfigError, ValueError),
    ],
)
def test_subclasses_are_builtin_errors(exc_class, builtin):
    with pytest.raises(TreeError):
        raise exc_class("failed")
    with pytest.raises(builtin):
        raise exc_class("failed", context={"x": 1})
