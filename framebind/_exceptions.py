"""
Exception hierarchy for framebind.

All framebind-specific exceptions inherit from FrameBindError.
Warnings inherit from FrameBindWarning (a UserWarning) so callers can
tell "operation refused" apart from "operation succeeded with a downgrade".

Usage:
    from framebind._exceptions import FrameBindError, IncompatibleTypeError

    try:
        result = framebind.bind_rows(df1, df2)
    except IncompatibleTypeError as e:
        logger.warning(f"Cannot stack column {e.column!r}")
    except FrameBindError:
        raise

    with warnings.catch_warnings():
        warnings.simplefilter("error", FactorLevelMismatchWarning)
        framebind.bind_rows(df1, df2)
"""


class FrameBindError(Exception):
    """Base exception for all framebind errors."""

    pass


class InvalidInputError(FrameBindError):
    """
    An input cannot be read as a table.

    Raised when:
    - A non-null element passed to bind_rows is not table-like
    - Columns of one input have different lengths
    - Two columns of one input share a name
    - A column holds values of no supported type

    Examples:
        - "All inputs to bind_rows must be tabular (...) Input 2 is list"
        - "Input 1: Columns have different lengths ('a': 3, 'b': 5)"
    """

    pass


class IncompatibleTypeError(FrameBindError):
    """
    Two columns sharing a name have no common type.

    Aborts the whole bind. Carries the column name and both type tags.

    Examples:
        - "Column 'b' has incompatible type: integer vs factor"
    """

    def __init__(self, column: str, left: str, right: str) -> None:
        self.column = column
        self.left = left
        self.right = right
        super().__init__(f"Column '{column}' has incompatible type: {left} vs {right}")


class ColumnMismatchError(FrameBindError):
    """Column name sets differ while binding with column_mode='strict'."""

    pass


class BindOptionError(FrameBindError):
    """
    Invalid option passed to bind_rows.

    Examples:
        - "Invalid column_mode: 'outer'"
        - "id_column 'source' clashes with an input column"
    """

    pass


class FrameBackendError(FrameBindError):
    """
    DataFrame backend error.

    Raised when:
    - Backend not registered or unavailable
    - Backend dependencies missing
    - A column cannot be represented by the backend

    Examples:
        - "Backend 'polars' not registered. Install with: pip install polars"
        - "Unknown backend: 'spark'. Available: ['pyarrow']"
    """

    pass


class FrameBindWarning(UserWarning):
    """Base class for non-fatal framebind conditions."""

    pass


class FactorLevelMismatchWarning(FrameBindWarning):
    """Factor columns with differing level sets were coerced to character."""

    pass


class ColumnsDroppedWarning(FrameBindWarning):
    """Columns missing from some inputs were dropped (column_mode='intersection')."""

    pass
