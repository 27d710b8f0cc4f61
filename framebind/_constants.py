"""
Global constants for framebind.

Organized by: DataFrame Backend, Column Modes, Type Tags, Messages, DataFrame Limits.
"""

from typing import Literal

# DataFrame Backend Configuration
DataFrameBackend = Literal["pyarrow", "polars", "pandas"]
"""Valid DataFrame backend types."""

DEFAULT_DATAFRAME_BACKEND: DataFrameBackend = "pyarrow"
"""Default DataFrame backend used by Frame.to_dataframe()."""

AVAILABLE_BACKENDS: tuple[DataFrameBackend, ...] = ("pyarrow", "polars", "pandas")
"""All supported DataFrame backends (registered or not)."""


# Column Modes
ColumnMode = Literal["fill_missing", "intersection", "strict"]
"""Strategies for reconciling column name sets across inputs."""

DEFAULT_COLUMN_MODE: ColumnMode = "fill_missing"
"""Union of all names, absent columns filled with typed NA."""

VALID_COLUMN_MODES: tuple[ColumnMode, ...] = ("fill_missing", "intersection", "strict")


# Legacy stringification policy
DEFAULT_STRINGS_AS_FACTORS = False
"""
When True, character input columns are read as factors with sorted levels.

Off by default: an all-NA column bound with text stays text.
"""


# Arrow interop
COMPLEX_FIELD_METADATA_KEY = b"framebind.type"
"""Field metadata key marking a struct<real, imag> column as complex."""

COMPLEX_FIELD_METADATA_VALUE = b"complex"

DATETIME_UNIT = "us"
"""Datetime instants are stored as integer microseconds since epoch."""


# Messages
FACTOR_LEVELS_MESSAGE = "Unequal factor levels: coercing to character"
"""Warning text when factor level sets differ (matched by callers)."""


# DataFrame Limits
DATAFRAME_DEFAULT_HEAD_ROWS = 5
"""Default number of rows for .head()"""

DATAFRAME_DEFAULT_TAIL_ROWS = 5
"""Default number of rows for .tail()"""

DATAFRAME_MAX_REPR_ROWS = 100
"""Maximum rows to display in BoundDataFrame.__repr__()"""
