import importlib.metadata as _metadata
import logging

from framebind._constants import (
    DEFAULT_DATAFRAME_BACKEND,
    DEFAULT_STRINGS_AS_FACTORS,
    DataFrameBackend,
)
from framebind._exceptions import (
    BindOptionError,
    ColumnMismatchError,
    ColumnsDroppedWarning,
    FactorLevelMismatchWarning,
    FrameBackendError,
    FrameBindError,
    FrameBindWarning,
    IncompatibleTypeError,
    InvalidInputError,
)
from framebind._logging import disable_logging, setup_basic_logging
from framebind.bind import bind_rows, rbind_all, rbind_list
from framebind.column import Column
from framebind.dataframe.base import BoundDataFrame
from framebind.frame import Frame
from framebind.types import ColumnType, TypeTag, join_tags

__version__ = _metadata.version("framebind")

# Global DataFrame backend configuration
_DATAFRAME_BACKEND: DataFrameBackend = DEFAULT_DATAFRAME_BACKEND

# Global legacy stringification policy
_STRINGS_AS_FACTORS: bool = DEFAULT_STRINGS_AS_FACTORS


def use(backend: str):
    """
    Set the global DataFrame backend for Frame.to_dataframe().

    Available backends:
        - 'pyarrow': Default, no extra dependencies
        - 'polars': Requires polars package
        - 'pandas': Requires pandas package

    Args:
        backend: Backend name to use

    Raises:
        FrameBackendError: If backend is unknown or not installed

    Warning - Thread Safety:
        This function modifies a global variable and is NOT thread-safe.
        Pass backend explicitly to Frame.to_dataframe(backend=...) instead
        when binding from several threads.

    Examples:
        >>> import framebind
        >>> framebind.use('pandas')
        >>> framebind.bind_rows(t1, t2).to_dataframe()  # BoundDataFramePandas
    """
    global _DATAFRAME_BACKEND

    from framebind.dataframe import get_available_backends

    available = get_available_backends()

    if backend not in available:
        raise FrameBackendError(
            f"Unknown backend: '{backend}'\n"
            f"Available backends: {available}\n"
            f"\n"
            f"To use additional backends, install required packages:\n"
            f"  pip install polars  # For Polars backend\n"
            f"  pip install pandas  # For Pandas backend"
        )

    _DATAFRAME_BACKEND = backend  # type: ignore[assignment]


def get_backend() -> DataFrameBackend:
    """
    Get the current global DataFrame backend.

    Example:
        >>> import framebind
        >>> framebind.get_backend()
        'pyarrow'
    """
    return _DATAFRAME_BACKEND


def strings_as_factors(flag=None) -> bool:
    """
    Get or set the default legacy stringification policy.

    When enabled, bind_rows() reads every character column as a factor
    whose levels are its sorted distinct values, so an all-NA column bound
    with text yields a factor. Disabled by default.

    Args:
        flag: True/False to set, None to only read

    Returns:
        The policy in effect after the call

    Example:
        >>> framebind.strings_as_factors(True)
        True
        >>> framebind.bind_rows({"x": ["foo", "bar"]}, {"x": [None]})["x"].tag
        <TypeTag.FACTOR: 'factor'>
    """
    global _STRINGS_AS_FACTORS

    if flag is not None:
        if not isinstance(flag, bool):
            raise ValueError(f"strings_as_factors expects True, False or None, got {flag!r}")
        _STRINGS_AS_FACTORS = flag

    return _STRINGS_AS_FACTORS


def verbose(level=True):
    """
    Enable/disable verbose logging for framebind operations.

    Args:
        level: Logging level to enable:
            - True or "info": Show INFO and above (default)
            - "debug": Show DEBUG and above (resolved column types, skipped nulls)
            - False: Disable all logging

    Example:
        >>> import framebind
        >>> framebind.verbose("debug")
        >>> framebind.verbose(False)
    """
    if level is False:
        disable_logging()
    elif level is True or level == "info":
        setup_basic_logging(level=logging.INFO)
    elif level == "debug":
        setup_basic_logging(level=logging.DEBUG)
    else:
        raise ValueError(
            f"Invalid verbose level: {level}. " "Use True, 'info', 'debug', or False."
        )


__all__ = [
    "BindOptionError",
    "BoundDataFrame",
    "Column",
    "ColumnMismatchError",
    "ColumnType",
    "ColumnsDroppedWarning",
    "FactorLevelMismatchWarning",
    "Frame",
    "FrameBackendError",
    "FrameBindError",
    "FrameBindWarning",
    "IncompatibleTypeError",
    "InvalidInputError",
    "TypeTag",
    "bind_rows",
    "get_backend",
    "join_tags",
    "rbind_all",
    "rbind_list",
    "strings_as_factors",
    "use",
    "verbose",
]
