"""
DataFrame backend registry and factory.

Provides centralized backend registration and creation of BoundDataFrame
instances. Frame.to_dataframe() uses create_dataframe() to remain
backend-agnostic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from framebind._constants import AVAILABLE_BACKENDS, DataFrameBackend
from framebind._exceptions import FrameBackendError

# Re-export base class for type hints and isinstance checks
from framebind.dataframe.base import BoundDataFrame

if TYPE_CHECKING:
    from framebind.frame import Frame


class BackendFactory(Protocol):
    """Protocol for backend factory functions."""

    def __call__(self, frame: Frame) -> BoundDataFrame:
        """Create BoundDataFrame from a Frame."""
        ...


# Backend registry: name -> factory function
_BACKENDS: dict[DataFrameBackend, BackendFactory] = {}


def register_backend(name: DataFrameBackend, factory_fn: BackendFactory) -> None:
    """
    Register a DataFrame backend.

    Args:
        name: Backend name from DataFrameBackend literal
        factory_fn: Factory function that takes a Frame -> BoundDataFrame

    Example:
        from .pyarrow import BoundDataFrameArrow
        register_backend('pyarrow', BoundDataFrameArrow.from_frame)
    """
    _BACKENDS[name] = factory_fn


def create_dataframe(backend: str, frame: Frame) -> BoundDataFrame:
    """
    Factory function to create a BoundDataFrame from a Frame.

    Args:
        backend: Backend name ("pyarrow", "polars", "pandas")
        frame: Frame to wrap

    Returns:
        Backend-specific BoundDataFrame instance

    Raises:
        FrameBackendError: If backend is not registered or unknown
    """
    if backend not in AVAILABLE_BACKENDS:
        raise FrameBackendError(
            f"Unknown backend: '{backend}'\n"
            f"Available backends: {AVAILABLE_BACKENDS}\n"
            f"\n"
            f"To use additional backends, install required packages:\n"
            f"  pip install polars  # For Polars backend\n"
            f"  pip install pandas  # For Pandas backend"
        )

    if backend not in _BACKENDS:
        raise FrameBackendError(
            f"Backend '{backend}' is not registered.\n"
            f"Registered backends: {list(_BACKENDS.keys())}\n"
            f"\n"
            f"The backend may require additional dependencies:\n"
            f"  pip install {backend}"
        )

    factory = _BACKENDS[backend]  # type: ignore[index]
    return factory(frame)


def get_available_backends() -> list[DataFrameBackend]:
    """Registered backend names."""
    return list(_BACKENDS.keys())


def _register_all_backends() -> None:
    """Register backends whose packages are importable."""
    from framebind.dataframe.pyarrow import BoundDataFrameArrow

    register_backend("pyarrow", BoundDataFrameArrow.from_frame)

    from framebind.dataframe.polars import HAS_POLARS, BoundDataFramePolars

    if HAS_POLARS:
        register_backend("polars", BoundDataFramePolars.from_frame)

    from framebind.dataframe.pandas import HAS_PANDAS, BoundDataFramePandas

    if HAS_PANDAS:
        register_backend("pandas", BoundDataFramePandas.from_frame)


# Auto-register on module import
_register_all_backends()

__all__ = [
    "BoundDataFrame",
    "create_dataframe",
    "get_available_backends",
    "register_backend",
]
