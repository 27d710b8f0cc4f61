"""
Abstract base class for BoundDataFrame backends.

Each backend (PyArrow, Polars, Pandas) implements this interface
with their native DataFrame APIs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from framebind._constants import DATAFRAME_MAX_REPR_ROWS

if TYPE_CHECKING:
    from framebind.frame import Frame


class BoundDataFrame(ABC):
    """
    Abstract wrapper around a backend-native DataFrame.

    Each backend implements:
    - DataFrame basics (head, tail, subscripting)
    - Properties (columns, shape)
    - Conversion (from_frame classmethod, to_frame, to_native)

    Shared across all backends:
    - bind_rows() stacking onto this frame
    - __repr__ footer
    """

    backend_name: str = ""

    def __init__(self, data: Any):
        """
        Initialize with backend-specific data structure.

        Args:
            data: PyArrow Table, Polars DataFrame, or Pandas DataFrame
        """
        self._data = data

    @classmethod
    @abstractmethod
    def from_frame(cls, frame: Frame) -> BoundDataFrame:
        """Convert a Frame to this backend."""
        pass

    @abstractmethod
    def to_frame(self) -> Frame:
        """Convert the native data back to a Frame."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        """Number of rows."""
        pass

    @abstractmethod
    def __getitem__(self, key):
        """Subscripting (row/column access)."""
        pass

    @property
    @abstractmethod
    def columns(self) -> list[str]:
        """Column names."""
        pass

    @property
    @abstractmethod
    def shape(self) -> tuple[int, int]:
        """Shape tuple: (rows, columns)."""
        pass

    @abstractmethod
    def head(self, n: int):
        """First n rows."""
        pass

    @abstractmethod
    def tail(self, n: int):
        """Last n rows."""
        pass

    def to_native(self) -> Any:
        """The wrapped backend object."""
        return self._data

    def __repr__(self) -> str:
        base_repr = str(self.head(DATAFRAME_MAX_REPR_ROWS))
        total_rows = len(self)
        if total_rows > DATAFRAME_MAX_REPR_ROWS:
            info = f"\n[BoundDataFrame: {total_rows} rows (showing first {DATAFRAME_MAX_REPR_ROWS}), backend={self.backend_name}]"
        else:
            info = f"\n[BoundDataFrame: {total_rows} rows, backend={self.backend_name}]"
        return base_repr + info

    def bind_rows(self, *others: Any, **options: Any) -> BoundDataFrame:
        """
        Stack other tables under this one, staying in this backend.

        This method is SHARED - same logic for all backends.
        """
        from framebind.bind import bind_rows

        result = bind_rows(self.to_frame(), *others, **options)
        return self.__class__.from_frame(result)
