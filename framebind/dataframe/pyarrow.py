"""
PyArrow backend for BoundDataFrame.

Default backend, no extra dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pyarrow as pa

from framebind._constants import DATAFRAME_DEFAULT_HEAD_ROWS, DATAFRAME_DEFAULT_TAIL_ROWS
from framebind.dataframe.base import BoundDataFrame

if TYPE_CHECKING:
    from framebind.frame import Frame


class BoundDataFrameArrow(BoundDataFrame):
    """
    PyArrow Table wrapper.

    Usage:
        tdf = result.to_dataframe("pyarrow")
        table = tdf.to_arrow()
    """

    backend_name = "pyarrow"

    @classmethod
    def from_frame(cls, frame: Frame) -> BoundDataFrameArrow:
        return cls(frame.to_arrow())

    def to_frame(self) -> Frame:
        from framebind.frame import Frame

        return Frame.from_arrow(self._data)

    def __len__(self) -> int:
        return self._data.num_rows

    def __getitem__(self, key):
        """Standard PyArrow Table subscripting."""
        return self._data[key]

    @property
    def columns(self) -> list[str]:
        return self._data.column_names

    @property
    def shape(self) -> tuple[int, int]:
        return (self._data.num_rows, self._data.num_columns)

    def head(self, n: int = DATAFRAME_DEFAULT_HEAD_ROWS) -> pa.Table:
        return self._data.slice(0, min(n, self._data.num_rows))

    def tail(self, n: int = DATAFRAME_DEFAULT_TAIL_ROWS) -> pa.Table:
        start = max(0, self._data.num_rows - n)
        return self._data.slice(start)

    def to_arrow(self) -> pa.Table:
        return self._data
