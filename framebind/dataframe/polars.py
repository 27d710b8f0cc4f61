"""
Polars backend for BoundDataFrame.

Requires polars package: pip install polars
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from framebind._constants import DATAFRAME_DEFAULT_HEAD_ROWS, DATAFRAME_DEFAULT_TAIL_ROWS
from framebind._exceptions import FrameBackendError
from framebind.dataframe.base import BoundDataFrame

if TYPE_CHECKING:
    import polars as pl

    from framebind.frame import Frame

# Check Polars availability
try:
    import polars as pl

    HAS_POLARS = True
except ImportError:
    HAS_POLARS = False


def _require_polars() -> None:
    """Raise FrameBackendError if Polars is not available."""
    if not HAS_POLARS:
        raise FrameBackendError(
            "Polars backend requires polars package.\n"
            "Install with: pip install polars"
        )


class BoundDataFramePolars(BoundDataFrame):
    """
    Polars DataFrame wrapper.

    Usage:
        framebind.use('polars')
        tdf = result.to_dataframe()
        df = tdf.to_polars()
    """

    backend_name = "polars"

    @classmethod
    def from_frame(cls, frame: Frame) -> BoundDataFramePolars:
        _require_polars()
        return cls(frame.to_polars())

    def to_frame(self) -> Frame:
        from framebind.frame import Frame

        return Frame.from_polars(self._data)

    def __len__(self) -> int:
        return self._data.height

    def __getitem__(self, key):
        """Polars subscripting; DataFrame results stay wrapped."""
        result = self._data[key]
        if isinstance(result, pl.DataFrame):
            return BoundDataFramePolars(result)
        return result

    @property
    def columns(self) -> list[str]:
        return self._data.columns

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape

    def head(self, n: int = DATAFRAME_DEFAULT_HEAD_ROWS) -> pl.DataFrame:
        return self._data.head(n)

    def tail(self, n: int = DATAFRAME_DEFAULT_TAIL_ROWS) -> pl.DataFrame:
        return self._data.tail(n)

    def to_polars(self) -> pl.DataFrame:
        return self._data
