"""
Pandas backend for BoundDataFrame.

Requires pandas package: pip install pandas
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from framebind._constants import DATAFRAME_DEFAULT_HEAD_ROWS, DATAFRAME_DEFAULT_TAIL_ROWS
from framebind._exceptions import FrameBackendError
from framebind.dataframe.base import BoundDataFrame

if TYPE_CHECKING:
    import pandas as pd

    from framebind.frame import Frame

# Check Pandas availability
try:
    import pandas as pd

    HAS_PANDAS = True
except ImportError:
    HAS_PANDAS = False


def _require_pandas() -> None:
    """Raise FrameBackendError if Pandas is not available."""
    if not HAS_PANDAS:
        raise FrameBackendError(
            "Pandas backend requires pandas package.\n"
            "Install with: pip install pandas"
        )


class BoundDataFramePandas(BoundDataFrame):
    """
    Pandas DataFrame wrapper.

    Factors arrive as Categorical, complex columns as complex128 and
    list columns as object Series. The index is a fresh RangeIndex.

    Usage:
        framebind.use('pandas')
        tdf = result.to_dataframe()
        df = tdf.to_pandas()
    """

    backend_name = "pandas"

    @classmethod
    def from_frame(cls, frame: Frame) -> BoundDataFramePandas:
        _require_pandas()
        return cls(frame.to_pandas())

    def to_frame(self) -> Frame:
        from framebind.frame import Frame

        return Frame.from_pandas(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, key):
        """
        Pandas-style subscripting.

        Returns BoundDataFramePandas if result is DataFrame, otherwise Series/scalar.
        """
        result = self._data[key]
        if isinstance(result, pd.DataFrame):
            return BoundDataFramePandas(result)
        return result

    @property
    def columns(self) -> list[str]:
        return list(self._data.columns)

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape

    def head(self, n: int = DATAFRAME_DEFAULT_HEAD_ROWS) -> pd.DataFrame:
        return self._data.head(n)

    def tail(self, n: int = DATAFRAME_DEFAULT_TAIL_ROWS) -> pd.DataFrame:
        return self._data.tail(n)

    def to_pandas(self) -> pd.DataFrame:
        return self._data
