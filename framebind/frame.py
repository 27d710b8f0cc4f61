"""
Frame - the canonical in-memory table.

An ordered set of uniquely named Columns sharing one row count. bind_rows
returns a Frame; Frame also adapts the table-like structures bind_rows
accepts (PyArrow, pandas, polars, mappings, records) and exports back to
them.

Row labels are never stored: a Frame always exposes fresh positions 1..N.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any

import pyarrow as pa

from framebind._arrow import column_from_arrow, column_to_arrow
from framebind._exceptions import FrameBackendError, InvalidInputError
from framebind.column import Column
from framebind.types import TypeTag

if TYPE_CHECKING:
    import pandas as pd
    import polars as pl

    from framebind.dataframe.base import BoundDataFrame


def normalize_name(name: Any) -> str:
    """
    Column name as matched across inputs.

    bytes are decoded as UTF-8 and text is NFC-normalized, so names that
    spell the same characters match whatever their encoding.
    """
    if isinstance(name, bytes):
        name = name.decode("utf-8")
    elif not isinstance(name, str):
        name = str(name)
    return unicodedata.normalize("NFC", name)


class Frame:
    """
    Ordered, named, equal-length Columns.

    Usage:
        frame = Frame({"a": Column.from_values([1, 2])})
        frame = Frame.from_pydict({"a": [1, 2], "b": ["x", "y"]})
        frame["a"].values   # (1, 2)
        frame.to_arrow()
    """

    def __init__(
        self,
        columns: Mapping[Any, Column] | None = None,
        num_rows: int | None = None,
        warnings: Sequence[str] = (),
    ) -> None:
        """
        Args:
            columns: name -> Column, in output order
            num_rows: row count; required only for a frame with rows and no columns
            warnings: messages recorded while this frame was produced

        Raises:
            InvalidInputError: If names collide or column lengths differ
        """
        self._columns: dict[str, Column] = {}
        for raw_name, column in (columns or {}).items():
            name = normalize_name(raw_name)
            if name in self._columns:
                raise InvalidInputError(f"Duplicate column name '{name}'")
            if not isinstance(column, Column):
                raise InvalidInputError(
                    f"Column '{name}' must be a Column, got {type(column).__name__}"
                )
            self._columns[name] = column

        lengths = {len(c) for c in self._columns.values()}
        if len(lengths) > 1:
            detail = ", ".join(f"'{n}': {len(c)}" for n, c in self._columns.items())
            raise InvalidInputError(f"Columns have different lengths ({detail})")

        if lengths:
            (length,) = lengths
            if num_rows is not None and num_rows != length:
                raise InvalidInputError(f"num_rows={num_rows} but columns have {length} rows")
            num_rows = length

        if num_rows is not None and num_rows < 0:
            raise InvalidInputError(f"num_rows must be >= 0, got {num_rows}")

        self._num_rows = num_rows or 0
        self._warnings = tuple(warnings)

    # Shape and access

    @property
    def column_names(self) -> list[str]:
        return list(self._columns)

    @property
    def columns(self) -> dict[str, Column]:
        return dict(self._columns)

    @property
    def num_rows(self) -> int:
        return self._num_rows

    @property
    def num_columns(self) -> int:
        return len(self._columns)

    @property
    def shape(self) -> tuple[int, int]:
        return (self._num_rows, len(self._columns))

    @property
    def row_positions(self) -> range:
        """Default 1-based row positions."""
        return range(1, self._num_rows + 1)

    @property
    def warnings(self) -> tuple[str, ...]:
        """Warnings raised while binding this frame."""
        return self._warnings

    def types(self) -> dict[str, TypeTag]:
        return {name: column.tag for name, column in self._columns.items()}

    def __len__(self) -> int:
        return self._num_rows

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __contains__(self, name: object) -> bool:
        return normalize_name(name) in self._columns

    def __getitem__(self, name: Any) -> Column:
        key = normalize_name(name)
        if key not in self._columns:
            raise KeyError(f"Column '{key}' not found. Available: {self.column_names}")
        return self._columns[key]

    def __repr__(self) -> str:
        cols = ", ".join(f"{n}: {c.type}" for n, c in self._columns.items())
        return f"Frame[{self._num_rows} rows x {len(self._columns)} columns]({cols})"

    def equals(self, other: object) -> bool:
        """Same names in the same order, same row count, equal columns."""
        if not isinstance(other, Frame):
            return False
        if self.shape != other.shape or self.column_names != other.column_names:
            return False
        return all(self._columns[n].equals(other._columns[n]) for n in self._columns)

    # Export

    def to_pydict(self) -> dict[str, list[Any]]:
        return {name: column.to_pylist() for name, column in self._columns.items()}

    def to_pylist(self) -> list[dict[str, Any]]:
        """Rows as records."""
        data = self.to_pydict()
        return [{name: data[name][i] for name in data} for i in range(self._num_rows)]

    def to_arrow(self) -> pa.Table:
        """
        Export as a PyArrow Table.

        Raises:
            FrameBackendError: If a list_column cannot be typed by Arrow
        """
        if not self._columns:
            # Arrow cannot keep a row count without columns
            return pa.table({})

        fields = []
        arrays = []
        for name, column in self._columns.items():
            field, array = column_to_arrow(name, column)
            fields.append(field)
            arrays.append(array)
        return pa.Table.from_arrays(arrays, schema=pa.schema(fields))

    def to_pandas(self) -> pd.DataFrame:
        """
        Export as a pandas DataFrame with a default RangeIndex.

        Factors become Categorical, complex stays complex128, list columns
        keep their payloads as objects.
        """
        _require_pandas()

        data: dict[str, Any] = {}
        for name, column in self._columns.items():
            data[name] = _column_to_pandas(column)
        return pd.DataFrame(data, index=pd.RangeIndex(self._num_rows))

    def to_polars(self) -> pl.DataFrame:
        """Export as a polars DataFrame (via Arrow)."""
        _require_polars()
        return pl.from_arrow(self.to_arrow())

    def to_dataframe(self, backend: str | None = None) -> BoundDataFrame:
        """
        Wrap in a backend DataFrame.

        Args:
            backend: "pyarrow", "pandas" or "polars"; None uses framebind.use()
        """
        from framebind.dataframe import create_dataframe

        if backend is None:
            from framebind import _DATAFRAME_BACKEND

            backend = _DATAFRAME_BACKEND

        return create_dataframe(backend, self)

    # Construction

    @classmethod
    def from_arrow(cls, table: pa.Table | pa.RecordBatch) -> Frame:
        """Adapt a PyArrow Table or RecordBatch."""
        if isinstance(table, pa.RecordBatch):
            table = pa.Table.from_batches([table])
        table = table.unify_dictionaries()

        columns: dict[str, Column] = {}
        for field, data in zip(table.schema, table.columns):
            name = normalize_name(field.name)
            if name in columns:
                raise InvalidInputError(f"Duplicate column name '{name}'")
            columns[name] = column_from_arrow(name, data, field)
        return cls(columns, num_rows=table.num_rows)

    @classmethod
    def from_pandas(cls, df: pd.DataFrame) -> Frame:
        """
        Adapt a pandas DataFrame. The index is discarded.

        Categorical -> factor/ordered_factor, complex -> complex, object
        columns holding lists/dicts -> list_column, the rest via Arrow.
        """
        _require_pandas()

        columns: dict[str, Column] = {}
        for raw_name in df.columns:
            name = normalize_name(raw_name)
            if name in columns:
                raise InvalidInputError(f"Duplicate column name '{name}'")
            columns[name] = _column_from_pandas(name, df[raw_name])
        return cls(columns, num_rows=len(df))

    @classmethod
    def from_polars(cls, df: pl.DataFrame) -> Frame:
        """Adapt a polars DataFrame (via Arrow)."""
        _require_polars()
        return cls.from_arrow(df.to_arrow())

    @classmethod
    def from_pydict(cls, data: Mapping[Any, Any]) -> Frame:
        """
        Adapt a mapping of name -> values.

        Values may be Columns, sequences (types inferred), or array-likes
        with .tolist(). A mapping whose values are all scalars is one row.
        """
        if data and all(_is_scalar(v) for v in data.values()):
            return cls.from_records([data])

        columns: dict[str, Column] = {}
        for raw_name, values in data.items():
            name = normalize_name(raw_name)
            if name in columns:
                raise InvalidInputError(f"Duplicate column name '{name}'")
            if isinstance(values, Column):
                columns[name] = values
            elif _is_scalar(values):
                raise InvalidInputError(
                    f"Column '{name}' is a scalar while other columns are sequences"
                )
            else:
                if hasattr(values, "tolist"):
                    values = values.tolist()
                columns[name] = Column.from_values(values)
        return cls(columns)

    @classmethod
    def from_records(cls, records: Sequence[Mapping[Any, Any]]) -> Frame:
        """Adapt row records; keys missing from a record are NA."""
        names: list[str] = []
        rows: list[dict[str, Any]] = []
        for record in records:
            row = {}
            for raw_name, value in record.items():
                name = normalize_name(raw_name)
                if name in row:
                    raise InvalidInputError(f"Duplicate column name '{name}' in record")
                row[name] = value
                if name not in names:
                    names.append(name)
            rows.append(row)

        columns = {name: Column.from_values(row.get(name) for row in rows) for name in names}
        return cls(columns, num_rows=len(rows))


def is_record(data: Any) -> bool:
    """A mapping holding at least one scalar value reads as a single row."""
    return isinstance(data, Mapping) and any(_is_scalar(v) for v in data.values())


def _is_scalar(value: Any) -> bool:
    if isinstance(value, (str, bytes)):
        return True
    if isinstance(value, (Column, Mapping)):
        return False
    return not (isinstance(value, Sequence) or hasattr(value, "tolist") or hasattr(value, "__iter__"))


# pandas / polars availability
try:
    import pandas as pd

    HAS_PANDAS = True
except ImportError:
    HAS_PANDAS = False

try:
    import polars as pl

    HAS_POLARS = True
except ImportError:
    HAS_POLARS = False


def _require_pandas() -> None:
    if not HAS_PANDAS:
        raise FrameBackendError(
            "pandas support requires the pandas package.\n"
            "Install with: pip install pandas"
        )


def _require_polars() -> None:
    if not HAS_POLARS:
        raise FrameBackendError(
            "polars support requires the polars package.\n"
            "Install with: pip install polars"
        )


def _column_from_pandas(name: str, series: pd.Series) -> Column:
    dtype = series.dtype

    if isinstance(dtype, pd.CategoricalDtype):
        levels = [str(level) for level in dtype.categories]
        codes = [None if code < 0 else int(code) for code in series.cat.codes]
        tag = TypeTag.ORDERED_FACTOR if dtype.ordered else TypeTag.FACTOR
        return Column(tag, codes, levels=levels)

    if dtype.kind == "c":
        return Column(
            TypeTag.COMPLEX,
            [None if pd.isna(v) else complex(v) for v in series.tolist()],
        )

    if dtype == object:
        values = series.tolist()
        if any(isinstance(v, (list, tuple, dict, set)) for v in values):
            return Column(TypeTag.LIST_COLUMN, [None if _is_missing(v) else v for v in values])

    try:
        array = pa.array(series, from_pandas=True)
    except (pa.ArrowInvalid, pa.ArrowTypeError) as e:
        raise InvalidInputError(f"Column '{name}' has unsupported pandas dtype {dtype}: {e}") from e
    return column_from_arrow(name, array)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and value != value


def _column_to_pandas(column: Column) -> Any:
    tag = column.tag

    if tag.is_factor:
        return pd.Categorical.from_codes(
            [-1 if code is None else code for code in column.values],
            categories=list(column.levels or ()),
            ordered=column.ordered,
        )

    if tag is TypeTag.COMPLEX:
        return pd.Series(
            [complex("nan+nanj") if v is None else v for v in column.values],
            dtype="complex128",
        )

    if tag is TypeTag.LIST_COLUMN:
        return pd.Series(list(column.values), dtype=object)

    _, array = column_to_arrow("_", column)
    return array.to_pandas()
