"""
Input validation for bind_rows.

Validates:
- Calling convention (variadic, single sequence, or mapping of tables)
- Every non-null element is table-like
- Each table is internally consistent (equal lengths, unique names)

Produces the list of BindInput records the rest of the pipeline works on.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import pyarrow as pa

from framebind._exceptions import InvalidInputError
from framebind._logging import get_logger
from framebind.column import Column
from framebind.frame import Frame, is_record
from framebind.types import TypeTag

logger = get_logger(__name__)


@dataclass(frozen=True)
class BindInput:
    """One non-null input with its label and position in the caller's sequence."""

    label: str
    position: int
    frame: Frame


@dataclass(frozen=True)
class _Record:
    fields: Mapping[Any, Any]


def flatten_arguments(args: tuple[Any, ...]) -> list[tuple[str, Any]]:
    """
    Normalize the calling convention into (label, candidate) pairs.

    bind_rows(a, b)          -> [("1", a), ("2", b)]
    bind_rows([a, b])        -> [("1", a), ("2", b)]
    bind_rows({"x": a, ...}) -> [("x", a), ...]

    A lone list of records ([{"x": 1}, {"x": 2}]) is a sequence of one-row tables.
    Once any mapping in the list holds a scalar, every mapping in it is a record,
    so sequence values ({"x": 1, "y": [1, 2]}) are list payloads of that row.
    """
    if len(args) == 1:
        (only,) = args
        if _is_named_tables(only):
            return [(str(key), value) for key, value in only.items()]
        if isinstance(only, (list, tuple)):
            if any(is_record(value) for value in only):
                only = [_Record(value) if isinstance(value, Mapping) else value for value in only]
            return [(str(i), value) for i, value in enumerate(only, 1)]

    return [(str(i), value) for i, value in enumerate(args, 1)]


def validate_inputs(candidates: list[tuple[str, Any]]) -> list[BindInput]:
    """
    Drop None entries and adapt the rest to Frames.

    Raises:
        InvalidInputError: If any non-null candidate is not table-like
    """
    inputs: list[BindInput] = []
    for position, (label, candidate) in enumerate(candidates):
        if candidate is None:
            logger.debug(f"Skipping null input {label}")
            continue
        inputs.append(BindInput(label=label, position=position, frame=as_frame(candidate, label)))
    return inputs


def as_frame(candidate: Any, label: str = "1") -> Frame:
    """
    Adapt one table-like value to a Frame.

    Args:
        candidate: The value to adapt
        label: Name used for the input in error messages (1-based position or mapping key)

    Raises:
        InvalidInputError: If the value is not table-like or is malformed
    """
    if isinstance(candidate, Frame):
        return candidate

    if isinstance(candidate, _Record):
        try:
            return Frame.from_records([candidate.fields])
        except InvalidInputError as e:
            raise InvalidInputError(f"Input {label}: {e}") from e

    if isinstance(candidate, (pa.Table, pa.RecordBatch)):
        return Frame.from_arrow(candidate)

    module = type(candidate).__module__.split(".")[0]
    type_name = type(candidate).__name__

    if module == "pandas" and type_name == "DataFrame":
        return Frame.from_pandas(candidate)

    if module == "polars" and type_name == "DataFrame":
        return Frame.from_polars(candidate)

    if isinstance(candidate, Mapping):
        try:
            return Frame.from_pydict(candidate)
        except InvalidInputError as e:
            raise InvalidInputError(f"Input {label}: {e}") from e

    raise InvalidInputError(
        f"All inputs to bind_rows must be tabular (a Frame, PyArrow Table, pandas or "
        f"polars DataFrame, or a mapping of column names to values).\n"
        f"Input {label} is {type_name}"
    )


def apply_strings_as_factors(frame: Frame) -> Frame:
    """Legacy policy: read every character column as a factor with sorted levels."""
    if not any(column.tag is TypeTag.CHARACTER for column in frame.columns.values()):
        return frame

    columns: dict[str, Column] = {}
    for name, column in frame.columns.items():
        if column.tag is TypeTag.CHARACTER:
            levels = sorted({v for v in column.values if v is not None})
            index = {level: code for code, level in enumerate(levels)}
            column = Column(
                TypeTag.FACTOR,
                [None if v is None else index[v] for v in column.values],
                levels=levels,
            )
        columns[name] = column
    return Frame(columns, num_rows=frame.num_rows)


def _is_named_tables(value: Any) -> bool:
    """A mapping whose values are all tables (or None), not a column mapping."""
    if not isinstance(value, Mapping) or not value:
        return False
    values = list(value.values())
    return any(_is_table_object(v) for v in values) and all(
        v is None or _is_table_object(v) for v in values
    )


def _is_table_object(value: Any) -> bool:
    if isinstance(value, (Frame, pa.Table, pa.RecordBatch)):
        return True
    module = type(value).__module__.split(".")[0]
    return module in ("pandas", "polars") and type(value).__name__ == "DataFrame"

