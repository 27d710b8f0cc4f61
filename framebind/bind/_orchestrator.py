"""
Main row-binding orchestrator.

Coordinates the bind process:
1. Validation: Normalize arguments, drop nulls, adapt inputs to Frames
2. Preparation: Resolve output column names (column mode)
3. Construction: Per column, resolve the unified type then collect values
4. Finalization: Assemble the Frame and emit held-back warnings
"""

from __future__ import annotations

import warnings
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Any

from framebind._constants import DEFAULT_COLUMN_MODE, ColumnMode
from framebind._exceptions import BindOptionError
from framebind._logging import get_logger
from framebind.bind._collector import ColumnCollector
from framebind.bind._columns import resolve_column_names
from framebind.bind._reconcile import Notice
from framebind.bind._resolver import resolve_column_type
from framebind.bind._validation import (
    BindInput,
    apply_strings_as_factors,
    flatten_arguments,
    validate_inputs,
)
from framebind.column import Column
from framebind.frame import Frame, normalize_name
from framebind.types import TypeTag

logger = get_logger(__name__)


def bind_rows(
    *inputs: Any,
    id_column: str | None = None,
    column_mode: ColumnMode = DEFAULT_COLUMN_MODE,
    strings_as_factors: bool | None = None,
    max_workers: int | None = None,
) -> Frame:
    """
    Stack tables row-wise, matching columns by name.

    Absent columns are filled with NA of the unified type; differing
    column types are unified through the type lattice (numeric widening,
    factor level reconciliation, timezone merge). None inputs are skipped.

    Accepts tables variadically, as one sequence, or as one mapping of
    label -> table; all three produce identical results.

    Args:
        *inputs: Frames, PyArrow Tables, pandas/polars DataFrames, mappings
            of name -> values, records, or None
        id_column: If set, prepend a character column with this name holding
            each row's input label (mapping key or 1-based position)
        column_mode: "fill_missing" (default), "intersection" or "strict"
        strings_as_factors: Read character columns as factors; None uses
            the global default (framebind.strings_as_factors())
        max_workers: Bind columns on a thread pool of this size when > 1

    Returns:
        Frame with the union of column names in first-appearance order and
        the sum of input row counts. Warnings raised are also on .warnings

    Raises:
        InvalidInputError: If any non-null input is not tabular
        IncompatibleTypeError: If a column's types have no common type
        ColumnMismatchError: If column_mode='strict' and names differ
        BindOptionError: If an option value is invalid

    Examples:
        >>> bind_rows({"a": [1, 2]}, {"a": [0.5], "b": ["x"]})
        Frame[3 rows x 2 columns](a: double, b: character)
    """
    items = validate_inputs(flatten_arguments(inputs))

    if strings_as_factors is None:
        from framebind import _STRINGS_AS_FACTORS

        strings_as_factors = _STRINGS_AS_FACTORS

    if strings_as_factors:
        items = [replace(item, frame=apply_strings_as_factors(item.frame)) for item in items]

    if not items:
        logger.debug("No tabular inputs, returning empty frame")
        return Frame()

    names, notices = resolve_column_names(items, mode=column_mode)

    if id_column is not None:
        id_column = normalize_name(id_column)

    if id_column is not None and id_column in names:
        raise BindOptionError(
            f"id_column '{id_column}' clashes with an input column.\n"
            f"Choose a name not in: {names}"
        )

    logger.info(f"Binding {len(items)} inputs ({len(names)} columns)...")

    if max_workers is not None and max_workers > 1 and len(names) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            bound = list(executor.map(lambda name: _bind_column(name, items), names))
    else:
        bound = [_bind_column(name, items) for name in names]

    columns: dict[str, Column] = {}
    if id_column is not None:
        columns[id_column] = _id_column(items)

    for name, (column, column_notices) in zip(names, bound):
        columns[name] = column
        notices.extend(column_notices)

    total_rows = sum(item.frame.num_rows for item in items)
    result = Frame(columns, num_rows=total_rows, warnings=[n.message for n in notices])

    _emit(notices)
    logger.info(f"Bound {len(items)} inputs ({total_rows:,} rows, {len(columns)} columns)")

    return result


def _bind_column(name: str, items: list[BindInput]) -> tuple[Column, tuple[Notice, ...]]:
    """Resolve then collect one output column. Inputs stay in bind order."""
    present = [item.frame[name] if name in item.frame else None for item in items]
    resolution = resolve_column_type(name, present)

    collector = ColumnCollector(name, resolution.column_type)
    for item, column in zip(items, present):
        collector.collect(column, item.frame.num_rows)

    return collector.result(), resolution.notices


def _id_column(items: list[BindInput]) -> Column:
    values: list[str] = []
    for item in items:
        values.extend([item.label] * item.frame.num_rows)
    return Column(TypeTag.CHARACTER, values)


def _emit(notices: list[Notice]) -> None:
    for notice in notices:
        warnings.warn(notice.message, notice.category, stacklevel=3)


def rbind_list(*tables: Any, **options: Any) -> Frame:
    """Variadic alias of bind_rows."""
    return bind_rows(*tables, **options)


def rbind_all(tables: Any, **options: Any) -> Frame:
    """Sequence (or mapping) alias of bind_rows."""
    return bind_rows(tables, **options)
