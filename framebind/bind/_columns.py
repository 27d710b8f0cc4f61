"""
Column name resolution across inputs.

Handles three column modes:
- fill_missing: Keep all names, fill absent columns with typed NA (DEFAULT)
- intersection: Keep only names present in every input
- strict: Fail if name sets differ

Output order is always first appearance across the input sequence; the
column order inside any single input never matters beyond that.
"""

from framebind._constants import DEFAULT_COLUMN_MODE, VALID_COLUMN_MODES, ColumnMode
from framebind._exceptions import (
    BindOptionError,
    ColumnMismatchError,
    ColumnsDroppedWarning,
)
from framebind._logging import get_logger
from framebind.bind._reconcile import Notice
from framebind.bind._validation import BindInput

logger = get_logger(__name__)


def resolve_column_names(
    inputs: list[BindInput], mode: ColumnMode = DEFAULT_COLUMN_MODE
) -> tuple[list[str], list[Notice]]:
    """
    Compute the output column names.

    Args:
        inputs: Non-null inputs in bind order
        mode: Column handling strategy:
            - "fill_missing": Union, absent columns NA-filled (DEFAULT)
            - "intersection": Only names common to all inputs
            - "strict": Fail if name sets differ

    Returns:
        Output column names in first-appearance order, plus warnings to
        emit once the bind succeeds

    Raises:
        BindOptionError: If invalid column mode specified
        ColumnMismatchError: If strict mode finds differing name sets
    """
    if mode not in VALID_COLUMN_MODES:
        raise BindOptionError(
            f"Invalid column_mode: '{mode}'\n"
            f"Valid options: 'fill_missing' (default), 'intersection', 'strict'"
        )

    column_sets = [set(item.frame.column_names) for item in inputs]
    common_cols, all_cols = _compute_column_lists(inputs)

    if mode == "strict":
        _handle_strict_mode(inputs, column_sets, common_cols, all_cols)
        return all_cols, []

    if mode == "intersection":
        notice = _handle_intersection_mode(inputs, column_sets, common_cols, all_cols)
        return common_cols, [notice] if notice else []

    _log_fill_missing(inputs, column_sets, common_cols, all_cols)
    return all_cols, []


def _compute_column_lists(inputs: list[BindInput]) -> tuple[list[str], list[str]]:
    """Common and union name lists, both in first-appearance order."""
    all_cols: list[str] = []
    seen: set[str] = set()
    for item in inputs:
        for name in item.frame.column_names:
            if name not in seen:
                seen.add(name)
                all_cols.append(name)

    common_cols = [
        name for name in all_cols if all(name in item.frame for item in inputs)
    ]
    return common_cols, all_cols


def _handle_strict_mode(
    inputs: list[BindInput],
    column_sets: list[set[str]],
    common_cols: list[str],
    all_cols: list[str],
) -> None:
    """Raise if any input's name set differs from the others."""
    if len(set(map(frozenset, column_sets))) <= 1:
        return

    per_input = [
        f"  Input {item.label}: {sorted(cols)}" for item, cols in zip(inputs, column_sets)
    ]
    raise ColumnMismatchError(
        f"Cannot bind in strict mode: column names differ\n"
        f"\n"
        f"Columns per input:\n" + "\n".join(per_input) + "\n"
        f"\n"
        f"Only in some inputs: {sorted(set(all_cols) - set(common_cols))}\n"
        f"Common to all: {sorted(common_cols)}\n"
        f"\n"
        f"Solutions:\n"
        f"  1. Use column_mode='fill_missing' (default) to fill absent columns with NA\n"
        f"  2. Use column_mode='intersection' to keep only common columns"
    )


def _handle_intersection_mode(
    inputs: list[BindInput],
    column_sets: list[set[str]],
    common_cols: list[str],
    all_cols: list[str],
) -> Notice | None:
    """Describe dropped columns in intersection mode."""
    dropped = [name for name in all_cols if name not in common_cols]
    if not dropped:
        return None

    details = []
    for name in dropped:
        sources = [item.label for item, cols in zip(inputs, column_sets) if name in cols]
        details.append(f"  - '{name}' (only in input(s) {sources})")

    message = (
        f"\n"
        f"bind_rows() dropped {len(dropped)} column(s)\n"
        f"\n"
        f"Reason: Using column_mode='intersection'\n"
        f"        Only columns present in ALL inputs are kept.\n"
        f"\n"
        f"Dropped columns:\n" + "\n".join(details) + "\n"
        f"\n"
        f"Kept columns ({len(common_cols)}): {common_cols}\n"
        f"\n"
        f"To keep all columns (fill absent ones with NA):\n"
        f"   bind_rows([t1, t2], column_mode='fill_missing')"
    )
    return Notice(ColumnsDroppedWarning, message)


def _log_fill_missing(
    inputs: list[BindInput],
    column_sets: list[set[str]],
    common_cols: list[str],
    all_cols: list[str],
) -> None:
    """NA-filling is expected behavior: log it, never warn."""
    if len(common_cols) == len(all_cols):
        return

    for name in all_cols:
        if name in common_cols:
            continue
        gaps = [item.label for item, cols in zip(inputs, column_sets) if name not in cols]
        logger.debug(f"Column '{name}' absent from input(s) {gaps}, filling with NA")
