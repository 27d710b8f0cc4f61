"""
Type promotion for one output column.

A sequential fold over the inputs in bind order. State is the running tag,
the factor/character facts and the running timezone; absent inputs leave
the state untouched. An undefined join aborts the whole bind.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from framebind._exceptions import IncompatibleTypeError
from framebind._logging import get_logger
from framebind.bind._reconcile import (
    FactorState,
    Notice,
    merge_factor_levels,
    merge_timezone,
    record_character_values,
    settle_factor_type,
)
from framebind.column import Column
from framebind.types import ColumnType, TypeTag, join_tags

logger = get_logger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Unified type for a column name plus the warnings produced on the way."""

    column_type: ColumnType
    notices: tuple[Notice, ...] = ()


def resolve_column_type(name: str, columns: Sequence[Column | None]) -> Resolution:
    """
    Unify the types of every input's column called `name`.

    Args:
        name: Output column name (for messages)
        columns: One entry per input in bind order, None where absent

    Returns:
        Resolution with the unified ColumnType and any held-back warnings

    Raises:
        IncompatibleTypeError: If two present columns have no common type
    """
    running = TypeTag.NA_ONLY
    factors = FactorState()
    tzone: str | None = None
    notices: list[Notice] = []

    for column in columns:
        if column is None:
            continue

        joined = join_tags(running, column.tag)
        if joined is None:
            raise IncompatibleTypeError(name, str(running), str(column.tag))
        running = joined

        if column.tag.is_factor:
            notice = merge_factor_levels(name, factors, column)
            if notice is not None:
                notices.append(notice)
        elif column.tag is TypeTag.CHARACTER:
            record_character_values(factors, column)
        elif column.tag is TypeTag.DATETIME:
            tzone = merge_timezone(tzone, column.tzone)

    if running.is_factor or running is TypeTag.CHARACTER:
        column_type = settle_factor_type(running, factors)
    elif running is TypeTag.DATETIME:
        column_type = ColumnType(tag=running, tzone=tzone)
    else:
        column_type = ColumnType(tag=running)

    logger.debug(f"Column '{name}' resolved to {column_type}")
    return Resolution(column_type=column_type, notices=tuple(notices))
