"""
Value collection for one output column.

Walks the inputs in bind order and appends each contribution converted to
the unified type: widened numbers, factor labels rendered to text,
character recoded to factor codes, or a run of typed NA where the input
lacks the column. Inputs are never mutated.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from framebind._exceptions import IncompatibleTypeError
from framebind.column import Column
from framebind.types import ColumnType, TypeTag

_Converter = Callable[[Column, ColumnType], "list[Any] | tuple[Any, ...]"]


class ColumnCollector:
    """
    Accumulates the values of one output column.

    Usage:
        collector = ColumnCollector("x", resolution.column_type)
        for frame in frames:
            collector.collect(frame["x"] if "x" in frame else None, frame.num_rows)
        column = collector.result()
    """

    def __init__(self, name: str, column_type: ColumnType) -> None:
        self.name = name
        self.column_type = column_type
        self._values: list[Any] = []

    def collect(self, column: Column | None, num_rows: int) -> None:
        """Append one input's contribution (typed NA run when absent)."""
        if column is None:
            self._values.extend([None] * num_rows)
            return
        self._values.extend(self._convert(column))

    def result(self) -> Column:
        return Column.of_type(self.column_type, self._values)

    def __len__(self) -> int:
        return len(self._values)

    def _convert(self, column: Column) -> list[Any] | tuple[Any, ...]:
        source = column.tag
        target = self.column_type.tag

        if source is TypeTag.NA_ONLY:
            return [None] * len(column)

        if source is target and not target.is_factor:
            return column.values

        converter = _CONVERTERS.get((source, target))
        if converter is None:
            raise IncompatibleTypeError(self.name, str(source), str(target))
        return converter(column, self.column_type)


def _widen(cast: Callable[[Any], Any]) -> _Converter:
    def convert(column: Column, _: ColumnType) -> list[Any]:
        return [None if v is None else cast(v) for v in column.values]

    return convert


def _factor_to_character(column: Column, _: ColumnType) -> list[str | None]:
    return column.labels()


def _to_factor(column: Column, target: ColumnType) -> list[int | None] | tuple[Any, ...]:
    levels = target.levels or ()
    if column.tag.is_factor and column.levels == levels:
        return column.values

    labels = column.labels() if column.tag.is_factor else list(column.values)
    index = {level: code for code, level in enumerate(levels)}
    return [None if label is None else index[label] for label in labels]


_CONVERTERS: dict[tuple[TypeTag, TypeTag], _Converter] = {
    (TypeTag.LOGICAL, TypeTag.INTEGER): _widen(int),
    (TypeTag.LOGICAL, TypeTag.DOUBLE): _widen(float),
    (TypeTag.INTEGER, TypeTag.DOUBLE): _widen(float),
    (TypeTag.LOGICAL, TypeTag.COMPLEX): _widen(complex),
    (TypeTag.INTEGER, TypeTag.COMPLEX): _widen(complex),
    (TypeTag.DOUBLE, TypeTag.COMPLEX): _widen(complex),
    (TypeTag.FACTOR, TypeTag.CHARACTER): _factor_to_character,
    (TypeTag.ORDERED_FACTOR, TypeTag.CHARACTER): _factor_to_character,
    **{
        (source, target): _to_factor
        for source in (TypeTag.CHARACTER, TypeTag.FACTOR, TypeTag.ORDERED_FACTOR)
        for target in (TypeTag.FACTOR, TypeTag.ORDERED_FACTOR)
    },
}
