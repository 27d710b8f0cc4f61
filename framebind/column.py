"""
Column - a typed value carrier.

A column is a tag, a value sequence and the attributes valid for the tag.
NA is None in every value sequence. Payload conventions per tag:

    NA_only          all None
    logical          bool
    integer          int
    double           float
    complex          complex
    character        str
    factor           int codes into .levels (0-based)
    ordered_factor   int codes into .levels (0-based)
    date             datetime.date
    datetime         int microseconds since the Unix epoch (UTC instant)
    list_column      any Python object (opaque per-row payload)

Columns are treated as immutable once built: values are stored as a tuple.
"""

from __future__ import annotations

import datetime as dt
import math
from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import ValidationError

from framebind._exceptions import InvalidInputError
from framebind.types import NUMERIC_LADDER, ColumnType, TypeTag

_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)


class Column:
    """
    Typed column of values with optional factor levels or timezone.

    Build directly with a tag, or let Column.from_values() infer one:

        Column(TypeTag.INTEGER, [1, 2, None])
        Column(TypeTag.FACTOR, [0, 1, 0], levels=("a", "b"))
        Column.from_values(["x", None, "z"])   # character
    """

    __slots__ = ("_type", "_values")

    def __init__(
        self,
        tag: TypeTag | str,
        values: Iterable[Any] = (),
        levels: Sequence[str] | None = None,
        tzone: str | None = None,
    ) -> None:
        tag = TypeTag(tag)
        try:
            self._type = ColumnType(
                tag=tag,
                levels=tuple(levels) if levels is not None else None,
                tzone=tzone or None,
            )
        except ValidationError as e:
            raise InvalidInputError(f"Invalid {tag} column attributes: {e}") from e
        self._values = tuple(values)
        self._validate()

    @classmethod
    def of_type(cls, column_type: ColumnType, values: Iterable[Any]) -> Column:
        """Build a column from an already resolved ColumnType."""
        return cls(column_type.tag, values, levels=column_type.levels, tzone=column_type.tzone)

    @classmethod
    def na(cls, column_type: ColumnType, length: int) -> Column:
        """A run of typed NA."""
        return cls.of_type(column_type, (None,) * length)

    def _validate(self) -> None:
        tag = self._type.tag

        if tag is TypeTag.NA_ONLY:
            if any(v is not None for v in self._values):
                raise InvalidInputError("NA_only column may only hold None")
            return

        if tag.is_factor:
            n_levels = len(self._type.levels or ())
            for code in self._values:
                if code is None:
                    continue
                if isinstance(code, bool) or not isinstance(code, int) or not 0 <= code < n_levels:
                    raise InvalidInputError(
                        f"Factor code {code!r} out of range for {n_levels} levels"
                    )
            return

        check = _VALUE_CHECKS.get(tag)
        if check is None:
            return

        for value in self._values:
            if value is not None and not check(value):
                raise InvalidInputError(
                    f"Value {value!r} ({type(value).__name__}) is not valid for a {tag} column"
                )

    # Accessors

    @property
    def type(self) -> ColumnType:
        return self._type

    @property
    def tag(self) -> TypeTag:
        return self._type.tag

    @property
    def values(self) -> tuple[Any, ...]:
        return self._values

    @property
    def levels(self) -> tuple[str, ...] | None:
        return self._type.levels

    @property
    def tzone(self) -> str | None:
        return self._type.tzone

    @property
    def ordered(self) -> bool:
        return self._type.ordered

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self):
        return iter(self._values)

    def __getitem__(self, index):
        return self._values[index]

    def __repr__(self) -> str:
        preview = list(self._values[:6])
        suffix = ", ..." if len(self._values) > 6 else ""
        return f"Column<{self._type}>({preview!r}{suffix}, n={len(self)})"

    def is_na(self) -> list[bool]:
        return [v is None for v in self._values]

    def labels(self) -> list[str | None]:
        """Factor values rendered to their label text (NA stays None)."""
        if not self.tag.is_factor:
            raise TypeError(f"labels() needs a factor column, got {self.tag}")
        levels = self.levels or ()
        return [None if code is None else levels[code] for code in self._values]

    def to_pylist(self) -> list[Any]:
        """
        Values as plain Python objects.

        Factors render to labels and datetimes to aware datetime objects
        (UTC when the column has no timezone).
        """
        if self.tag.is_factor:
            return self.labels()
        if self.tag is TypeTag.DATETIME:
            return [None if v is None else micros_to_datetime(v, self.tzone) for v in self._values]
        return list(self._values)

    def equals(self, other: object) -> bool:
        """Same type, same attributes, same values (NaN equal to NaN)."""
        if not isinstance(other, Column):
            return False
        if self._type != other._type or len(self) != len(other):
            return False
        return all(_same_value(a, b) for a, b in zip(self._values, other._values))

    # Inference

    @classmethod
    def from_values(cls, values: Iterable[Any]) -> Column:
        """
        Infer a column from plain Python values.

        bool -> logical, int -> integer, float -> double, complex -> complex,
        mixed numbers widen along the ladder, str -> character, date -> date,
        datetime -> datetime, anything else -> list_column. All None -> NA_only.

        Raises:
            InvalidInputError: If scalar values of incompatible kinds are mixed
        """
        values = list(values)
        kinds = {_scalar_kind(v) for v in values if v is not None}

        if not kinds:
            return cls(TypeTag.NA_ONLY, values)

        if TypeTag.LIST_COLUMN in kinds:
            return cls(TypeTag.LIST_COLUMN, values)

        if len(kinds) == 1:
            (kind,) = kinds
        elif all(k.is_numeric for k in kinds):
            kind = max(kinds, key=NUMERIC_LADDER.index)
        else:
            raise InvalidInputError(
                f"Cannot infer a column type from mixed values: {sorted(k.value for k in kinds)}"
            )

        if kind is TypeTag.DATETIME:
            return _datetime_column(values)

        if kind.is_numeric:
            convert = _WIDEN[kind]
            values = [None if v is None else convert(v) for v in values]

        return cls(kind, values)


def micros_to_datetime(micros: int, tzone: str | None = None) -> dt.datetime:
    """Epoch microseconds to an aware datetime in tzone (UTC when None)."""
    instant = _EPOCH + dt.timedelta(microseconds=micros)
    if tzone:
        from zoneinfo import ZoneInfo

        return instant.astimezone(ZoneInfo(tzone))
    return instant


def datetime_to_micros(value: dt.datetime) -> int:
    """Datetime to epoch microseconds; naive values are read as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    delta = value - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds


def _datetime_column(values: list[Any]) -> Column:
    tzone = None
    for value in values:
        if value is not None and value.tzinfo is not None:
            tzone = getattr(value.tzinfo, "key", None) or value.tzname()
    micros = [None if v is None else datetime_to_micros(v) for v in values]
    return Column(TypeTag.DATETIME, micros, tzone=tzone)


def _scalar_kind(value: Any) -> TypeTag:
    # bool before int, datetime before date: both are subclasses
    if isinstance(value, bool):
        return TypeTag.LOGICAL
    if isinstance(value, int):
        return TypeTag.INTEGER
    if isinstance(value, float):
        return TypeTag.DOUBLE
    if isinstance(value, complex):
        return TypeTag.COMPLEX
    if isinstance(value, str):
        return TypeTag.CHARACTER
    if isinstance(value, dt.datetime):
        return TypeTag.DATETIME
    if isinstance(value, dt.date):
        return TypeTag.DATE
    return TypeTag.LIST_COLUMN


def _same_value(a: Any, b: Any) -> bool:
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b and type(a) is type(b)


_WIDEN = {
    TypeTag.LOGICAL: bool,
    TypeTag.INTEGER: int,
    TypeTag.DOUBLE: float,
    TypeTag.COMPLEX: complex,
}

_VALUE_CHECKS = {
    TypeTag.LOGICAL: lambda v: isinstance(v, bool),
    TypeTag.INTEGER: lambda v: isinstance(v, int) and not isinstance(v, bool),
    TypeTag.DOUBLE: lambda v: isinstance(v, float),
    TypeTag.COMPLEX: lambda v: isinstance(v, complex),
    TypeTag.CHARACTER: lambda v: isinstance(v, str),
    TypeTag.DATE: lambda v: isinstance(v, dt.date) and not isinstance(v, dt.datetime),
    TypeTag.DATETIME: lambda v: isinstance(v, int) and not isinstance(v, bool),
}
