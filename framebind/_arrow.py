"""
Column <-> PyArrow conversion.

Arrow is the interchange format for every backend: pandas and polars
frames pass through Arrow on the way in and out.

Type mapping:
    NA_only          null
    logical          bool
    integer          int64 (any signed/unsigned width on input)
    double           float64 (any float width on input)
    complex          struct<real: double, imag: double> + field metadata
    character        string (large_string, string_view on input)
    factor           dictionary<int32, string>
    ordered_factor   dictionary<int32, string, ordered>
    date             date32 (date64 on input)
    datetime         timestamp[us, tz] (any unit on input)
    list_column      list / large_list / fixed_size_list / struct / map
"""

from __future__ import annotations

from typing import Any

import pyarrow as pa
import pyarrow.compute as pc

from framebind._constants import (
    COMPLEX_FIELD_METADATA_KEY,
    COMPLEX_FIELD_METADATA_VALUE,
    DATETIME_UNIT,
)
from framebind._exceptions import FrameBackendError, InvalidInputError
from framebind.column import Column
from framebind.types import TypeTag

_COMPLEX_STRUCT = pa.struct([("real", pa.float64()), ("imag", pa.float64())])


def column_from_arrow(name: str, data: pa.ChunkedArray | pa.Array, field: pa.Field | None = None) -> Column:
    """
    Convert one Arrow column into a Column.

    Dictionary columns should have unified dictionaries across chunks
    (Table.unify_dictionaries()) before calling this.

    Raises:
        InvalidInputError: If the Arrow type has no column tag
    """
    if isinstance(data, pa.Array):
        data = pa.chunked_array([data], type=data.type)

    arrow_type = data.type

    if _is_complex_field(field, arrow_type):
        return Column(
            TypeTag.COMPLEX,
            [None if v is None else complex(v["real"], v["imag"]) for v in data.to_pylist()],
        )

    if pa.types.is_null(arrow_type):
        return Column(TypeTag.NA_ONLY, [None] * len(data))

    if pa.types.is_boolean(arrow_type):
        # All-NA logical is the wildcard NA column; zero rows keep the type
        if len(data) > 0 and data.null_count == len(data):
            return Column(TypeTag.NA_ONLY, [None] * len(data))
        return Column(TypeTag.LOGICAL, data.to_pylist())

    if pa.types.is_integer(arrow_type):
        return Column(TypeTag.INTEGER, data.to_pylist())

    if pa.types.is_floating(arrow_type):
        return Column(TypeTag.DOUBLE, [None if v is None else float(v) for v in data.to_pylist()])

    if _is_text(arrow_type):
        return Column(TypeTag.CHARACTER, data.to_pylist())

    if pa.types.is_dictionary(arrow_type):
        return _factor_from_arrow(name, data)

    if pa.types.is_date(arrow_type):
        return Column(TypeTag.DATE, data.to_pylist())

    if pa.types.is_timestamp(arrow_type):
        tzone = arrow_type.tz
        as_micros = pc.cast(data, pa.timestamp(DATETIME_UNIT, tz=tzone), safe=False).cast(pa.int64())
        return Column(TypeTag.DATETIME, as_micros.to_pylist(), tzone=tzone)

    if (
        pa.types.is_list(arrow_type)
        or pa.types.is_large_list(arrow_type)
        or pa.types.is_fixed_size_list(arrow_type)
        or pa.types.is_struct(arrow_type)
        or pa.types.is_map(arrow_type)
    ):
        return Column(TypeTag.LIST_COLUMN, data.to_pylist())

    raise InvalidInputError(f"Column '{name}' has unsupported Arrow type: {arrow_type}")


def _factor_from_arrow(name: str, data: pa.ChunkedArray) -> Column:
    arrow_type = data.type
    value_type = arrow_type.value_type
    if not _is_text(value_type):
        raise InvalidInputError(
            f"Column '{name}': dictionary values must be strings to form factor levels, got {value_type}"
        )

    levels: list[str] = []
    codes: list[int | None] = []
    if data.num_chunks:
        levels = data.chunk(0).dictionary.to_pylist()
        for chunk in data.chunks:
            if chunk.dictionary.to_pylist() != levels:
                raise InvalidInputError(
                    f"Column '{name}': chunks carry different dictionaries; "
                    f"call Table.unify_dictionaries() first"
                )
            codes.extend(chunk.indices.to_pylist())

    tag = TypeTag.ORDERED_FACTOR if arrow_type.ordered else TypeTag.FACTOR
    return Column(tag, codes, levels=levels)


def _is_text(arrow_type: pa.DataType) -> bool:
    # polars exports string_view
    return (
        pa.types.is_string(arrow_type)
        or pa.types.is_large_string(arrow_type)
        or pa.types.is_string_view(arrow_type)
    )


def _is_complex_field(field: pa.Field | None, arrow_type: pa.DataType) -> bool:
    if field is None or field.metadata is None:
        return False
    if field.metadata.get(COMPLEX_FIELD_METADATA_KEY) != COMPLEX_FIELD_METADATA_VALUE:
        return False
    return arrow_type == _COMPLEX_STRUCT


def column_to_arrow(name: str, column: Column) -> tuple[pa.Field, pa.Array]:
    """
    Convert a Column into an Arrow field and array.

    Raises:
        FrameBackendError: If list_column payloads have no common Arrow type
    """
    tag = column.tag
    values = column.values

    if tag is TypeTag.COMPLEX:
        rows = [None if v is None else {"real": v.real, "imag": v.imag} for v in values]
        field = pa.field(
            name,
            _COMPLEX_STRUCT,
            metadata={COMPLEX_FIELD_METADATA_KEY: COMPLEX_FIELD_METADATA_VALUE},
        )
        return field, pa.array(rows, type=_COMPLEX_STRUCT)

    if tag.is_factor:
        dict_type = pa.dictionary(pa.int32(), pa.string(), ordered=column.ordered)
        array = pa.DictionaryArray.from_arrays(
            pa.array(values, type=pa.int32()),
            pa.array(list(column.levels or ()), type=pa.string()),
            ordered=column.ordered,
        )
        return pa.field(name, dict_type), array

    if tag is TypeTag.DATETIME:
        arrow_type = pa.timestamp(DATETIME_UNIT, tz=column.tzone)
        array = pa.array(values, type=pa.int64()).cast(arrow_type)
        return pa.field(name, arrow_type), array

    if tag is TypeTag.LIST_COLUMN:
        array = _opaque_to_arrow(name, values)
        return pa.field(name, array.type), array

    arrow_type = _SIMPLE_TYPES[tag]
    return pa.field(name, arrow_type), pa.array(values, type=arrow_type)


def _opaque_to_arrow(name: str, values: tuple[Any, ...]) -> pa.Array:
    try:
        return pa.array(values)
    except (pa.ArrowInvalid, pa.ArrowTypeError) as e:
        raise FrameBackendError(
            f"Column '{name}' holds list payloads with no common Arrow type.\n"
            f"Arrow error: {e}\n"
            f"Use the pandas backend to keep arbitrary per-row objects."
        ) from e


_SIMPLE_TYPES: dict[TypeTag, pa.DataType] = {
    TypeTag.NA_ONLY: pa.null(),
    TypeTag.LOGICAL: pa.bool_(),
    TypeTag.INTEGER: pa.int64(),
    TypeTag.DOUBLE: pa.float64(),
    TypeTag.CHARACTER: pa.string(),
    TypeTag.DATE: pa.date32(),
}
