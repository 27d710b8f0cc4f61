"""Tests for framebind.column."""

import datetime as dt
import math

import pytest

from framebind import Column, InvalidInputError, TypeTag
from framebind.column import datetime_to_micros, micros_to_datetime
from framebind.types import ColumnType


class TestColumnConstruction:

    def test_values_are_immutable_tuple(self):
        values = [1, 2, 3]
        col = Column(TypeTag.INTEGER, values)
        values.append(4)

        assert col.values == (1, 2, 3)
        assert len(col) == 3

    def test_tag_from_string(self):
        assert Column("double", [1.0]).tag is TypeTag.DOUBLE

    def test_rejects_value_of_wrong_type(self):
        with pytest.raises(InvalidInputError, match="not valid for a integer column"):
            Column(TypeTag.INTEGER, [1, "2"])

    def test_bool_is_not_integer(self):
        with pytest.raises(InvalidInputError):
            Column(TypeTag.INTEGER, [True])

    def test_na_only_holds_only_none(self):
        with pytest.raises(InvalidInputError):
            Column(TypeTag.NA_ONLY, [None, 1])

    def test_factor_code_out_of_range(self):
        with pytest.raises(InvalidInputError, match="out of range"):
            Column(TypeTag.FACTOR, [0, 2], levels=("a", "b"))

    def test_factor_without_levels_is_invalid(self):
        with pytest.raises(InvalidInputError, match="attributes"):
            Column(TypeTag.FACTOR, [0])

    def test_empty_tzone_means_none(self):
        assert Column(TypeTag.DATETIME, [0], tzone="").tzone is None

    def test_na_run(self):
        col = Column.na(ColumnType(tag=TypeTag.CHARACTER), 3)
        assert col.values == (None, None, None)
        assert col.tag is TypeTag.CHARACTER


class TestColumnAccessors:

    def test_labels_render_factor(self):
        col = Column(TypeTag.FACTOR, [1, None, 0], levels=("a", "b"))
        assert col.labels() == ["b", None, "a"]

    def test_labels_rejects_non_factor(self):
        with pytest.raises(TypeError):
            Column(TypeTag.CHARACTER, ["a"]).labels()

    def test_is_na(self):
        assert Column(TypeTag.DOUBLE, [1.0, None]).is_na() == [False, True]

    def test_datetime_to_pylist_is_aware(self):
        col = Column(TypeTag.DATETIME, [0], tzone="UTC")
        (value,) = col.to_pylist()
        assert value == dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)
        assert value.tzinfo is not None

    def test_equals_treats_nan_as_equal(self):
        a = Column(TypeTag.DOUBLE, [math.nan, 1.0])
        b = Column(TypeTag.DOUBLE, [math.nan, 1.0])
        assert a.equals(b)

    def test_equals_checks_attributes(self):
        a = Column(TypeTag.DATETIME, [0], tzone="UTC")
        b = Column(TypeTag.DATETIME, [0])
        assert not a.equals(b)

    def test_equals_checks_value_types(self):
        assert not Column(TypeTag.LIST_COLUMN, [1]).equals(Column(TypeTag.LIST_COLUMN, [1.0]))


class TestFromValues:

    @pytest.mark.parametrize(
        "values,tag",
        [
            ([True, None], TypeTag.LOGICAL),
            ([1, 2], TypeTag.INTEGER),
            ([1.5, None], TypeTag.DOUBLE),
            ([1 + 1j], TypeTag.COMPLEX),
            (["a", None], TypeTag.CHARACTER),
            ([dt.date(2020, 1, 1)], TypeTag.DATE),
            ([dt.datetime(2020, 1, 1)], TypeTag.DATETIME),
            ([[1, 2], [3]], TypeTag.LIST_COLUMN),
            ([None, None], TypeTag.NA_ONLY),
            ([], TypeTag.NA_ONLY),
        ],
    )
    def test_inferred_tag(self, values, tag):
        assert Column.from_values(values).tag is tag

    def test_mixed_numbers_widen(self):
        col = Column.from_values([1, 2.5, None])
        assert col.tag is TypeTag.DOUBLE
        assert col.values == (1.0, 2.5, None)

    def test_mixed_bool_and_complex(self):
        col = Column.from_values([True, 2j])
        assert col.tag is TypeTag.COMPLEX
        assert col.values == (1 + 0j, 2j)

    def test_mixed_text_and_number_rejected(self):
        with pytest.raises(InvalidInputError, match="mixed values"):
            Column.from_values(["a", 1])

    def test_scalar_mixed_with_list_is_list_column(self):
        assert Column.from_values([1, [2, 3]]).tag is TypeTag.LIST_COLUMN

    def test_aware_datetime_keeps_zone(self):
        from zoneinfo import ZoneInfo

        value = dt.datetime(2015, 5, 5, tzinfo=ZoneInfo("America/Chicago"))
        col = Column.from_values([value, None])

        assert col.tzone == "America/Chicago"
        assert col.values[0] == datetime_to_micros(value)
        assert col.values[1] is None


class TestDatetimeHelpers:

    def test_naive_read_as_utc(self):
        assert datetime_to_micros(dt.datetime(1970, 1, 1, 0, 0, 1)) == 1_000_000

    def test_negative_instants(self):
        value = dt.datetime(1969, 12, 31, 23, 59, 59, tzinfo=dt.timezone.utc)
        assert datetime_to_micros(value) == -1_000_000

    def test_round_trip_through_zone(self):
        micros = 1_430_784_000_000_000
        value = micros_to_datetime(micros, "America/Chicago")
        assert datetime_to_micros(value) == micros
