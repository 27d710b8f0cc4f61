"""Tests for type resolution and attribute reconciliation."""

import itertools

import pytest

from framebind import Column, FactorLevelMismatchWarning, IncompatibleTypeError, TypeTag
from framebind.bind._reconcile import (
    FactorState,
    merge_factor_levels,
    merge_timezone,
    settle_factor_type,
)
from framebind.bind._resolver import resolve_column_type
from framebind.types import ColumnType


def fac(levels, ordered=False):
    tag = TypeTag.ORDERED_FACTOR if ordered else TypeTag.FACTOR
    return Column(tag, [0], levels=levels)


def chr_(*values):
    return Column(TypeTag.CHARACTER, values)


def ts(tzone):
    return Column(TypeTag.DATETIME, [0], tzone=tzone)


class TestMergeTimezone:

    @pytest.mark.parametrize(
        "current,incoming,expected",
        [
            (None, None, None),
            (None, "UTC", "UTC"),
            ("UTC", None, "UTC"),
            ("UTC", "", "UTC"),
            ("America/Chicago", "UTC", "UTC"),
            ("UTC", "America/Chicago", "America/Chicago"),
        ],
    )
    def test_last_non_empty_wins(self, current, incoming, expected):
        assert merge_timezone(current, incoming) == expected


class TestMergeFactorLevels:

    def test_first_sequence_recorded(self):
        state = FactorState()
        assert merge_factor_levels("f", state, fac(("a", "b"))) is None
        assert state.levels == ("a", "b")
        assert state.saw_factor

    def test_conflict_reported_once(self):
        state = FactorState()
        merge_factor_levels("f", state, fac(("a",)))

        notice = merge_factor_levels("f", state, fac(("b",)))
        assert notice.category is FactorLevelMismatchWarning
        assert "Column 'f'" in notice.message
        assert state.conflict

        assert merge_factor_levels("f", state, fac(("c",))) is None

    def test_ordered_flag_accumulates(self):
        state = FactorState()
        merge_factor_levels("f", state, fac(("a",), ordered=True))
        assert state.all_ordered
        merge_factor_levels("f", state, fac(("a",)))
        assert not state.all_ordered


class TestSettleFactorType:

    def test_factor_without_conflict(self):
        state = FactorState(levels=("a", "b"))
        assert settle_factor_type(TypeTag.FACTOR, state) == ColumnType(
            tag=TypeTag.FACTOR, levels=("a", "b")
        )

    def test_factor_with_conflict_is_character(self):
        state = FactorState(levels=("a",), conflict=True)
        assert settle_factor_type(TypeTag.FACTOR, state).tag is TypeTag.CHARACTER

    def test_ordered_needs_every_input_ordered(self):
        state = FactorState(levels=("a",), all_ordered=False)
        assert settle_factor_type(TypeTag.ORDERED_FACTOR, state).tag is TypeTag.FACTOR

    def test_character_covering_levels_is_factor(self):
        state = FactorState(levels=("a", "b"), character_values={"b", "a"})
        assert settle_factor_type(TypeTag.CHARACTER, state).tag is TypeTag.FACTOR

    @pytest.mark.parametrize("values", [{"a"}, {"a", "b", "c"}, set()])
    def test_character_not_covering_levels(self, values):
        state = FactorState(levels=("a", "b"), character_values=values)
        assert settle_factor_type(TypeTag.CHARACTER, state).tag is TypeTag.CHARACTER

    def test_character_alone(self):
        state = FactorState(character_values={"a"})
        assert settle_factor_type(TypeTag.CHARACTER, state) == ColumnType(tag=TypeTag.CHARACTER)


class TestResolveColumnType:

    def test_absent_inputs_are_ignored(self):
        result = resolve_column_type("x", [None, Column(TypeTag.INTEGER, [1]), None])
        assert result.column_type == ColumnType(tag=TypeTag.INTEGER)
        assert result.notices == ()

    def test_all_absent_is_na_only(self):
        assert resolve_column_type("x", [None, None]).column_type.tag is TypeTag.NA_ONLY

    def test_undefined_join_raises(self):
        with pytest.raises(IncompatibleTypeError) as info:
            resolve_column_type("x", [Column(TypeTag.DOUBLE, [1.0]), chr_("a")])

        assert str(info.value) == "Column 'x' has incompatible type: double vs character"

    def test_left_side_is_running_type(self):
        columns = [Column(TypeTag.LOGICAL, [True]), Column(TypeTag.DOUBLE, [1.0]), chr_("a")]
        with pytest.raises(IncompatibleTypeError) as info:
            resolve_column_type("x", columns)

        assert info.value.left == "double"
        assert info.value.right == "character"

    def test_timezone_follows_input_order(self):
        columns = [ts("America/Chicago"), ts("UTC"), ts(None)]
        assert resolve_column_type("t", columns).column_type.tzone == "UTC"
        assert resolve_column_type("t", columns[::-1]).column_type.tzone == "America/Chicago"

    @pytest.mark.parametrize(
        "columns",
        [
            [fac(("a", "b")), chr_("a", "b"), fac(("a", "b"))],
            [fac(("a",)), fac(("b",)), chr_("a")],
            [fac(("a",), ordered=True), fac(("a",)), chr_("a", None)],
            [chr_("x"), Column(TypeTag.NA_ONLY, [None]), fac(("x",))],
        ],
    )
    def test_factor_decision_is_order_independent(self, columns):
        outcomes = {
            resolve_column_type("f", list(perm)).column_type
            for perm in itertools.permutations(columns)
        }
        assert len(outcomes) == 1

    def test_notices_are_returned_not_emitted(self, recwarn):
        result = resolve_column_type("f", [fac(("a",)), fac(("b",))])

        assert len(result.notices) == 1
        assert len(recwarn) == 0
