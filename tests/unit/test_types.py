"""Tests for framebind.types (tag lattice and ColumnType)."""

import itertools

import pytest
from pydantic import ValidationError

from framebind.types import NUMERIC_LADDER, ColumnType, TypeTag, join_tags

ALL_TAGS = list(TypeTag)


def _fold(*tags):
    """Left fold where an undefined join absorbs everything after it."""
    running = TypeTag.NA_ONLY
    for tag in tags:
        if running is None:
            return None
        running = join_tags(running, tag)
    return running


def _join_or_none(a, b):
    if a is None or b is None:
        return None
    return join_tags(a, b)


class TestJoinTags:
    """Concrete lattice rules."""

    @pytest.mark.parametrize("tag", ALL_TAGS)
    def test_na_only_is_bottom(self, tag):
        assert join_tags(TypeTag.NA_ONLY, tag) is tag
        assert join_tags(tag, TypeTag.NA_ONLY) is tag

    @pytest.mark.parametrize("tag", ALL_TAGS)
    def test_idempotent(self, tag):
        assert join_tags(tag, tag) is tag

    @pytest.mark.parametrize(
        "low,high",
        [(a, b) for a, b in itertools.combinations(NUMERIC_LADDER, 2)],
    )
    def test_ladder_joins_to_higher(self, low, high):
        assert join_tags(low, high) is high
        assert join_tags(high, low) is high

    def test_factor_and_ordered_factor_join_to_factor(self):
        assert join_tags(TypeTag.FACTOR, TypeTag.ORDERED_FACTOR) is TypeTag.FACTOR

    @pytest.mark.parametrize("factor", [TypeTag.FACTOR, TypeTag.ORDERED_FACTOR])
    def test_character_absorbs_factor_family(self, factor):
        assert join_tags(TypeTag.CHARACTER, factor) is TypeTag.CHARACTER

    @pytest.mark.parametrize("numeric", [t for t in NUMERIC_LADDER if t is not TypeTag.NA_ONLY])
    @pytest.mark.parametrize(
        "other",
        [
            TypeTag.FACTOR,
            TypeTag.ORDERED_FACTOR,
            TypeTag.DATE,
            TypeTag.DATETIME,
            TypeTag.CHARACTER,
            TypeTag.LIST_COLUMN,
        ],
    )
    def test_ladder_against_non_ladder_is_undefined(self, numeric, other):
        assert join_tags(numeric, other) is None
        assert join_tags(other, numeric) is None

    def test_date_and_datetime_do_not_join(self):
        assert join_tags(TypeTag.DATE, TypeTag.DATETIME) is None

    def test_list_column_joins_only_itself_and_na(self):
        for tag in ALL_TAGS:
            expected = TypeTag.LIST_COLUMN if tag in (TypeTag.LIST_COLUMN, TypeTag.NA_ONLY) else None
            assert join_tags(TypeTag.LIST_COLUMN, tag) is expected


class TestLatticeProperties:
    """Commutativity and associativity checked over every pair and triple."""

    @pytest.mark.parametrize("a,b", list(itertools.product(ALL_TAGS, repeat=2)))
    def test_commutative(self, a, b):
        assert join_tags(a, b) is join_tags(b, a)

    @pytest.mark.parametrize("a,b,c", list(itertools.product(ALL_TAGS, repeat=3)))
    def test_associative(self, a, b, c):
        left = _join_or_none(join_tags(a, b), c)
        right = _join_or_none(a, join_tags(b, c))
        assert left is right

    @pytest.mark.parametrize("a,b,c", list(itertools.product(ALL_TAGS, repeat=3)))
    def test_fold_is_order_independent(self, a, b, c):
        results = {_fold(*perm) for perm in itertools.permutations((a, b, c))}
        assert len(results) == 1

    @pytest.mark.parametrize("a,b", list(itertools.product(ALL_TAGS, repeat=2)))
    def test_join_is_upper_bound(self, a, b):
        joined = join_tags(a, b)
        if joined is not None:
            assert join_tags(a, joined) is joined
            assert join_tags(b, joined) is joined


class TestColumnType:

    def test_factor_requires_levels(self):
        with pytest.raises(ValidationError):
            ColumnType(tag=TypeTag.FACTOR)

    def test_duplicate_levels_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate factor levels"):
            ColumnType(tag=TypeTag.FACTOR, levels=("a", "a"))

    def test_levels_only_on_factors(self):
        with pytest.raises(ValidationError):
            ColumnType(tag=TypeTag.CHARACTER, levels=("a",))

    def test_tzone_only_on_datetime(self):
        with pytest.raises(ValidationError):
            ColumnType(tag=TypeTag.DATE, tzone="UTC")

    def test_frozen(self):
        ct = ColumnType(tag=TypeTag.INTEGER)
        with pytest.raises(ValidationError):
            ct.tag = TypeTag.DOUBLE

    def test_ordered_property(self):
        assert ColumnType(tag=TypeTag.ORDERED_FACTOR, levels=("a",)).ordered
        assert not ColumnType(tag=TypeTag.FACTOR, levels=("a",)).ordered

    def test_equality_includes_attributes(self):
        a = ColumnType(tag=TypeTag.DATETIME, tzone="UTC")
        b = ColumnType(tag=TypeTag.DATETIME, tzone=None)
        assert a != b
        assert a == ColumnType(tag=TypeTag.DATETIME, tzone="UTC")

    def test_str(self):
        assert str(ColumnType(tag=TypeTag.DATETIME, tzone="UTC")) == "datetime[UTC]"
        assert str(ColumnType(tag=TypeTag.FACTOR, levels=("a", "b"))) == "factor<2 levels>"
        assert str(TypeTag.NA_ONLY) == "NA_only"
