"""
Column type tags and the join lattice between them.

Every column carries one tag from a closed set. Binding two columns with the
same name needs their least upper bound:

    NA_only < logical < integer < double < complex      (numeric ladder)
    NA_only < character
    NA_only < factor, ordered_factor, date, datetime, list_column

NA_only is the bottom element and joins with anything. Ladder members join
to the higher one. The factor family joins with itself and with character;
whether the result stays a factor depends on level sets, which is decided
by the attribute reconciler, not here. Every other pair is undefined.

Main objects:
    TypeTag: closed enumeration of column types
    ColumnType: tag plus the attributes that travel with it
    join_tags: tag-level join, None when undefined
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class TypeTag(str, Enum):
    """Discriminant for a column's semantic type."""

    NA_ONLY = "NA_only"
    LOGICAL = "logical"
    INTEGER = "integer"
    DOUBLE = "double"
    COMPLEX = "complex"
    CHARACTER = "character"
    FACTOR = "factor"
    ORDERED_FACTOR = "ordered_factor"
    DATE = "date"
    DATETIME = "datetime"
    LIST_COLUMN = "list_column"

    def __str__(self) -> str:
        return self.value

    @property
    def is_numeric(self) -> bool:
        """True for logical..complex (NA_only excluded)."""
        return self in NUMERIC_LADDER and self is not TypeTag.NA_ONLY

    @property
    def is_factor(self) -> bool:
        return self in FACTOR_TAGS


NUMERIC_LADDER: tuple[TypeTag, ...] = (
    TypeTag.NA_ONLY,
    TypeTag.LOGICAL,
    TypeTag.INTEGER,
    TypeTag.DOUBLE,
    TypeTag.COMPLEX,
)
"""Widening order for the numeric ladder."""

FACTOR_TAGS = frozenset({TypeTag.FACTOR, TypeTag.ORDERED_FACTOR})

_LADDER_RANK = {tag: rank for rank, tag in enumerate(NUMERIC_LADDER)}


def join_tags(left: TypeTag, right: TypeTag) -> TypeTag | None:
    """
    Least upper bound of two tags, or None if the pair has no join.

    Commutative and associative over all tags. Factor level sets are not
    known here: factor-family joins assume compatible levels and joins
    with character land on character.
    """
    if left is right:
        return left

    if left is TypeTag.NA_ONLY:
        return right
    if right is TypeTag.NA_ONLY:
        return left

    if left in _LADDER_RANK and right in _LADDER_RANK:
        return left if _LADDER_RANK[left] > _LADDER_RANK[right] else right

    pair = {left, right}

    # factor vs ordered_factor: ordering survives only if both are ordered
    if pair == FACTOR_TAGS:
        return TypeTag.FACTOR

    if TypeTag.CHARACTER in pair and pair & FACTOR_TAGS:
        return TypeTag.CHARACTER

    return None


class ColumnType(BaseModel):
    """
    A type tag together with the attributes valid for it.

    levels: ordered distinct labels, only for factor and ordered_factor
    tzone: timezone label, only for datetime (None means naive/local)
    """

    model_config = ConfigDict(frozen=True)

    tag: TypeTag
    levels: tuple[str, ...] | None = None
    tzone: str | None = None

    @model_validator(mode="after")
    def _check_attributes(self) -> ColumnType:
        if self.tag.is_factor:
            if self.levels is None:
                raise ValueError(f"{self.tag} requires a level sequence")
            if len(set(self.levels)) != len(self.levels):
                raise ValueError(f"Duplicate factor levels: {list(self.levels)}")
        elif self.levels is not None:
            raise ValueError(f"{self.tag} does not carry levels")

        if self.tzone is not None and self.tag is not TypeTag.DATETIME:
            raise ValueError(f"{self.tag} does not carry a timezone")
        return self

    @property
    def ordered(self) -> bool:
        return self.tag is TypeTag.ORDERED_FACTOR

    def __str__(self) -> str:
        if self.tag.is_factor:
            return f"{self.tag}<{len(self.levels or ())} levels>"
        if self.tag is TypeTag.DATETIME and self.tzone:
            return f"{self.tag}[{self.tzone}]"
        return str(self.tag)
