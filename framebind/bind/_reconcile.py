"""
Attribute reconciliation for columns that share a name.

Merges the metadata that rides on a type tag:
- factor levels: identical sequences keep the factor, anything else
  demotes to character with a FactorLevelMismatchWarning
- timezone: the last non-empty label in input order wins
- list columns: nothing to merge, payloads stay opaque

The factor decision is made from accumulated facts (first level sequence,
conflict flag, ordered flag, character values seen) so it does not depend
on input order. The timezone merge is order-sensitive and must run as a
sequential fold.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

from framebind._constants import FACTOR_LEVELS_MESSAGE
from framebind._exceptions import FactorLevelMismatchWarning
from framebind.column import Column
from framebind.types import ColumnType, TypeTag


class Notice(NamedTuple):
    """A warning held back until the bind has fully succeeded."""

    category: type[Warning]
    message: str


@dataclass
class FactorState:
    """What the fold has learned about factor and character columns so far."""

    levels: tuple[str, ...] | None = None
    conflict: bool = False
    all_ordered: bool = True
    character_values: set[str] = field(default_factory=set)

    @property
    def saw_factor(self) -> bool:
        return self.levels is not None


def merge_factor_levels(name: str, state: FactorState, column: Column) -> Notice | None:
    """
    Fold one factor column's levels into the state.

    Returns a Notice the first time two level sequences disagree (different
    members or different order).
    """
    levels = column.levels or ()
    state.all_ordered = state.all_ordered and column.ordered

    if state.levels is None:
        state.levels = levels
        return None

    if state.conflict or levels == state.levels:
        return None

    state.conflict = True
    return Notice(
        FactorLevelMismatchWarning,
        f"{FACTOR_LEVELS_MESSAGE}\n"
        f"Column '{name}': levels {list(state.levels)} vs {list(levels)}",
    )


def record_character_values(state: FactorState, column: Column) -> None:
    """Remember the distinct labels a character column contributes."""
    state.character_values.update(v for v in column.values if v is not None)


def settle_factor_type(tag: TypeTag, state: FactorState) -> ColumnType:
    """
    Final type for a column whose joined tag is in the factor/character family.

    - factors only, identical levels: factor (ordered if every one was ordered)
    - factors only, mismatched levels: character
    - factors and character: factor when no level conflict and the
      character values are exactly the level set, otherwise character
    """
    if tag.is_factor:
        if state.conflict:
            return ColumnType(tag=TypeTag.CHARACTER)
        ordered = tag is TypeTag.ORDERED_FACTOR and state.all_ordered
        return ColumnType(
            tag=TypeTag.ORDERED_FACTOR if ordered else TypeTag.FACTOR,
            levels=state.levels,
        )

    if (
        tag is TypeTag.CHARACTER
        and state.saw_factor
        and not state.conflict
        and state.character_values == set(state.levels or ())
    ):
        return ColumnType(tag=TypeTag.FACTOR, levels=state.levels)

    return ColumnType(tag=TypeTag.CHARACTER)


def merge_timezone(current: str | None, incoming: str | None) -> str | None:
    """Last non-empty timezone label wins; empty labels never overwrite."""
    return incoming if incoming else current
