"""Deterministic ordering of collected tags.

The sort must produce well-nested markup from tags that were collected in
arbitrary order.  Keys, in order:

1. position, ascending;
2. order class, ascending (see ``OrderClass``);
3. for two typographic opens: wider extent first so it encloses the
   narrower one; at equal extent, lower name priority first;
4. for two typographic closes: the mirror of rule 3, so the element opened
   last is closed first.

Closes still tied close in reverse collection order, mirroring their opens.
Anything else still tied keeps collection order, so ``sorted`` (stable) is
required.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from textus.markup.known_elements import priority_rank
from textus.markup.tags import TypographicClose, TypographicOpen

if TYPE_CHECKING:
    from collections.abc import Iterable

    from textus.markup.tags import Tag


def _compare_opens(a: TypographicOpen, b: TypographicOpen, legacy: bool) -> int:
    if a.end_position == b.end_position:
        return priority_rank(a.name_priority, legacy=legacy) - priority_rank(
            b.name_priority, legacy=legacy
        )
    # Older renderers also carried a descending-priority rule for this
    # branch, but it only fired on equal extents and so never applied.
    return b.end_position - a.end_position


def _compare_closes(a: TypographicClose, b: TypographicClose, legacy: bool) -> int:
    if a.start_position == b.start_position:
        return priority_rank(b.name_priority, legacy=legacy) - priority_rank(
            a.name_priority, legacy=legacy
        )
    return b.start_position - a.start_position


def compare_tags(a: Tag, b: Tag, *, legacy_priority: bool = False) -> int:
    """Three-way compare two tags for rendering order."""
    if a.position != b.position:
        return a.position - b.position
    if a.order_class != b.order_class:
        return a.order_class - b.order_class
    if isinstance(a, TypographicOpen) and isinstance(b, TypographicOpen):
        return _compare_opens(a, b, legacy_priority)
    if isinstance(a, TypographicClose) and isinstance(b, TypographicClose):
        return _compare_closes(a, b, legacy_priority)
    return 0


def sort_tags(tags: Iterable[Tag], *, legacy_priority: bool = False) -> list[Tag]:
    """Return *tags* in rendering order."""

    def compare(a: tuple[int, Tag], b: tuple[int, Tag]) -> int:
        (index_a, tag_a), (index_b, tag_b) = a, b
        result = compare_tags(tag_a, tag_b, legacy_priority=legacy_priority)
        if (
            result == 0
            and isinstance(tag_a, TypographicClose)
            and isinstance(tag_b, TypographicClose)
        ):
            # Fully tied opens keep collection order, so their closes reverse it.
            return index_b - index_a
        return result

    ordered = sorted(enumerate(tags), key=functools.cmp_to_key(compare))
    return [tag for _, tag in ordered]
