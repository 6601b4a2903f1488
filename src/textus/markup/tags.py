"""Tag collection: annotations to positional open/close/boundary records.

Each annotation that overlaps the segment contributes one or two tags.
Positions are segment-relative and clamped to ``[0, len(text)]``, so an
annotation crossing the segment edge is clipped rather than rejected.

Tag records are ephemeral: built, sorted and consumed within one render.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

from textus.markup.known_elements import resolve_tag_name
from textus.markup.marker_constants import (
    BOUNDARY_MARKER_TEMPLATE,
    CLOSE_TAG_TEMPLATE,
    OPEN_TAG_TEMPLATE,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from textus.config import RenderConfig
    from textus.models import SemanticAnnotation, TextSegment, TypographicAnnotation

logger = logging.getLogger(__name__)


class OrderClass(IntEnum):
    """Secondary sort key for tags sharing a position.

    Semantic ends flush before typographic closes, and typographic opens
    precede semantic starts, so boundary markers always sit inside any
    element whose edge coincides with theirs.
    """

    SEMANTIC_END = 0
    TYPOGRAPHIC_CLOSE = 1
    TYPOGRAPHIC_OPEN = 2
    SEMANTIC_START = 3


@dataclass(frozen=True, slots=True)
class SemanticBoundary:
    """Zero-width marker for one endpoint of a semantic annotation."""

    position: int
    markup: str
    order_class: OrderClass


@dataclass(frozen=True, slots=True)
class TypographicOpen:
    """Opening element tag; ``end_position`` is where its close sits."""

    position: int
    markup: str
    end_position: int
    name_priority: int | None

    @property
    def order_class(self) -> OrderClass:
        return OrderClass.TYPOGRAPHIC_OPEN


@dataclass(frozen=True, slots=True)
class TypographicClose:
    """Closing element tag; ``start_position`` is where its open sits."""

    position: int
    markup: str
    start_position: int
    name_priority: int | None

    @property
    def order_class(self) -> OrderClass:
        return OrderClass.TYPOGRAPHIC_CLOSE


type Tag = SemanticBoundary | TypographicOpen | TypographicClose


def overlaps_range(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Return True if ranges ``[start_a, end_a)`` and ``[start_b, end_b)`` overlap.

    Ranges that merely touch (``end_b == start_a`` or ``start_b == end_a``)
    do not overlap.
    """
    return end_b > start_a and start_b < end_a


def _semantic_tags(
    annotation: SemanticAnnotation,
    segment: TextSegment,
    config: RenderConfig,
) -> tuple[SemanticBoundary, ...]:
    start = segment.clamp(annotation.start)
    end = segment.clamp(annotation.end)
    start_marker = BOUNDARY_MARKER_TEMPLATE.format(
        css_class=config.start_marker_class, id=annotation.id
    )
    end_marker = BOUNDARY_MARKER_TEMPLATE.format(
        css_class=config.end_marker_class, id=annotation.id
    )
    if start == end:
        # Point annotation: a separate end tag would sort before its start.
        return (
            SemanticBoundary(
                position=start,
                markup=start_marker + end_marker,
                order_class=OrderClass.SEMANTIC_START,
            ),
        )
    return (
        SemanticBoundary(
            position=start,
            markup=start_marker,
            order_class=OrderClass.SEMANTIC_START,
        ),
        SemanticBoundary(
            position=end,
            markup=end_marker,
            order_class=OrderClass.SEMANTIC_END,
        ),
    )


def _typographic_tags(
    annotation: TypographicAnnotation,
    segment: TextSegment,
) -> tuple[TypographicOpen | TypographicClose, ...]:
    name, priority = resolve_tag_name(annotation.style_id)
    start = segment.clamp(annotation.start)
    end = segment.clamp(annotation.end)
    open_markup = OPEN_TAG_TEMPLATE.format(
        name=name,
        offset=start + segment.offset,
        style_id=annotation.style_id,
    )
    close_markup = CLOSE_TAG_TEMPLATE.format(name=name)
    if start == end:
        # Empty element; its zero extent sorts it innermost among opens here.
        return (
            TypographicOpen(
                position=start,
                markup=open_markup + close_markup,
                end_position=end,
                name_priority=priority,
            ),
        )
    return (
        TypographicOpen(
            position=start,
            markup=open_markup,
            end_position=end,
            name_priority=priority,
        ),
        TypographicClose(
            position=end,
            markup=close_markup,
            start_position=start,
            name_priority=priority,
        ),
    )


def _collectable(segment: TextSegment, start: int, end: int) -> bool:
    # Inverted ranges are excluded even when they straddle the segment.
    return start <= end and overlaps_range(segment.offset, segment.end, start, end)


def collect_tags(
    segment: TextSegment,
    typography: Iterable[TypographicAnnotation],
    semantics: Iterable[SemanticAnnotation],
    config: RenderConfig,
) -> list[Tag]:
    """Collect tags for every annotation overlapping *segment*.

    Semantic tags are collected first, then typographic ones, each family
    in input order.  The order matters only for tags the sort considers
    equal, which keep their collection order.
    """
    tags: list[Tag] = []
    dropped = 0

    for semantic in semantics:
        if _collectable(segment, semantic.start, semantic.end):
            tags.extend(_semantic_tags(semantic, segment, config))
        else:
            dropped += 1

    for typographic in typography:
        if _collectable(segment, typographic.start, typographic.end):
            tags.extend(_typographic_tags(typographic, segment))
        else:
            dropped += 1

    if dropped:
        logger.debug(
            "Dropped %d annotation(s) outside segment [%d, %d)",
            dropped,
            segment.offset,
            segment.end,
        )
    return tags
