"""Render a text segment and its annotations to a single markup string.

Typographic annotations become (possibly nested) elements: a known
structural style such as ``h2`` or ``li`` becomes that element, anything
else a ``<span>`` with the style as its class.  Semantic annotations become
pairs of empty boundary-marker spans that the reader's layout code uses to
find the screen coordinates of each annotation's endpoints.

Every plain-text run between tags is wrapped in ``<span offset="N">``,
where ``N`` is the absolute document offset of the run's first character.

Typographic annotations may nest but must not partially overlap: ``[0, 10]``
with ``[2, 5]`` renders correctly, ``[0, 10]`` with ``[4, 14]`` does not.
Keeping them nested is the data provider's responsibility.

Architecture:
    collect_tags -> sort_tags -> assemble.  Malformed ranges are clamped or
    dropped during collection; ``render`` never raises on annotation
    geometry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from textus.config import RenderConfig
from textus.markup.marker_constants import (
    TEXT_RUN_CLOSE,
    TEXT_RUN_OPEN_TEMPLATE,
    TRAILING_PAD,
)
from textus.markup.ordering import sort_tags
from textus.markup.tags import collect_tags
from textus.models import SemanticAnnotation, TextSegment, TypographicAnnotation

if TYPE_CHECKING:
    from collections.abc import Sequence

    from textus.markup.tags import Tag

logger = logging.getLogger(__name__)

type TypographyInput = TypographicAnnotation | Mapping[str, Any]
type SemanticInput = SemanticAnnotation | Mapping[str, Any]

_DEFAULT_CONFIG = RenderConfig()


def escape_brackets(text: str, *, legacy: bool = False) -> str:
    """Replace ``<`` and ``>`` with their HTML entities.

    With *legacy* set only the first occurrence of each is replaced,
    matching output stored by older renderers.
    """
    count = 1 if legacy else -1
    return text.replace("<", "&lt;", count).replace(">", "&gt;", count)


def _text_run(text: str, start: int, end: int, offset: int, legacy: bool) -> str:
    return (
        TEXT_RUN_OPEN_TEMPLATE.format(offset=start + offset)
        + escape_brackets(text[start:end], legacy=legacy)
        + TEXT_RUN_CLOSE
    )


def assemble(
    segment: TextSegment,
    tags: Sequence[Tag],
    config: RenderConfig = _DEFAULT_CONFIG,
) -> str:
    """Interleave wrapped text runs with already-sorted *tags*."""
    text = segment.text
    parts: list[str] = []
    cursor = 0

    for tag in tags:
        if tag.position > cursor:
            parts.append(
                _text_run(
                    text, cursor, tag.position, segment.offset, config.legacy_escape
                )
            )
            cursor = tag.position
        parts.append(tag.markup)

    if cursor < len(text):
        parts.append(
            _text_run(text, cursor, len(text), segment.offset, config.legacy_escape)
        )

    # Callers lay out consecutive segments and rely on this separator.
    parts.append(TRAILING_PAD)
    return "".join(parts)


def _typographic(items: Iterable[TypographyInput]) -> list[TypographicAnnotation]:
    return [
        item
        if isinstance(item, TypographicAnnotation)
        else TypographicAnnotation.from_mapping(item)
        for item in items
    ]


def _semantic(items: Iterable[SemanticInput]) -> list[SemanticAnnotation]:
    return [
        item
        if isinstance(item, SemanticAnnotation)
        else SemanticAnnotation.from_mapping(item)
        for item in items
    ]


def render(
    text: str,
    text_offset: int,
    typography: Iterable[TypographyInput] = (),
    semantics: Iterable[SemanticInput] = (),
    *,
    config: RenderConfig | None = None,
) -> str:
    """Render *text* and its annotations to markup.

    Args:
        text: The plain text of the segment.
        text_offset: Absolute document index of ``text[0]``; annotation
            positions are translated into the segment by subtracting it.
        typography: Typographic annotations, as ``TypographicAnnotation``
            or ``{start, end, css}`` mappings.
        semantics: Semantic annotations, as ``SemanticAnnotation`` or
            ``{start, end, id}`` mappings.
        config: Renderer options; defaults to ``RenderConfig()``.

    Returns:
        Markup string ending in a single trailing space.

    Raises:
        AnnotationFormatError: A mapping lacks a required field.  Annotation
            geometry itself never causes an error.
    """
    config = config or _DEFAULT_CONFIG
    segment = TextSegment(text=text, offset=text_offset)

    tags = collect_tags(segment, _typographic(typography), _semantic(semantics), config)
    ordered = sort_tags(tags, legacy_priority=config.legacy_priority)
    logger.debug(
        "Rendering segment at offset %d (%d chars) with %d tag(s)",
        text_offset,
        len(text),
        len(ordered),
    )
    return assemble(segment, ordered, config)


# Name used by the browser-side renderer this replaces.
markup_text = render
