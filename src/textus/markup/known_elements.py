"""Known structural elements for typographic annotations.

A typographic annotation whose style identifier names one of these elements
is rendered as that element; anything else becomes a generic ``<span>``
carrying the style as its class.
"""

from __future__ import annotations

from typing import NamedTuple

from textus.markup.marker_constants import GENERIC_INLINE_ELEMENT

# Order matters: the index is the element's nesting priority when two
# annotations open and close at the same positions (lower opens first).
KNOWN_TAG_NAMES: tuple[str, ...] = (
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "ul",
    "ol",
    "li",
)

_KNOWN_TAG_INDEX: dict[str, int] = {name: i for i, name in enumerate(KNOWN_TAG_NAMES)}


class ResolvedTag(NamedTuple):
    """Element name and nesting priority for a style identifier.

    ``priority`` is ``None`` when the style is not a known element.
    """

    name: str
    priority: int | None


def resolve_tag_name(style_id: str) -> ResolvedTag:
    """Map a style identifier to its element name and priority."""
    index = _KNOWN_TAG_INDEX.get(style_id)
    if index is None:
        return ResolvedTag(GENERIC_INLINE_ELEMENT, None)
    return ResolvedTag(KNOWN_TAG_NAMES[index], index)


def priority_rank(priority: int | None, *, legacy: bool = False) -> int:
    """Return the sortable rank for a resolved priority.

    Unresolved styles rank after every known element so that, at equal
    extent, a structural element encloses a generic span.  With *legacy*
    set they rank 0, colliding with ``h1`` as older renderers did.
    """
    if priority is not None:
        return priority
    return 0 if legacy else len(KNOWN_TAG_NAMES)
