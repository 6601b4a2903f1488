"""Markup templates emitted by the annotated-text renderer.

The boundary-marker classes are looked up by the reader's layout code to
find the screen coordinates of each semantic annotation endpoint, so the
defaults must stay in step with the stylesheet and JS that consume them.

Shared between:
- markup/tags.py (tag collection)
- markup/render.py (text run wrapping)
- config.py (overridable class names)
"""

from __future__ import annotations

# Fallback element for styles that are not in the known-element table.
GENERIC_INLINE_ELEMENT = "span"

DEFAULT_START_MARKER_CLASS = "textus-annotation-start"
DEFAULT_END_MARKER_CLASS = "textus-annotation-end"

# Format: empty span carrying the annotation id, one per endpoint
BOUNDARY_MARKER_TEMPLATE = '<span class="{css_class}" annotation-id="{id}"></span>'

# Format: typographic open/close pair; offset is absolute in the document
OPEN_TAG_TEMPLATE = '<{name} offset="{offset}" class="{style_id}">'
CLOSE_TAG_TEMPLATE = "</{name}>"

# Format: coordinate-tracking wrapper around a plain-text run
TEXT_RUN_OPEN_TEMPLATE = '<span offset="{offset}">'
TEXT_RUN_CLOSE = "</span>"

TRAILING_PAD = " "
