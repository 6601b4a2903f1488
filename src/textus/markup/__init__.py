"""Annotated-text markup rendering.

Turns a plain-text segment plus typographic and semantic annotations into
one markup string for the reader view.
"""

from textus.markup.known_elements import KNOWN_TAG_NAMES, resolve_tag_name
from textus.markup.render import escape_brackets, markup_text, render
from textus.markup.tags import OrderClass, overlaps_range

__all__ = [
    "KNOWN_TAG_NAMES",
    "OrderClass",
    "escape_brackets",
    "markup_text",
    "overlaps_range",
    "render",
    "resolve_tag_name",
]
