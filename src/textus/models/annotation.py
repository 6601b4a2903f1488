"""Data models for text segments and their annotations.

These are plain frozen dataclasses.  Coordinates on annotations are
absolute character indices into the whole document; a ``TextSegment``
records where its own text starts in that document.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

# Keys accepted for a typographic annotation's style, in lookup order.
# ``css`` is the name used by the document store's JSON payloads.
_STYLE_KEYS = ("style_id", "styleId", "css")


class AnnotationFormatError(ValueError):
    """An annotation mapping is missing a field or has a non-integer bound."""


def _bound(data: Mapping[str, Any], key: str) -> int:
    try:
        return int(data[key])
    except KeyError:
        msg = f"annotation is missing required field {key!r}: {dict(data)!r}"
        raise AnnotationFormatError(msg) from None
    except (TypeError, ValueError) as exc:
        msg = f"annotation field {key!r} must be an integer, got {data[key]!r}"
        raise AnnotationFormatError(msg) from exc


@dataclass(frozen=True, slots=True)
class TextSegment:
    """A fragment of document text and the absolute offset of its first char."""

    text: str
    offset: int = 0

    @property
    def end(self) -> int:
        """Absolute offset one past the last character."""
        return self.offset + len(self.text)

    def clamp(self, absolute: int) -> int:
        """Translate an absolute offset into ``[0, len(text)]``."""
        return min(max(absolute - self.offset, 0), len(self.text))


@dataclass(frozen=True, slots=True)
class TypographicAnnotation:
    """A styling range rendered as a (possibly nested) element."""

    start: int
    end: int
    style_id: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TypographicAnnotation:
        """Build from a ``{start, end, css}`` style mapping."""
        for key in _STYLE_KEYS:
            if key in data:
                style_id = str(data[key])
                break
        else:
            keys = "/".join(_STYLE_KEYS)
            msg = f"typographic annotation has no style ({keys}): {dict(data)!r}"
            raise AnnotationFormatError(msg)
        return cls(
            start=_bound(data, "start"),
            end=_bound(data, "end"),
            style_id=style_id,
        )


@dataclass(frozen=True, slots=True)
class SemanticAnnotation:
    """A named range whose two endpoints are marked for coordinate lookup."""

    start: int
    end: int
    id: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SemanticAnnotation:
        """Build from a ``{start, end, id}`` mapping; other keys are ignored."""
        if "id" not in data:
            msg = f"semantic annotation is missing required field 'id': {dict(data)!r}"
            raise AnnotationFormatError(msg)
        return cls(
            start=_bound(data, "start"),
            end=_bound(data, "end"),
            id=str(data["id"]),
        )
