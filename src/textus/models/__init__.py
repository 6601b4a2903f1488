"""Data models for annotated text segments."""

from textus.models.annotation import (
    AnnotationFormatError,
    SemanticAnnotation,
    TextSegment,
    TypographicAnnotation,
)

__all__ = [
    "AnnotationFormatError",
    "SemanticAnnotation",
    "TextSegment",
    "TypographicAnnotation",
]
