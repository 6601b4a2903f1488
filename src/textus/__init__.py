"""Textus - annotated-text rendering for the document reader.

Renders document text segments, with their typographic and semantic
annotations, to markup for the reader view.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from textus.markup import (
    KNOWN_TAG_NAMES,
    markup_text,
    overlaps_range,
    render,
    resolve_tag_name,
)
from textus.models import (
    AnnotationFormatError,
    SemanticAnnotation,
    TextSegment,
    TypographicAnnotation,
)

__version__ = "0.1.0"

__all__ = [
    "KNOWN_TAG_NAMES",
    "AnnotationFormatError",
    "SemanticAnnotation",
    "TextSegment",
    "TypographicAnnotation",
    "markup_text",
    "overlaps_range",
    "render",
    "resolve_tag_name",
    "setup_logging",
]


def setup_logging(level: str = "INFO", log_dir: Path | None = None) -> None:
    """Configure logging to the console and, if *log_dir* is set, a rotating file."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"textus.{os.getpid()}.log"

        # File handler - detailed logging with rotation (10MB, keep 5 backups)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    # Console handler - stderr, so rendered markup on stdout stays clean
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        logging.debug("Logging configured. Log file: %s", log_file.absolute())
