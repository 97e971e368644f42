"""Open Screenplay Format parser for osftext."""

from __future__ import annotations

from .osf_models import Document, Paragraph, Style, TextRun, TitlePage
from .osf_parser import (
    OSFParser,
    cleanup_self_closing_elements,
    parse,
    parse_file,
    to_xml,
)

__all__ = [
    "Document",
    "OSFParser",
    "Paragraph",
    "Style",
    "TextRun",
    "TitlePage",
    "cleanup_self_closing_elements",
    "parse",
    "parse_file",
    "to_xml",
]
