"""Plain text rendering for OSF documents."""

from __future__ import annotations

from .text_renderer import (
    BaseStyle,
    apply_style,
    render_document,
    render_paragraph,
    render_paragraphs,
    render_text_run,
)

__all__ = [
    "BaseStyle",
    "apply_style",
    "render_document",
    "render_paragraph",
    "render_paragraphs",
    "render_text_run",
]
