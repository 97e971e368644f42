"""Plain text rendering of parsed OSF documents.

Runs are wrapped in markdown-like emphasis markers, paragraphs are
transformed according to the base style of their paragraph style, and
each paragraph ends with exactly one newline.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from osftext.parser.osf_models import Document, Paragraph, TextRun


class BaseStyle(str, Enum):
    """Semantic paragraph categories named by a style's ``basestylename``."""

    GENERAL = "Normal Text"
    SCENE_HEADING = "Scene Heading"
    ACTION = "Action"
    CHARACTER = "Character"
    DIALOGUE = "Dialogue"
    PARENTHETICAL = "Parenthetical"
    TRANSITION = "Transition"
    CAST_LIST = "Cast List"
    SHOT = "Shot"
    SINGING = "Singing"

    @classmethod
    def lookup(cls, name: str | None) -> BaseStyle | None:
        """Return the base style for ``name`` or None when it is not known."""
        if name is None:
            return None
        try:
            return cls(name)
        except ValueError:
            return None


def _unchanged(text: str) -> str:
    return text


def _upper(text: str) -> str:
    return text.upper()


def _parenthesize(text: str) -> str:
    # Skipped when either delimiter is already present
    if not text.startswith("(") and not text.endswith(")"):
        return f"({text})"
    return text


def _sung(text: str) -> str:
    return f"~{text}~"


STYLE_TRANSFORMS: dict[BaseStyle, Callable[[str], str]] = {
    BaseStyle.GENERAL: _unchanged,
    BaseStyle.SCENE_HEADING: _upper,
    BaseStyle.ACTION: _unchanged,
    BaseStyle.CHARACTER: _upper,
    BaseStyle.DIALOGUE: _unchanged,
    BaseStyle.PARENTHETICAL: _parenthesize,
    BaseStyle.TRANSITION: _upper,
    BaseStyle.CAST_LIST: _unchanged,
    BaseStyle.SHOT: _unchanged,
    BaseStyle.SINGING: _sung,
}


def render_text_run(run: TextRun | None) -> str:
    """Render one run with its emphasis markers.

    Markers apply in a fixed order: underline, italic, bold, then all caps
    upper-cases everything built so far, and strikethrough wraps the result.
    Runs whose text is blank once stripped come back untouched.
    """
    if run is None:
        return ""
    s = run.text
    if not s.strip():
        return s
    if run.is_underline:
        s = f"_{s}_"
    if run.is_italic:
        s = f"*{s}*"
    if run.is_bold:
        s = f"**{s}**"
    if run.is_all_caps:
        s = s.upper()
    if run.is_strikethrough:
        s = f"~~{s}~~"
    return s


def apply_style(text: str, base_style_name: str | None) -> str:
    """Apply the transform for ``base_style_name``; unknown names pass through."""
    style = BaseStyle.lookup(base_style_name)
    if style is None:
        return text
    return STYLE_TRANSFORMS[style](text)


def render_paragraph(paragraph: Paragraph | None) -> str:
    """Render a paragraph followed by its single trailing newline."""
    if paragraph is None:
        return ""
    joined = "".join(render_text_run(run) for run in paragraph.runs)
    return apply_style(joined, paragraph.base_style_name) + "\n"


def render_paragraphs(paragraphs: Iterable[Paragraph] | None) -> str:
    if paragraphs is None:
        return ""
    return "".join(render_paragraph(paragraph) for paragraph in paragraphs)


def render_document(document: Document | None) -> str:
    """Render the title page, if any, immediately followed by the body."""
    if document is None:
        return ""
    parts = []
    if document.title_page is not None:
        parts.append(render_paragraphs(document.title_page.paragraphs))
    if document.paragraphs is not None:
        parts.append(render_paragraphs(document.paragraphs.paragraphs))
    return "".join(parts)
