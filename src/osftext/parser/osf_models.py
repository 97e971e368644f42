"""Data models for Open Screenplay Format (OSF 2.0) documents.

The models bind directly to the OSF XML shape with ``pydantic-xml``.
Every model searches its children in ``unordered`` mode, so elements and
attributes the models do not declare are ignored on parse rather than
rejected.

Attribute values are kept as the raw strings found in the document. Flags
such as ``bold`` are ON only when the stored value is exactly ``"1"``; the
``is_*`` accessors translate that into booleans for renderers.
"""

from pydantic_xml import BaseXmlModel, attr, element

from osftext.renderer.text_renderer import render_document

FLAG_ON = "1"

# Alignments
CENTER_ALIGNMENT = "Center"
LEFT_ALIGNMENT = "Left"
RIGHT_ALIGNMENT = "Right"

# Dynamic label types
PAGE_NO_TYPE = "Page #"
LAST_REVISED_TYPE = "Last Revised"

# Tab stop types
RIGHT_TAB = "Right"
LEFT_TAB = "Left"

# Number of characters a line can hold in a monospace font
MAX_LINE_WIDTH = 80


class Info(BaseXmlModel, tag="info", search_mode="unordered"):
    """Title and authorship metadata."""

    uuid: str | None = attr(default=None)
    title: str | None = attr(default=None)
    title_format: str | None = attr(default=None)
    written_by: str | None = attr(default=None)
    copyright: str | None = attr(default=None)
    contact: str | None = attr(default=None)
    drafts: str | None = attr(default=None)
    page_count: str | None = attr(name="pagecount", default=None)


class Settings(BaseXmlModel, tag="settings", search_mode="unordered"):
    """Page geometry and pagination settings of the authoring application."""

    page_width: str | None = attr(default=None)
    page_height: str | None = attr(default=None)
    margin_top: str | None = attr(default=None)
    margin_bottom: str | None = attr(default=None)
    margin_left: str | None = attr(default=None)
    margin_right: str | None = attr(default=None)
    normal_lines_per_inch: str | None = attr(name="normal_linesperinch", default=None)
    dialogue_continues: str | None = attr(default=None)
    cont_text: str | None = attr(default=None)
    more_text: str | None = attr(default=None)
    continued_text: str | None = attr(default=None)
    omitted_text: str | None = attr(default=None)
    page_number_format: str | None = attr(name="pagenumber_format", default=None)
    page_number_start: str | None = attr(name="pagenumber_start", default=None)
    page_number_first: str | None = attr(name="pagenumber_first", default=None)
    revision: str | None = attr(default=None)
    show_revisions: str | None = attr(default=None)
    scene_numbering: str | None = attr(default=None)
    scenes_locked: str | None = attr(default=None)
    page_numbering: str | None = attr(default=None)
    pages_locked: str | None = attr(default=None)


class Style(BaseXmlModel, tag="style", search_mode="unordered"):
    """Named paragraph style.

    Only ``base_style_name`` affects text rendering; the remaining
    attributes describe visual layout and are carried for round-tripping.
    """

    name: str | None = attr(default=None)
    builtin: str | None = attr(default=None)
    builtin_index: str | None = attr(default=None)
    label: str | None = attr(default=None)
    base_style_name: str | None = attr(name="basestylename", default=None)
    style_enter: str | None = attr(default=None)
    font: str | None = attr(default=None)
    size: str | None = attr(default=None)
    space_before: str | None = attr(name="spacebefore", default=None)
    style_tab: str | None = attr(default=None)
    keep_with_next: str | None = attr(name="keepwithnext", default=None)
    effects: str | None = attr(default=None)
    left_indent: str | None = attr(name="leftindent", default=None)
    right_indent: str | None = attr(name="rightindent", default=None)
    align: str | None = attr(default=None)


class Styles(BaseXmlModel, tag="styles", search_mode="unordered"):
    styles: list[Style] = element(default_factory=list)


class TextRun(BaseXmlModel, tag="text", search_mode="unordered"):
    """A span of text with independent emphasis flags."""

    underline: str | None = attr(default=None)
    italic: str | None = attr(default=None)
    bold: str | None = attr(default=None)
    strikethrough: str | None = attr(default=None)
    all_caps: str | None = attr(name="allcaps", default=None)
    content: str | None = None

    @property
    def text(self) -> str:
        return self.content or ""

    @property
    def is_underline(self) -> bool:
        return self.underline == FLAG_ON

    @property
    def is_italic(self) -> bool:
        return self.italic == FLAG_ON

    @property
    def is_bold(self) -> bool:
        return self.bold == FLAG_ON

    @property
    def is_strikethrough(self) -> bool:
        return self.strikethrough == FLAG_ON

    @property
    def is_all_caps(self) -> bool:
        return self.all_caps == FLAG_ON


class Mark(BaseXmlModel, tag="mark", search_mode="unordered"):
    """Revision marker. Marks do not affect rendering."""

    at: str | None = attr(default=None)
    revision: str | None = attr(default=None)


class Marks(BaseXmlModel, tag="marks", search_mode="unordered"):
    marks: list[Mark] = element(default_factory=list)


class Paragraph(BaseXmlModel, tag="para", search_mode="unordered"):
    """A styled paragraph made of text runs."""

    page_number: str | None = attr(default=None)
    bookmark: str | None = attr(default=None)
    style: Style | None = None
    runs: list[TextRun] = element(default_factory=list)
    marks: Marks | None = None

    @property
    def base_style_name(self) -> str | None:
        if self.style is None:
            return None
        return self.style.base_style_name


class Paragraphs(BaseXmlModel, tag="paragraphs", search_mode="unordered"):
    paragraphs: list[Paragraph] = element(default_factory=list)


class TitlePage(BaseXmlModel, tag="titlepage", search_mode="unordered"):
    paragraphs: list[Paragraph] = element(default_factory=list)


class Entry(BaseXmlModel, tag="entry", search_mode="unordered"):
    """User dictionary word. Fade In writes the word in a ``work`` attribute."""

    word: str | None = attr(name="work", default=None)


class UserDictionary(BaseXmlModel, tag="user_dictionary", search_mode="unordered"):
    entries: list[Entry] = element(default_factory=list)


class Spelling(BaseXmlModel, tag="spelling", search_mode="unordered"):
    language: str | None = attr(default=None)
    user_dictionary: UserDictionary | None = None


# Auxiliary lists. These records have no rendering role.


class Character(BaseXmlModel, tag="character", search_mode="unordered"):
    name: str | None = attr(default=None)


class Characters(BaseXmlModel, tag="characters", search_mode="unordered"):
    characters: list[Character] = element(default_factory=list)


class Location(BaseXmlModel, tag="location", search_mode="unordered"):
    name: str | None = attr(default=None)


class Locations(BaseXmlModel, tag="locations", search_mode="unordered"):
    locations: list[Location] = element(default_factory=list)


class SceneIntro(BaseXmlModel, tag="scene_intro", search_mode="unordered"):
    name: str | None = attr(default=None)


class SceneIntros(BaseXmlModel, tag="scene_intros", search_mode="unordered"):
    scene_intros: list[SceneIntro] = element(default_factory=list)


class SceneTime(BaseXmlModel, tag="scene_time", search_mode="unordered"):
    name: str | None = attr(default=None)


class SceneTimes(BaseXmlModel, tag="scene_times", search_mode="unordered"):
    scene_times: list[SceneTime] = element(default_factory=list)


class Extension(BaseXmlModel, tag="extension", search_mode="unordered"):
    name: str | None = attr(default=None)


class Extensions(BaseXmlModel, tag="extensions", search_mode="unordered"):
    extensions: list[Extension] = element(default_factory=list)


class Transition(BaseXmlModel, tag="transition", search_mode="unordered"):
    name: str | None = attr(default=None)


class Transitions(BaseXmlModel, tag="transitions", search_mode="unordered"):
    transitions: list[Transition] = element(default_factory=list)


class RevisionColor(BaseXmlModel, tag="revision_color", search_mode="unordered"):
    name: str | None = attr(default=None)
    index: str | None = attr(default=None)
    color_name: str | None = attr(default=None)
    color_index: str | None = attr(default=None)


class RevisionColors(BaseXmlModel, tag="revision_colors", search_mode="unordered"):
    revision_colors: list[RevisionColor] = element(default_factory=list)


class TagCategory(BaseXmlModel, tag="tag_category", search_mode="unordered"):
    name: str | None = attr(default=None)


class TagCategories(BaseXmlModel, tag="tag_categories", search_mode="unordered"):
    tag_categories: list[TagCategory] = element(default_factory=list)


class Lists(BaseXmlModel, tag="lists", search_mode="unordered"):
    """Reference lists kept by the authoring application."""

    characters: Characters | None = None
    locations: Locations | None = None
    scene_intros: SceneIntros | None = None
    scene_times: SceneTimes | None = None
    extensions: Extensions | None = None
    transitions: Transitions | None = None
    revision_colors: RevisionColors | None = None
    tag_categories: TagCategories | None = None


class Document(BaseXmlModel, tag="document", search_mode="unordered"):
    """Root of an OSF document.

    ``type`` and ``version`` are required on the root element; everything
    except the body ``paragraphs`` is optional.
    """

    document_type: str = attr(name="type")
    format_version: str = attr(name="version")
    info: Info | None = None
    settings: Settings | None = None
    styles: Styles | None = None
    paragraphs: Paragraphs
    spelling: Spelling | None = None
    lists: Lists | None = None
    title_page: TitlePage | None = None

    def render(self) -> str:
        """Render the title page followed by the body as plain text."""
        return render_document(self)

    def __str__(self) -> str:
        return self.render()
