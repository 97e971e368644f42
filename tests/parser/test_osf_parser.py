"""Tests for parsing OSF XML from bytes, flat files and packaged projects."""

import pytest

from osftext.exceptions import DocumentIOError, MalformedXMLError
from osftext.parser.osf_parser import OSFParser, parse, parse_file
from osftext.parser.package_loader import is_packaged_project
from tests.osf_fixtures import osf_document


class TestParseBytes:
    """Test parse() on in-memory XML."""

    def test_parse_sample_document(self, sample_osf_bytes):
        """Test that every section of the sample is bound to the model."""
        document = parse(sample_osf_bytes)

        assert document.document_type == "Open Screenplay Format document"
        assert document.format_version == "40"
        assert document.info.title == "Coffee Shop"
        assert document.info.written_by == "Jane Writer"
        assert document.info.page_count == "1"
        assert document.settings.page_width == "8.50"
        assert document.settings.cont_text == "(cont'd)"
        assert [s.name for s in document.styles.styles] == ["Scene Heading", "Action"]
        assert document.styles.styles[0].builtin_index == "1"
        assert len(document.paragraphs.paragraphs) == 6
        assert document.spelling.language == "en_US"
        assert document.spelling.user_dictionary.entries[0].word == "Maya"
        assert len(document.title_page.paragraphs) == 2

    def test_parse_auxiliary_lists(self, sample_osf_bytes):
        """Test that auxiliary lists are retained as metadata."""
        lists = parse(sample_osf_bytes).lists

        assert [c.name for c in lists.characters.characters] == ["MAYA"]
        assert [loc.name for loc in lists.locations.locations] == ["COFFEE SHOP"]
        assert [t.name for t in lists.scene_times.scene_times] == ["DAY", "NIGHT"]
        assert lists.transitions.transitions[0].name == "CUT TO:"
        color = lists.revision_colors.revision_colors[0]
        assert (color.name, color.index, color.color_name, color.color_index) == (
            "Blue",
            "1",
            "blue",
            "2",
        )
        assert lists.scene_intros is None
        assert lists.tag_categories is None

    def test_parse_paragraph_details(self, sample_osf_bytes):
        """Test styles, runs and marks inside a paragraph."""
        action = parse(sample_osf_bytes).paragraphs.paragraphs[1]

        assert action.base_style_name == "Action"
        assert [r.text for r in action.runs] == [
            "Rain streaks the window. ",
            "MAYA",
            " waits.",
        ]
        assert action.runs[1].bold == "1"
        assert action.runs[1].is_bold
        assert not action.runs[0].is_bold
        assert action.marks.marks[0].at == "3"
        assert action.marks.marks[0].revision == "1"

    def test_flags_keep_raw_values(self):
        """Test that flag attributes are stored exactly as written."""
        document = parse(
            osf_document('<para><text bold="0" italic="true" allcaps="1">x</text></para>')
        )
        text = document.paragraphs.paragraphs[0].runs[0]

        assert text.bold == "0"
        assert text.italic == "true"
        assert text.all_caps == "1"
        assert not text.is_bold
        assert not text.is_italic
        assert text.is_all_caps

    def test_unknown_elements_are_ignored(self):
        """Test that undeclared elements and attributes do not fail parsing."""
        document = parse(
            osf_document(
                '<para color="red"><future_thing/><text>hello</text>'
                "<text_effects>skip</text_effects></para>"
                "<bogus><para><text>nested</text></para></bogus>"
            )
        )

        assert len(document.paragraphs.paragraphs) == 1
        assert [r.text for r in document.paragraphs.paragraphs[0].runs] == ["hello"]

    def test_text_after_inline_children_is_kept(self):
        """Test that a run keeps the character data around comments and children."""
        document = parse(
            osf_document(
                "<para><text>Hello <!-- rev 2 -->world</text>"
                '<text bold="1">a<br/>b<font>x</font>c</text></para>'
            )
        )
        runs = document.paragraphs.paragraphs[0].runs

        assert [r.text for r in runs] == ["Hello world", "abc"]
        assert runs[1].is_bold
        assert document.render() == "Hello world**abc**\n"

    def test_optional_sections_default_to_none(self):
        """Test that a minimal document has no optional sections."""
        document = parse(osf_document(""))

        assert document.info is None
        assert document.settings is None
        assert document.styles is None
        assert document.spelling is None
        assert document.lists is None
        assert document.title_page is None
        assert document.paragraphs.paragraphs == []

    def test_parse_accepts_text(self):
        """Test that str input is encoded before parsing."""
        document = parse(osf_document("<para><text>hi</text></para>").decode("utf-8"))
        assert document.render() == "hi\n"

    def test_parse_unicode_content(self):
        """Test that non-ASCII text survives parsing."""
        document = parse(osf_document("<para><text>Café naïve</text></para>"))
        assert document.paragraphs.paragraphs[0].runs[0].text == "Café naïve"

    def test_empty_text_element(self):
        """Test that an empty text element renders as an empty run."""
        document = parse(osf_document('<para><text bold="1"/></para>'))
        assert document.paragraphs.paragraphs[0].runs[0].text == ""
        assert document.render() == "\n"


class TestParseErrors:
    """Test MalformedXMLError reporting."""

    def test_not_xml(self):
        """Test that non-XML input raises MalformedXMLError."""
        with pytest.raises(MalformedXMLError) as exc_info:
            parse(b"INT. HOUSE - DAY\nThis is not XML.")
        assert "not well-formed" in str(exc_info.value)

    def test_truncated_xml(self):
        """Test that truncated XML raises MalformedXMLError."""
        with pytest.raises(MalformedXMLError):
            parse(osf_document("<para><text>hi</text></para>")[:-20])

    def test_empty_input(self):
        """Test that empty input raises MalformedXMLError."""
        with pytest.raises(MalformedXMLError):
            parse(b"")

    def test_wrong_root_element(self):
        """Test that a non-document root raises MalformedXMLError."""
        with pytest.raises(MalformedXMLError) as exc_info:
            parse(b"<screenplay><paragraphs/></screenplay>")
        assert "screenplay" in str(exc_info.value)

    def test_missing_root_attributes(self):
        """Test that missing type and version attributes are rejected."""
        with pytest.raises(MalformedXMLError):
            parse(b"<document><paragraphs/></document>")

    def test_missing_paragraphs(self):
        """Test that a document without a body is rejected."""
        with pytest.raises(MalformedXMLError):
            parse(b'<document type="osf" version="40"><info/></document>')

    def test_error_is_chained(self):
        """Test that the underlying parser error is kept as the cause."""
        with pytest.raises(MalformedXMLError) as exc_info:
            parse(b"<document")
        assert exc_info.value.__cause__ is not None


class TestParseFile:
    """Test parse_file() container sniffing."""

    def test_flat_file(self, sample_osf_path, sample_osf_bytes):
        """Test that flat OSF files are read directly."""
        assert parse_file(sample_osf_path) == parse(sample_osf_bytes)

    def test_packaged_project_matches_flat_parse(self, make_fadein, sample_osf_bytes):
        """Test that the document member parses the same as the raw bytes."""
        archive = make_fadein(
            {
                "document.xml": sample_osf_bytes,
                "thumbnail.png": b"\x89PNG",
            }
        )
        assert parse_file(archive) == parse(sample_osf_bytes)

    def test_packaged_project_extension_is_case_insensitive(
        self, make_fadein, sample_osf_bytes
    ):
        """Test that upper-case extensions are also unpacked."""
        archive = make_fadein(
            {"document.xml": sample_osf_bytes}, name="Screenplay.FADEIN"
        )
        assert parse_file(archive).info.title == "Coffee Shop"

    def test_member_name_must_match_exactly(self, make_fadein, sample_osf_bytes):
        """Test that only a member named exactly document.xml is used."""
        archive = make_fadein(
            {
                "backup/document.xml": sample_osf_bytes,
                "Document.xml": sample_osf_bytes,
            }
        )
        with pytest.raises(MalformedXMLError):
            parse_file(archive)

    def test_missing_member_yields_xml_error(self, make_fadein):
        """Test that a project without document.xml parses empty bytes."""
        archive = make_fadein({"settings.xml": b"<settings/>"})
        with pytest.raises(MalformedXMLError):
            parse_file(archive)

    def test_missing_file(self, tmp_path):
        """Test that a missing flat file raises DocumentIOError."""
        with pytest.raises(DocumentIOError) as exc_info:
            parse_file(tmp_path / "missing.osf")
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_missing_project(self, tmp_path):
        """Test that a missing packaged project raises DocumentIOError."""
        with pytest.raises(DocumentIOError):
            parse_file(tmp_path / "missing.fadein")

    def test_project_that_is_not_a_zip(self, tmp_path, sample_osf_bytes):
        """Test that a .fadein file with flat XML raises DocumentIOError."""
        fake = tmp_path / "flat.fadein"
        fake.write_bytes(sample_osf_bytes)
        with pytest.raises(DocumentIOError):
            parse_file(fake)

    def test_other_extensions_read_directly(self, tmp_path, sample_osf_bytes):
        """Test that any other extension is parsed as flat XML."""
        flat = tmp_path / "screenplay.xml"
        flat.write_bytes(sample_osf_bytes)
        assert parse_file(flat).info.title == "Coffee Shop"

    def test_custom_extensions_and_member(self, make_fadein, sample_osf_bytes):
        """Test a parser configured for another container layout."""
        archive = make_fadein({"content/osf.xml": sample_osf_bytes}, name="x.osfz")
        parser = OSFParser(
            packaged_extensions=[".OSFZ"], document_member="content/osf.xml"
        )
        assert parser.parse_file(archive).info.title == "Coffee Shop"


class TestIsPackagedProject:
    """Test the extension check used for container sniffing."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("script.fadein", True),
            ("script.FadeIn", True),
            ("archive.tar.fadein", True),
            ("script.osf", False),
            ("script.fadein.osf", False),
            ("fadein", False),
            ("script", False),
        ],
    )
    def test_extension_detection(self, name, expected):
        """Test detection across extension spellings."""
        assert is_packaged_project(name) is expected
