"""Open Screenplay Format parser and writer using pydantic-xml."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from lxml import etree
from pydantic import ValidationError

from osftext.config import get_logger
from osftext.exceptions import MalformedXMLError
from osftext.parser.osf_models import Document
from osftext.parser.package_loader import (
    DOCUMENT_MEMBER,
    PACKAGED_PROJECT_EXTENSIONS,
    read_document_source,
)

logger = get_logger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="no" ?>'

# Elements the authoring application expects in compact form when empty
SELF_CLOSING_ELEMENTS = (
    "info",
    "settings",
    "styles",
    "style",
    "mark",
    "text",
    "entry",
    "character",
    "location",
    "scene_time",
    "extension",
    "revision_color",
    "tag_category",
    "transition",
    "spelling",
    "user_dictionary",
    "paragraphs",
    "para",
    "locations",
    "titlepage",
)

_EMPTY_PAIR_PATTERN = re.compile(
    rb"<("
    + b"|".join(re.escape(name.encode()) for name in SELF_CLOSING_ELEMENTS)
    + rb")(\s[^<>]*?)?(?<!/)></\1>"
)


def cleanup_self_closing_elements(src: bytes) -> bytes:
    """Rewrite ``<tag ...></tag>`` into ``<tag .../>`` for the known elements.

    This is a textual substitution over serialized XML, so running it a
    second time finds nothing left to rewrite.
    """
    return _EMPTY_PAIR_PATTERN.sub(rb"<\1\2/>", src)


def _flatten_text_runs(root: etree._Element) -> None:
    """Collapse each <text> element to its own character data.

    The binding layer only reads the text before the first child node, so
    the tails of inline children and comments are folded in and the
    children dropped.
    """
    for run in list(root.iter("text")):
        if len(run) == 0:
            continue
        run.text = (run.text or "") + "".join(child.tail or "" for child in run)
        for child in list(run):
            run.remove(child)


class OSFParser:
    """Parse OSF XML documents from bytes or from files on disk."""

    def __init__(
        self,
        packaged_extensions: Iterable[str] = PACKAGED_PROJECT_EXTENSIONS,
        document_member: str = DOCUMENT_MEMBER,
    ) -> None:
        """Initialize the OSF parser.

        Args:
            packaged_extensions: File extensions opened as zip archives
            document_member: Archive member that holds the OSF XML
        """
        self.packaged_extensions = tuple(ext.lower() for ext in packaged_extensions)
        self.document_member = document_member

    def _parse_tree(self, src: bytes) -> etree._Element:
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        try:
            root = etree.fromstring(src, parser=parser)
        except (etree.XMLSyntaxError, ValueError) as e:
            raise MalformedXMLError(
                message="Input is not well-formed XML",
                hint="Check that the file is an Open Screenplay Format document.",
                details={"parser_error": str(e), "size": len(src)},
            ) from e
        _flatten_text_runs(root)
        return root

    def parse(self, src: bytes | str) -> Document:
        """Parse OSF XML content into a Document.

        Args:
            src: Raw OSF XML

        Returns:
            Parsed Document

        Raises:
            MalformedXMLError: If the XML is malformed or not an OSF document
        """
        if isinstance(src, str):
            src = src.encode("utf-8")

        root = self._parse_tree(src)
        if root.tag != "document":
            raise MalformedXMLError(
                message=f"Unexpected root element <{root.tag}>",
                hint="OSF documents start with a <document> element.",
                details={"root": str(root.tag)},
            )

        try:
            document = Document.from_xml_tree(root)
        except ValidationError as e:
            raise MalformedXMLError(
                message="XML does not match the OSF document structure",
                hint="The <document> element needs type and version attributes "
                "and a <paragraphs> section.",
                details={"errors": e.error_count(), "parser_error": str(e)},
            ) from e

        logger.debug(
            "Parsed OSF document",
            size=len(src),
            version=document.format_version,
            paragraphs=len(document.paragraphs.paragraphs),
        )
        return document

    def parse_file(self, file_path: Path | str) -> Document:
        """Parse an OSF file or a packaged screenplay project.

        Args:
            file_path: Path to a flat OSF file or a packaged project

        Returns:
            Parsed Document

        Raises:
            DocumentIOError: If the file or archive cannot be read
            MalformedXMLError: If the contents are not an OSF document
        """
        file_path = Path(file_path)
        logger.debug(f"Parsing OSF file: {file_path}")
        src = read_document_source(
            file_path, self.packaged_extensions, self.document_member
        )
        return self.parse(src)

    def to_xml(self, document: Document) -> bytes:
        """Serialize a Document back into indented OSF XML.

        Args:
            document: Document to serialize

        Returns:
            UTF-8 XML with the fixed declaration header and empty elements in
            self-closing form
        """
        body = document.to_xml(
            exclude_none=True,
            pretty_print=True,
            encoding="UTF-8",
            xml_declaration=False,
        )
        return cleanup_self_closing_elements(
            XML_DECLARATION.encode("utf-8") + b"\n" + body
        )


_default_parser = OSFParser()


def parse(src: bytes | str) -> Document:
    """Parse OSF XML bytes with the default parser."""
    return _default_parser.parse(src)


def parse_file(file_path: Path | str) -> Document:
    """Parse an OSF file or ``.fadein`` project with the default parser."""
    return _default_parser.parse_file(file_path)


def to_xml(document: Document) -> bytes:
    return _default_parser.to_xml(document)
