"""osftext: plain text rendering for Open Screenplay Format documents.

Reads OSF 2.0 XML, either as a flat file or packaged inside a Fade In
``.fadein`` project, and renders it as readable plain text with
markdown-like emphasis.
"""

from .config import OSFTextSettings, get_logger, get_settings
from .exceptions import DocumentIOError, MalformedXMLError, OSFTextError
from .parser import Document, OSFParser, parse, parse_file, to_xml

__version__ = "0.1.0"
__license__ = "BSD-2-Clause"

__all__ = [
    "Document",
    "DocumentIOError",
    "MalformedXMLError",
    "OSFParser",
    "OSFTextError",
    "OSFTextSettings",
    "__version__",
    "get_logger",
    "get_settings",
    "parse",
    "parse_file",
    "to_xml",
]
