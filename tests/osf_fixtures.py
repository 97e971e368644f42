"""Helpers for building OSF test documents."""


def osf_document(body: str, titlepage: str = "") -> bytes:
    """Wrap paragraph markup in a minimal OSF document."""
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="no" ?>\n'
        '<document type="Open Screenplay Format document" version="40">'
        f"<paragraphs>{body}</paragraphs>{titlepage}</document>"
    ).encode("utf-8")
