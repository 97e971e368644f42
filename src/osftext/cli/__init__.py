"""osftext CLI package."""

from .main import main, text_app, xml_app, xml_main

__all__ = ["main", "text_app", "xml_app", "xml_main"]
