# ABOUTME: Reads a document file for CLI commands as plain text or HTML.
# ABOUTME: HTML is detected by extension unless the caller forces a format.

from pathlib import Path

from artref.annotation.document import Document

_HTML_SUFFIXES = {".html", ".htm", ".xhtml"}


def read_document(path: Path, as_html: bool | None = None) -> Document:
    if as_html is None:
        as_html = path.suffix.lower() in _HTML_SUFFIXES
    content = path.read_text(encoding="utf-8", errors="replace")
    return Document.from_html(content) if as_html else Document.from_text(content)
