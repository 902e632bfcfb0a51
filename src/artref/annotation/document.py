# ABOUTME: Host-document access for annotation: ordered text blocks with span tagging.
# ABOUTME: Builds documents from plain text or HTML (BeautifulSoup) and records tagged marker spans.

import itertools
import re
from collections.abc import Iterator
from dataclasses import dataclass

from bs4 import BeautifulSoup

BLOCK_TAGS = ("p", "h1", "h2", "h3", "li")
_SKIP_TAGS = ("script", "style", "noscript")

_WHITESPACE_RE = re.compile(r"\s+")
_BLANK_LINES_RE = re.compile(r"\n\s*\n")


@dataclass(frozen=True)
class SpanHandle:
    """Handle to a tagged sub-span of a block's text."""

    marker_id: str
    block_index: int
    offset: int
    length: int
    text: str

    @property
    def end(self) -> int:
        return self.offset + self.length


class TextBlock:
    """A block-level element (paragraph, heading, list item) and its tagged spans."""

    def __init__(
        self,
        text: str,
        kind: str = "p",
        index: int = 0,
        id_source: Iterator[int] | None = None,
    ) -> None:
        self.text = text
        self.kind = kind
        self.index = index
        self._ids = id_source if id_source is not None else itertools.count(1)
        self._tags: list[SpanHandle] = []

    def __repr__(self) -> str:
        preview = self.text[:40] + ("..." if len(self.text) > 40 else "")
        return f"TextBlock({self.kind}, {self.index}, {preview!r})"

    @property
    def tags(self) -> list[SpanHandle]:
        return sorted(self._tags, key=lambda h: h.offset)

    def overlaps_tag(self, offset: int, length: int) -> bool:
        end = offset + length
        return any(offset < tag.end and tag.offset < end for tag in self._tags)

    def tag(self, offset: int, length: int) -> SpanHandle:
        """Wrap text[offset:offset+length] in a uniquely identified marker.

        Raises:
            ValueError: If the span is empty, out of bounds, or overlaps an
                existing marker.
        """
        if length <= 0 or offset < 0 or offset + length > len(self.text):
            msg = f"span {offset}+{length} outside block of length {len(self.text)}"
            raise ValueError(msg)
        if self.overlaps_tag(offset, length):
            msg = f"span {offset}+{length} overlaps an existing marker"
            raise ValueError(msg)

        handle = SpanHandle(
            marker_id=f"mark-{next(self._ids)}",
            block_index=self.index,
            offset=offset,
            length=length,
            text=self.text[offset : offset + length],
        )
        self._tags.append(handle)
        return handle

    def clear_tags(self) -> None:
        self._tags.clear()


class Document:
    """Ordered sequence of text blocks making up one article."""

    def __init__(self, blocks: list[str] | None = None, kinds: list[str] | None = None) -> None:
        self._ids = itertools.count(1)
        kinds = kinds or ["p"] * len(blocks or [])
        self.blocks = [
            TextBlock(text, kind=kind, index=i, id_source=self._ids)
            for i, (text, kind) in enumerate(zip(blocks or [], kinds))
        ]

    @classmethod
    def from_text(cls, text: str) -> "Document":
        """Split plain text into paragraphs on blank lines."""
        paragraphs = [
            _WHITESPACE_RE.sub(" ", chunk).strip() for chunk in _BLANK_LINES_RE.split(text or "")
        ]
        return cls([p for p in paragraphs if p])

    @classmethod
    def from_html(cls, html: str | bytes) -> "Document":
        """Collect p, h1-h3, and li elements in document order.

        Blocks nested inside another block contribute through their parent.
        """
        soup = BeautifulSoup(html, "html.parser")
        for tag in soup(list(_SKIP_TAGS)):
            tag.decompose()

        texts: list[str] = []
        kinds: list[str] = []
        for element in soup.find_all(list(BLOCK_TAGS)):
            if element.find_parent(list(BLOCK_TAGS)) is not None:
                continue
            text = _WHITESPACE_RE.sub(" ", element.get_text()).strip()
            if text:
                texts.append(text)
                kinds.append(element.name)
        return cls(texts, kinds)

    @property
    def text(self) -> str:
        """Full document text, blocks separated by blank lines."""
        return "\n\n".join(block.text for block in self.blocks)

    def tagged_spans(self) -> list[SpanHandle]:
        return [tag for block in self.blocks for tag in block.tags]

    def clear_tags(self) -> None:
        for block in self.blocks:
            block.clear_tags()
