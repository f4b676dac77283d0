# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tokenizers - turn markup text into tag events.

Classes:
    HtmlEventReader - html.parser based, tolerant of real-world HTML
    XmlEventReader - xml.sax based, fails on malformed XML

Both readers are push parsers collecting events in a pending list; the
iter_* generators feed the text chunk by chunk and hand out pending events
as they become available, so a consumer that stops early (the matcher's
exists query) stops the parsing too.

Example:
    >>> from genro_tagpath.tokenizers import iter_html_events
    >>> [type(e).__name__ for e in iter_html_events('<p><br></p>')]
    ['OpenTag', 'OpenTag', 'CloseTag', 'CloseTag']
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from html.parser import HTMLParser
from typing import Any
from xml import sax

from .events import CloseTag, OpenTag, TagEvent
from .exceptions import MalformedEventStreamError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 8192

# Elements that never have content: the reader closes them right away.
VOID_ELEMENTS = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr',
})


# =============================================================================
# HTML
# =============================================================================


class HtmlEventReader(HTMLParser):
    """HTML tokenizer producing a well nested event stream.

    Tag names are lower-cased by html.parser. Attributes without a value
    (<input disabled>) get an empty string; on repeated attributes the
    first occurrence wins.

    Repairs applied to keep open/close events paired:
    - void elements and <x/> are closed immediately
    - an end tag closes every element opened after its start tag
    - an end tag without a matching start tag is dropped
    - elements still open at the end of input are closed in reverse order
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.pending: list[TagEvent] = []
        self.stack: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        attributes: dict[str, str] = {}
        for name, value in attrs:
            attributes.setdefault(name, '' if value is None else value)
        self.pending.append(OpenTag(tag, attributes))
        if tag in VOID_ELEMENTS:
            self.pending.append(CloseTag(tag))
        else:
            self.stack.append(tag)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.handle_starttag(tag, attrs)
        if tag not in VOID_ELEMENTS:
            self.stack.pop()
            self.pending.append(CloseTag(tag))

    def handle_endtag(self, tag: str) -> None:
        if tag not in self.stack:
            if tag not in VOID_ELEMENTS:
                logger.debug("Dropping end tag '%s' with no open element", tag)
            return
        while self.stack:
            current = self.stack.pop()
            if current != tag:
                logger.debug("Implicitly closing '%s' at end tag '%s'", current, tag)
            self.pending.append(CloseTag(current))
            if current == tag:
                break

    def close(self) -> None:
        super().close()
        while self.stack:
            self.pending.append(CloseTag(self.stack.pop()))

    def drain(self) -> list[TagEvent]:
        """Return and forget the events collected so far."""
        events, self.pending = self.pending, []
        return events


# =============================================================================
# XML
# =============================================================================


class XmlEventReader(sax.handler.ContentHandler):
    """XML tokenizer (SAX handler). Tag names keep their case.

    Well-formedness is enforced by expat: a syntax error is reported as
    MalformedEventStreamError.
    """

    def __init__(self) -> None:
        super().__init__()
        self.pending: list[TagEvent] = []

    def startElement(self, name: str, attrs: Any) -> None:
        self.pending.append(OpenTag(name, {str(k): v for k, v in attrs.items()}))

    def endElement(self, name: str) -> None:
        self.pending.append(CloseTag(name))

    def drain(self) -> list[TagEvent]:
        """Return and forget the events collected so far."""
        events, self.pending = self.pending, []
        return events


# =============================================================================
# GENERATORS
# =============================================================================


def _chunks(text: str, chunk_size: int) -> Iterator[str]:
    for start in range(0, len(text), chunk_size):
        yield text[start:start + chunk_size]


def iter_html_events(text: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[TagEvent]:
    """Lazily tokenize HTML text into tag events."""
    reader = HtmlEventReader()
    for chunk in _chunks(text, chunk_size):
        reader.feed(chunk)
        yield from reader.drain()
    reader.close()
    yield from reader.drain()


def iter_xml_events(text: str | bytes, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[TagEvent]:
    """Lazily tokenize XML text into tag events.

    Raises:
        MalformedEventStreamError: If the XML is not well formed.
    """
    if isinstance(text, bytes):
        text = text.decode()
    handler = XmlEventReader()
    parser = sax.make_parser()
    parser.setContentHandler(handler)
    try:
        for chunk in _chunks(text, chunk_size):
            parser.feed(chunk)
            yield from handler.drain()
        parser.close()
    except sax.SAXParseException as e:
        raise MalformedEventStreamError(f"Malformed XML: {e}") from e
    yield from handler.drain()


def iter_events(text: str, markup: str = 'html', chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[TagEvent]:
    """Tokenize text with the reader for the given markup ('html' or 'xml')."""
    if markup == 'html':
        return iter_html_events(text, chunk_size)
    if markup == 'xml':
        return iter_xml_events(text, chunk_size)
    raise ValueError(f"Unknown markup '{markup}': expected 'html' or 'xml'")
