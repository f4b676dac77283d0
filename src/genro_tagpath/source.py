# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Document sources - load markup text from files and URLs.

Functions:
    read_document - read a local file
    fetch_document - download over HTTP(S), sync or async (@smartasync)
    load_document - dispatch on the source string
    guess_markup - tell 'html' from 'xml' using a name hint and the content
"""

from __future__ import annotations

import logging
from pathlib import Path

from genro_toolbox import smartasync, smartawait

from .exceptions import DocumentSourceError

logger = logging.getLogger(__name__)

_XML_SUFFIXES = ('.xml', '.svg', '.rss', '.atom', '.xsd', '.rng')


def is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.lower().startswith(('http://', 'https://'))


def guess_markup(hint: str | Path = '', content: str | bytes = '') -> str:
    """Guess the markup of a document.

    Args:
        hint: File name or URL (query string is ignored).
        content: The document, or its beginning.

    Returns:
        'xml' for known XML suffixes or an XML declaration, 'html' otherwise.
    """
    hint_lower = str(hint).lower().split('?')[0]
    if hint_lower.endswith(_XML_SUFFIXES):
        return 'xml'
    head = content[:64].lstrip()
    if isinstance(head, bytes):
        head = head.decode(errors='ignore')
    if head.startswith('<?xml'):
        return 'xml'
    return 'html'


def read_document(path: str | Path, encoding: str = 'utf-8') -> str:
    """Read a document from a local file.

    Raises:
        DocumentSourceError: If the file cannot be read or decoded.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding=encoding)
    except FileNotFoundError as e:
        raise DocumentSourceError(f"Document not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentSourceError(f"Cannot read document {path}: {e}") from e
    logger.debug("Read %d characters from %s", len(text), path)
    return text


@smartasync
async def fetch_document(url: str, timeout: int = 30) -> str:
    """Download a document (async-capable).

    Works in both sync and async contexts via @smartasync.

    Args:
        url: HTTP/HTTPS URL to fetch.
        timeout: Request timeout in seconds. Default 30.

    Returns:
        The response body decoded as text.

    Raises:
        httpx.HTTPError: If the request fails or the status is not 2xx.

    Example:
        >>> # Sync context
        >>> text = fetch_document('https://example.com/')
        >>>
        >>> # Async context
        >>> text = await fetch_document('https://example.com/')
    """
    import httpx

    async with httpx.AsyncClient() as client:
        response = await client.get(url, timeout=timeout)
        response.raise_for_status()
        text = response.text

    logger.debug("Fetched %d characters from %s", len(text), url)
    return text


@smartasync
async def load_document(source: str | Path, timeout: int = 30) -> str:
    """Load a document from a URL or a file path."""
    if is_url(source):
        return await smartawait(fetch_document(str(source), timeout=timeout))
    return read_document(source)
