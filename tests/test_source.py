# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for document sources - files and URLs.

URL tests replace the network with httpx.MockTransport.
"""

import httpx
import pytest

from genro_tagpath import DocumentCheck, DocumentSourceError
from genro_tagpath.source import (
    fetch_document,
    guess_markup,
    is_url,
    load_document,
    read_document,
)

PAGE = '<html><head><title>t</title></head><body><h1>x</h1></body></html>'
FEED = '<?xml version="1.0"?><rss><channel><item/></channel></rss>'


@pytest.fixture
def mock_http(monkeypatch):
    """Serve PAGE on any path, FEED on *.xml, 404 on /missing."""
    real_client = httpx.AsyncClient

    def handler(request):
        if request.url.path == '/missing':
            return httpx.Response(404, text='not found')
        if request.url.path.endswith('.xml'):
            return httpx.Response(200, text=FEED, headers={'content-type': 'application/xml'})
        return httpx.Response(200, text=PAGE, headers={'content-type': 'text/html'})

    def client_factory(*args, **kwargs):
        return real_client(transport=httpx.MockTransport(handler))

    monkeypatch.setattr(httpx, 'AsyncClient', client_factory)


# =============================================================================
# Helpers
# =============================================================================


class TestGuessMarkup:
    """Tests for guess_markup and is_url."""

    @pytest.mark.parametrize('hint', ['feed.xml', 'icon.SVG', 'https://x.org/news.rss?page=2'])
    def test_xml_suffixes(self, hint):
        assert guess_markup(hint) == 'xml'

    def test_xml_declaration(self):
        assert guess_markup('page', '  <?xml version="1.0"?><a/>') == 'xml'
        assert guess_markup('page', b'<?xml version="1.0"?><a/>') == 'xml'

    def test_html_default(self):
        assert guess_markup('index.html', '<!DOCTYPE html><html></html>') == 'html'
        assert guess_markup() == 'html'

    def test_is_url(self):
        assert is_url('https://example.com/') is True
        assert is_url('HTTP://example.com/') is True
        assert is_url('/tmp/page.html') is False


# =============================================================================
# Files
# =============================================================================


class TestReadDocument:
    """Tests for read_document."""

    def test_read(self, tmp_path):
        path = tmp_path / 'page.html'
        path.write_text(PAGE, encoding='utf-8')
        assert read_document(path) == PAGE
        assert read_document(str(path)) == PAGE

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentSourceError, match='not found'):
            read_document(tmp_path / 'nope.html')

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / 'latin.html'
        path.write_bytes('<p>caffè</p>'.encode('latin-1'))
        with pytest.raises(DocumentSourceError):
            read_document(path)
        assert read_document(path, encoding='latin-1') == '<p>caffè</p>'

    def test_load_document_file(self, tmp_path):
        path = tmp_path / 'page.html'
        path.write_text(PAGE, encoding='utf-8')
        assert load_document(str(path)) == PAGE


# =============================================================================
# URLs
# =============================================================================


class TestFetchDocument:
    """Tests for fetch_document, load_document and DocumentCheck.from_url."""

    def test_fetch_sync(self, mock_http):
        assert fetch_document('https://example.com/') == PAGE

    def test_fetch_404_raises(self, mock_http):
        with pytest.raises(httpx.HTTPStatusError):
            fetch_document('https://example.com/missing')

    def test_load_document_url(self, mock_http):
        assert load_document('https://example.com/') == PAGE

    def test_check_from_url(self, mock_http):
        page = DocumentCheck.from_url('https://example.com/')
        assert page.source_name == 'https://example.com/'
        assert page.markup == 'html'
        assert page.has_tag('head').has_child('title').exist() is True

    def test_check_from_url_xml(self, mock_http):
        page = DocumentCheck.from_url('https://example.com/feed.xml')
        assert page.markup == 'xml'
        assert page.has_tag('channel').has_child('item').exist() is True

    @pytest.mark.asyncio
    async def test_fetch_async(self, mock_http):
        """Async context usage."""
        text = await fetch_document('https://example.com/')
        assert text == PAGE

    @pytest.mark.asyncio
    async def test_check_from_url_async(self, mock_http):
        page = await DocumentCheck.from_url('https://example.com/')
        assert page.has_tag('h1').count() == 1
