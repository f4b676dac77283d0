# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Pytest configuration and fixtures."""

import pytest

from genro_toolbox import reset_smartasync_cache

from genro_tagpath import DocumentCheck
from genro_tagpath.source import fetch_document, load_document

SEO_PAGE = """
<!DOCTYPE html>
<head>
  <meta charset='UTF-8'>
</head>
<html lang=en>
  <body>
    <h1>Title1</h1>
    <h1>Title2</h1>
    <div>
      <img alt='f' />
      <img />
      <a rel='next'>link</a>
      <a>link</a>
    </div>
    <p>
      <strong>word1</strong>
      <strong>word2</strong>
      <strong>word3</strong>
    </p>
  </body>
</html>
"""

NESTED_DIVS_PAGE = """
<!DOCTYPE html>
<html lang=en>
<head>

</head>
<body>
    <img alt='f'>
    <h1>My First Heading</h1>
    <p>My first paragraph.</p>
    <div style='color:black' display='block'>
        <div style='color:blue'>
            <div style='color:green'>
            </div>
        </div>
    </div>
</body>

</html>
"""


@pytest.fixture(autouse=True)
def reset_smartasync_caches():
    """Reset smartasync cache before each test.

    This ensures that async context detection starts fresh for each test,
    preventing state leakage between sync and async tests.
    """
    reset_smartasync_cache()
    if hasattr(DocumentCheck.from_url, "_smartasync_reset_cache"):
        DocumentCheck.from_url._smartasync_reset_cache()
    yield


@pytest.fixture
def seo_page():
    return SEO_PAGE


@pytest.fixture
def nested_divs_page():
    return NESTED_DIVS_PAGE
