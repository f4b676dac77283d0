# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""TagPath exceptions."""

from __future__ import annotations


class TagPathError(Exception):
    """Base exception for TagPath errors."""

    pass


class EmptyChainError(TagPathError):
    """Raised when attributes are set on a chain with no constraints."""

    pass


class MalformedEventStreamError(TagPathError):
    """Raised when markup cannot be turned into a well nested event stream."""

    pass


class DocumentSourceError(TagPathError):
    """Raised when a document source cannot be loaded."""

    pass
