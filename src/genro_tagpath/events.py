# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tag events - the input of the matcher.

A document is seen as an ordered stream of OpenTag / CloseTag events in
document order: a node opens before its descendants and closes after all
of them. Any iterable of events is a valid source; tokenizers in
genro_tagpath.tokenizers produce them lazily from markup text.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .chain import AttributeMap


@dataclass(frozen=True)
class OpenTag:
    """A node has been opened."""

    tag: str
    attributes: AttributeMap = field(default_factory=dict)


@dataclass(frozen=True)
class CloseTag:
    """A node has been closed."""

    tag: str


TagEvent = OpenTag | CloseTag


def events_from_pairs(pairs: Iterable[tuple]) -> Iterator[TagEvent]:
    """Build events from compact tuples, handy for hand written streams.

    ('div', {'id': 'x'}) or ('div',) opens a node, ('/div',) closes it.

    Example:
        >>> list(events_from_pairs([('p',), ('/p',)]))
        [OpenTag(tag='p', attributes={}), CloseTag(tag='p')]
    """
    for pair in pairs:
        tag = pair[0]
        if tag.startswith('/'):
            yield CloseTag(tag[1:])
        else:
            attributes = pair[1] if len(pair) > 1 else {}
            yield OpenTag(tag, dict(attributes))
