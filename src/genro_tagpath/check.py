# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""DocumentCheck - fluent structural assertions on a markup document.

A DocumentCheck owns a document and reads like a sentence:

    >>> page = DocumentCheck.from_string('<div><img alt="logo"></div>')
    >>> page.has_tag('div').has_child('img').exist()
    True
    >>> page.has_tag('img').has_no_attribute({'alt': 'logo'}).exist()
    False
    >>> page.has_tag('img').appear.not_.more_than(1)
    True

Vocabulary words (tag, has_tag, has_child, has_children, has_attribute,
has_no_attribute, not_) build a chain; terminal words (exist, more_than,
count) run it. Every terminal tokenizes the document afresh and clears
the chain, so each sentence is independent of the previous one.

When report is True, outcomes are logged at INFO level:
    <div>, <img alt=logo> exists
    There are not more than 1 <img>
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from genro_toolbox import smartasync, smartawait

from .chain import AttributeMap, ChainBuilder, ConstraintChain, NodeConstraint
from .events import TagEvent
from .matcher import ChainMatcher
from .source import fetch_document, guess_markup, read_document
from .tokenizers import iter_events

logger = logging.getLogger(__name__)


def describe_constraint(constraint: NodeConstraint, strict: bool = True) -> str:
    """Render a constraint as '<tag attr=value> without attr'.

    Attribute values are shown only in strict mode, the only mode where
    they take part in matching.
    """

    def form_attr(attributes: AttributeMap) -> str:
        if strict:
            return ' '.join(f'{k}={v}' for k, v in attributes.items())
        return ' '.join(attributes)

    attr_string = form_attr(constraint.required)
    not_attr_string = form_attr(constraint.forbidden)
    result = f'<{constraint.tag} {attr_string}>' if attr_string else f'<{constraint.tag}>'
    if not_attr_string:
        result = f'{result} without {not_attr_string}'
    return result


def describe_chain(chain: ConstraintChain, strict: bool = True) -> str:
    """Render a chain as a comma separated list of constraints."""
    return ', '.join(describe_constraint(c, strict) for c in chain)


class DocumentCheck:
    """Fluent assertions on the tag structure of one document.

    Args:
        data: The document text.
        strict: Compare attribute values (True) or only names (False).
        report: Log the outcome of terminal words.
        markup: 'html' or 'xml', selects the tokenizer.
        source_name: Where the document came from, used in reports.
    """

    def __init__(
        self,
        data: str,
        strict: bool = True,
        report: bool = True,
        markup: str = 'html',
        source_name: str = '',
    ) -> None:
        self.data = data
        self.strict = strict
        self.report = report
        self.markup = markup
        self.source_name = source_name
        self._builder = ChainBuilder()

    # -------------------- constructors --------------------------------

    @classmethod
    def from_string(cls, data: str, **kwargs) -> DocumentCheck:
        return cls(data, **kwargs)

    @classmethod
    def from_file(cls, path: str | Path, encoding: str = 'utf-8', **kwargs) -> DocumentCheck:
        """Load the document from a file. Markup is guessed unless given."""
        data = read_document(path, encoding=encoding)
        kwargs.setdefault('markup', guess_markup(path, data))
        kwargs.setdefault('source_name', str(path))
        return cls(data, **kwargs)

    @classmethod
    @smartasync
    async def from_url(cls, url: str, timeout: int = 30, **kwargs) -> DocumentCheck:
        """Download the document (async-capable, see fetch_document)."""
        data = await smartawait(fetch_document(url, timeout=timeout))
        kwargs.setdefault('markup', guess_markup(url, data))
        kwargs.setdefault('source_name', url)
        return cls(data, **kwargs)

    # -------------------- current chain --------------------------------

    @property
    def chain(self) -> ConstraintChain:
        """The chain the next terminal word will run."""
        return self._builder.chain

    def events(self) -> Iterator[TagEvent]:
        """A fresh event stream over the document."""
        return iter_events(self.data, markup=self.markup)

    # -------------------- vocabulary --------------------------------

    @property
    def appear(self) -> DocumentCheck:
        return self

    @property
    def does(self) -> DocumentCheck:
        return self

    @property
    def not_(self) -> DocumentCheck:
        """Negate the sentence. Two negations cancel out."""
        self._builder.negate()
        return self

    def tag(self, node: NodeConstraint) -> DocumentCheck:
        """Start a new chain from a full constraint."""
        self._builder.start_chain(node)
        return self

    def has_tag(self, tag: str) -> DocumentCheck:
        """Start a new chain from a tag name."""
        self._builder.start_chain(NodeConstraint(tag))
        return self

    def has_child(self, tag: str | NodeConstraint) -> DocumentCheck:
        self._builder.append_child(tag)
        return self

    def has_children(self, tags: Iterable[str | NodeConstraint]) -> DocumentCheck:
        self._builder.append_children(tags)
        return self

    def has_attribute(self, attributes: AttributeMap) -> DocumentCheck:
        """Require attributes on the last tag of the chain."""
        self._builder.require_attributes(attributes)
        return self

    def has_no_attribute(self, attributes: AttributeMap) -> DocumentCheck:
        """Forbid attributes on the last tag of the chain."""
        self._builder.forbid_attributes(attributes)
        return self

    # -------------------- terminals --------------------------------

    def exist(self) -> bool:
        """Tell whether the chain is found (or not found, if negated)."""
        chain = self._take_chain()
        found = self._matcher().exists(chain, self.events())
        # the matcher already applied negation: recover the raw outcome
        if self.report and found != chain.negated:
            logger.info(
                "%s%s%s",
                self._report_prefix(),
                describe_chain(chain, self.strict),
                ' do not exists' if chain.negated else ' exists',
            )
        return found

    def more_than(self, times: int) -> bool:
        """Tell whether the chain appears more than `times` times.

        Negated: tell whether it appears at most `times` times.
        """
        chain = self._take_chain()
        satisfied = self._matcher().more_than(chain, self.events(), times)
        if self.report:
            logger.info(
                "%sThere are %smore than %d %s",
                self._report_prefix(),
                'not ' if satisfied and chain.negated else '',
                times,
                describe_chain(chain, self.strict),
            )
        return satisfied

    def count(self) -> int:
        """Number of occurrences of the chain. Negation is ignored."""
        chain = self._take_chain()
        return self._matcher().count_occurrences(chain, self.events())

    def _report_prefix(self) -> str:
        return f"{self.source_name}: " if self.source_name else ""

    def _matcher(self) -> ChainMatcher:
        return ChainMatcher(strict=self.strict)

    def _take_chain(self) -> ConstraintChain:
        chain = self._builder.chain
        self._builder.reset()
        return chain
