# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Genro-TagPath - structural assertions on markup documents.

Describe a root-to-descendant path of tags ("a <div> containing an <img>
without alt") and ask whether, or how many times, it occurs in a document
seen as a stream of open/close tag events.

Example:
    >>> from genro_tagpath import DocumentCheck
    >>> page = DocumentCheck.from_string('<ul><li><a href="/">home</a></li></ul>')
    >>> page.has_tag('ul').has_children(['li', 'a']).exist()
    True
"""

__version__ = "0.1.0"

from .chain import AttributeMap, ChainBuilder, ConstraintChain, NodeConstraint
from .check import DocumentCheck, describe_chain, describe_constraint
from .events import CloseTag, OpenTag, TagEvent, events_from_pairs
from .exceptions import (
    DocumentSourceError,
    EmptyChainError,
    MalformedEventStreamError,
    TagPathError,
)
from .matcher import ChainMatcher, check_attributes, count_occurrences, exists, more_than
from .rules import RULES, RuleResult, SeoRule, run_rules
from .tokenizers import iter_events, iter_html_events, iter_xml_events

__all__ = [
    # Chain model
    "AttributeMap",
    "NodeConstraint",
    "ConstraintChain",
    "ChainBuilder",
    # Events
    "OpenTag",
    "CloseTag",
    "TagEvent",
    "events_from_pairs",
    # Matcher
    "ChainMatcher",
    "check_attributes",
    "exists",
    "count_occurrences",
    "more_than",
    # Tokenizers
    "iter_events",
    "iter_html_events",
    "iter_xml_events",
    # Assertions
    "DocumentCheck",
    "describe_chain",
    "describe_constraint",
    "RULES",
    "SeoRule",
    "RuleResult",
    "run_rules",
    # Exceptions
    "TagPathError",
    "EmptyChainError",
    "MalformedEventStreamError",
    "DocumentSourceError",
]
