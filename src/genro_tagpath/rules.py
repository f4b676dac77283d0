# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SEO rules - a catalogue of structural checks for HTML pages.

Each rule is a small DocumentCheck sentence. A rule passes when the page
respects the guideline, e.g. 'img_alt' passes when no <img> lacks alt.

Options:
    Rules read their tunables from an options dict built from
    RULE_DEFAULTS, overridden by the keyword arguments of run_rules().

Example:
    >>> page = DocumentCheck.from_string('<html><head><title>x</title></head></html>')
    >>> [r.name for r in run_rules(page, names=['head_title'])]
    ['head_title']
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from .check import DocumentCheck

logger = logging.getLogger(__name__)

RULE_DEFAULTS: dict[str, Any] = {
    'strong_limit': 15,
}

RuleCallback = Callable[[DocumentCheck, dict[str, Any]], bool]


@dataclass(frozen=True)
class SeoRule:
    """A named check. `check` returns True when the page passes.

    strict is the attribute comparison mode the check runs with.
    """

    name: str
    description: str
    check: RuleCallback
    strict: bool = True


@dataclass(frozen=True)
class RuleResult:
    name: str
    passed: bool
    message: str


# =============================================================================
# RULE CHECKS
# =============================================================================


def _img_alt(page: DocumentCheck, options: dict[str, Any]) -> bool:
    return page.has_tag('img').has_no_attribute({'alt': ''}).does.not_.exist()


def _a_rel(page: DocumentCheck, options: dict[str, Any]) -> bool:
    return page.has_tag('a').has_no_attribute({'rel': ''}).does.not_.exist()


def _head_title(page: DocumentCheck, options: dict[str, Any]) -> bool:
    return page.has_tag('head').has_child('title').exist()


def _head_meta(name: str) -> RuleCallback:
    def check(page: DocumentCheck, options: dict[str, Any]) -> bool:
        return page.has_tag('head').has_child('meta').has_attribute({'name': name}).exist()

    return check


def _strong_limit(page: DocumentCheck, options: dict[str, Any]) -> bool:
    return page.has_tag('strong').appear.not_.more_than(options['strong_limit'])


def _single_h1(page: DocumentCheck, options: dict[str, Any]) -> bool:
    return page.has_tag('h1').appear.not_.more_than(1)


RULES: dict[str, SeoRule] = {
    rule.name: rule
    for rule in (
        SeoRule('img_alt', 'Every <img> has an alt attribute', _img_alt, strict=False),
        SeoRule('a_rel', 'Every <a> has a rel attribute', _a_rel, strict=False),
        SeoRule('head_title', '<head> contains a <title>', _head_title),
        SeoRule(
            'head_description',
            '<head> contains <meta name="descriptions">',
            _head_meta('descriptions'),
        ),
        SeoRule(
            'head_keywords',
            '<head> contains <meta name="keywords">',
            _head_meta('keywords'),
        ),
        SeoRule('strong_limit', 'No more <strong> than strong_limit', _strong_limit),
        SeoRule('single_h1', 'At most one <h1>', _single_h1),
    )
}


def run_rules(
    page: DocumentCheck,
    names: Iterable[str] | None = None,
    **options: Any,
) -> list[RuleResult]:
    """Run rules against a page.

    Each rule runs with its own strict mode; the page's mode is restored
    afterwards.

    Args:
        page: The document to check.
        names: Rule names to run, in order. Default: all of RULES.
        **options: Overrides for RULE_DEFAULTS.

    Returns:
        One RuleResult per rule, in the order run.

    Raises:
        KeyError: If a rule name is unknown.
        TypeError: If an option is unknown.
    """
    unknown = set(options) - set(RULE_DEFAULTS)
    if unknown:
        raise TypeError(f"Unknown rule options: {', '.join(sorted(unknown))}")
    merged = dict(RULE_DEFAULTS)
    merged.update(options)

    selected = list(RULES) if names is None else list(names)
    for name in selected:
        if name not in RULES:
            raise KeyError(f"Unknown rule '{name}'")

    results = []
    for name in selected:
        rule = RULES[name]
        saved_strict = page.strict
        page.strict = rule.strict
        try:
            passed = rule.check(page, merged)
        finally:
            page.strict = saved_strict
        message = f"{rule.description}: {'ok' if passed else 'violated'}"
        logger.info("Rule %s %s", name, 'passed' if passed else 'failed')
        results.append(RuleResult(name, passed, message))
    return results
