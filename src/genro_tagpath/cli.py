# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Command line entry point: run the SEO rules on a page.

Usage:
    genro-tagpath page.html
    genro-tagpath https://example.com/ --rules img_alt,single_h1
    genro-tagpath page.html --strong-limit 5 -v

Exit status is 0 when every rule passes, 1 when at least one fails and
2 when the document cannot be loaded or tokenized.
"""

from __future__ import annotations

import argparse
import logging

import httpx
from genro_toolbox import smartsplit

from .check import DocumentCheck
from .exceptions import DocumentSourceError, MalformedEventStreamError
from .rules import RULE_DEFAULTS, RULES, run_rules
from .source import guess_markup, load_document


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='genro-tagpath',
        description='Check the tag structure of an HTML page against SEO rules',
    )
    parser.add_argument(
        'source',
        help='File path or http(s) URL of the document',
    )
    parser.add_argument(
        '--rules',
        type=str,
        help=f"Comma-separated rule names (default: all). Available: {', '.join(RULES)}",
    )
    parser.add_argument(
        '--strong-limit',
        type=int,
        default=RULE_DEFAULTS['strong_limit'],
        help='Maximum number of <strong> tags (default: %(default)s)',
    )
    parser.add_argument(
        '--markup',
        choices=('html', 'xml'),
        help='Tokenizer to use (default: guessed from the source)',
    )
    parser.add_argument(
        '--timeout',
        type=int,
        default=30,
        help='Download timeout in seconds (default: %(default)s)',
    )
    parser.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        help='Log every check outcome',
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format='%(name)s: %(message)s')

    names = None
    if args.rules:
        names = [r.strip() for r in smartsplit(args.rules, ',') if r.strip()]
        unknown = [name for name in names if name not in RULES]
        if unknown:
            parser.error(f"Unknown rules: {', '.join(unknown)}")

    try:
        data = load_document(args.source, timeout=args.timeout)
    except (DocumentSourceError, httpx.HTTPError) as e:
        print(f"ERROR: {e}")
        return 2

    page = DocumentCheck(
        data,
        report=args.verbose,
        markup=args.markup or guess_markup(args.source, data),
        source_name=args.source,
    )
    try:
        results = run_rules(page, names=names, strong_limit=args.strong_limit)
    except MalformedEventStreamError as e:
        print(f"ERROR: {e}")
        return 2

    for result in results:
        print(f"{'PASS' if result.passed else 'FAIL'} {result.name}: {result.message}")

    failed = sum(1 for r in results if not r.passed)
    print(f"\n{len(results) - failed} passed, {failed} failed")
    return 1 if failed else 0


if __name__ == '__main__':
    raise SystemExit(main())
