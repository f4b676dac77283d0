#!/usr/bin/env python3
# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Benchmarks for genro-tagpath operations.

Run with: python benchmarks/benchmark_matcher.py
"""

import time

from genro_tagpath import ChainMatcher, ConstraintChain, DocumentCheck, NodeConstraint
from genro_tagpath.tokenizers import iter_html_events


def make_page(sections: int) -> str:
    """A page with `sections` nested blocks, each holding a small list."""
    block = (
        '<section class="s"><div><ul>'
        + '<li><a href="/x" rel="next">x</a></li>' * 5
        + '</ul><img alt="i"></div></section>'
    )
    return f'<html><head><title>b</title></head><body>{block * sections}</body></html>'


def benchmark_tokenizer():
    """Benchmark HTML tokenizing alone."""
    print("\n=== Tokenizer Benchmarks ===")

    for sections in (10, 100, 1000):
        page = make_page(sections)
        start = time.perf_counter()
        count = sum(1 for _ in iter_html_events(page))
        elapsed = time.perf_counter() - start
        print(f"Tokenize {sections} sections ({count} events): {elapsed*1000:.2f}ms")


def benchmark_exists():
    """Benchmark existence queries, early exit vs full scan."""
    print("\n=== Exists Benchmarks ===")

    page = make_page(1000)
    events = list(iter_html_events(page))
    matcher = ChainMatcher()

    found = ConstraintChain.from_path('section.div.ul.li.a')
    start = time.perf_counter()
    for _ in range(1000):
        matcher.exists(found, events)
    elapsed = time.perf_counter() - start
    print(f"Exists, found early (1k): {elapsed*1000:.2f}ms ({elapsed/1000*1e6:.2f}µs/op)")

    missing = ConstraintChain.from_path('section.div.ul.li.h1')
    start = time.perf_counter()
    for _ in range(10):
        matcher.exists(missing, events)
    elapsed = time.perf_counter() - start
    print(f"Exists, not found ({len(events)} events, 10x): {elapsed*1000:.2f}ms ({elapsed/10*1000:.2f}ms/op)")


def benchmark_count():
    """Benchmark occurrence counting with and without attribute checks."""
    print("\n=== Count Benchmarks ===")

    page = make_page(1000)
    events = list(iter_html_events(page))

    bare = ConstraintChain.from_path('ul.li.a')
    with_attrs = ConstraintChain((
        NodeConstraint('ul'),
        NodeConstraint('li'),
        NodeConstraint('a', required={'rel': 'next'}, forbidden={'target': '_blank'}),
    ))

    for label, chain in (('bare', bare), ('with attributes', with_attrs)):
        for strict in (True, False):
            matcher = ChainMatcher(strict=strict)
            start = time.perf_counter()
            for _ in range(10):
                occurrences = matcher.count_occurrences(chain, events)
            elapsed = time.perf_counter() - start
            print(
                f"Count {label}, strict={strict} ({occurrences} found, 10x): "
                f"{elapsed*1000:.2f}ms ({elapsed/10*1000:.2f}ms/op)"
            )


def benchmark_document_check():
    """Benchmark the fluent surface end to end (tokenize + match)."""
    print("\n=== DocumentCheck Benchmarks ===")

    page = DocumentCheck(make_page(100), report=False)
    start = time.perf_counter()
    for _ in range(100):
        page.has_tag('section').has_child('img').has_attribute({'alt': 'i'}).exist()
    elapsed = time.perf_counter() - start
    print(f"exist() on 100 sections (100x): {elapsed*1000:.2f}ms ({elapsed/100*1000:.3f}ms/op)")

    start = time.perf_counter()
    for _ in range(100):
        page.has_tag('li').appear.more_than(10)
    elapsed = time.perf_counter() - start
    print(f"more_than() on 100 sections (100x): {elapsed*1000:.2f}ms ({elapsed/100*1000:.3f}ms/op)")


def main():
    print("=" * 60)
    print("genro-tagpath Benchmarks")
    print("=" * 60)

    benchmark_tokenizer()
    benchmark_exists()
    benchmark_count()
    benchmark_document_check()

    print("\n" + "=" * 60)
    print("Benchmarks complete")
    print("=" * 60)


if __name__ == '__main__':
    main()
