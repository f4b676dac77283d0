# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0

"""Audit Pages - run SEO checks on every HTML file of a directory.

Usage:
    python examples/seo/audit_pages.py ./site

Prints, for each page, the failed rules plus a few custom checks written
with the fluent DocumentCheck vocabulary.
"""

from __future__ import annotations

import sys
from pathlib import Path

from genro_tagpath import DocumentCheck, DocumentSourceError, run_rules


def custom_checks(page: DocumentCheck) -> dict[str, bool]:
    """Site specific checks, True when the page is fine."""
    return {
        'nav_has_links': page.has_tag('nav').has_children(['ul', 'li', 'a']).exist(),
        'no_nested_forms': page.has_tag('form').has_child('form').does.not_.exist(),
        'few_iframes': page.has_tag('iframe').appear.not_.more_than(2),
    }


def audit(directory: Path) -> int:
    failures = 0
    for path in sorted(directory.rglob('*.html')):
        try:
            page = DocumentCheck.from_file(path, report=False)
        except DocumentSourceError as e:
            print(f"{path}: skipped ({e})")
            continue

        failed = [r.name for r in run_rules(page) if not r.passed]
        failed += [name for name, ok in custom_checks(page).items() if not ok]
        failures += bool(failed)
        status = 'ok' if not failed else 'FAILED ' + ', '.join(failed)
        print(f"{path.relative_to(directory)}: {status}")
    return failures


if __name__ == '__main__':
    root = Path(sys.argv[1]) if len(sys.argv) > 1 else Path('.')
    sys.exit(1 if audit(root) else 0)
