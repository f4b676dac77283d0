# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Chain matcher - find a constraint chain in a stream of tag events.

The matcher walks the event stream once, left to right, keeping two
stacks of constraints:

- unexplored: constraints still to match, the next required one on top
  (initialised as the chain reversed, so constraint 0 is on top)
- explored: constraints matched by the current candidate branch, in
  chain order

An open event matching the top of unexplored moves that constraint to
explored. When the node that matched the top of explored closes, the
branch dead-ends: the constraint goes back to unexplored and can match
again in a later sibling subtree (backtracking).

open_count tracks how many matched nodes of each tag name are open; each
explored entry remembers the count its tag reached when it matched, so a
close event is paired with the right open when the same tag name nests or
repeats. Opens that do not match are not tracked at all, and
neither are their closes.

Example:
    >>> from genro_tagpath.chain import ConstraintChain
    >>> from genro_tagpath.events import events_from_pairs
    >>> chain = ConstraintChain.from_path('a.b')
    >>> events = events_from_pairs([('a',), ('/a',), ('a',), ('b',), ('/b',), ('/a',)])
    >>> ChainMatcher().exists(chain, events)
    True
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .chain import AttributeMap, ConstraintChain, NodeConstraint
from .events import CloseTag, OpenTag, TagEvent

logger = logging.getLogger(__name__)


def check_attributes(
    required: AttributeMap,
    forbidden: AttributeMap,
    found: AttributeMap,
    strict: bool = True,
) -> bool:
    """Check a tag's attributes against a constraint's maps.

    The required map must be a subset of found, and the forbidden map must
    not intersect found. In strict mode keys are compared together with
    their values; otherwise only key presence counts.

    Args:
        required: Attributes that must be present.
        forbidden: Attributes that must not be present.
        found: Attributes of the tag being examined.
        strict: Compare values (True) or keys only (False).

    Returns:
        True if the tag is compatible with both maps.
    """
    if strict:
        is_subset = all(k in found and found[k] == v for k, v in required.items())
        null_intersection = not any(k in found and found[k] == v for k, v in forbidden.items())
    else:
        is_subset = all(k in found for k in required)
        null_intersection = not any(k in found for k in forbidden)
    return is_subset and null_intersection


def _matches(constraint: NodeConstraint, event: OpenTag, strict: bool) -> bool:
    if constraint.tag != event.tag:
        return False
    return check_attributes(constraint.required, constraint.forbidden, event.attributes, strict)


class _MatchState:
    """Working stacks of a single query. Never shared between queries.

    Each explored entry keeps the open_count its tag had once matched, so
    the close event releasing it is the one that brings the count back
    below that level.
    """

    __slots__ = ('unexplored', 'explored', 'open_count')

    def __init__(self, chain: ConstraintChain) -> None:
        self.unexplored: list[NodeConstraint] = list(reversed(chain.constraints))
        self.explored: list[tuple[NodeConstraint, int]] = []
        self.open_count: dict[str, int] = {}

    @property
    def complete(self) -> bool:
        return not self.unexplored

    def explore(self, event: OpenTag, strict: bool) -> bool:
        """Advance on an open event. Returns True if a constraint matched."""
        if not self.unexplored:
            return False
        top = self.unexplored[-1]
        if not _matches(top, event, strict):
            return False
        level = self.open_count.get(event.tag, 0) + 1
        self.open_count[event.tag] = level
        self.explored.append((self.unexplored.pop(), level))
        return True

    def unexplore(self, event: CloseTag) -> bool:
        """Step back on a close event. Returns True if a constraint was released."""
        if not self.explored:
            return False
        tag = event.tag
        count = self.open_count.get(tag, 0)
        if count <= 0:
            logger.debug("Ignoring close of untracked tag '%s'", tag)
            return False
        count -= 1
        self.open_count[tag] = count
        top, level = self.explored[-1]
        if top.tag == tag and count < level:
            self.explored.pop()
            self.unexplored.append(top)
            return True
        return False

    def repeat(self, event: OpenTag, strict: bool) -> bool:
        """On a complete chain, tell whether an open event is one more occurrence.

        The open must match the deepest constraint. It is then counted in
        open_count, so that its close does not release the explored top.
        An empty chain takes every open.
        """
        if not self.explored:
            return True
        deepest = self.explored[-1][0]
        if not _matches(deepest, event, strict):
            return False
        self.open_count[event.tag] = self.open_count.get(event.tag, 0) + 1
        return True


class ChainMatcher:
    """Evaluate constraint chains against tag event streams.

    A matcher holds only its comparison mode; all query state is created
    at the start of each call and dropped at the end, so one matcher can
    serve any number of queries, on any chains and any streams.

    Args:
        strict: If True (default), attribute values must match exactly.
            If False, only attribute names are compared.
    """

    def __init__(self, strict: bool = True) -> None:
        self.strict = strict

    def exists(self, chain: ConstraintChain, events: Iterable[TagEvent]) -> bool:
        """Tell whether the chain occurs in the stream.

        Stops pulling events as soon as the whole chain is matched. The
        result is inverted when the chain is negated.
        """
        state = _MatchState(chain)
        matched = state.complete
        if not matched:
            for event in events:
                if isinstance(event, OpenTag):
                    if state.explore(event, self.strict) and state.complete:
                        matched = True
                        break
                else:
                    state.unexplore(event)
        return matched != chain.negated

    def count_occurrences(self, chain: ConstraintChain, events: Iterable[TagEvent]) -> int:
        """Count the occurrences of the chain in the stream.

        The whole stream is consumed. An open event counts once when it
        completes the chain, or when the chain is already complete and the
        open matches its deepest constraint again (a nested node of the same
        kind). Negation does not affect the count.
        """
        state = _MatchState(chain)
        occurrences = 0
        for event in events:
            if isinstance(event, OpenTag):
                if state.complete:
                    if state.repeat(event, self.strict):
                        occurrences += 1
                elif state.explore(event, self.strict) and state.complete:
                    occurrences += 1
            else:
                state.unexplore(event)
        return occurrences

    def more_than(self, chain: ConstraintChain, events: Iterable[TagEvent], times: int) -> bool:
        """Tell whether the chain occurs more than `times` times.

        For a negated chain the test becomes "not more than", i.e.
        occurrences <= times.
        """
        occurrences = self.count_occurrences(chain, events)
        if chain.negated:
            return occurrences <= times
        return occurrences > times


def exists(chain: ConstraintChain, events: Iterable[TagEvent], strict: bool = True) -> bool:
    """Shortcut for ChainMatcher(strict).exists(chain, events)."""
    return ChainMatcher(strict).exists(chain, events)


def count_occurrences(
    chain: ConstraintChain, events: Iterable[TagEvent], strict: bool = True
) -> int:
    """Shortcut for ChainMatcher(strict).count_occurrences(chain, events)."""
    return ChainMatcher(strict).count_occurrences(chain, events)


def more_than(
    chain: ConstraintChain, events: Iterable[TagEvent], times: int, strict: bool = True
) -> bool:
    """Shortcut for ChainMatcher(strict).more_than(chain, events, times)."""
    return ChainMatcher(strict).more_than(chain, events, times)
