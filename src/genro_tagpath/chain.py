# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Constraint chain module - the path to look for in a document.

A chain is an ordered sequence of NodeConstraint, the first one nearest
to the document root, the last one the deepest. Each constraint names a
tag and optionally the attributes the tag must carry (required) and the
attributes it must not carry (forbidden).

Chains are immutable values. They are assembled through ChainBuilder,
a fluent surface where attribute maps always apply to the most recently
appended constraint.

Example:
    >>> from genro_tagpath.chain import ChainBuilder
    >>> chain = (
    ...     ChainBuilder()
    ...     .start_chain('head')
    ...     .append_child('meta')
    ...     .require_attributes({'name': 'keywords'})
    ...     .chain
    ... )
    >>> [c.tag for c in chain]
    ['head', 'meta']
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from genro_toolbox import smartsplit

from .exceptions import EmptyChainError

AttributeMap = Mapping[str, str]

_EMPTY: AttributeMap = MappingProxyType({})


def _freeze(attributes: AttributeMap | None) -> AttributeMap:
    if not attributes:
        return _EMPTY
    return MappingProxyType({str(k): str(v) for k, v in attributes.items()})


@dataclass(frozen=True, eq=True)
class NodeConstraint:
    """A tag name plus required and forbidden attribute maps.

    Empty maps mean "no constraint": a constraint with both maps empty
    matches on the tag name alone.
    """

    tag: str
    required: AttributeMap = field(default_factory=dict)
    forbidden: AttributeMap = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'required', _freeze(self.required))
        object.__setattr__(self, 'forbidden', _freeze(self.forbidden))

    __hash__ = None  # type: ignore[assignment]

    def with_required(self, attributes: AttributeMap | None) -> NodeConstraint:
        """Return a copy with the required map replaced."""
        return replace(self, required=attributes)

    def with_forbidden(self, attributes: AttributeMap | None) -> NodeConstraint:
        """Return a copy with the forbidden map replaced."""
        return replace(self, forbidden=attributes)


ConstraintLike = NodeConstraint | str


def as_constraint(value: ConstraintLike) -> NodeConstraint:
    """Accept a NodeConstraint or a bare tag name."""
    if isinstance(value, NodeConstraint):
        return value
    if isinstance(value, str):
        return NodeConstraint(value)
    raise TypeError(f"Expected NodeConstraint or tag name, got {type(value).__name__}")


@dataclass(frozen=True)
class ConstraintChain:
    """Immutable root-to-descendant path of constraints.

    Attributes:
        constraints: The constraints, index 0 nearest to the root.
        negated: If True, terminal queries report the opposite outcome.
    """

    constraints: tuple[NodeConstraint, ...] = ()
    negated: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, 'constraints', tuple(self.constraints))

    @classmethod
    def from_path(cls, path: str, negated: bool = False) -> ConstraintChain:
        """Build a chain of bare tags from a dot-separated path.

        Example:
            >>> [c.tag for c in ConstraintChain.from_path('html.body.div')]
            ['html', 'body', 'div']
        """
        tags = [x.strip() for x in smartsplit(path, '.') if x.strip()]
        return cls(tuple(NodeConstraint(tag) for tag in tags), negated=negated)

    def negate(self) -> ConstraintChain:
        """Return the same chain with flipped polarity."""
        return replace(self, negated=not self.negated)

    def __len__(self) -> int:
        return len(self.constraints)

    def __iter__(self) -> Iterator[NodeConstraint]:
        return iter(self.constraints)

    def __getitem__(self, index: int) -> NodeConstraint:
        return self.constraints[index]


class ChainBuilder:
    """Fluent builder for ConstraintChain.

    Every operation returns the builder itself so calls can be chained.
    Only the last appended constraint can receive attribute maps.

    Example:
        >>> chain = ChainBuilder().start_chain('img').forbid_attributes({'alt': ''}).chain
        >>> chain[0].forbidden['alt']
        ''
    """

    def __init__(self) -> None:
        self._constraints: list[NodeConstraint] = []
        self._negated = False

    @property
    def chain(self) -> ConstraintChain:
        """Snapshot of the chain built so far."""
        return ConstraintChain(tuple(self._constraints), negated=self._negated)

    @property
    def negated(self) -> bool:
        return self._negated

    def __len__(self) -> int:
        return len(self._constraints)

    def reset(self) -> ChainBuilder:
        """Forget every constraint and restore positive polarity."""
        self._constraints = []
        self._negated = False
        return self

    def start_chain(self, constraint: ConstraintLike) -> ChainBuilder:
        """Replace the chain with a single constraint."""
        self._constraints = [as_constraint(constraint)]
        return self

    def append_child(self, constraint: ConstraintLike) -> ChainBuilder:
        """Append one constraint below the current deepest one."""
        self._constraints.append(as_constraint(constraint))
        return self

    def append_children(self, constraints: Iterable[ConstraintLike]) -> ChainBuilder:
        """Append several constraints, in order."""
        self._constraints.extend(as_constraint(c) for c in constraints)
        return self

    def require_attributes(self, attributes: AttributeMap) -> ChainBuilder:
        """Set the required map of the last constraint.

        Raises:
            EmptyChainError: If no constraint has been appended yet.
        """
        last = self._last('require_attributes')
        self._constraints[-1] = last.with_required(attributes)
        return self

    def forbid_attributes(self, attributes: AttributeMap) -> ChainBuilder:
        """Set the forbidden map of the last constraint.

        Raises:
            EmptyChainError: If no constraint has been appended yet.
        """
        last = self._last('forbid_attributes')
        self._constraints[-1] = last.with_forbidden(attributes)
        return self

    def negate(self) -> ChainBuilder:
        """Toggle the chain polarity. Two calls cancel out."""
        self._negated = not self._negated
        return self

    def _last(self, operation: str) -> NodeConstraint:
        if not self._constraints:
            raise EmptyChainError(f"{operation}() requires at least one constraint in the chain")
        return self._constraints[-1]
