"""
structeq.tree — The difference tree.

A difference tree explains WHERE two values differ.  It is a closed set
of six node types:

    leaves       TypeMismatch, ValueMismatch, Missing
    composites   FieldDiff, IndexDiff, KeyDiff

"No difference" is always None, never an empty composite.  Composite
children keep that rule: a child that does not differ is simply absent
from its parent's mapping.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


class DiffNode:
    """Base class for difference tree nodes.  Not instantiated directly."""
    __slots__ = ()


@dataclass(frozen=True, slots=True)
class TypeMismatch(DiffNode):
    """The two values have different types."""
    left: str
    right: str

    def __repr__(self) -> str:
        return f"TypeMismatch({self.left!r}, {self.right!r})"


@dataclass(frozen=True, slots=True)
class ValueMismatch(DiffNode):
    """Leaf mismatch with no further structure."""

    def __repr__(self) -> str:
        return "ValueMismatch()"


@dataclass(frozen=True, slots=True)
class Missing(DiffNode):
    """A position or key present on this side and absent on the other."""

    def __repr__(self) -> str:
        return "Missing()"


@dataclass(frozen=True, slots=True)
class FieldDiff(DiffNode):
    """Record mismatch: one entry per differing member."""
    fields: dict[str, DiffNode] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"FieldDiff({self.fields!r})"


@dataclass(frozen=True, slots=True)
class IndexDiff(DiffNode):
    """
    Ordered-sequence mismatch.

    Positions are keyed independently per side: left[i] refers to the
    i-th element of the left sequence only.
    """
    left: dict[int, DiffNode] = field(default_factory=dict)
    right: dict[int, DiffNode] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"IndexDiff(left={self.left!r}, right={self.right!r})"


@dataclass(frozen=True, slots=True)
class KeyDiff(DiffNode):
    """Unordered-mapping (or set) mismatch keyed by the mapping's keys."""
    left: dict[Any, DiffNode] = field(default_factory=dict)
    right: dict[Any, DiffNode] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"KeyDiff(left={self.left!r}, right={self.right!r})"


Diff = Optional[DiffNode]

LEAF_NODES = (TypeMismatch, ValueMismatch, Missing)
COMPOSITE_NODES = (FieldDiff, IndexDiff, KeyDiff)


def is_leaf(node: Diff) -> bool:
    """True for the node types that mark a mismatch themselves."""
    return isinstance(node, LEAF_NODES)


def side(node: Diff, is_left: bool) -> dict:
    """
    Children of a composite node as seen from one side.

    FieldDiff has a single view shared by both sides.  Leaves and None
    have no children.
    """
    if isinstance(node, FieldDiff):
        return node.fields
    if isinstance(node, (IndexDiff, KeyDiff)):
        return node.left if is_left else node.right
    return {}


def count_leaves(node: Diff) -> int:
    """Number of leaf mismatches in a tree (both sides of a composite)."""
    if node is None:
        return 0
    if is_leaf(node):
        return 1
    if isinstance(node, FieldDiff):
        return sum(count_leaves(child) for child in node.fields.values())
    if isinstance(node, (IndexDiff, KeyDiff)):
        return (sum(count_leaves(child) for child in node.left.values())
                + sum(count_leaves(child) for child in node.right.values()))
    raise TypeError(f"Unknown diff node type: {type(node)}")
