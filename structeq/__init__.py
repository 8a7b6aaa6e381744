"""
Structural Equality and Difference
==================================

Deep equality, difference trees and side-by-side reports for test suites.

    equal([1, 2, 3], [1, 2, 3])           → True
    difference([1, 2, 3, 4], [1, 2, 3])   → IndexDiff(left={3: Missing()}, right={})
    difference(1, "2")                    → TypeMismatch('int', 'str')

Values of unknown shape are compared member by member: dataclasses,
namedtuples, plain objects, lists, dicts, sets, tuples and scalars, with
cycle detection.  Types carrying their own equality contract are
registered as opaque and compared by that contract instead:

    register_opaque(Sample, fields=("name", "sub"))

When values differ, side_by_side_text(want, got) renders both, colored
where they disagree.
"""

import logging

from structeq.core import (
    StructEqError, InvalidValueError, UnsupportedKindError,
    equal,
)
from structeq.difference import difference, lcs
from structeq.kinds import (
    Kind, kind_of, members, member_value, read_member, type_name, exact_key,
)
from structeq.opaque import (
    OpaqueRule, opaque, register_opaque, unregister_opaque, is_opaque, opaque_rule,
)
from structeq.tree import (
    DiffNode, TypeMismatch, ValueMismatch, Missing,
    FieldDiff, IndexDiff, KeyDiff,
    LEAF_NODES, COMPOSITE_NODES, is_leaf, count_leaves,
)
from structeq.render import Printer, render
from structeq.sidebyside import compose, side_by_side_text, strip_ansi
from structeq.adapters import (
    Reporter, LoggingReporter, EqMatcher, assert_equal, side_by_side,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "StructEqError", "InvalidValueError", "UnsupportedKindError",
    "equal", "difference", "lcs",
    "Kind", "kind_of", "members", "member_value", "read_member", "type_name",
    "exact_key",
    "OpaqueRule", "opaque", "register_opaque", "unregister_opaque",
    "is_opaque", "opaque_rule",
    "DiffNode", "TypeMismatch", "ValueMismatch", "Missing",
    "FieldDiff", "IndexDiff", "KeyDiff",
    "LEAF_NODES", "COMPOSITE_NODES", "is_leaf", "count_leaves",
    "Printer", "render",
    "compose", "side_by_side_text", "strip_ansi",
    "Reporter", "LoggingReporter", "EqMatcher", "assert_equal", "side_by_side",
]
