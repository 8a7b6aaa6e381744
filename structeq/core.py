"""
structeq.core — Deep Structural Equality
========================================

§1  THE PROBLEM
───────────────

`==` in Python answers "are these equal?" with whatever the values'
classes say.  Test suites comparing values of unknown shape need a
stricter and more uniform answer:

    • No coercion: 1 and 1.0, True and 1, "a" and b"a" are different.
    • Plain objects without __eq__ are compared by their members, not
      by identity.
    • Self-referential structures terminate.
    • Types with their own semantic equality (generated messages with
      internal caches) are compared by that rule, at any depth.

equal(a, b) provides exactly this.


§2  RULES
─────────

    equal(None, None)                   → True
    equal(None, x) / equal(x, None)     → False
    type(a) is not type(b)              → False
    both opaque (same registered type)  → the type's own rule

Then by kind (see structeq.kinds):

    ARRAY      same length, element i equal to element i
    SEQUENCE   same length, a is b fast path, element-wise
    BYTES      bytewise
    MAPPING    same length, a is b fast path, every left key present
               on the right (same value, same exact type) with an
               equal value
    SET        same length, a is b fast path, left ⊆ right, items
               matched by value and exact type
    RECORD     a is b fast path, same member names, every member equal
               to the member of that name, private members included
    CALLABLE   never equal (there is nothing meaningful to compare)
    SCALAR     native ==
    other      never equal


§3  CYCLES
──────────

Before descending into a reference-like pair (sequence, mapping, set,
record) the pair (id(a), id(b), type) is recorded in a visited set.
Meeting the same pair again means we are inside a cycle that has been
consistent so far, so the pair is reported equal without recursing.

The visited set belongs to one top-level equal() call and is dropped
when it returns.  None never enters it.
"""

from typing import Any

from .kinds import Kind, REFERENCE_KINDS, exact_key, kind_of, member_value, members, same_members
from .opaque import opaque_rule


# ═══════════════════════════════════════════════════════════════════
#  ERRORS
# ═══════════════════════════════════════════════════════════════════

class StructEqError(Exception):
    """Base class for contract violations raised by structeq."""


class InvalidValueError(StructEqError, ValueError):
    """A top-level argument is absent where a value is required."""


class UnsupportedKindError(StructEqError, TypeError):
    """The value's kind cannot be diffed (callables, queues, handles)."""


# ═══════════════════════════════════════════════════════════════════
#  EQUALITY
# ═══════════════════════════════════════════════════════════════════

Visit = tuple[int, int, type]


def equal(a: Any, b: Any) -> bool:
    """
    Deep structural equality of two arbitrary values.

    Total: never raises for data reasons, whatever the inputs.
    """
    if a is None or b is None:
        return a is b
    if type(a) is not type(b):
        return False
    return _deep_equal(a, b, set())


def _visit_key(a: Any, b: Any) -> Visit:
    addr1, addr2 = id(a), id(b)
    if addr1 > addr2:
        addr1, addr2 = addr2, addr1
    return (addr1, addr2, type(a))


def _deep_equal(a: Any, b: Any, visited: set[Visit]) -> bool:
    if a is None or b is None:
        return a is b
    if type(a) is not type(b):
        return False

    rule = opaque_rule(a)
    if rule is not None:
        return bool(rule.equal(a, b))

    kind = kind_of(a)

    if kind in REFERENCE_KINDS:
        key = _visit_key(a, b)
        if key in visited:
            return True
        visited.add(key)

    if kind is Kind.SCALAR:
        return bool(a == b)

    if kind is Kind.BYTES:
        return bytes(a) == bytes(b)

    if kind is Kind.ARRAY:
        if len(a) != len(b):
            return False
        for i in range(len(a)):
            if not _deep_equal(a[i], b[i], visited):
                return False
        return True

    if kind is Kind.SEQUENCE:
        if len(a) != len(b):
            return False
        if a is b:
            return True
        for x, y in zip(a, b):
            if not _deep_equal(x, y, visited):
                return False
        return True

    if kind is Kind.MAPPING:
        if len(a) != len(b):
            return False
        if a is b:
            return True
        right = {exact_key(key): key for key in b}
        for key, value in a.items():
            match = exact_key(key)
            if match not in right:
                return False
            if not _deep_equal(value, b[right[match]], visited):
                return False
        return True

    if kind is Kind.SET:
        if len(a) != len(b):
            return False
        if a is b:
            return True
        right = {exact_key(item) for item in b}
        return all(exact_key(item) in right for item in a)

    if kind is Kind.RECORD:
        if a is b:
            return True
        names = members(a)
        if not same_members(names, members(b)):
            return False
        for name in names:
            if not _deep_equal(member_value(a, name), member_value(b, name), visited):
                return False
        return True

    # CALLABLE and UNSUPPORTED: can't do better than this.
    return False
