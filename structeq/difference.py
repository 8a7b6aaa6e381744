"""
structeq.difference — Explain why two values differ.

difference(a, b) returns None exactly when equal(a, b) holds, and
otherwise a tree of diff nodes (structeq.tree) pointing at each
mismatching position:

    difference(1, "2")                → TypeMismatch('int', 'str')
    difference([1, 2, 3, 4], [1, 2, 3])
                                      → IndexDiff(left={3: Missing()}, right={})
    difference({0: True, 2: True}, {0: False})
                                      → KeyDiff(left={0: ValueMismatch(), 2: Missing()},
                                                right={0: ValueMismatch()})

Ordered sequences are aligned on their longest common subsequence, so an
inserted element is reported as one Missing position instead of
shifting every later element into a mismatch.
"""

import logging
from typing import Any

from .core import InvalidValueError, UnsupportedKindError, equal
from .kinds import (
    UNSET, Kind, ORDERED_KINDS, exact_key, kind_of, member_value, members, same_members,
    type_name,
)
from .opaque import is_opaque
from .tree import Diff, DiffNode, FieldDiff, IndexDiff, KeyDiff, Missing, TypeMismatch, ValueMismatch

logger = logging.getLogger(__name__)


def difference(left: Any, right: Any) -> Diff:
    """
    Build the difference tree of two values.

    Raises:
        InvalidValueError:    either top-level argument is None
        UnsupportedKindError: a differing value is a callable, queue,
                              generator or other handle that can't be diffed
    """
    if left is None:
        logger.debug("difference called with left=None")
        raise InvalidValueError("left is None")
    if right is None:
        logger.debug("difference called with right=None")
        raise InvalidValueError("right is None")
    return _difference(left, right, set())


def _difference(left: Any, right: Any, walk: set[tuple[int, int]]) -> Diff:
    if equal(left, right):
        return None

    # Can't descend past a null.
    if left is None or right is None:
        return ValueMismatch()

    if type(left) is not type(right):
        return TypeMismatch(type_name(left), type_name(right))

    kind = kind_of(left)

    if kind is Kind.SCALAR:
        return ValueMismatch()

    if kind in (Kind.CALLABLE, Kind.UNSUPPORTED):
        raise UnsupportedKindError(f"cannot diff values of {type_name(left)}")

    pair = (id(left), id(right))
    if pair in walk:
        # Already being diffed further up: the cycle adds nothing new.
        return None
    walk.add(pair)
    try:
        if kind in ORDERED_KINDS:
            return _sequence_difference(left, right)
        if kind is Kind.MAPPING:
            return _mapping_difference(left, right, walk)
        if kind is Kind.SET:
            return _set_difference(left, right)
        return _record_difference(left, right, walk)
    finally:
        walk.discard(pair)


# ═══════════════════════════════════════════════════════════════════
#  ORDERED SEQUENCES
# ═══════════════════════════════════════════════════════════════════

def _sequence_difference(left: Any, right: Any) -> Diff:
    # Both empty would have been equal; one empty can't be aligned.
    if len(left) == 0 or len(right) == 0:
        return ValueMismatch()

    x, y = list(left), list(right)
    common = lcs(x, y)
    return IndexDiff(left=_uncommon(x, common), right=_uncommon(y, common))


def lcs(x: list, y: list) -> list:
    """
    Longest common subsequence of two lists, using equal() on elements.

    Resolves ties exactly like the recursive definition

        lcs(x, y) = lcs(x[:-1], y[:-1]) + [x[-1]]   if x[-1] ≡ y[-1]
                  = longer of lcs(x[:-1], y) and lcs(x, y[:-1])
                    (the first one when both have the same length)

    but in O(m·n) with a length table and trace-back.
    """
    m, n = len(x), len(y)
    logger.debug("lcs table %dx%d", m + 1, n + 1)

    same = [[equal(x[i], y[j]) for j in range(n)] for i in range(m)]

    # dp[i][j] = length of lcs(x[:i], y[:j])
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if same[i - 1][j - 1]:
                dp[i][j] = dp[i - 1][j - 1] + 1
            else:
                dp[i][j] = max(dp[i - 1][j], dp[i][j - 1])

    # Trace back
    out: list = []
    i, j = m, n
    while i > 0 and j > 0:
        if same[i - 1][j - 1]:
            out.append(x[i - 1])
            i -= 1
            j -= 1
        elif dp[i - 1][j] < dp[i][j - 1]:
            j -= 1
        else:
            i -= 1

    out.reverse()
    return out


def _uncommon(src: list, common: list) -> dict[int, DiffNode]:
    """Positions of src not consumed by walking it against common."""
    info: dict[int, DiffNode] = {}
    j = 0
    for i, item in enumerate(src):
        if j < len(common) and equal(item, common[j]):
            j += 1
            continue
        info[i] = Missing()
    return info


# ═══════════════════════════════════════════════════════════════════
#  MAPPINGS AND SETS
# ═══════════════════════════════════════════════════════════════════

def _mapping_difference(left: Any, right: Any, walk: set[tuple[int, int]]) -> Diff:
    res = KeyDiff()
    left_keys = {exact_key(key): key for key in left}
    right_keys = {exact_key(key): key for key in right}

    for key, value in left.items():
        match = right_keys.get(exact_key(key), UNSET)
        if match is UNSET:
            res.left[key] = Missing()
            continue
        sub = _difference(value, right[match], walk)
        if sub is not None:
            res.left[key] = sub

    for key, value in right.items():
        match = left_keys.get(exact_key(key), UNSET)
        if match is UNSET:
            res.right[key] = Missing()
            continue
        sub = _difference(left[match], value, walk)
        if sub is not None:
            res.right[key] = sub

    if not res.left and not res.right:
        return None
    return res


def _set_difference(left: Any, right: Any) -> Diff:
    left_keys = {exact_key(item) for item in left}
    right_keys = {exact_key(item) for item in right}
    return KeyDiff(
        left={item: Missing() for item in left if exact_key(item) not in right_keys},
        right={item: Missing() for item in right if exact_key(item) not in left_keys},
    )


# ═══════════════════════════════════════════════════════════════════
#  RECORDS
# ═══════════════════════════════════════════════════════════════════

def _record_difference(left: Any, right: Any, walk: set[tuple[int, int]]) -> Diff:
    names = members(left)
    if not same_members(names, members(right)):
        # Same class, different attribute sets: nothing to pair up.
        return ValueMismatch()

    fields: dict[str, DiffNode] = {}
    for name in names:
        sub = _difference(member_value(left, name), member_value(right, name), walk)
        if sub is not None:
            fields[name] = sub

    if not fields:
        # An opaque rule may disagree with every declared field.
        return ValueMismatch() if is_opaque(left) else None
    return FieldDiff(fields)
