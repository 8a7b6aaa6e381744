"""
structeq.kinds — Classify Python values and read their members.

Every value the engine sees falls into exactly one kind:

    None                                → NULL
    bool, numbers, str, Enum, dates...  → SCALAR
    range, re.Pattern, array.array...   → SCALAR    (no member storage)
    bytes / bytearray                   → BYTES
    tuple                               → ARRAY     (fixed-size, positional)
    list / deque                        → SEQUENCE
    dict / mappingproxy                 → MAPPING
    set / frozenset                     → SET
    dataclass, namedtuple, objects      → RECORD
    functions, methods, partials        → CALLABLE
    queues, generators, files, buffers  → UNSUPPORTED

Records are read through a single narrow accessor: members(value) lists
member names in declaration order and member_value(value, name) or
read_member(value, index) reads one of them.  Private (underscore)
members are included, name-mangled slots under their mangled name.
"""

import asyncio
import dataclasses
import datetime
import enum
import io
import numbers
import queue
import types
import uuid
from collections import deque
from typing import Any

from .opaque import is_opaque, opaque_rule


# ═══════════════════════════════════════════════════════════════════
#  KINDS
# ═══════════════════════════════════════════════════════════════════

class Kind(enum.Enum):
    """Structural kind of a runtime value."""
    NULL = enum.auto()
    SCALAR = enum.auto()
    BYTES = enum.auto()
    ARRAY = enum.auto()
    SEQUENCE = enum.auto()
    MAPPING = enum.auto()
    SET = enum.auto()
    RECORD = enum.auto()
    CALLABLE = enum.auto()
    UNSUPPORTED = enum.auto()


SCALAR_TYPES = (
    bool,
    numbers.Number,
    str,
    enum.Enum,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    type,
)

UNSUPPORTED_TYPES = (
    queue.Queue,
    queue.SimpleQueue,
    asyncio.Queue,
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
    io.IOBase,
    memoryview,
)

# Kinds whose identity may be part of a reference cycle.
REFERENCE_KINDS = frozenset({
    Kind.SEQUENCE,
    Kind.MAPPING,
    Kind.SET,
    Kind.RECORD,
})

ORDERED_KINDS = frozenset({Kind.ARRAY, Kind.SEQUENCE, Kind.BYTES})


def kind_of(value: Any) -> Kind:
    """
    Classify a value.

    Order matters: bool and Enum are checked through SCALAR_TYPES before
    anything else, and namedtuples are records even though they are tuples.
    """
    if value is None:
        return Kind.NULL
    # Opaque registration wins over every structural rule below.
    if is_opaque(value):
        return Kind.RECORD
    if isinstance(value, SCALAR_TYPES):
        return Kind.SCALAR
    if isinstance(value, (bytes, bytearray)):
        return Kind.BYTES
    if isinstance(value, tuple):
        if hasattr(type(value), "_fields"):
            return Kind.RECORD
        return Kind.ARRAY
    if isinstance(value, (list, deque)):
        return Kind.SEQUENCE
    if isinstance(value, (dict, types.MappingProxyType)):
        return Kind.MAPPING
    if isinstance(value, (set, frozenset)):
        return Kind.SET
    if isinstance(value, UNSUPPORTED_TYPES):
        return Kind.UNSUPPORTED
    if dataclasses.is_dataclass(value):
        return Kind.RECORD
    if callable(value):
        return Kind.CALLABLE
    if _has_storage(value):
        return Kind.RECORD
    # range, re.Pattern, array.array...: no members to walk, only ==.
    return Kind.SCALAR


def is_reference(value: Any) -> bool:
    """Reference-like values take part in cycle detection."""
    return value is not None and kind_of(value) in REFERENCE_KINDS


def type_name(value: Any) -> str:
    """Display name of a value's type: int, str, list, Sample, Outer.Inner."""
    return type(value).__qualname__


# ═══════════════════════════════════════════════════════════════════
#  RECORD MEMBER ACCESS
# ═══════════════════════════════════════════════════════════════════

class _Unset:
    """Value of a declared slot that was never assigned."""
    __slots__ = ()

    def __repr__(self) -> str:
        return "<unset>"


UNSET = _Unset()


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            # Private slots are stored under their mangled name.
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{klass.__name__.lstrip('_')}{name}"
            if name not in names:
                names.append(name)
    return names


def _has_storage(value: Any) -> bool:
    if _slot_names(type(value)):
        return True
    try:
        vars(value)
    except TypeError:
        return False
    return True


def members(value: Any) -> tuple[str, ...]:
    """
    Member names of a record, in declaration order.

    Resolution:
        registered opaque type → its declared fields
        dataclass              → dataclasses.fields() (all of them)
        namedtuple             → _fields
        other objects          → __slots__ (whole MRO) then vars()

    Names set through vars() come in assignment order, so two records are
    paired up by name, never by position (see same_members).
    """
    rule = opaque_rule(value)
    if rule is not None:
        return rule.fields
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return tuple(f.name for f in dataclasses.fields(value))
    if isinstance(value, tuple) and hasattr(type(value), "_fields"):
        return tuple(type(value)._fields)

    names = _slot_names(type(value))
    try:
        attrs = vars(value)
    except TypeError:
        attrs = {}
    for name in attrs:
        if name not in names:
            names.append(name)
    return tuple(names)


def same_members(names: tuple[str, ...], other: tuple[str, ...]) -> bool:
    """Whether two member lists name the same members, in any order."""
    return names == other or (len(names) == len(other) and set(names) == set(other))


def member_value(value: Any, name: str) -> Any:
    """
    Read one member of a record by name.

    This is the privileged accessor: it bypasses properties and
    __getattr__ hooks by reading instance storage directly.
    """
    if isinstance(value, tuple) and hasattr(type(value), "_fields"):
        return tuple.__getitem__(value, type(value)._fields.index(name))
    try:
        attrs = vars(value)
    except TypeError:
        attrs = {}
    if name in attrs:
        return attrs[name]
    try:
        return object.__getattribute__(value, name)
    except AttributeError:
        return UNSET


def read_member(value: Any, index: int) -> Any:
    """Read the index-th member of a record."""
    return member_value(value, members(value)[index])


# ═══════════════════════════════════════════════════════════════════
#  KEYS
# ═══════════════════════════════════════════════════════════════════

def exact_key(key: Any) -> tuple:
    """
    Hashable stand-in for a map key or set item that keeps its exact type.

    Native hashing folds 1, 1.0 and True into one key; exact_key does not:

        exact_key(1)       → (int, 1)
        exact_key(True)    → (bool, True)
        exact_key((1, 2))  → (tuple, ((int, 1), (int, 2)))
    """
    cls = type(key)
    if cls is tuple:
        return (cls, tuple(exact_key(item) for item in key))
    if cls is frozenset:
        return (cls, frozenset(exact_key(item) for item in key))
    return (cls, key)
