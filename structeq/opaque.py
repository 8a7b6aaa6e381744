"""
structeq.opaque — Types that carry their own equality contract.

Some values must not be compared member by member.  Generated message
types are the usual example: their instances hold caches, size fields
and other internal layout next to the declared fields, and two messages
with equal declared fields are equal no matter what the internals say.

Such a type is registered once, at the boundary where it enters the
test suite:

    register_opaque(Sample, fields=("name", "sub"))

or declared with the decorator:

    @opaque(fields=("name", "sub"))
    class Sample: ...

Registration is by EXACT type.  A subclass inherits the methods of an
opaque type but not its registration: it is compared structurally
unless it is registered itself.
"""

import dataclasses
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True, slots=True)
class OpaqueRule:
    """How values of one opaque type are compared and shown."""
    equal: Callable[[Any, Any], bool]
    fields: tuple[str, ...]


_registry: dict[type, OpaqueRule] = {}
_lock = threading.Lock()


def _default_fields(cls: type) -> tuple[str, ...]:
    if not dataclasses.is_dataclass(cls):
        raise TypeError(
            f"fields= is required for non-dataclass opaque type {cls.__qualname__}"
        )
    return tuple(f.name for f in dataclasses.fields(cls) if not f.name.startswith("_"))


def register_opaque(
    cls: type,
    *,
    equal: Optional[Callable[[Any, Any], bool]] = None,
    fields: Optional[tuple[str, ...]] = None,
) -> type:
    """
    Declare `cls` as an opaque type.

    Arguments:
        equal:  semantic equality of two instances; defaults to `==`
        fields: declared (externally visible) fields, used when diffing
                and rendering; defaults to the public dataclass fields

    Returns `cls` so it can be used as a decorator body.
    """
    if not isinstance(cls, type):
        raise TypeError(f"expected a class, got {cls!r}")
    rule = OpaqueRule(
        equal=equal if equal is not None else _native_equal,
        fields=tuple(fields) if fields is not None else _default_fields(cls),
    )
    with _lock:
        _registry[cls] = rule
    return cls


def unregister_opaque(cls: type) -> None:
    with _lock:
        _registry.pop(cls, None)


def opaque(
    *,
    equal: Optional[Callable[[Any, Any], bool]] = None,
    fields: Optional[tuple[str, ...]] = None,
) -> Callable[[type], type]:
    """Class decorator form of register_opaque."""
    def wrap(cls: type) -> type:
        return register_opaque(cls, equal=equal, fields=fields)
    return wrap


def opaque_rule(value: Any) -> Optional[OpaqueRule]:
    """The rule for `value`'s exact type, or None if it is not opaque."""
    return _registry.get(type(value))


def is_opaque(value: Any) -> bool:
    return type(value) in _registry


def _native_equal(a: Any, b: Any) -> bool:
    return a == b
