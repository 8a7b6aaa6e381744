"""
structeq.render — Print a value with its mismatches highlighted.

A Printer renders one side of a comparison.  Given the difference tree of
(expected, actual), the left printer colors what only the expected value
has, the right printer what only the actual value has:

    list[                 list[
      1,                    1,
      2,                    3,      ← red on the right, green on the left
    ]                     ]

Only leaf nodes (TypeMismatch, ValueMismatch, Missing) turn emphasis on.
Emphasis is depth counted: the color code is written when the depth
leaves zero and the reset code when it returns to zero, so nested marks
collapse into a single colored run.
"""

import enum
import io
import numbers
from typing import Any

from .kinds import UNSET, Kind, REFERENCE_KINDS, kind_of, members, read_member, type_name
from .tree import Diff, is_leaf, side

COLOR_LEFT = "\033[32m"
COLOR_RIGHT = "\033[31m"
BOLD = "\033[1m"
RESET = "\033[0m"
INDENT = "  "

_BRACKETS = {
    Kind.ARRAY: ("(", ")"),
    Kind.SEQUENCE: ("[", "]"),
    Kind.BYTES: ("[", "]"),
    Kind.MAPPING: ("{", "}"),
    Kind.SET: ("{", "}"),
    Kind.RECORD: ("(", ")"),
}


def sort_key(key: Any) -> tuple:
    """Stable order for map keys: numbers, then strings, then by repr."""
    if isinstance(key, numbers.Real):
        return (0, "", key)
    if isinstance(key, str):
        return (1, "", key)
    return (2, type_name(key), repr(key))


class Printer:
    """Renders values for one side (left = expected, right = actual)."""

    def __init__(self, is_left: bool, *, color_left: str = COLOR_LEFT,
                 color_right: str = COLOR_RIGHT, indent: str = INDENT):
        self.buf = io.StringIO()
        self.is_left = is_left
        self.color = color_left if is_left else color_right
        self.indent = indent
        self._depth = 0
        self._rendering: set[int] = set()

    def getvalue(self) -> str:
        return self.buf.getvalue()

    # ── emphasis ──────────────────────────────────────────────────

    def _open(self, node: Diff) -> None:
        if not is_leaf(node):
            return
        if self._depth == 0:
            self.buf.write(self.color)
        self._depth += 1

    def _close(self, node: Diff) -> None:
        if not is_leaf(node):
            return
        self._depth -= 1
        if self._depth == 0:
            self.buf.write(RESET)

    # ── back-references ───────────────────────────────────────────

    def _enter(self, value: Any) -> bool:
        addr = id(value)
        if addr in self._rendering:
            self.buf.write(f"<{type_name(value)} at {addr:#x}>")
            return False
        self._rendering.add(addr)
        return True

    def _leave(self, value: Any) -> None:
        self._rendering.discard(id(value))

    # ── values ────────────────────────────────────────────────────

    def print_value(self, value: Any, node: Diff = None, *,
                    offset: str = "", show_type: bool = False) -> None:
        """Render `value`, highlighting according to `node`."""
        self._open(node)
        self._print(value, node, offset, show_type)
        self._close(node)

    def _print(self, value: Any, node: Diff, offset: str, show_type: bool) -> None:
        if value is UNSET:
            self.buf.write(repr(value))
            return

        kind = kind_of(value)
        if kind is Kind.NULL:
            self.buf.write("None")
        elif kind is Kind.SCALAR:
            self.buf.write(self._scalar(value, show_type))
        elif kind is Kind.CALLABLE:
            name = getattr(value, "__qualname__", type_name(value))
            self.buf.write(f"<function {name}>")
        elif kind is Kind.UNSUPPORTED:
            self.buf.write(f"<{type_name(value)} object>")
        elif kind is Kind.RECORD:
            self._record(value, node, offset)
        else:
            self._container(value, kind, node, offset)

    def _scalar(self, value: Any, show_type: bool) -> str:
        name = type_name(value)
        cls = type(value)
        if isinstance(value, enum.Enum):
            return f"{name}.{value.name}"
        if cls is bool:
            return f"bool({value})" if show_type else str(value)
        if isinstance(value, str):
            text = str.__repr__(value)
            return text if cls is str else f"{name}({text})"
        if cls in (int, float, complex):
            return f"{name}({value!r})" if show_type else repr(value)
        if isinstance(value, (int, float, complex)):
            return f"{name}({value!r})"
        return repr(value)

    def _container(self, value: Any, kind: Kind, node: Diff, offset: str) -> None:
        name = type_name(value)
        opening, closing = _BRACKETS[kind]
        if len(value) == 0:
            self.buf.write(f"{name}{opening}{closing}")
            return
        if kind in REFERENCE_KINDS and not self._enter(value):
            return

        inner = offset + self.indent
        children = side(node, self.is_left)
        self.buf.write(f"{name}{opening}\n")

        if kind is Kind.MAPPING:
            for key in sorted(value.keys(), key=sort_key):
                sub = children.get(key)
                self.buf.write(inner)
                self._open(sub)
                self.print_value(key, offset=inner)
                self.buf.write(": ")
                self.print_value(value[key], sub, offset=inner)
                self._close(sub)
                self.buf.write(",\n")
        elif kind is Kind.SET:
            for item in sorted(value, key=sort_key):
                self.buf.write(inner)
                self.print_value(item, children.get(item), offset=inner)
                self.buf.write(",\n")
        else:
            for i, item in enumerate(value):
                self.buf.write(inner)
                self.print_value(item, children.get(i), offset=inner)
                self.buf.write(",\n")

        self.buf.write(offset + closing)
        if kind in REFERENCE_KINDS:
            self._leave(value)

    def _record(self, value: Any, node: Diff, offset: str) -> None:
        name = type_name(value)
        names = members(value)
        if not names:
            self.buf.write(f"{name}()")
            return
        if not self._enter(value):
            return

        inner = offset + self.indent
        fields = side(node, self.is_left)
        self.buf.write(f"{name}(\n")
        for i, member in enumerate(names):
            sub = fields.get(member)
            self.buf.write(inner)
            self._open(sub)
            self.buf.write(f"{member}=")
            self.print_value(read_member(value, i), sub, offset=inner)
            self._close(sub)
            self.buf.write(",\n")
        self.buf.write(offset + ")")
        self._leave(value)


def render(value: Any, node: Diff = None, *, is_left: bool = False,
           show_type: bool = True) -> str:
    """Render one value as text, highlighted by `node`."""
    printer = Printer(is_left)
    printer.print_value(value, node, show_type=show_type)
    return printer.getvalue()
