"""
Test suite for structeq.render — highlighted value rendering.

    §1  Plain forms
    §2  Highlighting
    §3  Back-references
"""

import os
import queue
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from structeq import (
    FieldDiff, IndexDiff, KeyDiff, Missing, Printer, TypeMismatch, ValueMismatch,
    render, strip_ansi,
)
from structeq.render import COLOR_LEFT, COLOR_RIGHT, RESET, sort_key
from samples import Color, Mangled, Node, Pair, Sample, Slotted, Sub, Wrapper, helper


# ═══════════════════════════════════════════════════════════════════
#  §1  PLAIN FORMS
# ═══════════════════════════════════════════════════════════════════

class TestPlainForms:

    @pytest.mark.parametrize("value,want", [
        (1, "int(1)"),
        (2.5, "float(2.5)"),
        (True, "bool(True)"),
        ("Hello!", "'Hello!'"),
        (None, "None"),
        (Color.RED, "Color.RED"),
    ])
    def test_scalars_with_type(self, value, want):
        assert render(value) == want

    def test_scalars_without_type(self):
        assert render(1, show_type=False) == "1"
        assert render(False, show_type=False) == "False"

    @pytest.mark.parametrize("value,want", [
        ([], "list[]"),
        ((), "tuple()"),
        ({}, "dict{}"),
        (set(), "set{}"),
        (frozenset(), "frozenset{}"),
        (b"", "bytes[]"),
    ])
    def test_empty_containers(self, value, want):
        assert render(value) == want

    def test_empty_differs_from_null(self):
        assert render([]) != render(None)

    def test_list(self):
        assert render([True, True, False]) == "list[\n  True,\n  True,\n  False,\n]"

    def test_tuple(self):
        assert render((1, "a")) == "tuple(\n  1,\n  'a',\n)"

    def test_map_keys_sorted(self):
        assert render({"a": 10, "1": 1}) == "dict{\n  '1': 1,\n  'a': 10,\n}"

    def test_mixed_keys_sorted_numbers_first(self):
        keys = sorted(["b", 2, "a", 1.5], key=sort_key)
        assert keys == [1.5, 2, "a", "b"]

    def test_set_sorted(self):
        assert render({3, 1, 2}) == "set{\n  1,\n  2,\n  3,\n}"

    def test_record(self):
        assert render(Node(1, "x")) == "Node(\n  a=1,\n  b='x',\n  s=None,\n)"

    def test_nested_record_indentation(self):
        got = render(Wrapper("abcd", Sample("str", Sub(12))))
        assert got == (
            "Wrapper(\n"
            "  a='abcd',\n"
            "  b=Sample(\n"
            "    name='str',\n"
            "    sub=Sub(\n"
            "      val=12,\n"
            "    ),\n"
            "  ),\n"
            ")"
        )

    def test_opaque_shows_declared_fields_only(self):
        got = render(Sample("s", _size_cache=5))
        assert "_size_cache" not in got

    def test_namedtuple(self):
        assert render(Pair(1, 2)) == "Pair(\n  first=1,\n  second=2,\n)"

    def test_unset_slot(self):
        assert render(Slotted(1)) == "Slotted(\n  x=1,\n  _hidden=<unset>,\n)"

    def test_function(self):
        assert render(helper) == "<function helper>"

    def test_unsupported(self):
        assert render(queue.Queue()) == "<Queue object>"

    def test_memberless_builtin(self):
        assert render(range(3)) == "range(0, 3)"

    def test_name_mangled_slot(self):
        assert render(Mangled(1)) == "Mangled(\n  _Mangled__secret=1,\n)"


# ═══════════════════════════════════════════════════════════════════
#  §2  HIGHLIGHTING
# ═══════════════════════════════════════════════════════════════════

class TestHighlighting:

    def test_missing_index_on_the_right(self):
        got = render([1, 2, 3], IndexDiff(right={1: Missing()}))
        assert got == f"list[\n  1,\n  {COLOR_RIGHT}2{RESET},\n  3,\n]"

    def test_left_side_uses_its_own_view_and_color(self):
        node = IndexDiff(left={0: Missing()}, right={1: Missing()})
        got = render([1, 2], node, is_left=True)
        assert got == f"list[\n  {COLOR_LEFT}1{RESET},\n  2,\n]"

    def test_missing_key_highlights_whole_entry(self):
        got = render({1: "Hello", 2: "World!"}, KeyDiff(right={2: Missing()}))
        assert got == f"dict{{\n  1: 'Hello',\n  {COLOR_RIGHT}2: 'World!'{RESET},\n}}"

    def test_nested_emphasis_collapses(self):
        got = render({2: "World!"}, KeyDiff(right={2: ValueMismatch()}))
        assert got.count(COLOR_RIGHT) == 1
        assert got.count(RESET) == 1

    def test_leaf_at_the_root(self):
        got = render(1, TypeMismatch("int", "str"), is_left=True)
        assert got == f"{COLOR_LEFT}int(1){RESET}"

    def test_composites_do_not_emphasize(self):
        assert "\033[" not in render([1], IndexDiff())
        assert "\033[" not in render({1: 2}, KeyDiff())
        assert "\033[" not in render(Node(), FieldDiff({}))

    def test_field_path(self):
        node = FieldDiff({"b": FieldDiff({"sub": ValueMismatch()})})
        got = render(Wrapper("abcd", Sample("str", Sub(14))), node)
        assert got == (
            "Wrapper(\n"
            "  a='abcd',\n"
            "  b=Sample(\n"
            "    name='str',\n"
            f"    {COLOR_RIGHT}sub=Sub(\n"
            "      val=14,\n"
            f"    ){RESET},\n"
            "  ),\n"
            ")"
        )

    def test_strip_gives_plain_rendering(self):
        node = IndexDiff(right={0: Missing(), 2: Missing()})
        assert strip_ansi(render([1, 2, 3], node)) == render([1, 2, 3])

    def test_printer_accumulates(self):
        printer = Printer(is_left=False)
        printer.print_value([1], IndexDiff(right={0: Missing()}))
        assert printer.getvalue() == f"list[\n  {COLOR_RIGHT}1{RESET},\n]"


# ═══════════════════════════════════════════════════════════════════
#  §3  BACK-REFERENCES
# ═══════════════════════════════════════════════════════════════════

class TestBackReferences:

    def test_cyclic_list(self):
        items = [1]
        items.append(items)
        assert render(items) == f"list[\n  1,\n  <list at {id(items):#x}>,\n]"

    def test_cyclic_record(self):
        node = Node(1, "x")
        node.s = node
        got = render(node)
        assert f"s=<Node at {id(node):#x}>" in got

    def test_shared_reference_rendered_in_full(self):
        shared = [1]
        got = render([shared, shared])
        assert " at 0x" not in got
        assert got.count("list[\n") == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
