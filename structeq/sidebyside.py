"""
structeq.sidebyside — Two rendered panes, one report.

    Expected                Actual
    list[                   list[
      1,                      1,
      2,                      3,
    ]                       ]

Widths are measured on the visible text: control sequences are stripped
for measuring only and kept in the output.
"""

import logging
import re
from typing import Any

from .difference import difference
from .render import BOLD, RESET, render
from .tree import ValueMismatch

logger = logging.getLogger(__name__)

HEADER_LEFT = "Expected"
HEADER_RIGHT = "Actual"

ANSI_PATTERN = re.compile(
    "[\u001b\u009b][\\[\\]()#;?]*"
    "(?:(?:(?:[a-zA-Z\\d]*(?:;[a-zA-Z\\d]*)*)?\u0007)"
    "|(?:(?:\\d{1,4}(?:;\\d{0,4})*)?[\\dA-PRZcf-ntqry=><~]))"
)


def strip_ansi(text: str) -> str:
    """Remove ANSI control sequences from text."""
    return ANSI_PATTERN.sub("", text)


def compose(left_pane: str, right_pane: str) -> str:
    """
    Interleave two multi-line panes into two columns.

    The left column is as wide as the widest visible left line plus one;
    each row is the padded left line, a space and the right line.
    """
    left = [f"{BOLD}{HEADER_LEFT}{RESET}"] + left_pane.split("\n")
    right = [f"{BOLD}{HEADER_RIGHT}{RESET}"] + right_pane.split("\n")

    visible = [len(strip_ansi(line)) for line in left]
    width = max(visible) + 1

    rows = []
    for i in range(max(len(left), len(right))):
        if i < len(left):
            cell = left[i] + " " * (width - visible[i])
        else:
            cell = " " * width
        rows.append(f"{cell} {right[i] if i < len(right) else ''}")

    logger.debug("composed %d rows, left width %d", len(rows), width)
    return "\n".join(rows)


def side_by_side_text(want: Any, got: Any) -> str:
    """
    Render expected and actual values side by side with their differences.

    A None on either side can't be diffed structurally: it is shown whole,
    marked as a plain value mismatch unless both sides are None.
    """
    if want is None or got is None:
        node = None if want is got else ValueMismatch()
    else:
        node = difference(want, got)
    return compose(
        render(want, node, is_left=True),
        render(got, node, is_left=False),
    )
