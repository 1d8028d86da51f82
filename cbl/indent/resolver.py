"""
Indentation for CFG-language buffers.

compute_indent answers "which column should this line start at" for a single
line. The line's own content is never consulted, only what precedes it, so
re-indenting lines top-down reaches a fixed point in one pass.
"""

from __future__ import annotations

from typing import Iterator, List, NamedTuple, Optional, Tuple

from cbl.indent.rules import INDENT_RULES, FixedSpecial, IndentRuleTable
from cbl.reader.scanner import WHITESPACE, ParseState, clamp, column_of, find_enclosing_form, line_start


class LineEdit(NamedTuple):
    line: int
    old_width: int  # length of the leading whitespace being replaced
    column: int


def _indent_for_state(text: str, state: ParseState, table: IndentRuleTable) -> int:
    if state.depth == 0:
        return 0
    form_col = column_of(text, state.form_start)
    if state.head is None:
        # head is a sub-expression: align under the list itself
        return form_col + 1
    policy = table.resolve(state.head)
    if isinstance(policy, FixedSpecial):
        if state.argument_count >= policy.count:
            return form_col + policy.body_offset
        # still filling the special slots
        return form_col + 1
    if state.last_sibling is None:
        return form_col + 1
    return column_of(text, state.last_sibling)


def compute_indent(text: str, pos: int, table: IndentRuleTable = INDENT_RULES) -> int:
    """Target column for the line containing pos."""
    pos = clamp(text, pos)
    state = find_enclosing_form(text, line_start(text, pos))
    return _indent_for_state(text, state, table)


def _line_starts(text: str) -> List[int]:
    starts = [0]
    i = text.find("\n")
    while i != -1:
        starts.append(i + 1)
        i = text.find("\n", i + 1)
    return starts


def _leading_width(text: str, start: int) -> int:
    i = start
    while i < len(text) and text[i] in " \t":
        i += 1
    return i - start


def _is_blank_rest(text: str, pos: int) -> bool:
    nl = text.find("\n", pos)
    rest = text[pos:] if nl == -1 else text[pos:nl]
    return not rest.strip(WHITESPACE)


def _plan_line(text: str, start: int, table: IndentRuleTable) -> Tuple[int, Optional[int]]:
    # (width of current leading whitespace, new width or None to leave the line alone)
    width = _leading_width(text, start)
    state = find_enclosing_form(text, start)
    if state.in_string:
        return width, None
    if _is_blank_rest(text, start + width):
        return width, 0
    return width, _indent_for_state(text, state, table)


def indent_line(text: str, line: int, table: IndentRuleTable = INDENT_RULES) -> Tuple[str, int]:
    """
    Re-indent a single line (0-based). Returns (new_text, column). Lines past
    the end of the buffer and lines starting inside a string are left as is.
    """
    starts = _line_starts(text)
    if line < 0 or line >= len(starts):
        return text, 0
    start = starts[line]
    width, column = _plan_line(text, start, table)
    if column is None:
        return text, width
    return text[:start] + " " * column + text[start + width:], column


def _walk(text: str, table: IndentRuleTable, first_line: int = 0,
          last_line: Optional[int] = None) -> Iterator[Tuple[str, LineEdit]]:
    current = text
    start = 0
    line = 0
    while last_line is None or line <= last_line:
        if line >= first_line:
            width, column = _plan_line(current, start, table)
            if column is not None and current[start:start + width] != " " * column:
                current = current[:start] + " " * column + current[start + width:]
                yield current, LineEdit(line, width, column)
        nl = current.find("\n", start)
        if nl == -1:
            return
        start = nl + 1
        line += 1


def line_indent_edits(text: str, table: IndentRuleTable = INDENT_RULES, first_line: int = 0,
                      last_line: Optional[int] = None) -> List[LineEdit]:
    """
    Edits needed to re-indent lines first_line..last_line (inclusive, all by
    default), top-down. Each column is computed as if all earlier edits had
    been applied; old_width is the line's leading whitespace in the original
    text.
    """
    return [edit for _, edit in _walk(text, table, first_line, last_line)]


def reindent(text: str, table: IndentRuleTable = INDENT_RULES) -> str:
    """Re-indent the whole buffer."""
    current = text
    for current, _ in _walk(text, table):
        pass
    return current
