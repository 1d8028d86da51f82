"""
  Structural scanner for CFG-language text

- Tolerant: works on partial, unbalanced buffers (editors query mid-edit)
- Pure: every function is a function of (text, position) only
- Bounded: scanning starts at the enclosing top-level form, not at offset 0

Line comments (`;` to end of line) and string literals never affect delimiter
balance. Stray closing parens are ignored and depth never goes below 0.

A forward balance scan is run from the start of the enclosing top-level form
(the last line that opens with `(` in column 0, outside any string literal)
up to the query position. That yields the stack of still-open forms and, for
the innermost one, the start offsets of the sub-expressions already completed
inside it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

WHITESPACE = " \t\r\n\f\v"


@dataclass(frozen=True)
class ParseState:
    depth: int = 0
    form_start: Optional[int] = None  # offset of the innermost unclosed '('
    head: Optional[str] = None
    last_sibling: Optional[int] = None  # alignment anchor, see last_complete_sibling_before
    siblings: Tuple[int, ...] = ()  # starts of complete sub-expressions, head included
    in_string: bool = False

    @property
    def argument_count(self) -> int:
        """Complete sub-forms after the head."""
        return max(len(self.siblings) - 1, 0)


@dataclass
class _Frame:
    start: Optional[int]
    children: List[int] = field(default_factory=list)


def clamp(text: str, pos: int) -> int:
    return max(0, min(pos, len(text)))


def line_start(text: str, pos: int) -> int:
    return text.rfind("\n", 0, pos) + 1


def column_of(text: str, pos: int) -> int:
    return pos - line_start(text, pos)


def top_level_start(text: str, pos: int) -> int:
    """
    Offset of the last '(' in column 0 strictly before pos that is not inside
    a string literal, or 0.

    A candidate is checked by scanning from the previous candidate (or the
    start of the text); one that turns out to sit inside a string is skipped.
    """
    candidate = text.rfind("\n(", 0, pos)
    while candidate != -1:
        previous = text.rfind("\n(", 0, candidate)
        origin = 0 if previous == -1 else previous + 1
        if not _ends_in_string(text, origin, candidate + 1):
            return candidate + 1
        candidate = previous
    return 0


def atom_end(text: str, i: int) -> int:
    n = len(text)
    while i < n and text[i] not in WHITESPACE and text[i] not in '();"':
        i += 1
    return i


def string_end(text: str, i: int, limit: int) -> Optional[int]:
    """Offset just past the string opening at i, or None if unterminated before limit."""
    j = i + 1
    while j < limit:
        ch = text[j]
        if ch == "\\":
            j += 2
            continue
        if ch == '"':
            return j + 1
        j += 1
    return None


def _ends_in_string(text: str, start: int, end: int) -> bool:
    i = start
    while i < end:
        ch = text[i]
        if ch == ";":
            nl = text.find("\n", i, end)
            if nl == -1:
                return False
            i = nl
        elif ch == '"':
            j = string_end(text, i, end)
            if j is None:
                return True
            i = j
        else:
            i += 1
    return False


def _scan(text: str, start: int, end: int) -> Tuple[List[_Frame], bool]:
    # frame 0 is the top level; the last frame is the innermost open form
    stack = [_Frame(None)]
    i = start
    while i < end:
        ch = text[i]
        if ch in WHITESPACE:
            i += 1
        elif ch == ";":
            nl = text.find("\n", i, end)
            i = end if nl == -1 else nl
        elif ch == '"':
            j = string_end(text, i, end)
            if j is None:
                return stack, True
            stack[-1].children.append(i)
            i = j
        elif ch == "(":
            stack.append(_Frame(i))
            i += 1
        elif ch == ")":
            # unmatched closers are ignored
            if len(stack) > 1:
                closed = stack.pop()
                stack[-1].children.append(closed.start)
            i += 1
        else:
            j = atom_end(text, i)
            # an atom cut by the query position is not complete yet
            if j <= end:
                stack[-1].children.append(i)
            i = j
    return stack, False


def _align_anchor(text: str, form_start: int, children: List[int]) -> Optional[int]:
    if not children:
        return None
    last_line = line_start(text, children[-1])
    if last_line > line_start(text, form_start):
        # first sub-expression on the line holding the last complete one
        for c in children:
            if c >= last_line:
                return c
    # everything so far sits on the form's opening line: align under the first argument
    return children[1] if len(children) > 1 else None


def find_enclosing_form(text: str, pos: int) -> ParseState:
    pos = clamp(text, pos)
    stack, in_string = _scan(text, top_level_start(text, pos), pos)
    frame = stack[-1]
    if frame.start is None:
        return ParseState(in_string=in_string)
    return ParseState(
        depth=len(stack) - 1,
        form_start=frame.start,
        head=head_symbol_of(text, frame.start),
        last_sibling=_align_anchor(text, frame.start, frame.children),
        siblings=tuple(frame.children),
        in_string=in_string,
    )


def head_symbol_of(text: str, form_start: int) -> Optional[str]:
    """
    First token after the '(' at form_start. None when the head is itself a
    sub-expression, a string, or missing.
    """
    n = len(text)
    i = form_start + 1
    while i < n:
        if text[i] in WHITESPACE:
            i += 1
        elif text[i] == ";":
            nl = text.find("\n", i)
            i = n if nl == -1 else nl
        else:
            break
    if i >= n or text[i] in '()"':
        return None
    return text[i:atom_end(text, i)]


def last_complete_sibling_before(text: str, form_start: int, pos: int) -> Optional[int]:
    """
    Offset to align an ordinary argument under, for the form opening at
    form_start, considering only sub-expressions completed before pos.

    If the last complete sub-expression starts on a later line than the form,
    this is the first sub-expression on that line. Otherwise it is the first
    argument after the head, when there is one on the form's line.
    """
    pos = clamp(text, pos)
    if form_start < 0 or form_start >= pos or text[form_start] != "(":
        return None
    stack, _ = _scan(text, form_start, pos)
    if len(stack) < 2 or stack[1].start != form_start:
        return None
    return _align_anchor(text, form_start, stack[1].children)
