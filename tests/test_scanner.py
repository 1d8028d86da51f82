import pytest

from cbl.reader.scanner import (
    ParseState,
    column_of,
    find_enclosing_form,
    head_symbol_of,
    last_complete_sibling_before,
    top_level_start,
)
from tests.conftest import split_cursor


# ----------------------------------------
# 1. Enclosing form
# ----------------------------------------
@pytest.mark.parametrize(
    "source, depth, form_start",
    [
        ("|", 0, None),
        ("(a b) c|", 0, None),
        ("(a (b c|", 2, 3),
        ("(a (b c) |", 1, 0),
        (")) (a|", 1, 3),            # stray closers are ignored
        ("(a)))) (b|", 1, 7),
        ("(a ; (b (c\n|", 1, 0),      # comment does not open anything
        ('(a "(b (c" |', 1, 0),       # neither does a string
        ('(a "\\" (" |', 1, 0),       # escaped quote inside a string
    ]
)
def test_find_enclosing_form_depth(source, depth, form_start):
    text, pos = split_cursor(source)
    state = find_enclosing_form(text, pos)
    assert state.depth == depth
    assert state.form_start == form_start


def test_top_level_state_is_empty():
    assert find_enclosing_form("", 0) == ParseState()


def test_siblings_and_head():
    text, pos = split_cursor("(block l: (x) y |")
    state = find_enclosing_form(text, pos)
    assert state.head == "block"
    assert state.siblings == (1, 7, 10, 14)
    assert state.argument_count == 3


def test_token_cut_by_cursor_is_not_complete():
    text, pos = split_cursor("(abc de|f")
    state = find_enclosing_form(text, pos)
    assert state.siblings == (1,)
    assert state.head == "abc"
    assert state.argument_count == 0


def test_cursor_inside_string():
    text, pos = split_cursor('(a "(b|')
    state = find_enclosing_form(text, pos)
    assert state.in_string
    assert state.depth == 1


@pytest.mark.parametrize("pos", [-5, 0, 1000])
def test_out_of_range_positions_are_clamped(pos):
    state = find_enclosing_form("(a (b", pos)
    assert state.depth >= 0


def test_scan_starts_at_last_top_level_form():
    # the line opening in column 0 is taken as the start of a new top-level form
    text = "(x (y\n(a b\n"
    assert top_level_start(text, len(text)) == 6
    state = find_enclosing_form(text, len(text))
    assert state.depth == 1
    assert state.form_start == 6


def test_column_zero_paren_inside_string_is_not_a_top_level_start():
    text = '(define f (x)\n   (print "a\n(b")\n'
    assert top_level_start(text, len(text)) == 0
    state = find_enclosing_form(text, len(text))
    assert state.depth == 1
    assert state.form_start == 0
    assert state.argument_count == 3


def test_string_check_falls_back_past_several_candidates():
    text = '(print "a\n(b")\n(goto l:\n'
    # "(goto" is checked from "(b", which sits inside the string, so both are skipped
    assert top_level_start(text, len(text)) == 0
    state = find_enclosing_form(text, len(text))
    assert state.depth == 1
    assert state.head == "goto"


# ----------------------------------------
# 2. Head symbol
# ----------------------------------------
@pytest.mark.parametrize(
    "source, expected",
    [
        ("(define f (x))", "define"),
        ("(  let ((x 1)))", "let"),
        ("(\n ; comment\n  block b:)", "block"),
        ("(@f 1 2)", "@f"),
        ("((f x) y)", None),
        ('("s" x)', None),
        ("()", None),
        ("(", None),
    ]
)
def test_head_symbol_of(source, expected):
    assert head_symbol_of(source, 0) == expected


# ----------------------------------------
# 3. Alignment anchor
# ----------------------------------------
@pytest.mark.parametrize(
    "source, expected_column",
    [
        ("(foo a b|", 5),                 # first argument on the form's line
        ("(foo (a\n      b)|", 5),         # multi-line argument started on the form's line
        ("(foo (a\n      b) c|", 9),
        ("(foo\n  a b|", 2),               # first sub-expression of the last line
        ("(foo a\n     b\n     (c d)|", 5),
        ("(foo|", None),                  # only the head so far
    ]
)
def test_last_complete_sibling_before(source, expected_column):
    text, pos = split_cursor(source)
    anchor = last_complete_sibling_before(text, 0, pos)
    if expected_column is None:
        assert anchor is None
    else:
        assert column_of(text, anchor) == expected_column


def test_sibling_of_closed_form_is_none():
    text = "(a b) (c d"
    assert last_complete_sibling_before(text, 0, len(text)) is None


def test_sibling_requires_open_paren():
    assert last_complete_sibling_before("abc def", 0, 7) is None


def test_column_of():
    text = "(a\n   (b"
    assert column_of(text, 0) == 0
    assert column_of(text, 6) == 3
