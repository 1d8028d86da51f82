"""
Token classification for highlighting.

classify() maps one identifier to a TokenCategory. The checks run in a fixed
order and the first hit wins: the four vocabulary lookups, then the literal
patterns, then the sigils. classify_region() tokenizes a stretch of text
(skipping comments and strings) and yields (start, end, category) spans for
the host to paint.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import List, NamedTuple, Optional

from cbl.reader.scanner import clamp, top_level_start
from cbl.vocabulary import IDENTIFIER_CHARS, VOCABULARY, Vocabulary


class TokenCategory(Enum):
    STATEMENT = "statement"
    MISC_KEYWORD = "misc-keyword"
    OPERATOR = "operator"
    TYPE_CONSTRUCTOR = "type-constructor"
    NUMERIC_LITERAL = "numeric-literal"
    BOOLEAN_LITERAL = "boolean-literal"
    GLOBAL_REF = "global-ref"
    FUNCTION_REF = "function-ref"
    LABEL_REF = "label-ref"
    PLAIN_IDENTIFIER = "plain-identifier"


class Span(NamedTuple):
    start: int
    end: int
    category: TokenCategory


# Digit groups never start with a bare 0: "0", "00" and "0x0" are not numbers.
_DIGITS = r"(?:0x[1-9A-Fa-f][0-9A-Fa-f]*|0?[1-9][0-9]*)"
NUMBER_RE = re.compile(rf"[-+]?{_DIGITS}(?:/{_DIGITS})?")
BOOLEAN_RE = re.compile(r"#[tTfF]")

SCAN_RE = re.compile(
    r"(?P<space>\s+)"
    r"|(?P<comment>;[^\n]*)"
    r'|(?P<string>"(?:\\.|[^\\"])*"?)'
    rf"|(?P<ident>[{IDENTIFIER_CHARS}]+)"
    r"|(?P<other>.)",
    re.DOTALL,
)


def classify(token: str, vocabulary: Vocabulary = VOCABULARY) -> TokenCategory:
    if token in vocabulary.statements:
        return TokenCategory.STATEMENT
    if token in vocabulary.misc_keywords:
        return TokenCategory.MISC_KEYWORD
    if token in vocabulary.operators:
        return TokenCategory.OPERATOR
    if token in vocabulary.type_constructors:
        return TokenCategory.TYPE_CONSTRUCTOR
    if NUMBER_RE.fullmatch(token):
        return TokenCategory.NUMERIC_LITERAL
    if BOOLEAN_RE.fullmatch(token):
        return TokenCategory.BOOLEAN_LITERAL
    if token.startswith("@"):
        return TokenCategory.FUNCTION_REF
    if token.startswith("$"):
        return TokenCategory.GLOBAL_REF
    if token.endswith(":"):
        return TokenCategory.LABEL_REF
    return TokenCategory.PLAIN_IDENTIFIER


def classify_region(
    text: str,
    start: int = 0,
    end: Optional[int] = None,
    vocabulary: Vocabulary = VOCABULARY,
) -> List[Span]:
    """
    Spans for every identifier overlapping [start, end). Tokens crossing the
    region boundary are reported whole.
    """
    start = clamp(text, start)
    end = len(text) if end is None else clamp(text, end)
    if start >= end:
        return []
    spans: List[Span] = []
    # start from the enclosing top-level form so a region never begins mid-string
    for m in SCAN_RE.finditer(text, top_level_start(text, start)):
        if m.start() >= end:
            break
        if m.lastgroup != "ident" or m.end() <= start:
            continue
        spans.append(Span(m.start(), m.end(), classify(m.group(), vocabulary)))
    return spans
