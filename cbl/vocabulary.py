"""
Static vocabulary of the CFG language.

The tables are built once at import time and never mutated. Each category is
an ordered tuple so that completion results come out in a stable order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Tuple

from cbl.errors import VocabularyError

# Alphanumerics plus < > = + * / ! _ \ ? -, and the sigil characters @ : $ #
IDENTIFIER_CHARS = r"A-Za-z0-9<>=+*/!_\\?\-@:$#"
IDENTIFIER_RE = re.compile(f"[{IDENTIFIER_CHARS}]+")


def _checked(words: Iterable[str]) -> Tuple[str, ...]:
    out = tuple(words)
    for w in out:
        if not IDENTIFIER_RE.fullmatch(w):
            raise VocabularyError(f"Invalid vocabulary entry: {w!r}")
    return out


@dataclass(frozen=True)
class Vocabulary:
    statements: Tuple[str, ...] = ()
    misc_keywords: Tuple[str, ...] = ()
    operators: Tuple[str, ...] = ()
    type_constructors: Tuple[str, ...] = ()

    def __post_init__(self):
        # frozen dataclass: go through object.__setattr__ to normalize lists into tuples
        for name in ("statements", "misc_keywords", "operators", "type_constructors"):
            object.__setattr__(self, name, _checked(getattr(self, name)))

    def all_words(self) -> Tuple[str, ...]:
        seen = {}
        for group in (self.statements, self.misc_keywords, self.operators, self.type_constructors):
            for w in group:
                seen.setdefault(w, None)
        return tuple(seen)


# control transfer and mutation
STATEMENTS = (
    "goto", "jump", "branch", "return", "tail-call", "call", "halt",
    "set!", "store!", "assign",
)

# declaration and control scaffolding
MISC_KEYWORDS = (
    "define", "define-registers", "block", "entry", "the", "if", "if-let",
    "let", "set-registers", "case", "else", "program", "locals", "begin",
)

# builtin functions and predicates
OPERATORS = (
    "+", "-", "*", "/", "<", ">", "<=", ">=", "=", "eq?", "not", "and", "or",
    "read", "print", "vector", "vector-get", "vector-set!", "vector-length",
    "make-vector", "allocate", "collect", "global-value", "zero?", "void",
)

TYPE_CONSTRUCTORS = (
    "Integer", "Boolean", "Void", "Vector", "Fun", "->", "Any",
)

VOCABULARY = Vocabulary(
    statements=STATEMENTS,
    misc_keywords=MISC_KEYWORDS,
    operators=OPERATORS,
    type_constructors=TYPE_CONSTRUCTORS,
)
