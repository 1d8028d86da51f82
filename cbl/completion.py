"""Completion from the static CFG-language vocabulary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from cbl.vocabulary import VOCABULARY, Vocabulary


@dataclass(frozen=True)
class Completions:
    candidates: Tuple[str, ...] = ()
    # other providers (e.g. symbols defined in the buffer) may add to these
    exclusive: bool = False


def complete(prefix: str, vocabulary: Vocabulary = VOCABULARY) -> Completions:
    """Vocabulary entries starting with prefix, in vocabulary order. Empty prefix yields nothing."""
    if not prefix:
        return Completions()
    return Completions(tuple(w for w in vocabulary.all_words() if w.startswith(prefix)))


def prefix_at(text: str, pos: int) -> str:
    """The partial token ending at pos."""
    i = max(0, min(pos, len(text)))
    start = i
    while start > 0 and text[start - 1] not in ' \t\r\n()";':
        start -= 1
    return text[start:i]
