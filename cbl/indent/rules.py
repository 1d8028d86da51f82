"""Indentation policies for the special forms of the CFG language.

Maps keyword strings to one of the IndentPolicy variants below. The resolver
consults this table with the head symbol of the enclosing form; anything not
listed indents like an ordinary function call (DefaultAlign).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Optional, Union

from cbl.errors import IndentTableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DefaultAlign:
    """Indent under the first argument, or one past the paren."""


@dataclass(frozen=True)
class FixedSpecial:
    """The first `count` sub-forms are special; the body goes at form column + body_offset."""
    count: int
    body_offset: int


@dataclass(frozen=True)
class AliasOf:
    keyword: str


IndentPolicy = Union[DefaultAlign, FixedSpecial, AliasOf, None]

DEFAULT_ALIGN = DefaultAlign()


class IndentRuleTable(Mapping[str, IndentPolicy]):
    """
    Immutable keyword -> policy mapping.

    Alias targets are checked on construction: an alias must name a keyword in
    the table and following aliases must reach a non-alias policy.
    """

    def __init__(self, rules: Mapping[str, IndentPolicy], validate: bool = True):
        self._rules: Dict[str, IndentPolicy] = dict(rules)
        if validate:
            for keyword in self._rules:
                self._check_alias_chain(keyword)
        logger.debug("Built indent rule table with %d entries", len(self._rules))

    def _check_alias_chain(self, keyword: str) -> None:
        seen = [keyword]
        policy = self._rules[keyword]
        while isinstance(policy, AliasOf):
            target = policy.keyword
            if target not in self._rules:
                raise IndentTableError(f"'{seen[-1]}' is an alias of unknown keyword '{target}'")
            if target in seen:
                raise IndentTableError("Alias cycle: " + " -> ".join(seen + [target]))
            seen.append(target)
            policy = self._rules[target]

    def __getitem__(self, keyword: str) -> IndentPolicy:
        return self._rules[keyword]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self):
        return f"IndentRuleTable({self._rules!r})"

    def resolve(self, keyword: Optional[str]) -> Union[DefaultAlign, FixedSpecial]:
        """
        Terminal policy for keyword, following aliases.

        Unknown keywords and `None` policies resolve to DefaultAlign. A chain
        longer than the table (a cycle in an unvalidated table) also falls back
        to DefaultAlign.
        """
        if keyword is None:
            return DEFAULT_ALIGN
        policy = self._rules.get(keyword)
        hops = 0
        while isinstance(policy, AliasOf):
            hops += 1
            if hops > len(self._rules):
                logger.warning("Alias chain for '%s' does not terminate; using default alignment", keyword)
                return DEFAULT_ALIGN
            policy = self._rules.get(policy.keyword)
        if policy is None:
            return DEFAULT_ALIGN
        return policy


# Procedure-defining forms: name and parameter list are special
DEFINE_RULE = FixedSpecial(count=2, body_offset=3)
# Block labels, bindings and branches: one special argument
BLOCK_RULE = FixedSpecial(count=1, body_offset=1)

INDENT_RULES = IndentRuleTable({
    "define": DEFINE_RULE,
    "define-registers": AliasOf("define"),
    "block": BLOCK_RULE,
    "entry": BLOCK_RULE,
    "the": BLOCK_RULE,
    "if": BLOCK_RULE,
    "if-let": BLOCK_RULE,
    "let": BLOCK_RULE,
    "set-registers": BLOCK_RULE,
    "case": BLOCK_RULE,
})
