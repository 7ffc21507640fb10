"""Adjacency rule table for the padding rule: ordered, first match wins."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from layout_linter.domain.constants import (
    BLANK_LINE_ALWAYS,
    BLANK_LINE_NEVER,
    CONTROL_KINDS,
    KIND_EXPRESSION,
    KIND_FUNCTION,
    KIND_RETURN,
    VARIABLE_KINDS,
    WILDCARD_SELECTOR,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selector:
    """Wildcard, a single coarse kind or a set of coarse kinds."""

    kinds: frozenset[str]

    @classmethod
    def of(cls, *kinds: str) -> "Selector":
        return cls(kinds=frozenset(kinds))

    @classmethod
    def parse(cls, raw: object) -> "Selector | None":
        """A string or a list of strings (non-strings ignored). None when nothing usable remains."""
        if isinstance(raw, str):
            return cls.of(raw)
        if isinstance(raw, list):
            kinds = [item for item in raw if isinstance(item, str)]
            return cls.of(*kinds) if kinds else None
        return None

    def matches(self, kind: str) -> bool:
        return WILDCARD_SELECTOR in self.kinds or kind in self.kinds


@dataclass(frozen=True)
class PaddingRule:
    """``{blankLine, prev, next}``: the blank-line policy for one pair of selectors."""

    blank_line: str
    prev: Selector
    next: Selector

    @classmethod
    def from_raw(cls, raw: object) -> "PaddingRule | None":
        """Parse one loosely-typed entry. Malformed entries yield None."""
        if not isinstance(raw, dict):
            return None
        blank_line = raw.get("blankLine")
        if not isinstance(blank_line, str):
            return None
        prev = Selector.parse(raw.get("prev"))
        next_selector = Selector.parse(raw.get("next"))
        if prev is None or next_selector is None:
            return None
        return cls(blank_line=blank_line, prev=prev, next=next_selector)

    def matches(self, prev_kind: str, next_kind: str) -> bool:
        return self.prev.matches(prev_kind) and self.next.matches(next_kind)


_VAR = Selector.of(*VARIABLE_KINDS)
_CONTROL = Selector.of(*CONTROL_KINDS)
_FUNCTION = Selector.of(KIND_FUNCTION)
_EXPRESSION = Selector.of(KIND_EXPRESSION)

DEFAULT_PADDING_RULES: tuple[PaddingRule, ...] = (
    PaddingRule(BLANK_LINE_ALWAYS, _VAR, _FUNCTION),
    PaddingRule(BLANK_LINE_ALWAYS, _FUNCTION, _VAR),
    PaddingRule(BLANK_LINE_ALWAYS, _VAR, _CONTROL),
    PaddingRule(BLANK_LINE_ALWAYS, _CONTROL, _VAR),
    PaddingRule(BLANK_LINE_ALWAYS, _VAR, _EXPRESSION),
    PaddingRule(BLANK_LINE_ALWAYS, _EXPRESSION, _VAR),
    PaddingRule(BLANK_LINE_ALWAYS, _CONTROL, _EXPRESSION),
    PaddingRule(BLANK_LINE_ALWAYS, _EXPRESSION, _CONTROL),
    PaddingRule(BLANK_LINE_ALWAYS, _CONTROL, _CONTROL),
    PaddingRule(BLANK_LINE_NEVER, _VAR, _VAR),
    PaddingRule(BLANK_LINE_ALWAYS, Selector.of(WILDCARD_SELECTOR), Selector.of(KIND_RETURN)),
)


@dataclass(frozen=True)
class AdjacencyRuleTable:
    """Ordered padding rules. Built once per rule activation."""

    rules: tuple[PaddingRule, ...] = DEFAULT_PADDING_RULES

    @classmethod
    def from_raw(cls, raw: object) -> "AdjacencyRuleTable":
        """
        Build a table from loosely-typed options.

        Accepts a list of entries (or ``{"rules": [...]}``). Malformed entries
        are dropped; an empty result falls back to the default table.
        """
        entries: object = raw
        if isinstance(raw, dict):
            entries = raw.get("rules")
        if not isinstance(entries, Sequence) or isinstance(entries, str) or not entries:
            return cls()

        parsed: list[PaddingRule] = []
        for entry in entries:
            rule = PaddingRule.from_raw(entry)
            if rule is None:
                logger.warning("Dropping malformed padding entry: %r", entry)
                continue
            parsed.append(rule)
        if not parsed:
            logger.warning("No valid padding entries configured; using the default table.")
            return cls()
        return cls(rules=tuple(parsed))

    def policy_for(self, prev_kind: str, next_kind: str) -> str | None:
        """First matching rule's policy, or None when no rule constrains the pair."""
        for rule in self.rules:
            if rule.matches(prev_kind, next_kind):
                return rule.blank_line
        return None
