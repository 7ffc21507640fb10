"""Rule catalog: name -> rule factory. Rules are built once with their parsed options."""

from collections.abc import Callable
from dataclasses import dataclass

from layout_linter.domain.config import ConfigurationLoader, OptionReader
from layout_linter.domain.constants import (
    RULE_BRACKET_NOTATION,
    RULE_MEMBER_ORDERING,
    RULE_PADDING_LINES,
    RULE_STATEMENT_GROUPS,
    RULE_UNUSED_IMPORTS,
)
from layout_linter.domain.rules import BaseRule
from layout_linter.domain.rules.bracket_notation import BracketNotationOptions, BracketNotationRule
from layout_linter.domain.rules.member_ordering import MemberOrderingOptions, MemberOrderingRule
from layout_linter.domain.rules.padding_lines import PaddingLinesOptions, PaddingLinesRule
from layout_linter.domain.rules.statement_groups import StatementGroupsOptions, StatementGroupsRule
from layout_linter.domain.rules.unused_imports import UnusedImportsRule


@dataclass(frozen=True)
class RuleSpecEntry:
    name: str
    build: Callable[[object], BaseRule]


class RuleCatalog:
    """Builds rule instances from loosely-typed per-rule options."""

    ENTRIES: tuple[RuleSpecEntry, ...] = (
        RuleSpecEntry(RULE_STATEMENT_GROUPS, lambda raw: StatementGroupsRule(StatementGroupsOptions.from_raw(raw))),
        RuleSpecEntry(RULE_PADDING_LINES, lambda raw: PaddingLinesRule(PaddingLinesOptions.from_raw(raw))),
        RuleSpecEntry(RULE_UNUSED_IMPORTS, lambda raw: UnusedImportsRule()),
        RuleSpecEntry(RULE_BRACKET_NOTATION, lambda raw: BracketNotationRule(BracketNotationOptions.from_raw(raw))),
        RuleSpecEntry(RULE_MEMBER_ORDERING, lambda raw: MemberOrderingRule(MemberOrderingOptions.from_raw(raw))),
    )

    @staticmethod
    def names() -> list[str]:
        return [entry.name for entry in RuleCatalog.ENTRIES]

    @staticmethod
    def build(name: str, raw_options: object = None) -> BaseRule:
        """Build one rule by name. Raises KeyError for unknown names."""
        for entry in RuleCatalog.ENTRIES:
            if entry.name == name:
                return entry.build(raw_options)
        raise KeyError(name)

    @staticmethod
    def build_enabled(config: ConfigurationLoader, only: list[str] | None = None) -> list[BaseRule]:
        """
        Build the enabled rules in catalog order.

        ``only`` narrows the configured set further (CLI ``--rule``); unknown
        names there raise KeyError so the caller can report them.
        """
        enabled = config.enabled_rules
        if only:
            for name in only:
                if name not in RuleCatalog.names():
                    raise KeyError(name)
            enabled = [name for name in RuleCatalog.names() if name in only]
        return [RuleCatalog.build(name, RuleCatalog.options_for(name, config, enabled)) for name in enabled]

    @staticmethod
    def options_for(name: str, config: ConfigurationLoader, enabled: list[str]) -> object:
        """
        Configured options of one rule, adjusted for the rules it runs with.

        The default padding table forbids blank lines between declarations of
        any keyword, so alongside it the grouping rule treats ``const``/``let``/``var``
        as one group unless ``mergeVariableKinds`` is set explicitly. Fixing with
        both rules then settles in one run.
        """
        raw = config.rule_options(name)
        if name != RULE_STATEMENT_GROUPS or RULE_PADDING_LINES not in enabled:
            return raw
        options = OptionReader.as_mapping(raw)
        if isinstance(options.get("mergeVariableKinds"), bool):
            return raw
        return {**options, "mergeVariableKinds": True}
