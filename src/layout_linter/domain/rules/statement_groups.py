"""Blank lines between statement groups: require a blank line whenever the group changes."""

from dataclasses import dataclass
from typing import Literal

from layout_linter.domain.config import OptionReader
from layout_linter.domain.constants import (
    DEFAULT_LOGGING_RECEIVERS,
    DEFAULT_THIS_LOGGING_RECEIVERS,
    GROUPS_SEPARATED_WITHIN,
    MSG_EXPECTED_BLANK_LINE,
    RULE_STATEMENT_GROUPS,
)
from layout_linter.domain.nodes import STATEMENT_LIST_TYPES, Node
from layout_linter.domain.rules import FixFunction, RuleContext, Violation
from layout_linter.domain.rules.blank_lines import BlankLineAnalyzer
from layout_linter.domain.rules.edit_synthesizer import SafeEditSynthesizer
from layout_linter.domain.rules.statement_classifier import StatementClassifier, StatementList


@dataclass(frozen=True)
class StatementGroupsOptions:
    """
    Logging receivers whose calls never count as the ``call`` group, and whether
    ``const``/``let``/``var`` share one group (``mergeVariableKinds``).
    """

    logging_receivers: frozenset[str] = DEFAULT_LOGGING_RECEIVERS
    this_logging_receivers: frozenset[str] = DEFAULT_THIS_LOGGING_RECEIVERS
    merge_variable_kinds: bool = False

    @classmethod
    def from_raw(cls, raw: object) -> "StatementGroupsOptions":
        options = OptionReader.as_mapping(raw)
        merge = options.get("mergeVariableKinds")
        return cls(
            logging_receivers=OptionReader.string_set(options.get("loggingReceivers"), DEFAULT_LOGGING_RECEIVERS),
            this_logging_receivers=OptionReader.string_set(
                options.get("thisLoggingReceivers"), DEFAULT_THIS_LOGGING_RECEIVERS
            ),
            merge_variable_kinds=merge if isinstance(merge, bool) else False,
        )


class StatementGroupsRule:
    """
    Rule for blank lines between statement groups.

    Adjacent statements with different group tags must be separated by a blank
    line, and so must two statements of a group that is isolated even from its
    own kind (tests, types, interfaces, functions, classes). This rule never
    removes blank lines; padding-line-between-statements owns that.
    """

    code: str = RULE_STATEMENT_GROUPS
    description: str = "Blank lines between statement groups: separate statements whose group changes."
    fix_type: Literal["whitespace", "code", "none"] = "whitespace"
    node_types: frozenset[str] = STATEMENT_LIST_TYPES
    messages: dict[str, str] = {
        MSG_EXPECTED_BLANK_LINE: "Expected a blank line between statement groups.",
    }

    def __init__(self, options: StatementGroupsOptions | None = None) -> None:
        self.options = options or StatementGroupsOptions()
        self._classifier = StatementClassifier(
            logging_receivers=self.options.logging_receivers,
            this_logging_receivers=self.options.this_logging_receivers,
            merge_variable_kinds=self.options.merge_variable_kinds,
        )

    @property
    def classifier(self) -> StatementClassifier:
        return self._classifier

    def requires_blank_line(self, prev_group: str, next_group: str) -> bool:
        return prev_group != next_group or prev_group in GROUPS_SEPARATED_WITHIN

    def check(self, node: Node, context: RuleContext) -> list[Violation]:
        """Evaluate each adjacent pair of the statement list independently."""
        violations: list[Violation] = []
        for prev, following, prev_end, next_start in StatementList.positioned_pairs(node):
            prev_group = self._classifier.classify(prev)
            next_group = self._classifier.classify(following)
            if not self.requires_blank_line(prev_group, next_group):
                continue
            if BlankLineAnalyzer.has_blank_line(context.source, prev_end, next_start):
                continue
            violations.append(
                Violation.from_node(
                    rule=self.code,
                    message_id=MSG_EXPECTED_BLANK_LINE,
                    template=self.messages[MSG_EXPECTED_BLANK_LINE],
                    node=following,
                    data={"prev": prev_group, "next": next_group},
                    fix=self._insert_fix(prev_end, next_start),
                )
            )
        return violations

    @staticmethod
    def _insert_fix(prev_end: int, next_start: int) -> FixFunction:
        return lambda source: SafeEditSynthesizer.insert_blank_line(source, prev_end, next_start)

    def get_fix_instructions(self, violation: Violation) -> str:
        """Provide human instructions for manual fix."""
        return (
            f"Insert an empty line before this statement: it starts a new group "
            f"('{violation.data.get('prev', '?')}' -> '{violation.data.get('next', '?')}'). "
            "Statements on the same line cannot be separated automatically."
        )
