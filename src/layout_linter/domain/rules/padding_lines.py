"""Padding lines between statements, driven by a configurable adjacency table."""

from dataclasses import dataclass, field
from typing import Literal

from layout_linter.domain.constants import (
    BLANK_LINE_ALWAYS,
    BLANK_LINE_NEVER,
    MSG_EXPECTED_BLANK_LINE,
    MSG_UNEXPECTED_BLANK_LINE,
    RULE_PADDING_LINES,
)
from layout_linter.domain.nodes import STATEMENT_LIST_TYPES, Node
from layout_linter.domain.rules import RuleContext, Violation
from layout_linter.domain.rules.adjacency import AdjacencyRuleTable
from layout_linter.domain.rules.blank_lines import BlankLineAnalyzer
from layout_linter.domain.rules.edit_synthesizer import SafeEditSynthesizer
from layout_linter.domain.rules.statement_classifier import CoarseStatementClassifier, StatementList


@dataclass(frozen=True)
class PaddingLinesOptions:
    table: AdjacencyRuleTable = field(default_factory=AdjacencyRuleTable)

    @classmethod
    def from_raw(cls, raw: object) -> "PaddingLinesOptions":
        return cls(table=AdjacencyRuleTable.from_raw(raw))


class PaddingLinesRule:
    """
    Rule for padding lines between statements.

    Each adjacent pair is mapped to coarse kinds and looked up in the table:
    ``always`` requires a blank line, ``never`` forbids one, no match leaves
    the pair alone.
    """

    code: str = RULE_PADDING_LINES
    description: str = "Padding lines: blank lines required or forbidden between statement kinds."
    fix_type: Literal["whitespace", "code", "none"] = "whitespace"
    node_types: frozenset[str] = STATEMENT_LIST_TYPES
    messages: dict[str, str] = {
        MSG_EXPECTED_BLANK_LINE: "Expected a blank line between statements.",
        MSG_UNEXPECTED_BLANK_LINE: "Unexpected blank line between statements.",
    }

    def __init__(self, options: PaddingLinesOptions | None = None) -> None:
        self.options = options or PaddingLinesOptions()

    @property
    def table(self) -> AdjacencyRuleTable:
        return self.options.table

    def check(self, node: Node, context: RuleContext) -> list[Violation]:
        violations: list[Violation] = []
        for prev, following, prev_end, next_start in StatementList.positioned_pairs(node):
            prev_kind = CoarseStatementClassifier.classify(prev)
            next_kind = CoarseStatementClassifier.classify(following)
            policy = self.table.policy_for(prev_kind, next_kind)
            if policy is None:
                continue
            has_blank = BlankLineAnalyzer.has_blank_line(context.source, prev_end, next_start)
            data = {"prev": prev_kind, "next": next_kind}

            if policy == BLANK_LINE_ALWAYS and not has_blank:
                violations.append(
                    Violation.from_node(
                        rule=self.code,
                        message_id=MSG_EXPECTED_BLANK_LINE,
                        template=self.messages[MSG_EXPECTED_BLANK_LINE],
                        node=following,
                        data=data,
                        fix=lambda source, s=prev_end, e=next_start: SafeEditSynthesizer.insert_blank_line(
                            source, s, e
                        ),
                    )
                )
            elif policy == BLANK_LINE_NEVER and has_blank:
                violations.append(
                    Violation.from_node(
                        rule=self.code,
                        message_id=MSG_UNEXPECTED_BLANK_LINE,
                        template=self.messages[MSG_UNEXPECTED_BLANK_LINE],
                        node=following,
                        data=data,
                        fix=lambda source, s=prev_end, e=next_start: SafeEditSynthesizer.remove_blank_lines(
                            source, s, e
                        ),
                    )
                )
        return violations

    def get_fix_instructions(self, violation: Violation) -> str:
        """Provide human instructions for manual fix."""
        pair = f"'{violation.data.get('prev', '?')}' -> '{violation.data.get('next', '?')}'"
        if violation.message_id == MSG_UNEXPECTED_BLANK_LINE:
            return f"Delete the empty line(s) between these statements ({pair}); keep any comment lines."
        return f"Insert an empty line between these statements ({pair})."
