"""No bracket notation: ``obj['key']`` with a constant string key should be ``obj.key``."""

from dataclasses import dataclass
from typing import Literal

from layout_linter.domain.config import OptionReader
from layout_linter.domain.constants import MSG_BRACKET_NOTATION, RULE_BRACKET_NOTATION
from layout_linter.domain.nodes import Literal as LiteralNode
from layout_linter.domain.nodes import MemberExpression, Node, TemplateLiteral
from layout_linter.domain.rules import RuleContext, Violation
from layout_linter.domain.rules.edit_synthesizer import SafeEditSynthesizer


@dataclass(frozen=True)
class BracketNotationOptions:
    """Keys that may keep bracket notation (e.g. ``'data-id'`` style keys)."""

    allow: frozenset[str] = frozenset()

    @classmethod
    def from_raw(cls, raw: object) -> "BracketNotationOptions":
        options = OptionReader.as_mapping(raw)
        return cls(allow=frozenset(OptionReader.string_list(options.get("allow"))))


class BracketNotationRule:
    """
    Rule for bracket notation on constant string keys.

    The dot-notation fix is only offered for a plain identifier receiver, a key
    that is a valid identifier name, and a single-line member expression.
    """

    code: str = RULE_BRACKET_NOTATION
    description: str = "No bracket notation: use dot notation for constant string keys."
    fix_type: Literal["whitespace", "code", "none"] = "code"
    node_types: frozenset[str] = frozenset({"MemberExpression"})
    messages: dict[str, str] = {
        MSG_BRACKET_NOTATION: "Do not use bracket notation for string keys (e.g. obj['{{key}}']). "
        "Use dot notation instead.",
    }

    def __init__(self, options: BracketNotationOptions | None = None) -> None:
        self.options = options or BracketNotationOptions()

    def check(self, node: Node, context: RuleContext) -> list[Violation]:
        if not isinstance(node, MemberExpression) or not node.computed:
            return []
        key = self.constant_key(node.property)
        if not key or key in self.options.allow:
            return []
        return [
            Violation.from_node(
                rule=self.code,
                message_id=MSG_BRACKET_NOTATION,
                template=self.messages[MSG_BRACKET_NOTATION],
                node=node,
                data={"key": key},
                fix=lambda source: SafeEditSynthesizer.rewrite_to_dot_notation(source, node, key),
            )
        ]

    @staticmethod
    def constant_key(node: Node | None) -> str | None:
        """String value of a string literal or an expression-free template literal."""
        if isinstance(node, LiteralNode) and isinstance(node.value, str):
            return node.value
        if isinstance(node, TemplateLiteral) and not node.expressions and node.quasis:
            element = node.quasis[0]
            if element.cooked is not None:
                return element.cooked
            return element.raw
        return None

    def get_fix_instructions(self, violation: Violation) -> str:
        """Provide human instructions for manual fix."""
        key = violation.data.get("key", "")
        return (
            f"Rewrite the access as '.{key}'. Keys that are not identifier names, complex receivers "
            "and multi-line expressions are left for manual rewriting."
        )
