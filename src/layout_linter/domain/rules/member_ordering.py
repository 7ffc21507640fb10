"""Member ordering: class members must follow the configured group order."""

from dataclasses import dataclass
from typing import Literal

from layout_linter.domain.config import OptionReader
from layout_linter.domain.constants import DEFAULT_MEMBER_ORDER, MSG_INVALID_ORDER, RULE_MEMBER_ORDERING
from layout_linter.domain.nodes import ClassBody, ClassMember, Node
from layout_linter.domain.rules import RuleContext, Violation

_FIELD_TYPES = frozenset({"PropertyDefinition", "TSPropertySignature", "TSAbstractPropertyDefinition"})
_METHOD_TYPES = frozenset({"MethodDefinition", "TSMethodSignature", "TSAbstractMethodDefinition"})
_SIGNATURE_TYPES = frozenset({"TSIndexSignature", "TSCallSignatureDeclaration"})
_ACCESSIBILITIES = frozenset({"public", "protected", "private"})


@dataclass(frozen=True)
class MemberOrderingOptions:
    order: tuple[str, ...] = DEFAULT_MEMBER_ORDER

    @classmethod
    def from_raw(cls, raw: object) -> "MemberOrderingOptions":
        """Option ``default`` replaces the order; an empty or invalid list keeps the built-in one."""
        configured = OptionReader.string_list(OptionReader.as_mapping(raw).get("default"))
        return cls(order=tuple(configured)) if configured else cls()


class MemberOrderingRule:
    """Rule for class member ordering. Setters and unknown members do not take part."""

    code: str = RULE_MEMBER_ORDERING
    description: str = "Member ordering: fields, constructors and methods in the configured group order."
    fix_type: Literal["whitespace", "code", "none"] = "none"
    node_types: frozenset[str] = frozenset({"ClassBody"})
    messages: dict[str, str] = {
        MSG_INVALID_ORDER: "Class member is out of order (group: {{key}}).",
    }

    def __init__(self, options: MemberOrderingOptions | None = None) -> None:
        self.options = options or MemberOrderingOptions()
        self._rank: dict[str, int] = {}
        for index, key in enumerate(self.options.order):
            self._rank[key] = index

    @staticmethod
    def group_key(member: Node) -> str | None:
        """Group key such as ``private-static-field``; None for members that are not ranked."""
        if member.type in _SIGNATURE_TYPES:
            return "signature"
        if not isinstance(member, ClassMember):
            return None
        if member.type == "MethodDefinition" and member.kind == "set":
            return None

        access = member.accessibility if member.accessibility in _ACCESSIBILITIES else "public"
        if member.type == "MethodDefinition" and member.kind == "constructor":
            return f"{access}-constructor"

        if member.type in _FIELD_TYPES:
            suffix = "field"
        elif member.type in _METHOD_TYPES:
            suffix = "method"
        else:
            return None

        if member.static:
            return f"{access}-static-{suffix}"
        if member.abstract:
            return f"{access}-abstract-{suffix}"
        if member.decorators:
            return f"{access}-decorated-{suffix}"
        return f"{access}-instance-{suffix}"

    def check(self, node: Node, context: RuleContext) -> list[Violation]:
        if not isinstance(node, ClassBody) or len(node.body) < 2:
            return []
        violations: list[Violation] = []
        highest = -1
        for member in node.body:
            key = self.group_key(member)
            rank = self._rank.get(key) if key is not None else None
            if rank is None:
                continue
            if rank < highest:
                violations.append(
                    Violation.from_node(
                        rule=self.code,
                        message_id=MSG_INVALID_ORDER,
                        template=self.messages[MSG_INVALID_ORDER],
                        node=member,
                        data={"key": key},
                        fix_failure_reason="member reordering is not automated",
                    )
                )
            else:
                highest = rank
        return violations

    def get_fix_instructions(self, violation: Violation) -> str:
        """Provide human instructions for manual fix."""
        key = violation.data.get("key", "?")
        position = self._rank.get(key)
        earlier = ", ".join(self.options.order[:position]) if position else ""
        hint = f" It belongs after: {earlier}." if earlier else ""
        return f"Move this '{key}' member up to its group.{hint}"
