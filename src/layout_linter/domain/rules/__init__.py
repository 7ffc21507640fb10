"""Domain models for rules and violations."""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, Protocol

__all__ = [
    "BaseRule",
    "Checkable",
    "FixFunction",
    "Fixable",
    "RuleContext",
    "Violation",
]

from layout_linter.domain.nodes import Node
from layout_linter.domain.source import SourceText

if TYPE_CHECKING:
    from layout_linter.domain.entities import TextEdit
    from layout_linter.domain.protocols import ScopeProtocol

FixFunction = Callable[[SourceText], "TextEdit | None"]
"""Pure function from the current source text to one edit, or None to refuse."""

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


@dataclass(frozen=True)
class Violation:
    """A rule violation with rule name, message id, target node and optional fix."""

    rule: str
    message_id: str
    message: str
    node: Node
    data: Mapping[str, str] = field(default_factory=dict)
    fix: FixFunction | None = field(default=None, compare=False, repr=False)
    fix_failure_reason: str | None = None
    """Reason why no auto-fix is offered (e.g. 'several unused specifiers')."""

    @property
    def fixable(self) -> bool:
        return self.fix is not None

    def resolve_fix(self, source: SourceText) -> "TextEdit | None":
        """Evaluate the fix against ``source``. None when non-fixable or refused."""
        if self.fix is None:
            return None
        return self.fix(source)

    @staticmethod
    def render_message(template: str, data: Mapping[str, str]) -> str:
        """Substitute ``{{name}}`` placeholders; unknown placeholders are kept verbatim."""
        return _PLACEHOLDER.sub(lambda match: str(data.get(match.group(1), match.group(0))), template)

    @classmethod
    def from_node(
        cls,
        *,
        rule: str,
        message_id: str,
        template: str,
        node: Node,
        data: Mapping[str, str] | None = None,
        fix: FixFunction | None = None,
        fix_failure_reason: str | None = None,
    ) -> "Violation":
        """Build a Violation with its message rendered from ``template``. Prefer over manual message=."""
        payload = dict(data or {})
        return cls(
            rule=rule,
            message_id=message_id,
            message=cls.render_message(template, payload),
            node=node,
            data=payload,
            fix=fix,
            fix_failure_reason=fix_failure_reason,
        )


@dataclass(frozen=True)
class RuleContext:
    """Per-file context handed to every rule check."""

    source: SourceText
    scope: "ScopeProtocol | None" = None
    file_path: str = "<input>"


# -----------------------------------------------------------------------------
# Rule protocols: Checkable (visit and report), Fixable (optional). Rules are
# built once per activation with their parsed options and stay immutable.
# -----------------------------------------------------------------------------


class Checkable(Protocol):
    """Visit nodes of the declared kinds and return violations."""

    code: str
    description: str
    node_types: frozenset[str]
    messages: Mapping[str, str]

    def check(self, node: Node, context: RuleContext) -> list[Violation]:
        """Interrogate a node of one of ``node_types``."""
        ...


class Fixable(Protocol):
    """Optional capability: rule can attach fixes or human fix instructions."""

    fix_type: Literal["whitespace", "code", "none"]

    def get_fix_instructions(self, violation: Violation) -> str:
        """Provide instructions for a manual fix when no edit is offered."""
        ...


class BaseRule(Checkable, Fixable, Protocol):
    """Checkable + Fixable combined, for rules that attach fixes to their reports."""

    code: str
    description: str
    node_types: frozenset[str]
    messages: Mapping[str, str]
    fix_type: Literal["whitespace", "code", "none"]

    def check(self, node: Node, context: RuleContext) -> list[Violation]:
        """Interrogate a node of one of ``node_types``."""
        ...

    def get_fix_instructions(self, violation: Violation) -> str:
        """Provide instructions for a manual fix when no edit is offered."""
        ...
