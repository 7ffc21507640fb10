"""Unused imports: report import specifiers whose binding is never referenced."""

from typing import Literal

from layout_linter.domain.constants import (
    MSG_UNUSED_IMPORT,
    MSG_UNUSED_IMPORT_DECLARATION,
    RULE_UNUSED_IMPORTS,
)
from layout_linter.domain.entities import DeclaredVariable
from layout_linter.domain.nodes import ImportDeclaration, ImportSpecifier, Node
from layout_linter.domain.rules import FixFunction, RuleContext, Violation
from layout_linter.domain.rules.edit_synthesizer import SafeEditSynthesizer


class UnusedImportsRule:
    """
    Rule for unused imports.

    Auto-fix is offered only when it is unambiguous: a single unused specifier
    in a value import, or a whole declaration whose every specifier is unused.
    Two or more unused specifiers next to used ones are reported without a fix,
    since their separator removals could overlap.
    """

    code: str = RULE_UNUSED_IMPORTS
    description: str = "Unused imports: every imported binding must be referenced."
    fix_type: Literal["whitespace", "code", "none"] = "code"
    node_types: frozenset[str] = frozenset({"ImportDeclaration"})
    messages: dict[str, str] = {
        MSG_UNUSED_IMPORT: "Unused import {{name}}.",
        MSG_UNUSED_IMPORT_DECLARATION: "Unused import declaration.",
    }

    def check(self, node: Node, context: RuleContext) -> list[Violation]:
        if not isinstance(node, ImportDeclaration) or not node.specifiers:
            return []
        if context.scope is None:
            return []
        variables = context.scope.get_declared_variables(node)
        if not variables:
            return []

        unused: list[ImportSpecifier] = []
        for specifier in node.specifiers:
            variable = self.variable_for(variables, specifier)
            if variable is not None and not variable.is_used():
                unused.append(specifier)
        if not unused:
            return []

        allow_fix = not self.is_type_only(node)
        if len(unused) == len(node.specifiers):
            return [
                Violation.from_node(
                    rule=self.code,
                    message_id=MSG_UNUSED_IMPORT_DECLARATION,
                    template=self.messages[MSG_UNUSED_IMPORT_DECLARATION],
                    node=node,
                    fix=(lambda source: SafeEditSynthesizer.remove_node(node)) if allow_fix else None,
                    fix_failure_reason=None if allow_fix else "type-only import",
                )
            ]

        if allow_fix and len(unused) == 1:
            only = unused[0]
            return [
                self._specifier_violation(
                    only, fix=lambda source: SafeEditSynthesizer.remove_list_element(source, only)
                )
            ]

        reason = "type-only import" if not allow_fix else "several unused specifiers in one import"
        return [self._specifier_violation(specifier, fix_failure_reason=reason) for specifier in unused]

    def _specifier_violation(
        self,
        specifier: ImportSpecifier,
        fix: FixFunction | None = None,
        fix_failure_reason: str | None = None,
    ) -> Violation:
        name = specifier.local.name if specifier.local is not None and specifier.local.name else "import"
        return Violation.from_node(
            rule=self.code,
            message_id=MSG_UNUSED_IMPORT,
            template=self.messages[MSG_UNUSED_IMPORT],
            node=specifier,
            data={"name": name},
            fix=fix,
            fix_failure_reason=fix_failure_reason,
        )

    @staticmethod
    def variable_for(variables: list[DeclaredVariable], specifier: ImportSpecifier) -> DeclaredVariable | None:
        """Match a specifier to its variable through the range of its local identifier."""
        local = specifier.local
        if local is None or local.range is None:
            return None
        for variable in variables:
            if any(identifier.range == local.range for identifier in variable.identifiers):
                return variable
        return None

    @staticmethod
    def is_type_only(node: ImportDeclaration) -> bool:
        """``import type {...}`` or any ``type`` specifier."""
        if node.import_kind == "type":
            return True
        return any(specifier.import_kind == "type" for specifier in node.specifiers)

    def get_fix_instructions(self, violation: Violation) -> str:
        """Provide human instructions for manual fix."""
        if violation.message_id == MSG_UNUSED_IMPORT_DECLARATION:
            return "Delete the whole import declaration; none of its bindings are used."
        name = violation.data.get("name", "import")
        return f"Remove '{name}' from the import list together with its comma."
