"""Use Case: Lint one source file against its ESTree tree."""

from collections import defaultdict
from collections.abc import Callable
from typing import Optional

from layout_linter.domain.constants import DEFAULT_OFFSET_UNIT
from layout_linter.domain.entities import LintResult
from layout_linter.domain.nodes import Node, Program
from layout_linter.domain.protocols import EstreeProtocol, FileSystemProtocol, ScopeProtocol, TelemetryPort
from layout_linter.domain.rules import BaseRule, RuleContext, Violation
from layout_linter.domain.services.scope_analyzer import ModuleScopeAnalyzer
from layout_linter.domain.source import OffsetMap, SourceText

ScopeFactory = Callable[[Program], ScopeProtocol]


class LintFileUseCase:
    """
    Run rules over one tree.

    Every node is offered to the rules whose ``node_types`` include its type,
    in pre-order. Violations come back in document order (stable on ties).
    """

    def __init__(
        self,
        estree_gateway: EstreeProtocol,
        filesystem: FileSystemProtocol,
        telemetry: Optional[TelemetryPort] = None,
        scope_factory: ScopeFactory = ModuleScopeAnalyzer,
        offset_unit: str = DEFAULT_OFFSET_UNIT,
    ) -> None:
        self.estree_gateway = estree_gateway
        self.filesystem = filesystem
        self.telemetry = telemetry
        self.scope_factory = scope_factory
        self.offset_unit = offset_unit

    def load(self, source_path: str, ast_path: str) -> tuple[str, Program]:
        """Read the source and decode its ESTree JSON with ranges mapped onto the source text."""
        text = self.filesystem.read_text(source_path)
        program = self.estree_gateway.load_program(ast_path, offsets=OffsetMap(text, self.offset_unit))
        return text, program

    def execute(self, source_path: str, ast_path: str, rules: list[BaseRule]) -> LintResult:
        """Read the source and its ESTree JSON, then lint. AstDecodeError propagates to the caller."""
        text, program = self.load(source_path, ast_path)
        if self.telemetry:
            self.telemetry.step(f"file={source_path} ast={ast_path} rules={len(rules)}")
        return self.lint_program(program, text, rules, file_path=source_path)

    def lint_program(
        self,
        program: Program,
        text: str,
        rules: list[BaseRule],
        file_path: str = "<input>",
        scope: Optional[ScopeProtocol] = None,
    ) -> LintResult:
        source = SourceText(text)
        context = RuleContext(
            source=source,
            scope=scope if scope is not None else self.scope_factory(program),
            file_path=file_path,
        )
        dispatch: dict[str, list[BaseRule]] = defaultdict(list)
        for rule in rules:
            for node_type in rule.node_types:
                dispatch[node_type].append(rule)

        violations: list[Violation] = []
        stack: list[Node] = [program]
        while stack:
            node = stack.pop()
            for rule in dispatch.get(node.type, ()):
                violations.extend(rule.check(node, context))
            stack.extend(child for _, child in reversed(node.children))

        end_of_file = len(text)
        violations.sort(key=lambda violation: violation.node.start if violation.node.start is not None else end_of_file)
        if self.telemetry:
            self.telemetry.step(f"file={file_path} violations={len(violations)}")
        return LintResult(file_path=file_path, source=source, violations=tuple(violations))
