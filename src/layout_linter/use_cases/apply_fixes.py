"""Use Case: Apply Fixes to Source Code."""

from typing import Optional

from layout_linter.domain.entities import FixOutcome, TextEdit
from layout_linter.domain.nodes import Program
from layout_linter.domain.protocols import FileSystemProtocol, FixerGatewayProtocol, ScopeProtocol, TelemetryPort
from layout_linter.domain.rules import BaseRule, Violation
from layout_linter.use_cases.lint_file import LintFileUseCase


class ApplyFixesUseCase:
    """
    Lint one file, evaluate every fix against the unmodified text and apply the
    accepted edits in a single pass.

    Overlapping edits are skipped by the gateway rather than composed; a second
    run (after the host re-parses) picks them up.
    """

    def __init__(
        self,
        lint_use_case: LintFileUseCase,
        fixer_gateway: FixerGatewayProtocol,
        filesystem: FileSystemProtocol,
        telemetry: Optional[TelemetryPort] = None,
    ) -> None:
        self.lint_use_case = lint_use_case
        self.fixer_gateway = fixer_gateway
        self.filesystem = filesystem
        self.telemetry = telemetry

    def execute(self, source_path: str, ast_path: str, rules: list[BaseRule], dry_run: bool = False) -> FixOutcome:
        """Fix one file in place (unless ``dry_run``) and return what happened."""
        text, program = self.lint_use_case.load(source_path, ast_path)
        outcome = self.fix_program(program, text, rules, file_path=source_path)
        if outcome.modified and not dry_run:
            self.filesystem.write_text(source_path, outcome.fixed_text)
            if self.telemetry:
                self.telemetry.step(f"file={source_path} status=written applied={len(outcome.applied)}")
        elif self.telemetry:
            status = "dry_run" if dry_run else "unchanged"
            self.telemetry.step(f"file={source_path} status={status} applied={len(outcome.applied)}")
        return outcome

    def fix_program(
        self,
        program: Program,
        text: str,
        rules: list[BaseRule],
        file_path: str = "<input>",
        scope: Optional[ScopeProtocol] = None,
    ) -> FixOutcome:
        result = self.lint_use_case.lint_program(program, text, rules, file_path=file_path, scope=scope)
        rules_by_code = {rule.code: rule for rule in rules}

        edits: list[TextEdit] = []
        unfixable: list[Violation] = []
        for violation in result.violations:
            edit = violation.resolve_fix(result.source)
            if edit is None:
                unfixable.append(violation)
                rule = rules_by_code.get(violation.rule)
                if self.telemetry and rule is not None:
                    self.telemetry.step(f"manual fix {violation.rule}: {rule.get_fix_instructions(violation)}")
                continue
            edits.append(edit)

        # two rules can propose the very same edit for one gap
        unique_edits = list(dict.fromkeys(edits))
        fixed_text, applied, skipped = self.fixer_gateway.apply_edits(text, unique_edits)
        if skipped and self.telemetry:
            self.telemetry.warning(f"file={file_path} skipped {len(skipped)} overlapping edit(s)")
        return FixOutcome(
            file_path=file_path,
            original_text=text,
            fixed_text=fixed_text,
            applied=tuple(applied),
            skipped=tuple(skipped),
            unfixable=tuple(unfixable),
        )
