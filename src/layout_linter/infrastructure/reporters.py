"""Terminal reporter implementation - lives in infrastructure (uses the registry)."""

import json
from typing import TYPE_CHECKING, TypedDict

import typer

from layout_linter.domain.rules import Violation

if TYPE_CHECKING:
    from layout_linter.domain.entities import FixOutcome, LintResult
    from layout_linter.domain.protocols import GuidanceServiceProtocol


class ViolationRow(TypedDict):
    """One printed line: position, rule, message id, rendered message, fix label."""

    location: str
    rule: str
    message_id: str
    message: str
    fix: str


class TerminalLintReporter:
    """Prints lint results as aligned text rows or JSON. Implements LintReporter."""

    def __init__(self, guidance_service: "GuidanceServiceProtocol") -> None:
        self._guidance = guidance_service

    def render_message(self, violation: Violation) -> str:
        """Registry template when one exists, else the rule's own message."""
        template = self._guidance.get_message_template(violation.rule, violation.message_id)
        if template is None:
            return violation.message
        return Violation.render_message(template, violation.data)

    def build_rows(self, result: "LintResult") -> list[ViolationRow]:
        rows: list[ViolationRow] = []
        for violation in result.violations:
            line, column = (0, 0)
            if violation.node.start is not None:
                line, column = result.source.position_of(violation.node.start)
            rows.append(
                {
                    "location": f"{line}:{column}",
                    "rule": violation.rule,
                    "message_id": violation.message_id,
                    "message": self.render_message(violation),
                    "fix": "[fixable]" if violation.fixable else "",
                }
            )
        return rows

    def report_lint(self, result: "LintResult", format: str = "text") -> None:
        """Report violations of one file. format: 'text' (default) or 'json'."""
        if format == "json":
            payload = result.to_dict()
            for row, violation in zip(payload["violations"], result.violations):
                row["message"] = self.render_message(violation)
            typer.echo(json.dumps(payload, indent=2))
            return

        rows = self.build_rows(result)
        if not rows:
            typer.echo(f"{result.file_path}: no violations")
            return
        typer.echo(result.file_path)
        width = max(len(row["location"]) for row in rows)
        for row in rows:
            line = f"  {row['location']:<{width}}  {row['rule']}  {row['message_id']}  {row['message']}"
            if row["fix"]:
                line = f"{line}  {row['fix']}"
            typer.echo(line)
        typer.echo(f"{len(rows)} violation(s), {result.fixable_count()} fixable")

    def report_fix(self, outcome: "FixOutcome", dry_run: bool = False) -> None:
        """Report applied, skipped and unfixable edits of one file."""
        verb = "would apply" if dry_run else "applied"
        typer.echo(f"{outcome.file_path}: {verb} {len(outcome.applied)} fix(es)")
        if outcome.skipped:
            typer.echo(f"  skipped {len(outcome.skipped)} overlapping edit(s); re-run to apply them")
        for violation in outcome.unfixable:
            instructions = self._guidance.get_manual_instructions(violation.rule)
            reason = f" ({violation.fix_failure_reason})" if violation.fix_failure_reason else ""
            typer.echo(f"  manual: {violation.rule} {violation.message_id}{reason}: {instructions}")
        if dry_run and outcome.modified:
            typer.echo("--- fixed text ---")
            typer.echo(outcome.fixed_text, nl=False)
            if not outcome.fixed_text.endswith("\n"):
                typer.echo("")

    def report_rules(self, rule_names: list[str]) -> None:
        """List the rule catalog with registry display names and fix types."""
        for name in rule_names:
            entry = self._guidance.get_entry(name) or {}
            fix_type = entry.get("fix_type", "-")
            typer.echo(f"{name:<40} {fix_type:<11} {self._guidance.get_display_name(name)}")
