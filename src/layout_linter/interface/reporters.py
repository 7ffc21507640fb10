"""Protocol for lint reporting - no infrastructure imports."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from layout_linter.domain.entities import FixOutcome, LintResult


class LintReporter(Protocol):
    """Protocol for reporting lint and fix results."""

    def report_lint(self, result: "LintResult", format: str = "text") -> None:
        """Report violations of one file. format: 'text' (default) or 'json'."""
        ...

    def report_fix(self, outcome: "FixOutcome", dry_run: bool = False) -> None:
        """Report applied, skipped and unfixable edits of one file."""
        ...

    def report_rules(self, rule_names: list[str]) -> None:
        """List the rule catalog."""
        ...
