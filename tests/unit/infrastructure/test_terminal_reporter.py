import json
from unittest.mock import MagicMock

import pytest

from layout_linter.domain.entities import FixOutcome, LintResult, TextEdit
from layout_linter.domain.nodes import Node
from layout_linter.domain.rules import Violation
from layout_linter.domain.source import SourceText
from layout_linter.infrastructure.reporters import TerminalLintReporter
from layout_linter.infrastructure.services.guidance_service import GuidanceService


def _violation(start: int, fixable: bool = True, **overrides: object) -> Violation:
    fields: dict = {
        "rule": "unused-imports",
        "message_id": "unusedImport",
        "message": "Unused import beta.",
        "node": Node(type="ImportSpecifier", range=(start, start + 4)),
        "data": {"name": "beta"},
        "fix": (lambda source: None) if fixable else None,
    }
    fields.update(overrides)
    return Violation(**fields)


@pytest.fixture
def reporter() -> TerminalLintReporter:
    return TerminalLintReporter(GuidanceService())


class TestReportLint:
    def test_text_rows_and_summary(self, reporter: TerminalLintReporter, capsys: pytest.CaptureFixture[str]) -> None:
        """One row per violation with line:column, then a summary line."""
        result = LintResult(
            file_path="app.js",
            source=SourceText("import { alpha, beta } from 'x';\nalpha();"),
            violations=(_violation(16), _violation(33, fixable=False)),
        )
        reporter.report_lint(result)
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "app.js"
        assert lines[1].split() == ["1:16", "unused-imports", "unusedImport", "Unused", "import", "beta.", "[fixable]"]
        assert lines[2].split()[0] == "2:0"
        assert "[fixable]" not in lines[2]
        assert lines[3] == "2 violation(s), 1 fixable"

    def test_clean_file(self, reporter: TerminalLintReporter, capsys: pytest.CaptureFixture[str]) -> None:
        reporter.report_lint(LintResult(file_path="app.js", source=SourceText("")))
        assert capsys.readouterr().out == "app.js: no violations\n"

    def test_json(self, reporter: TerminalLintReporter, capsys: pytest.CaptureFixture[str]) -> None:
        result = LintResult(file_path="app.js", source=SourceText("a\nbeta"), violations=(_violation(2),))
        reporter.report_lint(result, format="json")
        payload = json.loads(capsys.readouterr().out)
        assert payload["file"] == "app.js"
        assert payload["violations"][0]["line"] == 2
        assert payload["violations"][0]["message"] == "Unused import beta."

    def test_registry_template_wins(self, capsys: pytest.CaptureFixture[str]) -> None:
        guidance = MagicMock()
        guidance.get_message_template.return_value = "Drop {{name}}"
        reporter = TerminalLintReporter(guidance)
        assert reporter.render_message(_violation(0)) == "Drop beta"

    def test_rule_message_without_template(self) -> None:
        guidance = MagicMock()
        guidance.get_message_template.return_value = None
        reporter = TerminalLintReporter(guidance)
        assert reporter.render_message(_violation(0)) == "Unused import beta."


class TestReportFix:
    def test_applied_skipped_and_manual(
        self, reporter: TerminalLintReporter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        outcome = FixOutcome(
            file_path="app.js",
            original_text="a",
            fixed_text="b",
            applied=(TextEdit.replace(0, 1, "b"),),
            skipped=(TextEdit.replace(0, 1, "c"),),
            unfixable=(_violation(0, fixable=False, fix_failure_reason="type-only import"),),
        )
        reporter.report_fix(outcome)
        out = capsys.readouterr().out
        assert "app.js: applied 1 fix(es)" in out
        assert "skipped 1 overlapping edit(s)" in out
        assert "manual: unused-imports unusedImport (type-only import):" in out
        assert "--- fixed text ---" not in out

    def test_dry_run_prints_fixed_text(
        self, reporter: TerminalLintReporter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        outcome = FixOutcome(file_path="app.js", original_text="a;b;", fixed_text="a;\nb;")
        reporter.report_fix(outcome, dry_run=True)
        out = capsys.readouterr().out
        assert "app.js: would apply 0 fix(es)" in out
        assert out.endswith("--- fixed text ---\na;\nb;\n")


class TestReportRules:
    def test_lists_names_fix_types_and_display_names(
        self, reporter: TerminalLintReporter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        reporter.report_rules(["unused-imports", "no-such-rule"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["unused-imports", "code", "Unused", "Imports"]
        assert lines[1].split() == ["no-such-rule", "-", "No", "Such", "Rule"]
