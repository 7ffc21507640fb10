"""Tests for LintFileUseCase and ApplyFixesUseCase over real gateways."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from estree_fixtures import EstreeBuilder

from layout_linter.domain.config import ConfigurationLoader
from layout_linter.domain.entities import TextEdit
from layout_linter.domain.nodes import Node, Program
from layout_linter.domain.rule_catalog import RuleCatalog
from layout_linter.domain.rules import RuleContext, Violation
from layout_linter.infrastructure.gateways.estree_gateway import AstDecodeError, EstreeGateway
from layout_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from layout_linter.infrastructure.gateways.text_fixer_gateway import TextFixerGateway
from layout_linter.use_cases.apply_fixes import ApplyFixesUseCase
from layout_linter.use_cases.lint_file import LintFileUseCase

SAMPLE = "import { alpha, beta } from 'x';\nconst gamma = 1;\n\nconst delta = 2;\nalpha();\n"
FIXED = "import { alpha } from 'x';\n\nconst gamma = 1;\nconst delta = 2;\n\nalpha();\n"


def _sample_tree(text: str) -> dict:
    """ESTree for SAMPLE-shaped text: one import, two consts, one call."""
    b = EstreeBuilder(text)
    statement = text.splitlines()[0]
    span = b.at(statement)
    imported = [name for name in ("alpha", "beta") if name in statement]
    return b.program(
        b.import_decl(statement, [b.import_specifier(name, span) for name in imported], "x"),
        b.simple_var("const gamma = 1;", "const", "gamma"),
        b.simple_var("const delta = 2;", "const", "delta"),
        b.call_statement("alpha();", "alpha"),
    )


def _all_rules() -> list:
    return RuleCatalog.build_enabled(ConfigurationLoader())


def _write_tree(tmp_path: Path, text: str, tree: dict) -> tuple[str, str]:
    source = tmp_path / "app.js"
    source.write_bytes(text.encode("utf-8"))
    ast = tmp_path / "app.js.ast.json"
    ast.write_text(json.dumps(tree), encoding="utf-8")
    return str(source), str(ast)


def _write_pair(tmp_path: Path, text: str) -> tuple[str, str]:
    return _write_tree(tmp_path, text, _sample_tree(text))


def _declarations_tree(text: str) -> dict:
    """ESTree for lines of ``<kind> <name> = <integer>;``, each optionally followed by a line comment."""
    b = EstreeBuilder(text)
    statements = []
    for line in text.splitlines():
        if line.strip():
            snippet = line.split(" //", 1)[0]
            kind, name = snippet.split()[:2]
            statements.append(b.simple_var(snippet, kind, name))
    return b.program(*statements)


def _lint_use_case(telemetry: MagicMock | None = None, offset_unit: str = "utf-16") -> LintFileUseCase:
    filesystem = FileSystemGateway()
    return LintFileUseCase(
        estree_gateway=EstreeGateway(filesystem=filesystem),
        filesystem=filesystem,
        telemetry=telemetry,
        offset_unit=offset_unit,
    )


def _fix_use_case(telemetry: MagicMock | None = None) -> ApplyFixesUseCase:
    lint = _lint_use_case(telemetry)
    return ApplyFixesUseCase(
        lint_use_case=lint, fixer_gateway=TextFixerGateway(), filesystem=lint.filesystem, telemetry=telemetry
    )


class TestLintFileUseCase:
    def test_reports_in_document_order(self, tmp_path: Path) -> None:
        """Violations of all rules come back sorted by position."""
        source, ast = _write_pair(tmp_path, SAMPLE)
        telemetry = MagicMock()

        result = _lint_use_case(telemetry).execute(source, ast, _all_rules())

        assert [(violation.rule, violation.message_id) for violation in result.violations] == [
            ("unused-imports", "unusedImport"),
            ("blank-lines-between-statement-groups", "expectedBlankLine"),
            ("padding-line-between-statements", "unexpectedBlankLine"),
            ("blank-lines-between-statement-groups", "expectedBlankLine"),
            ("padding-line-between-statements", "expectedBlankLine"),
        ]
        assert result.file_path == source
        assert telemetry.step.call_count == 2

    def test_clean_file(self, tmp_path: Path) -> None:
        source, ast = _write_pair(tmp_path, FIXED)
        result = _lint_use_case().execute(source, ast, _all_rules())
        assert result.has_violations() is False

    def test_rules_only_see_their_node_types(self) -> None:
        """A rule declaring ImportDeclaration is offered exactly the import."""
        program = EstreeGateway().decode(_sample_tree(SAMPLE))
        rule = MagicMock()
        rule.node_types = frozenset({"ImportDeclaration"})
        rule.check.return_value = []

        _lint_use_case().lint_program(program, SAMPLE, [rule])

        assert rule.check.call_count == 1
        node, context = rule.check.call_args.args
        assert node is program.body[0]
        assert isinstance(context, RuleContext)
        assert context.scope is not None

    def test_injected_scope_is_used(self) -> None:
        program = EstreeGateway().decode(_sample_tree(SAMPLE))
        scope = MagicMock()
        scope.get_declared_variables.return_value = None
        rules = [RuleCatalog.build("unused-imports")]

        result = _lint_use_case().lint_program(program, SAMPLE, rules, scope=scope)

        assert result.violations == ()
        scope.get_declared_variables.assert_called_once()

    def test_utf16_offsets_past_astral_characters(self, tmp_path: Path) -> None:
        """Ranges counted in UTF-16 units still land on the right statements after an emoji."""
        text = "const alpha = 1; // \U0001F600\nconst beta = 2;\n\nconst delta = 3;\n"
        b = EstreeBuilder(text)
        source, ast = _write_tree(tmp_path, text, b.utf16(_declarations_tree(text)))

        result = _lint_use_case().execute(source, ast, _all_rules())

        assert [(violation.rule, violation.message_id) for violation in result.violations] == [
            ("padding-line-between-statements", "unexpectedBlankLine"),
        ]
        outcome = _fix_use_case().execute(source, ast, _all_rules())
        assert outcome.fixed_text == "const alpha = 1; // \U0001F600\nconst beta = 2;\nconst delta = 3;\n"

    def test_codepoint_offsets_are_used_as_is(self, tmp_path: Path) -> None:
        text = "const alpha = 1; // \U0001F600\nconst beta = 2;\n\nconst delta = 3;\n"
        source, ast = _write_tree(tmp_path, text, _declarations_tree(text))

        result = _lint_use_case(offset_unit="codepoint").execute(source, ast, _all_rules())

        assert [violation.message_id for violation in result.violations] == ["unexpectedBlankLine"]

    def test_bad_ast_file_raises(self, tmp_path: Path) -> None:
        source = tmp_path / "app.js"
        source.write_text("x;", encoding="utf-8")
        ast = tmp_path / "app.js.ast.json"
        ast.write_text("{", encoding="utf-8")
        with pytest.raises(AstDecodeError):
            _lint_use_case().execute(str(source), str(ast), [])


class TestApplyFixesUseCase:
    def test_single_pass_fix_is_idempotent(self, tmp_path: Path) -> None:
        """Duplicate edits from two rules collapse to one; the fixed file lints clean."""
        source, ast = _write_pair(tmp_path, SAMPLE)
        telemetry = MagicMock()

        outcome = _fix_use_case(telemetry).execute(source, ast, _all_rules())

        assert outcome.fixed_text == FIXED
        assert len(outcome.applied) == 4
        assert outcome.skipped == ()
        assert outcome.unfixable == ()
        assert Path(source).read_text(encoding="utf-8") == FIXED

        _, ast = _write_pair(tmp_path, FIXED)
        rerun = _fix_use_case().execute(source, ast, _all_rules())
        assert rerun.applied == ()
        assert rerun.modified is False

    @pytest.mark.parametrize("text", ["const alpha = 1;\nlet beta = 2;\n", "const alpha = 1;\n\nlet beta = 2;\n"])
    def test_default_rules_settle_on_mixed_declarations(self, tmp_path: Path, text: str) -> None:
        """Repeated fixing with every default rule reaches a fixed point."""
        for _ in range(5):
            source, ast = _write_tree(tmp_path, text, _declarations_tree(text))
            outcome = _fix_use_case().execute(source, ast, _all_rules())
            text = outcome.fixed_text
            if outcome.applied == ():
                break
        else:
            pytest.fail("fixes kept changing the file")

        assert text == "const alpha = 1;\nlet beta = 2;\n"
        assert outcome.unfixable == ()

    def test_dry_run_leaves_file_alone(self, tmp_path: Path) -> None:
        source, ast = _write_pair(tmp_path, SAMPLE)
        outcome = _fix_use_case().execute(source, ast, _all_rules(), dry_run=True)
        assert outcome.fixed_text == FIXED
        assert Path(source).read_text(encoding="utf-8") == SAMPLE

    def test_crlf_is_preserved(self, tmp_path: Path) -> None:
        text = SAMPLE.replace("\n", "\r\n")
        source, ast = _write_pair(tmp_path, text)
        outcome = _fix_use_case().execute(source, ast, _all_rules())
        assert outcome.fixed_text == FIXED.replace("\n", "\r\n")
        assert Path(source).read_bytes() == FIXED.replace("\n", "\r\n").encode("utf-8")

    def test_unfixable_violations_get_manual_instructions(self) -> None:
        """Refused fixes are collected and their instructions sent to telemetry."""
        text = "const gamma = 1; alpha();"
        b = EstreeBuilder(text)
        program = b.decode(
            b.program(b.simple_var("const gamma = 1;", "const", "gamma"), b.call_statement("alpha();", "alpha"))
        )
        telemetry = MagicMock()
        rules = [RuleCatalog.build("blank-lines-between-statement-groups")]

        outcome = _fix_use_case(telemetry).fix_program(program, text, rules)

        assert outcome.modified is False
        assert [violation.message_id for violation in outcome.unfixable] == ["expectedBlankLine"]
        messages = [call.args[0] for call in telemetry.step.call_args_list]
        assert any(message.startswith("manual fix blank-lines-between-statement-groups") for message in messages)

    def test_skipped_edits_are_reported(self) -> None:
        """Overlapping edits are left to a later run and logged as a warning."""
        program = Program(type="Program", range=(0, 3))
        node = Node(type="ExpressionStatement", range=(0, 3))
        rule = MagicMock()
        rule.code = "custom"
        rule.node_types = frozenset({"Program"})
        rule.check.return_value = [
            Violation(rule="custom", message_id="m", message="", node=node, fix=lambda s: TextEdit.remove(0, 2)),
            Violation(rule="custom", message_id="m", message="", node=node, fix=lambda s: TextEdit.remove(1, 3)),
        ]
        telemetry = MagicMock()

        outcome = _fix_use_case(telemetry).fix_program(program, "abc", [rule], file_path="abc.js")

        assert outcome.fixed_text == "c"
        assert outcome.skipped == (TextEdit.remove(1, 3),)
        telemetry.warning.assert_called_once_with("file=abc.js skipped 1 overlapping edit(s)")
