"""Unit tests for Typer-based CLI interface."""

import json
from pathlib import Path
from unittest.mock import Mock, patch

from estree_fixtures import EstreeBuilder
from typer.testing import CliRunner

from layout_linter.__main__ import main
from layout_linter.domain.config import ConfigurationLoader
from layout_linter.domain.rule_catalog import RuleCatalog
from layout_linter.infrastructure.gateways.estree_gateway import EstreeGateway
from layout_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from layout_linter.infrastructure.gateways.text_fixer_gateway import TextFixerGateway
from layout_linter.infrastructure.reporters import TerminalLintReporter
from layout_linter.infrastructure.services.guidance_service import GuidanceService
from layout_linter.interface.cli import EXIT_USAGE, EXIT_VIOLATIONS, CLIAppFactory, CLIDependencies

runner = CliRunner()

DIRTY = "const gamma = 1;\nalpha();\n"
CLEAN = "const gamma = 1;\n\nalpha();\n"


def _tree(text: str) -> dict:
    b = EstreeBuilder(text)
    return b.program(b.simple_var("const gamma = 1;", "const", "gamma"), b.call_statement("alpha();", "alpha"))


def _write(tmp_path: Path, text: str, ast_name: str = "app.js.ast.json") -> Path:
    source = tmp_path / "app.js"
    source.write_text(text, encoding="utf-8")
    (tmp_path / ast_name).write_text(json.dumps(_tree(text)), encoding="utf-8")
    return source


def _make_mock_deps(**overrides) -> CLIDependencies:
    """Create CLIDependencies with real gateways and a mock telemetry port."""
    filesystem = FileSystemGateway()
    guidance = GuidanceService()
    defaults: dict = {
        "config_loader": ConfigurationLoader(),
        "telemetry": Mock(),
        "filesystem": filesystem,
        "estree_gateway": EstreeGateway(filesystem=filesystem),
        "fixer_gateway": TextFixerGateway(),
        "guidance_service": guidance,
        "reporter": TerminalLintReporter(guidance),
    }
    defaults.update(overrides)
    return CLIDependencies(**defaults)


class TestResolveAstPath:
    def test_explicit_ast_wins(self) -> None:
        deps = _make_mock_deps()
        assert CLIAppFactory.resolve_ast_path(deps, Path("app.js"), Path("tree.json")) == "tree.json"

    def test_configured_suffix(self) -> None:
        deps = _make_mock_deps(config_loader=ConfigurationLoader({"ast_suffix": ".tree"}))
        assert CLIAppFactory.resolve_ast_path(deps, Path("src/app.js"), None) == str(Path("src/app.js.tree"))


class TestCheckCommand:
    """Test the check command."""

    def test_violations_exit_one(self, tmp_path: Path) -> None:
        source = _write(tmp_path, DIRTY)
        result = runner.invoke(CLIAppFactory.create_app(_make_mock_deps()), ["check", str(source)])
        assert result.exit_code == EXIT_VIOLATIONS
        assert "blank-lines-between-statement-groups" in result.stdout
        assert "padding-line-between-statements" in result.stdout
        assert "2 violation(s), 2 fixable" in result.stdout

    def test_clean_file_exits_zero(self, tmp_path: Path) -> None:
        source = _write(tmp_path, CLEAN)
        deps = _make_mock_deps()
        result = runner.invoke(CLIAppFactory.create_app(deps), ["check", str(source)])
        assert result.exit_code == 0
        assert "no violations" in result.stdout
        deps.telemetry.handshake.assert_called_once()

    def test_json_format(self, tmp_path: Path) -> None:
        source = _write(tmp_path, DIRTY)
        result = runner.invoke(CLIAppFactory.create_app(_make_mock_deps()), ["check", str(source), "--format", "json"])
        assert result.exit_code == EXIT_VIOLATIONS
        payload = json.loads(result.stdout)
        assert [row["rule"] for row in payload["violations"]] == [
            "blank-lines-between-statement-groups",
            "padding-line-between-statements",
        ]

    def test_unknown_format(self, tmp_path: Path) -> None:
        source = _write(tmp_path, DIRTY)
        result = runner.invoke(CLIAppFactory.create_app(_make_mock_deps()), ["check", str(source), "--format", "xml"])
        assert result.exit_code == EXIT_USAGE

    def test_rule_filter(self, tmp_path: Path) -> None:
        source = _write(tmp_path, DIRTY)
        args = ["check", str(source), "--rule", "padding-line-between-statements"]
        result = runner.invoke(CLIAppFactory.create_app(_make_mock_deps()), args)
        assert result.exit_code == EXIT_VIOLATIONS
        assert "blank-lines-between-statement-groups" not in result.stdout
        assert "1 violation(s), 1 fixable" in result.stdout

    def test_unknown_rule_is_usage_error(self, tmp_path: Path) -> None:
        source = _write(tmp_path, DIRTY)
        deps = _make_mock_deps()
        result = runner.invoke(CLIAppFactory.create_app(deps), ["check", str(source), "--rule", "nope"])
        assert result.exit_code == EXIT_USAGE
        message = deps.telemetry.error.call_args.args[0]
        assert message.startswith("Unknown rule: nope.")

    def test_missing_source(self, tmp_path: Path) -> None:
        deps = _make_mock_deps()
        result = runner.invoke(CLIAppFactory.create_app(deps), ["check", str(tmp_path / "missing.js")])
        assert result.exit_code == EXIT_USAGE
        assert deps.telemetry.error.call_args.args[0].startswith("source file not found")

    def test_missing_ast(self, tmp_path: Path) -> None:
        source = tmp_path / "app.js"
        source.write_text(DIRTY, encoding="utf-8")
        deps = _make_mock_deps()
        result = runner.invoke(CLIAppFactory.create_app(deps), ["check", str(source)])
        assert result.exit_code == EXIT_USAGE
        assert deps.telemetry.error.call_args.args[0].startswith("ESTree file not found")

    def test_bad_ast_json(self, tmp_path: Path) -> None:
        source = tmp_path / "app.js"
        source.write_text(DIRTY, encoding="utf-8")
        (tmp_path / "app.js.ast.json").write_text("{", encoding="utf-8")
        deps = _make_mock_deps()
        result = runner.invoke(CLIAppFactory.create_app(deps), ["check", str(source)])
        assert result.exit_code == EXIT_USAGE
        assert "invalid JSON" in deps.telemetry.error.call_args.args[0]

    def test_explicit_ast_option(self, tmp_path: Path) -> None:
        source = _write(tmp_path, CLEAN, ast_name="tree.json")
        args = ["check", str(source), "--ast", str(tmp_path / "tree.json")]
        result = runner.invoke(CLIAppFactory.create_app(_make_mock_deps()), args)
        assert result.exit_code == 0


class TestFixCommand:
    def test_fix_writes_file(self, tmp_path: Path) -> None:
        source = _write(tmp_path, DIRTY)
        result = runner.invoke(CLIAppFactory.create_app(_make_mock_deps()), ["fix", str(source)])
        assert result.exit_code == 0
        assert "applied 1 fix(es)" in result.stdout
        assert source.read_text(encoding="utf-8") == CLEAN

    def test_dry_run_prints_instead_of_writing(self, tmp_path: Path) -> None:
        source = _write(tmp_path, DIRTY)
        result = runner.invoke(CLIAppFactory.create_app(_make_mock_deps()), ["fix", str(source), "--dry-run"])
        assert result.exit_code == 0
        assert "would apply 1 fix(es)" in result.stdout
        assert result.stdout.endswith("--- fixed text ---\n" + CLEAN)
        assert source.read_text(encoding="utf-8") == DIRTY

    def test_bad_ast_json(self, tmp_path: Path) -> None:
        source = tmp_path / "app.js"
        source.write_text(DIRTY, encoding="utf-8")
        (tmp_path / "app.js.ast.json").write_text("[]", encoding="utf-8")
        result = runner.invoke(CLIAppFactory.create_app(_make_mock_deps()), ["fix", str(source)])
        assert result.exit_code == EXIT_USAGE
        assert source.read_text(encoding="utf-8") == DIRTY


class TestRulesCommand:
    def test_lists_every_rule(self) -> None:
        result = runner.invoke(CLIAppFactory.create_app(_make_mock_deps()), ["rules"])
        assert result.exit_code == 0
        listed = [line.split()[0] for line in result.stdout.splitlines()]
        assert listed == RuleCatalog.names()


class TestMain:
    @patch("layout_linter.__main__.CLIAppFactory")
    @patch("layout_linter.__main__.LayoutLinterContainer")
    def test_main_wires_container_into_app(self, mock_container_cls: Mock, mock_factory: Mock) -> None:
        """main() builds CLIDependencies from the container and runs the app."""
        main()

        deps = mock_factory.create_app.call_args.args[0]
        container = mock_container_cls.return_value
        assert deps.telemetry is container.get_telemetry_port.return_value
        assert deps.reporter is container.get_reporter.return_value
        mock_factory.create_app.return_value.assert_called_once_with()
