"""CLI entry points for the layout linter - Thin Controller using Typer."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from layout_linter.domain.config import ConfigurationLoader
from layout_linter.domain.protocols import (
    EstreeProtocol,
    FileSystemProtocol,
    FixerGatewayProtocol,
    GuidanceServiceProtocol,
    TelemetryPort,
)
from layout_linter.domain.rule_catalog import RuleCatalog
from layout_linter.domain.rules import BaseRule
from layout_linter.interface.reporters import LintReporter
from layout_linter.interface.telemetry import LoggingTelemetry
from layout_linter.use_cases.apply_fixes import ApplyFixesUseCase
from layout_linter.use_cases.lint_file import LintFileUseCase

# B008: avoid function call in default; use module-level singletons for Typer parameters
_SOURCE_ARGUMENT = typer.Argument(..., help="JavaScript/TypeScript source file")
_AST_OPTION = typer.Option(None, "--ast", help="ESTree JSON for SOURCE (default: SOURCE + ast_suffix)")
_RULE_OPTION = typer.Option(None, "--rule", "-r", help="Only run this rule (repeatable)")

EXIT_VIOLATIONS = 1
EXIT_USAGE = 2


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    filesystem: FileSystemProtocol
    estree_gateway: EstreeProtocol
    fixer_gateway: FixerGatewayProtocol
    guidance_service: GuidanceServiceProtocol
    reporter: LintReporter


class CLIAppFactory:
    """Creates the Typer app. No top-level functions."""

    @staticmethod
    def resolve_ast_path(deps: CLIDependencies, source: Path, ast: Optional[Path]) -> str:
        """Explicit --ast, else the source path plus the configured suffix."""
        if ast is not None:
            return str(ast)
        return deps.filesystem.ast_path_for(str(source), deps.config_loader.ast_suffix)

    @staticmethod
    def build_rules(deps: CLIDependencies, only: Optional[list[str]]) -> list[BaseRule]:
        """Build enabled rules; an unknown --rule name is a usage error."""
        try:
            return RuleCatalog.build_enabled(deps.config_loader, only=only or None)
        except KeyError as exc:
            deps.telemetry.error(f"Unknown rule: {exc.args[0]}. Known rules: {', '.join(RuleCatalog.names())}")
            raise typer.Exit(code=EXIT_USAGE) from exc

    @staticmethod
    def require_inputs(deps: CLIDependencies, source: Path, ast_path: str) -> None:
        for label, path in (("source", str(source)), ("ESTree", ast_path)):
            if not deps.filesystem.exists(path):
                deps.telemetry.error(f"{label} file not found: {path}")
                raise typer.Exit(code=EXIT_USAGE)

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="layout-linter",
            help="Statement grouping, padding and safe-removal lint rules for ESTree trees.",
            add_completion=False,
        )

        @app.command()
        def check(
            source: Path = _SOURCE_ARGUMENT,
            ast: Optional[Path] = _AST_OPTION,
            rule: Optional[list[str]] = _RULE_OPTION,
            output_format: str = typer.Option("text", "--format", help="Output format: text or json"),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Log each step"),
        ) -> None:
            """Report violations; exit 1 when any are found."""
            LoggingTelemetry.configure(verbose)
            deps.telemetry.handshake()
            if output_format not in ("text", "json"):
                deps.telemetry.error(f"Unknown format: {output_format}")
                raise typer.Exit(code=EXIT_USAGE)
            rules = CLIAppFactory.build_rules(deps, rule)
            ast_path = CLIAppFactory.resolve_ast_path(deps, source, ast)
            CLIAppFactory.require_inputs(deps, source, ast_path)

            use_case = LintFileUseCase(
                estree_gateway=deps.estree_gateway,
                filesystem=deps.filesystem,
                telemetry=deps.telemetry,
                offset_unit=deps.config_loader.offset_unit,
            )
            try:
                result = use_case.execute(str(source), ast_path, rules)
            except ValueError as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=EXIT_USAGE) from exc
            deps.reporter.report_lint(result, format=output_format)
            if result.has_violations():
                raise typer.Exit(code=EXIT_VIOLATIONS)

        @app.command()
        def fix(
            source: Path = _SOURCE_ARGUMENT,
            ast: Optional[Path] = _AST_OPTION,
            rule: Optional[list[str]] = _RULE_OPTION,
            dry_run: bool = typer.Option(False, "--dry-run", help="Print the fixed text instead of writing it"),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Log each step"),
        ) -> None:
            """Apply safe fixes in one pass. Re-run after re-parsing to pick up skipped edits."""
            LoggingTelemetry.configure(verbose)
            deps.telemetry.handshake()
            rules = CLIAppFactory.build_rules(deps, rule)
            ast_path = CLIAppFactory.resolve_ast_path(deps, source, ast)
            CLIAppFactory.require_inputs(deps, source, ast_path)

            lint_use_case = LintFileUseCase(
                estree_gateway=deps.estree_gateway,
                filesystem=deps.filesystem,
                telemetry=deps.telemetry,
                offset_unit=deps.config_loader.offset_unit,
            )
            use_case = ApplyFixesUseCase(
                lint_use_case=lint_use_case,
                fixer_gateway=deps.fixer_gateway,
                filesystem=deps.filesystem,
                telemetry=deps.telemetry,
            )
            try:
                outcome = use_case.execute(str(source), ast_path, rules, dry_run=dry_run)
            except ValueError as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=EXIT_USAGE) from exc
            deps.reporter.report_fix(outcome, dry_run=dry_run)

        @app.command(name="rules")
        def list_rules() -> None:
            """List available rules with their fix type and display name."""
            deps.reporter.report_rules(RuleCatalog.names())

        return app
