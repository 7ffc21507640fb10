from pathlib import Path

import pytest

from layout_linter.domain.config import ConfigurationLoader
from layout_linter.infrastructure.di.container import LayoutLinterContainer
from layout_linter.infrastructure.gateways.estree_gateway import EstreeGateway
from layout_linter.infrastructure.reporters import TerminalLintReporter


class TestLayoutLinterContainer:
    def test_initialization_registers_telemetry(self) -> None:
        container = LayoutLinterContainer(ConfigurationLoader())
        telemetry = container.get("TelemetryPort")
        assert telemetry is not None
        assert telemetry.project_name == "LAYOUT-LINTER"

    def test_typed_accessors(self) -> None:
        config = ConfigurationLoader({"rules": ["unused-imports"]})
        container = LayoutLinterContainer(config)
        assert container.get_config_loader() is config
        assert isinstance(container.get_estree_gateway(), EstreeGateway)
        assert isinstance(container.get_reporter(), TerminalLintReporter)
        assert container.get_guidance_service().get_entry("unused-imports") is not None
        assert container.get_fixer_gateway() is container.get("TextFixerGateway")
        assert container.get_filesystem_gateway() is container.get("FileSystemGateway")
        assert container.get_telemetry_port() is container.get("TelemetryPort")

    def test_register_and_get_singleton(self) -> None:
        container = LayoutLinterContainer(ConfigurationLoader())
        mock_dep = {"foo": "bar"}
        container.register_singleton("MockDep", mock_dep)

        retrieved = container.get("MockDep")
        assert retrieved is mock_dep

    def test_get_missing_dependency_raises_error(self) -> None:
        container = LayoutLinterContainer(ConfigurationLoader())
        with pytest.raises(ValueError, match=r"Dependency 'Missing' not registered\."):
            container.get("Missing")

    def test_configuration_comes_from_the_working_directory(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Without an explicit loader the configuration is read from pyproject.toml."""
        (tmp_path / "pyproject.toml").write_text('[tool.layout-linter]\nast_suffix = ".tree"\n', encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        container = LayoutLinterContainer()
        assert container.get_config_loader().ast_suffix == ".tree"
