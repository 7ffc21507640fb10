from typing import TYPE_CHECKING, Any, Optional, cast

from layout_linter.domain.config import ConfigurationLoader
from layout_linter.infrastructure.config_file_loader import ConfigFileLoader
from layout_linter.infrastructure.gateways.estree_gateway import EstreeGateway
from layout_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from layout_linter.infrastructure.gateways.text_fixer_gateway import TextFixerGateway
from layout_linter.infrastructure.reporters import TerminalLintReporter
from layout_linter.infrastructure.services.guidance_service import GuidanceService
from layout_linter.interface.telemetry import LoggingTelemetry

if TYPE_CHECKING:
    from layout_linter.domain.protocols import (
        EstreeProtocol,
        FileSystemProtocol,
        FixerGatewayProtocol,
        GuidanceServiceProtocol,
        TelemetryPort,
    )
    from layout_linter.interface.reporters import LintReporter


class LayoutLinterContainer:
    """Dependency Injection Container for the layout linter."""

    def __init__(self, config_loader: Optional[ConfigurationLoader] = None) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(config_loader)

    def _register_defaults(self, config_loader: Optional[ConfigurationLoader]) -> None:
        """Register default implementations for protocols."""
        if config_loader is None:
            config_dict, tool_section = ConfigFileLoader.load_config_from_fs()
            config_loader = ConfigurationLoader(config_dict, tool_section)
        self.register_singleton("ConfigurationLoader", config_loader)

        self.register_singleton("TelemetryPort", LoggingTelemetry("LAYOUT-LINTER"))
        filesystem = FileSystemGateway()
        self.register_singleton("FileSystemGateway", filesystem)
        self.register_singleton("EstreeGateway", EstreeGateway(filesystem=filesystem))
        self.register_singleton("TextFixerGateway", TextFixerGateway())

        # Rule registry: display names, message templates, manual instructions
        guidance_service = GuidanceService()
        self.register_singleton("GuidanceService", guidance_service)
        self.register_singleton("LintReporter", TerminalLintReporter(guidance_service))

    # JUSTIFICATION: DI Container must handle any type of service
    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    # JUSTIFICATION: DI Container must return any type of service
    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_estree_gateway(self) -> "EstreeProtocol":
        """Return the ESTree decoder."""
        return cast("EstreeProtocol", self.get("EstreeGateway"))

    def get_fixer_gateway(self) -> "FixerGatewayProtocol":
        """Return the text fixer gateway."""
        return cast("FixerGatewayProtocol", self.get("TextFixerGateway"))

    def get_guidance_service(self) -> "GuidanceServiceProtocol":
        """Return the rule registry service."""
        return cast("GuidanceServiceProtocol", self.get("GuidanceService"))

    def get_reporter(self) -> "LintReporter":
        """Return the lint reporter."""
        return cast("LintReporter", self.get("LintReporter"))
