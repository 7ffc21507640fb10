from typing import TYPE_CHECKING, Protocol

from layout_linter.domain.registry_types import RuleRegistryEntry

if TYPE_CHECKING:
    from layout_linter.domain.entities import DeclaredVariable, TextEdit
    from layout_linter.domain.nodes import ImportDeclaration, Program
    from layout_linter.domain.source import OffsetMap


class ScopeProtocol(Protocol):
    """Protocol for the host's scope manager: variables declared by a node."""

    def get_declared_variables(self, node: "ImportDeclaration") -> list["DeclaredVariable"] | None:
        """Return the variables the node declares, or None when scope data is unavailable."""
        ...


class EstreeProtocol(Protocol):
    """Protocol for loading and decoding ESTree syntax trees."""

    def decode(self, raw: object, offsets: "OffsetMap | None" = None) -> "Program":
        """Decode an ESTree mapping into typed nodes, converting range offsets with ``offsets``."""
        ...

    def load_program(self, ast_path: str, offsets: "OffsetMap | None" = None) -> "Program":
        """Read an ESTree JSON file and decode it."""
        ...


class FixerGatewayProtocol(Protocol):
    """Protocol for applying text edits. Overlapping edits are skipped, never composed."""

    def apply_edits(self, text: str, edits: list["TextEdit"]) -> tuple[str, list["TextEdit"], list["TextEdit"]]:
        """Apply edits to text. Returns (new_text, applied, skipped)."""
        ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        ...

    def exists(self, path: str) -> bool:
        """Return True if path exists (file or directory)."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...

    def ast_path_for(self, source_path: str, suffix: str) -> str:
        """Default location of a source file's ESTree JSON."""
        ...


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class GuidanceServiceProtocol(Protocol):
    """Protocol for the rule registry. Implemented by GuidanceService in infrastructure."""

    def get_entry(self, rule_name: str) -> RuleRegistryEntry | None:
        """Return the full registry entry for the rule, or None."""
        ...

    def get_display_name(self, rule_name: str) -> str:
        """Return the display name for a rule."""
        ...

    def get_message_template(self, rule_name: str, message_id: str) -> str | None:
        """Return the registry message template for a rule message, or None."""
        ...

    def get_manual_instructions(self, rule_name: str) -> str:
        """Return manual fix instructions for a rule."""
        ...
