"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

from pathlib import Path

from layout_linter.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        return str(Path(path).resolve())

    def exists(self, path: str) -> bool:
        """Return True if path exists (file or directory)."""
        return Path(path).exists()

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file. Line endings are kept as written."""
        with Path(path).open(encoding=encoding, newline="") as handle:
            return handle.read()

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file without translating line endings."""
        with Path(path).open("w", encoding=encoding, newline="") as handle:
            handle.write(content)

    def ast_path_for(self, source_path: str, suffix: str) -> str:
        """Default location of a source file's ESTree JSON: the source path plus ``suffix``."""
        return str(Path(source_path).with_name(Path(source_path).name + suffix))
