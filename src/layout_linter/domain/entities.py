"""Domain entities: text edits, declared variables and lint/fix results."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from layout_linter.domain.nodes import Identifier, Node, Range
from layout_linter.domain.source import SourceText

if TYPE_CHECKING:
    from layout_linter.domain.rules import Violation


@dataclass(frozen=True)
class TextEdit:
    """
    Pure data structure describing one text replacement.

    Rules never return a partially valid edit: a fix either produces a
    TextEdit or None (refusal).
    """

    range: Range
    replacement: str

    @classmethod
    def replace(cls, start: int, end: int, replacement: str) -> "TextEdit":
        """Create an edit replacing ``[start, end)`` with ``replacement``."""
        return cls(range=(start, end), replacement=replacement)

    @classmethod
    def remove(cls, start: int, end: int) -> "TextEdit":
        """Create an edit deleting ``[start, end)``."""
        return cls(range=(start, end), replacement="")

    @property
    def start(self) -> int:
        return self.range[0]

    @property
    def end(self) -> int:
        return self.range[1]

    def overlaps(self, other: "TextEdit") -> bool:
        """True if both edits touch a common character (or insert at the same point)."""
        if self.start == self.end == other.start == other.end:
            return True
        return self.start < other.end and other.start < self.end

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"range": list(self.range), "replacement": self.replacement}


@dataclass(frozen=True)
class DeclaredVariable:
    """A binding declared by a node, with the identifiers that declare it and its references."""

    name: str
    identifiers: tuple[Identifier, ...] = ()
    references: tuple[Node, ...] = ()

    def is_used(self) -> bool:
        return len(self.references) > 0


@dataclass(frozen=True)
class LintResult:
    """Violations found in one file, in document order."""

    file_path: str
    source: SourceText
    violations: tuple["Violation", ...] = ()

    def has_violations(self) -> bool:
        return bool(self.violations)

    def fixable_count(self) -> int:
        return sum(1 for violation in self.violations if violation.fixable)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the JSON reporter."""
        rows: list[dict[str, Any]] = []
        for violation in self.violations:
            line, column = (0, 0)
            if violation.node.start is not None:
                line, column = self.source.position_of(violation.node.start)
            rows.append(
                {
                    "rule": violation.rule,
                    "message_id": violation.message_id,
                    "message": violation.message,
                    "line": line,
                    "column": column,
                    "fixable": violation.fixable,
                }
            )
        return {"file": self.file_path, "violations": rows}


@dataclass(frozen=True)
class FixOutcome:
    """Result of one fix pass over a file."""

    file_path: str
    original_text: str
    fixed_text: str
    applied: tuple[TextEdit, ...] = ()
    skipped: tuple[TextEdit, ...] = ()
    unfixable: tuple["Violation", ...] = ()

    @property
    def modified(self) -> bool:
        return self.fixed_text != self.original_text
