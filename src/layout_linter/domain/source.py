"""Immutable source text with offset helpers. The only place line endings are observed."""

import bisect
import re
from dataclasses import dataclass, field

from layout_linter.domain.constants import (
    DEFAULT_OFFSET_UNIT,
    OFFSET_UNIT_CODEPOINT,
    OFFSET_UNIT_UTF8,
    OFFSET_UNIT_UTF16,
    OFFSET_UNITS,
)

LINE_BREAK_PATTERN = re.compile(r"\r?\n")


@dataclass(frozen=True)
class SourceToken:
    """A single significant character found next to an offset."""

    value: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.value)


@dataclass(frozen=True)
class SourceText:
    """Raw source text whose offsets match node ranges."""

    text: str
    _line_starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        starts = [0]
        starts.extend(match.end() for match in re.finditer(r"\r\n|\n|\r", self.text))
        object.__setattr__(self, "_line_starts", tuple(starts))

    def __len__(self) -> int:
        return len(self.text)

    def slice(self, start: int, end: int) -> str:
        """Return the text in ``[start, end)``."""
        return self.text[start:end]

    def has_line_break(self, start: int, end: int) -> bool:
        """True if ``[start, end)`` contains a CR or LF."""
        segment = self.text[start:end]
        return "\n" in segment or "\r" in segment

    def position_of(self, offset: int) -> tuple[int, int]:
        """Return the 1-based line and 0-based column of an offset."""
        offset = max(0, min(offset, len(self.text)))
        line_index = bisect.bisect_right(self._line_starts, offset) - 1
        return (line_index + 1, offset - self._line_starts[line_index])

    def token_after(self, offset: int) -> SourceToken | None:
        """First significant character at or after ``offset``, skipping whitespace and comments."""
        index = offset
        length = len(self.text)
        while index < length:
            char = self.text[index]
            if char.isspace():
                index += 1
                continue
            if self.text.startswith("//", index):
                newline = self.text.find("\n", index)
                if newline == -1:
                    return None
                index = newline + 1
                continue
            if self.text.startswith("/*", index):
                close = self.text.find("*/", index + 2)
                if close == -1:
                    return None
                index = close + 2
                continue
            return SourceToken(value=char, start=index)
        return None

    def token_before(self, offset: int) -> SourceToken | None:
        """Last significant character before ``offset``, skipping whitespace and block comments."""
        index = offset - 1
        while index >= 0:
            char = self.text[index]
            if char.isspace():
                index -= 1
                continue
            if char == "/" and index > 0 and self.text[index - 1] == "*":
                open_at = self.text.rfind("/*", 0, index - 1)
                if open_at == -1:
                    return SourceToken(value=char, start=index)
                index = open_at - 1
                continue
            return SourceToken(value=char, start=index)
        return None


class OffsetMap:
    """
    Maps ESTree offsets to indices into the Python ``str`` of the source.

    JavaScript parsers count UTF-16 code units, some native parsers count UTF-8
    bytes; Python strings are indexed by code point. The three agree on ASCII
    text, in which case the map is the identity. An offset inside a multi-unit
    character maps to that character's index.
    """

    def __init__(self, text: str, unit: str = DEFAULT_OFFSET_UNIT) -> None:
        if unit not in OFFSET_UNITS:
            raise ValueError(f"Unknown offset unit {unit!r}; expected one of {', '.join(OFFSET_UNITS)}")
        self.unit = unit
        self._table: tuple[int, ...] | None = None
        if unit != OFFSET_UNIT_CODEPOINT and not text.isascii():
            table: list[int] = []
            for index, char in enumerate(text):
                table.extend([index] * self.width(char, unit))
            table.append(len(text))
            self._table = tuple(table)

    @staticmethod
    def width(char: str, unit: str) -> int:
        """Number of ``unit`` offsets one character spans."""
        if unit == OFFSET_UNIT_UTF8:
            return len(char.encode("utf-8", "surrogatepass"))
        if unit == OFFSET_UNIT_UTF16:
            return 2 if ord(char) > 0xFFFF else 1
        return 1

    @property
    def is_identity(self) -> bool:
        return self._table is None

    def to_index(self, offset: int) -> int:
        if self._table is None:
            return offset
        if offset >= len(self._table):
            return self._table[-1] + offset - (len(self._table) - 1)
        return self._table[offset]
