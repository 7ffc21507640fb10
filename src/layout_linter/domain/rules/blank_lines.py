"""Blank-line detection between two source offsets, independent of LF/CRLF."""

from layout_linter.domain.source import LINE_BREAK_PATTERN, SourceText


class BlankLineAnalyzer:
    """Decides whether a fully blank line separates two positions."""

    @staticmethod
    def split_lines(gap: str) -> list[str]:
        """Split a gap on ``\\n`` or ``\\r\\n``."""
        return LINE_BREAK_PATTERN.split(gap)

    @staticmethod
    def gap_has_blank_line(gap: str) -> bool:
        """
        True when the gap has at least three segments and an interior one is blank.

        ``"\\n    "`` (one break plus indentation) yields two segments and is
        not a blank line.
        """
        segments = BlankLineAnalyzer.split_lines(gap)
        if len(segments) < 3:
            return False
        return any(segment.strip() == "" for segment in segments[1:-1])

    @staticmethod
    def has_blank_line(source: SourceText, prev_end: int | None, next_start: int | None) -> bool:
        """Check the gap ``[prev_end, next_start)``. Missing offsets never report a blank line."""
        if prev_end is None or next_start is None or prev_end > next_start:
            return False
        return BlankLineAnalyzer.gap_has_blank_line(source.slice(prev_end, next_start))
