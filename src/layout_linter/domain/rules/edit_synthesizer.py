"""
Safe edit synthesis.

Every method returns a single ``TextEdit`` or ``None``. ``None`` is a refusal:
the violation is still reported, it just carries no fix. Edits never span a
line boundary they were not asked to change and never touch comments.
"""

import re

from layout_linter.domain.constants import HORIZONTAL_WHITESPACE, LIST_SEPARATOR
from layout_linter.domain.entities import TextEdit
from layout_linter.domain.nodes import Identifier, MemberExpression, Node
from layout_linter.domain.rules.blank_lines import BlankLineAnalyzer
from layout_linter.domain.source import SourceText

IDENTIFIER_NAME_PATTERN = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_FIRST_LINE_BREAK = re.compile(r"(\r?\n)")


class SafeEditSynthesizer:
    """Builds minimal, idempotent text edits or refuses."""

    @staticmethod
    def insert_blank_line(source: SourceText, prev_end: int | None, next_start: int | None) -> TextEdit | None:
        """Duplicate the first line break of the gap. Refuse when both sides share a line."""
        if prev_end is None or next_start is None or prev_end > next_start:
            return None
        gap = source.slice(prev_end, next_start)
        if "\n" not in gap:
            return None
        return TextEdit.replace(prev_end, next_start, _FIRST_LINE_BREAK.sub(r"\1\1", gap, count=1))

    @staticmethod
    def remove_blank_lines(source: SourceText, prev_end: int | None, next_start: int | None) -> TextEdit | None:
        """Drop blank interior lines of the gap, keeping comment lines and the outer segments."""
        if prev_end is None or next_start is None or prev_end > next_start:
            return None
        gap = source.slice(prev_end, next_start)
        segments = BlankLineAnalyzer.split_lines(gap)
        if len(segments) < 3:
            return None
        newline = "\r\n" if "\r\n" in gap else "\n"
        kept = [segments[0]]
        kept.extend(segment for segment in segments[1:-1] if segment.strip())
        kept.append(segments[-1])
        rebuilt = newline.join(kept)
        if rebuilt == gap:
            return None
        return TextEdit.replace(prev_end, next_start, rebuilt)

    @staticmethod
    def remove_list_element(source: SourceText, node: Node) -> TextEdit | None:
        """
        Remove one element of a comma-separated list together with its separator.

        A following separator is consumed along with trailing spaces/tabs; otherwise
        a preceding separator and the spaces/tabs before it. Whitespace that runs
        into a line break is refused, and the final span must stay on one line
        and hold no comment.
        """
        if node.range is None:
            return None
        start, end = node.range
        text = source.text
        following = source.token_after(end)
        if following is not None and following.value == LIST_SEPARATOR:
            if source.has_line_break(end, following.end):
                return None
            stop = following.end
            while stop < len(text) and text[stop] in HORIZONTAL_WHITESPACE:
                stop += 1
            if stop < len(text) and text[stop] in "\r\n":
                return None
            span = (start, stop)
        else:
            preceding = source.token_before(start)
            if preceding is not None and preceding.value == LIST_SEPARATOR:
                if source.has_line_break(preceding.start, start):
                    return None
                begin = preceding.start
                while begin > 0 and text[begin - 1] in HORIZONTAL_WHITESPACE:
                    begin -= 1
                if begin > 0 and text[begin - 1] in "\r\n":
                    return None
                span = (begin, end)
            else:
                span = (start, end)

        removed = source.slice(*span)
        if source.has_line_break(*span) or "//" in removed or "/*" in removed:
            return None
        return TextEdit.remove(*span)

    @staticmethod
    def remove_node(node: Node) -> TextEdit | None:
        """Remove a whole node's range (e.g. an entire import declaration)."""
        if node.range is None:
            return None
        return TextEdit.remove(*node.range)

    @staticmethod
    def rewrite_to_dot_notation(source: SourceText, member: MemberExpression, key: str) -> TextEdit | None:
        """
        Rewrite ``obj['key']`` as ``obj.key`` (``obj?.['key']`` as ``obj?.key``) for a plain
        receiver and identifier key on one line.
        """
        if not IDENTIFIER_NAME_PATTERN.fullmatch(key):
            return None
        receiver = member.object
        if not isinstance(receiver, Identifier) or not receiver.name:
            return None
        if member.range is None:
            return None
        start, end = member.range
        if source.has_line_break(start, end):
            return None
        accessor = "?." if member.optional else "."
        return TextEdit.replace(start, end, f"{receiver.name}{accessor}{key}")
