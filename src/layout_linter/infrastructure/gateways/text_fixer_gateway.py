"""Text based Fixer Gateway."""

import logging

from layout_linter.domain.entities import TextEdit
from layout_linter.domain.protocols import FixerGatewayProtocol

logger = logging.getLogger(__name__)


class TextFixerGateway(FixerGatewayProtocol):
    """Gateway for splicing accepted text edits into source text."""

    def apply_edits(self, text: str, edits: list[TextEdit]) -> tuple[str, list[TextEdit], list[TextEdit]]:
        """
        Apply a list of edits to text in one pass.

        Args:
            text: The original source text; every edit range refers to it
            edits: Candidate edits, in any order

        Returns:
            (new_text, applied, skipped). An edit overlapping one already
            accepted is skipped, never composed; edits out of bounds are
            skipped too.
        """
        applied: list[TextEdit] = []
        skipped: list[TextEdit] = []
        for edit in sorted(edits, key=lambda candidate: (candidate.start, candidate.end)):
            if edit.start < 0 or edit.end > len(text) or edit.start > edit.end:
                logger.debug("Skipping out-of-bounds edit %s", edit.range)
                skipped.append(edit)
                continue
            if any(edit.overlaps(accepted) for accepted in applied):
                logger.debug("Skipping edit %s overlapping an accepted edit", edit.range)
                skipped.append(edit)
                continue
            applied.append(edit)

        pieces: list[str] = []
        cursor = 0
        for edit in applied:
            pieces.append(text[cursor : edit.start])
            pieces.append(edit.replacement)
            cursor = edit.end
        pieces.append(text[cursor:])
        return "".join(pieces), applied, skipped
