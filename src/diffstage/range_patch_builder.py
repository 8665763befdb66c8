"""Build partial patches from a selection of lines in a parsed diff."""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from diffstage.diff_document import DiffDocument
from diffstage.diff_hunk import DiffHunk
from diffstage.diff_types import DiffLine, LineRole
from diffstage.patch_options import PatchOptions


# (role, selected, reverse) -> role to emit, or None to drop the line.
# Selected lines keep their sign in both directions.
SELECTION_RULES: Dict[Tuple[LineRole, bool, bool], Optional[LineRole]] = {
    (LineRole.CONTEXT, True, False): LineRole.CONTEXT,
    (LineRole.CONTEXT, True, True): LineRole.CONTEXT,
    (LineRole.CONTEXT, False, False): LineRole.CONTEXT,
    (LineRole.CONTEXT, False, True): LineRole.CONTEXT,
    (LineRole.ADDITION, True, False): LineRole.ADDITION,
    (LineRole.ADDITION, True, True): LineRole.ADDITION,
    (LineRole.ADDITION, False, False): None,
    (LineRole.ADDITION, False, True): LineRole.CONTEXT,
    (LineRole.REMOVAL, True, False): LineRole.REMOVAL,
    (LineRole.REMOVAL, True, True): LineRole.REMOVAL,
    (LineRole.REMOVAL, False, False): LineRole.CONTEXT,
    (LineRole.REMOVAL, False, True): None,
}


class RangePatchBuilder:
    """
    Builds a new unified diff containing only selected change lines.

    The builder holds no state other than its options, so one instance can be
    shared freely between callers.
    """

    def __init__(self, options: PatchOptions | None = None):
        """
        Initialize the builder.

        Args:
            options: Patch building options (defaults to forward, synthesized headers)
        """
        self._options = options or PatchOptions()
        self._logger = logging.getLogger("RangePatchBuilder")

    @property
    def options(self) -> PatchOptions:
        """Options used by this builder."""
        return self._options

    def build(
        self,
        document: DiffDocument,
        filename: str,
        first_index: int,
        last_index: int
    ) -> str:
        """
        Build a patch for an inclusive range of absolute line indices.

        The range is clamped to the document.  A range that is empty after
        clamping selects nothing.

        Args:
            document: Parsed diff for a single file
            filename: Path used for synthesized file headers
            first_index: First selected absolute index
            last_index: Last selected absolute index

        Returns:
            Unified diff text, or an empty string if no change survives
        """
        first = max(first_index, 0)
        last = min(last_index, document.total_lines - 1)
        if first > last:
            self._logger.debug("Empty selection %d-%d", first_index, last_index)
            return ''

        return self._build(document, filename, lambda index: first <= index <= last)

    def build_for_lines(
        self,
        document: DiffDocument,
        filename: str,
        line_indices: Iterable[int]
    ) -> str:
        """
        Build a patch for an arbitrary set of absolute line indices.

        Args:
            document: Parsed diff for a single file
            filename: Path used for synthesized file headers
            line_indices: Selected absolute indices; indices outside the
                document are ignored

        Returns:
            Unified diff text, or an empty string if no change survives
        """
        selected = frozenset(line_indices)
        if not selected:
            return ''

        return self._build(document, filename, selected.__contains__)

    def _build(
        self,
        document: DiffDocument,
        filename: str,
        is_selected: Callable[[int], bool]
    ) -> str:
        """
        Build the patch text for a selection predicate.

        Args:
            document: Parsed diff for a single file
            filename: Path used for synthesized file headers
            is_selected: Predicate over absolute line indices

        Returns:
            Unified diff text, or an empty string if no change survives
        """
        body: List[str] = []
        new_line_offset = 0

        for hunk in document.hunks:
            hunk_text, delta = self._transform_hunk(hunk, is_selected, new_line_offset)
            body.extend(hunk_text)
            new_line_offset += delta

        if not body:
            self._logger.debug("No changes selected")
            return ''

        if self._options.keep_original_header:
            header = list(document.preamble)

        else:
            header = [f"--- a/{filename}", f"+++ b/{filename}"]

        return '\n'.join(header + body) + '\n'

    def _transform_hunk(
        self,
        hunk: DiffHunk,
        is_selected: Callable[[int], bool],
        new_line_offset: int
    ) -> Tuple[List[str], int]:
        """
        Apply the selection rules to one hunk.

        Args:
            hunk: Parsed hunk
            is_selected: Predicate over absolute line indices
            new_line_offset: Net line count change of all preceding hunks

        Returns:
            Tuple of (rendered header and body lines, net line count change);
            the rendered lines are empty if the hunk has no changes left
        """
        reverse = self._options.reverse
        out_lines: List[DiffLine] = []
        for index, line in hunk.indexed_lines():
            role = SELECTION_RULES[(line.role, is_selected(index), reverse)]
            if role is not None:
                out_lines.append(line.with_role(role))

        context_count = sum(1 for line in out_lines if line.role is LineRole.CONTEXT)
        add_count = sum(1 for line in out_lines if line.role is LineRole.ADDITION)
        rem_count = sum(1 for line in out_lines if line.role is LineRole.REMOVAL)

        if add_count == 0 and rem_count == 0:
            self._logger.debug("Dropping hunk at index %d with no selected changes", hunk.anchor)
            return [], 0

        old_count = context_count + rem_count
        new_count = context_count + add_count

        rendered = [hunk.header(old_count, hunk.new_start + new_line_offset, new_count)]
        for line in out_lines:
            rendered.extend(line.render())

        return rendered, new_count - old_count


def build_range_patch(
    document: DiffDocument,
    filename: str,
    first_index: int,
    last_index: int,
    options: PatchOptions | None = None
) -> str:
    """
    Build a patch containing only the changes in an inclusive line range.

    Args:
        document: Parsed diff for a single file
        filename: Path used for synthesized file headers
        first_index: First selected absolute index (clamped)
        last_index: Last selected absolute index (clamped)
        options: Patch building options

    Returns:
        Unified diff text, or an empty string if no change is selected
    """
    return RangePatchBuilder(options).build(document, filename, first_index, last_index)


def build_patch_for_lines(
    document: DiffDocument,
    filename: str,
    line_indices: Iterable[int],
    options: PatchOptions | None = None
) -> str:
    """
    Build a patch containing only the changes at the given line indices.

    Args:
        document: Parsed diff for a single file
        filename: Path used for synthesized file headers
        line_indices: Selected absolute indices
        options: Patch building options

    Returns:
        Unified diff text, or an empty string if no change is selected
    """
    return RangePatchBuilder(options).build_for_lines(document, filename, line_indices)
