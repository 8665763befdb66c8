"""Parsed single-file diff document."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from diffstage.diff_hunk import DiffHunk


DEV_NULL = "/dev/null"


def _strip_path(raw_path: str) -> str:
    """
    Clean a path taken from a --- or +++ header line.

    Args:
        raw_path: Text following the ---/+++ marker

    Returns:
        Path with any timestamp and git a/ or b/ prefix removed
    """
    path = raw_path.split('\t', 1)[0].strip()
    if path.startswith('a/') or path.startswith('b/'):
        path = path[2:]

    return path


@dataclass(frozen=True)
class DiffDocument:
    """
    A unified diff for a single file.

    Every physical line of the source text has an absolute index, counting
    from 0 at the first preamble line.  Hunks carry their own anchors into
    this numbering, so the document never needs to be consulted to locate a
    line inside a hunk.
    """

    preamble: Tuple[str, ...]
    hunks: Tuple[DiffHunk, ...]
    total_lines: int

    @property
    def path(self) -> Optional[str]:
        """
        Path recorded in the file header lines.

        The new-file path is preferred; a /dev/null new side (deleted file)
        falls back to the old-file path.
        """
        old_path: Optional[str] = None
        new_path: Optional[str] = None
        for line in self.preamble:
            if line.startswith('--- ') and old_path is None:
                old_path = _strip_path(line[4:])

            elif line.startswith('+++ ') and new_path is None:
                new_path = _strip_path(line[4:])

        if new_path and new_path != DEV_NULL:
            return new_path

        if old_path and old_path != DEV_NULL:
            return old_path

        return None

    def hunk_index_for_line(self, index: int) -> Optional[int]:
        """
        Find the hunk whose span contains an absolute index.

        Args:
            index: Absolute line index

        Returns:
            Position of the hunk in self.hunks, or None for preamble and
            out-of-range indices
        """
        for hunk_index, hunk in enumerate(self.hunks):
            if hunk.contains(index):
                return hunk_index

        return None

    def change_line_indices(self) -> List[int]:
        """Get the absolute indices of every addition and removal line."""
        indices: List[int] = []
        for hunk in self.hunks:
            indices.extend(hunk.change_line_indices())

        return indices

    def next_change_line_index(self, index: int) -> Optional[int]:
        """
        Find the nearest stageable line at or after an index.

        If there is no change line at or after the index, the last change line
        before it is returned instead.

        Args:
            index: Absolute line index to start from

        Returns:
            Absolute index of a change line, or None if the diff has none
        """
        indices = self.change_line_indices()
        if not indices:
            return None

        for change_index in indices:
            if change_index >= index:
                return change_index

        return indices[-1]

    def line_number_of_line(self, index: int) -> Optional[int]:
        """
        Map an absolute index to a line number in the new file.

        Args:
            index: Absolute line index

        Returns:
            1-indexed new-file line number, or None if the index is not
            inside any hunk
        """
        hunk_index = self.hunk_index_for_line(index)
        if hunk_index is None:
            return None

        return self.hunks[hunk_index].line_number_of_hunk_position(index)
