"""Hunk representation and absolute line index mapping."""

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from diffstage.diff_types import DiffLine, LineRole


@dataclass(frozen=True)
class DiffHunk:
    """
    Represents a single hunk from a unified diff.

    Hunks are positioned within the whole diff by their anchor, the absolute
    index of the hunk header line.  Body lines follow at anchor + 1 onwards,
    with each no-newline marker taking an index of its own immediately after
    the line it belongs to.
    """

    old_start: int  # Starting line number in original file (1-indexed)
    old_count: int  # Number of lines in original file
    new_start: int  # Starting line number in new file (1-indexed)
    new_count: int  # Number of lines in new file
    section_label: str  # Text following the closing @@, if any
    lines: Tuple[DiffLine, ...]
    anchor: int

    @property
    def first_index(self) -> int:
        """Absolute index of the hunk header."""
        return self.anchor

    @property
    def last_index(self) -> int:
        """Absolute index of the last line (or marker) belonging to this hunk."""
        return self.anchor + self.span_length() - 1

    def span_length(self) -> int:
        """
        Count the physical diff lines this hunk occupies.

        Returns:
            Number of lines including the header and any no-newline markers
        """
        markers = sum(1 for line in self.lines if line.no_trailing_newline)
        return 1 + len(self.lines) + markers

    def contains(self, index: int) -> bool:
        """Check whether an absolute index falls within this hunk."""
        return self.first_index <= index <= self.last_index

    def indexed_lines(self) -> Iterator[Tuple[int, DiffLine]]:
        """
        Iterate over body lines along with their absolute indices.

        Yields:
            Tuples of (absolute index, line)
        """
        index = self.anchor + 1
        for line in self.lines:
            yield index, line
            index += 2 if line.no_trailing_newline else 1

    def change_line_indices(self) -> List[int]:
        """
        Get the absolute indices of all addition and removal lines.

        Returns:
            Indices in ascending order
        """
        return [
            index for index, line in self.indexed_lines()
            if line.role is not LineRole.CONTEXT
        ]

    def line_number_of_hunk_position(self, index: int) -> int:
        """
        Translate an absolute diff index into a line number in the new file.

        The header maps to the line before new_start.  A no-newline marker maps
        the same as the line it belongs to, and removal lines never advance
        the count.

        Args:
            index: Absolute index within this hunk's span

        Returns:
            1-indexed line number in the new version of the file

        Raises:
            ValueError: If the index lies outside this hunk
        """
        if not self.contains(index):
            raise ValueError(
                f"Index {index} is outside hunk span {self.first_index}-{self.last_index}"
            )

        line_number = self.new_start - 1
        for line_index, line in self.indexed_lines():
            if line_index > index:
                break

            if line.role is not LineRole.REMOVAL:
                line_number += 1

        return line_number

    def header(self, old_count: int, new_start: int, new_count: int) -> str:
        """
        Format a hunk header for this hunk with recomputed fields.

        The old start and section label always come from the parsed hunk.

        Args:
            old_count: Number of old-file lines covered
            new_start: Starting line number in the new file
            new_count: Number of new-file lines covered

        Returns:
            Header line text
        """
        header = f"@@ -{self.old_start},{old_count} +{new_start},{new_count} @@"
        if self.section_label:
            header += f" {self.section_label}"

        return header
