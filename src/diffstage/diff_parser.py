"""Unified diff parsing."""

import logging
import re
from typing import List, Tuple

from diffstage.diff_document import DiffDocument
from diffstage.diff_exceptions import MalformedDiffError
from diffstage.diff_hunk import DiffHunk
from diffstage.diff_types import DiffLine, LineRole


_ROLE_BY_PREFIX = {role.value: role for role in LineRole}

# The marker text after the prefix is localized by some tools
NO_NEWLINE_PREFIX = '\\ '


class DiffParser:
    """Parser for single-file unified diff text."""

    HUNK_HEADER_PATTERN = re.compile(
        r'^@@\s+-(\d+)(?:,(\d+))?\s+\+(\d+)(?:,(\d+))?\s+@@(?: (.*))?$'
    )

    def __init__(self) -> None:
        """Initialize the parser."""
        self._logger = logging.getLogger("DiffParser")

    def parse(self, diff_text: str) -> DiffDocument:
        """
        Parse unified diff text into a document.

        Everything before the first hunk header is kept verbatim as the
        preamble.  Text with no hunks at all gives a document with no hunks.
        Each hunk body ends once the line counts in its header are used up;
        blank lines after that are skipped but keep their absolute indices.

        Args:
            diff_text: Unified diff format text for a single file

        Returns:
            Parsed document

        Raises:
            MalformedDiffError: If a hunk header or body line cannot be parsed
        """
        lines = diff_text.split('\n')

        # A terminating newline does not start another line
        if lines and lines[-1] == '':
            lines.pop()

        preamble: List[str] = []
        hunks: List[DiffHunk] = []

        i = 0
        while i < len(lines) and not lines[i].startswith('@@'):
            preamble.append(lines[i])
            i += 1

        while i < len(lines):
            line = lines[i]

            # Blank lines between or after hunks carry no content
            if not line:
                i += 1
                continue

            if not line.startswith('@@'):
                raise MalformedDiffError(
                    f"Unexpected line after hunk: {line}",
                    {'line_index': i, 'line': line}
                )

            hunk, i = self._parse_hunk(lines, i)
            hunks.append(hunk)

        self._logger.debug("Parsed %d preamble line(s) and %d hunk(s)", len(preamble), len(hunks))
        return DiffDocument(tuple(preamble), tuple(hunks), len(lines))

    def _parse_hunk(self, lines: List[str], start_idx: int) -> Tuple[DiffHunk, int]:
        """
        Parse a single hunk starting at the given index.

        Args:
            lines: All lines from the diff
            start_idx: Index of the @@ line, which becomes the hunk's anchor

        Returns:
            Tuple of (parsed hunk, index of the first line after the hunk)

        Raises:
            MalformedDiffError: If hunk parsing fails
        """
        header = lines[start_idx]
        match = self.HUNK_HEADER_PATTERN.match(header)
        if not match:
            raise MalformedDiffError(
                f"Invalid hunk header format: {header}",
                {'line_index': start_idx, 'line': header}
            )

        # Omitted counts mean a single line
        old_start = int(match.group(1))
        old_count = int(match.group(2)) if match.group(2) is not None else 1
        new_start = int(match.group(3))
        new_count = int(match.group(4)) if match.group(4) is not None else 1
        section_label = match.group(5) or ''

        hunk_lines: List[DiffLine] = []
        old_remaining = old_count
        new_remaining = new_count
        i = start_idx + 1

        while i < len(lines):
            line = lines[i]

            # Stop at next hunk
            if line.startswith('@@'):
                break

            if line.startswith(NO_NEWLINE_PREFIX):
                # "\ No newline at end of file" belongs to the previous line
                if not hunk_lines or hunk_lines[-1].no_trailing_newline:
                    raise MalformedDiffError(
                        f"No-newline marker does not follow a diff line: {line}",
                        {'line_index': i, 'line': line}
                    )

                previous = hunk_lines[-1]
                hunk_lines[-1] = DiffLine(previous.role, previous.text, no_trailing_newline=True)
                i += 1
                continue

            # The header counts bound the body
            if old_remaining == 0 and new_remaining == 0:
                break

            body_line = self._parse_body_line(line, i)
            if body_line.role is not LineRole.ADDITION:
                old_remaining -= 1

            if body_line.role is not LineRole.REMOVAL:
                new_remaining -= 1

            if old_remaining < 0 or new_remaining < 0:
                raise MalformedDiffError(
                    f"Hunk body does not match header counts: {header}",
                    {'line_index': i, 'line': line}
                )

            hunk_lines.append(body_line)
            i += 1

        if old_remaining or new_remaining:
            self._logger.debug(
                "Hunk at index %d ended %d old / %d new line(s) short", start_idx, old_remaining, new_remaining
            )

        hunk = DiffHunk(
            old_start, old_count, new_start, new_count, section_label, tuple(hunk_lines), start_idx
        )
        return hunk, i

    def _parse_body_line(self, line: str, line_index: int) -> DiffLine:
        """
        Parse one context, removal or addition line.

        Args:
            line: Raw line text
            line_index: Absolute index of the line (for error reporting)

        Returns:
            The parsed line

        Raises:
            MalformedDiffError: If the line has an unrecognized prefix
        """
        # Blank context lines sometimes lose their leading space
        if not line:
            return DiffLine(LineRole.CONTEXT, '')

        role = _ROLE_BY_PREFIX.get(line[0])
        if role is None:
            raise MalformedDiffError(
                f"Unrecognized diff line: {line}",
                {'line_index': line_index, 'line': line}
            )

        return DiffLine(role, line[1:])


def parse_diff(diff_text: str) -> DiffDocument:
    """
    Parse unified diff text into a document.

    Args:
        diff_text: Unified diff format text for a single file

    Returns:
        Parsed document
    """
    return DiffParser().parse(diff_text)
