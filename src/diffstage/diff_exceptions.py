"""
Errors raised while reading diff text for partial staging.

Selections are never an error: out-of-range indices are clamped and empty
selections build an empty patch.  Only input that breaks the unified diff
grammar is reported.
"""

from typing import Any


class DiffError(Exception):
    """Base exception for diffstage; carries optional structured details."""

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional details, e.g. the absolute 'line_index'
                and text 'line' of the offending diff line
        """
        super().__init__(message)
        self.error_details = error_details


class MalformedDiffError(DiffError):
    """
    Raised when diff text does not follow the unified diff grammar.

    Covers unparsable hunk headers, body lines with an unknown prefix, hunk
    bodies that disagree with their header counts, and no-newline markers
    that do not follow a diff line.
    """
