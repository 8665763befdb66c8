"""
Partial staging of unified diffs.

This package parses a single-file unified diff and builds new, smaller diffs
containing only a selection of its change lines, ready to be applied forwards
(staging) or in reverse (unstaging) by an external patch tool.
"""

from diffstage.diff_document import DiffDocument
from diffstage.diff_exceptions import DiffError, MalformedDiffError
from diffstage.diff_hunk import DiffHunk
from diffstage.diff_parser import DiffParser, parse_diff
from diffstage.diff_types import NO_NEWLINE_MARKER, DiffLine, LineRole
from diffstage.patch_options import PatchOptions
from diffstage.range_patch_builder import (
    RangePatchBuilder,
    build_patch_for_lines,
    build_range_patch,
)

__version__ = "0.1.0"

__all__ = [
    # Exceptions
    'DiffError',
    'MalformedDiffError',
    # Types
    'LineRole',
    'DiffLine',
    'DiffHunk',
    'DiffDocument',
    'PatchOptions',
    'NO_NEWLINE_MARKER',
    # Core classes and functions
    'DiffParser',
    'parse_diff',
    'RangePatchBuilder',
    'build_range_patch',
    'build_patch_for_lines',
]
