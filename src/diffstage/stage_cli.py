"""
Command-line front end for building partial patches.

Reads a single-file unified diff, keeps only the selected change lines, and
writes the resulting patch to stdout so it can be piped into a patch-apply
command, for example:

    python -m diffstage --diff changes.diff --first 6 --last 9 | git apply --cached
"""

import argparse
import io
import logging
from pathlib import Path
import sys
from typing import List, Optional, TextIO

from diffstage.diff_exceptions import DiffError
from diffstage.diff_parser import DiffParser
from diffstage.patch_options import PatchOptions
from diffstage.range_patch_builder import RangePatchBuilder


class StageCommand:
    """
    Runs one partial-patch request.

    Coordinates:
    - Reading the diff text
    - Parsing it
    - Building the patch for the selected lines
    - Writing the result
    """

    def __init__(self, args: argparse.Namespace, stdin: TextIO, stdout: TextIO, stderr: TextIO):
        """
        Initialize the command with parsed arguments.

        Args:
            args: Parsed command-line arguments
            stdin: Stream to read the diff from when no --diff path is given
            stdout: Stream the patch is written to
            stderr: Stream for error messages
        """
        self.args = args
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr
        self._logger = logging.getLogger("StageCommand")

        self.parser = DiffParser()
        self.builder = RangePatchBuilder(PatchOptions(
            reverse=args.reverse,
            keep_original_header=args.keep_header
        ))

    def run(self) -> int:
        """
        Run the command.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        try:
            diff_text = self._read_diff()
            document = self.parser.parse(diff_text)

            filename = self.args.file or document.path
            if not filename and not self.args.keep_header:
                self._print_error("Could not determine file name from diff; use --file")
                return 1

            if self.args.lines is not None:
                patch = self.builder.build_for_lines(document, filename or '', self.args.lines)

            else:
                patch = self.builder.build(document, filename or '', self.args.first, self.args.last)

            if not patch:
                self._logger.info("Selection contains no changes")

            self._stdout.write(patch)
            return 0

        except DiffError as e:
            self._print_error(f"Failed to parse diff: {e}")
            return 1

        except OSError as e:
            self._print_error(f"Failed to read diff: {e}")
            return 1

    def _read_diff(self) -> str:
        """Read the diff text from the --diff path or stdin."""
        if self.args.diff is None:
            return self._stdin.read()

        with open(Path(self.args.diff), 'r', encoding='utf-8', newline='') as f:
            return f.read()

    def _print_error(self, message: str) -> None:
        """Print error message."""
        print(f"Error: {message}", file=self._stderr)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="diffstage",
        description="Build a patch containing only selected lines of a unified diff",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Line indices count every line of the diff from 0, including file headers,
hunk headers and "\\ No newline at end of file" markers.

Examples:
  # Stage lines 6 to 9 of a diff
  python -m diffstage --diff changes.diff --first 6 --last 9 | git apply --cached

  # Unstage two individual lines
  git diff --cached -- file.txt | python -m diffstage --lines 7 12 --reverse | git apply --cached -R
        """
    )

    parser.add_argument(
        '--diff',
        help='Unified diff file (default: read from stdin)'
    )

    parser.add_argument(
        '--file',
        help='File name for the patch headers (default: taken from the diff)'
    )

    parser.add_argument(
        '--first',
        type=int,
        default=-1,
        help='First selected line index (default: -1)'
    )

    parser.add_argument(
        '--last',
        type=int,
        default=-1,
        help='Last selected line index, inclusive (default: -1)'
    )

    parser.add_argument(
        '--lines',
        type=int,
        nargs='+',
        help='Individual selected line indices (instead of --first/--last)'
    )

    parser.add_argument(
        '--reverse',
        action='store_true',
        help='Build a patch to be applied in reverse (unstaging)'
    )

    parser.add_argument(
        '--keep-header',
        action='store_true',
        help='Keep the original file header lines'
    )

    parser.add_argument(
        '--log-level',
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: WARNING)'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show detailed output (same as --log-level DEBUG)'
    )

    args = parser.parse_args(argv)
    if args.lines is not None and (args.first != -1 or args.last != -1):
        parser.error("--lines cannot be combined with --first/--last")

    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, args.log_level),
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr
    )

    # Carriage returns are line content, so stdin must not translate newlines
    stdin = sys.stdin
    if isinstance(stdin, io.TextIOWrapper):
        stdin.reconfigure(newline='')

    command = StageCommand(args, stdin, sys.stdout, sys.stderr)
    return command.run()
