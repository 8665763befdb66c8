"""
CLI entry point for diffstage.

This allows the tool to be run as:
    python -m diffstage --diff changes.diff --first 6 --last 9
"""

import sys
from diffstage.stage_cli import main

if __name__ == "__main__":
    sys.exit(main())
