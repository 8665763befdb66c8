"""Options controlling how a partial patch is built."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PatchOptions:
    """
    Settings for building a patch from a selection of diff lines.

    Attributes:
        reverse: Build a patch that will be applied in reverse (unstaging),
            so unselected changes are treated as already applied
        keep_original_header: Emit the original preamble lines instead of
            synthesized --- a/ and +++ b/ file headers
    """
    reverse: bool = False
    keep_original_header: bool = False
