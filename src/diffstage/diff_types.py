"""Shared value types for diff staging."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import List


NO_NEWLINE_MARKER = "\\ No newline at end of file"


class LineRole(Enum):
    """Role of a diff body line; the value is its unified diff prefix."""
    CONTEXT = " "
    ADDITION = "+"
    REMOVAL = "-"


@dataclass(frozen=True)
class DiffLine:
    """Represents a single body line in a diff hunk."""

    role: LineRole
    text: str  # The line content (without the prefix character or newline)
    no_trailing_newline: bool = False

    def with_role(self, role: LineRole) -> 'DiffLine':
        """
        Return a copy of this line with a different role.

        The no-trailing-newline flag is carried over unchanged.

        Args:
            role: Role for the copy

        Returns:
            New line with the requested role
        """
        if role is self.role:
            return self

        return replace(self, role=role)

    def render(self) -> List[str]:
        """
        Render the line in unified diff form.

        Returns:
            The prefixed line, followed by the no-newline marker if flagged
        """
        rendered = [f"{self.role.value}{self.text}"]
        if self.no_trailing_newline:
            rendered.append(NO_NEWLINE_MARKER)

        return rendered
