"""
VC Front End Error Hierarchy
============================

This module defines the exception hierarchy for the VC front end.
All exceptions inherit from VCError, allowing callers to catch every
front-end error with a single except clause if desired.

Exception Hierarchy
-------------------
VCError (base)
├── VCSyntaxError - first grammar violation found by the recogniser
└── SourceReadError - source file could not be read

Note that diagnostics are not exceptions: the scanner and recogniser
report every diagnostic through an ErrorReporter at the moment it is
detected. VCSyntaxError only unwinds the recogniser once the diagnostic
has already been written.

Error Message Format
--------------------
    filename:line(col)..line(col): error: description
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Source Position Tracking
# =============================================================================

@dataclass(frozen=True)
class SourcePosition:
    """
    Span of a token on its starting line.

    Columns are 1-indexed and inclusive. The end-of-input marker is the
    only token whose span is empty (col_end == col_start - 1).

    Attributes:
        line: Line number (1-indexed)
        col_start: Column of the first character of the token
        col_end: Column of the last character of the token
    """
    line: int
    col_start: int
    col_end: int

    def __str__(self) -> str:
        """Format as 'line(col_start)..line(col_end)' for diagnostics."""
        return f"{self.line}({self.col_start})..{self.line}({self.col_end})"


# =============================================================================
# Base Exception Class
# =============================================================================

class VCError(Exception):
    """
    Base exception for all VC front-end errors.

    Attributes:
        message: The error description
        position: Where in the source the error occurred (optional)
        filename: Source file name used as a prefix (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        position: Optional[SourcePosition] = None,
        filename: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.position = position
        self.filename = filename
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location and hint.

        Example output:
            gcd.vc:3(9)..3(9): error: ";" expected here
            hint: every declaration ends with ';'
        """
        parts = []

        # Location prefix
        location = None
        if self.position is not None:
            location = str(self.position)
            if self.filename:
                location = f"{self.filename}:{location}"
        elif self.filename:
            location = self.filename

        if location:
            parts.append(f"{location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class VCSyntaxError(VCError):
    """
    Grammar violation detected by the recogniser.

    Raised by the recogniser after the diagnostic has been reported.
    It unwinds every active parse method up to Recogniser.parse_program,
    which is the only place it is caught. No parsing happens after it.
    """
    pass


class SourceReadError(VCError):
    """
    Source file could not be read.

    Raised when:
        - The file does not exist or cannot be opened
        - The file is not valid text in the requested encoding
    """

    def __init__(self, filename: str, reason: str):
        self.reason = reason
        super().__init__(
            f"cannot read source file: {reason}",
            filename=filename,
            hint="check the file path and the --encoding setting",
        )
