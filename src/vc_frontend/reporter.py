"""
Diagnostic Sink
===============

Receives every diagnostic produced by the scanner and the recogniser,
writes it immediately as one line, and keeps a record for callers.

Line Format
-----------
    ERROR: line(col_start)..line(col_end): message

The message is built from a template containing exactly one ``%``
placeholder, substituted with the quoted token text:

    template  '"%" expected here'
    token     ';'
    message   '";" expected here'
"""

import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from vc_frontend.errors import SourcePosition


@dataclass(frozen=True)
class Diagnostic:
    """One reported error."""
    template: str
    message: str
    position: SourcePosition

    def __str__(self) -> str:
        return f"ERROR: {self.position}: {self.message}"


class ErrorReporter:
    """
    Collects and prints diagnostics.

    Args:
        stream: Where each diagnostic line is written as soon as it is
            reported. Defaults to standard output; None keeps the
            reporter silent (the diagnostics are still recorded).
    """

    _DEFAULT = object()

    def __init__(self, stream: Optional[TextIO] = _DEFAULT):
        if stream is ErrorReporter._DEFAULT:
            stream = sys.stdout
        self._stream = stream
        self.diagnostics: list[Diagnostic] = []

    @property
    def num_errors(self) -> int:
        """Number of diagnostics reported so far."""
        return len(self.diagnostics)

    def report_error(self, template: str, token_quoted: str, position: SourcePosition) -> Diagnostic:
        """
        Report a diagnostic.

        Args:
            template: Message with a single '%' placeholder
            token_quoted: Text substituted for the placeholder
            position: Source span the diagnostic refers to

        Returns:
            The recorded Diagnostic
        """
        message = template.replace("%", token_quoted, 1)
        diagnostic = Diagnostic(template=template, message=message, position=position)
        self.diagnostics.append(diagnostic)

        if self._stream is not None:
            print(diagnostic, file=self._stream)

        return diagnostic
