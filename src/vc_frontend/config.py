"""
VC Front End - Configuration
============================

Options shared by the scanner and the command-line drivers.
Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied on top by the CLI)
"""

from dataclasses import dataclass
import os

# Columns between tab stops
DEFAULT_TAB_SIZE = 8


@dataclass
class FrontendOptions:
    """
    Front-end configuration.

    Attributes:
        tab_size: Distance between tab stops; a tab moves the column to
            the next multiple of tab_size, plus one (default: 8)
        trace_tokens: Print every token the scanner returns (default: False)
        encoding: Encoding used to read source files (default: "utf-8")
    """

    tab_size: int = DEFAULT_TAB_SIZE
    trace_tokens: bool = False
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls) -> "FrontendOptions":
        """
        Create FrontendOptions from environment variables.

        Environment variables (all optional):
            VC_TAB_SIZE: Tab stop distance (positive integer)
            VC_TRACE_TOKENS: "1", "true" or "yes" enables the token trace
            VC_ENCODING: Source file encoding

        Returns:
            FrontendOptions with values from environment variables
        """
        options = cls()

        if tab_size := os.environ.get("VC_TAB_SIZE"):
            try:
                value = int(tab_size)
            except ValueError:
                value = 0
            if value > 0:
                options.tab_size = value

        if trace := os.environ.get("VC_TRACE_TOKENS"):
            options.trace_tokens = trace.strip().lower() in ("1", "true", "yes")

        if encoding := os.environ.get("VC_ENCODING"):
            options.encoding = encoding

        return options
