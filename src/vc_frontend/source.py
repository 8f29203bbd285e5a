"""
Character Source
================

Supplies the scanner with one character at a time plus bounded forward
lookahead. End of input is signalled by the EOF sentinel (the empty
string), which is returned for every read past the last character.

Example Usage
-------------
>>> src = SourceFile("int x;")
>>> src.next_char()
'i'
>>> src.peek(1), src.peek(2)
('n', 't')
>>> src.next_char()
'n'
"""

import logging
from pathlib import Path
from typing import Union

from vc_frontend.errors import SourceReadError

logger = logging.getLogger(__name__)

# Returned for any character position past the end of input.
EOF = ""


class SourceFile:
    """
    In-memory character source with non-destructive lookahead.

    Attributes:
        text: The complete source text
        filename: Name used in diagnostics ("<input>" for string input)
    """

    def __init__(self, text: str, filename: str = "<input>"):
        # Same newline handling as a file opened in text mode
        self.text = text.replace("\r\n", "\n").replace("\r", "\n")
        self.filename = filename

        # Index of the next character next_char() will return
        self._pos = 0

    @classmethod
    def from_path(cls, path: Union[str, Path], encoding: str = "utf-8") -> "SourceFile":
        """
        Read a source file from disk.

        Windows line endings arrive as a single newline.

        Raises:
            SourceReadError: If the file cannot be read or decoded
        """
        path = Path(path)
        try:
            text = path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(str(path), str(e)) from e

        logger.debug(f"Read {len(text)} characters from {path}")
        return cls(text, str(path))

    def next_char(self) -> str:
        """Consume and return the next character, or EOF past the end."""
        if self._pos >= len(self.text):
            return EOF
        char = self.text[self._pos]
        self._pos += 1
        return char

    def peek(self, n: int) -> str:
        """
        Look at the n-th character after the last one consumed.

        peek(1) is the character the next call to next_char() would
        return. Neither the position nor any other state is changed.

        Args:
            n: Lookahead distance, 1-indexed

        Returns:
            The character, or EOF if fewer than n characters remain
        """
        pos = self._pos + n - 1
        if pos >= len(self.text):
            return EOF
        return self.text[pos]
