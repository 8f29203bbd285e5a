"""
VC Scanner (Lexical Analyzer)
=============================

This module converts VC source text into classified, position-tagged
tokens, one token per call to Scanner.get_token().

Classification
--------------
Every decision is made by looking ahead through the character source
without consuming anything; characters are consumed only once the kind
and length of the token are known.

- Keywords: the maximal run of letters is measured, then looked up in
  the keyword table. A match only counts when the run is not followed
  by a digit or underscore, so ``for1`` is an identifier.
- Numbers: ``123`` is an integer; a decimal point or an exponent
  (``e``/``E`` with optional sign and at least one digit) makes a float.
  ``1e`` is the integer ``1`` followed by the identifier ``e``.
- Strings: the quotes are not part of the spelling and the escapes
  ``\\b \\f \\n \\r \\t \\' \\" \\\\`` are translated.
- Operators: ``!= == <= >= && ||`` are recognised by one character of
  lookahead. A lone ``&`` or ``|`` is an ERROR token.

Positions
---------
Lines and columns are 1-indexed. A tab advances the column to the next
multiple of the tab size, plus one.

Lexical Errors
--------------
Illegal escapes and unterminated strings are reported to the
ErrorReporter as soon as they are found. Scanning always continues and
the (possibly partial) string literal is still returned.

Example Usage
-------------
>>> from vc_frontend.scanner import tokenize
>>> for token in tokenize('int x = 1;'):
...     print(repr(token))
Token(INT, 'int', 1(1)..1(3))
Token(ID, 'x', 1(5)..1(5))
Token(EQ, '=', 1(7)..1(7))
Token(INTLITERAL, '1', 1(9)..1(9))
Token(SEMICOLON, ';', 1(10)..1(10))
Token(EOF, '$', 1(11)..1(10))
"""

import logging
import string
from typing import Iterator, Optional, TextIO

from vc_frontend.config import DEFAULT_TAB_SIZE
from vc_frontend.errors import SourcePosition
from vc_frontend.reporter import ErrorReporter
from vc_frontend.source import EOF, SourceFile
from vc_frontend.tokens import KEYWORDS, Token, TokenKind, spell

logger = logging.getLogger(__name__)


# =============================================================================
# Diagnostic Templates
# =============================================================================

ILLEGAL_ESCAPE = "%: illegal escape character"
UNTERMINATED_STRING = "%: unterminated string"


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Pull-based tokenizer for VC.

    Usage:
        scanner = Scanner(SourceFile(text), ErrorReporter())
        token = scanner.get_token()

    The scanner owns its position counters and the spelling buffer of
    the token being built; nothing is shared with other objects.
    """

    LETTERS = string.ascii_letters
    DIGITS = string.digits

    # Characters that can continue an identifier
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    # Escape sequences in string literals
    ESCAPE_SEQUENCES = {
        "b": "\b",      # Backspace
        "f": "\f",      # Form feed
        "n": "\n",      # Newline
        "r": "\r",      # Carriage return
        "t": "\t",      # Tab
        "'": "'",       # Single quote
        '"': '"',       # Double quote
        "\\": "\\",     # Backslash
    }

    SINGLE_CHAR_TOKENS = {
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "*": TokenKind.MULT,
        "/": TokenKind.DIV,
        "{": TokenKind.LCURLY,
        "}": TokenKind.RCURLY,
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
        "[": TokenKind.LBRACKET,
        "]": TokenKind.RBRACKET,
        ";": TokenKind.SEMICOLON,
        ",": TokenKind.COMMA,
    }

    def __init__(
        self,
        source: SourceFile,
        reporter: ErrorReporter,
        tab_size: int = DEFAULT_TAB_SIZE,
    ):
        """
        Initialize the scanner and read the first character.

        Args:
            source: Character source to read from
            reporter: Receives lexical diagnostics
            tab_size: Distance between tab stops
        """
        self._source = source
        self._reporter = reporter
        self._tab_size = tab_size

        self._debug = False
        self._trace: Optional[TextIO] = None

        self._current_char = source.next_char()
        self._line = 1
        self._column = 1
        self._spelling: list[str] = []

    @property
    def filename(self) -> str:
        """Name of the source being scanned."""
        return self._source.filename

    def enable_debugging(self, stream: Optional[TextIO] = None) -> None:
        """
        Print every token returned by get_token().

        Args:
            stream: Where the trace goes (standard output if None)
        """
        self._debug = True
        self._trace = stream

    def get_token(self) -> Token:
        """
        Return the next token, skipping whitespace and comments.

        Once the input is exhausted every call returns an EOF token.
        """
        self._skip_space_and_comments()

        self._spelling = []
        line = self._line
        col_start = self._column

        kind = self._next_token()

        position = SourcePosition(line, col_start, self._column - 1)
        token = Token(kind, "".join(self._spelling), position)

        if self._debug:
            print(token, file=self._trace)
        return token

    def tokens(self) -> Iterator[Token]:
        """Yield tokens up to and including the EOF token."""
        while True:
            token = self.get_token()
            yield token
            if token.kind == TokenKind.EOF:
                return

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _char_at(self, offset: int) -> str:
        """Return the current character (offset 0) or a lookahead character."""
        if offset == 0:
            return self._current_char
        return self._source.peek(offset)

    def _is_letter(self, char: str) -> bool:
        return char != EOF and char in self.LETTERS

    def _is_digit(self, char: str) -> bool:
        return char != EOF and char in self.DIGITS

    def _continues_identifier(self, char: str) -> bool:
        return char != EOF and char in self.IDENT_CHARS

    def _advance_column(self, char: str) -> None:
        if char == "\t":
            self._column = ((self._column - 1) // self._tab_size + 1) * self._tab_size + 1
        else:
            self._column += 1

    def _accept(self) -> None:
        """Append the current character to the spelling and move on."""
        self._spelling.append(self._current_char)
        self._advance_column(self._current_char)
        self._current_char = self._source.next_char()

    def _skip(self) -> None:
        """Move past the current character without recording it."""
        self._advance_column(self._current_char)
        self._current_char = self._source.next_char()

    def _newline(self) -> None:
        self._line += 1
        self._column = 1
        self._current_char = self._source.next_char()

    def _match(self, expected: str) -> bool:
        """Accept the current character if it is the expected one."""
        if self._current_char == expected:
            self._accept()
            return True
        return False

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_space_and_comments(self) -> None:
        while True:
            char = self._current_char

            if char == " " or char == "\t":
                self._skip()
            elif char == "\n":
                self._newline()
            elif char == "/" and self._char_at(1) == "/":
                self._skip_line_comment()
            elif char == "/" and self._char_at(1) == "*":
                self._skip_block_comment()
            else:
                return

    def _skip_line_comment(self) -> None:
        """Skip a // comment up to, but not including, the newline."""
        while self._current_char not in ("\n", EOF):
            self._skip()

    def _skip_block_comment(self) -> None:
        """
        Skip a /* ... */ comment.

        An unterminated comment silently runs to the end of input.
        """
        start = (self._line, self._column)

        # Consume the /*
        self._skip()
        self._skip()

        while self._current_char != EOF:
            if self._current_char == "*" and self._char_at(1) == "/":
                self._skip()
                self._skip()
                return
            if self._current_char == "\n":
                self._newline()
            else:
                self._skip()

        logger.debug(f"Block comment opened at {start[0]}({start[1]}) is not terminated")

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _next_token(self) -> TokenKind:
        """Classify and consume one token, returning its kind."""
        char = self._current_char

        if self._is_letter(char):
            return self._scan_identifier()

        if self._is_digit(char) or (char == "." and self._is_digit(self._char_at(1))):
            return self._scan_number()

        if char == '"':
            return self._scan_string()

        if char == EOF:
            self._spelling.append(spell(TokenKind.EOF))
            return TokenKind.EOF

        return self._scan_operator()

    def _scan_identifier(self) -> TokenKind:
        """
        Scan a keyword, boolean literal or identifier.

        The letter run is measured first; only a run that is a complete
        word in the keyword table is consumed as a keyword. Anything else
        is consumed as an identifier, which also absorbs digits and
        underscores.
        """
        length = 1
        while self._is_letter(self._char_at(length)):
            length += 1

        word = "".join(self._char_at(i) for i in range(length))
        kind = KEYWORDS.get(word)

        if kind is not None and not self._continues_identifier(self._char_at(length)):
            for _ in range(length):
                self._accept()
            return kind

        while self._continues_identifier(self._current_char):
            self._accept()
        return TokenKind.ID

    def _scan_number(self) -> TokenKind:
        """
        Scan an integer or float literal.

        The literal length is measured by lookahead, allowing at most one
        decimal point and one exponent. A decimal point after the exponent
        ends the literal. An exponent marker is only part of the literal
        when a digit follows it, directly or after a sign.
        """
        seen_dot = self._current_char == "."
        seen_exponent = False
        kind = TokenKind.FLOATLITERAL if seen_dot else TokenKind.INTLITERAL

        length = 1
        while True:
            char = self._char_at(length)

            if self._is_digit(char):
                length += 1
                continue

            if char == "." and not seen_dot and not seen_exponent:
                seen_dot = True
                kind = TokenKind.FLOATLITERAL
                length += 1
                continue

            if char in ("e", "E") and not seen_exponent:
                digit_at = length + 1
                if self._char_at(digit_at) in ("+", "-"):
                    digit_at += 1
                if self._is_digit(self._char_at(digit_at)):
                    seen_exponent = True
                    kind = TokenKind.FLOATLITERAL
                    length = digit_at + 1
                    continue

            break

        for _ in range(length):
            self._accept()
        return kind

    def _scan_string(self) -> TokenKind:
        """
        Scan a double-quoted string literal.

        A newline (or end of input) before the closing quote is reported
        as an unterminated string and ends the token without consuming
        the newline.
        """
        start_column = self._column
        self._skip()  # opening "

        while True:
            char = self._current_char

            if char == '"':
                self._skip()  # closing "
                break

            if char == "\n" or char == EOF:
                self._reporter.report_error(
                    UNTERMINATED_STRING,
                    "".join(self._spelling),
                    SourcePosition(self._line, start_column, start_column),
                )
                break

            if char == "\\":
                self._scan_escape_sequence()
            else:
                self._accept()

        return TokenKind.STRINGLITERAL

    def _scan_escape_sequence(self) -> None:
        """
        Translate the escape sequence starting at the current backslash.

        An unknown escape is reported and both characters are kept
        verbatim. A backslash at the end of a line is kept as-is and the
        string is then reported as unterminated.
        """
        escaped = self._char_at(1)

        if escaped in self.ESCAPE_SEQUENCES:
            self._skip()  # backslash
            self._spelling.append(self.ESCAPE_SEQUENCES[escaped])
            self._skip()
            return

        if escaped == "\n" or escaped == EOF:
            self._accept()
            return

        column = self._column
        self._reporter.report_error(
            ILLEGAL_ESCAPE,
            "\\" + escaped,
            SourcePosition(self._line, column, column + 1),
        )
        self._accept()
        self._accept()

    def _scan_operator(self) -> TokenKind:
        """Scan an operator or separator; anything unknown is an ERROR token."""
        char = self._current_char
        self._accept()

        if char == "!":
            return TokenKind.NOTEQ if self._match("=") else TokenKind.NOT

        if char == "=":
            return TokenKind.EQEQ if self._match("=") else TokenKind.EQ

        if char == "<":
            return TokenKind.LTEQ if self._match("=") else TokenKind.LT

        if char == ">":
            return TokenKind.GTEQ if self._match("=") else TokenKind.GT

        if char == "&":
            return TokenKind.ANDAND if self._match("&") else TokenKind.ERROR

        if char == "|":
            return TokenKind.OROR if self._match("|") else TokenKind.ERROR

        return self.SINGLE_CHAR_TOKENS.get(char, TokenKind.ERROR)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(
    text: str,
    filename: str = "<input>",
    reporter: Optional[ErrorReporter] = None,
) -> list[Token]:
    """
    Scan a complete source string.

    Args:
        text: The VC source code
        filename: Source name used in diagnostics
        reporter: Receives lexical diagnostics (a new reporter printing
            to standard output if None)

    Returns:
        Every token, ending with the EOF token
    """
    if reporter is None:
        reporter = ErrorReporter()
    scanner = Scanner(SourceFile(text, filename), reporter)
    return list(scanner.tokens())
