"""
VC Front End - Scanner and Recogniser for the VC Teaching Language
==================================================================

This package implements the first pass of a compiler for VC, a small
C-like language: a lexical analyzer producing position-tagged tokens
and a recursive descent recogniser that checks them against the
grammar.

Pipeline
--------
    Source text → SourceFile → Scanner → Recogniser → ErrorReporter

Every stage is pull-based: the recogniser asks the scanner for one
token at a time, and the scanner asks the source for one character at
a time (plus a few characters of lookahead).

Quick Start
-----------
Recognise a program:
    >>> from vc_frontend import recognise_source
    >>> reporter = recognise_source("int x; void main() { x = 1; }")
    >>> reporter.num_errors
    0

Scan tokens:
    >>> from vc_frontend import tokenize
    >>> [t.spelling for t in tokenize("x <= 1.5e3")]
    ['x', '<=', '1.5e3', '$']

Or use the command-line tools:
    $ vcscan prog.vc
    $ vcrecog prog.vc

Not Supported
-------------
The recogniser only answers whether the input is well formed. There is
no abstract syntax tree, no symbol table, no type checking and no error
recovery: parsing stops at the first syntax error.
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from vc_frontend.config import FrontendOptions
from vc_frontend.errors import (
    VCError,
    VCSyntaxError,
    SourceReadError,
    SourcePosition,
)
from vc_frontend.reporter import Diagnostic, ErrorReporter
from vc_frontend.source import EOF, SourceFile
from vc_frontend.tokens import KEYWORDS, Token, TokenKind, spell
from vc_frontend.scanner import Scanner, tokenize
from vc_frontend.recogniser import Recogniser, recognise_source

__all__ = [
    # Version info
    "__version__",
    # Configuration
    "FrontendOptions",
    # Exception hierarchy
    "VCError",
    "VCSyntaxError",
    "SourceReadError",
    # Positions and diagnostics
    "SourcePosition",
    "Diagnostic",
    "ErrorReporter",
    # Character source
    "EOF",
    "SourceFile",
    # Tokens
    "KEYWORDS",
    "Token",
    "TokenKind",
    "spell",
    # Scanner
    "Scanner",
    "tokenize",
    # Recogniser
    "Recogniser",
    "recognise_source",
]
