"""
VC Token Definitions
====================

Token kinds, the reserved-word table and the immutable Token value
produced by the scanner.

Token Categories
----------------
- Keywords: continue, else, float, for, if, int, return, void, while
- Boolean literals: true, false
- Identifiers: a letter followed by letters, digits and underscores
- Literals: integer, float, string
- Operators: + - * / ! != = == < <= > >= && ||
- Separators: { } ( ) [ ] ; ,

The BOOLEAN and BREAK kinds exist for the grammar but their spellings are
not reserved: ``boolean`` and ``break`` scan as identifiers.
"""

from dataclasses import dataclass
from enum import Enum, auto

from vc_frontend.errors import SourcePosition


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """Lexical categories the recogniser depends on."""

    # === Keywords ===
    BOOLEAN = auto()        # boolean (not reserved)
    BREAK = auto()          # break (not reserved)
    CONTINUE = auto()       # continue
    ELSE = auto()           # else
    FLOAT = auto()          # float
    FOR = auto()            # for
    IF = auto()             # if
    INT = auto()            # int
    RETURN = auto()         # return
    VOID = auto()           # void
    WHILE = auto()          # while

    # === Operators ===
    PLUS = auto()           # +
    MINUS = auto()          # -
    MULT = auto()           # *
    DIV = auto()            # /
    NOT = auto()            # !
    NOTEQ = auto()          # !=
    EQ = auto()             # = (assignment)
    EQEQ = auto()           # ==
    LT = auto()             # <
    LTEQ = auto()           # <=
    GT = auto()             # >
    GTEQ = auto()           # >=
    ANDAND = auto()         # &&
    OROR = auto()           # ||

    # === Separators ===
    LCURLY = auto()         # {
    RCURLY = auto()         # }
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACKET = auto()       # [
    RBRACKET = auto()       # ]
    SEMICOLON = auto()      # ;
    COMMA = auto()          # ,

    # === Identifiers and Literals ===
    ID = auto()
    INTLITERAL = auto()
    FLOATLITERAL = auto()
    BOOLEANLITERAL = auto()
    STRINGLITERAL = auto()

    # === Special ===
    ERROR = auto()          # unrecognised character or lone & / |
    EOF = auto()            # end of input


# =============================================================================
# Canonical Spellings
# =============================================================================

_SPELLINGS: dict[TokenKind, str] = {
    TokenKind.BOOLEAN: "boolean",
    TokenKind.BREAK: "break",
    TokenKind.CONTINUE: "continue",
    TokenKind.ELSE: "else",
    TokenKind.FLOAT: "float",
    TokenKind.FOR: "for",
    TokenKind.IF: "if",
    TokenKind.INT: "int",
    TokenKind.RETURN: "return",
    TokenKind.VOID: "void",
    TokenKind.WHILE: "while",
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.MULT: "*",
    TokenKind.DIV: "/",
    TokenKind.NOT: "!",
    TokenKind.NOTEQ: "!=",
    TokenKind.EQ: "=",
    TokenKind.EQEQ: "==",
    TokenKind.LT: "<",
    TokenKind.LTEQ: "<=",
    TokenKind.GT: ">",
    TokenKind.GTEQ: ">=",
    TokenKind.ANDAND: "&&",
    TokenKind.OROR: "||",
    TokenKind.LCURLY: "{",
    TokenKind.RCURLY: "}",
    TokenKind.LPAREN: "(",
    TokenKind.RPAREN: ")",
    TokenKind.LBRACKET: "[",
    TokenKind.RBRACKET: "]",
    TokenKind.SEMICOLON: ";",
    TokenKind.COMMA: ",",
    TokenKind.ID: "<id>",
    TokenKind.INTLITERAL: "<int-literal>",
    TokenKind.FLOATLITERAL: "<float-literal>",
    TokenKind.BOOLEANLITERAL: "<boolean-literal>",
    TokenKind.STRINGLITERAL: "<string-literal>",
    TokenKind.ERROR: "<error>",
    TokenKind.EOF: "$",
}


def spell(kind: TokenKind) -> str:
    """Return the canonical spelling of a token kind for diagnostics."""
    return _SPELLINGS[kind]


# =============================================================================
# Keyword Mapping
# =============================================================================

# The single source of truth for reserved words.
KEYWORDS: dict[str, TokenKind] = {
    "true": TokenKind.BOOLEANLITERAL,
    "false": TokenKind.BOOLEANLITERAL,
    "continue": TokenKind.CONTINUE,
    "else": TokenKind.ELSE,
    "float": TokenKind.FLOAT,
    "for": TokenKind.FOR,
    "if": TokenKind.IF,
    "int": TokenKind.INT,
    "return": TokenKind.RETURN,
    "void": TokenKind.VOID,
    "while": TokenKind.WHILE,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single classified token.

    Attributes:
        kind: The TokenKind classification
        spelling: The consumed text; string literals hold their content
            with escapes already translated and without the quotes
        position: Span of the token on its starting line
    """
    kind: TokenKind
    spelling: str
    position: SourcePosition

    def __str__(self) -> str:
        """Format token as one line of the scanner trace."""
        return (
            f"Kind = {self.kind.name} [{spell(self.kind)}], "
            f'spelling = "{self.spelling}", position = {self.position}'
        )

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.spelling!r}, {self.position})"
