"""
VC Recursive Descent Recogniser
===============================

This module checks that the token stream produced by the scanner
conforms to the VC grammar. It builds no tree: the only outcome is
either silence or exactly one syntax diagnostic, for the first grammar
violation found. Parsing stops there.

Grammar (EBNF)
--------------
program         ::= ( type init-decl-list ( "(" func-decl | ";" ) )*
func-decl       ::= para-list compound-stmt
var-decl        ::= init-decl-list ";"
init-decl-list  ::= init-decl ( "," init-decl )*
init-decl       ::= declarator ( "=" initialiser )?
declarator      ::= ID ( "[" INTLITERAL? "]" )?
initialiser     ::= expr | "{" expr ( "," expr )* "}"
para-list       ::= ")" | type declarator ( "," type declarator )* ")"
type            ::= "void" | "int" | "float" | "boolean"

compound-stmt   ::= "{" ( local-type var-decl )* stmt* "}"
stmt            ::= compound-stmt | if-stmt | for-stmt | while-stmt
                  | break-stmt | continue-stmt | return-stmt | expr-stmt
if-stmt         ::= "if" "(" expr ")" stmt ( "else" stmt )?
for-stmt        ::= "for" "(" expr? ";" expr? ";" expr? ")" stmt
while-stmt      ::= "while" "(" expr ")" stmt
break-stmt      ::= "break" ";"
continue-stmt   ::= "continue" ";"
return-stmt     ::= "return" expr? ";"
expr-stmt       ::= expr? ";"

Expression Precedence (lowest to highest, all left-associative)
---------------------------------------------------------------
1. assignment     =
2. logical_or     ||
3. logical_and    &&
4. equality       == !=
5. relational     < <= > >=
6. additive       + -
7. multiplicative * /
8. unary          + - !   (prefix)
9. primary        ID ( "[" expr "]" | arg-list )?, "(" expr ")", literals

Declarations and Function Declarations
--------------------------------------
A top-level declaration is parsed as a type and an init-decl-list.
Only then is the next token examined: "(" turns it into a function
declaration, anything else must be ";". The decision is sound only for
a single non-initialised declarator. ``int f, g ( ) { }`` is therefore
accepted as a function declaration, a known limitation of this scheme.

Example Usage
-------------
>>> from vc_frontend.recogniser import recognise_source
>>> reporter = recognise_source("void main() { return; }")
>>> reporter.num_errors
0
"""

import logging
import sys
import threading
from typing import Callable, Optional

from vc_frontend.errors import VCSyntaxError
from vc_frontend.reporter import ErrorReporter
from vc_frontend.scanner import Scanner
from vc_frontend.source import SourceFile
from vc_frontend.tokens import Token, TokenKind, spell

logger = logging.getLogger(__name__)


# =============================================================================
# Diagnostic Templates
# =============================================================================

TOKEN_EXPECTED = '"%" expected here'
TYPE_EXPECTED = 'type expected here, got "%"'
IDENTIFIER_EXPECTED = 'identifier expected here, got "%"'
ILLEGAL_PRIMARY = 'illegal primary expression "%"'
INT_LITERAL_EXPECTED = 'integer literal expected here, got "%"'
FLOAT_LITERAL_EXPECTED = 'float literal expected here, got "%"'
BOOLEAN_LITERAL_EXPECTED = 'boolean literal expected here, got "%"'
STRING_LITERAL_EXPECTED = 'string literal expected here, got "%"'
NESTING_TOO_DEEP = 'nesting too deep near "%"'


# Token kinds that can start a declaration's type
TYPE_KINDS = frozenset({
    TokenKind.VOID,
    TokenKind.INT,
    TokenKind.FLOAT,
    TokenKind.BOOLEAN,
})

# Types allowed for local variables at the head of a block
LOCAL_TYPE_KINDS = frozenset({
    TokenKind.INT,
    TokenKind.FLOAT,
    TokenKind.BOOLEAN,
})

# Token kinds that can start an expression
EXPRESSION_START_KINDS = frozenset({
    TokenKind.ID,
    TokenKind.INTLITERAL,
    TokenKind.FLOATLITERAL,
    TokenKind.BOOLEANLITERAL,
    TokenKind.STRINGLITERAL,
    TokenKind.PLUS,
    TokenKind.MINUS,
    TokenKind.NOT,
    TokenKind.LPAREN,
})


# =============================================================================
# Nesting Limits
# =============================================================================

# Python frames available while recognising. A parenthesised expression
# costs about eighteen frames per level, a nested block three.
RECURSION_LIMIT = 50_000

# Stack size of the thread the recogniser runs on (256 MiB)
PARSER_STACK_SIZE = 256 * 1024 * 1024


class Recogniser:
    """
    Single-lookahead recursive descent recogniser for VC.

    Each grammar rule is one method. The current token is the only
    lookahead; no token is ever pushed back.

    Attributes:
        scanner: Source of tokens
        reporter: Receives the syntax diagnostic, if any
    """

    def __init__(self, scanner: Scanner, reporter: ErrorReporter):
        """
        Initialize the recogniser and fetch the first token.

        Args:
            scanner: Scanner positioned at the start of the input
            reporter: Diagnostic sink shared with the scanner
        """
        self.scanner = scanner
        self.reporter = reporter
        self._current: Token = scanner.get_token()

    def parse_program(self) -> bool:
        """
        Recognise the whole token stream.

        Never raises. At most one syntax diagnostic is reported.

        The parse runs on a worker thread with a large stack and a
        raised recursion limit, so nesting depth is bounded by
        RECURSION_LIMIT rather than the interpreter default.

        Returns:
            True if the input matched the grammar, False after a syntax error
        """
        return _run_with_deep_stack(self._parse_declarations)

    def _parse_declarations(self) -> bool:
        """Parse every top-level declaration, stopping at the first error."""
        try:
            while self._current.kind != TokenKind.EOF:
                self._parse_type()
                self._parse_init_declarator_list()
                if self._current.kind == TokenKind.LPAREN:
                    self._accept()
                    self._parse_function_declaration()
                else:
                    self._match(TokenKind.SEMICOLON)
        except VCSyntaxError as e:
            logger.debug(f"Parsing abandoned: {e.message} at {e.position}")
            return False
        except RecursionError:
            self.reporter.report_error(
                NESTING_TOO_DEEP, self._current.spelling, self._current.position
            )
            logger.debug(f"Parsing abandoned: recursion limit reached at {self._current.position}")
            return False

        return True

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _accept(self) -> None:
        """Move past the current token unconditionally."""
        self._current = self.scanner.get_token()

    def _check(self, *kinds: TokenKind) -> bool:
        """Check if the current token is one of the given kinds."""
        return self._current.kind in kinds

    def _match(self, expected: TokenKind) -> None:
        """
        Move past the current token if it has the expected kind.

        Raises:
            VCSyntaxError: After reporting '"<expected>" expected here'
        """
        if self._current.kind == expected:
            self._current = self.scanner.get_token()
        else:
            self._syntax_error(TOKEN_EXPECTED, spell(expected))

    def _syntax_error(self, template: str, token_quoted: str) -> None:
        """
        Report a syntax error at the current token and abort parsing.

        Raises:
            VCSyntaxError: Always
        """
        position = self._current.position
        diagnostic = self.reporter.report_error(template, token_quoted, position)
        raise VCSyntaxError(diagnostic.message, position, self.scanner.filename)

    # =========================================================================
    # Declaration Parsing
    # =========================================================================

    def _parse_function_declaration(self) -> None:
        """Parse the rest of a function after its opening '('."""
        self._parse_parameter_list()
        self._parse_compound_statement()

    def _parse_local_declarations(self) -> None:
        """Parse the variable declarations at the start of a block."""
        while self._current.kind in LOCAL_TYPE_KINDS:
            self._accept()
            self._parse_variable_declaration()

    def _parse_variable_declaration(self) -> None:
        self._parse_init_declarator_list()
        self._match(TokenKind.SEMICOLON)

    def _parse_init_declarator_list(self) -> None:
        self._parse_init_declarator()
        while self._check(TokenKind.COMMA):
            self._accept()
            self._parse_init_declarator()

    def _parse_init_declarator(self) -> None:
        self._parse_declarator()
        if self._check(TokenKind.EQ):
            self._accept_operator()
            self._parse_initialiser()

    def _parse_initialiser(self) -> None:
        """Parse a scalar initialiser or a braced list of expressions."""
        if self._check(TokenKind.LCURLY):
            self._accept()
            self._parse_expression()
            while not self._check(TokenKind.RCURLY):
                self._match(TokenKind.COMMA)
                self._parse_expression()
            self._accept()
        else:
            self._parse_expression()

    def _parse_parameter_list(self) -> None:
        """Parse parameters after '(' up to and including ')'."""
        if self._check(TokenKind.RPAREN):
            self._accept()
            return

        self._parse_type()
        self._parse_declarator()
        while self._check(TokenKind.COMMA):
            self._accept()
            self._parse_type()
            self._parse_declarator()
        self._match(TokenKind.RPAREN)

    def _parse_declarator(self) -> None:
        """Parse an identifier with an optional array suffix [N] or []."""
        self._parse_identifier()
        if self._check(TokenKind.LBRACKET):
            self._accept()
            if not self._check(TokenKind.RBRACKET):
                self._parse_int_literal()
            self._match(TokenKind.RBRACKET)

    def _parse_type(self) -> None:
        if self._current.kind in TYPE_KINDS:
            self._accept()
        else:
            self._syntax_error(TYPE_EXPECTED, self._current.spelling)

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_compound_statement(self) -> None:
        """Parse a block: '{' local declarations, statements '}'."""
        self._match(TokenKind.LCURLY)
        self._parse_local_declarations()
        self._parse_statement_list()
        self._match(TokenKind.RCURLY)

    def _parse_statement_list(self) -> None:
        # End of input is caught by the expression statement's ';' check
        while not self._check(TokenKind.RCURLY):
            self._parse_statement()

    def _parse_statement(self) -> None:
        """Parse any statement."""
        kind = self._current.kind

        if kind == TokenKind.LCURLY:
            self._parse_compound_statement()
        elif kind == TokenKind.IF:
            self._parse_if_statement()
        elif kind == TokenKind.FOR:
            self._parse_for_statement()
        elif kind == TokenKind.WHILE:
            self._parse_while_statement()
        elif kind == TokenKind.BREAK:
            self._parse_break_statement()
        elif kind == TokenKind.CONTINUE:
            self._parse_continue_statement()
        elif kind == TokenKind.RETURN:
            self._parse_return_statement()
        else:
            self._parse_expression_statement()

    def _parse_if_statement(self) -> None:
        self._match(TokenKind.IF)
        self._match(TokenKind.LPAREN)
        self._parse_expression()
        self._match(TokenKind.RPAREN)
        self._parse_statement()
        if self._check(TokenKind.ELSE):
            self._accept()
            self._parse_statement()

    def _parse_for_statement(self) -> None:
        """Parse for statement; each of the three clauses is optional."""
        self._match(TokenKind.FOR)
        self._match(TokenKind.LPAREN)
        if not self._check(TokenKind.SEMICOLON):
            self._parse_expression()
        self._match(TokenKind.SEMICOLON)
        if not self._check(TokenKind.SEMICOLON):
            self._parse_expression()
        self._match(TokenKind.SEMICOLON)
        if not self._check(TokenKind.RPAREN):
            self._parse_expression()
        self._match(TokenKind.RPAREN)
        self._parse_statement()

    def _parse_while_statement(self) -> None:
        self._match(TokenKind.WHILE)
        self._match(TokenKind.LPAREN)
        self._parse_expression()
        self._match(TokenKind.RPAREN)
        self._parse_statement()

    def _parse_break_statement(self) -> None:
        self._match(TokenKind.BREAK)
        self._match(TokenKind.SEMICOLON)

    def _parse_continue_statement(self) -> None:
        self._match(TokenKind.CONTINUE)
        self._match(TokenKind.SEMICOLON)

    def _parse_return_statement(self) -> None:
        self._match(TokenKind.RETURN)
        if not self._check(TokenKind.SEMICOLON):
            self._parse_expression()
        self._match(TokenKind.SEMICOLON)

    def _parse_expression_statement(self) -> None:
        """Parse 'expr ;' or the empty statement ';'."""
        if self._current.kind in EXPRESSION_START_KINDS:
            self._parse_expression()
        self._match(TokenKind.SEMICOLON)

    # =========================================================================
    # Expression Parsing (Operator Precedence)
    # =========================================================================

    def _accept_operator(self) -> None:
        """Move past an operator token."""
        self._current = self.scanner.get_token()

    def _parse_expression(self) -> None:
        self._parse_assignment()

    def _parse_assignment(self) -> None:
        """Parse assignment expression (=)."""
        self._parse_binary(self._parse_logical_or, {TokenKind.EQ})

    def _parse_logical_or(self) -> None:
        """Parse logical OR expression (||)."""
        self._parse_binary(self._parse_logical_and, {TokenKind.OROR})

    def _parse_logical_and(self) -> None:
        """Parse logical AND expression (&&)."""
        self._parse_binary(self._parse_equality, {TokenKind.ANDAND})

    def _parse_equality(self) -> None:
        """Parse equality expression (== !=)."""
        self._parse_binary(
            self._parse_relational,
            {TokenKind.EQEQ, TokenKind.NOTEQ},
        )

    def _parse_relational(self) -> None:
        """Parse relational expression (< <= > >=)."""
        self._parse_binary(
            self._parse_additive,
            {TokenKind.LT, TokenKind.LTEQ, TokenKind.GT, TokenKind.GTEQ},
        )

    def _parse_additive(self) -> None:
        """Parse additive expression (+ -)."""
        self._parse_binary(
            self._parse_multiplicative,
            {TokenKind.PLUS, TokenKind.MINUS},
        )

    def _parse_multiplicative(self) -> None:
        """Parse multiplicative expression (* /)."""
        self._parse_binary(
            self._parse_unary,
            {TokenKind.MULT, TokenKind.DIV},
        )

    def _parse_binary(
        self,
        operand_parser: Callable[[], None],
        operators: set[TokenKind],
    ) -> None:
        """
        Generic left-associative binary expression parser.

        Args:
            operand_parser: Parses one operand at the next higher precedence
            operators: Token kinds that are operators at this level
        """
        operand_parser()

        while self._current.kind in operators:
            self._accept_operator()
            operand_parser()

    def _parse_unary(self) -> None:
        """Parse unary expression (prefix + - !)."""
        if self._check(TokenKind.PLUS, TokenKind.MINUS, TokenKind.NOT):
            self._accept_operator()
            self._parse_unary()
        else:
            self._parse_primary()

    def _parse_primary(self) -> None:
        """Parse primary expression (identifiers, literals, parenthesized)."""
        kind = self._current.kind

        if kind == TokenKind.ID:
            self._parse_identifier()
            if self._check(TokenKind.LBRACKET):
                self._accept()
                self._parse_expression()
                self._match(TokenKind.RBRACKET)
            elif self._check(TokenKind.LPAREN):
                self._parse_argument_list()
        elif kind == TokenKind.LPAREN:
            self._accept()
            self._parse_expression()
            self._match(TokenKind.RPAREN)
        elif kind == TokenKind.INTLITERAL:
            self._parse_int_literal()
        elif kind == TokenKind.FLOATLITERAL:
            self._parse_float_literal()
        elif kind == TokenKind.BOOLEANLITERAL:
            self._parse_boolean_literal()
        elif kind == TokenKind.STRINGLITERAL:
            self._parse_string_literal()
        else:
            self._syntax_error(ILLEGAL_PRIMARY, self._current.spelling)

    def _parse_argument_list(self) -> None:
        """Parse '(' arguments ')' of a call."""
        self._match(TokenKind.LPAREN)
        if self._check(TokenKind.RPAREN):
            self._accept()
            return

        self._parse_expression()
        while self._check(TokenKind.COMMA):
            self._accept()
            self._parse_expression()
        self._match(TokenKind.RPAREN)

    # =========================================================================
    # Identifiers and Literals
    # =========================================================================

    def _parse_identifier(self) -> None:
        self._expect_kind(TokenKind.ID, IDENTIFIER_EXPECTED)

    def _parse_int_literal(self) -> None:
        self._expect_kind(TokenKind.INTLITERAL, INT_LITERAL_EXPECTED)

    def _parse_float_literal(self) -> None:
        self._expect_kind(TokenKind.FLOATLITERAL, FLOAT_LITERAL_EXPECTED)

    def _parse_boolean_literal(self) -> None:
        self._expect_kind(TokenKind.BOOLEANLITERAL, BOOLEAN_LITERAL_EXPECTED)

    def _parse_string_literal(self) -> None:
        self._expect_kind(TokenKind.STRINGLITERAL, STRING_LITERAL_EXPECTED)

    def _expect_kind(self, kind: TokenKind, template: str) -> None:
        """
        Move past a token of the given kind.

        Unlike _match, the diagnostic names the kind that was found
        rather than the one expected.
        """
        if self._current.kind == kind:
            self._current = self.scanner.get_token()
        else:
            self._syntax_error(template, spell(self._current.kind))


# =============================================================================
# Deep Recursion Support
# =============================================================================

def _run_with_deep_stack(func: Callable[[], bool]) -> bool:
    """
    Call func on a thread with PARSER_STACK_SIZE bytes of stack and
    the recursion limit raised to RECURSION_LIMIT.

    Both settings are process-wide and are restored before returning.
    If the platform refuses the larger stack, func runs on the calling
    thread with the current limits.

    Raises:
        Whatever func raises, re-raised on the calling thread
    """
    try:
        previous_stack_size = threading.stack_size(PARSER_STACK_SIZE)
    except (RuntimeError, ValueError) as e:
        logger.debug(f"Thread stack size not adjustable ({e}), parsing on calling thread")
        return func()

    outcome = {}

    def target() -> None:
        try:
            outcome["result"] = func()
        except BaseException as e:
            outcome["error"] = e

    worker = threading.Thread(target=target, name="vc-recogniser")
    previous_limit = sys.getrecursionlimit()
    sys.setrecursionlimit(max(previous_limit, RECURSION_LIMIT))
    try:
        worker.start()
        worker.join()
    except RuntimeError as e:
        logger.debug(f"Cannot start recogniser thread ({e}), parsing on calling thread")
        worker = None
    finally:
        threading.stack_size(previous_stack_size)
        sys.setrecursionlimit(previous_limit)

    if worker is None:
        return func()

    if "error" in outcome:
        raise outcome["error"]
    return outcome["result"]


# =============================================================================
# Convenience Functions
# =============================================================================

def recognise_source(
    text: str,
    filename: str = "<input>",
    reporter: Optional[ErrorReporter] = None,
) -> ErrorReporter:
    """
    Scan and recognise VC source code.

    Args:
        text: The VC source code
        filename: Source name used in diagnostics
        reporter: Diagnostic sink (a new reporter printing to standard
            output if None)

    Returns:
        The reporter, holding every lexical and syntax diagnostic
    """
    if reporter is None:
        reporter = ErrorReporter()
    scanner = Scanner(SourceFile(text, filename), reporter)
    Recogniser(scanner, reporter).parse_program()
    return reporter
