"""
VC Recogniser Test Suite
========================

Tests for the recursive descent recogniser: accepted programs, the
single diagnostic produced for rejected programs, and the
declaration/function-declaration decision.
"""

import sys

import pytest

from vc_frontend.errors import SourcePosition
from vc_frontend.recogniser import (
    IDENTIFIER_EXPECTED,
    ILLEGAL_PRIMARY,
    INT_LITERAL_EXPECTED,
    NESTING_TOO_DEEP,
    TOKEN_EXPECTED,
    TYPE_EXPECTED,
    Recogniser,
    recognise_source,
)
from vc_frontend.reporter import ErrorReporter
from vc_frontend.scanner import UNTERMINATED_STRING, Scanner
from vc_frontend.source import SourceFile


# =============================================================================
# Helper Functions
# =============================================================================

def recognise(source: str):
    """Run the recogniser; return (parse result, reporter)."""
    reporter = ErrorReporter(stream=None)
    scanner = Scanner(SourceFile(source, "<test>"), reporter)
    ok = Recogniser(scanner, reporter).parse_program()
    return ok, reporter


def assert_accepted(source: str) -> None:
    ok, reporter = recognise(source)
    assert ok, [str(d) for d in reporter.diagnostics]
    assert reporter.num_errors == 0


def single_diagnostic(source: str):
    """Return the one diagnostic a rejected program must produce."""
    ok, reporter = recognise(source)
    assert not ok
    assert reporter.num_errors == 1
    return reporter.diagnostics[0]


# =============================================================================
# Declaration Tests
# =============================================================================

class TestDeclarations:
    """Top-level variable and function declarations."""

    def test_empty_program(self):
        assert_accepted("")

    def test_comment_only_program(self):
        assert_accepted("/* nothing here */ // at all\n")

    def test_empty_main(self):
        assert_accepted("void main ( ) { }")

    def test_main_with_return(self):
        assert_accepted("void main ( ) { return ; }")

    def test_variable_declaration(self):
        assert_accepted("int x ;")

    def test_function_declaration(self):
        """A single declarator followed by '(' is a function declaration."""
        assert_accepted("int x ( ) { }")

    def test_declarator_list(self):
        assert_accepted("int a, b = 2, c[10], d[] = {1, 2, 3};")

    def test_float_and_void_types(self):
        assert_accepted("float f = 1.5e3; void g() {}")

    def test_array_function_name(self):
        """An array declarator before '(' is still taken as a function."""
        assert_accepted("int a[3] () { }")

    def test_parameters(self):
        assert_accepted("float area(float w, float h, int counts[]) { return w * h; }")

    def test_several_declarations(self):
        assert_accepted(
            "int count;\n"
            "float scale = 2.0;\n"
            "int max(int a, int b) {\n"
            "    if (a > b) return a; else return b;\n"
            "}\n"
            "void main() {\n"
            "    int i, total = 0;\n"
            "    for (i = 0; i < 10; i = i + 1)\n"
            "        total = total + max(i, count);\n"
            "}\n"
        )

    def test_initialiser_list_requires_expression(self):
        diagnostic = single_diagnostic("int a[] = { };")
        assert diagnostic.template == ILLEGAL_PRIMARY
        assert diagnostic.message == 'illegal primary expression "}"'

    def test_boolean_is_not_reserved(self):
        """'boolean' scans as an identifier, so it cannot start a declaration."""
        diagnostic = single_diagnostic("boolean b;")
        assert diagnostic.template == TYPE_EXPECTED
        assert diagnostic.message == 'type expected here, got "boolean"'


class TestDeclaratorListBeforeParenthesis:
    """A declarator list followed by '(' is taken as a function declaration."""

    @pytest.mark.parametrize("source", [
        "int f, g ( ) { }",
        "int x = 1 ( ) { }",
        "int a, b[2] (int c) { return c; }",
    ])
    def test_list_is_accepted_as_function(self, source):
        assert_accepted(source)


# =============================================================================
# Statement Tests
# =============================================================================

class TestStatements:
    """Statement forms inside function bodies."""

    @pytest.mark.parametrize("body", [
        "",
        ";",
        ";;;",
        "{ }",
        "{ { ; } }",
        "x = 1;",
        "f();",
        "return;",
        "return x + 1;",
        "if (x) y = 1;",
        "if (x) y = 1; else y = 2;",
        "if (a) if (b) x = 1; else x = 2;",
        "while (i < 10) i = i + 1;",
        "while (true) { continue; }",
        "for (;;) ;",
        "for (i = 0; ; ) ;",
        "for (; i < 10; ) ;",
        "for (; ; i = i + 1) ;",
        "for (i = 0; i < n; i = i + 1) { total = total + i; }",
        "break;",
    ])
    def test_statement(self, body):
        assert_accepted("void f() { " + body + " }")

    def test_local_declarations(self):
        assert_accepted("void f() { int i; float g = 1.0, h[2]; i = 1; }")

    def test_nested_block_declarations(self):
        assert_accepted("void f() { { int x; x = 2; } }")

    def test_void_local_is_not_a_declaration(self):
        """Only int and float locals are recognised at the head of a block."""
        diagnostic = single_diagnostic("void f() { void x; }")
        assert diagnostic.message == '";" expected here'

    def test_declaration_after_statement(self):
        diagnostic = single_diagnostic("void f() { x = 1; int y; }")
        assert diagnostic.message == '";" expected here'
        assert diagnostic.position == SourcePosition(1, 19, 21)


# =============================================================================
# Expression Tests
# =============================================================================

class TestExpressions:
    """Expression cascade and primary expressions."""

    @pytest.mark.parametrize("expression", [
        "x = y = 3",
        "a || b && c == d != e < f <= g > h >= i + j - k * l / m",
        "-+!x",
        "!(a && b) || c",
        "f(1, 2.0, true, \"s\")",
        "a[i + 1] = f()",
        "((1))",
        "1.5e-3 * -2",
        "\"text\"",
        "false",
        "g(h(1), a[b[2]])",
    ])
    def test_expression(self, expression):
        assert_accepted("void f() { " + expression + "; }")

    def test_missing_operand(self):
        diagnostic = single_diagnostic("void f() { x = ; }")
        assert diagnostic.template == ILLEGAL_PRIMARY
        assert diagnostic.message == 'illegal primary expression ";"'

    def test_error_token_ends_expression(self):
        """A lone & after an operand ends the expression statement."""
        diagnostic = single_diagnostic("void f() { x = a & b; }")
        assert diagnostic.message == '";" expected here'
        assert diagnostic.position == SourcePosition(1, 18, 18)

    def test_error_token_as_operand(self):
        diagnostic = single_diagnostic("void f() { x = & b; }")
        assert diagnostic.template == ILLEGAL_PRIMARY
        assert diagnostic.message == 'illegal primary expression "&"'

    def test_unclosed_parenthesis(self):
        diagnostic = single_diagnostic("void f() { x = (1 + 2; }")
        assert diagnostic.message == '")" expected here'

    def test_unclosed_index(self):
        diagnostic = single_diagnostic("void f() { a[1 = 2; }")
        assert diagnostic.message == '"]" expected here'

    def test_call_argument_separator(self):
        diagnostic = single_diagnostic("void f() { g(1 2); }")
        assert diagnostic.message == '")" expected here'


# =============================================================================
# Error Reporting Tests
# =============================================================================

class TestSyntaxErrors:
    """Exactly one diagnostic, for the first violation."""

    def test_missing_semicolon_at_end(self):
        diagnostic = single_diagnostic("int x")
        assert diagnostic.template == TOKEN_EXPECTED
        assert diagnostic.message == '";" expected here'
        assert diagnostic.position == SourcePosition(1, 6, 5)

    def test_missing_semicolon_before_brace(self):
        diagnostic = single_diagnostic("void main() { int x; x = 1 }")
        assert diagnostic.message == '";" expected here'
        assert diagnostic.position == SourcePosition(1, 28, 28)

    def test_only_first_error_is_reported(self):
        diagnostic = single_diagnostic("int x int y; void f() { return 1 }")
        assert diagnostic.message == '";" expected here'
        assert diagnostic.position == SourcePosition(1, 7, 9)

    def test_type_expected(self):
        diagnostic = single_diagnostic("x;")
        assert diagnostic.template == TYPE_EXPECTED
        assert diagnostic.message == 'type expected here, got "x"'

    def test_identifier_expected(self):
        diagnostic = single_diagnostic("int 5;")
        assert diagnostic.template == IDENTIFIER_EXPECTED
        assert diagnostic.message == 'identifier expected here, got "<int-literal>"'

    def test_array_size_must_be_integer(self):
        diagnostic = single_diagnostic("int a[x];")
        assert diagnostic.template == INT_LITERAL_EXPECTED
        assert diagnostic.message == 'integer literal expected here, got "<id>"'

    def test_unclosed_body(self):
        """End of input inside a block is reported once and parsing stops."""
        diagnostic = single_diagnostic("void f() {")
        assert diagnostic.message == '";" expected here'

    def test_if_without_parenthesis(self):
        diagnostic = single_diagnostic("void f() { if x) ; }")
        assert diagnostic.message == '"(" expected here'

    def test_missing_parameter_type(self):
        diagnostic = single_diagnostic("void f(a) { }")
        assert diagnostic.message == 'type expected here, got "a"'

    def test_stray_error_token(self):
        diagnostic = single_diagnostic("void f() { @ }")
        assert diagnostic.message == '";" expected here'

    def test_deep_nesting_is_reported(self):
        """Nesting beyond the recursion limit is one diagnostic."""
        depth = 5000
        source = "void f() { x = " + "(" * depth + "1" + ")" * depth + "; }"
        diagnostic = single_diagnostic(source)
        assert diagnostic.template == NESTING_TOO_DEEP

    def test_moderate_nesting_is_accepted(self):
        source = "void f() { x = " + "(" * 20 + "1" + ")" * 20 + "; }"
        assert_accepted(source)

    def test_deeply_nested_parentheses_are_accepted(self):
        depth = 500
        source = "void f() { x = " + "(" * depth + "1" + ")" * depth + "; }"
        assert_accepted(source)

    def test_deeply_nested_blocks_are_accepted(self):
        depth = 2000
        assert_accepted("void f() " + "{" * depth + "}" * depth)

    def test_recursion_limit_is_restored(self):
        before = sys.getrecursionlimit()
        recognise("void f() { x = ((1)); }")
        recognise("void f() { x = " + "(" * 5000 + "1" + ")" * 5000 + "; }")
        assert sys.getrecursionlimit() == before


class TestLexicalAndSyntacticErrors:
    """Lexical diagnostics do not stop the recogniser."""

    def test_unterminated_string_still_parses(self):
        ok, reporter = recognise('void f() { s = "abc\n; }')
        assert ok
        assert [d.template for d in reporter.diagnostics] == [UNTERMINATED_STRING]

    def test_lexical_then_syntax_error(self):
        ok, reporter = recognise('void f() { s = "\\q" }')
        assert not ok
        assert [d.message for d in reporter.diagnostics] == [
            "\\q: illegal escape character",
            '";" expected here',
        ]


class TestRecogniseSource:
    """The recognise_source convenience function."""

    def test_returns_reporter(self):
        reporter = ErrorReporter(stream=None)
        assert recognise_source("int x;", reporter=reporter) is reporter
        assert reporter.num_errors == 0

    def test_crlf_line_endings(self):
        reporter = ErrorReporter(stream=None)
        recognise_source("int x;\r\nvoid main() {\r\n    x = 1;\r\n}\r\n", reporter=reporter)
        assert reporter.num_errors == 0

    def test_prints_diagnostic(self, capsys):
        reporter = recognise_source("int x")
        assert reporter.num_errors == 1
        assert capsys.readouterr().out == 'ERROR: 1(6)..1(5): ";" expected here\n'
