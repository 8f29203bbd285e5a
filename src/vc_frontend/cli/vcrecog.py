"""
vcrecog - VC Recogniser Command-Line Interface
==============================================

Runs the first compiler pass (lexical and syntactic analysis) over a
VC source file and reports whether it is well formed.

Usage Examples
--------------
Check a program:
    $ vcrecog prog.vc

Also print every token:
    $ vcrecog --trace-tokens prog.vc

Verbose mode:
    $ vcrecog -v prog.vc
"""

import sys
from pathlib import Path
from typing import Optional

import click

from vc_frontend import __version__
from vc_frontend.cli import configure_logging
from vc_frontend.config import FrontendOptions
from vc_frontend.errors import VCError
from vc_frontend.recogniser import Recogniser
from vc_frontend.reporter import ErrorReporter
from vc_frontend.scanner import Scanner
from vc_frontend.source import SourceFile


BANNER = "======= The VC compiler ======="
PASS_1 = "Pass 1: Lexical and syntactic Analysis"
SUCCESS = "Compilation was successful."
FAILURE = "Compilation was unsuccessful."


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-t", "--trace-tokens",
    is_flag=True,
    help="Print every token as it is scanned (or set $VC_TRACE_TOKENS)",
)
@click.option(
    "--tab-size",
    type=click.IntRange(min=1),
    default=None,
    help="Columns between tab stops (default: 8, or $VC_TAB_SIZE)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging on stderr)",
)
@click.version_option(version=__version__, prog_name="vcrecog")
def main(
    input_file: Path,
    trace_tokens: bool,
    tab_size: Optional[int],
    verbose: bool,
) -> None:
    """
    Check a VC source file against the VC grammar.

    INPUT_FILE is the VC source file to check.

    \b
    Only the first syntax error is reported; lexical errors are
    reported as they are found. Exits with status 1 if any error
    was reported.

    \b
    Examples:
        vcrecog gcd.vc               # Check gcd.vc
        vcrecog -t gcd.vc            # Also print the token trace
    """
    configure_logging(verbose)

    options = FrontendOptions.from_env()
    if trace_tokens:
        options.trace_tokens = True
    if tab_size is not None:
        options.tab_size = tab_size

    try:
        source = SourceFile.from_path(input_file, options.encoding)
    except VCError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    click.echo(BANNER)
    click.echo(PASS_1)

    reporter = ErrorReporter()
    scanner = Scanner(source, reporter, tab_size=options.tab_size)
    if options.trace_tokens:
        scanner.enable_debugging()

    Recogniser(scanner, reporter).parse_program()

    if reporter.num_errors:
        click.echo(FAILURE)
        sys.exit(1)

    click.echo(SUCCESS)


if __name__ == "__main__":
    main()
