"""
vcscan - VC Scanner Command-Line Interface
==========================================

Prints every token of a VC source file, one per line, in the scanner
trace format. Lexical diagnostics are printed where they occur.

Usage Examples
--------------
Basic scan:
    $ vcscan prog.vc

Wider tab stops:
    $ vcscan --tab-size 4 prog.vc
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from vc_frontend import __version__
from vc_frontend.cli import configure_logging
from vc_frontend.config import FrontendOptions
from vc_frontend.errors import VCError
from vc_frontend.reporter import ErrorReporter
from vc_frontend.scanner import Scanner
from vc_frontend.source import SourceFile

logger = logging.getLogger(__name__)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
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
@click.version_option(version=__version__, prog_name="vcscan")
def main(input_file: Path, tab_size: Optional[int], verbose: bool) -> None:
    """
    Print the tokens of a VC source file.

    INPUT_FILE is the VC source file to scan.

    \b
    Each line shows the token kind, its spelling and its position:
        Kind = INT [int], spelling = "int", position = 1(1)..1(3)

    Exits with status 1 if a lexical error was reported.
    """
    configure_logging(verbose)

    options = FrontendOptions.from_env()
    if tab_size is not None:
        options.tab_size = tab_size

    try:
        source = SourceFile.from_path(input_file, options.encoding)
    except VCError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    reporter = ErrorReporter()
    scanner = Scanner(source, reporter, tab_size=options.tab_size)
    scanner.enable_debugging()

    count = sum(1 for _ in scanner.tokens())
    logger.debug(f"Scanned {count} tokens from {input_file}")

    if reporter.num_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
