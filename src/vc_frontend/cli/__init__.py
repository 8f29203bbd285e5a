"""
VC Front End Command-Line Interface
===================================

This package provides command-line tools for the VC front end:

- **vcscan**: prints the token stream of a source file
- **vcrecog**: checks a source file against the VC grammar

Each tool is implemented as a Click-based CLI application.
"""

import logging

__all__ = ["vcscan", "vcrecog", "configure_logging"]


def configure_logging(verbose: bool) -> None:
    """Send DEBUG records to stderr when --verbose is given."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )
