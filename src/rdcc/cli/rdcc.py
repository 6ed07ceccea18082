"""
rdcc - C Front-End Command-Line Interface
=========================================

This module implements the command-line interface for the C front end.
It parses a C file and prints its syntax tree, or lists its tokens.

Usage Examples
--------------
Print the syntax tree:
    $ rdcc hello.c

List the token stream:
    $ rdcc --tokens hello.c

Require boolean conditions in if/while/for:
    $ rdcc --strict hello.c

Verbose mode (debug logging on stderr):
    $ rdcc -v hello.c
"""

import logging
from pathlib import Path

import click

from rdcc import __version__
from rdcc.cli.errors import handle_cli_exception
from rdcc.syntax import Frontend, FrontendOptions


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream instead of the syntax tree",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Reject if/while/for conditions without a boolean operator",
)
@click.option(
    "--indent",
    type=click.IntRange(min=0),
    default=2,
    show_default=True,
    help="Spaces per level in the tree dump",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="rdcc")
def main(
    input_file: Path,
    tokens: bool,
    strict: bool,
    indent: int,
    verbose: bool,
) -> None:
    """
    Parse a C source file and print its syntax tree.

    INPUT_FILE is the C source file (.c) to parse.

    \b
    Examples:
        rdcc hello.c                 # Print the syntax tree
        rdcc --tokens hello.c        # One token per line
        rdcc --indent 4 hello.c      # Wider tree indentation
        rdcc -v hello.c              # Debug logging on stderr

    \b
    Supported C subset:
        - int/short/long/char/float/double types, struct definitions
        - function prototypes and definitions
        - if/else, while, for, break, return, assignment
        - arithmetic, comparison and logical operators
    """
    setup_logging(verbose)

    options = FrontendOptions(
        filename=str(input_file),
        strict_conditions=strict,
        dump_indent=" " * indent,
    )

    try:
        frontend = Frontend(options)

        if tokens:
            for token in frontend.tokenize_source(input_file.read_bytes()):
                click.echo(str(token))
            return

        result = frontend.parse_file(input_file)
        click.echo(result.dump())

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens", err=True)
            click.echo(f"Parsed: {len(result.tree.root.children)} top-level items", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
