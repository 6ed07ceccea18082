"""
CLI Error Handling
==================

Maps front-end exceptions onto process exit codes and stderr messages.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    SYNTAX_ERROR = 1     # Lexer or parser error in the input
    INVALID_ARGS = 2     # Invalid arguments or unreadable files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception raised while running a CLI command and exit.

    Syntax errors are printed as-is (they carry their own location and
    'error:' prefix). Tracebacks are only shown for internal errors in
    verbose mode.

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from rdcc.errors import RdccError

    if isinstance(error, RdccError):
        click.echo(str(error), err=True)
        sys.exit(ExitCode.SYNTAX_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, (FileNotFoundError, PermissionError, IsADirectoryError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
