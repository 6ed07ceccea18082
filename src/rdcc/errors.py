"""
rdcc Error Hierarchy
====================

This module defines the root of the exception hierarchy for rdcc.
All exceptions raised by the front-end inherit from RdccError, allowing
callers to catch every front-end failure with a single except clause.

Exception Hierarchy
-------------------
RdccError (base)
└── CSyntaxError (rdcc.syntax.errors)
    ├── LexError - unrecognized byte in the source buffer
    │   └── UnterminatedCommentError - '/*' without closing '*/'
    └── ParseError - token does not fit the active production
        └── UnmatchedBracketError - missing ')' or '}'

Each exception captures source location information (filename, line,
column) when applicable. Error messages follow this format:

    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class RdccError(Exception):
    """
    Base exception for all rdcc errors.

        try:
            parse_source(b"int x;")
        except RdccError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in a source buffer, used for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for in-memory buffers)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
