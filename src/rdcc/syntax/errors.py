"""
C Front-End Syntax Errors
=========================

Exceptions raised by the lexer and the recursive-descent parser. All of
them inherit from CSyntaxError, which itself inherits from RdccError.

Exception Hierarchy
-------------------
CSyntaxError (base for all lexer and parser errors)
├── LexError - unrecognized byte
│   └── UnterminatedCommentError - '/*' without '*/'
└── ParseError - unexpected token
    └── UnmatchedBracketError - missing closing bracket

Policy
------
Errors are fail-fast: the first one aborts the whole parse and no
partial tree is produced. The parser propagates LexError unchanged.

Example:
    test.c:1:6: error: expected ';', found EndOfStream
        int x
             ^
"""

from typing import TYPE_CHECKING, Optional

from rdcc.errors import RdccError, SourceLocation

if TYPE_CHECKING:
    from rdcc.syntax.token import Token


# =============================================================================
# Base Syntax Exception
# =============================================================================

class CSyntaxError(RdccError):
    """
    Base exception for lexer and parser errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The source text of the offending line
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            test.c:2:5: error: invalid byte '&' (0x26)
                a & b
                  ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexer Errors
# =============================================================================

class LexError(CSyntaxError):
    """
    Unrecognized byte in the source buffer.

    Raised for any byte outside the recognized character set, including
    a lone '&' or '|' (only '&&' and '||' belong to the grammar).

    Attributes:
        byte: The offending byte value
        position: Byte offset of the offending byte
    """

    def __init__(
        self,
        byte: int,
        position: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        message: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.byte = byte
        self.position = position

        if message is None:
            if 0x20 <= byte < 0x7F:
                message = f"invalid byte '{chr(byte)}' (0x{byte:02X})"
            else:
                message = f"invalid byte 0x{byte:02X}"

        if hint is None and byte in (ord("&"), ord("|")):
            hint = f"only '{chr(byte) * 2}' is supported"

        super().__init__(
            message,
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnterminatedCommentError(LexError):
    """A '/*' comment reaches the end of input without '*/'."""

    def __init__(
        self,
        position: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            ord("/"),
            position,
            location=location,
            source_line=source_line,
            message="unterminated multi-line comment",
            hint="add closing */ to terminate the comment",
        )


# =============================================================================
# Parser Errors
# =============================================================================

class ParseError(CSyntaxError):
    """
    The current token does not match what the active production requires.

    Examples:
        - missing ';'
        - missing mandatory 'else'
        - malformed declaration

    Attributes:
        expected: Description of what the production required
        found: The token that was encountered instead
        position: Byte offset of the found token
    """

    def __init__(
        self,
        expected: str,
        found: "Token",
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        self.position = found.offset

        super().__init__(
            f"expected {expected}, found {found}",
            location=found.location,
            hint=hint,
            source_line=source_line,
        )


class UnmatchedBracketError(ParseError):
    """
    An opening bracket has no matching closing bracket.

    Attributes:
        opening: The opening bracket token
    """

    def __init__(
        self,
        expected: str,
        found: "Token",
        opening: "Token",
        source_line: Optional[str] = None,
    ):
        self.opening = opening
        super().__init__(
            expected,
            found,
            source_line=source_line,
            hint=f"unmatched {opening} opened at {opening.location}",
        )
