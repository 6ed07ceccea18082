"""
C Lexer (Tokenizer)
===================

This module implements the lexer for the C subset. It scans a byte
buffer and produces Tokens one at a time, on demand.

Token Categories
----------------
- Preprocessor: a whole line starting with '#', kept verbatim
- Keywords: if, else, for, while, return, break, struct and type keywords
- Identifiers: [a-zA-Z_][a-zA-Z0-9_]*
- Numbers: maximal run of decimal digits, stored as text
- Operators: + - * / = > >= < <= == != && || ! ~
- Brackets: ( ) { }
- Punctuation: , ;

Comments
--------
- Single-line: // comment
- Multi-line: /* comment */

Stream Contract
---------------
next() returns the next Token. Once the input is exhausted it returns
the EndOfStream sentinel, and keeps returning it on every further call.
The cursor only moves forward; to rescan, build a new Lexer over the
same buffer.

Example Usage
-------------
>>> from rdcc.syntax.lexer import Lexer
>>> lexer = Lexer(b"int main() { return 0; }")
>>> for token in lexer.tokenize():
...     print(token)
KeyWord(Int)
Identifier("main")
Bracket(LeftParenthesis)
Bracket(RightParenthesis)
Bracket(LeftCurlyBracket)
KeyWord(Return)
Number("0")
Semicolon
Bracket(RightCurlyBracket)
EndOfStream
"""

import logging
import string
from typing import Iterator, Optional, Union

from rdcc.errors import SourceLocation
from rdcc.syntax.errors import LexError, UnterminatedCommentError
from rdcc.syntax.token import (
    BRACKETS,
    KEYWORDS,
    OPERATORS,
    Token,
    TokenKind,
    end_of_stream,
)

logger = logging.getLogger(__name__)


SourceBuffer = Union[bytes, bytearray, memoryview, str]


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes C source held in a byte buffer.

    The lexer keeps a reference to the buffer it is given and a cursor
    into it. Each call to next() skips whitespace and comments and scans
    exactly one token. Errors are fail-fast: an unrecognized byte raises
    LexError and the lexer does not attempt to resynchronize.

    Usage:
        lexer = Lexer(source_bytes, "main.c")
        token = lexer.next()

    Attributes:
        filename: Name of the source file (for error reporting)
    """

    IDENT_START = frozenset((string.ascii_letters + "_").encode("ascii"))
    IDENT_CHARS = frozenset((string.ascii_letters + string.digits + "_").encode("ascii"))
    DIGITS = frozenset(string.digits.encode("ascii"))
    WHITESPACE = frozenset(b" \t\n\r\v\f")

    HASH = ord("#")
    NEWLINE = ord("\n")
    SLASH = ord("/")
    STAR = ord("*")

    PUNCTUATION = {
        ord(","): TokenKind.COMMA,
        ord(";"): TokenKind.SEMICOLON,
    }

    def __init__(self, source: SourceBuffer, filename: str = "<input>"):
        """
        Initialize the lexer over a source buffer.

        Args:
            source: The C source. bytes-like objects are used as-is;
                a str is encoded as UTF-8.
            filename: Name of the source file (for error messages)
        """
        if isinstance(source, str):
            source = source.encode("utf-8")
        self._buffer = source
        self.filename = filename

        # Cursor
        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    # =========================================================================
    # Public Interface
    # =========================================================================

    def next(self) -> Token:
        """
        Advance one token.

        Returns:
            The next Token, or EndOfStream once input is exhausted

        Raises:
            LexError: If an unrecognized byte is encountered
        """
        self._skip_whitespace_and_comments()

        if self._at_end():
            return end_of_stream(self._line, self._column, self._pos, self.filename)

        return self._scan_token()

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens up to and including the first EndOfStream.

        Raises:
            LexError: If an unrecognized byte is encountered
        """
        while True:
            token = self.next()
            yield token
            if token.at_end:
                return

    def __iter__(self) -> Iterator[Token]:
        return self.tokenize()

    def line_text(self, line: int) -> Optional[str]:
        """
        Return the text of a 1-indexed source line, or None if out of range.

        Used by the parser to attach source context to its errors.
        """
        if line < 1:
            return None
        lines = bytes(self._buffer).split(b"\n")
        if line > len(lines):
            return None
        return lines[line - 1].decode("utf-8", errors="surrogateescape").rstrip("\r")

    # =========================================================================
    # Byte Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self._buffer)

    def _peek(self, offset: int = 0) -> int:
        """Byte at the cursor + offset, or -1 past the end."""
        pos = self._pos + offset
        if pos >= len(self._buffer):
            return -1
        return self._buffer[pos]

    def _advance(self) -> int:
        """Consume one byte, keeping line and column up to date."""
        byte = self._buffer[self._pos]
        self._pos += 1

        if byte == self.NEWLINE:
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return byte

    def _starts_with(self, spelling: bytes) -> bool:
        end = self._pos + len(spelling)
        return bytes(self._buffer[self._pos:end]) == spelling

    def _text(self, start: int, end: int) -> str:
        return bytes(self._buffer[start:end]).decode("utf-8", errors="surrogateescape")

    def _source_line(self) -> str:
        """Text of the line holding the cursor, for error context."""
        end = self._line_start_pos
        while end < len(self._buffer) and self._buffer[end] != self.NEWLINE:
            end += 1
        return self._text(self._line_start_pos, end).rstrip("\r")

    def _make_token(self, kind: TokenKind, value, line: int, column: int, offset: int) -> Token:
        return Token(kind, value, line, column, offset, self.filename)

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            byte = self._peek()

            if byte in self.WHITESPACE:
                self._advance()
                continue

            if byte == self.SLASH and self._peek(1) == self.SLASH:
                self._skip_single_line_comment()
                continue

            if byte == self.SLASH and self._peek(1) == self.STAR:
                self._skip_multi_line_comment()
                continue

            break

    def _skip_single_line_comment(self) -> None:
        while not self._at_end() and self._peek() != self.NEWLINE:
            self._advance()

    def _skip_multi_line_comment(self) -> None:
        """
        Skip a /* ... */ comment.

        Raises:
            UnterminatedCommentError: If the comment never closes
        """
        start = self._pos
        location = SourceLocation(self.filename, self._line, self._column)
        source_line = self._source_line()

        self._advance()  # consume /
        self._advance()  # consume *

        while not self._at_end():
            if self._peek() == self.STAR and self._peek(1) == self.SLASH:
                self._advance()
                self._advance()
                return
            self._advance()

        raise UnterminatedCommentError(start, location, source_line)

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        line, column, offset = self._line, self._column, self._pos
        byte = self._peek()

        if byte == self.HASH:
            return self._scan_preprocessor(line, column, offset)

        if byte in self.IDENT_START:
            return self._scan_identifier(line, column, offset)

        if byte in self.DIGITS:
            return self._scan_number(line, column, offset)

        return self._scan_operator(line, column, offset)

    def _scan_preprocessor(self, line: int, column: int, offset: int) -> Token:
        """Consume a '#' line up to (not including) the line break."""
        while not self._at_end() and self._peek() != self.NEWLINE:
            self._advance()

        text = self._text(offset, self._pos).rstrip("\r")
        logger.debug(f"Preprocessor line at {line}:{column}: {text!r}")
        return self._make_token(TokenKind.PREPROCESSOR, text, line, column, offset)

    def _scan_identifier(self, line: int, column: int, offset: int) -> Token:
        """
        Scan an identifier or keyword.

        The maximal run of identifier bytes is classified against the
        keyword table.
        """
        while self._peek() in self.IDENT_CHARS:
            self._advance()

        name = self._text(offset, self._pos)

        if name in KEYWORDS:
            return self._make_token(TokenKind.KEYWORD, KEYWORDS[name], line, column, offset)

        return self._make_token(TokenKind.IDENTIFIER, name, line, column, offset)

    def _scan_number(self, line: int, column: int, offset: int) -> Token:
        """Scan a maximal run of decimal digits, kept as text."""
        while self._peek() in self.DIGITS:
            self._advance()

        return self._make_token(TokenKind.NUMBER, self._text(offset, self._pos), line, column, offset)

    def _scan_operator(self, line: int, column: int, offset: int) -> Token:
        """
        Scan an operator, bracket or punctuation byte.

        Operators are tried longest spelling first.
        """
        for spelling, operator in OPERATORS:
            if self._starts_with(spelling):
                for _ in spelling:
                    self._advance()
                return self._make_token(TokenKind.OPERATOR, operator, line, column, offset)

        byte = self._peek()

        if byte in BRACKETS:
            self._advance()
            return self._make_token(TokenKind.BRACKET, BRACKETS[byte], line, column, offset)

        if byte in self.PUNCTUATION:
            self._advance()
            return self._make_token(self.PUNCTUATION[byte], None, line, column, offset)

        logger.debug(f"Unrecognized byte 0x{byte:02X} at offset {offset}")
        raise LexError(
            byte,
            offset,
            SourceLocation(self.filename, line, column),
            self._source_line(),
        )
