"""
C Token Model
=============

The closed set of lexical categories produced by the lexer, and the
immutable Token value that carries one of them.

Token Rendering
---------------
str(token) shows the variant name and its payload. Golden-output tests
and the CLI token listing rely on this exact form:

    Preprocessor("#include <iostream.h>")
    KeyWord(Int)
    Identifier("main")
    Number("1")
    Operator(Assign)
    Bracket(LeftParenthesis)
    Comma
    Semicolon
    EndOfStream
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

from rdcc.errors import SourceLocation


def _camel(name: str) -> str:
    """LEFT_CURLY_BRACKET -> LeftCurlyBracket."""
    return "".join(part.capitalize() for part in name.split("_"))


# =============================================================================
# Token Kinds
# =============================================================================

class TokenKind(Enum):
    """Lexical category of a token."""

    PREPROCESSOR = auto()   # '#' line, kept verbatim
    KEYWORD = auto()        # reserved word
    IDENTIFIER = auto()     # [a-zA-Z_][a-zA-Z0-9_]*
    NUMBER = auto()         # decimal digit run
    OPERATOR = auto()
    BRACKET = auto()
    COMMA = auto()
    SEMICOLON = auto()
    END_OF_STREAM = auto()  # sentinel, repeated forever once reached

    @property
    def label(self) -> str:
        """Variant name used in the textual rendering."""
        if self is TokenKind.KEYWORD:
            return "KeyWord"
        return _camel(self.name)


# =============================================================================
# Payload Enumerations
# =============================================================================

class KeyWord(Enum):
    """Reserved words. The value is the source spelling."""

    # Control flow
    IF = "if"
    ELSE = "else"
    FOR = "for"
    WHILE = "while"
    RETURN = "return"
    BREAK = "break"

    # Type specifiers
    INT = "int"
    SHORT = "short"
    LONG = "long"
    UNSIGNED = "unsigned"
    SIGNED = "signed"
    FLOAT = "float"
    DOUBLE = "double"
    CHAR = "char"
    VOID = "void"

    STRUCT = "struct"

    @property
    def label(self) -> str:
        return _camel(self.name)

    def is_type(self) -> bool:
        """Return True if this keyword can start a type."""
        return self in TYPE_KEYWORDS


class Operator(Enum):
    """Operators. The value is the source spelling."""

    ADD = "+"
    MINUS = "-"
    MUL = "*"
    DIVISION = "/"
    ASSIGN = "="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="
    EQUAL = "=="
    NOT_EQUAL = "!="
    LOGIC_AND = "&&"
    LOGIC_OR = "||"
    LOGIC_NOT = "!"
    NOT = "~"

    @property
    def label(self) -> str:
        return _camel(self.name)


class Bracket(Enum):
    """Brackets. The value is the source spelling."""

    LEFT_PARENTHESIS = "("
    RIGHT_PARENTHESIS = ")"
    LEFT_CURLY_BRACKET = "{"
    RIGHT_CURLY_BRACKET = "}"

    @property
    def label(self) -> str:
        return _camel(self.name)


# =============================================================================
# Lookup Tables
# =============================================================================
# Built once at import time and never written afterwards.

KEYWORDS: dict[str, KeyWord] = {k.value: k for k in KeyWord}

TYPE_KEYWORDS = frozenset({
    KeyWord.INT,
    KeyWord.SHORT,
    KeyWord.LONG,
    KeyWord.UNSIGNED,
    KeyWord.SIGNED,
    KeyWord.FLOAT,
    KeyWord.DOUBLE,
    KeyWord.CHAR,
    KeyWord.VOID,
})

# Longest spelling first so that '==' wins over '=', '>=' over '>', etc.
OPERATORS: tuple[tuple[bytes, Operator], ...] = tuple(
    sorted(
        ((op.value.encode("ascii"), op) for op in Operator),
        key=lambda item: -len(item[0]),
    )
)

BRACKETS: dict[int, Bracket] = {ord(b.value): b for b in Bracket}


Payload = Union[KeyWord, Operator, Bracket, str, None]


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single lexical token.

    Attributes:
        kind: The TokenKind classification
        value: KeyWord/Operator/Bracket for those kinds, the exact matched
            text for identifiers, numbers and preprocessor lines, None for
            punctuation and the end-of-stream sentinel
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        offset: Byte offset in source (0-indexed)
        filename: Name of the source file
    """
    kind: TokenKind
    value: Payload = None
    line: int = 1
    column: int = 1
    offset: int = 0
    filename: str = "<input>"

    def __str__(self) -> str:
        label = self.kind.label
        if self.kind in (TokenKind.KEYWORD, TokenKind.OPERATOR, TokenKind.BRACKET):
            return f"{label}({self.value.label})"
        if self.value is not None:
            return f'{label}("{self.value}")'
        return label

    def __repr__(self) -> str:
        return f"Token({self}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    # -------------------------------------------------------------------------
    # Classification helpers used by the parser
    # -------------------------------------------------------------------------

    def is_keyword(self, *keywords: KeyWord) -> bool:
        return self.kind is TokenKind.KEYWORD and (not keywords or self.value in keywords)

    def is_operator(self, *operators: Operator) -> bool:
        return self.kind is TokenKind.OPERATOR and (not operators or self.value in operators)

    def is_bracket(self, bracket: Bracket) -> bool:
        return self.kind is TokenKind.BRACKET and self.value is bracket

    def is_type_keyword(self) -> bool:
        """Return True if this token is a type keyword."""
        return self.kind is TokenKind.KEYWORD and self.value in TYPE_KEYWORDS

    @property
    def at_end(self) -> bool:
        return self.kind is TokenKind.END_OF_STREAM


def end_of_stream(
    line: int = 1,
    column: int = 1,
    offset: int = 0,
    filename: str = "<input>",
) -> Token:
    """Build the end-of-stream sentinel at the given position."""
    return Token(TokenKind.END_OF_STREAM, None, line, column, offset, filename)
