"""
C Subset Syntax Front End
=========================

This module implements lexing and parsing for a small C subset.

Pipeline
--------
    C Source bytes → Lexer → Tokens → Parser → SyntaxTree

The lexer produces tokens lazily; the parser pulls them one at a time
and never backtracks beyond two tokens of lookahead.

Usage
-----
>>> from rdcc.syntax import parse_source
>>> tree = parse_source(b"int f(int a) { return a; }")
>>> print(tree.render())

Language Subset
---------------
Supported features:
- Types: int, short, long, long long, signed/unsigned, char, float,
  double, void (return type only)
- Declarations: variables, struct definitions, function prototypes and
  definitions, preprocessor lines kept verbatim
- Statements: blocks, if/else (else is mandatory), while, for, break,
  return, assignment
- Expressions: + - * / and the comparisons, ==, !=, &&, || and prefix !

Not supported:
- function calls, pointers, arrays, literals other than decimal integers
- semantic analysis and code generation
"""

from rdcc.syntax.ast import SyntaxNode, SyntaxTree, SyntaxType, TreePrinter
from rdcc.syntax.errors import (
    CSyntaxError,
    LexError,
    ParseError,
    UnmatchedBracketError,
    UnterminatedCommentError,
)
from rdcc.syntax.frontend import (
    Frontend,
    FrontendOptions,
    FrontendResult,
    parse_source,
    tokenize,
)
from rdcc.syntax.lexer import Lexer
from rdcc.syntax.parser import Parser
from rdcc.syntax.token import Bracket, KeyWord, Operator, Token, TokenKind

__all__ = [
    # Front end
    "Frontend",
    "FrontendOptions",
    "FrontendResult",
    "parse_source",
    "tokenize",
    # Errors
    "CSyntaxError",
    "LexError",
    "ParseError",
    "UnmatchedBracketError",
    "UnterminatedCommentError",
    # Lexer
    "Lexer",
    "Token",
    "TokenKind",
    "KeyWord",
    "Operator",
    "Bracket",
    # Parser
    "Parser",
    # Syntax tree
    "SyntaxNode",
    "SyntaxTree",
    "SyntaxType",
    "TreePrinter",
]
