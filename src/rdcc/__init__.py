"""
rdcc - Recursive-Descent Front End for a C Subset
=================================================

This package provides the syntax front end of a small C compiler: a
byte-oriented lexer, a recursive-descent parser and the syntax tree it
builds.

Main Components
---------------
- **syntax**: token model, lexer, parser, syntax tree and front-end driver
    Converts C source bytes into a TranslationUnit syntax tree

- **cli**: command-line tools (rdcc)
    Prints the token stream or the tree dump of a C file

Quick Start
-----------
Parse a program:
    >>> from rdcc.syntax import Lexer, Parser
    >>> parser = Parser(Lexer(b"int main() { return 0; }"))
    >>> tree = parser.run()
    >>> parser.dump()

List its tokens:
    >>> from rdcc.syntax import tokenize
    >>> [str(t) for t in tokenize(b"x = 1;")]
    ['Identifier("x")', 'Operator(Assign)', 'Number("1")', 'Semicolon', 'EndOfStream']

Or use the command-line tool:
    $ rdcc hello.c
    $ rdcc --tokens hello.c

Version History
---------------
1.0.0 - Initial release with lexer, parser and tree dump
"""

__version__ = "1.0.0"

from rdcc.errors import RdccError, SourceLocation

__all__ = [
    "__version__",
    "RdccError",
    "SourceLocation",
]
