"""
C Front-End Driver
==================

This module provides the front-end interface for the C subset. It
orchestrates the two syntax stages:

    Source bytes → Lex → Parse → SyntaxTree

Usage
-----
Command line:
    $ rdcc hello.c

Programmatic:
    >>> from rdcc.syntax import parse_source
    >>> tree = parse_source(b"int x;")
    >>> print(tree.render())
    TranslationUnit
      VariableDefine
        VariableType
          Terminal(KeyWord(Int))
        Terminal(Identifier("x"))

Error Handling
--------------
The front end stops at the first LexError or ParseError and re-raises
it; no partial result is returned.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from rdcc.syntax.ast import SyntaxTree, TreePrinter
from rdcc.syntax.lexer import Lexer, SourceBuffer
from rdcc.syntax.parser import Parser
from rdcc.syntax.token import Token

logger = logging.getLogger(__name__)


@dataclass
class FrontendOptions:
    """
    Front-end configuration options.

    Attributes:
        filename: Source name used in tokens and error messages when
                  parsing from memory. parse_file() uses the real path.
        strict_conditions: Reject if/while/for conditions whose top-level
                  node is plain arithmetic (e.g. 'while (x)').
        dump_indent: Indentation unit of the tree dump.
    """
    filename: str = "<input>"
    strict_conditions: bool = False
    dump_indent: str = "  "


@dataclass
class FrontendResult:
    """
    Result of a successful parse.

    Attributes:
        filename: Source filename
        tree: The syntax tree
        token_count: Number of tokens read, including EndOfStream
        dump_indent: Indentation unit used by dump()
    """
    filename: str
    tree: SyntaxTree
    token_count: int = 0
    dump_indent: str = "  "

    def dump(self) -> str:
        """Render the tree as text."""
        return TreePrinter(self.dump_indent).print(self.tree)


class Frontend:
    """
    Lexer and parser driver.

    Example:
        frontend = Frontend(FrontendOptions(strict_conditions=True))
        result = frontend.parse_file("hello.c")
        print(result.dump())

    Attributes:
        options: Front-end configuration options
    """

    def __init__(self, options: Optional[FrontendOptions] = None):
        self.options = options or FrontendOptions()

    def parse_source(self, source: SourceBuffer, filename: Optional[str] = None) -> FrontendResult:
        """
        Parse C source held in memory.

        Args:
            source: C source as bytes (or str)
            filename: Overrides options.filename for this call

        Returns:
            FrontendResult holding the tree

        Raises:
            LexError: On an unrecognized byte
            ParseError: On a grammar violation
        """
        filename = filename or self.options.filename
        logger.info(f"Parsing {filename}")

        parser = Parser(Lexer(source, filename), strict_conditions=self.options.strict_conditions)
        tree = parser.run()

        result = FrontendResult(
            filename=filename,
            tree=tree,
            token_count=parser.tokens_read,
            dump_indent=self.options.dump_indent,
        )
        logger.info(
            f"Parsed {filename}: {result.token_count} tokens, "
            f"{len(tree.root.children)} top-level items, {tree.node_count()} nodes"
        )
        return result

    def parse_file(self, filepath: Union[str, Path]) -> FrontendResult:
        """
        Parse a C source file.

        The file is read as raw bytes; no text decoding happens before
        lexing.

        Raises:
            FileNotFoundError: If the source file does not exist
            LexError, ParseError: On the first syntax error
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        return self.parse_source(path.read_bytes(), str(filepath))

    def tokenize_source(self, source: SourceBuffer, filename: Optional[str] = None) -> list[Token]:
        """
        Lex source into a list of tokens ending with EndOfStream.

        Raises:
            LexError: On an unrecognized byte
        """
        filename = filename or self.options.filename
        tokens = list(Lexer(source, filename).tokenize())
        logger.info(f"Tokenized {filename}: {len(tokens)} tokens")
        return tokens


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(
    source: SourceBuffer,
    filename: str = "<input>",
    strict_conditions: bool = False,
) -> SyntaxTree:
    """
    Parse C source into a SyntaxTree.

    Example:
        >>> tree = parse_source(b"int f(int a);")
        >>> tree.root.children[0].kind.label
        'FuncDeclare'
    """
    options = FrontendOptions(filename=filename, strict_conditions=strict_conditions)
    return Frontend(options).parse_source(source).tree


def tokenize(source: SourceBuffer, filename: str = "<input>") -> list[Token]:
    """Lex source into a list of tokens ending with EndOfStream."""
    return Frontend(FrontendOptions(filename=filename)).tokenize_source(source)
