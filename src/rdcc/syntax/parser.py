"""
C Recursive Descent Parser
==========================

This module implements the recursive-descent parser for the C subset.
It pulls tokens from a Lexer on demand and builds a SyntaxTree.

Grammar (Simplified EBNF)
-------------------------
translation_unit ::= (PREPROCESSOR | struct_define | func_declare
                      | func_define | variable_define)*
struct_define    ::= 'struct' IDENTIFIER? '{' variable_define* '}' ';'
func_declare     ::= type IDENTIFIER '(' func_arg_list ')' ';'
func_define      ::= type IDENTIFIER '(' func_arg_list ')' stmt_block
func_arg_list    ::= (func_arg (',' func_arg)*)? | 'void'
func_arg         ::= type IDENTIFIER
variable_define  ::= type IDENTIFIER (',' IDENTIFIER)* ';'
type             ::= ('signed' | 'unsigned')? ('short' | 'long' 'long'?)? ('int' | 'char')?
                   | 'float' | 'double' | 'long' 'double' | 'void'

stmt_block       ::= '{' stmt_list '}'
stmt_list        ::= stmt*
stmt             ::= stmt_block | if_stmt | while_loop | for_loop
                   | break_stmt | return_stmt | assign_stmt
                   | variable_define | ';'
if_stmt          ::= 'if' '(' bool_expr ')' stmt 'else' stmt
while_loop       ::= 'while' '(' bool_expr ')' stmt
for_loop         ::= 'for' '(' for_clause ';' for_clause ';' for_clause ')' stmt
for_clause       ::= (assignment | bool_expr)?
break_stmt       ::= 'break' ';'
return_stmt      ::= 'return' bool_expr? ';'
assign_stmt      ::= assignment ';'
assignment       ::= IDENTIFIER '=' bool_expr

Expression Precedence (lowest to highest)
-----------------------------------------
1. bool_expr         ||
2. bool_expr_and     &&
3. bool_expr_equal   == !=
4. bool_expr_cmp     > >= < <=
5. bool_expr_factor  '!' bool_expr | '(' bool_expr ')' | expr
6. expr              + -
7. expr_mul          * /
8. expr_factor       '(' expr ')' | IDENTIFIER | NUMBER

Every left-recursive level (A -> A op B | B) is parsed as one B followed
by a loop over (op, B) pairs, which yields a flat, left-associative node.

Notes
-----
- The else branch of an if statement is mandatory in this grammar.
- '!' applies to the whole bool_expr that follows it, so '!a && b'
  groups as '!(a && b)'.

Example Usage
-------------
>>> from rdcc.syntax.lexer import Lexer
>>> from rdcc.syntax.parser import Parser
>>> parser = Parser(Lexer(b"int f(int a);"))
>>> tree = parser.run()
>>> print(tree.render())
TranslationUnit
  FuncDeclare
    VariableType
      Terminal(KeyWord(Int))
    Terminal(Identifier("f"))
    FuncArg
      VariableType
        Terminal(KeyWord(Int))
      Terminal(Identifier("a"))
"""

import logging
import sys
from collections import deque
from typing import Callable, Optional, TextIO

from rdcc.errors import SourceLocation
from rdcc.syntax.ast import SyntaxNode, SyntaxTree, SyntaxType, TreePrinter
from rdcc.syntax.errors import CSyntaxError, ParseError, UnmatchedBracketError
from rdcc.syntax.lexer import Lexer
from rdcc.syntax.token import Bracket, KeyWord, Operator, Token, TokenKind

logger = logging.getLogger(__name__)


# =============================================================================
# Operator Groups (one per precedence level)
# =============================================================================

ADDITIVE = (Operator.ADD, Operator.MINUS)
MULTIPLICATIVE = (Operator.MUL, Operator.DIVISION)
LOGICAL_OR = (Operator.LOGIC_OR,)
LOGICAL_AND = (Operator.LOGIC_AND,)
EQUALITY = (Operator.EQUAL, Operator.NOT_EQUAL)
COMPARISON = (
    Operator.GREATER,
    Operator.GREATER_EQUAL,
    Operator.LESS,
    Operator.LESS_EQUAL,
)

BOOLEAN_OPERATORS_TEXT = "one of '||', '&&', '==', '!=', '>', '>=', '<', '<='"


class Parser:
    """
    Recursive descent parser for the C subset.

    The parser owns the Lexer it drives and keeps a small lookahead
    buffer (at most two tokens are ever inspected ahead). Parsing is
    fail-fast: the first LexError or ParseError aborts run() and no tree
    is kept.

    Usage:
        parser = Parser(Lexer(source_bytes, "main.c"))
        tree = parser.run()
        parser.dump()

    Attributes:
        lexer: The token source
        strict_conditions: Require a boolean operator at the top of
            if/while/for conditions instead of accepting bare arithmetic
    """

    def __init__(self, lexer: Lexer, strict_conditions: bool = False):
        self.lexer = lexer
        self.strict_conditions = strict_conditions

        self._lookahead: deque[Token] = deque()
        self._tokens_read = 0
        self._seen_end = False
        self._tree: Optional[SyntaxTree] = None
        self._started = False

    # =========================================================================
    # Public Interface
    # =========================================================================

    def run(self) -> SyntaxTree:
        """
        Drive the lexer to completion and build the syntax tree.

        Returns:
            The SyntaxTree rooted at a TranslationUnit

        Raises:
            LexError: If the lexer meets an unrecognized byte
            ParseError: If a token does not fit the grammar
            RuntimeError: If run() was already called on this parser
        """
        if self._started:
            raise RuntimeError("Parser.run() can only be called once")
        self._started = True

        try:
            root = self._parse_translation_unit()
        except CSyntaxError as e:
            logger.debug(f"Parse aborted: {e.message}")
            raise

        self._tree = SyntaxTree(root)
        return self._tree

    @property
    def syntax_tree(self) -> Optional[SyntaxTree]:
        """The tree built by run(), or None before a successful run."""
        return self._tree

    @property
    def tokens_read(self) -> int:
        """Tokens pulled from the lexer so far, EndOfStream counted once."""
        return self._tokens_read

    def dump(self, file: Optional[TextIO] = None, indent: str = "  ") -> None:
        """
        Write the tree dump to a stream (stdout by default).

        Raises:
            RuntimeError: If run() has not completed successfully
        """
        if self._tree is None:
            raise RuntimeError("no syntax tree to dump; run() has not succeeded")
        TreePrinter(indent).write(self._tree, file if file is not None else sys.stdout)

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _peek(self, offset: int = 0) -> Token:
        """Look at the token at current position + offset without consuming it."""
        while len(self._lookahead) <= offset:
            token = self.lexer.next()
            if not self._seen_end:
                self._tokens_read += 1
                self._seen_end = token.at_end
            self._lookahead.append(token)
        return self._lookahead[offset]

    def _advance(self) -> Token:
        """Consume and return the current token."""
        self._peek()
        return self._lookahead.popleft()

    def _check_kind(self, kind: TokenKind) -> bool:
        return self._peek().kind is kind

    def _check_bracket(self, bracket: Bracket) -> bool:
        return self._peek().is_bracket(bracket)

    def _match_kind(self, kind: TokenKind) -> Optional[Token]:
        if self._check_kind(kind):
            return self._advance()
        return None

    def _expect_kind(self, kind: TokenKind, description: str) -> Token:
        """
        Expect and consume a token of the given kind.

        Raises:
            ParseError: If the current token is of another kind
        """
        if self._check_kind(kind):
            return self._advance()
        raise self._error(description)

    def _expect_bracket(self, bracket: Bracket) -> Token:
        if self._check_bracket(bracket):
            return self._advance()
        raise self._error(f"'{bracket.value}'")

    def _expect_closing(self, bracket: Bracket, opening: Token) -> Token:
        """
        Consume the bracket closing `opening`.

        Raises:
            UnmatchedBracketError: If the current token is not `bracket`
        """
        if self._check_bracket(bracket):
            return self._advance()
        found = self._peek()
        raise UnmatchedBracketError(
            f"'{bracket.value}'",
            found,
            opening,
            self.lexer.line_text(found.line),
        )

    def _expect_semicolon(self) -> Token:
        return self._expect_kind(TokenKind.SEMICOLON, "';'")

    def _error(self, expected: str, token: Optional[Token] = None) -> ParseError:
        """Build a ParseError at `token` (the current token by default)."""
        if token is None:
            token = self._peek()
        return ParseError(expected, token, self.lexer.line_text(token.line))

    # =========================================================================
    # Node Construction
    # =========================================================================

    @staticmethod
    def _node(
        kind: SyntaxType,
        children: list[SyntaxNode],
        location: Optional[SourceLocation] = None,
    ) -> SyntaxNode:
        if location is None and children:
            location = children[0].location
        return SyntaxNode(kind, tuple(children), None, location)

    @staticmethod
    def _terminal(token: Token) -> SyntaxNode:
        return SyntaxNode.terminal(token)

    # =========================================================================
    # Top-Level Declaration Parsing
    # =========================================================================

    def _parse_translation_unit(self) -> SyntaxNode:
        items = []

        while not self._peek().at_end:
            items.append(self._parse_external_declaration())

        return self._node(
            SyntaxType.TRANSLATION_UNIT,
            items,
            SourceLocation(self.lexer.filename, 1, 1),
        )

    def _parse_external_declaration(self) -> SyntaxNode:
        """
        Parse one top-level item.

        Returns:
            A Terminal for a preprocessor line, otherwise a StructDefine,
            FuncDeclare, FuncDefine or VariableDefine node
        """
        token = self._peek()
        logger.debug(f"Top-level item at {token.location}: {token}")

        if token.kind is TokenKind.PREPROCESSOR:
            return self._terminal(self._advance())

        if token.is_keyword(KeyWord.STRUCT):
            return self._parse_struct_define()

        if not token.is_type_keyword():
            raise self._error("declaration or definition")

        var_type = self._parse_variable_type(allow_void=True)
        name = self._terminal(self._expect_kind(TokenKind.IDENTIFIER, "identifier"))

        if self._check_bracket(Bracket.LEFT_PARENTHESIS):
            return self._parse_function(var_type, name)

        if self._is_void(var_type):
            raise self._error("'(' after a void declaration")

        return self._parse_variable_define_rest(var_type, name)

    def _parse_variable_type(self, allow_void: bool = False) -> SyntaxNode:
        """
        Parse a type keyword sequence.

        Accepted forms:
            [signed|unsigned] [short|long|long long] [int|char]  (one or more parts)
            float | double | long double
            void  (only where allow_void is set)
        """
        start = self._peek()

        if start.is_keyword(KeyWord.FLOAT, KeyWord.DOUBLE):
            return self._node(SyntaxType.VARIABLE_TYPE, [self._terminal(self._advance())])

        if start.is_keyword(KeyWord.VOID):
            if not allow_void:
                raise self._error("variable type ('void' is only valid for return types)")
            return self._node(SyntaxType.VARIABLE_TYPE, [self._terminal(self._advance())])

        parts: list[SyntaxNode] = []

        if self._peek().is_keyword(KeyWord.SIGNED, KeyWord.UNSIGNED):
            parts.append(self._terminal(self._advance()))

        sized = False
        if self._peek().is_keyword(KeyWord.SHORT):
            parts.append(self._terminal(self._advance()))
            sized = True
        elif self._peek().is_keyword(KeyWord.LONG):
            parts.append(self._terminal(self._advance()))
            sized = True
            if self._peek().is_keyword(KeyWord.LONG):
                parts.append(self._terminal(self._advance()))
            elif self._peek().is_keyword(KeyWord.DOUBLE) and len(parts) == 1:
                parts.append(self._terminal(self._advance()))
                return self._node(SyntaxType.VARIABLE_TYPE, parts)

        if self._peek().is_keyword(KeyWord.INT):
            parts.append(self._terminal(self._advance()))
        elif self._peek().is_keyword(KeyWord.CHAR) and not sized:
            parts.append(self._terminal(self._advance()))

        if not parts:
            raise self._error("type specifier")

        return self._node(SyntaxType.VARIABLE_TYPE, parts)

    @staticmethod
    def _is_void(var_type: SyntaxNode) -> bool:
        first = var_type.children[0]
        return first.token.is_keyword(KeyWord.VOID)

    def _parse_function(self, ret_type: SyntaxNode, name: SyntaxNode) -> SyntaxNode:
        """
        Parse the rest of a function after its name.

        The token after ')' decides the production: ';' makes a
        FuncDeclare, '{' a FuncDefine.
        """
        opening = self._expect_bracket(Bracket.LEFT_PARENTHESIS)
        args = self._parse_func_arg_list()
        self._expect_closing(Bracket.RIGHT_PARENTHESIS, opening)

        if self._match_kind(TokenKind.SEMICOLON):
            return self._node(SyntaxType.FUNC_DECLARE, [ret_type, name, *args])

        if self._check_bracket(Bracket.LEFT_CURLY_BRACKET):
            body = self._parse_stmt_block()
            return self._node(SyntaxType.FUNC_DEFINE, [ret_type, name, *args, body])

        raise self._error("';' or '{' after function signature")

    def _parse_func_arg_list(self) -> list[SyntaxNode]:
        """Parse comma-separated arguments; empty and '(void)' lists allowed."""
        if self._check_bracket(Bracket.RIGHT_PARENTHESIS):
            return []

        if self._peek().is_keyword(KeyWord.VOID) and self._peek(1).is_bracket(Bracket.RIGHT_PARENTHESIS):
            self._advance()
            return []

        args = [self._parse_func_arg()]
        while self._match_kind(TokenKind.COMMA):
            args.append(self._parse_func_arg())

        return args

    def _parse_func_arg(self) -> SyntaxNode:
        var_type = self._parse_variable_type()
        name = self._terminal(self._expect_kind(TokenKind.IDENTIFIER, "argument name"))
        return self._node(SyntaxType.FUNC_ARG, [var_type, name])

    def _parse_variable_define(self) -> SyntaxNode:
        var_type = self._parse_variable_type()
        name = self._terminal(self._expect_kind(TokenKind.IDENTIFIER, "identifier"))
        return self._parse_variable_define_rest(var_type, name)

    def _parse_variable_define_rest(self, var_type: SyntaxNode, first: SyntaxNode) -> SyntaxNode:
        """Parse ', name'* ';' after the first declared name."""
        names = [first]
        while self._match_kind(TokenKind.COMMA):
            names.append(self._terminal(self._expect_kind(TokenKind.IDENTIFIER, "identifier")))
        self._expect_semicolon()
        return self._node(SyntaxType.VARIABLE_DEFINE, [var_type, *names])

    def _parse_struct_define(self) -> SyntaxNode:
        """
        Parse a struct definition.

            struct Point { int x; int y; };
            struct { int x; int y; };
        """
        keyword = self._advance()
        children = []

        if self._check_kind(TokenKind.IDENTIFIER):
            children.append(self._terminal(self._advance()))

        opening = self._expect_bracket(Bracket.LEFT_CURLY_BRACKET)

        while not self._check_bracket(Bracket.RIGHT_CURLY_BRACKET) and not self._peek().at_end:
            if not self._peek().is_type_keyword():
                raise self._error("struct member declaration")
            children.append(self._parse_variable_define())

        self._expect_closing(Bracket.RIGHT_CURLY_BRACKET, opening)
        self._expect_semicolon()

        return self._node(SyntaxType.STRUCT_DEFINE, children, keyword.location)

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_stmt(self) -> SyntaxNode:
        """Parse any statement, dispatching on the lookahead token."""
        token = self._peek()
        logger.debug(f"Statement at {token.location}: {token}")

        if token.is_bracket(Bracket.LEFT_CURLY_BRACKET):
            return self._parse_stmt_block()
        if token.is_keyword(KeyWord.IF):
            return self._parse_if_stmt()
        if token.is_keyword(KeyWord.WHILE):
            return self._parse_while_loop()
        if token.is_keyword(KeyWord.FOR):
            return self._parse_for_loop()
        if token.is_keyword(KeyWord.BREAK):
            return self._parse_break_stmt()
        if token.is_keyword(KeyWord.RETURN):
            return self._parse_return_stmt()
        if token.kind is TokenKind.SEMICOLON:
            self._advance()
            return self._node(SyntaxType.EMPTY, [], token.location)
        if token.is_type_keyword():
            return self._parse_variable_define()

        if token.kind is TokenKind.IDENTIFIER:
            if self._peek(1).is_operator(Operator.ASSIGN):
                return self._parse_assign_stmt()
            raise self._error("'=' after identifier", self._peek(1))

        raise self._error("statement")

    def _parse_stmt_block(self) -> SyntaxNode:
        """Parse a block statement { ... }."""
        opening = self._expect_bracket(Bracket.LEFT_CURLY_BRACKET)
        statements = self._parse_stmt_list()
        self._expect_closing(Bracket.RIGHT_CURLY_BRACKET, opening)
        return self._node(SyntaxType.STMT_BLOCK, statements, opening.location)

    def _parse_stmt_list(self) -> list[SyntaxNode]:
        statements = []
        while not self._check_bracket(Bracket.RIGHT_CURLY_BRACKET) and not self._peek().at_end:
            statements.append(self._parse_stmt())
        return statements

    def _parse_condition(self) -> SyntaxNode:
        """Parse '(' bool_expr ')' for if/while."""
        opening = self._expect_bracket(Bracket.LEFT_PARENTHESIS)
        condition = self._parse_bool_expr()
        self._check_strict_condition(condition)
        self._expect_closing(Bracket.RIGHT_PARENTHESIS, opening)
        return condition

    def _check_strict_condition(self, condition: SyntaxNode) -> None:
        if self.strict_conditions and not condition.is_boolean:
            raise self._error(BOOLEAN_OPERATORS_TEXT)

    def _parse_if_stmt(self) -> SyntaxNode:
        """Parse if statement; the else branch is mandatory."""
        keyword = self._advance()
        condition = self._parse_condition()
        then_branch = self._parse_stmt()

        if not self._peek().is_keyword(KeyWord.ELSE):
            raise self._error("'else'")
        self._advance()

        else_branch = self._parse_stmt()

        return self._node(
            SyntaxType.IF_STMT,
            [condition, then_branch, else_branch],
            keyword.location,
        )

    def _parse_while_loop(self) -> SyntaxNode:
        keyword = self._advance()
        condition = self._parse_condition()
        body = self._parse_stmt()
        return self._node(SyntaxType.WHILE_LOOP, [condition, body], keyword.location)

    def _parse_for_loop(self) -> SyntaxNode:
        """
        Parse for statement.

        Each of the three clauses may be omitted; an omitted clause is
        an Empty node so the ForLoop always has four children.
        """
        keyword = self._advance()
        opening = self._expect_bracket(Bracket.LEFT_PARENTHESIS)

        initializer = self._parse_for_clause()
        self._expect_semicolon()

        condition = self._parse_for_clause()
        if condition.kind is not SyntaxType.EMPTY:
            self._check_strict_condition(condition)
        self._expect_semicolon()

        step = self._parse_for_clause()
        self._expect_closing(Bracket.RIGHT_PARENTHESIS, opening)

        body = self._parse_stmt()

        return self._node(
            SyntaxType.FOR_LOOP,
            [initializer, condition, step, body],
            keyword.location,
        )

    def _parse_for_clause(self) -> SyntaxNode:
        token = self._peek()

        if token.kind is TokenKind.SEMICOLON or token.is_bracket(Bracket.RIGHT_PARENTHESIS):
            return self._node(SyntaxType.EMPTY, [], token.location)

        if token.kind is TokenKind.IDENTIFIER and self._peek(1).is_operator(Operator.ASSIGN):
            return self._parse_assignment()

        return self._parse_bool_expr()

    def _parse_break_stmt(self) -> SyntaxNode:
        keyword = self._advance()
        self._expect_semicolon()
        return self._node(SyntaxType.BREAK_STMT, [], keyword.location)

    def _parse_return_stmt(self) -> SyntaxNode:
        keyword = self._advance()

        children = []
        if not self._check_kind(TokenKind.SEMICOLON):
            children.append(self._parse_bool_expr())

        self._expect_semicolon()
        return self._node(SyntaxType.RETURN_STMT, children, keyword.location)

    def _parse_assign_stmt(self) -> SyntaxNode:
        assignment = self._parse_assignment()
        self._expect_semicolon()
        return assignment

    def _parse_assignment(self) -> SyntaxNode:
        """Parse left_value '=' right_value (no terminating ';')."""
        target = self._terminal(self._expect_kind(TokenKind.IDENTIFIER, "identifier"))
        if not self._peek().is_operator(Operator.ASSIGN):
            raise self._error("'='")
        self._advance()
        value = self._parse_bool_expr()
        return self._node(SyntaxType.ASSIGN_STMT, [target, value])

    # =========================================================================
    # Expression Parsing (Operator Precedence)
    # =========================================================================

    def _parse_chain(
        self,
        kind: SyntaxType,
        operators: tuple[Operator, ...],
        operand_parser: Callable[[], SyntaxNode],
        first: Optional[SyntaxNode] = None,
    ) -> SyntaxNode:
        """
        Generic left-recursion-free level parser.

        Parses B (op B)* into one flat node [B0, op1, B1, ...]. When no
        operator follows the first operand, the operand itself is returned.

        Args:
            kind: Node kind for this precedence level
            operators: Operators that continue the chain
            operand_parser: Parser for the next-higher level
            first: An already parsed first operand, if any
        """
        operand = first if first is not None else operand_parser()
        children = [operand]

        while self._peek().is_operator(*operators):
            children.append(self._terminal(self._advance()))
            children.append(operand_parser())

        if len(children) == 1:
            return operand
        return self._node(kind, children)

    # --- arithmetic ---------------------------------------------------------

    def _parse_expr(self, first: Optional[SyntaxNode] = None) -> SyntaxNode:
        return self._parse_chain(SyntaxType.EXPR, ADDITIVE, self._parse_expr_mul, first)

    def _parse_expr_mul(self, first: Optional[SyntaxNode] = None) -> SyntaxNode:
        return self._parse_chain(SyntaxType.EXPR_MUL, MULTIPLICATIVE, self._parse_expr_factor, first)

    def _parse_expr_factor(self) -> SyntaxNode:
        token = self._peek()

        if token.is_bracket(Bracket.LEFT_PARENTHESIS):
            opening = self._advance()
            inner = self._parse_expr()
            self._expect_closing(Bracket.RIGHT_PARENTHESIS, opening)
            return inner

        if token.kind in (TokenKind.IDENTIFIER, TokenKind.NUMBER):
            return self._terminal(self._advance())

        raise self._error("identifier, number or '('")

    # --- boolean ------------------------------------------------------------

    def _parse_bool_expr(self) -> SyntaxNode:
        return self._parse_chain(SyntaxType.BOOL_EXPR, LOGICAL_OR, self._parse_bool_expr_and)

    def _parse_bool_expr_and(self) -> SyntaxNode:
        return self._parse_chain(SyntaxType.BOOL_EXPR_AND, LOGICAL_AND, self._parse_bool_expr_equal)

    def _parse_bool_expr_equal(self) -> SyntaxNode:
        return self._parse_chain(SyntaxType.BOOL_EXPR_EQUAL, EQUALITY, self._parse_bool_expr_cmp)

    def _parse_bool_expr_cmp(self) -> SyntaxNode:
        return self._parse_chain(SyntaxType.BOOL_EXPR_CMP, COMPARISON, self._parse_bool_expr_factor)

    def _parse_bool_expr_factor(self) -> SyntaxNode:
        """
        Parse a boolean factor, chosen by one token of lookahead.

        '!'  -> BoolExprNot over the following bool_expr
        '('  -> parenthesized bool_expr; if it turns out to be arithmetic
                and an arithmetic operator follows, the arithmetic chain
                continues from it, e.g. '(a + b) * c'
        else -> a plain arithmetic expr used as the boolean value
        """
        token = self._peek()

        if token.is_operator(Operator.LOGIC_NOT):
            operator = self._terminal(self._advance())
            operand = self._parse_bool_expr()
            return self._node(SyntaxType.BOOL_EXPR_NOT, [operator, operand])

        if token.is_bracket(Bracket.LEFT_PARENTHESIS):
            opening = self._advance()
            inner = self._parse_bool_expr()
            self._expect_closing(Bracket.RIGHT_PARENTHESIS, opening)

            if inner.is_arithmetic and self._peek().is_operator(*ADDITIVE, *MULTIPLICATIVE):
                return self._parse_expr(first=self._parse_expr_mul(first=inner))
            return inner

        return self._parse_expr()

