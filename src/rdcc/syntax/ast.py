"""
C Abstract Syntax Tree (AST) Definitions
========================================

This module defines the syntax tree built by the recursive-descent
parser. Every node is a SyntaxNode tagged with a SyntaxType; non-terminal
nodes own an ordered tuple of children, terminal nodes wrap one Token.

Node Kinds
----------
TranslationUnit - root, top-level items in source order
├── Declarations
│   ├── FuncDeclare - function prototype (no body)
│   ├── FuncDefine - function with a StmtBlock body
│   ├── FuncArg - one 'type name' parameter
│   ├── VariableDefine - type followed by one or more names
│   ├── StructDefine - optional name and member VariableDefines
│   └── VariableType - the keyword sequence of a type
├── Statements
│   ├── StmtBlock, IfStmt, WhileLoop, ForLoop
│   ├── AssignStmt, ReturnStmt, BreakStmt
│   └── Empty - placeholder for ';' and omitted for-clauses
├── Expressions (one node per precedence level)
│   ├── Expr (+ -), ExprMul (* /)
│   └── BoolExpr (||), BoolExprAnd (&&), BoolExprEqual (== !=),
│       BoolExprCmp (> >= < <=), BoolExprNot (! prefix)
└── Terminal - one Token, no children

Design Notes
------------
- A precedence-level node holds operands and operators interleaved in
  source order: [B0, op1, B1, op2, B2, ...]. A level that matched no
  operator creates no node at all.
- Nodes are frozen and children are tuples, so a finished tree cannot
  be mutated.
- Traversal is iterative (explicit stack), so dumping a deep tree does
  not depend on the interpreter's recursion limit.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Optional, TextIO

from rdcc.errors import SourceLocation
from rdcc.syntax.token import Token


# =============================================================================
# Node Kinds
# =============================================================================

class SyntaxType(Enum):
    """Kind tag of a syntax tree node."""

    TRANSLATION_UNIT = auto()

    # Declarations
    FUNC_DEFINE = auto()
    FUNC_DECLARE = auto()
    FUNC_ARG = auto()
    VARIABLE_DEFINE = auto()
    STRUCT_DEFINE = auto()
    VARIABLE_TYPE = auto()

    # Statements
    STMT_BLOCK = auto()
    IF_STMT = auto()
    WHILE_LOOP = auto()
    FOR_LOOP = auto()
    ASSIGN_STMT = auto()
    RETURN_STMT = auto()
    BREAK_STMT = auto()
    EMPTY = auto()

    # Arithmetic expressions
    EXPR = auto()
    EXPR_MUL = auto()

    # Boolean expressions
    BOOL_EXPR = auto()
    BOOL_EXPR_AND = auto()
    BOOL_EXPR_EQUAL = auto()
    BOOL_EXPR_CMP = auto()
    BOOL_EXPR_NOT = auto()

    TERMINAL = auto()

    @property
    def label(self) -> str:
        """Kind name as printed by the tree dump (e.g. 'StmtBlock')."""
        return "".join(part.capitalize() for part in self.name.split("_"))


ARITHMETIC_KINDS = frozenset({SyntaxType.EXPR, SyntaxType.EXPR_MUL})

BOOLEAN_KINDS = frozenset({
    SyntaxType.BOOL_EXPR,
    SyntaxType.BOOL_EXPR_AND,
    SyntaxType.BOOL_EXPR_EQUAL,
    SyntaxType.BOOL_EXPR_CMP,
    SyntaxType.BOOL_EXPR_NOT,
})


# =============================================================================
# Syntax Node
# =============================================================================

@dataclass(frozen=True)
class SyntaxNode:
    """
    A node of the syntax tree.

    Attributes:
        kind: The SyntaxType tag
        children: Ordered child nodes (empty for terminals)
        token: The wrapped Token (terminals only)
        location: Source location of the first token of the node
    """
    kind: SyntaxType
    children: tuple["SyntaxNode", ...] = ()
    token: Optional[Token] = None
    location: Optional[SourceLocation] = field(default=None, compare=False)

    @classmethod
    def terminal(cls, token: Token) -> "SyntaxNode":
        """Wrap a single token as a leaf."""
        return cls(SyntaxType.TERMINAL, (), token, token.location)

    @property
    def is_terminal(self) -> bool:
        return self.kind is SyntaxType.TERMINAL

    @property
    def is_arithmetic(self) -> bool:
        """True for arithmetic levels and for identifier/number leaves."""
        return self.is_terminal or self.kind in ARITHMETIC_KINDS

    @property
    def is_boolean(self) -> bool:
        return self.kind in BOOLEAN_KINDS

    def __str__(self) -> str:
        if self.is_terminal:
            return f"Terminal({self.token})"
        return self.kind.label

    def __repr__(self) -> str:
        if self.is_terminal:
            return str(self)
        return f"{self.kind.label}[{', '.join(repr(c) for c in self.children)}]"

    def __getitem__(self, index: int) -> "SyntaxNode":
        return self.children[index]


# =============================================================================
# Syntax Tree
# =============================================================================

class SyntaxTree:
    """
    A parsed translation unit.

    Usage:
        tree = parser.run()
        for depth, node in tree.walk():
            ...
        print(tree.render())

    Attributes:
        root: The TranslationUnit node
    """

    def __init__(self, root: SyntaxNode):
        if root.kind is not SyntaxType.TRANSLATION_UNIT:
            raise ValueError(f"tree root must be a TranslationUnit, not {root.kind.label}")
        self.root = root

    def __repr__(self) -> str:
        return f"SyntaxTree({len(self.root.children)} top-level items)"

    def walk(self) -> Iterator[tuple[int, SyntaxNode]]:
        """
        Depth-first pre-order traversal.

        Yields:
            (depth, node) pairs, the root at depth 0
        """
        stack = [(0, self.root)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            # Reversed so the leftmost child is visited first
            for child in reversed(node.children):
                stack.append((depth + 1, child))

    def find_all(self, kind: SyntaxType) -> list[SyntaxNode]:
        """Return every node of the given kind, in pre-order."""
        return [node for _, node in self.walk() if node.kind is kind]

    def node_count(self) -> int:
        return sum(1 for _ in self.walk())

    def render(self, indent: str = "  ") -> str:
        """Render the tree as text; see TreePrinter."""
        return TreePrinter(indent).print(self)


# =============================================================================
# Tree Printer
# =============================================================================

class TreePrinter:
    """
    Text renderer for syntax trees.

    Emits one line per node: non-terminals as their kind name, terminals
    as Terminal(<token>), each indented by its depth.

        TranslationUnit
          FuncDeclare
            VariableType
              Terminal(KeyWord(Int))
            Terminal(Identifier("f"))

    Usage:
        printer = TreePrinter()
        print(printer.print(tree))
    """

    def __init__(self, indent: str = "  "):
        self.indent = indent

    def lines(self, tree: SyntaxTree) -> Iterator[str]:
        for depth, node in tree.walk():
            yield f"{self.indent * depth}{node}"

    def print(self, tree: SyntaxTree) -> str:
        """Render the whole tree and return it as one string."""
        return "\n".join(self.lines(tree))

    def write(self, tree: SyntaxTree, stream: TextIO) -> None:
        for line in self.lines(tree):
            stream.write(line + "\n")
