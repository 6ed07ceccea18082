# =============================================================================
# test_ast.py - Syntax Tree Tests
# =============================================================================
# Tests for SyntaxNode, SyntaxTree traversal and the tree printer.
# =============================================================================

import io

import pytest

from rdcc.errors import SourceLocation
from rdcc.syntax.ast import SyntaxNode, SyntaxTree, SyntaxType, TreePrinter
from rdcc.syntax.frontend import parse_source
from rdcc.syntax.token import Token, TokenKind


SAMPLE = b"""
int f(int a) {
    if (a > 0) return a; else return 0;
}
"""

SAMPLE_DUMP = """\
TranslationUnit
  FuncDefine
    VariableType
      Terminal(KeyWord(Int))
    Terminal(Identifier("f"))
    FuncArg
      VariableType
        Terminal(KeyWord(Int))
      Terminal(Identifier("a"))
    StmtBlock
      IfStmt
        BoolExprCmp
          Terminal(Identifier("a"))
          Terminal(Operator(Greater))
          Terminal(Number("0"))
        ReturnStmt
          Terminal(Identifier("a"))
        ReturnStmt
          Terminal(Number("0"))"""


def identifier(name: str) -> SyntaxNode:
    return SyntaxNode.terminal(Token(TokenKind.IDENTIFIER, name))


# =============================================================================
# Node Tests
# =============================================================================

class TestSyntaxNode:
    """Test node construction and classification."""

    def test_kind_labels(self):
        assert SyntaxType.TRANSLATION_UNIT.label == "TranslationUnit"
        assert SyntaxType.BOOL_EXPR_NOT.label == "BoolExprNot"
        assert SyntaxType.EXPR_MUL.label == "ExprMul"

    def test_terminal(self):
        node = identifier("x")
        assert node.is_terminal
        assert node.children == ()
        assert str(node) == 'Terminal(Identifier("x"))'
        assert node.location == SourceLocation("<input>", 1, 1)

    def test_classification(self):
        expr = SyntaxNode(SyntaxType.EXPR, (identifier("a"),))
        cmp = SyntaxNode(SyntaxType.BOOL_EXPR_CMP, (identifier("a"),))
        block = SyntaxNode(SyntaxType.STMT_BLOCK)
        assert expr.is_arithmetic and not expr.is_boolean
        assert cmp.is_boolean and not cmp.is_arithmetic
        assert identifier("a").is_arithmetic
        assert not block.is_arithmetic and not block.is_boolean

    def test_empty_node_is_truthy(self):
        assert SyntaxNode(SyntaxType.EMPTY)

    def test_equality_ignores_location(self):
        a = SyntaxNode(SyntaxType.BREAK_STMT, location=SourceLocation("a.c", 1, 1))
        b = SyntaxNode(SyntaxType.BREAK_STMT, location=SourceLocation("b.c", 9, 9))
        assert a == b

    def test_nodes_are_immutable(self):
        node = SyntaxNode(SyntaxType.BREAK_STMT)
        with pytest.raises(AttributeError):
            node.kind = SyntaxType.EMPTY

    def test_repr(self):
        node = SyntaxNode(SyntaxType.ASSIGN_STMT, (identifier("a"), identifier("b")))
        assert repr(node) == 'AssignStmt[Terminal(Identifier("a")), Terminal(Identifier("b"))]'


# =============================================================================
# Tree Tests
# =============================================================================

class TestSyntaxTree:
    """Test traversal helpers."""

    def test_root_must_be_translation_unit(self):
        with pytest.raises(ValueError):
            SyntaxTree(SyntaxNode(SyntaxType.STMT_BLOCK))

    def test_walk_preorder_with_depth(self):
        tree = parse_source(b"int a, b;")
        walked = [(depth, str(node)) for depth, node in tree.walk()]
        assert walked == [
            (0, "TranslationUnit"),
            (1, "VariableDefine"),
            (2, "VariableType"),
            (3, "Terminal(KeyWord(Int))"),
            (2, 'Terminal(Identifier("a"))'),
            (2, 'Terminal(Identifier("b"))'),
        ]

    def test_find_all(self):
        tree = parse_source(SAMPLE)
        returns = tree.find_all(SyntaxType.RETURN_STMT)
        assert len(returns) == 2
        assert str(returns[1][0]) == 'Terminal(Number("0"))'

    def test_node_count(self):
        tree = parse_source(SAMPLE)
        assert tree.node_count() == 19

    def test_node_locations(self):
        tree = parse_source(SAMPLE, filename="sample.c")
        if_stmt = tree.find_all(SyntaxType.IF_STMT)[0]
        assert if_stmt.location == SourceLocation("sample.c", 3, 5)


# =============================================================================
# Printer Tests
# =============================================================================

class TestTreePrinter:
    """Test the textual tree dump."""

    def test_golden_dump(self):
        tree = parse_source(SAMPLE)
        assert TreePrinter().print(tree) == SAMPLE_DUMP

    def test_render_custom_indent(self):
        tree = parse_source(b"int x;")
        assert tree.render(indent="\t").splitlines() == [
            "TranslationUnit",
            "\tVariableDefine",
            "\t\tVariableType",
            "\t\t\tTerminal(KeyWord(Int))",
            '\t\tTerminal(Identifier("x"))',
        ]

    def test_write_to_stream(self):
        tree = parse_source(SAMPLE)
        out = io.StringIO()
        TreePrinter().write(tree, out)
        assert out.getvalue() == SAMPLE_DUMP + "\n"

    def test_empty_translation_unit(self):
        assert parse_source(b"").render() == "TranslationUnit"

    def test_deep_tree(self):
        """Dumping does not recurse, so very deep trees render."""
        node = SyntaxNode(SyntaxType.EMPTY)
        for _ in range(5000):
            node = SyntaxNode(SyntaxType.STMT_BLOCK, (node,))
        tree = SyntaxTree(SyntaxNode(SyntaxType.TRANSLATION_UNIT, (node,)))

        lines = tree.render(indent=" ").splitlines()
        assert len(lines) == 5002
        assert lines[-1] == " " * 5001 + "Empty"
