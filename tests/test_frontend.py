# =============================================================================
# test_frontend.py - Front-End Driver Tests
# =============================================================================
# Tests for Frontend, FrontendOptions and the convenience functions.
# =============================================================================

import logging

import pytest

from rdcc.errors import RdccError
from rdcc.syntax import (
    Frontend,
    FrontendOptions,
    ParseError,
    SyntaxType,
    parse_source,
    tokenize,
)


class TestFrontend:
    """Test the Frontend driver."""

    def test_parse_source(self):
        result = Frontend().parse_source(b"int f(int a);")
        assert result.filename == "<input>"
        assert result.tree.root[0].kind is SyntaxType.FUNC_DECLARE
        assert result.token_count == 8

    def test_filename_from_options(self):
        frontend = Frontend(FrontendOptions(filename="prog.c"))
        with pytest.raises(ParseError) as exc_info:
            frontend.parse_source(b"int x")
        assert str(exc_info.value).startswith("prog.c:1:6: error:")

    def test_filename_override(self):
        frontend = Frontend(FrontendOptions(filename="prog.c"))
        result = frontend.parse_source(b"int x;", "other.c")
        assert result.filename == "other.c"
        assert result.tree.root.location.filename == "other.c"

    def test_dump_indent(self):
        frontend = Frontend(FrontendOptions(dump_indent="    "))
        result = frontend.parse_source(b"int x;")
        assert result.dump().splitlines()[1] == "    VariableDefine"

    def test_strict_option(self):
        frontend = Frontend(FrontendOptions(strict_conditions=True))
        with pytest.raises(ParseError):
            frontend.parse_source(b"int f() { while (x) x = 0; }")

    def test_parse_file(self, tmp_path):
        source_file = tmp_path / "hello.c"
        source_file.write_bytes(b"#include <stdio.h>\nint main() { return 0; }\n")

        result = Frontend().parse_file(source_file)

        assert result.filename == str(source_file)
        assert [n.kind for n in result.tree.root.children] == [
            SyntaxType.TERMINAL,
            SyntaxType.FUNC_DEFINE,
        ]

    def test_parse_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Frontend().parse_file(tmp_path / "missing.c")

    def test_tokenize_source(self):
        tokens = Frontend().tokenize_source(b"a = 1;")
        assert [str(t) for t in tokens] == [
            'Identifier("a")',
            "Operator(Assign)",
            'Number("1")',
            "Semicolon",
            "EndOfStream",
        ]

    def test_logs_summary(self, caplog):
        caplog.set_level(logging.INFO, logger="rdcc")
        Frontend().parse_source(b"int x;", "log.c")
        assert "Parsed log.c: 4 tokens, 1 top-level items" in caplog.text


class TestConvenienceFunctions:
    """Test the module-level helpers."""

    def test_parse_source(self):
        tree = parse_source(b"struct { int x; };")
        assert tree.root[0].kind is SyntaxType.STRUCT_DEFINE

    def test_parse_source_strict(self):
        with pytest.raises(ParseError):
            parse_source(b"int f() { if (x) x = 1; else x = 2; }", strict_conditions=True)

    def test_tokenize(self):
        tokens = tokenize(b"x", "t.c")
        assert tokens[0].filename == "t.c"
        assert tokens[-1].at_end

    def test_errors_share_base(self):
        with pytest.raises(RdccError):
            parse_source(b"int x = 1;")
