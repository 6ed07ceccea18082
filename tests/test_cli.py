# =============================================================================
# test_cli.py - rdcc Command-Line Tests
# =============================================================================
# Tests for the rdcc CLI tool: output modes, options and exit codes.
# =============================================================================

import pytest

from rdcc.cli.errors import ExitCode


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "prog.c"
    path.write_bytes(b"int x;\n")
    return path


class TestRdccCLI:
    """Tests for the rdcc CLI tool."""

    def test_cli_help(self):
        from click.testing import CliRunner
        from rdcc.cli.rdcc import main

        runner = CliRunner()
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Parse a C source file" in result.output

    def test_cli_version(self):
        from click.testing import CliRunner
        from rdcc.cli.rdcc import main

        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_cli_tree_dump(self, source_file):
        from click.testing import CliRunner
        from rdcc.cli.rdcc import main

        runner = CliRunner()
        result = runner.invoke(main, [str(source_file)])

        assert result.exit_code == ExitCode.SUCCESS
        assert result.output == (
            "TranslationUnit\n"
            "  VariableDefine\n"
            "    VariableType\n"
            "      Terminal(KeyWord(Int))\n"
            "    Terminal(Identifier(\"x\"))\n"
        )

    def test_cli_indent(self, source_file):
        from click.testing import CliRunner
        from rdcc.cli.rdcc import main

        runner = CliRunner()
        result = runner.invoke(main, [str(source_file), "--indent", "4"])

        assert result.exit_code == 0
        assert result.output.splitlines()[2] == "        VariableType"

    def test_cli_tokens(self, source_file):
        from click.testing import CliRunner
        from rdcc.cli.rdcc import main

        runner = CliRunner()
        result = runner.invoke(main, ["--tokens", str(source_file)])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "KeyWord(Int)",
            'Identifier("x")',
            "Semicolon",
            "EndOfStream",
        ]

    def test_cli_verbose(self, source_file):
        from click.testing import CliRunner
        from rdcc.cli.rdcc import main

        runner = CliRunner()
        result = runner.invoke(main, ["-v", str(source_file)])

        assert result.exit_code == 0
        assert "Tokenized: 4 tokens" in result.output

    def test_cli_parse_error(self, tmp_path):
        from click.testing import CliRunner
        from rdcc.cli.rdcc import main

        bad = tmp_path / "bad.c"
        bad.write_bytes(b"int x")

        runner = CliRunner()
        result = runner.invoke(main, [str(bad)])

        assert result.exit_code == ExitCode.SYNTAX_ERROR
        assert "error: expected ';', found EndOfStream" in result.output

    def test_cli_lex_error(self, tmp_path):
        from click.testing import CliRunner
        from rdcc.cli.rdcc import main

        bad = tmp_path / "bad.c"
        bad.write_bytes(b"int x; x & y")

        runner = CliRunner()
        result = runner.invoke(main, ["--tokens", str(bad)])

        assert result.exit_code == ExitCode.SYNTAX_ERROR
        assert "invalid byte '&'" in result.output

    def test_cli_strict(self, tmp_path):
        from click.testing import CliRunner
        from rdcc.cli.rdcc import main

        loose = tmp_path / "loose.c"
        loose.write_bytes(b"int f() { while (n) n = n - 1; }")

        runner = CliRunner()
        assert runner.invoke(main, [str(loose)]).exit_code == 0
        assert runner.invoke(main, ["--strict", str(loose)]).exit_code == ExitCode.SYNTAX_ERROR

    def test_cli_missing_file(self, tmp_path):
        from click.testing import CliRunner
        from rdcc.cli.rdcc import main

        runner = CliRunner()
        result = runner.invoke(main, [str(tmp_path / "missing.c")])

        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_cli_negative_indent(self, source_file):
        from click.testing import CliRunner
        from rdcc.cli.rdcc import main

        runner = CliRunner()
        result = runner.invoke(main, [str(source_file), "--indent", "-1"])

        assert result.exit_code == ExitCode.INVALID_ARGS
