#!/usr/bin/env python3
"""
C Front-End Demo
================

This script demonstrates how to use the rdcc front end to:
1. List the tokens of a C program
2. Parse it and dump the syntax tree
3. Inspect the tree programmatically
4. Report a syntax error

Usage:
    source .venv/bin/activate
    python examples/parse_demo.py
"""

from rdcc.syntax import CSyntaxError, Lexer, Parser, SyntaxType, parse_source


SOURCE = b"""\
#include <iostream.h>

struct Point { int x, y; };

int main(int a, double b);

int main(int a, double b) {
    int i;
    for (i = 0; i != 10; i = i + 1)
        if (a + b != i * 2 || !a) a = a - 1; else break;
    return a;
}
"""


def main():
    # ==========================================================================
    # 1. Token stream
    # ==========================================================================
    print("Tokens:")
    for token in Lexer(SOURCE, "demo.c"):
        print(f"  {token}")

    # ==========================================================================
    # 2. Parse and dump
    # ==========================================================================
    parser = Parser(Lexer(SOURCE, "demo.c"))
    tree = parser.run()
    print(f"\nresult: {tree}\n")
    parser.dump()

    # ==========================================================================
    # 3. Walk the tree
    # ==========================================================================
    functions = tree.find_all(SyntaxType.FUNC_DEFINE)
    print(f"\n{len(functions)} function definition(s), {tree.node_count()} nodes")

    # ==========================================================================
    # 4. Error reporting
    # ==========================================================================
    try:
        parse_source(b"int f() { if (a) b = 1; }", filename="broken.c")
    except CSyntaxError as e:
        print(f"\n{e}")


if __name__ == "__main__":
    main()
