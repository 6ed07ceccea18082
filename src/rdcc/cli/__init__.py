"""
rdcc Command-Line Interface
===========================

This package provides the command-line tool for the C front end:

- **rdcc**: prints the token stream or the syntax tree of a C file

The tool is implemented as a Click-based CLI application.
"""

__all__ = ["rdcc"]
