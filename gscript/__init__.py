"""
GScript Interpreter Package

A small dynamically typed scripting language with first-class closures,
run by a tree-walking interpreter.

Architecture:
    gscript/
    ├── lexer/           # Source text to tokens
    ├── parser/          # Tokens to an immutable AST
    ├── runtime/         # Values, environments and the interpreter
    └── cli.py           # `gscript` command-line entry point

License: MIT
"""

import logging

from ._version import __version__
from .lexer import Lexer, scan, tokenize_file, LexError, DiagnosticError
from .parser import Parser, parse, parse_string, parse_file, ParseError
from .runtime import Interpreter, run_source, run_file, ScriptRuntimeError

__license__ = "MIT"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Pipeline
    "Lexer", "scan", "tokenize_file",
    "Parser", "parse", "parse_string", "parse_file",
    "Interpreter", "run_source", "run_file",

    # Errors
    "DiagnosticError", "LexError", "ParseError", "ScriptRuntimeError",

    # Version info
    "__version__",
]
