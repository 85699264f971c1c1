"""
GScript Lexer Package

Implements the lexical analyzer (tokenizer) for the GScript language.

Key Features:
- Single pass with one character of lookahead
- Case-insensitive keyword recognition
- Line/column tracking on every token
- Fail-fast diagnostics (first error aborts the scan)
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .lexer import Lexer, scan, tokenize_file
from .errors import Diagnostic, DiagnosticError, LexError

__all__ = [
    "Lexer",
    "scan",
    "tokenize_file",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "Diagnostic",
    "DiagnosticError",
    "LexError",
]
