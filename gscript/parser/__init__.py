"""
GScript Parser Package

Implements a recursive descent, operator-precedence parser for GScript.
Produces immutable AST nodes annotated with source locations.
"""

from .ast_nodes import (
    ASTNode, Expression, Statement,
    Literal, Variable, Assign, Binary, Unary, Logical, Call, Grouping,
    VarDecl, FunctionDecl, ExpressionStmt, PrintStmt, ReturnStmt,
    IfStmt, WhileStmt, ForStmt, BlockStmt,
)
from .parser import Parser, parse, parse_string, parse_file
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser", "parse", "parse_string", "parse_file",

    # AST nodes
    "ASTNode", "Expression", "Statement",
    "Literal", "Variable", "Assign", "Binary", "Unary", "Logical", "Call", "Grouping",
    "VarDecl", "FunctionDecl", "ExpressionStmt", "PrintStmt", "ReturnStmt",
    "IfStmt", "WhileStmt", "ForStmt", "BlockStmt",

    # Error handling
    "ParseError",
]
