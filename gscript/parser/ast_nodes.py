"""
Abstract Syntax Tree node definitions for GScript.

Nodes are frozen dataclasses: once the parser returns a node it is never
mutated. Sequences are stored as tuples for the same reason. Every node
carries an optional source location which takes no part in equality, so
two parses of the same text compare equal node-for-node.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from ..lexer.tokens import SourceLocation


# Python value held by a Literal node: float, str, bool or None (nil)
LiteralValue = Union[float, str, bool, None]


class ASTNode:
    """Base class for all AST nodes."""
    location: Optional[SourceLocation]

    @property
    def line(self) -> Optional[int]:
        return self.location.line if self.location is not None else None


class Expression(ASTNode):
    """Base class for expressions."""


class Statement(ASTNode):
    """Base class for statements."""


def _location():
    return field(default=None, compare=False, repr=False)


# ============================================================================
# Expressions
# ============================================================================

@dataclass(frozen=True)
class Literal(Expression):
    value: LiteralValue
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Variable(Expression):
    name: str
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Assign(Expression):
    name: str
    value: Expression
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Binary(Expression):
    left: Expression
    operator: str
    right: Expression
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Unary(Expression):
    operator: str
    right: Expression
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Logical(Expression):
    """Short-circuiting `and` / `or`."""
    left: Expression
    operator: str
    right: Expression
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Call(Expression):
    callee: Expression
    arguments: Tuple[Expression, ...]
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Grouping(Expression):
    expression: Expression
    location: Optional[SourceLocation] = _location()


# ============================================================================
# Statements
# ============================================================================

@dataclass(frozen=True)
class VarDecl(Statement):
    name: str
    initializer: Optional[Expression]
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class FunctionDecl(Statement):
    name: str
    params: Tuple[str, ...]
    body: Tuple[Statement, ...]
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class ExpressionStmt(Statement):
    expression: Expression
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class PrintStmt(Statement):
    expression: Expression
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class ReturnStmt(Statement):
    value: Optional[Expression]
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class IfStmt(Statement):
    condition: Expression
    then_branch: Statement
    else_branch: Optional[Statement]
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class WhileStmt(Statement):
    condition: Expression
    body: Statement
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class BlockStmt(Statement):
    statements: Tuple[Statement, ...]
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class ForStmt(Statement):
    """
    C-style for loop as written in the source.

    The interpreter never sees this node: the parser hands back the result
    of `desugar()`, a block holding the initializer and a while loop.
    """
    initializer: Optional[Statement]
    condition: Optional[Expression]
    increment: Optional[Expression]
    body: Statement
    location: Optional[SourceLocation] = _location()

    def desugar(self) -> BlockStmt:
        body = self.body
        if self.increment is not None:
            increment = ExpressionStmt(self.increment, self.increment.location)
            body = BlockStmt((body, increment), self.body.location)

        # A missing condition loops forever
        condition = self.condition
        if condition is None:
            condition = Literal(True, self.location)

        loop = WhileStmt(condition, body, self.location)
        if self.initializer is None:
            return BlockStmt((loop,), self.location)
        return BlockStmt((self.initializer, loop), self.location)
