"""
Error handling for the GScript parser.

The parser stops at the first syntax error; the helpers here build the
ParseError with a message naming the offending token's lexeme and line.
"""

from typing import Optional, List

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import DiagnosticError


class ParseError(DiagnosticError):
    """
    Exception raised when the parser encounters a syntax error.

    `token` is the offending token.
    """

    def __init__(
        self,
        message: str,
        token: Token,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message, token.location, code, help_text, suggestions)
        self.token = token


# Hints for the most common missing tokens
MISSING_TOKEN_SUGGESTIONS = {
    TokenType.SEMICOLON: ["Add a semicolon ';' to end the statement"],
    TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
    TokenType.RIGHT_BRACE: ["Add a closing brace '}'"],
    TokenType.LEFT_BRACE: ["Add an opening brace '{' to start a block"],
    TokenType.LEFT_PAREN: ["Add an opening parenthesis '('"],
}


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P005": "Invalid expression",
    "P013": "Too many parameters or arguments",
    "P014": "Unsupported construct",
    "P015": "Nesting too deep",
}

MAX_ARGUMENTS = 255


def describe(token: Token) -> str:
    """Render a token for error messages."""
    if token.type == TokenType.EOF:
        return "end of input"
    return f"'{token.lexeme}'"


def create_unexpected_token_error(expected: TokenType, message: str, found: Token) -> ParseError:
    """Create an error for a token that doesn't match what the grammar requires."""
    return ParseError(
        message=f"{message} Got: {describe(found)} (line {found.line})",
        token=found,
        code="P001",
        help_text=f"The parser expected {expected.name} at this position.",
        suggestions=MISSING_TOKEN_SUGGESTIONS.get(expected)
    )


def create_expected_expression_error(found: Token) -> ParseError:
    return ParseError(
        message=f"Expect expression. Got: {describe(found)} (line {found.line})",
        token=found,
        code="P005",
        help_text="An expression must start with a literal, a name, '(', '-' or '!'."
    )


def create_invalid_assignment_error(equals: Token) -> ParseError:
    """Create an error for `a + b = c` and other non-variable targets."""
    return ParseError(
        message=f"Invalid assignment target (line {equals.line})",
        token=equals,
        code="P005",
        help_text="Only a plain variable name can appear on the left of '='."
    )


def create_too_many_error(kind: str, token: Token) -> ParseError:
    """Create an error for parameter/argument lists longer than MAX_ARGUMENTS."""
    return ParseError(
        message=f"Cannot have more than {MAX_ARGUMENTS} {kind} (line {token.line})",
        token=token,
        code="P013"
    )


def create_unsupported_construct_error(construct: str, token: Token) -> ParseError:
    """Create an error for grammar the language reserves but does not execute."""
    return ParseError(
        message=f"Unsupported construct: {construct} (line {token.line})",
        token=token,
        code="P014",
        help_text=f"'{token.lexeme}' is reserved but has no meaning in GScript yet."
    )


def create_nesting_too_deep_error(token: Token) -> ParseError:
    """Create an error for input nested deeper than the parser can recurse."""
    return ParseError(
        message=f"Expression nested too deeply (line {token.line})",
        token=token,
        code="P015",
        help_text="Split deeply nested expressions or blocks into smaller pieces."
    )
