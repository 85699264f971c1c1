"""
Runtime error handling for GScript.

Every failure during evaluation raises ScriptRuntimeError; the helpers
below build the common ones with their error codes.
"""

from typing import Optional, List

from ..lexer.tokens import SourceLocation
from ..lexer.errors import DiagnosticError


class ScriptRuntimeError(DiagnosticError):
    """
    Exception raised when evaluation of a program fails.

    Fatal to the current run: statements after the failing one never
    execute, but output already printed stays printed.
    """


# Runtime error codes for categorization
RUNTIME_ERROR_CODES = {
    "R001": "Undefined variable",
    "R002": "Operand type mismatch",
    "R003": "Division by zero",
    "R004": "Value is not callable",
    "R005": "Arity mismatch",
    "R006": "Return outside of a function",
    "R007": "Step limit exceeded",
    "R008": "Call depth exceeded",
}


def create_undefined_variable_error(
    name: str,
    location: Optional[SourceLocation] = None,
    similar_names: Optional[List[str]] = None
) -> ScriptRuntimeError:
    """Create an undefined variable error."""
    suggestions = []
    if similar_names:
        suggestions.extend([f"Did you mean '{similar}'?" for similar in similar_names[:3]])
    suggestions.append(f"Declare '{name}' with 'let' before using it")

    return ScriptRuntimeError(
        message=f"undefined variable '{name}'",
        location=location,
        code="R001",
        help_text=f"'{name}' is not bound in the current scope or any enclosing scope.",
        suggestions=suggestions
    )


def create_operand_error(
    message: str,
    operator: str,
    location: Optional[SourceLocation] = None
) -> ScriptRuntimeError:
    """Create an error for an operator applied to the wrong kinds of values."""
    return ScriptRuntimeError(
        message=f"{message} for operator '{operator}'",
        location=location,
        code="R002"
    )


def create_division_by_zero_error(location: Optional[SourceLocation] = None) -> ScriptRuntimeError:
    return ScriptRuntimeError(
        message="division by zero",
        location=location,
        code="R003"
    )


def create_not_callable_error(
    type_name: str,
    location: Optional[SourceLocation] = None
) -> ScriptRuntimeError:
    return ScriptRuntimeError(
        message=f"can only call functions, not {type_name}",
        location=location,
        code="R004"
    )


def create_arity_mismatch_error(
    name: str,
    expected: int,
    actual: int,
    location: Optional[SourceLocation] = None
) -> ScriptRuntimeError:
    """Create an error for a call with the wrong number of arguments."""
    return ScriptRuntimeError(
        message=f"expected {expected} arguments but got {actual}",
        location=location,
        code="R005",
        help_text=f"'{name}' is declared with {expected} parameter(s)."
    )


def create_top_level_return_error(location: Optional[SourceLocation] = None) -> ScriptRuntimeError:
    return ScriptRuntimeError(
        message="cannot return from top-level code",
        location=location,
        code="R006"
    )


def create_step_limit_error(
    max_steps: int,
    location: Optional[SourceLocation] = None
) -> ScriptRuntimeError:
    return ScriptRuntimeError(
        message=f"execution exceeded {max_steps} steps",
        location=location,
        code="R007",
        suggestions=["Check for a loop whose condition never becomes false"]
    )


def create_call_depth_error(
    max_depth: int,
    location: Optional[SourceLocation] = None
) -> ScriptRuntimeError:
    return ScriptRuntimeError(
        message=f"maximum call depth exceeded ({max_depth} nested calls)",
        location=location,
        code="R008",
        suggestions=["Check for recursion without a base case"]
    )
