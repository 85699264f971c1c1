"""
GScript Runtime Package

Tree-walking evaluation of a parsed GScript program: runtime values,
the lexical environment chain, and the interpreter itself.
"""

from .values import (
    Value, ValueKind, NumberValue, BooleanValue, StringValue, NullValue,
    FunctionValue, NativeFunctionValue, NULL, TRUE, FALSE,
    is_truthy, values_equal, stringify,
)
from .environment import Environment
from .interpreter import Interpreter, Normal, Returned, NORMAL, run_source, run_file
from .errors import ScriptRuntimeError

__all__ = [
    # Interpreter
    "Interpreter", "Normal", "Returned", "NORMAL", "run_source", "run_file",

    # Values
    "Value", "ValueKind", "NumberValue", "BooleanValue", "StringValue", "NullValue",
    "FunctionValue", "NativeFunctionValue", "NULL", "TRUE", "FALSE",
    "is_truthy", "values_equal", "stringify",

    # Scopes
    "Environment",

    # Error handling
    "ScriptRuntimeError",
]
