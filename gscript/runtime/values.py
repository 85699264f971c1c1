"""
Runtime values for GScript.

A Value is one of six explicit variants. Every helper that consumes values
(truthiness, equality, rendering) dispatches on the variant and raises
TypeError on anything it does not know, instead of falling through.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, ClassVar, List, Tuple

if TYPE_CHECKING:
    from ..parser.ast_nodes import LiteralValue, Statement
    from .environment import Environment


class ValueKind(Enum):
    """Tag of each runtime value variant."""
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    NULL = "nil"
    FUNCTION = "function"
    NATIVE_FUNCTION = "native function"


class Value:
    """Base class for runtime values."""
    kind: ClassVar[ValueKind]


@dataclass(frozen=True)
class NumberValue(Value):
    kind: ClassVar[ValueKind] = ValueKind.NUMBER
    value: float


@dataclass(frozen=True)
class BooleanValue(Value):
    kind: ClassVar[ValueKind] = ValueKind.BOOLEAN
    value: bool


@dataclass(frozen=True)
class StringValue(Value):
    kind: ClassVar[ValueKind] = ValueKind.STRING
    value: str


@dataclass(frozen=True)
class NullValue(Value):
    kind: ClassVar[ValueKind] = ValueKind.NULL


@dataclass(frozen=True, eq=False)
class FunctionValue(Value):
    """
    A user-defined function and the environment it was declared in.

    Holding `closure` keeps that environment alive for as long as the
    function value is reachable.
    """
    kind: ClassVar[ValueKind] = ValueKind.FUNCTION
    name: str
    params: Tuple[str, ...]
    body: Tuple["Statement", ...]
    closure: "Environment"

    @property
    def arity(self) -> int:
        return len(self.params)


@dataclass(frozen=True, eq=False)
class NativeFunctionValue(Value):
    """A builtin implemented in Python."""
    kind: ClassVar[ValueKind] = ValueKind.NATIVE_FUNCTION
    name: str
    arity: int
    function: Callable[[List[Value]], Value]


NULL = NullValue()
TRUE = BooleanValue(True)
FALSE = BooleanValue(False)


def from_bool(flag: bool) -> BooleanValue:
    return TRUE if flag else FALSE


def from_literal(literal: "LiteralValue") -> Value:
    """Convert the Python constant held by a Literal node."""
    if literal is None:
        return NULL
    # bool before float: True is an int in Python
    if isinstance(literal, bool):
        return from_bool(literal)
    if isinstance(literal, (int, float)):
        return NumberValue(float(literal))
    if isinstance(literal, str):
        return StringValue(literal)
    raise TypeError(f"unsupported literal: {literal!r}")


def is_callable(value: Value) -> bool:
    return isinstance(value, (FunctionValue, NativeFunctionValue))


def is_truthy(value: Value) -> bool:
    """nil is false, booleans are themselves, everything else is true."""
    if isinstance(value, NullValue):
        return False
    if isinstance(value, BooleanValue):
        return value.value
    if isinstance(value, (NumberValue, StringValue, FunctionValue, NativeFunctionValue)):
        return True
    raise TypeError(f"unhandled value variant: {value!r}")


def values_equal(a: Value, b: Value) -> bool:
    """Equality for `==`: values of different kinds are never equal."""
    if a.kind is not b.kind:
        return False
    if isinstance(a, NullValue):
        return True
    if isinstance(a, (NumberValue, BooleanValue, StringValue)):
        return a.value == b.value
    if isinstance(a, (FunctionValue, NativeFunctionValue)):
        return a is b
    raise TypeError(f"unhandled value variant: {a!r}")


def format_number(number: float) -> str:
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    # 1e21 and above print in exponent form (1e+21)
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


def stringify(value: Value) -> str:
    """Textual form used by `print` and string concatenation."""
    if isinstance(value, NumberValue):
        return format_number(value.value)
    if isinstance(value, BooleanValue):
        return "true" if value.value else "false"
    if isinstance(value, StringValue):
        return value.value
    if isinstance(value, NullValue):
        return "nil"
    if isinstance(value, FunctionValue):
        return f"<fn {value.name}>"
    if isinstance(value, NativeFunctionValue):
        return f"<native fn {value.name}>"
    raise TypeError(f"unhandled value variant: {value!r}")
