"""
Tree-walking interpreter for GScript.

Statements are executed and expressions evaluated against an environment
passed explicitly down every call, so there is no "current environment"
to save and restore: leaving a block or call, normally or through an
exception, simply drops the child environment.

Statement execution returns a completion, either NORMAL or Returned(value).
Blocks and loops stop at the first Returned and hand it upward until the
enclosing function call turns it into the call's result.
"""

import logging
import operator
import sys
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, TextIO, Union

from ..parser.ast_nodes import (
    Expression, Statement,
    Literal, Variable, Assign, Binary, Unary, Logical, Call, Grouping,
    VarDecl, FunctionDecl, ExpressionStmt, PrintStmt, ReturnStmt,
    IfStmt, WhileStmt, BlockStmt,
)
from ..limits import FRAMES_PER_CALL, recursion_limit
from .environment import Environment
from .errors import (
    ScriptRuntimeError, create_operand_error, create_division_by_zero_error,
    create_not_callable_error, create_arity_mismatch_error,
    create_top_level_return_error, create_step_limit_error, create_call_depth_error,
)
from .values import (
    Value, NumberValue, StringValue, FunctionValue, NativeFunctionValue,
    NULL, from_bool, from_literal, is_callable, is_truthy, values_equal, stringify,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Normal:
    """Statement finished; continue with the next one."""


@dataclass(frozen=True)
class Returned:
    """A `return` ran; unwind to the enclosing call with this value."""
    value: Value


NORMAL = Normal()
Completion = Union[Normal, Returned]

DEFAULT_MAX_CALL_DEPTH = 2000


ARITHMETIC_OPERATORS: Dict[str, Callable[[float, float], float]] = {
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}

COMPARISON_OPERATORS: Dict[str, Callable[[float, float], bool]] = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}


def _native_clock(arguments: List[Value]) -> Value:
    return NumberValue(time.time())


NATIVE_FUNCTIONS = [
    NativeFunctionValue("clock", 0, _native_clock),
]


class Interpreter:
    """
    Executes a parsed GScript program.

    Args:
        output: Stream `print` writes to (sys.stdout when None)
        max_steps: Optional bound on executed statements plus loop
            iterations per run; exceeding it raises ScriptRuntimeError
        max_call_depth: Deepest chain of nested script calls allowed
            before the run fails with ScriptRuntimeError
    """

    def __init__(
        self,
        output: Optional[TextIO] = None,
        max_steps: Optional[int] = None,
        max_call_depth: int = DEFAULT_MAX_CALL_DEPTH
    ):
        self.output = output
        self.max_steps = max_steps
        self.max_call_depth = max_call_depth
        self.steps = 0
        self.call_depth = 0
        self.globals = Environment()
        for native in NATIVE_FUNCTIONS:
            self.globals.define(native.name, native)

        self._executors: Dict[type, Callable[[Statement, Environment], Completion]] = {
            VarDecl: self._execute_var_decl,
            FunctionDecl: self._execute_function_decl,
            ExpressionStmt: self._execute_expression_stmt,
            PrintStmt: self._execute_print,
            ReturnStmt: self._execute_return,
            IfStmt: self._execute_if,
            WhileStmt: self._execute_while,
            BlockStmt: self._execute_block_stmt,
        }
        self._evaluators: Dict[type, Callable[[Expression, Environment], Value]] = {
            Literal: self._evaluate_literal,
            Variable: self._evaluate_variable,
            Assign: self._evaluate_assign,
            Binary: self._evaluate_binary,
            Unary: self._evaluate_unary,
            Logical: self._evaluate_logical,
            Call: self._evaluate_call,
            Grouping: self._evaluate_grouping,
        }

    def interpret(self, statements: List[Statement]) -> None:
        """
        Run top-level statements in order against the global environment.

        Raises:
            ScriptRuntimeError: On the first runtime failure; later
                statements are not executed
        """
        logger.debug("executing %d top-level statements", len(statements))
        self.steps = 0
        self.call_depth = 0
        try:
            with recursion_limit(self.max_call_depth * FRAMES_PER_CALL):
                for statement in statements:
                    completion = self.execute(statement, self.globals)
                    if isinstance(completion, Returned):
                        raise create_top_level_return_error(statement.location)
        except RecursionError:
            raise create_call_depth_error(self.max_call_depth) from None
        except ScriptRuntimeError as e:
            logger.debug("run aborted: %s", e.message)
            raise
        logger.debug("run finished after %d steps", self.steps)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def execute(self, statement: Statement, environment: Environment) -> Completion:
        self._count_step(statement)
        executor = self._executors.get(type(statement))
        if executor is None:
            raise TypeError(f"unhandled statement node: {type(statement).__name__}")
        return executor(statement, environment)

    def execute_block(self, statements, environment: Environment) -> Completion:
        """Run statements in `environment`, stopping at the first return."""
        for statement in statements:
            completion = self.execute(statement, environment)
            if isinstance(completion, Returned):
                return completion
        return NORMAL

    def _execute_var_decl(self, statement: VarDecl, environment: Environment) -> Completion:
        value = NULL
        if statement.initializer is not None:
            value = self.evaluate(statement.initializer, environment)
        environment.define(statement.name, value)
        return NORMAL

    def _execute_function_decl(self, statement: FunctionDecl, environment: Environment) -> Completion:
        function = FunctionValue(statement.name, statement.params, statement.body, environment)
        environment.define(statement.name, function)
        return NORMAL

    def _execute_expression_stmt(self, statement: ExpressionStmt, environment: Environment) -> Completion:
        self.evaluate(statement.expression, environment)
        return NORMAL

    def _execute_print(self, statement: PrintStmt, environment: Environment) -> Completion:
        value = self.evaluate(statement.expression, environment)
        output = self.output if self.output is not None else sys.stdout
        output.write(stringify(value) + "\n")
        return NORMAL

    def _execute_return(self, statement: ReturnStmt, environment: Environment) -> Completion:
        value = NULL
        if statement.value is not None:
            value = self.evaluate(statement.value, environment)
        return Returned(value)

    def _execute_if(self, statement: IfStmt, environment: Environment) -> Completion:
        if is_truthy(self.evaluate(statement.condition, environment)):
            return self.execute(statement.then_branch, environment)
        if statement.else_branch is not None:
            return self.execute(statement.else_branch, environment)
        return NORMAL

    def _execute_while(self, statement: WhileStmt, environment: Environment) -> Completion:
        while is_truthy(self.evaluate(statement.condition, environment)):
            self._count_step(statement)
            completion = self.execute(statement.body, environment)
            if isinstance(completion, Returned):
                return completion
        return NORMAL

    def _execute_block_stmt(self, statement: BlockStmt, environment: Environment) -> Completion:
        return self.execute_block(statement.statements, Environment(environment))

    def _count_step(self, statement: Statement):
        if self.max_steps is None:
            return
        self.steps += 1
        if self.steps > self.max_steps:
            raise create_step_limit_error(self.max_steps, statement.location)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def evaluate(self, expression: Expression, environment: Environment) -> Value:
        evaluator = self._evaluators.get(type(expression))
        if evaluator is None:
            raise TypeError(f"unhandled expression node: {type(expression).__name__}")
        return evaluator(expression, environment)

    def _evaluate_literal(self, expression: Literal, environment: Environment) -> Value:
        return from_literal(expression.value)

    def _evaluate_variable(self, expression: Variable, environment: Environment) -> Value:
        return environment.get(expression.name, expression.location)

    def _evaluate_assign(self, expression: Assign, environment: Environment) -> Value:
        value = self.evaluate(expression.value, environment)
        environment.assign(expression.name, value, expression.location)
        return value

    def _evaluate_grouping(self, expression: Grouping, environment: Environment) -> Value:
        return self.evaluate(expression.expression, environment)

    def _evaluate_unary(self, expression: Unary, environment: Environment) -> Value:
        right = self.evaluate(expression.right, environment)

        if expression.operator == "-":
            if not isinstance(right, NumberValue):
                raise create_operand_error("operand must be a number", "-", expression.location)
            return NumberValue(-right.value)
        if expression.operator == "!":
            return from_bool(not is_truthy(right))

        raise ScriptRuntimeError(f"unknown unary operator '{expression.operator}'", expression.location)

    def _evaluate_binary(self, expression: Binary, environment: Environment) -> Value:
        left = self.evaluate(expression.left, environment)
        right = self.evaluate(expression.right, environment)
        op = expression.operator

        if op == "+":
            if isinstance(left, NumberValue) and isinstance(right, NumberValue):
                return NumberValue(left.value + right.value)
            if isinstance(left, StringValue) or isinstance(right, StringValue):
                return StringValue(stringify(left) + stringify(right))
            raise create_operand_error(
                "operands must be two numbers or one must be a string", op, expression.location
            )

        if op == "==":
            return from_bool(values_equal(left, right))
        if op == "!=":
            return from_bool(not values_equal(left, right))

        if op in ARITHMETIC_OPERATORS or op in COMPARISON_OPERATORS:
            if not (isinstance(left, NumberValue) and isinstance(right, NumberValue)):
                raise create_operand_error("operands must be numbers", op, expression.location)
            if op in COMPARISON_OPERATORS:
                return from_bool(COMPARISON_OPERATORS[op](left.value, right.value))
            if op == "/" and right.value == 0:
                raise create_division_by_zero_error(expression.location)
            return NumberValue(ARITHMETIC_OPERATORS[op](left.value, right.value))

        raise ScriptRuntimeError(f"unknown binary operator '{op}'", expression.location)

    def _evaluate_logical(self, expression: Logical, environment: Environment) -> Value:
        left = self.evaluate(expression.left, environment)

        if expression.operator == "or":
            if is_truthy(left):
                return left
        elif expression.operator == "and":
            if not is_truthy(left):
                return left
        else:
            raise ScriptRuntimeError(f"unknown logical operator '{expression.operator}'", expression.location)

        return self.evaluate(expression.right, environment)

    def _evaluate_call(self, expression: Call, environment: Environment) -> Value:
        callee = self.evaluate(expression.callee, environment)
        if not is_callable(callee):
            raise create_not_callable_error(callee.kind.value, expression.location)

        arguments = [self.evaluate(argument, environment) for argument in expression.arguments]
        if len(arguments) != callee.arity:
            raise create_arity_mismatch_error(callee.name, callee.arity, len(arguments), expression.location)

        if isinstance(callee, NativeFunctionValue):
            return callee.function(arguments)

        if self.call_depth >= self.max_call_depth:
            raise create_call_depth_error(self.max_call_depth, expression.location)
        self.call_depth += 1
        try:
            return self.call_function(callee, arguments)
        finally:
            self.call_depth -= 1

    def call_function(self, function: FunctionValue, arguments: List[Value]) -> Value:
        """Invoke a user function: one new environment whose parent is the closure."""
        environment = Environment(function.closure)
        for name, value in zip(function.params, arguments):
            environment.define(name, value)

        completion = self.execute_block(function.body, environment)
        if isinstance(completion, Returned):
            return completion.value
        return NULL


def run_source(
    source: str,
    output: Optional[TextIO] = None,
    filename: str = "<string>",
    max_steps: Optional[int] = None,
    max_call_depth: int = DEFAULT_MAX_CALL_DEPTH
) -> Interpreter:
    """
    Scan, parse and execute a source string.

    Returns the interpreter so callers can inspect its globals.

    Raises:
        LexError, ParseError, ScriptRuntimeError
    """
    from ..parser import parse_string

    statements = parse_string(source, filename)
    interpreter = Interpreter(output=output, max_steps=max_steps, max_call_depth=max_call_depth)
    interpreter.interpret(statements)
    return interpreter


def run_file(filepath: str, output: Optional[TextIO] = None, max_steps: Optional[int] = None) -> Interpreter:
    """
    Convenience function to execute a source file.

    Raises:
        LexError, ParseError, ScriptRuntimeError
        OSError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return run_source(source, output=output, filename=filepath, max_steps=max_steps)
