"""
Test suite for the GScript interpreter.

Tests cover:
- End-to-end programs from source text to printed output
- Scoping, shadowing and closures
- Truthiness, equality and short-circuit evaluation
- Runtime errors and their effect on already printed output
- Step limits, call depth and native functions
"""

import contextlib
import io
import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from gscript.parser import parse_string
from gscript.runtime import (
    Interpreter, ScriptRuntimeError, Environment, NumberValue, Returned, NORMAL,
    run_source, run_file,
)


class InterpreterTestCase(unittest.TestCase):
    """Runs source text and collects printed lines."""

    def run_program(self, source, max_steps=None):
        output = io.StringIO()
        run_source(source, output=output, max_steps=max_steps)
        return output.getvalue().splitlines()

    def run_failing(self, source, max_steps=None):
        """Run a program expected to fail; return (error, printed lines)."""
        output = io.StringIO()
        with self.assertRaises(ScriptRuntimeError) as ctx:
            run_source(source, output=output, max_steps=max_steps)
        return ctx.exception, output.getvalue().splitlines()


class TestEndToEnd(InterpreterTestCase):

    def test_function_call(self):
        source = "let x = 5; let y = 10; fn add(a, b) { return a + b; } print(add(x, y));"
        self.assertEqual(self.run_program(source), ["15"])

    def test_while_loop(self):
        source = "let i = 0; while (i < 3) { print(i); i = i + 1; }"
        self.assertEqual(self.run_program(source), ["0", "1", "2"])

    def test_for_loop(self):
        source = "for (let j = 0; j < 3; j = j + 1) { print(j); }"
        self.assertEqual(self.run_program(source), ["0", "1", "2"])

    def test_number_plus_string_concatenates(self):
        self.assertEqual(self.run_program('print(1 + "x");'), ["1x"])

    def test_number_minus_string_fails(self):
        error, printed = self.run_failing('print(1 - "x");')
        self.assertIn("operands must be numbers", error.message)
        self.assertEqual(printed, [])

    def test_undeclared_variable(self):
        error, printed = self.run_failing("print(undeclared);")
        self.assertIn("undefined variable", error.message)
        self.assertEqual(error.code, "R001")
        self.assertEqual(printed, [])

    def test_running_is_deterministic(self):
        source = "fn f(n) { if (n < 2) return n; return f(n - 1) + f(n - 2); } print f(12);"
        self.assertEqual(self.run_program(source), self.run_program(source))


class TestArithmetic(InterpreterTestCase):

    def test_operators(self):
        self.assertEqual(self.run_program(
            "print 3 * 5; print 10 / 4; print 7 - 10; print -3; print (1 + 2) * 3;"
        ), ["15", "2.5", "-3", "-3", "9"])

    def test_comparisons(self):
        self.assertEqual(self.run_program(
            "print 1 < 2; print 2 <= 2; print 1 > 2; print 3 >= 4;"
        ), ["true", "true", "false", "false"])

    def test_string_concatenation_renders_operands(self):
        self.assertEqual(self.run_program(
            'print "a" + "b"; print "a" + true; print "n=" + 2.5; print nil + "!";'
        ), ["ab", "atrue", "n=2.5", "nil!"])

    def test_division_by_zero(self):
        error, _ = self.run_failing("print 1 / 0;")
        self.assertIn("division by zero", error.message)
        self.assertEqual(error.code, "R003")

    def test_plus_without_string_or_numbers(self):
        error, _ = self.run_failing("print true + nil;")
        self.assertIn("operands must be two numbers or one must be a string", error.message)

    def test_comparison_requires_numbers(self):
        error, _ = self.run_failing('print 1 < "2";')
        self.assertIn("operands must be numbers", error.message)

    def test_negation_requires_number(self):
        error, _ = self.run_failing('print -"a";')
        self.assertEqual(error.code, "R002")

    def test_error_reports_line(self):
        error, _ = self.run_failing('let a = 1;\nprint a - "x";')
        self.assertEqual(error.line, 2)


class TestTruthinessAndEquality(InterpreterTestCase):

    def test_equality(self):
        self.assertEqual(self.run_program(
            'print nil == nil; print nil == 0; print 1 == "1"; print 1 != 2; print "a" == "a";'
        ), ["true", "false", "false", "true", "true"])

    def test_zero_and_empty_string_are_truthy(self):
        self.assertEqual(self.run_program(
            'if (0) print "zero"; if ("") print "empty"; if (nil) print "a"; else print "b";'
        ), ["zero", "empty", "b"])

    def test_bang_negates_truthiness(self):
        self.assertEqual(self.run_program("print !nil; print !0; print !!false;"),
                         ["true", "false", "false"])

    def test_short_circuit(self):
        self.assertEqual(self.run_program("print false and (1/0); print true or (1/0);"),
                         ["false", "true"])

    def test_logical_operators_return_operands(self):
        self.assertEqual(self.run_program(
            'print nil or "x"; print 0 and 1; print "a" or 1/0; print nil and 1/0;'
        ), ["x", "1", "a", "nil"])


class TestScoping(InterpreterTestCase):

    def test_block_variable_is_invisible_after_block(self):
        error, _ = self.run_failing("{ let y = 1; } print y;")
        self.assertIn("undefined variable", error.message)

    def test_inner_declaration_shadows(self):
        self.assertEqual(self.run_program("let x = 1; { let x = 2; print x; } print x;"),
                         ["2", "1"])

    def test_inner_assignment_mutates_outer(self):
        self.assertEqual(self.run_program("let x = 1; { x = 2; } print x;"), ["2"])

    def test_assignment_to_undeclared_fails(self):
        error, _ = self.run_failing("x = 1;")
        self.assertIn("undefined variable", error.message)

    def test_assignment_is_an_expression(self):
        self.assertEqual(self.run_program("let a; let b; a = b = 3; print a; print b;"),
                         ["3", "3"])

    def test_uninitialized_variable_is_nil(self):
        self.assertEqual(self.run_program("let a; print a;"), ["nil"])

    def test_for_variable_is_scoped_to_loop(self):
        error, _ = self.run_failing("for (let j = 0; j < 1; j = j + 1) {} print j;")
        self.assertIn("undefined variable", error.message)

    def test_redeclaring_global_overwrites(self):
        self.assertEqual(self.run_program("let a = 1; let a = 2; print a;"), ["2"])


class TestFunctions(InterpreterTestCase):

    def test_closure_sees_later_mutation(self):
        self.assertEqual(self.run_program("let a = 1; fn f() { return a; } a = 2; print f();"),
                         ["2"])

    def test_counter_closure_keeps_environment_alive(self):
        source = """
        fn makeCounter() {
            let count = 0;
            fn counter() {
                count = count + 1;
                return count;
            }
            return counter;
        }
        let next = makeCounter();
        print next();
        print next();
        let other = makeCounter();
        print other();
        """
        self.assertEqual(self.run_program(source), ["1", "2", "1"])

    def test_recursion(self):
        source = "fn fib(n) { if (n < 2) return n; return fib(n - 1) + fib(n - 2); } print fib(10);"
        self.assertEqual(self.run_program(source), ["55"])

    def test_mutual_recursion(self):
        source = """
        fn isEven(n) { if (n == 0) return true; return isOdd(n - 1); }
        fn isOdd(n) { if (n == 0) return false; return isEven(n - 1); }
        print isEven(10);
        print isOdd(7);
        """
        self.assertEqual(self.run_program(source), ["true", "true"])

    def test_function_without_return_yields_nil(self):
        self.assertEqual(self.run_program("fn f() {} print f();"), ["nil"])

    def test_return_leaves_loop_and_nested_blocks(self):
        source = """
        fn f() {
            let i = 0;
            while (true) {
                { if (i == 3) return i; }
                i = i + 1;
            }
            print "unreachable";
        }
        print f();
        """
        self.assertEqual(self.run_program(source), ["3"])

    def test_parameters_shadow_globals(self):
        self.assertEqual(self.run_program("let a = 1; fn f(a) { return a; } print f(9); print a;"),
                         ["9", "1"])

    def test_arguments_evaluated_left_to_right(self):
        source = 'fn show(a, b) { return a + b; } fn p(x) { print x; return x; } print show(p("1"), p("2"));'
        self.assertEqual(self.run_program(source), ["1", "2", "12"])

    def test_functions_render_as_tags(self):
        self.assertEqual(self.run_program("fn f() {} print f; print clock;"),
                         ["<fn f>", "<native fn clock>"])

    def test_calling_non_function(self):
        error, _ = self.run_failing('"x"();')
        self.assertIn("can only call functions", error.message)
        self.assertEqual(error.code, "R004")

    def test_arity_mismatch(self):
        error, _ = self.run_failing("fn f(a) {} f();")
        self.assertIn("expected 1 arguments but got 0", error.message)
        self.assertEqual(error.code, "R005")

    def test_clock_native(self):
        self.assertEqual(self.run_program("let t = clock(); print t > 0;"), ["true"])
        error, _ = self.run_failing("clock(1);")
        self.assertEqual(error.code, "R005")

    def test_top_level_return(self):
        error, _ = self.run_failing("print 1; return 2;")
        self.assertEqual(error.code, "R006")

    def test_deep_recursion(self):
        source = "fn sum(n) { if (n == 0) return 0; return n + sum(n - 1); } print sum(1000);"
        self.assertEqual(self.run_program(source), ["500500"])

    def test_runaway_recursion_is_reported(self):
        error, _ = self.run_failing("fn f() { return f(); } f();")
        self.assertEqual(error.code, "R008")
        self.assertIn("maximum call depth exceeded", error.message)

    def test_call_depth_is_configurable(self):
        source = "fn down(n) { if (n == 0) return 0; return down(n - 1); }\nprint down(%d);"
        output = io.StringIO()
        run_source(source % 40, output=output, max_call_depth=50)
        self.assertEqual(output.getvalue(), "0\n")
        with self.assertRaises(ScriptRuntimeError) as ctx:
            run_source(source % 60, output=io.StringIO(), max_call_depth=50)
        self.assertEqual(ctx.exception.code, "R008")
        self.assertEqual(ctx.exception.line, 1)

    def test_recursion_limit_is_restored_after_run(self):
        before = sys.getrecursionlimit()
        self.run_program("fn f(n) { if (n > 0) f(n - 1); } f(10);")
        self.run_failing("fn f() { return f(); } f();")
        self.assertEqual(sys.getrecursionlimit(), before)


class TestInterpreterState(InterpreterTestCase):

    def test_output_before_error_is_kept(self):
        error, printed = self.run_failing("print 1; print missing; print 2;")
        self.assertEqual(printed, ["1"])

    def test_step_limit(self):
        error, _ = self.run_failing("while (true) {}", max_steps=100)
        self.assertEqual(error.code, "R007")

    def test_step_limit_allows_short_programs(self):
        self.assertEqual(self.run_program("print 1;", max_steps=10), ["1"])

    def test_interpreter_is_reusable_after_error(self):
        output = io.StringIO()
        interpreter = Interpreter(output=output)
        interpreter.interpret(parse_string("let x = 1;"))
        with self.assertRaises(ScriptRuntimeError):
            interpreter.interpret(parse_string("{ let x = 2; print y; }"))
        interpreter.interpret(parse_string("print x;"))
        self.assertEqual(output.getvalue(), "1\n")

    def test_step_budget_applies_per_run(self):
        output = io.StringIO()
        interpreter = Interpreter(output=output, max_steps=5)
        program = parse_string("print 1; print 2; print 3;")
        interpreter.interpret(program)
        interpreter.interpret(program)
        self.assertEqual(output.getvalue(), "1\n2\n3\n1\n2\n3\n")

    def test_globals_are_inspectable(self):
        interpreter = run_source("let answer = 6 * 7;", output=io.StringIO())
        self.assertEqual(interpreter.globals.get("answer"), NumberValue(42.0))

    def test_print_defaults_to_stdout(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            Interpreter().interpret(parse_string('print "hello";'))
        self.assertEqual(stdout.getvalue(), "hello\n")

    def test_execute_returns_completion(self):
        interpreter = Interpreter(output=io.StringIO())
        environment = Environment(interpreter.globals)
        return_stmt, print_stmt = parse_string("return 5; print 1;")
        self.assertEqual(interpreter.execute(return_stmt, environment), Returned(NumberValue(5.0)))
        self.assertIs(interpreter.execute(print_stmt, environment), NORMAL)

    def test_keywords_are_case_insensitive(self):
        self.assertEqual(self.run_program("PRINT 1; Let a = 2; Print a;"), ["1", "2"])

    def test_run_file(self):
        import tempfile

        with tempfile.NamedTemporaryFile("w", suffix=".gs", delete=False, encoding="utf-8") as f:
            f.write('print "from file";\n')
            path = f.name
        try:
            output = io.StringIO()
            run_file(path, output=output)
        finally:
            os.unlink(path)
        self.assertEqual(output.getvalue(), "from file\n")


if __name__ == '__main__':
    unittest.main()
