"""
Test suite for GScript environments (scope chains).
"""

import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from gscript.runtime import Environment, NumberValue, StringValue, NULL, ScriptRuntimeError


class TestEnvironment(unittest.TestCase):

    def setUp(self):
        self.globals = Environment()
        self.globals.define("x", NumberValue(1.0))

    def test_define_and_get(self):
        self.assertEqual(self.globals.get("x"), NumberValue(1.0))

    def test_define_overwrites_in_same_scope(self):
        self.globals.define("x", StringValue("again"))
        self.assertEqual(self.globals.get("x"), StringValue("again"))

    def test_get_walks_enclosing_chain(self):
        inner = Environment(Environment(self.globals))
        self.assertEqual(inner.get("x"), NumberValue(1.0))

    def test_define_in_child_shadows_without_mutating_parent(self):
        child = Environment(self.globals)
        child.define("x", NumberValue(2.0))
        self.assertEqual(child.get("x"), NumberValue(2.0))
        self.assertEqual(self.globals.get("x"), NumberValue(1.0))

    def test_assign_mutates_nearest_declaring_scope(self):
        middle = Environment(self.globals)
        middle.define("x", NumberValue(2.0))
        inner = Environment(middle)

        inner.assign("x", NumberValue(3.0))

        self.assertEqual(middle.get("x"), NumberValue(3.0))
        self.assertEqual(self.globals.get("x"), NumberValue(1.0))
        self.assertNotIn("x", inner.values)

    def test_assign_reaches_global(self):
        Environment(self.globals).assign("x", NULL)
        self.assertEqual(self.globals.get("x"), NULL)

    def test_get_undefined_raises(self):
        with self.assertRaises(ScriptRuntimeError) as ctx:
            Environment(self.globals).get("missing")
        self.assertEqual(ctx.exception.code, "R001")
        self.assertIn("undefined variable", ctx.exception.message)

    def test_assign_undefined_raises_and_creates_nothing(self):
        child = Environment(self.globals)
        with self.assertRaises(ScriptRuntimeError) as ctx:
            child.assign("y", NumberValue(1.0))
        self.assertIn("undefined variable", ctx.exception.message)
        self.assertNotIn("y", child.values)
        self.assertNotIn("y", self.globals.values)

    def test_undefined_variable_suggests_similar_names(self):
        self.globals.define("counter", NumberValue(0.0))
        with self.assertRaises(ScriptRuntimeError) as ctx:
            Environment(self.globals).get("countr")
        self.assertIn("Did you mean 'counter'?", ctx.exception.diagnostic.suggestions)

    def test_visible_names_lists_each_name_once(self):
        child = Environment(self.globals)
        child.define("x", NumberValue(5.0))
        child.define("y", NumberValue(6.0))
        self.assertEqual(sorted(child.visible_names()), ["x", "y"])

    def test_similar_names_are_closest_first(self):
        self.globals.define("count", NULL)
        self.globals.define("counts", NULL)
        self.assertEqual(self.globals.get_similar_names("count")[0], "count")
        self.assertEqual(self.globals.get_similar_names("zzzzzz"), [])


if __name__ == '__main__':
    unittest.main()
