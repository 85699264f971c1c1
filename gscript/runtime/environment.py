"""
Lexical environments for the GScript interpreter.

An Environment maps names to values and points at its enclosing
environment; the chain ends at the single global environment of a run.
Blocks and calls each create one child environment. A child stays alive
only while something references it, which for a function's defining
environment means as long as the function value is reachable.
"""

from typing import Dict, List, Optional

from ..lexer.tokens import SourceLocation
from ..lexer.errors import edit_distance
from .errors import create_undefined_variable_error
from .values import Value


class Environment:
    """A scope in the environment chain."""

    def __init__(self, enclosing: Optional["Environment"] = None):
        self.values: Dict[str, Value] = {}
        self.enclosing = enclosing

    def define(self, name: str, value: Value) -> None:
        """Bind `name` in this scope, shadowing or overwriting as needed."""
        self.values[name] = value

    def get(self, name: str, location: Optional[SourceLocation] = None) -> Value:
        """Look a name up through the chain, innermost scope first."""
        environment: Optional[Environment] = self
        while environment is not None:
            if name in environment.values:
                return environment.values[name]
            environment = environment.enclosing

        raise create_undefined_variable_error(name, location, self.get_similar_names(name))

    def assign(self, name: str, value: Value, location: Optional[SourceLocation] = None) -> None:
        """
        Rebind an existing name in the nearest scope that declares it.

        Never creates a binding: assigning to an undeclared name fails.
        """
        environment: Optional[Environment] = self
        while environment is not None:
            if name in environment.values:
                environment.values[name] = value
                return
            environment = environment.enclosing

        raise create_undefined_variable_error(name, location, self.get_similar_names(name))

    def visible_names(self) -> List[str]:
        """All names reachable from this scope."""
        names: List[str] = []
        environment: Optional[Environment] = self
        while environment is not None:
            names.extend(n for n in environment.values if n not in names)
            environment = environment.enclosing
        return names

    def get_similar_names(self, name: str, max_distance: int = 2) -> List[str]:
        """Get visible names similar to the given name (for error suggestions)."""
        similar_names = []
        for candidate in self.visible_names():
            distance = edit_distance(name.lower(), candidate.lower())
            if distance <= max_distance:
                similar_names.append((candidate, distance))

        similar_names.sort(key=lambda x: x[1])
        return [candidate for candidate, _ in similar_names[:5]]

    def __repr__(self) -> str:
        depth = 0
        environment = self.enclosing
        while environment is not None:
            depth += 1
            environment = environment.enclosing
        return f"Environment(depth={depth}, names={sorted(self.values)})"
