"""
Python stack headroom for the recursive parser and interpreter.

Both stages recurse once per nesting level of the program, so a deep but
valid program needs more frames than CPython allows by default. The limit
is raised only for the duration of a parse or a run.
"""

import sys
from contextlib import contextmanager

# Python frames reserved for the parser; roughly 11 are used per level of
# nested parentheses or blocks
PARSER_RECURSION_LIMIT = 20000

# Upper bound on Python frames used by one script-level call, counting
# the statements and expressions between a call and the next one
FRAMES_PER_CALL = 40


@contextmanager
def recursion_limit(limit: int):
    """Raise the recursion limit to at least `limit` inside the block."""
    previous = sys.getrecursionlimit()
    if limit > previous:
        sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)
