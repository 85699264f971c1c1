#!/usr/bin/env python3
"""
GScript command-line runner.

Usage:
    gscript FILE [options]
    gscript -c SOURCE [options]

Options:
    --max-steps N   Abort the run after N statements/loop iterations
    --tokens        Print the token stream instead of running the program
    -v, --verbose   Enable debug logging
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .lexer import scan, LexError
from .parser import parse, ParseError
from .runtime import Interpreter, ScriptRuntimeError

logger = logging.getLogger(__name__)

# Exit codes (sysexits.h)
EXIT_OK = 0
EXIT_DATA_ERROR = 65
EXIT_NO_INPUT = 66
EXIT_SOFTWARE = 70


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gscript",
        description="Run a GScript program",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    gscript program.gs                      # Run a file
    gscript -c 'print 1 + 2;'               # Run inline source
    gscript program.gs --tokens             # Dump the token stream
    gscript program.gs --max-steps 10000    # Bound a possibly runaway script
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('file', nargs='?', metavar='FILE',
                        help='Source file to run')
    source.add_argument('-c', dest='command', metavar='SOURCE',
                        help='Program passed in as a string')

    parser.add_argument('--max-steps', type=int, default=None, metavar='N',
                        help='Abort after N executed statements and loop iterations')
    parser.add_argument('--tokens', action='store_true',
                        help='Print the tokens and exit without running')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the `gscript` console script."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    if args.command is not None:
        source, filename = args.command, "<string>"
    else:
        filename = args.file
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                source = f.read()
        except OSError as e:
            print(f"Error: cannot read {filename}: {e.strerror}", file=sys.stderr)
            return EXIT_NO_INPUT

    try:
        tokens = scan(source, filename)
        if args.tokens:
            for token in tokens:
                print(f"{token.line:4d}  {token}")
            return EXIT_OK
        statements = parse(tokens)
    except (LexError, ParseError) as e:
        print(f"Error: {e}", file=sys.stderr, end="")
        return EXIT_DATA_ERROR

    interpreter = Interpreter(max_steps=args.max_steps)
    try:
        interpreter.interpret(statements)
    except ScriptRuntimeError as e:
        print(f"Error: {e}", file=sys.stderr, end="")
        return EXIT_SOFTWARE

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
