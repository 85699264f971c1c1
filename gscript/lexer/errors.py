"""
Error handling for the GScript lexer.

Also defines the Diagnostic record and DiagnosticError base class shared by
the parser and runtime error types, so every failure of the pipeline
renders the same way.
"""

from typing import Optional, List
from dataclasses import dataclass

from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """A single error report (message, location, help)."""
    message: str
    location: Optional[SourceLocation]
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class DiagnosticError(Exception):
    """
    Base class for every fatal error raised by the pipeline.

    Carries a Diagnostic; `message` is the bare text and `line` the
    source line when one is known.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.diagnostic.location

    @property
    def line(self) -> Optional[int]:
        if self.diagnostic.location is None:
            return None
        return self.diagnostic.location.line

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class LexError(DiagnosticError):
    """
    Raised when the lexer encounters an invalid character or an
    unterminated string. Scanning stops at the first one.
    """


def edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein distance between two strings."""
    if len(s1) < len(s2):
        return edit_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
    "L002": "Unterminated string literal",
}


def create_invalid_character_error(char: str, location: SourceLocation) -> LexError:
    """Create an error for an invalid character."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in GScript source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    suggestions = None
    if char == "'":
        suggestions = ["String literals use double quotes: \"text\""]
    elif char == "#":
        suggestions = ["Line comments start with //"]

    return LexError(
        message=f"Unexpected character '{char}' at line {location.line}",
        location=location,
        code="L001",
        help_text=help_text,
        suggestions=suggestions
    )


def create_unterminated_string_error(location: SourceLocation, end_line: int) -> LexError:
    """Create an error for an unterminated string literal."""
    return LexError(
        message=f"Unterminated string at line {end_line}",
        location=location,
        code="L002",
        help_text="String literals must be closed with a matching \" quote.",
        suggestions=["Add a closing \" quote"]
    )
