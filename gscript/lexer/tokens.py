"""
Token definitions for the GScript lexer.

This module defines all token types supported by GScript, including:
- Keywords (case-insensitive, including reserved words the parser rejects)
- Operators (single- and two-character)
- Literals (numbers and strings)
- Identifiers
- Punctuation and delimiters
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, Union


class TokenType(Enum):
    """
    Enumeration of all token types in GScript.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of file

    # ========================================================================
    # Literals
    # ========================================================================
    NUMBER = auto()                 # 42, 3.14
    STRING = auto()                 # "hello"
    IDENTIFIER = auto()             # variable_name

    # ========================================================================
    # Keywords
    # ========================================================================

    # Declarations
    LET = auto()                    # let
    FN = auto()                     # fn

    # Statements and control flow
    PRINT = auto()                  # print
    RETURN = auto()                 # return
    IF = auto()                     # if
    ELSE = auto()                   # else
    WHILE = auto()                  # while
    FOR = auto()                    # for
    BREAK = auto()                  # break (reserved, rejected by the parser)
    CONTINUE = auto()               # continue (reserved, rejected by the parser)

    # Literal keywords
    TRUE = auto()                   # true
    FALSE = auto()                  # false
    NIL = auto()                    # nil

    # Logical operators
    AND = auto()                    # and
    OR = auto()                     # or

    # Type declarations (reserved, rejected by the parser)
    CLASS = auto()                  # class
    STRUCT = auto()                 # struct
    ENUM = auto()                   # enum
    INTERFACE = auto()              # interface
    EXTENDS = auto()                # extends
    SUPER = auto()                  # super
    THIS = auto()                   # this

    # Modifiers (reserved, rejected by the parser)
    PUBLIC = auto()                 # public
    PRIVATE = auto()                # private
    PROTECTED = auto()              # protected
    STATIC = auto()                 # static
    FINAL = auto()                  # final
    ABSTRACT = auto()               # abstract
    ASYNC = auto()                  # async

    # ========================================================================
    # Operators
    # ========================================================================
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    STAR = auto()                   # *
    SLASH = auto()                  # /

    BANG = auto()                   # !
    BANG_EQUAL = auto()             # !=
    EQUAL = auto()                  # =
    EQUAL_EQUAL = auto()            # ==
    GREATER = auto()                # >
    GREATER_EQUAL = auto()          # >=
    LESS = auto()                   # <
    LESS_EQUAL = auto()             # <=

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    COMMA = auto()                  # ,
    DOT = auto()                    # .
    SEMICOLON = auto()              # ;
    COLON = auto()                  # :


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and debugging information.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of source

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the GScript language.

    Contains the token type, lexeme (raw text), literal value for numbers
    and strings, and source location for error reporting.
    """
    type: TokenType
    lexeme: str                             # Raw text from source
    literal: Optional[Union[float, str]]    # NUMBER -> float, STRING -> str
    location: SourceLocation

    def __str__(self) -> str:
        if self.literal is not None:
            return f"{self.type.name}({self.lexeme!r} -> {self.literal!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.literal!r}, {self.location!r})")

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in {
            TokenType.NUMBER, TokenType.STRING,
            TokenType.TRUE, TokenType.FALSE, TokenType.NIL,
        }

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORDS.values()


# Keyword table. Lookup is done on the lowercased lexeme, so `PRINT` and
# `Print` both scan as TokenType.PRINT.
KEYWORDS = {
    "let": TokenType.LET,
    "fn": TokenType.FN,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "for": TokenType.FOR,
    "break": TokenType.BREAK,
    "continue": TokenType.CONTINUE,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "nil": TokenType.NIL,
    "and": TokenType.AND,
    "or": TokenType.OR,

    "class": TokenType.CLASS,
    "struct": TokenType.STRUCT,
    "enum": TokenType.ENUM,
    "interface": TokenType.INTERFACE,
    "extends": TokenType.EXTENDS,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,

    "public": TokenType.PUBLIC,
    "private": TokenType.PRIVATE,
    "protected": TokenType.PROTECTED,
    "static": TokenType.STATIC,
    "final": TokenType.FINAL,
    "abstract": TokenType.ABSTRACT,
    "async": TokenType.ASYNC,
}

# Characters that always form a one-character token
SINGLE_CHAR_TOKENS = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
    ":": TokenType.COLON,
}

# Characters that become a two-character token when followed by '='
# first char -> (token without '=', token with '=')
EQUALS_PAIRS = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

MODIFIER_TOKENS = {
    TokenType.PUBLIC, TokenType.PRIVATE, TokenType.PROTECTED,
    TokenType.STATIC, TokenType.FINAL, TokenType.ABSTRACT, TokenType.ASYNC,
}
