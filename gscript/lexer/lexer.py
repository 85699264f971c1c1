"""
GScript Lexer - turns source text into a list of tokens.

Single left-to-right pass with one character of lookahead (two for
numeric literals). The first invalid character or unterminated string
aborts the whole scan with a LexError; there is no recovery.
"""

import logging
from typing import List

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, SINGLE_CHAR_TOKENS, EQUALS_PAIRS
)
from .errors import create_invalid_character_error, create_unterminated_string_error

logger = logging.getLogger(__name__)


class Lexer:
    """
    GScript lexical analyzer.

    Converts source code text into a list of tokens terminated by EOF.
    """

    def __init__(self, source: str, filename: str = "<string>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens including the trailing EOF token

        Raises:
            LexError: On an invalid character or unterminated string
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []

        while not self._is_at_end():
            self._scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self._location()))
        logger.debug("scanned %d tokens from %s", len(self.tokens), self.filename)
        return self.tokens

    def _scan_token(self):
        """Scan one token (or skip whitespace/comments) at the current position."""
        start = self._location()
        char = self._advance()

        # Whitespace and newlines produce no tokens
        if char in " \t\r" or char == "\n":
            return

        # Line comments
        if char == "/":
            if self._match("/"):
                while self._peek() != "\n" and not self._is_at_end():
                    self._advance()
            else:
                self._add_token(TokenType.SLASH, start)
            return

        if char in EQUALS_PAIRS:
            single, double = EQUALS_PAIRS[char]
            self._add_token(double if self._match("=") else single, start)
            return

        if char in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[char], start)
            return

        if char == '"':
            self._tokenize_string(start)
        elif _is_digit(char):
            self._tokenize_number(start)
        elif _is_alpha(char):
            self._tokenize_identifier_or_keyword(start)
        else:
            raise create_invalid_character_error(char, start)

    def _tokenize_string(self, start: SourceLocation):
        """Tokenize a string literal; no escape sequences are processed."""
        while self._peek() != '"' and not self._is_at_end():
            self._advance()

        if self._is_at_end():
            raise create_unterminated_string_error(start, self.line)

        self._advance()  # Skip closing quote

        value = self.source[start.offset + 1:self.pos - 1]
        self._add_token(TokenType.STRING, start, value)

    def _tokenize_number(self, start: SourceLocation):
        """Tokenize digits with an optional fractional part."""
        while _is_digit(self._peek()):
            self._advance()

        # A '.' only belongs to the number when a digit follows it
        if self._peek() == "." and _is_digit(self._peek_next()):
            self._advance()
            while _is_digit(self._peek()):
                self._advance()

        lexeme = self.source[start.offset:self.pos]
        self._add_token(TokenType.NUMBER, start, float(lexeme))

    def _tokenize_identifier_or_keyword(self, start: SourceLocation):
        while _is_alphanumeric(self._peek()):
            self._advance()

        lexeme = self.source[start.offset:self.pos]
        token_type = KEYWORDS.get(lexeme.lower(), TokenType.IDENTIFIER)
        self._add_token(token_type, start)

    def _add_token(self, token_type: TokenType, start: SourceLocation, literal=None):
        lexeme = self.source[start.offset:self.pos]
        self.tokens.append(Token(token_type, lexeme, literal, start))

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance(self) -> str:
        """Consume one character, updating line/column."""
        char = self.source[self.pos]
        self.pos += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def _match(self, expected: str) -> bool:
        if self._is_at_end() or self.source[self.pos] != expected:
            return False
        self._advance()
        return True

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self.source[self.pos]

    def _peek_next(self) -> str:
        if self.pos + 1 >= len(self.source):
            return "\0"
        return self.source[self.pos + 1]

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_alpha(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_"


def _is_alphanumeric(char: str) -> bool:
    return _is_alpha(char) or _is_digit(char)


def scan(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Raises:
        LexError: If lexing fails
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexError: If lexing fails
        OSError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return scan(source, filepath)
