"""
GScript recursive descent parser.

One method per grammar rule, lowest precedence first. Binary levels loop
and fold into a left-leaning chain, so every binary operator is left
associative; assignment recurses and is right associative.

    program     := declaration* EOF
    declaration := varDecl | functionDecl | statement
    statement   := ifStmt | whileStmt | forStmt | printStmt
                 | returnStmt | block | exprStmt
    expression  := assignment
    assignment  := logic_or ( "=" assignment )?
    logic_or    := logic_and ( "or" logic_and )*
    logic_and   := equality ( "and" equality )*
    equality    := comparison ( ( "==" | "!=" ) comparison )*
    comparison  := term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        := factor ( ( "+" | "-" ) factor )*
    factor      := unary ( ( "*" | "/" ) unary )*
    unary       := ( "!" | "-" ) unary | call
    call        := primary ( "(" arguments? ")" )*
    primary     := NUMBER | STRING | "true" | "false" | "nil"
                 | IDENTIFIER | "(" expression ")"

The first syntax error aborts the parse.
"""

import logging
from typing import List, Optional

from ..lexer.tokens import Token, TokenType, MODIFIER_TOKENS
from ..limits import PARSER_RECURSION_LIMIT, recursion_limit
from .ast_nodes import (
    Expression, Statement,
    Literal, Variable, Assign, Binary, Unary, Logical, Call, Grouping,
    VarDecl, FunctionDecl, ExpressionStmt, PrintStmt, ReturnStmt,
    IfStmt, WhileStmt, ForStmt, BlockStmt,
)
from .errors import (
    MAX_ARGUMENTS, create_unexpected_token_error, create_expected_expression_error,
    create_invalid_assignment_error, create_too_many_error,
    create_unsupported_construct_error, create_nesting_too_deep_error,
)

logger = logging.getLogger(__name__)


# Reserved declarations and statements the language has no semantics for
UNSUPPORTED_DECLARATIONS = {
    TokenType.CLASS: "class declaration",
    TokenType.STRUCT: "struct declaration",
    TokenType.ENUM: "enum declaration",
    TokenType.INTERFACE: "interface declaration",
    TokenType.EXTENDS: "inheritance",
    TokenType.BREAK: "break statement",
    TokenType.CONTINUE: "continue statement",
}

UNSUPPORTED_EXPRESSIONS = {
    TokenType.THIS: "'this' expression",
    TokenType.SUPER: "'super' expression",
}


class Parser:
    """
    GScript parser.

    Consumes the token list produced by the lexer and returns the list of
    top-level statements.
    """

    def __init__(self, tokens: List[Token]):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer, ending with EOF
        """
        self.tokens = tokens
        self.current = 0

    def parse(self) -> List[Statement]:
        """
        Parse the token stream into a list of statements.

        Raises:
            ParseError: On the first grammar violation
        """
        statements = []
        with recursion_limit(PARSER_RECURSION_LIMIT):
            try:
                while not self._is_at_end():
                    statements.append(self._declaration())
            except RecursionError:
                raise create_nesting_too_deep_error(self._peek()) from None

        logger.debug("parsed %d top-level statements", len(statements))
        return statements

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _declaration(self) -> Statement:
        token = self._peek()
        if token.type in MODIFIER_TOKENS:
            construct = "async function" if token.type == TokenType.ASYNC else "access modifier"
            raise create_unsupported_construct_error(construct, token)
        if token.type in UNSUPPORTED_DECLARATIONS:
            raise create_unsupported_construct_error(UNSUPPORTED_DECLARATIONS[token.type], token)

        if self._match(TokenType.FN):
            return self._function_declaration()
        if self._match(TokenType.LET):
            return self._var_declaration()
        return self._statement()

    def _function_declaration(self) -> FunctionDecl:
        keyword = self._previous()
        name = self._consume(TokenType.IDENTIFIER, "Expect function name.")
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after function name.")

        params = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    raise create_too_many_error("parameters", self._peek())
                param = self._consume(TokenType.IDENTIFIER, "Expect parameter name.")
                params.append(param.lexeme)
                if not self._match(TokenType.COMMA):
                    break

        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")
        self._consume(TokenType.LEFT_BRACE, "Expect '{' before function body.")
        body = self._block()
        return FunctionDecl(name.lexeme, tuple(params), tuple(body), keyword.location)

    def _var_declaration(self) -> VarDecl:
        keyword = self._previous()
        name = self._consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self._match(TokenType.EQUAL):
            initializer = self._expression()

        self._consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return VarDecl(name.lexeme, initializer, keyword.location)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _statement(self) -> Statement:
        if self._match(TokenType.FOR):
            return self._for_statement()
        if self._match(TokenType.IF):
            return self._if_statement()
        if self._match(TokenType.PRINT):
            return self._print_statement()
        if self._match(TokenType.RETURN):
            return self._return_statement()
        if self._match(TokenType.WHILE):
            return self._while_statement()
        if self._match(TokenType.LEFT_BRACE):
            brace = self._previous()
            return BlockStmt(tuple(self._block()), brace.location)
        return self._expression_statement()

    def _for_statement(self) -> BlockStmt:
        keyword = self._previous()
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        initializer: Optional[Statement]
        if self._match(TokenType.SEMICOLON):
            initializer = None
        elif self._match(TokenType.LET):
            initializer = self._var_declaration()
        else:
            initializer = self._expression_statement()

        condition = None
        if not self._check(TokenType.SEMICOLON):
            condition = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self._check(TokenType.RIGHT_PAREN):
            increment = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self._statement()
        return ForStmt(initializer, condition, increment, body, keyword.location).desugar()

    def _if_statement(self) -> IfStmt:
        keyword = self._previous()
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self._statement()
        else_branch = None
        if self._match(TokenType.ELSE):
            else_branch = self._statement()

        return IfStmt(condition, then_branch, else_branch, keyword.location)

    def _print_statement(self) -> PrintStmt:
        keyword = self._previous()
        value = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return PrintStmt(value, keyword.location)

    def _return_statement(self) -> ReturnStmt:
        keyword = self._previous()
        value = None
        if not self._check(TokenType.SEMICOLON):
            value = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after return value.")
        return ReturnStmt(value, keyword.location)

    def _while_statement(self) -> WhileStmt:
        keyword = self._previous()
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        body = self._statement()
        return WhileStmt(condition, body, keyword.location)

    def _block(self) -> List[Statement]:
        """Parse declarations up to the closing brace (opening brace already consumed)."""
        statements = []
        while not self._check(TokenType.RIGHT_BRACE) and not self._is_at_end():
            statements.append(self._declaration())

        self._consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def _expression_statement(self) -> ExpressionStmt:
        start = self._peek()
        expr = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return ExpressionStmt(expr, start.location)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _expression(self) -> Expression:
        return self._assignment()

    def _assignment(self) -> Expression:
        expr = self._or()

        if self._match(TokenType.EQUAL):
            equals = self._previous()
            value = self._assignment()

            if isinstance(expr, Variable):
                return Assign(expr.name, value, expr.location)

            raise create_invalid_assignment_error(equals)

        return expr

    def _or(self) -> Expression:
        expr = self._and()
        while self._match(TokenType.OR):
            operator = self._previous()
            right = self._and()
            expr = Logical(expr, "or", right, operator.location)
        return expr

    def _and(self) -> Expression:
        expr = self._equality()
        while self._match(TokenType.AND):
            operator = self._previous()
            right = self._equality()
            expr = Logical(expr, "and", right, operator.location)
        return expr

    def _equality(self) -> Expression:
        expr = self._comparison()
        while self._match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
            operator = self._previous()
            right = self._comparison()
            expr = Binary(expr, operator.lexeme, right, operator.location)
        return expr

    def _comparison(self) -> Expression:
        expr = self._term()
        while self._match(TokenType.GREATER, TokenType.GREATER_EQUAL,
                          TokenType.LESS, TokenType.LESS_EQUAL):
            operator = self._previous()
            right = self._term()
            expr = Binary(expr, operator.lexeme, right, operator.location)
        return expr

    def _term(self) -> Expression:
        expr = self._factor()
        while self._match(TokenType.MINUS, TokenType.PLUS):
            operator = self._previous()
            right = self._factor()
            expr = Binary(expr, operator.lexeme, right, operator.location)
        return expr

    def _factor(self) -> Expression:
        expr = self._unary()
        while self._match(TokenType.SLASH, TokenType.STAR):
            operator = self._previous()
            right = self._unary()
            expr = Binary(expr, operator.lexeme, right, operator.location)
        return expr

    def _unary(self) -> Expression:
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            right = self._unary()
            return Unary(operator.lexeme, right, operator.location)
        return self._call()

    def _call(self) -> Expression:
        expr = self._primary()
        while True:
            if self._match(TokenType.LEFT_PAREN):
                expr = self._finish_call(expr)
            elif self._check(TokenType.DOT):
                raise create_unsupported_construct_error("property access", self._peek())
            else:
                break
        return expr

    def _finish_call(self, callee: Expression) -> Call:
        paren = self._previous()
        arguments = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    raise create_too_many_error("arguments", self._peek())
                arguments.append(self._expression())
                if not self._match(TokenType.COMMA):
                    break

        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return Call(callee, tuple(arguments), paren.location)

    def _primary(self) -> Expression:
        token = self._peek()

        if self._match(TokenType.FALSE):
            return Literal(False, token.location)
        if self._match(TokenType.TRUE):
            return Literal(True, token.location)
        if self._match(TokenType.NIL):
            return Literal(None, token.location)
        if self._match(TokenType.NUMBER, TokenType.STRING):
            return Literal(token.literal, token.location)
        if self._match(TokenType.IDENTIFIER):
            return Variable(token.lexeme, token.location)
        if self._match(TokenType.LEFT_PAREN):
            expr = self._expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr, token.location)

        if token.type in UNSUPPORTED_EXPRESSIONS:
            raise create_unsupported_construct_error(UNSUPPORTED_EXPRESSIONS[token.type], token)
        raise create_expected_expression_error(token)

    # ------------------------------------------------------------------
    # Utility methods
    # ------------------------------------------------------------------

    def _match(self, *token_types: TokenType) -> bool:
        """Consume the current token if it has one of the given types."""
        for token_type in token_types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        if self._is_at_end():
            return False
        return self._peek().type == token_type

    def _consume(self, token_type: TokenType, message: str) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()
        raise create_unexpected_token_error(token_type, message, self._peek())

    def _advance(self) -> Token:
        """Consume and return current token."""
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]


def parse(tokens: List[Token]) -> List[Statement]:
    """
    Convenience function to parse a token list.

    Raises:
        ParseError: If parsing fails
    """
    return Parser(tokens).parse()


def parse_string(source: str, filename: str = "<string>") -> List[Statement]:
    """
    Convenience function to scan and parse a source string.

    Raises:
        LexError: If lexing fails
        ParseError: If parsing fails
    """
    from ..lexer import scan

    return parse(scan(source, filename))


def parse_file(filepath: str) -> List[Statement]:
    """
    Convenience function to parse a source file.

    Raises:
        LexError: If lexing fails
        ParseError: If parsing fails
        OSError: If file cannot be read
    """
    from ..lexer import tokenize_file

    return parse(tokenize_file(filepath))
