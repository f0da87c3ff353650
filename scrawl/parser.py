"""Parser for the Scrawl language.

Parsing works on bounded token spans. The statement parser walks the
token list, dispatching on the leading token of each statement. Keyword
statements carve out their parenthesised condition and their braced
block by counting bracket (or brace) depth; the condition span goes to
the expression parser and the block span to a fresh statement parser.

The expression parser takes one operand and, when an operator follows,
parses the *whole* remaining span as the right operand. There is no
precedence table, so every chain nests to the right: `2 * 3 + 4` is
`2 * (3 + 4)` and `10 - 3 - 2` is `10 - (3 - 2)`. Parentheses are the
only way to group differently.

The `parse_program` function is the public entry point and returns a
`Program` node representing the entire source file.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Program, Node, Literal, Ident, Expression,
    IfStmt, ElseStmt, WhileStmt, ScopeStmt, ExprStmt, PrintStmt, InputStmt, BreakStmt,
    literal_type_of,
)
from .errors import (
    ExpectedTokenError, UnexpectedTokenError, InvalidOperatorError, UnterminatedSpanError,
)
from .lexer import Token, Keyword, Operator, tokenize

LITERAL_TOKENS = ('NUMBER', 'STRING', 'BOOLEAN')

# Token types that may appear inside a bare expression statement.
EXPRESSION_TOKENS = LITERAL_TOKENS + ('IDENT', 'OPERATOR', 'BRACKET_OPEN', 'BRACKET_CLOSE')


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = [t for t in tokens if t.type != 'COMMENT']
        self.pos = 0

    def peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def match(self, type_: str, value=None) -> bool:
        token = self.peek()
        if token is None or token.type != type_:
            return False
        return value is None or token.value is value

    def consume(self, type_: str, expected: str) -> Token:
        if not self.match(type_):
            raise ExpectedTokenError(expected, self.peek())
        return self.advance()

    ###########################################################################
    # Spans
    ###########################################################################

    def collect_span(self, opener: Token, open_type: str, close_type: str) -> List[Token]:
        """Take tokens up to the close matching an already consumed opener."""
        span: List[Token] = []
        depth = 1
        while not self.at_end():
            token = self.advance()
            if token.type == open_type:
                depth += 1
            elif token.type == close_type:
                depth -= 1
                if depth == 0:
                    return span
            span.append(token)
        raise UnterminatedSpanError(opener)

    def collect_brackets(self) -> List[Token]:
        opener = self.consume('BRACKET_OPEN', "'('")
        return self.collect_span(opener, 'BRACKET_OPEN', 'BRACKET_CLOSE')

    def collect_statement(self) -> List[Token]:
        span: List[Token] = []
        while not self.at_end():
            token = self.peek()
            if token.type == 'END':
                break
            if token.type not in EXPRESSION_TOKENS:
                raise UnexpectedTokenError(token)
            span.append(self.advance())
        return span

    ###########################################################################
    # Statements
    ###########################################################################

    def parse_program(self) -> Program:
        return Program(self.parse_instructions())

    def parse_instructions(self) -> List[Node]:
        instructions: List[Node] = []
        while not self.at_end():
            stmt = self.parse_statement()
            if stmt is not None:
                instructions.append(stmt)
        return instructions

    def parse_statement(self) -> Optional[Node]:
        token = self.peek()
        if token.type == 'END':
            self.advance()
            return None
        if token.type == 'KEYWORD':
            keyword = token.value
            if keyword is Keyword.IF:
                return self.parse_if_stmt()
            if keyword is Keyword.ELSE:
                self.advance()
                return ElseStmt(self.parse_block())
            if keyword is Keyword.WHILE:
                return self.parse_while_stmt()
            if keyword is Keyword.PRINT:
                self.advance()
                return PrintStmt(self.parse_bracketed_value())
            if keyword is Keyword.INPUT:
                return self.parse_input_stmt()
            if keyword is Keyword.BREAK:
                self.advance()
                return BreakStmt()
        if token.type == 'SCOPE_OPEN':
            return ScopeStmt(self.parse_block())
        if token.type in EXPRESSION_TOKENS and token.type != 'BRACKET_CLOSE':
            return ExprStmt(Parser(self.collect_statement()).parse_expression())
        raise UnexpectedTokenError(token)

    def parse_block(self) -> List[Node]:
        opener = self.consume('SCOPE_OPEN', "'{'")
        span = self.collect_span(opener, 'SCOPE_OPEN', 'SCOPE_CLOSE')
        return Parser(span).parse_instructions()

    def parse_bracketed_value(self) -> Node:
        return Parser(self.collect_brackets()).parse_expression()

    def parse_if_stmt(self) -> IfStmt:
        self.advance()
        condition = self.parse_bracketed_value()
        body = self.parse_block()
        return IfStmt(condition, body, self.parse_trailing_else())

    def parse_trailing_else(self) -> Optional[ElseStmt]:
        # An else directly after an if block (stray semicolons allowed) belongs to it.
        ahead = self.pos
        while ahead < len(self.tokens) and self.tokens[ahead].type == 'END':
            ahead += 1
        if ahead < len(self.tokens):
            token = self.tokens[ahead]
            if token.type == 'KEYWORD' and token.value is Keyword.ELSE:
                self.pos = ahead + 1
                return ElseStmt(self.parse_block())
        return None

    def parse_while_stmt(self) -> WhileStmt:
        self.advance()
        condition = self.parse_bracketed_value()
        return WhileStmt(condition, self.parse_block())

    def parse_input_stmt(self) -> InputStmt:
        self.advance()
        name = self.consume('IDENT', 'an identifier after input')
        return InputStmt(name.value)

    ###########################################################################
    # Expressions
    ###########################################################################

    def parse_expression(self) -> Node:
        """Parse the whole span as one value."""
        return self.parse_value()

    def parse_value(self) -> Node:
        left = self.parse_operand()
        # Postfix not: `done !` negates the operand before it.
        while self.match('OPERATOR', Operator.NOT):
            self.advance()
            left = Expression(Operator.NOT, left)
        if self.at_end():
            return left
        token = self.advance()
        if token.type != 'OPERATOR':
            raise UnexpectedTokenError(token)
        op = token.value
        if op is Operator.BRACKETS:
            raise InvalidOperatorError(op, 'not a binary operator')
        if self.at_end():
            raise ExpectedTokenError(f"an operand after {op.value!r}")
        return Expression(op, left, self.parse_value())

    def parse_operand(self) -> Node:
        token = self.peek()
        if token is None:
            raise ExpectedTokenError('an operand')
        if token.type in LITERAL_TOKENS:
            self.advance()
            return Literal(token.value, literal_type_of(token.value))
        if token.type == 'IDENT':
            self.advance()
            return Ident(token.value)
        if token.type == 'OPERATOR' and token.value is Operator.NOT:
            self.advance()
            return Expression(Operator.NOT, self.parse_operand())
        if token.type == 'BRACKET_OPEN':
            inner = Parser(self.collect_brackets()).parse_expression()
            return Expression(Operator.BRACKETS, inner)
        raise UnexpectedTokenError(token)


def parse_tokens(tokens: List[Token]) -> Program:
    """Parse a token list into a `Program`."""
    return Parser(tokens).parse_program()


def parse_program(source: str) -> Program:
    """Tokenize and parse Scrawl source code into a `Program`.

    Lexical and syntax errors are raised as `LexicalError` and
    `ParseError` respectively.
    """
    return parse_tokens(tokenize(source))
