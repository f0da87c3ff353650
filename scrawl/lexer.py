"""Tokenizer for the Scrawl language.

Character-level scanning is delegated to a Lark basic lexer configured
with one terminal per token shape. The raw Lark tokens are then turned
into `Token` records: words are classified as keywords, booleans or
identifiers, number text is converted to `int` or `float`, operator text
is looked up in the `Operator` table, and the delimiters of strings and
comments are stripped.

The parser depends only on the `Token` records produced here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexicalError, UnknownOperatorError

INT_MIN = -2 ** 63
INT_MAX = 2 ** 63 - 1


class Operator(Enum):
    ADD = '+'
    SUBTRACT = '-'
    MULTIPLY = '*'
    DIVIDE = '/'
    MODULO = '%'
    EXPONENT = '^'

    EQUAL = '=='
    NOT_EQUAL = '!='
    LESS_THAN = '<'
    GREATER_THAN = '>'
    LESS_OR_EQUAL = '<='
    GREATER_OR_EQUAL = '>='

    AND = '&&'
    OR = '||'
    NOT = '!'
    # Grouping marker; produced by the parser, never by the lexer.
    BRACKETS = '()'

    ASSIGN = '='
    ADD_ASSIGN = '+='
    SUBTRACT_ASSIGN = '-='
    MULTIPLY_ASSIGN = '*='
    DIVIDE_ASSIGN = '/='
    MODULO_ASSIGN = '%='

    @property
    def is_unary(self) -> bool:
        return self in (Operator.NOT, Operator.BRACKETS)

    @property
    def is_assignment(self) -> bool:
        return self is Operator.ASSIGN or self in COMPOUND_ASSIGNMENTS


# Compound assignment -> the operator it desugars to.
COMPOUND_ASSIGNMENTS: Dict[Operator, Operator] = {
    Operator.ADD_ASSIGN: Operator.ADD,
    Operator.SUBTRACT_ASSIGN: Operator.SUBTRACT,
    Operator.MULTIPLY_ASSIGN: Operator.MULTIPLY,
    Operator.DIVIDE_ASSIGN: Operator.DIVIDE,
    Operator.MODULO_ASSIGN: Operator.MODULO,
}


class Keyword(Enum):
    IF = 'if'
    ELSE = 'else'
    WHILE = 'while'
    PRINT = 'print'
    INPUT = 'input'
    BREAK = 'break'


KEYWORDS = {k.value: k for k in Keyword}
BOOLEANS = {'true': True, 'false': False}


@dataclass(frozen=True)
class Token:
    type: str
    value: Any
    line: int = 0
    column: int = 0


SCRAWL_TOKENS = r"""
    start: _token*
    _token: NUMBER | STRING | COMMENT | WORD | OPERATOR
          | END | SCOPE_OPEN | SCOPE_CLOSE | BRACKET_OPEN | BRACKET_CLOSE

    NUMBER: /[0-9][0-9.,_]*/
    STRING: /"[^"]*"/
    COMMENT: /#[^#]*#?/
    WORD: /[A-Za-z_][A-Za-z0-9_]*/
    OPERATOR: /[-+*\/%=!<>^]=*|&&?|\|\|?/

    END: ";"
    SCOPE_OPEN: "{"
    SCOPE_CLOSE: "}"
    BRACKET_OPEN: "("
    BRACKET_CLOSE: ")"

    WHITESPACE: /[ \t\r\n]+/
    %ignore WHITESPACE
"""


SCRAWL_LEXER = Lark(
    SCRAWL_TOKENS,
    parser='lalr',
    lexer='basic',
)


def parse_number(text: str, line: int, column: int) -> Any:
    digits = text.replace('_', '').replace(',', '')
    try:
        if '.' in digits:
            return float(digits)
        value = int(digits)
    except ValueError:
        raise LexicalError(f"invalid number literal {text!r}", line, column)
    if value > INT_MAX:
        raise LexicalError(f"integer literal {text!r} does not fit in 64 bits", line, column)
    return value


def parse_operator(text: str, line: int, column: int) -> Operator:
    try:
        op = Operator(text)
    except ValueError:
        raise UnknownOperatorError(text, line, column)
    if op is Operator.BRACKETS:
        raise UnknownOperatorError(text, line, column)
    return op


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens.

    Comments are kept as COMMENT tokens; it is up to the parser to drop
    them. Raises `LexicalError` for characters no token can start with
    and `UnknownOperatorError` for operator text outside the table.
    """
    tokens: List[Token] = []
    try:
        for raw in SCRAWL_LEXER.lex(source):
            line, column = raw.line, raw.column
            text = str(raw)
            kind = raw.type
            if kind == 'WORD':
                if text in KEYWORDS:
                    tokens.append(Token('KEYWORD', KEYWORDS[text], line, column))
                elif text in BOOLEANS:
                    tokens.append(Token('BOOLEAN', BOOLEANS[text], line, column))
                else:
                    tokens.append(Token('IDENT', text, line, column))
            elif kind == 'NUMBER':
                tokens.append(Token('NUMBER', parse_number(text, line, column), line, column))
            elif kind == 'OPERATOR':
                tokens.append(Token('OPERATOR', parse_operator(text, line, column), line, column))
            elif kind == 'STRING':
                tokens.append(Token('STRING', text[1:-1], line, column))
            elif kind == 'COMMENT':
                body = text[1:-1] if len(text) > 1 and text.endswith('#') else text[1:]
                tokens.append(Token('COMMENT', body, line, column))
            else:
                tokens.append(Token(kind, text, line, column))
    except UnexpectedCharacters as e:
        raise LexicalError(f"unexpected character {e.char!r}", e.line, e.column)
    return tokens
