"""
Tests for the Scrawl tokenizer.
"""
import pytest

from scrawl.errors import LexicalError, UnknownOperatorError
from scrawl.lexer import tokenize, Keyword, Operator


def test_statement_tokens():
    tokens = tokenize('x = 1;')
    assert [(t.type, t.value) for t in tokens] == [
        ('IDENT', 'x'),
        ('OPERATOR', Operator.ASSIGN),
        ('NUMBER', 1),
        ('END', ';'),
    ]


def test_keywords_booleans_and_identifiers():
    tokens = tokenize('if else while print input break true false iffy _x9')
    assert [t.value for t in tokens] == [
        Keyword.IF, Keyword.ELSE, Keyword.WHILE, Keyword.PRINT, Keyword.INPUT, Keyword.BREAK,
        True, False, 'iffy', '_x9',
    ]
    assert [t.type for t in tokens[6:]] == ['BOOLEAN', 'BOOLEAN', 'IDENT', 'IDENT']


def test_numbers_with_separators():
    values = [t.value for t in tokenize('42 3.5 1,000 1_000_000 2.')]
    assert values == [42, 3.5, 1000, 1000000, 2.0]
    assert type(values[0]) is int
    assert type(values[4]) is float


def test_every_operator():
    text = '+ - * / % ^ == != < > <= >= && || ! = += -= *= /= %='
    assert [t.value.value for t in tokenize(text)] == text.split()


def test_delimiters():
    assert [t.type for t in tokenize('{ ( ) } ;')] == [
        'SCOPE_OPEN', 'BRACKET_OPEN', 'BRACKET_CLOSE', 'SCOPE_CLOSE', 'END',
    ]


def test_strings_keep_their_text_and_comments_are_tokens():
    tokens = tokenize('print("a # b"); # note # x')
    assert [(t.type, t.value) for t in tokens] == [
        ('KEYWORD', Keyword.PRINT),
        ('BRACKET_OPEN', '('),
        ('STRING', 'a # b'),
        ('BRACKET_CLOSE', ')'),
        ('END', ';'),
        ('COMMENT', ' note '),
        ('IDENT', 'x'),
    ]


def test_unclosed_comment_runs_to_end_of_input():
    tokens = tokenize('a; # trailing')
    assert tokens[-1].type == 'COMMENT'
    assert tokens[-1].value == ' trailing'


def test_token_positions():
    tokens = tokenize('a\n  b')
    assert (tokens[1].line, tokens[1].column) == (2, 3)


@pytest.mark.parametrize('text', ['a === b', 'a & b', 'a | b', 'a <== b'])
def test_unknown_operator(text):
    with pytest.raises(UnknownOperatorError):
        tokenize(text)


def test_unexpected_character():
    with pytest.raises(LexicalError) as info:
        tokenize('a = @;')
    assert type(info.value) is LexicalError
    assert info.value.line == 1


def test_invalid_number_literal():
    with pytest.raises(LexicalError):
        tokenize('1.2.3')


def test_integer_literal_range():
    assert tokenize('9223372036854775807')[0].value == 2 ** 63 - 1
    with pytest.raises(LexicalError):
        tokenize('9223372036854775808')


def test_unterminated_string():
    with pytest.raises(LexicalError):
        tokenize('print("oops);')
