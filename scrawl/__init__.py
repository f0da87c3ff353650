# Scrawl language package
# This package provides a tokenizer, parser and interpreter for the Scrawl language.
from .lexer import tokenize
from .parser import parse_program, parse_tokens
from .interpreter import run_program, run_file, Interpreter
from .errors import ScrawlError

__all__ = [
    'tokenize',
    'parse_program',
    'parse_tokens',
    'run_program',
    'run_file',
    'Interpreter',
    'ScrawlError',
]
