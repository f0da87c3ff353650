"""Error taxonomy for the Scrawl toolchain.

Each stage of the pipeline raises its own family of errors. All of them
derive from `ScrawlError`, which carries a short `kind` name and a human
readable `message`; `str(err)` renders both.
"""

from typing import Any, Optional


class ScrawlError(Exception):
    """Base type of every error reported to a host."""
    kind = 'Error'

    def __init__(self, message: str, kind: Optional[str] = None):
        if kind is not None:
            self.kind = kind
        super().__init__(f"{self.kind}: {message}")
        self.message = message


###############################################################################
# Lexical stage
###############################################################################

class LexicalError(ScrawlError):
    kind = 'LexicalError'

    def __init__(self, message: str, line: int = 0, column: int = 0):
        if line:
            message = f"{message} at {line}:{column}"
        super().__init__(message)
        self.line = line
        self.column = column


class UnknownOperatorError(LexicalError):
    kind = 'UnknownOperator'

    def __init__(self, text: str, line: int = 0, column: int = 0):
        super().__init__(f"unknown operator {text!r}", line, column)
        self.text = text


###############################################################################
# Syntactic stage
###############################################################################

def describe(token: Any) -> str:
    if token is None:
        return 'end of input'
    return f"{token.type} {token.value!r} at {token.line}:{token.column}"


class ParseError(ScrawlError):
    kind = 'ParseError'


class ExpectedTokenError(ParseError):
    kind = 'ExpectedToken'

    def __init__(self, expected: str, got: Any = None):
        super().__init__(f"expected {expected}, got {describe(got)}")
        self.expected = expected
        self.token = got


class UnexpectedTokenError(ParseError):
    kind = 'UnexpectedToken'

    def __init__(self, token: Any):
        super().__init__(f"unexpected token {describe(token)}")
        self.token = token


class InvalidOperatorError(ParseError):
    kind = 'InvalidOperator'

    def __init__(self, operator: Any, reason: str = 'not valid here'):
        text = getattr(operator, 'value', operator)
        super().__init__(f"operator {text!r} is {reason}")
        self.operator = operator


class UnterminatedSpanError(ParseError):
    kind = 'UnterminatedSpan'

    def __init__(self, opener: Any):
        super().__init__(f"no matching close for {describe(opener)}")
        self.token = opener


###############################################################################
# Runtime stage
###############################################################################

class ExecutionError(ScrawlError):
    kind = 'RuntimeError'


class VariableNotDefinedError(ExecutionError):
    kind = 'VariableNotDefined'

    def __init__(self, name: str):
        super().__init__(f"variable {name} is not defined")
        self.name = name


class TypeMismatchError(ExecutionError):
    kind = 'TypeMismatch'


class NumericFaultError(ExecutionError):
    kind = 'NumericFault'


class MalformedExpressionError(ExecutionError):
    kind = 'MalformedExpression'


class BreakSignal(Exception):
    """Internal exception that unwinds blocks up to the nearest loop."""
    def __init__(self):
        super().__init__('break')
