"""Interpreter for the Scrawl language.

The interpreter walks a `Program` produced by the parser. Variables live
in an `Environment`, a stack of frames whose first entry is the global
frame. Every block that runs (an if or else branch, one iteration of a
while body, a bare scope) gets a fresh frame that is popped again on
every way out of the block: falling through, `break`, or an error.

Reads search the frames from the innermost outwards. Writes overwrite an
existing binding in whichever frame holds it; a name with no binding is
created in the global frame, so a variable first assigned inside a block
stays visible after the block ends.

Binary operators always evaluate the left operand, then the right one.
`&&` and `||` do not short-circuit.
"""

from __future__ import annotations

import builtins
from typing import Any, List

from .ast import (
    Program, Node, Literal, Ident, Expression,
    IfStmt, ElseStmt, WhileStmt, ScopeStmt, ExprStmt, PrintStmt, InputStmt, BreakStmt,
)
from .environment import Environment
from .errors import (
    ScrawlError, BreakSignal, TypeMismatchError, MalformedExpressionError,
)
from .lexer import Operator, COMPOUND_ASSIGNMENTS
from .parser import parse_program
from .types import (
    is_number, is_integer, type_name, to_string, promote, check_integer,
    int_divide, int_modulo, float_divide, float_modulo, power,
)

ARITHMETIC = (
    Operator.ADD, Operator.SUBTRACT, Operator.MULTIPLY, Operator.DIVIDE, Operator.MODULO,
)
ORDERING = (
    Operator.LESS_THAN, Operator.LESS_OR_EQUAL, Operator.GREATER_THAN, Operator.GREATER_OR_EQUAL,
)


class Interpreter:
    """Core interpreter that executes a Scrawl instruction tree."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.env = Environment()
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    # Public API
    def run(self, program: Program) -> None:
        if self.debug_level > 0:
            self.debug_fp = open(self.debug_file, 'w', encoding='utf-8')
        self.debug(f"run {len(program.body)} instructions")
        try:
            self.execute_instructions(program.body)
        except BreakSignal:
            self.debug("break outside of any loop; program stopped")
        except ScrawlError as ex:
            self.debug(f"aborted: {ex}")
            raise
        finally:
            self.debug(f"finished at frame depth {self.env.depth}")
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def execute_block(self, body: List[Node]):
        self.env.push()
        if self.debug_level >= 2:
            self.debug(f"push frame -> depth {self.env.depth}")
        try:
            self.execute_instructions(body)
        finally:
            self.env.pop()
            if self.debug_level >= 2:
                self.debug(f"pop frame -> depth {self.env.depth}")

    def execute_instructions(self, body: List[Node]):
        after_false_if = False
        for node in body:
            after_false_if = self.execute(node, after_false_if)

    def execute(self, node: Node, after_false_if: bool = False) -> bool:
        """Run one instruction.

        Returns True only for an `if` whose condition was false and which
        has no else branch of its own, so that a standalone `else`
        immediately after it knows to run.
        """
        if isinstance(node, ExprStmt):
            self.evaluate(node.value)
            return False
        if isinstance(node, PrintStmt):
            print(to_string(self.evaluate(node.value)))
            return False
        if isinstance(node, IfStmt):
            if self.check_condition(node.condition, 'if'):
                self.execute_block(node.body)
                return False
            if node.orelse is not None:
                self.execute_block(node.orelse.body)
                return False
            return True
        if isinstance(node, ElseStmt):
            if after_false_if:
                self.execute_block(node.body)
            return False
        if isinstance(node, WhileStmt):
            while self.check_condition(node.condition, 'while'):
                try:
                    self.execute_block(node.body)
                except BreakSignal:
                    break
            return False
        if isinstance(node, ScopeStmt):
            self.execute_block(node.body)
            return False
        if isinstance(node, InputStmt):
            try:
                line = builtins.input()
            except EOFError:
                line = ''
            self.store(node.name, line.rstrip())
            return False
        if isinstance(node, BreakStmt):
            raise BreakSignal()
        raise MalformedExpressionError(f"unexpected instruction {type(node).__name__}")

    def check_condition(self, condition: Node, keyword: str) -> bool:
        value = self.evaluate(condition)
        if not isinstance(value, bool):
            raise TypeMismatchError(f"expected Boolean for {keyword} condition, got {type_name(value)}")
        if self.debug_level >= 3:
            self.debug(f"{keyword} condition -> {to_string(value)}")
        return value

    def store(self, name: str, value: Any) -> Any:
        index = self.env.set(name, value)
        if self.debug_level >= 2:
            self.debug(f"set {name} = {to_string(value)} in frame {index}")
        return value

    def evaluate(self, node: Node) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Ident):
            return self.env.get(node.name)
        if isinstance(node, Expression):
            return self.evaluate_expression(node)
        raise MalformedExpressionError(f"cannot evaluate {type(node).__name__}")

    def evaluate_expression(self, node: Expression) -> Any:
        op = node.op
        if op.is_unary:
            if node.right is not None:
                raise MalformedExpressionError(f"unary operator {op.value!r} has a right operand")
            operand = self.evaluate(node.left)
            if op is Operator.BRACKETS:
                return operand
            if not isinstance(operand, bool):
                raise TypeMismatchError(f"expected Boolean operand for '!', got {type_name(operand)}")
            return not operand
        if node.right is None:
            raise MalformedExpressionError(f"operator {op.value!r} has no right operand")
        if op.is_assignment:
            return self.assign(node)
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        return self.apply_binary_op(op, left, right)

    def assign(self, node: Expression) -> Any:
        target = node.left
        if not isinstance(target, Ident):
            raise TypeMismatchError('expected identifier on left side of assignment')
        if node.op is Operator.ASSIGN:
            value = self.evaluate(node.right)
        else:
            # name op= rhs  ==>  name = name op rhs
            value = self.evaluate(Expression(COMPOUND_ASSIGNMENTS[node.op], target, node.right))
        return self.store(target.name, value)

    def apply_binary_op(self, op: Operator, a: Any, b: Any) -> Any:
        result = self.binary_result(op, a, b)
        if self.debug_level >= 4:
            self.debug(f"{to_string(a)} {op.value} {to_string(b)} -> {to_string(result)}")
        return result

    def binary_result(self, op: Operator, a: Any, b: Any) -> Any:
        if op is Operator.ADD:
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            if is_number(a) and is_number(b):
                return self.arithmetic(op, a, b)
            raise TypeMismatchError(
                f"expected 2 strings or 2 numbers for '+', got {type_name(a)} and {type_name(b)}")
        if op in ARITHMETIC:
            if is_number(a) and is_number(b):
                return self.arithmetic(op, a, b)
            raise TypeMismatchError(f"expected 2 numbers for {op.value!r}, got {type_name(a)} and {type_name(b)}")
        if op is Operator.EXPONENT:
            if is_number(a) and is_number(b):
                return power(a, b)
            raise TypeMismatchError(f"expected 2 numbers for '^', got {type_name(a)} and {type_name(b)}")
        if op is Operator.EQUAL:
            return self.equal_values(a, b)
        if op is Operator.NOT_EQUAL:
            return not self.equal_values(a, b)
        if op in ORDERING:
            if not (is_number(a) and is_number(b)):
                raise TypeMismatchError(
                    f"expected 2 numbers for {op.value!r}, got {type_name(a)} and {type_name(b)}")
            a, b = promote(a, b)
            if op is Operator.LESS_THAN: return a < b
            if op is Operator.LESS_OR_EQUAL: return a <= b
            if op is Operator.GREATER_THAN: return a > b
            return a >= b
        if op in (Operator.AND, Operator.OR):
            if not (isinstance(a, bool) and isinstance(b, bool)):
                raise TypeMismatchError(
                    f"expected 2 booleans for {op.value!r}, got {type_name(a)} and {type_name(b)}")
            return (a and b) if op is Operator.AND else (a or b)
        raise MalformedExpressionError(f"operator {op.value!r} is not a binary operator")

    def arithmetic(self, op: Operator, a: Any, b: Any) -> Any:
        if is_integer(a) and is_integer(b):
            if op is Operator.ADD: return check_integer(a + b)
            if op is Operator.SUBTRACT: return check_integer(a - b)
            if op is Operator.MULTIPLY: return check_integer(a * b)
            if op is Operator.DIVIDE: return int_divide(a, b)
            return int_modulo(a, b)
        a, b = promote(a, b)
        if op is Operator.ADD: return a + b
        if op is Operator.SUBTRACT: return a - b
        if op is Operator.MULTIPLY: return a * b
        if op is Operator.DIVIDE: return float_divide(a, b)
        return float_modulo(a, b)

    def equal_values(self, a: Any, b: Any) -> bool:
        # Values of different kinds are never equal; that is not an error.
        if is_number(a) and is_number(b):
            a, b = promote(a, b)
            return a == b
        if isinstance(a, bool) and isinstance(b, bool):
            return a == b
        if isinstance(a, str) and isinstance(b, str):
            return a == b
        return False


def run_program(source: str, debug_level: int = 0) -> Interpreter:
    """Convenience function to parse and run a Scrawl program from source string."""
    program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    interpreter.run(program)
    return interpreter


def run_file(file_path: str, debug_level: int = 0) -> Interpreter:
    """Parse and run a Scrawl file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, debug_level=debug_level)
