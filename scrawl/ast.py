"""Instruction and expression trees for the Scrawl language.

Expressions ("values") are literals, identifiers, or `Expression` nodes
holding an operator with a left and an optional right operand. The right
operand is absent exactly for the two unary operators, logical negation
and grouping. Instructions form ordered lists; the block-carrying
instructions own their nested bodies outright.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from .lexer import Operator


@dataclass
class Node:
    """Base class for all tree nodes."""
    pass


@dataclass
class Program(Node):
    body: List[Node]


# Values

@dataclass
class Literal(Node):
    value: Any
    literal_type: str  # 'Integer', 'Float', 'String', 'Boolean'


@dataclass
class Ident(Node):
    name: str


@dataclass
class Expression(Node):
    op: Operator
    left: Node
    right: Optional[Node] = None


# Instructions

@dataclass
class ElseStmt(Node):
    body: List[Node]


@dataclass
class IfStmt(Node):
    condition: Node
    body: List[Node]
    orelse: Optional[ElseStmt] = None


@dataclass
class WhileStmt(Node):
    condition: Node
    body: List[Node]


@dataclass
class ScopeStmt(Node):
    body: List[Node]


@dataclass
class ExprStmt(Node):
    value: Node


@dataclass
class PrintStmt(Node):
    value: Node


@dataclass
class InputStmt(Node):
    name: str


@dataclass
class BreakStmt(Node):
    pass


def literal_type_of(value: Any) -> str:
    if isinstance(value, bool):
        return 'Boolean'
    if isinstance(value, int):
        return 'Integer'
    if isinstance(value, float):
        return 'Float'
    return 'String'
