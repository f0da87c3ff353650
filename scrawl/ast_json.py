"""JSON serialization/deserialization for Scrawl instruction trees.

This module converts between the tree dataclasses and plain Python
dict/list structures suitable for JSON encoding. Operators are stored by
their source text (`"+"`, `"&&"`, `"()"` for grouping).
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    Literal,
    Ident,
    Expression,
    IfStmt,
    ElseStmt,
    WhileStmt,
    ScopeStmt,
    ExprStmt,
    PrintStmt,
    InputStmt,
    BreakStmt,
)
from .errors import InvalidOperatorError
from .lexer import Operator


def operator_from_text(text: str) -> Operator:
    try:
        return Operator(text)
    except ValueError:
        raise InvalidOperatorError(text, 'unknown')


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]

    if isinstance(node, Program):
        return {"type": "Program", "body": ast_to_obj(node.body)}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "body": ast_to_obj(node.body),
            "orelse": ast_to_obj(node.orelse),
        }
    if isinstance(node, ElseStmt):
        return {"type": "ElseStmt", "body": ast_to_obj(node.body)}
    if isinstance(node, WhileStmt):
        return {"type": "WhileStmt", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, ScopeStmt):
        return {"type": "ScopeStmt", "body": ast_to_obj(node.body)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "value": ast_to_obj(node.value)}
    if isinstance(node, PrintStmt):
        return {"type": "PrintStmt", "value": ast_to_obj(node.value)}
    if isinstance(node, InputStmt):
        return {"type": "InputStmt", "name": node.name}
    if isinstance(node, BreakStmt):
        return {"type": "BreakStmt"}
    if isinstance(node, Expression):
        return {
            "type": "Expression",
            "op": node.op.value,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Literal):
        return {"type": "Literal", "value": node.value, "literal_type": node.literal_type}
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def literal_from_obj(obj: Dict[str, Any]) -> Literal:
    literal_type = obj["literal_type"]
    value = obj["value"]
    # JSON does not keep 5.0 and 5 apart.
    if literal_type == 'Float':
        value = float(value)
    elif literal_type == 'Integer':
        value = int(value)
    return Literal(value=value, literal_type=literal_type)


def body_from_obj(obj: Dict[str, Any]) -> list:
    body = obj.get("body")
    if not isinstance(body, list):
        raise ValueError(f"{obj.get('type')} body must be a list, got {type(body).__name__}")
    return [ast_from_obj(o) for o in body]


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if isinstance(obj, list):
        return [ast_from_obj(o) for o in obj]
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(body=body_from_obj(obj))
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            body=body_from_obj(obj),
            orelse=ast_from_obj(obj.get("orelse")),
        )
    if t == "ElseStmt":
        return ElseStmt(body=body_from_obj(obj))
    if t == "WhileStmt":
        return WhileStmt(condition=ast_from_obj(obj["condition"]), body=body_from_obj(obj))
    if t == "ScopeStmt":
        return ScopeStmt(body=body_from_obj(obj))
    if t == "ExprStmt":
        return ExprStmt(value=ast_from_obj(obj["value"]))
    if t == "PrintStmt":
        return PrintStmt(value=ast_from_obj(obj["value"]))
    if t == "InputStmt":
        return InputStmt(name=obj["name"])
    if t == "BreakStmt":
        return BreakStmt()
    if t == "Expression":
        return Expression(
            op=operator_from_text(obj["op"]),
            left=ast_from_obj(obj["left"]),
            right=ast_from_obj(obj.get("right")),
        )
    if t == "Literal":
        return literal_from_obj(obj)
    if t == "Ident":
        return Ident(name=obj["name"])

    raise ValueError(f"Unknown AST node type: {t}")
