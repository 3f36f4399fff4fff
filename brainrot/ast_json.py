"""JSON serialization/deserialization for the BrainRot AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. A program (a list of top-level
statements) is stored as ``{"type": "Program", "body": [...]}``; every
node is a dict tagged with its class name in ``"type"`` and carries its
``line`` and ``column``.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    Literal,
    Identifier,
    UnaryExpression,
    BinaryExpression,
    CallExpression,
    VariableDeclaration,
    PrintStatement,
    WhileLoop,
    IfStatement,
    FunctionDeclaration,
    Node,
    Statement,
)


def _position(node: Node) -> Dict[str, int]:
    return {"line": node.line, "column": node.column}


def _block_to_obj(statements) -> List[Any]:
    return [ast_to_obj(s) for s in statements]


def ast_to_obj(node: Any) -> Any:
    # A whole program
    if isinstance(node, list):
        return {"type": "Program", "body": _block_to_obj(node)}

    if isinstance(node, Literal):
        return {"type": "Literal", "value": node.value, **_position(node)}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "name": node.name, **_position(node)}
    if isinstance(node, UnaryExpression):
        return {
            "type": "UnaryExpression",
            "operator": node.operator,
            "operand": ast_to_obj(node.operand),
            **_position(node),
        }
    if isinstance(node, BinaryExpression):
        return {
            "type": "BinaryExpression",
            "operator": node.operator,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
            **_position(node),
        }
    if isinstance(node, CallExpression):
        return {
            "type": "CallExpression",
            "name": node.name,
            "arguments": [ast_to_obj(a) for a in node.arguments],
            **_position(node),
        }
    if isinstance(node, VariableDeclaration):
        return {"type": "VariableDeclaration", "name": node.name, "value": ast_to_obj(node.value), **_position(node)}
    if isinstance(node, PrintStatement):
        return {"type": "PrintStatement", "expression": ast_to_obj(node.expression), **_position(node)}
    if isinstance(node, WhileLoop):
        return {
            "type": "WhileLoop",
            "condition": ast_to_obj(node.condition),
            "body": _block_to_obj(node.body),
            **_position(node),
        }
    if isinstance(node, IfStatement):
        return {
            "type": "IfStatement",
            "condition": ast_to_obj(node.condition),
            "then_body": _block_to_obj(node.then_body),
            "else_body": None if node.else_body is None else _block_to_obj(node.else_body),
            **_position(node),
        }
    if isinstance(node, FunctionDeclaration):
        return {
            "type": "FunctionDeclaration",
            "name": node.name,
            "parameters": list(node.parameters),
            "body": _block_to_obj(node.body),
            **_position(node),
        }
    raise TypeError(f"ast_to_obj: unsupported node {node!r}")


def _block_from_obj(items: List[Any]) -> tuple:
    return tuple(ast_from_obj(i) for i in items)


def _literal_value(value: Any) -> Any:
    # JSON has no separate float type; numbers always come back as floats
    if isinstance(value, bool) or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    raise ValueError(f"unsupported literal value {value!r}")


def ast_from_obj(o: Dict[str, Any]) -> Any:
    if not isinstance(o, dict) or "type" not in o:
        raise ValueError(f"not an AST object: {o!r}")
    t = o["type"]
    pos = {"line": o.get("line", 0), "column": o.get("column", 0)}
    if t == "Program":
        return list(_block_from_obj(o["body"]))
    if t == "Literal":
        return Literal(_literal_value(o["value"]), **pos)
    if t == "Identifier":
        return Identifier(o["name"], **pos)
    if t == "UnaryExpression":
        return UnaryExpression(o["operator"], ast_from_obj(o["operand"]), **pos)
    if t == "BinaryExpression":
        return BinaryExpression(o["operator"], ast_from_obj(o["left"]), ast_from_obj(o["right"]), **pos)
    if t == "CallExpression":
        return CallExpression(o["name"], _block_from_obj(o.get("arguments", [])), **pos)
    if t == "VariableDeclaration":
        return VariableDeclaration(o["name"], ast_from_obj(o["value"]), **pos)
    if t == "PrintStatement":
        return PrintStatement(ast_from_obj(o["expression"]), **pos)
    if t == "WhileLoop":
        return WhileLoop(ast_from_obj(o["condition"]), _block_from_obj(o.get("body", [])), **pos)
    if t == "IfStatement":
        else_body = o.get("else_body")
        return IfStatement(
            ast_from_obj(o["condition"]),
            _block_from_obj(o.get("then_body", [])),
            None if else_body is None else _block_from_obj(else_body),
            **pos,
        )
    if t == "FunctionDeclaration":
        return FunctionDeclaration(
            o["name"],
            tuple(o.get("parameters", [])),
            _block_from_obj(o.get("body", [])),
            **pos,
        )
    raise ValueError(f"Unknown AST node type: {t}")


def program_from_obj(o: Dict[str, Any]) -> List[Statement]:
    """Load a program object, rejecting anything but a Program at the top."""
    if not isinstance(o, dict) or o.get("type") != "Program":
        raise ValueError("expected a Program object at the top level")
    return ast_from_obj(o)
