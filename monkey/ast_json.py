"""JSON serialization/deserialization for the Monkey AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding, so a parsed program can be saved
with `--emit-ast` and evaluated later with `--ast`.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Program,
    LetStmt,
    ReturnStmt,
    ExprStmt,
    Block,
    Ident,
    IntegerLit,
    StringLit,
    BooleanLit,
    PrefixOp,
    InfixOp,
    IfExpr,
    FunctionLit,
    Call,
    ArrayLit,
    Index,
    HashLit,
)


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        return {"type": "Program", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, LetStmt):
        return {"type": "LetStmt", "name": ast_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, ReturnStmt):
        return {"type": "ReturnStmt", "value": ast_to_obj(node.value)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name}
    if isinstance(node, IntegerLit):
        return {"type": "IntegerLit", "value": node.value}
    if isinstance(node, StringLit):
        return {"type": "StringLit", "value": node.value}
    if isinstance(node, BooleanLit):
        return {"type": "BooleanLit", "value": node.value}
    if isinstance(node, PrefixOp):
        return {"type": "PrefixOp", "op": node.op, "operand": ast_to_obj(node.operand)}
    if isinstance(node, InfixOp):
        return {"type": "InfixOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, IfExpr):
        return {
            "type": "IfExpr",
            "condition": ast_to_obj(node.condition),
            "consequence": ast_to_obj(node.consequence),
            "alternative": ast_to_obj(node.alternative),
        }
    if isinstance(node, FunctionLit):
        return {
            "type": "FunctionLit",
            "params": [ast_to_obj(p) for p in node.params],
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Call):
        return {"type": "Call", "callee": ast_to_obj(node.callee), "args": [ast_to_obj(a) for a in node.args]}
    if isinstance(node, ArrayLit):
        return {"type": "ArrayLit", "elements": [ast_to_obj(e) for e in node.elements]}
    if isinstance(node, Index):
        return {"type": "Index", "target": ast_to_obj(node.target), "index": ast_to_obj(node.index)}
    if isinstance(node, HashLit):
        return {"type": "HashLit", "pairs": [[ast_to_obj(k), ast_to_obj(v)] for (k, v) in node.pairs]}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "LetStmt":
        return LetStmt(name=ast_from_obj(obj["name"]), value=ast_from_obj(obj["value"]))
    if t == "ReturnStmt":
        return ReturnStmt(value=ast_from_obj(obj["value"]))
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "Block":
        return Block(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "Ident":
        return Ident(name=obj["name"])
    if t == "IntegerLit":
        return IntegerLit(value=int(obj["value"]))
    if t == "StringLit":
        return StringLit(value=obj["value"])
    if t == "BooleanLit":
        return BooleanLit(value=bool(obj["value"]))
    if t == "PrefixOp":
        return PrefixOp(op=obj["op"], operand=ast_from_obj(obj["operand"]))
    if t == "InfixOp":
        return InfixOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "IfExpr":
        return IfExpr(
            condition=ast_from_obj(obj["condition"]),
            consequence=ast_from_obj(obj["consequence"]),
            alternative=ast_from_obj(obj.get("alternative")),
        )
    if t == "FunctionLit":
        return FunctionLit(params=[ast_from_obj(p) for p in obj["params"]], body=ast_from_obj(obj["body"]))
    if t == "Call":
        return Call(callee=ast_from_obj(obj["callee"]), args=[ast_from_obj(a) for a in obj["args"]])
    if t == "ArrayLit":
        return ArrayLit(elements=[ast_from_obj(e) for e in obj["elements"]])
    if t == "Index":
        return Index(target=ast_from_obj(obj["target"]), index=ast_from_obj(obj["index"]))
    if t == "HashLit":
        return HashLit(pairs=[(ast_from_obj(k), ast_from_obj(v)) for (k, v) in obj["pairs"]])

    raise ValueError(f"Unknown AST node type: {t}")
