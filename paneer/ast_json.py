"""JSON serialization/deserialization for PaneerLang AST.

This module converts between PaneerLang AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node records its
source line, and the conversion is a full round-trip for all node types
and `TypeSpec`.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    VarDecl,
    FuncParam,
    FuncDecl,
    Block,
    IfStmt,
    WhileStmt,
    ForInStmt,
    ReturnStmt,
    ExprStmt,
    IntLit,
    FloatLit,
    StringLit,
    BoolLit,
    ArrayLit,
    Ident,
    BinaryOp,
    UnaryOp,
    Call,
    Index,
    Print,
)
from .types import TypeSpec


LITERALS = {
    "IntLit": IntLit,
    "FloatLit": FloatLit,
    "StringLit": StringLit,
    "BoolLit": BoolLit,
}


def typespec_to_obj(t: TypeSpec) -> Dict[str, Any]:
    return {"kind": t.kind, "args": [typespec_to_obj(a) for a in t.args]}


def typespec_from_obj(o: Dict[str, Any]) -> TypeSpec:
    return TypeSpec(o["kind"], tuple(typespec_from_obj(x) for x in o.get("args", [])))


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, TypeSpec):
        return {"__type__": "TypeSpec", "value": typespec_to_obj(node)}

    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, FuncParam):
        return {"type": "FuncParam", "name": node.name, "type_spec": ast_to_obj(node.type_spec)}

    obj = _node_fields(node)
    obj["line"] = node.line
    return obj


def _node_fields(node: Any) -> Dict[str, Any]:
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "name": node.name,
            "type_spec": ast_to_obj(node.type_spec),
            "expr": ast_to_obj(node.expr),
        }
    if isinstance(node, FuncDecl):
        return {
            "type": "FuncDecl",
            "name": node.name,
            "params": [ast_to_obj(p) for p in node.params],
            "return_type": ast_to_obj(node.return_type),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_block": ast_to_obj(node.then_block),
            "else_block": ast_to_obj(node.else_block),
        }
    if isinstance(node, WhileStmt):
        return {"type": "WhileStmt", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, ForInStmt):
        return {
            "type": "ForInStmt",
            "var_name": node.var_name,
            "iterable": ast_to_obj(node.iterable),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, ReturnStmt):
        return {"type": "ReturnStmt", "value": ast_to_obj(node.value)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, (IntLit, FloatLit, StringLit, BoolLit)):
        return {"type": type(node).__name__, "value": node.value}
    if isinstance(node, ArrayLit):
        return {"type": "ArrayLit", "elements": [ast_to_obj(e) for e in node.elements]}
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name}
    if isinstance(node, BinaryOp):
        return {"type": "BinaryOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": node.op, "operand": ast_to_obj(node.operand)}
    if isinstance(node, Call):
        return {"type": "Call", "name": node.name, "args": [ast_to_obj(a) for a in node.args]}
    if isinstance(node, Index):
        return {"type": "Index", "target": ast_to_obj(node.target), "index": ast_to_obj(node.index)}
    if isinstance(node, Print):
        return {"type": "Print", "arg": ast_to_obj(node.arg)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    if obj.get("__type__") == "TypeSpec":
        return typespec_from_obj(obj["value"])
    t = obj.get("type")
    line = obj.get("line", 0)
    if t == "Program":
        return Program(body=[ast_from_obj(n) for n in obj["body"]])
    if t == "FuncParam":
        return FuncParam(name=obj["name"], type_spec=ast_from_obj(obj["type_spec"]))
    if t == "VarDecl":
        return VarDecl(
            name=obj["name"],
            type_spec=ast_from_obj(obj["type_spec"]),
            expr=ast_from_obj(obj["expr"]),
            line=line,
        )
    if t == "FuncDecl":
        return FuncDecl(
            name=obj["name"],
            params=[ast_from_obj(p) for p in obj["params"]],
            return_type=ast_from_obj(obj["return_type"]),
            body=ast_from_obj(obj["body"]),
            line=line,
        )
    if t == "Block":
        return Block(statements=[ast_from_obj(s) for s in obj["statements"]], line=line)
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            then_block=ast_from_obj(obj["then_block"]),
            else_block=ast_from_obj(obj.get("else_block")),
            line=line,
        )
    if t == "WhileStmt":
        return WhileStmt(condition=ast_from_obj(obj["condition"]), body=ast_from_obj(obj["body"]), line=line)
    if t == "ForInStmt":
        return ForInStmt(
            var_name=obj["var_name"],
            iterable=ast_from_obj(obj["iterable"]),
            body=ast_from_obj(obj["body"]),
            line=line,
        )
    if t == "ReturnStmt":
        return ReturnStmt(value=ast_from_obj(obj.get("value")), line=line)
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]), line=line)
    if t in LITERALS:
        value = obj["value"]
        if t == "FloatLit":
            # hand-written JSON may spell integral floats as ints
            value = float(value)
        return LITERALS[t](value=value, line=line)
    if t == "ArrayLit":
        return ArrayLit(elements=[ast_from_obj(e) for e in obj["elements"]], line=line)
    if t == "Ident":
        return Ident(name=obj["name"], line=line)
    if t == "BinaryOp":
        return BinaryOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]), line=line)
    if t == "UnaryOp":
        return UnaryOp(op=obj["op"], operand=ast_from_obj(obj["operand"]), line=line)
    if t == "Call":
        return Call(name=obj["name"], args=[ast_from_obj(a) for a in obj["args"]], line=line)
    if t == "Index":
        return Index(target=ast_from_obj(obj["target"]), index=ast_from_obj(obj["index"]), line=line)
    if t == "Print":
        return Print(arg=ast_from_obj(obj["arg"]), line=line)

    raise ValueError(f"Unknown AST node type: {t}")
