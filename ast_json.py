"""Convert AST nodes into JSON-serializable structures.

This module provides `ast_to_json(node)` which returns a nested structure
of dicts/lists/primitives describing the AST node, and `program_to_json`
for a whole statement list. Every node is encoded as a dict with a
`node_type` key, the node's fields and its source `line`.
"""

from typing import Any, List, Optional
from ast_nodes import *


def ast_to_json(node: Optional[ASTNode]) -> Any:
    if node is None:
        return None

    match node:
        case LiteralNode(value=v):
            data = {"node_type": "Literal", "value": v}
        case BinaryOpNode():
            data = {
                "node_type": "BinaryOp",
                "operator": node.operator,
                "left": ast_to_json(node.left),
                "right": ast_to_json(node.right),
            }
        case UnaryOpNode():
            data = {
                "node_type": "UnaryOp",
                "operator": node.operator,
                "right": ast_to_json(node.right),
            }
        case VariableNode():
            data = {"node_type": "Variable", "name": node.name}
        case AssignmentNode():
            data = {
                "node_type": "Assignment",
                "name": node.name,
                "value": ast_to_json(node.value),
            }
        case CallNode():
            data = {
                "node_type": "Call",
                "callee": ast_to_json(node.callee),
                "arguments": [ast_to_json(a) for a in node.arguments],
            }
        case MatchCaseNode():
            data = {
                "node_type": "MatchCase",
                "pattern": ast_to_json(node.pattern),
                "body": ast_to_json(node.body),
            }
        case MatchNode():
            data = {
                "node_type": "Match",
                "subject": ast_to_json(node.subject),
                "cases": [ast_to_json(c) for c in node.cases],
            }
        case ExpressionStatementNode():
            data = {"node_type": "ExprStmt", "expression": ast_to_json(node.expression)}
        case VariableDeclarationNode():
            data = {
                "node_type": "VarDecl",
                "name": node.name,
                "initializer": ast_to_json(node.initializer),
            }
        case PrintStatementNode():
            data = {"node_type": "Print", "expression": ast_to_json(node.expression)}
        case IfStatementNode():
            data = {
                "node_type": "If",
                "condition": ast_to_json(node.condition),
                "then": ast_to_json(node.then_branch),
                "else": ast_to_json(node.else_branch),
            }
        case WhileStatementNode():
            data = {
                "node_type": "While",
                "condition": ast_to_json(node.condition),
                "body": ast_to_json(node.body),
            }
        case ForStatementNode():
            data = {
                "node_type": "For",
                "initializer": ast_to_json(node.initializer),
                "condition": ast_to_json(node.condition),
                "increment": ast_to_json(node.increment),
                "body": ast_to_json(node.body),
            }
        case BlockNode():
            data = {
                "node_type": "Block",
                "statements": [ast_to_json(s) for s in node.statements],
            }
        case FunctionDeclarationNode():
            data = {
                "node_type": "FunctionDecl",
                "name": node.name,
                "params": list(node.params),
                "body": ast_to_json(node.body),
            }
        case ReturnStatementNode():
            data = {"node_type": "Return", "value": ast_to_json(node.value)}
        case _:
            raise TypeError(f"Cannot encode {type(node).__name__} as JSON")

    data["line"] = node.line
    return data


def program_to_json(statements: List[ASTNode]) -> Any:
    return {
        "node_type": "Program",
        "statements": [ast_to_json(s) for s in statements],
    }
