"""AST node definitions for the toy scripting language.

This module defines the concrete AST node dataclasses produced by the parser
and consumed by the interpreter, the pretty-printer and the JSON/Graphviz
exporters. Each node is a frozen dataclass carrying the relevant information
(an operator, child nodes, names). The `NodeType` enum tags node kinds.

Conventions:
- All AST node dataclasses inherit from `ASTNode` which records the node
    kind (`NodeType`) and the source `line` that introduced the node. The
    line is not part of structural equality, so two parses of the same text
    compare equal and hand-built trees compare equal to parsed ones.
- Nodes are immutable: child sequences are tuples and the dataclasses are
    frozen. Evaluation never mutates the tree.
- `ForStatementNode` only exists inside the parser; it is desugared into a
    block/while combination before `Parser.parse` returns.
- `EXPRESSION_NODES` and `STATEMENT_NODES` list every concrete class. Code
    that dispatches on node classes is audited against these registries by
    the test-suite, so adding a node kind shows up as a failing test at each
    dispatch site that has not been updated.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional, Tuple, Union


class NodeType(Enum):
    LITERAL = auto()
    BINARY_OP = auto()
    UNARY_OP = auto()
    VARIABLE = auto()
    ASSIGNMENT = auto()
    CALL = auto()
    MATCH_CASE = auto()
    MATCH = auto()
    EXPR_STMT = auto()
    VAR_DECL = auto()
    PRINT_STMT = auto()
    IF_STMT = auto()
    WHILE_STMT = auto()
    FOR_STMT = auto()
    BLOCK = auto()
    FUNC_DECL = auto()
    RETURN_STMT = auto()

    def __str__(self) -> str:
        return self.name


# Base AST Node
@dataclass(frozen=True)
class ASTNode:
    type: NodeType
    line: int = field(default=0, compare=False)


# Expression Nodes
@dataclass(frozen=True)
class LiteralNode(ASTNode):
    type: NodeType = NodeType.LITERAL
    # float, bool or None
    value: Any = None


@dataclass(frozen=True)
class BinaryOpNode(ASTNode):
    type: NodeType = NodeType.BINARY_OP
    left: ASTNode = field(default_factory=lambda: LiteralNode())
    operator: str = ""
    right: ASTNode = field(default_factory=lambda: LiteralNode())


@dataclass(frozen=True)
class UnaryOpNode(ASTNode):
    type: NodeType = NodeType.UNARY_OP
    operator: str = ""
    right: ASTNode = field(default_factory=lambda: LiteralNode())


@dataclass(frozen=True)
class VariableNode(ASTNode):
    type: NodeType = NodeType.VARIABLE
    name: str = ""


@dataclass(frozen=True)
class AssignmentNode(ASTNode):
    type: NodeType = NodeType.ASSIGNMENT
    name: str = ""
    value: ASTNode = field(default_factory=lambda: LiteralNode())


@dataclass(frozen=True)
class CallNode(ASTNode):
    type: NodeType = NodeType.CALL
    callee: ASTNode = field(default_factory=lambda: VariableNode())
    arguments: Tuple[ASTNode, ...] = ()


@dataclass(frozen=True)
class MatchCaseNode(ASTNode):
    type: NodeType = NodeType.MATCH_CASE
    pattern: ASTNode = field(default_factory=lambda: LiteralNode())
    body: ASTNode = field(default_factory=lambda: LiteralNode())


@dataclass(frozen=True)
class MatchNode(ASTNode):
    type: NodeType = NodeType.MATCH
    subject: ASTNode = field(default_factory=lambda: LiteralNode())
    cases: Tuple[MatchCaseNode, ...] = ()


# Statement Nodes
@dataclass(frozen=True)
class ExpressionStatementNode(ASTNode):
    type: NodeType = NodeType.EXPR_STMT
    expression: ASTNode = field(default_factory=lambda: LiteralNode())


@dataclass(frozen=True)
class VariableDeclarationNode(ASTNode):
    type: NodeType = NodeType.VAR_DECL
    name: str = ""
    initializer: Optional[ASTNode] = None


@dataclass(frozen=True)
class PrintStatementNode(ASTNode):
    type: NodeType = NodeType.PRINT_STMT
    expression: ASTNode = field(default_factory=lambda: LiteralNode())


@dataclass(frozen=True)
class BlockNode(ASTNode):
    type: NodeType = NodeType.BLOCK
    statements: Tuple[ASTNode, ...] = ()


@dataclass(frozen=True)
class IfStatementNode(ASTNode):
    type: NodeType = NodeType.IF_STMT
    condition: ASTNode = field(default_factory=lambda: LiteralNode(value=True))
    then_branch: ASTNode = field(default_factory=lambda: BlockNode())
    else_branch: Optional[ASTNode] = None


@dataclass(frozen=True)
class WhileStatementNode(ASTNode):
    type: NodeType = NodeType.WHILE_STMT
    condition: ASTNode = field(default_factory=lambda: LiteralNode(value=True))
    body: ASTNode = field(default_factory=lambda: BlockNode())


@dataclass(frozen=True)
class ForStatementNode(ASTNode):
    type: NodeType = NodeType.FOR_STMT
    initializer: Optional[ASTNode] = None
    condition: Optional[ASTNode] = None
    increment: Optional[ASTNode] = None
    body: ASTNode = field(default_factory=lambda: BlockNode())


@dataclass(frozen=True)
class FunctionDeclarationNode(ASTNode):
    type: NodeType = NodeType.FUNC_DECL
    name: str = ""
    params: Tuple[str, ...] = ()
    body: BlockNode = field(default_factory=lambda: BlockNode())


@dataclass(frozen=True)
class ReturnStatementNode(ASTNode):
    type: NodeType = NodeType.RETURN_STMT
    value: Optional[ASTNode] = None


Expression = Union[
    LiteralNode,
    BinaryOpNode,
    UnaryOpNode,
    VariableNode,
    AssignmentNode,
    CallNode,
    MatchNode,
]

Statement = Union[
    ExpressionStatementNode,
    VariableDeclarationNode,
    PrintStatementNode,
    IfStatementNode,
    WhileStatementNode,
    BlockNode,
    FunctionDeclarationNode,
    ReturnStatementNode,
]

EXPRESSION_NODES = (
    LiteralNode,
    BinaryOpNode,
    UnaryOpNode,
    VariableNode,
    AssignmentNode,
    CallNode,
    MatchNode,
)

STATEMENT_NODES = (
    ExpressionStatementNode,
    VariableDeclarationNode,
    PrintStatementNode,
    IfStatementNode,
    WhileStatementNode,
    BlockNode,
    FunctionDeclarationNode,
    ReturnStatementNode,
)

# Nodes that never stand alone: case arms live inside a MatchNode and the
# for-loop node never leaves the parser.
AUXILIARY_NODES = (MatchCaseNode, ForStatementNode)

ALL_NODES = EXPRESSION_NODES + STATEMENT_NODES + AUXILIARY_NODES
