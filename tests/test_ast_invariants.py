"""Audits over the node registries and tree invariants.

Every dispatch site (interpreter, pretty-printer, JSON encoder, Graphviz
renderer) must handle every node class listed in `ast_nodes`. Adding a node
kind without updating one of them makes a test here fail.
"""

import dataclasses

import pytest

from tests.utils import parse_text
from ast_nodes import *
from ast_json import ast_to_json
from ast_viz import render_ast_dot
from interpreter import ExecResult, Interpreter
from pretty_printer import PrettyPrinter


def _lit(v):
    return LiteralNode(value=v)


EXPRESSION_SAMPLES = {
    LiteralNode: _lit(1.0),
    BinaryOpNode: BinaryOpNode(left=_lit(1.0), operator="+", right=_lit(2.0)),
    UnaryOpNode: UnaryOpNode(operator="-", right=_lit(1.0)),
    VariableNode: VariableNode(name="x"),
    AssignmentNode: AssignmentNode(name="x", value=_lit(2.0)),
    CallNode: CallNode(callee=VariableNode(name="f"), arguments=()),
    MatchNode: MatchNode(
        subject=_lit(1.0), cases=(MatchCaseNode(pattern=_lit(1.0), body=_lit(2.0)),)
    ),
}

STATEMENT_SAMPLES = {
    ExpressionStatementNode: ExpressionStatementNode(expression=_lit(1.0)),
    VariableDeclarationNode: VariableDeclarationNode(name="y", initializer=_lit(1.0)),
    PrintStatementNode: PrintStatementNode(expression=_lit(1.0)),
    IfStatementNode: IfStatementNode(
        condition=_lit(True), then_branch=BlockNode(), else_branch=BlockNode()
    ),
    WhileStatementNode: WhileStatementNode(condition=_lit(False), body=BlockNode()),
    BlockNode: BlockNode(statements=(PrintStatementNode(expression=_lit(2.0)),)),
    FunctionDeclarationNode: FunctionDeclarationNode(name="g", params=("a",)),
    ReturnStatementNode: ReturnStatementNode(value=_lit(3.0)),
}

AUXILIARY_SAMPLES = {
    MatchCaseNode: MatchCaseNode(pattern=_lit(1.0), body=_lit(2.0)),
    ForStatementNode: ForStatementNode(
        initializer=VariableDeclarationNode(name="i", initializer=_lit(0.0)),
        condition=_lit(False),
        increment=AssignmentNode(name="i", value=_lit(1.0)),
        body=BlockNode(),
    ),
}

ALL_SAMPLES = {**EXPRESSION_SAMPLES, **STATEMENT_SAMPLES, **AUXILIARY_SAMPLES}


def _prepared_interpreter():
    interpreter = Interpreter(printer=lambda _: None)
    interpreter.interpret(parse_text("var x = 0; fn f() { return 1; }"))
    return interpreter


def test_samples_cover_every_registered_node():
    assert set(EXPRESSION_SAMPLES) == set(EXPRESSION_NODES)
    assert set(STATEMENT_SAMPLES) == set(STATEMENT_NODES)
    assert set(AUXILIARY_SAMPLES) == set(AUXILIARY_NODES)


def test_every_node_type_has_exactly_one_class():
    tags = [cls().type for cls in ALL_NODES]
    assert sorted(tags, key=lambda t: t.value) == sorted(NodeType, key=lambda t: t.value)


@pytest.mark.parametrize("cls", EXPRESSION_NODES, ids=lambda c: c.__name__)
def test_interpreter_evaluates_every_expression_kind(cls):
    interpreter = _prepared_interpreter()
    interpreter.evaluate(EXPRESSION_SAMPLES[cls])


@pytest.mark.parametrize("cls", STATEMENT_NODES, ids=lambda c: c.__name__)
def test_interpreter_executes_every_statement_kind(cls):
    interpreter = _prepared_interpreter()
    assert isinstance(interpreter.execute(STATEMENT_SAMPLES[cls]), ExecResult)


@pytest.mark.parametrize("cls", ALL_NODES, ids=lambda c: c.__name__)
def test_printers_and_exporters_handle_every_node_kind(cls):
    node = ALL_SAMPLES[cls]
    assert "Unknown node type" not in PrettyPrinter.print_ast(node)
    assert PrettyPrinter.print_surface(node)
    assert ast_to_json(node)["node_type"]
    assert render_ast_dot([node]).source


def test_nodes_are_immutable():
    node = BinaryOpNode(left=_lit(1.0), operator="+", right=_lit(2.0))
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.operator = "-"


def test_line_is_not_part_of_equality():
    assert LiteralNode(value=1.0, line=1) == LiteralNode(value=1.0, line=9)


def _walk(node):
    yield node
    for f in dataclasses.fields(node):
        value = getattr(node, f.name)
        children = value if isinstance(value, tuple) else (value,)
        for child in children:
            if isinstance(child, ASTNode):
                yield from _walk(child)


def test_parser_never_returns_for_nodes():
    src = """
    for (var i = 0; i < 2; i = i + 1) {
        for (;;) { return; }
    }
    fn f() { for (; false;) print 1; }
    """
    nodes = [n for stmt in parse_text(src) for n in _walk(stmt)]
    assert not any(isinstance(n, ForStatementNode) for n in nodes)
    assert any(isinstance(n, WhileStatementNode) for n in nodes)


def test_evaluation_does_not_mutate_the_tree():
    src = "var i = 0; while (i < 3) { i = i + 1; } fn f(a) { return a; } f(1);"
    statements = parse_text(src)
    snapshot = parse_text(src)
    Interpreter(printer=lambda _: None).interpret(statements)
    assert statements == snapshot
