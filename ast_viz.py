"""Graphviz visualization helpers for parsed programs.

Provides `render_ast_dot(statements)` which returns a `graphviz.Digraph`
object (not rendered) drawing the program as a tree: one node per AST node,
labelled with its kind and key fields, and one edge per parent/child link
labelled with the field name. `write_and_render` writes the rendered file
to disk (requires the Graphviz binaries).

Statement nodes are drawn as boxes, expressions as ellipses, so the shape
of the desugared `for` loops and nested blocks is easy to see.
"""

from typing import Iterable, List, Tuple
from graphviz import Digraph
from ast_nodes import *
from pretty_printer import PrettyPrinter


def _children(node: ASTNode) -> List[Tuple[str, ASTNode]]:
    """Return (edge label, child) pairs in source order."""
    match node:
        case BinaryOpNode(left=l, right=r):
            return [("left", l), ("right", r)]
        case UnaryOpNode(right=r):
            return [("operand", r)]
        case AssignmentNode(value=v):
            return [("value", v)]
        case CallNode(callee=callee, arguments=args):
            return [("callee", callee)] + [(f"arg[{i}]", a) for i, a in enumerate(args)]
        case MatchCaseNode(pattern=p, body=b):
            return [("pattern", p), ("body", b)]
        case MatchNode(subject=s, cases=cases):
            return [("subject", s)] + [(f"case[{i}]", c) for i, c in enumerate(cases)]
        case ExpressionStatementNode(expression=e) | PrintStatementNode(expression=e):
            return [("expr", e)]
        case VariableDeclarationNode(initializer=init):
            return [("init", init)] if init is not None else []
        case IfStatementNode(condition=c, then_branch=t, else_branch=e):
            pairs = [("cond", c), ("then", t)]
            if e is not None:
                pairs.append(("else", e))
            return pairs
        case WhileStatementNode(condition=c, body=b):
            return [("cond", c), ("body", b)]
        case ForStatementNode(initializer=i, condition=c, increment=inc, body=b):
            pairs = [(lbl, n) for lbl, n in (("init", i), ("cond", c), ("incr", inc)) if n]
            return pairs + [("body", b)]
        case BlockNode(statements=stmts):
            return [(f"stmt[{i}]", s) for i, s in enumerate(stmts)]
        case FunctionDeclarationNode(body=b):
            return [("body", b)]
        case ReturnStatementNode(value=v):
            return [("value", v)] if v is not None else []
        case _:
            return []


def _label(node: ASTNode) -> str:
    match node:
        case LiteralNode() | VariableNode():
            return PrettyPrinter.print_surface(node)
        case BinaryOpNode(operator=op) | UnaryOpNode(operator=op):
            return op
        case AssignmentNode(name=n):
            return f"{n} ="
        case VariableDeclarationNode(name=n):
            return f"var {n}"
        case FunctionDeclarationNode():
            return PrettyPrinter.print_surface(node)
        case _:
            return type(node).__name__.removesuffix("Node")


def render_ast_dot(statements: Iterable[ASTNode], *, show_lines: bool = False) -> Digraph:
    """Return a graphviz.Digraph for the given program.

    The caller may call `dot.source` to inspect the dot text, or call
    `dot.render(filename, format=...)` to write files (requires Graphviz installed).
    """
    dot = Digraph(format="svg")
    dot.attr("graph", rankdir="TB")
    dot.node("program", label="Program", shape="doubleoctagon")

    counter = 0

    def visit(node: ASTNode, parent: str, edge_label: str) -> None:
        nonlocal counter
        counter += 1
        name = f"n{counter}"
        label = _label(node)
        if show_lines and node.line:
            label = f"{label}\\nline {node.line}"
        shape = "ellipse" if isinstance(node, EXPRESSION_NODES) else "box"
        dot.node(name, label=label, shape=shape)
        dot.edge(parent, name, label=edge_label)
        for child_label, child in _children(node):
            visit(child, name, child_label)

    for i, stmt in enumerate(statements):
        visit(stmt, "program", str(i))

    return dot


def write_and_render(
    statements: Iterable[ASTNode],
    out_path: str,
    fmt: str = "svg",
    show_lines: bool = False,
) -> str:
    """Write and render the program tree to `out_path` (without extension).

    Example: write_and_render(stmts, 'out/ast', fmt='png') will create out/ast.png
    (requires Graphviz). Returns the path of the rendered file."""
    dot = render_ast_dot(statements, show_lines=show_lines)
    dot.format = fmt
    # Note: render will append extension automatically
    return dot.render(out_path, cleanup=True)
