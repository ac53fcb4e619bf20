"""Pretty-printer for the AST.

Provides `PrettyPrinter.print_ast(node, indent, prefix)` which renders an
AST into a readable multi-line string, `PrettyPrinter.print_program` for a
whole statement list, and `PrettyPrinter.print_surface(node)` which renders
a node back to compact one-line source syntax. The printer is intended for
debugging, tests and the `--print-ast` command line flag rather than for
producing final source code.

Examples:
    PrettyPrinter.print_program(Parser(tokens).parse())
"""

from __future__ import annotations
from typing import List
from ast_nodes import *


def _literal(value) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return repr(value)


class PrettyPrinter:
    @staticmethod
    def print_program(statements: List[ASTNode]) -> str:
        lines = ["Program"]
        for i, stmt in enumerate(statements):
            lines.append(PrettyPrinter.print_ast(stmt, 4, f"stmt[{i}]: "))
        return "\n".join(lines)

    @staticmethod
    def print_ast(node: ASTNode, indent: int = 0, prefix: str = "") -> str:
        """Pretty print AST and return as string."""
        lines = []
        indent_str = " " * indent

        if not isinstance(node, ASTNode):
            lines.append(f"{indent_str}{prefix}{node}")
            return "\n".join(lines)

        match node:
            case LiteralNode(value=v):
                lines.append(f"{indent_str}{prefix}Literal({_literal(v)})")

            case VariableNode(name=n):
                lines.append(f"{indent_str}{prefix}Variable({n})")

            case BinaryOpNode(left=left, operator=op, right=right):
                lines.append(f"{indent_str}{prefix}BinaryOp({op})")
                lines.append(PrettyPrinter.print_ast(left, indent + 2, "left: "))
                lines.append(PrettyPrinter.print_ast(right, indent + 2, "right: "))

            case UnaryOpNode(operator=op, right=right):
                lines.append(f"{indent_str}{prefix}UnaryOp({op})")
                lines.append(PrettyPrinter.print_ast(right, indent + 2))

            case AssignmentNode(name=n, value=value):
                lines.append(f"{indent_str}{prefix}Assignment({n})")
                lines.append(PrettyPrinter.print_ast(value, indent + 2, "value: "))

            case CallNode(callee=callee, arguments=args):
                lines.append(f"{indent_str}{prefix}Call")
                lines.append(PrettyPrinter.print_ast(callee, indent + 2, "callee: "))
                for i, arg in enumerate(args):
                    lines.append(PrettyPrinter.print_ast(arg, indent + 4, f"arg[{i}]: "))

            case MatchCaseNode(pattern=pattern, body=body):
                lines.append(f"{indent_str}{prefix}Case")
                lines.append(PrettyPrinter.print_ast(pattern, indent + 2, "pattern: "))
                lines.append(PrettyPrinter.print_ast(body, indent + 2, "body: "))

            case MatchNode(subject=subject, cases=cases):
                lines.append(f"{indent_str}{prefix}Match")
                lines.append(PrettyPrinter.print_ast(subject, indent + 2, "subject: "))
                for i, arm in enumerate(cases):
                    lines.append(PrettyPrinter.print_ast(arm, indent + 4, f"case[{i}]: "))

            case FunctionDeclarationNode(name=name, params=params, body=body):
                lines.append(f"{indent_str}{prefix}FunctionDecl({name}, params=[{', '.join(params)}])")
                lines.append(PrettyPrinter.print_ast(body, indent + 4, "body: "))

            case ReturnStatementNode(value=value):
                lines.append(f"{indent_str}{prefix}Return")
                if value:
                    lines.append(PrettyPrinter.print_ast(value, indent + 2, "value: "))

            case ExpressionStatementNode(expression=expr):
                lines.append(f"{indent_str}{prefix}ExpressionStatement")
                lines.append(PrettyPrinter.print_ast(expr, indent + 2))

            case PrintStatementNode(expression=expr):
                lines.append(f"{indent_str}{prefix}Print")
                lines.append(PrettyPrinter.print_ast(expr, indent + 2))

            case WhileStatementNode(condition=cond, body=body):
                lines.append(f"{indent_str}{prefix}WhileStatement")
                lines.append(PrettyPrinter.print_ast(cond, indent + 4, "condition: "))
                lines.append(PrettyPrinter.print_ast(body, indent + 4, "body: "))

            case ForStatementNode(initializer=init, condition=cond, increment=incr, body=body):
                lines.append(f"{indent_str}{prefix}ForStatement")
                if init:
                    lines.append(PrettyPrinter.print_ast(init, indent + 4, "init: "))
                if cond:
                    lines.append(PrettyPrinter.print_ast(cond, indent + 4, "condition: "))
                if incr:
                    lines.append(PrettyPrinter.print_ast(incr, indent + 4, "increment: "))
                lines.append(PrettyPrinter.print_ast(body, indent + 4, "body: "))

            case IfStatementNode(condition=cond, then_branch=then_b, else_branch=else_b):
                lines.append(f"{indent_str}{prefix}IfStatement")
                lines.append(PrettyPrinter.print_ast(cond, indent + 4, "condition: "))
                lines.append(PrettyPrinter.print_ast(then_b, indent + 4, "then: "))
                if else_b:
                    lines.append(PrettyPrinter.print_ast(else_b, indent + 4, "else: "))

            case BlockNode(statements=stmts):
                lines.append(f"{indent_str}{prefix}Block")
                for i, stmt in enumerate(stmts):
                    lines.append(PrettyPrinter.print_ast(stmt, indent + 4, f"stmt[{i}]: "))

            case VariableDeclarationNode(name=vname, initializer=init):
                init_str = " = ..." if init else ""
                lines.append(f"{indent_str}{prefix}VarDecl({vname}{init_str})")
                if init:
                    lines.append(PrettyPrinter.print_ast(init, indent + 2, "init: "))

            case _:
                lines.append(f"{indent_str}{prefix}Unknown node type: {type(node)}")

        return "\n".join(line for line in lines if line)

    @staticmethod
    def print_surface(node: ASTNode) -> str:
        """Return a compact, surface-syntax-like one-line representation of a node.

        Binary expressions are fully parenthesised so the rendering shows how
        the parser grouped them, e.g. `(3 + (2 * 4))`.
        """
        if node is None:
            return ""

        def _p(n: ASTNode) -> str:
            return PrettyPrinter.print_surface(n) if isinstance(n, ASTNode) else str(n)

        match node:
            case LiteralNode(value=v):
                return _literal(v)
            case VariableNode(name=n):
                return n
            case BinaryOpNode(left=l, operator=op, right=r):
                return f"({_p(l)} {op} {_p(r)})"
            case UnaryOpNode(operator=op, right=right):
                return f"{op}{_p(right)}"
            case AssignmentNode(name=n, value=value):
                return f"{n} = {_p(value)}"
            case CallNode(callee=callee, arguments=args):
                args_s = ", ".join(_p(a) for a in args)
                return f"{_p(callee)}({args_s})"
            case MatchCaseNode(pattern=pattern, body=body):
                return f"case {_p(pattern)} => {_p(body)}"
            case MatchNode(subject=subject, cases=cases):
                arms = ", ".join(_p(c) for c in cases)
                return f"match {_p(subject)} {{ {arms} }}"
            case ExpressionStatementNode(expression=expr):
                return f"{_p(expr)};"
            case PrintStatementNode(expression=expr):
                return f"print {_p(expr)};"
            case ReturnStatementNode(value=value):
                if value:
                    return f"return {_p(value)};"
                return "return;"
            case VariableDeclarationNode(name=vn, initializer=init):
                if init:
                    return f"var {vn} = {_p(init)};"
                return f"var {vn};"
            case WhileStatementNode(condition=cond):
                return f"while ({_p(cond)})"
            case ForStatementNode(condition=cond):
                return f"for (; {_p(cond)}; )"
            case IfStatementNode(condition=cond):
                return f"if ({_p(cond)})"
            case FunctionDeclarationNode(name=fn, params=params):
                return f"fn {fn}({', '.join(params)})"
            case BlockNode():
                return "{...}"
            case _:
                raise TypeError(f"Cannot render {type(node).__name__} as source")
