"""Tree-walking interpreter for the toy scripting language.

The `Interpreter` evaluates the statement list produced by `Parser.parse`.
It holds a single "current environment" pointer which starts as one global
scope and survives across calls to `interpret`, so a REPL can feed it one
line at a time.

Control flow:
- Every statement executor returns an `ExecResult`: `NORMAL` when the
    statement ran to completion, or `Returned(value)` when a `return`
    statement ran. Blocks, loops and conditionals hand a `Returned` result
    straight back to their caller; a function call unwraps it. A `return`
    at top level stops the remaining top-level statements.
- Blocks and calls swap the environment pointer in a try/finally, so the
    previous scope is restored however control leaves them, errors included.

Values:
- numbers are Python floats, booleans are `bool`, `null` is `None` and
    functions are `ToyFunction` instances.
- `==`/`!=` use `values_equal`, which never treats a boolean as a number.
- Division by zero raises `DivisionByZeroError`.
- Calls must pass exactly as many arguments as the function has parameters.
- Recursion deeper than the Python stack allows raises `StackOverflowError`
    instead of leaking `RecursionError`.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, List
from ast_nodes import *
from environment import Environment
from errors import (
    ArityError,
    DivisionByZeroError,
    InternalError,
    NoMatchError,
    NotCallableError,
    StackOverflowError,
    TypeMismatchError,
)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class ExecResult:
    """Outcome of executing one statement."""


@dataclass(frozen=True)
class Normal(ExecResult):
    pass


@dataclass(frozen=True)
class Returned(ExecResult):
    value: Any = None


NORMAL = Normal()


class ToyFunction:
    """A function value: its declaration plus the scope it closes over."""

    def __init__(self, declaration: FunctionDeclarationNode, closure: Environment):
        self.declaration = declaration
        self.closure = closure

    @property
    def arity(self) -> int:
        return len(self.declaration.params)

    def __repr__(self) -> str:
        return f"<fn {self.declaration.name}>"


def is_number(value: Any) -> bool:
    return isinstance(value, float) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value != ""
    return True


def values_equal(left: Any, right: Any) -> bool:
    """Structural equality used by `==`, `!=` and match patterns."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, ToyFunction) or isinstance(right, ToyFunction):
        return left is right
    return left == right


def stringify(value: Any) -> str:
    """Render a runtime value the way `print` shows it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        text = repr(value)
        if "e" in text:
            # spell out exponent forms such as 1e+16 and 1e-05
            text = format(Decimal(text), "f")
            if "." not in text:
                text += ".0"
        return text
    return str(value)


def _check_numbers(operator: str, *operands: Any) -> None:
    for operand in operands:
        if not is_number(operand):
            raise TypeMismatchError(
                f"Operands of '{operator}' must be numbers, got {stringify(operand)}"
            )


class Interpreter:
    def __init__(self, printer: Callable[[str], Any] = print):
        self.printer = printer
        self.globals = Environment()
        self.environment = self.globals

    def interpret(self, statements: List[ASTNode]) -> None:
        """Execute top-level statements in order."""
        for stmt in statements:
            try:
                result = self.execute(stmt)
            except RecursionError:
                raise StackOverflowError("Maximum call depth exceeded") from None
            if isinstance(result, Returned):
                logger.debug("top-level return, discarding %s", stringify(result.value))
                return

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def execute(self, stmt: ASTNode) -> ExecResult:
        match stmt:
            case ExpressionStatementNode(expression=expr):
                self.evaluate(expr)
                return NORMAL

            case VariableDeclarationNode(name=name, initializer=init):
                value = self.evaluate(init) if init is not None else None
                self.environment.define(name, value)
                return NORMAL

            case PrintStatementNode(expression=expr):
                self.printer(stringify(self.evaluate(expr)))
                return NORMAL

            case IfStatementNode(
                condition=cond, then_branch=then_branch, else_branch=else_branch
            ):
                if is_truthy(self.evaluate(cond)):
                    return self.execute(then_branch)
                if else_branch is not None:
                    return self.execute(else_branch)
                return NORMAL

            case WhileStatementNode(condition=cond, body=body):
                while is_truthy(self.evaluate(cond)):
                    result = self.execute(body)
                    if isinstance(result, Returned):
                        return result
                return NORMAL

            case BlockNode(statements=stmts):
                return self.execute_block(stmts, Environment(self.environment))

            case FunctionDeclarationNode(name=name):
                function = ToyFunction(stmt, Environment(self.environment))
                self.environment.define(name, function)
                return NORMAL

            case ReturnStatementNode(value=None):
                return Returned(None)

            case ReturnStatementNode(value=expr):
                return Returned(self.evaluate(expr))

            case ForStatementNode():
                raise InternalError("for-loop reached the interpreter without desugaring")

            case _:
                raise InternalError(f"Unhandled statement node: {stmt!r}")

    def execute_block(self, statements, env: Environment) -> ExecResult:
        """Run statements in `env`, restoring the current scope afterwards."""
        previous = self.environment
        try:
            self.environment = env
            for stmt in statements:
                result = self.execute(stmt)
                if isinstance(result, Returned):
                    return result
            return NORMAL
        finally:
            self.environment = previous

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def evaluate(self, expr: ASTNode) -> Any:
        match expr:
            case LiteralNode(value=v):
                return v

            case BinaryOpNode(left=l, operator=op, right=r):
                return self._binary(op, self.evaluate(l), self.evaluate(r))

            case UnaryOpNode(operator=op, right=right):
                val = self.evaluate(right)
                match op:
                    case "-":
                        _check_numbers(op, val)
                        return -val
                    case "!":
                        return not is_truthy(val)
                    case _:
                        raise InternalError(f"Unsupported unary operator: {op}")

            case VariableNode(name=n):
                return self.environment.get(n)

            case AssignmentNode(name=n, value=value):
                return self.environment.assign(n, self.evaluate(value))

            case CallNode(callee=callee, arguments=args):
                function = self.evaluate(callee)
                if not isinstance(function, ToyFunction):
                    raise NotCallableError(
                        f"Can only call functions, got {stringify(function)}"
                    )
                evaled = [self.evaluate(a) for a in args]
                return self.call(function, evaled)

            case MatchNode(subject=subject, cases=cases):
                subject_value = self.evaluate(subject)
                for arm in cases:
                    if values_equal(subject_value, self.evaluate(arm.pattern)):
                        return self.evaluate(arm.body)
                raise NoMatchError(subject_value, stringify(subject_value))

            case _:
                raise InternalError(f"Unhandled expression node: {expr!r}")

    def _binary(self, op: str, lv: Any, rv: Any) -> Any:
        match op:
            case "==":
                return values_equal(lv, rv)
            case "!=":
                return not values_equal(lv, rv)

        _check_numbers(op, lv, rv)
        match op:
            case "+":
                return lv + rv
            case "-":
                return lv - rv
            case "*":
                return lv * rv
            case "/":
                if rv == 0:
                    raise DivisionByZeroError(f"Division by zero: {stringify(lv)} / 0")
                return lv / rv
            case ">":
                return lv > rv
            case ">=":
                return lv >= rv
            case "<":
                return lv < rv
            case "<=":
                return lv <= rv
            case _:
                raise InternalError(f"Unsupported binary operator: {op}")

    def call(self, function: ToyFunction, arguments: List[Any]) -> Any:
        """Invoke `function` with already-evaluated arguments."""
        if len(arguments) != function.arity:
            raise ArityError(
                f"{function!r} expects {function.arity} argument(s), got {len(arguments)}"
            )

        env = Environment(function.closure)
        for name, value in zip(function.declaration.params, arguments):
            env.define(name, value)

        logger.debug("call %r with %d argument(s)", function, len(arguments))
        try:
            result = self.execute_block(function.declaration.body.statements, env)
        except RecursionError:
            raise StackOverflowError("Maximum call depth exceeded") from None
        if isinstance(result, Returned):
            return result.value
        return None
