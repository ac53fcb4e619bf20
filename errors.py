"""Error hierarchy for the toy language pipeline.

Each pipeline phase raises its own family of exceptions:

- lexing raises `LexError` (a `SyntaxError`),
- parsing raises `ParseError` subclasses (also `SyntaxError`),
- evaluation raises `ToyRuntimeError` subclasses (`RuntimeError`).

All of them share the `ToyError` base so a caller such as the REPL can catch
the whole family in one place. None of them are caught inside the pipeline.
"""

from __future__ import annotations
from typing import Any, Optional, Union

from tokens import Token, TokenType


class ToyError(Exception):
    """Base class for every error raised by the lexer, parser or interpreter."""


class LexError(ToyError, SyntaxError):
    def __init__(self, character: str, line: int):
        self.character = character
        self.line = line
        super().__init__(f"Unexpected character '{character}' at line {line}")


class ParseError(ToyError, SyntaxError):
    def __init__(self, message: str, line: int):
        self.line = line
        super().__init__(message)


class ExpectedTokenError(ParseError):
    """The parser needed `expected` but found `token`.

    `expected` is usually a `TokenType`; for positions where several token
    kinds would do (the start of an expression) it is a short description.
    """

    def __init__(
        self,
        expected: Union[TokenType, str],
        token: Token,
        message: Optional[str] = None,
    ):
        self.expected = expected
        self.token = token
        found = token.lexeme if token.type != TokenType.EOF else "end of input"
        msg = message or f"Expected {expected}"
        super().__init__(f"{msg}, got '{found}' at line {token.line}", token.line)


class InvalidAssignmentTargetError(ParseError):
    def __init__(self, line: int):
        super().__init__(f"Invalid assignment target at line {line}", line)


class NestingTooDeepError(ParseError):
    def __init__(self, line: int):
        super().__init__(f"Expression nested too deeply at line {line}", line)


class ToyRuntimeError(ToyError, RuntimeError):
    """Base class for errors raised while evaluating a program."""


class UndefinedVariableError(ToyRuntimeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Undefined variable '{name}'")


class DuplicateDefinitionError(ToyRuntimeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Variable '{name}' already defined in this scope")


class TypeMismatchError(ToyRuntimeError):
    pass


class NotCallableError(ToyRuntimeError):
    pass


class ArityError(ToyRuntimeError):
    pass


class DivisionByZeroError(ToyRuntimeError):
    pass


class StackOverflowError(ToyRuntimeError):
    pass


class NoMatchError(ToyRuntimeError):
    def __init__(self, value: Any, rendered: str):
        self.value = value
        super().__init__(f"No match for value: {rendered}")


class InternalError(ToyError, AssertionError):
    """Raised when the interpreter sees a tree a correct parser never builds."""
