"""Token definitions for the lexer.

This module defines the `TokenType` enum for all token kinds recognized by
the lexer, the immutable `Token` dataclass (type, raw lexeme and source
line) and the fixed `KEYWORDS` table mapping reserved words to their token
types. Tokens are the atomic units produced by the lexer and consumed by the
parser.
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass
from typing import Dict


class TokenType(Enum):
    # Grouping and punctuation
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    SEMICOLON = auto()
    COMMA = auto()

    # Arithmetic operators
    MINUS = auto()
    PLUS = auto()
    SLASH = auto()
    STAR = auto()

    # Comparison, equality and assignment
    NOT = auto()
    NEQ = auto()
    ASSIGN = auto()
    EQ = auto()
    GT = auto()
    GTE = auto()
    LT = auto()
    LTE = auto()
    ARROW = auto()

    # Literals
    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()  # reserved, never produced by the lexer

    # Keywords
    AND = auto()
    ELSE = auto()
    FALSE = auto()
    FN = auto()
    FOR = auto()
    IF = auto()
    NULL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()
    MATCH = auto()
    CASE = auto()

    # Special
    EOF = auto()

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    line: int

    def __str__(self) -> str:
        return f"{self.type} {self.lexeme} {self.line}"

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.lexeme!r}, line={self.line})"


KEYWORDS: Dict[str, TokenType] = {
    "and": TokenType.AND,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "fn": TokenType.FN,
    "for": TokenType.FOR,
    "if": TokenType.IF,
    "null": TokenType.NULL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
    "match": TokenType.MATCH,
    "case": TokenType.CASE,
}
