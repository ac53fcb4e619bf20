"""
Lexer for the toy scripting language.

Overview:
- This module implements a small hand-written lexical analyzer (scanner) that
    transforms an input source string into a list of `Token` objects defined
    in `tokens.py`.
- It recognizes keywords (e.g. `var`, `fn`, `if`, `while`, `match`, `case`),
    identifiers, number literals, single- and two-character operators
    (`==`, `!=`, `<=`, `>=`, `=>`), punctuation (commas, semicolons,
    parentheses and braces) and skips spaces, tabs, carriage returns,
    newlines and single-line comments starting with `//`.

Examples:
    Input:  "var a = 1.5;"
    Tokens: [VAR 'var', IDENTIFIER 'a', ASSIGN '=', NUMBER '1.5', SEMICOLON ';', EOF '']

Implementation notes:
- The lexer is a simple stateful scanner using `self.pos` and `self.current_char`.
- Two-character operators are checked first so `==` is never split into
    two `=` tokens and `=>` never into `=` `>`.
- Number literals are digits with an optional fractional part; the dot is
    only consumed when a digit follows it, so `1.` lexes as NUMBER then an
    unexpected `.`.
- Every token keeps its raw source slice as the lexeme; the parser converts
    NUMBER lexemes to floats.
"""

from __future__ import annotations
from typing import Optional, List
from tokens import Token, TokenType, KEYWORDS
from errors import LexError


# Whitespace that is skipped silently; newlines are handled by `advance`.
WHITESPACE = (" ", "\t", "\r", "\n")

TWO_CHAR_OPERATORS = {
    "==": TokenType.EQ,
    "!=": TokenType.NEQ,
    "<=": TokenType.LTE,
    ">=": TokenType.GTE,
    "=>": TokenType.ARROW,
}

SINGLE_CHAR_TOKENS = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    "/": TokenType.SLASH,
    "*": TokenType.STAR,
    "!": TokenType.NOT,
    "=": TokenType.ASSIGN,
    ">": TokenType.GT,
    "<": TokenType.LT,
}


def _is_digit(ch: Optional[str]) -> bool:
    return ch is not None and "0" <= ch <= "9"


class Lexer:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.current_char = self.text[self.pos] if self.text else None

    def advance(self) -> None:
        """Advance to next character."""
        if self.current_char == "\n":
            self.line += 1

        self.pos += 1
        if self.pos < len(self.text):
            self.current_char = self.text[self.pos]
        else:
            self.current_char = None

    def peek_char(self, offset: int = 1) -> Optional[str]:
        """Look ahead without consuming."""
        next_pos = self.pos + offset
        if next_pos < len(self.text):
            return self.text[next_pos]
        return None

    def skip_whitespace(self) -> None:
        while self.current_char is not None and self.current_char in WHITESPACE:
            self.advance()

    def skip_comment(self) -> None:
        """Skip a `//` comment up to (not including) the newline."""
        while self.current_char is not None and self.current_char != "\n":
            self.advance()

    def number(self) -> str:
        """Scan a number literal and return its lexeme."""
        start = self.pos
        while _is_digit(self.current_char):
            self.advance()

        # Two-character lookahead: only take the dot if a digit follows.
        if self.current_char == "." and _is_digit(self.peek_char()):
            self.advance()
            while _is_digit(self.current_char):
                self.advance()

        return self.text[start : self.pos]

    def identifier(self) -> str:
        """Scan an identifier or keyword. The first character is a letter."""
        start = self.pos
        self.advance()
        while self.current_char is not None and (
            self.current_char.isalnum() or self.current_char == "_"
        ):
            self.advance()
        return self.text[start : self.pos]

    def get_next_token(self) -> Token:
        """Return the next token, or EOF once the input is exhausted."""
        while self.current_char is not None:
            if self.current_char in WHITESPACE:
                self.skip_whitespace()
                continue

            if self.current_char == "/" and self.peek_char() == "/":
                self.skip_comment()
                continue

            line = self.line

            pair = self.current_char + (self.peek_char() or "")
            if pair in TWO_CHAR_OPERATORS:
                self.advance()
                self.advance()
                return Token(TWO_CHAR_OPERATORS[pair], pair, line)

            if self.current_char in SINGLE_CHAR_TOKENS:
                ch = self.current_char
                self.advance()
                return Token(SINGLE_CHAR_TOKENS[ch], ch, line)

            if _is_digit(self.current_char):
                return Token(TokenType.NUMBER, self.number(), line)

            if self.current_char.isalpha():
                ident = self.identifier()
                return Token(KEYWORDS.get(ident, TokenType.IDENTIFIER), ident, line)

            raise LexError(self.current_char, self.line)

        return Token(TokenType.EOF, "", self.line)

    def tokenize(self) -> List[Token]:
        """Return all tokens from the input string, ending with one EOF."""
        tokens = []
        while True:
            token = self.get_next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                break
        return tokens
