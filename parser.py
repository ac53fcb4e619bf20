"""
Parser for the toy scripting language.

Overview and approach:
- This parser is a hand-written recursive-descent parser with one token of
    lookahead. Each precedence level of the expression grammar has its own
    method; binary levels loop, so they are left-associative:

        assignment -> equality -> comparison -> term -> factor -> unary
                   -> call -> primary

- Assignment is right-associative and only accepted when the left-hand side
    parsed as a bare variable reference (`a = b = 1` is fine, `1 = a` and
    `f() = 1` raise `InvalidAssignmentTargetError`).

Statement parsing:
- `parse_declaration()` recognizes `var` and `fn` declarations, which are
    only allowed at statement start (top level, blocks, function bodies). It
    falls back to `parse_statement()` for everything else.
- `parse_statement()` recognizes `print`, `if`, `while`, `for`, blocks and
    `return`, and falls back to an expression statement.
- `for (init; cond; incr) body` is desugared while parsing into

        Block(init?, While(cond or true, Block(body, incr?)))

    so the interpreter never sees a for-loop node.

Expressions:
- `match subject { case p => e, case q => f, }` is a primary expression. The
    case list is comma separated, may be empty and tolerates a trailing comma.
- Calls are postfix on any primary: `f(1)(2)` calls the result of `f(1)`.

Errors:
- Any token mismatch raises `ExpectedTokenError` immediately; there is no
    error recovery.
- Input nested deeper than the Python stack allows raises
    `NestingTooDeepError`.

Examples:
    Parser(Lexer("var a = 1 + 2 * 3;").tokenize()).parse()
"""

from __future__ import annotations
import logging
from typing import List, Optional
from tokens import Token, TokenType
from ast_nodes import *
from errors import (
    ExpectedTokenError,
    InvalidAssignmentTargetError,
    NestingTooDeepError,
)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class Parser:
    def __init__(self, tokens: List[Token]):
        # Always terminate with EOF so lookahead never runs off the end.
        if not tokens or tokens[-1].type != TokenType.EOF:
            line = tokens[-1].line if tokens else 1
            tokens = list(tokens) + [Token(TokenType.EOF, "", line)]
        self.tokens = tokens
        self.pos = 0
        self.current = tokens[0]

    def advance(self) -> Token:
        """Consume the current token and return it."""
        token = self.current
        if self.current.type != TokenType.EOF:
            self.pos += 1
            self.current = self.tokens[self.pos]
        return token

    def check(self, token_type: TokenType) -> bool:
        return self.current.type == token_type

    def match(self, *token_types: TokenType) -> Optional[Token]:
        """Consume and return the current token if it has one of the given types."""
        if self.current.type in token_types:
            return self.advance()
        return None

    def expect(self, expected_type: TokenType, message: Optional[str] = None) -> Token:
        """Expect and consume token of given type."""
        if self.current.type == expected_type:
            return self.advance()
        raise ExpectedTokenError(expected_type, self.current, message)

    # ------------------------------------------------------------------
    # Declarations and statements
    # ------------------------------------------------------------------

    def parse_declaration(self) -> ASTNode:
        match self.current.type:
            case TokenType.VAR:
                return self.parse_variable_declaration()
            case TokenType.FN:
                return self.parse_function_declaration()
            case _:
                return self.parse_statement()

    def parse_variable_declaration(self) -> VariableDeclarationNode:
        """Parse variable declaration: var identifier (= expression)? ;"""
        keyword = self.expect(TokenType.VAR)
        name = self.expect(TokenType.IDENTIFIER, "Expected variable name")

        initializer = None
        if self.match(TokenType.ASSIGN):
            initializer = self.parse_expression()

        self.expect(TokenType.SEMICOLON, "Expected ';' after variable declaration")
        return VariableDeclarationNode(
            name=name.lexeme, initializer=initializer, line=keyword.line
        )

    def parse_function_declaration(self) -> FunctionDeclarationNode:
        """Parse function declaration: fn ident '(' params ')' '{' body '}'"""
        keyword = self.expect(TokenType.FN)
        name = self.expect(TokenType.IDENTIFIER, "Expected function name")
        self.expect(TokenType.LPAREN, "Expected '(' after function name")

        params: List[str] = []
        if not self.check(TokenType.RPAREN):
            params.append(self.expect(TokenType.IDENTIFIER, "Expected parameter name").lexeme)
            while self.match(TokenType.COMMA):
                params.append(
                    self.expect(TokenType.IDENTIFIER, "Expected parameter name").lexeme
                )

        self.expect(TokenType.RPAREN, "Expected ')' after parameters")
        body = self.parse_block()
        logger.debug("parsed function %s/%d", name.lexeme, len(params))
        return FunctionDeclarationNode(
            name=name.lexeme, params=tuple(params), body=body, line=keyword.line
        )

    def parse_statement(self) -> ASTNode:
        match self.current.type:
            case TokenType.PRINT:
                return self.parse_print_statement()
            case TokenType.IF:
                return self.parse_if_statement()
            case TokenType.WHILE:
                return self.parse_while_statement()
            case TokenType.FOR:
                return self.parse_for_statement()
            case TokenType.LBRACE:
                return self.parse_block()
            case TokenType.RETURN:
                return self.parse_return_statement()
            case _:
                return self.parse_expression_statement()

    def parse_print_statement(self) -> PrintStatementNode:
        keyword = self.expect(TokenType.PRINT)
        expr = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expected ';' after value")
        return PrintStatementNode(expression=expr, line=keyword.line)

    def parse_if_statement(self) -> IfStatementNode:
        """Parse if statement: if (expr) statement (else statement)?"""
        keyword = self.expect(TokenType.IF)
        self.expect(TokenType.LPAREN, "Expected '(' after 'if'")
        condition = self.parse_expression()
        self.expect(TokenType.RPAREN, "Expected ')' after if condition")

        then_branch = self.parse_statement()

        # `else` attaches to the nearest `if`: the innermost call sees it first.
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.parse_statement()

        return IfStatementNode(
            condition=condition,
            then_branch=then_branch,
            else_branch=else_branch,
            line=keyword.line,
        )

    def parse_while_statement(self) -> WhileStatementNode:
        """Parse while statement: while (expr) statement"""
        keyword = self.expect(TokenType.WHILE)
        self.expect(TokenType.LPAREN, "Expected '(' after 'while'")
        condition = self.parse_expression()
        self.expect(TokenType.RPAREN, "Expected ')' after while condition")
        body = self.parse_statement()
        return WhileStatementNode(condition=condition, body=body, line=keyword.line)

    def parse_for_statement(self) -> ASTNode:
        """Parse for statement: for (init? ; cond? ; incr?) statement"""
        keyword = self.expect(TokenType.FOR)
        self.expect(TokenType.LPAREN, "Expected '(' after 'for'")

        initializer: Optional[ASTNode]
        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.check(TokenType.VAR):
            initializer = self.parse_variable_declaration()
        else:
            initializer = self.parse_expression_statement()

        condition = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expected ';' after loop condition")

        increment = None
        if not self.check(TokenType.RPAREN):
            increment = self.parse_expression()
        self.expect(TokenType.RPAREN, "Expected ')' after for clauses")

        body = self.parse_statement()
        loop = ForStatementNode(
            initializer=initializer,
            condition=condition,
            increment=increment,
            body=body,
            line=keyword.line,
        )
        return self.desugar_for(loop)

    @staticmethod
    def desugar_for(loop: ForStatementNode) -> BlockNode:
        """Rewrite a for-loop as Block(init?, While(cond, Block(body, incr?)))."""
        line = loop.line
        inner = [loop.body]
        if loop.increment is not None:
            inner.append(ExpressionStatementNode(expression=loop.increment, line=line))

        condition = loop.condition
        if condition is None:
            condition = LiteralNode(value=True, line=line)

        while_node = WhileStatementNode(
            condition=condition,
            body=BlockNode(statements=tuple(inner), line=line),
            line=line,
        )

        outer: List[ASTNode] = []
        if loop.initializer is not None:
            outer.append(loop.initializer)
        outer.append(while_node)
        return BlockNode(statements=tuple(outer), line=line)

    def parse_return_statement(self) -> ReturnStatementNode:
        """Parse return statement: return expr? ;"""
        keyword = self.expect(TokenType.RETURN)
        value = None
        if not self.check(TokenType.SEMICOLON):
            value = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expected ';' after return value")
        return ReturnStatementNode(value=value, line=keyword.line)

    def parse_block(self) -> BlockNode:
        """Parse a block of declarations: { declaration* }"""
        brace = self.expect(TokenType.LBRACE, "Expected '{'")
        statements: List[ASTNode] = []

        while not self.check(TokenType.RBRACE) and not self.check(TokenType.EOF):
            statements.append(self.parse_declaration())

        self.expect(TokenType.RBRACE, "Expected '}' after block")
        return BlockNode(statements=tuple(statements), line=brace.line)

    def parse_expression_statement(self) -> ExpressionStatementNode:
        line = self.current.line
        expr = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expected ';' after expression")
        return ExpressionStatementNode(expression=expr, line=line)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self) -> ASTNode:
        return self.parse_assignment()

    def parse_assignment(self) -> ASTNode:
        expr = self.parse_equality()

        equals = self.match(TokenType.ASSIGN)
        if equals:
            value = self.parse_assignment()
            if isinstance(expr, VariableNode):
                return AssignmentNode(name=expr.name, value=value, line=expr.line)
            raise InvalidAssignmentTargetError(equals.line)

        return expr

    def _binary_left(self, operand, *operators: TokenType) -> ASTNode:
        """Parse `operand (op operand)*` folding to the left."""
        left = operand()
        while True:
            op = self.match(*operators)
            if op is None:
                return left
            right = operand()
            left = BinaryOpNode(left=left, operator=op.lexeme, right=right, line=op.line)

    def parse_equality(self) -> ASTNode:
        return self._binary_left(self.parse_comparison, TokenType.EQ, TokenType.NEQ)

    def parse_comparison(self) -> ASTNode:
        return self._binary_left(
            self.parse_term, TokenType.GT, TokenType.GTE, TokenType.LT, TokenType.LTE
        )

    def parse_term(self) -> ASTNode:
        return self._binary_left(self.parse_factor, TokenType.PLUS, TokenType.MINUS)

    def parse_factor(self) -> ASTNode:
        return self._binary_left(self.parse_unary, TokenType.STAR, TokenType.SLASH)

    def parse_unary(self) -> ASTNode:
        op = self.match(TokenType.NOT, TokenType.MINUS)
        if op:
            right = self.parse_unary()
            return UnaryOpNode(operator=op.lexeme, right=right, line=op.line)
        return self.parse_call()

    def parse_call(self) -> ASTNode:
        """Parse postfix calls: primary ( '(' args? ')' )*"""
        expr = self.parse_primary()
        while True:
            paren = self.match(TokenType.LPAREN)
            if paren is None:
                return expr
            args: List[ASTNode] = []
            if not self.check(TokenType.RPAREN):
                args.append(self.parse_expression())
                while self.match(TokenType.COMMA):
                    args.append(self.parse_expression())
            self.expect(TokenType.RPAREN, "Expected ')' after arguments")
            expr = CallNode(callee=expr, arguments=tuple(args), line=paren.line)

    def parse_primary(self) -> ASTNode:
        """Parse primary expressions (literals, identifiers, groups, match)."""
        token = self.current

        match token.type:
            case TokenType.NUMBER:
                self.advance()
                return LiteralNode(value=float(token.lexeme), line=token.line)

            case TokenType.TRUE:
                self.advance()
                return LiteralNode(value=True, line=token.line)

            case TokenType.FALSE:
                self.advance()
                return LiteralNode(value=False, line=token.line)

            case TokenType.NULL:
                self.advance()
                return LiteralNode(value=None, line=token.line)

            case TokenType.IDENTIFIER:
                self.advance()
                return VariableNode(name=token.lexeme, line=token.line)

            case TokenType.LPAREN:
                self.advance()
                expr = self.parse_expression()
                self.expect(TokenType.RPAREN, "Expected ')' after expression")
                return expr

            case TokenType.MATCH:
                return self.parse_match()

            case _:
                raise ExpectedTokenError("expression", token)

    def parse_match(self) -> MatchNode:
        """Parse: match subject { (case pattern => body (, case ...)* ,?)? }"""
        keyword = self.expect(TokenType.MATCH)
        subject = self.parse_expression()
        self.expect(TokenType.LBRACE, "Expected '{' after match subject")

        cases: List[MatchCaseNode] = []
        while not self.check(TokenType.RBRACE):
            case_kw = self.expect(TokenType.CASE, "Expected 'case' before match pattern")
            pattern = self.parse_expression()
            self.expect(TokenType.ARROW, "Expected '=>' after match pattern")
            body = self.parse_expression()
            cases.append(MatchCaseNode(pattern=pattern, body=body, line=case_kw.line))

            if not self.match(TokenType.COMMA):
                break

        self.expect(TokenType.RBRACE, "Expected '}' after match cases")
        return MatchNode(subject=subject, cases=tuple(cases), line=keyword.line)

    def parse(self) -> List[ASTNode]:
        """Parse a complete program into its list of top-level statements."""
        statements: List[ASTNode] = []

        while not self.check(TokenType.EOF):
            try:
                statements.append(self.parse_declaration())
            except RecursionError:
                raise NestingTooDeepError(self.current.line) from None

        logger.debug("parsed %d top-level statements", len(statements))
        return statements
