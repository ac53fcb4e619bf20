from lexer import Lexer
from parser import Parser
from interpreter import Interpreter
from ast_nodes import ExpressionStatementNode


def lex(text: str):
    """Return a list of tokens for the given source text."""
    return Lexer(text).tokenize()


def parse_text(text: str):
    """Convenience: lex+parse a source text into a statement list."""
    return Parser(Lexer(text).tokenize()).parse()


def interpret(text: str):
    """Run a program; return the interpreter and the lines it printed."""
    output = []
    interpreter = Interpreter(printer=output.append)
    interpreter.interpret(parse_text(text))
    return interpreter, output


def evaluate(text: str):
    """Run a program and return the value of its last expression statement."""
    interpreter = Interpreter(printer=lambda _: None)
    result = None
    for stmt in parse_text(text):
        if isinstance(stmt, ExpressionStatementNode):
            result = interpreter.evaluate(stmt.expression)
        else:
            interpreter.execute(stmt)
    return result
