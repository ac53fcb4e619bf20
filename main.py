"""Command line driver and convenience helpers for the toy language.

`lex`, `parse_tokens`, `parse_text` and `run_source` wrap the pipeline
stages for callers and tests. `process_program` runs one program through the
pipeline, optionally printing tokens and the AST or exporting the AST as
JSON or a Graphviz image. `interactive_mode` is a REPL that keeps one
interpreter (and so one global scope) alive across lines.

Usage:
    python main.py --file program.toy
    python main.py --interactive
    python main.py -f program.toy --print-ast --dump-ast ast.json
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import Callable, List, Optional
from lexer import Lexer
from tokens import Token
from ast_nodes import ASTNode
from parser import Parser
from interpreter import Interpreter
from errors import ToyError
from pretty_printer import PrettyPrinter
from ast_json import program_to_json
from ast_viz import write_and_render

logger = logging.getLogger(__name__)

# Each call in a user program costs several Python frames.
RECURSION_LIMIT = 5000


def lex(text: str) -> List[Token]:
    """Tokenize input string."""
    lexer = Lexer(text)
    return lexer.tokenize()


def parse_tokens(tokens: List[Token]) -> List[ASTNode]:
    """Parse tokens into a list of top-level statements."""
    parser = Parser(tokens)
    return parser.parse()


def parse_text(text: str) -> List[ASTNode]:
    """Convenience: lex+parse a source text."""
    return parse_tokens(lex(text))


def run_source(
    text: str,
    interpreter: Optional[Interpreter] = None,
    printer: Callable[[str], object] = print,
) -> Interpreter:
    """Lex, parse and execute `text`; return the interpreter that ran it.

    Pass an existing interpreter to keep its global scope (REPL sessions).
    Errors propagate to the caller.
    """
    if interpreter is None:
        interpreter = Interpreter(printer=printer)
    statements = parse_text(text)
    interpreter.interpret(statements)
    return interpreter


def process_program(
    text: str,
    *,
    interpreter: Optional[Interpreter] = None,
    print_tokens: bool = False,
    print_ast: bool = False,
    dump_ast_path: Optional[str] = None,
    viz_path: Optional[str] = None,
    viz_format: str = "svg",
    execute: bool = True,
) -> bool:
    """Process a single program: lex, parse, optionally print stages, then run it.

    Returns True when every stage succeeded. Language errors are reported as
    `Error: <message>` and do not propagate.
    """
    try:
        tokens = lex(text)
        if print_tokens:
            print(f"Tokens ({len(tokens)}):")
            for i, token in enumerate(tokens):
                print(f"  {i:3}: {token}")

        statements = parse_tokens(tokens)
        logger.debug("parsed %d statement(s)", len(statements))
        if print_ast:
            print(PrettyPrinter.print_program(statements))

        if dump_ast_path:
            with open(dump_ast_path, "w", encoding="utf-8") as fh:
                json.dump(program_to_json(statements), fh, indent=2)
            print(f"Wrote AST JSON to {dump_ast_path}")

        if viz_path:
            try:
                rendered = write_and_render(statements, viz_path, fmt=viz_format)
                print(f"Wrote AST visualization to {rendered}")
            except Exception as e:
                print(f"Failed to render AST visualization to {viz_path}: {e}")

        if execute:
            if interpreter is None:
                interpreter = Interpreter()
            interpreter.interpret(statements)
        return True

    except (ToyError, OSError) as e:
        print(f"Error: {e}")
        return False


def interactive_mode(**options) -> None:
    """Run the REPL, reading one line at a time from stdin."""
    print("Toy Language REPL")
    print("Type 'exit' to quit\n")

    interpreter = Interpreter()
    while True:
        try:
            text = input(">>> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if text.strip() in ("exit", "quit"):
            break
        if not text.strip():
            continue

        process_program(text, interpreter=interpreter, **options)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a toy language program from a file or interactively"
    )
    parser.add_argument("path", nargs="?", help="Path to source file to run")
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--file", "-f", dest="file", help="Path to source file to run"
    )
    group.add_argument(
        "--interactive",
        "-i",
        dest="interactive",
        action="store_true",
        help="Start interactive REPL mode",
    )
    parser.add_argument(
        "--print-tokens", dest="print_tokens", action="store_true", help="Print tokens"
    )
    parser.add_argument(
        "--print-ast", dest="print_ast", action="store_true", help="Print the AST"
    )
    parser.add_argument(
        "--no-run",
        dest="execute",
        action="store_false",
        help="Stop after parsing (and any requested dumps)",
    )
    parser.add_argument(
        "--dump-ast", dest="dump_ast", help="Path to write the AST as JSON"
    )
    parser.add_argument(
        "--viz-ast",
        dest="viz_ast",
        help="Path (without extension) to write a Graphviz drawing of the AST",
    )
    parser.add_argument(
        "--viz-format",
        dest="viz_format",
        default="svg",
        help="Format for Graphviz output (svg, png, pdf, etc)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    path = args.file or args.path
    if path and not args.interactive:
        try:
            with open(path, "r", encoding="utf-8") as fh:
                text = fh.read()
        except OSError as e:
            print(f"Failed to read file {path}: {e}")
            return 1

        ok = process_program(
            text,
            print_tokens=args.print_tokens,
            print_ast=args.print_ast,
            dump_ast_path=args.dump_ast,
            viz_path=args.viz_ast,
            viz_format=args.viz_format,
            execute=args.execute,
        )
        return 0 if ok else 1

    interactive_mode(
        print_tokens=args.print_tokens,
        print_ast=args.print_ast,
        execute=args.execute,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
