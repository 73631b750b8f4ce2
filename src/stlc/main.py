"""Interactive evaluator for the simply-typed lambda calculus.

Statements end with ";;" and may span several lines.
"""

import argparse
import sys
from typing import Callable, Optional

from stlc import lexer, parser, toplevel, type_checker
from stlc.bindings import Context
from stlc.printer import show_term

BANNER = "Evaluator of lambda expressions..."
FAREWELL = "...bye!!!"
PROMPT = ">> "
CONTINUATION_PROMPT = "   "


def read_statements(src: str, read_line: Callable[[str], str] = input) -> list[str]:
    while not src.rstrip().endswith(toplevel.TERMINATOR):
        src += "\n" + read_line(CONTINUATION_PROMPT)
    return toplevel.split_statements(src)


def execute(
    src: str, ctx: Context, write: Callable[[str], None] = print, trace: bool = False
) -> Optional[Context]:
    """Run one statement and report the outcome.

    Returns the new context, or None if the statement failed.
    """
    tracer = (lambda t: write("\t" + show_term(t))) if trace else None
    try:
        cmd = parser.parse_command(src)
        output, new_ctx = toplevel.run_command(cmd, ctx, tracer)
    except lexer.LexicalError as e:
        write(f"lexical error: {e}")
    except parser.ParseError as e:
        write(f"syntax error: {e}")
    except type_checker.TypingError as e:
        write(f"type error: {e}")
    except RecursionError:
        write("evaluation error: maximum recursion depth exceeded")
    except KeyboardInterrupt:
        write("interrupted")
    else:
        write(output)
        return new_ctx
    return None


def repl(
    ctx: Optional[Context] = None,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    trace: bool = False,
) -> Context:
    if ctx is None:
        ctx = Context()
    write(BANNER)
    while True:
        try:
            statements = read_statements(read_line(PROMPT), read_line)
        except EOFError:
            write(FAREWELL)
            return ctx
        for stmt in statements:
            new_ctx = execute(stmt, ctx, write, trace)
            if new_ctx is not None:
                ctx = new_ctx


def run_file(filename: str, trace: bool = False) -> int:
    with open(filename) as fd:
        src = fd.read()

    ctx = Context()
    for stmt in toplevel.split_statements(src):
        ctx = execute(stmt, ctx, trace=trace)
        if ctx is None:
            return 1
    return 0


def main(argv=None) -> int:
    argparser = argparse.ArgumentParser(prog="stlc", description=__doc__)
    argparser.add_argument(
        "file", nargs="?", help="file of ';;'-terminated statements (default: REPL)"
    )
    argparser.add_argument(
        "-t", "--trace", action="store_true", help="print every reduction step"
    )
    args = argparser.parse_args(argv)

    if args.file is not None:
        return run_file(args.file, args.trace)

    repl(trace=args.trace)
    return 0


if __name__ == "__main__":
    sys.exit(main())
