from typing import Callable, Optional

from stlc import abstract_syntax as ast, interpreter, parser, type_checker
from stlc.bindings import Context
from stlc.printer import show_term, show_type
from stlc.substitution import free_vars, subst

TERMINATOR = ";;"

Trace = Optional[Callable[[ast.Expression], None]]


def run_command(
    cmd: ast.ToplevelItem, ctx: Context, trace: Trace = None
) -> tuple[str, Context]:
    """Run one command. Returns the line to print and the resulting context."""
    match cmd:
        case ast.DefineLet(var, val):
            ty, result = run_term(val, ctx, trace)
            output = f"val {var} : {show_type(ty)} = {show_term(result)}"
            return output, ctx.add_binding(var, ty, result)
        case ast.DefineType(name, ty):
            ty = type_checker.resolve_type(ctx, ty)
            return f"type {name} = {show_type(ty)}", ctx.add_type_abbrev(name, ty)
        case ast.Expression() as exp:
            ty, result = run_term(exp, ctx, trace)
            return f"- : {show_type(ty)} = {show_term(result)}", ctx
        case ast.Type() as ty:
            return f"- : type = {show_type(type_checker.resolve_type(ctx, ty))}", ctx
        case _:
            raise NotImplementedError(cmd)


def run_term(
    term: ast.Expression, ctx: Context, trace: Trace = None
) -> tuple[ast.Type, ast.Expression]:
    term = type_checker.resolve_annotations(ctx, term)
    ty = type_checker.type_of(ctx, term)
    result = interpreter.evaluate(ctx, close_term(ctx, term), trace)
    return ty, result


def close_term(ctx: Context, term: ast.Expression) -> ast.Expression:
    """Replace the free variables of `term` by their values in `ctx`.

    Stored values are closed, so the order of substitution does not matter.
    """
    for var in free_vars(term):
        value = ctx.get_value(var)
        if value is not None:
            term = subst(var, value, term)
    return term


def split_statements(src: str) -> list[str]:
    return [stmt for stmt in src.split(TERMINATOR) if stmt.strip()]


def run_source(
    src: str, ctx: Context, trace: Trace = None
) -> tuple[list[str], Context]:
    outputs = []
    for stmt in split_statements(src):
        output, ctx = run_command(parser.parse_command(stmt), ctx, trace)
        outputs.append(output)
    return outputs, ctx
