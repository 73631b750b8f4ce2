from typing import Callable, Optional

from stlc import abstract_syntax as ast
from stlc.bindings import Context
from stlc.substitution import subst


def is_numeric_value(term: ast.Expression) -> bool:
    return ast.to_int(term) is not None


def is_value(term: ast.Expression) -> bool:
    match term:
        case ast.Boolean() | ast.Lambda() | ast.String() | ast.Nil():
            return True
        case ast.Pair(t1, t2) | ast.Cons(t1, t2):
            return is_value(t1) and is_value(t2)
        case ast.Record(fields):
            return all(is_value(t) for _, t in fields)
        case _:
            return is_numeric_value(term)


def step(ctx: Context, term: ast.Expression) -> Optional[ast.Expression]:
    """Perform one reduction step. Returns None if no rule applies."""
    match term:
        case ast.Conditional(ast.Boolean(True), t2, _):
            return t2
        case ast.Conditional(ast.Boolean(False), _, t3):
            return t3
        case ast.Conditional(t1, t2, t3):
            return step_into(ctx, t1, lambda t: ast.Conditional(t, t2, t3))

        case ast.Succ(t1):
            return step_into(ctx, t1, ast.Succ)

        case ast.Pred(ast.Zero()):
            return ast.ZERO
        case ast.Pred(ast.Succ(nv1)) if is_numeric_value(nv1):
            return nv1
        case ast.Pred(t1):
            return step_into(ctx, t1, ast.Pred)

        case ast.IsZero(ast.Zero()):
            return ast.TRUE
        case ast.IsZero(ast.Succ(nv1)) if is_numeric_value(nv1):
            return ast.FALSE
        case ast.IsZero(t1):
            return step_into(ctx, t1, ast.IsZero)

        case ast.Application(ast.Lambda(var, _, body), v2) if is_value(v2):
            return subst(var, v2, body)
        case ast.Application(v1, t2) if is_value(v1):
            return step_into(ctx, t2, lambda t: ast.Application(v1, t))
        case ast.Application(t1, t2):
            return step_into(ctx, t1, lambda t: ast.Application(t, t2))

        case ast.Let(var, v1, body) if is_value(v1):
            return subst(var, v1, body)
        case ast.Let(var, t1, body):
            return step_into(ctx, t1, lambda t: ast.Let(var, t, body))

        case ast.Fix(ast.Lambda(var, _, body)):
            return subst(var, term, body)
        case ast.Fix(t1):
            return step_into(ctx, t1, ast.Fix)

        case ast.Concat(ast.String(s1), ast.String(s2)):
            return ast.String(s1 + s2)
        case ast.Concat(ast.String() as v1, t2):
            return step_into(ctx, t2, lambda t: ast.Concat(v1, t))
        case ast.Concat(t1, t2):
            return step_into(ctx, t1, lambda t: ast.Concat(t, t2))

        case ast.Pair(t1, t2) if not is_value(t1):
            return step_into(ctx, t1, lambda t: ast.Pair(t, t2))
        case ast.Pair(v1, t2):
            return step_into(ctx, t2, lambda t: ast.Pair(v1, t))

        case ast.First(ast.Pair(v1, _) as pair) if is_value(pair):
            return v1
        case ast.First(t1):
            return step_into(ctx, t1, ast.First)

        case ast.Second(ast.Pair(_, v2) as pair) if is_value(pair):
            return v2
        case ast.Second(t1):
            return step_into(ctx, t1, ast.Second)

        case ast.Record(fields):
            for i, (label, t) in enumerate(fields):
                if not is_value(t):
                    return step_into(
                        ctx,
                        t,
                        lambda t_: ast.Record(fields[:i] + ((label, t_),) + fields[i + 1 :]),
                    )
            return None

        case ast.Projection(ast.Record(fields) as record, label) if is_value(record):
            for lbl, v in fields:
                if lbl == label:
                    return v
            return None
        case ast.Projection(t1, label):
            return step_into(ctx, t1, lambda t: ast.Projection(t, label))

        case ast.Cons(t1, t2) if not is_value(t1):
            return step_into(ctx, t1, lambda t: ast.Cons(t, t2))
        case ast.Cons(v1, t2):
            return step_into(ctx, t2, lambda t: ast.Cons(v1, t))

        case ast.IsNil(ast.Nil()):
            return ast.TRUE
        case ast.IsNil(ast.Cons() as cell) if is_value(cell):
            return ast.FALSE
        case ast.IsNil(t1):
            return step_into(ctx, t1, ast.IsNil)

        case ast.Head(ast.Cons(v1, _) as cell) if is_value(cell):
            return v1
        case ast.Head(t1):
            return step_into(ctx, t1, ast.Head)

        case ast.Tail(ast.Cons(_, v2) as cell) if is_value(cell):
            return v2
        case ast.Tail(t1):
            return step_into(ctx, t1, ast.Tail)

        case (
            ast.Boolean()
            | ast.Zero()
            | ast.String()
            | ast.Lambda()
            | ast.Nil()
            | ast.Reference()
        ):
            return None

        case _:
            raise NotImplementedError(term)


def step_into(
    ctx: Context,
    subterm: ast.Expression,
    rebuild: Callable[[ast.Expression], ast.Expression],
) -> Optional[ast.Expression]:
    match step(ctx, subterm):
        case None:
            return None
        case t:
            return rebuild(t)


def evaluate(
    ctx: Context,
    term: ast.Expression,
    trace: Optional[Callable[[ast.Expression], None]] = None,
) -> ast.Expression:
    """Reduce `term` until no rule applies and return the result.

    `trace` is called with every intermediate term. Diverging terms do
    not return.
    """
    while True:
        match step(ctx, term):
            case None:
                return term
            case t:
                if trace is not None:
                    trace(t)
                term = t
