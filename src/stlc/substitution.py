"""Free variables and capture-avoiding substitution on terms."""

from typing import AbstractSet

from stlc import abstract_syntax as ast


def free_vars(term: ast.Expression) -> frozenset[str]:
    match term:
        case ast.Boolean() | ast.Zero() | ast.String() | ast.Nil():
            return frozenset()
        case ast.Reference(var):
            return frozenset([var])
        case ast.Lambda(var, _, body):
            return free_vars(body) - {var}
        case ast.Let(var, val, body):
            return free_vars(val) | (free_vars(body) - {var})
        case ast.Conditional(t1, t2, t3):
            return free_vars(t1) | free_vars(t2) | free_vars(t3)
        case ast.Application(t1, t2) | ast.Concat(t1, t2) | ast.Pair(t1, t2) | ast.Cons(t1, t2):
            return free_vars(t1) | free_vars(t2)
        case ast.Record(fields):
            return frozenset().union(*(free_vars(t) for _, t in fields))
        case ast.Projection(t1, _):
            return free_vars(t1)
        case (
            ast.Succ(t1)
            | ast.Pred(t1)
            | ast.IsZero(t1)
            | ast.Fix(t1)
            | ast.First(t1)
            | ast.Second(t1)
            | ast.IsNil(t1)
            | ast.Head(t1)
            | ast.Tail(t1)
        ):
            return free_vars(t1)
        case _:
            raise NotImplementedError(term)


def fresh_name(name: str, avoid: AbstractSet[str]) -> str:
    while name in avoid:
        name += "'"
    return name


def subst(x: str, s: ast.Expression, term: ast.Expression) -> ast.Expression:
    """Replace every free occurrence of `x` in `term` with `s`.

    Binders that would capture a free variable of `s` are renamed first.
    """
    match term:
        case ast.Boolean() | ast.Zero() | ast.String() | ast.Nil():
            return term

        case ast.Reference(var):
            return s if var == x else term

        case ast.Lambda(var, ty, body):
            if var == x:
                return term
            fvs = free_vars(s)
            if var not in fvs:
                return ast.Lambda(var, ty, subst(x, s, body))
            z = fresh_name(var, free_vars(body) | fvs)
            return ast.Lambda(z, ty, subst(x, s, subst(var, ast.Reference(z), body)))

        case ast.Let(var, val, body):
            if var == x:
                return ast.Let(var, subst(x, s, val), body)
            fvs = free_vars(s)
            if var not in fvs:
                return ast.Let(var, subst(x, s, val), subst(x, s, body))
            z = fresh_name(var, free_vars(body) | fvs)
            return ast.Let(
                z, subst(x, s, val), subst(x, s, subst(var, ast.Reference(z), body))
            )

        case ast.Conditional(t1, t2, t3):
            return ast.Conditional(subst(x, s, t1), subst(x, s, t2), subst(x, s, t3))
        case ast.Succ(t1):
            return ast.Succ(subst(x, s, t1))
        case ast.Pred(t1):
            return ast.Pred(subst(x, s, t1))
        case ast.IsZero(t1):
            return ast.IsZero(subst(x, s, t1))
        case ast.Application(t1, t2):
            return ast.Application(subst(x, s, t1), subst(x, s, t2))
        case ast.Fix(t1):
            return ast.Fix(subst(x, s, t1))
        case ast.Concat(t1, t2):
            return ast.Concat(subst(x, s, t1), subst(x, s, t2))
        case ast.Pair(t1, t2):
            return ast.Pair(subst(x, s, t1), subst(x, s, t2))
        case ast.First(t1):
            return ast.First(subst(x, s, t1))
        case ast.Second(t1):
            return ast.Second(subst(x, s, t1))
        case ast.Record(fields):
            return ast.Record(tuple((l, subst(x, s, t)) for l, t in fields))
        case ast.Projection(t1, label):
            return ast.Projection(subst(x, s, t1), label)
        case ast.Cons(t1, t2):
            return ast.Cons(subst(x, s, t1), subst(x, s, t2))
        case ast.IsNil(t1):
            return ast.IsNil(subst(x, s, t1))
        case ast.Head(t1):
            return ast.Head(subst(x, s, t1))
        case ast.Tail(t1):
            return ast.Tail(subst(x, s, t1))
        case _:
            raise NotImplementedError(term)
