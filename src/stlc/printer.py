from stlc import abstract_syntax as ast


def show_type(ty: ast.Type) -> str:
    match ty:
        case ast.BoolType():
            return "Bool"
        case ast.NatType():
            return "Nat"
        case ast.StringType():
            return "String"
        case ast.ArrowType(t1, t2):
            lhs = show_type(t1)
            if isinstance(t1, ast.ArrowType):
                lhs = f"({lhs})"
            return f"{lhs} -> {show_type(t2)}"
        case ast.ProductType(t1, t2):
            lhs = show_type(t1)
            if isinstance(t1, (ast.ArrowType, ast.ProductType)):
                lhs = f"({lhs})"
            rhs = show_type(t2)
            if isinstance(t2, ast.ArrowType):
                rhs = f"({rhs})"
            return f"{lhs} * {rhs}"
        case ast.RecordType(fields):
            return "{" + ", ".join(f"{l}:{show_type(t)}" for l, t in fields) + "}"
        case ast.ListType(t1):
            return f"List[{show_type(t1)}]"
        case ast.TypeName(name):
            return name
        case _:
            raise NotImplementedError(ty)


def show_term(term: ast.Expression) -> str:
    match term:
        case ast.Boolean(True):
            return "true"
        case ast.Boolean(False):
            return "false"
        case ast.Zero():
            return "0"
        case ast.Succ(t1):
            n = ast.to_int(term)
            if n is not None:
                return str(n)
            return f"succ {atom(t1)}"
        case ast.Pred(t1):
            return f"pred {atom(t1)}"
        case ast.IsZero(t1):
            return f"iszero {atom(t1)}"
        case ast.Conditional(t1, t2, t3):
            return f"if {show_term(t1)} then {show_term(t2)} else {show_term(t3)}"
        case ast.Reference(var):
            return var
        case ast.Lambda(var, ty, body):
            return f"lambda {var}:{show_type(ty)}. {show_term(body)}"
        case ast.Application(t1, t2):
            fun = show_term(t1) if isinstance(t1, ast.Application) else atom(t1)
            return f"{fun} {atom(t2)}"
        case ast.Let(var, t1, t2):
            return f"let {var} = {show_term(t1)} in {show_term(t2)}"
        case ast.Fix(t1):
            return f"fix {atom(t1)}"
        case ast.String(s):
            return f'"{s}"'
        case ast.Concat(t1, t2):
            return f"concat {atom(t1)} {atom(t2)}"
        case ast.Pair(t1, t2):
            return f"{{{show_term(t1)}, {show_term(t2)}}}"
        case ast.First(t1):
            return f"{atom(t1)}.1"
        case ast.Second(t1):
            return f"{atom(t1)}.2"
        case ast.Record(fields):
            return "{" + ", ".join(f"{l}={show_term(t)}" for l, t in fields) + "}"
        case ast.Projection(t1, label):
            return f"{atom(t1)}.{label}"
        case ast.Nil(ty):
            return f"nil[{show_type(ty)}]"
        case ast.Cons(t1, t2):
            return f"cons {atom(t1)} {atom(t2)}"
        case ast.IsNil(t1):
            return f"isnil {atom(t1)}"
        case ast.Head(t1):
            return f"head {atom(t1)}"
        case ast.Tail(t1):
            return f"tail {atom(t1)}"
        case _:
            raise NotImplementedError(term)


def atom(term: ast.Expression) -> str:
    """Render `term` so that it can stand as an operand."""
    match term:
        case (
            ast.Boolean()
            | ast.Zero()
            | ast.Reference()
            | ast.String()
            | ast.Pair()
            | ast.Record()
            | ast.Nil()
            | ast.First()
            | ast.Second()
            | ast.Projection()
        ):
            return show_term(term)
        case ast.Succ() if ast.to_int(term) is not None:
            return show_term(term)
        case _:
            return f"({show_term(term)})"
