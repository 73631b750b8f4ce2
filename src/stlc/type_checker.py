import dataclasses

from stlc import abstract_syntax as ast
from stlc.bindings import Context, NotFound


@dataclasses.dataclass
class TypingError(Exception):
    reason: str

    def __str__(self):
        return self.reason


def type_of(ctx: Context, term: ast.Expression) -> ast.Type:
    match term:
        case ast.Boolean():
            return ast.BOOL

        case ast.Conditional(t1, t2, t3):
            if type_of(ctx, t1) != ast.BOOL:
                raise TypingError("guard of conditional not a boolean")
            ty2 = type_of(ctx, t2)
            if type_of(ctx, t3) != ty2:
                raise TypingError("arms of conditional have different types")
            return ty2

        case ast.Zero():
            return ast.NAT

        case ast.Succ(t1):
            expect_nat(ctx, t1, "succ")
            return ast.NAT

        case ast.Pred(t1):
            expect_nat(ctx, t1, "pred")
            return ast.NAT

        case ast.IsZero(t1):
            expect_nat(ctx, t1, "iszero")
            return ast.BOOL

        case ast.Reference(var):
            try:
                return ctx.get_binding_type(var)
            except NotFound:
                raise TypingError(f"no binding type for variable {var}") from None

        case ast.Lambda(var, ty1, body):
            ty1 = resolve_type(ctx, ty1)
            ty2 = type_of(ctx.add_binding_type(var, ty1), body)
            return ast.ArrowType(ty1, ty2)

        case ast.Application(fun, arg):
            ty1 = type_of(ctx, fun)
            ty2 = type_of(ctx, arg)
            match ty1:
                case ast.ArrowType(ty11, ty12):
                    if ty2 != ty11:
                        raise TypingError("parameter type mismatch")
                    return ty12
                case _:
                    raise TypingError("arrow type expected")

        case ast.Let(var, val, body):
            ty1 = type_of(ctx, val)
            return type_of(ctx.add_binding_type(var, ty1), body)

        case ast.Fix(t1):
            match type_of(ctx, t1):
                case ast.ArrowType(ty11, ty12):
                    if ty11 != ty12:
                        raise TypingError("result of body not compatible with domain")
                    return ty12
                case _:
                    raise TypingError("arrow type expected")

        case ast.String():
            return ast.STRING

        case ast.Concat(t1, t2):
            match type_of(ctx, t1), type_of(ctx, t2):
                case ast.StringType(), ast.StringType():
                    return ast.STRING
                case _, ast.StringType():
                    raise TypingError("first argument is not a string")
                case ast.StringType(), _:
                    raise TypingError("second argument is not a string")
                case _:
                    raise TypingError("none of the arguments are strings")

        case ast.Pair(t1, t2):
            return ast.ProductType(type_of(ctx, t1), type_of(ctx, t2))

        case ast.First(t1):
            return expect_product(ctx, t1).first

        case ast.Second(t1):
            return expect_product(ctx, t1).second

        case ast.Record(fields):
            seen = set()
            types = []
            for label, t in fields:
                if label in seen:
                    raise TypingError(f"repeated label {label}")
                seen.add(label)
                types.append((label, type_of(ctx, t)))
            return ast.RecordType(tuple(types))

        case ast.Projection(t1, label):
            match type_of(ctx, t1):
                case ast.RecordType(fields):
                    for lbl, ty in fields:
                        if lbl == label:
                            return ty
                    raise TypingError(f"label {label} not found")
                case _:
                    raise TypingError("record type expected")

        case ast.Nil(ty):
            return ast.ListType(resolve_type(ctx, ty))

        case ast.Cons(head, tail):
            ty_list = expect_list(ctx, tail)
            if type_of(ctx, head) != ty_list.element:
                raise TypingError("head of cons does not match list element type")
            return ty_list

        case ast.IsNil(t1):
            expect_list(ctx, t1)
            return ast.BOOL

        case ast.Head(t1):
            return expect_list(ctx, t1).element

        case ast.Tail(t1):
            return expect_list(ctx, t1)

        case _:
            raise NotImplementedError(term)


def expect_nat(ctx: Context, term: ast.Expression, operator: str):
    if type_of(ctx, term) != ast.NAT:
        raise TypingError(f"argument of {operator} is not a number")


def expect_product(ctx: Context, term: ast.Expression) -> ast.ProductType:
    match type_of(ctx, term):
        case ast.ProductType() as ty:
            return ty
        case _:
            raise TypingError("pair type expected")


def expect_list(ctx: Context, term: ast.Expression) -> ast.ListType:
    match type_of(ctx, term):
        case ast.ListType() as ty:
            return ty
        case _:
            raise TypingError("list type expected")


def resolve_type(ctx: Context, ty: ast.Type) -> ast.Type:
    """Replace type abbreviations by the types they stand for."""
    match ty:
        case ast.BoolType() | ast.NatType() | ast.StringType():
            return ty
        case ast.ArrowType(t1, t2):
            return ast.ArrowType(resolve_type(ctx, t1), resolve_type(ctx, t2))
        case ast.ProductType(t1, t2):
            return ast.ProductType(resolve_type(ctx, t1), resolve_type(ctx, t2))
        case ast.RecordType(fields):
            return ast.RecordType(tuple((l, resolve_type(ctx, t)) for l, t in fields))
        case ast.ListType(t1):
            return ast.ListType(resolve_type(ctx, t1))
        case ast.TypeName(name):
            try:
                return ctx.get_type_abbrev(name)
            except NotFound:
                raise TypingError(f"no binding for type {name}") from None
        case _:
            raise NotImplementedError(ty)


def resolve_annotations(ctx: Context, term: ast.Expression) -> ast.Expression:
    """Resolve the type abbreviations used in the annotations of `term`."""
    match term:
        case ast.Lambda(var, ty, body):
            return ast.Lambda(var, resolve_type(ctx, ty), resolve_annotations(ctx, body))
        case ast.Nil(ty):
            return ast.Nil(resolve_type(ctx, ty))
        case ast.Record(fields):
            return ast.Record(tuple((l, resolve_annotations(ctx, t)) for l, t in fields))
        case _:
            subterms = {
                f.name: resolve_annotations(ctx, getattr(term, f.name))
                for f in dataclasses.fields(term)
                if isinstance(getattr(term, f.name), ast.Expression)
            }
            return dataclasses.replace(term, **subterms)
