import pytest

from stlc import abstract_syntax as ast
from stlc.bindings import Context
from stlc.type_checker import TypingError, resolve_annotations, resolve_type, type_of

NAT_TO_NAT = ast.ArrowType(ast.NAT, ast.NAT)


def typing_error(term, ctx=None) -> str:
    with pytest.raises(TypingError) as e:
        type_of(ctx or Context(), term)
    return e.value.reason


def test_constants():
    ctx = Context()
    assert type_of(ctx, ast.TRUE) == ast.BOOL
    assert type_of(ctx, ast.FALSE) == ast.BOOL
    assert type_of(ctx, ast.ZERO) == ast.NAT
    assert type_of(ctx, ast.String("abc")) == ast.STRING


def test_numeric_operators():
    ctx = Context()
    assert type_of(ctx, ast.Succ(ast.ZERO)) == ast.NAT
    assert type_of(ctx, ast.Pred(ast.ZERO)) == ast.NAT
    assert type_of(ctx, ast.IsZero(ast.ZERO)) == ast.BOOL

    assert typing_error(ast.Succ(ast.TRUE)) == "argument of succ is not a number"
    assert typing_error(ast.Pred(ast.TRUE)) == "argument of pred is not a number"
    assert typing_error(ast.IsZero(ast.TRUE)) == "argument of iszero is not a number"


def test_conditional():
    ctx = Context()
    assert type_of(ctx, ast.Conditional(ast.TRUE, ast.ZERO, ast.nat(2))) == ast.NAT

    assert (
        typing_error(ast.Conditional(ast.ZERO, ast.ZERO, ast.ZERO))
        == "guard of conditional not a boolean"
    )
    assert (
        typing_error(ast.Conditional(ast.TRUE, ast.ZERO, ast.FALSE))
        == "arms of conditional have different types"
    )


def test_variable():
    ctx = Context().add_binding_type("x", ast.NAT)
    assert type_of(ctx, ast.Reference("x")) == ast.NAT

    assert typing_error(ast.Reference("y"), ctx) == "no binding type for variable y"


def test_most_recent_binding_wins():
    ctx = Context().add_binding_type("x", ast.NAT).add_binding_type("x", ast.BOOL)
    assert type_of(ctx, ast.Reference("x")) == ast.BOOL


def test_function():
    ctx = Context()
    assert type_of(ctx, ast.Lambda("x", ast.NAT, ast.Reference("x"))) == NAT_TO_NAT
    assert type_of(
        ctx, ast.Lambda("x", ast.NAT, ast.Lambda("y", ast.BOOL, ast.Reference("x")))
    ) == ast.ArrowType(ast.NAT, ast.ArrowType(ast.BOOL, ast.NAT))


def test_lambda_parameter_shadows_context():
    ctx = Context().add_binding("x", ast.BOOL, ast.TRUE)
    term = ast.Lambda("x", ast.NAT, ast.Succ(ast.Reference("x")))
    assert type_of(ctx, term) == NAT_TO_NAT


def test_application():
    ctx = Context().add_binding_type("f", ast.ArrowType(ast.NAT, ast.BOOL))
    assert type_of(ctx, ast.Application(ast.Reference("f"), ast.ZERO)) == ast.BOOL

    assert (
        typing_error(ast.Application(ast.Reference("f"), ast.TRUE), ctx)
        == "parameter type mismatch"
    )
    assert (
        typing_error(ast.Application(ast.ZERO, ast.TRUE)) == "arrow type expected"
    )


def test_let():
    ctx = Context()
    term = ast.Let("x", ast.TRUE, ast.Conditional(ast.Reference("x"), ast.ZERO, ast.ZERO))
    assert type_of(ctx, term) == ast.NAT


def test_fix():
    ctx = Context()
    f = ast.Lambda("f", NAT_TO_NAT, ast.Lambda("n", ast.NAT, ast.Reference("n")))
    assert type_of(ctx, ast.Fix(f)) == NAT_TO_NAT

    assert typing_error(ast.Fix(ast.ZERO)) == "arrow type expected"
    assert (
        typing_error(ast.Fix(ast.Lambda("x", ast.NAT, ast.TRUE)))
        == "result of body not compatible with domain"
    )


def test_concat():
    ctx = Context()
    assert type_of(ctx, ast.Concat(ast.String("a"), ast.String("b"))) == ast.STRING

    assert (
        typing_error(ast.Concat(ast.ZERO, ast.String("b")))
        == "first argument is not a string"
    )
    assert (
        typing_error(ast.Concat(ast.String("a"), ast.ZERO))
        == "second argument is not a string"
    )
    assert (
        typing_error(ast.Concat(ast.ZERO, ast.TRUE))
        == "none of the arguments are strings"
    )


def test_pairs():
    ctx = Context()
    pair = ast.Pair(ast.ZERO, ast.TRUE)
    assert type_of(ctx, pair) == ast.ProductType(ast.NAT, ast.BOOL)
    assert type_of(ctx, ast.First(pair)) == ast.NAT
    assert type_of(ctx, ast.Second(pair)) == ast.BOOL

    assert typing_error(ast.First(ast.ZERO)) == "pair type expected"


def test_records():
    ctx = Context()
    record = ast.Record((("a", ast.ZERO), ("b", ast.TRUE)))
    assert type_of(ctx, record) == ast.RecordType((("a", ast.NAT), ("b", ast.BOOL)))
    assert type_of(ctx, ast.Projection(record, "b")) == ast.BOOL

    assert typing_error(ast.Projection(record, "c")) == "label c not found"
    assert typing_error(ast.Projection(ast.ZERO, "a")) == "record type expected"
    assert (
        typing_error(ast.Record((("a", ast.ZERO), ("a", ast.ZERO))))
        == "repeated label a"
    )


def test_lists():
    ctx = Context()
    lst = ast.Cons(ast.ZERO, ast.Nil(ast.NAT))
    assert type_of(ctx, ast.Nil(ast.NAT)) == ast.ListType(ast.NAT)
    assert type_of(ctx, lst) == ast.ListType(ast.NAT)
    assert type_of(ctx, ast.IsNil(lst)) == ast.BOOL
    assert type_of(ctx, ast.Head(lst)) == ast.NAT
    assert type_of(ctx, ast.Tail(lst)) == ast.ListType(ast.NAT)

    assert (
        typing_error(ast.Cons(ast.TRUE, ast.Nil(ast.NAT)))
        == "head of cons does not match list element type"
    )
    assert typing_error(ast.Cons(ast.TRUE, ast.TRUE)) == "list type expected"
    assert typing_error(ast.Head(ast.ZERO)) == "list type expected"


def test_type_abbreviations():
    ctx = Context().add_type_abbrev("Num", ast.NAT)
    term = ast.Lambda("x", ast.TypeName("Num"), ast.Reference("x"))
    assert type_of(ctx, term) == NAT_TO_NAT
    assert resolve_type(ctx, ast.ListType(ast.TypeName("Num"))) == ast.ListType(ast.NAT)

    assert (
        typing_error(ast.Nil(ast.TypeName("Unknown")), ctx)
        == "no binding for type Unknown"
    )


def test_resolve_annotations():
    ctx = Context().add_type_abbrev("Num", ast.NAT)
    num = ast.TypeName("Num")
    term = ast.Record(
        (
            ("f", ast.Lambda("x", num, ast.Reference("x"))),
            ("l", ast.Cons(ast.ZERO, ast.Nil(num))),
        )
    )
    assert resolve_annotations(ctx, term) == ast.Record(
        (
            ("f", ast.Lambda("x", ast.NAT, ast.Reference("x"))),
            ("l", ast.Cons(ast.ZERO, ast.Nil(ast.NAT))),
        )
    )
    assert resolve_annotations(ctx, ast.Projection(ast.Record(()), "a")) == ast.Projection(
        ast.Record(()), "a"
    )
    with pytest.raises(TypingError) as e:
        resolve_annotations(Context(), ast.Nil(num))
    assert e.value.reason == "no binding for type Num"
