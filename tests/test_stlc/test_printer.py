import pytest

from stlc import abstract_syntax as ast, parser
from stlc.printer import show_term, show_type


def test_show_base_types():
    assert show_type(ast.BOOL) == "Bool"
    assert show_type(ast.NAT) == "Nat"
    assert show_type(ast.STRING) == "String"


def test_show_arrow_types():
    assert show_type(ast.ArrowType(ast.NAT, ast.ArrowType(ast.NAT, ast.BOOL))) == (
        "Nat -> Nat -> Bool"
    )
    assert show_type(ast.ArrowType(ast.ArrowType(ast.NAT, ast.NAT), ast.BOOL)) == (
        "(Nat -> Nat) -> Bool"
    )


def test_show_compound_types():
    assert show_type(ast.ProductType(ast.NAT, ast.BOOL)) == "Nat * Bool"
    assert show_type(ast.ProductType(ast.ArrowType(ast.NAT, ast.NAT), ast.BOOL)) == (
        "(Nat -> Nat) * Bool"
    )
    assert show_type(ast.RecordType((("a", ast.NAT), ("b", ast.BOOL)))) == (
        "{a:Nat, b:Bool}"
    )
    assert show_type(ast.ListType(ast.STRING)) == "List[String]"


def test_show_values():
    assert show_term(ast.TRUE) == "true"
    assert show_term(ast.ZERO) == "0"
    assert show_term(ast.nat(6)) == "6"
    assert show_term(ast.String("abcd")) == '"abcd"'
    assert show_term(ast.Lambda("x", ast.NAT, ast.Succ(ast.Reference("x")))) == (
        "lambda x:Nat. succ x"
    )
    assert show_term(ast.Pair(ast.nat(1), ast.TRUE)) == "{1, true}"
    assert show_term(ast.Record((("a", ast.ZERO),))) == "{a=0}"
    assert show_term(ast.Cons(ast.nat(1), ast.Nil(ast.NAT))) == "cons 1 nil[Nat]"


def test_show_nested_terms():
    x = ast.Reference("x")
    assert show_term(ast.Succ(ast.Succ(x))) == "succ (succ x)"
    assert show_term(ast.Application(ast.Application(x, x), ast.Application(x, x))) == (
        "x x (x x)"
    )
    assert show_term(ast.Application(ast.Lambda("y", ast.NAT, x), ast.ZERO)) == (
        "(lambda y:Nat. x) 0"
    )
    assert show_term(ast.Let("y", x, ast.Fix(x))) == "let y = x in fix x"
    assert show_term(ast.Conditional(x, ast.ZERO, ast.Pred(x))) == (
        "if x then 0 else pred x"
    )


@pytest.mark.parametrize(
    "src",
    [
        "lambda f:(Nat -> Nat) -> Bool. f (lambda n:Nat. succ n)",
        "{a={1, true}, b=cons 1 (cons 2 nil[Nat])}",
        'concat (concat "a" "b") "c"',
        "(lambda p:Nat * Bool. p.1) {pred 2, true}",
        "let x = {a=0}.a in iszero x",
        "head (tail l)",
    ],
)
def test_printed_terms_parse_back(src):
    term = parser.parse_term(src)
    assert parser.parse_term(show_term(term)) == term
