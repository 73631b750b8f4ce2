import dataclasses
import functools
import string

import pyparsing as pp

from stlc import abstract_syntax as ast, lexer


@dataclasses.dataclass
class ParseError(Exception):
    msg: str
    loc: int

    def __str__(self):
        return f"{self.msg} (at char {self.loc})"


def parse_command(src: str) -> ast.ToplevelItem:
    return _parse(command, src)


def parse_term(src: str) -> ast.Expression:
    return _parse(term, src)


def parse_type(src: str) -> ast.Type:
    return _parse(ty, src)


def _parse(grammar: pp.ParserElement, src: str):
    lexer.check_characters(src)
    try:
        return grammar.parse_string(src, True)[0]
    except pp.ParseBaseException as e:
        raise ParseError(e.msg, e.loc) from None


### Grammar

IDENT_CHARS = string.ascii_letters + string.digits + "_'"

KEYWORDS = (
    "lambda",
    "L",
    "if",
    "then",
    "else",
    "true",
    "false",
    "succ",
    "pred",
    "iszero",
    "let",
    "letrec",
    "in",
    "fix",
    "concat",
    "nil",
    "cons",
    "isnil",
    "head",
    "tail",
    "Bool",
    "Nat",
    "String",
    "List",
)


def kw(word: str) -> pp.Keyword:
    return pp.Keyword(word, ident_chars=IDENT_CHARS)


keyword = pp.MatchFirst([kw(k) for k in KEYWORDS])

ident = ~keyword + pp.Word(string.ascii_lowercase + "_", IDENT_CHARS)
type_ident = ~keyword + pp.Word(string.ascii_uppercase, IDENT_CHARS)


def fold_right(cons, items):
    items = list(items)
    return functools.reduce(lambda acc, x: cons(x, acc), reversed(items[:-1]), items[-1])


### Types

ty = pp.Forward()

list_type = (kw("List") + pp.Suppress("[") + ty + pp.Suppress("]")).set_parse_action(
    lambda t: ast.ListType(t[1])
)

record_type = (
    pp.Suppress("{")
    + pp.Optional(pp.DelimitedList(pp.Group(ident + pp.Suppress(":") + ty), ","))
    + pp.Suppress("}")
).set_parse_action(lambda t: ast.RecordType(tuple(map(tuple, t))))

atomic_type = (
    kw("Bool").set_parse_action(lambda t: ast.BOOL)
    | kw("Nat").set_parse_action(lambda t: ast.NAT)
    | kw("String").set_parse_action(lambda t: ast.STRING)
    | list_type
    | record_type
    | type_ident.copy().set_parse_action(lambda t: ast.TypeName(t[0]))
    | (pp.Suppress("(") + ty + pp.Suppress(")"))
)

product_type = pp.DelimitedList(atomic_type, "*").set_parse_action(
    lambda t: fold_right(ast.ProductType, t)
)

ty <<= pp.DelimitedList(product_type, "->").set_parse_action(
    lambda t: fold_right(ast.ArrowType, t)
)


### Terms

term = pp.Forward()
atomic = pp.Forward()

number = pp.Word(pp.nums).set_parse_action(lambda t: ast.nat(int(t[0])))

string_literal = pp.QuotedString('"').add_parse_action(lambda t: ast.String(t[0]))

varref = ident.copy().set_parse_action(lambda t: ast.Reference(t[0]))

nil = (kw("nil") + pp.Suppress("[") + ty + pp.Suppress("]")).set_parse_action(
    lambda t: ast.Nil(t[1])
)

record = (
    pp.Suppress("{")
    + pp.Optional(pp.DelimitedList(pp.Group(ident + pp.Suppress("=") + term), ","))
    + pp.Suppress("}")
).set_parse_action(lambda t: ast.Record(tuple(map(tuple, t))))

pair = (
    pp.Suppress("{") + term + pp.Suppress(",") + term + pp.Suppress("}")
).set_parse_action(lambda t: ast.Pair(t[0], t[1]))

atomic <<= (
    kw("true").set_parse_action(lambda t: ast.TRUE)
    | kw("false").set_parse_action(lambda t: ast.FALSE)
    | number
    | string_literal
    | nil
    | record
    | pair
    | varref
    | (pp.Suppress("(") + term + pp.Suppress(")"))
)


def project(expr: ast.Expression, name: str) -> ast.Expression:
    match name:
        case "1":
            return ast.First(expr)
        case "2":
            return ast.Second(expr)
        case label:
            return ast.Projection(expr, label)


field = pp.one_of("1 2") | ident

simple = (atomic + pp.ZeroOrMore(pp.Suppress(".") + field)).set_parse_action(
    lambda t: functools.reduce(project, t[1:], t[0])
)


def unary(word: str, cons) -> pp.ParserElement:
    return (kw(word) + simple).set_parse_action(lambda t: cons(t[1]))


def binary(word: str, cons) -> pp.ParserElement:
    return (kw(word) + simple + simple).set_parse_action(lambda t: cons(t[1], t[2]))


app_head = (
    unary("succ", ast.Succ)
    | unary("pred", ast.Pred)
    | unary("iszero", ast.IsZero)
    | unary("fix", ast.Fix)
    | unary("isnil", ast.IsNil)
    | unary("head", ast.Head)
    | unary("tail", ast.Tail)
    | binary("concat", ast.Concat)
    | binary("cons", ast.Cons)
    | simple
)

app_term = (app_head + pp.ZeroOrMore(simple)).set_parse_action(
    lambda t: functools.reduce(ast.Application, t[1:], t[0])
)

function = (
    (kw("lambda") | kw("L")) + ident + ":" + ty + "." + term
).set_parse_action(lambda t: ast.Lambda(t[1], t[3], t[5]))

conditional = (
    kw("if") + term + kw("then") + term + kw("else") + term
).set_parse_action(lambda t: ast.Conditional(t[1], t[3], t[5]))

let = (kw("let") + ident + "=" + term + kw("in") + term).set_parse_action(
    lambda t: ast.Let(t[1], t[3], t[5])
)

# letrec f : T = t1 in t2  ==>  let f = fix (lambda f:T. t1) in t2
letrec = (
    kw("letrec") + ident + ":" + ty + "=" + term + kw("in") + term
).set_parse_action(
    lambda t: ast.Let(t[1], ast.Fix(ast.Lambda(t[1], t[3], t[5])), t[7])
)

term <<= function | conditional | letrec | let | app_term


### Toplevel commands

define_type = (type_ident + "=" + ty).set_parse_action(
    lambda t: ast.DefineType(t[0], t[2])
)

define_let = (ident + "=" + term).set_parse_action(lambda t: ast.DefineLet(t[0], t[2]))

command = (
    (define_type + pp.StringEnd())
    | (define_let + pp.StringEnd())
    | (term + pp.StringEnd())
    | (ty + pp.StringEnd())
)
