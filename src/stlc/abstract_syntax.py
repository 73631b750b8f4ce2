from __future__ import annotations

import abc
import dataclasses


class ToplevelItem(abc.ABC):
    pass


### Types


class Type(ToplevelItem):
    pass


@dataclasses.dataclass(frozen=True)
class BoolType(Type):
    pass


@dataclasses.dataclass(frozen=True)
class NatType(Type):
    pass


@dataclasses.dataclass(frozen=True)
class StringType(Type):
    pass


@dataclasses.dataclass(frozen=True)
class ArrowType(Type):
    domain: Type
    codomain: Type


@dataclasses.dataclass(frozen=True)
class ProductType(Type):
    first: Type
    second: Type


@dataclasses.dataclass(frozen=True)
class RecordType(Type):
    fields: tuple[tuple[str, Type], ...]


@dataclasses.dataclass(frozen=True)
class ListType(Type):
    element: Type


@dataclasses.dataclass(frozen=True)
class TypeName(Type):
    """Reference to a type abbreviation. Only the parser produces these."""

    name: str


BOOL = BoolType()
NAT = NatType()
STRING = StringType()


### Terms


class Expression(ToplevelItem):
    pass


@dataclasses.dataclass(frozen=True)
class Boolean(Expression):
    value: bool


@dataclasses.dataclass(frozen=True)
class Zero(Expression):
    pass


@dataclasses.dataclass(frozen=True)
class Succ(Expression):
    term: Expression


@dataclasses.dataclass(frozen=True)
class Pred(Expression):
    term: Expression


@dataclasses.dataclass(frozen=True)
class IsZero(Expression):
    term: Expression


@dataclasses.dataclass(frozen=True)
class Conditional(Expression):
    condition: Expression
    consequence: Expression
    alternative: Expression


@dataclasses.dataclass(frozen=True)
class Reference(Expression):
    var: str


@dataclasses.dataclass(frozen=True)
class Lambda(Expression):
    var: str
    ty: Type
    body: Expression


@dataclasses.dataclass(frozen=True)
class Application(Expression):
    fun: Expression
    arg: Expression


@dataclasses.dataclass(frozen=True)
class Let(Expression):
    var: str
    val: Expression
    body: Expression


@dataclasses.dataclass(frozen=True)
class Fix(Expression):
    term: Expression


@dataclasses.dataclass(frozen=True)
class String(Expression):
    value: str


@dataclasses.dataclass(frozen=True)
class Concat(Expression):
    first: Expression
    second: Expression


@dataclasses.dataclass(frozen=True)
class Pair(Expression):
    first: Expression
    second: Expression


@dataclasses.dataclass(frozen=True)
class First(Expression):
    pair: Expression


@dataclasses.dataclass(frozen=True)
class Second(Expression):
    pair: Expression


@dataclasses.dataclass(frozen=True)
class Record(Expression):
    fields: tuple[tuple[str, Expression], ...]


@dataclasses.dataclass(frozen=True)
class Projection(Expression):
    record: Expression
    label: str


@dataclasses.dataclass(frozen=True)
class Nil(Expression):
    ty: Type


@dataclasses.dataclass(frozen=True)
class Cons(Expression):
    head: Expression
    tail: Expression


@dataclasses.dataclass(frozen=True)
class IsNil(Expression):
    list: Expression


@dataclasses.dataclass(frozen=True)
class Head(Expression):
    list: Expression


@dataclasses.dataclass(frozen=True)
class Tail(Expression):
    list: Expression


TRUE = Boolean(True)
FALSE = Boolean(False)
ZERO = Zero()


def nat(n: int) -> Expression:
    """Encode a non-negative integer as a chain of successors."""
    term = ZERO
    for _ in range(n):
        term = Succ(term)
    return term


def to_int(term: Expression) -> int | None:
    n = 0
    while isinstance(term, Succ):
        term = term.term
        n += 1
    if term == ZERO:
        return n
    return None


### Toplevel commands


@dataclasses.dataclass(frozen=True)
class DefineLet(ToplevelItem):
    var: str
    val: Expression


@dataclasses.dataclass(frozen=True)
class DefineType(ToplevelItem):
    name: str
    ty: Type
