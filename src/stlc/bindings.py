from __future__ import annotations

import dataclasses
from typing import Generic, Iterator, Optional, TypeVar

from stlc import abstract_syntax as ast

T = TypeVar("T")


@dataclasses.dataclass
class NotFound(LookupError):
    name: str


class Bindings(Generic[T]):
    """Immutable association list. The most recent binding comes first."""

    def __init__(self, key=None, val=None, next=None):
        self.key = key
        self.val = val
        self.next = next

    def depth(self) -> int:
        return sum(1 for _ in self)

    def get(self, k: str) -> T:
        for key, val in self:
            if key == k:
                return val
        raise NotFound(k)

    def extend(self, k: str, v: T) -> Bindings[T]:
        return Bindings(k, v, self)

    def __iter__(self) -> Iterator[tuple[str, T]]:
        node = self
        while node.key is not None:
            yield node.key, node.val
            node = node.next


@dataclasses.dataclass(frozen=True)
class Binding:
    ty: ast.Type
    value: Optional[ast.Expression] = None


@dataclasses.dataclass(frozen=True)
class Context:
    """Everything a command can see: term bindings and type abbreviations."""

    terms: Bindings[Binding] = dataclasses.field(default_factory=Bindings)
    types: Bindings[ast.Type] = dataclasses.field(default_factory=Bindings)

    def add_binding(self, name: str, ty: ast.Type, value: ast.Expression) -> Context:
        return dataclasses.replace(self, terms=self.terms.extend(name, Binding(ty, value)))

    def add_binding_type(self, name: str, ty: ast.Type) -> Context:
        return dataclasses.replace(self, terms=self.terms.extend(name, Binding(ty)))

    def add_type_abbrev(self, name: str, ty: ast.Type) -> Context:
        return dataclasses.replace(self, types=self.types.extend(name, ty))

    def get_binding_type(self, name: str) -> ast.Type:
        return self.terms.get(name).ty

    def get_value(self, name: str) -> Optional[ast.Expression]:
        try:
            return self.terms.get(name).value
        except NotFound:
            return None

    def get_type_abbrev(self, name: str) -> ast.Type:
        return self.types.get(name)
