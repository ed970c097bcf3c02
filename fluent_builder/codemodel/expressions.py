"""Expression nodes of the generated code model.

Expressions are immutable and compare structurally, so tests (and emitters)
can match a generated body against an expected shape with ``==``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from fluent_builder.codemodel.types import TypeExpr


class Expr:
    """Base class for all expressions; offers fluent helpers."""

    def ref(self, name: str) -> "FieldRef":
        return FieldRef(self, name)

    def invoke(self, method: str, *args: "Expr", type_args: tuple[TypeExpr, ...] = ()) -> "Invoke":
        return Invoke(self, method, tuple(args), tuple(type_args))

    def is_null(self) -> "Compare":
        return Compare(self, "==", NULL)

    def not_null(self) -> "Compare":
        return Compare(self, "!=", NULL)


@dataclass(frozen=True)
class This(Expr):
    pass


@dataclass(frozen=True)
class Super(Expr):
    pass


@dataclass(frozen=True)
class Null(Expr):
    pass


@dataclass(frozen=True)
class Literal(Expr):
    value: Any


@dataclass(frozen=True)
class Var(Expr):
    """A parameter or local variable."""
    name: str


@dataclass(frozen=True)
class TypeTarget(Expr):
    """A type used as the target of a static member access."""
    type: TypeExpr


@dataclass(frozen=True)
class FieldRef(Expr):
    target: Expr
    name: str


@dataclass(frozen=True)
class Invoke(Expr):
    """A method call; ``target=None`` calls a method of the enclosing class."""
    target: Optional[Expr]
    method: str
    args: tuple[Expr, ...] = ()
    type_args: tuple[TypeExpr, ...] = ()


@dataclass(frozen=True)
class New(Expr):
    type: TypeExpr
    args: tuple[Expr, ...] = ()


@dataclass(frozen=True)
class Cast(Expr):
    type: TypeExpr
    expr: Expr


@dataclass(frozen=True)
class Compare(Expr):
    left: Expr
    op: str
    right: Expr


@dataclass(frozen=True)
class Not(Expr):
    expr: Expr


@dataclass(frozen=True)
class Or(Expr):
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Conditional(Expr):
    test: Expr
    then: Expr
    orelse: Expr


@dataclass(frozen=True)
class AsList(Expr):
    """Wraps a varargs parameter as a list."""
    value: Expr


@dataclass(frozen=True)
class ToArray(Expr):
    """Copies an iterable into a new array of *element_type*."""
    value: Expr
    element_type: TypeExpr


THIS = This()
SUPER = Super()
NULL = Null()
TRUE = Literal(True)
FALSE = Literal(False)


def null_safe(test: Expr, value: Expr) -> Conditional:
    """``test == null ? null : value``."""
    return Conditional(test.is_null(), NULL, value)


def super_call(*args: Expr) -> Invoke:
    """A call to the superclass constructor."""
    return Invoke(None, "super", tuple(args))
