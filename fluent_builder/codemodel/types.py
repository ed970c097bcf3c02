"""Type expressions of the generated code model.

A :class:`TypeExpr` names a class, a type variable, a wildcard or an array,
optionally narrowed with type arguments: ``Item.Builder<Holder.Builder<TParentBuilder>>``
is ``TypeExpr("Item.Builder").narrow(TypeExpr("Holder.Builder").narrow(var))``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class TypeExpr:
    """An immutable reference to a (possibly parameterised) type."""

    name: str
    args: tuple["TypeExpr", ...] = ()
    wildcard: bool = False
    variable: bool = False
    array: bool = False
    bound: Optional["TypeExpr"] = None

    @classmethod
    def var(cls, name: str, bound: Optional["TypeExpr"] = None) -> "TypeExpr":
        return cls(name=name, variable=True, bound=bound)

    def narrow(self, *args: "TypeExpr") -> "TypeExpr":
        """Return this type parameterised with *args*."""
        return replace(self, args=tuple(args))

    def as_wildcard(self) -> "TypeExpr":
        """Return ``? extends <self>``."""
        return replace(self, wildcard=True)

    def array_of(self) -> "TypeExpr":
        return replace(self, array=True, wildcard=False)

    def erasure(self) -> "TypeExpr":
        """The raw type: no arguments, no wildcard, variables erase to their bound."""
        if self.variable:
            return self.bound.erasure() if self.bound is not None else TypeExpr("Object")
        return TypeExpr(self.name, array=self.array)

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    def render(self) -> str:
        text = self.name
        if self.args:
            text += "<" + ", ".join(arg.render() for arg in self.args) + ">"
        if self.array:
            text += "[]"
        if self.wildcard:
            text = "? extends " + text
        return text

    def __str__(self) -> str:
        return self.render()


# ---------------------------------------------------------------------------
# Well-known types used by the generated bodies
# ---------------------------------------------------------------------------

BOOLEAN = TypeExpr("boolean")
VOID = TypeExpr("Void")
OBJECT = TypeExpr("Object")
ITERABLE = TypeExpr("Iterable")
LIST = TypeExpr("List")
ARRAY_LIST = TypeExpr("ArrayList")
SELECTION_TREE = TypeExpr("PropertyTree")
SELECTION_MODE = TypeExpr("PropertyTreeUse")
CLONE_FAILURE = TypeExpr("CloneNotSupportedException")
RUNTIME_FAILURE = TypeExpr("RuntimeException")
