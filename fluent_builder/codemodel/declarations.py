"""Class, field and method declarations of the generated code model.

Members are collected by a mutable :class:`ClassAssembler` while one class is
processed; :meth:`ClassAssembler.snapshot` then seals every method body and
returns an immutable :class:`ClassSpec` for the external emitter.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fluent_builder.codemodel.expressions import Expr, Var
from fluent_builder.codemodel.statements import Block
from fluent_builder.codemodel.types import TypeExpr


CONSTRUCTOR_NAME = "<init>"


class Modifier(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    STATIC = "static"
    ABSTRACT = "abstract"
    FINAL = "final"


# ---------------------------------------------------------------------------
# Immutable declarations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Param:
    name: str
    type: TypeExpr
    varargs: bool = False

    @property
    def var(self) -> Var:
        return Var(self.name)


@dataclass(frozen=True)
class FieldSpec:
    name: str
    type: TypeExpr
    modifiers: frozenset[Modifier] = frozenset()
    init: Optional[Expr] = None


@dataclass(frozen=True)
class MethodSpec:
    """A method or constructor; ``body`` is ``None`` for declarations only."""

    name: str
    return_type: Optional[TypeExpr]
    params: tuple[Param, ...] = ()
    modifiers: frozenset[Modifier] = frozenset()
    type_params: tuple[TypeExpr, ...] = ()
    body: Optional[Block] = None
    annotations: tuple[str, ...] = ()

    @property
    def is_constructor(self) -> bool:
        return self.name == CONSTRUCTOR_NAME

    @property
    def signature(self) -> tuple:
        return method_signature(self.name, self.params)

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(param.name for param in self.params)


@dataclass(frozen=True)
class ClassSpec:
    name: str
    type_params: tuple[TypeExpr, ...] = ()
    extends: Optional[TypeExpr] = None
    implements: tuple[TypeExpr, ...] = ()
    is_interface: bool = False
    is_abstract: bool = False
    fields: tuple[FieldSpec, ...] = ()
    constructors: tuple[MethodSpec, ...] = ()
    methods: tuple[MethodSpec, ...] = ()

    def field(self, name: str) -> Optional[FieldSpec]:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    def methods_named(self, name: str) -> list[MethodSpec]:
        return [method for method in self.methods if method.name == name]

    def method(self, name: str, arity: Optional[int] = None, varargs: Optional[bool] = None) -> MethodSpec:
        """Return the single method matching *name* and the optional shape filters.

        Raises:
            LookupError: No method, or more than one, matches.
        """
        matches = [
            method for method in self.methods_named(name)
            if (arity is None or len(method.params) == arity)
            and (varargs is None or any(p.varargs for p in method.params) == varargs)
        ]
        if len(matches) != 1:
            raise LookupError(f"{len(matches)} methods match {name!r} on {self.name}")
        return matches[0]


def method_signature(name: str, params: tuple[Param, ...]) -> tuple:
    """Overload identity: name plus erased parameter types."""
    return (name,) + tuple((param.type.erasure().render(), param.varargs) for param in params)


# ---------------------------------------------------------------------------
# Assemblers
# ---------------------------------------------------------------------------

class MethodAssembler:
    """Collects the pieces of one method until the class is snapshotted."""

    def __init__(
        self,
        name: str,
        return_type: Optional[TypeExpr],
        modifiers: frozenset[Modifier],
        has_body: bool,
    ) -> None:
        self.name = name
        self.return_type = return_type
        self.modifiers = modifiers
        self.params: list[Param] = []
        self.type_params: list[TypeExpr] = []
        self.annotations: list[str] = []
        self.has_body = has_body
        self.body = Block()

    def param(self, type: TypeExpr, name: str) -> Var:
        self.params.append(Param(name, type))
        return Var(name)

    def varargs_param(self, type: TypeExpr, name: str) -> Var:
        self.params.append(Param(name, type, varargs=True))
        return Var(name)

    def generify(self, name: str, bound: Optional[TypeExpr] = None) -> TypeExpr:
        type_var = TypeExpr.var(name, bound)
        self.type_params.append(type_var)
        return type_var

    def returns(self, return_type: TypeExpr) -> None:
        self.return_type = return_type

    def annotate(self, annotation: str) -> None:
        self.annotations.append(annotation)

    @property
    def signature(self) -> tuple:
        return method_signature(self.name, tuple(self.params))

    def snapshot(self) -> MethodSpec:
        body: Optional[Block] = None
        if self.has_body:
            self.body.seal()
            body = self.body
        return MethodSpec(
            name=self.name,
            return_type=self.return_type,
            params=tuple(self.params),
            modifiers=self.modifiers,
            type_params=tuple(self.type_params),
            body=body,
            annotations=tuple(self.annotations),
        )


class ClassAssembler:
    """Mutable accumulator for the members of one generated class."""

    def __init__(self, name: str, *, is_interface: bool = False, is_abstract: bool = False) -> None:
        self.name = name
        self.is_interface = is_interface
        self.is_abstract = is_abstract
        self.type_params: list[TypeExpr] = []
        self.extends_type: Optional[TypeExpr] = None
        self.implements_types: list[TypeExpr] = []
        self._fields: dict[str, FieldSpec] = {}
        self._constructors: list[MethodAssembler] = []
        self._methods: list[MethodAssembler] = []

    def generify(self, name: str) -> TypeExpr:
        type_var = TypeExpr.var(name)
        self.type_params.append(type_var)
        return type_var

    def extends(self, type: TypeExpr) -> None:
        self.extends_type = type

    def implements(self, type: TypeExpr) -> None:
        self.implements_types.append(type)

    def field(
        self,
        modifiers: frozenset[Modifier],
        type: TypeExpr,
        name: str,
        init: Optional[Expr] = None,
    ) -> FieldSpec:
        if name in self._fields:
            raise ValueError(f"Duplicate field {name!r} on {self.name}")
        spec = FieldSpec(name, type, frozenset(modifiers), init)
        self._fields[name] = spec
        return spec

    def method(
        self,
        modifiers: frozenset[Modifier],
        return_type: Optional[TypeExpr],
        name: str,
    ) -> MethodAssembler:
        modifiers = frozenset(modifiers)
        has_body = not self.is_interface and Modifier.ABSTRACT not in modifiers
        method = MethodAssembler(name, return_type, modifiers, has_body)
        self._methods.append(method)
        return method

    def constructor(self, modifiers: frozenset[Modifier]) -> MethodAssembler:
        constructor = MethodAssembler(CONSTRUCTOR_NAME, None, frozenset(modifiers), True)
        self._constructors.append(constructor)
        return constructor

    def has_method(self, signature: tuple, exclude: Optional[MethodAssembler] = None) -> bool:
        return any(
            method is not exclude and method.signature == signature for method in self._methods
        )

    def discard(self, method: MethodAssembler) -> None:
        self._methods.remove(method)

    def snapshot(self) -> ClassSpec:
        """Seal every body and return the immutable class declaration.

        Raises:
            ValueError: Two methods share the same overload signature.
        """
        seen: set[tuple] = set()
        for method in self._methods:
            if method.signature in seen:
                raise ValueError(f"Duplicate method {method.name!r} on {self.name}")
            seen.add(method.signature)
        return ClassSpec(
            name=self.name,
            type_params=tuple(self.type_params),
            extends=self.extends_type,
            implements=tuple(self.implements_types),
            is_interface=self.is_interface,
            is_abstract=self.is_abstract,
            fields=tuple(self._fields.values()),
            constructors=tuple(c.snapshot() for c in self._constructors),
            methods=tuple(m.snapshot() for m in self._methods),
        )
