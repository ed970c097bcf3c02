"""Type-model predicates consulted while choosing copy strategies."""

from __future__ import annotations

from typing import Protocol

from fluent_builder.model.descriptors import ClassModel, TypeRef
from fluent_builder.synthesis.registry import BuilderRegistry


class TypeOracle(Protocol):
    """Answers "is type X cloneable / partial-copyable / instantiable"."""

    def is_cloneable(self, type_ref: TypeRef) -> bool:
        ...

    def is_partial_copyable(self, type_ref: TypeRef) -> bool:
        ...

    def can_instantiate(self, type_ref: TypeRef) -> bool:
        ...


class DeclaredTypeOracle:
    """Reads the predicates from the type references and the class model.

    Cloneability comes from the flags the front end put on each
    :class:`TypeRef`. A type is instantiable when it is a concrete class of
    the model, or an externally-built concrete class.
    """

    def __init__(self, model: ClassModel, registry: BuilderRegistry) -> None:
        self.model = model
        self.registry = registry

    def is_cloneable(self, type_ref: TypeRef) -> bool:
        return type_ref.cloneable

    def is_partial_copyable(self, type_ref: TypeRef) -> bool:
        return type_ref.partial_copyable

    def can_instantiate(self, type_ref: TypeRef) -> bool:
        descriptor = self.model.get(type_ref.name)
        if descriptor is not None:
            return not descriptor.abstract
        builder = self.registry.get(type_ref.name)
        return builder is not None and not builder.abstract
