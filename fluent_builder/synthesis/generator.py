"""Per-class builder synthesis.

:class:`BuilderGenerator` runs the whole decision procedure for one class:
root state and copy constructors, declared properties, inherited overrides,
then ``build()`` and the product-class entry points. It returns an immutable
:class:`GeneratedBuilder` snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass

from fluent_builder.codemodel.declarations import ClassAssembler, ClassSpec, MethodSpec
from fluent_builder.codemodel.types import TypeExpr
from fluent_builder.config import BuilderSettings
from fluent_builder.errors import ModelInconsistencyError
from fluent_builder.model.descriptors import ClassDescriptor, ClassModel, PropertyDescriptor
from fluent_builder.synthesis.classifier import PropertyKind
from fluent_builder.synthesis.collection import emit_array_property, emit_collection_property
from fluent_builder.synthesis.copying import emit_copy_constructor
from fluent_builder.synthesis.factory import (
    emit_build_method,
    emit_copy_builder_methods,
    emit_end_method,
    emit_init_method,
    emit_static_factories,
    finish_init_method,
)
from fluent_builder.synthesis.hooks import SynthesisHooks
from fluent_builder.synthesis.oracle import TypeOracle
from fluent_builder.synthesis.overrides import emit_inherited_overrides
from fluent_builder.synthesis.partial_copy import emit_partial_copy_constructor
from fluent_builder.synthesis.registry import BuilderRegistry
from fluent_builder.synthesis.scope import PROTECTED, BuilderScope
from fluent_builder.synthesis.singular import emit_singular_property


@dataclass(frozen=True)
class GeneratedBuilder:
    """Everything generated for one class."""

    class_name: str
    builder: ClassSpec
    product_methods: tuple[MethodSpec, ...]

    def product_methods_named(self, name: str) -> list[MethodSpec]:
        return [method for method in self.product_methods if method.name == name]


class BuilderGenerator:
    """Synthesizes the builder of a single class."""

    def __init__(
        self,
        descriptor: ClassDescriptor,
        model: ClassModel,
        registry: BuilderRegistry,
        oracle: TypeOracle,
        settings: BuilderSettings,
        hooks: SynthesisHooks | None = None,
    ) -> None:
        builder = registry.require(descriptor.name, class_name=descriptor.name)
        self.scope = BuilderScope(
            descriptor=descriptor,
            builder=builder,
            model=model,
            registry=registry,
            oracle=oracle,
            settings=settings,
            hooks=hooks or SynthesisHooks(),
            assembler=ClassAssembler(builder.builder_name, is_interface=builder.interface_only),
            product=ClassAssembler(descriptor.name, is_interface=builder.interface_only),
        )

    def generate(self) -> GeneratedBuilder:
        scope = self.scope
        descriptor = scope.descriptor
        scope.assembler.generify(scope.builder.type_param_name)

        superclass = scope.model.superclass_of(descriptor)
        if superclass is not None:
            super_builder = scope.registry.require(superclass.name, class_name=descriptor.name)
            scope.assembler.extends(super_builder.builder_type.narrow(scope.type_param))
        else:
            self._emit_root_state()

        if scope.implement:
            emit_copy_constructor(scope)
            if scope.settings.copying.partial_copy:
                emit_partial_copy_constructor(scope)
            emit_init_method(scope)

        for prop in descriptor.builder_properties():
            self._emit_property(prop)

        if superclass is not None:
            emit_inherited_overrides(scope)
        if scope.implement:
            finish_init_method(scope)

        self._emit_group_interfaces()
        emit_build_method(scope)
        if scope.settings.copying.new_copy_builder_method:
            emit_copy_builder_methods(scope)
        if scope.implement and not descriptor.abstract:
            emit_static_factories(scope)

        try:
            builder_spec = scope.assembler.snapshot()
            product_spec = scope.product.snapshot()
        except ValueError as exc:
            raise ModelInconsistencyError(str(exc), class_name=descriptor.name) from exc
        return GeneratedBuilder(
            class_name=descriptor.name,
            builder=builder_spec,
            product_methods=product_spec.methods,
        )

    # -- Steps ---------------------------------------------------------------

    def _emit_root_state(self) -> None:
        scope = self.scope
        emit_end_method(scope)
        if scope.implement:
            scope.assembler.field(PROTECTED, scope.type_param, scope.builder.parent_builder_field)
            scope.assembler.field(PROTECTED, scope.product_type, scope.builder.product_field)

    def _emit_property(self, prop: PropertyDescriptor) -> None:
        scope = self.scope
        classified = scope.classify(prop)
        try:
            if classified.kind == PropertyKind.ARRAY:
                emit_array_property(scope, classified)
            elif classified.is_collection:
                emit_collection_property(scope, classified)
            else:
                emit_singular_property(scope, classified)
        except ValueError as exc:
            raise ModelInconsistencyError(
                str(exc), class_name=scope.descriptor.name, field_name=prop.field_name
            ) from exc

    def _emit_group_interfaces(self) -> None:
        scope = self.scope
        hook = scope.hooks.group_interfaces
        if hook is None or not scope.descriptor.local:
            return
        for interface_name in hook.group_interfaces_for(scope.descriptor.name):
            interface_builder = TypeExpr(f"{interface_name}.{scope.naming.builder_interface_name}")
            scope.assembler.implements(interface_builder.narrow(scope.type_param))


def generate_builder(
    descriptor: ClassDescriptor,
    model: ClassModel,
    registry: BuilderRegistry,
    oracle: TypeOracle,
    settings: BuilderSettings,
    hooks: SynthesisHooks | None = None,
) -> GeneratedBuilder:
    """Convenience wrapper around :class:`BuilderGenerator`."""
    return BuilderGenerator(descriptor, model, registry, oracle, settings, hooks).generate()
