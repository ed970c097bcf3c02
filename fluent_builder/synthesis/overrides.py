"""Covariant overrides of inherited builder members.

A derived builder re-declares every inherited mutator with its own self type
as return type, so chains started on a subclass builder keep returning the
subclass builder. Value mutators call the inherited method and return
``this``. Nested-builder starters (``withX()``/``addX()``) instead return the
inherited result cast to a child builder parameterised by the derived
builder; the cast holds because the child was created with ``this`` as its
parent.
"""

from __future__ import annotations

from fluent_builder.codemodel.declarations import MethodAssembler
from fluent_builder.codemodel.expressions import SUPER, THIS, Cast, ToArray
from fluent_builder.codemodel.types import ITERABLE, TypeExpr
from fluent_builder.model.descriptors import ClassDescriptor
from fluent_builder.synthesis.classifier import ClassifiedProperty, PropertyKind, classify
from fluent_builder.synthesis.scope import OVERRIDE, PUBLIC, BuilderScope


def emit_inherited_overrides(scope: BuilderScope) -> None:
    """Override the members of every ancestor, immediate superclass first."""
    for ancestor in scope.model.ancestors(scope.descriptor):
        emit_ancestor_overrides(scope, ancestor)


def emit_ancestor_overrides(scope: BuilderScope, ancestor: ClassDescriptor) -> None:
    for prop in ancestor.builder_properties():
        emit_property_override(scope, classify(prop, scope.registry, class_name=ancestor.name))


def emit_property_override(scope: BuilderScope, classified: ClassifiedProperty) -> None:
    prop = classified.prop
    naming = scope.naming
    add_name = naming.add_method(prop.base_name)
    with_name = naming.with_method(prop.base_name)

    if classified.kind == PropertyKind.ARRAY:
        element_type = classified.element_type
        varargs = _override(scope, with_name)
        varargs_param = varargs.varargs_param(element_type, prop.field_name)
        if _keep(scope, varargs):
            _delegate(scope, varargs, with_name, varargs_param)

        from_iterable = scope.assembler.method(PUBLIC, scope.self_type, with_name)
        iterable_param = from_iterable.param(ITERABLE.narrow(element_type.as_wildcard()), prop.field_name)
        if _keep(scope, from_iterable) and scope.implement:
            from_iterable.body.eval(SUPER.invoke(with_name, ToArray(iterable_param, element_type)))
            from_iterable.body.return_(THIS)
        return

    if classified.is_collection:
        element_type = classified.element_type
        iterable_type = ITERABLE.narrow(element_type.as_wildcard())
        for name, varargs in ((add_name, False), (add_name, True), (with_name, False), (with_name, True)):
            method = _override(scope, name)
            if varargs:
                param = method.varargs_param(element_type, prop.field_name)
            else:
                param = method.param(iterable_type, prop.field_name)
            if _keep(scope, method):
                _delegate(scope, method, name, param)
        if classified.child_builder is not None:
            _nested_builder_override(scope, add_name, scope.child_return_type(classified.child_builder))
        return

    method = _override(scope, with_name)
    param = method.param(classified.field_type, prop.field_name)
    if _keep(scope, method):
        _delegate(scope, method, with_name, param)
    if classified.child_builder is not None:
        _nested_builder_override(scope, with_name, scope.child_return_type(classified.child_builder))


def _override(scope: BuilderScope, name: str) -> MethodAssembler:
    method = scope.assembler.method(PUBLIC, scope.self_type, name)
    if scope.implement:
        method.annotate(OVERRIDE)
    return method


def _keep(scope: BuilderScope, method: MethodAssembler) -> bool:
    """Drop *method* when the builder already declares that signature."""
    if scope.assembler.has_method(method.signature, exclude=method):
        scope.assembler.discard(method)
        return False
    return True


def _delegate(scope: BuilderScope, method: MethodAssembler, name: str, param) -> None:
    if scope.implement:
        method.body.eval(SUPER.invoke(name, param))
        method.body.return_(THIS)


def _nested_builder_override(scope: BuilderScope, name: str, return_type: TypeExpr) -> None:
    method = _override(scope, name)
    method.returns(return_type)
    if _keep(scope, method) and scope.implement:
        method.body.return_(Cast(return_type, SUPER.invoke(name)))
