"""Copy strategies and the full-copy builder constructor.

The constructor ``Builder(parentBuilder, other, copy)`` either wraps an
existing product (``copy`` false: the instance becomes the cached product)
or deep-copies the declared fields of ``other`` into the builder (``copy``
true). Inherited fields are copied by the ancestor constructors reached
through the ``super(...)`` call.

Strategy per field shape, every non-trivial one guarded by a null check:

* buildable, narrow copy enabled and instantiable: new child builder in copy mode
* buildable otherwise: the value's own ``newCopyBuilder()`` (runtime type)
* partial-copyable (partial copies only): ``createCopy(tree, mode)``
* cloneable: ``clone()``, wrapped so a clone failure aborts as a runtime failure
* collections of anything else: a new list sharing the elements
* scalars, arrays and plain references: assignment
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fluent_builder.codemodel.declarations import MethodAssembler
from fluent_builder.codemodel.expressions import (
    NULL,
    THIS,
    TRUE,
    Cast,
    Conditional,
    Expr,
    New,
    TypeTarget,
    Var,
    null_safe,
    super_call,
)
from fluent_builder.codemodel.statements import Block, ForEach
from fluent_builder.codemodel.types import (
    ARRAY_LIST,
    BOOLEAN,
    CLONE_FAILURE,
    RUNTIME_FAILURE,
    SELECTION_TREE,
    TypeExpr,
)
from fluent_builder.synthesis.classifier import ClassifiedProperty, PropertyKind
from fluent_builder.synthesis.scope import (
    COPY_PARAM,
    ITEM_VAR,
    OTHER_PARAM,
    PARENT_PARAM,
    PUBLIC,
    BuilderScope,
)


@dataclass(frozen=True)
class SelectionArgs:
    """The selection node of the field being copied and the ambient mode."""

    node: Var
    mode: Var

    def subtree(self) -> Expr:
        """The field's node, or an empty tree when the field has none."""
        return Conditional(self.node.is_null(), TypeTarget(SELECTION_TREE).invoke("empty"), self.node)


def copyable_properties(scope: BuilderScope) -> list[ClassifiedProperty]:
    """Declared properties with builder members and non-static storage."""
    return [
        scope.classify(prop)
        for prop in scope.descriptor.builder_properties()
        if prop.storage is not None and not prop.storage.static
    ]


def emit_copy_constructor(scope: BuilderScope) -> MethodAssembler:
    constructor = scope.assembler.constructor(PUBLIC)
    parent = constructor.param(scope.type_param, PARENT_PARAM)
    other = constructor.param(scope.product_type, OTHER_PARAM)
    copy = constructor.param(BOOLEAN, COPY_PARAM)

    copying = emit_constructor_prologue(scope, constructor, (parent, other, copy))
    for classified in copyable_properties(scope):
        emit_field_copy(scope, copying, classified, other)
    return constructor


def emit_constructor_prologue(
    scope: BuilderScope,
    constructor: MethodAssembler,
    args: tuple[Var, ...],
) -> Block:
    """Delegate to the superclass or store the root state; return the copy branch."""
    parent, other, copy = args[:3]
    if scope.descriptor.superclass is not None:
        constructor.body.eval(super_call(*args))
    else:
        constructor.body.assign(THIS.ref(scope.builder.parent_builder_field), parent)

    branch = constructor.body.if_(copy)
    if scope.descriptor.superclass is None:
        product_field = THIS.ref(scope.builder.product_field)
        branch.then.assign(product_field, NULL)
        branch.orelse.assign(product_field, other)
    return branch.then


def emit_field_copy(
    scope: BuilderScope,
    block: Block,
    classified: ClassifiedProperty,
    other: Var,
    selection: Optional[SelectionArgs] = None,
) -> None:
    """Append the statements copying one field of *other* into the builder."""
    prop = classified.prop
    target = THIS.ref(prop.field_name)
    source = other.ref(prop.storage.name)
    naming = scope.naming
    oracle = scope.oracle
    selection_args: tuple[Expr, ...] = ()
    if selection is not None:
        selection_args = (selection.subtree(), selection.mode)

    if classified.is_collection:
        element_ref = classified.element_ref
        element_type = classified.element_type
        child = classified.child_builder
        if child is not None:
            child_type = scope.child_builder_type(child)
            loop = _copy_loop(block, source, target, child_type, element_type)
            if scope.settings.copying.narrow_copy and oracle.can_instantiate(element_ref):
                copied = New(child_type, (THIS, loop.var, TRUE) + selection_args)
            else:
                copied = _runtime_copy(scope, loop.var, selection_args)
            loop.body.eval(target.invoke("add", null_safe(loop.var, copied)))
        elif selection is not None and oracle.is_partial_copyable(element_ref):
            loop = _copy_loop(block, source, target, element_type, element_type)
            copied = Cast(element_type, loop.var.invoke(naming.partial_copy_method, *selection_args))
            loop.body.eval(target.invoke("add", null_safe(loop.var, copied)))
        elif oracle.is_cloneable(element_ref):
            guarded = _catch_clone_failure(block)
            loop = _copy_loop(guarded, source, target, element_type, element_type)
            copied = Cast(element_type, loop.var.invoke(naming.clone_method))
            loop.body.eval(target.invoke("add", null_safe(loop.var, copied)))
        else:
            block.assign(target, null_safe(source, New(ARRAY_LIST.narrow(element_type), (source,))))
        return

    if classified.kind in (PropertyKind.SCALAR, PropertyKind.ARRAY):
        block.assign(target, source)
        return

    type_ref = classified.prop.type
    field_type = classified.field_type
    child = classified.child_builder
    if child is not None:
        if scope.settings.copying.narrow_copy and oracle.can_instantiate(type_ref):
            copied = New(scope.child_builder_type(child), (THIS, source, TRUE) + selection_args)
        else:
            copied = _runtime_copy(scope, source, selection_args)
        block.assign(target, null_safe(source, copied))
    elif selection is not None and oracle.is_partial_copyable(type_ref):
        copied = Cast(field_type, source.invoke(naming.partial_copy_method, *selection_args))
        block.assign(target, null_safe(source, copied))
    elif oracle.is_cloneable(type_ref):
        guarded = _catch_clone_failure(block)
        guarded.assign(target, null_safe(source, Cast(field_type, source.invoke(naming.clone_method))))
    else:
        block.assign(target, source)


def _runtime_copy(scope: BuilderScope, value: Expr, selection_args: tuple[Expr, ...]) -> Expr:
    """``value.<Self.Builder<TParentBuilder>>newCopyBuilder(...)``, dispatched on the runtime type."""
    return value.invoke(
        scope.naming.new_copy_builder_method, *selection_args, type_args=(scope.self_type,)
    )


def _copy_loop(
    block: Block,
    source: Expr,
    target: Expr,
    target_element: TypeExpr,
    source_element: TypeExpr,
) -> ForEach:
    branch = block.if_(source.is_null())
    branch.then.assign(target, NULL)
    branch.orelse.assign(target, New(ARRAY_LIST.narrow(target_element)))
    return branch.orelse.for_each(source_element, ITEM_VAR, source)


def _catch_clone_failure(block: Block) -> Block:
    guard = block.try_catch(CLONE_FAILURE)
    guard.handler.throw(New(RUNTIME_FAILURE, (guard.var,)))
    return guard.body
