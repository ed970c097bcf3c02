"""The partial-copy builder constructor.

``Builder(parentBuilder, other, copy, propertyTree, propertyTreeUse)`` has the
shape of the full-copy constructor, but every declared field is first looked
up in the selection tree and copied only when the lookup, combined with the
selection mode, says so. Nested builder and copy-factory calls receive the
field's own node (or an empty tree), so the selection recurses into the
object graph.
"""

from __future__ import annotations

from fluent_builder.codemodel.declarations import MethodAssembler
from fluent_builder.codemodel.expressions import (
    NULL,
    Compare,
    Conditional,
    Expr,
    Literal,
    Not,
    Or,
    TypeTarget,
    Var,
)
from fluent_builder.codemodel.types import BOOLEAN, SELECTION_MODE, SELECTION_TREE
from fluent_builder.model.selection import SelectionMode
from fluent_builder.synthesis.copying import (
    SelectionArgs,
    copyable_properties,
    emit_constructor_prologue,
    emit_field_copy,
)
from fluent_builder.synthesis.scope import (
    COPY_PARAM,
    MODE_PARAM,
    OTHER_PARAM,
    PARENT_PARAM,
    PUBLIC,
    TREE_PARAM,
    BuilderScope,
)


def emit_partial_copy_constructor(scope: BuilderScope) -> MethodAssembler:
    constructor = scope.assembler.constructor(PUBLIC)
    parent = constructor.param(scope.type_param, PARENT_PARAM)
    other = constructor.param(scope.product_type, OTHER_PARAM)
    copy = constructor.param(BOOLEAN, COPY_PARAM)
    tree = constructor.param(SELECTION_TREE, TREE_PARAM)
    mode = constructor.param(SELECTION_MODE, MODE_PARAM)

    copying = emit_constructor_prologue(scope, constructor, (parent, other, copy, tree, mode))
    for classified in copyable_properties(scope):
        field_name = classified.prop.field_name
        node = copying.decl(SELECTION_TREE, f"{field_name}PropertyTree", tree_lookup(tree, field_name))
        selected = copying.if_(include_condition(node, mode))
        emit_field_copy(scope, selected.then, classified, other, SelectionArgs(node, mode))
    return constructor


def tree_lookup(tree: Var, name: str) -> Expr:
    """``tree == null ? null : tree.get(name)``."""
    return Conditional(tree.is_null(), NULL, tree.invoke("get", Literal(name)))


def include_condition(node: Var, mode: Var) -> Expr:
    """Mirror of :meth:`SelectionTree.includes` on the emitted side.

    Inclusion mode copies when the node exists; exclusion mode copies unless
    the node is a leaf.
    """
    include_mode = TypeTarget(SELECTION_MODE).ref(SelectionMode.INCLUDE.name)
    return Conditional(
        Compare(mode, "==", include_mode),
        node.not_null(),
        Or(node.is_null(), Not(node.invoke("isLeaf"))),
    )
