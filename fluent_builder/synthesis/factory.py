"""Entry points and terminal methods of a builder.

On the builder: ``end()`` (root builders), ``init(product)`` and ``build()``.
On the product class: the static factories ``builder()``, ``copyOf(...)``,
``copyExcept(...)``/``copyOnly(...)`` and the ``newCopyBuilder(...)``
instance methods used for runtime-type deep copies.
"""

from __future__ import annotations

from fluent_builder.codemodel.declarations import MethodAssembler
from fluent_builder.codemodel.expressions import (
    FALSE,
    NULL,
    SUPER,
    THIS,
    TRUE,
    Cast,
    Invoke,
    New,
    TypeTarget,
)
from fluent_builder.codemodel.types import SELECTION_MODE, SELECTION_TREE, VOID
from fluent_builder.model.selection import SelectionMode
from fluent_builder.synthesis.scope import (
    MODE_PARAM,
    NONE,
    OTHER_PARAM,
    PROTECTED,
    PUBLIC,
    PUBLIC_ABSTRACT,
    PUBLIC_STATIC,
    TREE_PARAM,
    BuilderScope,
)


def emit_end_method(scope: BuilderScope) -> None:
    """``end()`` returns the parent builder; declared on root builders only."""
    end = scope.assembler.method(PUBLIC, scope.type_param, scope.naming.end_method)
    if scope.implement:
        end.body.return_(THIS.ref(scope.builder.parent_builder_field))


def emit_init_method(scope: BuilderScope) -> MethodAssembler:
    """Open ``<P extends Product> P init(P _product)`` and point the scope at its body.

    A derived builder first hands the product to the superclass ``init`` so
    base-class fields are populated before the class's own fields.
    """
    init = scope.assembler.method(PROTECTED, scope.product_type, scope.naming.init_method)
    product_var = init.generify("P", scope.product_type)
    init.returns(product_var)
    product = init.param(product_var, scope.naming.product_field)
    if scope.descriptor.superclass is not None:
        init.body.eval(SUPER.invoke(scope.naming.init_method, product))
    scope.init_body = init.body
    scope.product_param = product
    return init


def finish_init_method(scope: BuilderScope) -> None:
    scope.init_body.return_(scope.product_param)


def emit_build_method(scope: BuilderScope) -> MethodAssembler:
    """``build()`` realises the product once and caches it.

    Abstract classes never instantiate; they return the cached product,
    which only a concrete subclass builder or a wrapped instance supplies.
    """
    build = scope.assembler.method(PUBLIC, scope.product_type, scope.naming.build_method)
    if not scope.implement:
        return build
    product_field = THIS.ref(scope.naming.product_field)
    if not scope.descriptor.abstract:
        missing = build.body.if_(product_field.is_null())
        missing.then.assign(
            product_field,
            THIS.invoke(scope.naming.init_method, New(scope.product_type)),
        )
    build.body.return_(Cast(scope.product_type, product_field))
    return build


def emit_static_factories(scope: BuilderScope) -> None:
    """Static entry points on concrete product classes."""
    naming = scope.naming
    builder_type = scope.builder.builder_type
    product = scope.product

    new_builder = product.method(PUBLIC_STATIC, builder_type.narrow(VOID), naming.new_builder_method)
    new_builder.body.return_(New(builder_type.narrow(VOID), (NULL, NULL, FALSE)))

    copy_of = product.method(PUBLIC_STATIC, None, naming.copy_method)
    copy_of_param = copy_of.generify("P")
    copy_of.returns(builder_type.narrow(copy_of_param))
    other = copy_of.param(scope.product_type, OTHER_PARAM)
    copy_of.body.return_(New(builder_type.narrow(copy_of_param), (NULL, other, TRUE)))

    if not scope.settings.copying.partial_copy:
        return

    partial_copy_of = product.method(PUBLIC_STATIC, None, naming.copy_method)
    partial_param = partial_copy_of.generify("P")
    partial_copy_of.returns(builder_type.narrow(partial_param))
    other = partial_copy_of.param(scope.product_type, OTHER_PARAM)
    tree = partial_copy_of.param(SELECTION_TREE, TREE_PARAM)
    mode = partial_copy_of.param(SELECTION_MODE, MODE_PARAM)
    partial_copy_of.body.return_(
        New(builder_type.narrow(partial_param), (NULL, other, TRUE, tree, mode))
    )

    for name, selection_mode in (
        (naming.copy_except_method, SelectionMode.EXCLUDE),
        (naming.copy_only_method, SelectionMode.INCLUDE),
    ):
        convenience = product.method(PUBLIC_STATIC, builder_type.narrow(VOID), name)
        other = convenience.param(scope.product_type, OTHER_PARAM)
        tree = convenience.param(SELECTION_TREE, TREE_PARAM)
        mode_const = TypeTarget(SELECTION_MODE).ref(selection_mode.name)
        convenience.body.return_(Invoke(None, naming.copy_method, (other, tree, mode_const)))


def emit_copy_builder_methods(scope: BuilderScope) -> None:
    """``newCopyBuilder()`` and its partial variant on the product class.

    Abstract classes only declare them; every concrete subclass's own pass
    supplies the body.
    """
    naming = scope.naming
    builder_type = scope.builder.builder_type
    if not scope.implement:
        modifiers = NONE
    elif scope.descriptor.abstract:
        modifiers = PUBLIC_ABSTRACT
    else:
        modifiers = PUBLIC
    concrete = scope.implement and not scope.descriptor.abstract

    copy_builder = scope.product.method(modifiers, None, naming.new_copy_builder_method)
    copy_builder.returns(builder_type.narrow(copy_builder.generify("P")))
    if concrete:
        copy_builder.body.return_(Invoke(None, naming.copy_method, (THIS,)))

    if not scope.settings.copying.partial_copy:
        return

    partial = scope.product.method(modifiers, None, naming.new_copy_builder_method)
    partial.returns(builder_type.narrow(partial.generify("P")))
    tree = partial.param(SELECTION_TREE, TREE_PARAM)
    mode = partial.param(SELECTION_MODE, MODE_PARAM)
    if concrete:
        partial.body.return_(Invoke(None, naming.copy_method, (THIS, tree, mode)))
