"""Members for collection and array properties.

Collections get ``addX``/``withX`` in iterable and varargs forms; ``addX``
appends to a lazily allocated list, ``withX`` clears it first. Collections of
buildable elements keep a list of child builders and additionally get
``addX()`` for nested chains. Arrays only get a varargs ``withX`` storing
the array as given.
"""

from __future__ import annotations

from fluent_builder.codemodel.expressions import FALSE, NULL, THIS, AsList, New, null_safe
from fluent_builder.codemodel.types import ARRAY_LIST, ITERABLE, LIST
from fluent_builder.synthesis.classifier import ClassifiedProperty
from fluent_builder.synthesis.scope import ITEM_VAR, PRIVATE, PUBLIC, BuilderScope


def emit_collection_property(scope: BuilderScope, classified: ClassifiedProperty) -> None:
    prop = classified.prop
    naming = scope.naming
    field_name = prop.field_name
    element_type = classified.element_type
    iterable_type = ITERABLE.narrow(element_type.as_wildcard())
    add_name = naming.add_method(prop.base_name)
    with_name = naming.with_method(prop.base_name)

    add_list = scope.assembler.method(PUBLIC, scope.self_type, add_name)
    add_list_param = add_list.param(iterable_type, field_name)
    with_list = scope.assembler.method(PUBLIC, scope.self_type, with_name)
    with_list_param = with_list.param(iterable_type, field_name)
    add_varargs = scope.assembler.method(PUBLIC, scope.self_type, add_name)
    add_varargs_param = add_varargs.varargs_param(element_type, field_name)
    with_varargs = scope.assembler.method(PUBLIC, scope.self_type, with_name)
    with_varargs_param = with_varargs.varargs_param(element_type, field_name)

    if scope.implement:
        add_varargs.body.eval(THIS.invoke(add_name, AsList(add_varargs_param)))
        add_varargs.body.return_(THIS)
        with_varargs.body.eval(THIS.invoke(with_name, AsList(with_varargs_param)))
        with_varargs.body.return_(THIS)

    child = classified.child_builder
    if child is None:
        if not scope.implement:
            return
        builder_field = THIS.ref(field_name)
        scope.assembler.field(PRIVATE, LIST.narrow(element_type), field_name)

        guard = add_list.body.if_(add_list_param.not_null())
        allocate = guard.then.if_(builder_field.is_null())
        allocate.then.assign(builder_field, New(ARRAY_LIST.narrow(element_type)))
        guard.then.eval(builder_field.invoke("addAll", add_list_param))
        add_list.body.return_(THIS)

        _emit_clear_then_add(with_list, builder_field, add_name, with_list_param)

        scope.init_body.assign(scope.product_param.ref(field_name), builder_field)
        scope.after_init_assignment(prop)
        return

    child_type = scope.child_builder_type(child)
    add_builder = scope.assembler.method(PUBLIC, scope.child_return_type(child), add_name)
    if not scope.implement:
        return

    builder_field = THIS.ref(field_name)
    scope.assembler.field(PRIVATE, LIST.narrow(child_type), field_name)

    allocate = add_builder.body.if_(builder_field.is_null())
    allocate.then.assign(builder_field, New(ARRAY_LIST.narrow(child_type)))
    child_var = add_builder.body.decl(
        child_type, field_name + naming.builder_field_suffix, New(child_type, (THIS, NULL, FALSE))
    )
    add_builder.body.eval(builder_field.invoke("add", child_var))
    add_builder.body.return_(child_var)

    guard = add_list.body.if_(add_list_param.not_null())
    allocate = guard.then.if_(builder_field.is_null())
    allocate.then.assign(builder_field, New(ARRAY_LIST.narrow(child_type)))
    loop = guard.then.for_each(element_type, ITEM_VAR, add_list_param)
    loop.body.eval(
        builder_field.invoke("add", null_safe(loop.var, New(child_type, (THIS, loop.var, FALSE))))
    )
    add_list.body.return_(THIS)

    _emit_clear_then_add(with_list, builder_field, add_name, with_list_param)

    has_builders = scope.init_body.if_(builder_field.not_null())
    built = has_builders.then.decl(
        LIST.narrow(element_type),
        field_name,
        New(ARRAY_LIST.narrow(element_type), (builder_field.invoke("size"),)),
    )
    build_loop = has_builders.then.for_each(child_type, ITEM_VAR, builder_field)
    build_loop.body.eval(
        built.invoke("add", null_safe(build_loop.var, build_loop.var.invoke(naming.build_method)))
    )
    has_builders.then.assign(scope.product_param.ref(field_name), built)
    scope.after_init_assignment(prop)


def emit_array_property(scope: BuilderScope, classified: ClassifiedProperty) -> None:
    prop = classified.prop
    field_name = prop.field_name
    with_varargs = scope.assembler.method(PUBLIC, scope.self_type, scope.naming.with_method(prop.base_name))
    param = with_varargs.varargs_param(classified.element_type, field_name)
    if scope.implement:
        scope.assembler.field(PRIVATE, classified.field_type, field_name, NULL)
        with_varargs.body.assign(THIS.ref(field_name), param)
        with_varargs.body.return_(THIS)
        scope.init_body.assign(scope.product_param.ref(field_name), THIS.ref(field_name))
        scope.after_init_assignment(prop)


def _emit_clear_then_add(with_list, builder_field, add_name, param) -> None:
    existing = with_list.body.if_(builder_field.not_null())
    existing.then.eval(builder_field.invoke("clear"))
    with_list.body.return_(THIS.invoke(add_name, param))
