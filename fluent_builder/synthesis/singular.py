"""Members for non-collection properties.

Scalar and plain reference properties get a single ``withX(value)``.
Buildable references additionally get ``withX()``, which starts a nested
builder whose ``end()`` returns to the current one.
"""

from __future__ import annotations

from fluent_builder.codemodel.expressions import FALSE, NULL, THIS, New, null_safe
from fluent_builder.synthesis.classifier import ClassifiedProperty
from fluent_builder.synthesis.scope import PRIVATE, PUBLIC, BuilderScope


def emit_singular_property(scope: BuilderScope, classified: ClassifiedProperty) -> None:
    prop = classified.prop
    naming = scope.naming
    field_name = prop.field_name
    field_type = classified.field_type

    if classified.child_builder is None:
        with_method = scope.assembler.method(PUBLIC, scope.self_type, naming.with_method(prop.base_name))
        param = with_method.param(field_type, field_name)
        if scope.implement:
            scope.assembler.field(PRIVATE, field_type, field_name)
            with_method.body.assign(THIS.ref(field_name), param)
            with_method.body.return_(THIS)
            scope.init_body.assign(scope.product_param.ref(field_name), THIS.ref(field_name))
            scope.after_init_assignment(prop)
        return

    child_type = scope.child_builder_type(classified.child_builder)
    with_value = scope.assembler.method(PUBLIC, scope.self_type, naming.with_method(prop.base_name))
    param = with_value.param(field_type, field_name)
    with_builder = scope.assembler.method(
        PUBLIC, scope.child_return_type(classified.child_builder), naming.with_method(prop.base_name)
    )

    if scope.implement:
        builder_field = THIS.ref(field_name)
        scope.assembler.field(PRIVATE, child_type, field_name)

        with_value.body.assign(builder_field, null_safe(param, New(child_type, (THIS, param, FALSE))))
        with_value.body.return_(THIS)

        with_builder.body.assign(builder_field, New(child_type, (THIS, NULL, FALSE)))
        with_builder.body.return_(builder_field)

        scope.init_body.assign(
            scope.product_param.ref(field_name),
            null_safe(builder_field, builder_field.invoke(naming.build_method)),
        )
        scope.after_init_assignment(prop)
