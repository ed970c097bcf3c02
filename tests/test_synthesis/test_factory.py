"""Unit tests for end/init/build and the product-class entry points."""

from __future__ import annotations

import pytest

from fluent_builder.codemodel import Modifier, TypeExpr
from fluent_builder.codemodel.expressions import (
    FALSE,
    NULL,
    SUPER,
    THIS,
    TRUE,
    Cast,
    FieldRef,
    Invoke,
    New,
    TypeTarget,
    Var,
)
from fluent_builder.codemodel.statements import Assign, Eval, If, Return
from fluent_builder.config import BuilderSettings, CopyConfig
from fluent_builder.model import ClassDescriptor, ClassModel, PropertyDescriptor, TypeRef

T = TypeExpr.var("TParentBuilder")
ITEM = TypeExpr("com.acme.Item")
ITEM_BUILDER = TypeExpr("com.acme.Item.Builder")
PUBLIC_STATIC = frozenset({Modifier.PUBLIC, Modifier.STATIC})


@pytest.fixture
def abstract_model() -> ClassModel:
    return ClassModel(classes=[
        ClassDescriptor(name="com.acme.Shape", abstract=True, properties=[
            PropertyDescriptor.of("color", TypeRef.reference("String")),
        ]),
        ClassDescriptor(name="com.acme.Circle", superclass="com.acme.Shape", properties=[
            PropertyDescriptor.of("radius", TypeRef.primitive("double")),
        ]),
    ])


# ---------------------------------------------------------------------------
# Builder methods
# ---------------------------------------------------------------------------


class TestEnd:
    @pytest.mark.unit
    def test_returns_parent_builder(self, nested_model: ClassModel, generate):
        end = generate(nested_model, "com.acme.Item").builder.method("end")
        assert end.return_type == T
        assert end.body.statements == (Return(THIS.ref("_parentBuilder")),)

    @pytest.mark.unit
    def test_root_state_fields(self, nested_model: ClassModel, generate):
        spec = generate(nested_model, "com.acme.Item").builder
        assert spec.field("_parentBuilder").type == T
        assert spec.field("_product").type == ITEM
        assert spec.field("_product").modifiers == frozenset({Modifier.PROTECTED})


class TestInit:
    @pytest.mark.unit
    def test_signature(self, nested_model: ClassModel, generate):
        init = generate(nested_model, "com.acme.Item").builder.method("init")
        product = TypeExpr.var("P", ITEM)
        assert init.modifiers == frozenset({Modifier.PROTECTED})
        assert init.type_params == (product,)
        assert init.return_type == product
        assert init.param_names == ("_product",)
        assert init.body[-1] == Return(Var("_product"))

    @pytest.mark.unit
    def test_derived_calls_super_first(self, hierarchy_model: ClassModel, generate):
        init = generate(hierarchy_model, "com.acme.Derived").builder.method("init")
        assert init.body.statements == (
            Eval(SUPER.invoke("init", Var("_product"))),
            Assign(Var("_product").ref("extra"), THIS.ref("extra")),
            Return(Var("_product")),
        )


class TestBuild:
    @pytest.mark.unit
    def test_concrete_build_caches_product(self, nested_model: ClassModel, generate):
        build = generate(nested_model, "com.acme.Item").builder.method("build")
        product = THIS.ref("_product")
        assert build.return_type == ITEM
        missing, result = build.body.statements
        assert isinstance(missing, If)
        assert missing.condition == product.is_null()
        assert missing.then.statements == (Assign(product, THIS.invoke("init", New(ITEM))),)
        assert result == Return(Cast(ITEM, product))

    @pytest.mark.unit
    def test_abstract_build_returns_cached_product(self, abstract_model: ClassModel, generate):
        build = generate(abstract_model, "com.acme.Shape").builder.method("build")
        shape = TypeExpr("com.acme.Shape")
        assert build.body.statements == (Return(Cast(shape, THIS.ref("_product"))),)

    @pytest.mark.unit
    def test_derived_build_narrows_product(self, abstract_model: ClassModel, generate):
        build = generate(abstract_model, "com.acme.Circle").builder.method("build")
        circle = TypeExpr("com.acme.Circle")
        assert build.return_type == circle
        assert build.body[0].then[0] == Assign(THIS.ref("_product"), THIS.invoke("init", New(circle)))


# ---------------------------------------------------------------------------
# Product-class methods
# ---------------------------------------------------------------------------


class TestStaticFactories:
    @pytest.mark.unit
    def test_builder(self, nested_model: ClassModel, generate):
        generated = generate(nested_model, "com.acme.Item")
        (new_builder,) = generated.product_methods_named("builder")
        void_builder = ITEM_BUILDER.narrow(TypeExpr("Void"))
        assert new_builder.modifiers == PUBLIC_STATIC
        assert new_builder.return_type == void_builder
        assert new_builder.body.statements == (Return(New(void_builder, (NULL, NULL, FALSE))),)

    @pytest.mark.unit
    def test_copy_of(self, nested_model: ClassModel, generate):
        generated = generate(nested_model, "com.acme.Item")
        full, partial = generated.product_methods_named("copyOf")
        p = TypeExpr.var("P")
        assert full.type_params == (p,)
        assert full.return_type == ITEM_BUILDER.narrow(p)
        assert full.body.statements == (Return(New(ITEM_BUILDER.narrow(p), (NULL, Var("_other"), TRUE))),)
        assert partial.param_names == ("_other", "_propertyTree", "_propertyTreeUse")
        assert partial.body[0].value.args == (
            NULL, Var("_other"), TRUE, Var("_propertyTree"), Var("_propertyTreeUse"),
        )

    @pytest.mark.unit
    @pytest.mark.parametrize("name, mode", [("copyExcept", "EXCLUDE"), ("copyOnly", "INCLUDE")])
    def test_selection_shortcuts(self, nested_model: ClassModel, generate, name, mode):
        (method,) = generate(nested_model, "com.acme.Item").product_methods_named(name)
        assert method.modifiers == PUBLIC_STATIC
        assert method.return_type == ITEM_BUILDER.narrow(TypeExpr("Void"))
        assert method.body.statements == (Return(Invoke(None, "copyOf", (
            Var("_other"), Var("_propertyTree"), FieldRef(TypeTarget(TypeExpr("PropertyTreeUse")), mode),
        ))),)

    @pytest.mark.unit
    def test_no_selection_methods_without_partial_copy(self, nested_model: ClassModel, generate):
        settings = BuilderSettings(copying=CopyConfig(partial_copy=False))
        generated = generate(nested_model, "com.acme.Item", settings)
        assert len(generated.product_methods_named("copyOf")) == 1
        assert generated.product_methods_named("copyExcept") == []
        assert len(generated.product_methods_named("newCopyBuilder")) == 1

    @pytest.mark.unit
    def test_abstract_class_has_no_factories(self, abstract_model: ClassModel, generate):
        generated = generate(abstract_model, "com.acme.Shape")
        assert generated.product_methods_named("builder") == []
        assert generated.product_methods_named("copyOf") == []


class TestNewCopyBuilder:
    @pytest.mark.unit
    def test_concrete(self, nested_model: ClassModel, generate):
        full, partial = generate(nested_model, "com.acme.Item").product_methods_named("newCopyBuilder")
        assert full.modifiers == frozenset({Modifier.PUBLIC})
        assert full.body.statements == (Return(Invoke(None, "copyOf", (THIS,))),)
        assert partial.body.statements == (
            Return(Invoke(None, "copyOf", (THIS, Var("_propertyTree"), Var("_propertyTreeUse")))),
        )

    @pytest.mark.unit
    def test_abstract_declares_only(self, abstract_model: ClassModel, generate):
        methods = generate(abstract_model, "com.acme.Shape").product_methods_named("newCopyBuilder")
        assert len(methods) == 2
        assert all(m.modifiers == frozenset({Modifier.PUBLIC, Modifier.ABSTRACT}) for m in methods)
        assert all(m.body is None for m in methods)

    @pytest.mark.unit
    def test_disabled(self, nested_model: ClassModel, generate):
        settings = BuilderSettings(copying=CopyConfig(new_copy_builder_method=False))
        assert generate(nested_model, "com.acme.Item", settings).product_methods_named("newCopyBuilder") == []

    @pytest.mark.unit
    def test_interface_only(self, nested_model: ClassModel, generate, interface_settings):
        generated = generate(nested_model, "com.acme.Item", interface_settings)
        methods = generated.product_methods_named("newCopyBuilder")
        assert methods and all(m.body is None and m.modifiers == frozenset() for m in methods)
        assert generated.product_methods_named("builder") == []
