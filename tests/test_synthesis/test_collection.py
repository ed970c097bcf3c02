"""Unit tests for collection and array members (addX / withX)."""

from __future__ import annotations

import pytest

from fluent_builder.codemodel import TypeExpr
from fluent_builder.codemodel.expressions import FALSE, NULL, THIS, AsList, New, Var, null_safe
from fluent_builder.codemodel.statements import Assign, Declare, Eval, ForEach, If, Return
from fluent_builder.model import ClassModel

T = TypeExpr.var("TParentBuilder")
STRING = TypeExpr("String")
HOLDER_SELF = TypeExpr("com.acme.Holder.Builder").narrow(T)
ITEM_CHILD = TypeExpr("com.acme.Item.Builder").narrow(HOLDER_SELF)


class TestPlainCollection:
    @pytest.mark.unit
    def test_four_mutators(self, hierarchy_model: ClassModel, generate):
        spec = generate(hierarchy_model, "com.acme.Base").builder
        assert len(spec.methods_named("addTags")) == 2
        assert len(spec.methods_named("withTags")) == 2
        iterable = spec.method("addTags", varargs=False).params[0].type
        assert iterable.render() == "Iterable<? extends String>"
        assert spec.method("addTags", varargs=True).params[0].type == STRING

    @pytest.mark.unit
    def test_field_is_list(self, hierarchy_model: ClassModel, generate):
        assert generate(hierarchy_model, "com.acme.Base").builder.field("tags").type.render() == "List<String>"

    @pytest.mark.unit
    def test_add_iterable_is_null_guarded_and_lazy(self, hierarchy_model: ClassModel, generate):
        body = generate(hierarchy_model, "com.acme.Base").builder.method("addTags", varargs=False).body
        guard = body[0]
        assert isinstance(guard, If)
        assert guard.condition == Var("tags").not_null()
        allocate = guard.then[0]
        assert allocate.condition == THIS.ref("tags").is_null()
        assert allocate.then.statements == (
            Assign(THIS.ref("tags"), New(TypeExpr("ArrayList").narrow(STRING))),
        )
        assert guard.then[1] == Eval(THIS.ref("tags").invoke("addAll", Var("tags")))
        assert body[1] == Return(THIS)

    @pytest.mark.unit
    def test_with_clears_then_adds(self, hierarchy_model: ClassModel, generate):
        body = generate(hierarchy_model, "com.acme.Base").builder.method("withTags", varargs=False).body
        assert body[0].condition == THIS.ref("tags").not_null()
        assert body[0].then.statements == (Eval(THIS.ref("tags").invoke("clear")),)
        assert body[1] == Return(THIS.invoke("addTags", Var("tags")))

    @pytest.mark.unit
    def test_varargs_delegate_to_iterable_form(self, hierarchy_model: ClassModel, generate):
        spec = generate(hierarchy_model, "com.acme.Base").builder
        assert spec.method("addTags", varargs=True).body.statements == (
            Eval(THIS.invoke("addTags", AsList(Var("tags")))),
            Return(THIS),
        )
        assert spec.method("withTags", varargs=True).body.statements == (
            Eval(THIS.invoke("withTags", AsList(Var("tags")))),
            Return(THIS),
        )


class TestBuildableCollection:
    @pytest.mark.unit
    def test_field_holds_child_builders(self, nested_model: ClassModel, generate):
        field = generate(nested_model, "com.acme.Holder").builder.field("items")
        assert field.type == TypeExpr("List").narrow(ITEM_CHILD)

    @pytest.mark.unit
    def test_add_starts_nested_builder(self, nested_model: ClassModel, generate):
        spec = generate(nested_model, "com.acme.Holder").builder
        start = spec.method("addItems", arity=0)
        assert start.return_type.render() == (
            "com.acme.Item.Builder<? extends com.acme.Holder.Builder<TParentBuilder>>"
        )
        body = start.body
        assert body[0].condition == THIS.ref("items").is_null()
        assert body[1] == Declare(ITEM_CHILD, "items_Builder", New(ITEM_CHILD, (THIS, NULL, FALSE)))
        assert body[2] == Eval(THIS.ref("items").invoke("add", Var("items_Builder")))
        assert body[3] == Return(Var("items_Builder"))

    @pytest.mark.unit
    def test_add_iterable_wraps_each_element(self, nested_model: ClassModel, generate):
        body = generate(nested_model, "com.acme.Holder").builder.method("addItems", arity=1, varargs=False).body
        guard = body[0]
        loop = guard.then[1]
        assert isinstance(loop, ForEach)
        assert loop.var_type == TypeExpr("com.acme.Item")
        assert loop.iterable == Var("items")
        assert loop.body.statements == (
            Eval(THIS.ref("items").invoke(
                "add", null_safe(Var("_item"), New(ITEM_CHILD, (THIS, Var("_item"), FALSE)))
            )),
        )

    @pytest.mark.unit
    def test_init_builds_each_child_in_order(self, nested_model: ClassModel, generate):
        init = generate(nested_model, "com.acme.Holder").builder.method("init").body
        built = [stmt for stmt in init if isinstance(stmt, If)][-1]
        assert built.condition == THIS.ref("items").not_null()
        declare, loop, assign = built.then.statements
        assert declare == Declare(
            TypeExpr("List").narrow(TypeExpr("com.acme.Item")),
            "items",
            New(TypeExpr("ArrayList").narrow(TypeExpr("com.acme.Item")), (THIS.ref("items").invoke("size"),)),
        )
        assert loop.var_type == ITEM_CHILD
        assert loop.body.statements == (
            Eval(Var("items").invoke("add", null_safe(Var("_item"), Var("_item").invoke("build")))),
        )
        assert assign == Assign(Var("_product").ref("items"), Var("items"))


class TestArray:
    @pytest.mark.unit
    def test_single_varargs_with(self, hierarchy_model: ClassModel, generate):
        spec = generate(hierarchy_model, "com.acme.Base").builder
        with_codes = spec.method("withCodes")
        assert with_codes.params[0].varargs
        assert with_codes.params[0].type == STRING
        assert spec.methods_named("addCodes") == []
        assert with_codes.body.statements == (Assign(THIS.ref("codes"), Var("codes")), Return(THIS))

    @pytest.mark.unit
    def test_field_defaults_to_null(self, hierarchy_model: ClassModel, generate):
        field = generate(hierarchy_model, "com.acme.Base").builder.field("codes")
        assert field.type == STRING.array_of()
        assert field.init == NULL
