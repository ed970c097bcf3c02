"""Unit tests for type expressions (fluent_builder.codemodel.types)."""

from __future__ import annotations

import pytest

from fluent_builder.codemodel import TypeExpr


class TestTypeExpr:
    @pytest.mark.unit
    def test_render_plain(self):
        assert TypeExpr("com.acme.Item").render() == "com.acme.Item"

    @pytest.mark.unit
    def test_render_narrowed(self):
        self_type = TypeExpr("Holder.Builder").narrow(TypeExpr.var("TParentBuilder"))
        child = TypeExpr("Item.Builder").narrow(self_type)
        assert child.render() == "Item.Builder<Holder.Builder<TParentBuilder>>"

    @pytest.mark.unit
    def test_render_wildcard(self):
        wildcard = TypeExpr("Holder.Builder").narrow(TypeExpr.var("T")).as_wildcard()
        assert TypeExpr("Item.Builder").narrow(wildcard).render() == "Item.Builder<? extends Holder.Builder<T>>"

    @pytest.mark.unit
    def test_array(self):
        assert TypeExpr("String").array_of().render() == "String[]"

    @pytest.mark.unit
    def test_narrow_does_not_mutate(self):
        raw = TypeExpr("List")
        raw.narrow(TypeExpr("String"))
        assert raw.args == ()

    @pytest.mark.unit
    def test_erasure(self):
        assert TypeExpr("List").narrow(TypeExpr("String")).erasure() == TypeExpr("List")
        assert TypeExpr("String").array_of().erasure() == TypeExpr("String", array=True)

    @pytest.mark.unit
    def test_variable_erasure(self):
        assert TypeExpr.var("T").erasure() == TypeExpr("Object")
        assert TypeExpr.var("P", TypeExpr("com.acme.Item")).erasure() == TypeExpr("com.acme.Item")

    @pytest.mark.unit
    def test_simple_name(self):
        assert TypeExpr("com.acme.Item.Builder").simple_name == "Builder"

    @pytest.mark.unit
    def test_str(self):
        assert str(TypeExpr("List").narrow(TypeExpr("String"))) == "List<String>"
