"""Unit tests for the builder registry (fluent_builder.synthesis.registry)."""

from __future__ import annotations

import pytest

from fluent_builder.codemodel import TypeExpr
from fluent_builder.config import BuilderSettings
from fluent_builder.errors import ModelInconsistencyError
from fluent_builder.model import ClassModel, PropertyDescriptor, TypeRef
from fluent_builder.synthesis import (
    BuilderDescriptor,
    BuilderRegistry,
    PropertyKind,
    StaticBuilderResolver,
    classify,
)


class TestBuilderRegistry:
    @pytest.mark.unit
    def test_from_model(self, registry: BuilderRegistry):
        assert len(registry) == 2
        assert set(registry) == {"com.acme.Item", "com.acme.Holder"}
        assert "com.acme.Item" in registry
        assert "String" not in registry

    @pytest.mark.unit
    def test_root_owns_storage(self, registry: BuilderRegistry):
        holder = registry.require("com.acme.Holder")
        assert holder.is_root
        assert holder.parent_builder_field == "_parentBuilder"
        assert holder.product_field == "_product"

    @pytest.mark.unit
    def test_descendant_has_no_storage(self, hierarchy_model: ClassModel, settings: BuilderSettings):
        derived = BuilderRegistry.from_model(hierarchy_model, settings).require("com.acme.Derived")
        assert not derived.is_root
        assert derived.parent_builder_field is None
        assert derived.product_field is None

    @pytest.mark.unit
    def test_interface_only_has_no_storage(self, hierarchy_model: ClassModel):
        registry = BuilderRegistry.from_model(hierarchy_model, BuilderSettings(interface_only=True))
        assert registry.require("com.acme.Base").product_field is None

    @pytest.mark.unit
    def test_self_type(self, registry: BuilderRegistry):
        holder = registry.require("com.acme.Holder")
        assert holder.self_type.render() == "com.acme.Holder.Builder<TParentBuilder>"
        assert holder.product_type == TypeExpr("com.acme.Holder")

    @pytest.mark.unit
    def test_require_missing(self, registry: BuilderRegistry):
        with pytest.raises(ModelInconsistencyError, match="no builder registered"):
            registry.require("com.other.Thing", class_name="com.acme.Holder")

    @pytest.mark.unit
    def test_external_resolver(self, nested_model: ClassModel):
        external = BuilderDescriptor(
            class_name="com.other.Address",
            builder_name="com.other.Address.Builder",
            external=True,
        )
        registry = BuilderRegistry.from_model(
            nested_model, resolver=StaticBuilderResolver({"com.other.Address": external})
        )
        assert registry.get("com.other.Address") is external
        assert "com.other.Address" in registry
        assert "com.other.Address" not in list(registry)
        result = classify(PropertyDescriptor.of("address", TypeRef.reference("com.other.Address")), registry)
        assert result.kind == PropertyKind.SINGULAR_BUILDABLE
