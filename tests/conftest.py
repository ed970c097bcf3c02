"""Shared pytest fixtures for the fluent builder test suite.

Provides reusable fixtures for:
- Sample class models (a flat pair, a two-level hierarchy, nested builders)
- Default and customised synthesis settings
- A ``generate`` helper running a full pass for one class
"""

from __future__ import annotations

from typing import Callable

import pytest

from fluent_builder.config import BuilderSettings, CopyConfig
from fluent_builder.model import ClassDescriptor, ClassModel, PropertyDescriptor, TypeRef
from fluent_builder.synthesis import (
    BuilderRegistry,
    BuilderSynthesizer,
    GeneratedBuilder,
    SynthesisHooks,
)


STRING = TypeRef.reference("String")


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> BuilderSettings:
    """Default settings: partial copies and newCopyBuilder enabled."""
    return BuilderSettings()


@pytest.fixture
def narrow_settings() -> BuilderSettings:
    return BuilderSettings(copying=CopyConfig(narrow_copy=True))


@pytest.fixture
def interface_settings() -> BuilderSettings:
    return BuilderSettings(interface_only=True)


# ---------------------------------------------------------------------------
# Class models
# ---------------------------------------------------------------------------

@pytest.fixture
def hierarchy_model() -> ClassModel:
    """``Base`` (scalar, plain, list and array properties) and ``Derived``."""
    return ClassModel(classes=[
        ClassDescriptor(name="com.acme.Base", properties=[
            PropertyDescriptor.of("id", TypeRef.primitive("int")),
            PropertyDescriptor.of("name", STRING),
            PropertyDescriptor.of("tags", TypeRef.collection(STRING)),
            PropertyDescriptor.of("codes", TypeRef.array(STRING)),
        ]),
        ClassDescriptor(name="com.acme.Derived", superclass="com.acme.Base", properties=[
            PropertyDescriptor.of("extra", STRING),
        ]),
    ])


@pytest.fixture
def nested_model() -> ClassModel:
    """``Holder`` referencing the buildable ``Item`` singly and as a list."""
    item = TypeRef.reference("com.acme.Item")
    return ClassModel(classes=[
        ClassDescriptor(name="com.acme.Item", properties=[
            PropertyDescriptor.of("label", STRING),
        ]),
        ClassDescriptor(name="com.acme.Holder", properties=[
            PropertyDescriptor.of("item", item),
            PropertyDescriptor.of("items", TypeRef.collection(item)),
        ]),
    ])


@pytest.fixture
def copy_model() -> ClassModel:
    """One class with a property of every copy strategy."""
    return ClassModel(classes=[
        ClassDescriptor(name="com.acme.Part", properties=[
            PropertyDescriptor.of("code", STRING),
        ]),
        ClassDescriptor(name="com.acme.Doc", properties=[
            PropertyDescriptor.of("title", STRING),
            PropertyDescriptor.of("count", TypeRef.primitive("int")),
            PropertyDescriptor.of("meta", TypeRef.reference("com.acme.Meta", cloneable=True)),
            PropertyDescriptor.of("shape", TypeRef.reference("com.acme.Shape", partial_copyable=True)),
            PropertyDescriptor.of("notes", TypeRef.collection(STRING)),
            PropertyDescriptor.of("part", TypeRef.reference("com.acme.Part")),
            PropertyDescriptor.of("parts", TypeRef.collection(TypeRef.reference("com.acme.Part"))),
        ]),
    ])


@pytest.fixture
def registry(nested_model: ClassModel, settings: BuilderSettings) -> BuilderRegistry:
    return BuilderRegistry.from_model(nested_model, settings)


# ---------------------------------------------------------------------------
# Generation helper
# ---------------------------------------------------------------------------

@pytest.fixture
def generate() -> Callable[..., GeneratedBuilder]:
    """Run a synthesis pass over *model* and return the builder of *class_name*."""

    def _generate(
        model: ClassModel,
        class_name: str,
        settings: BuilderSettings | None = None,
        hooks: SynthesisHooks | None = None,
    ) -> GeneratedBuilder:
        return BuilderSynthesizer(model, settings, hooks=hooks).synthesize(class_name)

    return _generate
