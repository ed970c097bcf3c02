"""Fluent builder synthesis for class hierarchies.

Given a class model (classes, single inheritance and typed properties) this
package produces, per class, an in-memory description of a companion
fluent builder: chained mutators, nested builders, full and partial deep
copies and covariant overrides along the inheritance chain.

Usage::

    from fluent_builder import BuilderSynthesizer, ClassModel

    report = BuilderSynthesizer(ClassModel(classes=[...])).synthesize_all()
"""

from fluent_builder.config import BuilderSettings, CopyConfig, NamingConfig
from fluent_builder.errors import (
    BuilderSynthesisError,
    ModelInconsistencyError,
    UnsupportedPropertyShapeError,
)
from fluent_builder.model import (
    ClassDescriptor,
    ClassModel,
    PropertyDescriptor,
    SelectionMode,
    SelectionTree,
    StorageField,
    TypeKind,
    TypeRef,
)
from fluent_builder.synthesis import (
    BuilderSynthesizer,
    GeneratedBuilder,
    SynthesisHooks,
    SynthesisReport,
)

__version__ = "0.1.0"

__all__ = [
    "BuilderSettings",
    "BuilderSynthesisError",
    "BuilderSynthesizer",
    "ClassDescriptor",
    "ClassModel",
    "CopyConfig",
    "GeneratedBuilder",
    "ModelInconsistencyError",
    "NamingConfig",
    "PropertyDescriptor",
    "SelectionMode",
    "SelectionTree",
    "StorageField",
    "SynthesisHooks",
    "SynthesisReport",
    "TypeKind",
    "TypeRef",
    "UnsupportedPropertyShapeError",
]
