"""Builder synthesis: classification, emitters and the pass driver."""

from fluent_builder.synthesis.classifier import ClassifiedProperty, PropertyKind, classify
from fluent_builder.synthesis.driver import BuilderSynthesizer, SynthesisReport
from fluent_builder.synthesis.generator import BuilderGenerator, GeneratedBuilder
from fluent_builder.synthesis.hooks import GroupInterfaceHook, ImmutableInitHook, SynthesisHooks
from fluent_builder.synthesis.oracle import DeclaredTypeOracle, TypeOracle
from fluent_builder.synthesis.registry import (
    BuilderDescriptor,
    BuilderRegistry,
    BuilderResolver,
    StaticBuilderResolver,
)

__all__ = [
    "BuilderDescriptor",
    "BuilderGenerator",
    "BuilderRegistry",
    "BuilderResolver",
    "BuilderSynthesizer",
    "ClassifiedProperty",
    "DeclaredTypeOracle",
    "GeneratedBuilder",
    "GroupInterfaceHook",
    "ImmutableInitHook",
    "PropertyKind",
    "StaticBuilderResolver",
    "SynthesisHooks",
    "SynthesisReport",
    "TypeOracle",
    "classify",
]
