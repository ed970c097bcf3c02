"""Per-class state shared by the emitters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fluent_builder.codemodel.declarations import ClassAssembler, Modifier
from fluent_builder.codemodel.expressions import Var
from fluent_builder.codemodel.statements import Block
from fluent_builder.codemodel.types import TypeExpr
from fluent_builder.config import BuilderSettings, NamingConfig
from fluent_builder.model.descriptors import ClassDescriptor, ClassModel, PropertyDescriptor
from fluent_builder.synthesis.classifier import ClassifiedProperty, classify
from fluent_builder.synthesis.hooks import SynthesisHooks
from fluent_builder.synthesis.oracle import TypeOracle
from fluent_builder.synthesis.registry import BuilderDescriptor, BuilderRegistry


PUBLIC = frozenset({Modifier.PUBLIC})
PROTECTED = frozenset({Modifier.PROTECTED})
PRIVATE = frozenset({Modifier.PRIVATE})
PUBLIC_STATIC = frozenset({Modifier.PUBLIC, Modifier.STATIC})
PUBLIC_ABSTRACT = frozenset({Modifier.PUBLIC, Modifier.ABSTRACT})
NONE: frozenset[Modifier] = frozenset()

OVERRIDE = "Override"
ITEM_VAR = "_item"
PARENT_PARAM = "_parentBuilder"
OTHER_PARAM = "_other"
COPY_PARAM = "_copy"
TREE_PARAM = "_propertyTree"
MODE_PARAM = "_propertyTreeUse"


@dataclass
class BuilderScope:
    """Everything an emitter needs to add members for one class.

    ``assembler`` collects the builder class; ``product`` collects the
    methods added to the product class itself (static factories and
    ``newCopyBuilder``). ``init_body``/``product_param`` are set in
    implementation mode once the init method exists.
    """

    descriptor: ClassDescriptor
    builder: BuilderDescriptor
    model: ClassModel
    registry: BuilderRegistry
    oracle: TypeOracle
    settings: BuilderSettings
    hooks: SynthesisHooks
    assembler: ClassAssembler
    product: ClassAssembler
    init_body: Optional[Block] = None
    product_param: Optional[Var] = None

    @property
    def implement(self) -> bool:
        return not self.builder.interface_only

    @property
    def naming(self) -> NamingConfig:
        return self.settings.naming

    @property
    def self_type(self) -> TypeExpr:
        return self.builder.self_type

    @property
    def type_param(self) -> TypeExpr:
        return self.builder.type_param

    @property
    def product_type(self) -> TypeExpr:
        return self.builder.product_type

    def classify(self, prop: PropertyDescriptor) -> ClassifiedProperty:
        return classify(prop, self.registry, class_name=self.descriptor.name)

    def child_builder_type(self, child: BuilderDescriptor) -> TypeExpr:
        """Type of a stored child builder: ``Child.Builder<Self.Builder<TParentBuilder>>``."""
        return child.builder_type.narrow(self.self_type)

    def child_return_type(self, child: BuilderDescriptor) -> TypeExpr:
        """Return type of nested-builder methods: ``Child.Builder<? extends Self.Builder<TParentBuilder>>``."""
        return child.builder_type.narrow(self.self_type.as_wildcard())

    def after_init_assignment(self, prop: PropertyDescriptor) -> None:
        if self.hooks.immutable is not None and self.implement and self.init_body is not None:
            self.hooks.immutable.immutable_init(self.init_body, self.product_param, prop)
