"""Builder descriptors and the registry that resolves them.

The registry is populated once, before any class is synthesized, from the
class model plus an optional resolver for builders generated elsewhere
(classes outside the current model). During synthesis it is only queried.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field

from fluent_builder.codemodel.types import TypeExpr
from fluent_builder.config import BuilderSettings, NamingConfig
from fluent_builder.errors import ModelInconsistencyError
from fluent_builder.model.descriptors import ClassDescriptor, ClassModel


class BuilderDescriptor(BaseModel):
    """The builder counterpart of one class.

    ``parent_builder_field`` and ``product_field`` are only set on the root
    builder of a hierarchy in implementation mode; descendants rely on the
    inherited storage.
    """

    model_config = ConfigDict(frozen=True)

    class_name: str = Field(..., description="Fully-qualified product class name")
    builder_name: str = Field(..., description="Fully-qualified builder class name")
    type_param_name: str = Field(default="TParentBuilder")
    abstract: bool = Field(default=False, description="The product class is abstract")
    has_superclass: bool = Field(default=False)
    interface_only: bool = Field(default=False)
    external: bool = Field(default=False, description="Resolved from outside the model")
    parent_builder_field: Optional[str] = Field(default=None)
    product_field: Optional[str] = Field(default=None)

    @classmethod
    def for_class(
        cls,
        descriptor: ClassDescriptor,
        naming: NamingConfig,
        *,
        interface_only: bool = False,
    ) -> "BuilderDescriptor":
        owns_storage = descriptor.superclass is None and not interface_only
        return cls(
            class_name=descriptor.name,
            builder_name=naming.builder_name(descriptor.name),
            type_param_name=naming.type_param,
            abstract=descriptor.abstract,
            has_superclass=descriptor.superclass is not None,
            interface_only=interface_only,
            parent_builder_field=naming.parent_builder_field if owns_storage else None,
            product_field=naming.product_field if owns_storage else None,
        )

    @property
    def builder_type(self) -> TypeExpr:
        """The raw builder class."""
        return TypeExpr(self.builder_name)

    @property
    def type_param(self) -> TypeExpr:
        return TypeExpr.var(self.type_param_name)

    @property
    def self_type(self) -> TypeExpr:
        """The builder narrowed to its own parent-builder parameter."""
        return self.builder_type.narrow(self.type_param)

    @property
    def product_type(self) -> TypeExpr:
        return TypeExpr(self.class_name)

    @property
    def is_root(self) -> bool:
        return not self.has_superclass


class BuilderResolver(Protocol):
    """Resolves builders of classes that are not part of the current model."""

    def resolve(self, type_name: str) -> Optional[BuilderDescriptor]:
        ...


class StaticBuilderResolver:
    """A resolver backed by a fixed mapping of externally-known builders."""

    def __init__(self, builders: Mapping[str, BuilderDescriptor] | None = None) -> None:
        self._builders = dict(builders or {})

    def resolve(self, type_name: str) -> Optional[BuilderDescriptor]:
        return self._builders.get(type_name)


class BuilderRegistry:
    """Read-only lookup from class name to :class:`BuilderDescriptor`."""

    def __init__(
        self,
        builders: Mapping[str, BuilderDescriptor],
        resolver: Optional[BuilderResolver] = None,
    ) -> None:
        self._builders = MappingProxyType(dict(builders))
        self._resolver = resolver

    @classmethod
    def from_model(
        cls,
        model: ClassModel,
        settings: BuilderSettings | None = None,
        resolver: Optional[BuilderResolver] = None,
    ) -> "BuilderRegistry":
        """Register one builder per class of *model*."""
        settings = settings or BuilderSettings()
        builders = {
            descriptor.name: BuilderDescriptor.for_class(
                descriptor, settings.naming, interface_only=settings.interface_only
            )
            for descriptor in model.classes
        }
        return cls(builders, resolver)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self._builders)

    def __len__(self) -> int:
        return len(self._builders)

    def get(self, type_name: str) -> Optional[BuilderDescriptor]:
        """Return the builder of *type_name*, or ``None`` if it is not buildable."""
        builder = self._builders.get(type_name)
        if builder is None and self._resolver is not None:
            builder = self._resolver.resolve(type_name)
        return builder

    def require(self, type_name: str, *, class_name: str = "", field_name: str = "") -> BuilderDescriptor:
        builder = self.get(type_name)
        if builder is None:
            raise ModelInconsistencyError(
                f"no builder registered for '{type_name}'",
                class_name=class_name,
                field_name=field_name,
            )
        return builder
